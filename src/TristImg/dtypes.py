# -*- coding: utf-8 -*-
"""
TristImg.dtypes
===============

Canonical NumPy dtypes used across TristImg for Tristan NeXus/HDF5 I/O.

A data collection consists of a NeXus metadata file and a set of per-module
HDF5 data files. The datasets read from them are one of:

- unsigned 32-bit integer arrays (file counts, event ids, ...)
- floating point arrays (timestamps, calibration values, ...)
- pairs of 16-bit integers (event positions on the detector)

These dtypes define the expected numeric types across the TristImg readers.
"""

from __future__ import annotations

import numpy as np

from .errors import ConfigError

__all__ = [
    "TRISTAN_COUNT_DTYPE",
    "TRISTAN_FLOAT_DTYPE",
    "TRISTAN_POSITION_DTYPE",
    "TRISTAN_DTYPE_MAP",
    "resolve_dtype",
    "as_positions",
    # Short aliases:
    "COUNT_DTYPE",
    "FLOAT_DTYPE",
    "POSITION_DTYPE",
    "DTYPE_MAP",
]

# -----------------------------------------------------------------------------
# Tristan datasets
# -----------------------------------------------------------------------------

TRISTAN_COUNT_DTYPE = np.dtype(np.uint32)
"""
Element type of counting datasets, e.g. ``fp_per_module`` in the metadata
file (one value per detector module).
"""

TRISTAN_FLOAT_DTYPE = np.dtype(np.float64)
"""Element type used for floating point datasets."""

TRISTAN_POSITION_DTYPE = np.dtype(
    [
        ("x", np.uint16),
        ("y", np.uint16),
    ]
)
"""
Structured dtype for positional data (one row per recorded event).

Fields
------
x : uint16
    Detector column of the event.
y : uint16
    Detector row of the event.
"""

TRISTAN_DTYPE_MAP = {
    "uint16": np.dtype(np.uint16),
    "int16": np.dtype(np.int16),
    "int32": np.dtype(np.int32),
    "uint32": np.dtype(np.uint32),
    "int64": np.dtype(np.int64),
    "uint64": np.dtype(np.uint64),
    "float32": np.dtype(np.float32),
    "float64": np.dtype(np.float64),
    "position": TRISTAN_POSITION_DTYPE,
}
"""
Mapping of dtype name strings to NumPy dtypes.

This is used to interpret dtype names given on the command line or stored in
TOML settings.
"""


def resolve_dtype(name):
    """
    Look up a dtype by its name in ``TRISTAN_DTYPE_MAP``.

    Parameters
    ----------
    name : str or None
        Dtype name, e.g. ``"uint32"`` or ``"position"``. ``None`` passes
        through unchanged (meaning "stored type").

    Returns
    -------
    numpy.dtype or None

    Raises
    ------
    ConfigError
        If `name` is not a known dtype name.
    """
    if name is None:
        return None
    try:
        return TRISTAN_DTYPE_MAP[name.lower()]
    except KeyError:
        raise ConfigError(
            f"Unknown dtype '{name}', expected one of "
            f"{sorted(TRISTAN_DTYPE_MAP)}") from None


def as_positions(arr):
    """
    View an integer array of (x, y) pairs as ``TRISTAN_POSITION_DTYPE``.

    Parameters
    ----------
    arr : numpy.ndarray
        Array already of the positional dtype, or an unsigned integer array
        safely castable to uint16 whose last axis has length 2.

    Returns
    -------
    numpy.ndarray
        Structured array with fields ``x`` and ``y``; shape is ``arr.shape``
        without the trailing pair axis.
    """
    arr = np.asarray(arr)
    if arr.dtype == TRISTAN_POSITION_DTYPE:
        return arr
    if arr.ndim == 0 or arr.shape[-1] != 2:
        raise ValueError(
            f"Positional data must have a trailing axis of length 2, "
            f"got shape {arr.shape}")
    if arr.dtype.kind != "u" or not np.can_cast(arr.dtype, np.uint16,
                                                  casting="safe"):
        raise TypeError(
            f"Positional data must be unsigned 16-bit integers, "
            f"got {arr.dtype}")

    pairs = np.ascontiguousarray(arr.astype(np.uint16, copy=False))
    return pairs.view(TRISTAN_POSITION_DTYPE).reshape(arr.shape[:-1])


# -----------------------------------------------------------------------------
# Short aliases
# -----------------------------------------------------------------------------

COUNT_DTYPE = TRISTAN_COUNT_DTYPE
FLOAT_DTYPE = TRISTAN_FLOAT_DTYPE
POSITION_DTYPE = TRISTAN_POSITION_DTYPE
DTYPE_MAP = TRISTAN_DTYPE_MAP
