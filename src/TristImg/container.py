# -*- coding: utf-8 -*-
"""
TristImg.container
==================

Read-only access to single HDF5 containers (NeXus metadata files and Tristan
data files).

Example
-------
::

    from TristImg import container as tiCont

    f = tiCont.open_file("run_000001.h5")
    try:
        event_id = tiCont.read_dataset(f, "event_id", dtype="uint32")
    finally:
        f.close()
"""
import logging

import h5py
import numpy as np

from .dtypes import TRISTAN_POSITION_DTYPE as POSITION_DTYPE
from .dtypes import as_positions, resolve_dtype
from .errors import ConfigError, DatasetDecodeError, DatasetNotFound, FileError

logger = logging.getLogger(__name__)


def open_file(path):
    """
    Open an HDF5 container read-only.

    Parameters
    ----------
    path : str or os.PathLike
        Path to the ``.h5`` / ``.nxs`` file.

    Returns
    -------
    h5py.File
        The opened file. The caller owns it and must close it.

    Raises
    ------
    FileError
        If the path does not exist, is not a valid HDF5 container or cannot
        be accessed.
    """
    try:
        handle = h5py.File(path, "r")
    except OSError as e:
        raise FileError(path, e) from e

    logger.debug(f"Opened {handle.filename}")
    return handle


def read_dataset(handle, name, dtype=None):
    """
    Read a named dataset from an opened container.

    Parameters
    ----------
    handle : h5py.File or h5py.Group
        Opened container (or a group inside it).
    name : str
        Dataset path, absolute (``/entry/data/...``) or relative to `handle`.
    dtype : str, numpy.dtype or None, optional
        Requested element type. If None, the stored type is returned as is.
        The stored type must be safely castable to the requested one.
        ``"position"`` views an ``(..., 2)`` unsigned 16-bit integer array
        as ``(x, y)`` pairs.

    Returns
    -------
    numpy.ndarray
        The dataset contents (0-d array for scalar datasets, empty 1-d
        array for datasets with a null dataspace).

    Raises
    ------
    DatasetNotFound
        If `name` is absent or does not refer to a dataset.
    DatasetDecodeError
        If the stored element type does not match the requested type.
    ConfigError
        If `dtype` is not a valid dtype or dtype name.
    """
    obj = handle.get(name)
    if not isinstance(obj, h5py.Dataset):
        raise DatasetNotFound(name, handle.file.filename)

    if isinstance(dtype, str):
        dtype = resolve_dtype(dtype)
    elif dtype is not None:
        try:
            dtype = np.dtype(dtype)
        except TypeError as e:
            raise ConfigError(f"Invalid dtype {dtype!r}: {e}") from e

    # Check before reading, datasets can be large
    if dtype is not None and dtype != POSITION_DTYPE:
        if not np.can_cast(obj.dtype, dtype, casting="safe"):
            raise DatasetDecodeError(name, obj.dtype, dtype)

    if obj.shape is None:
        # Null dataspace, h5py would hand back an Empty placeholder
        data = np.empty(0, dtype=obj.dtype)
    else:
        try:
            data = np.asarray(obj[()])
        except OSError as e:
            raise FileError(handle.file.filename, e) from e

    if dtype is None:
        return data

    if dtype == POSITION_DTYPE:
        try:
            return as_positions(data)
        except (TypeError, ValueError):
            raise DatasetDecodeError(name, obj.dtype, dtype) from None

    return data.astype(dtype, copy=False)


def list_datasets(handle):
    """
    Return the paths of all datasets in a container, in HDF5 visit order.
    """
    names = []

    def _collect(name, obj):
        if isinstance(obj, h5py.Dataset):
            names.append(name)

    handle.visititems(_collect)
    return names
