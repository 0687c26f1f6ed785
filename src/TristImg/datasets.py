# -*- coding: utf-8 -*-
"""
TristImg.datasets
=================

Read named datasets from arbitrary HDF5 files, independently of any
collection structure.

Each call to :func:`read_datasets` opens its file once and either returns
every requested dataset or raises; :func:`read_datasets_many` runs one such
call per file so that one broken file does not stop the others.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional

import numpy as np
from tqdm import tqdm

from . import container as tiCont
from .errors import TristImgError

logger = logging.getLogger(__name__)


@dataclass
class DatasetReadResult:
    """Outcome of reading datasets from one file."""
    path: str
    keys: Optional[List[str]] = None
    arrays: Optional[List[np.ndarray]] = None
    error: Optional[TristImgError] = None

    @property
    def ok(self):
        return self.error is None


def read_datasets(path, keys, dtype=None):
    """
    Read several datasets from one file.

    Parameters
    ----------
    path : str or os.PathLike
        HDF5 file to read from.
    keys : sequence of str
        Dataset names, read in the given order.
    dtype : str, numpy.dtype or None, optional
        Requested element type for every dataset (see
        :func:`TristImg.container.read_dataset`). Default None (stored type).

    Returns
    -------
    list of numpy.ndarray
        The i-th array belongs to the i-th key.

    Raises
    ------
    FileError
        The file cannot be opened.
    DatasetNotFound
        The first requested key absent from the file. No arrays are returned.
    DatasetDecodeError
        A dataset cannot be decoded as `dtype`.
    """
    with tiCont.open_file(path) as f:
        return [tiCont.read_dataset(f, key, dtype=dtype) for key in keys]


def read_datasets_many(paths, keys, dtype=None, progress=True):
    """
    Read the same datasets from several files, one independent read per file.

    Parameters
    ----------
    paths : sequence of str or os.PathLike
        Files to read from.
    keys : sequence of str or None
        Dataset names. If None, every dataset of each file is read.
    dtype : str, numpy.dtype or None, optional
        Requested element type, see :func:`read_datasets`.
    progress : bool, optional
        If True, show a tqdm progress bar over files. Default True.

    Returns
    -------
    list of DatasetReadResult
        One result per path, in order. Failed files carry the error instead
        of arrays.
    """
    results = []
    for path in tqdm(paths, desc="Reading datasets", unit="file",
                     disable=not progress):
        file_keys = None if keys is None else list(keys)
        try:
            if file_keys is None:
                with tiCont.open_file(path) as f:
                    file_keys = tiCont.list_datasets(f)
            arrays = read_datasets(path, file_keys, dtype=dtype)
        except TristImgError as e:
            logger.warning(f"Failed to read datasets from {path}: {e}")
            results.append(
                DatasetReadResult(str(path), keys=file_keys, error=e))
            continue
        results.append(
            DatasetReadResult(str(path), keys=file_keys, arrays=arrays))
    return results
