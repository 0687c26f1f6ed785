# -*- coding: utf-8 -*-
"""
TristImg.collection
===================

Resolution of a Tristan data collection from its NeXus metadata file.

The metadata file declares, in ``/entry/data/meta_file/fp_per_module``, how
many data files each detector module wrote. The data files live next to the
metadata file and are numbered globally and contiguously across modules::

    fp_per_module = [2, 0, 1], metadata file run.nxs, padding 6

    module_0 : run_000001.h5, run_000002.h5
    module_1 : (none)
    module_2 : run_000003.h5

Example
-------
::

    from TristImg.collection import Collection

    with Collection.from_nexus("/data/run.nxs", datafile_zero_padding=6) as c:
        print(c.file_names())
"""
import logging
import os
from dataclasses import dataclass

from . import container as tiCont
from .dtypes import TRISTAN_COUNT_DTYPE as COUNT_DTYPE
from .errors import NoFileStem, NoParentDirectory

logger = logging.getLogger(__name__)

# Location of the per-module file counts inside the NeXus file
META_GROUP = "/entry/data/meta_file"
FILES_PER_MODULE = "fp_per_module"

DEFAULT_ZERO_PADDING = 6
DEFAULT_EXTENSION = "h5"


@dataclass(frozen=True)
class TreeNode:
    """A labelled node of a presentation tree."""
    label: str
    children: tuple = ()


def datafile_name(prefix, number, zero_padding, extension=DEFAULT_EXTENSION):
    """
    Build the name of a data file.

    The number is left-padded with zeros to at least `zero_padding` digits;
    wider numbers are kept as they are.

    >>> datafile_name("run", 3, 4)
    'run_0003.h5'
    >>> datafile_name("run", 12345, 2)
    'run_12345.h5'
    """
    return f"{prefix}_{number:0{zero_padding}d}.{extension}"


def expected_datafile_names(counts, prefix, zero_padding,
                            extension=DEFAULT_EXTENSION):
    """
    List the data file names of every module.

    Parameters
    ----------
    counts : sequence of int
        Number of data files per module, in module order.
    prefix : str
        Stem of the NeXus metadata file.
    zero_padding : int
        Minimum width of the file number.
    extension : str, optional
        Data file extension. Default "h5".

    Returns
    -------
    list of list of str
        One list of names per module. File numbers continue across modules,
        starting at 1.
    """
    names = []
    file_number_offset = 0
    for module_file_count in counts:
        module_file_count = int(module_file_count)
        names.append([
            datafile_name(prefix, file_number_offset + file_idx,
                          zero_padding, extension)
            for file_idx in range(1, module_file_count + 1)
        ])
        file_number_offset += module_file_count
    return names


def _datafile_prefix(path):
    stem = os.path.splitext(os.path.basename(os.fspath(path)))[0]
    if not stem:
        raise NoFileStem(path)
    return stem


def _datafile_directory(path):
    # A bare file name is rejected rather than read as the cwd
    directory = os.path.dirname(os.fspath(path))
    if not directory:
        raise NoParentDirectory(path)
    return directory


class Module:
    """
    The data files written by one detector module.

    Parameters
    ----------
    index : int
        Zero-based module index.
    data_files : sequence of h5py.File
        Opened data files, in ascending file number.
    first_file_number : int, optional
        Number of the first data file. Default 1.
    """

    def __init__(self, index, data_files, first_file_number=1):
        self._index = index
        self._data_files = tuple(data_files)
        self._first_file_number = first_file_number

    @property
    def index(self):
        return self._index

    @property
    def data_files(self):
        """Opened data files (tuple of ``h5py.File``)."""
        return self._data_files

    @property
    def file_numbers(self):
        n0 = self._first_file_number
        return list(range(n0, n0 + len(self._data_files)))

    @property
    def paths(self):
        return [f.filename for f in self._data_files]

    @property
    def names(self):
        return [os.path.basename(f.filename) for f in self._data_files]

    def close(self):
        for f in self._data_files:
            f.close()

    def __len__(self):
        return len(self._data_files)

    def __iter__(self):
        return iter(self._data_files)

    def __repr__(self):
        return f"Module(index={self._index}, n_files={len(self)})"


class Collection:
    """
    A Tristan data collection: detector modules and their opened data files.

    The collection owns every opened file. Use it as a context manager or
    call :meth:`close` to release them.

    Parameters
    ----------
    modules : sequence of Module
        Modules in the order declared by the metadata file.
    """

    def __init__(self, modules):
        self._modules = tuple(modules)

    @classmethod
    def from_nexus(cls, path, datafile_zero_padding=DEFAULT_ZERO_PADDING,
                   extension=DEFAULT_EXTENSION):
        """
        Load a Collection from the NeXus file definition.

        Parameters
        ----------
        path : str or os.PathLike
            Path to the NeXus metadata file.
        datafile_zero_padding : int, optional
            Minimum width of the file number in data file names. Default 6.
        extension : str, optional
            Data file extension. Default "h5".

        Returns
        -------
        Collection

        Raises
        ------
        FileError
            The metadata file or one of the data files cannot be opened.
        DatasetNotFound
            The metadata file has no ``fp_per_module`` dataset.
        NoFileStem, NoParentDirectory
            The metadata path has no stem or no directory component.

        Notes
        -----
        Resolution is all-or-nothing: on any failure, files opened so far are
        closed and no Collection is returned.
        """
        meta_file = tiCont.open_file(path)
        try:
            module_file_counts = tiCont.read_dataset(
                meta_file, f"{META_GROUP}/{FILES_PER_MODULE}",
                dtype=COUNT_DTYPE).reshape(-1)
        finally:
            meta_file.close()

        datafile_prefix = _datafile_prefix(path)
        directory = _datafile_directory(path)

        names = expected_datafile_names(
            module_file_counts, datafile_prefix, datafile_zero_padding,
            extension)
        logger.info(
            f"Resolving {sum(len(n) for n in names)} data files "
            f"from {len(names)} modules of {path}")

        opened = []
        modules = []
        file_number_offset = 0
        try:
            for module_idx, module_names in enumerate(names):
                data_files = []
                for name in module_names:
                    f = tiCont.open_file(os.path.join(directory, name))
                    opened.append(f)
                    data_files.append(f)
                modules.append(Module(module_idx, data_files,
                                      file_number_offset + 1))
                file_number_offset += len(module_names)
        except BaseException:
            # No partial collection, release what was opened
            for f in opened:
                f.close()
            raise

        logger.debug(f"Opened {len(opened)} data files")
        return cls(modules)

    @property
    def modules(self):
        return self._modules

    @property
    def n_files(self):
        return sum(len(m) for m in self._modules)

    def file_names(self):
        """Data file base names per module."""
        return [m.names for m in self._modules]

    def file_paths(self):
        """Data file paths per module."""
        return [m.paths for m in self._modules]

    def as_tree(self):
        """
        Produce a tree of the collection for debug visualisation.

        Returns
        -------
        TreeNode
            ``collection`` -> ``module_<i>`` -> data file names, in module
            and file order.
        """
        return TreeNode("collection", tuple(
            TreeNode(f"module_{module_idx}",
                     tuple(TreeNode(name) for name in module.names))
            for module_idx, module in enumerate(self._modules)))

    def close(self):
        for module in self._modules:
            module.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def __len__(self):
        return len(self._modules)

    def __iter__(self):
        return iter(self._modules)

    def __getitem__(self, idx):
        return self._modules[idx]

    def __repr__(self):
        return (f"Collection(n_modules={len(self)}, "
                f"n_files={self.n_files})")


def resolve_collection(path, datafile_zero_padding=DEFAULT_ZERO_PADDING,
                       extension=DEFAULT_EXTENSION):
    """Shortcut for :meth:`Collection.from_nexus`."""
    return Collection.from_nexus(path, datafile_zero_padding, extension)


def as_tree(collection):
    """Shortcut for :meth:`Collection.as_tree`."""
    return collection.as_tree()
