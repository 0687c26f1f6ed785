# -*- coding: utf-8 -*-
"""Exceptions raised while resolving collections and reading datasets."""


class TristImgError(Exception):
    """Base class of all TristImg errors."""


class FileError(TristImgError):
    """
    A file could not be opened or read as an HDF5 container.

    The underlying exception (usually an ``OSError`` raised by h5py) is kept
    in ``cause`` and chained as ``__cause__``.
    """

    def __init__(self, path, cause=None):
        self.path = str(path)
        self.cause = cause
        msg = f"Error encountered when reading from HDF5 file: {self.path}"
        if cause is not None:
            msg += f" ({cause})"
        super().__init__(msg)


class NoFileStem(TristImgError):
    """The NeXus file path has no usable file stem."""

    def __init__(self, path):
        self.path = str(path)
        super().__init__(
            f"Could not determine stem of NeXus file: '{self.path}'")


class NoParentDirectory(TristImgError):
    """The NeXus file path has no directory component."""

    def __init__(self, path):
        self.path = str(path)
        super().__init__(
            f"Could not determine parent directory of NeXus file: "
            f"'{self.path}'")


class DatasetNotFound(TristImgError, KeyError):
    """A requested dataset is absent from the container."""

    def __init__(self, name, path=None):
        self.name = name
        self.path = None if path is None else str(path)
        super().__init__(name)

    def __str__(self):
        if self.path is None:
            return f"Dataset not found: '{self.name}'"
        return f"Dataset not found: '{self.name}' in {self.path}"


class DatasetDecodeError(TristImgError):
    """The stored element type cannot be decoded as the requested type."""

    def __init__(self, name, stored, requested):
        self.name = name
        self.stored = stored
        self.requested = requested
        super().__init__(
            f"Cannot decode dataset '{name}' stored as {stored} "
            f"as {requested}")


class ConfigError(TristImgError):
    """An invalid configuration value."""
