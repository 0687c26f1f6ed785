"""Pytest fixtures building small Tristan collections with h5py."""

from __future__ import annotations

from pathlib import Path

import h5py
import numpy as np
import pytest

from TristImg.collection import datafile_name, META_GROUP, FILES_PER_MODULE


def write_h5(path, datasets):
    """Write an HDF5 file with the given ``{name: array}`` datasets."""
    with h5py.File(path, "w") as f:
        for name, data in datasets.items():
            f.create_dataset(name, data=data)
    return Path(path)


def write_nexus(path, counts, dtype=np.uint32):
    """Write a NeXus metadata file declaring ``counts`` files per module."""
    with h5py.File(path, "w") as f:
        meta = f.require_group(META_GROUP)
        meta.create_dataset(FILES_PER_MODULE,
                            data=np.asarray(counts, dtype=dtype))
    return Path(path)


@pytest.fixture
def make_collection(tmp_path: Path):
    """Factory writing ``run.nxs`` and its data files into ``tmp_path``.

    Returns the NeXus path. Data file ``N`` holds ``event_id = [N, N, N]``.
    File numbers listed in ``skip`` are not written.
    """

    def _make(counts, padding=6, prefix="run", skip=(), extension="h5"):
        nexus = write_nexus(tmp_path / f"{prefix}.nxs", counts)
        for number in range(1, int(sum(counts)) + 1):
            if number in skip:
                continue
            name = datafile_name(prefix, number, padding, extension)
            write_h5(tmp_path / name, {
                "event_id": np.full(3, number, dtype=np.uint32),
            })
        return nexus

    return _make


@pytest.fixture
def data_file(tmp_path: Path) -> Path:
    """A data file with uint32, float and positional datasets."""
    return write_h5(tmp_path / "data.h5", {
        "event_id": np.arange(5, dtype=np.uint32),
        "event_time_offset": np.linspace(0.0, 1.0, 5),
        "event_position": np.array([[1, 2], [3, 4], [5, 6]], dtype=np.uint16),
        "cue/cue_id": np.array([7, 8], dtype=np.uint16),
        "signed": np.array([-1, 2], dtype=np.int64),
    })

