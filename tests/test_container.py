"""Tests for opening HDF5 containers and typed dataset reads."""

from __future__ import annotations

import h5py
import numpy as np
import pytest

from TristImg import container as tiCont
from TristImg.dtypes import POSITION_DTYPE
from TristImg.errors import (
    ConfigError,
    DatasetDecodeError,
    DatasetNotFound,
    FileError,
)

from conftest import write_h5


def test_open_missing_file(tmp_path):
    path = tmp_path / "missing.h5"
    with pytest.raises(FileError) as exc:
        tiCont.open_file(path)
    assert exc.value.path == str(path)
    assert isinstance(exc.value.__cause__, OSError)


def test_open_invalid_container(tmp_path):
    path = tmp_path / "not_hdf5.h5"
    path.write_bytes(b"this is not an HDF5 file")
    with pytest.raises(FileError):
        tiCont.open_file(path)


def test_read_stored_type(data_file):
    with tiCont.open_file(data_file) as f:
        arr = tiCont.read_dataset(f, "event_id")
    assert arr.dtype == np.uint32
    np.testing.assert_array_equal(arr, np.arange(5))


def test_read_nested_dataset(data_file):
    with tiCont.open_file(data_file) as f:
        arr = tiCont.read_dataset(f, "/cue/cue_id")
    np.testing.assert_array_equal(arr, [7, 8])


def test_read_missing_dataset(data_file):
    with tiCont.open_file(data_file) as f:
        with pytest.raises(DatasetNotFound) as exc:
            tiCont.read_dataset(f, "missing_key")
    assert exc.value.name == "missing_key"
    assert isinstance(exc.value, KeyError)


def test_read_group_is_not_a_dataset(data_file):
    with tiCont.open_file(data_file) as f:
        with pytest.raises(DatasetNotFound):
            tiCont.read_dataset(f, "cue")


def test_read_with_safe_cast(data_file):
    with tiCont.open_file(data_file) as f:
        arr = tiCont.read_dataset(f, "event_id", dtype="float64")
    assert arr.dtype == np.float64


@pytest.mark.parametrize("name, dtype", [
    ("event_time_offset", np.uint32),
    ("signed", "uint32"),
    ("event_id", np.uint16),
])
def test_read_type_mismatch(data_file, name, dtype):
    with tiCont.open_file(data_file) as f:
        with pytest.raises(DatasetDecodeError) as exc:
            tiCont.read_dataset(f, name, dtype=dtype)
    assert exc.value.name == name


def test_read_positions(data_file):
    with tiCont.open_file(data_file) as f:
        pos = tiCont.read_dataset(f, "event_position", dtype="position")
    assert pos.dtype == POSITION_DTYPE
    assert pos.shape == (3,)
    np.testing.assert_array_equal(pos["x"], [1, 3, 5])
    np.testing.assert_array_equal(pos["y"], [2, 4, 6])


def test_read_positions_wrong_shape(data_file):
    with tiCont.open_file(data_file) as f:
        with pytest.raises(DatasetDecodeError):
            tiCont.read_dataset(f, "event_id", dtype=POSITION_DTYPE)


def test_list_datasets(data_file):
    with tiCont.open_file(data_file) as f:
        names = tiCont.list_datasets(f)
    assert sorted(names) == sorted([
        "event_id", "event_time_offset", "event_position", "cue/cue_id",
        "signed"])


def test_read_signed_positions_is_a_decode_error(tmp_path):
    path = write_h5(tmp_path / "signed_pos.h5", {
        "event_position": np.array([[-1, 2]], dtype=np.int16)})
    with tiCont.open_file(path) as f:
        with pytest.raises(DatasetDecodeError) as exc:
            tiCont.read_dataset(f, "event_position", dtype="position")
    assert exc.value.stored == np.int16


def test_read_narrow_unsigned_positions(tmp_path):
    path = write_h5(tmp_path / "u8_pos.h5", {
        "event_position": np.array([[1, 2]], dtype=np.uint8)})
    with tiCont.open_file(path) as f:
        pos = tiCont.read_dataset(f, "event_position", dtype=POSITION_DTYPE)
    assert pos.dtype == POSITION_DTYPE
    assert (int(pos["x"][0]), int(pos["y"][0])) == (1, 2)


@pytest.mark.parametrize("dtype", ["bogus", object()])
def test_read_invalid_dtype(data_file, dtype):
    with tiCont.open_file(data_file) as f:
        with pytest.raises(ConfigError):
            tiCont.read_dataset(f, "event_id", dtype=dtype)


def test_read_null_dataspace(tmp_path):
    path = tmp_path / "null.h5"
    with h5py.File(path, "w") as f:
        f.create_dataset("e", data=h5py.Empty("f8"))

    with tiCont.open_file(path) as f:
        stored = tiCont.read_dataset(f, "e")
        as_float = tiCont.read_dataset(f, "e", dtype="float64")
        with pytest.raises(DatasetDecodeError):
            tiCont.read_dataset(f, "e", dtype="uint32")

    assert stored.dtype == np.float64
    assert stored.shape == (0,)
    assert as_float.shape == (0,)
