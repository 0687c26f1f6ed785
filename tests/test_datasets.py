"""Tests for reading datasets from arbitrary files."""

from __future__ import annotations

import numpy as np
import pytest

from TristImg.datasets import read_datasets, read_datasets_many
from TristImg.errors import ConfigError, DatasetNotFound, FileError

from conftest import write_h5


def test_read_datasets_keeps_key_order(data_file):
    offsets, ids = read_datasets(data_file, ["event_time_offset", "event_id"])
    np.testing.assert_array_equal(ids, np.arange(5))
    np.testing.assert_allclose(offsets, np.linspace(0.0, 1.0, 5))


def test_read_datasets_no_keys(data_file):
    assert read_datasets(data_file, []) == []


def test_read_datasets_missing_key(tmp_path):
    path = write_h5(tmp_path / "only_ids.h5",
                    {"event_id": np.arange(3, dtype=np.uint32)})
    with pytest.raises(DatasetNotFound) as exc:
        read_datasets(path, ["event_id", "missing_key"])
    assert exc.value.name == "missing_key"


def test_read_datasets_missing_file(tmp_path):
    with pytest.raises(FileError):
        read_datasets(tmp_path / "missing.h5", ["event_id"])


def test_read_datasets_with_dtype(data_file):
    ids, = read_datasets(data_file, ["event_id"], dtype="uint64")
    assert ids.dtype == np.uint64


def test_failure_does_not_affect_next_call(tmp_path, data_file):
    bad = write_h5(tmp_path / "bad.h5", {"other": np.zeros(2)})
    with pytest.raises(DatasetNotFound):
        read_datasets(bad, ["event_id"])
    ids, = read_datasets(data_file, ["event_id"])
    assert ids.size == 5


def test_read_many_is_independent_per_file(tmp_path, data_file):
    bad = write_h5(tmp_path / "bad.h5", {"other": np.zeros(2)})
    missing = tmp_path / "missing.h5"

    results = read_datasets_many([bad, data_file, missing], ["event_id"],
                                 progress=False)

    assert [r.path for r in results] == [str(bad), str(data_file),
                                         str(missing)]
    assert [r.ok for r in results] == [False, True, False]
    assert isinstance(results[0].error, DatasetNotFound)
    assert results[0].arrays is None
    assert isinstance(results[2].error, FileError)
    np.testing.assert_array_equal(results[1].arrays[0], np.arange(5))


def test_read_many_all_datasets(tmp_path):
    path = write_h5(tmp_path / "two.h5", {
        "a": np.arange(2, dtype=np.uint32),
        "b": np.ones(3),
    })
    result, = read_datasets_many([path], None, progress=False)
    assert result.ok
    assert sorted(result.keys) == ["a", "b"]
    shapes = dict(zip(result.keys, [a.shape for a in result.arrays]))
    assert shapes == {"a": (2,), "b": (3,)}


def test_read_many_logs_failures(tmp_path, caplog):
    with caplog.at_level("WARNING", logger="TristImg"):
        read_datasets_many([tmp_path / "missing.h5"], ["x"], progress=False)
    assert "missing.h5" in caplog.text


def test_read_datasets_unknown_dtype_name(data_file):
    with pytest.raises(ConfigError):
        read_datasets(data_file, ["event_id"], dtype="bogus")


def test_read_many_reports_unknown_dtype_per_file(data_file):
    results = read_datasets_many([data_file, data_file], ["event_id"],
                                 dtype="bogus", progress=False)
    assert len(results) == 2
    assert all(isinstance(r.error, ConfigError) for r in results)
    assert all(r.arrays is None for r in results)
