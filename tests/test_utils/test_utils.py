"""Tests for /utils.

Run just these tests using `pytest tests/test_utils/test_utils.py`
"""

import pytest

from gtfs_reader import GtfsLogger
from gtfs_reader.utils.utils import (
    DictionaryMergeError,
    merge_dicts,
    normalize_filename,
    table_name,
)

filename_test_list = [
    {"name": "stops", "filename": "stops.txt", "table": "stops"},
    {"name": "stops.txt", "filename": "stops.txt", "table": "stops"},
    {"name": " stop_times.txt ", "filename": "stop_times.txt", "table": "stop_times"},
]


@pytest.mark.parametrize("filename_test", filename_test_list)
def test_filenames(request, filename_test):
    GtfsLogger.info(f"--Starting: {request.node.name}")
    assert normalize_filename(filename_test["name"]) == filename_test["filename"]
    assert table_name(filename_test["name"]) == filename_test["table"]
    GtfsLogger.info(f"--Finished: {request.node.name}")


def test_merge_dicts():
    right = {"READ": {"ENCODING": "utf-8"}}
    merge_dicts(right, {"READ": {"CHUNK_SIZE": 10}, "VALIDATION": {"ROW_ERRORS": "raise"}})
    assert right == {
        "READ": {"ENCODING": "utf-8", "CHUNK_SIZE": 10},
        "VALIDATION": {"ROW_ERRORS": "raise"},
    }


def test_merge_dicts_conflict():
    right = {"READ": {"ENCODING": "utf-8"}}
    with pytest.raises(DictionaryMergeError):
        merge_dicts(right, {"READ": {"ENCODING": "latin-1"}})
