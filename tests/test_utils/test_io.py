"""Module for testing the utils.io_table and utils.io_dict modules."""

import pytest

from gtfs_reader import GtfsLogger
from gtfs_reader.errors import HeaderMismatchError
from gtfs_reader.utils.io_dict import load_dict, load_merge_dict
from gtfs_reader.utils.io_table import iter_df_rows, read_csv_header, read_csv_rows


def test_read_csv_rows_in_chunks(request, sample_dir):
    GtfsLogger.info(f"--Starting: {request.node.name}")
    stop_times = sample_dir / "stop_times.txt"
    chunked = list(read_csv_rows(stop_times, "stop_times.txt", chunk_size=2))
    not_chunked = list(read_csv_rows(stop_times, "stop_times.txt"))
    assert chunked == not_chunked
    assert [n for n, _ in chunked] == [2, 3, 4, 5, 6, 7]
    GtfsLogger.info(f"--Finished: {request.node.name}")


def test_byte_order_mark(tmp_path):
    path = tmp_path / "agency.txt"
    path.write_text("agency_name,agency_url\nTransit,http://a.b\n", encoding="utf-8-sig")
    assert read_csv_header(path, "agency.txt") == ["agency_name", "agency_url"]
    assert list(read_csv_rows(path, "agency.txt"))[0][1]["agency_name"] == "Transit"


def test_blank_lines_are_skipped_but_counted(tmp_path):
    path = tmp_path / "levels.txt"
    path.write_text("level_id,level_index\nL0,0\n\nL1,1\n\n\nL2,2\n")
    rows = list(read_csv_rows(path, "levels.txt"))
    assert [r["level_id"] for _, r in rows] == ["L0", "L1", "L2"]
    assert [n for n, _ in rows] == [2, 4, 7]


def test_multiline_cells_are_counted(tmp_path):
    path = tmp_path / "levels.txt"
    path.write_text('level_id,level_name\nL0,"Ground\nfloor"\nL1,"First\nfloor"\nL2,Second\n')
    rows = list(read_csv_rows(path, "levels.txt", chunk_size=1))
    assert [n for n, _ in rows] == [2, 4, 6]
    assert rows[0][1]["level_name"] == "Ground\nfloor"


def test_empty_file(tmp_path):
    path = tmp_path / "levels.txt"
    path.write_text("")
    with pytest.raises(HeaderMismatchError):
        read_csv_header(path, "levels.txt")
    with pytest.raises(HeaderMismatchError):
        list(read_csv_rows(path, "levels.txt"))


def test_iter_df_rows():
    import pandas as pd

    df = pd.DataFrame({" level_id": ["L0", "L1"], "level_index": [0, None]})
    rows = list(iter_df_rows(df))
    assert rows[0] == (2, {"level_id": "L0", "level_index": "0"})
    assert rows[1] == (3, {"level_id": "L1", "level_index": ""})


def test_load_merge_dict(tmp_path):
    yaml_file = tmp_path / "read_config.yaml"
    yaml_file.write_text("READ:\n  CHUNK_SIZE: 50\n")
    toml_file = tmp_path / "validation_config.toml"
    toml_file.write_text('[VALIDATION]\nROW_ERRORS = "raise"\n')
    assert load_dict(yaml_file) == {"READ": {"CHUNK_SIZE": 50}}
    assert load_merge_dict([yaml_file, toml_file]) == {
        "READ": {"CHUNK_SIZE": 50},
        "VALIDATION": {"ROW_ERRORS": "raise"},
    }


def test_load_dict_unsupported(tmp_path):
    path = tmp_path / "config.ini"
    path.write_text("[READ]\n")
    with pytest.raises(NotImplementedError):
        load_dict(path)
    with pytest.raises(FileNotFoundError):
        load_dict(tmp_path / "missing.yaml")
