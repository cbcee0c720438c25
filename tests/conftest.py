import shutil
import zipfile
from pathlib import Path

import pandas as pd
import pytest

pd.set_option("display.max_rows", 500)
pd.set_option("display.max_columns", 500)
pd.set_option("display.width", 50000)

MINIMAL_FEED_FILES = {
    "agency.txt": "agency_id,agency_name,agency_url,agency_timezone\n"
    "agency001,Transit Agency,http://www.transitcommuterbus.com/,PST\n",
    "stops.txt": "stop_id,stop_name,stop_lat,stop_lon\nstop1,Stop Area,48.796058,2.449386\n",
    "routes.txt": "route_id,agency_id,route_short_name,route_long_name,route_type\n"
    "route1,agency001,1,100,3\n",
    "trips.txt": "route_id,service_id,trip_id\nroute1,service1,trip1\n",
    "stop_times.txt": "trip_id,arrival_time,departure_time,stop_id,stop_sequence\n"
    "trip1,14:00:00,14:00:00,stop1,1\n",
    "calendar.txt": "service_id,monday,tuesday,wednesday,thursday,friday,saturday,sunday,"
    "start_date,end_date\nservice1,1,1,1,1,1,0,0,20060701,20060731\n",
}


@pytest.fixture(scope="session")
def base_dir():
    return Path(__file__).resolve().parent.parent


@pytest.fixture(scope="session")
def example_dir(base_dir):
    return Path(base_dir) / "examples"


@pytest.fixture(scope="session")
def sample_dir(example_dir):
    return example_dir / "sample"


@pytest.fixture(scope="session")
def test_dir():
    return Path(__file__).resolve().parent


@pytest.fixture(scope="session")
def test_out_dir(test_dir):
    _test_out_dir = Path(test_dir) / "out"

    if not _test_out_dir.exists():
        _test_out_dir.mkdir()

    return _test_out_dir


@pytest.fixture(scope="session")
def _clear_out_dir(test_out_dir):
    for item in test_out_dir.iterdir():
        if item.is_dir():
            shutil.rmtree(item)
        else:
            item.unlink()


@pytest.fixture(scope="session", autouse=True)
def _test_logging(_clear_out_dir, test_out_dir):
    from gtfs_reader import setup_logging

    setup_logging(
        info_log_filename=test_out_dir / "tests.info.log",
        debug_log_filename=test_out_dir / "tests.debug.log",
    )


@pytest.fixture(scope="session")
def sample_zip(tmp_path_factory, sample_dir):
    """Sample feed zipped with its files at the root of the archive."""
    zip_path = tmp_path_factory.mktemp("zipped") / "sample.zip"
    with zipfile.ZipFile(zip_path, "w") as zf:
        for f in sorted(sample_dir.glob("*.txt")):
            zf.write(f, arcname=f.name)
    return zip_path


@pytest.fixture(scope="session")
def nested_sample_zip(tmp_path_factory, sample_dir):
    """Sample feed zipped together with a parent directory."""
    zip_path = tmp_path_factory.mktemp("zipped_nested") / "nested.zip"
    with zipfile.ZipFile(zip_path, "w") as zf:
        for f in sorted(sample_dir.glob("*.txt")):
            zf.write(f, arcname=f"gtfs/{f.name}")
    return zip_path


@pytest.fixture(scope="session")
def sample_handle(sample_dir):
    from gtfs_reader import open_feed

    return open_feed(sample_dir)


@pytest.fixture
def minimal_feed_files():
    """Text of each file of a small valid feed, by file name. Safe to modify."""
    return dict(MINIMAL_FEED_FILES)


@pytest.fixture
def write_feed(tmp_path):
    """Write a dict of file name to text as a feed directory and return its path."""

    def _write_feed(files: dict, dirname: str = "feed", encoding: str = "utf-8") -> Path:
        feed_dir = tmp_path / dirname
        feed_dir.mkdir()
        for filename, text in files.items():
            (feed_dir / filename).write_text(text, encoding=encoding)
        return feed_dir

    return _write_feed


@pytest.fixture(scope="session")
def sample_counts():
    """Number of records in each table of the sample feed."""
    return {
        "agency": 1,
        "stops": 5,
        "routes": 3,
        "trips": 3,
        "stop_times": 6,
        "calendar": 2,
        "calendar_dates": 3,
        "fare_attributes": 2,
        "fare_rules": 2,
        "shapes": 3,
        "frequencies": 1,
        "transfers": 2,
        "pathways": 1,
        "levels": 2,
        "feed_info": 1,
        "attributions": 1,
    }
