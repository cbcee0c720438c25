"""Tests for assembling typed feeds.

Run just these tests using `pytest tests/test_feed/test_assemble.py`
"""

import pytest

from gtfs_reader import GtfsLogger, assemble, open_feed
from gtfs_reader.configs import load_reader_config
from gtfs_reader.errors import (
    AmbiguousConditionalRequirementError,
    DuplicateIdError,
    HeaderMismatchError,
    MissingFieldError,
    MissingRequiredFileError,
    NotANumberError,
    OutOfRangeError,
    RowError,
)
from gtfs_reader.models.gtfs.types import RouteType
from gtfs_reader.source import DirectorySource


def test_assemble_sample_feed(request, sample_dir, sample_counts):
    GtfsLogger.info(f"--Starting: {request.node.name}")
    feed = assemble(DirectorySource(sample_dir))
    assert feed.counts == sample_counts
    assert feed.row_errors == ()
    assert feed.stops[0].stop_name == "Stop Area"
    assert feed.get_table("routes.txt")[2].route_type.is_other
    assert feed.get_table("routes")[2].route_type.basic_type is RouteType.BUS
    GtfsLogger.info(f"--Finished: {request.node.name}")


@pytest.mark.parametrize(
    "filename", ["agency.txt", "stops.txt", "routes.txt", "trips.txt", "stop_times.txt"]
)
def test_missing_required_file(write_feed, minimal_feed_files, filename):
    del minimal_feed_files[filename]
    feed_dir = write_feed(minimal_feed_files)
    with pytest.raises(MissingRequiredFileError) as e:
        open_feed(feed_dir)
    assert e.value.filename == filename


def test_missing_optional_files(write_feed, minimal_feed_files):
    handle = open_feed(write_feed(minimal_feed_files))
    assert handle.entities_of("shapes") == ()
    assert handle.entities_of("fare_attributes.txt") == ()
    assert handle.entities_of("calendar_dates") == ()
    assert handle.row_errors == ()


def test_missing_calendar_group(write_feed, minimal_feed_files):
    del minimal_feed_files["calendar.txt"]
    with pytest.raises(AmbiguousConditionalRequirementError) as e:
        open_feed(write_feed(minimal_feed_files))
    assert e.value.present == []
    assert e.value.filenames == ["calendar.txt", "calendar_dates.txt"]


def test_calendar_dates_only(write_feed, minimal_feed_files):
    del minimal_feed_files["calendar.txt"]
    minimal_feed_files["calendar_dates.txt"] = "service_id,date,exception_type\nservice1,20060703,1\n"
    handle = open_feed(write_feed(minimal_feed_files))
    assert handle.entities_of("calendar") == ()
    assert len(handle.entities_of("calendar_dates")) == 1


def test_calendar_requirement_exactly_one(sample_dir):
    config = load_reader_config({"VALIDATION": {"CALENDAR_REQUIREMENT": "exactly_one"}})
    with pytest.raises(AmbiguousConditionalRequirementError) as e:
        open_feed(sample_dir, config=config)
    assert e.value.present == ["calendar.txt", "calendar_dates.txt"]


def test_row_errors_are_collected(request, write_feed, minimal_feed_files):
    GtfsLogger.info(f"--Starting: {request.node.name}")
    minimal_feed_files["stops.txt"] = (
        "stop_id,stop_name,stop_lat,stop_lon\n"
        "stop1,Stop Area,48.796058,2.449386\n"
        "stop2,Bad Latitude,north,2.449386\n"
        ",No Id,48.796058,2.449386\n"
        "stop4,Fine,48.796058,2.449386\n"
    )
    handle = open_feed(write_feed(minimal_feed_files))
    assert [s.stop_id for s in handle.entities_of("stops")] == ["stop1", "stop4"]
    assert [(e.filename, e.line_number, e.column) for e in handle.row_errors] == [
        ("stops.txt", 3, "stop_lat"),
        ("stops.txt", 4, "stop_id"),
    ]
    assert isinstance(handle.row_errors[0].cause, NotANumberError)
    assert isinstance(handle.row_errors[1].cause, MissingFieldError)
    GtfsLogger.info(f"--Finished: {request.node.name}")


physical_line_list = [
    ("stop_id,stop_lat\nstop1,1\n\nstop2,999\n", 4),
    ('stop_id,stop_name,stop_lat\nstop1,"Upper\nLower",1\nstop2,x,999\n', 5),
    ('stop_id,stop_name,stop_lat\n\nstop1,"A\n\nB",1\n\nstop2,x,999\n', 7),
]


@pytest.mark.parametrize("stops,line_number", physical_line_list)
def test_row_errors_report_physical_lines(write_feed, minimal_feed_files, stops, line_number):
    minimal_feed_files["stops.txt"] = stops
    handle = open_feed(write_feed(minimal_feed_files))
    assert [s.stop_id for s in handle.entities_of("stops")] == ["stop1"]
    assert [(e.line_number, e.column) for e in handle.row_errors] == [(line_number, "stop_lat")]
    assert isinstance(handle.row_errors[0].cause, OutOfRangeError)


def test_row_errors_raise(write_feed, minimal_feed_files):
    minimal_feed_files["stops.txt"] = "stop_id,stop_lat\nstop1,north\n"
    config = {"VALIDATION": {"ROW_ERRORS": "raise"}}
    with pytest.raises(RowError) as e:
        open_feed(write_feed(minimal_feed_files), config=config)
    assert e.value.line_number == 2


def test_duplicate_ids(write_feed, minimal_feed_files):
    minimal_feed_files["stops.txt"] = (
        "stop_id,stop_name\nstop1,First\nstop2,Other\nstop1,Second\n"
    )
    handle = open_feed(write_feed(minimal_feed_files))
    assert len(handle.entities_of("stops")) == 3
    assert handle.lookup("stops", "stop1").stop_name == "First"
    assert len(handle.row_errors) == 1
    error = handle.row_errors[0]
    assert (error.line_number, error.column) == (4, "stop_id")
    assert isinstance(error.cause, DuplicateIdError)


def test_duplicate_ids_unchecked(write_feed, minimal_feed_files):
    minimal_feed_files["stops.txt"] = "stop_id,stop_name\nstop1,First\nstop1,Second\n"
    config = {"VALIDATION": {"CHECK_UNIQUE_IDS": False}}
    handle = open_feed(write_feed(minimal_feed_files), config=config)
    assert handle.row_errors == ()
    assert handle.lookup("stops", "stop1").stop_name == "First"


def test_missing_required_column_fails_every_row(write_feed, minimal_feed_files):
    minimal_feed_files["trips.txt"] = "route_id,trip_id\nroute1,trip1\nroute1,trip2\n"
    handle = open_feed(write_feed(minimal_feed_files))
    assert handle.entities_of("trips") == ()
    assert [(e.line_number, e.column) for e in handle.row_errors] == [
        (2, "service_id"),
        (3, "service_id"),
    ]


def test_empty_file_is_fatal(write_feed, minimal_feed_files):
    minimal_feed_files["routes.txt"] = ""
    with pytest.raises(HeaderMismatchError):
        open_feed(write_feed(minimal_feed_files))


def test_byte_order_mark(write_feed, minimal_feed_files):
    handle = open_feed(write_feed(minimal_feed_files, encoding="utf-8-sig"))
    assert handle.lookup("stops", "stop1") is not None
    assert handle.row_errors == ()


def test_referential_integrity_not_enforced(request, write_feed, minimal_feed_files):
    GtfsLogger.info(f"--Starting: {request.node.name}")
    minimal_feed_files["trips.txt"] = "route_id,service_id,trip_id\nnot_a_route,service1,trip1\n"
    handle = open_feed(write_feed(minimal_feed_files))
    assert len(handle.entities_of("stops")) == 1
    assert handle.lookup("trips", "trip1").route_id == "not_a_route"
    assert handle.lookup("routes", "not_a_route") is None
    assert handle.row_errors == ()
    GtfsLogger.info(f"--Finished: {request.node.name}")


def test_feed_is_read_only(sample_handle):
    feed = sample_handle.feed
    with pytest.raises(AttributeError):
        feed.stops = ()
    with pytest.raises(AttributeError):
        del feed.row_errors
    with pytest.raises(TypeError):
        feed.get_lookup("stops")["stop9"] = None
    assert isinstance(feed.stops, tuple)


def test_assemble_is_idempotent(write_feed, minimal_feed_files):
    minimal_feed_files["stops.txt"] = (
        "stop_id,stop_lat\nstop1,48.796058\nstop2,bad\nstop3,1.5\nstop1,2.0\n"
    )
    source = DirectorySource(write_feed(minimal_feed_files))
    first = assemble(source)
    second = assemble(source)
    assert first.counts == second.counts
    assert dict(first.get_lookup("stops")) == dict(second.get_lookup("stops"))
    assert first.row_errors == second.row_errors
    assert len(first.row_errors) == 2


def test_stop_times_sorted_by_sequence(sample_handle):
    stop_times = sample_handle.feed.stop_times_by_trip["trip1"]
    assert [st.stop_sequence for st in stop_times] == [1, 2, 3, 4]
    assert [st.stop_id for st in stop_times] == ["stop2", "stop3", "stop5", "stop4"]
    # source order is untouched
    assert [st.stop_sequence for st in sample_handle.entities_of("stop_times")][:4] == [1, 3, 2, 4]
