"""Tests for decoding name-indexed rows into records.

Run just these tests using `pytest tests/test_feed/test_decode.py`
"""

from datetime import date
from typing import Optional

import pytest
from pydantic import BaseModel, Field

from gtfs_reader import GtfsLogger, RawRow
from gtfs_reader.errors import (
    AnyOfError,
    InvalidBooleanError,
    InvalidColorError,
    InvalidDateError,
    MissingFieldError,
    NotANumberError,
    OutOfRangeError,
    RowError,
)
from gtfs_reader.feed.decode import decode_row
from gtfs_reader.models.gtfs import RouteRecord, StopRecord, StopTimeRecord, TripRecord
from gtfs_reader.models.gtfs.types import GtfsDate


def test_decode_row(request):
    GtfsLogger.info(f"--Starting: {request.node.name}")
    row = RawRow(
        2,
        {
            "trip_id": "trip1",
            "arrival_time": "14:00:00",
            "departure_time": "",
            "stop_id": "stop2",
            "stop_sequence": "1",
            "not_a_gtfs_column": "ignored",
        },
    )
    stop_time = decode_row(StopTimeRecord, row, "stop_times.txt")
    assert stop_time.trip_id == "trip1"
    assert stop_time.arrival_time == 50400
    assert stop_time.departure_time is None
    assert not hasattr(stop_time, "not_a_gtfs_column")
    GtfsLogger.info(f"--Finished: {request.node.name}")


def test_missing_optional_columns_are_absent():
    row = RawRow(2, {"route_id": "route1", "service_id": "service1", "trip_id": "trip1"})
    trip = decode_row(TripRecord, row, "trips.txt")
    assert trip.trip_headsign is None
    assert trip.direction_id is None
    assert trip.shape_id is None


missing_column_list = [
    {"route_id": "route1", "service_id": "service1"},
    {"route_id": "route1", "service_id": "service1", "trip_id": ""},
]


@pytest.mark.parametrize("values", missing_column_list)
def test_missing_required_column(values):
    with pytest.raises(RowError) as e:
        decode_row(TripRecord, RawRow(7, values), "trips.txt")
    assert e.value.filename == "trips.txt"
    assert e.value.line_number == 7
    assert e.value.column == "trip_id"
    assert isinstance(e.value.cause, MissingFieldError)


bad_value_list = [
    (StopRecord, {"stop_id": "s", "stop_lat": "91"}, "stop_lat", OutOfRangeError),
    (StopRecord, {"stop_id": "s", "stop_lon": "east"}, "stop_lon", NotANumberError),
    (StopRecord, {"stop_id": "s", "location_type": "x"}, "location_type", NotANumberError),
    (
        RouteRecord,
        {"route_id": "r", "route_type": "3", "route_short_name": "1", "route_color": "FFF"},
        "route_color",
        InvalidColorError,
    ),
    (
        StopTimeRecord,
        {"trip_id": "t", "stop_id": "s", "stop_sequence": "-1"},
        "stop_sequence",
        OutOfRangeError,
    ),
]


@pytest.mark.parametrize("model,values,column,error", bad_value_list)
def test_bad_values(model, values, column, error):
    with pytest.raises(RowError) as e:
        decode_row(model, RawRow(3, values), "file.txt")
    assert e.value.column == column
    assert isinstance(e.value.cause, error)


def test_first_failing_column_in_declaration_order():
    values = {"trip_id": "t", "stop_id": "s", "stop_sequence": "x", "arrival_time": "bad"}
    with pytest.raises(RowError) as e:
        decode_row(StopTimeRecord, RawRow(2, values), "stop_times.txt")
    assert e.value.column == "stop_sequence"


def test_any_of_failure():
    with pytest.raises(RowError) as e:
        decode_row(RouteRecord, RawRow(2, {"route_id": "r", "route_type": "3"}), "routes.txt")
    assert isinstance(e.value.cause, AnyOfError)
    assert e.value.column == "route_short_name|route_long_name"


def test_missing_id_reported_before_any_of():
    with pytest.raises(RowError) as e:
        decode_row(RouteRecord, RawRow(2, {"route_id": "", "route_type": "3"}), "routes.txt")
    assert e.value.column == "route_id"
    assert isinstance(e.value.cause, MissingFieldError)


def test_bad_value_reported_before_any_of():
    values = {"route_id": "r", "route_type": "3", "route_color": "red"}
    with pytest.raises(RowError) as e:
        decode_row(RouteRecord, RawRow(2, values), "routes.txt")
    assert e.value.column == "route_color"
    assert isinstance(e.value.cause, InvalidColorError)


class PlainTypes(BaseModel):
    count: int
    ratio: Optional[float] = None
    active: Optional[bool] = None
    day: Optional[date] = None
    gtfs_day: Optional[GtfsDate] = None
    small: Optional[int] = Field(None, lt=10)


plain_type_list = [
    ({"count": "one"}, "count", NotANumberError),
    ({"count": "1", "ratio": "half"}, "ratio", NotANumberError),
    ({"count": "1", "active": "perhaps"}, "active", InvalidBooleanError),
    ({"count": "1", "day": "not a date"}, "day", InvalidDateError),
    ({"count": "1", "gtfs_day": "2006-07-01"}, "gtfs_day", InvalidDateError),
    ({"count": "1", "small": "12"}, "small", OutOfRangeError),
]


@pytest.mark.parametrize("values,column,error", plain_type_list)
def test_plain_pydantic_types(values, column, error):
    with pytest.raises(RowError) as e:
        decode_row(PlainTypes, RawRow(2, values), "custom.txt")
    assert e.value.column == column
    assert isinstance(e.value.cause, error)


def test_plain_pydantic_types_decode():
    record = decode_row(
        PlainTypes, RawRow(2, {"count": "3", "gtfs_day": "20060701"}), "custom.txt"
    )
    assert record.count == 3
    assert record.gtfs_day == date(2006, 7, 1)
    assert record.day is None
