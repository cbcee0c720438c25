"""Data models for exported GTFS tables using pandera library.

Tables are exported from typed records with JSON-mode values: dates as `YYYYMMDD` strings,
service times as seconds since midnight of the service day, colors as hex and enumerations as
their integer code.

Only the columns which are required by the GTFS reference are declared; any other column of the
exported table passes through unchecked.

!!! example "Validating a table to the StopsTable"

    ```python
    from gtfs_reader.models.gtfs.tables import StopsTable
    from gtfs_reader.utils.models import validate_df_to_model

    validated_stops_df = validate_df_to_model(stops_df, StopsTable)
    ```
"""

from typing import Optional

import pandera as pa
from pandera.typing import Series

from ...params import LATITUDE_RANGE, LONGITUDE_RANGE

DATE_REGEX = r"^[0-9]{8}$"


class AgenciesTable(pa.DataFrameModel):
    """Represents the Agency table in the GTFS dataset.

    For field definitions, see the GTFS reference: <https://gtfs.org/documentation/schedule/reference/#agencytxt>
    """

    agency_name: Series[str] = pa.Field(coerce=True, nullable=False)
    agency_url: Series[str] = pa.Field(coerce=True, nullable=False)
    agency_timezone: Series[str] = pa.Field(coerce=True, nullable=False)

    class Config:
        """Config for the AgenciesTable data model."""

        coerce = True


class StopsTable(pa.DataFrameModel):
    """Represents the Stops table in the GTFS dataset.

    For field definitions, see the GTFS reference: <https://gtfs.org/documentation/schedule/reference/#stopstxt>

    Attributes:
        stop_id (str): The stop_id. Primary key. Required to be unique.
        stop_lat (Optional[float]): The stop latitude, absent for generic nodes and boarding areas.
        stop_lon (Optional[float]): The stop longitude, absent for generic nodes and boarding areas.
    """

    stop_id: Series[str] = pa.Field(coerce=True, nullable=False, unique=True)
    stop_lat: Optional[Series[float]] = pa.Field(
        coerce=True, nullable=True, ge=LATITUDE_RANGE[0], le=LATITUDE_RANGE[1]
    )
    stop_lon: Optional[Series[float]] = pa.Field(
        coerce=True, nullable=True, ge=LONGITUDE_RANGE[0], le=LONGITUDE_RANGE[1]
    )

    class Config:
        """Config for the StopsTable data model."""

        coerce = True


class RoutesTable(pa.DataFrameModel):
    """Represents the Routes table in the GTFS dataset.

    For field definitions, see the GTFS reference: <https://gtfs.org/documentation/schedule/reference/#routestxt>

    Attributes:
        route_id (str): The route_id. Primary key. Required to be unique.
        route_type (int): The route type code, basic or extended.
    """

    route_id: Series[str] = pa.Field(nullable=False, unique=True, coerce=True)
    route_type: Series[int] = pa.Field(coerce=True, nullable=False, ge=0)

    class Config:
        """Config for the RoutesTable data model."""

        coerce = True


class TripsTable(pa.DataFrameModel):
    """Represents the Trips table in the GTFS dataset.

    For field definitions, see the GTFS reference: <https://gtfs.org/documentation/schedule/reference/#tripstxt>
    """

    trip_id: Series[str] = pa.Field(nullable=False, unique=True, coerce=True)
    route_id: Series[str] = pa.Field(nullable=False, coerce=True)
    service_id: Series[str] = pa.Field(nullable=False, coerce=True)

    class Config:
        """Config for the TripsTable data model."""

        coerce = True


class StopTimesTable(pa.DataFrameModel):
    """Represents the Stop Times table in the GTFS dataset.

    For field definitions, see the GTFS reference: <https://gtfs.org/documentation/schedule/reference/#stop_timestxt>
    """

    trip_id: Series[str] = pa.Field(nullable=False, coerce=True)
    stop_id: Series[str] = pa.Field(nullable=False, coerce=True)
    stop_sequence: Series[int] = pa.Field(nullable=False, coerce=True, ge=0)

    class Config:
        """Config for the StopTimesTable data model."""

        coerce = True


class CalendarTable(pa.DataFrameModel):
    """Represents the Calendar table in the GTFS dataset.

    For field definitions, see the GTFS reference: <https://gtfs.org/documentation/schedule/reference/#calendartxt>
    """

    service_id: Series[str] = pa.Field(nullable=False, unique=True, coerce=True)
    monday: Series[int] = pa.Field(coerce=True, isin=[0, 1])
    tuesday: Series[int] = pa.Field(coerce=True, isin=[0, 1])
    wednesday: Series[int] = pa.Field(coerce=True, isin=[0, 1])
    thursday: Series[int] = pa.Field(coerce=True, isin=[0, 1])
    friday: Series[int] = pa.Field(coerce=True, isin=[0, 1])
    saturday: Series[int] = pa.Field(coerce=True, isin=[0, 1])
    sunday: Series[int] = pa.Field(coerce=True, isin=[0, 1])
    start_date: Series[str] = pa.Field(coerce=True, str_matches=DATE_REGEX)
    end_date: Series[str] = pa.Field(coerce=True, str_matches=DATE_REGEX)

    class Config:
        """Config for the CalendarTable data model."""

        coerce = True


class CalendarDatesTable(pa.DataFrameModel):
    """Represents the Calendar Dates table in the GTFS dataset.

    For field definitions, see the GTFS reference: <https://gtfs.org/documentation/schedule/reference/#calendar_datestxt>
    """

    service_id: Series[str] = pa.Field(nullable=False, coerce=True)
    date: Series[str] = pa.Field(coerce=True, str_matches=DATE_REGEX)
    exception_type: Series[int] = pa.Field(coerce=True, nullable=False)

    class Config:
        """Config for the CalendarDatesTable data model."""

        coerce = True


class ShapesTable(pa.DataFrameModel):
    """Represents the Shapes table in the GTFS dataset.

    For field definitions, see the GTFS reference: <https://gtfs.org/documentation/schedule/reference/#shapestxt>
    """

    shape_id: Series[str] = pa.Field(nullable=False, coerce=True)
    shape_pt_lat: Series[float] = pa.Field(
        coerce=True, nullable=False, ge=LATITUDE_RANGE[0], le=LATITUDE_RANGE[1]
    )
    shape_pt_lon: Series[float] = pa.Field(
        coerce=True, nullable=False, ge=LONGITUDE_RANGE[0], le=LONGITUDE_RANGE[1]
    )
    shape_pt_sequence: Series[int] = pa.Field(coerce=True, nullable=False, ge=0)

    class Config:
        """Config for the ShapesTable data model."""

        coerce = True


class FrequenciesTable(pa.DataFrameModel):
    """Represents the Frequency table in the GTFS dataset.

    For field definitions, see the GTFS reference: <https://gtfs.org/documentation/schedule/reference/#frequenciestxt>

    Attributes:
        trip_id (str): Foreign key to `trip_id` in the trips table.
        start_time (int): The start time in seconds since midnight of the service day.
        end_time (int): The end time in seconds since midnight of the service day.
        headway_secs (int): The headway in seconds.
    """

    trip_id: Series[str] = pa.Field(nullable=False, coerce=True)
    start_time: Series[int] = pa.Field(nullable=False, coerce=True, ge=0)
    end_time: Series[int] = pa.Field(nullable=False, coerce=True, ge=0)
    headway_secs: Series[int] = pa.Field(coerce=True, nullable=False, gt=0)

    class Config:
        """Config for the FrequenciesTable data model."""

        coerce = True
