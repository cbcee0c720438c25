"""FeedHandle: the read-only view callers query an assembled feed through."""

from typing import Optional, TypeVar

import pandas as pd
from pydantic import BaseModel

from ..configs import DefaultConfig, GtfsReaderConfig
from ..errors import RowError
from ..models._base.records import RecordModel
from ..models.gtfs.records import CalendarDateRecord, StopRecord, StopTimeRecord
from ..models.gtfs.tables import (
    AgenciesTable,
    CalendarDatesTable,
    CalendarTable,
    FrequenciesTable,
    RoutesTable,
    ShapesTable,
    StopsTable,
    StopTimesTable,
    TripsTable,
)
from ..source import TabularSource
from ..utils.models import order_fields_from_data_model, validate_df_to_model
from .custom import CustomRecordSet, extract_custom
from .feed import Feed
from .schema import SchemaEntry, lookup
from .schema import table_names_with_field as _table_names_with_field

ModelT = TypeVar("ModelT", bound=BaseModel)

TABLE_MODELS = {
    "agency": AgenciesTable,
    "stops": StopsTable,
    "routes": RoutesTable,
    "trips": TripsTable,
    "stop_times": StopTimesTable,
    "calendar": CalendarTable,
    "calendar_dates": CalendarDatesTable,
    "shapes": ShapesTable,
    "frequencies": FrequenciesTable,
}


def _schema_entry(kind: str) -> SchemaEntry:
    entry = lookup(kind)
    if entry is None:
        msg = f"{kind} is not a known GTFS file."
        raise ValueError(msg)
    return entry


class FeedHandle:
    """Read-only access to an assembled Feed and to the source it was read from.

    `kind` arguments accept a table name (`stops`) or a file name (`stops.txt`).

    Attributes:
        feed: the assembled Feed.
        source: the source the feed was read from, used for custom extraction.
        config: the reader configuration the feed was assembled with.
    """

    def __init__(
        self, feed: Feed, source: TabularSource, config: GtfsReaderConfig = DefaultConfig
    ):
        """Create a FeedHandle. Normally created by `open_feed`."""
        self.feed = feed
        self.source = source
        self.config = config

    def __repr__(self):
        return f"FeedHandle({self.feed!r})"

    @property
    def row_errors(self) -> tuple[RowError, ...]:
        """Rows of the feed that could not be decoded."""
        return self.feed.row_errors

    def entities_of(self, kind: str) -> tuple[RecordModel, ...]:
        """Records of the file `kind` in source order; empty if an optional file was absent.

        Raises:
            ValueError: if `kind` is not a known GTFS file.
        """
        return self.feed.get_table(_schema_entry(kind).table_name)

    def lookup(self, kind: str, id: str) -> Optional[RecordModel]:
        """Record of the file `kind` with identifier `id`, None if there is no such record.

        Raises:
            ValueError: if `kind` is not a known GTFS file or has no identifier column.
        """
        entry = _schema_entry(kind)
        if entry.id_field is None:
            msg = f"{entry.filename} has no identifier column to look records up by."
            raise ValueError(msg)
        return self.feed.get_lookup(entry.table_name).get(id)

    def custom(self, filename: str, model: type[ModelT]) -> CustomRecordSet[ModelT]:
        """Extract `filename` from the source into records of a caller-declared `model`.

        See `gtfs_reader.feed.custom.extract_custom`.
        """
        return extract_custom(self.source, filename, model)

    def stop_times_for_trip(self, trip_id: str) -> tuple[StopTimeRecord, ...]:
        """Stop times of `trip_id` ordered by stop_sequence, empty for an unknown trip."""
        return self.feed.stop_times_by_trip.get(trip_id, ())

    def stops_for_trip(self, trip_id: str) -> list[Optional[StopRecord]]:
        """Stops visited by `trip_id` in stop_sequence order, None where a stop_id is unknown."""
        stops = self.feed.get_lookup("stops")
        return [stops.get(st.stop_id) for st in self.stop_times_for_trip(trip_id)]

    def calendar_dates_for_service(self, service_id: str) -> tuple[CalendarDateRecord, ...]:
        """Calendar date exceptions of `service_id` in source order."""
        return self.feed.calendar_dates_by_service.get(service_id, ())

    def table_names_with_field(self, field: str) -> list[str]:
        """Names of the tables whose records have a field named `field`."""
        return _table_names_with_field(field)

    def to_dataframe(self, kind: str) -> pd.DataFrame:
        """Records of the file `kind` as a DataFrame with one column per record field.

        Values are in their GTFS text form where that differs from Python: dates as `YYYYMMDD`,
        colors as hex and flags and enumerations as integers. Service times are seconds.

        Raises:
            ValueError: if `kind` is not a known GTFS file.
            TableValidationError: if the table fails validation against its data model.
        """
        entry = _schema_entry(kind)
        columns = list(entry.record_model.model_fields)
        data = [r.model_dump(mode="json") for r in self.entities_of(kind)]
        df = pd.DataFrame(data, columns=columns)
        table_model = TABLE_MODELS.get(entry.table_name)
        if table_model is None:
            return df
        df = order_fields_from_data_model(df, table_model)
        return validate_df_to_model(df, table_model)
