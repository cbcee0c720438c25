"""Data models for vanilla GTFS: value decoders, field types, records and tables."""

from .records import (
    AgencyRecord,
    AttributionRecord,
    CalendarDateRecord,
    CalendarRecord,
    FareAttributeRecord,
    FareRuleRecord,
    FeedInfoRecord,
    FrequencyRecord,
    LevelRecord,
    PathwayRecord,
    RouteRecord,
    ShapeRecord,
    StopRecord,
    StopTimeRecord,
    TransferRecord,
    TripRecord,
)
from .tables import (
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
from .types import *
