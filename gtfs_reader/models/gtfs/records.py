"""Pydantic data models for the records of each GTFS file.

Field names are the GTFS column names. Required columns are declared without a default, optional
columns default to None so an absent value is never confused with a real zero.

Records are normally created by the record decoder from the raw text of a row, but can also be
created directly:

```python
from gtfs_reader.models.gtfs import StopRecord

stop = StopRecord(stop_id="stop1", stop_lat="48.796058", stop_lon=2.449386)
print(stop.stop_lat)
# > 48.796058
```
"""

from typing import ClassVar, Optional

from .._base.records import AnyOf, RecordModel
from .types import (
    AgencyID,
    BikesAllowedField,
    ContinuousPickupDropoffField,
    DirectionIDField,
    ExactTimesField,
    ExceptionTypeField,
    FareID,
    Flag,
    GtfsDate,
    GtfsFloat,
    GtfsInt,
    Latitude,
    LevelID,
    LocationTypeField,
    Longitude,
    NonNegativeFloat,
    NonNegativeInt,
    PathwayID,
    PathwayModeField,
    PaymentMethodField,
    PickupDropoffTypeField,
    PositiveInt,
    RgbColor,
    RouteID,
    RouteTypeField,
    ServiceID,
    ServiceTime,
    ShapeID,
    StopID,
    TimepointTypeField,
    TransfersField,
    TransferTypeField,
    TripID,
    WheelchairAccessibleField,
    ZoneID,
)


class AgencyRecord(RecordModel):
    """Represents a transit agency."""

    id_field: ClassVar[Optional[str]] = "agency_id"

    agency_name: str
    agency_url: str
    agency_timezone: str

    # Optional
    agency_id: Optional[AgencyID] = None
    agency_lang: Optional[str] = None
    agency_phone: Optional[str] = None
    agency_fare_url: Optional[str] = None
    agency_email: Optional[str] = None


class StopRecord(RecordModel):
    """Represents a stop, station, entrance or other location of a station."""

    id_field: ClassVar[Optional[str]] = "stop_id"

    stop_id: StopID

    # Optional
    stop_code: Optional[str] = None
    stop_name: Optional[str] = None
    tts_stop_name: Optional[str] = None
    stop_desc: Optional[str] = None
    stop_lat: Optional[Latitude] = None
    stop_lon: Optional[Longitude] = None
    zone_id: Optional[ZoneID] = None
    stop_url: Optional[str] = None
    location_type: Optional[LocationTypeField] = None
    parent_station: Optional[StopID] = None
    stop_timezone: Optional[str] = None
    wheelchair_boarding: Optional[WheelchairAccessibleField] = None
    level_id: Optional[LevelID] = None
    platform_code: Optional[str] = None


class RouteRecord(RecordModel):
    """Represents a transit route. Requires a short name, a long name or both."""

    id_field: ClassVar[Optional[str]] = "route_id"
    require_any_of: ClassVar[AnyOf] = ["route_short_name", "route_long_name"]

    route_id: RouteID
    route_type: RouteTypeField

    # Optional
    agency_id: Optional[AgencyID] = None
    route_short_name: Optional[str] = None
    route_long_name: Optional[str] = None
    route_desc: Optional[str] = None
    route_url: Optional[str] = None
    route_color: Optional[RgbColor] = None
    route_text_color: Optional[RgbColor] = None
    route_sort_order: Optional[NonNegativeInt] = None
    continuous_pickup: Optional[ContinuousPickupDropoffField] = None
    continuous_drop_off: Optional[ContinuousPickupDropoffField] = None


class TripRecord(RecordModel):
    """Describes trips which are sequences of two or more stops that occur at specific time."""

    id_field: ClassVar[Optional[str]] = "trip_id"

    route_id: RouteID
    service_id: ServiceID
    trip_id: TripID

    # Optional
    trip_headsign: Optional[str] = None
    trip_short_name: Optional[str] = None
    direction_id: Optional[DirectionIDField] = None
    block_id: Optional[str] = None
    shape_id: Optional[ShapeID] = None
    wheelchair_accessible: Optional[WheelchairAccessibleField] = None
    bikes_allowed: Optional[BikesAllowedField] = None


class StopTimeRecord(RecordModel):
    """Times that a vehicle arrives at and departs from stops for each trip.

    Times are seconds since midnight of the service day and can exceed 24 hours.
    """

    trip_id: TripID
    stop_id: StopID
    stop_sequence: NonNegativeInt

    # Optional
    arrival_time: Optional[ServiceTime] = None
    departure_time: Optional[ServiceTime] = None
    stop_headsign: Optional[str] = None
    pickup_type: Optional[PickupDropoffTypeField] = None
    drop_off_type: Optional[PickupDropoffTypeField] = None
    continuous_pickup: Optional[ContinuousPickupDropoffField] = None
    continuous_drop_off: Optional[ContinuousPickupDropoffField] = None
    shape_dist_traveled: Optional[NonNegativeFloat] = None
    timepoint: Optional[TimepointTypeField] = None


class CalendarRecord(RecordModel):
    """Service dates specified using a weekly schedule with start and end dates."""

    id_field: ClassVar[Optional[str]] = "service_id"

    service_id: ServiceID
    monday: Flag
    tuesday: Flag
    wednesday: Flag
    thursday: Flag
    friday: Flag
    saturday: Flag
    sunday: Flag
    start_date: GtfsDate
    end_date: GtfsDate


class CalendarDateRecord(RecordModel):
    """Exceptions for the services defined in calendar.txt."""

    service_id: ServiceID
    date: GtfsDate
    exception_type: ExceptionTypeField


class FareAttributeRecord(RecordModel):
    """Fare information for a transit agency's routes.

    An absent `transfers` means unlimited transfers are permitted.
    """

    id_field: ClassVar[Optional[str]] = "fare_id"

    fare_id: FareID
    price: NonNegativeFloat
    currency_type: str
    payment_method: PaymentMethodField

    # Optional
    transfers: Optional[TransfersField] = None
    agency_id: Optional[AgencyID] = None
    transfer_duration: Optional[NonNegativeInt] = None


class FareRuleRecord(RecordModel):
    """Rules to apply fares for itineraries."""

    fare_id: FareID

    # Optional
    route_id: Optional[RouteID] = None
    origin_id: Optional[ZoneID] = None
    destination_id: Optional[ZoneID] = None
    contains_id: Optional[ZoneID] = None


class ShapeRecord(RecordModel):
    """Represents a point on a path (shape) that a transit vehicle takes."""

    shape_id: ShapeID
    shape_pt_lat: Latitude
    shape_pt_lon: Longitude
    shape_pt_sequence: NonNegativeInt

    # Optional
    shape_dist_traveled: Optional[NonNegativeFloat] = None


class FrequencyRecord(RecordModel):
    """Represents headway (time between trips) for routes with variable frequency."""

    trip_id: TripID
    start_time: ServiceTime
    end_time: ServiceTime
    headway_secs: PositiveInt

    # Optional
    exact_times: Optional[ExactTimesField] = None


class TransferRecord(RecordModel):
    """Rules for making connections at transfer points between routes."""

    transfer_type: TransferTypeField

    # Optional
    from_stop_id: Optional[StopID] = None
    to_stop_id: Optional[StopID] = None
    from_route_id: Optional[RouteID] = None
    to_route_id: Optional[RouteID] = None
    from_trip_id: Optional[TripID] = None
    to_trip_id: Optional[TripID] = None
    min_transfer_time: Optional[NonNegativeInt] = None


class PathwayRecord(RecordModel):
    """Pathway linking together locations within stations."""

    id_field: ClassVar[Optional[str]] = "pathway_id"

    pathway_id: PathwayID
    from_stop_id: StopID
    to_stop_id: StopID
    pathway_mode: PathwayModeField
    is_bidirectional: Flag

    # Optional
    length: Optional[NonNegativeFloat] = None
    traversal_time: Optional[PositiveInt] = None
    stair_count: Optional[GtfsInt] = None
    max_slope: Optional[GtfsFloat] = None
    min_width: Optional[NonNegativeFloat] = None
    signposted_as: Optional[str] = None
    reversed_signposted_as: Optional[str] = None


class LevelRecord(RecordModel):
    """Level within a station."""

    id_field: ClassVar[Optional[str]] = "level_id"

    level_id: LevelID
    level_index: GtfsFloat

    # Optional
    level_name: Optional[str] = None


class FeedInfoRecord(RecordModel):
    """Dataset metadata, including publisher, version, and expiration information."""

    feed_publisher_name: str
    feed_publisher_url: str
    feed_lang: str

    # Optional
    default_lang: Optional[str] = None
    feed_start_date: Optional[GtfsDate] = None
    feed_end_date: Optional[GtfsDate] = None
    feed_version: Optional[str] = None
    feed_contact_email: Optional[str] = None
    feed_contact_url: Optional[str] = None


class AttributionRecord(RecordModel):
    """Organizations involved in the production of the dataset."""

    id_field: ClassVar[Optional[str]] = "attribution_id"

    organization_name: str

    # Optional
    attribution_id: Optional[str] = None
    agency_id: Optional[AgencyID] = None
    route_id: Optional[RouteID] = None
    trip_id: Optional[TripID] = None
    is_producer: Optional[Flag] = None
    is_operator: Optional[Flag] = None
    is_authority: Optional[Flag] = None
    attribution_url: Optional[str] = None
    attribution_email: Optional[str] = None
    attribution_phone: Optional[str] = None
