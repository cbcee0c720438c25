"""Field types for GTFS data.

Enumerations are `IntEnum`s which keep codes outside of the published values as an `OTHER`
member instead of failing, e.g. `RouteType(1700).is_other` is True and `int(...)` is 1700.

The annotated types bind each GTFS value kind to its decoder so they can be used as fields on any
pydantic model, including models declared by callers for custom extraction:

```python
from typing import Optional

from pydantic import BaseModel
from gtfs_reader.models.gtfs.types import ServiceTime

class TripBrigade(BaseModel):
    trip_id: str
    brigade_id: str
    first_departure: Optional[ServiceTime] = None
```
"""

from dataclasses import dataclass
from datetime import date
from enum import IntEnum
from typing import Annotated

from pydantic import PlainSerializer, PlainValidator

from .decoders import (
    Color,
    decode_color,
    decode_date,
    decode_enum,
    decode_flag,
    decode_float,
    decode_integer,
    decode_latitude,
    decode_longitude,
    decode_non_negative_float,
    decode_non_negative_integer,
    decode_positive_integer,
    decode_service_time,
    encode_color,
    encode_date,
    encode_flag,
)


@dataclass(frozen=True)
class DecoderKind:
    """Names the kind of value a field holds, used when describing a schema."""

    name: str


class GtfsEnum(IntEnum):
    """IntEnum which keeps codes outside of its members as an `OTHER` pseudo-member."""

    @classmethod
    def _missing_(cls, value):
        if not isinstance(value, int) or isinstance(value, bool):
            return None
        pseudo_member = int.__new__(cls, value)
        pseudo_member._name_ = "OTHER"
        pseudo_member._value_ = value
        return pseudo_member

    @property
    def is_other(self) -> bool:
        """True if the code is not one of the published values."""
        return self._name_ == "OTHER"


class BikesAllowed(GtfsEnum):
    """Indicates whether bicycles are allowed."""

    NO_INFORMATION = 0
    ALLOWED = 1
    NOT_ALLOWED = 2


class DirectionID(GtfsEnum):
    """Indicates the direction of travel for a trip."""

    OUTBOUND = 0
    INBOUND = 1


class LocationType(GtfsEnum):
    """Indicates the type of node the stop record represents.

    Full documentation: https://gtfs.org/schedule/reference/#stopstxt
    """

    STOP_PLATFORM = 0
    STATION = 1
    ENTRANCE_EXIT = 2
    GENERIC_NODE = 3
    BOARDING_AREA = 4


class PickupDropoffType(GtfsEnum):
    """Indicates the pickup method for passengers at a stop.

    Full documentation: https://gtfs.org/schedule/reference
    """

    REGULAR = 0
    NONE = 1
    PHONE_AGENCY = 2
    COORDINATE_WITH_DRIVER = 3


class ContinuousPickupDropoff(GtfsEnum):
    """Indicates whether a rider can board or alight anywhere along the vehicle's path."""

    CONTINUOUS = 0
    NONE = 1
    PHONE_AGENCY = 2
    COORDINATE_WITH_DRIVER = 3


class RouteType(GtfsEnum):
    """Indicates the type of transportation used on a route.

    Besides the basic route types, the most common categories of the extended route types are
    members. Any other extended code is kept as `OTHER`; use `basic_type` to fold it back into a
    basic route type.

    Full documentation: https://gtfs.org/schedule/reference
    """

    TRAM = 0
    SUBWAY = 1
    RAIL = 2
    BUS = 3
    FERRY = 4
    CABLE_TRAM = 5
    AERIAL_LIFT = 6
    FUNICULAR = 7
    TROLLEYBUS = 11
    MONORAIL = 12
    COACH = 200
    AIR = 1100
    TAXI = 1500

    @property
    def basic_type(self) -> "RouteType":
        """Basic route type this (possibly extended) route type belongs to."""
        code = int(self)
        if code < 100:
            return self
        return _EXTENDED_ROUTE_TYPE_CATEGORIES.get(code // 100, self)


_EXTENDED_ROUTE_TYPE_CATEGORIES = {
    1: RouteType.RAIL,
    2: RouteType.COACH,
    4: RouteType.SUBWAY,
    7: RouteType.BUS,
    8: RouteType.TROLLEYBUS,
    9: RouteType.TRAM,
    10: RouteType.FERRY,
    11: RouteType.AIR,
    12: RouteType.FERRY,
    13: RouteType.AERIAL_LIFT,
    14: RouteType.FUNICULAR,
    15: RouteType.TAXI,
}


class TimepointType(GtfsEnum):
    """Indicates whether the specified time is exact or approximate.

    Full documentation: https://gtfs.org/schedule/reference
    """

    APPROXIMATE = 0
    EXACT = 1


class WheelchairAccessible(GtfsEnum):
    """Indicates whether the trip or stop is wheelchair accessible.

    Full documentation: https://gtfs.org/schedule/reference
    """

    NO_INFORMATION = 0
    POSSIBLE = 1
    NOT_POSSIBLE = 2


class ExceptionType(GtfsEnum):
    """Whether service is added or removed on a calendar date."""

    ADDED = 1
    REMOVED = 2


class PaymentMethod(GtfsEnum):
    """When the fare must be paid."""

    ON_BOARD = 0
    BEFORE_BOARDING = 1


class Transfers(GtfsEnum):
    """Number of transfers permitted on a fare. An absent value means unlimited."""

    NONE = 0
    ONCE = 1
    TWICE = 2


class ExactTimes(GtfsEnum):
    """Whether a frequency is frequency-based or schedule-based."""

    FREQUENCY_BASED = 0
    SCHEDULE_BASED = 1


class TransferType(GtfsEnum):
    """Type of connection between two stops, routes or trips."""

    RECOMMENDED = 0
    TIMED = 1
    MINIMUM_TIME = 2
    NOT_POSSIBLE = 3
    IN_SEAT = 4
    IN_SEAT_NOT_ALLOWED = 5


class PathwayMode(GtfsEnum):
    """Type of pathway between two locations of a station."""

    WALKWAY = 1
    STAIRS = 2
    MOVING_SIDEWALK = 3
    ESCALATOR = 4
    ELEVATOR = 5
    FARE_GATE = 6
    EXIT_GATE = 7


def enum_field(enum_cls: type[GtfsEnum]):
    """Annotated field type decoding an integer code into `enum_cls`."""
    return Annotated[
        enum_cls,
        PlainValidator(lambda value: decode_enum(enum_cls, value)),
        PlainSerializer(int, return_type=int, when_used="json"),
        DecoderKind(f"enum:{enum_cls.__name__}"),
    ]


GtfsDate = Annotated[
    date,
    PlainValidator(decode_date),
    PlainSerializer(encode_date, return_type=str, when_used="json"),
    DecoderKind("date"),
]

ServiceTime = Annotated[
    int,
    PlainValidator(decode_service_time),
    PlainSerializer(int, return_type=int),
    DecoderKind("service_time"),
]

RgbColor = Annotated[
    Color,
    PlainValidator(decode_color),
    PlainSerializer(encode_color, return_type=str, when_used="json"),
    DecoderKind("color"),
]

Latitude = Annotated[
    float,
    PlainValidator(decode_latitude),
    PlainSerializer(float, return_type=float),
    DecoderKind("latitude"),
]

Longitude = Annotated[
    float,
    PlainValidator(decode_longitude),
    PlainSerializer(float, return_type=float),
    DecoderKind("longitude"),
]

Flag = Annotated[
    bool,
    PlainValidator(decode_flag),
    PlainSerializer(encode_flag, return_type=int, when_used="json"),
    DecoderKind("flag"),
]

GtfsInt = Annotated[
    int,
    PlainValidator(decode_integer),
    PlainSerializer(int, return_type=int),
    DecoderKind("integer"),
]

NonNegativeInt = Annotated[
    int,
    PlainValidator(decode_non_negative_integer),
    PlainSerializer(int, return_type=int),
    DecoderKind("non_negative_integer"),
]

PositiveInt = Annotated[
    int,
    PlainValidator(decode_positive_integer),
    PlainSerializer(int, return_type=int),
    DecoderKind("positive_integer"),
]

GtfsFloat = Annotated[
    float,
    PlainValidator(decode_float),
    PlainSerializer(float, return_type=float),
    DecoderKind("float"),
]

NonNegativeFloat = Annotated[
    float,
    PlainValidator(decode_non_negative_float),
    PlainSerializer(float, return_type=float),
    DecoderKind("non_negative_float"),
]

BikesAllowedField = enum_field(BikesAllowed)
ContinuousPickupDropoffField = enum_field(ContinuousPickupDropoff)
DirectionIDField = enum_field(DirectionID)
ExactTimesField = enum_field(ExactTimes)
ExceptionTypeField = enum_field(ExceptionType)
LocationTypeField = enum_field(LocationType)
PathwayModeField = enum_field(PathwayMode)
PaymentMethodField = enum_field(PaymentMethod)
PickupDropoffTypeField = enum_field(PickupDropoffType)
RouteTypeField = enum_field(RouteType)
TimepointTypeField = enum_field(TimepointType)
TransferTypeField = enum_field(TransferType)
TransfersField = enum_field(Transfers)
WheelchairAccessibleField = enum_field(WheelchairAccessible)

# Identifiers are opaque text.
AgencyID = str
FareID = str
LevelID = str
PathwayID = str
RouteID = str
ServiceID = str
ShapeID = str
StopID = str
TripID = str
ZoneID = str
