"""Registry of the GTFS files the reader knows, with the record model each file decodes into.

The registry is built once at import and never changes. `translations.txt` is not part of it.

!!! example "Looking up a file"

    ```python
    from gtfs_reader.feed.schema import lookup

    entry = lookup("stops")
    entry.requirement
    >> FileRequirement.REQUIRED
    [c.name for c in entry.columns if c.required]
    >> ['stop_id']
    ```
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Optional

from pydantic import BaseModel

from ..models._base.records import RecordModel
from ..models.gtfs.records import (
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
from ..models.gtfs.types import DecoderKind
from ..params import GTFS_FILE_SUFFIX
from ..utils.models import annotation_metadata, base_annotation, model_columns
from ..utils.utils import normalize_filename, table_name


class FileRequirement(str, Enum):
    """Whether a file must be present in a feed."""

    REQUIRED = "required"
    CONDITIONALLY_REQUIRED = "conditionally_required"
    OPTIONAL = "optional"


REQUIREMENT_ORDER = [
    FileRequirement.REQUIRED,
    FileRequirement.CONDITIONALLY_REQUIRED,
    FileRequirement.OPTIONAL,
]


@dataclass(frozen=True)
class ConditionalRequirement:
    """A group of files of which at least one must be present."""

    group: tuple[str, ...]
    description: str


@dataclass(frozen=True)
class ColumnSpec:
    """A column of a file: its name, whether a row needs it, and the kind of value it holds."""

    name: str
    required: bool
    kind: str


def column_kind(field) -> str:
    """Kind of value a pydantic field decodes, e.g. `date` or `enum:RouteType`."""
    for m in annotation_metadata(field):
        if isinstance(m, DecoderKind):
            return m.name
    annotation = base_annotation(field)
    if annotation is str:
        return "text"
    return getattr(annotation, "__name__", str(annotation))


def column_specs(model: type[BaseModel]) -> tuple[ColumnSpec, ...]:
    """Columns read by a pydantic model, in declaration order."""
    return tuple(
        ColumnSpec(name, field.is_required(), column_kind(field))
        for name, field in model_columns(model).items()
    )


@dataclass(frozen=True)
class SchemaEntry:
    """Static description of one GTFS file.

    Attributes:
        filename: name of the file, e.g. `stops.txt`.
        record_model: record model each row of the file is decoded into.
        requirement: whether the file must be present in a feed.
        condition: group the file belongs to when it is conditionally required.
    """

    filename: str
    record_model: type[RecordModel]
    requirement: FileRequirement
    condition: Optional[ConditionalRequirement] = None

    @property
    def table_name(self) -> str:
        """Name of the file without its suffix, e.g. `stops`."""
        return table_name(self.filename, GTFS_FILE_SUFFIX)

    @property
    def id_field(self) -> Optional[str]:
        """Identifier column of the file, None if it has none."""
        return self.record_model.id_field

    @property
    def columns(self) -> tuple[ColumnSpec, ...]:
        """Columns of the file, in declaration order."""
        return column_specs(self.record_model)

    @property
    def required_columns(self) -> list[str]:
        """Names of the columns every row must carry."""
        return [c.name for c in self.columns if c.required]


CALENDAR_GROUP = ConditionalRequirement(
    ("calendar.txt", "calendar_dates.txt"),
    "Service dates must be defined by calendar.txt, calendar_dates.txt or both.",
)

_REQ = FileRequirement.REQUIRED
_COND = FileRequirement.CONDITIONALLY_REQUIRED
_OPT = FileRequirement.OPTIONAL

_ENTRIES = [
    SchemaEntry("agency.txt", AgencyRecord, _REQ),
    SchemaEntry("stops.txt", StopRecord, _REQ),
    SchemaEntry("routes.txt", RouteRecord, _REQ),
    SchemaEntry("trips.txt", TripRecord, _REQ),
    SchemaEntry("stop_times.txt", StopTimeRecord, _REQ),
    SchemaEntry("calendar.txt", CalendarRecord, _COND, CALENDAR_GROUP),
    SchemaEntry("calendar_dates.txt", CalendarDateRecord, _COND, CALENDAR_GROUP),
    SchemaEntry("fare_attributes.txt", FareAttributeRecord, _OPT),
    SchemaEntry("fare_rules.txt", FareRuleRecord, _OPT),
    SchemaEntry("shapes.txt", ShapeRecord, _OPT),
    SchemaEntry("frequencies.txt", FrequencyRecord, _OPT),
    SchemaEntry("transfers.txt", TransferRecord, _OPT),
    SchemaEntry("pathways.txt", PathwayRecord, _OPT),
    SchemaEntry("levels.txt", LevelRecord, _OPT),
    SchemaEntry("feed_info.txt", FeedInfoRecord, _OPT),
    SchemaEntry("attributions.txt", AttributionRecord, _OPT),
]

SCHEMA_REGISTRY: MappingProxyType = MappingProxyType({e.filename: e for e in _ENTRIES})
"""Every known GTFS file by file name, in registry order."""


def lookup(filename: str) -> Optional[SchemaEntry]:
    """Schema entry of `filename` (`stops.txt` or `stops`), None if the file is not known."""
    return SCHEMA_REGISTRY.get(normalize_filename(filename, GTFS_FILE_SUFFIX))


def entries_in_processing_order() -> list[SchemaEntry]:
    """Registry entries ordered required, then conditionally required, then optional."""
    return sorted(SCHEMA_REGISTRY.values(), key=lambda e: REQUIREMENT_ORDER.index(e.requirement))


def table_names_with_field(field: str) -> list[str]:
    """Names of the tables whose records have a field named `field`."""
    return [e.table_name for e in SCHEMA_REGISTRY.values() if field in e.record_model.model_fields]
