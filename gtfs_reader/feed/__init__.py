"""Assembly of typed GTFS feeds and extraction of custom records."""

from .custom import CustomRecordSet, extract_custom
from .decode import decode_row
from .feed import Feed, assemble
from .handle import FeedHandle
from .schema import (
    SCHEMA_REGISTRY,
    ColumnSpec,
    ConditionalRequirement,
    FileRequirement,
    SchemaEntry,
    lookup,
)

__all__ = [
    "SCHEMA_REGISTRY",
    "ColumnSpec",
    "ConditionalRequirement",
    "CustomRecordSet",
    "Feed",
    "FeedHandle",
    "FileRequirement",
    "SchemaEntry",
    "assemble",
    "decode_row",
    "extract_custom",
    "lookup",
]
