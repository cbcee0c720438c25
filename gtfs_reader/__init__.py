"""GTFS Reader Package."""

__version__ = "0.1.0"

from .configs import load_reader_config
from .feed.custom import CustomRecordSet, extract_custom
from .feed.feed import Feed, assemble
from .feed.handle import FeedHandle
from .io import load_source, open_feed
from .logger import GtfsLogger, setup_logging
from .source import DataFrameSource, DirectorySource, RawRow, TabularSource, ZipSource

__all__ = [
    "CustomRecordSet",
    "DataFrameSource",
    "DirectorySource",
    "Feed",
    "FeedHandle",
    "GtfsLogger",
    "RawRow",
    "TabularSource",
    "ZipSource",
    "assemble",
    "extract_custom",
    "load_reader_config",
    "load_source",
    "open_feed",
    "setup_logging",
]
