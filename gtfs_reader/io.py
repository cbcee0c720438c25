"""Functions for opening GTFS feeds."""

from pathlib import Path
from typing import Optional, Union

import pandas as pd

from .configs import ConfigInputTypes, GtfsReaderConfig, load_reader_config
from .errors import SourceUnavailableError
from .feed.feed import assemble
from .feed.handle import FeedHandle
from .logger import GtfsLogger
from .source import DataFrameSource, DirectorySource, TabularSource, ZipSource

FeedInputTypes = Union[TabularSource, dict[str, pd.DataFrame], str, Path]


def load_source(
    feed: FeedInputTypes, config: Optional[ConfigInputTypes] = None
) -> TabularSource:
    """Create the TabularSource to read a feed from.

    This function takes in a `feed` parameter, which can be one of the following types:
    - `TabularSource`: returned as-is.
    - `dict[str, pd.DataFrame]`: tables keyed by table name (`stops`) or file name (`stops.txt`).
    - `str` or `Path`: path to a directory of GTFS text files or to a zip archive of them.

    Args:
        feed: source, dict of data frames, or path to the feed.
        config: GtfsReaderConfig, config dict, or path(s) to config files. Defaults to the
            default configuration.

    Raises:
        SourceUnavailableError: if the path does not exist or is neither a directory nor a zip.
    """
    config = load_reader_config(config)
    if isinstance(feed, dict):
        return DataFrameSource(feed, config)
    if isinstance(feed, (str, Path)):
        path = Path(feed)
        if path.is_dir():
            return DirectorySource(path, config)
        if path.is_file():
            return ZipSource(path, config)
        msg = f"Feed path does not exist: {path}"
        GtfsLogger.error(msg)
        raise SourceUnavailableError(msg)
    if isinstance(feed, TabularSource):
        return feed
    msg = f"Cannot read a GTFS feed from {type(feed)}."
    raise TypeError(msg)


def open_feed(
    feed: FeedInputTypes, config: Optional[ConfigInputTypes] = None
) -> FeedHandle:
    """Read, decode and assemble a GTFS feed.

    Args:
        feed: source, dict of data frames, or path to a directory or zip archive of the feed.
        config: GtfsReaderConfig, config dict, or path(s) to config files. Defaults to the
            default configuration.

    Returns:
        FeedHandle to query the assembled feed with.

    Raises:
        MissingRequiredFileError: if a required file is not in the feed.
        AmbiguousConditionalRequirementError: if neither calendar.txt nor calendar_dates.txt is in
            the feed.
        SourceUnavailableError: if the feed cannot be read at all.
    """
    config = load_reader_config(config)
    source = load_source(feed, config)
    return FeedHandle(assemble(source, config), source, config)
