"""Configuration for parameters for the GTFS reader.

Users can change a handful of parameters which control how feeds are read and how strictly rows
are checked. These parameters can be saved as a config file which can be read in repeatedly to
make sure the same parameters are used each time.

Usage:
    Specify the config when you open a feed:

    ```python
    open_feed("path/to/gtfs.zip", config=my_config)
    ```

    `my_config` can be a:

    - Path to a config file in yaml/toml/json (recommended),
    - List of paths to config files (in case you want to split up various sub-configurations)
    - Dictionary which is in the same structure of a config file, or
    - A `GtfsReaderConfig()` instance.

If not provided, reasonable defaults are used.

??? Example "Default Configuration Values"

    ```yaml
    READ:
        ENCODING: utf-8-sig
        CHUNK_SIZE: 10000
        ON_BAD_LINES: warn
    VALIDATION:
        ROW_ERRORS: collect
        CALENDAR_REQUIREMENT: at_least_one
        CHECK_UNIQUE_IDS: true
        MAX_LOGGED_ROW_ERRORS: 5
    ```

Extended usage:
    Load a configuration from a file:

    ```python
    from gtfs_reader.configs import load_reader_config

    config = load_reader_config(Path("path/to/config.yaml"))
    ```

    Change values of a loaded configuration. `load_reader_config()` returns a new instance, so
    `DefaultConfig` is left as is. Values are validated when they are set:

    ```python
    config = load_reader_config()
    config.update({"VALIDATION": {"ROW_ERRORS": "raise"}})
    config.READ.CHUNK_SIZE = 5000
    ```
"""

from typing import Literal

from pydantic import ConfigDict, Field
from pydantic.dataclasses import dataclass

from ..params import SMALL_RECS
from .utils import ConfigItem


@dataclass(config=ConfigDict(validate_assignment=True))
class ReadConfig(ConfigItem):
    """How text files are read from a source.

    Attributes:
        ENCODING: text encoding of the files. The default `utf-8-sig` also drops a leading
            UTF-8 byte order mark.
        CHUNK_SIZE: number of rows read into memory at a time.
        ON_BAD_LINES: what to do with lines that have more fields than the header. One of
            `error` (abort reading), `warn` (skip the line with a warning) or `skip`.
    """

    ENCODING: str = "utf-8-sig"
    CHUNK_SIZE: int = Field(10000, gt=0)
    ON_BAD_LINES: Literal["error", "warn", "skip"] = "warn"


@dataclass(config=ConfigDict(validate_assignment=True))
class ValidationConfig(ConfigItem):
    """How strictly rows and files are checked while assembling a feed.

    Attributes:
        ROW_ERRORS: `collect` keeps going and reports every failing row with the feed; `raise`
            stops at the first failing row.
        CALENDAR_REQUIREMENT: `at_least_one` requires calendar.txt or calendar_dates.txt (or
            both); `exactly_one` additionally rejects feeds that have both.
        CHECK_UNIQUE_IDS: report repeated identifiers (stop_id, route_id...) as row errors.
        MAX_LOGGED_ROW_ERRORS: number of row errors per file written to the log in detail.
    """

    ROW_ERRORS: Literal["collect", "raise"] = "collect"
    CALENDAR_REQUIREMENT: Literal["at_least_one", "exactly_one"] = "at_least_one"
    CHECK_UNIQUE_IDS: bool = True
    MAX_LOGGED_ROW_ERRORS: int = Field(SMALL_RECS, ge=0)


@dataclass(config=ConfigDict(validate_assignment=True))
class GtfsReaderConfig(ConfigItem):
    """Configuration for the GTFS reader.

    Attributes:
        READ: Parameters governing how files are read.
        VALIDATION: Parameters governing how rows and files are checked.
    """

    READ: ReadConfig = Field(default_factory=ReadConfig)
    VALIDATION: ValidationConfig = Field(default_factory=ValidationConfig)


DefaultConfig = GtfsReaderConfig()
