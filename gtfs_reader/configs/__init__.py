"""Configuration module for gtfs_reader."""

from pathlib import Path
from typing import Optional, Union

from ..logger import GtfsLogger
from .reader import DefaultConfig, GtfsReaderConfig, ReadConfig, ValidationConfig
from .utils import _config_data_from_files

ConfigInputTypes = Union[dict, Path, list[Path], GtfsReaderConfig]


def load_reader_config(data: Optional[ConfigInputTypes] = None) -> GtfsReaderConfig:
    """Load the GtfsReaderConfig."""
    if isinstance(data, GtfsReaderConfig):
        return data
    if data is None:
        return GtfsReaderConfig()
    if isinstance(data, dict):
        return GtfsReaderConfig(**data)
    if isinstance(data, Path) or (
        isinstance(data, list) and all(isinstance(d, Path) for d in data)
    ):
        file_data = _config_data_from_files(data, config_type=GtfsReaderConfig)
        return load_reader_config(file_data)
    msg = "No valid configuration data found."
    GtfsLogger.error(msg + f"\n   Found: {data}.")
    raise ValueError(msg)


__all__ = [
    "ConfigInputTypes",
    "DefaultConfig",
    "GtfsReaderConfig",
    "ReadConfig",
    "ValidationConfig",
    "load_reader_config",
]
