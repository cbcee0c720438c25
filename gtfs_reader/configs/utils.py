"""Configuration utilities."""

from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from ..logger import GtfsLogger
from ..utils.io_dict import load_dict, load_merge_dict

SUPPORTED_CONFIG_EXTENSIONS = [".yml", ".yaml", ".json", ".toml"]


class ConfigItem:
    """Base class to add partial dict-like interface to configuration.

    Allow use of .items() ["X"] and .get("X") .to_dict() from configuration.

    Not to be constructed directly. To be used a mixin for dataclasses
    representing config schema.
    Do not use "get" "to_dict", or "items" for key names.
    """

    def __getitem__(self, key):
        """Return the value for key if key is in the dictionary, else default."""
        return getattr(self, key)

    def items(self):
        """A set-like object providing a view on D's items."""
        return self.__dict__.items()

    def to_dict(self):
        """Convert the configuration to a dictionary."""
        result = {}
        for key, value in self.__dict__.items():
            if isinstance(value, ConfigItem):
                result[key] = value.to_dict()
            else:
                result[key] = value
        return result

    def get(self, key, default=None):
        """Return the value for key if key is in the dictionary, else default."""
        return self.__dict__.get(key, default)

    def update(self, data: Union[Path, list[Path], dict]):
        """Update the configuration with a dictionary of new values.

        Nested sections are updated in place rather than replaced.
        """
        if not isinstance(data, dict):
            GtfsLogger.info(f"Updating configuration with {data}.")
            data = load_merge_dict(data)

        for key, value in data.items():
            current = self.__dict__.get(key)
            if isinstance(current, ConfigItem) and isinstance(value, dict):
                current.update(value)
            else:
                setattr(self, key, value)
        return self


def find_configs_in_dir(dir: Union[Path, list[Path]], config_type) -> list[Path]:
    """Find configuration files in the directory that match `*config<ext>`."""
    config_files: list[Path] = []
    if isinstance(dir, list):
        for d in dir:
            config_files.extend(find_configs_in_dir(d, config_type))
    elif dir.is_dir():
        dir = Path(dir)
        for ext in SUPPORTED_CONFIG_EXTENSIONS:
            config_like_files = list(dir.glob(f"*config{ext}"))
            config_files.extend(find_configs_in_dir(config_like_files, config_type))
    elif dir.is_file():
        try:
            config_type(**load_dict(dir))
        except ValidationError:
            return config_files
        config_files.append(dir)

    if config_files:
        return [Path(config_file) for config_file in config_files]
    return []


def _config_data_from_files(
    path: Optional[Union[Path, list[Path]]] = None, config_type=None
) -> Union[None, dict]:
    """Load and combine configuration data from file(s).

    Args:
        path: a valid system path to a config file or list of paths.
        config_type: config dataclass used to recognize config files when searching a directory.
    """
    if path is None:
        path = [Path.cwd()]
    elif not isinstance(path, list):
        path = [path]

    if all(p.is_dir() for p in path):
        config_files = find_configs_in_dir(path, config_type)
    elif all(p.is_file() for p in path):
        config_files = path
    else:
        msg = "All paths must be directories or files, not mixed."
        GtfsLogger.error(msg + f"\n   Found: {path}")
        raise ValueError(msg)

    if len(config_files) == 0:
        GtfsLogger.info(f"No configuration files found in {path}. Using default configuration.")
        return None

    data = load_merge_dict(config_files)
    return data
