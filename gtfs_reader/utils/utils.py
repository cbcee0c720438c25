"""General utility functions used throughout package."""

from ..logger import GtfsLogger


class DictionaryMergeError(Exception):
    """Error raised when there is a conflict in merging two dictionaries."""


def merge_dicts(right, left, path=None):
    """Merges the contents of nested dict left into nested dict right.

    Raises errors in case of namespace conflicts.

    Args:
        right: dict, modified in place
        left: dict to be merged into right
        path: default None, sequence of keys to be reported in case of
            error in merging nested dictionaries
    """
    if path is None:
        path = []
    for key in left:
        if key in right:
            if isinstance(right[key], dict) and isinstance(left[key], dict):
                merge_dicts(right[key], left[key], [*path, str(key)])
            else:
                path = ".".join([*path, str(key)])
                msg = f"duplicate keys in source dict files: {path}"
                GtfsLogger.error(msg)
                raise DictionaryMergeError(msg)
        else:
            right[key] = left[key]


def normalize_filename(name: str, suffix: str = ".txt") -> str:
    """Return `name` with the GTFS file suffix, so `stops` and `stops.txt` are the same file."""
    name = str(name).strip()
    if not name.endswith(suffix):
        return f"{name}{suffix}"
    return name


def table_name(filename: str, suffix: str = ".txt") -> str:
    """Return the table name of a GTFS file, e.g. `stops` for `stops.txt`."""
    filename = str(filename).strip()
    if filename.endswith(suffix):
        return filename[: -len(suffix)]
    return filename
