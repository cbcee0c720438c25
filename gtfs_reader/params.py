"""Parameters for the GTFS reader which should not be changed by the user.

Parameters that are here are used throughout the codebase and are stated here for easy reference.
Additional parameters that are more narrowly scoped are defined in the appropriate modules.
"""

GTFS_FILE_SUFFIX: str = ".txt"

SMALL_RECS: int = 5
"""Number of records to display in an error summary."""

LATITUDE_RANGE: tuple[float, float] = (-90.0, 90.0)

LONGITUDE_RANGE: tuple[float, float] = (-180.0, 180.0)

SECONDS_PER_HOUR: int = 3600

SECONDS_PER_MINUTE: int = 60
