"""Assembly of a typed, read-only GTFS Feed from a tabular source."""

from __future__ import annotations

from collections import defaultdict
from types import MappingProxyType
from typing import ClassVar, Optional

from ..configs import DefaultConfig, GtfsReaderConfig
from ..errors import (
    AmbiguousConditionalRequirementError,
    DuplicateIdError,
    MissingRequiredFileError,
    RowError,
)
from ..logger import GtfsLogger
from ..models._base.records import RecordModel
from ..params import GTFS_FILE_SUFFIX
from ..source import TabularSource
from ..utils.utils import table_name
from .decode import decode_row
from .schema import (
    SCHEMA_REGISTRY,
    ConditionalRequirement,
    FileRequirement,
    SchemaEntry,
    entries_in_processing_order,
)


class Feed:
    """A GTFS feed decoded into typed records.

    Records of each file are kept in source order. Records refer to each other by id only; use
    the read-only id lookups to resolve a reference. A Feed cannot be changed once assembled.

    Attributes:
        table_names (list[str]): names of every table a feed can hold, e.g. `stops`.
        row_errors (tuple[RowError]): rows that could not be decoded, in file processing order
            then line order.
        source_name (str): description of the source the feed was read from.
    """

    table_names: ClassVar[list[str]] = [e.table_name for e in SCHEMA_REGISTRY.values()]

    def __init__(
        self,
        tables: dict[str, tuple],
        lookups: dict[str, dict],
        stop_times_by_trip: dict[str, tuple],
        calendar_dates_by_service: dict[str, tuple],
        row_errors: list[RowError],
        source_name: str = "",
    ):
        """Create a Feed. Normally called by `assemble`."""
        _tables = {n: tuple(tables.get(n, ())) for n in self.table_names}
        _lookups = {n: MappingProxyType(d) for n, d in lookups.items()}
        _set = object.__setattr__
        _set(self, "_tables", MappingProxyType(_tables))
        _set(self, "_lookups", MappingProxyType(_lookups))
        _set(self, "_stop_times_by_trip", MappingProxyType(dict(stop_times_by_trip)))
        _set(self, "_calendar_dates_by_service", MappingProxyType(dict(calendar_dates_by_service)))
        _set(self, "row_errors", tuple(row_errors))
        _set(self, "source_name", source_name)

    def __setattr__(self, name, value):
        """A Feed is read-only once assembled."""
        msg = f"Feed is read-only, cannot set `{name}`."
        raise AttributeError(msg)

    def __delattr__(self, name):
        """A Feed is read-only once assembled."""
        msg = f"Feed is read-only, cannot delete `{name}`."
        raise AttributeError(msg)

    def __getattr__(self, name):
        """Access tables as attributes, e.g. `feed.stops`."""
        tables = self.__dict__.get("_tables", {})
        if name in tables:
            return tables[name]
        msg = f"'Feed' object has no attribute '{name}'"
        raise AttributeError(msg)

    def __repr__(self):
        counts = ", ".join(f"{n}={len(t)}" for n, t in self._tables.items() if t)
        return f"Feed({self.source_name}: {counts})"

    def get_table(self, table: str) -> tuple:
        """Records of `table` (`stops` or `stops.txt`) in source order."""
        name = table_name(table, GTFS_FILE_SUFFIX)
        if name not in self._tables:
            msg = f"{table} is not a known GTFS table."
            raise ValueError(msg)
        return self._tables[name]

    def get_lookup(self, table: str) -> MappingProxyType:
        """Read-only id lookup of `table`, which must have an identifier column."""
        name = table_name(table, GTFS_FILE_SUFFIX)
        if name not in self._lookups:
            msg = f"{table} has no identifier column to look records up by."
            raise ValueError(msg)
        return self._lookups[name]

    @property
    def stop_times_by_trip(self) -> MappingProxyType:
        """Stop times of each trip_id ordered by stop_sequence."""
        return self._stop_times_by_trip

    @property
    def calendar_dates_by_service(self) -> MappingProxyType:
        """Calendar dates of each service_id in source order."""
        return self._calendar_dates_by_service

    @property
    def counts(self) -> dict[str, int]:
        """Number of records in each table."""
        return {n: len(t) for n, t in self._tables.items()}


def _check_conditional_requirement(
    source: TabularSource, condition: ConditionalRequirement, mode: str
) -> None:
    present = [f for f in condition.group if source.has(f)]
    if not present:
        msg = f"None of {list(condition.group)} found in source. {condition.description}"
        GtfsLogger.error(msg)
        raise AmbiguousConditionalRequirementError(list(condition.group), present, msg)
    if mode == "exactly_one" and len(present) > 1:
        msg = f"Exactly one of {list(condition.group)} is allowed, found {present}."
        GtfsLogger.error(msg)
        raise AmbiguousConditionalRequirementError(list(condition.group), present, msg)


def _log_row_errors(filename: str, errors: list[RowError], max_logged: int) -> None:
    if not errors:
        return
    GtfsLogger.warning(f"{len(errors)} row(s) of {filename} could not be decoded.")
    for e in errors[:max_logged]:
        GtfsLogger.warning(f"  {e}")
    if len(errors) > max_logged:
        GtfsLogger.warning(f"  ...and {len(errors) - max_logged} more.")


def _decode_file(
    source: TabularSource, entry: SchemaEntry, config: GtfsReaderConfig
) -> tuple[list[RecordModel], list[RowError]]:
    """Decode every row of one file, collecting the rows which fail."""
    fail_fast = config.VALIDATION.ROW_ERRORS == "raise"
    check_ids = config.VALIDATION.CHECK_UNIQUE_IDS and entry.id_field is not None
    records: list[RecordModel] = []
    errors: list[RowError] = []
    first_seen: dict[str, int] = {}

    def _fail(error: RowError):
        if fail_fast:
            GtfsLogger.error(f"Failed to decode {error}")
            raise error
        errors.append(error)

    for raw_row in source.rows(entry.filename):
        try:
            record = decode_row(entry.record_model, raw_row, entry.filename)
        except RowError as e:
            _fail(e)
            continue
        records.append(record)

        record_id = record.record_id
        if not check_ids or record_id is None:
            continue
        if record_id in first_seen:
            msg = (
                f"Duplicate {entry.id_field} `{record_id}`, "
                f"first seen on line {first_seen[record_id]}."
            )
            _fail(
                RowError(
                    entry.filename,
                    raw_row.line_number,
                    entry.id_field,
                    DuplicateIdError(record_id, msg),
                )
            )
        else:
            first_seen[record_id] = raw_row.line_number

    return records, errors


def _build_lookup(records: list[RecordModel]) -> dict[str, RecordModel]:
    """Index records by id. The first record with an id wins; records without an id are skipped."""
    lookup: dict[str, RecordModel] = {}
    for record in records:
        record_id = record.record_id
        if record_id is not None and record_id not in lookup:
            lookup[record_id] = record
    return lookup


def _group_by(records, field: str, sort_key: Optional[str] = None) -> dict[str, tuple]:
    groups = defaultdict(list)
    for record in records:
        groups[getattr(record, field)].append(record)
    if sort_key is not None:
        return {k: tuple(sorted(v, key=lambda r: getattr(r, sort_key))) for k, v in groups.items()}
    return {k: tuple(v) for k, v in groups.items()}


def assemble(source: TabularSource, config: GtfsReaderConfig = DefaultConfig) -> Feed:
    """Decode every known file of `source` into a Feed.

    Files are processed required first, then conditionally required, then optional. Rows which
    fail to decode are collected on `Feed.row_errors` unless `VALIDATION.ROW_ERRORS` is `raise`.

    Args:
        source: where the files of the feed are read from.
        config: reader configuration. Defaults to DefaultConfig.

    Raises:
        MissingRequiredFileError: if a required file is not in the source.
        AmbiguousConditionalRequirementError: if no file (or, in `exactly_one` mode, more than
            one file) of a conditionally required group is in the source.
        HeaderMismatchError: if the header of a file cannot be read.
        RowError: for the first failing row when `VALIDATION.ROW_ERRORS` is `raise`.
    """
    GtfsLogger.info(f"Assembling GTFS feed from {source}.")
    tables: dict[str, list] = {}
    row_errors: list[RowError] = []
    checked_conditions: set[ConditionalRequirement] = set()

    for entry in entries_in_processing_order():
        present = source.has(entry.filename)
        if entry.requirement == FileRequirement.REQUIRED and not present:
            GtfsLogger.error(f"Required file {entry.filename} not found in {source}.")
            raise MissingRequiredFileError(entry.filename)
        if entry.condition is not None and entry.condition not in checked_conditions:
            _check_conditional_requirement(
                source, entry.condition, config.VALIDATION.CALENDAR_REQUIREMENT
            )
            checked_conditions.add(entry.condition)
        if not present:
            GtfsLogger.debug(f"{entry.filename} not in source, leaving it empty.")
            tables[entry.table_name] = []
            continue

        GtfsLogger.info(f"Reading {entry.filename}.")
        records, errors = _decode_file(source, entry, config)
        GtfsLogger.debug(f"Decoded {len(records)} records from {entry.filename}.")
        _log_row_errors(entry.filename, errors, config.VALIDATION.MAX_LOGGED_ROW_ERRORS)
        tables[entry.table_name] = records
        row_errors.extend(errors)

    lookups = {
        e.table_name: _build_lookup(tables[e.table_name])
        for e in SCHEMA_REGISTRY.values()
        if e.id_field is not None
    }
    feed = Feed(
        tables=tables,
        lookups=lookups,
        stop_times_by_trip=_group_by(tables["stop_times"], "trip_id", sort_key="stop_sequence"),
        calendar_dates_by_service=_group_by(tables["calendar_dates"], "service_id"),
        row_errors=row_errors,
        source_name=str(source),
    )
    if row_errors:
        GtfsLogger.warning(f"Assembled feed with {len(row_errors)} row error(s).")
    GtfsLogger.info(f"Assembled {feed}.")
    return feed
