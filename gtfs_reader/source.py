"""Tabular sources: where the text files of a GTFS feed are read from.

A source is anything implementing the `TabularSource` protocol. Three are provided:

- `DirectorySource`: the `.txt` files of a directory.
- `ZipSource`: the members of a zip archive. Members are matched by their base name, so a feed
    zipped together with its parent directory is found as well.
- `DataFrameSource`: a dictionary of pandas DataFrames keyed by table name (`stops`) or file
    name (`stops.txt`).

!!! example "Reading rows from a source"

    ```python
    from gtfs_reader.source import ZipSource

    source = ZipSource("path/to/gtfs.zip")
    for row in source.rows("stops.txt"):
        print(row.line_number, row.values["stop_id"])
    ```
"""

import zipfile
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Optional, Protocol, Union, runtime_checkable

import pandas as pd

from .configs import DefaultConfig, GtfsReaderConfig
from .errors import FeedFileNotFoundError, SourceUnavailableError
from .logger import GtfsLogger
from .params import GTFS_FILE_SUFFIX
from .utils.io_table import iter_df_rows, read_csv_header, read_csv_rows
from .utils.utils import normalize_filename


@dataclass(frozen=True)
class RawRow:
    """One data line of a file: its 1-based line number and its cells by column name.

    The header is line 1 so the first data line is line 2. Empty cells are empty strings.
    """

    line_number: int
    values: dict[str, str] = field(default_factory=dict)

    def get(self, column: str) -> Optional[str]:
        """Raw text of `column`, None if the column is absent or the cell is empty."""
        value = self.values.get(column)
        if value is None or value == "":
            return None
        return value


@runtime_checkable
class TabularSource(Protocol):
    """Interface of anything GTFS text files can be read from."""

    def has(self, filename: str) -> bool:
        """True if the source contains `filename`."""
        ...

    def header(self, filename: str) -> list[str]:
        """Column names of `filename`, in file order."""
        ...

    def rows(self, filename: str) -> Iterator[RawRow]:
        """Lazily iterate over the data rows of `filename`, in file order."""
        ...

    def filenames(self) -> list[str]:
        """Names of all files in the source."""
        ...


class _TextFileSource:
    """Shared behaviour of sources whose files are delimited text."""

    def __init__(self, config: GtfsReaderConfig = DefaultConfig):
        self.config = config

    def _files(self) -> dict:
        raise NotImplementedError

    def _open(self, filename: str):
        raise NotImplementedError

    def has(self, filename: str) -> bool:
        return normalize_filename(filename, GTFS_FILE_SUFFIX) in self._files()

    def filenames(self) -> list[str]:
        return sorted(self._files())

    def _check(self, filename: str) -> str:
        filename = normalize_filename(filename, GTFS_FILE_SUFFIX)
        if filename not in self._files():
            raise FeedFileNotFoundError(filename)
        return filename

    def header(self, filename: str) -> list[str]:
        filename = self._check(filename)
        with self._open(filename) as f:
            return read_csv_header(f, filename, encoding=self.config.READ.ENCODING)

    def rows(self, filename: str) -> Iterator[RawRow]:
        """Iterate over the data rows of `filename`.

        Raises:
            FeedFileNotFoundError: if the source has no such file, as soon as called.
        """
        filename = self._check(filename)
        return self._iter_rows(filename)

    def _iter_rows(self, filename: str) -> Iterator[RawRow]:
        with self._open(filename) as f:
            for line_number, values in read_csv_rows(
                f,
                filename,
                encoding=self.config.READ.ENCODING,
                chunk_size=self.config.READ.CHUNK_SIZE,
                on_bad_lines=self.config.READ.ON_BAD_LINES,
            ):
                yield RawRow(line_number, values)


class DirectorySource(_TextFileSource):
    """GTFS text files in a directory."""

    def __init__(self, path: Union[Path, str], config: GtfsReaderConfig = DefaultConfig):
        """Index the files of directory `path`.

        Raises:
            SourceUnavailableError: if `path` is not a directory.
        """
        super().__init__(config)
        self.path = Path(path)
        if not self.path.is_dir():
            msg = f"GTFS directory {self.path} does not exist."
            GtfsLogger.error(msg)
            raise SourceUnavailableError(msg)
        self._paths = {p.name: p for p in self.path.iterdir() if p.is_file()}
        GtfsLogger.debug(f"Found {len(self._paths)} files in {self.path}.")

    def __repr__(self):
        return f"DirectorySource({self.path})"

    def _files(self) -> dict:
        return self._paths

    def _open(self, filename: str):
        return self._paths[filename].open("rb")


class ZipSource(_TextFileSource):
    """GTFS text files in a zip archive.

    Members are indexed by base name. If the same base name appears more than once, the one
    nearest to the root of the archive is used.
    """

    def __init__(self, path: Union[Path, str], config: GtfsReaderConfig = DefaultConfig):
        """Index the members of the archive at `path`.

        Raises:
            SourceUnavailableError: if the archive is missing or is not a readable zip file.
        """
        super().__init__(config)
        self.path = Path(path)
        try:
            with zipfile.ZipFile(self.path) as zf:
                members = [m for m in zf.infolist() if not m.is_dir()]
        except (zipfile.BadZipFile, OSError) as e:
            msg = f"Cannot open GTFS archive {self.path}: {e}"
            GtfsLogger.error(msg)
            raise SourceUnavailableError(msg) from e

        self._members: dict[str, str] = {}
        for m in sorted(members, key=lambda m: len(PurePosixPath(m.filename).parts)):
            self._members.setdefault(PurePosixPath(m.filename).name, m.filename)
        GtfsLogger.debug(f"Found {len(self._members)} files in {self.path}.")

    def __repr__(self):
        return f"ZipSource({self.path})"

    def _files(self) -> dict:
        return self._members

    def _open(self, filename: str):
        return _ZipMember(self.path, self._members[filename])


class _ZipMember:
    """Context manager keeping an archive open for as long as one of its members is read."""

    def __init__(self, path: Path, member: str):
        self.path = path
        self.member = member
        self._zf: Optional[zipfile.ZipFile] = None

    def __enter__(self):
        try:
            self._zf = zipfile.ZipFile(self.path)
            return self._zf.open(self.member)
        except (zipfile.BadZipFile, OSError) as e:
            self.__exit__(None, None, None)
            msg = f"Cannot read {self.member} from {self.path}: {e}"
            GtfsLogger.error(msg)
            raise SourceUnavailableError(msg) from e

    def __exit__(self, *exc):
        if self._zf is not None:
            self._zf.close()
            self._zf = None
        return False


class DataFrameSource:
    """GTFS tables held in memory as pandas DataFrames.

    Missing values are read as empty cells; every other value is read as its text.
    """

    def __init__(
        self, tables: dict[str, pd.DataFrame], config: GtfsReaderConfig = DefaultConfig
    ):
        """Index `tables` by file name, accepting `stops` or `stops.txt` as keys."""
        self.config = config
        self._tables = {normalize_filename(k, GTFS_FILE_SUFFIX): df for k, df in tables.items()}

    def __repr__(self):
        return f"DataFrameSource({', '.join(self.filenames())})"

    def has(self, filename: str) -> bool:
        return normalize_filename(filename, GTFS_FILE_SUFFIX) in self._tables

    def filenames(self) -> list[str]:
        return sorted(self._tables)

    def _check(self, filename: str) -> str:
        filename = normalize_filename(filename, GTFS_FILE_SUFFIX)
        if filename not in self._tables:
            raise FeedFileNotFoundError(filename)
        return filename

    def header(self, filename: str) -> list[str]:
        filename = self._check(filename)
        return [str(c).strip() for c in self._tables[filename].columns]

    def rows(self, filename: str) -> Iterator[RawRow]:
        filename = self._check(filename)
        return (RawRow(n, values) for n, values in iter_df_rows(self._tables[filename]))
