"""Helper functions for reading GTFS text files into name-indexed rows.

Every cell is read as text: typing is the job of the record decoders, so pandas must not infer
dtypes or turn empty cells into NaN. An empty cell is read as an empty string.

Line numbers count the header as line 1, so the first data record is line 2. Line numbers are
physical lines of the file: lines holding no value are skipped but still counted, and a quoted cell
spanning several lines advances the count by each line it spans.
"""

from collections.abc import Iterator
from pathlib import Path
from typing import IO, Union

import pandas as pd

from ..errors import HeaderMismatchError, SourceUnavailableError
from ..logger import GtfsLogger

FIRST_DATA_LINE = 2

CsvInput = Union[Path, str, IO[bytes]]


def _read_csv_kwargs(encoding: str) -> dict:
    return {
        "dtype": str,
        "keep_default_na": False,
        "na_filter": False,
        "skipinitialspace": True,
        "encoding": encoding,
    }


def _strip_header(columns) -> list[str]:
    return [str(c).strip() for c in columns]


def _lines_spanned(record: dict[str, str]) -> int:
    """Number of physical lines a record was read from, counting line breaks in quoted cells."""
    return 1 + sum(value.count("\n") for value in record.values())


def read_csv_header(file: CsvInput, filename: str, encoding: str = "utf-8-sig") -> list[str]:
    """Read the header row of a GTFS text file.

    Args:
        file: path or binary file handle of the file.
        filename: name of the file, used in error messages.
        encoding: text encoding of the file. `utf-8-sig` drops a UTF-8 byte order mark.

    Raises:
        HeaderMismatchError: if the file is empty or its header row cannot be read.
    """
    try:
        df = pd.read_csv(file, nrows=0, **_read_csv_kwargs(encoding))
    except pd.errors.EmptyDataError as e:
        GtfsLogger.error(f"{filename} is empty, no header row to read.")
        raise HeaderMismatchError(filename, "File is empty.") from e
    except (pd.errors.ParserError, UnicodeDecodeError) as e:
        GtfsLogger.error(f"Could not read header of {filename}: {e}")
        raise HeaderMismatchError(filename, str(e)) from e
    header = _strip_header(df.columns)
    if not any(header):
        raise HeaderMismatchError(filename, "Header row is blank.")
    return header


def read_csv_rows(
    file: CsvInput,
    filename: str,
    encoding: str = "utf-8-sig",
    chunk_size: int = 10000,
    on_bad_lines: str = "warn",
) -> Iterator[tuple[int, dict[str, str]]]:
    """Lazily read the data rows of a GTFS text file, `chunk_size` records at a time.

    Args:
        file: path or binary file handle of the file.
        filename: name of the file, used in error messages.
        encoding: text encoding of the file.
        chunk_size: number of records pandas parses at a time.
        on_bad_lines: what pandas does with lines which have too many fields: `error`, `warn`
            or `skip`.

    Yields:
        tuples of the line number and a mapping of column name to raw text.

    Raises:
        HeaderMismatchError: if the file is empty.
        SourceUnavailableError: if the file cannot be tokenised.
    """
    try:
        reader = pd.read_csv(
            file,
            chunksize=chunk_size,
            on_bad_lines=on_bad_lines,
            skip_blank_lines=False,
            **_read_csv_kwargs(encoding),
        )
    except pd.errors.EmptyDataError as e:
        GtfsLogger.error(f"{filename} is empty, no header row to read.")
        raise HeaderMismatchError(filename, "File is empty.") from e

    line_number = FIRST_DATA_LINE
    try:
        with reader:
            for chunk in reader:
                chunk = chunk.fillna("")
                chunk.columns = _strip_header(chunk.columns)
                for record in chunk.to_dict(orient="records"):
                    if any(record.values()):
                        yield line_number, record
                    line_number += _lines_spanned(record)
    except (pd.errors.ParserError, UnicodeDecodeError) as e:
        msg = f"Could not read {filename} after line {line_number - 1}: {e}"
        GtfsLogger.error(msg)
        raise SourceUnavailableError(msg) from e


def iter_df_rows(df: pd.DataFrame) -> Iterator[tuple[int, dict[str, str]]]:
    """Iterate over the rows of an in-memory table as if read from a text file.

    Missing values become empty cells and every other value is converted to text. Columns are
    first given the narrowest nullable dtype holding their values, so a whole-number column with
    missing values reads `1` rather than `1.0`.
    """
    df = df.convert_dtypes()
    df = df.astype(object).where(df.notna(), "").astype(str)
    df.columns = _strip_header(df.columns)
    for offset, record in enumerate(df.to_dict(orient="records")):
        yield FIRST_DATA_LINE + offset, record
