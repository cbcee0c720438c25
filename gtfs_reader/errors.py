"""All GTFS reader errors."""

from typing import Optional


class GtfsReaderError(Exception):
    """Base class for every error raised by the GTFS reader."""


class DecodeError(GtfsReaderError, ValueError):
    """Raised when a single cell value cannot be decoded.

    Always local to one row; never fatal to a feed.
    """

    def __init__(self, value=None, msg: Optional[str] = None):
        """Keep the offending raw value around for error reports."""
        self.value = value
        super().__init__(msg or f"Cannot decode value {value!r}.")


class InvalidDateError(DecodeError):
    """Raised when a value is not a valid YYYYMMDD date."""


class InvalidTimeError(DecodeError):
    """Raised when a value is not a valid HH:MM:SS service time."""


class InvalidColorError(DecodeError):
    """Raised when a value is not a six digit hexadecimal color."""


class OutOfRangeError(DecodeError):
    """Raised when a numeric value falls outside of its allowed bounds."""


class NotANumberError(DecodeError):
    """Raised when a value cannot be parsed as a number."""


class InvalidBooleanError(DecodeError):
    """Raised when a flag is anything other than `0` or `1`."""


class AnyOfError(DecodeError):
    """Raised when none of a group of alternative fields is present in a record."""

    def __init__(self, fields: list[str], msg: Optional[str] = None):
        """Keep the group of alternative fields."""
        self.fields = list(fields)
        super().__init__(None, msg or f"At least one of {self.fields} is required.")


class DuplicateIdError(DecodeError):
    """Raised when an identifier appears more than once within a file."""


class MissingFieldError(GtfsReaderError):
    """Raised when a required field is missing from a row or from a file header."""

    def __init__(self, column: str, msg: Optional[str] = None):
        """Keep the name of the missing column."""
        self.column = column
        super().__init__(msg or f"Missing required field `{column}`.")


class RowError(GtfsReaderError):
    """A row that could not be decoded, with enough context to find it in the source.

    Attributes:
        filename: name of the file the row belongs to.
        line_number: 1-based line of the row, the header being line 1.
        column: column that failed, None for record-level failures.
        cause: the underlying DecodeError or MissingFieldError.
    """

    def __init__(
        self,
        filename: str,
        line_number: int,
        column: Optional[str],
        cause: GtfsReaderError,
    ):
        """Create a RowError."""
        self.filename = filename
        self.line_number = line_number
        self.column = column
        self.cause = cause
        super().__init__(f"{filename}:{line_number} [{column}] {cause}")

    def __eq__(self, other):
        """Row errors are equal when they point at the same cell for the same reason."""
        if not isinstance(other, RowError):
            return NotImplemented
        return (
            self.filename == other.filename
            and self.line_number == other.line_number
            and self.column == other.column
            and type(self.cause) is type(other.cause)
            and str(self.cause) == str(other.cause)
        )

    def __hash__(self):
        """Hash on the same fields as equality."""
        return hash((self.filename, self.line_number, self.column, str(self.cause)))


class FeedError(GtfsReaderError):
    """Base error for failures that abort the assembly of a whole feed."""


class MissingRequiredFileError(FeedError):
    """Raised when a file required by the GTFS reference is absent from the source."""

    def __init__(self, filename: str):
        """Keep the name of the missing file."""
        self.filename = filename
        super().__init__(f"Required GTFS file `{filename}` not found in source.")


class AmbiguousConditionalRequirementError(FeedError):
    """Raised when a conditionally required group of files is not satisfied.

    E.g. neither `calendar.txt` nor `calendar_dates.txt` is present.
    """

    def __init__(self, filenames: list[str], present: list[str], condition: str):
        """Keep the group, which members were found and the condition that failed."""
        self.filenames = list(filenames)
        self.present = list(present)
        self.condition = condition
        super().__init__(
            f"Conditional requirement not met for {self.filenames} "
            f"(present: {self.present}): {condition}"
        )


class SourceUnavailableError(FeedError):
    """Raised when the tabular source itself cannot be read."""


class ExtractionError(GtfsReaderError):
    """Base error for failures of custom extraction."""


class FeedFileNotFoundError(ExtractionError):
    """Raised when a requested file is not in the source."""

    def __init__(self, filename: str):
        """Keep the name of the missing file."""
        self.filename = filename
        super().__init__(f"File `{filename}` not found in source.")


class ExtractionMissingFieldError(ExtractionError, MissingFieldError):
    """Raised when a file header lacks fields the requested record type requires."""

    def __init__(self, filename: str, columns: list[str]):
        """Keep the file and every missing column."""
        self.filename = filename
        self.columns = list(columns)
        MissingFieldError.__init__(
            self,
            self.columns[0],
            f"`{filename}` is missing required field(s): {', '.join(self.columns)}.",
        )


class HeaderMismatchError(ExtractionError, FeedError):
    """Raised when the header row of a file is empty or cannot be read."""

    def __init__(self, filename: str, reason: str = ""):
        """Keep the file and the reason the header could not be read."""
        self.filename = filename
        super().__init__(f"Cannot read header of `{filename}`. {reason}".strip())


class TableValidationError(GtfsReaderError):
    """Raised when an exported table fails validation against its data model."""
