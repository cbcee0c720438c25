"""Decoding of one name-indexed row into a typed record.

`decode_row` is shared by feed assembly, which decodes into the record models of the schema
registry, and by custom extraction, which decodes into models declared by the caller. Either way
the model's declared columns are matched by name against the row: undeclared columns are
ignored, empty cells are absent values and pydantic runs the value decoders of each field.
"""

from typing import TypeVar

from pydantic import BaseModel, ValidationError

from ..errors import (
    AnyOfError,
    DecodeError,
    GtfsReaderError,
    InvalidBooleanError,
    InvalidDateError,
    MissingFieldError,
    NotANumberError,
    OutOfRangeError,
    RowError,
)
from ..source import RawRow
from ..utils.models import model_columns

ModelT = TypeVar("ModelT", bound=BaseModel)

NUMBER_ERROR_TYPES = {
    "int_parsing",
    "int_type",
    "int_from_float",
    "float_parsing",
    "float_type",
    "finite_number",
    "decimal_parsing",
    "decimal_type",
}
BOOLEAN_ERROR_TYPES = {"bool_parsing", "bool_type"}
RANGE_ERROR_PREFIXES = ("greater_than", "less_than", "multiple_of")
DATE_ERROR_PREFIXES = ("date_", "datetime_")


def row_values(model: type[BaseModel], raw_row: RawRow) -> dict[str, str]:
    """Non-empty cells of `raw_row` for the columns declared by `model`."""
    values = {}
    for column in model_columns(model):
        value = raw_row.get(column)
        if value is not None:
            values[column] = value
    return values


def _cause_from_error(error: dict) -> GtfsReaderError:
    """Translate one pydantic error into the reader's error taxonomy."""
    err_type = error["type"]
    value = error.get("input")
    msg = error.get("msg")
    ctx_error = error.get("ctx", {}).get("error")

    if isinstance(ctx_error, (DecodeError, MissingFieldError)):
        return ctx_error
    if err_type == "missing":
        return MissingFieldError(str(error["loc"][0]) if error["loc"] else "")
    if err_type in NUMBER_ERROR_TYPES:
        return NotANumberError(value, msg)
    if err_type in BOOLEAN_ERROR_TYPES:
        return InvalidBooleanError(value, msg)
    if err_type.startswith(DATE_ERROR_PREFIXES):
        return InvalidDateError(value, msg)
    if err_type.startswith(RANGE_ERROR_PREFIXES):
        return OutOfRangeError(value, msg)
    return DecodeError(value, msg)


def _error_column(error: dict, cause: GtfsReaderError):
    if error["loc"]:
        return str(error["loc"][0])
    if isinstance(cause, AnyOfError):
        return "|".join(cause.fields)
    return None


def decode_row(model: type[ModelT], raw_row: RawRow, filename: str) -> ModelT:
    """Decode a row into a `model` record.

    Args:
        model: pydantic model whose fields name the columns to read.
        raw_row: the row to decode.
        filename: name of the file the row was read from, for error attribution.

    Returns:
        the decoded record; the row is never partially decoded.

    Raises:
        RowError: for the first column, in declaration order, that is missing or cannot be
            decoded.
    """
    try:
        return model.model_validate(row_values(model, raw_row))
    except ValidationError as e:
        error = e.errors()[0]
        cause = _cause_from_error(error)
        raise RowError(filename, raw_row.line_number, _error_column(error, cause), cause) from e
