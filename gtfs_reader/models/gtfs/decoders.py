"""Decoders turning the raw text of a GTFS cell into a typed value.

Each decoder is a pure function taking the raw text of a single cell and returning the decoded
value, or raising a subclass of `DecodeError` describing why the text is malformed.

Decoders also accept values which are already decoded (e.g. a `date` for `decode_date`) so
records can be built directly in Python as well as from text.

!!! example "Decoding a service time"

    ```python
    from gtfs_reader.models.gtfs.decoders import decode_service_time

    decode_service_time("25:30:00")
    >> 91800
    ```
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime
from enum import IntEnum
from typing import NamedTuple, TypeVar, Union

from ...errors import (
    InvalidBooleanError,
    InvalidColorError,
    InvalidDateError,
    InvalidTimeError,
    NotANumberError,
    OutOfRangeError,
)
from ...params import LATITUDE_RANGE, LONGITUDE_RANGE, SECONDS_PER_HOUR, SECONDS_PER_MINUTE

EnumT = TypeVar("EnumT", bound=IntEnum)

DATE_PATTERN = re.compile(r"^[0-9]{8}$")
SERVICE_TIME_PATTERN = re.compile(r"^([0-9]+):([0-5][0-9]):([0-5][0-9])$")
COLOR_PATTERN = re.compile(r"^[0-9A-Fa-f]{6}$")
INTEGER_PATTERN = re.compile(r"^[+-]?[0-9]+$")
FLOAT_PATTERN = re.compile(r"^[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?$")


class Color(NamedTuple):
    """An RGB color as used by route_color and route_text_color."""

    r: int
    g: int
    b: int

    @property
    def hex(self) -> str:
        """Upper case hex representation without a leading `#`, e.g. `FFFFFF`."""
        return f"{self.r:02X}{self.g:02X}{self.b:02X}"


def _text(value) -> str:
    return str(value).strip()


def decode_date(value: Union[str, date]) -> date:
    """Decode a `YYYYMMDD` date.

    Raises:
        InvalidDateError: if the value is not eight digits or is not a real calendar date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = _text(value)
    if not DATE_PATTERN.match(text):
        msg = f"`{text}` is not a date in YYYYMMDD format."
        raise InvalidDateError(value, msg)
    try:
        return datetime.strptime(text, "%Y%m%d").date()
    except ValueError as e:
        msg = f"`{text}` is not a valid calendar date."
        raise InvalidDateError(value, msg) from e


def encode_date(value: date) -> str:
    """Format a date the way GTFS writes it."""
    return value.strftime("%Y%m%d")


def decode_service_time(value: Union[str, int]) -> int:
    """Decode an `HH:MM:SS` service time to seconds since midnight of the service day.

    Hours may exceed 23 for trips running past midnight, so `25:30:00` is 91800 and sorts after
    any time of the same service day. A single digit hour (`5:30:00`) is accepted.

    Raises:
        InvalidTimeError: if the value is not in `H:MM:SS` form.
    """
    if isinstance(value, int) and not isinstance(value, bool):
        if value < 0:
            msg = f"Service time cannot be negative: {value}."
            raise InvalidTimeError(value, msg)
        return value
    text = _text(value)
    match = SERVICE_TIME_PATTERN.match(text)
    if not match:
        msg = f"`{text}` is not a time in HH:MM:SS format."
        raise InvalidTimeError(value, msg)
    hours, minutes, seconds = (int(part) for part in match.groups())
    return hours * SECONDS_PER_HOUR + minutes * SECONDS_PER_MINUTE + seconds


def format_service_time(seconds: int) -> str:
    """Format seconds since the start of the service day as `HH:MM:SS`, hours can exceed 23."""
    hours, remainder = divmod(int(seconds), SECONDS_PER_HOUR)
    minutes, secs = divmod(remainder, SECONDS_PER_MINUTE)
    return f"{hours:02}:{minutes:02}:{secs:02}"


def decode_color(value: Union[str, Color]) -> Color:
    """Decode a six hex digit RGB color, case-insensitive.

    Raises:
        InvalidColorError: if the value is not exactly six hex digits.
    """
    if isinstance(value, Color):
        return value
    text = _text(value)
    if not COLOR_PATTERN.match(text):
        msg = f"`{text}` is not a valid color."
        raise InvalidColorError(value, msg)
    return Color(int(text[0:2], 16), int(text[2:4], 16), int(text[4:6], 16))


def encode_color(value: Color) -> str:
    """Format a Color the way GTFS writes it."""
    return value.hex


def decode_float(value: Union[str, float, int]) -> float:
    """Decode a finite decimal number.

    Raises:
        NotANumberError: if the value cannot be parsed or is NaN/infinite.
    """
    if isinstance(value, bool):
        raise NotANumberError(value)
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = _text(value)
        if not FLOAT_PATTERN.match(text):
            msg = f"`{text}` is not a number."
            raise NotANumberError(value, msg)
        number = float(text)
    if not math.isfinite(number):
        msg = f"`{value}` is not a finite number."
        raise NotANumberError(value, msg)
    return number


def _decode_in_range(value, bounds: tuple[float, float], label: str) -> float:
    number = decode_float(value)
    low, high = bounds
    if not low <= number <= high:
        msg = f"{label} {number} is outside of [{low}, {high}]."
        raise OutOfRangeError(value, msg)
    return number


def decode_latitude(value: Union[str, float]) -> float:
    """Decode a WGS84 latitude in [-90, 90].

    Raises:
        NotANumberError: if the value cannot be parsed.
        OutOfRangeError: if the value is outside of [-90, 90].
    """
    return _decode_in_range(value, LATITUDE_RANGE, "Latitude")


def decode_longitude(value: Union[str, float]) -> float:
    """Decode a WGS84 longitude in [-180, 180].

    Raises:
        NotANumberError: if the value cannot be parsed.
        OutOfRangeError: if the value is outside of [-180, 180].
    """
    return _decode_in_range(value, LONGITUDE_RANGE, "Longitude")


def decode_non_negative_float(value: Union[str, float]) -> float:
    """Decode a decimal number >= 0."""
    number = decode_float(value)
    if number < 0:
        msg = f"{number} cannot be negative."
        raise OutOfRangeError(value, msg)
    return number


def decode_integer(value: Union[str, int]) -> int:
    """Decode an integer.

    Raises:
        NotANumberError: if the value is not an integer.
    """
    if isinstance(value, bool):
        raise NotANumberError(value)
    if isinstance(value, int):
        return value
    text = _text(value)
    if not INTEGER_PATTERN.match(text):
        msg = f"`{text}` is not an integer."
        raise NotANumberError(value, msg)
    return int(text)


def decode_non_negative_integer(value: Union[str, int]) -> int:
    """Decode an integer >= 0."""
    number = decode_integer(value)
    if number < 0:
        msg = f"{number} cannot be negative."
        raise OutOfRangeError(value, msg)
    return number


def decode_positive_integer(value: Union[str, int]) -> int:
    """Decode an integer > 0."""
    number = decode_integer(value)
    if number <= 0:
        msg = f"{number} must be greater than zero."
        raise OutOfRangeError(value, msg)
    return number


def decode_flag(value: Union[str, bool]) -> bool:
    """Decode a `0`/`1` flag.

    Raises:
        InvalidBooleanError: for anything but `0` or `1`.
    """
    if isinstance(value, bool):
        return value
    text = _text(value)
    if text == "1":
        return True
    if text == "0":
        return False
    msg = f"`{text}` is not a valid flag, expected 0 or 1."
    raise InvalidBooleanError(value, msg)


def encode_flag(value: bool) -> int:
    """Format a flag the way GTFS writes it."""
    return 1 if value else 0


def decode_enum(enum_cls: type[EnumT], value: Union[str, int]) -> EnumT:
    """Decode an integer code to a member of `enum_cls`.

    Codes outside of the published enumeration are kept as an `OTHER` member carrying the code
    rather than rejected, since agencies do emit them.

    Raises:
        NotANumberError: if the value is not an integer.
    """
    if isinstance(value, enum_cls):
        return value
    return enum_cls(decode_integer(value))
