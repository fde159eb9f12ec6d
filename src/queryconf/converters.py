# MIT License
#
# Copyright (c) 2025 Democratize Technology
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""String <-> value converters for configuration entries.

Every entry stores its value as a string and converts it on read. This
module holds the closed set of value kinds an entry can declare, each
with a ``parse`` (string to value) and ``format`` (value to string) pair.
Byte sizes and durations also accept a unit suffix, with bare numbers
read in the entry's own unit.

Example:
    >>> ValueKind.BYTES.parse("64m", "engine.sql.size", ByteUnit.BYTE)
    67108864
    >>> ValueKind.TIME.format(60000, "engine.sql.delay", TimeUnit.MILLISECONDS)
    '60000ms'
"""

from enum import Enum
import math
import re
from typing import Any

from .exceptions import InvalidFormatError

INT_MIN, INT_MAX = -(2**31), 2**31 - 1
LONG_MIN, LONG_MAX = -(2**63), 2**63 - 1

_INTEGER_RE = re.compile(r"^[+-]?[0-9]+$")
_DOUBLE_RE = re.compile(
    r"^[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:e[+-]?[0-9]+)?|nan|inf|infinity)$",
    re.IGNORECASE,
)
_BYTES_RE = re.compile(r"^([0-9]+)([a-z]+)?$")
_FRACTION_RE = re.compile(r"^([0-9]+\.[0-9]+)([a-z]+)?$")
_TIME_RE = re.compile(r"^(-?[0-9]+)([a-z]+)?$")


class ByteUnit(Enum):
    """Binary byte units, with the suffix used when formatting."""

    BYTE = (1, "b")
    KiB = (1024, "k")
    MiB = (1024**2, "m")
    GiB = (1024**3, "g")
    TiB = (1024**4, "t")
    PiB = (1024**5, "p")

    def __init__(self, multiplier: int, suffix: str) -> None:
        self.multiplier = multiplier
        self.suffix = suffix


_BYTE_SUFFIXES = {
    "b": ByteUnit.BYTE,
    "k": ByteUnit.KiB,
    "kb": ByteUnit.KiB,
    "m": ByteUnit.MiB,
    "mb": ByteUnit.MiB,
    "g": ByteUnit.GiB,
    "gb": ByteUnit.GiB,
    "t": ByteUnit.TiB,
    "tb": ByteUnit.TiB,
    "p": ByteUnit.PiB,
    "pb": ByteUnit.PiB,
}


class TimeUnit(Enum):
    """Time units measured in microseconds, with their format suffix."""

    MICROSECONDS = (1, "us")
    MILLISECONDS = (1000, "ms")
    SECONDS = (1000**2, "s")
    MINUTES = (60 * 1000**2, "min")
    HOURS = (3600 * 1000**2, "h")
    DAYS = (86400 * 1000**2, "d")

    def __init__(self, micros: int, suffix: str) -> None:
        self.micros = micros
        self.suffix = suffix


_TIME_SUFFIXES = {
    "us": TimeUnit.MICROSECONDS,
    "ms": TimeUnit.MILLISECONDS,
    "s": TimeUnit.SECONDS,
    "m": TimeUnit.MINUTES,
    "min": TimeUnit.MINUTES,
    "h": TimeUnit.HOURS,
    "d": TimeUnit.DAYS,
}


def _truncate(numerator: int, denominator: int) -> int:
    # Round toward zero, matching integer unit conversion semantics
    quotient = abs(numerator) // denominator
    return -quotient if numerator < 0 else quotient


def parse_boolean(text: str, key: str) -> bool:
    lowered = text.strip().lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    raise InvalidFormatError(key, text, "boolean")


def parse_integer(text: str, key: str, lower: int = INT_MIN, upper: int = INT_MAX) -> int:
    """Parse a decimal integer literal and enforce a signed range.

    Args:
        text: Raw string value
        key: Entry key, used in error messages
        lower: Smallest accepted value
        upper: Largest accepted value

    Returns:
        The parsed integer

    Raises:
        InvalidFormatError: If the literal is not a plain decimal integer
            or falls outside ``[lower, upper]``
    """
    stripped = text.strip()
    expected = "int" if upper == INT_MAX else "long"
    if not _INTEGER_RE.match(stripped):
        raise InvalidFormatError(key, text, expected)
    value = int(stripped)
    if not lower <= value <= upper:
        raise InvalidFormatError(key, text, expected)
    return value


def parse_double(text: str, key: str) -> float:
    stripped = text.strip()
    if not _DOUBLE_RE.match(stripped):
        raise InvalidFormatError(key, text, "double")
    value = float(stripped)
    if math.isinf(value) and stripped.lstrip("+-").lower() not in ("inf", "infinity"):
        raise InvalidFormatError(key, text, "a double within range")
    return value


def parse_bytes(text: str, key: str, unit: ByteUnit) -> int:
    """Parse a byte size such as ``"64m"`` into a count of ``unit``.

    Bare numbers are read in ``unit``. Suffixed values are converted down
    (or up, truncating) to ``unit``.
    """
    lowered = text.strip().lower()
    match = _BYTES_RE.match(lowered)
    if match is None:
        if _FRACTION_RE.match(lowered):
            raise InvalidFormatError(key, text, "a whole byte size (fractions are not supported)")
        raise InvalidFormatError(key, text, "a byte size such as 50b, 100k or 250m")

    number, suffix = match.groups()
    if suffix is None:
        source = unit
    elif suffix in _BYTE_SUFFIXES:
        source = _BYTE_SUFFIXES[suffix]
    else:
        raise InvalidFormatError(key, text, f"a byte size with a known suffix, not {suffix!r}")

    value = int(number) * source.multiplier // unit.multiplier
    if value > LONG_MAX:
        raise InvalidFormatError(key, text, "a byte size that fits in a long")
    return value


def parse_time(text: str, key: str, unit: TimeUnit) -> int:
    """Parse a duration such as ``"10s"`` into a count of ``unit``."""
    lowered = text.strip().lower()
    match = _TIME_RE.match(lowered)
    if match is None:
        raise InvalidFormatError(key, text, "a duration such as 50ms, 10s or 5min")

    number, suffix = match.groups()
    if suffix is None:
        source = unit
    elif suffix in _TIME_SUFFIXES:
        source = _TIME_SUFFIXES[suffix]
    else:
        raise InvalidFormatError(key, text, f"a duration with a known suffix, not {suffix!r}")

    value = _truncate(int(number) * source.micros, unit.micros)
    if not LONG_MIN <= value <= LONG_MAX:
        raise InvalidFormatError(key, text, "a duration that fits in a long")
    return value


def _require_type(value: Any, key: str, expected: str, *types: type) -> None:
    # bool is an int subclass but never a valid numeric setting
    if isinstance(value, bool) and bool not in types:
        raise InvalidFormatError(key, value, expected)
    if not isinstance(value, types):
        raise InvalidFormatError(key, value, expected)


def format_double(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    return repr(float(value))


class ValueKind(Enum):
    """The closed set of value kinds a configuration entry may hold.

    Attributes:
        BOOLEAN: ``true``/``false``, case-insensitive
        INT: 32-bit signed integer
        LONG: 64-bit signed integer
        DOUBLE: Floating point number
        STRING: Any string, stored verbatim
        BYTES: Byte size with optional unit suffix
        TIME: Duration with optional unit suffix
    """

    BOOLEAN = "boolean"
    INT = "int"
    LONG = "long"
    DOUBLE = "double"
    STRING = "string"
    BYTES = "bytes"
    TIME = "time"

    def parse(self, text: str, key: str, unit: ByteUnit | TimeUnit | None = None) -> Any:
        """Convert a raw string to this kind's value.

        Raises:
            InvalidFormatError: If ``text`` is not a valid literal of this kind
        """
        if not isinstance(text, str):
            raise InvalidFormatError(key, text, "a string")
        match self:
            case ValueKind.BOOLEAN:
                return parse_boolean(text, key)
            case ValueKind.INT:
                return parse_integer(text, key)
            case ValueKind.LONG:
                return parse_integer(text, key, LONG_MIN, LONG_MAX)
            case ValueKind.DOUBLE:
                return parse_double(text, key)
            case ValueKind.STRING:
                return text
            case ValueKind.BYTES:
                return parse_bytes(text, key, unit or ByteUnit.BYTE)
            case ValueKind.TIME:
                return parse_time(text, key, unit or TimeUnit.MILLISECONDS)

    def format(self, value: Any, key: str, unit: ByteUnit | TimeUnit | None = None) -> str:
        """Convert a value of this kind back to its string form.

        The result always parses back to ``value``.

        Raises:
            InvalidFormatError: If ``value`` is not of this kind's Python type
        """
        match self:
            case ValueKind.BOOLEAN:
                _require_type(value, key, "boolean", bool)
                return "true" if value else "false"
            case ValueKind.INT | ValueKind.LONG:
                _require_type(value, key, self.value, int)
                return str(value)
            case ValueKind.DOUBLE:
                _require_type(value, key, "double", int, float)
                try:
                    return format_double(float(value))
                except OverflowError:
                    raise InvalidFormatError(key, value, "a double within range") from None
            case ValueKind.STRING:
                _require_type(value, key, "string", str)
                return value
            case ValueKind.BYTES:
                _require_type(value, key, "byte size", int)
                return f"{value}{(unit or ByteUnit.BYTE).suffix}"
            case ValueKind.TIME:
                _require_type(value, key, "duration", int)
                return f"{value}{(unit or TimeUnit.MILLISECONDS).suffix}"
        raise AssertionError(f"Unhandled value kind: {self}")
