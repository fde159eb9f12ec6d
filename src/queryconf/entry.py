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

"""Immutable, typed configuration entry descriptors."""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from .converters import ByteUnit, TimeUnit, ValueKind
from .exceptions import IllegalConfigValueError

if TYPE_CHECKING:
    from .store import SessionConf

T = TypeVar("T")

# Shown as the default of entries that have no fixed default
UNDEFINED = "<undefined>"


class DefaultPolicy(str, Enum):
    """How an entry resolves a read when no value has been set.

    Attributes:
        FIXED: A concrete default baked in at declaration time
        OPTIONAL: No default; the caller supplies a fallback at read time
        COMPUTED: A function of the session evaluated on every read
        REQUIRED: No default of any kind; an unset read is an error
    """

    FIXED = "fixed"
    OPTIONAL = "optional"
    COMPUTED = "computed"
    REQUIRED = "required"


@dataclass(frozen=True, eq=False)
class ConfigEntry(Generic[T]):
    """Specification of a single configuration key.

    Entries are created through :class:`~queryconf.builder.ConfigBuilder`
    and never change afterwards. Equality is identity: a session only
    accepts the exact instance its registry holds for the key.

    Attributes:
        key: Unique, dot-separated name
        kind: Value kind used to parse and format raw strings
        doc: Human readable documentation
        is_public: False for internal entries hidden from listings
        unit: Unit for byte size and duration kinds
        transform: Normalization applied to the raw string before anything else
        allowed_values: Accepted transformed strings, or None for no restriction
        checks: ``(predicate, message)`` pairs applied to the parsed value
        policy: Default resolution policy
        default: Fixed default value when ``policy`` is FIXED
        default_function: Read-time default when ``policy`` is COMPUTED
    """

    key: str
    kind: ValueKind
    doc: str = ""
    is_public: bool = True
    unit: ByteUnit | TimeUnit | None = None
    transform: Callable[[str], str] | None = None
    allowed_values: frozenset[str] | None = None
    checks: tuple[tuple[Callable[[Any], bool], str], ...] = ()
    policy: DefaultPolicy = DefaultPolicy.OPTIONAL
    default: T | None = None
    default_function: "Callable[[SessionConf], T] | None" = None

    def value_converter(self, text: str) -> T:
        """Convert and validate a raw string for this entry.

        Raises:
            InvalidFormatError: If the transformed string cannot be parsed
            IllegalConfigValueError: If the value is not allowed
        """
        normalized = self.transform(text) if self.transform else text
        if self.allowed_values is not None and normalized not in self.allowed_values:
            allowed = ", ".join(sorted(self.allowed_values))
            raise IllegalConfigValueError(
                self.key, text, f"should be one of {allowed}"
            )

        value: T = self.kind.parse(normalized, self.key, self.unit)
        for predicate, message in self.checks:
            if not predicate(value):
                raise IllegalConfigValueError(self.key, value, message)
        return value

    def string_converter(self, value: T) -> str:
        return self.kind.format(value, self.key, self.unit)

    @property
    def has_default(self) -> bool:
        return self.policy is DefaultPolicy.FIXED

    @property
    def default_value_string(self) -> str:
        """The fixed default as a string, or the undefined marker."""
        if self.policy is DefaultPolicy.FIXED:
            return self.string_converter(self.default)
        return UNDEFINED

    def __repr__(self) -> str:
        return (
            f"ConfigEntry(key={self.key}, defaultValue={self.default_value_string}, "
            f"doc={self.doc}, public={str(self.is_public).lower()})"
        )
