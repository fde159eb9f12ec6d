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

"""Fluent construction of configuration entries.

A declaration reads top to bottom in a fixed order: key, then optional
visibility and documentation, then optional string normalization and
allowed values, then exactly one value kind, then exactly one default
policy::

    PARQUET_COMPRESSION = (
        build_conf("engine.sql.parquet.compression.codec")
        .doc("Compression codec used when writing Parquet files.")
        .transform(str.lower)
        .check_values({"uncompressed", "snappy", "gzip", "lzo"})
        .string_conf()
        .create_with_default("snappy")
    )

Finishing a declaration hands the entry to the ``on_create`` callback,
which :func:`build_conf` wires to the registry.
"""

from collections.abc import Callable, Iterable
import dataclasses
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from .converters import ByteUnit, TimeUnit, ValueKind
from .entry import ConfigEntry, DefaultPolicy
from .exceptions import ConfigValueError, InvalidDefaultError
from .registry import ConfigRegistry
from .registry import registry as global_registry

if TYPE_CHECKING:
    from .store import SessionConf

T = TypeVar("T")


class ConfigBuilder:
    """Collects the untyped parts of an entry declaration."""

    def __init__(self, key: str) -> None:
        self.key = key
        self._doc = ""
        self._public = True
        self._transform: Callable[[str], str] | None = None
        self._allowed_values: frozenset[str] | None = None
        self._on_create: Callable[[ConfigEntry[Any]], None] | None = None

    def internal(self) -> "ConfigBuilder":
        """Hide the entry from public listings."""
        self._public = False
        return self

    def doc(self, text: str) -> "ConfigBuilder":
        self._doc = text
        return self

    def on_create(self, callback: Callable[[ConfigEntry[Any]], None]) -> "ConfigBuilder":
        self._on_create = callback
        return self

    def transform(self, fn: Callable[[str], str]) -> "ConfigBuilder":
        """Normalize raw strings before validation and conversion.

        Calling this more than once composes the functions in call order.
        """
        previous = self._transform
        if previous is None:
            self._transform = fn
        else:
            self._transform = lambda text: fn(previous(text))
        return self

    def check_values(self, allowed: Iterable[str]) -> "ConfigBuilder":
        """Restrict the transformed string to a fixed set of values."""
        self._allowed_values = frozenset(allowed)
        return self

    def boolean_conf(self) -> "TypedConfigBuilder[bool]":
        return TypedConfigBuilder(self, ValueKind.BOOLEAN)

    def int_conf(self) -> "TypedConfigBuilder[int]":
        return TypedConfigBuilder(self, ValueKind.INT)

    def long_conf(self) -> "TypedConfigBuilder[int]":
        return TypedConfigBuilder(self, ValueKind.LONG)

    def double_conf(self) -> "TypedConfigBuilder[float]":
        return TypedConfigBuilder(self, ValueKind.DOUBLE)

    def string_conf(self) -> "TypedConfigBuilder[str]":
        return TypedConfigBuilder(self, ValueKind.STRING)

    def bytes_conf(self, unit: ByteUnit) -> "TypedConfigBuilder[int]":
        return TypedConfigBuilder(self, ValueKind.BYTES, unit)

    def time_conf(self, unit: TimeUnit) -> "TypedConfigBuilder[int]":
        return TypedConfigBuilder(self, ValueKind.TIME, unit)


class TypedConfigBuilder(Generic[T]):
    """Second half of a declaration, once the value kind is known."""

    def __init__(
        self,
        parent: ConfigBuilder,
        kind: ValueKind,
        unit: ByteUnit | TimeUnit | None = None,
    ) -> None:
        self.parent = parent
        self.kind = kind
        self.unit = unit
        self._checks: list[tuple[Callable[[T], bool], str]] = []

    def check_value(self, predicate: Callable[[T], bool], message: str) -> "TypedConfigBuilder[T]":
        """Reject parsed values for which ``predicate`` is false."""
        self._checks.append((predicate, message))
        return self

    def create_with_default(self, value: T) -> ConfigEntry[T]:
        """Finish with a fixed default.

        The default goes through the entry's own converters, so a default
        that could never be set by a user fails here, at declaration time.

        Raises:
            InvalidDefaultError: If ``value`` fails the entry's converters
        """
        entry = self._entry(DefaultPolicy.OPTIONAL)
        try:
            converted = entry.value_converter(entry.string_converter(value))
        except ConfigValueError as e:
            raise InvalidDefaultError(entry.key, value, e) from e
        return self._finish(dataclasses.replace(entry, policy=DefaultPolicy.FIXED, default=converted))

    def create_optional(self) -> ConfigEntry[T]:
        """Finish without a default; readers must pass a fallback."""
        return self._finish(self._entry(DefaultPolicy.OPTIONAL))

    def create_with_computed_default(self, fn: "Callable[[SessionConf], T]") -> ConfigEntry[T]:
        """Finish with a default computed from the session on every read."""
        entry = dataclasses.replace(self._entry(DefaultPolicy.COMPUTED), default_function=fn)
        return self._finish(entry)

    def create_required(self) -> ConfigEntry[T]:
        """Finish with no default at all; reading an unset value fails."""
        return self._finish(self._entry(DefaultPolicy.REQUIRED))

    def _entry(self, policy: DefaultPolicy) -> ConfigEntry[T]:
        parent = self.parent
        return ConfigEntry(
            key=parent.key,
            kind=self.kind,
            doc=parent._doc,
            is_public=parent._public,
            unit=self.unit,
            transform=parent._transform,
            allowed_values=parent._allowed_values,
            checks=tuple(self._checks),
            policy=policy,
        )

    def _finish(self, entry: ConfigEntry[T]) -> ConfigEntry[T]:
        if self.parent._on_create is not None:
            self.parent._on_create(entry)
        return entry


def build_conf(key: str, registry: ConfigRegistry | None = None) -> ConfigBuilder:
    """Start a declaration that registers itself when finished.

    Args:
        key: Entry key
        registry: Registry to add the entry to, the global one by default
    """
    target = global_registry if registry is None else registry
    return ConfigBuilder(key).on_create(target.register)
