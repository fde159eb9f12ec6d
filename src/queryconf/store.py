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

"""Per-session, thread-safe settings store.

A :class:`SessionConf` holds raw string overrides for one engine session.
Values are only ever stored as strings; typing happens on every read by
looking up the key's entry in the shared registry. Keys the registry does
not know are accepted and stored verbatim so sessions can carry settings
for other components.

Example:
    >>> conf = SessionConf()
    >>> conf.set_string("engine.sql.shuffle.partitions", "64")
    >>> conf.get_typed(SHUFFLE_PARTITIONS)
    64
    >>> conf.unset(SHUFFLE_PARTITIONS)
    >>> conf.get_typed(SHUFFLE_PARTITIONS)
    200

Note:
    - All access to the overrides goes through one lock per store;
      configuration is read far more often than it is written
    - Computed defaults are evaluated outside the lock on every read
"""

from collections.abc import Mapping
import logging
import threading
from typing import Any, TypeVar

from .entry import ConfigEntry, DefaultPolicy
from .exceptions import (
    InvalidFormatError,
    KeyNotFoundError,
    NullKeyError,
    NullValueError,
    UnregisteredEntryError,
)
from .registry import ConfigRegistry
from .registry import registry as global_registry
from .schema import StoreOptions
from .validation import ConfValidator

logger = logging.getLogger(__name__)

T = TypeVar("T")

_NO_FALLBACK: Any = object()


class SessionConf:
    """Mutable mapping of raw setting strings, resolved against a registry."""

    def __init__(
        self,
        registry: ConfigRegistry | None = None,
        options: StoreOptions | None = None,
    ) -> None:
        self._registry = global_registry if registry is None else registry
        self._options = StoreOptions() if options is None else options
        self._settings: dict[str, str] = {}
        self._lock = threading.RLock()

    @property
    def registry(self) -> ConfigRegistry:
        return self._registry

    @property
    def options(self) -> StoreOptions:
        return self._options

    def set_conf(self, props: Mapping[str, str], atomic: bool = False) -> None:
        """Set many raw values at once.

        Pairs are applied in iteration order under the store lock. Without
        ``atomic`` the first invalid pair raises and the pairs before it
        stay applied. With ``atomic`` the whole batch is validated first and
        nothing is applied unless every pair is valid.

        Args:
            props: Raw key/value strings
            atomic: Validate the whole batch before applying any of it

        Raises:
            ConfigValidationError: If ``atomic`` and any pair is invalid
            InvalidFormatError: If a value cannot be parsed for its entry
            IllegalConfigValueError: If a value is not allowed for its entry
        """
        if atomic:
            ConfValidator(self._registry, self._options).validate(props)

        with self._lock:
            for key, value in props.items():
                self.set_string(key, value)
        logger.info("Applied %d configuration values", len(props))

    def set_string(self, key: str, value: str) -> None:
        """Set a raw value, validating it when the key is registered.

        Raises:
            NullKeyError: If ``key`` is None
            NullValueError: If ``value`` is None
            InvalidFormatError: If ``value`` is not a string or cannot be parsed
                for the entry
            IllegalConfigValueError: If ``value`` is not allowed for the entry
        """
        if key is None:
            raise NullKeyError()
        if value is None:
            raise NullValueError(key)
        if not isinstance(value, str):
            raise InvalidFormatError(key, value, "a string")

        entry = self._registry.lookup(key)
        if entry is not None:
            entry.value_converter(value)
        self._set_with_check(key, value)

    def set_typed(self, entry: ConfigEntry[T], value: T) -> None:
        """Set a typed value for a registered entry.

        Raises:
            UnregisteredEntryError: If ``entry`` is not the registered instance
            NullValueError: If ``value`` is None
        """
        if entry is None:
            raise NullKeyError()
        if value is None:
            raise NullValueError(entry.key)
        self._require_registered(entry)
        self.set_string(entry.key, entry.string_converter(value))

    def get_string(self, key: str, fallback: str | None = _NO_FALLBACK) -> str | None:
        """Return the raw value for ``key``.

        Without ``fallback``, an unset key resolves to its entry's default
        and raises when there is none. With ``fallback``, an unset key
        returns ``fallback`` instead; for registered keys the fallback is
        checked against the entry unless it is None or the undefined
        marker.

        Raises:
            KeyNotFoundError: If nothing is set and no default applies
            InvalidFormatError: If ``fallback`` cannot be parsed for the entry
            IllegalConfigValueError: If ``fallback`` is not allowed for the entry
        """
        if key is None:
            raise NullKeyError()
        entry = self._registry.lookup(key)

        if fallback is _NO_FALLBACK:
            with self._lock:
                value = self._settings.get(key)
            if value is not None:
                return value
            if entry is None:
                raise KeyNotFoundError(key)
            return entry.string_converter(self._default_for(entry))

        if (
            entry is not None
            and fallback is not None
            and fallback != self._options.undefined_marker
        ):
            entry.value_converter(fallback)

        with self._lock:
            value = self._settings.get(key)
        if value is not None:
            return value
        if entry is not None and entry.policy is DefaultPolicy.REQUIRED:
            raise KeyNotFoundError(key)
        return fallback

    def get_typed(self, entry: ConfigEntry[T], fallback: T = _NO_FALLBACK) -> T:
        """Return the typed value of ``entry``.

        An unset entry resolves to ``fallback`` when one is given, even if
        the entry declares its own default, so callers can derive a default
        from other live settings at the call site. Required entries never
        accept a fallback.

        Raises:
            NullKeyError: If ``entry`` is None
            UnregisteredEntryError: If ``entry`` is not the registered instance
            KeyNotFoundError: If nothing is set and no default applies
        """
        if entry is None:
            raise NullKeyError()
        self._require_registered(entry)
        with self._lock:
            raw = self._settings.get(entry.key)
        if raw is not None:
            return entry.value_converter(raw)

        if fallback is not _NO_FALLBACK:
            if entry.policy is DefaultPolicy.REQUIRED:
                raise KeyNotFoundError(entry.key)
            return fallback
        return self._default_for(entry)

    def get_all_settings(self) -> dict[str, str]:
        """Return a snapshot of the overrides, never including defaults."""
        with self._lock:
            return dict(self._settings)

    def is_modified(self, key: str) -> bool:
        with self._lock:
            return key in self._settings

    def contains(self, key: str) -> bool:
        """Whether ``key`` is set here or declared in the registry."""
        return self.is_modified(key) or key in self._registry

    __contains__ = contains

    def unset(self, key: str | ConfigEntry[Any]) -> None:
        """Remove one override so reads fall back to the default."""
        if key is None:
            raise NullKeyError()
        name = key.key if isinstance(key, ConfigEntry) else key
        with self._lock:
            self._settings.pop(name, None)
        logger.debug("Unset %s", name)

    def clear_all(self) -> None:
        with self._lock:
            self._settings.clear()
        logger.debug("Cleared all settings")

    def copy(self) -> "SessionConf":
        """Return a new store sharing the registry with a copy of the overrides."""
        clone = SessionConf(self._registry, self._options)
        clone._settings = self.get_all_settings()
        return clone

    def _require_registered(self, entry: ConfigEntry[Any]) -> None:
        if self._registry.lookup(entry.key) is not entry:
            raise UnregisteredEntryError(entry)

    def _default_for(self, entry: ConfigEntry[T]) -> T:
        if entry.policy is DefaultPolicy.FIXED:
            return entry.default
        if entry.policy is DefaultPolicy.COMPUTED:
            return entry.default_function(self)
        raise KeyNotFoundError(entry.key)

    def _set_with_check(self, key: str, value: str) -> None:
        if self._options.warn_on_foreign_keys and self._options.is_foreign_key(key):
            logger.warning(
                "Attempt to set a config outside %s in a session: key = %s, value = %s",
                self._options.owned_prefix,
                key,
                value,
            )
        with self._lock:
            self._settings[key] = value
        logger.debug("Set %s = %s", key, value)

    def __repr__(self) -> str:
        return f"SessionConf(settings={len(self.get_all_settings())})"
