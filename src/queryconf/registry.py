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

"""Process-wide registry of configuration entries.

Entries register themselves when they are declared, normally at import
time. The registry rejects a second entry under an existing key so two
declarations can never shadow each other. Registration is serialized by
a lock; lookups read the underlying dict without locking.

Once every module has declared its entries the registry can be sealed,
after which any further declaration fails.
"""

import json
import logging
import threading
from typing import Any

import yaml

from .entry import ConfigEntry
from .exceptions import DuplicateKeyError, RegistrySealedError
from .schema import ConfigDefinition

logger = logging.getLogger(__name__)


class ConfigRegistry:
    """Mapping from key to :class:`ConfigEntry` with unique keys."""

    def __init__(self) -> None:
        self._entries: dict[str, ConfigEntry[Any]] = {}
        self._lock = threading.Lock()
        self._sealed = False

    def register(self, entry: ConfigEntry[Any]) -> None:
        """Add an entry to the registry.

        Args:
            entry: Entry to register

        Raises:
            DuplicateKeyError: If an entry with the same key is registered
            RegistrySealedError: If the registry has been sealed
        """
        with self._lock:
            if self._sealed:
                raise RegistrySealedError(entry.key)
            if entry.key in self._entries:
                raise DuplicateKeyError(entry.key)
            self._entries[entry.key] = entry
        logger.debug("Registered config entry %s", entry.key)

    def lookup(self, key: str) -> ConfigEntry[Any] | None:
        return self._entries.get(key)

    def contains(self, key: str) -> bool:
        return key in self._entries

    __contains__ = contains

    def __len__(self) -> int:
        return len(self._entries)

    def keys(self) -> list[str]:
        with self._lock:
            return sorted(self._entries)

    def seal(self) -> None:
        """Refuse all further registrations."""
        with self._lock:
            self._sealed = True
        logger.info("Config registry sealed with %d entries", len(self._entries))

    @property
    def sealed(self) -> bool:
        return self._sealed

    def definitions(self) -> list[ConfigDefinition]:
        """Describe every public entry, sorted by key."""
        with self._lock:
            entries = list(self._entries.values())

        return [
            ConfigDefinition(
                key=entry.key,
                default=entry.default_value_string,
                doc=entry.doc,
                kind=entry.kind.value,
            )
            for entry in sorted(entries, key=lambda e: e.key)
            if entry.is_public
        ]

    def all_public_descriptors(self) -> list[tuple[str, str, str]]:
        """Return ``(key, default, doc)`` for every public entry."""
        return [definition.as_tuple() for definition in self.definitions()]

    def export_definitions(self, format: str = "json") -> str:
        """Render the public entry listing as JSON or YAML."""
        rows = [definition.model_dump() for definition in self.definitions()]

        if format.lower() == "yaml":
            return str(yaml.safe_dump(rows, default_flow_style=False, sort_keys=False))
        if format.lower() == "json":
            return json.dumps(rows, indent=2)
        raise ValueError(f"Unsupported export format: {format}")


# Global registry shared by every session
registry = ConfigRegistry()
