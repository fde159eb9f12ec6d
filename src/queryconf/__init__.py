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

"""Typed configuration registry and per-session settings store.

This package provides:
- Immutable, typed configuration entries declared through a fluent builder
- A process-wide registry that rejects duplicate keys
- A thread-safe settings store per session that keeps raw strings and
  converts them on read
- Introspection of public entries for documentation

Importing the package declares the engine's own entries (see
:mod:`queryconf.entries`) in the global registry.
"""

from . import entries
from .builder import ConfigBuilder, TypedConfigBuilder, build_conf
from .converters import ByteUnit, TimeUnit, ValueKind
from .entry import UNDEFINED, ConfigEntry, DefaultPolicy
from .exceptions import (
    ConfigValidationError,
    ConfigValueError,
    DuplicateKeyError,
    IllegalConfigValueError,
    InvalidDefaultError,
    InvalidFormatError,
    KeyNotFoundError,
    NullKeyError,
    NullValueError,
    QueryConfError,
    RegistrySealedError,
    SchemaError,
    UnregisteredEntryError,
)
from .registry import ConfigRegistry
from .registry import registry as global_registry
from .schema import ConfigDefinition, StoreOptions
from .settings import EngineSettings
from .store import SessionConf
from .validation import ConfValidator

__all__ = [
    "UNDEFINED",
    "ByteUnit",
    "ConfValidator",
    "ConfigBuilder",
    "ConfigDefinition",
    "ConfigEntry",
    "ConfigRegistry",
    "ConfigValidationError",
    "ConfigValueError",
    "DefaultPolicy",
    "DuplicateKeyError",
    "EngineSettings",
    "IllegalConfigValueError",
    "InvalidDefaultError",
    "InvalidFormatError",
    "KeyNotFoundError",
    "NullKeyError",
    "NullValueError",
    "QueryConfError",
    "RegistrySealedError",
    "SchemaError",
    "SessionConf",
    "StoreOptions",
    "TimeUnit",
    "TypedConfigBuilder",
    "UnregisteredEntryError",
    "ValueKind",
    "build_conf",
    "entries",
    "global_registry",
]
