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

"""Custom exceptions for the query configuration registry."""

from datetime import datetime, timezone
from typing import Any


class QueryConfError(Exception):
    """Base exception for all configuration errors."""

    ERROR_CATEGORY = "GENERAL"
    ERROR_CODE = "QCF_0000"

    def __init__(
        self,
        message: str,
        user_message: str | None = None,
        error_code: str | None = None,
        context: dict[str, Any] | None = None,
        recovery_suggestion: str | None = None,
    ) -> None:
        super().__init__(message)
        self.user_message = user_message or "A configuration error occurred"
        self.error_code = error_code or self.ERROR_CODE
        self.error_category = self.ERROR_CATEGORY
        self.context = context or {}
        self.recovery_suggestion = recovery_suggestion
        self.timestamp = datetime.now(timezone.utc)


class ConfigValueError(QueryConfError, ValueError):
    """A raw value was rejected for a configuration key."""

    ERROR_CATEGORY = "CLIENT_ERROR"
    ERROR_CODE = "QCF_1000"

    def __init__(
        self,
        key: str,
        value: Any,
        reason: str,
        user_message: str | None = None,
        recovery_suggestion: str | None = None,
    ) -> None:
        message = f"{key} {reason}, but was {value!r}"
        context = {"key": key, "value": value}
        super().__init__(message, user_message, self.ERROR_CODE, context, recovery_suggestion)
        self.key = key
        self.value = value
        self.reason = reason


class InvalidFormatError(ConfigValueError):
    """The raw string cannot be parsed as the entry's value kind."""

    ERROR_CODE = "QCF_1001"

    def __init__(self, key: str, value: Any, expected: str) -> None:
        super().__init__(
            key,
            value,
            f"should be {expected}",
            user_message=f"Invalid format for {key}",
            recovery_suggestion=f"Provide {expected} for {key}",
        )
        self.expected = expected


class IllegalConfigValueError(ConfigValueError):
    """The value parsed but is not allowed for the entry."""

    ERROR_CODE = "QCF_1002"

    def __init__(self, key: str, value: Any, reason: str) -> None:
        super().__init__(
            key,
            value,
            reason,
            user_message=f"Illegal value for {key}",
            recovery_suggestion=f"Choose a value for {key} that {reason}",
        )


class NullKeyError(QueryConfError, ValueError):
    """A configuration key was None."""

    ERROR_CATEGORY = "CLIENT_ERROR"
    ERROR_CODE = "QCF_1003"

    def __init__(self) -> None:
        super().__init__(
            "key cannot be null",
            user_message="Configuration key is missing",
            error_code=self.ERROR_CODE,
        )


class NullValueError(QueryConfError, ValueError):
    """A configuration value was None."""

    ERROR_CATEGORY = "CLIENT_ERROR"
    ERROR_CODE = "QCF_1004"

    def __init__(self, key: str) -> None:
        super().__init__(
            f"value cannot be null for key: {key}",
            user_message=f"Value for {key} is missing",
            error_code=self.ERROR_CODE,
            context={"key": key},
        )
        self.key = key


class KeyNotFoundError(QueryConfError, LookupError):
    """No value is set for a key and no default applies."""

    ERROR_CATEGORY = "CLIENT_ERROR"
    ERROR_CODE = "QCF_2000"

    def __init__(self, key: str) -> None:
        super().__init__(
            key,
            user_message=f"No value is set for {key}",
            error_code=self.ERROR_CODE,
            context={"key": key},
            recovery_suggestion=f"Set {key} before reading it",
        )
        self.key = key

    def __str__(self) -> str:
        return self.key


class UnregisteredEntryError(QueryConfError, LookupError):
    """An entry is not the one registered under its key."""

    ERROR_CATEGORY = "CLIENT_ERROR"
    ERROR_CODE = "QCF_2001"

    def __init__(self, entry: Any) -> None:
        super().__init__(
            f"{entry!r} is not registered",
            user_message=f"{entry.key} is not a registered configuration entry",
            error_code=self.ERROR_CODE,
            context={"key": entry.key},
        )
        self.entry = entry


class SchemaError(QueryConfError):
    """Errors in the static entry declarations themselves."""

    ERROR_CATEGORY = "SCHEMA_ERROR"
    ERROR_CODE = "QCF_3000"


class DuplicateKeyError(SchemaError):
    """Two entries were declared with the same key."""

    ERROR_CODE = "QCF_3001"

    def __init__(self, key: str) -> None:
        super().__init__(
            f"Duplicate config entry. {key} has been registered",
            user_message=f"{key} is declared more than once",
            error_code=self.ERROR_CODE,
            context={"key": key},
            recovery_suggestion="Rename or remove one of the declarations",
        )
        self.key = key


class InvalidDefaultError(SchemaError):
    """A fixed default does not pass its own entry's converter."""

    ERROR_CODE = "QCF_3002"

    def __init__(self, key: str, default: Any, cause: Exception) -> None:
        super().__init__(
            f"Default value {default!r} for {key} is invalid: {cause}",
            user_message=f"{key} declares an invalid default",
            error_code=self.ERROR_CODE,
            context={"key": key, "default": default},
        )
        self.key = key
        self.default = default


class RegistrySealedError(SchemaError):
    """An entry was declared after the registry was sealed."""

    ERROR_CODE = "QCF_3003"

    def __init__(self, key: str) -> None:
        super().__init__(
            f"Cannot register {key}: the registry is sealed",
            user_message="Configuration entries must be declared at startup",
            error_code=self.ERROR_CODE,
            context={"key": key},
        )
        self.key = key


class ConfigValidationError(QueryConfError, ValueError):
    """A batch of settings failed validation."""

    ERROR_CATEGORY = "CLIENT_ERROR"
    ERROR_CODE = "QCF_4000"

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None) -> None:
        super().__init__(
            message,
            user_message="Some configuration values are invalid",
            error_code=self.ERROR_CODE,
            context={"error_count": len(errors or [])},
        )
        self.errors = errors or []
