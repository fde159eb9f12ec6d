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

"""Pre-validation of configuration batches.

:meth:`SessionConf.set_conf <queryconf.store.SessionConf.set_conf>` stops at
the first bad pair and leaves earlier pairs applied. Callers that need
all-or-nothing behaviour validate the whole batch here first, which
reports every failing pair at once.
"""

from collections.abc import Mapping
import logging
from typing import Any

from .exceptions import ConfigValidationError, ConfigValueError
from .registry import ConfigRegistry
from .registry import registry as global_registry
from .schema import StoreOptions

logger = logging.getLogger(__name__)


class ConfValidator:
    """Checks a batch of raw key/value strings against a registry."""

    def __init__(
        self,
        registry: ConfigRegistry | None = None,
        options: StoreOptions | None = None,
    ) -> None:
        self.registry = global_registry if registry is None else registry
        self.options = StoreOptions() if options is None else options
        self.warnings: list[str] = []

    def validate(self, props: Mapping[str, str]) -> None:
        """Validate every pair of ``props`` without modifying anything.

        Unregistered keys always pass. Keys in the reserved but foreign
        namespace pass with a warning.

        Args:
            props: Raw key/value strings

        Raises:
            ConfigValidationError: If any pair fails, with one error dict per pair
        """
        self.warnings.clear()
        errors: list[dict[str, Any]] = []

        for key, value in props.items():
            if key is None:
                errors.append({"key": None, "value": value, "error": "key cannot be null"})
                continue
            if value is None:
                errors.append(
                    {"key": key, "value": None, "error": f"value cannot be null for key: {key}"}
                )
                continue
            if not isinstance(value, str):
                errors.append(
                    {"key": key, "value": value, "error": f"value must be a string for key: {key}"}
                )
                continue

            entry = self.registry.lookup(key)
            if entry is not None:
                try:
                    entry.value_converter(value)
                except ConfigValueError as e:
                    errors.append(
                        {
                            "key": key,
                            "value": value,
                            "error": str(e),
                            "error_code": e.error_code,
                        }
                    )

            if self.options.warn_on_foreign_keys and self.options.is_foreign_key(key):
                message = f"{key} is outside {self.options.owned_prefix} and is not managed here"
                self.warnings.append(message)
                logger.warning(
                    "%s is outside %s and is not managed here", key, self.options.owned_prefix
                )

        if errors:
            raise ConfigValidationError(
                f"{len(errors)} of {len(props)} configuration values failed validation",
                errors,
            )

    def get_validation_summary(self) -> dict[str, Any]:
        return {
            "status": "valid",
            "warnings": self.warnings,
            "warning_count": len(self.warnings),
        }
