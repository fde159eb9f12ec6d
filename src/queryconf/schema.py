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

"""Pydantic models for store options and entry introspection.

This module defines the settings that tune a :class:`~queryconf.store.SessionConf`
and the rows returned when listing declared entries.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .entry import UNDEFINED


class StoreOptions(BaseModel):
    """Options controlling how a session store treats incoming keys."""

    model_config = ConfigDict(frozen=True)

    reserved_prefix: str = Field(
        default="engine.",
        min_length=1,
        description="Namespace reserved for engine settings as a whole",
    )
    owned_prefix: str = Field(
        default="engine.sql.",
        min_length=1,
        description="Part of the reserved namespace that belongs to this store",
    )
    warn_on_foreign_keys: bool = Field(
        default=True,
        description="Log a warning when a key is reserved but not owned",
    )
    undefined_marker: str = Field(
        default=UNDEFINED,
        description="Fallback value that string reads accept without validation",
    )

    @field_validator("owned_prefix")
    @classmethod
    def validate_owned_prefix(cls, v, info):
        """Ensure the owned namespace sits inside the reserved one."""
        if info.data:
            reserved = info.data.get("reserved_prefix", "engine.")
            if not v.startswith(reserved):
                raise ValueError(
                    f"owned_prefix ({v}) must start with reserved_prefix ({reserved})",
                )
        return v

    def is_foreign_key(self, key: str) -> bool:
        return key.startswith(self.reserved_prefix) and not key.startswith(self.owned_prefix)


class ConfigDefinition(BaseModel):
    """Public description of one declared entry."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(description="Entry key")
    default: str = Field(description="Default value as a string, or the undefined marker")
    doc: str = Field(default="", description="Entry documentation")
    kind: str = Field(description="Value kind of the entry")

    def as_tuple(self) -> tuple[str, str, str]:
        return (self.key, self.default, self.doc)
