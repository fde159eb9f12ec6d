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

"""Tests for entry declarations through the fluent builder."""

import dataclasses

import pytest

from queryconf import (
    UNDEFINED,
    ByteUnit,
    ConfigBuilder,
    DefaultPolicy,
    IllegalConfigValueError,
    InvalidDefaultError,
    InvalidFormatError,
    TimeUnit,
)


class TestEntryDeclaration:
    """Test what the builder produces."""

    def test_fixed_default(self, build):
        """A fixed default is stored as a typed value."""
        entry = build("x.threshold").doc("Threshold").int_conf().create_with_default(10)

        assert entry.key == "x.threshold"
        assert entry.doc == "Threshold"
        assert entry.is_public
        assert entry.policy is DefaultPolicy.FIXED
        assert entry.default == 10
        assert entry.default_value_string == "10"

    def test_internal_entry(self, build):
        """internal() hides the entry from public listings."""
        entry = build("x.hidden").internal().boolean_conf().create_with_default(False)
        assert not entry.is_public

    def test_optional_and_required_have_no_default(self, build):
        """Entries without a fixed default show the undefined marker."""
        optional = build("x.optional").string_conf().create_optional()
        required = build("x.required").string_conf().create_required()

        assert optional.policy is DefaultPolicy.OPTIONAL
        assert required.policy is DefaultPolicy.REQUIRED
        assert optional.default_value_string == UNDEFINED
        assert not required.has_default

    def test_computed_default_keeps_function(self, build):
        """The computed default function is kept on the entry."""

        def compute(conf):
            return 5

        entry = build("x.computed").int_conf().create_with_computed_default(compute)
        assert entry.policy is DefaultPolicy.COMPUTED
        assert entry.default_function is compute

    def test_entries_are_immutable(self, build):
        """Entries cannot be modified after construction."""
        entry = build("x.frozen").int_conf().create_with_default(1)
        with pytest.raises(dataclasses.FrozenInstanceError):
            entry.key = "x.other"

    def test_repr_names_key_and_default(self, build):
        """repr shows key, default, doc and visibility."""
        entry = build("x.repr").doc("d").long_conf().create_with_default(7)
        assert repr(entry) == "ConfigEntry(key=x.repr, defaultValue=7, doc=d, public=true)"

    def test_on_create_receives_entry(self):
        """The on_create callback is called with the finished entry."""
        created = []
        entry = ConfigBuilder("x.callback").on_create(created.append).int_conf().create_optional()
        assert created == [entry]

    def test_no_callback_without_on_create(self):
        """A plain builder does not register anywhere."""
        entry = ConfigBuilder("x.plain").double_conf().create_with_default(0.5)
        assert entry.default == 0.5


class TestTransformAndChecks:
    """Test value transforms and validators."""

    def test_transform_then_check_values(self, build):
        """Input is normalized before the allowed set is checked."""
        entry = (
            build("x.codec")
            .transform(str.lower)
            .check_values({"a", "b"})
            .string_conf()
            .create_with_default("a")
        )

        assert entry.value_converter("A") == "a"
        with pytest.raises(IllegalConfigValueError) as exc_info:
            entry.value_converter("z")
        assert exc_info.value.key == "x.codec"
        assert exc_info.value.value == "z"
        assert "should be one of a, b" in str(exc_info.value)

    def test_transforms_compose_in_order(self, build):
        """Multiple transforms run in declaration order."""
        entry = build("x.trim").transform(str.strip).transform(str.upper).string_conf().create_optional()
        assert entry.value_converter("  gzip ") == "GZIP"

    def test_check_value_on_typed_value(self, build):
        """Typed predicates run on the parsed value."""
        entry = (
            build("x.positive")
            .int_conf()
            .check_value(lambda v: v > 0, "must be positive")
            .create_with_default(1)
        )

        assert entry.value_converter("3") == 3
        with pytest.raises(IllegalConfigValueError, match="must be positive"):
            entry.value_converter("0")

    def test_format_error_before_checks(self, build):
        """Unparseable input fails with InvalidFormatError."""
        entry = build("x.int").int_conf().check_value(lambda v: v > 0, "must be positive").create_optional()
        with pytest.raises(InvalidFormatError):
            entry.value_converter("abc")


class TestDefaultValidation:
    """Test that fixed defaults go through the entry's converters."""

    def test_invalid_default_fails_at_declaration(self, build, registry):
        """A default outside the allowed set is a schema error."""
        with pytest.raises(InvalidDefaultError) as exc_info:
            build("x.bad").check_values({"a"}).string_conf().create_with_default("b")

        assert exc_info.value.key == "x.bad"
        assert "x.bad" not in registry

    def test_default_of_wrong_type_fails(self, build):
        """A default that cannot be formatted for the kind is rejected."""
        with pytest.raises(InvalidDefaultError):
            build("x.wrong").int_conf().create_with_default("ten")

    def test_default_is_normalized(self, build):
        """The stored default is the converted form."""
        entry = build("x.norm").transform(str.lower).string_conf().create_with_default("SNAPPY")
        assert entry.default == "snappy"

    @pytest.mark.parametrize(
        ("declare", "default"),
        [
            (lambda b: b.boolean_conf(), True),
            (lambda b: b.int_conf(), -5),
            (lambda b: b.long_conf(), 2**40),
            (lambda b: b.double_conf(), 0.1),
            (lambda b: b.string_conf(), "text"),
            (lambda b: b.bytes_conf(ByteUnit.KiB), 2048),
            (lambda b: b.time_conf(TimeUnit.SECONDS), 300),
        ],
    )
    def test_default_round_trips(self, build, declare, default):
        """parse(format(default)) == default for every kind."""
        entry = declare(build(f"x.round.{type(default).__name__}.{default}")).create_with_default(default)
        assert entry.value_converter(entry.default_value_string) == entry.default == default
