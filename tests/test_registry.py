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

"""Tests for the configuration entry registry."""

import json

import pytest
import yaml

from queryconf import (
    UNDEFINED,
    ConfigBuilder,
    DuplicateKeyError,
    RegistrySealedError,
    SchemaError,
    global_registry,
)
from queryconf import entries


class TestRegistration:
    """Test registering and looking up entries."""

    def test_lookup_returns_registered_entry(self, build, registry):
        """Finished declarations are registered under their key."""
        entry = build("x.a").int_conf().create_with_default(1)

        assert registry.lookup("x.a") is entry
        assert registry.lookup("x.missing") is None
        assert "x.a" in registry
        assert len(registry) == 1

    @pytest.mark.parametrize("first_public", [True, False])
    def test_duplicate_key_fails(self, build, registry, first_public):
        """The second declaration of a key always fails."""
        first = build("x.dup")
        if not first_public:
            first = first.internal()
        original = first.int_conf().create_with_default(1)

        with pytest.raises(DuplicateKeyError) as exc_info:
            build("x.dup").string_conf().create_optional()

        assert exc_info.value.key == "x.dup"
        assert isinstance(exc_info.value, SchemaError)
        assert registry.lookup("x.dup") is original

    def test_register_directly(self, registry):
        """Entries built elsewhere can be registered explicitly."""
        entry = ConfigBuilder("x.direct").boolean_conf().create_with_default(True)
        registry.register(entry)
        with pytest.raises(DuplicateKeyError):
            registry.register(entry)

    def test_sealed_registry_rejects_registration(self, build, registry):
        """No entry can be declared after seal()."""
        build("x.before").int_conf().create_with_default(1)
        registry.seal()

        assert registry.sealed
        with pytest.raises(RegistrySealedError):
            build("x.after").int_conf().create_with_default(1)
        assert registry.keys() == ["x.before"]


class TestIntrospection:
    """Test the public listing of declared entries."""

    @pytest.fixture
    def declared(self, build):
        build("x.b").doc("B doc").int_conf().create_with_default(2)
        build("x.a").doc("A doc").string_conf().create_optional()
        build("x.hidden").internal().doc("hidden").boolean_conf().create_with_default(True)

    def test_all_public_descriptors(self, declared, registry):
        """Only public entries are listed, sorted by key."""
        assert registry.all_public_descriptors() == [
            ("x.a", UNDEFINED, "A doc"),
            ("x.b", "2", "B doc"),
        ]

    def test_definitions_include_kind(self, declared, registry):
        """Definition rows carry the value kind."""
        kinds = {d.key: d.kind for d in registry.definitions()}
        assert kinds == {"x.a": "string", "x.b": "int"}

    def test_export_json(self, declared, registry):
        """JSON export lists the same rows."""
        rows = json.loads(registry.export_definitions())
        assert [row["key"] for row in rows] == ["x.a", "x.b"]
        assert rows[1]["default"] == "2"

    def test_export_yaml(self, declared, registry):
        """YAML export lists the same rows."""
        rows = yaml.safe_load(registry.export_definitions("yaml"))
        assert rows[0] == {"key": "x.a", "default": UNDEFINED, "doc": "A doc", "kind": "string"}

    def test_export_unknown_format(self, registry):
        """Unknown export formats are rejected."""
        with pytest.raises(ValueError, match="Unsupported export format"):
            registry.export_definitions("xml")


class TestEngineEntries:
    """Test the engine entries declared in the global registry."""

    def test_engine_entries_registered_on_import(self):
        """Importing the package registers the engine entries."""
        assert global_registry.lookup(entries.SHUFFLE_PARTITIONS.key) is entries.SHUFFLE_PARTITIONS

    def test_internal_engine_entries_not_listed(self):
        """Internal engine entries stay out of the public listing."""
        listed = {key for key, _, _ in global_registry.all_public_descriptors()}
        assert entries.SHUFFLE_PARTITIONS.key in listed
        assert entries.OPTIMIZER_MAX_ITERATIONS.key not in listed

    def test_engine_defaults_round_trip(self):
        """Every engine entry with a fixed default round-trips."""
        for key in global_registry.keys():
            entry = global_registry.lookup(key)
            if entry.has_default:
                assert entry.value_converter(entry.default_value_string) == entry.default
