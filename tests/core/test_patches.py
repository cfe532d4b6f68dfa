"""Tests for the YAML patch engine."""

import pytest
import yaml

from synapse_env.core.patches import (
    Patch,
    apply_patches,
    load_yaml_file,
    parse_path,
    patch_yaml_file,
)
from synapse_env.services.exceptions import GenerationError


class TestParsePath:
    """Test cases for parse_path."""

    def test_keys_and_indexes(self):
        """Test mixed mapping keys and list indexes."""
        assert parse_path(".http.listeners[0].binds[0].host") == [
            "http", "listeners", 0, "binds", 0, "host"
        ]

    def test_keys_with_dashes(self):
        """Test keys that are not identifiers."""
        assert parse_path(".de-sorunome.push_ephemeral") == ["de-sorunome", "push_ephemeral"]

    @pytest.mark.parametrize("path", ["", "http.issuer", ".a[x]", ".a..b"])
    def test_invalid(self, path):
        """Test malformed paths are rejected."""
        with pytest.raises(ValueError, match="Invalid patch path"):
            parse_path(path)


class TestApplyPatches:
    """Test cases for apply_patches."""

    def test_set_creates_missing_parents(self):
        """Test setting a deep path on an empty document."""
        document = apply_patches({}, [Patch.set(".a.b[1].c", 1)])
        assert document == {"a": {"b": [None, {"c": 1}]}}

    def test_set_into_none_document(self):
        """Test a document that parsed to nothing."""
        assert apply_patches(None, [Patch.set(".a", 1)]) == {"a": 1}

    def test_later_patch_wins(self):
        """Test patches run in order."""
        document = apply_patches({}, [
            Patch.set(".clients[1].redirect_uris[0]", "first"),
            Patch.set(".clients[1].redirect_uris[0]", "second"),
        ])
        assert document["clients"][1]["redirect_uris"] == ["second"]

    def test_delete_then_set(self):
        """Test replacing a list with a single entry."""
        document = {"listeners": [{"bind_addresses": ["::1", "127.0.0.1"], "port": 8008}]}

        apply_patches(document, [
            Patch.delete(".listeners[0].bind_addresses"),
            Patch.set(".listeners[0].bind_addresses[0]", "0.0.0.0"),
        ])

        assert document["listeners"][0] == {"bind_addresses": ["0.0.0.0"], "port": 8008}

    def test_delete_missing_is_noop(self):
        """Test deleting absent paths leaves the document alone."""
        document = {"a": {"b": 1}}
        apply_patches(document, [
            Patch.delete(".x.y"),
            Patch.delete(".a.c"),
            Patch.delete(".a.b[3]"),
        ])
        assert document == {"a": {"b": 1}}

    def test_delete_list_item(self):
        """Test deleting by index."""
        document = {"binds": [{"address": "[::]:8080"}, {"host": "x"}]}
        apply_patches(document, [Patch.delete(".binds[0]")])
        assert document == {"binds": [{"host": "x"}]}

    def test_append(self):
        """Test appending to existing and missing lists."""
        document = {"resources": [{"name": "discovery"}]}
        apply_patches(document, [
            Patch.append(".resources", {"name": "adminapi"}),
            Patch.append(".extra", ["a", "b"]),
        ])
        assert document == {
            "resources": [{"name": "discovery"}, {"name": "adminapi"}],
            "extra": ["a", "b"],
        }

    def test_append_to_mapping_fails(self):
        """Test appending to a non-list."""
        with pytest.raises(GenerationError, match="Cannot append"):
            apply_patches({"a": {"b": 1}}, [Patch.append(".a", 2)])

    def test_index_into_mapping_fails(self):
        """Test list indexes on a mapping."""
        with pytest.raises(GenerationError, match="Cannot index"):
            apply_patches({"a": {"b": 1}}, [Patch.set(".a[0]", 2)])


class TestYamlFiles:
    """Test cases for file helpers."""

    def test_patch_yaml_file(self, temp_project_dir):
        """Test patching rewrites the file with a header."""
        path = temp_project_dir / "homeserver.yaml"
        path.write_text("server_name: example.test\npresence:\n  enabled: false\n")

        patch_yaml_file(path, [Patch.set(".presence.enabled", True)], header="managed")

        content = path.read_text()
        assert content.startswith("# managed\n")
        assert yaml.safe_load(content) == {
            "server_name": "example.test",
            "presence": {"enabled": True},
        }

    def test_load_empty_file(self, temp_project_dir):
        """Test an empty file loads as an empty mapping."""
        path = temp_project_dir / "empty.yaml"
        path.write_text("")
        assert load_yaml_file(path) == {}

    def test_load_non_mapping(self, temp_project_dir):
        """Test documents must be mappings."""
        path = temp_project_dir / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(GenerationError, match="Expected a mapping"):
            load_yaml_file(path)

    def test_load_invalid_yaml(self, temp_project_dir):
        """Test parse errors are reported as generation errors."""
        path = temp_project_dir / "bad.yaml"
        path.write_text("a: [unclosed\n")
        with pytest.raises(GenerationError, match="Could not parse"):
            load_yaml_file(path)
