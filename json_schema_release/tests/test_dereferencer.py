from __future__ import annotations

import json

import pytest

from json_schema_release.dereferencer import DereferenceError, dereference

from .helpers import load_test_schema


class TestLocalReferences:
    def test_definitions_are_inlined(self):
        schema = load_test_schema("foo_bar.schema.json")
        result = dereference(schema)

        color = result["properties"]["color"]
        assert "$ref" not in color
        assert color["enum"] == ["red", "dark-blue"]
        assert color["title"] == "color"
        assert result["properties"]["child"]["properties"]["id"] == {"type": "number"}

    def test_input_is_not_mutated(self):
        schema = load_test_schema("foo_bar.schema.json")
        before = json.dumps(schema, sort_keys=True)
        dereference(schema)
        assert json.dumps(schema, sort_keys=True) == before

    def test_existing_title_is_kept(self):
        schema = {
            "title": "Root",
            "properties": {"a": {"$ref": "#/$defs/a"}},
            "$defs": {"a": {"title": "Alpha", "type": "string"}},
        }
        assert dereference(schema)["properties"]["a"]["title"] == "Alpha"

    def test_sibling_keywords_override_target(self):
        schema = {
            "title": "Root",
            "properties": {"a": {"$ref": "#/definitions/a", "description": "local"}},
            "definitions": {"a": {"type": "string", "description": "shared"}},
        }
        assert dereference(schema)["properties"]["a"]["description"] == "local"

    def test_escaped_pointer_tokens(self):
        schema = {
            "title": "Root",
            "properties": {"a": {"$ref": "#/definitions/a~1b"}},
            "definitions": {"a/b": {"type": "integer"}},
        }
        assert dereference(schema)["properties"]["a"]["type"] == "integer"

    def test_percent_encoded_pointer_tokens(self):
        schema = {
            "title": "Root",
            "properties": {"a": {"$ref": "#/definitions/a%20b"}, "b": {"$ref": "#/definitions/100%25"}},
            "definitions": {"a b": {"type": "integer"}, "100%": {"type": "string"}},
        }
        properties = dereference(schema)["properties"]
        assert properties["a"] == {"type": "integer", "title": "a b"}
        assert properties["b"] == {"type": "string", "title": "100%"}

    def test_recursive_reference_becomes_named_back_edge(self):
        result = dereference(load_test_schema("tree.schema.json"))
        items = result["properties"]["children"]["items"]
        assert items == {"$ref": "#", "title": "Tree Node"}

    def test_self_referencing_definition_is_not_expanded(self):
        schema = {
            "title": "Root",
            "properties": {"node": {"$ref": "#/definitions/node"}},
            "definitions": {"node": {"type": "object", "properties": {"next": {"$ref": "#/definitions/node"}}}},
        }
        result = dereference(schema)
        back_edge = {"$ref": "#/definitions/node", "title": "node"}
        assert result["definitions"]["node"]["properties"]["next"] == back_edge
        assert result["properties"]["node"]["properties"]["next"] == back_edge

    def test_dangling_reference(self):
        with pytest.raises(DereferenceError, match="#/definitions/missing"):
            dereference(load_test_schema("dangling.schema.json"))

    def test_remote_reference_is_rejected(self):
        schema = {"title": "Root", "properties": {"a": {"$ref": "https://example.com/a.json"}}}
        with pytest.raises(DereferenceError, match="remote"):
            dereference(schema)


class TestFileReferences:
    def test_relative_file_reference(self, tmp_path):
        (tmp_path / "common.json").write_text(
            json.dumps({"definitions": {"address": {"type": "object", "properties": {"street": {"type": "string"}}}}})
        )
        schema = {"title": "Person", "properties": {"home": {"$ref": "common.json#/definitions/address"}}}

        home = dereference(schema, tmp_path)["properties"]["home"]
        assert home["properties"]["street"] == {"type": "string"}
        assert home["title"] == "address"

    def test_missing_file(self, tmp_path):
        schema = {"title": "Person", "properties": {"home": {"$ref": "nope.json"}}}
        with pytest.raises(DereferenceError, match="nope.json"):
            dereference(schema, tmp_path)

    def test_file_reference_needs_base_path(self):
        schema = {"title": "Person", "properties": {"home": {"$ref": "common.json"}}}
        with pytest.raises(DereferenceError):
            dereference(schema)
