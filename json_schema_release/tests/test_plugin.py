"""
Tests for the verify-then-prepare release pipeline.
"""

from __future__ import annotations

import ast
import json

import pytest
import tomlkit

import json_schema_release
from json_schema_release import plugin as plugin_module
from json_schema_release.config import Languages, PluginConfig, ReleaseContext
from json_schema_release.errors import SemanticReleaseError
from json_schema_release.plugin import ReleasePlugin

from .helpers import generated_files

RELEASE = {"nextRelease": {"version": "1.0.0"}}

ALL_ARTIFACTS = [
    "Cargo.toml",
    "foo_bar.go",
    "generated-typings.d.ts",
    "index.py",
    "src/index.ts",
    "src/lib.rs",
    "src/schema.json",
]


def verified_plugin(workspace, schema="foo_bar.schema.json"):
    plugin = ReleasePlugin(cwd=workspace)
    plugin.verify_conditions({"schemaLocation": schema})
    return plugin


class TestVerifyConditions:
    @pytest.mark.parametrize("config", [{}, {"schemaLocation": ""}, {"schemaLocation": []}])
    def test_missing_schema_location(self, workspace, config):
        with pytest.raises(SemanticReleaseError) as exc_info:
            ReleasePlugin(cwd=workspace).verify_conditions(config)
        assert exc_info.value.code == "ESCHEMALOCATION"
        assert "schema location" in exc_info.value.message

    def test_schema_does_not_exist(self, workspace):
        plugin = ReleasePlugin(cwd=workspace)
        with pytest.raises(SemanticReleaseError) as exc_info:
            plugin.verify_conditions({"schemaLocation": "./src/test.json", "languages": {"ts": True}})
        assert exc_info.value.message == "Missing json schema document file."
        assert exc_info.value.semantic_release is True
        assert not plugin.verified

    def test_every_location_is_checked(self, workspace):
        with pytest.raises(SemanticReleaseError) as exc_info:
            ReleasePlugin(cwd=workspace).verify_conditions({"schemaLocation": ["foo_bar.schema.json", "a.json", "b.json"]})
        assert "a.json" in exc_info.value.details
        assert "b.json" in exc_info.value.details

    def test_schema_exists(self, workspace):
        plugin = ReleasePlugin(cwd=workspace)
        assert plugin.verify_conditions({"schemaLocation": "./foo_bar.schema.json", "languages": {"ts": True}}) is True
        assert plugin.verified

    def test_accepts_dataclass_config(self, workspace):
        assert ReleasePlugin(cwd=workspace).verify_conditions(PluginConfig(schema_location=["foo_bar.schema.json", "tree.schema.json"]))


class TestPrepareGates:
    def test_not_verified(self, workspace):
        with pytest.raises(SemanticReleaseError) as exc_info:
            ReleasePlugin(cwd=workspace).prepare({"schemaLocation": "foo_bar.schema.json"}, RELEASE)
        assert exc_info.value.code == "ENOTVERIFIED"

    def test_verification_is_per_plugin(self, workspace):
        verified_plugin(workspace)
        with pytest.raises(SemanticReleaseError) as exc_info:
            ReleasePlugin(cwd=workspace).prepare({"schemaLocation": "foo_bar.schema.json"}, RELEASE)
        assert exc_info.value.code == "ENOTVERIFIED"

    def test_failed_verification_does_not_verify(self, workspace):
        plugin = ReleasePlugin(cwd=workspace)
        with pytest.raises(SemanticReleaseError):
            plugin.verify_conditions({"schemaLocation": "missing.json"})
        with pytest.raises(SemanticReleaseError) as exc_info:
            plugin.prepare({"schemaLocation": "foo_bar.schema.json"}, RELEASE)
        assert exc_info.value.code == "ENOTVERIFIED"

    @pytest.mark.parametrize("context", [None, {}, {"nextRelease": {}}, {"nextRelease": {"version": ""}}])
    def test_no_version(self, workspace, context):
        plugin = verified_plugin(workspace)
        with pytest.raises(SemanticReleaseError) as exc_info:
            plugin.prepare({"schemaLocation": "foo_bar.schema.json", "outpath": "out"}, context)
        assert exc_info.value.code == "ENOVERSION"
        assert exc_info.value.message == "No nextRelease version"
        assert not (workspace / "out").exists()


class TestPrepare:
    def test_go_only(self, workspace):
        plugin = verified_plugin(workspace)
        assert plugin.prepare({"schemaLocation": "foo_bar.schema.json", "outpath": "out", "languages": {"go": True}}, RELEASE)

        out = workspace / "out"
        assert generated_files(out) == ["foo_bar.go"]
        go = (out / "foo_bar.go").read_text()
        assert "package foo_bar" in go
        assert 'const RawFooBar = "{\\"$schema\\":' in go

    def test_all_languages(self, workspace):
        plugin = verified_plugin(workspace)
        plugin.prepare({"schemaLocation": "foo_bar.schema.json", "outpath": "out"}, RELEASE)

        assert generated_files(workspace / "out") == ALL_ARTIFACTS

    def test_outpath_defaults_to_cwd(self, workspace):
        plugin = verified_plugin(workspace)
        plugin.prepare({"schemaLocation": "foo_bar.schema.json", "languages": {"py": True}}, RELEASE)
        assert (workspace / "index.py").exists()

    def test_idempotent(self, workspace):
        plugin = verified_plugin(workspace)
        config = {"schemaLocation": "foo_bar.schema.json", "outpath": "out"}

        plugin.prepare(config, RELEASE)
        first = {name: (workspace / "out" / name).read_bytes() for name in generated_files(workspace / "out")}
        plugin.prepare(config, RELEASE)
        second = {name: (workspace / "out" / name).read_bytes() for name in generated_files(workspace / "out")}

        assert first == second

    def test_no_title(self, workspace):
        plugin = verified_plugin(workspace, "untitled.schema.json")
        with pytest.raises(SemanticReleaseError) as exc_info:
            plugin.prepare({"schemaLocation": "untitled.schema.json", "outpath": "out"}, RELEASE)
        assert exc_info.value.code == "ENOTITLE"
        assert generated_files(workspace / "out") == []

    def test_dangling_reference(self, workspace):
        plugin = verified_plugin(workspace, "dangling.schema.json")
        with pytest.raises(SemanticReleaseError) as exc_info:
            plugin.prepare({"schemaLocation": "dangling.schema.json", "outpath": "out"}, RELEASE)
        assert exc_info.value.code == "EDEREFERENCE"
        assert "#/definitions/missing" in exc_info.value.details
        assert generated_files(workspace / "out") == []

    def test_unparsable_schema(self, workspace):
        plugin = verified_plugin(workspace)
        (workspace / "foo_bar.schema.json").write_text("{")
        with pytest.raises(SemanticReleaseError) as exc_info:
            plugin.prepare({"schemaLocation": "foo_bar.schema.json", "outpath": "out"}, RELEASE)
        assert exc_info.value.code == "ESCHEMAPARSE"

    def test_malformed_cargo_manifest(self, workspace):
        (workspace / "out").mkdir()
        (workspace / "out" / "Cargo.toml").write_text("[package\nversion = = \n")

        plugin = verified_plugin(workspace)
        assert plugin.prepare({"schemaLocation": "foo_bar.schema.json", "outpath": "out", "languages": {"rs": True}}, {"nextRelease": {"version": "4.5.6"}})

        manifest = tomlkit.parse((workspace / "out" / "Cargo.toml").read_text())
        assert manifest["package"]["version"] == "4.5.6"

    def test_failure_keeps_earlier_artifacts(self, workspace):
        plugin = verified_plugin(workspace)
        config = PluginConfig(
            schema_location="foo_bar.schema.json",
            outpath="out",
            languages=Languages(ts=True, go=True),
            compile_ts=True,
            tsc_command=["definitely-not-a-tsc-binary"],
        )
        with pytest.raises(SemanticReleaseError) as exc_info:
            plugin.prepare(config, ReleaseContext.from_dict(RELEASE))
        assert exc_info.value.code == "ETSCOMPILE"

        files = generated_files(workspace / "out")
        assert "src/index.ts" in files
        assert "foo_bar.go" not in files

    def test_title_with_leading_digit(self, workspace):
        schema = {"title": "3D Shape", "type": "object", "properties": {"side": {"type": "number"}}, "required": ["side"]}
        (workspace / "shape.schema.json").write_text(json.dumps(schema))

        plugin = verified_plugin(workspace, "shape.schema.json")
        assert plugin.prepare({"schemaLocation": "shape.schema.json", "outpath": "out"}, RELEASE)

        out = workspace / "out"
        assert "export interface Type3DShape {" in (out / "generated-typings.d.ts").read_text()
        go = (out / "schema_3_d_shape.go").read_text()
        assert "package schema_3_d_shape" in go
        assert "type Type3DShape struct {" in go
        assert "pub struct Type3DShape {" in (out / "src" / "lib.rs").read_text()
        assert tomlkit.parse((out / "Cargo.toml").read_text())["package"]["name"] == "schema_3_d_shape"
        py = (out / "index.py").read_text()
        ast.parse(py)
        assert "class Type3DShape(TypedDict):" in py

    def test_schema_set(self, workspace):
        plugin = ReleasePlugin(cwd=workspace)
        config = {"schemaLocation": ["foo_bar.schema.json", "tree.schema.json"], "outpath": "out", "languages": {"ts": True}}
        plugin.verify_conditions(config)
        plugin.prepare(config, RELEASE)

        typings = (workspace / "out" / "generated-typings.d.ts").read_text()
        assert "export interface FooBar {" in typings
        assert "export interface TreeNode {" in typings
        assert "fooBar" in (workspace / "out" / "src" / "index.ts").read_text()


class TestModuleFunctions:
    def test_verify_then_prepare(self, workspace, monkeypatch):
        monkeypatch.setattr(plugin_module, "_default_plugin", ReleasePlugin())
        monkeypatch.chdir(workspace)

        config = {"schemaLocation": "./foo_bar.schema.json", "outpath": "out", "languages": {"py": True}}
        assert json_schema_release.verify_conditions(config, {}) is True
        assert json_schema_release.prepare(config, RELEASE) is True
        assert (workspace / "out" / "index.py").exists()

    def test_prepare_without_verify(self, workspace, monkeypatch):
        monkeypatch.setattr(plugin_module, "_default_plugin", ReleasePlugin())
        monkeypatch.chdir(workspace)

        with pytest.raises(SemanticReleaseError) as exc_info:
            json_schema_release.prepare({"schemaLocation": "./foo_bar.schema.json"}, RELEASE)
        assert exc_info.value.to_dict() == {
            "message": "Not verified",
            "code": "ENOTVERIFIED",
            "details": "Something went wrong and the schemas were not able to be verified.",
        }
