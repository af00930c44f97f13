from json_schema_release.config import DEFAULT_OUTPUT_NAME, Language, Languages, PluginConfig, ReleaseContext


class TestPluginConfig:
    def test_from_dict_maps_host_keys(self):
        config = PluginConfig.from_dict(
            {
                "schemaLocation": "./schema.json",
                "outpath": "out",
                "outputName": "typings",
                "languages": {"go": True},
                "compileTs": True,
                "tscCommand": "npx tsc",
            }
        )
        assert config.schema_location == "./schema.json"
        assert config.outpath == "out"
        assert config.output_name == "typings"
        assert config.languages == Languages(go=True)
        assert config.compile_ts is True
        assert config.tsc_command == ["npx", "tsc"]

    def test_defaults(self):
        config = PluginConfig.from_dict({})
        assert config.output_name == DEFAULT_OUTPUT_NAME
        assert config.outpath is None
        assert config.languages is None
        assert config.schema_locations == []

    def test_unknown_keys_are_ignored(self):
        config = PluginConfig.from_dict({"somethingElse": 1, "_ALIASES": {}})
        assert not hasattr(config, "somethingElse")
        assert config.schema_locations == []

    def test_missing_languages_selects_all_in_order(self):
        assert PluginConfig().selected_languages() == [Language.TS, Language.GO, Language.RS, Language.PY]

    def test_unset_flags_are_skipped(self):
        config = PluginConfig.from_dict({"languages": {"py": True, "ts": True, "go": False}})
        assert config.selected_languages() == [Language.TS, Language.PY]

    def test_empty_languages_selects_nothing(self):
        assert PluginConfig.from_dict({"languages": {}}).selected_languages() == []

    def test_schema_locations(self):
        assert PluginConfig(schema_location="a.json").schema_locations == ["a.json"]
        assert PluginConfig(schema_location=["a.json", "b.json"]).schema_locations == ["a.json", "b.json"]
        assert PluginConfig(schema_location="").schema_locations == []

    def test_to_dict_round_trips(self):
        config = PluginConfig(schema_location=["a.json"], languages=Languages(rs=True))
        assert PluginConfig.from_dict(config.to_dict()) == config


class TestReleaseContext:
    def test_version(self):
        assert ReleaseContext.from_dict({"nextRelease": {"version": "1.2.3"}}).version == "1.2.3"

    def test_missing_version(self):
        assert ReleaseContext.from_dict(None).version is None
        assert ReleaseContext.from_dict({}).version is None
        assert ReleaseContext.from_dict({"nextRelease": {}}).version is None
        assert ReleaseContext.from_dict({"nextRelease": {"version": "  "}}).version is None
