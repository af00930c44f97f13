"""
Plugin configuration and release context.

The host hands both over as plain dictionaries using its own camelCase keys;
from_dict maps them onto the dataclasses used by the pipeline.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_NAME = "generated-typings"


class Language(str, Enum):
    """Target languages, declared in generation order."""

    TS = "ts"
    GO = "go"
    RS = "rs"
    PY = "py"


@dataclass
class Languages:
    """Per-language selection flags. An unset flag means "skip"."""

    ts: bool = False
    go: bool = False
    rs: bool = False
    py: bool = False

    @staticmethod
    def from_dict(d: dict) -> Languages:
        languages = Languages()
        for language in Language:
            setattr(languages, language.value, bool(d.get(language.value, False)))
        return languages

    def is_selected(self, language: Language) -> bool:
        return getattr(self, language.value)


@dataclass
class PluginConfig:
    """Configuration options recognized by the plugin."""

    # One schema path or an ordered list of them; the first one is the primary schema
    schema_location: str | list[str] | None = None

    # Output root directory (None = current working directory)
    outpath: str | None = None

    # Base name of the single-file TypeScript declaration artifact
    output_name: str = DEFAULT_OUTPUT_NAME

    # Selected languages (None = all languages)
    languages: Languages | None = None

    # Run the TypeScript compiler after writing the TypeScript sources
    compile_ts: bool = False

    # Command used to invoke the TypeScript compiler
    tsc_command: list[str] = field(default_factory=lambda: ["tsc"])

    # Host keys that differ from the attribute names
    _ALIASES = {
        "schemaLocation": "schema_location",
        "outputName": "output_name",
        "compileTs": "compile_ts",
        "tscCommand": "tsc_command",
    }

    @staticmethod
    def from_dict(d: dict) -> PluginConfig:
        """Create a config from a host configuration dictionary."""
        config = PluginConfig()
        for k, v in d.items():
            name = PluginConfig._ALIASES.get(k, k)
            if name == "languages" and isinstance(v, dict):
                config.languages = Languages.from_dict(v)
            elif name == "tsc_command" and isinstance(v, str):
                config.tsc_command = v.split()
            elif not name.startswith("_") and hasattr(config, name):
                setattr(config, name, v)
            else:
                logger.debug("Ignoring unknown plugin option %r", k)
        return config

    def to_dict(self) -> dict:
        """Convert config to a host configuration dictionary."""
        return {
            "schemaLocation": self.schema_location,
            "outpath": self.outpath,
            "outputName": self.output_name,
            "languages": None if self.languages is None else {lang.value: self.languages.is_selected(lang) for lang in Language},
            "compileTs": self.compile_ts,
            "tscCommand": list(self.tsc_command),
        }

    @property
    def schema_locations(self) -> list[str]:
        """Configured schema locations as a list (empty when unset)."""
        if self.schema_location is None:
            return []
        if isinstance(self.schema_location, str):
            return [self.schema_location] if self.schema_location else []
        return [location for location in self.schema_location if location]

    def selected_languages(self) -> list[Language]:
        """Languages to generate, in generation order."""
        if self.languages is None:
            return list(Language)
        return [language for language in Language if self.languages.is_selected(language)]


@dataclass
class NextRelease:
    version: str | None = None


@dataclass
class ReleaseContext:
    """Release metadata supplied by the lifecycle host."""

    next_release: NextRelease | None = None

    @staticmethod
    def from_dict(d: dict | None) -> ReleaseContext:
        context = ReleaseContext()
        next_release: Any = (d or {}).get("nextRelease")
        if isinstance(next_release, dict):
            context.next_release = NextRelease(version=next_release.get("version"))
        return context

    @property
    def version(self) -> str | None:
        """The next release version, or None when missing or blank."""
        if self.next_release is None or not isinstance(self.next_release.version, str):
            return None
        return self.next_release.version.strip() or None
