"""
Release lifecycle plugin.

Implements the `verifyConditions` and `prepare` steps of the release host:

1. verify_conditions: every configured schema file exists
2. prepare: load, dereference and transpile the schemas, then run the
   selected emitters in the fixed order TS, Go, Rust, Python

prepare refuses to run until verify_conditions succeeded on the same
plugin instance. The module-level functions share one process-wide
instance for hosts that call plain functions.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from .checker import exists
from .config import PluginConfig, ReleaseContext
from .dereferencer import DereferenceError, dereference
from .emitters import EMITTERS, AtomicWriter
from .errors import release_error
from .loader import load_schemas, resolve_locations
from .transpiler import Transpiler, TranspileError

logger = logging.getLogger(__name__)


def _as_config(plugin_config: PluginConfig | dict) -> PluginConfig:
    if isinstance(plugin_config, PluginConfig):
        return plugin_config
    return PluginConfig.from_dict(plugin_config or {})


def _as_context(context: ReleaseContext | dict | None) -> ReleaseContext:
    if isinstance(context, ReleaseContext):
        return context
    return ReleaseContext.from_dict(context)


class ReleasePlugin:
    """One verify-then-prepare release cycle."""

    def __init__(self, cwd: str | Path | None = None, writer: AtomicWriter | None = None):
        """
        Args:
            cwd: Directory schema locations and outpath are relative to (default: process cwd at call time)
            writer: Writer used by the emitters
        """
        self._cwd = Path(cwd) if cwd is not None else None
        self.writer = writer or AtomicWriter()
        self.verified = False

    @property
    def cwd(self) -> Path:
        return self._cwd if self._cwd is not None else Path(os.getcwd())

    def verify_conditions(self, plugin_config: PluginConfig | dict, context: ReleaseContext | dict | None = None) -> bool:
        """Check that every configured schema exists.

        Returns:
            True, and marks the plugin verified

        Raises:
            SemanticReleaseError: ESCHEMALOCATION when no schema is configured,
                ENODOCUMENT listing every schema that does not exist
        """
        config = _as_config(plugin_config)
        locations = config.schema_locations
        if not locations:
            raise release_error("ESCHEMALOCATION")

        paths = resolve_locations(locations, self.cwd)
        missing = [str(path) for path in paths if not exists(path)]
        if missing:
            raise release_error("ENODOCUMENT", missing)

        self.verified = True
        logger.info("Verified %d schema(s): %s", len(paths), ", ".join(str(p) for p in paths))
        return self.verified

    def prepare(self, plugin_config: PluginConfig | dict, context: ReleaseContext | dict | None) -> bool:
        """Generate the artifacts of every selected language.

        Returns:
            True once every selected emitter completed

        Raises:
            SemanticReleaseError: on any fatal failure; artifacts written before
                the failure are left in place
        """
        if not self.verified:
            raise release_error("ENOTVERIFIED")

        version = _as_context(context).version
        if version is None:
            raise release_error("ENOVERSION")

        config = _as_config(plugin_config)
        outpath = self.cwd / (config.outpath or ".")
        try:
            (outpath / "src").mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise release_error("EWRITE", str(outpath), str(e)) from e

        locations = config.schema_locations
        if not locations:
            raise release_error("ESCHEMALOCATION")
        schemas = load_schemas(locations, self.cwd)
        primary = schemas[0]
        if not isinstance(primary.get("title"), str) or not primary["title"].strip():
            raise release_error("ENOTITLE", str(resolve_locations(locations, self.cwd)[0]))

        dereferenced = []
        for path, schema in zip(resolve_locations(locations, self.cwd), schemas):
            try:
                dereferenced.append(dereference(schema, path.parent))
            except DereferenceError as e:
                raise release_error("EDEREFERENCE", f"{path}: {e}") from e

        try:
            transpiler = Transpiler(dereferenced)
        except TranspileError as e:
            raise release_error("ETRANSPILE", "schema", str(e)) from e

        for language in config.selected_languages():
            logger.info("Generating %s artifacts for %s %s", language.value, primary["title"], version)
            EMITTERS[language](config, self.writer).generate(transpiler, primary, outpath, version)

        return True


_default_plugin = ReleasePlugin()


def verify_conditions(plugin_config: PluginConfig | dict, context: ReleaseContext | dict | None = None) -> bool:
    """verifyConditions step on the process-wide plugin."""
    return _default_plugin.verify_conditions(plugin_config, context)


def prepare(plugin_config: PluginConfig | dict, context: ReleaseContext | dict | None) -> bool:
    """prepare step on the process-wide plugin."""
    return _default_plugin.prepare(plugin_config, context)
