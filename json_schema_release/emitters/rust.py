"""
Rust emitter.

Writes `Cargo.toml` and `src/lib.rs`. An existing manifest keeps everything
but its package version; a missing or broken one is regenerated.
"""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from pathlib import Path

import tomlkit
from tomlkit.exceptions import TOMLKitError

from ..config import Language
from ..transpiler import Transpiler
from ..utils import RUST_RESERVED, snake_case
from .base import Emitter

logger = logging.getLogger(__name__)


def crate_name(title: str) -> str:
    """snake_case crate name for a schema title ("3D Shape" -> "schema_3_d_shape")."""
    name = snake_case(title) or "schema"
    if name[0].isdigit():
        name = f"schema_{name}"
    return f"{name}_" if name in RUST_RESERVED else name


def fresh_manifest(name: str, version: str) -> str:
    """Minimal manifest able to build the generated serde code."""
    doc = tomlkit.document()

    package = tomlkit.table()
    package.add("name", name)
    package.add("version", version)
    package.add("edition", "2021")
    doc.add("package", package)

    lib = tomlkit.table()
    lib.add("path", "src/lib.rs")
    doc.add("lib", lib)

    serde = tomlkit.inline_table()
    serde.update({"version": "1", "features": ["derive"]})
    dependencies = tomlkit.table()
    dependencies.add("serde", serde)
    dependencies.add("serde_json", "1")
    doc.add("dependencies", dependencies)

    return tomlkit.dumps(doc)


def merge_manifest(path: Path, name: str, version: str) -> str:
    """Return the manifest to write: the existing one with a new version, or a fresh one."""
    if not path.exists():
        return fresh_manifest(name, version)

    try:
        doc = tomlkit.parse(path.read_text(encoding="utf-8"))
    except (OSError, TOMLKitError) as e:
        logger.warning("Regenerating unreadable manifest %s: %s", path, e)
        return fresh_manifest(name, version)

    package = doc.get("package")
    if not isinstance(package, MutableMapping):
        logger.warning("Regenerating manifest %s: no [package] table", path)
        return fresh_manifest(name, version)

    package["version"] = version
    return tomlkit.dumps(doc)


class RustEmitter(Emitter):
    """Emits `Cargo.toml` and `src/lib.rs`."""

    LANGUAGE = Language.RS

    def generate(self, transpiler: Transpiler, schema: dict, outpath: Path, version: str) -> bool:
        source = self.render(transpiler)
        manifest_path = outpath / "Cargo.toml"
        self.write(manifest_path, merge_manifest(manifest_path, crate_name(schema["title"]), version))
        self.write(outpath / "src" / "lib.rs", source)
        return True
