"""
Go emitter.

Writes one `<package>.go` file holding the package clause, the raw schema
as a string constant and the generated types.
"""

from __future__ import annotations

import json
from pathlib import Path

from ..config import Language
from ..transpiler import Transpiler
from ..utils import GO_RESERVED, pascal_case, snake_case
from .base import Emitter


def go_package_name(title: str) -> str:
    """snake_case package name for a schema title ("Foo Bar" -> "foo_bar")."""
    name = snake_case(title) or "schema"
    if name[0].isdigit():
        name = f"schema_{name}"
    return f"{name}_" if name in GO_RESERVED else name


def go_raw_constant_name(title: str) -> str:
    """Exported constant holding the raw schema ("Foo Bar" -> "RawFooBar")."""
    return f"Raw{pascal_case(title)}"


def go_string_literal(schema: dict) -> str:
    """Compact JSON of `schema` quoted as a Go interpreted string literal."""
    raw = json.dumps(schema, separators=(",", ":"), ensure_ascii=False)
    return '"' + raw.replace("\\", "\\\\").replace('"', '\\"') + '"'


class GoEmitter(Emitter):
    """Emits `<outpath>/<package>.go`."""

    LANGUAGE = Language.GO

    def generate(self, transpiler: Transpiler, schema: dict, outpath: Path, version: str) -> bool:
        package = go_package_name(schema["title"])
        source = "\n".join(
            [
                "// Code generated by json_schema_release. DO NOT EDIT.",
                "",
                f"package {package}",
                "",
                f"const {go_raw_constant_name(schema['title'])} = {go_string_literal(schema)}",
                "",
                self.render(transpiler),
            ]
        )
        self.write(outpath / f"{package}.go", source)
        return True
