"""
TypeScript emitter.

Writes the raw schema as a TypeScript module plus a declaration file with
the generated types, optionally compiling everything with tsc.
"""

from __future__ import annotations

import json
import logging
import subprocess
from pathlib import Path

from ..config import Language
from ..errors import release_error
from ..transpiler import Transpiler
from ..utils import TS_RESERVED, camel_case, escape_identifier
from .base import Emitter

logger = logging.getLogger(__name__)

# ES2015 target, CommonJS modules, strict, declarations, JSON module resolution
TSC_OPTIONS: tuple[str, ...] = (
    "--target",
    "es2015",
    "--module",
    "commonjs",
    "--lib",
    "es2015",
    "--declaration",
    "--strict",
    "--esModuleInterop",
    "--resolveJsonModule",
)


def ts_identifier(title: str) -> str:
    """camelCase identifier for a schema title ("My Schema" -> "mySchema")."""
    return escape_identifier(camel_case(title), TS_RESERVED, fallback="schema")


class TypeScriptEmitter(Emitter):
    """Emits `src/index.ts`, `src/schema.json` and `<output_name>.d.ts`."""

    LANGUAGE = Language.TS

    def generate(self, transpiler: Transpiler, schema: dict, outpath: Path, version: str) -> bool:
        name = ts_identifier(schema["title"])
        typings = self.render(transpiler)

        schema_json = outpath / "src" / "schema.json"
        index_ts = outpath / "src" / "index.ts"
        self.write(schema_json, json.dumps(schema, indent=2, ensure_ascii=False) + "\n")
        self.write(
            index_ts,
            "\n".join(
                [
                    f"export const {name} = {json.dumps(schema, ensure_ascii=False)};",
                    f"export default {name};",
                    "",
                ]
            ),
        )
        self.write(outpath / f"{self.config.output_name}.d.ts", typings)

        if self.config.compile_ts:
            self.compile(index_ts, schema_json, outpath / "build")
            self.write(outpath / "build" / "index.d.ts", typings)

        self.stamp_package_json(outpath / "package.json", version)
        return True

    def compile(self, index_ts: Path, schema_json: Path, build_dir: Path) -> None:
        """Compile the generated module into `build_dir`.

        Raises:
            SemanticReleaseError: ETSCOMPILE if tsc is missing or fails
        """
        command = [*self.config.tsc_command, *TSC_OPTIONS, "--outDir", str(build_dir), str(index_ts), str(schema_json)]
        logger.info("Compiling TypeScript: %s", " ".join(command))
        try:
            subprocess.run(command, check=True, capture_output=True, text=True)
        except OSError as e:
            raise release_error("ETSCOMPILE", f"Failed to execute {command[0]}: {e}") from e
        except subprocess.CalledProcessError as e:
            output = (e.stdout or "").strip() or (e.stderr or "").strip() or str(e)
            raise release_error("ETSCOMPILE", output) from e

    def stamp_package_json(self, path: Path, version: str) -> None:
        """Set the version of an existing package.json, leaving everything else untouched."""
        if not path.exists():
            return
        try:
            package = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Leaving unreadable %s untouched: %s", path, e)
            return
        if not isinstance(package, dict):
            logger.warning("Leaving %s untouched: not a JSON object", path)
            return
        package["version"] = version
        self.write(path, json.dumps(package, indent=2, ensure_ascii=False) + "\n")
