"""
Transpiler facade.

The pipeline only talks to this class: it is built once from the
dereferenced schema (or schema set) and renders one language at a time.
"""

from __future__ import annotations

from ..config import Language
from .analyzer import SchemaAnalyzer
from .backends import GoBackend, PythonBackend, RustBackend, TranspilerBackend, TypeScriptBackend

BACKENDS: dict[Language, type[TranspilerBackend]] = {
    Language.TS: TypeScriptBackend,
    Language.GO: GoBackend,
    Language.RS: RustBackend,
    Language.PY: PythonBackend,
}


class Transpiler:
    """Renders type definitions for dereferenced schemas."""

    def __init__(self, schemas: dict | list[dict]):
        """
        Analyze the schemas.

        Args:
            schemas: One dereferenced schema or a list of them

        Raises:
            TranspileError: If a schema cannot be analyzed
        """
        if isinstance(schemas, dict):
            schemas = [schemas]
        self.schemas = list(schemas)
        self.ir = SchemaAnalyzer(self.schemas).analyze()

    def render_for(self, language: Language) -> str:
        """Render the source code of `language`."""
        return BACKENDS[Language(language)]().generate(self.ir)

    def to_ts(self) -> str:
        return self.render_for(Language.TS)

    def to_go(self) -> str:
        return self.render_for(Language.GO)

    def to_rs(self) -> str:
        return self.render_for(Language.RS)

    def to_py(self) -> str:
        return self.render_for(Language.PY)
