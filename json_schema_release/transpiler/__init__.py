"""
Transpiler - dereferenced JSON Schema to TypeScript, Go, Rust and Python types.

1. Analyzer: lift every object, enum and union of the schemas into named IR types
2. Backend: render the IR through the language's jinja2 templates
"""

from __future__ import annotations

from .analyzer import SchemaAnalyzer, TranspileError
from .ir_nodes import IR
from .transpiler import Transpiler

__all__ = [
    "IR",
    "SchemaAnalyzer",
    "Transpiler",
    "TranspileError",
]
