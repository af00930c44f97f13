"""
Transpiler backends.

Contains language-specific source renderers.
"""

from __future__ import annotations

from .base import TranspilerBackend
from .go_backend import GoBackend
from .python_backend import PythonBackend
from .rust_backend import RustBackend
from .typescript_backend import TypeScriptBackend

__all__ = [
    "TranspilerBackend",
    "TypeScriptBackend",
    "GoBackend",
    "RustBackend",
    "PythonBackend",
]
