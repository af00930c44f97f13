"""
Per-language emitters.

EMITTERS maps every Language to its emitter, in generation order.
"""

from __future__ import annotations

from ..config import Language
from .base import Emitter
from .go import GoEmitter
from .python import PythonEmitter
from .rust import RustEmitter
from .typescript import TypeScriptEmitter
from .writer import AtomicWriter, CodeWriteError

EMITTERS: dict[Language, type[Emitter]] = {
    Language.TS: TypeScriptEmitter,
    Language.GO: GoEmitter,
    Language.RS: RustEmitter,
    Language.PY: PythonEmitter,
}

__all__ = [
    "EMITTERS",
    "Emitter",
    "TypeScriptEmitter",
    "GoEmitter",
    "RustEmitter",
    "PythonEmitter",
    "AtomicWriter",
    "CodeWriteError",
]
