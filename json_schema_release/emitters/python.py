"""
Python emitter.
"""

from __future__ import annotations

from pathlib import Path

from ..config import Language
from ..transpiler import Transpiler
from .base import Emitter

OUTPUT_FILE = "index.py"


class PythonEmitter(Emitter):
    """Emits `<outpath>/index.py`; the writer checks that it parses."""

    LANGUAGE = Language.PY

    def generate(self, transpiler: Transpiler, schema: dict, outpath: Path, version: str) -> bool:
        self.write(outpath / OUTPUT_FILE, self.render(transpiler))
        return True
