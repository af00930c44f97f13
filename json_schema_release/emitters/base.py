"""
Base class for per-language emitters.

An emitter turns the transpiler output for one language into files under
the output root. Emitters never roll back: files written before a failure
stay in place.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path

from ..config import Language, PluginConfig
from ..errors import release_error
from ..transpiler import Transpiler, TranspileError
from .writer import AtomicWriter, CodeWriteError

logger = logging.getLogger(__name__)


class Emitter(ABC):
    """Abstract base class for per-language emitters."""

    LANGUAGE: Language

    def __init__(self, config: PluginConfig, writer: AtomicWriter | None = None):
        self.config = config
        self.writer = writer or AtomicWriter()

    @abstractmethod
    def generate(self, transpiler: Transpiler, schema: dict, outpath: Path, version: str) -> bool:
        """
        Write the artifacts of this language.

        Args:
            transpiler: Transpiler built from the dereferenced schema(s)
            schema: The original, non-dereferenced primary schema
            outpath: Output root directory (already created, with its `src` subdirectory)
            version: Release version being prepared

        Returns:
            True once every artifact is written

        Raises:
            SemanticReleaseError: If rendering, compiling or writing fails
        """

    def render(self, transpiler: Transpiler) -> str:
        """Render this emitter's language, reporting failures as ETRANSPILE."""
        try:
            return transpiler.render_for(self.LANGUAGE)
        except TranspileError as e:
            raise release_error("ETRANSPILE", self.LANGUAGE.value, str(e)) from e

    def write(self, path: Path, content: str) -> None:
        """Write one artifact atomically, reporting failures as EWRITE."""
        try:
            self.writer.write(path, content, self.LANGUAGE.value)
        except CodeWriteError as e:
            raise release_error("ETRANSPILE", self.LANGUAGE.value, str(e)) from e
        except OSError as e:
            raise release_error("EWRITE", str(path), str(e)) from e
        logger.info("Generated %s", path)
