"""JSON Schema release artifacts

Release lifecycle plugin that verifies a JSON Schema and generates
TypeScript, Go, Rust and Python artifacts from it, stamped with the
release version.
"""

__version__ = "1.0.0"

from .config import Language, Languages, NextRelease, PluginConfig, ReleaseContext
from .errors import SemanticReleaseError
from .plugin import ReleasePlugin, prepare, verify_conditions
from .transpiler import Transpiler

__all__ = [
    "verify_conditions",
    "prepare",
    "ReleasePlugin",
    "PluginConfig",
    "ReleaseContext",
    "NextRelease",
    "Language",
    "Languages",
    "SemanticReleaseError",
    "Transpiler",
]
