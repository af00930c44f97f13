"""
Base class for transpiler backends.

Defines the interface that all language-specific backends must implement.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import jinja2

from ...utils import camel_case, pascal_case, snake_case
from ..ir_nodes import IR, TypeDef, TypeRef

TEMPLATE_ROOT = Path(__file__).parent.parent.parent / "templates"


class TranspilerBackend(ABC):
    """Abstract base class for transpiler backends."""

    # Type mapping from schema primitive types to language types
    TYPE_MAP: dict[str, str] = {}

    # Template directory name
    TEMPLATE_LANG: str = ""

    # File extension
    FILE_EXTENSION: str = ""

    def __init__(self):
        self._setup_templates()

    def _setup_templates(self) -> None:
        """Set up Jinja2 templates."""
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(TEMPLATE_ROOT / self.TEMPLATE_LANG)),
            lstrip_blocks=True,
            trim_blocks=True,
            autoescape=False,
        )
        self.jinja_env.filters["pascal"] = pascal_case
        self.jinja_env.filters["snake"] = snake_case
        self.jinja_env.filters["camel"] = camel_case

        self.prefix_template = self.jinja_env.get_template(f"prefix.{self.FILE_EXTENSION}.jinja2")
        self.type_template = self.jinja_env.get_template(f"type.{self.FILE_EXTENSION}.jinja2")

    def generate(self, ir: IR) -> str:
        """
        Generate source code from IR.

        Args:
            ir: The intermediate representation

        Returns:
            Generated source code
        """
        self._reset()
        declarations = [self.type_template.render(self._prepare_type_context(type_def)) for type_def in ir.types]
        # Rendered after the declarations so it can depend on what they used
        prefix = self.prefix_template.render(self._prefix_context())
        parts = [part.strip("\n") for part in [prefix, *declarations]]
        return "\n\n".join(part for part in parts if part) + "\n"

    @abstractmethod
    def translate_type(self, type_ref: TypeRef) -> str:
        """
        Translate an IR type to a language-specific type string.

        Args:
            type_ref: The type reference

        Returns:
            Language-specific type string
        """

    @abstractmethod
    def _prepare_type_context(self, type_def: TypeDef) -> dict[str, Any]:
        """
        Prepare the template context for one declaration.

        Args:
            type_def: The declaration

        Returns:
            Dictionary of template variables
        """

    def _prefix_context(self) -> dict[str, Any]:
        return {}

    def _reset(self) -> None:
        """Reset per-generation state."""

    @staticmethod
    def _unique(name: str, taken: set[str]) -> str:
        """Return `name`, suffixed with a counter if already in `taken`, and record it."""
        candidate = name
        counter = 2
        while candidate in taken:
            candidate = f"{name}{counter}"
            counter += 1
        taken.add(candidate)
        return candidate
