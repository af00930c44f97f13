"""
TypeScript backend.

Renders objects as interfaces and everything else as type aliases.
"""

from __future__ import annotations

import json
import re
from typing import Any

from ..ir_nodes import DefKind, TypeDef, TypeKind, TypeRef
from .base import TranspilerBackend

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


class TypeScriptBackend(TranspilerBackend):
    """TypeScript declaration backend."""

    TEMPLATE_LANG = "ts"
    FILE_EXTENSION = "ts"

    TYPE_MAP = {
        "string": "string",
        "number": "number",
        "integer": "number",
        "boolean": "boolean",
        "null": "null",
        "object": "{ [key: string]: any }",
    }

    def translate_type(self, type_ref: TypeRef) -> str:
        if type_ref.kind == TypeKind.PRIMITIVE:
            return self.TYPE_MAP[type_ref.name]
        if type_ref.kind == TypeKind.NAMED:
            return type_ref.name
        if type_ref.kind == TypeKind.ARRAY:
            inner = self.translate_type(type_ref.items)
            if not _IDENTIFIER.match(inner):
                inner = f"({inner})"
            return f"{inner}[]"
        return "any"

    def _prepare_type_context(self, type_def: TypeDef) -> dict[str, Any]:
        context: dict[str, Any] = {
            "name": type_def.name,
            "kind": type_def.kind.value,
            "description": _comment(type_def.description),
        }
        if type_def.kind == DefKind.OBJECT:
            context["fields"] = [
                {
                    "key": field.name if _IDENTIFIER.match(field.name) else json.dumps(field.name),
                    "optional": not field.is_required,
                    "type": self.translate_type(field.type_ref),
                    "description": _comment(field.description),
                }
                for field in type_def.fields
            ]
        elif type_def.kind == DefKind.ENUM:
            context["value"] = " | ".join(json.dumps(value) for value in type_def.enum_values) or "never"
        elif type_def.kind == DefKind.UNION:
            context["value"] = " | ".join(self.translate_type(variant) for variant in type_def.variants) or "any"
        else:
            context["value"] = self.translate_type(type_def.alias or TypeRef())
        return context


def _comment(text: str) -> str:
    return text.replace("*/", "*\\/")
