"""
Go backend.

Renders objects as structs with json tags, string and integer enums as
typed constants, and unions as interface{} (Go has no sum types). The
package clause is owned by the caller.
"""

from __future__ import annotations

import json
from typing import Any

from ...utils import pascal_case
from ..ir_nodes import DefKind, TypeDef, TypeKind, TypeRef
from .base import TranspilerBackend

_GO_ESCAPES = {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\r": "\\r", "\t": "\\t"}


def go_quote(text: str) -> str:
    """Go interpreted string literal for `text`."""
    return '"' + "".join(_GO_ESCAPES.get(char, char) for char in text) + '"'


def go_tag(tag: str) -> str:
    """Struct tag literal; raw unless the tag itself contains a backtick."""
    if "`" in tag:
        return go_quote(tag)
    return f"`{tag}`"


class GoBackend(TranspilerBackend):
    """Go type declaration backend."""

    TEMPLATE_LANG = "go"
    FILE_EXTENSION = "go"

    TYPE_MAP = {
        "string": "string",
        "number": "float64",
        "integer": "int64",
        "boolean": "bool",
        "null": "interface{}",
        "object": "map[string]interface{}",
    }

    def _reset(self) -> None:
        self._constants: set[str] = set()

    def translate_type(self, type_ref: TypeRef) -> str:
        if type_ref.kind == TypeKind.PRIMITIVE:
            return self.TYPE_MAP[type_ref.name]
        if type_ref.kind == TypeKind.NAMED:
            return type_ref.name
        if type_ref.kind == TypeKind.ARRAY:
            return f"[]{self.translate_type(type_ref.items)}"
        return "interface{}"

    def _field_type(self, type_ref: TypeRef, required: bool) -> str:
        go_type = self.translate_type(type_ref)
        if type_ref.is_recursive:
            return f"*{go_type}"
        if required or type_ref.kind in (TypeKind.ARRAY, TypeKind.ANY) or go_type.startswith(("map[", "interface")):
            return go_type
        return f"*{go_type}"

    def _prepare_type_context(self, type_def: TypeDef) -> dict[str, Any]:
        context: dict[str, Any] = {
            "name": type_def.name,
            "kind": type_def.kind.value,
            "description": type_def.description,
            "constants": [],
        }
        if type_def.kind == DefKind.OBJECT:
            taken: set[str] = set()
            fields = []
            for field in type_def.fields:
                name = pascal_case(field.name) or "Field"
                if name[0].isdigit():
                    name = f"Field{name}"
                tag = field.name if field.is_required else f"{field.name},omitempty"
                fields.append(
                    {
                        "name": self._unique(name, taken),
                        "type": self._field_type(field.type_ref, field.is_required),
                        "tag": go_tag(f"json:{go_quote(tag)}"),
                        "description": field.description,
                    }
                )
            context["fields"] = fields
        elif type_def.kind == DefKind.ENUM:
            context["underlying"], context["constants"] = self._enum(type_def)
        elif type_def.kind == DefKind.UNION:
            context["underlying"] = "interface{}"
        else:
            context["underlying"] = self.translate_type(type_def.alias or TypeRef())
        return context

    def _enum(self, type_def: TypeDef) -> tuple[str, list[dict[str, str]]]:
        values = type_def.enum_values
        if values and all(isinstance(v, str) for v in values):
            underlying = "string"
        elif values and all(isinstance(v, int) and not isinstance(v, bool) for v in values):
            underlying = "int64"
        else:
            return "interface{}", []

        constants = []
        for index, value in enumerate(values):
            suffix = pascal_case(str(value)) or f"Value{index}"
            if suffix[0].isdigit():
                suffix = f"N{suffix}"
            constants.append(
                {
                    "name": self._unique(f"{type_def.name}{suffix}", self._constants),
                    "value": json.dumps(value, ensure_ascii=False),
                }
            )
        return underlying, constants
