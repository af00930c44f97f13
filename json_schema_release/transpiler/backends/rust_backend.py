"""
Rust backend.

Renders serde-derived structs and enums. Unions become untagged enums and
recursive references are boxed so every type has a known size.
"""

from __future__ import annotations

from typing import Any

from ...utils import RUST_RESERVED, pascal_case, snake_case
from ..ir_nodes import DefKind, TypeDef, TypeKind, TypeRef
from .base import TranspilerBackend

# Cannot be written as raw identifiers
_RUST_PATH_KEYWORDS = {"self", "super", "crate", "Self"}


def rust_string(value: str) -> str:
    """Quote `value` as a Rust string literal."""
    out = []
    for char in value:
        if char in ('"', "\\"):
            out.append("\\" + char)
        elif char == "\n":
            out.append("\\n")
        elif char == "\r":
            out.append("\\r")
        elif char == "\t":
            out.append("\\t")
        elif ord(char) < 0x20:
            out.append(f"\\u{{{ord(char):x}}}")
        else:
            out.append(char)
    return '"' + "".join(out) + '"'


class RustBackend(TranspilerBackend):
    """Rust type declaration backend."""

    TEMPLATE_LANG = "rs"
    FILE_EXTENSION = "rs"

    TYPE_MAP = {
        "string": "String",
        "number": "f64",
        "integer": "i64",
        "boolean": "bool",
        "null": "serde_json::Value",
        "object": "serde_json::Map<String, serde_json::Value>",
    }

    VARIANT_NAMES = {
        "string": "String",
        "number": "Number",
        "integer": "Integer",
        "boolean": "Boolean",
        "object": "Object",
    }

    def translate_type(self, type_ref: TypeRef) -> str:
        if type_ref.kind == TypeKind.PRIMITIVE:
            return self.TYPE_MAP[type_ref.name]
        if type_ref.kind == TypeKind.NAMED:
            return f"Box<{type_ref.name}>" if type_ref.is_recursive else type_ref.name
        if type_ref.kind == TypeKind.ARRAY:
            return f"Vec<{self.translate_type(type_ref.items)}>"
        return "serde_json::Value"

    def _prepare_type_context(self, type_def: TypeDef) -> dict[str, Any]:
        context: dict[str, Any] = {
            "name": type_def.name,
            "kind": type_def.kind.value,
            "description": type_def.description,
        }
        if type_def.kind == DefKind.OBJECT:
            context["fields"] = self._fields(type_def)
        elif type_def.kind == DefKind.ENUM:
            if type_def.enum_values and all(isinstance(v, str) for v in type_def.enum_values):
                context["variants"] = self._enum_variants(type_def.enum_values)
            else:
                context["kind"] = DefKind.ALIAS.value
                context["value"] = "serde_json::Value"
        elif type_def.kind == DefKind.UNION:
            context["variants"] = self._union_variants(type_def.variants)
        else:
            context["value"] = self.translate_type(type_def.alias or TypeRef())
        return context

    def _fields(self, type_def: TypeDef) -> list[dict[str, Any]]:
        taken: set[str] = set()
        fields = []
        for field in type_def.fields:
            ident = self._unique(snake_case(field.name) or "field", taken)
            if ident[0].isdigit():
                ident = f"_{ident}"
            if ident in _RUST_PATH_KEYWORDS:
                ident = f"{ident}_"
            elif ident in RUST_RESERVED:
                ident = f"r#{ident}"

            rust_type = self.translate_type(field.type_ref)
            attributes = []
            if ident.removeprefix("r#") != field.name:
                attributes.append(f"rename = {rust_string(field.name)}")
            if not field.is_required:
                rust_type = f"Option<{rust_type}>"
                attributes.append('skip_serializing_if = "Option::is_none"')
            fields.append(
                {
                    "ident": ident,
                    "type": rust_type,
                    "serde": ", ".join(attributes),
                    "description": field.description,
                }
            )
        return fields

    def _enum_variants(self, values: list[str]) -> list[dict[str, str]]:
        taken: set[str] = set()
        variants = []
        for index, value in enumerate(values):
            name = pascal_case(value) or f"Value{index}"
            if name[0].isdigit():
                name = f"V{name}"
            name = self._unique(name, taken)
            variants.append({"name": name, "rename": rust_string(value) if name != value else ""})
        return variants

    def _union_variants(self, refs: list[TypeRef]) -> list[dict[str, str]]:
        taken: set[str] = set()
        variants = []
        for ref in refs:
            if ref.kind == TypeKind.PRIMITIVE and ref.name == "null":
                variants.append({"name": self._unique("Null", taken), "type": ""})
                continue
            variants.append({"name": self._unique(self._variant_name(ref), taken), "type": self.translate_type(ref)})
        return variants

    def _variant_name(self, ref: TypeRef) -> str:
        if ref.kind == TypeKind.PRIMITIVE:
            return self.VARIANT_NAMES[ref.name]
        if ref.kind == TypeKind.NAMED:
            return ref.name
        if ref.kind == TypeKind.ARRAY:
            return f"{self._variant_name(ref.items)}Array"
        return "Any"
