"""
Python backend.

Generates TypedDict, Enum and Union declarations. Declarations come out in
dependency order, so only recursive references need to be quoted.
"""

from __future__ import annotations

import keyword
from typing import Any

from ...utils import upper_snake_case
from ..ir_nodes import DefKind, TypeDef, TypeKind, TypeRef
from .base import TranspilerBackend


class PythonBackend(TranspilerBackend):
    """Python typing backend."""

    TEMPLATE_LANG = "py"
    FILE_EXTENSION = "py"

    TYPE_MAP = {
        "string": "str",
        "number": "float",
        "integer": "int",
        "boolean": "bool",
        "null": "None",
        "object": "Dict[str, Any]",
    }

    def _reset(self) -> None:
        self.typing_imports: set[str] = set()
        self.needs_enum = False

    def _prefix_context(self) -> dict[str, Any]:
        return {
            "typing_imports": sorted(self.typing_imports),
            "needs_enum": self.needs_enum,
        }

    def translate_type(self, type_ref: TypeRef) -> str:
        if type_ref.kind == TypeKind.PRIMITIVE:
            if type_ref.name == "object":
                self.typing_imports.update(("Any", "Dict"))
            return self.TYPE_MAP[type_ref.name]
        if type_ref.kind == TypeKind.NAMED:
            return f'"{type_ref.name}"' if type_ref.is_recursive else type_ref.name
        if type_ref.kind == TypeKind.ARRAY:
            self.typing_imports.add("List")
            return f"List[{self.translate_type(type_ref.items)}]"
        self.typing_imports.add("Any")
        return "Any"

    def _prepare_type_context(self, type_def: TypeDef) -> dict[str, Any]:
        context: dict[str, Any] = {
            "name": type_def.name,
            "kind": type_def.kind.value,
            "description": type_def.description.replace("\\", "\\\\").replace('"', '\\"'),
        }
        if type_def.kind == DefKind.OBJECT:
            self.typing_imports.add("TypedDict")
            fields = []
            for field in type_def.fields:
                field_type = self.translate_type(field.type_ref)
                if not field.is_required:
                    self.typing_imports.add("NotRequired")
                    field_type = f"NotRequired[{field_type}]"
                fields.append({"key": field.name, "literal": repr(field.name), "type": field_type})
            context["fields"] = fields
            # Class syntax only works when every key is a plain identifier
            context["functional"] = any(not f.name.isidentifier() or keyword.iskeyword(f.name) for f in type_def.fields)
        elif type_def.kind == DefKind.ENUM:
            self.needs_enum = True
            context["members"] = self._enum_members(type_def.enum_values)
        elif type_def.kind == DefKind.UNION:
            variants = [self.translate_type(variant) for variant in type_def.variants]
            if len(variants) == 1:
                context["value"] = variants[0]
            elif variants:
                self.typing_imports.add("Union")
                context["value"] = f"Union[{', '.join(variants)}]"
            else:
                self.typing_imports.add("Any")
                context["value"] = "Any"
        else:
            context["value"] = self.translate_type(type_def.alias or TypeRef())
        return context

    def _enum_members(self, values: list[Any]) -> list[dict[str, str]]:
        taken: set[str] = set()
        members = []
        for index, value in enumerate(values):
            name = upper_snake_case(str(value)) or f"VALUE_{index}"
            if name[0].isdigit():
                name = f"VALUE_{name}"
            members.append({"name": self._unique(name, taken), "value": repr(value)})
        return members
