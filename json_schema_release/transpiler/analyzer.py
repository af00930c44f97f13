"""
Schema analyzer.

Walks dereferenced schemas and builds the IR consumed by the backends.
Types are appended once all of their dependencies are known, so the
resulting list is in dependency order (recursive back edges aside).
"""

from __future__ import annotations

import json
from typing import Any

from ..utils import type_identifier
from .ir_nodes import IR, DefKind, FieldDef, TypeDef, TypeKind, TypeRef

PRIMITIVE_TYPES = ("string", "number", "integer", "boolean", "null")

# Keywords that only apply to one instance type
OBJECT_KEYWORDS = ("properties", "required", "additionalProperties", "patternProperties", "minProperties", "maxProperties")
ARRAY_KEYWORDS = ("items", "minItems", "maxItems", "uniqueItems", "contains")


class TranspileError(RuntimeError):
    """Raised when a schema cannot be turned into types."""


class SchemaAnalyzer:
    """Builds the IR for a set of dereferenced schemas."""

    def __init__(self, schemas: list[dict]):
        self.schemas = schemas
        self.types: list[TypeDef] = []
        self._names: set[str] = set()
        self._by_key: dict[str, str] = {}
        # (title, reserved name) of the declarations being built, innermost last
        self._building: list[tuple[Any, str]] = []

    def analyze(self) -> IR:
        """Analyze every schema, root types first, then unused definitions."""
        for index, schema in enumerate(self.schemas):
            if not isinstance(schema, dict):
                raise TranspileError(f"Schema #{index} is not an object")
            self._define(schema, schema.get("title") or f"Schema{index or ''}")

        for schema in self.schemas:
            for container in ("definitions", "$defs"):
                definitions = schema.get(container)
                if not isinstance(definitions, dict):
                    continue
                for name, definition in definitions.items():
                    if isinstance(definition, dict):
                        definition = dict(definition)
                        definition.setdefault("title", name)
                    self._define(definition, name)

        return IR(types=list(self.types))

    def _define(self, schema: Any, hint: str) -> None:
        """Make sure `schema` produces a named declaration."""
        type_ref = self._type_ref(schema, hint)
        if type_ref.kind == TypeKind.NAMED and not type_ref.is_recursive:
            return
        key = self._key(schema)
        if key in self._by_key:
            return
        name = self._reserve(schema, hint)
        self._by_key[key] = name
        self.types.append(TypeDef(name=name, kind=DefKind.ALIAS, description=self._description(schema), alias=type_ref))

    def _type_ref(self, schema: Any, hint: str) -> TypeRef:
        if not isinstance(schema, dict):
            return TypeRef(kind=TypeKind.ANY)

        if isinstance(schema.get("$ref"), str):
            return TypeRef(kind=TypeKind.NAMED, name=self._back_edge_name(schema), is_recursive=True)

        if "enum" in schema or "const" in schema:
            return self._named(schema, hint, self._build_enum)

        if "oneOf" in schema or "anyOf" in schema:
            return self._named(schema, hint, self._build_union)

        if "allOf" in schema:
            return self._type_ref(self._merge_all_of(schema), hint)

        schema_type = schema.get("type")
        if isinstance(schema_type, list):
            if len(schema_type) == 1:
                schema_type = schema_type[0]
            else:
                return self._type_union(schema, hint)

        if schema_type == "object" or "properties" in schema:
            if schema.get("properties"):
                return self._named(schema, hint, self._build_object)
            return TypeRef(kind=TypeKind.PRIMITIVE, name="object")

        if schema_type == "array" or "items" in schema:
            items = schema.get("items")
            if isinstance(items, dict):
                return TypeRef(kind=TypeKind.ARRAY, items=self._type_ref(items, f"{hint} Item"))
            return TypeRef(kind=TypeKind.ARRAY, items=TypeRef(kind=TypeKind.ANY))

        if schema_type in PRIMITIVE_TYPES:
            return TypeRef(kind=TypeKind.PRIMITIVE, name=schema_type)

        return TypeRef(kind=TypeKind.ANY)

    def _named(self, schema: dict, hint: str, build) -> TypeRef:
        """Return a reference to the declaration for `schema`, building it once."""
        key = self._key(schema)
        if key in self._by_key:
            return TypeRef(kind=TypeKind.NAMED, name=self._by_key[key])

        name = self._reserve(schema, hint)
        self._by_key[key] = name
        self._building.append((schema.get("title"), name))
        type_def = build(schema, name)
        self._building.pop()
        type_def.description = self._description(schema)
        self.types.append(type_def)
        return TypeRef(kind=TypeKind.NAMED, name=name)

    def _build_object(self, schema: dict, name: str) -> TypeDef:
        required = set(schema.get("required") or [])
        fields = []
        for prop_name, prop_schema in schema["properties"].items():
            fields.append(
                FieldDef(
                    name=prop_name,
                    type_ref=self._type_ref(prop_schema, f"{name} {prop_name}"),
                    is_required=prop_name in required,
                    description=self._description(prop_schema),
                )
            )
        return TypeDef(name=name, kind=DefKind.OBJECT, fields=fields)

    def _build_enum(self, schema: dict, name: str) -> TypeDef:
        values = schema["enum"] if "enum" in schema else [schema["const"]]
        if not isinstance(values, list):
            raise TranspileError(f"enum of {name} must be a list")
        return TypeDef(name=name, kind=DefKind.ENUM, enum_values=list(values))

    def _build_union(self, schema: dict, name: str) -> TypeDef:
        options = schema.get("oneOf") or schema.get("anyOf") or []
        variants = []
        for index, option in enumerate(options):
            variant = self._type_ref(option, f"{name} {index}")
            if not any(self._same_ref(variant, existing) for existing in variants):
                variants.append(variant)
        return TypeDef(name=name, kind=DefKind.UNION, variants=variants)

    def _type_union(self, schema: dict, hint: str) -> TypeRef:
        """Union of a `type` list. Variants are named first so an object variant keeps its title."""
        key = self._key(schema)
        if key in self._by_key:
            return TypeRef(kind=TypeKind.NAMED, name=self._by_key[key])

        variants: list[TypeRef] = []
        for schema_type in schema["type"]:
            variant = self._type_ref(self._single_type(schema, schema_type), hint)
            if not any(self._same_ref(variant, existing) for existing in variants):
                variants.append(variant)

        name = self._reserve(schema, hint)
        self._by_key[key] = name
        self.types.append(TypeDef(name=name, kind=DefKind.UNION, description=self._description(schema), variants=variants))
        return TypeRef(kind=TypeKind.NAMED, name=name)

    @staticmethod
    def _single_type(schema: dict, schema_type: Any) -> dict:
        """`schema` restricted to one instance type."""
        if schema_type == "null":
            return {"type": "null"}
        foreign = set(OBJECT_KEYWORDS + ARRAY_KEYWORDS)
        if schema_type == "object":
            foreign -= set(OBJECT_KEYWORDS)
        elif schema_type == "array":
            foreign -= set(ARRAY_KEYWORDS)
        single = {k: v for k, v in schema.items() if k not in foreign}
        single["type"] = schema_type
        return single

    def _back_edge_name(self, schema: dict) -> str:
        """Name of the enclosing declaration a recursive $ref points back to."""
        title = schema.get("title")
        for building_title, name in reversed(self._building):
            if building_title == title:
                return name
        return self._base_name(title, schema["$ref"].split("/")[-1])

    @staticmethod
    def _merge_all_of(schema: dict) -> dict:
        merged = {k: v for k, v in schema.items() if k != "allOf"}
        properties = dict(merged.get("properties") or {})
        required = list(merged.get("required") or [])
        for part in schema["allOf"]:
            if not isinstance(part, dict):
                continue
            for k, v in part.items():
                if k == "properties":
                    properties.update(v)
                elif k == "required":
                    required.extend(r for r in v if r not in required)
                elif k not in merged:
                    merged[k] = v
        if properties:
            merged["properties"] = properties
            merged.setdefault("type", "object")
        if required:
            merged["required"] = required
        return merged

    @staticmethod
    def _base_name(title: Any, hint: str) -> str:
        return type_identifier(title if isinstance(title, str) else "") or type_identifier(hint) or "Type"

    def _reserve(self, schema: Any, hint: str) -> str:
        title = schema.get("title") if isinstance(schema, dict) else None
        base = self._base_name(title, hint)
        name = base
        counter = 2
        while name in self._names:
            name = f"{base}{counter}"
            counter += 1
        self._names.add(name)
        return name

    @staticmethod
    def _same_ref(a: TypeRef, b: TypeRef) -> bool:
        return a.kind == b.kind and a.name == b.name and (a.items is None) == (b.items is None) and (a.items is None or SchemaAnalyzer._same_ref(a.items, b.items))

    @staticmethod
    def _key(schema: Any) -> str:
        return json.dumps(schema, sort_keys=True, default=str)

    @staticmethod
    def _description(schema: Any) -> str:
        if isinstance(schema, dict) and isinstance(schema.get("description"), str):
            return " ".join(schema["description"].split())
        return ""
