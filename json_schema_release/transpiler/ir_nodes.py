"""
IR (Intermediate Representation) node definitions.

These nodes represent the analyzed, dereferenced schema, ready for
code generation. Every nested object, enum and union is lifted to a
named TypeDef so each backend only has to render flat declarations.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class TypeKind(Enum):
    """Kind of type reference in the IR."""

    PRIMITIVE = "primitive"  # string, number, integer, boolean, null, object
    ARRAY = "array"  # list of `items`
    NAMED = "named"  # A generated TypeDef
    ANY = "any"  # Unconstrained value


class DefKind(Enum):
    """Kind of generated declaration."""

    OBJECT = "object"
    ENUM = "enum"
    UNION = "union"
    ALIAS = "alias"


@dataclass
class TypeRef:
    """A resolved type reference."""

    kind: TypeKind = TypeKind.ANY
    name: str = ""  # Primitive name or TypeDef name
    items: TypeRef | None = None  # For arrays

    # Back edge of a recursive schema; the named type is still being defined
    is_recursive: bool = False


@dataclass
class FieldDef:
    """A property of an object type."""

    name: str = ""  # Original JSON property name
    type_ref: TypeRef = field(default_factory=TypeRef)
    is_required: bool = False
    description: str = ""


@dataclass
class TypeDef:
    """A named declaration."""

    name: str = ""
    kind: DefKind = DefKind.ALIAS
    description: str = ""

    # For objects
    fields: list[FieldDef] = field(default_factory=list)

    # For enums
    enum_values: list[Any] = field(default_factory=list)

    # For unions
    variants: list[TypeRef] = field(default_factory=list)

    # For aliases
    alias: TypeRef | None = None


@dataclass
class IR:
    """Analyzed schema set; `types` are in dependency order."""

    types: list[TypeDef] = field(default_factory=list)

    def get(self, name: str) -> TypeDef | None:
        for type_def in self.types:
            if type_def.name == name:
                return type_def
        return None
