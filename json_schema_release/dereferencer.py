"""
$ref dereferencing.

Inlines local JSON-pointer references and references into sibling schema
files. Recursive references cannot be inlined; the back edge is kept as a
named $ref so the transpiler can refer to the enclosing type by name.
"""

from __future__ import annotations

import json
import logging
from copy import deepcopy
from pathlib import Path
from typing import Any
from urllib.parse import unquote

logger = logging.getLogger(__name__)


class DereferenceError(RuntimeError):
    """Raised when a $ref cannot be resolved."""


def _unescape(token: str) -> str:
    return token.replace("~1", "/").replace("~0", "~")


def _escape(token: str) -> str:
    return token.replace("~", "~0").replace("/", "~1")


class Dereferencer:
    """Resolve every $ref of a schema into an inline definition."""

    def __init__(self, schema: dict, base_path: str | Path | None = None):
        """
        Initialize the dereferencer.

        Args:
            schema: The root schema; it is copied, never mutated
            base_path: Directory used to resolve references to other schema files
        """
        self.schema = deepcopy(schema)
        self.base_path = Path(base_path) if base_path else None
        self._documents: dict[str, Any] = {"": self.schema}

    def dereference(self) -> dict:
        """Return a copy of the schema with all references inlined."""
        return self._resolve(self.schema, "", "", stack=())

    def _resolve(self, node: Any, document: str, path: str, stack: tuple[str, ...]) -> Any:
        if isinstance(node, list):
            return [self._resolve(item, document, f"{path}/{index}", stack) for index, item in enumerate(node)]
        if not isinstance(node, dict):
            return node

        # Every enclosing object is on the stack, so a reference to any ancestor is a back edge
        stack = stack + (f"{document}#{path}",)
        ref = node.get("$ref")
        if not isinstance(ref, str):
            return {key: self._resolve(value, document, f"{path}/{_escape(key)}", stack) for key, value in node.items()}

        target_document, tokens = self._split_ref(ref, document)
        pointer = "".join(f"/{_escape(token)}" for token in tokens)
        target = self._lookup(target_document, tokens, ref)
        name = target.get("title") if isinstance(target, dict) and target.get("title") else self._pointer_name(tokens, target_document)

        if f"{target_document}#{pointer}" in stack:
            # Back edge of a recursive schema
            return {"$ref": ref, "title": name}

        resolved = self._resolve(target, target_document, pointer, stack)
        if isinstance(resolved, dict):
            resolved = dict(resolved)
            if name:
                resolved.setdefault("title", name)
            for sibling, value in node.items():
                if sibling != "$ref":
                    resolved[sibling] = self._resolve(value, document, f"{path}/{_escape(sibling)}", stack)
        return resolved

    def _split_ref(self, ref: str, document: str) -> tuple[str, list[str]]:
        """Split a $ref into (document key, decoded JSON pointer tokens)."""
        location, _, fragment = ref.partition("#")
        if "://" in location:
            raise DereferenceError(f"Unsupported remote reference: {ref}")
        if fragment in ("", "/"):
            tokens = []
        elif fragment.startswith("/"):
            # Fragments are URI encoded before being JSON-pointer escaped
            tokens = [_unescape(unquote(token)) for token in fragment[1:].split("/")]
        else:
            raise DereferenceError(f"Unsupported reference fragment: {ref}")
        if not location:
            return document, tokens
        if self.base_path is None:
            raise DereferenceError(f"Cannot resolve file reference without a base path: {ref}")
        origin = Path(document).parent if document else self.base_path
        return str((origin / location).resolve()), tokens

    def _lookup(self, document: str, tokens: list[str], ref: str) -> Any:
        current = self._load_document(document, ref)
        for token in tokens:
            if isinstance(current, list) and token.isdigit() and int(token) < len(current):
                current = current[int(token)]
            elif isinstance(current, dict) and token in current:
                current = current[token]
            else:
                raise DereferenceError(f"Unresolvable reference: {ref}")
        return current

    def _load_document(self, document: str, ref: str) -> Any:
        if document not in self._documents:
            try:
                with open(document, encoding="utf-8") as f:
                    self._documents[document] = json.load(f)
            except OSError as e:
                raise DereferenceError(f"Cannot read referenced schema {document} ({ref}): {e}") from e
            except json.JSONDecodeError as e:
                raise DereferenceError(f"Cannot parse referenced schema {document} ({ref}): {e}") from e
            logger.debug("Loaded referenced schema %s", document)
        return self._documents[document]

    @staticmethod
    def _pointer_name(tokens: list[str], document: str) -> str:
        if tokens and tokens[-1]:
            return tokens[-1]
        return Path(document).name.split(".")[0]


def dereference(schema: dict, base_path: str | Path | None = None) -> dict:
    """Convenience function returning `schema` with all references inlined."""
    return Dereferencer(schema, base_path).dereference()
