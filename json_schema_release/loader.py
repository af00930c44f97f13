"""
Schema loading.

Reads every configured schema file and parses it as JSON. All locations are
attempted before reporting so a single error lists every broken schema.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from .errors import release_error

logger = logging.getLogger(__name__)


def resolve_locations(locations: str | list[str], cwd: str | Path) -> list[Path]:
    """Resolve one location or an ordered list of locations against `cwd`."""
    if isinstance(locations, (str, Path)):
        locations = [locations]
    return [(Path(cwd) / location).resolve() for location in locations]


def load_schemas(locations: str | list[str], cwd: str | Path) -> list[dict]:
    """Load and parse every schema, in input order.

    Args:
        locations: One schema path or an ordered list of paths
        cwd: Directory the paths are relative to

    Returns:
        Parsed schema objects, one per location

    Raises:
        SemanticReleaseError: ESCHEMAPARSE if any schema is not a JSON object,
            ESCHEMAREAD if the only failures were read errors
    """
    schemas: list[dict] = []
    read_failures: list[str] = []
    parse_failures: list[str] = []

    for path in resolve_locations(locations, cwd):
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            read_failures.append(f"{path}: {e}")
            continue

        try:
            schema = json.loads(text)
        except json.JSONDecodeError as e:
            parse_failures.append(f"{path}: {e}")
            continue

        if not isinstance(schema, dict):
            parse_failures.append(f"{path}: schema must be a JSON object, got {type(schema).__name__}")
            continue

        logger.debug("Loaded schema %s", path)
        schemas.append(schema)

    if parse_failures:
        raise release_error("ESCHEMAPARSE", read_failures + parse_failures)
    if read_failures:
        raise release_error("ESCHEMAREAD", read_failures)
    return schemas
