"""
Existence check for schema files.
"""

from __future__ import annotations

import os
from pathlib import Path


def exists(path: str | Path) -> bool:
    """Return True when `path` is an existing, readable regular file.

    Never raises: permission problems and missing files both report False.
    """
    try:
        return Path(path).is_file() and os.access(path, os.R_OK)
    except OSError:
        return False
