from __future__ import annotations

import json
from pathlib import Path

TEST_DATA = Path(__file__).parent / "test_data"


def load_test_schema(name: str) -> dict:
    with open(TEST_DATA / name) as f:
        return json.load(f)


def generated_files(root: Path) -> list[str]:
    """Relative paths of every file under `root`, sorted."""
    return sorted(p.relative_to(root).as_posix() for p in root.rglob("*") if p.is_file())
