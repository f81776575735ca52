import json
import os
from pathlib import Path
from typing import Any


def write_external(path: Path, text: str) -> None:
    """Overwrite `path` as another writer would and move its mtime forward.

    The mtime is bumped explicitly so the change is visible even on
    filesystems with coarse timestamp granularity.
    """
    before = path.stat().st_mtime_ns if path.exists() else 0
    path.write_text(text, encoding="utf-8")
    bumped = max(path.stat().st_mtime_ns, before + 2_000_000_000)
    os.utime(path, ns=(bumped, bumped))


def write_external_json(path: Path, data: Any) -> None:
    write_external(path, json.dumps(data))


def read_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))
