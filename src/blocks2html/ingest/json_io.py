"""JSON reading and writing for block content documents.

- Deterministic JSON serialization with sorted keys (trees, migrated blocks)
- Loading JSON documents from disk with errors mapped to DocumentSourceError
- Atomic file writing to prevent partially written output
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Any

from blocks2html.errors import DocumentSourceError


def content_to_json(obj: Any, *, pretty: bool = True) -> str:
    """Serialize JSON-compatible content deterministically (sorted keys)."""
    return json.dumps(
        obj,
        ensure_ascii=False,
        sort_keys=True,
        indent=2 if pretty else None,
    )


def load_json(path: Path, *, encoding: str = "utf-8") -> Any:
    """Read and decode a JSON file.

    Raises:
        DocumentSourceError: If the file cannot be read or is not valid JSON
    """
    try:
        text = path.read_text(encoding=encoding)
    except OSError as exc:
        raise DocumentSourceError(path, exc) from exc
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise DocumentSourceError(path, exc) from exc


def atomic_write_text(path: Path, data: str, *, encoding: str = "utf-8") -> None:
    """Atomically write text to a file by writing to a temp file then replacing.

    Ensures parent directories exist and minimizes risk of partial writes.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with NamedTemporaryFile("w", encoding=encoding, dir=str(path.parent), delete=False) as tmp:
        tmp.write(data)
        tmp.flush()
        os.fsync(tmp.fileno())
        tmp_path = Path(tmp.name)
    os.replace(tmp_path, path)


__all__ = ["atomic_write_text", "content_to_json", "load_json"]
