from __future__ import annotations

import hashlib
import json
import uuid
from collections.abc import Callable
from typing import Any

KeyGenerator = Callable[[Any], str]


def random_key(_value: Any = None) -> str:
    """Return a globally unique mark key (12 hex chars of a uuid4)."""

    return uuid.uuid4().hex[:12]


def deterministic_key(value: Any) -> str:
    """Compute a stable 7-hex key from the canonical JSON of ``value``.

    key = sha1(json(value, sorted keys, compact))[:7]
    Identical mark values always produce identical keys, which keeps migrated
    output reproducible across runs.
    """

    seed = json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False, default=str)
    digest = hashlib.sha1(seed.encode("utf-8")).hexdigest()
    return digest[:7]


def resolve_key_generator(deterministic: bool) -> KeyGenerator:
    return deterministic_key if deterministic else random_key


__all__ = ["KeyGenerator", "deterministic_key", "random_key", "resolve_key_generator"]
