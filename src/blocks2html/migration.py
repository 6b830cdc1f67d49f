"""Migration of legacy (v1) block content to the current (v2) format.

v1 blocks keep their text runs under ``spans`` and store inline mark objects
(links, annotations) directly on each span under an arbitrary key:

    {"_type": "span", "text": "click", "marks": [], "link": {"href": "..."}}

v2 blocks keep the runs under ``children`` and move every inline mark object
into the block's ``markDefs`` list, referenced from the span by a generated
key:

    {"_type": "span", "text": "click", "marks": ["6721bbe"]}
    markDefs: [{"_key": "6721bbe", "_type": "link", "href": "..."}]

Blocks without ``spans`` are already v2 (or not blocks at all) and pass
through untouched, which makes migration idempotent.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from blocks2html.errors import InvalidArgumentError, UnsupportedVersionError
from blocks2html.keys import KeyGenerator, random_key
from blocks2html.types import BlockDict, LegacyBlockDict, LegacySpanDict, MarkDefDict, SpanDict

logger = logging.getLogger(__name__)

SUPPORTED_VERSION = 2
_KNOWN_SPAN_KEYS = frozenset({"_type", "text", "marks"})


def _migrate_span(
    span: LegacySpanDict,
    mark_defs: list[MarkDefDict],
    key_generator: KeyGenerator,
) -> SpanDict:
    if not isinstance(span, Mapping):
        raise InvalidArgumentError(f"Span must be an object, got {type(span).__name__}")

    raw_marks = span.get("marks") or []
    if not isinstance(raw_marks, list):
        raise InvalidArgumentError("Span `marks` must be a list")

    migrated: Any = {key: value for key, value in span.items() if key in _KNOWN_SPAN_KEYS}
    marks = list(raw_marks)

    for name, value in span.items():
        if name in _KNOWN_SPAN_KEYS:
            continue
        definition = dict(value) if isinstance(value, Mapping) else {"value": value}
        mark_key = key_generator(value)
        marks.append(mark_key)
        mark_defs.append({**definition, "_key": mark_key, "_type": name})

    migrated["marks"] = marks
    return migrated


def migrate_block(
    block: LegacyBlockDict | BlockDict,
    *,
    version: int = SUPPORTED_VERSION,
    key_generator: KeyGenerator | None = None,
) -> Any:
    """Upgrade a single block to the v2 format.

    Args:
        block: Block document, v1 (``spans``) or already v2
        version: Target format version; only 2 is implemented
        key_generator: Strategy producing mark keys from mark values
            (defaults to globally unique random keys)

    Returns:
        A new v2 block, or ``block`` itself when it has no ``spans``

    Raises:
        UnsupportedVersionError: If ``version`` is not 2
        InvalidArgumentError: If ``spans`` is not a list of span objects
    """
    if version != SUPPORTED_VERSION:
        raise UnsupportedVersionError(version)

    if not isinstance(block, Mapping) or "spans" not in block:
        return block

    spans = block["spans"]
    if not isinstance(spans, list):
        raise InvalidArgumentError("Block `spans` must be a list")

    generate = key_generator or random_key
    mark_defs: list[MarkDefDict] = []
    children = [_migrate_span(span, mark_defs, generate) for span in spans]

    migrated = {key: value for key, value in block.items() if key != "spans"}
    migrated["children"] = children
    migrated["markDefs"] = mark_defs
    logger.debug(
        "Migrated v1 block (%d spans, %d mark definitions)", len(children), len(mark_defs)
    )
    return migrated


def migrate(
    content: Any,
    *,
    version: int = SUPPORTED_VERSION,
    key_generator: KeyGenerator | None = None,
) -> Any:
    """Migrate a single block or a list of blocks to the v2 format.

    Raises:
        InvalidArgumentError: If ``content`` is neither a block nor a list
    """
    if isinstance(content, Mapping) and "_type" in content:
        return migrate_block(content, version=version, key_generator=key_generator)
    if isinstance(content, list):
        return [
            migrate_block(block, version=version, key_generator=key_generator)
            for block in content
        ]
    raise InvalidArgumentError(
        "Content must be a block (object with `_type`) or a list of blocks, "
        f"got {type(content).__name__}"
    )


__all__ = ["SUPPORTED_VERSION", "migrate", "migrate_block"]
