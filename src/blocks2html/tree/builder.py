"""Build a nested content tree from flat block content.

Within a block, every span lists the marks that apply to its text. Marks
usually cover ranges that span several consecutive spans and may overlap, so
the flat list has to be folded into properly nested span nodes:

    "Normal" []  "only-bold" [strong]  "both" [strong, underline]  "u" [underline]

becomes

    Normal <strong>only-bold <underline>both</underline></strong> <underline>u</underline>

The fold keeps a stack of open span nodes (under a synthetic root). For each
span the sorted mark list is matched against the stack from the bottom; the
longest prefix of open nodes whose marks are still needed stays open, the
rest is closed, and the remaining marks are opened in sorted order. Sorting
makes the result independent of the order marks are listed on a span, and
prefix reuse means adjacent spans sharing marks share the same node.

At the array level, runs of list-item blocks with the same ``listItem``
style are coalesced into list nodes.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from blocks2html.errors import InvalidArgumentError
from blocks2html.keys import KeyGenerator
from blocks2html.migration import migrate
from blocks2html.model.nodes import Content, MarkValue, Node, SpanNode
from blocks2html.tree.handlers import DEFAULT_TYPE_HANDLERS, TypeHandler
from blocks2html.types import BlockDict

logger = logging.getLogger(__name__)

# Bare mark names that are expected without a markDef
DECORATOR_MARKS = frozenset({"strong", "em", "code", "underline", "strike-through"})

_SPAN_KEYS = frozenset({"_type", "text", "marks"})


def _mark_table(block: BlockDict) -> dict[str, dict[str, Any]]:
    mark_defs = block.get("markDefs") or []
    if not isinstance(mark_defs, list):
        raise InvalidArgumentError("Block `markDefs` must be a list")
    table: dict[str, dict[str, Any]] = {}
    for mark_def in mark_defs:
        if isinstance(mark_def, Mapping) and isinstance(mark_def.get("_key"), str):
            table[mark_def["_key"]] = dict(mark_def)
    return table


def _span_marks(span: Mapping[str, Any]) -> list[str]:
    marks = span.get("marks") or []
    if not isinstance(marks, list) or not all(isinstance(m, str) for m in marks):
        raise InvalidArgumentError("Span `marks` must be a list of mark keys")
    return sorted(marks)


class TreeBuilder:
    """Convert block content (v1 or v2) into content tree nodes."""

    def __init__(
        self,
        key_generator: KeyGenerator | None = None,
        type_handlers: Mapping[str, TypeHandler] | None = None,
    ) -> None:
        self.key_generator = key_generator
        self.type_handlers: dict[str, TypeHandler] = dict(DEFAULT_TYPE_HANDLERS)
        if type_handlers:
            self.type_handlers.update(type_handlers)

    def __call__(self, content: Any) -> Node | list[Node]:
        return self.build(content)

    def build(self, content: Any) -> Node | list[Node]:
        """Migrate ``content`` and build one node (single block) or a list of nodes."""
        migrated = migrate(content, key_generator=self.key_generator)
        if isinstance(migrated, list):
            return self.parse_array(migrated)
        return self.parse_block(migrated)

    def parse_spans(self, spans: Any, block: BlockDict) -> list[Content]:
        if not isinstance(spans, list):
            raise InvalidArgumentError("Block `children` must be a list of spans")

        mark_defs = _mark_table(block)
        root: list[Content] = []
        # (mark key, content list of the open node); index 0 is the root
        stack: list[tuple[str | None, list[Content]]] = [(None, root)]

        for span in spans:
            if not isinstance(span, Mapping):
                raise InvalidArgumentError(f"Span must be an object, got {type(span).__name__}")
            text = span.get("text")
            if not isinstance(text, str):
                raise InvalidArgumentError("Span is missing a string `text`")

            needed = _span_marks(span)

            pos = 1
            while pos < len(stack):
                open_key = stack[pos][0]
                if open_key not in needed:
                    break
                needed.remove(open_key)
                pos += 1
            del stack[pos:]

            for mark_key in needed:
                node = SpanNode(mark=self._resolve_mark(mark_key, mark_defs))
                stack[-1][1].append(node)
                stack.append((mark_key, node.content))

            attributes = {key: value for key, value in span.items() if key not in _SPAN_KEYS}
            if attributes:
                stack[-1][1].append(SpanNode(attributes=attributes, content=[text]))
            else:
                stack[-1][1].append(text)

        return root

    def _resolve_mark(self, mark_key: str, mark_defs: Mapping[str, dict[str, Any]]) -> MarkValue:
        mark_def = mark_defs.get(mark_key)
        if mark_def is not None:
            return mark_def
        if mark_key not in DECORATOR_MARKS:
            logger.debug("Mark %r has no markDef; passing it through as a bare name", mark_key)
        return mark_key

    def parse_array(self, blocks: Sequence[Any]) -> list[Node]:
        nodes: list[Node] = []
        list_blocks: list[Mapping[str, Any]] = []

        for index, block in enumerate(blocks):
            if not self.is_list(block):
                nodes.append(self.parse_block(block))
                continue

            # Each list item arrives as its own block; bundle the run into one list
            list_blocks.append(block)
            next_block = blocks[index + 1] if index + 1 < len(blocks) else None
            if not self.is_list(next_block) or next_block["listItem"] != block["listItem"]:
                logger.debug(
                    "Coalesced %d %r list item(s) into one list", len(list_blocks), block["listItem"]
                )
                nodes.append(self.type_handlers["list"](list_blocks, self))
                list_blocks = []

        return nodes

    def parse_block(self, block: Any) -> Node:
        if not isinstance(block, Mapping):
            raise InvalidArgumentError(f"Block must be an object, got {type(block).__name__}")
        block_type = block.get("_type")
        if not isinstance(block_type, str) or not block_type:
            raise InvalidArgumentError("Block is missing a string `_type`")

        handler = self.type_handlers.get(block_type, self.type_handlers["default"])
        return handler(block, self)

    @staticmethod
    def is_list(item: Any) -> bool:
        return (
            isinstance(item, Mapping)
            and item.get("_type") == "block"
            and item.get("listItem") is not None
        )


__all__ = ["DECORATOR_MARKS", "TreeBuilder"]
