from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import TYPE_CHECKING, Any

from blocks2html.model.nodes import BlockNode, ListNode, Node, ObjectNode

if TYPE_CHECKING:
    from blocks2html.tree.builder import TreeBuilder

TypeHandler = Callable[[Any, "TreeBuilder"], Node]


def block_handler(block: Mapping[str, Any], tree_builder: TreeBuilder) -> BlockNode:
    children = block.get("children")
    content = tree_builder.parse_spans(children, block) if children is not None else []
    return BlockNode(style=block.get("style") or "normal", content=content)


def list_handler(blocks: Sequence[Mapping[str, Any]], tree_builder: TreeBuilder) -> ListNode:
    """Wrap a run of list-item blocks (same ``listItem``) in one list node."""
    to_block = tree_builder.type_handlers["block"]
    item_style = (blocks[0].get("listItem") or "") if blocks else ""
    return ListNode(
        item_style=item_style,
        items=[to_block(block, tree_builder) for block in blocks],
    )


def default_handler(item: Mapping[str, Any], tree_builder: TreeBuilder) -> ObjectNode:
    # Everything but the type becomes opaque attributes for a custom serializer
    attributes = {key: value for key, value in item.items() if key != "_type"}
    return ObjectNode(type=item["_type"], attributes=attributes)


DEFAULT_TYPE_HANDLERS: dict[str, TypeHandler] = {
    "block": block_handler,
    "list": list_handler,
    "default": default_handler,
}

__all__ = [
    "DEFAULT_TYPE_HANDLERS",
    "TypeHandler",
    "block_handler",
    "default_handler",
    "list_handler",
]
