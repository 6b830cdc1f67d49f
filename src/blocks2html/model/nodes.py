"""Content tree node variants produced by the tree builder.

The tree is a closed set of node dataclasses sharing a ``type``
discriminator. Text leaves are plain ``str`` values. Each node converts to
and from the JSON-compatible dict shape used on the wire:

- block:    {"type": "block", "style": ..., "content": [...]}
- list:     {"type": "list", "itemStyle": ..., "items": [...]}
- listItem: {"type": "listItem", "content": [...]}
- span:     {"type": "span", "mark"?: ..., "attributes"?: {...}, "content"?: [...]}
- other:    {"type": <type>, "attributes": {...}}

``children`` holds rendered child markup and is only populated on the copy of
a node handed to a serializer; it never takes part in equality or dicts.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Union

from blocks2html.errors import InvalidArgumentError

MarkValue = Union[str, dict[str, Any]]


@dataclass(slots=True)
class BlockNode:
    style: str = "normal"
    content: list[Content] = field(default_factory=list)
    children: list[str] = field(default_factory=list, compare=False, repr=False)
    type: str = field(default="block", init=False)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "style": self.style, "content": _content_to_dicts(self.content)}


@dataclass(slots=True)
class ListNode:
    item_style: str = ""
    items: list[Node] = field(default_factory=list)
    children: list[str] = field(default_factory=list, compare=False, repr=False)
    type: str = field(default="list", init=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "itemStyle": self.item_style,
            "items": [item.to_dict() for item in self.items],
        }


@dataclass(slots=True)
class ListItemNode:
    content: list[Content] = field(default_factory=list)
    children: list[str] = field(default_factory=list, compare=False, repr=False)
    type: str = field(default="listItem", init=False)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "content": _content_to_dicts(self.content)}


@dataclass(slots=True)
class SpanNode:
    # mark: bare mark name ("strong") or the resolved markDef of the block
    content: list[Content] = field(default_factory=list)
    mark: MarkValue | None = None
    attributes: dict[str, Any] = field(default_factory=dict)
    children: list[str] = field(default_factory=list, compare=False, repr=False)
    type: str = field(default="span", init=False)

    @property
    def mark_name(self) -> str | None:
        if isinstance(self.mark, Mapping):
            name = self.mark.get("_type")
            return name if isinstance(name, str) else None
        return self.mark

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.type}
        if self.mark:
            data["mark"] = self.mark
        if self.attributes:
            data["attributes"] = self.attributes
        if self.content:
            data["content"] = _content_to_dicts(self.content)
        return data


@dataclass(slots=True)
class ObjectNode:
    """Opaque passthrough for any non-block content type (image, author, ...)."""

    type: str
    attributes: dict[str, Any] = field(default_factory=dict)
    children: list[str] = field(default_factory=list, compare=False, repr=False)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "attributes": self.attributes}


Node = Union[BlockNode, ListNode, ListItemNode, SpanNode, ObjectNode]
Content = Union[str, Node]

NODE_TYPES = (BlockNode, ListNode, ListItemNode, SpanNode, ObjectNode)


def _content_to_dicts(content: Sequence[Content]) -> list[Any]:
    return [child if isinstance(child, str) else child.to_dict() for child in content]


def tree_to_dicts(tree: Node | Sequence[Node]) -> Any:
    """Convert a node or a list of nodes to the JSON-compatible shape."""
    if isinstance(tree, NODE_TYPES):
        return tree.to_dict()
    return [node.to_dict() for node in tree]


def _content_from_dicts(raw: Any, where: str) -> list[Content]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise InvalidArgumentError(f"`{where}` must be a list")
    return [child if isinstance(child, str) else node_from_dict(child) for child in raw]


def node_from_dict(data: Any) -> Node:
    """Rebuild a node from its dict form.

    Raises:
        InvalidArgumentError: If ``data`` is not a mapping with a string ``type``
    """
    if isinstance(data, NODE_TYPES):
        return data
    if not isinstance(data, Mapping):
        raise InvalidArgumentError(f"Tree node must be an object, got {type(data).__name__}")
    node_type = data.get("type")
    if not isinstance(node_type, str) or not node_type:
        raise InvalidArgumentError("Tree node is missing a string `type`")

    if node_type == "block":
        return BlockNode(
            style=str(data.get("style") or "normal"),
            content=_content_from_dicts(data.get("content"), "content"),
        )
    if node_type == "list":
        items = data.get("items") or []
        if not isinstance(items, list):
            raise InvalidArgumentError("`items` must be a list")
        return ListNode(
            item_style=str(data.get("itemStyle") or ""),
            items=[node_from_dict(item) for item in items],
        )
    if node_type == "listItem":
        return ListItemNode(content=_content_from_dicts(data.get("content"), "content"))
    if node_type == "span":
        return SpanNode(
            content=_content_from_dicts(data.get("content"), "content"),
            mark=data.get("mark"),
            attributes=dict(data.get("attributes") or {}),
        )
    return ObjectNode(type=node_type, attributes=dict(data.get("attributes") or {}))


def tree_from_dicts(data: Any) -> Node | list[Node]:
    if isinstance(data, list):
        return [node_from_dict(item) for item in data]
    return node_from_dict(data)


__all__ = [
    "BlockNode",
    "Content",
    "ListItemNode",
    "ListNode",
    "MarkValue",
    "NODE_TYPES",
    "Node",
    "ObjectNode",
    "SpanNode",
    "node_from_dict",
    "tree_from_dicts",
    "tree_to_dicts",
]
