from __future__ import annotations

import pytest

from blocks2html.errors import InvalidArgumentError
from blocks2html.model.nodes import (
    BlockNode,
    ListItemNode,
    ListNode,
    ObjectNode,
    SpanNode,
    node_from_dict,
    tree_from_dicts,
    tree_to_dicts,
)


def test_span_to_dict_omits_empty_fields() -> None:
    assert SpanNode().to_dict() == {"type": "span"}
    assert SpanNode(mark="em", content=["x"]).to_dict() == {
        "type": "span",
        "mark": "em",
        "content": ["x"],
    }


def test_span_mark_name() -> None:
    assert SpanNode(mark="strong").mark_name == "strong"
    assert SpanNode(mark={"_key": "k", "_type": "link"}).mark_name == "link"
    assert SpanNode(mark={"_key": "k"}).mark_name is None
    assert SpanNode().mark_name is None


def test_children_do_not_affect_equality() -> None:
    assert BlockNode(content=["x"]) == BlockNode(content=["x"], children=["<b>x</b>"])
    assert "children" not in BlockNode().to_dict()


def test_type_is_fixed_per_node_class() -> None:
    assert [cls().type for cls in (BlockNode, ListNode, ListItemNode, SpanNode)] == [
        "block",
        "list",
        "listItem",
        "span",
    ]


def test_tree_round_trips_through_dicts() -> None:
    tree = [
        BlockNode(
            style="h2",
            content=["a", SpanNode(mark={"_key": "k", "_type": "link", "href": "/"}, content=["b"])],
        ),
        ListNode(item_style="bullet", items=[BlockNode(content=["c"])]),
        ObjectNode(type="author", attributes={"name": "Test Person"}),
        SpanNode(attributes={"author": {"name": "T"}}, content=["d"]),
        ListItemNode(content=["e"]),
    ]
    assert tree_from_dicts(tree_to_dicts(tree)) == tree


def test_node_from_dict_passes_nodes_through() -> None:
    node = BlockNode()
    assert node_from_dict(node) is node


def test_unknown_type_becomes_object_node() -> None:
    assert node_from_dict({"type": "video", "attributes": {"src": "v.mp4"}}) == ObjectNode(
        type="video", attributes={"src": "v.mp4"}
    )


@pytest.mark.parametrize(
    "data",
    [
        "block",
        {"style": "normal"},
        {"type": ""},
        {"type": "block", "content": "text"},
        {"type": "list", "items": "x"},
    ],
)
def test_node_from_dict_rejects_malformed(data: object) -> None:
    with pytest.raises(InvalidArgumentError):
        node_from_dict(data)
