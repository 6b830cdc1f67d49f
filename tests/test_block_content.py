from __future__ import annotations

from blocks2html import HtmlRenderOptions, is_tree, to_html, to_tree, tree_to_dicts
from blocks2html.model.nodes import BlockNode


def test_is_tree_tells_raw_content_from_trees(load_fixture) -> None:
    raw = load_fixture("list-numbered-blocks.json")
    tree = to_tree(raw)
    assert not is_tree(raw)
    assert not is_tree(load_fixture("normal-text.json"))
    assert is_tree(tree)
    assert is_tree(tree_to_dicts(tree))
    assert is_tree(BlockNode())
    assert is_tree([])
    assert not is_tree(42)


def test_to_html_accepts_raw_content_and_trees(load_fixture) -> None:
    raw = load_fixture("messy-text.json")
    expected = to_html(raw)
    assert expected.startswith("<p>Hacking <code>teh codez</code>")
    assert to_html(to_tree(raw)) == expected
    assert to_html(tree_to_dicts(to_tree(raw))) == expected


def test_to_html_options_and_overrides(load_fixture) -> None:
    raw = load_fixture("italicized-text.json")
    options = HtmlRenderOptions(serializers={"marks": {"em": "i"}})
    assert to_html(raw, options) == "<p>String with an <i>italicized</i> word.</p>"
    assert (
        to_html(raw, options, serializers={"marks": {"em": "b"}})
        == "<p>String with an <b>italicized</b> word.</p>"
    )
