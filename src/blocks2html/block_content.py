"""One-call entry points: block content in, tree or HTML out."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from blocks2html.html.builder import HtmlBuilder
from blocks2html.keys import KeyGenerator
from blocks2html.migration import migrate, migrate_block
from blocks2html.model.nodes import NODE_TYPES, Node
from blocks2html.model.render_options import HtmlRenderOptions
from blocks2html.tree.builder import TreeBuilder


def to_tree(content: Any, *, key_generator: KeyGenerator | None = None) -> Node | list[Node]:
    return TreeBuilder(key_generator=key_generator).build(content)


def is_tree(content: Any) -> bool:
    """Tell content trees apart from raw block content.

    Raw blocks carry ``_type``; tree nodes carry ``type``. A list is judged by
    its first element.
    """
    if isinstance(content, NODE_TYPES):
        return True
    if isinstance(content, Mapping):
        return "_type" not in content
    if isinstance(content, Sequence) and not isinstance(content, str):
        first = content[0] if content else None
        return not (isinstance(first, Mapping) and "_type" in first)
    return False


def to_html(content: Any, options: HtmlRenderOptions | None = None, **overrides: Any) -> str:
    """Render raw block content or an already built tree to HTML.

    Keyword overrides (``charset``, ``project_id``, ``dataset``,
    ``image_options``, ``serializers``) are applied on top of ``options``.
    """
    builder = HtmlBuilder(options, **overrides)
    tree = content if is_tree(content) else to_tree(content)
    return builder.build(tree)


__all__ = ["is_tree", "migrate", "migrate_block", "to_html", "to_tree"]
