"""Render block content documents into content trees and HTML."""

from blocks2html.block_content import is_tree, migrate, migrate_block, to_html, to_tree
from blocks2html.errors import (
    Blocks2HtmlError,
    ConfigError,
    DocumentSourceError,
    InvalidArgumentError,
    UnsupportedVersionError,
)
from blocks2html.html.builder import HtmlBuilder
from blocks2html.keys import deterministic_key, random_key
from blocks2html.model.nodes import (
    BlockNode,
    ListItemNode,
    ListNode,
    ObjectNode,
    SpanNode,
    tree_from_dicts,
    tree_to_dicts,
)
from blocks2html.model.render_options import HtmlRenderOptions
from blocks2html.tree.builder import TreeBuilder

__version__ = "0.1.0"

__all__ = [
    "BlockNode",
    "Blocks2HtmlError",
    "ConfigError",
    "DocumentSourceError",
    "HtmlBuilder",
    "HtmlRenderOptions",
    "InvalidArgumentError",
    "ListItemNode",
    "ListNode",
    "ObjectNode",
    "SpanNode",
    "TreeBuilder",
    "UnsupportedVersionError",
    "__version__",
    "deterministic_key",
    "is_tree",
    "migrate",
    "migrate_block",
    "random_key",
    "to_html",
    "to_tree",
    "tree_from_dicts",
    "tree_to_dicts",
]
