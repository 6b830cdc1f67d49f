from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import replace
from types import MappingProxyType
from typing import Any

from blocks2html.diagnostics import log_render_configuration
from blocks2html.errors import ConfigError, InvalidArgumentError
from blocks2html.html.escape import escape
from blocks2html.html.serializers import (
    default_serializers,
    merge_serializers,
    validate_serializers,
)
from blocks2html.model.nodes import NODE_TYPES, Content, ListItemNode, ListNode, Node, node_from_dict
from blocks2html.model.render_options import HtmlRenderOptions

logger = logging.getLogger(__name__)


class HtmlBuilder:
    """Render a content tree to HTML through a type-keyed serializer registry.

    The registry is the defaults deep-merged with ``options.serializers`` and
    is read-only after construction, so one builder can be shared between
    renders.
    """

    def __init__(self, options: HtmlRenderOptions | None = None, **overrides: Any) -> None:
        options = options or HtmlRenderOptions()
        if overrides:
            options = options.with_overrides(**overrides)
        self.options = options

        registry = merge_serializers(default_serializers(options.charset), options.serializers)
        validate_serializers(registry)
        registry["marks"] = MappingProxyType(dict(registry["marks"]))
        self._serializers: Mapping[str, Any] = MappingProxyType(registry)
        log_render_configuration(options)

    @property
    def serializers(self) -> Mapping[str, Any]:
        return self._serializers

    @property
    def charset(self) -> str:
        return self.options.charset

    @property
    def image_options(self) -> Mapping[str, Any]:
        return self.options.image_options

    @property
    def project_id(self) -> str | None:
        return self.options.project_id

    @property
    def dataset(self) -> str | None:
        return self.options.dataset

    def __call__(self, content: Any) -> str:
        return self.build(content)

    def build(self, content: Any, parent: Node | None = None) -> str:
        """Render a text leaf, a node, or a sequence of nodes (or their dicts).

        Rendering recurses once per nesting level (block, list, each open
        mark), so very deep mark overlap is bounded by ``sys.getrecursionlimit()``.
        """
        if isinstance(content, str):
            return self.escape(content)

        if isinstance(content, NODE_TYPES) or isinstance(content, Mapping):
            items: Sequence[Any] = [content]
        elif isinstance(content, Sequence):
            items = content
        else:
            raise InvalidArgumentError(
                f"Cannot render {type(content).__name__}; expected a node, a list of nodes or text"
            )

        html = []
        for item in items:
            if isinstance(item, str):
                html.append(self.escape(item))
                continue
            html.append(self._build_node(node_from_dict(item), parent))
        return "".join(html)

    def _build_node(self, node: Node, parent: Node | None) -> str:
        serializer = self._serializers.get(node.type)
        if node.type == "marks" or not callable(serializer):
            raise ConfigError(
                f'No serializer registered for node type "{node.type}"', node_type=node.type
            )

        sources: list[Content]
        if isinstance(node, ListNode):
            sources = [ListItemNode(content=[item]) for item in node.items]
        else:
            sources = list(getattr(node, "content", []))

        children = [self.build(child, node) for child in sources]
        return str(serializer(replace(node, children=children), parent, self))

    def escape(self, text: str, charset: str | None = None) -> str:
        return escape(text, charset or self.charset)

    def mark_serializer(self, mark: Any) -> Any:
        """Look up the serializer for a bare mark name or a markDef (by ``_type``)."""
        name = mark.get("_type") if isinstance(mark, Mapping) else mark
        if not isinstance(name, str):
            return None
        return self._serializers["marks"].get(name)


__all__ = ["HtmlBuilder"]
