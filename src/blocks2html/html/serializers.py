"""Default serializers and the serializer registry merge.

A registry maps a node type to ``serializer(node, parent, builder) -> str``,
where ``node.children`` holds the already rendered child markup. The nested
``"marks"`` table maps a mark name to one of:

- a tag name: ``"strong"`` wraps as ``<strong>...</strong>``
- ``{"head": ..., "tail": ...}``: strings, or callables receiving the mark
- a callable ``(mark, children) -> str`` returning complete markup
- ``None``: the mark is disabled and children render unwrapped
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from blocks2html.errors import ConfigError
from blocks2html.html.escape import FALLBACK_CHARSET, escape
from blocks2html.html.images import image_url

if TYPE_CHECKING:
    from blocks2html.html.builder import HtmlBuilder

logger = logging.getLogger(__name__)

Serializer = Callable[[Any, Any, "HtmlBuilder"], str]

REQUIRED_NODE_TYPES = ("block", "list", "listItem", "span")


def default_block(block: Any, parent: Any, builder: HtmlBuilder) -> str:
    tag = "p" if block.style == "normal" else block.style
    return f"<{tag}>{''.join(block.children)}</{tag}>"


def default_list(list_node: Any, parent: Any, builder: HtmlBuilder) -> str:
    tag = "ol" if list_node.item_style == "number" else "ul"
    return f"<{tag}>{''.join(list_node.children)}</{tag}>"


def default_list_item(item: Any, parent: Any, builder: HtmlBuilder) -> str:
    return f"<li>{''.join(item.children)}</li>"


def _mark_part(part: Any, mark: Any) -> str:
    if part is None:
        return ""
    return str(part(mark)) if callable(part) else str(part)


def render_marked(span: Any, builder: HtmlBuilder) -> str:
    """Wrap the span's rendered children according to its mark serializer."""
    body = "".join(span.children)
    if not span.mark:
        return body

    mark_serializer = builder.mark_serializer(span.mark)
    if mark_serializer is None:
        logger.debug("No mark serializer for %r; rendering unwrapped", span.mark_name)
        return body
    if isinstance(mark_serializer, str):
        return f"<{mark_serializer}>{body}</{mark_serializer}>"
    if callable(mark_serializer):
        return str(mark_serializer(span.mark, span.children))
    if isinstance(mark_serializer, Mapping):
        head = _mark_part(mark_serializer.get("head"), span.mark)
        tail = _mark_part(mark_serializer.get("tail"), span.mark)
        return f"{head}{body}{tail}"
    raise ConfigError(
        f"Invalid mark serializer for {span.mark_name!r}: {type(mark_serializer).__name__}",
        node_type="span",
    )


def default_span(span: Any, parent: Any, builder: HtmlBuilder) -> str:
    rendered = render_marked(span, builder)
    link = span.attributes.get("link")
    if isinstance(link, Mapping) and link.get("href"):
        rendered = f'<a href="{builder.escape(str(link["href"]))}">{rendered}</a>'
    return rendered


def default_image(image: Any, parent: Any, builder: HtmlBuilder) -> str:
    url = image_url(
        image,
        project_id=builder.project_id,
        dataset=builder.dataset,
        image_options=builder.image_options,
    )
    # The URL is emitted as built, query string included
    return f'<figure><img src="{url}" /></figure>'


def _link_head(mark: Any, charset: str = FALLBACK_CHARSET) -> str:
    href = mark.get("href") if isinstance(mark, Mapping) else None
    if not href:
        return "<a>"
    return f'<a href="{escape(str(href), charset)}">'


def default_serializers(charset: str = FALLBACK_CHARSET) -> dict[str, Any]:
    """Return a fresh default registry; link hrefs are escaped for ``charset``."""
    return {
        "block": default_block,
        "list": default_list,
        "listItem": default_list_item,
        "span": default_span,
        "image": default_image,
        "marks": {
            "em": "em",
            "code": "code",
            "strong": "strong",
            "underline": {
                "head": '<span style="text-decoration: underline;">',
                "tail": "</span>",
            },
            "strike-through": "del",
            "link": {"head": functools.partial(_link_head, charset=charset), "tail": "</a>"},
        },
    }


def merge_serializers(
    defaults: Mapping[str, Any], overrides: Mapping[str, Any] | None
) -> dict[str, Any]:
    """Recursively merge ``overrides`` over ``defaults``.

    Caller entries win key by key; when both sides hold a mapping (the
    ``marks`` table, a head/tail pair) the merge descends into it. ``None``
    is a value like any other and replaces the default.
    """
    merged = dict(defaults)
    for key, value in (overrides or {}).items():
        base = merged.get(key)
        if isinstance(base, Mapping) and isinstance(value, Mapping):
            merged[key] = merge_serializers(base, value)
        else:
            merged[key] = value
    return merged


def validate_serializers(registry: Mapping[str, Any]) -> None:
    """Check that a merged registry can render the built-in tree node types.

    Raises:
        ConfigError: If a required serializer is missing or not callable
    """
    for node_type in REQUIRED_NODE_TYPES:
        if not callable(registry.get(node_type)):
            raise ConfigError(
                f'Serializer for node type "{node_type}" must be callable', node_type=node_type
            )
    if not isinstance(registry.get("marks"), Mapping):
        raise ConfigError("Serializer `marks` entry must be a mapping of mark name to serializer")


__all__ = [
    "REQUIRED_NODE_TYPES",
    "Serializer",
    "default_block",
    "default_image",
    "default_list",
    "default_list_item",
    "default_serializers",
    "default_span",
    "merge_serializers",
    "render_marked",
    "validate_serializers",
]
