"""Document sources: where raw block content comes from.

The library never talks to the document-store API itself. Anything with a
``fetch(query, params)`` method (an API client, a fixture loader) can feed the
pipeline; :class:`JsonFileSource` covers exported JSON files, either raw
block content or an API response envelope (``{"result": ...}``).
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from blocks2html.block_content import to_html
from blocks2html.errors import InvalidArgumentError
from blocks2html.ingest.json_io import load_json
from blocks2html.model.render_options import HtmlRenderOptions
from blocks2html.types import DocumentSourceLike

logger = logging.getLogger(__name__)


def unwrap_response(body: Any) -> Any:
    """Return the ``result`` of an API response envelope, or ``body`` as is."""
    if isinstance(body, Mapping) and "result" in body and "_type" not in body:
        return body["result"]
    return body


@dataclass(frozen=True)
class JsonFileSource:
    """Serve the content of a JSON file for any query."""

    path: Path

    def fetch(self, query: str, params: dict[str, Any] | None = None) -> Any:
        logger.debug("Loading documents from %s (query ignored: %r)", self.path, query)
        return unwrap_response(load_json(self.path))


def select_content(documents: Any, field: str | None) -> list[Any]:
    """Pick the block content to render from fetched documents.

    Without ``field`` the fetched result is itself one piece of block content.
    With ``field`` every fetched document contributes ``document[field]``;
    documents lacking the field contribute an empty list.
    """
    if field is None:
        return [documents]
    docs = documents if isinstance(documents, list) else [documents]
    selected: list[Any] = []
    for doc in docs:
        if not isinstance(doc, Mapping):
            raise InvalidArgumentError(f"Fetched document must be an object, got {type(doc).__name__}")
        content = doc.get(field)
        if content is None:
            logger.debug("Document %r has no %r field", doc.get("_id"), field)
            content = []
        selected.append(content)
    return selected


def render_documents(
    source: DocumentSourceLike,
    query: str,
    params: dict[str, Any] | None = None,
    *,
    field: str | None = None,
    options: HtmlRenderOptions | None = None,
) -> list[str]:
    """Fetch documents from ``source`` and render their block content to HTML.

    Sources hand back documents without the API response envelope (see
    :class:`JsonFileSource`); documents are used exactly as fetched.

    Returns:
        One HTML string per selected piece of content, in fetch order
    """
    fetched = source.fetch(query, params)
    return [to_html(content, options) for content in select_content(fetched, field)]


__all__ = ["JsonFileSource", "render_documents", "select_content", "unwrap_response"]
