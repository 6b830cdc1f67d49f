from __future__ import annotations

from typing import Any, Protocol, TypedDict


class DocumentSourceLike(Protocol):
    """Minimal protocol for the API client capability we rely on."""

    def fetch(self, query: str, params: dict[str, Any] | None = ...) -> Any:  # pragma: no cover - typing
        ...


class SpanDict(TypedDict):
    _type: str
    text: str
    marks: list[str]


class LegacySpanDict(TypedDict, total=False):
    # v1 spans: inline mark objects live under extra keys (e.g. "link", "author")
    _type: str
    text: str
    marks: list[str]


class MarkDefDict(TypedDict, total=False):
    # Plus arbitrary attributes of the mark (href, name, ...)
    _key: str
    _type: str


class BlockDict(TypedDict, total=False):
    _type: str
    _key: str
    style: str
    children: list[SpanDict]
    markDefs: list[MarkDefDict]
    listItem: str
    level: int


class LegacyBlockDict(TypedDict, total=False):
    _type: str
    style: str
    spans: list[LegacySpanDict]
    listItem: str

