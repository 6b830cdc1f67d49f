"""Render options for the HTML builder.

Defaults render plain HTML in UTF-8 with the built-in serializers; project and
dataset identifiers are only needed when image nodes reference CDN assets.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from blocks2html.html.escape import FALLBACK_CHARSET, normalize_charset


@dataclass
class HtmlRenderOptions:
    """Configuration surface of :class:`blocks2html.html.builder.HtmlBuilder`."""

    # Per node type and per mark overrides, deep-merged over the defaults
    serializers: Mapping[str, Any] = field(default_factory=dict)

    # Output charset for escaped text leaves
    charset: str = FALLBACK_CHARSET

    # Query parameters appended to image URLs (e.g. {"w": 320, "fit": "crop"})
    image_options: Mapping[str, Any] = field(default_factory=dict)

    # Required only to build CDN URLs from bare asset references
    project_id: str | None = None
    dataset: str | None = None

    @classmethod
    def from_cli(
        cls,
        *,
        charset: str = FALLBACK_CHARSET,
        project_id: str | None = None,
        dataset: str | None = None,
        image_options: Iterable[str] = (),
    ) -> HtmlRenderOptions:
        """Build HtmlRenderOptions from CLI argument values.

        Args:
            charset: Output charset name
            project_id: Project identifier for CDN image URLs
            dataset: Dataset name for CDN image URLs
            image_options: ``key=value`` strings, in query order

        Returns:
            HtmlRenderOptions instance

        Raises:
            ValueError: If the charset is unknown or an image option is malformed
        """
        if normalize_charset(charset) is None:
            raise ValueError(f"Unknown charset '{charset}'")

        parsed: dict[str, str] = {}
        for raw in image_options:
            key, sep, value = raw.partition("=")
            if not sep or not key.strip():
                raise ValueError(f"Invalid image option '{raw}'. Expected key=value")
            parsed[key.strip()] = value.strip()

        return cls(
            charset=charset,
            project_id=project_id or None,
            dataset=dataset or None,
            image_options=parsed,
        )

    def with_overrides(self, **overrides: Any) -> HtmlRenderOptions:
        """Return a copy with the given (non-None) fields replaced."""
        values = self.to_dict()
        values["serializers"] = self.serializers
        for key, value in overrides.items():
            if key not in values:
                raise TypeError(f"Unknown render option '{key}'")
            if value is not None:
                values[key] = value
        return HtmlRenderOptions(**values)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization/logging."""
        return {
            "serializers": sorted(self.serializers),
            "charset": self.charset,
            "image_options": dict(self.image_options),
            "project_id": self.project_id,
            "dataset": self.dataset,
        }

    def __repr__(self) -> str:
        return (
            f"HtmlRenderOptions("
            f"charset={self.charset!r}, "
            f"project_id={self.project_id!r}, "
            f"dataset={self.dataset!r}, "
            f"image_options={dict(self.image_options)!r}, "
            f"serializers={sorted(self.serializers)!r}"
            f")"
        )


__all__ = ["HtmlRenderOptions"]
