"""Exception types raised by the block content pipeline.

Every error is raised at the point of detection and surfaced to the caller
unchanged. Unknown marks are not errors; unknown node types are.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any


class Blocks2HtmlError(Exception):
    """Base class for all blocks2html errors."""


class InvalidArgumentError(Blocks2HtmlError, ValueError):
    """Malformed input handed to a public operation."""


class UnsupportedVersionError(Blocks2HtmlError):
    """Migration requested to a block format version that is not implemented."""

    def __init__(self, version: Any) -> None:
        self.version = version
        super().__init__(f"Unsupported block content version: {version!r} (supported: 2)")


class ConfigError(Blocks2HtmlError):
    """Rendering configuration is missing something the content needs."""

    def __init__(self, message: str, *, node_type: str | None = None) -> None:
        self.node_type = node_type
        super().__init__(message)


class DocumentSourceError(Blocks2HtmlError):
    """A document source could not produce documents."""

    def __init__(self, source: str | Path, cause: Exception | None = None) -> None:
        self.source = source
        self.cause = cause
        message = f"Failed to load documents from {source}"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)


__all__ = [
    "Blocks2HtmlError",
    "ConfigError",
    "DocumentSourceError",
    "InvalidArgumentError",
    "UnsupportedVersionError",
]
