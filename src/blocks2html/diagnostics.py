"""Centralized decision logging for the rendering pipeline.

Keeps configuration and fallback messages in one place so that library code
only decides *what* happened, not how it is worded. The library never
installs handlers; configuring output is left to the application (the CLI
does it for ``--verbose``).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from blocks2html.model.render_options import HtmlRenderOptions

logger = logging.getLogger(__name__)


def log_render_configuration(options: HtmlRenderOptions) -> None:
    """Log the rendering configuration at DEBUG level.

    Args:
        options: Render options the HtmlBuilder was constructed with
    """
    logger.debug("Render configuration:")
    logger.debug("  Charset: %s", options.charset)
    logger.debug("  Project: %s", options.project_id or "<unset>")
    logger.debug("  Dataset: %s", options.dataset or "<unset>")
    if options.image_options:
        logger.debug("  Image options: %s", options.image_options)
    if options.serializers:
        logger.debug("  Serializer overrides: %s", ", ".join(sorted(options.serializers)))


def log_fallback(feature: str, reason: str, context: dict[str, Any] | None = None) -> None:
    """Log a graceful degradation (the pipeline continues with a fallback).

    Args:
        feature: Component that fell back (e.g., "Escaper")
        reason: What was missing or unsupported
        context: Optional extra key/value details
    """
    if context:
        context_str = ", ".join(f"{k}={v}" for k, v in context.items())
        logger.warning("%s fallback: %s (%s)", feature, reason, context_str)
    else:
        logger.warning("%s fallback: %s", feature, reason)


__all__ = ["log_fallback", "log_render_configuration"]
