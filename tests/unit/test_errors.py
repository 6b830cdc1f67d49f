from __future__ import annotations

from pathlib import Path

import pytest

from blocks2html.errors import (
    Blocks2HtmlError,
    ConfigError,
    DocumentSourceError,
    InvalidArgumentError,
    UnsupportedVersionError,
)


@pytest.mark.parametrize(
    "error",
    [
        InvalidArgumentError("bad"),
        UnsupportedVersionError(3),
        ConfigError("missing"),
        DocumentSourceError("x.json"),
    ],
)
def test_errors_share_base_class(error: Exception) -> None:
    assert isinstance(error, Blocks2HtmlError)


def test_invalid_argument_is_value_error() -> None:
    with pytest.raises(ValueError):
        raise InvalidArgumentError("bad input")


def test_unsupported_version_message() -> None:
    error = UnsupportedVersionError(1)
    assert error.version == 1
    assert "Unsupported block content version: 1" in str(error)


def test_config_error_node_type() -> None:
    error = ConfigError('No serializer registered for node type "author"', node_type="author")
    assert error.node_type == "author"
    assert ConfigError("x").node_type is None


def test_document_source_error_message() -> None:
    cause = FileNotFoundError("gone")
    error = DocumentSourceError(Path("posts.json"), cause)
    assert str(error) == "Failed to load documents from posts.json: gone"
    assert error.cause is cause
    assert str(DocumentSourceError("api")) == "Failed to load documents from api"
