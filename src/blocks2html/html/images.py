from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlencode

from blocks2html.errors import ConfigError

CDN_BASE_URL = "https://cdn.sanity.io"
HELP_URL = "https://www.sanity.io/docs/presenting-block-text"


@dataclass(frozen=True)
class AssetRef:
    """Parsed ``<type>-<id>-<dimensions>-<extension>`` asset reference.

    - asset_type: e.g. "image"
    - asset_id: content-addressed asset id
    - dimensions: "<width>x<height>"
    - extension: file extension without the dot
    """

    asset_type: str
    asset_id: str
    dimensions: str
    extension: str

    @property
    def type_plural(self) -> str:
        return f"{self.asset_type}s"


def parse_asset_ref(ref: str) -> AssetRef:
    parts = ref.split("-")
    if len(parts) != 4 or not all(parts):
        raise ConfigError(
            f"Invalid asset reference '{ref}', expected <type>-<id>-<dimensions>-<extension>",
            node_type="image",
        )
    return AssetRef(
        asset_type=parts[0],
        asset_id=parts[1],
        dimensions=parts[2],
        extension=parts[3],
    )


def build_query(image_options: Mapping[str, Any] | None) -> str:
    qs = urlencode(dict(image_options or {}))
    return f"?{qs}" if qs else ""


def image_url(
    node: Any,
    *,
    project_id: str | None,
    dataset: str | None,
    image_options: Mapping[str, Any] | None = None,
) -> str:
    """Resolve the URL of an image node's asset.

    A direct ``asset.url`` wins; otherwise the CDN URL is assembled from
    ``asset._ref`` and the project/dataset identifiers. Image options are
    appended as a query string in both cases.

    Raises:
        ConfigError: If the asset, its reference, or project/dataset are missing
    """
    attributes = getattr(node, "attributes", None) or {}
    asset = attributes.get("asset")
    if not asset or not isinstance(asset, Mapping):
        raise ConfigError("Image does not have required `asset` property", node_type="image")

    qs = build_query(image_options)

    url = asset.get("url")
    if url:
        return f"{url}{qs}"

    ref = asset.get("_ref")
    if not ref or not isinstance(ref, str):
        raise ConfigError(
            "Invalid image reference in block, no `_ref` found on `asset`", node_type="image"
        )

    if not project_id or not dataset:
        raise ConfigError(
            f"`project_id` and/or `dataset` missing from render options, see {HELP_URL}",
            node_type="image",
        )

    parsed = parse_asset_ref(ref)
    return (
        f"{CDN_BASE_URL}/{parsed.type_plural}/{project_id}/{dataset}/"
        f"{parsed.asset_id}-{parsed.dimensions}.{parsed.extension}{qs}"
    )


__all__ = ["AssetRef", "CDN_BASE_URL", "build_query", "image_url", "parse_asset_ref"]
