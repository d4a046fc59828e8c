"""Human-readable credits document (Markdown) for a collection."""

from __future__ import annotations

from typing import Any, Dict

from provcheck.catalog.models import Asset, Collection

from .template_engine import TemplateEngine, get_template_engine

CREDITS_TEMPLATE = "credits.md.j2"
UNTITLED_COLLECTION = "Untitled collection"
UNKNOWN_CREATOR = "Unknown creator"


def _asset_context(asset: Asset) -> Dict[str, str]:
    return {
        "name": asset.name.strip(),
        "source_type": asset.source_type.value,
        "source_url": asset.source_url.strip(),
        "attribution": asset.attribution.strip(),
    }


def credits_context(collection: Collection) -> Dict[str, Any]:
    """Template variables for the credits document."""

    return {
        "title": collection.collection_name.strip() or UNTITLED_COLLECTION,
        "creator": collection.creator.strip() or UNKNOWN_CREATOR,
        "palette": collection.palette_name.strip(),
        "notes": collection.notes.strip(),
        "assets": [_asset_context(asset) for asset in collection.assets],
    }


def build_credits(collection: Collection, *, engine: TemplateEngine | None = None) -> str:
    """Render the credits document for ``collection``.

    Identical input always renders byte-identical text ending in one newline.
    """

    renderer = engine or get_template_engine()
    return renderer.render(CREDITS_TEMPLATE, credits_context(collection))


__all__ = ["build_credits", "credits_context"]
