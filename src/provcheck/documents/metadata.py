"""Machine-readable metadata document for a collection.

Every key is always present and empty text is emitted as ``""``, so the
document is stable under re-serialization and maps back onto an equal
:class:`~provcheck.catalog.models.Collection`.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Mapping

from provcheck.catalog.models import Asset, Collection, SchemaViolation, parse_collection


def _asset_record(asset: Asset) -> Dict[str, Any]:
    return {
        "name": asset.name,
        "sourceType": asset.source_type.value,
        "sourceUrl": asset.source_url,
        "isPrimaryValue": asset.is_primary_value,
        "transformations": [label.value for label in asset.ordered_transformations],
        "attribution": asset.attribution,
    }


def build_metadata(collection: Collection) -> Dict[str, Any]:
    """Build the metadata record for ``collection``."""

    return {
        "collectionName": collection.collection_name,
        "creator": collection.creator,
        "description": collection.description,
        "externalUrl": collection.base_external_url,
        "paletteName": collection.palette_name,
        "notes": collection.notes,
        "assets": [_asset_record(asset) for asset in collection.assets],
    }


def render_metadata(collection: Collection, *, indent: int = 2) -> str:
    """Serialize the metadata record as JSON text."""

    return json.dumps(build_metadata(collection), ensure_ascii=False, indent=indent)


def collection_from_metadata(document: Mapping[str, Any]) -> Collection:
    """Rebuild a :class:`Collection` from a metadata document.

    Raises:
        SchemaViolation: If the document does not carry the expected keys.
    """

    if not isinstance(document, Mapping):
        raise SchemaViolation([("<root>", "metadata document must be an object")])
    payload = dict(document)
    if "externalUrl" in payload:
        payload["baseExternalUrl"] = payload.pop("externalUrl")
    return parse_collection(payload)


__all__ = ["build_metadata", "collection_from_metadata", "render_metadata"]
