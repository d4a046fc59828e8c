"""Built-in sample collection used for demos and smoke checks.

The "Bakala Pixels" mini practice: a CC0 base sprite redrawn with an own
palette, and a Freepik sketch used only as a composition reference. It
satisfies every policy rule.
"""

from __future__ import annotations

from typing import Any, Dict

from provcheck.catalog.models import Collection, parse_collection

SAMPLE_COLLECTION: Dict[str, Any] = {
    "collectionName": "Bakala Pixels",
    "creator": "Bakala Studio",
    "description": "Original pixel art collection derived from CC0 references and Freepik sketches.",
    "baseExternalUrl": "https://example.com/bakala",
    "paletteName": "Bakala-16",
    "notes": "Freepik used only as a composition reference. All final pixel art redrawn by hand with an own palette.",
    "assets": [
        {
            "name": "Warrior - CC0 base",
            "sourceUrl": "https://kenney.nl/assets/cc0-sample",
            "sourceType": "CC0",
            "isPrimaryValue": False,
            "transformations": ["own palette", "full redraw", "outline reprocessing"],
            "attribution": "CC0 authors (Kenney et al.)",
        },
        {
            "name": "Reference sketch (not included)",
            "sourceUrl": "https://www.freepik.com/sample",
            "sourceType": "Freepik",
            "isPrimaryValue": False,
            "transformations": ["CC0 layer composition", "silhouette change"],
            "attribution": "Freepik author X (reference only, not redistributed)",
        },
    ],
}


def sample_collection() -> Collection:
    """Return the sample as a validated :class:`Collection`."""

    return parse_collection(SAMPLE_COLLECTION)


__all__ = ["SAMPLE_COLLECTION", "sample_collection"]
