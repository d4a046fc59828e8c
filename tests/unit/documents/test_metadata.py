"""Unit tests for the metadata document builder."""

from __future__ import annotations

import json

import pytest

from provcheck.catalog.models import Asset, Collection, SchemaViolation, SourceType, Transformation
from provcheck.documents.metadata import build_metadata, collection_from_metadata, render_metadata
from provcheck.samples import sample_collection


def _collection() -> Collection:
    return Collection(
        collection_name="Bakala Pixels",
        creator="Bakala Studio",
        description="Pixel art",
        base_external_url="https://example.com/bakala",
        palette_name="Bakala-16",
        notes="Redrawn by hand.",
        assets=(
            Asset(
                name="Warrior",
                source_url="https://kenney.nl/assets/cc0-sample",
                source_type=SourceType.CC0,
                transformations=[Transformation.OUTLINE_REPROCESSING, Transformation.OWN_PALETTE],
                attribution="Kenney",
            ),
            Asset(name="Hero", source_type=SourceType.ORIGINAL, is_primary_value=True),
        ),
    )


def test_metadata_uses_stable_key_names():
    document = build_metadata(_collection())

    assert list(document) == [
        "collectionName",
        "creator",
        "description",
        "externalUrl",
        "paletteName",
        "notes",
        "assets",
    ]
    assert document["externalUrl"] == "https://example.com/bakala"
    assert list(document["assets"][0]) == [
        "name",
        "sourceType",
        "sourceUrl",
        "isPrimaryValue",
        "transformations",
        "attribution",
    ]


def test_transformations_listed_in_catalog_order():
    document = build_metadata(_collection())
    assert document["assets"][0]["transformations"] == ["own palette", "outline reprocessing"]


def test_empty_optional_fields_are_emitted_as_empty_strings():
    document = build_metadata(_collection())
    hero = document["assets"][1]

    assert hero == {
        "name": "Hero",
        "sourceType": "Original",
        "sourceUrl": "",
        "isPrimaryValue": True,
        "transformations": [],
        "attribution": "",
    }


def test_empty_collection_yields_minimal_document():
    assert build_metadata(Collection()) == {
        "collectionName": "",
        "creator": "",
        "description": "",
        "externalUrl": "",
        "paletteName": "",
        "notes": "",
        "assets": [],
    }


def test_render_metadata_is_idempotent():
    collection = _collection()
    first = render_metadata(collection)
    assert first == render_metadata(collection)
    assert json.loads(first) == build_metadata(collection)


def test_render_metadata_keeps_non_ascii_text():
    collection = Collection(collection_name="Colección", creator="Estudio")
    assert "Colección" in render_metadata(collection)


def test_round_trip_recovers_collection():
    collection = _collection()
    assert collection_from_metadata(build_metadata(collection)) == collection


def test_round_trip_through_json_text():
    collection = sample_collection()
    restored = collection_from_metadata(json.loads(render_metadata(collection)))
    assert restored == collection


def test_collection_from_metadata_rejects_bad_document():
    with pytest.raises(SchemaViolation):
        collection_from_metadata({"assets": [{"name": "x", "sourceType": "Unknown"}]})
