"""Unit tests for the collection review service."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from provcheck.catalog.models import SchemaViolation
from provcheck.exporting.exporter import CollectionExporter
from provcheck.policy.engine import IssueCode
from provcheck.samples import SAMPLE_COLLECTION
from provcheck.services.review import ReviewService


def _payload(**overrides):
    payload = {**SAMPLE_COLLECTION, "assets": [dict(asset) for asset in SAMPLE_COLLECTION["assets"]]}
    payload.update(overrides)
    return payload


def test_review_sample_is_satisfied():
    result = ReviewService().review(_payload())

    assert result.issues == []
    assert result.messages == []
    assert result.satisfied is True
    assert result.export_allowed is True
    assert result.metadata["collectionName"] == "Bakala Pixels"
    assert "Warrior - CC0 base" in result.credits


def test_review_reports_blocking_issue():
    payload = _payload()
    payload["assets"][1]["isPrimaryValue"] = True

    result = ReviewService().review(payload)

    assert [issue.code for issue in result.issues] == [IssueCode.FREEPIK_PRIMARY_VALUE]
    assert result.export_allowed is False
    assert result.credits


def test_review_rejects_schema_violation():
    payload = _payload()
    payload["assets"][0]["sourceType"] = "Stock"

    with pytest.raises(SchemaViolation) as excinfo:
        ReviewService().review(payload)
    assert excinfo.value.fields == ["assets.0.sourceType"]


def test_review_emits_event(caplog):
    with caplog.at_level(logging.INFO, logger="provcheck.observability"):
        ReviewService().review(_payload())
    assert any("collection_reviewed" in record.getMessage() for record in caplog.records)


def test_review_and_export_writes_artifacts(tmp_path):
    service = ReviewService(exporter=CollectionExporter(base_dir=tmp_path))

    result = service.review_and_export(_payload(), ["metadata", "credits"])

    assert set(result.artifacts) == {"metadata", "credits"}
    assert Path(result.artifacts["credits"]).read_text(encoding="utf-8") == result.credits
    assert result.warnings == []


def test_export_proceeds_despite_blocking_issues(tmp_path):
    service = ReviewService(exporter=CollectionExporter(base_dir=tmp_path))
    payload = _payload(creator="")

    result = service.review_and_export(payload, ["credits"])

    assert "credits" in result.artifacts
    assert result.warnings == ["Exported despite 1 blocking issue(s)"]
