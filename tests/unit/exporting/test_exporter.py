"""Unit tests for the collection artifact exporter."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from provcheck.documents.credits import build_credits
from provcheck.documents.metadata import build_metadata
from provcheck.exporting.exporter import CollectionExporter, export_text
from provcheck.samples import sample_collection


def test_export_text_writes_exact_content(tmp_path):
    content = "line one\r\nline two\nünïcode\n"
    path = export_text(content, "credits.md", directory=tmp_path)

    assert path == tmp_path / "credits.md"
    assert path.read_bytes() == content.encode("utf-8")


def test_export_text_creates_directory(tmp_path):
    target = tmp_path / "nested" / "out"
    path = export_text("{}", "metadata.json", directory=target)
    assert path.exists()


@pytest.mark.parametrize("filename", ["", "   ", " credits.md ", "credits.md\n", "../escape.md", "sub/credits.md", ".."])
def test_export_text_rejects_non_bare_filenames(tmp_path, filename):
    with pytest.raises(ValueError):
        export_text("x", filename, directory=tmp_path)


def test_exporter_writes_metadata_and_credits(tmp_path):
    exporter = CollectionExporter(base_dir=tmp_path)
    collection = sample_collection()

    artifacts, warnings = exporter.export(collection, ["metadata", "credits"])

    assert not warnings
    metadata_path = Path(artifacts["metadata"])
    credits_path = Path(artifacts["credits"])
    assert metadata_path.name == "metadata.json"
    assert credits_path.name == "credits.md"
    assert json.loads(metadata_path.read_text(encoding="utf-8")) == build_metadata(collection)
    assert credits_path.read_text(encoding="utf-8") == build_credits(collection)


def test_exporter_uses_default_formats(tmp_path):
    exporter = CollectionExporter(base_dir=tmp_path)
    artifacts, warnings = exporter.export(sample_collection())

    assert not warnings
    assert sorted(artifacts) == sorted(exporter.settings.export.default_formats)


def test_exporter_writes_issue_report(tmp_path):
    payload = sample_collection().model_copy(update={"creator": ""})
    exporter = CollectionExporter(base_dir=tmp_path)

    artifacts, warnings = exporter.export(payload, ["issues"])

    assert not warnings
    report = json.loads(Path(artifacts["issues"]).read_text(encoding="utf-8"))
    assert report["satisfied"] is False
    assert report["exportAllowed"] is False
    assert [issue["code"] for issue in report["issues"]] == ["missing_identification"]
    assert report["issues"][0]["assetIndex"] is None


def test_exporter_handles_unknown_format(tmp_path):
    exporter = CollectionExporter(base_dir=tmp_path)
    artifacts, warnings = exporter.export(sample_collection(), ["svg"])
    assert artifacts == {}
    assert warnings == ["Unsupported artifact format skipped: svg"]


def test_exporter_records_write_failure(tmp_path, monkeypatch):
    exporter = CollectionExporter(base_dir=tmp_path)

    def _fail(*_args, **_kwargs):  # noqa: ANN001 - stub
        raise OSError("disk full")

    monkeypatch.setattr("provcheck.exporting.exporter.export_text", _fail)

    artifacts, warnings = exporter.export(sample_collection(), ["metadata"])

    assert artifacts == {}
    assert any("METADATA artifact generation failed: disk full" in warning for warning in warnings)


def test_render_rejects_unknown_artifact(tmp_path):
    exporter = CollectionExporter(base_dir=tmp_path)
    with pytest.raises(KeyError):
        exporter.render(sample_collection(), "pdf")
