"""Artifact exporters for collection documents."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Iterable, List

from provcheck.catalog.models import Collection
from provcheck.documents.credits import build_credits
from provcheck.documents.metadata import render_metadata
from provcheck.policy.engine import PolicyConfig, PolicyEngine
from provcheck.settings import Settings, get_settings

LOGGER = logging.getLogger(__name__)

CONTENT_TYPES = {
    "metadata": "application/json",
    "credits": "text/markdown; charset=utf-8",
    "issues": "application/json",
}


def export_text(content: str, suggested_filename: str, *, directory: str | Path) -> Path:
    """Write ``content`` verbatim to ``directory/suggested_filename``.

    The text is encoded as UTF-8 with no newline translation so the file is
    byte-for-byte the string that was generated.

    Raises:
        ValueError: If the filename is blank or padded, or if it contains a
            path component.
    """

    name = suggested_filename
    if not name or name != name.strip() or Path(name).name != name or name in {".", ".."}:
        raise ValueError(f"Export filename must be a bare file name: {suggested_filename!r}")
    target_dir = Path(directory)
    target_dir.mkdir(parents=True, exist_ok=True)
    path = target_dir / name
    with path.open("w", encoding="utf-8", newline="") as handle:
        handle.write(content)
    LOGGER.debug("Exported %s (%d chars)", path, len(content))
    return path


class CollectionExporter:
    """Generate artifact files (metadata, credits, issues) for a collection."""

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        base_dir: Path | None = None,
        policy_engine: PolicyEngine | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        export_settings = self.settings.export
        self.base_dir = Path(base_dir) if base_dir is not None else export_settings.output_dir
        self._indent = export_settings.json_indent
        self._filenames = {
            "metadata": export_settings.metadata_filename,
            "credits": export_settings.credits_filename,
            "issues": export_settings.issues_filename,
        }
        self._policy_engine = policy_engine or PolicyEngine(
            PolicyConfig.from_codes(self.settings.policy.advisory_codes)
        )

    def filename_for(self, format_name: str) -> str:
        return self._filenames[format_name]

    def render(self, collection: Collection, format_name: str) -> str:
        """Return the text of one artifact without writing it.

        Raises:
            KeyError: If ``format_name`` is not a supported artifact.
        """

        if format_name not in self._filenames:
            raise KeyError(format_name)
        handler = getattr(self, f"_render_{format_name}")
        return handler(collection)

    def export(self, collection: Collection, formats: Iterable[str] | None = None) -> tuple[Dict[str, str], List[str]]:
        """Write artifacts for the requested formats and return their paths/warnings."""

        requested = list(formats) if formats is not None else list(self.settings.export.default_formats)
        artifacts: Dict[str, str] = {}
        warnings: List[str] = []
        for fmt in requested:
            normalized = fmt.lower().strip()
            if not normalized:
                continue
            if normalized not in self._filenames:
                LOGGER.warning("Unsupported collection artifact format: %s", normalized)
                warnings.append(f"Unsupported artifact format skipped: {normalized}")
                continue
            try:
                content = self.render(collection, normalized)
                path = export_text(content, self.filename_for(normalized), directory=self.base_dir)
            except OSError as exc:
                LOGGER.exception("Failed to write %s artifact", normalized)
                warnings.append(f"{normalized.upper()} artifact generation failed: {exc}")
                continue
            artifacts[normalized] = str(path)
        return artifacts, warnings

    # ------------------------------------------------------------------
    # Individual format handlers
    # ------------------------------------------------------------------

    def _render_metadata(self, collection: Collection) -> str:
        return render_metadata(collection, indent=self._indent)

    def _render_credits(self, collection: Collection) -> str:
        return build_credits(collection)

    def _render_issues(self, collection: Collection) -> str:
        report = self._policy_engine.review(collection)
        payload = {
            "collectionName": collection.collection_name,
            "satisfied": report.satisfied,
            "exportAllowed": report.export_allowed,
            "issues": [
                {
                    "assetIndex": issue.asset_index,
                    "assetName": issue.asset_name,
                    "code": issue.code.value,
                    "severity": issue.severity.value,
                    "message": str(issue),
                }
                for issue in report.issues
            ],
        }
        return json.dumps(payload, ensure_ascii=False, indent=self._indent)


__all__ = ["CONTENT_TYPES", "CollectionExporter", "export_text"]
