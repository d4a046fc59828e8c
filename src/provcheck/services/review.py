"""High-level orchestration for reviewing a collection before publication."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from provcheck.catalog.models import Collection, parse_collection
from provcheck.documents.credits import build_credits
from provcheck.documents.metadata import build_metadata
from provcheck.exporting.exporter import CollectionExporter
from provcheck.observability import Observability, get_observability
from provcheck.policy.engine import Issue, PolicyConfig, PolicyEngine
from provcheck.settings import Settings, get_settings

LOGGER = logging.getLogger(__name__)


class ReviewResult(BaseModel):
    """Response envelope for a collection review."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    issues: List[Issue] = Field(default_factory=list)
    messages: List[str] = Field(default_factory=list)
    satisfied: bool = True
    export_allowed: bool = True
    metadata: Dict[str, Any] = Field(default_factory=dict)
    credits: str = ""
    artifacts: Dict[str, str] = Field(default_factory=dict)
    warnings: List[str] = Field(default_factory=list)


class ReviewService:
    """Coordinates validation, policy evaluation, document generation and export."""

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        engine: PolicyEngine | None = None,
        exporter: CollectionExporter | None = None,
        observability: Observability | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.engine = engine or PolicyEngine(PolicyConfig.from_codes(self.settings.policy.advisory_codes))
        self._exporter = exporter
        self.observability = observability or get_observability(component="review", settings=self.settings)

    @property
    def exporter(self) -> CollectionExporter:
        if self._exporter is None:
            self._exporter = CollectionExporter(settings=self.settings, policy_engine=self.engine)
        return self._exporter

    def review(self, payload: Collection | Mapping[str, Any]) -> ReviewResult:
        """Evaluate and generate documents for a collection payload.

        Raises:
            SchemaViolation: If ``payload`` is not a valid collection.
        """

        collection = parse_collection(payload)
        report = self.engine.review(collection)
        result = ReviewResult(
            issues=report.issues,
            messages=report.messages(),
            satisfied=report.satisfied,
            export_allowed=report.export_allowed,
            metadata=build_metadata(collection),
            credits=build_credits(collection),
        )
        self.observability.emit_event(
            "collection_reviewed",
            collection=collection.collection_name,
            asset_count=len(collection.assets),
            issue_count=len(report.issues),
            blocking_count=len(report.blocking),
        )
        return result

    def review_and_export(
        self,
        payload: Collection | Mapping[str, Any],
        formats: List[str] | None = None,
    ) -> ReviewResult:
        """Review a collection and write its artifacts.

        Artifacts are written even when issues exist; the caller decides
        whether to publish despite warnings.
        """

        collection = parse_collection(payload)
        result = self.review(collection)
        artifacts, warnings = self.exporter.export(collection, formats)
        if not result.export_allowed:
            warnings = [
                f"Exported despite {sum(1 for issue in result.issues if issue.is_blocking)} blocking issue(s)",
                *warnings,
            ]
        LOGGER.info(
            "Exported collection %r: artifacts=%s warnings=%s",
            collection.collection_name,
            sorted(artifacts),
            len(warnings),
        )
        self.observability.emit_event(
            "collection_exported",
            collection=collection.collection_name,
            artifacts=artifacts,
            warnings=warnings,
        )
        return result.model_copy(update={"artifacts": artifacts, "warnings": warnings})


__all__ = ["ReviewResult", "ReviewService"]
