"""Collection review API router."""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, HTTPException, status
from fastapi.responses import PlainTextResponse, Response
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from provcheck.catalog.models import Collection, SchemaViolation, parse_collection
from provcheck.documents.credits import build_credits
from provcheck.documents.metadata import build_metadata
from provcheck.exporting.exporter import CONTENT_TYPES, CollectionExporter
from provcheck.policy.engine import Issue, PolicyConfig, PolicyEngine
from provcheck.samples import SAMPLE_COLLECTION
from provcheck.services.review import ReviewResult, ReviewService
from provcheck.settings import Settings, get_settings

router = APIRouter(prefix="/collections", tags=["collections"])
LOGGER = logging.getLogger(__name__)


class EvaluationResponse(BaseModel):
    """Envelope returned by the evaluate endpoint."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    issues: List[Issue] = Field(default_factory=list)
    messages: List[str] = Field(default_factory=list)
    satisfied: bool
    export_allowed: bool


def get_policy_engine(settings: Settings = Depends(get_settings)) -> PolicyEngine:
    """Dependency provider returning a policy engine configured from settings."""

    try:
        return PolicyEngine(PolicyConfig.from_codes(settings.policy.advisory_codes))
    except ValueError as exc:
        LOGGER.error("Invalid policy configuration: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Invalid policy configuration: {exc}",
        ) from exc


def get_review_service(
    settings: Settings = Depends(get_settings),
    engine: PolicyEngine = Depends(get_policy_engine),
) -> ReviewService:
    """Dependency provider returning a review service bound to settings."""

    return ReviewService(settings=settings, engine=engine)


def get_exporter(
    settings: Settings = Depends(get_settings),
    engine: PolicyEngine = Depends(get_policy_engine),
) -> CollectionExporter:
    """Dependency provider for the artifact exporter."""

    return CollectionExporter(settings=settings, policy_engine=engine)


def _parse_or_422(payload: Dict[str, Any]) -> Collection:
    try:
        return parse_collection(payload)
    except SchemaViolation as exc:
        LOGGER.info("Rejected collection payload: %s", exc)
        raise HTTPException(
            status_code=422,
            detail=[{"field": path, "message": message} for path, message in exc.errors],
        ) from exc


@router.post("/evaluate", response_model=EvaluationResponse, summary="Evaluate licensing policy")
def evaluate_collection(
    payload: Dict[str, Any] = Body(...),
    engine: PolicyEngine = Depends(get_policy_engine),
) -> EvaluationResponse:
    """Return the ordered policy issues for a collection."""

    collection = _parse_or_422(payload)
    report = engine.review(collection)
    return EvaluationResponse(
        issues=report.issues,
        messages=report.messages(),
        satisfied=report.satisfied,
        export_allowed=report.export_allowed,
    )


@router.post("/metadata", summary="Build the metadata document")
def collection_metadata(payload: Dict[str, Any] = Body(...)) -> Dict[str, Any]:
    """Return the machine-readable metadata document."""

    return build_metadata(_parse_or_422(payload))


@router.post("/credits", response_class=PlainTextResponse, summary="Build the credits document")
def collection_credits(payload: Dict[str, Any] = Body(...)) -> PlainTextResponse:
    """Return the Markdown credits document."""

    content = build_credits(_parse_or_422(payload))
    return PlainTextResponse(content, media_type=CONTENT_TYPES["credits"])


@router.post("/review", response_model=ReviewResult, summary="Evaluate and build both documents")
def review_collection(
    payload: Dict[str, Any] = Body(...),
    service: ReviewService = Depends(get_review_service),
) -> ReviewResult:
    """Return issues, metadata, and credits for a collection in one call."""

    return service.review(_parse_or_422(payload))


@router.post("/export/{artifact}", summary="Download a generated document")
def export_artifact(
    artifact: str,
    payload: Dict[str, Any] = Body(...),
    exporter: CollectionExporter = Depends(get_exporter),
) -> Response:
    """Offer one generated document as a file download, unchanged."""

    collection = _parse_or_422(payload)
    try:
        content = exporter.render(collection, artifact)
    except KeyError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown artifact: {artifact}") from exc
    filename = exporter.filename_for(artifact)
    return Response(
        content=content.encode("utf-8"),
        media_type=CONTENT_TYPES[artifact],
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/sample", summary="Built-in sample collection")
def sample() -> Dict[str, Any]:
    """Return the sample collection payload for demos."""

    return SAMPLE_COLLECTION
