"""provcheck: licensing checks and credits for NFT collections.

This package evaluates the provenance of each visual asset in a collection
(CC0, Freepik references, original work, or unclassified material) against a
licensing policy, and builds two deterministic artifacts: a metadata document
and a Markdown credits document.
"""

from provcheck.catalog.models import (
    Asset,
    Collection,
    SchemaViolation,
    SourceType,
    Transformation,
    load_collection,
    parse_collection,
)
from provcheck.documents.credits import build_credits
from provcheck.documents.metadata import build_metadata, collection_from_metadata, render_metadata
from provcheck.exporting.exporter import export_text
from provcheck.policy.engine import Issue, IssueCode, PolicyConfig, PolicyEngine, Severity, evaluate

__version__ = "0.1.0"

__all__ = [
    "Asset",
    "Collection",
    "Issue",
    "IssueCode",
    "PolicyConfig",
    "PolicyEngine",
    "SchemaViolation",
    "Severity",
    "SourceType",
    "Transformation",
    "build_credits",
    "build_metadata",
    "collection_from_metadata",
    "evaluate",
    "export_text",
    "load_collection",
    "parse_collection",
    "render_metadata",
]
