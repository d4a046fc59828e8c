"""Deterministic metadata and credits documents."""

from .credits import build_credits
from .metadata import build_metadata, collection_from_metadata, render_metadata
from .template_engine import TemplateEngine

__all__ = [
    "TemplateEngine",
    "build_credits",
    "build_metadata",
    "collection_from_metadata",
    "render_metadata",
]
