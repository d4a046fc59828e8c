"""Schema for collections and the assets they credit."""

from .models import (
    EXTERNAL_SOURCES,
    Asset,
    Collection,
    SchemaViolation,
    SourceType,
    Transformation,
    load_collection,
    parse_collection,
)

__all__ = [
    "Asset",
    "Collection",
    "EXTERNAL_SOURCES",
    "SchemaViolation",
    "SourceType",
    "Transformation",
    "load_collection",
    "parse_collection",
]
