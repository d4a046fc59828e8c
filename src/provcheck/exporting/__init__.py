"""Text export of generated collection documents."""

from .exporter import CONTENT_TYPES, CollectionExporter, export_text

__all__ = ["CONTENT_TYPES", "CollectionExporter", "export_text"]
