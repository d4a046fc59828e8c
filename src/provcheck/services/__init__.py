"""Service layer combining policy evaluation, documents and export."""

from .review import ReviewResult, ReviewService

__all__ = ["ReviewResult", "ReviewService"]
