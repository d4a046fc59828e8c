"""Licensing policy rules for collections."""

from .engine import (
    DEFAULT_ADVISORY_CODES,
    Issue,
    IssueCode,
    PolicyConfig,
    PolicyEngine,
    PolicyReport,
    Severity,
    evaluate,
    issue_messages,
)

__all__ = [
    "DEFAULT_ADVISORY_CODES",
    "Issue",
    "IssueCode",
    "PolicyConfig",
    "PolicyEngine",
    "PolicyReport",
    "Severity",
    "evaluate",
    "issue_messages",
]
