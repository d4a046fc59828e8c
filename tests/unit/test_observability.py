"""Unit tests for structured event logging."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from provcheck.observability import Observability
from provcheck.settings import get_settings


def _structured_settings():
    settings = get_settings()
    return settings.model_copy(
        update={"observability": settings.observability.model_copy(update={"structured_logging": True})}
    )


def test_structured_event_is_json(caplog):
    observability = Observability(settings=_structured_settings(), component="review")

    with caplog.at_level(logging.INFO, logger="provcheck.observability"):
        observability.emit_event(
            "collection_exported",
            artifacts=("metadata", "credits"),
            output=Path("out") / "credits.md",
            counts={"issues": 2},
        )

    payload = json.loads(caplog.records[-1].getMessage())
    assert payload["event"] == "collection_exported"
    assert payload["component"] == "review"
    assert payload["artifacts"] == ["metadata", "credits"]
    assert payload["output"] == str(Path("out") / "credits.md")
    assert payload["counts"] == {"issues": 2}
