"""Command line entry point: check a collection, export its documents, or emit the sample."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Sequence

from provcheck.catalog.models import SchemaViolation, load_collection
from provcheck.exporting.exporter import CollectionExporter
from provcheck.observability import configure_logging
from provcheck.policy.engine import PolicyConfig, PolicyEngine
from provcheck.samples import SAMPLE_COLLECTION
from provcheck.services.review import ReviewService
from provcheck.settings import get_settings

LOGGER = logging.getLogger("provcheck.cli")

EXIT_OK = 0
EXIT_BLOCKING = 1
EXIT_SCHEMA = 2
EXIT_CONFIG = 3


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="provcheck",
        description="Check NFT asset provenance against the licensing policy and build credits.",
    )
    parser.add_argument("--log-level", default=None, help="Override the configured log level.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    check = subparsers.add_parser("check", help="Evaluate a collection JSON file and print issues.")
    check.add_argument("collection", type=Path, help="Path to the collection JSON document.")
    check.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 when blocking issues are found.",
    )
    check.add_argument("--json", action="store_true", dest="as_json", help="Print issues as JSON.")

    export = subparsers.add_parser("export", help="Write metadata/credits artifacts for a collection.")
    export.add_argument("collection", type=Path, help="Path to the collection JSON document.")
    export.add_argument("--output-dir", type=Path, default=None, help="Directory for the artifacts.")
    export.add_argument(
        "--format",
        action="append",
        dest="formats",
        choices=["metadata", "credits", "issues"],
        help="Artifact to write (repeatable). Defaults to the configured formats.",
    )

    sample = subparsers.add_parser("sample", help="Print or write the built-in sample collection.")
    sample.add_argument("--output", type=Path, default=None, help="Write the sample to this file.")

    return parser.parse_args(argv)


def _run_check(args: argparse.Namespace) -> int:
    settings = get_settings()
    engine = PolicyEngine(PolicyConfig.from_codes(settings.policy.advisory_codes))
    report = engine.review(load_collection(args.collection))

    if args.as_json:
        payload = [issue.model_dump(mode="json", by_alias=True) for issue in report.issues]
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    elif report.satisfied:
        print("No issues found. Policy satisfied.")
    else:
        for issue in report.issues:
            print(f"[{issue.severity.value}] {issue}")

    if args.strict and not report.export_allowed:
        return EXIT_BLOCKING
    return EXIT_OK


def _run_export(args: argparse.Namespace) -> int:
    settings = get_settings()
    exporter = CollectionExporter(settings=settings, base_dir=args.output_dir)
    service = ReviewService(settings=settings, exporter=exporter)
    result = service.review_and_export(load_collection(args.collection), args.formats)
    for name, path in sorted(result.artifacts.items()):
        print(f"{name}: {path}")
    for warning in result.warnings:
        print(f"warning: {warning}", file=sys.stderr)
    return EXIT_OK


def _run_sample(args: argparse.Namespace) -> int:
    content = json.dumps(SAMPLE_COLLECTION, ensure_ascii=False, indent=2)
    if args.output is None:
        print(content)
        return EXIT_OK
    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(content + "\n", encoding="utf-8")
    print(f"Sample collection written to {args.output}")
    return EXIT_OK


_COMMANDS = {
    "check": _run_check,
    "export": _run_export,
    "sample": _run_sample,
}


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)

    try:
        configure_logging(level=args.log_level)
        return _COMMANDS[args.command](args)
    except SchemaViolation as exc:
        for path, message in exc.errors:
            print(f"schema error: {path}: {message}", file=sys.stderr)
        return EXIT_SCHEMA
    except FileNotFoundError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_SCHEMA
    except ValueError as exc:
        # Invalid settings or policy configuration.
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_CONFIG


if __name__ == "__main__":  # pragma: no cover - CLI entry
    sys.exit(main())
