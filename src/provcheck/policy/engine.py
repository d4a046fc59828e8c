"""Licensing policy evaluation for collections.

The engine walks a :class:`~provcheck.catalog.models.Collection` and reports
every rule it trips:

1. collection identification (name and creator present)
2. Freepik material never carries the primary value of the NFT
3. external material (CC0, Freepik) records at least one transformation
4. unclassified sources always require manual review
5. external material carries an attribution note
6. asset names are unique

Issues come back collection-level first, then per asset in asset order, and
within one asset in the rule order above. Policy problems are never raised as
exceptions; a structurally valid collection always evaluates.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, List, Sequence

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from provcheck.catalog.models import EXTERNAL_SOURCES, Asset, Collection, SourceType


class IssueCode(str, Enum):
    """Stable identifiers for each policy rule."""

    MISSING_IDENTIFICATION = "missing_identification"
    FREEPIK_PRIMARY_VALUE = "freepik_primary_value"
    MISSING_TRANSFORMATION = "missing_transformation"
    UNCLASSIFIED_SOURCE = "unclassified_source"
    MISSING_ATTRIBUTION = "missing_attribution"
    DUPLICATE_ASSET_NAME = "duplicate_asset_name"


class Severity(str, Enum):
    BLOCKING = "blocking"
    ADVISORY = "advisory"


DEFAULT_ADVISORY_CODES = frozenset({IssueCode.MISSING_ATTRIBUTION, IssueCode.DUPLICATE_ASSET_NAME})

MISSING_IDENTIFICATION_MESSAGE = "collection missing required identification"
FREEPIK_PRIMARY_VALUE_MESSAGE = "Freepik-sourced asset cannot be the primary value of the NFT"
MISSING_TRANSFORMATION_MESSAGE = (
    "asset derived from external source lacks any recorded transformation; "
    "cannot establish substantial transformation"
)
UNCLASSIFIED_SOURCE_MESSAGE = "asset has unclassified source; requires manual legal review"
MISSING_ATTRIBUTION_MESSAGE = "external-source asset missing attribution note"
DUPLICATE_NAME_MESSAGE = "duplicate asset name: {name}"

_TRANSFORMATION_REQUIRED = EXTERNAL_SOURCES
_ATTRIBUTION_REQUIRED = EXTERNAL_SOURCES


class Issue(BaseModel):
    """A single reported policy concern."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    asset_index: int | None = None
    asset_name: str | None = None
    code: IssueCode
    severity: Severity
    message: str

    @property
    def is_blocking(self) -> bool:
        return self.severity is Severity.BLOCKING

    def __str__(self) -> str:
        if self.asset_index is None:
            return self.message
        return f"Asset #{self.asset_index + 1} ({self.asset_name}): {self.message}"


class PolicyConfig(BaseModel):
    """Which issue codes are informational rather than blocking."""

    model_config = ConfigDict(frozen=True)

    advisory_codes: frozenset[IssueCode] = Field(default=DEFAULT_ADVISORY_CODES)

    @classmethod
    def from_codes(cls, codes: Iterable[str]) -> "PolicyConfig":
        """Build a config from raw code strings (as found in settings).

        Raises:
            ValueError: If a code does not name a known rule.
        """

        resolved = []
        for code in codes:
            try:
                resolved.append(IssueCode(code))
            except ValueError as exc:
                raise ValueError(f"Unknown policy issue code: {code}") from exc
        return cls(advisory_codes=frozenset(resolved))

    def severity_for(self, code: IssueCode) -> Severity:
        return Severity.ADVISORY if code in self.advisory_codes else Severity.BLOCKING


class PolicyReport(BaseModel):
    """Evaluation outcome; an empty ``issues`` list means the policy is satisfied."""

    model_config = ConfigDict(frozen=True)

    issues: List[Issue] = Field(default_factory=list)

    @property
    def satisfied(self) -> bool:
        return not self.issues

    @property
    def blocking(self) -> List[Issue]:
        return [issue for issue in self.issues if issue.is_blocking]

    @property
    def advisory(self) -> List[Issue]:
        return [issue for issue in self.issues if not issue.is_blocking]

    @property
    def export_allowed(self) -> bool:
        return not self.blocking

    def messages(self) -> List[str]:
        return [str(issue) for issue in self.issues]


def _is_blank(value: str) -> bool:
    return not value.strip()


class PolicyEngine:
    """Apply the licensing rules to a collection.

    Args:
        config: Severity configuration. Defaults to attribution and duplicate
            names being advisory.
    """

    def __init__(self, config: PolicyConfig | None = None) -> None:
        self.config = config or PolicyConfig()

    def evaluate(self, collection: Collection) -> List[Issue]:
        """Return every issue found, in deterministic order."""

        issues: List[Issue] = []
        issues.extend(self._collection_issues(collection))
        seen_names: set[str] = set()
        for index, asset in enumerate(collection.assets):
            issues.extend(self._asset_issues(index, asset, seen_names))
        return issues

    def review(self, collection: Collection) -> PolicyReport:
        return PolicyReport(issues=self.evaluate(collection))

    # ------------------------------------------------------------------
    # Rules
    # ------------------------------------------------------------------

    def _collection_issues(self, collection: Collection) -> List[Issue]:
        missing = []
        if _is_blank(collection.collection_name):
            missing.append("collectionName")
        if _is_blank(collection.creator):
            missing.append("creator")
        if not missing:
            return []
        return [
            self._issue(
                IssueCode.MISSING_IDENTIFICATION,
                f"{MISSING_IDENTIFICATION_MESSAGE} ({', '.join(missing)})",
            )
        ]

    def _asset_issues(self, index: int, asset: Asset, seen_names: set[str]) -> List[Issue]:
        found: List[tuple[IssueCode, str]] = []
        source = asset.source_type

        if source is SourceType.FREEPIK and asset.is_primary_value:
            found.append((IssueCode.FREEPIK_PRIMARY_VALUE, FREEPIK_PRIMARY_VALUE_MESSAGE))
        if source in _TRANSFORMATION_REQUIRED and not asset.transformations:
            found.append((IssueCode.MISSING_TRANSFORMATION, MISSING_TRANSFORMATION_MESSAGE))
        if source is SourceType.OTHER:
            found.append((IssueCode.UNCLASSIFIED_SOURCE, UNCLASSIFIED_SOURCE_MESSAGE))
        if source in _ATTRIBUTION_REQUIRED and _is_blank(asset.attribution):
            found.append((IssueCode.MISSING_ATTRIBUTION, MISSING_ATTRIBUTION_MESSAGE))
        if asset.name:
            if asset.name in seen_names:
                found.append((IssueCode.DUPLICATE_ASSET_NAME, DUPLICATE_NAME_MESSAGE.format(name=asset.name)))
            else:
                seen_names.add(asset.name)

        return [self._issue(code, message, index=index, asset=asset) for code, message in found]

    def _issue(
        self,
        code: IssueCode,
        message: str,
        *,
        index: int | None = None,
        asset: Asset | None = None,
    ) -> Issue:
        return Issue(
            asset_index=index,
            asset_name=asset.name if asset is not None else None,
            code=code,
            severity=self.config.severity_for(code),
            message=message,
        )


def evaluate(collection: Collection, *, config: PolicyConfig | None = None) -> List[Issue]:
    """Evaluate ``collection`` with a one-off :class:`PolicyEngine`."""

    return PolicyEngine(config).evaluate(collection)


def issue_messages(issues: Sequence[Issue]) -> List[str]:
    """Render issues as the display strings shown to a creator."""

    return [str(issue) for issue in issues]


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
