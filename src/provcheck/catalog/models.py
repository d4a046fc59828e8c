"""Pydantic models describing a collection and the assets it credits.

Source types and transformation labels are closed enumerations. Anything
outside them is rejected at the boundary by :func:`parse_collection` with a
:class:`SchemaViolation` that names the offending field.
"""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Annotated, Any, List, Mapping, Tuple

from pydantic import (
    AnyUrl,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    StrictBool,
    StrictStr,
    TypeAdapter,
    ValidationError,
    field_validator,
)
from pydantic.alias_generators import to_camel

_URL_ADAPTER = TypeAdapter(AnyUrl)


class SourceType(str, Enum):
    """Where an asset's pixels come from."""

    CC0 = "CC0"
    FREEPIK = "Freepik"
    ORIGINAL = "Original"
    OTHER = "Other"


class Transformation(str, Enum):
    """Catalog of transformations an artist can record against an asset.

    Declaration order is the catalog order used for every serialized listing.
    """

    OWN_PALETTE = "own palette"
    FULL_REDRAW = "full redraw"
    SILHOUETTE_CHANGE = "silhouette change"
    CONTROLLED_DITHERING = "controlled dithering"
    OUTLINE_REPROCESSING = "outline reprocessing"
    CC0_LAYER_COMPOSITION = "CC0 layer composition"


EXTERNAL_SOURCES = frozenset({SourceType.CC0, SourceType.FREEPIK})
_CATALOG_POSITION = {label: index for index, label in enumerate(Transformation)}


class SchemaViolation(ValueError):
    """Raised when a collection payload does not match the schema.

    Attributes:
        errors: ``(field_path, message)`` pairs, one per offending field.
    """

    def __init__(self, errors: List[Tuple[str, str]]) -> None:
        self.errors = list(errors)
        details = "; ".join(f"{path}: {message}" for path, message in self.errors)
        super().__init__(f"Invalid collection: {details}")

    @property
    def fields(self) -> List[str]:
        return [path for path, _ in self.errors]

    @classmethod
    def from_validation_error(cls, exc: ValidationError) -> "SchemaViolation":
        errors = []
        for error in exc.errors():
            path = ".".join(str(part) for part in error.get("loc", ())) or "<root>"
            errors.append((path, error.get("msg", "invalid value")))
        return cls(errors)


class _FrozenModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )


def _none_to_empty(value: Any) -> Any:
    # Absent optional text arrives as null from JSON shells.
    return "" if value is None else value


OptionalText = Annotated[StrictStr, BeforeValidator(_none_to_empty)]


class Asset(_FrozenModel):
    """One visual work contributed to the collection."""

    name: StrictStr = Field(min_length=1)
    source_url: OptionalText = ""
    source_type: SourceType
    is_primary_value: StrictBool = False
    transformations: frozenset[Transformation] = Field(default_factory=frozenset)
    attribution: OptionalText = ""

    @field_validator("source_url")
    @classmethod
    def _validate_source_url(cls, value: str) -> str:
        if value:
            # Validate only; the caller's spelling is kept verbatim.
            try:
                _URL_ADAPTER.validate_python(value)
            except ValidationError as exc:
                raise ValueError(f"not a valid URL: {value!r}") from exc
        return value

    @property
    def ordered_transformations(self) -> List[Transformation]:
        """Transformations sorted in catalog order."""

        return sorted(self.transformations, key=_CATALOG_POSITION.__getitem__)


class Collection(_FrozenModel):
    """The NFT collection being prepared for publication."""

    collection_name: OptionalText = ""
    creator: OptionalText = ""
    description: OptionalText = ""
    base_external_url: OptionalText = ""
    palette_name: OptionalText = ""
    notes: OptionalText = ""
    assets: Tuple[Asset, ...] = Field(default_factory=tuple)


def parse_collection(data: Mapping[str, Any]) -> Collection:
    """Validate a raw mapping (camelCase or snake_case keys) into a :class:`Collection`.

    Raises:
        SchemaViolation: If any field is missing, unknown, or out of catalog.
    """

    if isinstance(data, Collection):
        return data
    try:
        return Collection.model_validate(data)
    except ValidationError as exc:
        raise SchemaViolation.from_validation_error(exc) from exc


def load_collection(path: str | Path) -> Collection:
    """Read a UTF-8 JSON document from ``path`` and validate it."""

    source = Path(path)
    with source.open("r", encoding="utf-8") as handle:
        try:
            payload = json.load(handle)
        except json.JSONDecodeError as exc:
            raise SchemaViolation([("<root>", f"{source.name} is not valid JSON: {exc.msg}")]) from exc
    if not isinstance(payload, dict):
        raise SchemaViolation([("<root>", "collection document must be a JSON object")])
    return parse_collection(payload)


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
