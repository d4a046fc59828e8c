"""Configuration loader for provcheck using Pydantic settings."""

from __future__ import annotations

import json
import os
import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Annotated, Any

from pydantic import AliasChoices, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, PydanticBaseSettingsSource, SettingsConfigDict

ENV_VAR_NAME = "PROVCHECK_ENV"
DEFAULT_ENV = "local"
PROJECT_ROOT = Path(__file__).resolve().parents[3]
CONFIG_DIR = PROJECT_ROOT / "config"
DEFAULT_CONFIG_FILE = CONFIG_DIR / "settings.default.toml"
LOCAL_CONFIG_FILE = CONFIG_DIR / "settings.local.toml"
SETTINGS_FILE_ENV_VAR = "PROVCHECK_SETTINGS_FILE"


def _resolve_env(explicit_env: str | None = None) -> str:
    """Return the active environment name.

    Args:
        explicit_env: Environment value supplied directly by the caller.

    Returns:
        A stripped environment name, falling back to ``DEFAULT_ENV``.
    """

    env = explicit_env or os.getenv(ENV_VAR_NAME) or DEFAULT_ENV
    return env.strip()


def _env_file_candidates(env: str) -> list[Path]:
    """List candidate ``.env`` files used during settings resolution."""

    return [
        PROJECT_ROOT / ".env",
        PROJECT_ROOT / f".env.{env}",
        PROJECT_ROOT / ".env.local",
    ]


def _resolve_config_path(raw_path: str | None) -> Path | None:
    """Return an absolute config path from user input."""

    if not raw_path:
        return None
    candidate = Path(raw_path).expanduser()
    if not candidate.is_absolute():
        candidate = (PROJECT_ROOT / candidate).resolve()
    return candidate


def _config_file_priority(include_missing: bool = False) -> tuple[Path, ...]:
    """Return config files in descending precedence order."""

    ordered: list[Path] = []
    env_override = _resolve_config_path(os.getenv(SETTINGS_FILE_ENV_VAR))
    if env_override:
        ordered.append(env_override)
    ordered.append(LOCAL_CONFIG_FILE)
    ordered.append(DEFAULT_CONFIG_FILE)
    if include_missing:
        return tuple(ordered)
    return tuple(path for path in ordered if path.exists())


class TomlConfigSettingsSource(PydanticBaseSettingsSource):
    """Pydantic settings source that loads values from a TOML file."""

    def __init__(self, settings_cls: type[BaseSettings], path: Path) -> None:
        super().__init__(settings_cls)
        self.path = path
        self._data: dict[str, Any] | None = None

    def _load(self) -> dict[str, Any]:
        if self._data is not None:
            return self._data
        if not self.path.exists():
            self._data = {}
            return self._data
        try:
            with self.path.open("rb") as handle:
                self._data = tomllib.load(handle)
        except tomllib.TOMLDecodeError as exc:  # pragma: no cover - invalid files surface immediately
            raise ValueError(f"Invalid TOML syntax in {self.path}") from exc
        return self._data

    def __call__(self) -> dict[str, Any]:  # pragma: no cover - trivial wrapper
        return self._load()

    def get_field_value(self, field_name: str, field):  # pragma: no cover - passthrough helper
        data = self._load()
        return data.get(field_name), field_name in data


def _read_env_value(*keys: str) -> str | None:
    """Return the first present environment variable from ``keys``."""

    for key in keys:
        value = os.getenv(key)
        if value is not None:
            return value
    return None


def _parse_list(raw: str) -> list[str]:
    """Accept either a JSON array or a comma separated string."""

    try:
        candidate = json.loads(raw)
    except json.JSONDecodeError:
        candidate = None
    if isinstance(candidate, list):
        return [str(item).strip() for item in candidate if str(item).strip()]
    return [chunk.strip() for chunk in raw.split(",") if chunk.strip()]


def _lowercase_list(value: Any) -> Any:
    """Normalise list settings given as JSON, comma separated text or a list."""

    if isinstance(value, str):
        value = _parse_list(value)
    if isinstance(value, (list, tuple)):
        return [str(item).strip().lower() for item in value if str(item).strip()]
    return value


class RuntimeSettings(BaseSettings):
    """Process-level runtime controls."""

    model_config = SettingsConfigDict(extra="ignore", populate_by_name=True)

    log_level: str = Field(default="INFO")


class PolicySettings(BaseSettings):
    """Licensing policy knobs."""

    model_config = SettingsConfigDict(extra="ignore", populate_by_name=True)

    advisory_codes: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["missing_attribution", "duplicate_asset_name"],
        description="Issue codes reported as advisory instead of blocking.",
    )

    @field_validator("advisory_codes", mode="before")
    @classmethod
    def _split_codes(cls, value: Any) -> Any:
        return _lowercase_list(value)


class ExportSettings(BaseSettings):
    """Artifact naming and output location."""

    model_config = SettingsConfigDict(extra="ignore", populate_by_name=True)

    output_dir: Path = Field(
        default=Path("data/exports"),
        description="Directory where exported artifacts are written.",
    )
    metadata_filename: str = Field(default="metadata.json")
    credits_filename: str = Field(default="credits.md")
    issues_filename: str = Field(default="issues.json")
    json_indent: int = Field(default=2, ge=0, le=8)
    default_formats: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["metadata", "credits"],
        description="Artifacts produced when the caller does not request specific formats.",
    )

    @field_validator("default_formats", mode="before")
    @classmethod
    def _split_formats(cls, value: Any) -> Any:
        return _lowercase_list(value)


class ObservabilitySettings(BaseSettings):
    """Structured logging configuration."""

    model_config = SettingsConfigDict(extra="ignore", populate_by_name=True)

    structured_logging: bool = Field(default=False)
    service_name: str = Field(default="provcheck")


class Settings(BaseSettings):
    """Top-level configuration model with nested sections for each subsystem."""

    env: str = Field(
        default_factory=lambda: _resolve_env(),
        validation_alias=AliasChoices("ENV", "ENVIRONMENT", "RUNTIME__ENV"),
    )
    project_root: Path = Field(default=PROJECT_ROOT)
    runtime: RuntimeSettings = Field(default_factory=RuntimeSettings)
    policy: PolicySettings = Field(default_factory=PolicySettings)
    export: ExportSettings = Field(default_factory=ExportSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)
    env_files: tuple[Path, ...] = Field(default_factory=tuple, exclude=True)
    config_files: tuple[Path, ...] = Field(default_factory=tuple, exclude=True)

    model_config = SettingsConfigDict(
        env_prefix="PROVCHECK_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        """Extend settings sources with TOML-based config files."""

        config_sources = [TomlConfigSettingsSource(settings_cls, path) for path in _config_file_priority()]
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            *config_sources,
            file_secret_settings,
        )

    @model_validator(mode="after")
    def _resolve_paths(self) -> "Settings":
        """Normalize relative paths once the model is initialised."""

        if not self.export.output_dir.is_absolute():
            export_update = {"output_dir": (self.project_root / self.export.output_dir).resolve()}
            object.__setattr__(self, "export", self.export.model_copy(update=export_update))
        return self

    @model_validator(mode="after")
    def _apply_environment_overrides(self) -> "Settings":
        """Apply flat env aliases that nested parsing does not pick up.

        The ``__`` nested variables are read by the env source itself; only
        the single underscore spellings are handled here.
        """

        if self.env.lower() == "local":
            object.__setattr__(
                self,
                "observability",
                self.observability.model_copy(update={"structured_logging": False}),
            )

        advisory_override = _read_env_value(
            "PROVCHECK_POLICY_ADVISORY_CODES",
            "POLICY_ADVISORY_CODES",
        )
        if advisory_override is not None:
            codes = _lowercase_list(advisory_override)
            object.__setattr__(self, "policy", self.policy.model_copy(update={"advisory_codes": codes}))

        formats_override = _read_env_value(
            "PROVCHECK_EXPORT_DEFAULT_FORMATS",
            "EXPORT_DEFAULT_FORMATS",
        )
        if formats_override:
            formats = _lowercase_list(formats_override)
            object.__setattr__(self, "export", self.export.model_copy(update={"default_formats": formats}))

        return self

    @property
    def log_level(self) -> str:
        """str: Effective logging level for the running process."""

        return self.runtime.log_level

    @property
    def is_local(self) -> bool:
        """bool: True when the active environment is ``local``."""

        return self.env.lower() == "local"


def _load_settings(env: str | None = None) -> Settings:
    """Load settings with optional environment override.

    Args:
        env: Environment name supplied programmatically.

    Returns:
        Fully parsed :class:`Settings` instance with env files applied.
    """

    resolved_env = _resolve_env(env)
    candidate_files = [path for path in _env_file_candidates(resolved_env) if path.exists()]
    config_files = _config_file_priority()
    return Settings(
        _env_file=[str(path) for path in candidate_files],
        _env_file_encoding="utf-8",
        env=resolved_env,
        env_files=tuple(candidate_files),
        config_files=config_files,
    )


@lru_cache(maxsize=1)
def get_settings(env: str | None = None) -> Settings:
    """Return cached settings for the requested environment."""

    return _load_settings(env)


def reload_settings(env: str | None = None) -> Settings:
    """Clear the cached settings and reload from disk."""

    get_settings.cache_clear()
    return get_settings(env)


__all__ = [
    "Settings",
    "get_settings",
    "reload_settings",
    "PROJECT_ROOT",
    "ENV_VAR_NAME",
]
