"""Configuration models for registry retrieval, decoding, and logging.

Settings are plain pydantic models aggregated by :class:`DictionarySettings`,
which also reads ``DICOMDICT_*`` environment overrides (nested fields use a
double underscore, e.g. ``DICOMDICT_DOWNLOAD__TIMEOUT_SEC=60``). A YAML or
JSON file can seed the values through :func:`load_settings`.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError

__all__ = [
    "DEFAULT_PART6_URL",
    "DownloadConfiguration",
    "DecodingConfiguration",
    "SectionLabels",
    "LoggingConfiguration",
    "DictionarySettings",
    "load_settings",
]

DEFAULT_PART6_URL = (
    "https://dicom.nema.org/medical/dicom/current/source/docbook/part06/part06.xml"
)


class DownloadConfiguration(BaseModel):
    """HTTP settings used to fetch part06.xml."""

    url: str = Field(default=DEFAULT_PART6_URL, description="Location of part06.xml")
    timeout_sec: float = Field(default=60.0, gt=0.0, le=600.0)
    connect_timeout_sec: float = Field(default=10.0, gt=0.0, le=120.0)
    max_retries: int = Field(default=3, ge=0, le=10)
    backoff_factor: float = Field(default=0.5, ge=0.0, le=10.0)
    backoff_jitter: float = Field(default=0.5, ge=0.0, le=10.0)
    polite_headers: Dict[str, str] = Field(
        default_factory=lambda: {"User-Agent": "dicom-dictionary-parser"},
    )

    @field_validator("url")
    @classmethod
    def validate_url(cls, value: str) -> str:
        """Require an absolute HTTP(S) URL."""

        if not value.startswith(("http://", "https://")):
            raise ValueError("url must start with http:// or https://")
        return value


class DecodingConfiguration(BaseModel):
    """Row decoding policy."""

    strict: bool = Field(
        default=False,
        description="Fail on tag/VR/VM cells without text instead of substituting ''",
    )


class SectionLabels(BaseModel):
    """Chapter labels of the registries in part06.xml."""

    data_elements: str = "6"
    file_meta_elements: str = "7"
    directory_structuring_elements: str = "8"
    unique_identifiers: str = "A"


class LoggingConfiguration(BaseModel):
    """Logging-related configuration."""

    level: str = Field(
        default="WARNING", description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )
    log_file: Optional[Path] = Field(default=None, description="Optional JSON-lines log file")
    max_log_size_mb: int = Field(default=10, gt=0, description="Maximum size of rotated log files")

    @field_validator("level")
    @classmethod
    def validate_level(cls, value: str) -> str:
        """Normalise logging levels and ensure they match the supported set."""

        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR"}
        upper = value.upper()
        if upper not in valid_levels:
            raise ValueError(f"level must be one of {valid_levels}")
        return upper

    model_config = {"validate_assignment": True}


class DictionarySettings(BaseSettings):
    """Top-level settings for the registry parser and CLI."""

    download: DownloadConfiguration = Field(default_factory=DownloadConfiguration)
    decoding: DecodingConfiguration = Field(default_factory=DecodingConfiguration)
    sections: SectionLabels = Field(default_factory=SectionLabels)
    logging: LoggingConfiguration = Field(default_factory=LoggingConfiguration)

    model_config = SettingsConfigDict(
        env_prefix="DICOMDICT_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )


def _read_config_file(path: Path) -> Dict[str, Any]:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"Unable to read config file {path}: {exc}") from exc

    try:
        if path.suffix.lower() == ".json":
            data = json.loads(raw)
        else:
            data = yaml.safe_load(raw)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Unable to parse config file {path}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")
    return data


def load_settings(path: Optional[Path] = None) -> DictionarySettings:
    """Build settings from defaults, an optional file, and the environment.

    Values from ``path`` are passed as init arguments, so they win over
    environment overrides.

    Raises:
        ConfigurationError: If the file is unreadable or holds invalid values.
    """

    data = _read_config_file(path) if path is not None else {}
    try:
        return DictionarySettings(**data)
    except PydanticValidationError as exc:
        source = str(path) if path is not None else "environment"
        raise ConfigurationError(f"Invalid settings from {source}: {exc}") from exc
