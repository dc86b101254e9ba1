"""Site configuration loaded from .folio.toml, env vars, and CLI flags.

Loading order: defaults → TOML file → env vars → CLI flags.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from folio.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".folio.toml"
CONFIG_SEARCH_PATHS = [
    Path("."),
]
GLOBAL_CONFIG = Path.home() / ".config" / "folio" / "config.toml"


class SiteSection(BaseModel):
    """[site] section."""

    title: str = "My Portfolio"
    description: str = ""
    author: str = ""
    base_url: str = "http://localhost:8000"
    language: str = "en"
    templates_dir: str = ""


class ContentSection(BaseModel):
    """[content] section."""

    directory: str = "./content"


class OutputSection(BaseModel):
    """[output] section."""

    directory: str = "./dist"


class RenderSection(BaseModel):
    """[render] section."""

    max_tags: int = Field(default=3, ge=0)
    excerpt_length: int = Field(default=160, ge=1)
    latest_count: int = Field(default=3, ge=0)
    feed_limit: int = Field(default=20, ge=0)
    markdown_extensions: list[str] = Field(
        default_factory=lambda: ["fenced_code", "tables", "toc"]
    )


class LoggingSection(BaseModel):
    """[logging] section."""

    level: str = "WARNING"


class FolioConfig(BaseModel):
    """Top-level configuration model for a site build."""

    site: SiteSection = Field(default_factory=SiteSection)
    content: ContentSection = Field(default_factory=ContentSection)
    output: OutputSection = Field(default_factory=OutputSection)
    render: RenderSection = Field(default_factory=RenderSection)
    logging: LoggingSection = Field(default_factory=LoggingSection)

    @property
    def content_dir(self) -> Path:
        return Path(self.content.directory)

    @property
    def output_dir(self) -> Path:
        return Path(self.output.directory)


def load_config(path: str | Path | None = None) -> FolioConfig:
    """Load configuration from a TOML file.

    Search order:
    1. Explicit path (if provided)
    2. .folio.toml in CWD
    3. ~/.config/folio/config.toml

    Then overlay environment variables.

    Args:
        path: Explicit path to a TOML file.

    Returns:
        Merged FolioConfig.

    Raises:
        ConfigError: If a value fails validation.
    """
    data: dict[str, object] = {}

    if path is not None:
        toml_path = Path(path)
        if toml_path.exists():
            data = _load_toml(toml_path)
        else:
            logger.warning("Config file not found: %s", toml_path)
    else:
        for search_dir in CONFIG_SEARCH_PATHS:
            candidate = search_dir / CONFIG_FILENAME
            if candidate.exists():
                data = _load_toml(candidate)
                logger.info("Loaded config from %s", candidate)
                break
        if not data and GLOBAL_CONFIG.exists():
            data = _load_toml(GLOBAL_CONFIG)
            logger.info("Loaded config from %s", GLOBAL_CONFIG)

    try:
        config = FolioConfig.model_validate(data) if data else FolioConfig()
    except PydanticValidationError as exc:
        raise ConfigError(f"invalid config: {exc}") from exc

    return _apply_env_vars(config)


def merge_cli_overrides(config: FolioConfig, **cli_kwargs: object) -> FolioConfig:
    """Overlay explicitly-set CLI flags onto the config.

    Only overrides values where the CLI flag was explicitly provided
    (i.e., not None).
    """
    data = config.model_dump()

    mapping: dict[str, tuple[str, str]] = {
        "content_directory": ("content", "directory"),
        "output_directory": ("output", "directory"),
        "base_url": ("site", "base_url"),
        "log_level": ("logging", "level"),
    }

    for key, value in cli_kwargs.items():
        if value is None:
            continue
        if key in mapping:
            section, field = mapping[key]
            data[section][field] = str(value)

    return FolioConfig.model_validate(data)


def _load_toml(path: Path) -> dict[str, object]:
    """Load a TOML file and return the data dict."""
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as exc:
        logger.warning("Failed to parse %s: %s", path, exc)
        return {}


def _apply_env_vars(config: FolioConfig) -> FolioConfig:
    """Apply environment variable overrides to config."""
    data = config.model_dump()

    env_mapping: dict[str, tuple[str, str]] = {
        "FOLIO_CONTENT_DIR": ("content", "directory"),
        "FOLIO_OUTPUT_DIR": ("output", "directory"),
        "FOLIO_BASE_URL": ("site", "base_url"),
        "FOLIO_LOG_LEVEL": ("logging", "level"),
    }

    for env_var, (section, field) in env_mapping.items():
        value = os.environ.get(env_var)
        if value is not None:
            data[section][field] = value

    return FolioConfig.model_validate(data)
