"""pom-scout configuration model and loader.

Loads and validates pom-scout.config.json configuration files, applying
environment variable and explicit overrides on top.
"""

import json
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel, to_snake

from .cli.errors import ConfigurationError
from .scout_logging import get_logger

logger = get_logger()

# Default configuration file name
CONFIG_FILENAME = "pom-scout.config.json"

# Environment variable to config field mapping
ENV_MAPPINGS: dict[str, str] = {
    "POM_SCOUT_MIN_SIMILARITY": "min_similarity",
    "POM_SCOUT_HEADLESS": "headless",
    "POM_SCOUT_OUTPUT_DIR": "output_dir",
}


class ScoutConfig(BaseModel):
    """Run configuration with validation.

    Accepts snake_case or camelCase keys, so config files may use either.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    # Analysis
    min_similarity: float = Field(default=60.0, ge=0, le=100)
    fallback_confidence: float = Field(default=80.0, ge=0, le=100)
    basepage_min_confidence: float = Field(default=80.0, ge=0, le=100)
    max_elements_per_page: int = Field(default=500, ge=1)
    text_limit: int = Field(default=100, ge=1)
    filter_noise: bool = Field(default=True)

    # Browser
    navigation_timeout_ms: int = Field(default=30000, ge=1000)
    headless: bool = Field(default=True)
    urls: list[str] = Field(default_factory=list)

    # Output
    output_dir: Path = Field(default=Path("."))
    report_filename: str = Field(default="pom-locators-report.json")
    basepage_filename: str = Field(default="suggested-basepage.ts")

    @field_validator("urls")
    @classmethod
    def validate_urls(cls, urls: list[str]) -> list[str]:
        """Strip blanks and require an http(s) or file scheme."""
        cleaned = [url.strip() for url in urls if url and url.strip()]
        for url in cleaned:
            if not url.startswith(("http://", "https://", "file://")):
                raise ValueError(f"URL must start with http://, https:// or file://: {url}")
        return cleaned

    @property
    def report_path(self) -> Path:
        """Where the JSON report is written."""
        return self.output_dir / self.report_filename

    @property
    def basepage_path(self) -> Path:
        """Where the generated BasePage source is written."""
        return self.output_dir / self.basepage_filename

    @classmethod
    def from_env(cls) -> "ScoutConfig":
        """Create config with environment variable overrides."""
        return cls(**env_overrides())


def env_overrides() -> dict[str, Any]:
    """Collect config values set through environment variables.

    Values stay strings; pydantic coerces them to the field types.
    """
    values: dict[str, Any] = {}
    for env_var, field_name in ENV_MAPPINGS.items():
        value = os.environ.get(env_var)
        if value is not None:
            values[field_name] = value
    return values


def _read_config_file(config_path: Path) -> dict[str, Any]:
    logger.debug(f"Loading pom-scout config from {config_path}")
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"Invalid JSON in config file: {e}", config_file=str(config_path)
        ) from e
    except OSError as e:
        raise ConfigurationError(
            f"Cannot read config file: {e}", config_file=str(config_path)
        ) from e

    if not isinstance(data, dict):
        raise ConfigurationError(
            "Config file must contain a JSON object", config_file=str(config_path)
        )
    # camelCase keys map onto field names
    return {to_snake(key): value for key, value in data.items()}


def load_scout_config(
    config_path: Path | None = None,
    project_path: Path | None = None,
    **overrides: Any,
) -> ScoutConfig:
    """Load pom-scout configuration.

    Precedence (highest to lowest):
    1. Explicit keyword overrides (None values are ignored)
    2. Environment variables (POM_SCOUT_*)
    3. Explicit config_path, else pom-scout.config.json in project_path
    4. Default configuration

    Args:
        config_path: Optional explicit path to a config file.
        project_path: Directory searched for the default config file.
            Defaults to the current directory.
        **overrides: Field values taking precedence over everything else.

    Returns:
        Validated ScoutConfig instance.

    Raises:
        ConfigurationError: If a config file is unreadable or a value is invalid.
    """
    data: dict[str, Any] = {}
    source: Path | None = None

    if config_path is not None:
        config_path = Path(config_path)
        if not config_path.exists():
            raise ConfigurationError(
                f"Config file not found: {config_path}", config_file=str(config_path)
            )
        source = config_path
    else:
        default_path = (Path(project_path) if project_path else Path.cwd()) / CONFIG_FILENAME
        if default_path.exists():
            source = default_path

    if source is not None:
        data.update(_read_config_file(source))
    else:
        logger.debug("No pom-scout config found, using defaults")

    data.update(env_overrides())
    data.update({key: value for key, value in overrides.items() if value is not None})

    try:
        return ScoutConfig.model_validate(data)
    except PydanticValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in e.errors()
        )
        raise ConfigurationError(
            f"Invalid configuration: {problems}",
            config_file=str(source) if source else None,
        ) from e


__all__ = [
    "CONFIG_FILENAME",
    "ENV_MAPPINGS",
    "ScoutConfig",
    "env_overrides",
    "load_scout_config",
]
