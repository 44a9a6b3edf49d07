"""Application settings schema and loader.

Settings are read from {project_root}/config/smartflow.yaml when present,
then overridden by environment variables:

    SMARTFLOW_LOG_LEVEL     e.g. DEBUG, INFO, WARNING
    SMARTFLOW_FORMS_DIR     directory holding form definitions
    SMARTFLOW_CORS_ORIGINS  comma-separated list of allowed origins
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from smartflow.startup import get_project_root

logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

ENV_OVERRIDES = {
    "SMARTFLOW_LOG_LEVEL": "log_level",
    "SMARTFLOW_FORMS_DIR": "forms_dir",
    "SMARTFLOW_CORS_ORIGINS": "cors_origins",
}


class SmartFlowSettings(BaseModel):
    """Runtime settings for the CLI and API.

    Attributes:
        log_level: Root log level for entry points.
        forms_dir: Directory containing form definitions (relative paths are
            resolved against the project root by callers).
        cors_origins: Origins allowed to call the HTTP API.
    """

    log_level: str = Field(default="INFO", description="Root log level")
    forms_dir: str = Field(default="forms", description="Directory of form definition files")
    cors_origins: List[str] = Field(
        default_factory=lambda: ["http://localhost:3000"],
        description="Origins allowed to call the HTTP API",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and upper-case the log level."""
        level = v.upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Unknown log level '{v}'. Valid levels: {sorted(VALID_LOG_LEVELS)}"
            )
        return level

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_origins(cls, v: Any) -> Any:
        """Accept a comma-separated string as well as a list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    def resolve_forms_dir(self, project_root: Path) -> Path:
        path = Path(self.forms_dir)
        return path if path.is_absolute() else project_root / path


def _env_overrides() -> Dict[str, str]:
    return {
        key: os.environ[env_name]
        for env_name, key in ENV_OVERRIDES.items()
        if os.environ.get(env_name)
    }


def load_settings(config_path: Optional[Path] = None) -> SmartFlowSettings:
    """Load settings from YAML, then apply environment overrides.

    Args:
        config_path: Optional explicit path to smartflow.yaml.
            If not provided, uses {project_root}/config/smartflow.yaml.

    Returns:
        SmartFlowSettings (defaults when no file exists).

    Raises:
        ValueError: If the file or an override contains invalid configuration.
    """
    if config_path is None:
        config_path = get_project_root() / "config" / "smartflow.yaml"

    data: Dict[str, Any] = {}
    if config_path.exists():
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                loaded = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in settings {config_path}: {e}")

        if loaded is None:
            logger.warning(f"Empty settings file at {config_path}")
        elif not isinstance(loaded, dict):
            raise ValueError(f"Settings file {config_path} must contain a mapping")
        else:
            data = loaded
    else:
        logger.debug(f"No settings file found at {config_path}, using defaults")

    data.update(_env_overrides())

    try:
        return SmartFlowSettings.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid settings: {e}")


# Cached settings (loaded once per process)
_cached_settings: Optional[SmartFlowSettings] = None


def get_settings(force_reload: bool = False) -> SmartFlowSettings:
    """Get the current settings (cached)."""
    global _cached_settings

    if force_reload or _cached_settings is None:
        _cached_settings = load_settings()

    return _cached_settings


def reset_settings_cache() -> None:
    """Reset the settings cache."""
    global _cached_settings
    _cached_settings = None
