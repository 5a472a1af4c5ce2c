import os
import yaml
from pathlib import Path
from typing import Any, Dict
from dotenv import dotenv_values, find_dotenv
import logging
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

ENV_PREFIX = "PKGDIST_"
CONFIG_PATH_VAR = f"{ENV_PREFIX}CONFIG_PATH"
DEFAULT_OUTPUT_DIR = "dist/"


def get_project_root() -> Path:
    """Get the package directory holding the bundled config.yaml.

    Returns:
        Path to the package directory
    """
    return Path(__file__).parent


def _prefixed(values: Dict[str, Any]) -> Dict[str, Any]:
    """Pick PKGDIST_* variables and map them to lowercase config keys."""
    return {
        key[len(ENV_PREFIX) :].lower(): value
        for key, value in values.items()
        if key.startswith(ENV_PREFIX) and key != CONFIG_PATH_VAR and value is not None
    }


def get_config() -> Dict[str, Any]:
    """Get configuration by merging config.yaml and environment variables.
    Values from .env override config.yaml, and the process environment
    overrides both.

    Returns:
        Dictionary containing merged configuration
    """
    # Load config file
    config_path = Path(
        os.getenv(CONFIG_PATH_VAR, str(get_project_root() / "config.yaml"))
    )
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        config = yaml.safe_load(f) or {}

    # Load environment variables from .env file next to the manifest
    dotenv_path = find_dotenv(usecwd=True)
    if not dotenv_path:
        logger.debug("No .env file found")
    else:
        config.update(_prefixed(dotenv_values(dotenv_path)))

    config.update(_prefixed(dict(os.environ)))

    return config  # type: ignore[no-any-return]


class PublishSettings(BaseModel):
    """Settings for one manifest rewrite run."""

    output_dir: str = Field(
        default=DEFAULT_OUTPUT_DIR,
        description="Build output directory, stripped from published paths",
    )
    source: str = Field(
        default="package.json", description="Manifest to read, relative to cwd"
    )
    manifest_name: str = Field(
        default="package.json", description="File name written in output_dir"
    )
    indent: int = Field(default=2, ge=0)
    log_level: str = "INFO"

    @field_validator("output_dir", mode="before")
    @classmethod
    def validate_output_dir(cls, v: Any) -> str:
        """Ensure the output directory ends with a path separator."""
        if v is None or str(v) == "":
            return DEFAULT_OUTPUT_DIR
        v = str(v)
        return v if v.endswith("/") else v + "/"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        return v.upper()


def get_settings(**overrides: Any) -> PublishSettings:
    """Build settings from configuration plus explicit overrides.

    Args:
        **overrides: Values that take precedence over configuration. None
            values are ignored so unset CLI flags fall back to config.

    Returns:
        Validated settings
    """
    config = get_config()
    fields = PublishSettings.model_fields
    merged = {key: value for key, value in config.items() if key in fields}
    merged.update({k: v for k, v in overrides.items() if v is not None})
    return PublishSettings(**merged)
