"""Configuration for buildcli.

Configuration is loaded from layered sources, later ones winning:

1. Built-in defaults (Pydantic model defaults)
2. YAML config file (``--config`` path, else ``~/.buildcli/config.yml``)
3. Environment variables (``BUILDCLI_*`` prefix, ``__`` for nesting),
   e.g. ``BUILDCLI_UPDATE__CHECK_ON_STARTUP=false``
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from buildcli.core.models import UpdateSettings
from buildcli.exceptions import ConfigError
from buildcli.infra.filesystem import home_bin_directory

DEFAULT_CONFIG_PATH = Path("~/.buildcli/config.yml")
ENV_PREFIX = "BUILDCLI_"

UPSTREAM_URL = "https://github.com/BuildCLI/BuildCLI.git"


class BannerConfig(BaseModel):
    """Welcome banner settings.

    Attributes:
        enabled: Whether the banner is printed at startup.
        path: Optional file whose contents replace the official banner.
    """

    enabled: bool = Field(default=True, description="Print the welcome banner")
    path: str | None = Field(default=None, description="Custom banner file")


class UpdateConfig(BaseModel):
    """Self-update settings.

    Attributes:
        check_on_startup: Run the update check when invoked without a target.
        upstream_url: Canonical repository compared against the local checkout.
        install_dir: Directory holding the installed artifact (default ``~/bin``).
        artifact_path: Rebuilt artifact, relative to the installation directory.
        artifact_name: File name of the installed artifact in ``install_dir``.
        build_command: Command run in the installation directory to rebuild.
    """

    check_on_startup: bool = Field(default=True)
    upstream_url: str = Field(default=UPSTREAM_URL)
    install_dir: str | None = Field(default=None)
    artifact_path: str = Field(default="cli/target/buildcli.jar")
    artifact_name: str = Field(default="buildcli.jar")
    build_command: list[str] = Field(
        default_factory=lambda: ["mvn", "clean", "package", "-DskipTests"],
    )

    @field_validator("build_command")
    @classmethod
    def validate_build_command(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("build_command must not be empty")
        return v

    def to_settings(self) -> UpdateSettings:
        """Return the immutable settings consumed by the orchestrator."""
        return UpdateSettings(
            upstream_url=self.upstream_url,
            install_dir=(
                Path(self.install_dir).expanduser()
                if self.install_dir
                else home_bin_directory()
            ),
            artifact_path=Path(self.artifact_path),
            artifact_name=self.artifact_name,
        )


class LoggingConfig(BaseModel):
    """Logging settings.

    Attributes:
        level: Log level name for the ``buildcli`` logger.
    """

    level: str = Field(default="info")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        if not isinstance(logging.getLevelName(v.upper()), int):
            raise ValueError(f"Unknown log level: {v}")
        return v.lower()


class BuildCLIConfig(BaseModel):
    """Root configuration model."""

    banner: BannerConfig = Field(default_factory=BannerConfig)
    update: UpdateConfig = Field(default_factory=UpdateConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


# =============================================================================
# Configuration loading
# =============================================================================


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return a new dict with *override* merged recursively into *base*."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _load_yaml_config(config_path: Path) -> dict[str, Any]:
    """Load a YAML mapping from *config_path*.

    Raises:
        ConfigError: If the file is missing, unreadable or not a mapping.
    """
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Cannot read configuration file {config_path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(
            f"Configuration file {config_path} must contain a mapping.",
        )
    return data


def _parse_env_value(value: str) -> Any:
    """Parse an environment variable value into bool, list or string."""
    if value.lower() in ("true", "yes", "1", "on"):
        return True
    if value.lower() in ("false", "no", "0", "off"):
        return False

    # Comma-separated lists, e.g. BUILDCLI_UPDATE__BUILD_COMMAND=mvn,package
    if "," in value:
        return [item.strip() for item in value.split(",")]

    return value


def _load_env_config(prefix: str = ENV_PREFIX) -> dict[str, Any]:
    """Collect ``BUILDCLI_*`` variables into a nested dict."""
    result: dict[str, Any] = {}

    for key, value in os.environ.items():
        if not key.startswith(prefix):
            continue

        parts = key[len(prefix):].lower().split("__")

        current = result
        for part in parts[:-1]:
            current = current.setdefault(part, {})

        current[parts[-1]] = _parse_env_value(value)

    return result


def load_config(
    config_path: Path | str | None = None,
    env_prefix: str = ENV_PREFIX,
) -> BuildCLIConfig:
    """Load configuration from all sources with layered precedence.

    Args:
        config_path: Explicit YAML file.  When ``None``, the default
            ``~/.buildcli/config.yml`` is used if it exists.
        env_prefix: Prefix for environment variable overrides.

    Raises:
        ConfigError: If a file cannot be read or the result fails validation.
    """
    config_dict: dict[str, Any] = {}

    if config_path is None:
        default_path = DEFAULT_CONFIG_PATH.expanduser()
        if default_path.exists():
            config_path = default_path
    elif isinstance(config_path, str):
        config_path = Path(config_path)

    if config_path is not None:
        config_dict = _deep_merge(config_dict, _load_yaml_config(config_path))

    config_dict = _deep_merge(config_dict, _load_env_config(env_prefix))

    try:
        return BuildCLIConfig(**config_dict)
    except ValidationError as exc:
        raise ConfigError(
            "Invalid buildcli configuration.",
            hint=str(exc),
        ) from exc
