"""Configuration management using pydantic-settings."""

from pathlib import Path
from typing import Any, Literal, Tuple, Type
from urllib.parse import urlparse

import yaml
from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)


def load_yaml_config(config_path: Path | None = None) -> dict[str, Any]:
    """
    Load configuration from YAML file.

    Priority:
    1. Explicitly provided config_path
    2. ~/.telemeter/config.yaml (default location)
    3. Empty dict if no file exists

    Args:
        config_path: Optional path to config file

    Returns:
        Dictionary of configuration values (flattened from nested YAML)
    """
    if config_path is None:
        config_path = Path.home() / ".telemeter" / "config.yaml"

    if not config_path.exists():
        return {}

    try:
        with open(config_path) as f:
            yaml_data = yaml.safe_load(f) or {}

        flattened = {}

        if "forward" in yaml_data:
            forward = yaml_data["forward"]
            if "url" in forward:
                flattened["forward_url"] = forward["url"]
            if "timeout_seconds" in forward:
                flattened["forward_timeout_seconds"] = forward["timeout_seconds"]
            if "drift_warning_seconds" in forward:
                flattened["forward_drift_warning_seconds"] = forward[
                    "drift_warning_seconds"
                ]

        if "memstore" in yaml_data:
            memstore = yaml_data["memstore"]
            if "ttl_seconds" in memstore:
                flattened["memstore_ttl_seconds"] = memstore["ttl_seconds"]

        if "logging" in yaml_data:
            logging = yaml_data["logging"]
            if "level" in logging:
                flattened["log_level"] = logging["level"]
            if "format" in logging:
                flattened["log_format"] = logging["format"]

        return flattened

    except Exception as e:
        import warnings

        warnings.warn(f"Failed to load config from {config_path}: {e}")
        return {}


_config_path: Path | None = None


class YamlSettingsSource(PydanticBaseSettingsSource):
    """
    Custom settings source that loads configuration from YAML file.

    This allows YAML config to be loaded with proper priority in the settings chain.
    """

    def get_field_value(self, field: Any, field_name: str) -> Tuple[Any, str, bool]:
        """Not used since we override __call__."""
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        """Load configuration from YAML file."""
        return load_yaml_config(_config_path)


class Settings(BaseSettings):
    """
    Telemeter configuration settings.

    Configuration priority (highest to lowest):
    1. Environment variables (e.g., FORWARD_URL=http://receive:19291/api/v1/receive)
    2. YAML configuration file (~/.telemeter/config.yaml)
    3. Default values defined in this class
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    forward_url: str | None = Field(
        default=None,
        description="Remote write receive endpoint; forwarding is disabled when unset",
    )
    forward_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Timeout for each forwarding request",
    )
    forward_drift_warning_seconds: float = Field(
        default=10.0,
        ge=0,
        description="Mean clock drift above which a warning is logged",
    )

    memstore_ttl_seconds: int = Field(
        default=600,
        ge=1,
        description="How long the in-memory store keeps a partition's metrics",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    log_format: Literal["json", "text"] = Field(
        default="json", description="Log format"
    )

    @field_validator("forward_url")
    @classmethod
    def validate_forward_url(cls, v: str | None) -> str | None:
        """Require an absolute http(s) URL."""
        if v is None:
            return v

        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("Forward URL must be an absolute http(s) URL")

        return v

    @property
    def forwarding_enabled(self) -> bool:
        """Check if a receive endpoint is configured."""
        return self.forward_url is not None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        """
        Customize settings sources priority.

        Priority order (highest to lowest):
        1. Explicit kwargs (init_settings) - for testing and programmatic config
        2. Environment variables
        3. YAML configuration file
        4. .env file
        5. Field defaults
        """
        return (
            init_settings,
            env_settings,
            YamlSettingsSource(settings_cls),
            dotenv_settings,
        )


_settings: Settings | None = None


def get_settings(config_path: Path | None = None, reload: bool = False) -> Settings:
    """
    Get global settings instance.

    Args:
        config_path: Optional path to YAML config file (defaults to ~/.telemeter/config.yaml)
        reload: If True, force reload settings (useful for testing)

    Returns:
        Settings instance with merged configuration
    """
    global _settings, _config_path
    if _settings is None or reload:
        _config_path = config_path

        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings singleton (useful for testing)."""
    global _settings, _config_path
    _settings = None
    _config_path = None
