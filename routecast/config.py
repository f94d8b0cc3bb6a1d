"""
Configuration module with strict environment variable validation.
Provider credentials are required - there is no anonymous mode.

Settings are centralized in config.yaml - modify there, not in code.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Any

import yaml


class ConfigurationError(Exception):
    """Raised when required configuration is missing."""
    pass


# Load YAML config once at module level
_CONFIG_PATH = Path(__file__).parent / "config.yaml"
_YAML_CONFIG: dict = {}


def _load_yaml_config() -> dict:
    """Load configuration from config.yaml file."""
    global _YAML_CONFIG
    if not _YAML_CONFIG:
        if _CONFIG_PATH.exists():
            with open(_CONFIG_PATH, "r") as f:
                _YAML_CONFIG = yaml.safe_load(f) or {}
        else:
            raise ConfigurationError(f"Configuration file not found: {_CONFIG_PATH}")
    return _YAML_CONFIG


def get_yaml_setting(*keys: str, default: Any = None) -> Any:
    """
    Get a setting from config.yaml using dot notation.

    Example: get_yaml_setting("pipeline", "simplify_tolerance") -> 0.001
    """
    config = _load_yaml_config()
    value = config
    for key in keys:
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default
    return value


def get_required_env(key: str) -> str:
    """Get a required environment variable. Raises if not set."""
    value = os.environ.get(key)
    if value is None or value.strip() == "":
        raise ConfigurationError(
            f"Missing required environment variable: {key}\n"
            f"Please set {key} in your .env file or environment."
        )
    return value.strip()


def get_optional_env(key: str) -> Optional[str]:
    """Get an optional environment variable. Returns None if not set."""
    value = os.environ.get(key)
    if value is None or value.strip() == "":
        return None
    return value.strip()


@dataclass(frozen=True)
class Config:
    """Application configuration - immutable after creation."""

    # Server settings - REQUIRED
    backend_port: int
    backend_host: str

    # Provider credentials - REQUIRED
    mapbox_access_token: str
    tomorrow_api_key: str

    # CORS settings - defaults to any origin
    cors_origins: list[str] = field(default_factory=lambda: ["*"])

    # Pipeline settings (from config.yaml)
    weather_fields: tuple[str, ...] = ("precipitationIntensity",)
    simplify_tolerance: float = 0.001
    directions_profile: str = "driving"
    send_leg_ids: bool = False

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables and config.yaml."""

        # Required settings
        backend_port = int(get_required_env("BACKEND_PORT"))
        backend_host = get_required_env("BACKEND_HOST")

        mapbox_access_token = get_required_env("MAPBOX_ACCESS_TOKEN")
        tomorrow_api_key = get_required_env("TOMORROW_API_KEY")

        # Optional settings
        cors_origins_str = get_optional_env("CORS_ORIGINS")
        cors_origins = (
            [origin.strip() for origin in cors_origins_str.split(",")]
            if cors_origins_str
            else ["*"]
        )

        fields = get_yaml_setting("weather", "fields", default=["precipitationIntensity"])
        if not fields:
            raise ConfigurationError("weather.fields in config.yaml must list at least one field")

        tolerance = float(get_yaml_setting("pipeline", "simplify_tolerance", default=0.001))
        if tolerance <= 0:
            raise ConfigurationError("pipeline.simplify_tolerance must be positive")

        return cls(
            backend_port=backend_port,
            backend_host=backend_host,
            mapbox_access_token=mapbox_access_token,
            tomorrow_api_key=tomorrow_api_key,
            cors_origins=cors_origins,
            weather_fields=tuple(fields),
            simplify_tolerance=tolerance,
            directions_profile=get_yaml_setting("mapbox", "profile", default="driving"),
            send_leg_ids=bool(get_yaml_setting("tomorrow", "send_leg_ids", default=False)),
        )

    def validate_apis(self) -> dict[str, bool]:
        """Return which APIs are configured."""
        return {
            "mapbox_directions": bool(self.mapbox_access_token),
            "tomorrow_route": bool(self.tomorrow_api_key),
        }


def load_config() -> Config:
    """Load and validate configuration."""
    from dotenv import load_dotenv

    # Load .env file if present
    load_dotenv()

    return Config.from_env()
