"""Configuration loading (YAML + JSON Schema)."""

from .loader import ConfigError, apply_env_overrides, default_config, load_config

__all__ = [
    "ConfigError",
    "apply_env_overrides",
    "default_config",
    "load_config",
]
