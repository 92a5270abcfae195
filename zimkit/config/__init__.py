"""Configuration loading for zimkit."""

from .settings import (
    GLOBAL_CONFIG,
    PROJECT_CONFIG,
    ZimConfig,
    load_config,
    load_yaml_config,
)

__all__ = [
    "GLOBAL_CONFIG",
    "PROJECT_CONFIG",
    "ZimConfig",
    "load_config",
    "load_yaml_config",
]
