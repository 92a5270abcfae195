"""
Core functionality for zimkit.

This package contains the foundational modules that other components depend on.
"""

from .directory import (
    DefaultPaths,
    get_os_family,
    default_targets_dir,
    default_toolchains_dir,
    default_zls_dir,
    default_config_dir,
    get_default_paths,
    clear_default_paths_cache,
)

from .locking import registry_lock

from .exceptions import (
    ZimError,
    TargetError,
    InvalidIdentifier,
    TargetNotInstalled,
    RegistryLockTimeout,
    ToolchainError,
    VersionQueryFailed,
    ToolchainNotInstalled,
    SystemToolchainNotFound,
    ConfigError,
    ConfigLoadError,
    ConfigWriteFailed,
)

__all__ = [
    # Directory
    "DefaultPaths",
    "get_os_family",
    "default_targets_dir",
    "default_toolchains_dir",
    "default_zls_dir",
    "default_config_dir",
    "get_default_paths",
    "clear_default_paths_cache",
    # Locking
    "registry_lock",
    # Exceptions
    "ZimError",
    "TargetError",
    "InvalidIdentifier",
    "TargetNotInstalled",
    "RegistryLockTimeout",
    "ToolchainError",
    "VersionQueryFailed",
    "ToolchainNotInstalled",
    "SystemToolchainNotFound",
    "ConfigError",
    "ConfigLoadError",
    "ConfigWriteFailed",
]
