"""
Centralized exception hierarchy for zimkit.

Every error raised by the target, toolchain and config layers derives from
ZimError so the CLI can render them uniformly. "Not found" conditions are
never raised from detection code; they are returned as None/False.
"""

from pathlib import Path
from typing import Optional, Union


# ============================================================================
# Base Exceptions
# ============================================================================


class ZimError(Exception):
    """Base exception for all zimkit errors."""

    pass


# ============================================================================
# Target Exceptions
# ============================================================================


class TargetError(ZimError):
    """Base exception for cross-compilation target errors."""

    pass


class InvalidIdentifier(TargetError):
    """Raised when a target identifier is malformed."""

    def __init__(self, identifier: str, reason: str = ""):
        self.identifier = identifier
        msg = f"Invalid target identifier: '{identifier}'"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


class TargetNotInstalled(TargetError):
    """Raised when an operation requires a target that is not installed."""

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"Target is not installed: {identifier}")


class RegistryLockTimeout(TargetError):
    """Raised when the target registry lock cannot be acquired in time."""

    pass


# ============================================================================
# Toolchain Exceptions
# ============================================================================


class ToolchainError(ZimError):
    """Base exception for toolchain-related errors."""

    pass


class VersionQueryFailed(ToolchainError):
    """Raised when a binary exists but cannot report its version."""

    def __init__(self, path: Union[str, Path], reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Version query failed for {path}: {reason}")


class ToolchainNotInstalled(ToolchainError):
    """Raised when a managed toolchain version is not installed."""

    def __init__(self, version: str):
        self.version = version
        super().__init__(f"Zig {version} is not installed")


class SystemToolchainNotFound(ToolchainError):
    """Raised when a system toolchain is required but none is on the PATH."""

    pass


# ============================================================================
# Configuration Exceptions
# ============================================================================


class ConfigError(ZimError):
    """Base exception for configuration errors."""

    pass


class ConfigLoadError(ConfigError):
    """Raised when a configuration file cannot be parsed."""

    pass


class ConfigWriteFailed(ConfigError):
    """Raised when a generated configuration file cannot be written."""

    def __init__(self, path: Union[str, Path], reason: Optional[str] = None):
        self.path = Path(path)
        self.reason = reason
        msg = f"Failed to write configuration to {path}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)
