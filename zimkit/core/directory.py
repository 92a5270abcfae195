"""
Directory layout for zimkit.

Default locations are computed by pure functions of the OS family and an
environment mapping, so callers (and tests) can inject both. The CLI computes
them once per process via get_default_paths() and passes the resulting roots
into TargetRegistry, ToolchainStore and ToolchainDetector.

Directory Structure:
    Linux/macOS ($HOME/.zim/):
        - targets/      : One directory per installed cross-compilation target
        - toolchains/   : Managed Zig versions, plus the 'active' selection
        - zls/          : Managed ZLS binary
    Linux/macOS ($HOME/.config/zim/):
        - config.yaml   : Global configuration
        - zls.json      : Generated ZLS configuration

    Windows (%LOCALAPPDATA%\\zim\\): same subdirectories; config.yaml and
    zls.json live directly in the zim directory.
"""

import functools
import os
import platform
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

HOME_FAMILIES = ("linux", "macos")


def get_os_family(system: Optional[str] = None) -> str:
    """
    Normalize a platform.system() value into an OS family name.

    Args:
        system: Raw system name (default: platform.system())

    Returns:
        'linux', 'macos', 'windows', or the lowercased raw name

    Example:
        >>> get_os_family("Darwin")
        'macos'
    """
    if system is None:
        system = platform.system()
    system = system.lower()
    if system == "darwin":
        return "macos"
    if system.startswith(("win", "cygwin", "msys")):
        return "windows"
    return system


def _default_dir(kind: str, os_family: str, environ: Mapping[str, str]) -> Path:
    if os_family in HOME_FAMILIES:
        home = environ.get("HOME")
        if home:
            return Path(home) / ".zim" / kind
        return Path(f"/tmp/zim-{kind}")
    if os_family == "windows":
        appdata = environ.get("LOCALAPPDATA")
        if appdata:
            return Path(appdata) / "zim" / kind
        return Path(f"C:\\Temp\\zim-{kind}")
    return Path(f"/tmp/zim-{kind}")


def default_targets_dir(os_family: str, environ: Mapping[str, str]) -> Path:
    """
    Compute the default target registry root.

    Args:
        os_family: OS family as returned by get_os_family()
        environ: Environment mapping (HOME / LOCALAPPDATA are consulted)

    Returns:
        Path: The registry root.
            - Linux/macOS: $HOME/.zim/targets (or /tmp/zim-targets)
            - Windows: %LOCALAPPDATA%\\zim\\targets (or C:\\Temp\\zim-targets)
            - Other: /tmp/zim-targets
    """
    return _default_dir("targets", os_family, environ)


def default_toolchains_dir(os_family: str, environ: Mapping[str, str]) -> Path:
    """Compute the default managed toolchains directory."""
    return _default_dir("toolchains", os_family, environ)


def default_zls_dir(os_family: str, environ: Mapping[str, str]) -> Path:
    """Compute the default managed ZLS directory."""
    return _default_dir("zls", os_family, environ)


def default_config_dir(os_family: str, environ: Mapping[str, str]) -> Path:
    """
    Compute the default global configuration directory.

    Args:
        os_family: OS family as returned by get_os_family()
        environ: Environment mapping

    Returns:
        Path: $HOME/.config/zim on Linux/macOS, %LOCALAPPDATA%\\zim on Windows,
        with the same temporary-directory fallbacks as the data directories.
    """
    if os_family in HOME_FAMILIES:
        home = environ.get("HOME")
        if home:
            return Path(home) / ".config" / "zim"
        return Path("/tmp/zim-config")
    if os_family == "windows":
        appdata = environ.get("LOCALAPPDATA")
        if appdata:
            return Path(appdata) / "zim"
        return Path("C:\\Temp\\zim-config")
    return Path("/tmp/zim-config")


@dataclass(frozen=True)
class DefaultPaths:
    """Default roots for one OS family / environment pair."""

    targets_dir: Path
    toolchains_dir: Path
    zls_dir: Path
    config_dir: Path

    @classmethod
    def compute(cls, os_family: str, environ: Mapping[str, str]) -> "DefaultPaths":
        return cls(
            targets_dir=default_targets_dir(os_family, environ),
            toolchains_dir=default_toolchains_dir(os_family, environ),
            zls_dir=default_zls_dir(os_family, environ),
            config_dir=default_config_dir(os_family, environ),
        )


@functools.lru_cache(maxsize=1)
def get_default_paths() -> DefaultPaths:
    """
    Get default roots for the running process.

    This function is cached - the environment is read only once per process.

    Returns:
        DefaultPaths for the current OS family and os.environ
    """
    return DefaultPaths.compute(get_os_family(), dict(os.environ))


def clear_default_paths_cache() -> None:
    """Clear the cached default paths (for testing)."""
    get_default_paths.cache_clear()
