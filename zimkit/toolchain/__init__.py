"""
Toolchain management module for zimkit.

This module provides functionality for:
- Managed and system Zig / ZLS detection
- Selecting and pinning managed Zig versions
"""

from zimkit.toolchain.detector import (
    ZIG,
    ZLS,
    Provenance,
    ToolSpec,
    ToolchainInfo,
    ToolchainDetector,
)
from zimkit.toolchain.store import ToolchainStore

__all__ = [
    "ZIG",
    "ZLS",
    "Provenance",
    "ToolSpec",
    "ToolchainInfo",
    "ToolchainDetector",
    "ToolchainStore",
]
