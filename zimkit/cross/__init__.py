"""
Cross-compilation support for zimkit.

This module provides target identifier parsing and the installed-target
registry.
"""

from zimkit.cross.targets import COMMON_TARGETS, TargetDescriptor, parse_target
from zimkit.cross.registry import TargetRegistry

__all__ = [
    "COMMON_TARGETS",
    "TargetDescriptor",
    "parse_target",
    "TargetRegistry",
]
