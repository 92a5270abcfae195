"""
Shared utilities for CLI commands.

Provides common functionality used across multiple CLI commands to
eliminate duplication and ensure consistent behavior.
"""

import logging
import os
import sys
from typing import Optional

from zimkit.config.settings import ZimConfig, load_config
from zimkit.core.directory import get_default_paths

logger = logging.getLogger(__name__)


# ============================================================================
# Configuration Management
# ============================================================================


def load_settings(args) -> ZimConfig:
    """
    Load the effective configuration for a command.

    Args:
        args: Parsed arguments (uses project_root)

    Returns:
        ZimConfig

    Raises:
        ConfigLoadError: If a configuration file is malformed
    """
    project_root = getattr(args, "project_root", None)
    config = load_config(get_default_paths(), os.environ, project_root=project_root)
    for source in config.sources:
        logger.debug(f"Loaded configuration from {source}")
    return config


# ============================================================================
# User Interface / Output Formatting
# ============================================================================


def print_error(message: str, details: Optional[str] = None):
    """
    Print error message to stderr in consistent format.

    Args:
        message: Main error message
        details: Optional additional details
    """
    print(f"ERROR: {message}", file=sys.stderr)
    if details:
        print(f"  {details}", file=sys.stderr)


def print_warning(message: str):
    """Print warning message to stderr."""
    print(f"WARNING: {message}", file=sys.stderr)


def safe_print(message: str, file=None):
    """
    Print message with safe encoding handling for Windows console.

    Falls back to ASCII-safe characters if Unicode symbols can't be encoded.

    Args:
        message: Message to print
        file: Output file (default: stdout)
    """
    try:
        print(message, file=file)
    except UnicodeEncodeError:
        safe_message = (
            message.replace("⚠️", "WARNING:")
            .replace("✓", "[OK]")
            .replace("✅", "[OK]")
            .replace("❌", "[ERROR]")
            .replace("💡", "[TIP]")
            .replace("🔧", "[FIX]")
            .replace("→", "->")
        )
        print(safe_message, file=file)
