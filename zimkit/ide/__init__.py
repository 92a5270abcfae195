"""
Editor integration for zimkit.

Generates the Zig Language Server configuration file.
"""

from .zls import (
    CONFIG_FILENAME,
    build_zls_config,
    write_zls_config,
    find_zls_config,
)

__all__ = [
    "CONFIG_FILENAME",
    "build_zls_config",
    "write_zls_config",
    "find_zls_config",
]
