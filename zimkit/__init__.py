"""
zimkit - Zig toolchain, target and language-server manager.

Provides the ``zim`` command-line tool.
"""

__version__ = "0.1.0"
