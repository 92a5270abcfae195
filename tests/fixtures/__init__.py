"""Test fixtures for zimkit tests.

This package provides reusable pytest fixtures for testing zimkit components:

- toolchains: Fake zig/zls executables and managed toolchain layouts
- directories: Isolated home directories and registry roots

Import fixtures in your tests using:
    from tests.fixtures.toolchains import make_fake_binary
    from tests.fixtures.directories import zim_home
"""

__all__ = [
    "toolchains",
    "directories",
]
