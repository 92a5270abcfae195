"""Isolated directory fixtures for testing.

These fixtures redirect HOME and PATH so CLI commands never touch the real
~/.zim directory or pick up a Zig installed on the test machine.
"""

import pytest
from pathlib import Path

from zimkit.core.directory import clear_default_paths_cache

ZIM_ENV_VARS = (
    "ZIM_TOOLCHAINS_DIR",
    "ZIM_TARGETS_DIR",
    "ZIM_ZLS_DIR",
    "ZIM_VERSION_TIMEOUT",
    "ZIM_CONFIG_DIR",
)


@pytest.fixture
def zim_home(tmp_path, monkeypatch) -> Path:
    """
    Isolated home directory with an empty PATH.

    Default roots resolve to:
        <home>/.zim/targets, <home>/.zim/toolchains, <home>/.zim/zls
        <home>/.config/zim

    Returns:
        Path to the fake home directory
    """
    home = tmp_path / "home"
    home.mkdir()
    empty_bin = tmp_path / "empty-bin"
    empty_bin.mkdir()

    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("LOCALAPPDATA", str(home))
    monkeypatch.setenv("PATH", str(empty_bin))
    for var in ZIM_ENV_VARS:
        monkeypatch.delenv(var, raising=False)

    clear_default_paths_cache()
    yield home
    clear_default_paths_cache()
