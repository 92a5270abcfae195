"""
Tests for zls.json generation.
"""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from zimkit.core.exceptions import ConfigWriteFailed
from zimkit.ide.zls import (
    CONFIG_FILENAME,
    DEFAULT_SETTINGS,
    build_zls_config,
    find_zls_config,
    write_zls_config,
)


class TestBuildZlsConfig:
    """Tests for build_zls_config."""

    def test_includes_defaults(self):
        config = build_zls_config("/usr/bin/zig")

        for key, value in DEFAULT_SETTINGS.items():
            assert config[key] == value
        assert config["zig_exe_path"] == "/usr/bin/zig"

    def test_path_object_is_stringified(self):
        config = build_zls_config(Path("/opt/zig/zig"))

        assert config["zig_exe_path"] == str(Path("/opt/zig/zig"))

    def test_no_zig(self):
        assert build_zls_config(None)["zig_exe_path"] is None

    def test_defaults_not_mutated(self):
        build_zls_config("/usr/bin/zig")

        assert "zig_exe_path" not in DEFAULT_SETTINGS


class TestWriteZlsConfig:
    """Tests for write_zls_config."""

    def test_writes_valid_json(self, tmp_path):
        config_file = write_zls_config(tmp_path, "/usr/bin/zig")

        assert config_file == tmp_path / CONFIG_FILENAME
        text = config_file.read_text()
        assert text.endswith("\n")
        assert json.loads(text)["zig_exe_path"] == "/usr/bin/zig"

    def test_does_not_create_directory(self, tmp_path):
        missing = tmp_path / "a" / "b"

        with pytest.raises(ConfigWriteFailed) as exc_info:
            write_zls_config(missing, "/usr/bin/zig")

        assert exc_info.value.path == missing / CONFIG_FILENAME
        assert not missing.exists()

    def test_write_error(self, tmp_path):
        with patch("builtins.open", side_effect=PermissionError("read-only")):
            with pytest.raises(ConfigWriteFailed) as exc_info:
                write_zls_config(tmp_path, "/usr/bin/zig")

        assert "read-only" in str(exc_info.value)

    def test_overwrites_existing(self, tmp_path):
        (tmp_path / CONFIG_FILENAME).write_text('{"zig_exe_path": "old", "x": 1}')

        write_zls_config(tmp_path, None)

        data = json.loads((tmp_path / CONFIG_FILENAME).read_text())
        assert data["zig_exe_path"] is None
        assert "x" not in data


class TestFindZlsConfig:
    """Tests for find_zls_config."""

    def test_found(self, tmp_path):
        write_zls_config(tmp_path, None)
        assert find_zls_config(tmp_path) == tmp_path / CONFIG_FILENAME

    def test_missing(self, tmp_path):
        assert find_zls_config(tmp_path) is None
