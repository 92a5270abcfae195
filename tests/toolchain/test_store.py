"""
Tests for managed Zig version selection.
"""

import pytest
import yaml

from tests.fixtures.toolchains import make_fake_binary, posix_only
from zimkit.core.exceptions import (
    SystemToolchainNotFound,
    ToolchainNotInstalled,
    VersionQueryFailed,
)
from zimkit.toolchain.detector import ZIG, ToolchainDetector
from zimkit.toolchain.store import SYSTEM_SELECTION, ToolchainStore


@pytest.fixture
def store(tmp_path):
    toolchains = tmp_path / "toolchains"
    for version in ["0.13.0", "0.9.1", "master", "0.14.0"]:
        (toolchains / version).mkdir(parents=True)
    return ToolchainStore(toolchains)


class TestListVersions:
    """Tests for list_versions."""

    def test_version_ordering(self, store):
        """Test versions sort numerically with non-releases last."""
        assert store.list_versions() == ["0.9.1", "0.13.0", "0.14.0", "master"]

    def test_ignores_active_file(self, store):
        store.use("0.13.0")

        assert "active" not in store.list_versions()

    def test_missing_root(self, tmp_path):
        assert ToolchainStore(tmp_path / "missing").list_versions() == []


class TestSelection:
    """Tests for use, active_version and active_dir."""

    def test_nothing_selected(self, store):
        assert store.active_version() is None
        assert store.active_dir() is None

    def test_use_installed(self, store):
        store.use("0.14.0")

        assert store.active_version() == "0.14.0"
        assert store.active_dir() == store.version_dir("0.14.0")
        assert store.active_file.read_text() == "0.14.0\n"

    def test_use_switches(self, store):
        store.use("0.14.0")
        store.use("0.13.0")

        assert store.active_version() == "0.13.0"

    def test_use_not_installed(self, store):
        with pytest.raises(ToolchainNotInstalled) as exc_info:
            store.use("0.99.0")

        assert exc_info.value.version == "0.99.0"
        assert store.active_version() is None

    def test_use_rejects_paths(self, store):
        with pytest.raises(ToolchainNotInstalled):
            store.use("../toolchains")

    def test_deleted_active_version(self, store, caplog):
        """Test a selection whose directory is gone resolves to no managed root."""
        store.use("0.9.1")
        store.version_dir("0.9.1").rmdir()

        assert store.active_version() == "0.9.1"
        assert store.active_dir() is None
        assert "no longer installed" in caplog.text

    def test_empty_active_file(self, store):
        store.active_file.write_text("\n")

        assert store.active_version() is None


@posix_only
class TestUseSystem:
    """Tests for use_system."""

    def test_selects_system(self, store, system_bin):
        detector = ToolchainDetector(ZIG, search_path=str(system_bin))

        path = store.use_system(detector)

        assert path == (system_bin / "zig").absolute()
        assert store.active_version() == SYSTEM_SELECTION
        assert store.active_dir() is None

    def test_no_system_zig(self, store, tmp_path):
        empty = tmp_path / "empty"
        empty.mkdir()
        detector = ToolchainDetector(ZIG, search_path=str(empty))

        with pytest.raises(SystemToolchainNotFound):
            store.use_system(detector)

        assert store.active_version() is None

    def test_broken_system_zig(self, store, tmp_path):
        bin_dir = tmp_path / "broken-bin"
        make_fake_binary(bin_dir, "zig", "", exit_code=127)
        detector = ToolchainDetector(ZIG, search_path=str(bin_dir))

        with pytest.raises(VersionQueryFailed):
            store.use_system(detector)

        assert store.active_version() is None


class TestPin:
    """Tests for pin."""

    def test_writes_project_config(self, store, tmp_path):
        project = tmp_path / "project"
        project.mkdir()

        config_file = store.pin("0.13.0", project)

        assert config_file == project / ".zim" / "toolchain.yaml"
        content = config_file.read_text()
        assert content.startswith("# zim toolchain configuration")
        assert yaml.safe_load(content) == {"zig": "0.13.0", "targets": []}

    def test_pin_not_installed(self, store, tmp_path):
        with pytest.raises(ToolchainNotInstalled):
            store.pin("1.0.0", tmp_path)

        assert not (tmp_path / ".zim").exists()

    def test_pin_does_not_change_selection(self, store, tmp_path):
        store.use("0.14.0")

        store.pin("0.13.0", tmp_path)

        assert store.active_version() == "0.14.0"
