"""
Tests for layered configuration loading.
"""

from pathlib import Path

import pytest

from zimkit.config.settings import ZimConfig, load_config, load_yaml_config
from zimkit.core.directory import DefaultPaths
from zimkit.core.exceptions import ConfigLoadError


@pytest.fixture
def defaults(tmp_path) -> DefaultPaths:
    base = tmp_path / "defaults"
    return DefaultPaths(
        targets_dir=base / "targets",
        toolchains_dir=base / "toolchains",
        zls_dir=base / "zls",
        config_dir=base / "config",
    )


def write_global(defaults: DefaultPaths, text: str) -> Path:
    defaults.config_dir.mkdir(parents=True, exist_ok=True)
    config_file = defaults.config_dir / "config.yaml"
    config_file.write_text(text)
    return config_file


def write_project(project: Path, text: str) -> Path:
    config_file = project / ".zim" / "toolchain.yaml"
    config_file.parent.mkdir(parents=True)
    config_file.write_text(text)
    return config_file


class TestLoadYamlConfig:
    """Tests for load_yaml_config."""

    def test_missing_optional(self, tmp_path):
        assert load_yaml_config(tmp_path / "none.yaml") == {}

    def test_missing_required(self, tmp_path):
        with pytest.raises(ConfigLoadError, match="not found"):
            load_yaml_config(tmp_path / "none.yaml", required=True)

    def test_empty_file(self, tmp_path):
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("")

        assert load_yaml_config(config_file) == {}

    def test_invalid_yaml(self, tmp_path):
        config_file = tmp_path / "bad.yaml"
        config_file.write_text("targets: [unterminated\n")

        with pytest.raises(ConfigLoadError, match="Invalid YAML"):
            load_yaml_config(config_file)

    def test_non_mapping(self, tmp_path):
        config_file = tmp_path / "list.yaml"
        config_file.write_text("- a\n- b\n")

        with pytest.raises(ConfigLoadError, match="mapping"):
            load_yaml_config(config_file)


class TestLoadConfig:
    """Tests for load_config layering."""

    def test_defaults_only(self, defaults):
        config = load_config(defaults, {})

        assert config == ZimConfig.from_defaults(defaults)
        assert config.version_timeout is None
        assert config.lock_timeout == 30.0
        assert config.sources == []

    def test_global_config(self, defaults, tmp_path):
        config_file = write_global(
            defaults,
            f"targets_dir: {tmp_path / 'custom-targets'}\n"
            "version_timeout: 5\n"
            "lock_timeout: 2.5\n",
        )

        config = load_config(defaults, {})

        assert config.targets_dir == tmp_path / "custom-targets"
        assert config.toolchains_dir == defaults.toolchains_dir
        assert config.version_timeout == 5.0
        assert config.lock_timeout == 2.5
        assert config.sources == [config_file]

    def test_global_paths_expand_user(self, defaults, monkeypatch, tmp_path):
        monkeypatch.setenv("HOME", str(tmp_path))
        write_global(defaults, "zls_dir: ~/zls\n")

        config = load_config(defaults, {})

        assert config.zls_dir == tmp_path / "zls"

    def test_project_config(self, defaults, tmp_path):
        project = tmp_path / "project"
        write_project(project, "zig: 0.14.0\ntargets:\n  - x86_64-linux-gnu\n  - wasm32-wasi\n")

        config = load_config(defaults, {}, project_root=project)

        assert config.zig_version == "0.14.0"
        assert config.targets == ["x86_64-linux-gnu", "wasm32-wasi"]

    def test_project_targets_must_be_list(self, defaults, tmp_path):
        project = tmp_path / "project"
        write_project(project, "targets: wasm32-wasi\n")

        with pytest.raises(ConfigLoadError, match="must be a list"):
            load_config(defaults, {}, project_root=project)

    def test_env_overrides_global(self, defaults, tmp_path):
        write_global(defaults, f"toolchains_dir: {tmp_path / 'from-file'}\n")
        environ = {
            "ZIM_TOOLCHAINS_DIR": str(tmp_path / "from-env"),
            "ZIM_VERSION_TIMEOUT": "7",
        }

        config = load_config(defaults, environ)

        assert config.toolchains_dir == tmp_path / "from-env"
        assert config.version_timeout == 7.0

    def test_empty_env_value_ignored(self, defaults):
        config = load_config(defaults, {"ZIM_TARGETS_DIR": ""})

        assert config.targets_dir == defaults.targets_dir

    def test_config_dir_override(self, defaults, tmp_path):
        other = tmp_path / "other-config"
        other.mkdir()
        (other / "config.yaml").write_text(f"zls_dir: {tmp_path / 'z'}\n")

        config = load_config(defaults, {"ZIM_CONFIG_DIR": str(other)})

        assert config.config_dir == other
        assert config.zls_dir == tmp_path / "z"

    @pytest.mark.parametrize("value", ["0", "-1", "soon"])
    def test_invalid_timeout(self, defaults, value):
        with pytest.raises(ConfigLoadError):
            load_config(defaults, {"ZIM_VERSION_TIMEOUT": value})

    def test_invalid_global_yaml(self, defaults):
        write_global(defaults, "version_timeout: [\n")

        with pytest.raises(ConfigLoadError):
            load_config(defaults, {})
