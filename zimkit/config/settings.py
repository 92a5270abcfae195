"""
Layered YAML configuration for zimkit.

Values are resolved from lowest to highest precedence:

1. Defaults computed by zimkit.core.directory
2. Global config: <config_dir>/config.yaml
3. Project config: <project_root>/.zim/toolchain.yaml
4. Environment variables (ZIM_*)

CLI flags are applied by the command modules on top of the result.

Global config example:

    toolchains_dir: ~/zig/toolchains
    targets_dir: ~/zig/targets
    zls_dir: ~/.zim/zls
    version_timeout: 10
    lock_timeout: 30

Project config example (written by 'zim toolchain pin'):

    zig: 0.14.0
    targets:
      - x86_64-linux-gnu
      - wasm32-wasi
"""

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from zimkit.core.directory import DefaultPaths
from zimkit.core.exceptions import ConfigLoadError

logger = logging.getLogger(__name__)

GLOBAL_CONFIG = "config.yaml"
PROJECT_CONFIG = Path(".zim") / "toolchain.yaml"

PATH_KEYS = ("toolchains_dir", "targets_dir", "zls_dir")

ENV_VARS = {
    "ZIM_TOOLCHAINS_DIR": "toolchains_dir",
    "ZIM_TARGETS_DIR": "targets_dir",
    "ZIM_ZLS_DIR": "zls_dir",
    "ZIM_VERSION_TIMEOUT": "version_timeout",
}


@dataclass
class ZimConfig:
    """
    Effective zimkit configuration.

    Attributes:
        toolchains_dir: Managed Zig versions root
        targets_dir: Target registry root
        zls_dir: Managed ZLS directory
        config_dir: Global configuration directory (also holds zls.json)
        version_timeout: Seconds to wait for '<tool> version' (None = no limit)
        lock_timeout: Seconds to wait for the target registry lock
        zig_version: Version pinned by the project config, if any
        targets: Targets declared by the project config
    """

    toolchains_dir: Path
    targets_dir: Path
    zls_dir: Path
    config_dir: Path
    version_timeout: Optional[float] = None
    lock_timeout: float = 30.0
    zig_version: Optional[str] = None
    targets: List[str] = field(default_factory=list)
    sources: List[Path] = field(default_factory=list)

    @classmethod
    def from_defaults(cls, defaults: DefaultPaths) -> "ZimConfig":
        return cls(
            toolchains_dir=defaults.toolchains_dir,
            targets_dir=defaults.targets_dir,
            zls_dir=defaults.zls_dir,
            config_dir=defaults.config_dir,
        )

    @property
    def global_config_file(self) -> Path:
        return self.config_dir / GLOBAL_CONFIG


def load_yaml_config(config_file: Path, required: bool = False) -> Dict[str, Any]:
    """
    Load and parse a YAML configuration file.

    Args:
        config_file: Path to YAML configuration file
        required: If True, raise error if file doesn't exist

    Returns:
        Configuration dictionary (empty dict if file doesn't exist and not required)

    Raises:
        ConfigLoadError: If the file is required and missing, is not valid YAML,
            or does not contain a mapping
    """
    if not config_file.exists():
        if required:
            raise ConfigLoadError(f"Configuration file not found: {config_file}")
        logger.debug(f"Config file not found (optional): {config_file}")
        return {}

    logger.debug(f"Loading configuration from {config_file}")

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigLoadError(f"Invalid YAML in {config_file}: {e}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigLoadError(f"Expected a mapping at top level of {config_file}")
    return data


def _parse_timeout(value: Any, source: str) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        raise ConfigLoadError(f"Invalid timeout {value!r} in {source}")
    if timeout <= 0:
        raise ConfigLoadError(f"Timeout must be positive in {source}, got {value!r}")
    return timeout


def _apply_global(config: ZimConfig, data: Dict[str, Any], source: str) -> ZimConfig:
    changes: Dict[str, Any] = {}
    for key in PATH_KEYS:
        if data.get(key):
            changes[key] = Path(str(data[key])).expanduser()
    if "version_timeout" in data:
        changes["version_timeout"] = _parse_timeout(data["version_timeout"], source)
    if "lock_timeout" in data:
        lock_timeout = _parse_timeout(data["lock_timeout"], source)
        if lock_timeout is not None:
            changes["lock_timeout"] = lock_timeout
    return replace(config, **changes)


def _apply_project(config: ZimConfig, data: Dict[str, Any], source: str) -> ZimConfig:
    changes: Dict[str, Any] = {}
    if data.get("zig") is not None:
        changes["zig_version"] = str(data["zig"])
    targets = data.get("targets") or []
    if not isinstance(targets, list):
        raise ConfigLoadError(f"'targets' must be a list in {source}")
    changes["targets"] = [str(t) for t in targets]
    return replace(config, **changes)


def _apply_env(config: ZimConfig, environ: Mapping[str, str]) -> ZimConfig:
    changes: Dict[str, Any] = {}
    for var, key in ENV_VARS.items():
        value = environ.get(var)
        if not value:
            continue
        logger.debug(f"Using {var}={value}")
        if key == "version_timeout":
            changes[key] = _parse_timeout(value, var)
        else:
            changes[key] = Path(value).expanduser()
    return replace(config, **changes)


def load_config(
    defaults: DefaultPaths,
    environ: Mapping[str, str],
    project_root: Optional[Path] = None,
) -> ZimConfig:
    """
    Resolve the effective configuration.

    Args:
        defaults: Default roots (see zimkit.core.directory.get_default_paths)
        environ: Environment mapping for ZIM_* overrides
        project_root: Project directory to read .zim/toolchain.yaml from

    Returns:
        ZimConfig with all layers applied

    Raises:
        ConfigLoadError: If any configuration file is malformed
    """
    config = ZimConfig.from_defaults(defaults)

    config_dir_override = environ.get("ZIM_CONFIG_DIR")
    if config_dir_override:
        config = replace(config, config_dir=Path(config_dir_override).expanduser())

    global_file = config.global_config_file
    global_data = load_yaml_config(global_file)
    if global_data:
        config = _apply_global(config, global_data, str(global_file))
        config.sources.append(global_file)

    if project_root is not None:
        project_file = Path(project_root) / PROJECT_CONFIG
        project_data = load_yaml_config(project_file)
        if project_data:
            config = _apply_project(config, project_data, str(project_file))
            config.sources.append(project_file)

    return _apply_env(config, environ)
