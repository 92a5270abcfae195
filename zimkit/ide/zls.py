"""
ZLS configuration generator.

This module builds and writes zls.json, the Zig Language Server configuration
file. Generation is declarative: the file is always rewritten from the
current state and never merged with previous content.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from zimkit.core.exceptions import ConfigWriteFailed

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "zls.json"

DEFAULT_SETTINGS: Dict[str, Any] = {
    "enable_snippets": True,
    "enable_ast_check_diagnostics": True,
    "enable_autofix": True,
    "enable_import_embedfile_argument_completions": True,
    "warn_style": True,
    "highlight_global_var_declarations": True,
    "skip_std_references": False,
    "prefer_ast_check_as_child_process": True,
    "record_session": False,
    "completions_with_replace": True,
}


def build_zls_config(zig_exe_path: Optional[Union[str, Path]]) -> Dict[str, Any]:
    """
    Build the zls.json document.

    Args:
        zig_exe_path: Resolved Zig compiler, or None to let ZLS search PATH

    Returns:
        Dictionary ready to be serialized
    """
    settings = dict(DEFAULT_SETTINGS)
    settings["zig_exe_path"] = str(zig_exe_path) if zig_exe_path else None
    return settings


def write_zls_config(
    config_dir: Union[str, Path], zig_exe_path: Optional[Union[str, Path]]
) -> Path:
    """
    Write zls.json into an existing directory, replacing any previous file.

    Args:
        config_dir: Directory to write into (not created)
        zig_exe_path: Resolved Zig compiler path

    Returns:
        Path to the written zls.json

    Raises:
        ConfigWriteFailed: If the directory does not exist or the write fails

    Example:
        >>> write_zls_config(Path.home() / ".config" / "zim", "/usr/bin/zig")
        PosixPath('/home/user/.config/zim/zls.json')
    """
    config_dir = Path(config_dir)
    config_file = config_dir / CONFIG_FILENAME

    if not config_dir.is_dir():
        raise ConfigWriteFailed(config_file, f"directory does not exist: {config_dir}")

    settings = build_zls_config(zig_exe_path)
    try:
        with open(config_file, "w", encoding="utf-8") as f:
            json.dump(settings, f, indent=2)
            f.write("\n")
    except OSError as e:
        raise ConfigWriteFailed(config_file, str(e))

    logger.info(f"Generated ZLS configuration: {config_file}")
    return config_file


def find_zls_config(config_dir: Union[str, Path]) -> Optional[Path]:
    """Return the zls.json path if it exists in config_dir."""
    config_file = Path(config_dir) / CONFIG_FILENAME
    return config_file if config_file.is_file() else None
