"""
Managed Zig versions.

Each managed version is a directory under the toolchains root holding the
extracted release:

    <toolchains_dir>/
        0.13.0/zig
        0.14.0/zig
        active          : text file naming the selected version, or 'system'

Downloading releases is out of scope; versions are placed here by the user or
by external tooling.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

import yaml
from packaging import version as pkg_version

from zimkit.config.settings import PROJECT_CONFIG
from zimkit.core.exceptions import SystemToolchainNotFound, ToolchainNotInstalled

logger = logging.getLogger(__name__)

ACTIVE_FILENAME = "active"
SYSTEM_SELECTION = "system"


def _version_key(name: str):
    try:
        return (0, pkg_version.Version(name), name)
    except pkg_version.InvalidVersion:
        return (1, pkg_version.Version("0"), name)


class ToolchainStore:
    """
    Select between managed Zig versions and the system Zig.

    Example:
        >>> store = ToolchainStore(Path.home() / ".zim" / "toolchains")
        >>> store.list_versions()
        ['0.13.0', '0.14.0']
        >>> store.use("0.14.0")
        >>> store.active_dir()
        PosixPath('/home/user/.zim/toolchains/0.14.0')
    """

    def __init__(self, toolchains_dir: Union[str, Path]):
        """
        Initialize toolchain store.

        Args:
            toolchains_dir: Managed toolchains root (need not exist yet)
        """
        self.toolchains_dir = Path(toolchains_dir)
        self.active_file = self.toolchains_dir / ACTIVE_FILENAME

    def version_dir(self, version: str) -> Path:
        return self.toolchains_dir / version

    def list_versions(self) -> List[str]:
        """
        List installed versions, oldest first.

        Names that are not valid versions (e.g. 'master') sort after all
        released versions.
        """
        if not self.toolchains_dir.is_dir():
            return []

        names = [entry.name for entry in self.toolchains_dir.iterdir() if entry.is_dir()]
        return sorted(names, key=_version_key)

    def is_installed(self, version: str) -> bool:
        if not version or "/" in version or "\\" in version:
            return False
        return self.version_dir(version).is_dir()

    def active_version(self) -> Optional[str]:
        """
        Get the selected version.

        Returns:
            Version string, 'system', or None if nothing has been selected
        """
        try:
            selection = self.active_file.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            return None
        return selection or None

    def active_dir(self) -> Optional[Path]:
        """
        Managed root of the selected version.

        Returns:
            Version directory, or None when the system Zig is selected, nothing
            is selected, or the selected version has been deleted
        """
        selection = self.active_version()
        if selection is None or selection == SYSTEM_SELECTION:
            return None
        if not self.is_installed(selection):
            logger.warning(
                f"Active Zig {selection} is no longer installed in {self.toolchains_dir}"
            )
            return None
        return self.version_dir(selection)

    def use(self, version: str) -> None:
        """
        Select a managed version.

        Raises:
            ToolchainNotInstalled: If the version directory does not exist
        """
        if not self.is_installed(version):
            raise ToolchainNotInstalled(version)
        self._write_selection(version)
        logger.info(f"Now using Zig {version}")

    def use_system(self, detector) -> Path:
        """
        Select the Zig found on the host PATH.

        Args:
            detector: ToolchainDetector for Zig

        Returns:
            Path to the system Zig

        Raises:
            SystemToolchainNotFound: If no Zig is on the PATH
            VersionQueryFailed: If the system Zig is broken
        """
        path = detector.detect_system()
        if path is None:
            raise SystemToolchainNotFound("No system Zig installation found in PATH")

        detector.get_version(path)
        self._write_selection(SYSTEM_SELECTION)
        logger.info(f"Now using system Zig at {path}")
        return path

    def pin(self, version: str, project_root: Union[str, Path]) -> Path:
        """
        Pin a project to an installed version.

        Writes <project_root>/.zim/toolchain.yaml.

        Args:
            version: Installed version to pin
            project_root: Project root directory

        Returns:
            Path to the written project configuration

        Raises:
            ToolchainNotInstalled: If the version is not installed
        """
        if not self.is_installed(version):
            raise ToolchainNotInstalled(version)

        config_file = Path(project_root) / PROJECT_CONFIG
        config_file.parent.mkdir(parents=True, exist_ok=True)

        header = (
            "# zim toolchain configuration\n"
            f"# Generated by: zim toolchain pin {version}\n"
            "# List cross-compilation targets under 'targets', "
            "e.g. [x86_64-linux-gnu, wasm32-wasi]\n"
        )
        with open(config_file, "w", encoding="utf-8") as f:
            f.write(header)
            yaml.safe_dump({"zig": version, "targets": []}, f, sort_keys=False)

        logger.info(f"Pinned {project_root} to Zig {version}")
        return config_file

    def _write_selection(self, selection: str) -> None:
        self.toolchains_dir.mkdir(parents=True, exist_ok=True)
        self.active_file.write_text(f"{selection}\n", encoding="utf-8")
