"""
zimkit/toolchain/detector.py

Toolchain detection - finds the Zig compiler or ZLS either in a zim-managed
directory or on the host PATH, and reports its version and provenance.

Detection is stateless. Every call starts from scratch because the host
environment may change between invocations:

    Unresolved -> ManagedFound | SystemFound | Absent
    ManagedFound | SystemFound -> Healthy | VersionQueryFailed

A missing binary is a normal outcome (None). A binary that is present but
cannot report its version raises VersionQueryFailed.
"""

import enum
import logging
import os
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union

from zimkit.core.directory import get_os_family
from zimkit.core.exceptions import VersionQueryFailed
from zimkit.ide.zls import write_zls_config

logger = logging.getLogger(__name__)


class Provenance(enum.Enum):
    """Where an active binary was found."""

    MANAGED = "managed"
    SYSTEM = "system"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ToolSpec:
    """
    Describes a detectable tool.

    Attributes:
        name: Display name ('Zig', 'ZLS')
        binary: Executable name without extension
        version_args: Arguments that make the binary print its version
        managed_subpath: Directories under the managed root that hold the binary
    """

    name: str
    binary: str
    version_args: Tuple[str, ...]
    managed_subpath: Tuple[str, ...] = ()

    def executable_name(self, os_family: Optional[str] = None) -> str:
        if os_family is None:
            os_family = get_os_family()
        if os_family == "windows":
            return f"{self.binary}.exe"
        return self.binary


# Managed roots: <toolchains_dir>/<active version>/zig and <zls_dir>/zls
ZIG = ToolSpec(name="Zig", binary="zig", version_args=("version",))
ZLS = ToolSpec(name="ZLS", binary="zls", version_args=("--version",))


@dataclass(frozen=True)
class ToolchainInfo:
    """
    A resolved, healthy toolchain binary.

    Attributes:
        path: Absolute path to the binary
        version: Version reported by the binary
        provenance: Managed or System
    """

    path: Path
    version: str
    provenance: Provenance

    @property
    def is_system(self) -> bool:
        return self.provenance is Provenance.SYSTEM

    def __str__(self) -> str:
        return f"{self.version} ({self.provenance}) at {self.path}"


class ToolchainDetector:
    """
    Detect one tool (Zig or ZLS) in the managed directory or on the PATH.

    Example:
        >>> detector = ToolchainDetector(ZIG)
        >>> info = detector.resolve_active(Path.home() / ".zim" / "toolchains")
        >>> if info:
        ...     print(f"Zig {info.version} ({info.provenance})")
    """

    def __init__(
        self,
        tool: ToolSpec,
        search_path: Optional[str] = None,
        timeout: Optional[float] = None,
        os_family: Optional[str] = None,
    ):
        """
        Initialize detector.

        Args:
            tool: Tool to detect
            search_path: PATH-style string to search instead of os.environ['PATH']
            timeout: Seconds to wait for the version query (None waits forever)
            os_family: OS family override (default: current host)
        """
        self.tool = tool
        self.search_path = search_path
        self.timeout = timeout
        self.os_family = os_family or get_os_family()

    def detect_managed(self, managed_root: Union[str, Path]) -> Optional[Path]:
        """
        Look for the tool at its fixed location under the managed root.

        Args:
            managed_root: zim-managed directory for this tool

        Returns:
            Absolute path to the executable, or None if it is not there
        """
        candidate = Path(managed_root).joinpath(
            *self.tool.managed_subpath, self.tool.executable_name(self.os_family)
        )

        if candidate.is_file() and os.access(candidate, os.X_OK):
            logger.debug(f"Found managed {self.tool.name}: {candidate}")
            return candidate.absolute()

        logger.debug(f"No managed {self.tool.name} at {candidate}")
        return None

    def detect_system(self) -> Optional[Path]:
        """
        Search the host PATH for the tool.

        Returns:
            Absolute path to the executable, or None if not found
        """
        path_str = shutil.which(self.tool.binary, path=self.search_path)
        if path_str is None:
            logger.debug(f"{self.tool.name} not found in PATH")
            return None

        logger.debug(f"Found system {self.tool.name}: {path_str}")
        return Path(path_str).absolute()

    def locate(
        self, managed_root: Optional[Union[str, Path]] = None
    ) -> Optional[Tuple[Path, Provenance]]:
        """
        Find the binary without running it.

        A managed installation always shadows a system one.

        Returns:
            (path, provenance) or None if the tool is absent
        """
        if managed_root is not None:
            managed = self.detect_managed(managed_root)
            if managed is not None:
                return managed, Provenance.MANAGED

        system = self.detect_system()
        if system is not None:
            return system, Provenance.SYSTEM

        return None

    def resolve_active(
        self, managed_root: Optional[Union[str, Path]] = None
    ) -> Optional[ToolchainInfo]:
        """
        Resolve the active binary and query its version.

        Args:
            managed_root: zim-managed directory for this tool (None skips it)

        Returns:
            ToolchainInfo, or None if neither a managed nor a system binary exists

        Raises:
            VersionQueryFailed: If the binary exists but its version query fails
        """
        located = self.locate(managed_root)
        if located is None:
            logger.debug(f"No {self.tool.name} installation found")
            return None

        path, provenance = located
        version = self.get_version(path)
        logger.debug(f"Active {self.tool.name}: {version} ({provenance}) at {path}")
        return ToolchainInfo(path=path, version=version, provenance=provenance)

    def get_version(self, path: Union[str, Path]) -> str:
        """
        Run the binary's version query.

        Args:
            path: Path to the binary

        Returns:
            Trimmed standard output

        Raises:
            VersionQueryFailed: If the process cannot be spawned, times out,
                exits non-zero, prints undecodable bytes, or prints nothing
        """
        cmd = [str(path), *self.tool.version_args]
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired:
            raise VersionQueryFailed(path, f"timed out after {self.timeout}s")
        except OSError as e:
            raise VersionQueryFailed(path, f"could not be executed: {e}")
        except UnicodeDecodeError:
            raise VersionQueryFailed(path, "produced unreadable output")

        if result.returncode != 0:
            logger.debug(f"{' '.join(cmd)} stderr: {result.stderr.strip()[:200]}")
            raise VersionQueryFailed(path, f"exited with status {result.returncode}")

        version = result.stdout.strip()
        if not version:
            raise VersionQueryFailed(path, "produced no version output")

        return version

    def generate_config(
        self,
        target_dir: Union[str, Path],
        managed_root: Optional[Union[str, Path]] = None,
        tool_path: Optional[Union[str, Path]] = None,
    ) -> Path:
        """
        Write zls.json into target_dir, pointing at the resolved Zig compiler.

        The file is regenerated from scratch on every call; any existing
        content is replaced. zig_exe_path always names the Zig compiler, even
        when this detector was built for another tool.

        Args:
            target_dir: Existing, writable directory
            managed_root: Managed Zig root used to resolve the compiler
            tool_path: Explicit compiler path; skips resolution when given

        Returns:
            Path to the written file

        Raises:
            ConfigWriteFailed: If the directory is missing or not writable
            VersionQueryFailed: If resolution finds a broken binary
        """
        if tool_path is None:
            detector = self
            if self.tool != ZIG:
                detector = ToolchainDetector(
                    ZIG, self.search_path, self.timeout, self.os_family
                )
            info = detector.resolve_active(managed_root)
            tool_path = info.path if info else None

        return write_zls_config(target_dir, tool_path)
