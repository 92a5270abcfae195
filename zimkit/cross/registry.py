"""
Installed cross-compilation targets.

A target is installed when a directory named exactly after its identifier
exists directly under the registry root. No index file is kept, so the
filesystem is the only record:

    <root>/
        x86_64-linux-gnu/
        wasm32-wasi/
        .zim-targets.lock

Target directories start empty. Sysroot contents (libc headers, etc.) are
placed there by the user or by external tooling; nothing is downloaded here.
"""

import logging
import shutil
from pathlib import Path
from typing import List, Union

from zimkit.core.exceptions import InvalidIdentifier, TargetNotInstalled
from zimkit.core.locking import registry_lock
from zimkit.cross.targets import TargetDescriptor, parse_target

logger = logging.getLogger(__name__)


class TargetRegistry:
    """
    Manage installed cross-compilation targets under a root directory.

    The root is injected by the caller; see zimkit.core.directory for the
    default location.

    Example:
        >>> registry = TargetRegistry(Path.home() / ".zim" / "targets")
        >>> registry.add("wasm32-wasi")
        True
        >>> registry.list()
        ['wasm32-wasi']
    """

    def __init__(self, root: Union[str, Path], lock_timeout: float = 30):
        """
        Initialize target registry.

        Args:
            root: Registry root directory (need not exist yet)
            lock_timeout: Seconds to wait for the registry lock
        """
        self.root = Path(root)
        self.lock_timeout = lock_timeout

    def target_path(self, identifier: str) -> Path:
        """Directory that records an installed target."""
        return self.root / identifier

    def add(self, identifier: str) -> bool:
        """
        Install a target by creating its directory.

        Adding an already-installed target is a successful no-op.

        Args:
            identifier: Target identifier (e.g., 'aarch64-linux-gnu')

        Returns:
            True if the target directory was created, False if it already existed

        Raises:
            InvalidIdentifier: If the identifier is malformed
            RegistryLockTimeout: If another process holds the registry lock
            OSError: For filesystem failures other than "already exists"
        """
        parse_target(identifier)
        if not _is_plain_name(identifier):
            raise InvalidIdentifier(
                identifier, "must not contain path separators or NUL characters"
            )
        self._ensure_root()

        with registry_lock(self.root, timeout=self.lock_timeout):
            if self.is_installed(identifier):
                logger.info(f"Target {identifier} is already installed")
                return False

            try:
                self.target_path(identifier).mkdir()
            except FileExistsError:
                # Raced with another creator that bypassed the lock
                return False

        logger.info(f"Added target {identifier} at {self.target_path(identifier)}")
        return True

    def remove(self, identifier: str) -> None:
        """
        Remove an installed target and everything inside its directory.

        Removing is not idempotent: a second call fails.

        Args:
            identifier: Target identifier

        Raises:
            TargetNotInstalled: If the target is not installed
            RegistryLockTimeout: If another process holds the registry lock
            OSError: If deletion fails part-way (not rolled back)
        """
        if not self.is_installed(identifier):
            raise TargetNotInstalled(identifier)

        with registry_lock(self.root, timeout=self.lock_timeout):
            if not self.is_installed(identifier):
                raise TargetNotInstalled(identifier)
            shutil.rmtree(self.target_path(identifier))

        logger.info(f"Removed target {identifier}")

    def list(self) -> List[str]:
        """
        List installed target identifiers.

        Returns:
            Sorted directory names under the root; empty if the root is missing
        """
        if not self.root.is_dir():
            logger.debug(f"Target registry root does not exist: {self.root}")
            return []

        return sorted(entry.name for entry in self.root.iterdir() if entry.is_dir())

    def is_installed(self, identifier: str) -> bool:
        """
        Check whether a target directory exists.

        Never raises for a missing target or root.
        """
        if not _is_plain_name(identifier):
            return False
        return self.target_path(identifier).is_dir()

    def describe(self) -> List[TargetDescriptor]:
        """
        Parse installed targets into descriptors.

        Directories whose names are not valid identifiers are skipped.
        """
        descriptors = []
        for identifier in self.list():
            try:
                descriptors.append(parse_target(identifier))
            except InvalidIdentifier:
                logger.debug(f"Skipping unparseable target directory: {identifier}")
        return descriptors

    def _ensure_root(self) -> None:
        self.root.mkdir(parents=True, exist_ok=True)


def _is_plain_name(identifier: str) -> bool:
    """True if identifier names a single directory entry."""
    if not identifier or identifier in (".", ".."):
        return False
    return not any(ch in identifier for ch in ("/", "\\", "\x00"))
