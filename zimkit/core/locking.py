"""
Cross-process locking for the target registry.

add() and remove() are check-then-act sequences on the filesystem. Two zim
processes working on the same registry root serialize through a lock file
placed in that root, so a concurrent add/remove of the same identifier
cannot interleave.

Usage:
    from zimkit.core.locking import registry_lock

    with registry_lock(targets_dir, timeout=30):
        # Safely create or delete target directories
        pass
"""

import logging
from contextlib import contextmanager
from pathlib import Path

from filelock import FileLock, Timeout

from zimkit.core.exceptions import RegistryLockTimeout

logger = logging.getLogger(__name__)

LOCK_FILENAME = ".zim-targets.lock"


@contextmanager
def registry_lock(root: Path, timeout: float = 30):
    """
    Acquire the registry lock for a target root.

    The root directory must already exist; the lock file is created in it.

    Args:
        root: Registry root directory
        timeout: Maximum wait time in seconds (default: 30)

    Yields:
        None

    Raises:
        RegistryLockTimeout: If lock can't be acquired within timeout
    """
    lock_path = Path(root) / LOCK_FILENAME
    lock = FileLock(str(lock_path), timeout=timeout)

    try:
        with lock:
            logger.debug(f"Acquired registry lock: {lock_path}")
            yield
            logger.debug(f"Releasing registry lock: {lock_path}")
    except Timeout:
        raise RegistryLockTimeout(
            f"Could not acquire registry lock at {lock_path} within {timeout}s. "
            "Another zim process may be modifying targets."
        )
