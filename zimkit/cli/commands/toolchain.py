"""
Toolchain commands.

Lists managed Zig versions, switches between them (or to the system Zig),
reports the active compiler, and pins projects.
"""

import logging

from zimkit.cli.utils import load_settings, print_error, safe_print
from zimkit.core.exceptions import ToolchainNotInstalled, ZimError
from zimkit.toolchain.detector import ZIG, Provenance, ToolchainDetector
from zimkit.toolchain.store import SYSTEM_SELECTION, ToolchainStore

logger = logging.getLogger(__name__)


def run_list(args) -> int:
    """List managed Zig versions, marking the active one."""
    try:
        config = load_settings(args)
    except ZimError as e:
        print_error("Failed to load configuration", str(e))
        return 1

    store = ToolchainStore(config.toolchains_dir)
    versions = store.list_versions()
    active = store.active_version()

    print("Installed Zig toolchains:\n")
    if not versions:
        print("  (none)")
        print(f"\nPlace extracted Zig releases in: {config.toolchains_dir}/<version>")
    for version in versions:
        suffix = " (active)" if version == active else ""
        print(f"  {version}{suffix}")

    if active == SYSTEM_SELECTION:
        print("\nActive: system Zig")
    return 0


def run_use(args) -> int:
    """Select a managed version, or 'system'."""
    try:
        config = load_settings(args)
        store = ToolchainStore(config.toolchains_dir)
        if args.version == SYSTEM_SELECTION:
            detector = ToolchainDetector(ZIG, timeout=config.version_timeout)
            path = store.use_system(detector)
            safe_print(f"✓ Now using system Zig ({path})")
        else:
            store.use(args.version)
            safe_print(f"✓ Now using Zig {args.version}")
    except ToolchainNotInstalled as e:
        print_error(str(e), f"Available versions: {_available(store)}")
        return 1
    except (ZimError, OSError) as e:
        print_error("Failed to switch toolchain", str(e))
        return 1
    return 0


def run_current(args) -> int:
    """Show the active Zig, its version and provenance."""
    try:
        config = load_settings(args)
        store = ToolchainStore(config.toolchains_dir)
        detector = ToolchainDetector(ZIG, timeout=config.version_timeout)
        info = detector.resolve_active(store.active_dir())
    except ZimError as e:
        print_error("Failed to resolve active Zig", str(e))
        return 1

    print("Current Zig configuration\n")
    if info is None:
        print("Active: none")
        print("\nNo Zig installation found.")
        print(f"  Place a Zig release in {config.toolchains_dir}/<version> and run:")
        print("    zim toolchain use <version>")
        print("  or install Zig with your system package manager.")
        return 1

    source = "system" if info.provenance is Provenance.SYSTEM else "zim-managed"
    print(f"Active: Zig {info.version} ({source})")
    print(f"Location: {info.path}")

    if config.zig_version and config.zig_version != info.version:
        print(
            f"\nNote: project pins Zig {config.zig_version}; "
            f"run 'zim toolchain use {config.zig_version}'"
        )
    return 0


def run_pin(args) -> int:
    """Pin the project to a managed version."""
    try:
        config = load_settings(args)
        store = ToolchainStore(config.toolchains_dir)
        config_file = store.pin(args.version, args.project_root)
    except ToolchainNotInstalled as e:
        print_error(str(e), f"Available versions: {_available(store)}")
        return 1
    except (ZimError, OSError) as e:
        print_error("Failed to pin toolchain", str(e))
        return 1

    safe_print(f"✓ Created {config_file}")
    safe_print(f"✓ Project pinned to Zig {args.version}")
    return 0


def _available(store: ToolchainStore) -> str:
    return ", ".join(store.list_versions()) or "(none)"
