"""
Target commands.

Adds, removes, lists and syncs cross-compilation targets.
"""

import logging

from zimkit.cli.utils import load_settings, print_error, safe_print
from zimkit.core.exceptions import ZimError
from zimkit.cross.registry import TargetRegistry
from zimkit.cross.targets import COMMON_TARGETS, parse_target

logger = logging.getLogger(__name__)


def _registry(args) -> TargetRegistry:
    config = load_settings(args)
    return TargetRegistry(config.targets_dir, lock_timeout=config.lock_timeout)


def run_add(args) -> int:
    """
    Add a cross-compilation target.

    Args:
        args: Parsed arguments with triple

    Returns:
        Exit code (0 for success, 1 for error)
    """
    try:
        registry = _registry(args)
        target = parse_target(args.triple)
        created = registry.add(args.triple)
    except (ZimError, OSError) as e:
        print_error("Failed to add target", str(e))
        return 1

    if not created:
        print(f"Target {target} is already installed")
        return 0

    target_dir = registry.target_path(target.identifier)
    safe_print(f"✓ Target {target} added successfully")
    print(f"  Architecture: {target.architecture}")
    print(f"  OS: {target.operating_system}")
    if target.abi:
        print(f"  ABI: {target.abi}")
    print()
    safe_print("✓ Standard library is available (bundled with the Zig toolchain)")
    print(f"  For a custom sysroot or libc headers, place them in: {target_dir}")
    return 0


def run_remove(args) -> int:
    """Remove a cross-compilation target."""
    try:
        _registry(args).remove(args.triple)
    except (ZimError, OSError) as e:
        print_error("Failed to remove target", str(e))
        return 1

    safe_print(f"✓ Target {args.triple} removed")
    return 0


def run_list(args) -> int:
    """List installed targets and well-known identifiers."""
    try:
        installed = _registry(args).list()
    except ZimError as e:
        print_error("Failed to list targets", str(e))
        return 1

    print("Installed cross-compilation targets:\n")
    if installed:
        for identifier in installed:
            print(f"  {identifier}")
    else:
        print("  (none)")
        print("\nAdd a target with: zim target add <triple>")

    print("\nCommon targets:")
    width = max(len(identifier) for identifier in COMMON_TARGETS)
    for identifier, description in COMMON_TARGETS.items():
        print(f"  {identifier.ljust(width)}  - {description}")
    return 0


def run_sync(args) -> int:
    """Add every target declared in the project configuration."""
    try:
        config = load_settings(args)
    except ZimError as e:
        print_error("Failed to load configuration", str(e))
        return 1

    if not config.targets:
        print("No targets declared in .zim/toolchain.yaml")
        return 0

    registry = TargetRegistry(config.targets_dir, lock_timeout=config.lock_timeout)
    failed = 0
    for identifier in config.targets:
        try:
            created = registry.add(identifier)
        except (ZimError, OSError) as e:
            failed += 1
            print_error(f"Failed to add target {identifier}", str(e))
            continue
        status = "added" if created else "already installed"
        safe_print(f"✓ {identifier} ({status})")

    if failed:
        logger.error(f"{failed} target(s) could not be added")
        return 1
    return 0
