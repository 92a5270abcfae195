"""
ZLS commands.

Reports the Zig Language Server installation and generates zls.json.
"""

import logging

from zimkit.cli.utils import load_settings, print_error, safe_print
from zimkit.core.exceptions import VersionQueryFailed, ZimError
from zimkit.ide.zls import find_zls_config
from zimkit.toolchain.detector import ZIG, ZLS, Provenance, ToolchainDetector
from zimkit.toolchain.store import ToolchainStore

logger = logging.getLogger(__name__)


def run_info(args) -> int:
    """Show ZLS status, version and location."""
    try:
        config = load_settings(args)
    except ZimError as e:
        print_error("Failed to load configuration", str(e))
        return 1

    detector = ToolchainDetector(ZLS, timeout=config.version_timeout)
    print("ZLS information\n")

    located = detector.locate(config.zls_dir)
    if located is None:
        print("Status: Not installed")
        print(f"\nPlace a zls binary in {config.zls_dir} or install ZLS with your")
        print("package manager (https://github.com/zigtools/zls/releases).")
        return 1

    path, provenance = located
    source = "system" if provenance is Provenance.SYSTEM else "zim-managed"
    print("Status: Installed")
    try:
        print(f"Version: {detector.get_version(path)}")
    except VersionQueryFailed as e:
        print("Version: unknown")
        print_error("ZLS is installed but not working", str(e))
        return 1
    print(f"Location: {path} ({source})")

    config_file = find_zls_config(config.config_dir)
    if config_file:
        print(f"Configuration: {config_file}")
    else:
        print("Configuration: none (run 'zim zls config' to generate one)")
    return 0


def run_config(args) -> int:
    """Generate zls.json for the active Zig."""
    try:
        config = load_settings(args)
        target_dir = args.dir
        if target_dir is None:
            target_dir = config.config_dir
            target_dir.mkdir(parents=True, exist_ok=True)

        store = ToolchainStore(config.toolchains_dir)
        detector = ToolchainDetector(ZIG, timeout=config.version_timeout)
        config_file = detector.generate_config(
            target_dir, managed_root=store.active_dir()
        )
    except (ZimError, OSError) as e:
        print_error("Failed to generate ZLS configuration", str(e))
        return 1

    safe_print(f"✅ Configuration generated: {config_file}")
    print("   Snippets, AST diagnostics, auto-fix and style warnings enabled")
    safe_print("💡 Tip: Restart your editor to apply changes")
    return 0
