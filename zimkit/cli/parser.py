"""
zimkit CLI argument parser.

This module implements the 'zim' command-line interface using argparse.
"""

import argparse
import importlib
import logging
import sys
from pathlib import Path
from typing import List, Optional

from zimkit import __version__

logger = logging.getLogger(__name__)

# Command groups: command -> (sub-command attribute, module)
COMMAND_GROUPS = {
    "target": ("target_command", "zimkit.cli.commands.target"),
    "toolchain": ("toolchain_command", "zimkit.cli.commands.toolchain"),
    "zls": ("zls_command", "zimkit.cli.commands.zls"),
}

COMMANDS = {
    "doctor": "zimkit.cli.commands.doctor",
}


class CLI:
    """zim command-line interface."""

    def __init__(self):
        """Initialize CLI with argument parser."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser with all subcommands.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog="zim",
            description="zim - Zig toolchain, target and ZLS manager",
            epilog='Use "zim COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        # Global options
        parser.add_argument("--version", action="version", version=f"zim {__version__}")
        parser.add_argument(
            "--verbose", "-v", action="store_true", help="Enable verbose output"
        )
        parser.add_argument(
            "--quiet",
            "-q",
            action="store_true",
            help="Enable minimal output (errors only)",
        )
        parser.add_argument(
            "--project-root",
            type=Path,
            metavar="PATH",
            default=Path.cwd(),
            help="Project root directory (default: current directory)",
        )

        # Subcommands
        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_target_command(subparsers)
        self._add_toolchain_command(subparsers)
        self._add_zls_command(subparsers)
        self._add_doctor_command(subparsers)

        return parser

    def _add_target_command(self, subparsers):
        """Add 'target' subcommand with sub-subcommands."""
        parser = subparsers.add_parser(
            "target",
            help="Manage cross-compilation targets",
            description="Add, remove and list cross-compilation targets",
        )
        target_subparsers = parser.add_subparsers(
            dest="target_command", help="Target commands", metavar="COMMAND"
        )

        add_parser = target_subparsers.add_parser(
            "add", help="Add a cross-compilation target"
        )
        add_parser.add_argument(
            "triple", help="Target identifier (e.g., x86_64-linux-gnu, wasm32-wasi)"
        )

        remove_parser = target_subparsers.add_parser(
            "remove", help="Remove a cross-compilation target"
        )
        remove_parser.add_argument("triple", help="Target identifier")

        target_subparsers.add_parser("list", help="List installed targets")

        target_subparsers.add_parser(
            "sync",
            help="Add targets declared in .zim/toolchain.yaml",
            description="Add every target listed in the project configuration",
        )

    def _add_toolchain_command(self, subparsers):
        """Add 'toolchain' subcommand with sub-subcommands."""
        parser = subparsers.add_parser(
            "toolchain",
            help="Manage Zig toolchains",
            description="List, select and pin Zig toolchains",
        )
        toolchain_subparsers = parser.add_subparsers(
            dest="toolchain_command", help="Toolchain commands", metavar="COMMAND"
        )

        toolchain_subparsers.add_parser("list", help="List managed Zig versions")

        use_parser = toolchain_subparsers.add_parser(
            "use", help="Select the Zig version to use"
        )
        use_parser.add_argument(
            "version", help="Managed version (e.g., 0.14.0) or 'system'"
        )

        toolchain_subparsers.add_parser(
            "current", help="Show the active Zig and where it came from"
        )

        pin_parser = toolchain_subparsers.add_parser(
            "pin", help="Pin the project to a Zig version"
        )
        pin_parser.add_argument("version", help="Managed version to pin")

    def _add_zls_command(self, subparsers):
        """Add 'zls' subcommand with sub-subcommands."""
        parser = subparsers.add_parser(
            "zls",
            help="Zig Language Server integration",
            description="Inspect ZLS and generate its configuration",
        )
        zls_subparsers = parser.add_subparsers(
            dest="zls_command", help="ZLS commands", metavar="COMMAND"
        )

        zls_subparsers.add_parser("info", help="Show ZLS status")

        config_parser = zls_subparsers.add_parser(
            "config", help="Generate zls.json for the active Zig"
        )
        config_parser.add_argument(
            "--dir",
            type=Path,
            metavar="DIR",
            help="Directory to write zls.json into (default: global config dir)",
        )

    def _add_doctor_command(self, subparsers):
        """Add 'doctor' subcommand."""
        parser = subparsers.add_parser(
            "doctor",
            help="Diagnose environment and configuration",
            description="Check Zig, ZLS, targets and configuration",
        )
        parser.add_argument(
            "--fix",
            action="store_true",
            help="Attempt to automatically fix detected issues",
        )

    def parse_args(self, args: Optional[List[str]] = None):
        """
        Parse command-line arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Parsed arguments namespace
        """
        return self.parser.parse_args(args)

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run CLI with given arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        parsed_args = self.parse_args(args)

        # Configure logging
        self._configure_logging(parsed_args)

        # Check if command specified
        if not parsed_args.command:
            self.parser.print_help()
            return 1

        # Dispatch to command handler
        try:
            return self._dispatch_command(parsed_args)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130  # Standard exit code for SIGINT
        except Exception as e:
            logger.error(f"Unexpected error: {e}")
            if parsed_args.verbose:
                import traceback

                traceback.print_exc()
            return 1

    def _configure_logging(self, args):
        """
        Configure logging based on verbose/quiet flags.

        Args:
            args: Parsed arguments
        """
        if args.verbose:
            level = logging.DEBUG
            format_str = "%(levelname)s [%(name)s] %(message)s"
        elif args.quiet:
            level = logging.ERROR
            format_str = "%(levelname)s: %(message)s"
        else:
            level = logging.WARNING
            format_str = "%(levelname)s: %(message)s"

        logging.basicConfig(
            level=level,
            format=format_str,
            force=True,  # Reconfigure if already configured
        )

    def _dispatch_command(self, args) -> int:
        """
        Dispatch to appropriate command handler.

        Grouped commands ('target add', 'zls info', ...) resolve to
        run_<sub> functions in the command module; plain commands to run().

        Args:
            args: Parsed arguments with command field

        Returns:
            Exit code from command handler
        """
        if args.command in COMMAND_GROUPS:
            sub_attr, module_name = COMMAND_GROUPS[args.command]
            sub_command = getattr(args, sub_attr, None)
            if not sub_command:
                logger.error(f"No {args.command} sub-command specified")
                self.parser.parse_args([args.command, "--help"])
                return 1
            handler_name = f"run_{sub_command.replace('-', '_')}"
        else:
            module_name = COMMANDS.get(args.command)
            handler_name = "run"

        if not module_name:
            logger.error(f"Unknown command: {args.command}")
            return 1

        module = importlib.import_module(module_name)
        handler = getattr(module, handler_name, None)
        if handler is None:
            logger.error(f"Command module {module_name} has no {handler_name}()")
            return 1

        return handler(args)


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
