"""
Tests for CLI argument parser.
"""

from pathlib import Path
from unittest.mock import patch

import pytest

from zimkit import __version__
from zimkit.cli.parser import CLI


class TestCLIBasics:
    """Test basic CLI functionality."""

    def test_cli_creation(self):
        """Test CLI can be created."""
        cli = CLI()
        assert cli.parser is not None

    def test_no_command_shows_help(self, capsys):
        """Test that running without command shows help."""
        result = CLI().run([])

        assert result == 1
        captured = capsys.readouterr()
        assert "usage:" in captured.out.lower()

    def test_version_flag(self, capsys):
        """Test --version flag."""
        with pytest.raises(SystemExit) as exc_info:
            CLI().run(["--version"])

        assert exc_info.value.code == 0
        assert f"zim {__version__}" in capsys.readouterr().out

    def test_global_options(self, tmp_path):
        """Test global options are parsed before the command."""
        args = CLI().parse_args(["-v", "--project-root", str(tmp_path), "doctor"])

        assert args.verbose is True
        assert args.quiet is False
        assert args.project_root == tmp_path

    def test_project_root_defaults_to_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        args = CLI().parse_args(["doctor"])

        assert args.project_root == Path.cwd()

    def test_unknown_command(self):
        with pytest.raises(SystemExit) as exc_info:
            CLI().parse_args(["install"])

        assert exc_info.value.code == 2


class TestTargetCommandParsing:
    """Test target command parsing."""

    def test_add(self):
        args = CLI().parse_args(["target", "add", "x86_64-linux-gnu"])

        assert args.command == "target"
        assert args.target_command == "add"
        assert args.triple == "x86_64-linux-gnu"

    def test_remove(self):
        args = CLI().parse_args(["target", "remove", "wasm32-wasi"])

        assert args.target_command == "remove"
        assert args.triple == "wasm32-wasi"

    @pytest.mark.parametrize("sub", ["list", "sync"])
    def test_no_argument_subcommands(self, sub):
        assert CLI().parse_args(["target", sub]).target_command == sub

    def test_add_requires_triple(self):
        with pytest.raises(SystemExit):
            CLI().parse_args(["target", "add"])

    def test_missing_subcommand_shows_help(self, capsys):
        """Test 'zim target' prints the group help."""
        with pytest.raises(SystemExit) as exc_info:
            CLI().run(["target"])

        assert exc_info.value.code == 0
        assert "add" in capsys.readouterr().out


class TestToolchainCommandParsing:
    """Test toolchain command parsing."""

    def test_use(self):
        args = CLI().parse_args(["toolchain", "use", "0.14.0"])

        assert args.toolchain_command == "use"
        assert args.version == "0.14.0"

    def test_pin(self):
        args = CLI().parse_args(["toolchain", "pin", "0.13.0"])

        assert args.toolchain_command == "pin"
        assert args.version == "0.13.0"

    @pytest.mark.parametrize("sub", ["list", "current"])
    def test_no_argument_subcommands(self, sub):
        assert CLI().parse_args(["toolchain", sub]).toolchain_command == sub


class TestZlsAndDoctorParsing:
    """Test zls and doctor command parsing."""

    def test_zls_config_dir(self, tmp_path):
        args = CLI().parse_args(["zls", "config", "--dir", str(tmp_path)])

        assert args.zls_command == "config"
        assert args.dir == tmp_path

    def test_zls_config_default_dir(self):
        assert CLI().parse_args(["zls", "config"]).dir is None

    def test_doctor_fix(self):
        args = CLI().parse_args(["doctor", "--fix"])

        assert args.command == "doctor"
        assert args.fix is True


class TestDispatch:
    """Test command dispatch and error handling."""

    def test_dispatches_to_group_handler(self):
        with patch("zimkit.cli.commands.target.run_list", return_value=0) as handler:
            result = CLI().run(["target", "list"])

        assert result == 0
        handler.assert_called_once()
        assert handler.call_args[0][0].target_command == "list"

    def test_dispatches_to_plain_command(self):
        with patch("zimkit.cli.commands.doctor.run", return_value=3) as handler:
            assert CLI().run(["doctor"]) == 3

        handler.assert_called_once()

    def test_keyboard_interrupt(self):
        with patch(
            "zimkit.cli.commands.toolchain.run_current",
            side_effect=KeyboardInterrupt,
        ):
            assert CLI().run(["toolchain", "current"]) == 130

    def test_unexpected_error(self):
        with patch(
            "zimkit.cli.commands.zls.run_info", side_effect=RuntimeError("boom")
        ):
            assert CLI().run(["zls", "info"]) == 1
