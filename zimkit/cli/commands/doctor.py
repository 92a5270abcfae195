"""
Doctor command for diagnosing environment issues.

This module provides health checks for the zim environment: the active Zig
compiler, ZLS, the target registry and configuration files.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional
from abc import ABC, abstractmethod
import logging

from zimkit.cli.utils import load_settings, safe_print
from zimkit.config.settings import ZimConfig, load_yaml_config
from zimkit.core.exceptions import ConfigError, VersionQueryFailed, ZimError
from zimkit.cross.registry import TargetRegistry
from zimkit.ide.zls import find_zls_config
from zimkit.toolchain.detector import ZIG, ZLS, ToolchainDetector
from zimkit.toolchain.store import ToolchainStore

logger = logging.getLogger(__name__)

# Checks whose failure is reported as a warning
OPTIONAL_CHECKS = ("ZLS", "ZLS Config")


@dataclass
class CheckResult:
    """Result of a health check."""

    name: str
    passed: bool
    message: str
    fix_command: Optional[str] = None
    fixable: bool = False


@dataclass
class FixResult:
    """Result of an automated fix attempt."""

    success: bool
    message: str
    action_taken: Optional[str] = None


class DoctorCheck(ABC):
    """Base class for health checks with optional auto-fix capability."""

    # Matches CheckResult.name of the results this check produces
    name: str = ""

    @abstractmethod
    def check(self) -> CheckResult:
        """Run the health check."""
        pass

    def can_autofix(self) -> bool:
        """Whether this check supports automatic fixing."""
        return False

    def fix(self) -> FixResult:
        """
        Attempt to automatically fix the issue.

        Returns:
            FixResult indicating success/failure
        """
        return FixResult(
            success=False,
            message="Auto-fix not implemented for this check",
            action_taken=None,
        )


class EnvironmentChecker:
    """Check zim environment health."""

    def __init__(self, config: ZimConfig):
        self.config = config
        self.store = ToolchainStore(config.toolchains_dir)

    def check_zig(self) -> CheckResult:
        """
        Check that a working Zig compiler is active.

        Returns:
            CheckResult for the managed or system Zig
        """
        detector = ToolchainDetector(ZIG, timeout=self.config.version_timeout)
        return self._check_tool(
            "Zig",
            detector,
            self.store.active_dir(),
            fix="Run: zim toolchain use <version>, or install Zig",
        )

    def check_zls(self) -> CheckResult:
        """Check that ZLS is installed and answers its version query."""
        detector = ToolchainDetector(ZLS, timeout=self.config.version_timeout)
        return self._check_tool(
            "ZLS",
            detector,
            self.config.zls_dir,
            fix=f"Place a zls binary in {self.config.zls_dir} or install ZLS",
        )

    def check_targets(self) -> CheckResult:
        """Check the target registry root."""
        registry = TargetRegistry(self.config.targets_dir)
        if registry.root.exists() and not registry.root.is_dir():
            return CheckResult(
                name="Targets",
                passed=False,
                message=f"Target registry path is not a directory: {registry.root}",
                fix_command=f"Remove or rename {registry.root}",
            )

        installed = registry.list()
        if not installed:
            message = f"No targets installed ({registry.root})"
        else:
            message = f"{len(installed)} target(s) installed: {', '.join(installed)}"
        return CheckResult(name="Targets", passed=True, message=message)

    def check_config(self) -> CheckResult:
        """Check that the global configuration parses."""
        config_file = self.config.global_config_file
        if not config_file.exists():
            return CheckResult(
                name="Config",
                passed=True,
                message="No global config found (using defaults)",
            )
        try:
            load_yaml_config(config_file, required=True)
        except ConfigError as e:
            return CheckResult(
                name="Config",
                passed=False,
                message=str(e),
                fix_command=f"Fix or delete {config_file}",
            )
        return CheckResult(name="Config", passed=True, message=f"Loaded {config_file}")

    def _check_tool(
        self,
        name: str,
        detector: ToolchainDetector,
        managed_root: Optional[Path],
        fix: str,
    ) -> CheckResult:
        try:
            info = detector.resolve_active(managed_root)
        except VersionQueryFailed as e:
            return CheckResult(
                name=name,
                passed=False,
                message=f"{name} found but not working: {e.reason} ({e.path})",
                fix_command=f"Reinstall {name}",
            )

        if info is None:
            return CheckResult(
                name=name,
                passed=False,
                message=f"{name} not found",
                fix_command=fix,
            )

        return CheckResult(
            name=name,
            passed=True,
            message=f"{name} {info.version} ({info.provenance}) at {info.path}",
        )


class ZlsConfigCheck(DoctorCheck):
    """Check that zls.json has been generated."""

    name = "ZLS Config"

    def __init__(self, config: ZimConfig):
        self.config = config

    def check(self) -> CheckResult:
        config_file = find_zls_config(self.config.config_dir)
        if config_file:
            return CheckResult(
                name=self.name,
                passed=True,
                message=f"Configuration file exists: {config_file}",
            )
        return CheckResult(
            name=self.name,
            passed=False,
            message="No zls.json found",
            fix_command="Run: zim zls config",
            fixable=True,
        )

    def can_autofix(self) -> bool:
        """zls.json can always be regenerated."""
        return True

    def fix(self) -> FixResult:
        """Generate zls.json in the global config directory."""
        try:
            self.config.config_dir.mkdir(parents=True, exist_ok=True)
            store = ToolchainStore(self.config.toolchains_dir)
            detector = ToolchainDetector(ZIG, timeout=self.config.version_timeout)
            config_file = detector.generate_config(
                self.config.config_dir, managed_root=store.active_dir()
            )
        except (ZimError, OSError) as e:
            return FixResult(
                success=False,
                message=f"Failed to generate zls.json: {e}",
            )
        return FixResult(
            success=True,
            message="Generated ZLS configuration",
            action_taken=f"Wrote {config_file}",
        )


class DoctorRunner:
    """Manages running health checks and auto-fixes."""

    def __init__(self, config: ZimConfig):
        """Initialize doctor runner."""
        self.config = config
        self.checker = EnvironmentChecker(config)
        self.checks: List[DoctorCheck] = [ZlsConfigCheck(config)]

    def run_all_checks(self) -> List[CheckResult]:
        """Run all health checks."""
        results = [
            self.checker.check_zig(),
            self.checker.check_zls(),
            self.checker.check_targets(),
            self.checker.check_config(),
        ]

        for check in self.checks:
            results.append(check.check())

        return results

    def fix_all(self, results: List[CheckResult]) -> List[FixResult]:
        """
        Attempt to fix all fixable issues.

        Args:
            results: Results from run_all_checks()

        Returns:
            List of fix results
        """
        fix_results = []
        by_name = {result.name: result for result in results}

        for check in self.checks:
            check_result = by_name.get(check.name)
            if check_result is None:
                continue
            if check_result.passed or not check_result.fixable:
                continue
            if not check.can_autofix():
                continue

            safe_print(f"🔧 Fixing: {check_result.message}")
            fix_result = check.fix()
            fix_results.append(fix_result)

            if fix_result.success:
                safe_print(f"   ✅ {fix_result.message}")
                if fix_result.action_taken:
                    safe_print(f"   → {fix_result.action_taken}")
                logger.info(f"Fixed {check_result.name}: {fix_result.message}")
            else:
                safe_print(f"   ❌ {fix_result.message}")
                logger.error(f"Failed to fix {check_result.name}: {fix_result.message}")

        return fix_results


def run(args) -> int:
    """
    Run doctor command.

    Args:
        args: Parsed arguments from argparse

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    quiet = args.quiet
    fix = getattr(args, "fix", False)

    try:
        config = load_settings(args)
    except ZimError as e:
        safe_print(f"❌ Config: {e}")
        return 1

    if not quiet:
        safe_print("🔍 zim system diagnostics\n")

    runner = DoctorRunner(config)
    checks = runner.run_all_checks()

    passed = 0
    failed = 0
    warnings = 0
    fixable_count = 0

    for result in checks:
        if result.passed:
            passed += 1
            if not quiet:
                safe_print(f"✅ {result.name}: {result.message}")
            continue

        if result.name in OPTIONAL_CHECKS:
            warnings += 1
            if not quiet:
                safe_print(f"⚠️  {result.name}: {result.message}")
        else:
            failed += 1
            safe_print(f"❌ {result.name}: {result.message}")

        if result.fixable:
            fixable_count += 1
        if not fix and result.fix_command and not quiet:
            safe_print(f"   💡 Fix: {result.fix_command}")

    if not quiet:
        safe_print(f"\nSummary: {passed} passed, {failed} failed, {warnings} warnings")

    if fix and fixable_count > 0:
        safe_print(f"\n🔧 Attempting to fix {fixable_count} issue(s)...\n")
        fix_results = runner.fix_all(checks)
        success_count = sum(1 for r in fix_results if r.success)
        safe_print(
            f"\nFix Summary: {success_count} fixed, "
            f"{len(fix_results) - success_count} failed"
        )
    elif fixable_count > 0 and not quiet:
        safe_print(f"\n💡 {fixable_count} issue(s) can be auto-fixed with --fix")

    if failed == 0:
        if not quiet:
            safe_print("\n✅ All required checks passed")
        return 0

    safe_print(f"\n❌ Found {failed} issue(s) that need attention")
    return 1
