"""Production Pip implementation using subprocess.

Every command runs with the environment's activated subprocess_env and the
located invocation prefix, so nothing outside the environment is touched.
"""

import json
import logging
import subprocess
from pathlib import Path

from gitdeps.core.environment import ExecutionEnvironment
from gitdeps.core.errors import InstallationFailure, PackageManagerNotFound
from gitdeps.core.locator import PackageManagerInvocation
from gitdeps.core.pip.abc import Pip
from gitdeps.core.pip.types import BenignStatus, InstalledPackage, PipOutcome
from gitdeps.core.subprocess import run_subprocess_with_context

logger = logging.getLogger(__name__)

NOT_INSTALLED_MARKERS = ("not installed",)
NO_CACHE_ENTRY_MARKERS = ("no matching packages", "cache is disabled")
MISSING_MODULE_MARKER = "no module named pip"


class RealPip(Pip):
    """Production implementation using subprocess."""

    def __init__(
        self,
        invocation: PackageManagerInvocation,
        environment: ExecutionEnvironment,
        cwd: Path,
    ) -> None:
        self._invocation = invocation
        self._environment = environment
        self._cwd = cwd
        self._module_checked = invocation.source != "module"

    def _spawn(
        self,
        args: list[str],
        operation_context: str,
        *,
        capture_output: bool = True,
        check: bool = False,
    ) -> subprocess.CompletedProcess[str]:
        cmd = self._invocation.argv(*args)
        logger.debug("Running: %s", " ".join(cmd))
        try:
            return run_subprocess_with_context(
                cmd,
                operation_context=operation_context,
                cwd=self._cwd,
                capture_output=capture_output,
                check=check,
                env=dict(self._environment.subprocess_env),
            )
        except (FileNotFoundError, PermissionError) as e:
            raise PackageManagerNotFound(self._invocation.command) from e

    def _ensure_pip_module(self) -> None:
        """Fail fast when the environment's python has no pip module.

        Installs stream their output, so a missing module cannot be told apart
        from a failed install after the fact. Checked once per instance.
        """
        if self._module_checked:
            return
        result = self._spawn(["--version"], "check pip module")
        output = f"{result.stdout or ''}\n{result.stderr or ''}".lower()
        if result.returncode != 0 and MISSING_MODULE_MARKER in output:
            raise PackageManagerNotFound(self._invocation.command)
        self._module_checked = True

    def _run(
        self,
        args: list[str],
        operation_context: str,
        *,
        capture_output: bool = True,
        check: bool = False,
    ) -> subprocess.CompletedProcess[str]:
        self._ensure_pip_module()
        return self._spawn(args, operation_context, capture_output=capture_output, check=check)

    def _benign(
        self, result: subprocess.CompletedProcess[str], markers: tuple[str, ...]
    ) -> PipOutcome:
        output = f"{result.stdout or ''}\n{result.stderr or ''}".strip()
        if any(marker in output.lower() for marker in markers):
            return PipOutcome(BenignStatus.ABSENT, output)
        if result.returncode == 0:
            return PipOutcome(BenignStatus.DONE, output)
        return PipOutcome(BenignStatus.FAILED, output)

    def uninstall(self, name: str) -> PipOutcome:
        result = self._run(["uninstall", "-y", name], f"uninstall {name}")
        return self._benign(result, NOT_INSTALLED_MARKERS)

    def cache_remove(self, name: str) -> PipOutcome:
        result = self._run(["cache", "remove", name], f"remove cached wheels for {name}")
        return self._benign(result, NO_CACHE_ENTRY_MARKERS)

    def force_install(self, source_locator: str) -> None:
        result = self._run(
            ["install", "--force-reinstall", "--no-cache-dir", "--no-deps", source_locator],
            f"install {source_locator}",
            capture_output=False,
        )
        if result.returncode != 0:
            raise InstallationFailure(source_locator, result.returncode)

    def upgrade(self, specifier: str) -> None:
        result = self._run(
            ["install", "--upgrade", specifier],
            f"upgrade {specifier}",
            capture_output=False,
        )
        if result.returncode != 0:
            raise InstallationFailure(specifier, result.returncode)

    def list_installed(self) -> list[InstalledPackage]:
        result = self._run(
            ["list", "--format=json", "--disable-pip-version-check"],
            "list installed packages",
            check=True,
        )
        try:
            rows = json.loads(result.stdout)
        except json.JSONDecodeError as e:
            raise RuntimeError(f"Unexpected output from pip list: {e}") from e
        return [InstalledPackage(name=row["name"], version=row["version"]) for row in rows]
