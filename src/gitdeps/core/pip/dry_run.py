"""No-op wrapper for Pip operations."""

from gitdeps.core.pip.abc import Pip
from gitdeps.core.pip.types import BenignStatus, InstalledPackage, PipOutcome


class DryRunPip(Pip):
    """No-op wrapper that prevents changes to the environment.

    Read operations are delegated to the wrapped implementation.
    Write operations return without executing (no-op behavior).

    Usage:
        real_pip = RealPip(invocation, environment, cwd)
        noop_pip = DryRunPip(real_pip)

        # No-op instead of running pip install
        noop_pip.force_install("git+ssh://host/pkg.git")
    """

    def __init__(self, wrapped: Pip) -> None:
        """Create a dry-run wrapper around a Pip implementation.

        Args:
            wrapped: The Pip implementation to wrap (usually RealPip)
        """
        self._wrapped = wrapped

    def uninstall(self, name: str) -> PipOutcome:
        """No-op for pip uninstall in dry-run mode."""
        return PipOutcome(BenignStatus.DONE)

    def cache_remove(self, name: str) -> PipOutcome:
        """No-op for pip cache remove in dry-run mode."""
        return PipOutcome(BenignStatus.DONE)

    def force_install(self, source_locator: str) -> None:
        """No-op for pip install --force-reinstall in dry-run mode."""
        pass

    def upgrade(self, specifier: str) -> None:
        """No-op for pip install --upgrade in dry-run mode."""
        pass

    def list_installed(self) -> list[InstalledPackage]:
        """List installed packages (read-only, delegates to wrapped)."""
        return self._wrapped.list_installed()
