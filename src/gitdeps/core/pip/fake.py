"""Fake Pip operations for testing.

FakePip is an in-memory implementation that accepts pre-configured state
in its constructor. Construct instances directly with keyword arguments.
"""

from gitdeps.core.errors import InstallationFailure
from gitdeps.core.pip.abc import Pip
from gitdeps.core.pip.types import BenignStatus, InstalledPackage, PipOutcome


class FakePip(Pip):
    """In-memory fake implementation of pip operations.

    This class has NO public setup methods. All state is provided via constructor
    using keyword arguments with sensible defaults (empty dicts).
    """

    def __init__(
        self,
        *,
        installed: dict[str, str] | None = None,
        cached: set[str] | None = None,
        distribution_names: dict[str, str] | None = None,
        failing_installs: set[str] | None = None,
        failing_uninstalls: dict[str, str] | None = None,
        list_error: str | None = None,
        installed_version: str = "1.0.0",
    ) -> None:
        """Create FakePip with pre-configured state.

        Args:
            installed: Mapping of distribution name -> version
            cached: Distribution names that have cached wheels
            distribution_names: Mapping of install argument -> distribution name it
                installs. Arguments not in this mapping install under their own text.
            failing_installs: Install arguments for which pip exits non-zero
            failing_uninstalls: Mapping of name -> error output for uninstalls that fail
            list_error: If set, list_installed() raises RuntimeError with this message
            installed_version: Version recorded for every install or upgrade
        """
        self._installed = dict(installed or {})
        self._cached = set(cached or set())
        self._distribution_names = distribution_names or {}
        self._failing_installs = failing_installs or set()
        self._failing_uninstalls = failing_uninstalls or {}
        self._list_error = list_error
        self._installed_version = installed_version
        self._calls: list[tuple[str, str]] = []

    @property
    def calls(self) -> list[tuple[str, str]]:
        """Get the list of (operation, argument) calls that were made.

        This property is for test assertions only.
        """
        return self._calls.copy()

    @property
    def installed(self) -> dict[str, str]:
        """Current installed state, for test assertions only."""
        return dict(self._installed)

    def uninstall(self, name: str) -> PipOutcome:
        self._calls.append(("uninstall", name))
        if name in self._failing_uninstalls:
            return PipOutcome(BenignStatus.FAILED, self._failing_uninstalls[name])
        if name not in self._installed:
            message = f"WARNING: Skipping {name} as it is not installed."
            return PipOutcome(BenignStatus.ABSENT, message)
        del self._installed[name]
        return PipOutcome(BenignStatus.DONE)

    def cache_remove(self, name: str) -> PipOutcome:
        self._calls.append(("cache_remove", name))
        if name not in self._cached:
            return PipOutcome(BenignStatus.ABSENT, "WARNING: No matching packages")
        self._cached.discard(name)
        return PipOutcome(BenignStatus.DONE)

    def _install(self, argument: str) -> None:
        if argument in self._failing_installs:
            raise InstallationFailure(argument, 1)
        name = self._distribution_names.get(argument, argument)
        self._installed[name] = self._installed_version

    def force_install(self, source_locator: str) -> None:
        self._calls.append(("force_install", source_locator))
        self._install(source_locator)

    def upgrade(self, specifier: str) -> None:
        self._calls.append(("upgrade", specifier))
        self._install(specifier)

    def list_installed(self) -> list[InstalledPackage]:
        self._calls.append(("list", ""))
        if self._list_error is not None:
            raise RuntimeError(self._list_error)
        return [
            InstalledPackage(name=name, version=version)
            for name, version in sorted(self._installed.items())
        ]
