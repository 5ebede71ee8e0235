"""High-level pip operations interface.

Architecture:
- Pip: Abstract base class defining the interface
- RealPip: Production implementation using subprocess
- DryRunPip: Wrapper that skips every operation that changes the environment
- FakePip: In-memory implementation for tests
"""

from abc import ABC, abstractmethod

from gitdeps.core.pip.types import InstalledPackage, PipOutcome


class Pip(ABC):
    """Abstract interface for package operations against one environment.

    All implementations (real and fake) must implement this interface.
    This interface contains ONLY runtime operations - no test setup methods.
    """

    @abstractmethod
    def uninstall(self, name: str) -> PipOutcome:
        """Uninstall a distribution; a package that is not installed is ABSENT."""
        ...

    @abstractmethod
    def cache_remove(self, name: str) -> PipOutcome:
        """Remove cached wheels for a distribution; nothing cached is ABSENT."""
        ...

    @abstractmethod
    def force_install(self, source_locator: str) -> None:
        """Reinstall from source ignoring caches and without dependencies.

        Raises:
            InstallationFailure: If pip exits non-zero
            PackageManagerNotFound: If pip cannot be executed
        """
        ...

    @abstractmethod
    def upgrade(self, specifier: str) -> None:
        """Upgrade a registry requirement in place.

        Raises:
            InstallationFailure: If pip exits non-zero
            PackageManagerNotFound: If pip cannot be executed
        """
        ...

    @abstractmethod
    def list_installed(self) -> list[InstalledPackage]:
        """List distributions installed in the environment.

        Raises:
            RuntimeError: If pip cannot produce the listing
        """
        ...
