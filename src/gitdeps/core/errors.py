"""Fatal error kinds raised by the update flow.

Every error carries a human-readable message. The CLI error boundary turns
any GitDepsError into a red "Error:" line and exit code 1.
"""

from pathlib import Path


class GitDepsError(Exception):
    """Base class for all fatal update-git-deps errors."""


class ManifestMissing(GitDepsError):
    """No manifest file in the working directory."""

    def __init__(self, manifest_path: Path) -> None:
        self.manifest_path = manifest_path
        super().__init__(
            f"{manifest_path.name} not found in {manifest_path.parent}\n"
            f"Run this command from a directory containing {manifest_path.name}"
        )


class WrongEnvironment(GitDepsError):
    """The local environment directory is not a usable isolated environment."""

    def __init__(
        self, expected_root: Path, actual_root: Path, reason: str, activate_script: Path
    ) -> None:
        self.expected_root = expected_root
        self.actual_root = actual_root
        self.activate_script = activate_script
        super().__init__(
            f"{reason}\n"
            f"  expected: {expected_root}\n"
            f"  found:    {actual_root}\n"
            f"Recreate it or point venv_dir at a local environment, then activate it:\n"
            f"  source {activate_script}"
        )


class PackageManagerNotFound(GitDepsError):
    """Neither the environment's pip executable nor `python -m pip` could be run."""

    def __init__(self, command: tuple[str, ...]) -> None:
        self.command = command
        super().__init__(
            f"Package manager not found: {' '.join(command)}\n"
            f"The environment may be broken; remove it and run again to recreate it"
        )


class InstallationFailure(GitDepsError):
    """pip reported a non-zero exit status while installing a dependency."""

    def __init__(self, source_locator: str, returncode: int) -> None:
        self.source_locator = source_locator
        self.returncode = returncode
        super().__init__(
            f"Failed to install {source_locator} (pip exit code {returncode})\n"
            f"Remaining dependencies were not updated"
        )
