"""Package manager operations subpackage.

This subpackage provides abstractions over pip with support for testing via
fakes and dry-run via wrappers.
"""

from gitdeps.core.pip.abc import Pip
from gitdeps.core.pip.dry_run import DryRunPip
from gitdeps.core.pip.real import RealPip
from gitdeps.core.pip.types import BenignStatus, InstalledPackage, PipOutcome

__all__ = [
    "Pip",
    "RealPip",
    "DryRunPip",
    "BenignStatus",
    "InstalledPackage",
    "PipOutcome",
]
