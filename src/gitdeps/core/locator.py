"""Package-manager locator scoped to the execution environment."""

import logging
import sys
from dataclasses import dataclass
from typing import Literal

from gitdeps.core.environment import ExecutionEnvironment

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PackageManagerInvocation:
    """The argv prefix used for every pip operation this run."""

    command: tuple[str, ...]
    source: Literal["executable", "module"]

    def argv(self, *args: str) -> list[str]:
        return [*self.command, *args]


def locate_package_manager(environment: ExecutionEnvironment) -> PackageManagerInvocation:
    """Prefer the environment's pip executable, else run pip as a module.

    Never falls back to a pip found on PATH; both candidates live inside the
    environment. If the chosen one cannot be spawned, or the python has no pip
    module, the first pip operation raises PackageManagerNotFound.
    """
    pip_name = "pip.exe" if sys.platform.startswith("win") else "pip"
    pip_path = environment.bin_dir / pip_name
    if pip_path.is_file():
        invocation = PackageManagerInvocation(command=(str(pip_path),), source="executable")
    else:
        invocation = PackageManagerInvocation(
            command=(str(environment.python), "-m", "pip"), source="module"
        )
    logger.debug("Package manager: %s (%s)", " ".join(invocation.command), invocation.source)
    return invocation
