"""Execution environment resolution.

Activation never touches os.environ. Instead the resolved environment is
returned as an ExecutionEnvironment value whose subprocess_env is handed to
every pip invocation, which is what `source .venv/bin/activate` would have
done for the shell.
"""

import logging
import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from gitdeps.core.config import GitDepsConfig
from gitdeps.core.errors import ManifestMissing, WrongEnvironment
from gitdeps.core.venv.abc import VirtualEnvs

logger = logging.getLogger(__name__)


def bin_dir_for(root: Path) -> Path:
    if sys.platform.startswith("win"):
        return root / "Scripts"
    return root / "bin"


def python_for(root: Path) -> Path:
    if sys.platform.startswith("win"):
        return bin_dir_for(root) / "python.exe"
    return bin_dir_for(root) / "python"


@dataclass(frozen=True)
class ExecutionEnvironment:
    """An isolated environment activated for this process's children."""

    root: Path
    subprocess_env: Mapping[str, str] = field(default_factory=dict)
    created: bool = False

    @property
    def bin_dir(self) -> Path:
        return bin_dir_for(self.root)

    @property
    def python(self) -> Path:
        return python_for(self.root)

    @property
    def exists(self) -> bool:
        return (self.root / "pyvenv.cfg").is_file()

    @property
    def is_active(self) -> bool:
        return self.subprocess_env.get("VIRTUAL_ENV") == str(self.root)


def activated_env(root: Path, base_env: Mapping[str, str]) -> dict[str, str]:
    """Build the child-process environment an activate script would produce."""
    env = dict(base_env)
    env["VIRTUAL_ENV"] = str(root)
    existing_path = env.get("PATH")
    if existing_path:
        env["PATH"] = f"{bin_dir_for(root)}{os.pathsep}{existing_path}"
    else:
        env["PATH"] = str(bin_dir_for(root))
    env.pop("PYTHONHOME", None)
    return env


def ensure_manifest(cwd: Path, config: GitDepsConfig) -> Path:
    """Return the manifest path, raising ManifestMissing if it is not a file."""
    manifest_path = cwd / config.manifest
    if not manifest_path.is_file():
        raise ManifestMissing(manifest_path)
    return manifest_path


def ensure_environment(
    cwd: Path,
    config: GitDepsConfig,
    venvs: VirtualEnvs,
    base_env: Mapping[str, str],
) -> ExecutionEnvironment:
    """Ensure the local environment exists and return it activated.

    An inherited VIRTUAL_ENV pointing elsewhere is replaced in the returned
    subprocess_env; only the local environment is ever activated.

    Args:
        cwd: Directory holding the manifest and the environment
        config: Loaded configuration (venv_dir is relative to cwd)
        venvs: Environment creation capability
        base_env: The inherited process environment

    Raises:
        WrongEnvironment: If the local directory does not resolve to a usable
            environment root after activation
    """
    expected_root = cwd / config.venv_dir
    activate_script = bin_dir_for(expected_root) / "activate"

    inherited = base_env.get("VIRTUAL_ENV")
    if inherited and Path(inherited).resolve() != expected_root.resolve():
        logger.debug("Replacing inherited environment %s with %s", inherited, expected_root)

    created = False
    if not expected_root.exists():
        logger.debug("Creating environment at %s", expected_root)
        venvs.create(expected_root)
        created = True

    resolved_root = expected_root.resolve()
    if resolved_root != cwd.resolve() / config.venv_dir:
        raise WrongEnvironment(
            expected_root,
            resolved_root,
            f"{config.venv_dir} resolves outside the project directory",
            activate_script,
        )

    environment = ExecutionEnvironment(
        root=resolved_root,
        subprocess_env=activated_env(resolved_root, base_env),
        created=created,
    )
    if not environment.exists:
        raise WrongEnvironment(
            expected_root,
            resolved_root,
            f"{config.venv_dir} is not a virtual environment (no pyvenv.cfg)",
            activate_script,
        )

    logger.debug("Environment active: root=%s, created=%s", environment.root, created)
    return environment
