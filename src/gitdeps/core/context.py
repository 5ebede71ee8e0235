"""Application context with dependency injection."""

import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path

from gitdeps.core.config import GitDepsConfig, load_config
from gitdeps.core.environment import ExecutionEnvironment
from gitdeps.core.locator import PackageManagerInvocation
from gitdeps.core.pip.abc import Pip
from gitdeps.core.pip.dry_run import DryRunPip
from gitdeps.core.pip.real import RealPip
from gitdeps.core.venv.abc import VirtualEnvs
from gitdeps.core.venv.real import RealVirtualEnvs

PipFactory = Callable[[PackageManagerInvocation, ExecutionEnvironment], Pip]


@dataclass(frozen=True)
class GitDepsContext:
    """Immutable context holding all dependencies for update-git-deps operations.

    Created at CLI entry point and threaded through the application.
    Frozen to prevent accidental modification at runtime.

    pip_factory binds package operations to an environment, which is only
    known once the precondition checks have run.
    """

    venvs: VirtualEnvs
    pip_factory: PipFactory
    cwd: Path  # Current working directory at CLI invocation
    config: GitDepsConfig
    base_env: Mapping[str, str]
    argv0: str
    dry_run: bool

    def pip_for(
        self, invocation: PackageManagerInvocation, environment: ExecutionEnvironment
    ) -> Pip:
        pip = self.pip_factory(invocation, environment)
        if self.dry_run:
            return DryRunPip(pip)
        return pip

    @staticmethod
    def for_test(
        venvs: VirtualEnvs | None = None,
        pip: Pip | None = None,
        cwd: Path | None = None,
        config: GitDepsConfig | None = None,
        base_env: Mapping[str, str] | None = None,
        argv0: str = "/opt/gitdeps/bin/update-git-deps",
        dry_run: bool = False,
    ) -> "GitDepsContext":
        """Create test context with optional pre-configured fakes.

        Args:
            venvs: Optional VirtualEnvs. If None, creates FakeVirtualEnvs.
            pip: Optional Pip returned for every environment. If None, creates FakePip.
            cwd: Optional working directory. If None, uses Path("/test/default/cwd").
            config: Optional GitDepsConfig. If None, uses defaults.
            base_env: Optional inherited environment. If None, uses {"PATH": "/usr/bin"}.
            argv0: Invocation path reported for registration
            dry_run: Whether to enable dry-run mode (default False)

        Example:
            >>> pip = FakePip(installed={"requests": "2.31.0"})
            >>> ctx = GitDepsContext.for_test(pip=pip, cwd=tmp_path)
            >>> result = runner.invoke(cli, [], obj=ctx)
        """
        from gitdeps.core.pip.fake import FakePip
        from gitdeps.core.venv.fake import FakeVirtualEnvs

        if venvs is None:
            venvs = FakeVirtualEnvs()

        if pip is None:
            pip = FakePip()

        fixed_pip = pip

        def pip_factory(
            invocation: PackageManagerInvocation, environment: ExecutionEnvironment
        ) -> Pip:
            return fixed_pip

        return GitDepsContext(
            venvs=venvs,
            pip_factory=pip_factory,
            cwd=cwd or Path("/test/default/cwd"),
            config=config or GitDepsConfig(),
            base_env=base_env if base_env is not None else {"PATH": "/usr/bin"},
            argv0=argv0,
            dry_run=dry_run,
        )


def create_context(*, dry_run: bool, argv0: str) -> GitDepsContext:
    """Create production context with real implementations.

    Called at CLI entry point to create the context for the entire
    command execution.

    Raises:
        ValueError: If [tool.gitdeps] in pyproject.toml is malformed
    """
    cwd = Path.cwd()

    def pip_factory(
        invocation: PackageManagerInvocation, environment: ExecutionEnvironment
    ) -> Pip:
        return RealPip(invocation, environment, cwd)

    return GitDepsContext(
        venvs=RealVirtualEnvs(),
        pip_factory=pip_factory,
        cwd=cwd,
        config=load_config(cwd),
        base_env=dict(os.environ),
        argv0=argv0,
        dry_run=dry_run,
    )
