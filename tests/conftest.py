"""Pytest configuration and fixtures."""

from collections.abc import Callable
from pathlib import Path

import pytest

from gitdeps.core.venv.fake import FakeVirtualEnvs


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Create an empty project directory."""
    project = tmp_path / "project"
    project.mkdir()
    return project


@pytest.fixture
def write_manifest(project_dir: Path) -> Callable[..., Path]:
    """Return a helper that writes requirements.txt into project_dir."""

    def _write(*lines: str, name: str = "requirements.txt") -> Path:
        manifest = project_dir / name
        manifest.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return manifest

    return _write


@pytest.fixture
def fake_venvs() -> FakeVirtualEnvs:
    """Create a fresh FakeVirtualEnvs."""
    return FakeVirtualEnvs()

