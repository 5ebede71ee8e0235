"""Configuration loaded from the `[tool.gitdeps]` table of pyproject.toml."""

import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path

DEFAULT_GIT_SCHEMES = ("git+ssh://", "git+https://")


@dataclass(frozen=True)
class GitDepsConfig:
    """Immutable configuration for one invocation.

    Loaded once at CLI entry point and stored in GitDepsContext.
    """

    manifest: str = "requirements.txt"
    venv_dir: str = ".venv"
    bin_dir: Path = Path("/usr/local/bin")
    command_name: str = "update-git-deps"
    git_schemes: tuple[str, ...] = field(default=DEFAULT_GIT_SCHEMES)


def read_tool_section(project_dir: Path) -> dict[str, object] | None:
    """Read the [tool.gitdeps] table from pyproject.toml.

    Returns:
        The table contents, or None if the file or table is absent
    """
    pyproject_path = project_dir / "pyproject.toml"

    if not pyproject_path.exists():
        return None

    with pyproject_path.open("rb") as f:
        data = tomllib.load(f)

    tool_section = data.get("tool")
    if tool_section is None:
        return None

    return tool_section.get("gitdeps")


def _expect_str(section: dict[str, object], key: str, source: Path) -> str:
    value = section[key]
    if not isinstance(value, str) or not value:
        raise ValueError(f"'{key}' must be a non-empty string in {source} [tool.gitdeps]")
    return value


def load_config(project_dir: Path) -> GitDepsConfig:
    """Load configuration for the project in project_dir, falling back to defaults.

    Example pyproject.toml:
      [tool.gitdeps]
      manifest = "requirements/dev.txt"
      venv_dir = "venv"
      bin_dir = "~/.local/bin"
      git_schemes = ["git+ssh://", "git+https://", "git+git://"]

    Raises:
        ValueError: If the table has unknown keys or values of the wrong type
    """
    section = read_tool_section(project_dir)
    if section is None:
        return GitDepsConfig()

    source = project_dir / "pyproject.toml"
    known = {f.name for f in fields(GitDepsConfig)}
    unknown = sorted(set(section) - known)
    if unknown:
        raise ValueError(f"Unknown keys in {source} [tool.gitdeps]: {', '.join(unknown)}")

    defaults = GitDepsConfig()
    manifest = defaults.manifest
    venv_dir = defaults.venv_dir
    bin_dir = defaults.bin_dir
    command_name = defaults.command_name
    git_schemes = defaults.git_schemes

    if "manifest" in section:
        manifest = _expect_str(section, "manifest", source)
    if "venv_dir" in section:
        venv_dir = _expect_str(section, "venv_dir", source)
    if "bin_dir" in section:
        bin_dir = Path(_expect_str(section, "bin_dir", source)).expanduser()
    if "command_name" in section:
        command_name = _expect_str(section, "command_name", source)
    if "git_schemes" in section:
        raw = section["git_schemes"]
        if not isinstance(raw, list) or not raw or not all(isinstance(s, str) and s for s in raw):
            raise ValueError(
                f"'git_schemes' must be a non-empty list of strings in {source} [tool.gitdeps]"
            )
        git_schemes = tuple(raw)

    return GitDepsConfig(
        manifest=manifest,
        venv_dir=venv_dir,
        bin_dir=bin_dir,
        command_name=command_name,
        git_schemes=git_schemes,
    )
