"""End-to-end tests for the update-git-deps command with in-memory fakes."""

from collections.abc import Callable
from pathlib import Path

import pytest
from click.testing import CliRunner

from gitdeps.cli.cli import cli
from gitdeps.core.config import GitDepsConfig
from gitdeps.core.context import GitDepsContext
from gitdeps.core.pip.fake import FakePip
from gitdeps.core.venv.fake import FakeVirtualEnvs

MANIFEST = (
    "# Project dependencies",
    "",
    "requests>=2.28.0",
    "pkgA @ git+ssh://git@host/org/pkgA.git",
    "git+ssh://git@host/group/pkgB.git",
)


def test_update_flow_updates_every_entry(
    project_dir: Path, write_manifest: Callable[..., Path]
) -> None:
    write_manifest(*MANIFEST)
    pip = FakePip(installed={"pkgA": "0.1.0"}, cached={"pkgA"})
    venvs = FakeVirtualEnvs()
    ctx = GitDepsContext.for_test(venvs=venvs, pip=pip, cwd=project_dir)

    result = CliRunner().invoke(cli, [], obj=ctx)

    assert result.exit_code == 0, result.output
    assert pip.calls == [
        ("upgrade", "requests>=2.28.0"),
        ("uninstall", "pkgA"),
        ("cache_remove", "pkgA"),
        ("force_install", "git+ssh://git@host/org/pkgA.git"),
        ("uninstall", "pkgB"),
        ("cache_remove", "pkgB"),
        ("force_install", "git+ssh://git@host/group/pkgB.git"),
        ("list", ""),
    ]
    assert venvs.created == [project_dir / ".venv"]
    assert "Virtual environment created" in result.output
    assert "All git dependencies updated successfully!" in result.output
    assert "packages installed" in result.output


def test_update_flow_twice_yields_same_listing(
    project_dir: Path, write_manifest: Callable[..., Path]
) -> None:
    write_manifest(*MANIFEST)
    pip = FakePip(
        installed={"pkgA": "0.1.0", "requests": "2.28.0"},
        distribution_names={
            "requests>=2.28.0": "requests",
            "git+ssh://git@host/org/pkgA.git": "pkgA",
            "git+ssh://git@host/group/pkgB.git": "pkgB",
        },
    )
    ctx = GitDepsContext.for_test(pip=pip, cwd=project_dir)
    runner = CliRunner()

    first = runner.invoke(cli, [], obj=ctx)
    first_listing = pip.list_installed()
    second = runner.invoke(cli, [], obj=ctx)
    second_listing = pip.list_installed()

    assert first.exit_code == 0, first.output
    assert second.exit_code == 0, second.output
    assert first_listing == second_listing
    assert [p.name for p in second_listing] == ["pkgA", "pkgB", "requests"]
    assert "Virtual environment detected" in second.output


def test_missing_manifest_exits_without_pip_calls(project_dir: Path) -> None:
    pip = FakePip()
    venvs = FakeVirtualEnvs()
    ctx = GitDepsContext.for_test(venvs=venvs, pip=pip, cwd=project_dir)

    result = CliRunner().invoke(cli, [], obj=ctx)

    assert result.exit_code == 1
    assert "Error: " in result.output
    assert "requirements.txt not found" in result.output
    assert pip.calls == []
    assert venvs.created == []


def test_update_runs_in_local_environment_when_another_is_active(
    project_dir: Path, write_manifest: Callable[..., Path]
) -> None:
    write_manifest("requests")
    pip = FakePip()
    ctx = GitDepsContext.for_test(
        pip=pip, cwd=project_dir, base_env={"VIRTUAL_ENV": "/somewhere/else"}
    )

    result = CliRunner().invoke(cli, [], obj=ctx)

    assert result.exit_code == 0, result.output
    assert f"Virtual environment created: {(project_dir / '.venv').resolve()}" in result.output
    assert pip.calls == [("upgrade", "requests"), ("list", "")]


def test_manifest_with_byte_order_mark_skips_leading_comment(project_dir: Path) -> None:
    (project_dir / "requirements.txt").write_text("# deps\nrequests\n", encoding="utf-8-sig")
    pip = FakePip()
    ctx = GitDepsContext.for_test(pip=pip, cwd=project_dir)

    result = CliRunner().invoke(cli, [], obj=ctx)

    assert result.exit_code == 0, result.output
    assert pip.calls == [("upgrade", "requests"), ("list", "")]


def test_install_failure_aborts_with_exit_code_1(
    project_dir: Path, write_manifest: Callable[..., Path]
) -> None:
    write_manifest("git+ssh://host/broken.git", "requests")
    pip = FakePip(failing_installs={"git+ssh://host/broken.git"})
    ctx = GitDepsContext.for_test(pip=pip, cwd=project_dir)

    result = CliRunner().invoke(cli, [], obj=ctx)

    assert result.exit_code == 1
    assert "Failed to install git+ssh://host/broken.git" in result.output
    assert ("upgrade", "requests") not in pip.calls
    assert ("list", "") not in pip.calls


def test_listing_failure_still_succeeds(
    project_dir: Path, write_manifest: Callable[..., Path]
) -> None:
    write_manifest("requests")
    ctx = GitDepsContext.for_test(pip=FakePip(list_error="no listing"), cwd=project_dir)

    result = CliRunner().invoke(cli, [], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "Could not list installed packages" in result.output


def test_dry_run_does_not_change_packages(
    project_dir: Path, write_manifest: Callable[..., Path]
) -> None:
    write_manifest(*MANIFEST)
    pip = FakePip(installed={"pkgA": "0.1.0"})
    ctx = GitDepsContext.for_test(pip=pip, cwd=project_dir)

    result = CliRunner().invoke(cli, ["--dry-run"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "DRY RUN MODE" in result.output
    assert pip.calls == [("list", "")]
    assert pip.installed == {"pkgA": "0.1.0"}


def test_custom_manifest_name_from_config(
    project_dir: Path, write_manifest: Callable[..., Path]
) -> None:
    write_manifest("click", name="deps.txt")
    pip = FakePip()
    ctx = GitDepsContext.for_test(
        pip=pip, cwd=project_dir, config=GitDepsConfig(manifest="deps.txt")
    )

    result = CliRunner().invoke(cli, [], obj=ctx)

    assert result.exit_code == 0, result.output
    assert ("upgrade", "click") in pip.calls


def test_help_exits_zero() -> None:
    for flag in ("-h", "--help"):
        result = CliRunner().invoke(cli, [flag])

        assert result.exit_code == 0
        assert "Usage:" in result.output
        assert "--register" in result.output


def test_unknown_option_prints_error_and_usage() -> None:
    result = CliRunner().invoke(cli, ["--bogus"], obj=GitDepsContext.for_test())

    assert result.exit_code == 1
    assert "Error: " in result.output
    assert "--bogus" in result.output
    assert "Usage:" in result.output


def test_unexpected_argument_exits_one() -> None:
    result = CliRunner().invoke(cli, ["upgrade"], obj=GitDepsContext.for_test())

    assert result.exit_code == 1
    assert "Usage:" in result.output


def test_register_and_unregister_together_is_an_error(tmp_path: Path) -> None:
    ctx = GitDepsContext.for_test(config=GitDepsConfig(bin_dir=tmp_path))

    result = CliRunner().invoke(cli, ["--register", "--unregister"], obj=ctx)

    assert result.exit_code == 1
    assert "cannot be used together" in result.output


def test_register_then_unregister_round_trip(tmp_path: Path) -> None:
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    tool = tmp_path / "venv" / "update-git-deps"
    tool.parent.mkdir()
    tool.write_text("#!/bin/sh\n", encoding="utf-8")
    tool.chmod(0o755)
    ctx = GitDepsContext.for_test(config=GitDepsConfig(bin_dir=bin_dir), argv0=str(tool))
    runner = CliRunner()

    registered = runner.invoke(cli, ["--register"], obj=ctx)

    link = bin_dir / "update-git-deps"
    assert registered.exit_code == 0, registered.output
    assert link.is_symlink()
    assert link.resolve() == tool.resolve()

    unregistered = runner.invoke(cli, ["--unregister"], obj=ctx)

    assert unregistered.exit_code == 0, unregistered.output
    assert not link.is_symlink()
    assert not link.exists()


def test_uninstall_alias_without_registration_is_noop(tmp_path: Path) -> None:
    ctx = GitDepsContext.for_test(config=GitDepsConfig(bin_dir=tmp_path))

    result = CliRunner().invoke(cli, ["--uninstall"], obj=ctx)

    assert result.exit_code == 0
    assert "already removed" in result.output


def test_register_without_permission_prints_sudo_command(tmp_path: Path) -> None:
    tool = tmp_path / "tool"
    tool.write_text("#!/bin/sh\n", encoding="utf-8")
    tool.chmod(0o755)
    ctx = GitDepsContext.for_test(
        config=GitDepsConfig(bin_dir=tmp_path / "missing"), argv0=str(tool)
    )

    result = CliRunner().invoke(cli, ["--register"], obj=ctx)

    assert result.exit_code == 0
    assert "sudo ln -sf" in result.output
    assert "alias update-git-deps=" in result.output


def test_register_from_module_entry_without_console_script_refuses(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    main_module = tmp_path / "gitdeps" / "__main__.py"
    main_module.parent.mkdir()
    main_module.write_text("", encoding="utf-8")
    monkeypatch.setenv("PATH", str(tmp_path / "gitdeps"))
    ctx = GitDepsContext.for_test(config=GitDepsConfig(bin_dir=bin_dir), argv0=str(main_module))

    result = CliRunner().invoke(cli, ["--register"], obj=ctx)

    assert result.exit_code == 1
    assert "Cannot find an executable update-git-deps to register" in result.output
    assert not (bin_dir / "update-git-deps").is_symlink()
