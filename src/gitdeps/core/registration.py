"""Global command registration via a symlink in a shared bin directory.

When the bin directory is not writable, nothing is changed; the privileged
command (and a shell alias alternative) is printed for the user to run.
"""

import logging
import os
import shutil
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import click

from gitdeps.cli.output import styled_warning, user_output

logger = logging.getLogger(__name__)


class RegistrationStatus(Enum):
    LINKED = "linked"
    REMOVED = "removed"
    ABSENT = "absent"
    MANUAL = "manual"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class RegistrationResult:
    status: RegistrationStatus
    link_path: Path
    manual_commands: tuple[str, ...] = ()


def _is_executable_file(path: Path) -> bool:
    return path.is_file() and os.access(path, os.X_OK)


def resolve_invocation_path(argv0: str, command_name: str) -> Path | None:
    """Resolve the executable a global link should point at.

    Bare command names (as run from PATH) are looked up with shutil.which first.
    When argv0 is not itself executable (e.g. `python -m gitdeps` reports the
    package's __main__.py), the installed console script is looked up by
    command_name instead. Returns None when neither resolves.
    """
    candidate = argv0
    if os.sep not in argv0:
        found = shutil.which(argv0)
        if found is not None:
            candidate = found
    path = Path(candidate).expanduser().resolve()
    if _is_executable_file(path):
        return path

    logger.debug("%s is not executable, looking up %s on PATH", path, command_name)
    script = shutil.which(command_name)
    if script is None:
        return None
    return Path(script).resolve()


def _is_writable_dir(path: Path) -> bool:
    return path.is_dir() and os.access(path, os.W_OK)


def register_command(target: Path, bin_dir: Path, command_name: str) -> RegistrationResult:
    """Link bin_dir/command_name to target, like `ln -sf`."""
    link_path = bin_dir / command_name
    user_output(f"🔧 Registering {command_name} command globally...")

    if not _is_writable_dir(bin_dir):
        manual = (
            f"sudo ln -sf '{target}' {link_path}",
            f"alias {command_name}='{target}'",
        )
        admin_notice = "🔐 Administrator rights are required to register the command:"
        user_output(click.style(admin_notice, fg="yellow"))
        user_output(manual[0])
        user_output()
        user_output(click.style("Or add this command to your ~/.bashrc:", fg="yellow"))
        user_output(manual[1])
        return RegistrationResult(RegistrationStatus.MANUAL, link_path, manual)

    if link_path.is_symlink() or link_path.exists():
        logger.debug("Replacing existing %s", link_path)
        link_path.unlink()
    link_path.symlink_to(target)

    user_output(click.style(f"✅ {command_name} command successfully registered!", fg="green"))
    user_output(click.style(f"💡 Now you can use '{command_name}' from any folder", fg="blue"))
    return RegistrationResult(RegistrationStatus.LINKED, link_path)


def unregister_command(bin_dir: Path, command_name: str) -> RegistrationResult:
    """Remove bin_dir/command_name; an absent link is a successful no-op."""
    link_path = bin_dir / command_name

    if not link_path.is_symlink():
        if link_path.exists():
            notice = f"{link_path} is not a symlink created by {command_name}, leaving it"
            user_output(styled_warning(notice))
            return RegistrationResult(RegistrationStatus.SKIPPED, link_path)
        user_output(click.style("⚠️ Global command not found or already removed", fg="yellow"))
        return RegistrationResult(RegistrationStatus.ABSENT, link_path)

    if not _is_writable_dir(bin_dir):
        manual = (f"sudo rm -f {link_path}",)
        admin_notice = "🔐 Administrator rights are required to remove the command:"
        user_output(click.style(admin_notice, fg="yellow"))
        user_output(manual[0])
        return RegistrationResult(RegistrationStatus.MANUAL, link_path, manual)

    link_path.unlink()
    removed_notice = f"✅ Successfully uninstalled global command: {command_name}"
    user_output(click.style(removed_notice, fg="green"))
    return RegistrationResult(RegistrationStatus.REMOVED, link_path)
