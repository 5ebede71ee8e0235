"""Apply the update action for each classified manifest entry.

Git-sourced entries are uninstalled, purged from pip's wheel cache and
reinstalled from scratch, since `pip install --upgrade` does not notice new
commits behind an unchanged version number. Registry entries are upgraded in
place.

Uninstall and cache-clear never abort the run. The first failed install
raises InstallationFailure and the remaining entries are left untouched.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

import click

from gitdeps.cli.output import styled_warning, user_output
from gitdeps.core.manifest import DependencyEntry
from gitdeps.core.pip.abc import Pip
from gitdeps.core.pip.types import BenignStatus, PipOutcome

logger = logging.getLogger(__name__)


@dataclass
class UpdateSummary:
    git_updated: list[DependencyEntry] = field(default_factory=list)
    registry_updated: list[DependencyEntry] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.git_updated) + len(self.registry_updated)


def _tolerate(outcome: PipOutcome, action: str, name: str, summary: UpdateSummary) -> None:
    if outcome.status == BenignStatus.ABSENT:
        logger.debug("%s %s: nothing to do (%s)", action, name, outcome.detail)
        return
    if not outcome.ok:
        message = f"{action} {name} failed, continuing"
        if outcome.detail:
            message += f"\n{outcome.detail}"
        user_output(styled_warning(message))
        summary.warnings.append(message)


def update_git_dependency(pip: Pip, entry: DependencyEntry, summary: UpdateSummary) -> None:
    name = entry.display_name
    user_output(click.style(f"🔄 Updating {name} from {entry.source_locator}", fg="blue"))

    user_output(click.style(f"  Uninstalling {name}...", fg="yellow"))
    _tolerate(pip.uninstall(name), "Uninstalling", name, summary)

    user_output(click.style("  Clearing pip cache...", fg="yellow"))
    _tolerate(pip.cache_remove(name), "Clearing cache for", name, summary)

    user_output(click.style("  Installing latest version from git...", fg="yellow"))
    pip.force_install(entry.source_locator)

    user_output(click.style(f"✅ Successfully updated {name}", fg="green"))
    summary.git_updated.append(entry)


def update_registry_dependency(pip: Pip, entry: DependencyEntry, summary: UpdateSummary) -> None:
    user_output(click.style(f"🔄 Updating {entry.source_locator}...", fg="blue"))
    pip.upgrade(entry.source_locator)
    user_output(click.style(f"✅ Successfully updated {entry.source_locator}", fg="green"))
    summary.registry_updated.append(entry)


def update_dependencies(entries: Iterable[DependencyEntry], pip: Pip) -> UpdateSummary:
    """Update every entry in manifest order.

    Args:
        entries: Classified entries, typically the lazy iter_dependencies() stream
        pip: Package operations bound to the active environment

    Returns:
        UpdateSummary of what was updated and which benign steps failed

    Raises:
        InstallationFailure: On the first install or upgrade pip rejects
        PackageManagerNotFound: If pip cannot be executed at all
    """
    summary = UpdateSummary()
    for entry in entries:
        logger.debug("Updating line %d: %s", entry.line_number, entry.source_locator)
        if entry.is_git:
            update_git_dependency(pip, entry, summary)
        else:
            update_registry_dependency(pip, entry, summary)
        user_output()
    return summary
