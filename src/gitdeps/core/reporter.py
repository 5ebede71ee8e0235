"""Installed-package listing shown after a successful update."""

import logging

from rich.console import Console
from rich.table import Table

from gitdeps.cli.output import styled_warning, user_output
from gitdeps.core.pip.abc import Pip
from gitdeps.core.pip.types import InstalledPackage

logger = logging.getLogger(__name__)


def format_installed_table(packages: list[InstalledPackage]) -> Table:
    table = Table(title=f"{len(packages)} packages installed", title_justify="left")
    table.add_column("Package", style="cyan", no_wrap=True)
    table.add_column("Version", style="green", no_wrap=True)
    for package in packages:
        table.add_row(package.name, package.version)
    return table


def report_installed(pip: Pip, console: Console | None = None) -> list[InstalledPackage] | None:
    """Print the environment's installed packages.

    Best effort: a listing failure is shown as a warning and None is returned.
    """
    user_output("📦 Current installed packages:")
    try:
        packages = pip.list_installed()
    except RuntimeError as e:
        logger.debug("Listing failed", exc_info=True)
        user_output(styled_warning(f"Could not list installed packages\n{e}"))
        return None

    if console is None:
        console = Console()
    console.print(format_installed_table(packages))
    return packages
