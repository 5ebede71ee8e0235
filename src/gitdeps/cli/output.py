"""Output utilities for CLI commands with clear intent.

user_output() writes human-facing progress and diagnostics to stderr so that
stdout stays reserved for the installed-package listing.
"""

import click


def user_output(message: str = "", nl: bool = True) -> None:
    """Write a user-facing message to stderr."""
    click.echo(message, err=True, nl=nl)


def styled_error(message: str) -> str:
    return click.style("Error: ", fg="red") + message


def styled_warning(message: str) -> str:
    return click.style("Warning: ", fg="yellow") + message
