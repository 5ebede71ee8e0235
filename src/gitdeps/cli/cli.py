import dataclasses
import logging
import os
import sys

import click

from gitdeps import __version__
from gitdeps.cli.commands.register import register_workflow, unregister_workflow
from gitdeps.cli.commands.update import update_workflow
from gitdeps.cli.ensure import Ensure
from gitdeps.cli.error_boundary import cli_error_boundary
from gitdeps.cli.output import styled_error, user_output
from gitdeps.core.context import GitDepsContext, create_context

# Enable debug logging if GITDEPS_DEBUG environment variable is set
if os.getenv("GITDEPS_DEBUG"):
    logging.basicConfig(level=logging.DEBUG, format="[DEBUG %(name)s:%(lineno)d] %(message)s")

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags


class DirectiveCommand(click.Command):
    """Command whose usage errors print the full help and exit with status 1."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            user_output(styled_error(e.format_message()))
            user_output()
            user_output(ctx.get_help())
            ctx.exit(1)


@click.command(name="update-git-deps", cls=DirectiveCommand, context_settings=CONTEXT_SETTINGS)
@click.option(
    "--register",
    is_flag=True,
    help="Register this tool as the global command 'update-git-deps'.",
)
@click.option(
    "--unregister",
    "--uninstall",
    "unregister",
    is_flag=True,
    help="Remove the global command 'update-git-deps'.",
)
@click.option(
    "--dry-run",
    is_flag=True,
    help="Show what would be updated without changing installed packages.",
)
@click.version_option(version=__version__, prog_name="update-git-deps")
@click.pass_context
@cli_error_boundary
def cli(ctx: click.Context, register: bool, unregister: bool, dry_run: bool) -> None:
    """Update git-based Python dependencies by forcing reinstallation.

    Reads requirements.txt in the current directory. Packages installed from
    git+ssh:// or git+https:// locators are uninstalled, purged from pip's cache
    and reinstalled so the latest commit is fetched; every other requirement is
    upgraded in place. The local .venv is created if it does not exist.

    \b
    Before running:
      1. Ensure you have SSH access to the git repositories
      2. Run from the directory containing requirements.txt

    \b
    Examples:
      # Register globally
      update-git-deps --register

    \b
      # Use after registration
      cd /path/to/your/project
      update-git-deps
    """
    Ensure.invariant(
        not (register and unregister),
        "--register and --unregister cannot be used together",
    )

    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        ctx.obj = create_context(dry_run=dry_run, argv0=sys.argv[0])
    elif dry_run and not ctx.obj.dry_run:
        ctx.obj = dataclasses.replace(ctx.obj, dry_run=True)

    gitdeps_ctx: GitDepsContext = ctx.obj

    if register:
        register_workflow(gitdeps_ctx)
        return

    if unregister:
        unregister_workflow(gitdeps_ctx)
        return

    try:
        update_workflow(gitdeps_ctx)
    except KeyboardInterrupt:
        user_output("\n✗ Interrupted by user")
        raise SystemExit(130) from None


def main() -> None:
    """CLI entry point used by the `update-git-deps` console script."""
    cli()
