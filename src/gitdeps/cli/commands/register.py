"""Register and unregister the tool as a global command."""

from gitdeps.cli.ensure import Ensure
from gitdeps.core.context import GitDepsContext
from gitdeps.core.registration import (
    RegistrationResult,
    register_command,
    resolve_invocation_path,
    unregister_command,
)


def register_workflow(ctx: GitDepsContext) -> RegistrationResult:
    command_name = ctx.config.command_name
    target = Ensure.not_none(
        resolve_invocation_path(ctx.argv0, command_name),
        f"Cannot find an executable {command_name} to register\n"
        f"Install the package so the {command_name} script is on PATH, then run "
        f"'{command_name} --register'",
    )
    return register_command(target, ctx.config.bin_dir, command_name)


def unregister_workflow(ctx: GitDepsContext) -> RegistrationResult:
    return unregister_command(ctx.config.bin_dir, ctx.config.command_name)
