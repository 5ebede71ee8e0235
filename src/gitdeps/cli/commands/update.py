"""Update flow: refresh every dependency declared in the manifest."""

import logging

import click

from gitdeps.cli.output import user_output
from gitdeps.core.context import GitDepsContext
from gitdeps.core.environment import ensure_environment, ensure_manifest
from gitdeps.core.locator import locate_package_manager
from gitdeps.core.manifest import iter_dependencies
from gitdeps.core.reporter import report_installed
from gitdeps.core.updater import UpdateSummary, update_dependencies

logger = logging.getLogger(__name__)


def update_workflow(ctx: GitDepsContext) -> UpdateSummary:
    """Run preconditions, update each manifest entry, then list installed packages.

    Raises:
        ManifestMissing: Before any environment or pip work is done
        WrongEnvironment: If the local environment cannot be activated
        InstallationFailure: On the first failed install; later entries are skipped
    """
    user_output(click.style("🚀 Starting git dependencies update...", fg="blue"))
    if ctx.dry_run:
        user_output("[DRY RUN MODE - No packages will be changed]\n")

    manifest_path = ensure_manifest(ctx.cwd, ctx.config)
    logger.debug("Manifest: %s", manifest_path)

    environment = ensure_environment(ctx.cwd, ctx.config, ctx.venvs, ctx.base_env)
    verb = "created" if environment.created else "detected"
    user_output(click.style(f"✅ Virtual environment {verb}: {environment.root}", fg="green"))

    invocation = locate_package_manager(environment)
    pip = ctx.pip_for(invocation, environment)

    with manifest_path.open(encoding="utf-8-sig") as handle:
        summary = update_dependencies(iter_dependencies(handle, ctx.config.git_schemes), pip)

    logger.debug(
        "Updated: git=%d, registry=%d, warnings=%d",
        len(summary.git_updated),
        len(summary.registry_updated),
        len(summary.warnings),
    )

    report_installed(pip)

    user_output(click.style("🎉 All git dependencies updated successfully!", fg="green"))
    return summary
