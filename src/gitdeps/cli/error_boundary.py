"""Error boundary handling for CLI commands.

This module provides a decorator to catch well-known exceptions at the CLI entry
point and display clean error messages without stack traces.
"""

import functools
import logging
from collections.abc import Callable
from typing import Any, TypeVar

from gitdeps.cli.output import styled_error, user_output
from gitdeps.core.errors import GitDepsError

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Callable[..., Any])


def cli_error_boundary(func: T) -> T:
    """Decorator that catches well-known exceptions and displays clean error messages.

    Catches:
        - GitDepsError: ManifestMissing, WrongEnvironment, PackageManagerNotFound,
          InstallationFailure
        - ValueError: Invalid [tool.gitdeps] configuration

    All other exceptions bubble up normally with full stack traces.

    Example:
        @click.command()
        @cli_error_boundary
        def my_command():
            ...
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except GitDepsError as e:
            logger.debug("Exception caught: %s", type(e).__name__, exc_info=True)
            user_output(styled_error(str(e)))
            raise SystemExit(1) from None
        except ValueError as e:
            logger.debug("Exception caught: %s", type(e).__name__, exc_info=True)
            user_output(styled_error(str(e)))
            raise SystemExit(1) from None

    return wrapper  # type: ignore[return-value]
