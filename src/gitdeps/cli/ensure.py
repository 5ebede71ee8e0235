"""CLI invariant checks with styled output.

All errors use the red "Error:" prefix for visual consistency with the error
boundary.
"""

from typing import TypeVar

from gitdeps.cli.output import styled_error, user_output

T = TypeVar("T")


class Ensure:
    """Helper class for asserting invariants with consistent error handling."""

    @staticmethod
    def invariant(condition: bool, error_message: str) -> None:
        """Ensure condition is true, otherwise output styled error and exit.

        Raises:
            SystemExit: If condition is false (with exit code 1)
        """
        if not condition:
            user_output(styled_error(error_message))
            raise SystemExit(1)

    @staticmethod
    def not_none(value: T | None, error_message: str) -> T:
        """Ensure value is not None, otherwise output styled error and exit.

        Narrows `T | None` to `T` for the type checker.

        Raises:
            SystemExit: If value is None (with exit code 1)
        """
        if value is None:
            user_output(styled_error(error_message))
            raise SystemExit(1)
        return value
