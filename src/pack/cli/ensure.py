"""CLI error handling utilities with styled output.

Ensure asserts invariants in CLI commands. Failures print a red "Error:"
line and exit with status 1, before any work has started.
"""

import click

from pack.cli.output import user_output


class Ensure:
    """Helper class for asserting invariants with consistent error handling."""

    @staticmethod
    def invariant(condition: bool, error_message: str) -> None:
        """Ensure condition is true, otherwise output styled error and exit.

        Args:
            condition: Boolean condition to check
            error_message: Error message to display if condition is false.
                          "Error: " prefix will be added automatically in red.

        Raises:
            SystemExit: If condition is false (with exit code 1)
        """
        if not condition:
            user_output(click.style("Error: ", fg="red") + error_message)
            raise SystemExit(1)

    @staticmethod
    def positive_int(value: int, error_message: str) -> int:
        """Ensure value is at least 1, otherwise output styled error and exit.

        Returns:
            The value unchanged if positive

        Raises:
            SystemExit: If value is less than 1 (with exit code 1)
        """
        Ensure.invariant(value >= 1, error_message)
        return value
