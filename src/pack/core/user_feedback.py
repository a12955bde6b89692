"""User-facing diagnostic output."""

from abc import ABC, abstractmethod

import click

from pack.cli.output import user_output


class UserFeedback(ABC):
    """Provides user-facing diagnostic output.

    Implementations must be safe to call from several worker threads at
    once: each call produces exactly one line and lines never interleave.

    Usage:
        ctx.feedback.info("Skip vim-fugitive: not installed")
        ctx.feedback.success("Updated vim-fugitive")
        ctx.feedback.error("Error vim-fugitive: merge conflict")
    """

    @abstractmethod
    def info(self, message: str) -> None:
        """Show informational message."""

    @abstractmethod
    def success(self, message: str) -> None:
        """Show success message."""

    @abstractmethod
    def error(self, message: str) -> None:
        """Show error message."""


class InteractiveFeedback(UserFeedback):
    """Feedback written to stderr with click styling."""

    def info(self, message: str) -> None:
        user_output(message)

    def success(self, message: str) -> None:
        user_output(click.style(message, fg="green"))

    def error(self, message: str) -> None:
        user_output(click.style(message, fg="red"))
