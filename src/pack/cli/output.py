"""Output utilities for CLI commands.

user_output() is called from worker threads while a batch runs, so every
message is written as one whole line under a shared lock.
"""

import threading

import click
from rich.console import Console
from rich.text import Text

from pack.core.plugin import Failed, JobOutcome, Skipped, Success

_output_lock = threading.Lock()


def user_output(message: str) -> None:
    """Write a user-facing message to stderr.

    Args:
        message: Text to output (may contain click styling)
    """
    with _output_lock:
        click.echo(message, err=True)


def format_update_summary(outcomes: list[JobOutcome]) -> Text:
    """Format the one-line result summary for a batch.

    Example:
        >>> format_update_summary([Success("a"), Failed("b", "boom")]).plain
        '1 updated, 0 skipped, 1 failed'
    """
    updated = sum(1 for o in outcomes if isinstance(o, Success))
    skipped = sum(1 for o in outcomes if isinstance(o, Skipped))
    failed = sum(1 for o in outcomes if isinstance(o, Failed))

    text = Text()
    text.append(f"{updated} updated", style="green" if updated else "")
    text.append(", ")
    text.append(f"{skipped} skipped", style="yellow" if skipped else "")
    text.append(", ")
    text.append(f"{failed} failed", style="red bold" if failed else "")
    return text


def print_update_summary(outcomes: list[JobOutcome], console: Console | None = None) -> None:
    """Print the batch summary after all workers have joined."""
    if console is None:
        console = Console(stderr=True, highlight=False)
    with _output_lock:
        console.print(format_update_summary(outcomes))
