"""Production Git implementation using subprocess."""

import logging
from pathlib import Path

from pack.core.errors import GitUpdateError
from pack.core.git.abc import Git
from pack.core.subprocess import run_subprocess_with_context

logger = logging.getLogger(__name__)


class RealGit(Git):
    """Production implementation using subprocess.

    All git operations execute actual git commands via subprocess.
    """

    def update(self, name: str, path: Path) -> None:
        if not (path / ".git").exists():
            raise GitUpdateError(name, "not a git repository")

        logger.debug("Pulling %s in %s", name, path)
        try:
            run_subprocess_with_context(
                ["git", "pull", "--ff-only", "--quiet"],
                operation_context=f"pull '{name}'",
                cwd=path,
            )
            run_subprocess_with_context(
                ["git", "submodule", "update", "--init", "--recursive", "--quiet"],
                operation_context=f"update submodules of '{name}'",
                cwd=path,
            )
        except RuntimeError as e:
            raise GitUpdateError(name, str(e)) from e
