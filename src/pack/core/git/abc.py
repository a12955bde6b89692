"""Version-control adapter interface.

Architecture:
- Git: Abstract base class defining the interface
- RealGit: Production implementation using subprocess
"""

from abc import ABC, abstractmethod
from pathlib import Path


class Git(ABC):
    """Abstract interface for updating a plugin checkout.

    All implementations (real and fake) must implement this interface.
    Implementations are called concurrently from batch workers, one plugin
    per call, and every call targets a distinct path.
    """

    @abstractmethod
    def update(self, name: str, path: Path) -> None:
        """Bring the checkout at path up to date with its upstream remote.

        Blocks until the update finishes. There is no timeout.

        Args:
            name: Plugin name, used in error messages
            path: Plugin checkout directory

        Raises:
            GitUpdateError: If the path is not a repository or git fails
                (network failure, diverged history, conflicts, ...)
        """
        ...
