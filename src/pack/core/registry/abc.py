"""Plugin registry interface."""

from abc import ABC, abstractmethod

from pack.core.plugin import Plugin


class Registry(ABC):
    """Abstract interface over the store of declared plugins.

    The registry is read once at the start of a command and rewritten
    wholesale at the end. It is never touched while a batch is running.
    """

    @abstractmethod
    def fetch(self) -> list[Plugin]:
        """Load all declared plugins.

        Returns:
            Freshly constructed Plugin values, in declaration order

        Raises:
            RegistryError: If the packfile cannot be read or is invalid
        """
        ...

    @abstractmethod
    def persist(self, plugins: list[Plugin]) -> None:
        """Rewrite the packfile and regenerate the combined config.

        Args:
            plugins: Full plugin list in the order it should be written

        Raises:
            RegistryError: If any file cannot be written
        """
        ...
