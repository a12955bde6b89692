"""Application context with dependency injection."""

from dataclasses import dataclass
from pathlib import Path

from pack.core.config import ConfigStore, FilesystemConfigStore, PackConfig
from pack.core.git.abc import Git
from pack.core.git.real import RealGit
from pack.core.registry.abc import Registry
from pack.core.registry.real import FilesystemRegistry
from pack.core.user_feedback import InteractiveFeedback, UserFeedback


@dataclass(frozen=True)
class PackContext:
    """Immutable context holding all dependencies for pack operations.

    Created at CLI entry point and threaded through the application.
    Frozen to prevent accidental modification at runtime.
    """

    registry: Registry
    git: Git
    feedback: UserFeedback
    config: PackConfig

    @staticmethod
    def for_test(
        registry: Registry | None = None,
        git: Git | None = None,
        feedback: UserFeedback | None = None,
        config: PackConfig | None = None,
    ) -> "PackContext":
        """Create test context with fakes for anything not provided.

        Example:
            >>> registry = FakeRegistry(plugins=[Plugin("a", root=Path("/vim"))])
            >>> ctx = PackContext.for_test(registry=registry)
        """
        from tests.fakes.git import FakeGit
        from tests.fakes.registry import FakeRegistry
        from tests.fakes.user_feedback import FakeUserFeedback

        if registry is None:
            registry = FakeRegistry()

        if git is None:
            git = FakeGit()

        if feedback is None:
            feedback = FakeUserFeedback()

        if config is None:
            config = PackConfig(vim_dir=Path("/test/vim"), threads=None)

        return PackContext(registry=registry, git=git, feedback=feedback, config=config)


def create_context(config_store: ConfigStore | None = None) -> PackContext:
    """Create production context with real implementations.

    Raises:
        ConfigError: If the global config exists but cannot be loaded
    """
    if config_store is None:
        config_store = FilesystemConfigStore()
    config = config_store.load()

    return PackContext(
        registry=FilesystemRegistry(config.vim_dir),
        git=RealGit(),
        feedback=InteractiveFeedback(),
        config=config,
    )
