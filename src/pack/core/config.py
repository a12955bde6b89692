"""Global configuration data structures and loading.

Provides immutable config data loaded from ~/.pack/config.toml once at the
CLI entry point. A missing file means all defaults.
"""

import os
import tomllib
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from pack.core.errors import ConfigError


def default_vim_dir() -> Path:
    """Vim config directory: $VIM_CONFIG_PATH if set, else ~/.vim."""
    env_dir = os.environ.get("VIM_CONFIG_PATH")
    if env_dir:
        return Path(env_dir).expanduser()
    return Path.home() / ".vim"


@dataclass(frozen=True)
class PackConfig:
    """Immutable global configuration data.

    Attributes:
        vim_dir: Vim config directory holding pack/ and .pack/
        threads: Default worker count, None to use the CPU count
    """

    vim_dir: Path
    threads: int | None = None

    @staticmethod
    def defaults() -> "PackConfig":
        return PackConfig(vim_dir=default_vim_dir(), threads=None)


class ConfigStore(ABC):
    """Abstract interface for global config access.

    Enables in-memory implementations for tests without touching filesystem.
    """

    @abstractmethod
    def exists(self) -> bool:
        """Check if global config exists."""
        ...

    @abstractmethod
    def load(self) -> PackConfig:
        """Load global config, falling back to defaults when absent.

        Raises:
            ConfigError: If config is unreadable or has invalid values
        """
        ...

    @abstractmethod
    def path(self) -> Path:
        """Get the path to the global config file (for error messages)."""
        ...


class FilesystemConfigStore(ConfigStore):
    """Production implementation that reads ~/.pack/config.toml."""

    def exists(self) -> bool:
        return self.path().exists()

    def load(self) -> PackConfig:
        config_path = self.path()
        if not config_path.exists():
            return PackConfig.defaults()

        try:
            data = tomllib.loads(config_path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
            raise ConfigError(f"Cannot load {config_path}: {e}") from e

        vim_dir = data.get("vim_dir")
        if vim_dir is not None and not isinstance(vim_dir, str):
            raise ConfigError(f"'vim_dir' must be a string in {config_path}")

        threads = data.get("threads")
        if threads is not None:
            if isinstance(threads, bool) or not isinstance(threads, int) or threads < 1:
                raise ConfigError(f"'threads' must be a positive integer in {config_path}")

        return PackConfig(
            vim_dir=Path(vim_dir).expanduser() if vim_dir else default_vim_dir(),
            threads=threads,
        )

    def path(self) -> Path:
        return Path.home() / ".pack" / "config.toml"


class InMemoryConfigStore(ConfigStore):
    """Test implementation that stores config in memory."""

    def __init__(self, config: PackConfig | None = None) -> None:
        """Initialize in-memory config store.

        Args:
            config: Stored config (None = config file doesn't exist)
        """
        self._config = config

    def exists(self) -> bool:
        return self._config is not None

    def load(self) -> PackConfig:
        if self._config is None:
            return PackConfig.defaults()
        return self._config

    def path(self) -> Path:
        return Path("/fake/pack/config.toml")
