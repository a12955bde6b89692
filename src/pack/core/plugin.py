"""Plugin value type and job outcomes."""

from dataclasses import dataclass
from pathlib import Path

DEFAULT_CATEGORY = "default"


def short_name(name: str) -> str:
    """Return the directory name for a plugin.

    Example:
        >>> short_name("tpope/vim-fugitive")
        'vim-fugitive'
    """
    return name.rstrip("/").rsplit("/", maxsplit=1)[-1]


@dataclass(frozen=True)
class Plugin:
    """A declared plugin and where it is installed.

    Attributes:
        name: Identifier as written in the packfile (e.g. "tpope/vim-fugitive")
        root: The Vim config directory the plugin is installed under
        category: Package category directory under <root>/pack/
        opt: True if the plugin lives in opt/ (loaded on demand)
        local: True for local-only plugins with no remote to pull from
    """

    name: str
    root: Path
    category: str = DEFAULT_CATEGORY
    opt: bool = False
    local: bool = False

    @property
    def path(self) -> Path:
        """Install directory, derived from the name only."""
        kind = "opt" if self.opt else "start"
        return self.root / "pack" / self.category / kind / short_name(self.name)


@dataclass(frozen=True)
class Success:
    name: str


@dataclass(frozen=True)
class Skipped:
    name: str
    reason: str


@dataclass(frozen=True)
class Failed:
    name: str
    cause: str


JobOutcome = Success | Skipped | Failed


def sort_by_name(plugins: list[Plugin]) -> list[Plugin]:
    """Return plugins in canonical (name ascending) order."""
    return sorted(plugins, key=lambda p: p.name)
