"""Filesystem-backed plugin registry.

Layout under the Vim config directory:

    .pack/packfile.toml                        declared plugins
    .pack/config/<short name>.vim              per-plugin config snippets
    pack/pack/start/_pack/plugin/_pack.vim     generated combined config
"""

import logging
import tomllib
from pathlib import Path

import tomlkit
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from pack.core.errors import RegistryError
from pack.core.plugin import DEFAULT_CATEGORY, Plugin, short_name
from pack.core.registry.abc import Registry

logger = logging.getLogger(__name__)

PACKFILE_HEADER = "Generated by pack. Edit with care: `pack update` rewrites this file."
COMBINED_CONFIG_HEADER = '" Generated by pack. Do not edit.'


class PackfileEntry(BaseModel):
    """One [[plugin]] table in the packfile."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    category: str = DEFAULT_CATEGORY
    opt: bool = False
    local: bool = False

    @field_validator("name", "category")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v.strip():
            msg = "must not be empty"
            raise ValueError(msg)
        return v.strip()


class Packfile(BaseModel):
    """Complete packfile structure."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    plugin: list[PackfileEntry] = Field(default_factory=list)

    @field_validator("plugin")
    @classmethod
    def validate_unique_names(cls, v: list[PackfileEntry]) -> list[PackfileEntry]:
        # Install directories and config snippets are keyed by short name,
        # so two plugins may not share one.
        seen: set[str] = set()
        by_short_name: dict[str, str] = {}
        for entry in v:
            if entry.name in seen:
                msg = f"duplicate plugin '{entry.name}'"
                raise ValueError(msg)
            seen.add(entry.name)

            short = short_name(entry.name)
            other = by_short_name.get(short)
            if other is not None:
                msg = f"plugins '{other}' and '{entry.name}' share the directory name '{short}'"
                raise ValueError(msg)
            by_short_name[short] = entry.name
        return v


def format_validation_error(error: ValidationError) -> str:
    """Render a pydantic ValidationError as one line.

    Example:
        plugin.0.name: Value error, must not be empty; plugin.1: Field required
    """
    parts = []
    for err in error.errors():
        loc = ".".join(str(part) for part in err["loc"])
        parts.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "; ".join(parts)


class FilesystemRegistry(Registry):
    """Production registry that reads and writes files under vim_dir."""

    def __init__(self, vim_dir: Path) -> None:
        self._vim_dir = vim_dir

    @property
    def packfile_path(self) -> Path:
        return self._vim_dir / ".pack" / "packfile.toml"

    @property
    def config_dir(self) -> Path:
        return self._vim_dir / ".pack" / "config"

    @property
    def combined_config_path(self) -> Path:
        return self._vim_dir / "pack" / "pack" / "start" / "_pack" / "plugin" / "_pack.vim"

    def fetch(self) -> list[Plugin]:
        path = self.packfile_path
        if not path.exists():
            logger.debug("No packfile at %s, registry is empty", path)
            return []

        try:
            data = tomllib.loads(path.read_text(encoding="utf-8"))
        except OSError as e:
            raise RegistryError(f"Cannot read {path}: {e}") from e
        except UnicodeDecodeError as e:
            raise RegistryError(f"Cannot decode {path} as UTF-8: {e}") from e
        except tomllib.TOMLDecodeError as e:
            raise RegistryError(f"Invalid TOML in {path}: {e}") from e

        try:
            packfile = Packfile.model_validate(data)
        except ValidationError as e:
            raise RegistryError(f"Invalid packfile {path}: {format_validation_error(e)}") from e

        return [
            Plugin(
                name=entry.name,
                root=self._vim_dir,
                category=entry.category,
                opt=entry.opt,
                local=entry.local,
            )
            for entry in packfile.plugin
        ]

    def persist(self, plugins: list[Plugin]) -> None:
        try:
            self._write_packfile(plugins)
            self._write_combined_config(plugins)
        except OSError as e:
            raise RegistryError(f"Cannot write registry: {e}") from e
        except UnicodeDecodeError as e:
            raise RegistryError(f"Cannot decode config snippet as UTF-8: {e}") from e

    def _write_packfile(self, plugins: list[Plugin]) -> None:
        doc = tomlkit.document()
        doc.add(tomlkit.comment(PACKFILE_HEADER))

        tables = tomlkit.aot()
        for plugin in plugins:
            table = tomlkit.table()
            table["name"] = plugin.name
            # Only non-default values are written
            if plugin.category != DEFAULT_CATEGORY:
                table["category"] = plugin.category
            if plugin.opt:
                table["opt"] = True
            if plugin.local:
                table["local"] = True
            tables.append(table)
        doc["plugin"] = tables

        self.packfile_path.parent.mkdir(parents=True, exist_ok=True)
        self.packfile_path.write_text(tomlkit.dumps(doc), encoding="utf-8")

    def _write_combined_config(self, plugins: list[Plugin]) -> None:
        lines = [COMBINED_CONFIG_HEADER]
        for plugin in plugins:
            snippet = self.config_dir / f"{short_name(plugin.name)}.vim"
            if not snippet.is_file():
                continue
            lines.append("")
            lines.append(f'" {plugin.name}')
            lines.append(snippet.read_text(encoding="utf-8").rstrip("\n"))

        target = self.combined_config_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text("\n".join(lines) + "\n", encoding="utf-8")
        logger.debug("Wrote combined config for %d plugins to %s", len(plugins), target)
