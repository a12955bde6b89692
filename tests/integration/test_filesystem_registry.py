"""Tests for the filesystem-backed registry using real files under tmp_path."""

import tomllib
from pathlib import Path

import pytest

from pack.core.errors import RegistryError
from pack.core.plugin import Plugin
from pack.core.registry.real import COMBINED_CONFIG_HEADER, FilesystemRegistry


def _write_packfile(vim_dir: Path, content: str) -> None:
    packfile = vim_dir / ".pack" / "packfile.toml"
    packfile.parent.mkdir(parents=True, exist_ok=True)
    packfile.write_text(content, encoding="utf-8")


def test_fetch_without_packfile_is_empty(tmp_path: Path) -> None:
    assert FilesystemRegistry(tmp_path).fetch() == []


def test_fetch_reads_entries_in_declaration_order(tmp_path: Path) -> None:
    _write_packfile(
        tmp_path,
        """
[[plugin]]
name = "tpope/vim-fugitive"

[[plugin]]
name = "fatih/vim-go"
category = "lang"
opt = true

[[plugin]]
name = "me/notes"
local = true
""",
    )

    plugins = FilesystemRegistry(tmp_path).fetch()

    assert plugins == [
        Plugin(name="tpope/vim-fugitive", root=tmp_path),
        Plugin(name="fatih/vim-go", root=tmp_path, category="lang", opt=True),
        Plugin(name="me/notes", root=tmp_path, local=True),
    ]
    assert plugins[1].path == tmp_path / "pack" / "lang" / "opt" / "vim-go"


def test_fetch_each_call_builds_fresh_plugins(tmp_path: Path) -> None:
    _write_packfile(tmp_path, '[[plugin]]\nname = "a/b"\n')
    registry = FilesystemRegistry(tmp_path)

    first = registry.fetch()
    second = registry.fetch()

    assert first == second
    assert first is not second


@pytest.mark.parametrize(
    ("content", "message"),
    [
        ("[[plugin]\nname = ", "Invalid TOML"),
        ('[[plugin]]\nname = ""\n', "Invalid packfile"),
        ('[[plugin]]\nname = "a"\nbranch = "dev"\n', "Invalid packfile"),
        ('[[plugin]]\nname = "a"\n\n[[plugin]]\nname = "a"\n', "duplicate plugin 'a'"),
        ('[[plugin]]\nopt = true\n', "Invalid packfile"),
        (
            '[[plugin]]\nname = "a/foo"\n\n[[plugin]]\nname = "b/foo"\ncategory = "x"\n',
            "plugins 'a/foo' and 'b/foo' share the directory name 'foo'",
        ),
    ],
)
def test_fetch_rejects_invalid_packfile(tmp_path: Path, content: str, message: str) -> None:
    _write_packfile(tmp_path, content)

    with pytest.raises(RegistryError, match=message):
        FilesystemRegistry(tmp_path).fetch()


def test_persist_rewrites_packfile_in_given_order(tmp_path: Path) -> None:
    registry = FilesystemRegistry(tmp_path)
    plugins = [
        Plugin(name="alpha", root=tmp_path, local=True),
        Plugin(name="fatih/vim-go", root=tmp_path, category="lang", opt=True),
        Plugin(name="zeta", root=tmp_path),
    ]

    registry.persist(plugins)

    data = tomllib.loads(registry.packfile_path.read_text(encoding="utf-8"))
    assert data == {
        "plugin": [
            {"name": "alpha", "local": True},
            {"name": "fatih/vim-go", "category": "lang", "opt": True},
            {"name": "zeta"},
        ]
    }
    assert registry.fetch() == plugins


def test_persist_generates_combined_config(tmp_path: Path) -> None:
    registry = FilesystemRegistry(tmp_path)
    registry.config_dir.mkdir(parents=True)
    (registry.config_dir / "vim-fugitive.vim").write_text("nmap <leader>g :Git<CR>\n")
    (registry.config_dir / "vim-go.vim").write_text("let g:go_fmt_command = 'gopls'\n")
    plugins = [
        Plugin(name="fatih/vim-go", root=tmp_path),
        Plugin(name="junegunn/fzf", root=tmp_path),
        Plugin(name="tpope/vim-fugitive", root=tmp_path),
    ]

    registry.persist(plugins)

    assert registry.combined_config_path == (
        tmp_path / "pack" / "pack" / "start" / "_pack" / "plugin" / "_pack.vim"
    )
    assert registry.combined_config_path.read_text(encoding="utf-8") == (
        f"{COMBINED_CONFIG_HEADER}\n"
        "\n"
        '" fatih/vim-go\n'
        "let g:go_fmt_command = 'gopls'\n"
        "\n"
        '" tpope/vim-fugitive\n'
        "nmap <leader>g :Git<CR>\n"
    )


def test_persist_wraps_write_failures(tmp_path: Path) -> None:
    # A regular file where the .pack directory should be makes mkdir fail
    (tmp_path / ".pack").write_text("not a directory")
    registry = FilesystemRegistry(tmp_path)

    with pytest.raises(RegistryError, match="Cannot write registry"):
        registry.persist([Plugin(name="a", root=tmp_path)])


@pytest.mark.parametrize(
    "content",
    [
        '[[plugin]]\nname = ""\n',
        '[[plugin]]\nname = "a"\nbranch = "dev"\n\n[[plugin]]\nopt = true\n',
    ],
)
def test_fetch_validation_error_is_one_line(tmp_path: Path, content: str) -> None:
    _write_packfile(tmp_path, content)

    with pytest.raises(RegistryError) as exc_info:
        FilesystemRegistry(tmp_path).fetch()

    message = str(exc_info.value)
    assert "\n" not in message
    assert message.startswith("Invalid packfile ")
    assert "plugin.0" in message


def test_fetch_rejects_non_utf8_packfile(tmp_path: Path) -> None:
    packfile = tmp_path / ".pack" / "packfile.toml"
    packfile.parent.mkdir(parents=True)
    packfile.write_bytes(b'[[plugin]]\nname = "\xff\xfe"\n')

    with pytest.raises(RegistryError, match="Cannot decode .* as UTF-8"):
        FilesystemRegistry(tmp_path).fetch()


def test_persist_rejects_non_utf8_config_snippet(tmp_path: Path) -> None:
    registry = FilesystemRegistry(tmp_path)
    registry.config_dir.mkdir(parents=True)
    (registry.config_dir / "vim-go.vim").write_bytes(b"\xff\xfe let g:x = 1\n")

    with pytest.raises(RegistryError, match="Cannot decode config snippet as UTF-8"):
        registry.persist([Plugin(name="fatih/vim-go", root=tmp_path)])
