"""Tests for YAML config loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from moxiu_installer import config
from moxiu_installer.config import DEFAULT_EXCLUDE, DEFAULT_FISH_PATHS, InstallerConfig, load_config
from moxiu_installer.errors import ConfigError


def test_defaults_when_no_config_file(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    cfg = load_config(None)
    assert cfg.path is None
    assert cfg.link_exclude == DEFAULT_EXCLUDE
    assert cfg.relative_links is True
    assert cfg.fish_paths == list(DEFAULT_FISH_PATHS)
    assert cfg.dotfiles_dir is None
    assert cfg.log_path is None


def test_default_location_is_picked_up(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    p = tmp_path / "moxiu-installer" / "config.yaml"
    p.parent.mkdir()
    p.write_text("links:\n  relative: false\n", encoding="utf-8")

    cfg = load_config(None)

    assert cfg.path == str(p)
    assert cfg.relative_links is False


def test_explicit_config_overrides(tmp_path: Path) -> None:
    p = tmp_path / "config.yaml"
    p.write_text(
        "dotfiles_dir: /srv/dots\n"
        "log_path: /tmp/moxiu.log\n"
        "links:\n"
        "  exclude: [.gitignore, LICENSE]\n"
        "fish_paths: [/opt/fish/bin/fish]\n",
        encoding="utf-8",
    )

    cfg = load_config(str(p))

    assert cfg.dotfiles_dir == "/srv/dots"
    assert cfg.log_path == "/tmp/moxiu.log"
    assert cfg.link_exclude == DEFAULT_EXCLUDE | {".gitignore", "LICENSE"}
    assert cfg.fish_paths == ["/opt/fish/bin/fish"]


def test_missing_explicit_config_is_an_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_config(str(tmp_path / "absent.yaml"))


@pytest.mark.parametrize("text", ["- just\n- a list\n", "key: [unclosed\n"])
def test_bad_documents_are_rejected(tmp_path: Path, text: str) -> None:
    p = tmp_path / "config.yaml"
    p.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(str(p))


def test_exclude_must_be_a_list() -> None:
    cfg = InstallerConfig(raw={"links": {"exclude": "README.md"}})
    with pytest.raises(ConfigError):
        _ = cfg.link_exclude


def test_default_dotfiles_dir_is_the_checkout(tmp_path: Path, monkeypatch) -> None:
    checkout = tmp_path / "checkout"
    (checkout / "configs").mkdir(parents=True)
    monkeypatch.setattr(config, "__file__", str(checkout / "moxiu_installer" / "config.py"))

    assert config.default_dotfiles_dir() == checkout.resolve()


def test_default_dotfiles_dir_falls_back_to_cwd(tmp_path: Path, monkeypatch) -> None:
    """A site-packages install has no configs/ beside it."""
    site = tmp_path / "site-packages"
    work = tmp_path / "dotfiles"
    work.mkdir()
    monkeypatch.setattr(config, "__file__", str(site / "moxiu_installer" / "config.py"))
    monkeypatch.chdir(work)

    assert config.default_dotfiles_dir() == Path.cwd()
