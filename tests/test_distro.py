"""Tests for distribution detection."""

from __future__ import annotations

from pathlib import Path

import pytest

from moxiu_installer.errors import UnsupportedDistro
from moxiu_installer.lib import distro as distro_mod
from moxiu_installer.lib.distro import detect_distro


def test_arch(tmp_path: Path) -> None:
    (tmp_path / "arch-release").write_text("")
    d = detect_distro(tmp_path)
    assert (d.name, d.package_manager) == ("arch", "pacman")
    assert d.is_arch and not d.is_gentoo


def test_gentoo_release_file(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setattr(distro_mod, "command_exists", lambda name: False)
    (tmp_path / "gentoo-release").write_text("Gentoo Base System release 2.14")
    d = detect_distro(tmp_path)
    assert (d.name, d.package_manager) == ("gentoo", "portage")


def test_gentoo_by_emerge(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setattr(distro_mod, "command_exists", lambda name: name == "emerge")
    assert detect_distro(tmp_path).is_gentoo


def test_unsupported(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setattr(distro_mod, "command_exists", lambda name: False)
    with pytest.raises(UnsupportedDistro):
        detect_distro(tmp_path)
