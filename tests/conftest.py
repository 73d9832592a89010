from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, List, Tuple

import pytest

from moxiu_installer.config import InstallerConfig
from moxiu_installer.lib.distro import Distro
from moxiu_installer.options import InstallOptions
from moxiu_installer.pipeline import InstallCtx


class ScriptedConfirm:
    """Confirmation capability that always gives the same answer and records prompts."""

    def __init__(self, answer: bool) -> None:
        self.answer = answer
        self.prompts: List[str] = []

    def __call__(self, prompt: str) -> bool:
        self.prompts.append(prompt)
        return self.answer


def snapshot(root: Path) -> Dict[str, Tuple]:
    """Everything below root, without following symlinks."""

    out: Dict[str, Tuple] = {}
    for dirpath, dirnames, filenames in os.walk(root):
        for name in dirnames + filenames:
            p = Path(dirpath) / name
            rel = str(p.relative_to(root))
            if p.is_symlink():
                out[rel] = ("link", os.readlink(p))
            elif p.is_dir():
                out[rel] = ("dir",)
            else:
                out[rel] = ("file", p.read_bytes())
    return out


@pytest.fixture
def dotfiles(tmp_path: Path) -> Tuple[Path, Path]:
    """(configs dir, empty home dir)."""

    source = tmp_path / "dotfiles" / "configs"
    home = tmp_path / "home"
    source.mkdir(parents=True)
    home.mkdir()
    return source, home


@pytest.fixture
def confirm_yes() -> ScriptedConfirm:
    return ScriptedConfirm(True)


@pytest.fixture
def confirm_no() -> ScriptedConfirm:
    return ScriptedConfirm(False)


@pytest.fixture
def make_ctx(tmp_path: Path, dotfiles):
    source, home = dotfiles

    def _make(*, confirm=None, answers=(), distro=Distro("arch", "pacman"), **opts) -> InstallCtx:
        options = InstallOptions(dotfiles_dir=source.parent, home=home, **opts)
        replies = iter(answers)
        work_dir = tmp_path / "work"
        work_dir.mkdir(exist_ok=True)
        return InstallCtx(
            options=options,
            cfg=InstallerConfig(),
            confirm=confirm or ScriptedConfirm(True),
            work_dir=work_dir,
            distro=distro,
            input_fn=lambda prompt: next(replies),
        )

    return _make


@pytest.fixture
def take_snapshot():
    return snapshot


@pytest.fixture
def scripted_confirm():
    return ScriptedConfirm
