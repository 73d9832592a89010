"""Tests for the command line entry point."""

from __future__ import annotations

from pathlib import Path

import pytest

from moxiu_installer import main as main_mod
from moxiu_installer.errors import InstallerError, StartDeclined
from moxiu_installer.main import build_parser, main, run
from moxiu_installer.options import InstallOptions
from moxiu_installer.steps import LinkDotfilesStep


class RaisingStep:
    step_id = "00_raise"

    def __init__(self, exc: BaseException) -> None:
        self.exc = exc

    def enabled(self, ctx) -> bool:
        return True

    def run(self, ctx) -> None:
        raise self.exc


class RecordingStep:
    step_id = "00_record"

    def __init__(self) -> None:
        self.options = None

    def enabled(self, ctx) -> bool:
        return True

    def run(self, ctx) -> None:
        self.options = ctx.options


def test_parser_flags() -> None:
    args = build_parser().parse_args(["-y", "--no-dots", "--no-packages", "--dry-run"])
    assert args.yes and args.no_dots and args.no_packages and args.dry_run
    assert not args.no_reboot


def test_help_exits_zero(capsys) -> None:
    with pytest.raises(SystemExit) as exc:
        main(["--help"])
    assert exc.value.code == 0
    out = capsys.readouterr().out
    assert "--no-dots" in out
    assert "Gentoo Linux" in out


def test_missing_config_exits_one(tmp_path: Path) -> None:
    assert main(["--config", str(tmp_path / "nope.yaml"), "--log", str(tmp_path / "log")]) == 1


@pytest.mark.parametrize(
    "exc,code",
    [
        (InstallerError("configs/ directory not found"), 1),
        (StartDeclined(), 0),
    ],
)
def test_exit_codes(tmp_path: Path, monkeypatch, exc, code) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    monkeypatch.setattr(main_mod, "build_steps", lambda: [RaisingStep(exc)])
    assert main(["--log", str(tmp_path / "log")]) == code


def test_flags_become_options(tmp_path: Path, monkeypatch) -> None:
    step = RecordingStep()
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    monkeypatch.setattr(main_mod, "build_steps", lambda: [step])

    rc = main(["-y", "--dry-run", "--no-packages", "--dotfiles", str(tmp_path), "--log", str(tmp_path / "log")])

    assert rc == 0
    assert step.options.auto_confirm and step.options.dry_run and step.options.skip_packages
    assert not step.options.skip_dots
    assert step.options.dotfiles_dir == tmp_path.resolve()


def test_unexpected_errors_propagate(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    monkeypatch.setattr(main_mod, "build_steps", lambda: [RaisingStep(KeyError("boom"))])
    with pytest.raises(KeyError):
        main(["--log", str(tmp_path / "log")])


def test_run_links_in_dry_run(dotfiles) -> None:
    source, home = dotfiles
    (source / ".bashrc").write_text("")
    options = InstallOptions(dotfiles_dir=source.parent, home=home, dry_run=True)

    state = run(options, steps=[LinkDotfilesStep()])

    assert state["ran_steps"] == ["70_link_dotfiles"]
    assert state["links"] == {"created": 1}
    assert list(home.iterdir()) == []
