"""Tests for the command runner."""

from __future__ import annotations

import logging
import sys

import pytest

from moxiu_installer.errors import CommandError
from moxiu_installer.lib.command import command_exists, fmt_argv, run_cmd


def test_dry_run_does_not_execute(caplog) -> None:
    with caplog.at_level(logging.INFO):
        r = run_cmd(["definitely-not-a-real-binary-xyz", "--flag"], dry_run=True)
    assert r.ok
    assert "[Dry-run] Would run: definitely-not-a-real-binary-xyz --flag" in caplog.text


def test_captures_output_and_returncode() -> None:
    r = run_cmd([sys.executable, "-c", "import sys; print('hi'); sys.exit(3)"], check=False)
    assert r.returncode == 3
    assert r.stdout.strip() == "hi"
    assert not r.ok


def test_check_raises_command_error() -> None:
    with pytest.raises(CommandError) as exc:
        run_cmd([sys.executable, "-c", "import sys; sys.exit(2)"])
    assert exc.value.returncode == 2


def test_missing_binary() -> None:
    r = run_cmd(["definitely-not-a-real-binary-xyz"], check=False)
    assert r.returncode == 127
    with pytest.raises(CommandError):
        run_cmd(["definitely-not-a-real-binary-xyz"])


def test_helpers() -> None:
    assert fmt_argv(["echo", "two words"]) == "echo 'two words'"
    assert command_exists("definitely-not-a-real-binary-xyz") is False
