from __future__ import annotations

import getpass
import logging
import os
import pwd
from typing import Optional, Sequence

from .command import command_exists, run_cmd

logger = logging.getLogger(__name__)


def current_login_shell(user: Optional[str] = None) -> Optional[str]:
    """Login shell from the passwd database (what `getent passwd` reports)."""

    user = user or os.environ.get("USER") or getpass.getuser()
    try:
        return pwd.getpwnam(user).pw_shell
    except KeyError:
        return None


def find_fish(candidates: Sequence[str]) -> str:
    """First existing candidate, else the first one (the usual /usr/bin/fish)."""

    for c in candidates:
        if os.path.isfile(c):
            return c
    return candidates[0]


def change_login_shell(
    candidates: Sequence[str],
    *,
    dry_run: bool = False,
    user: Optional[str] = None,
) -> bool:
    """Switch the login shell to fish. Returns True if a change was made (or would be)."""

    if not command_exists("fish"):
        logger.warning("fish shell not found. Skipping shell change.")
        return False

    fish_path = find_fish(candidates)
    if current_login_shell(user) == fish_path:
        logger.info("Shell is already set to fish.")
        return False

    logger.info("Changing default shell to fish...")
    r = run_cmd(["chsh", "-s", fish_path], check=False, capture=False, dry_run=dry_run)
    if not r.ok:
        logger.warning(
            "Failed to change shell to fish. You can change it manually later with: chsh -s %s",
            fish_path,
        )
        return False
    if not dry_run:
        logger.info("Default shell changed to fish.")
    return True
