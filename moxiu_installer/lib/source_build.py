"""Things that have to be built from a git checkout.

Each helper clones into the run's work directory. Under dry-run nothing is
cloned; the commands are only logged.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Callable, Sequence

from ..errors import CommandError, UserAborted
from .command import command_exists, run_cmd
from .pkg import PackageManager, filter_missing

logger = logging.getLogger(__name__)

PARU_REPO = "https://aur.archlinux.org/paru.git"
QUICKSHELL_REPO = "https://github.com/outfoxxed/quickshell.git"
CAELESTIA_CLI_REPO = "https://github.com/caelestia-dots/cli.git"
CAELESTIA_SHELL_REPO = "https://github.com/caelestia-dots/shell.git"


def git_clone(url: str, dest: Path, *, dry_run: bool = False) -> None:
    run_cmd(["git", "clone", url, str(dest)], capture=False, dry_run=dry_run)


def install_paru(work_dir: Path, *, dry_run: bool = False) -> None:
    """Bootstrap paru from the AUR with makepkg."""

    if not dry_run and not command_exists("git"):
        raise UserAborted("git is required to install paru but not found")
    paru_dir = work_dir / "paru"
    git_clone(PARU_REPO, paru_dir, dry_run=dry_run)
    run_cmd(["makepkg", "-si", "--noconfirm"], cwd=str(paru_dir), capture=False, dry_run=dry_run)
    logger.info("paru installed successfully.")


def build_quickshell(work_dir: Path, *, dry_run: bool = False) -> None:
    qs_dir = work_dir / "quickshell"
    git_clone(QUICKSHELL_REPO, qs_dir, dry_run=dry_run)
    for argv in (
        ["cmake", "-B", "build", "-DCMAKE_BUILD_TYPE=Release"],
        ["cmake", "--build", "build"],
        ["sudo", "cmake", "--install", "build"],
    ):
        run_cmd(argv, cwd=str(qs_dir), capture=False, dry_run=dry_run)
    logger.info("QuickShell installed successfully.")


def build_caelestia_cli(
    work_dir: Path,
    pm: PackageManager,
    python_deps: Sequence[str],
    *,
    dry_run: bool = False,
) -> None:
    missing = filter_missing(pm, python_deps)
    if missing:
        pm.install(missing)

    cli_dir = work_dir / "caelestia-cli"
    git_clone(CAELESTIA_CLI_REPO, cli_dir, dry_run=dry_run)
    run_cmd(["python", "-m", "build"], cwd=str(cli_dir), capture=False, dry_run=dry_run)

    wheels = sorted(str(p) for p in (cli_dir / "dist").glob("*.whl")) if not dry_run else ["dist/*.whl"]
    if not wheels:
        raise CommandError(f"No wheel produced in {cli_dir / 'dist'}")
    run_cmd(["sudo", "python", "-m", "installer", *wheels], cwd=str(cli_dir), capture=False, dry_run=dry_run)
    logger.info("Caelestia CLI installed successfully.")


def install_caelestia_shell_config(
    home: Path,
    confirm: Callable[[str], bool],
    *,
    dry_run: bool = False,
) -> bool:
    """Clone the Caelestia shell config into ~/.config/quickshell/caelestia."""

    dest = home / ".config" / "quickshell" / "caelestia"
    if dry_run:
        logger.info("[Dry-run] Would clone Caelestia Shell to %s", dest)
        return True

    dest.parent.mkdir(parents=True, exist_ok=True)
    if dest.is_symlink() or dest.exists():
        if not confirm("Caelestia shell config already exists. Overwrite?"):
            logger.info("Skipping Caelestia shell configuration")
            return False
        if dest.is_symlink() or not dest.is_dir():
            dest.unlink()
        else:
            shutil.rmtree(dest)

    git_clone(CAELESTIA_SHELL_REPO, dest)
    logger.info("Caelestia Shell configuration installed to %s", dest)
    logger.info("You can start it with: qs -c caelestia")
    return True
