from __future__ import annotations

import logging
import re
from typing import Iterable, List, Protocol, Sequence

from .command import command_exists, run_cmd
from .distro import Distro

logger = logging.getLogger(__name__)

# emerge --pretend marks reinstalls of an already-merged package with R.
_EBUILD_REINSTALL_RE = re.compile(r"^\[ebuild.*R.*\]", re.MULTILINE)


class PackageManager(Protocol):
    name: str

    def is_installed(self, package: str) -> bool:
        ...

    def install(self, packages: Sequence[str]) -> None:
        ...

    def sync(self) -> None:
        ...


class Pacman:
    name = "pacman"

    def __init__(self, *, dry_run: bool = False) -> None:
        self.dry_run = dry_run

    def is_installed(self, package: str) -> bool:
        if not command_exists("pacman"):
            return False
        return run_cmd(["pacman", "-Qq", package], check=False).ok

    def install(self, packages: Sequence[str]) -> None:
        if not packages:
            return
        run_cmd(
            ["sudo", "pacman", "-S", "--needed", "--noconfirm", *packages],
            capture=False,
            dry_run=self.dry_run,
        )

    def sync(self) -> None:
        run_cmd(["sudo", "pacman", "-Sy"], capture=False, dry_run=self.dry_run)


class Paru(Pacman):
    """AUR helper. Queries go through pacman; installs run unprivileged."""

    name = "paru"

    def install(self, packages: Sequence[str]) -> None:
        if not packages:
            return
        run_cmd(
            ["paru", "-S", "--needed", "--noconfirm", *packages],
            capture=False,
            dry_run=self.dry_run,
        )

    def sync(self) -> None:
        run_cmd(["paru", "-Sy"], capture=False, dry_run=self.dry_run)


class Portage:
    name = "portage"

    def __init__(self, *, dry_run: bool = False) -> None:
        self.dry_run = dry_run

    def is_installed(self, package: str) -> bool:
        if command_exists("equery") and run_cmd(["equery", "list", package], check=False).ok:
            return True
        if not command_exists("emerge"):
            return False
        r = run_cmd(["emerge", "--pretend", "--quiet", package], check=False)
        return bool(_EBUILD_REINSTALL_RE.search(r.stdout))

    def install(self, packages: Sequence[str]) -> None:
        if not packages:
            return
        run_cmd(["sudo", "emerge", "--ask=n", *packages], capture=False, dry_run=self.dry_run)

    def sync(self) -> None:
        run_cmd(["sudo", "emerge", "--sync"], capture=False, dry_run=self.dry_run)


def package_manager_for(distro: Distro, *, dry_run: bool = False) -> PackageManager:
    if distro.package_manager == "pacman":
        return Pacman(dry_run=dry_run)
    if distro.package_manager == "portage":
        return Portage(dry_run=dry_run)
    raise ValueError(f"No package manager for {distro.package_manager!r}")


def filter_missing(pm: PackageManager, packages: Iterable[str]) -> List[str]:
    """Return packages that are not installed yet, preserving order."""

    missing: List[str] = []
    for p in packages:
        if p in missing:
            continue
        if not pm.is_installed(p):
            missing.append(p)
    return missing
