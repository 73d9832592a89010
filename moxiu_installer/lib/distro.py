from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from ..errors import UnsupportedDistro
from .command import command_exists

logger = logging.getLogger(__name__)

ARCH = "arch"
GENTOO = "gentoo"


@dataclass(frozen=True)
class Distro:
    name: str
    package_manager: str

    @property
    def is_arch(self) -> bool:
        return self.name == ARCH

    @property
    def is_gentoo(self) -> bool:
        return self.name == GENTOO


def detect_distro(etc_dir: str | Path = "/etc") -> Distro:
    etc = Path(etc_dir)
    if (etc / "arch-release").is_file():
        return Distro(name=ARCH, package_manager="pacman")
    if (etc / "gentoo-release").is_file() or command_exists("emerge"):
        return Distro(name=GENTOO, package_manager="portage")
    raise UnsupportedDistro(
        "Unsupported distribution. This installer supports Arch Linux and Gentoo only."
    )
