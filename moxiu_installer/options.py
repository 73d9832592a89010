from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class InstallOptions:
    """Run options, fixed once the command line has been parsed."""

    dotfiles_dir: Path
    home: Path
    auto_confirm: bool = False
    dry_run: bool = False
    skip_dots: bool = False
    skip_packages: bool = False
    no_reboot: bool = False

    @property
    def configs_dir(self) -> Path:
        return self.dotfiles_dir / "configs"

    @property
    def non_interactive(self) -> bool:
        return self.auto_confirm or self.dry_run
