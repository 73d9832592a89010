from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, FrozenSet, List, Optional

import yaml

from .errors import ConfigError

DEFAULT_EXCLUDE = frozenset({"README.md", "install.sh", ".git"})
DEFAULT_FISH_PATHS = ("/usr/bin/fish", "/bin/fish")


def default_config_path() -> Path:
    config_home = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(config_home) / "moxiu-installer" / "config.yaml"


def default_dotfiles_dir() -> Path:
    """The checkout this package runs from, else the current directory.

    Only an editable or in-place install sits next to configs/; a regular
    install lives in site-packages.
    """

    # moxiu_installer/config.py -> moxiu_installer -> repo root
    checkout = Path(__file__).resolve().parents[1]
    if (checkout / "configs").is_dir():
        return checkout
    return Path.cwd()


@dataclass(frozen=True)
class InstallerConfig:
    raw: Dict[str, Any] = field(default_factory=dict)
    path: Optional[str] = None

    @property
    def dotfiles_dir(self) -> Optional[str]:
        v = self.raw.get("dotfiles_dir")
        return str(Path(str(v)).expanduser()) if v else None

    @property
    def log_path(self) -> Optional[str]:
        v = self.raw.get("log_path")
        return str(Path(str(v)).expanduser()) if v else None

    @property
    def link_exclude(self) -> FrozenSet[str]:
        links = self.raw.get("links") or {}
        extra = links.get("exclude") or []
        if not isinstance(extra, list):
            raise ConfigError("links.exclude must be a list of names")
        return DEFAULT_EXCLUDE | {str(x) for x in extra}

    @property
    def relative_links(self) -> bool:
        return bool((self.raw.get("links") or {}).get("relative", True))

    @property
    def fish_paths(self) -> List[str]:
        v = self.raw.get("fish_paths")
        if v is None:
            return list(DEFAULT_FISH_PATHS)
        if not isinstance(v, list):
            raise ConfigError("fish_paths must be a list of paths")
        return [str(x) for x in v]


def load_config(path: Optional[str] = None) -> InstallerConfig:
    """Load the YAML config.

    An explicit path must exist; the default location is optional.
    """

    if path:
        p = Path(path).expanduser()
        if not p.exists():
            raise ConfigError(f"Config file not found: {p}")
    else:
        p = default_config_path()
        if not p.exists():
            return InstallerConfig()

    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {p}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"{p} must contain a mapping/object")

    return InstallerConfig(raw=raw, path=str(p))
