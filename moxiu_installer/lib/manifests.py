from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

import yaml

MANIFEST_DIR = Path(__file__).resolve().parents[1] / "manifests"


def load_yaml_rel(rel_path: str, *, base: Path = MANIFEST_DIR) -> Dict[str, Any]:
    """Load a YAML manifest shipped with the package."""

    p = base / rel_path.lstrip("/")
    data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Manifest must be a mapping/dict: {p}")
    return data


def load_packages_manifest() -> Dict[str, Any]:
    return load_yaml_rel("packages.yaml")


def package_list(manifest: Dict[str, Any], distro: str, key: str) -> List[str]:
    section = manifest.get(distro) or {}
    pkgs = section.get(key) or []
    if not isinstance(pkgs, list):
        raise ValueError(f"packages.yaml: {distro}.{key} must be a list")
    return [str(p).strip() for p in pkgs if str(p).strip()]
