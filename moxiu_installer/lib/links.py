"""Idempotent dotfile symlinking.

Every source item gets a symlink under the home directory. For each target
the installer either creates the link, leaves an existing link into the
source tree alone, asks before replacing anything else, or reports an
item-scoped error and moves on. Nothing outside the home directory is ever
removed or created.
"""

from __future__ import annotations

import logging
import os
import shutil
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, Iterable, Iterator, List, Optional

from ..errors import (
    LinkCreationFailed,
    LinkError,
    RemovalFailed,
    SourceRootMissing,
    UnsafeDestination,
)

logger = logging.getLogger(__name__)

Relativize = Callable[[str, str], str]


class LinkOutcome(str, Enum):
    CREATED = "created"
    SKIPPED_EXISTING = "skipped_existing_correct_link"
    SKIPPED_DECLINED = "skipped_user_declined"
    REPLACED = "replaced"
    ERROR = "error"


@dataclass(frozen=True)
class LinkTarget:
    source: Path
    destination: Path


@dataclass(frozen=True)
class LinkResult:
    target: LinkTarget
    outcome: LinkOutcome
    error: Optional[LinkError] = None


@dataclass
class LinkReport:
    results: List[LinkResult] = field(default_factory=list)

    def add(self, result: LinkResult) -> None:
        self.results.append(result)

    def counts(self) -> Dict[str, int]:
        return dict(Counter(r.outcome.value for r in self.results))

    def by_destination(self) -> Dict[Path, LinkOutcome]:
        return {r.target.destination: r.outcome for r in self.results}

    @property
    def errors(self) -> List[LinkResult]:
        return [r for r in self.results if r.outcome is LinkOutcome.ERROR]


def _norm(p: str | Path) -> str:
    return os.path.normpath(os.path.abspath(str(p)))


def is_within(path: str | Path, root: str | Path) -> bool:
    """True if path lies strictly below root (lexically, no symlink resolution).

    Symlinked parents are checked separately by `LinkInstaller.check_resolved_parent`.
    """

    p, r = _norm(path), _norm(root)
    if p == r:
        return False
    try:
        return os.path.commonpath([p, r]) == r
    except ValueError:
        return False


def _at_or_below(path: str, root: str) -> bool:
    return path == root or is_within(path, root)


def iter_items(directory: Path, exclude: Iterable[str] = ()) -> Iterator[Path]:
    """Depth-one listing, hidden entries included, in filesystem order."""

    skip = set(exclude)
    for item in directory.iterdir():
        if item.name in skip:
            logger.debug("Excluded %s", item)
            continue
        yield item


def plan_targets(source_dir: Path, dest_dir: Path, exclude: Iterable[str] = ()) -> Iterator[LinkTarget]:
    for item in iter_items(source_dir, exclude):
        yield LinkTarget(source=item, destination=dest_dir / item.name)


class LinkInstaller:
    def __init__(
        self,
        *,
        source_root: str | Path,
        home: str | Path,
        confirm: Callable[[str], bool],
        dry_run: bool = False,
        relative: bool = True,
        relativize: Relativize = os.path.relpath,
    ) -> None:
        self.source_root = Path(_norm(source_root))
        self.home = Path(_norm(home))
        self.confirm = confirm
        self.dry_run = dry_run
        self.relative = relative
        self.relativize = relativize

    def check_source_root(self) -> None:
        root = self.source_root
        if not root.is_dir():
            raise SourceRootMissing(f"configs/ directory not found: {root}")
        if not os.access(root, os.R_OK | os.X_OK):
            raise SourceRootMissing(f"configs/ directory is not readable: {root}")

    def display(self, p: str | Path) -> str:
        if is_within(p, self.home):
            return "~/" + self.relativize(_norm(p), str(self.home))
        return str(p)

    def is_correct_link(self, dest: Path) -> bool:
        """A symlink pointing anywhere inside the source root counts as installed."""

        if not dest.is_symlink():
            return False
        try:
            text = os.readlink(dest)
        except OSError:
            return False
        if is_within(os.path.join(str(dest.parent), text), self.source_root):
            return True
        # The checkout itself may be reached through a symlinked path.
        return is_within(os.path.realpath(dest), os.path.realpath(self.source_root))

    def is_source_itself(self, source: Path, dest: Path) -> bool:
        """dest is the source item, reached through a symlinked parent such as ~/.config."""

        if dest.is_symlink() or not os.path.lexists(dest):
            return False
        return os.path.realpath(dest) == os.path.realpath(source)

    def check_resolved_parent(self, dest: Path) -> None:
        """Refuse a destination whose parent resolves outside home or into the source tree."""

        parent = os.path.realpath(dest.parent)
        if not _at_or_below(parent, os.path.realpath(self.home)):
            raise UnsafeDestination(
                f"Refusing to touch {dest}: {dest.parent} resolves to {parent}, outside of home directory"
            )
        if _at_or_below(parent, os.path.realpath(self.source_root)):
            raise UnsafeDestination(
                f"Refusing to touch {dest}: {dest.parent} resolves into the dotfiles source {parent}"
            )

    def link_text(self, source: Path, dest: Path) -> str:
        src = _norm(source)
        if not self.relative:
            return src
        try:
            return self.relativize(src, str(dest.parent))
        except ValueError:
            return src

    def _remove(self, dest: Path) -> None:
        if self.dry_run:
            logger.info("[Dry-run] Would remove %s", dest)
            return
        try:
            if dest.is_symlink() or not dest.is_dir():
                dest.unlink()
            else:
                shutil.rmtree(dest)
        except OSError as e:
            raise RemovalFailed(f"Failed to remove {dest}: {e}") from e

    def _link(self, source: Path, dest: Path) -> None:
        if not os.path.lexists(source):
            raise LinkCreationFailed(f"Source does not exist: {source}")
        text = self.link_text(source, dest)
        if self.dry_run:
            logger.info("[Dry-run] Would link %s → %s", self.display(dest), text)
            return
        try:
            os.symlink(text, dest)
        except OSError as e:
            raise LinkCreationFailed(f"Failed to link {source} → {dest}: {e}") from e
        logger.info("Linked %s → %s", self.display(source), self.display(dest))

    def _install(self, target: LinkTarget) -> LinkOutcome:
        if not is_within(target.destination, self.home):
            raise UnsafeDestination(
                f"Refusing to touch {target.destination}: outside of home directory {self.home}"
            )
        dest = Path(_norm(target.destination))

        if self.is_correct_link(dest):
            logger.info("%s is already correctly linked. Skipping.", self.display(dest))
            return LinkOutcome.SKIPPED_EXISTING
        if self.is_source_itself(target.source, dest):
            logger.info("%s is the source item itself. Skipping.", self.display(dest))
            return LinkOutcome.SKIPPED_EXISTING
        self.check_resolved_parent(dest)

        replaced = False
        if os.path.lexists(dest):
            logger.warning("%s already exists and will be removed if you choose to overwrite.", dest)
            if not self.confirm(f"Overwrite {dest}?"):
                logger.info("Skipping %s", dest)
                return LinkOutcome.SKIPPED_DECLINED
            self._remove(dest)
            replaced = True

        self._link(target.source, dest)
        return LinkOutcome.REPLACED if replaced else LinkOutcome.CREATED

    def install(self, target: LinkTarget) -> LinkResult:
        try:
            outcome = self._install(target)
        except LinkError as e:
            logger.error("%s", e)
            return LinkResult(target=target, outcome=LinkOutcome.ERROR, error=e)
        except OSError as e:
            err = LinkCreationFailed(f"{target.destination}: {e}")
            err.__cause__ = e
            logger.error("%s", err)
            return LinkResult(target=target, outcome=LinkOutcome.ERROR, error=err)
        return LinkResult(target=target, outcome=outcome)

    def install_all(self, targets: Iterable[LinkTarget], report: Optional[LinkReport] = None) -> LinkReport:
        report = report if report is not None else LinkReport()
        for target in targets:
            report.add(self.install(target))
        return report

    def ensure_dir(self, directory: Path) -> None:
        if not is_within(directory, self.home):
            raise UnsafeDestination(f"Refusing to create {directory}: outside of home directory")
        if directory.is_dir():
            return
        self.check_resolved_parent(directory)
        if self.dry_run:
            logger.info("[Dry-run] Would create %s", self.display(directory))
            return
        directory.mkdir(parents=True, exist_ok=True)


def install_dotfiles(installer: LinkInstaller, *, exclude: Iterable[str] = ()) -> LinkReport:
    """Link configs/* into $HOME, then configs/.config/* into $HOME/.config."""

    installer.check_source_root()
    exclude = set(exclude)
    root = installer.source_root
    home = installer.home

    report = LinkReport()
    installer.install_all(plan_targets(root, home, exclude | {".config"}), report)

    nested = root / ".config"
    if nested.is_dir():
        try:
            installer.ensure_dir(home / ".config")
        except OSError as e:
            # Each item below will fail on its own and be reported.
            logger.error("Cannot create %s: %s", home / ".config", e)
        installer.install_all(plan_targets(nested, home / ".config", exclude), report)

    return report
