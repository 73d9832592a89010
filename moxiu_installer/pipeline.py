from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Sequence

from .config import InstallerConfig
from .lib.distro import Distro
from .options import InstallOptions
from .prompt import Confirm, InputFn

logger = logging.getLogger(__name__)


@dataclass
class InstallCtx:
    """Everything a step needs. Options are frozen; `state` collects decisions."""

    options: InstallOptions
    cfg: InstallerConfig
    confirm: Confirm
    work_dir: Path
    distro: Optional[Distro] = None
    input_fn: InputFn = input
    state: Dict[str, Any] = field(default_factory=dict)

    @property
    def dry_run(self) -> bool:
        return self.options.dry_run

    def require_distro(self) -> Distro:
        if self.distro is None:
            raise RuntimeError("distro not detected yet")
        return self.distro


class Step(Protocol):
    """A single step of the install."""

    step_id: str

    def enabled(self, ctx: InstallCtx) -> bool:
        ...

    def run(self, ctx: InstallCtx) -> None:
        ...


@dataclass(frozen=True)
class PipelineResult:
    ran_steps: List[str]
    skipped_steps: List[str]


def run_pipeline(*, ctx: InstallCtx, steps: Sequence[Step]) -> PipelineResult:
    """Run steps in order, skipping the ones the options disable."""

    ran: List[str] = []
    skipped: List[str] = []

    for step in steps:
        ctx.state["current_step"] = step.step_id

        if not step.enabled(ctx):
            logger.debug("Skipping step %s (disabled)", step.step_id)
            skipped.append(step.step_id)
        else:
            logger.debug("Running step %s", step.step_id)
            step.run(ctx)
            ran.append(step.step_id)

    ctx.state["current_step"] = None
    return PipelineResult(ran_steps=ran, skipped_steps=skipped)
