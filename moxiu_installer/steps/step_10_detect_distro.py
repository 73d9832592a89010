from __future__ import annotations

import logging

from ..lib.distro import detect_distro
from ..pipeline import InstallCtx

logger = logging.getLogger(__name__)


class DetectDistroStep:
    step_id = "10_detect_distro"

    def enabled(self, ctx: InstallCtx) -> bool:
        return True

    def run(self, ctx: InstallCtx) -> None:
        distro = detect_distro()
        ctx.distro = distro
        ctx.state["distro"] = distro.name
        ctx.state["package_manager"] = distro.package_manager
        logger.info("Detected distribution: %s", distro.name)
        logger.debug("Package manager: %s", distro.package_manager)
