from __future__ import annotations

import logging
import os

from ..errors import UserAborted
from ..pipeline import InstallCtx

logger = logging.getLogger(__name__)


class CheckRootStep:
    step_id = "05_check_root"

    def enabled(self, ctx: InstallCtx) -> bool:
        return True

    def run(self, ctx: InstallCtx) -> None:
        if os.geteuid() != 0:
            return
        logger.warning("Running the installer as root is not recommended.")
        if not ctx.confirm("Continue as root?"):
            raise UserAborted("Not continuing as root.")
        ctx.state["as_root"] = True
