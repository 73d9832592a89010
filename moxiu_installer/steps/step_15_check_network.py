from __future__ import annotations

import logging

from ..errors import InstallerError
from ..lib.net import is_online
from ..pipeline import InstallCtx

logger = logging.getLogger(__name__)


class CheckNetworkStep:
    step_id = "15_check_network"

    def enabled(self, ctx: InstallCtx) -> bool:
        return True

    def run(self, ctx: InstallCtx) -> None:
        logger.info("Checking internet connectivity...")
        if not is_online():
            raise InstallerError("No internet connection. Please check your network and try again.")
        logger.info("Internet connection verified.")
