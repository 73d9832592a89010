from __future__ import annotations

import logging

from ..errors import SourceRootMissing, StartDeclined
from ..pipeline import InstallCtx
from ..prompt import ask_yes_no

logger = logging.getLogger(__name__)

BANNER = r"""
   __  ___          _
  /  |/  /__ __ __ (_)_ __
 / /|_/ / _ \ \ // / // /
/_/  /_/\___/_\_\/_/\_,_/
"""


class WelcomeStep:
    step_id = "20_welcome"

    def enabled(self, ctx: InstallCtx) -> bool:
        return True

    def run(self, ctx: InstallCtx) -> None:
        distro = ctx.require_distro()
        print(BANNER)
        logger.info("Welcome to the Moxiu T470 dotfiles installer!")
        logger.info("Detected system: %s Linux with %s", distro.name, distro.package_manager)

        if not ctx.options.non_interactive:
            if not ask_yes_no("Start the installation script?", input_fn=ctx.input_fn):
                print("Exiting installer.")
                raise StartDeclined()

        logger.info("Dotfiles directory: %s", ctx.options.dotfiles_dir)
        logger.debug("Temporary directory: %s", ctx.work_dir)

        if not ctx.options.configs_dir.is_dir():
            raise SourceRootMissing(f"configs/ directory not found in {ctx.options.dotfiles_dir}")
