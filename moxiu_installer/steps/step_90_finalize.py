from __future__ import annotations

import logging

from ..lib.command import command_exists, run_cmd
from ..pipeline import InstallCtx
from ..prompt import ask_yes_no

logger = logging.getLogger(__name__)


class FinalizeStep:
    step_id = "90_finalize"

    def enabled(self, ctx: InstallCtx) -> bool:
        return True

    def _notes(self, ctx: InstallCtx) -> None:
        distro = ctx.require_distro()
        if distro.is_gentoo:
            logger.info("Gentoo-specific post-installation notes:")
            logger.info("- If you installed Caelestia shell, start it with: qs -c caelestia")
            logger.info("- Consider enabling systemd user service for Caelestia shell")
            logger.info("- Some font rendering may require additional configuration")
        elif command_exists("caelestia"):
            logger.info("Caelestia shell is installed. You can:")
            logger.info("- Start it manually: caelestia shell")
            logger.info("- Or with QuickShell directly: qs -c caelestia")
            logger.info("- Enable systemd service: systemctl --user enable caelestia-shell.service")

    def run(self, ctx: InstallCtx) -> None:
        logger.info("All done! Enjoy your Moxiu T470 dotfiles on %s Linux.", ctx.require_distro().name)
        self._notes(ctx)

        if ctx.dry_run:
            logger.info("[Dry-run] No changes were actually made.")
            logger.info("[Dry-run] Would prompt for reboot")
            return

        # Rebooting is never auto-confirmed, even with -y.
        if ctx.options.no_reboot or not ask_yes_no("Reboot (Highly Recommended!)", input_fn=ctx.input_fn):
            logger.info("Please reboot later to apply all changes.")
            return

        logger.info("Rebooting...")
        ctx.state["reboot"] = True
        run_cmd(["sudo", "reboot"], capture=False)
