from __future__ import annotations

import logging

from ..errors import CommandError
from ..lib.pkg import package_manager_for
from ..pipeline import InstallCtx

logger = logging.getLogger(__name__)


class UpdatePackageDbStep:
    step_id = "30_update_package_db"

    def enabled(self, ctx: InstallCtx) -> bool:
        return not ctx.options.skip_packages

    def run(self, ctx: InstallCtx) -> None:
        pm = package_manager_for(ctx.require_distro(), dry_run=ctx.dry_run)
        logger.info("Updating package database...")
        try:
            pm.sync()
        except CommandError as e:
            raise CommandError(f"Failed to update package database ({pm.name})", returncode=e.returncode) from e
