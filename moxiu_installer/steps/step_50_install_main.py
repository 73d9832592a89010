from __future__ import annotations

import logging

from ..errors import CommandError
from ..lib.manifests import load_packages_manifest, package_list
from ..lib.pkg import filter_missing, package_manager_for
from ..pipeline import InstallCtx

logger = logging.getLogger(__name__)


class InstallMainStep:
    step_id = "50_install_main"

    def enabled(self, ctx: InstallCtx) -> bool:
        return not ctx.options.skip_packages

    def run(self, ctx: InstallCtx) -> None:
        distro = ctx.require_distro()
        pm = package_manager_for(distro, dry_run=ctx.dry_run)
        logger.info("Installing main packages...")

        missing = filter_missing(pm, package_list(load_packages_manifest(), distro.name, "main"))
        if not missing:
            logger.info("All main packages are already installed.")
            return

        logger.info("Installing packages: %s", " ".join(missing))
        try:
            pm.install(missing)
        except CommandError as e:
            raise CommandError(
                f"Failed to install packages: {' '.join(missing)}", returncode=e.returncode
            ) from e
        ctx.state.setdefault("installed", []).extend(missing)
        logger.info("Main packages installed successfully.")
