from __future__ import annotations

import logging

from ..errors import CommandError
from ..lib.manifests import load_packages_manifest, package_list
from ..lib.pkg import filter_missing, package_manager_for
from ..pipeline import InstallCtx

logger = logging.getLogger(__name__)


class InstallBaseStep:
    step_id = "40_install_base"

    def enabled(self, ctx: InstallCtx) -> bool:
        return not ctx.options.skip_packages

    def run(self, ctx: InstallCtx) -> None:
        distro = ctx.require_distro()
        pm = package_manager_for(distro, dry_run=ctx.dry_run)
        base = package_list(load_packages_manifest(), distro.name, "base")

        if distro.is_arch:
            # base-devel is a group; pacman --needed skips what is there.
            if not ctx.confirm("Install base-devel group packages with pacman?"):
                return
            logger.info("Installing base-devel group...")
            missing = base
        else:
            if not ctx.confirm("Install essential build tools (equivalent to base-devel)?"):
                return
            logger.info("Installing essential build tools...")
            missing = filter_missing(pm, base)
            if not missing:
                logger.info("All build tools are already installed.")
                return

        try:
            pm.install(missing)
        except CommandError as e:
            raise CommandError(
                f"Failed to install build tools: {' '.join(missing)}", returncode=e.returncode
            ) from e
        ctx.state.setdefault("installed", []).extend(missing)
        logger.info("Build tools installed successfully.")
