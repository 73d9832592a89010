from __future__ import annotations

import logging
from typing import Any, Dict, List

from ..errors import CommandError, UserAborted
from ..lib.command import command_exists, run_cmd
from ..lib.manifests import load_packages_manifest, package_list
from ..lib.pkg import PackageManager, Paru, filter_missing, package_manager_for
from ..lib.source_build import (
    build_caelestia_cli,
    build_quickshell,
    install_caelestia_shell_config,
    install_paru,
)
from ..pipeline import InstallCtx

logger = logging.getLogger(__name__)


def _install_or_log(pm: PackageManager, packages: List[str], *, what: str, failure: str) -> bool:
    missing = filter_missing(pm, packages)
    if not missing:
        logger.info("All %s are already installed.", what)
        return True
    logger.info("%s to install: %s", what.capitalize(), " ".join(missing))
    try:
        pm.install(missing)
    except CommandError as e:
        logger.error("%s (%s)", failure, e)
        return False
    logger.info("%s installed successfully.", what.capitalize())
    return True


class InstallExtrasStep:
    """AUR packages on Arch; overlays and source builds on Gentoo."""

    step_id = "60_install_extras"

    def enabled(self, ctx: InstallCtx) -> bool:
        return not ctx.options.skip_packages

    def run(self, ctx: InstallCtx) -> None:
        manifest = load_packages_manifest()
        if ctx.require_distro().is_arch:
            self._run_arch(ctx, manifest)
        else:
            self._run_gentoo(ctx, manifest)

    def _run_arch(self, ctx: InstallCtx, manifest: Dict[str, Any]) -> None:
        if command_exists("paru"):
            logger.info("paru is already installed.")
        else:
            logger.info("paru is required for AUR installs.")
            if not ctx.confirm("paru not found. Clone and install paru?"):
                raise UserAborted("paru is required to proceed. Exiting.")
            logger.info("Installing paru...")
            try:
                install_paru(ctx.work_dir, dry_run=ctx.dry_run)
            except CommandError as e:
                raise UserAborted(f"Failed to build and install paru: {e}") from e

        logger.info("Installing AUR packages and dependencies via paru...")
        paru = Paru(dry_run=ctx.dry_run)
        _install_or_log(
            paru,
            package_list(manifest, "arch", "aur"),
            what="AUR packages",
            failure="Some AUR packages failed to install. Continuing with dotfiles...",
        )

        if paru.is_installed("caelestia-shell-git") and command_exists("caelestia"):
            logger.info("Setting up Caelestia shell...")
            r = run_cmd(["caelestia", "install", "shell"], check=False, capture=False, dry_run=ctx.dry_run)
            if r.ok:
                logger.info("Caelestia shell setup completed.")
            else:
                logger.warning(
                    "Failed to setup Caelestia shell automatically. "
                    "You can run 'caelestia install shell' manually."
                )

    def _enable_overlays(self, ctx: InstallCtx, pm: PackageManager, manifest: Dict[str, Any]) -> None:
        overlays = (manifest.get("gentoo") or {}).get("overlays") or []
        listing = run_cmd(["eselect", "repository", "list"], check=False).stdout

        enabled_any = False
        for overlay in overlays:
            name = str(overlay.get("name"))
            if name in listing:
                continue
            if not ctx.confirm(str(overlay.get("prompt") or f"Enable {name} overlay?")):
                continue
            enabled_any = True
            r = run_cmd(
                ["sudo", "eselect", "repository", "enable", name],
                check=False,
                capture=False,
                dry_run=ctx.dry_run,
            )
            if r.ok:
                logger.info("%s overlay enabled.", name)
            else:
                logger.warning("Failed to enable %s overlay. Some packages may not be available.", name)

        if enabled_any and not ctx.dry_run:
            logger.info("Syncing overlays...")
            try:
                pm.sync()
            except CommandError as e:
                logger.warning("Overlay sync failed: %s", e)

    def _run_gentoo(self, ctx: InstallCtx, manifest: Dict[str, Any]) -> None:
        logger.info("Installing additional packages for Gentoo...")
        pm = package_manager_for(ctx.require_distro(), dry_run=ctx.dry_run)

        self._enable_overlays(ctx, pm, manifest)

        logger.info("Installing QuickShell dependencies...")
        _install_or_log(
            pm,
            package_list(manifest, "gentoo", "quickshell_deps"),
            what="QuickShell dependencies",
            failure="Failed to install QuickShell dependencies.",
        )
        _install_or_log(
            pm,
            package_list(manifest, "gentoo", "extras"),
            what="additional packages",
            failure="Some packages failed to install. Continuing with dotfiles...",
        )

        self._install_manual(ctx, pm, manifest)

    def _install_manual(self, ctx: InstallCtx, pm: PackageManager, manifest: Dict[str, Any]) -> None:
        logger.info("Installing packages that require manual handling on Gentoo...")

        if not command_exists("quickshell") and not command_exists("qs"):
            if ctx.confirm("QuickShell not found. Clone and build QuickShell manually?"):
                logger.info("Installing QuickShell from source...")
                try:
                    build_quickshell(ctx.work_dir, dry_run=ctx.dry_run)
                except CommandError as e:
                    logger.error("Failed to build QuickShell: %s", e)
            else:
                logger.warning(
                    "QuickShell is required for Caelestia shell. You may need to install it manually later."
                )

        if not command_exists("caelestia"):
            if ctx.confirm("Caelestia CLI not found. Clone and install Caelestia CLI manually?"):
                logger.info("Installing Caelestia CLI from source...")
                try:
                    build_caelestia_cli(
                        ctx.work_dir,
                        pm,
                        package_list(manifest, "gentoo", "python_build_deps"),
                        dry_run=ctx.dry_run,
                    )
                except CommandError as e:
                    logger.error("Failed to install Caelestia CLI: %s", e)
            else:
                logger.warning(
                    "Caelestia CLI provides useful utilities. You may want to install it manually later."
                )

        if ctx.confirm("Install Caelestia Shell configuration to ~/.config/quickshell/caelestia?"):
            logger.info("Installing Caelestia Shell configuration...")
            try:
                install_caelestia_shell_config(ctx.options.home, ctx.confirm, dry_run=ctx.dry_run)
            except (CommandError, OSError) as e:
                logger.error("Failed to install Caelestia Shell configuration: %s", e)

        logger.warning("Gentoo-specific notes:")
        for note in package_list(manifest, "gentoo", "notes"):
            logger.warning("- %s", note)
