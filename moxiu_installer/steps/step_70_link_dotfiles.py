from __future__ import annotations

import logging

from ..lib.links import LinkInstaller, install_dotfiles
from ..pipeline import InstallCtx

logger = logging.getLogger(__name__)


class LinkDotfilesStep:
    step_id = "70_link_dotfiles"

    def enabled(self, ctx: InstallCtx) -> bool:
        return not ctx.options.skip_dots

    def run(self, ctx: InstallCtx) -> None:
        opts = ctx.options
        logger.info("Installing dotfiles from %s to %s and ~/.config...", opts.configs_dir, opts.home)

        installer = LinkInstaller(
            source_root=opts.configs_dir,
            home=opts.home,
            confirm=ctx.confirm,
            dry_run=ctx.dry_run,
            relative=ctx.cfg.relative_links,
        )
        report = install_dotfiles(installer, exclude=ctx.cfg.link_exclude)

        ctx.state["links"] = report.counts()
        summary = ", ".join(f"{k}={v}" for k, v in sorted(report.counts().items())) or "nothing to link"
        if report.errors:
            logger.warning("Dotfiles linked with %d error(s): %s", len(report.errors), summary)
        else:
            logger.info("Dotfiles: %s", summary)
