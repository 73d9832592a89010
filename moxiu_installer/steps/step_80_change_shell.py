from __future__ import annotations

import logging

from ..lib.shell import change_login_shell
from ..pipeline import InstallCtx

logger = logging.getLogger(__name__)


class ChangeShellStep:
    step_id = "80_change_shell"

    def enabled(self, ctx: InstallCtx) -> bool:
        return True

    def run(self, ctx: InstallCtx) -> None:
        ctx.state["shell_changed"] = change_login_shell(ctx.cfg.fish_paths, dry_run=ctx.dry_run)
