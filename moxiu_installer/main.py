from __future__ import annotations

import argparse
import logging
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional

from .config import InstallerConfig, default_dotfiles_dir, load_config
from .errors import InstallerError, StartDeclined
from .logging_utils import configure_logging
from .options import InstallOptions
from .pipeline import InstallCtx, run_pipeline
from .prompt import InputFn, make_confirm
from .steps import (
    ChangeShellStep,
    CheckNetworkStep,
    CheckRootStep,
    DetectDistroStep,
    FinalizeStep,
    InstallBaseStep,
    InstallExtrasStep,
    InstallMainStep,
    LinkDotfilesStep,
    UpdatePackageDbStep,
    WelcomeStep,
)

logger = logging.getLogger(__name__)

EPILOG = """\
Supported distributions:
  - Arch Linux (with pacman and AUR via paru)
  - Gentoo Linux (with portage and overlays)
"""


def build_steps():
    return [
        CheckRootStep(),
        DetectDistroStep(),
        CheckNetworkStep(),
        WelcomeStep(),
        UpdatePackageDbStep(),
        InstallBaseStep(),
        InstallMainStep(),
        InstallExtrasStep(),
        LinkDotfilesStep(),
        ChangeShellStep(),
        FinalizeStep(),
    ]


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="moxiu-install",
        description="Install packages and link dotfiles for the Moxiu T470 setup.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("-y", "--yes", action="store_true", help="Automatically confirm all prompts")
    p.add_argument("--no-dots", action="store_true", help="Skip dotfile linking")
    p.add_argument("--no-packages", action="store_true", help="Skip package installation")
    p.add_argument("--dry-run", action="store_true", help="Show actions without performing them")
    p.add_argument("--no-reboot", action="store_true", help="Do not offer to reboot at the end")
    p.add_argument("--dotfiles", default=None, help="Dotfiles checkout containing configs/")
    p.add_argument("--config", default=None, help="YAML config file")
    p.add_argument("--log", default=None, help="Path to installer log")
    p.add_argument("-v", "--verbose", action="store_true", help="Show debug output")
    return p


def run(
    options: InstallOptions,
    *,
    cfg: Optional[InstallerConfig] = None,
    input_fn: InputFn = input,
    steps=None,
) -> Dict[str, Any]:
    """Run the install pipeline and return the collected run state."""

    cfg = cfg if cfg is not None else InstallerConfig()
    confirm = make_confirm(options, input_fn=input_fn)

    with tempfile.TemporaryDirectory(prefix="moxiu-installer-") as work_dir:
        ctx = InstallCtx(
            options=options,
            cfg=cfg,
            confirm=confirm,
            work_dir=Path(work_dir),
            input_fn=input_fn,
        )
        try:
            result = run_pipeline(ctx=ctx, steps=steps if steps is not None else build_steps())
        except (InstallerError, StartDeclined):
            raise
        except Exception:
            logger.exception("Installer failed in step %s", ctx.state.get("current_step"))
            raise
        ctx.state["ran_steps"] = result.ran_steps
        ctx.state["skipped_steps"] = result.skipped_steps
        return ctx.state


def main(argv: Optional[list[str]] = None, *, input_fn: InputFn = input) -> int:
    args = build_parser().parse_args(argv)

    try:
        cfg = load_config(args.config)
    except InstallerError as e:
        configure_logging(log_path=args.log)
        logger.error("%s", e)
        return 1

    configure_logging(
        log_path=args.log or cfg.log_path,
        level=logging.DEBUG if args.verbose else logging.INFO,
    )

    dotfiles = Path(args.dotfiles or cfg.dotfiles_dir or default_dotfiles_dir()).expanduser()
    options = InstallOptions(
        dotfiles_dir=dotfiles.resolve(),
        home=Path.home(),
        auto_confirm=bool(args.yes),
        dry_run=bool(args.dry_run),
        skip_dots=bool(args.no_dots),
        skip_packages=bool(args.no_packages),
        no_reboot=bool(args.no_reboot),
    )

    try:
        run(options, cfg=cfg, input_fn=input_fn)
    except StartDeclined:
        return 0
    except InstallerError as e:
        logger.error("%s", e)
        return 1
    return 0
