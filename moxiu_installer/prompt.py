from __future__ import annotations

import logging
from typing import Callable

from .options import InstallOptions

logger = logging.getLogger(__name__)

Confirm = Callable[[str], bool]
InputFn = Callable[[str], str]


def ask_yes_no(question: str, *, default: bool = True, input_fn: InputFn = input) -> bool:
    """Ask until the answer is y, n or empty (empty picks the default)."""

    hint = "[Y/n]" if default else "[y/N]"
    while True:
        try:
            answer = input_fn(f"{question} {hint}: ").strip().lower()
        except EOFError:
            # No terminal to ask; never treat that as consent.
            logger.warning("No answer to %r (end of input); assuming no", question)
            return False
        if answer == "":
            return default
        if answer in {"y", "yes"}:
            return True
        if answer in {"n", "no"}:
            return False
        print("Please answer Y or N.")


def always_yes(prompt: str) -> bool:
    logger.debug("Auto-confirmed: %s", prompt)
    return True


def make_confirm(options: InstallOptions, *, input_fn: InputFn = input) -> Confirm:
    """Confirmation capability for this run.

    -y and --dry-run never block.
    """

    if options.non_interactive:
        return always_yes

    def confirm(prompt: str) -> bool:
        return ask_yes_no(prompt, default=True, input_fn=input_fn)

    return confirm
