"""Moxiu T470 dotfiles installer (Arch / Gentoo).

Core design goals:
- Idempotent dotfile linking
- Never touch anything outside $HOME
- Dry-run everything
- Centralized logging
"""

__version__ = "0.3.0"

__all__ = ["__version__"]
