from __future__ import annotations


class InstallerError(RuntimeError):
    """Unrecoverable precondition failure; the CLI exits with status 1."""


class ConfigError(InstallerError):
    pass


class UnsupportedDistro(InstallerError):
    pass


class CommandError(InstallerError):
    def __init__(self, message: str, *, returncode: int = 1) -> None:
        super().__init__(message)
        self.returncode = returncode


class UserAborted(InstallerError):
    """The user declined something the installer cannot continue without."""


class StartDeclined(Exception):
    """The user declined the start prompt. Not an error."""


class SourceRootMissing(InstallerError):
    pass


class LinkError(OSError):
    """Failure scoped to a single link target."""


class UnsafeDestination(LinkError):
    pass


class RemovalFailed(LinkError):
    pass


class LinkCreationFailed(LinkError):
    pass
