"""Error types raised by the scanner and the terminator."""
from __future__ import annotations
from typing import Optional


class PortOPottyError(RuntimeError):
    """Base class for all errors raised by this package."""


class SystemQueryError(PortOPottyError):
    """The OS refused or failed to enumerate sockets or processes."""


class InvalidArgument(PortOPottyError, ValueError):
    """A caller-supplied value was rejected before any OS interaction."""


class PlatformCommandError(PortOPottyError):
    """A termination command ran (or tried to) and reported failure.

    ``exit_code`` is None when the OS gave no code, e.g. the command could not
    be started or was itself killed by a signal.
    """

    def __init__(self, command: str, exit_code: Optional[int] = None, detail: str = ""):
        self.command = command
        self.exit_code = exit_code
        self.detail = detail
        code = "unknown" if exit_code is None else str(exit_code)
        msg = f"{command} failed (exit {code})"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)
