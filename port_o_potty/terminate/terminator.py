"""Process termination strategies.

Two variants share one entry point, :meth:`Terminator.terminate`:

* :class:`ForcefulTerminator` issues a single tree-wide ``taskkill /F``.
* :class:`GracefulTerminator` sends ``SIGTERM`` through ``kill`` and escalates
  to ``SIGKILL`` when the first attempt reports failure.

Neither re-checks that the PID still belongs to the process the caller saw
during a scan.
"""
from __future__ import annotations
import logging
import platform
from typing import Optional, Sequence

from ..errors import InvalidArgument, PlatformCommandError
from .runner import CommandRunner, SubprocessRunner

log = logging.getLogger(__name__)

STRATEGIES = ("auto", "graceful", "forceful")

def _ok(code: Optional[int]) -> bool:
    return code == 0

class Terminator:
    command = ""

    def __init__(self, runner: Optional[CommandRunner] = None):
        self.runner = runner if runner is not None else SubprocessRunner()

    def terminate(self, pid: int) -> None:
        if pid == 0:
            raise InvalidArgument("invalid pid")
        log.info("terminating pid %d (%s)", pid, type(self).__name__)
        self._terminate(pid)

    def _terminate(self, pid: int) -> None:
        raise NotImplementedError

    def _attempt(self, args: Sequence[str]) -> Optional[int]:
        return self.runner.run(list(args))

class ForcefulTerminator(Terminator):
    command = "taskkill"

    def _terminate(self, pid: int) -> None:
        code = self._attempt([self.command, "/PID", str(pid), "/T", "/F"])
        if not _ok(code):
            raise PlatformCommandError(self.command, code)
        log.info("pid %d terminated forcefully", pid)

class GracefulTerminator(Terminator):
    command = "kill"

    def _terminate(self, pid: int) -> None:
        if _ok(self._attempt([self.command, "-TERM", str(pid)])):
            log.info("pid %d terminated gracefully", pid)
            return

        log.warning("SIGTERM to pid %d failed, sending SIGKILL", pid)
        code = self._attempt([self.command, "-KILL", str(pid)])
        if not _ok(code):
            raise PlatformCommandError(self.command, code)
        log.info("pid %d terminated forcefully", pid)

def select_terminator(strategy: str = "auto", runner: Optional[CommandRunner] = None,
                      system: Optional[str] = None) -> Terminator:
    if strategy not in STRATEGIES:
        raise InvalidArgument(f"unknown kill strategy: {strategy!r}")
    if strategy == "auto":
        system = system or platform.system()
        strategy = "forceful" if system == "Windows" else "graceful"
    if strategy == "forceful":
        return ForcefulTerminator(runner)
    return GracefulTerminator(runner)
