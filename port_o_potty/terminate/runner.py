from __future__ import annotations
import logging
import subprocess
from typing import Optional, Sequence

from ..errors import PlatformCommandError

log = logging.getLogger(__name__)

class CommandRunner:
    """Runs an external command and returns its exit code.

    ``None`` means the OS reported no code (the command died from a signal).
    """

    def run(self, args: Sequence[str]) -> Optional[int]:
        raise NotImplementedError

class SubprocessRunner(CommandRunner):
    def run(self, args: Sequence[str]) -> Optional[int]:
        log.debug("run: %s", " ".join(args))
        try:
            proc = subprocess.run(list(args), stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
        except OSError as e:
            raise PlatformCommandError(args[0], None, str(e)) from e
        if proc.returncode < 0:
            return None
        return proc.returncode
