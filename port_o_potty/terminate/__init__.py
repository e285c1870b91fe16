from .runner import CommandRunner, SubprocessRunner
from .terminator import (STRATEGIES, ForcefulTerminator, GracefulTerminator,
                         Terminator, select_terminator)

__all__ = ["CommandRunner", "SubprocessRunner", "Terminator", "ForcefulTerminator",
           "GracefulTerminator", "select_terminator", "STRATEGIES"]
