"""The two operations as plain functions over JSON-shaped values."""
from __future__ import annotations
from typing import Iterable, List, Optional

from .collectors import PortScanner
from .errors import InvalidArgument
from .models import MAX_PID
from .ranges import ranges_from_objects
from .terminate import Terminator, select_terminator

def check_pid(pid) -> int:
    if isinstance(pid, bool) or not isinstance(pid, int) or not 0 <= pid <= MAX_PID:
        raise InvalidArgument(f"invalid pid: {pid!r}")
    return pid

def scan_ports(ranges: Iterable[dict], scanner: Optional[PortScanner] = None) -> List[dict]:
    scanner = scanner or PortScanner()
    return [l.to_dict() for l in scanner.scan(ranges_from_objects(ranges))]

def kill_pid(pid: int, terminator: Optional[Terminator] = None) -> None:
    check_pid(pid)
    terminator = terminator or select_terminator()
    terminator.terminate(pid)
