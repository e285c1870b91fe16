from __future__ import annotations
import logging
from typing import List, Sequence

from ..models import ListenerInfo, PortRange, SocketState
from .processes import ProcessTableReader
from .sockets import SocketTableReader

log = logging.getLogger(__name__)

def in_any_range(port: int, ranges: Sequence[PortRange]) -> bool:
    return any(r.contains(port) for r in ranges)

class PortScanner:
    """Joins listening sockets in the requested port ranges with their owners."""

    def __init__(self, sockets=None, processes=None):
        self.sockets = sockets if sockets is not None else SocketTableReader()
        self.processes = processes if processes is not None else ProcessTableReader()

    def scan(self, ranges: Sequence[PortRange]) -> List[ListenerInfo]:
        if not ranges:
            return []

        sockets = self.sockets.read()
        procs = self.processes.read()

        out: List[ListenerInfo] = []
        for s in sockets:
            if s.state is not SocketState.LISTEN:
                continue
            if not in_any_range(s.local_port, ranges):
                continue
            for pid in s.owning_pids:
                proc = procs.get(pid)
                out.append(ListenerInfo(
                    port=s.local_port,
                    pid=pid,
                    process_name=proc.name if proc else None,
                    started_seconds_ago=proc.run_time_seconds if proc else None,
                ))
        log.debug("scan %s: %d listeners", ",".join(r.label() for r in ranges), len(out))
        return out
