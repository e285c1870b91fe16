from __future__ import annotations
import logging
from typing import Dict, List, Set

import psutil

from ..errors import SystemQueryError
from ..models import SocketRecord, SocketState

log = logging.getLogger(__name__)

class SocketTableReader:
    """Reads the live TCP socket table (IPv4 and IPv6) with owning PIDs.

    psutil reports one row per (socket, process) pair, so a listening socket
    inherited by forked workers shows up several times. Rows are folded back
    into one SocketRecord per (family, local address, state) with every PID
    collected into ``owning_pids``.
    """

    kind = 'tcp'

    def read(self) -> List[SocketRecord]:
        try:
            conns = psutil.net_connections(kind=self.kind)
        except (psutil.Error, OSError) as e:
            raise SystemQueryError(f"cannot enumerate sockets: {e}") from e

        owners: Dict[tuple, Set[int]] = {}
        for c in conns:
            if not c.laddr:
                continue
            ip, port = c.laddr.ip, c.laddr.port
            state = SocketState.LISTEN if c.status == psutil.CONN_LISTEN else SocketState.OTHER
            key = (int(c.family), ip, port, state)
            pids = owners.setdefault(key, set())
            if c.pid:
                pids.add(int(c.pid))

        records = [SocketRecord(local_port=port, state=state, owning_pids=frozenset(pids))
                   for (_, _, port, state), pids in owners.items()]
        log.debug("socket snapshot: %d rows, %d sockets", len(conns), len(records))
        return records
