from __future__ import annotations
import logging
import time
from typing import Callable, Dict

import psutil

from ..models import ProcessRecord

log = logging.getLogger(__name__)

class ProcessTableReader:
    """Reads the live process table: name and elapsed run time per PID.

    Nothing is cached between calls. Processes that exit mid-iteration, or
    whose name or start time cannot be read, are left out of the mapping.
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        self.clock = clock

    def read(self) -> Dict[int, ProcessRecord]:
        procs: Dict[int, ProcessRecord] = {}
        now = self.clock()
        for p in psutil.process_iter(['pid', 'name', 'create_time']):
            # with attrs, unreadable fields come back as None instead of raising
            info = p.info
            pid = info.get('pid')
            name = info.get('name')
            created = info.get('create_time')
            if pid is None or name is None or created is None:
                continue
            procs[pid] = ProcessRecord(pid=pid, name=name,
                                       run_time_seconds=max(0, int(now - created)))
        log.debug("process snapshot: %d processes", len(procs))
        return procs
