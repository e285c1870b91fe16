from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional

MIN_PORT = 0
MAX_PORT = 65535
MAX_PID = 0xFFFFFFFF

@dataclass(frozen=True)
class PortRange:
    start: int
    end: int

    @property
    def lower(self) -> int:
        return min(self.start, self.end)

    @property
    def upper(self) -> int:
        return max(self.start, self.end)

    def contains(self, port: int) -> bool:
        return self.lower <= port <= self.upper

    def label(self) -> str:
        return f"{self.lower}-{self.upper}"

class SocketState(Enum):
    LISTEN = "LISTEN"
    OTHER = "OTHER"

@dataclass(frozen=True)
class SocketRecord:
    local_port: int
    state: SocketState
    owning_pids: FrozenSet[int] = field(default_factory=frozenset)

@dataclass(frozen=True)
class ProcessRecord:
    pid: int
    name: str
    run_time_seconds: int

@dataclass(frozen=True)
class ListenerInfo:
    port: int
    pid: int
    process_name: Optional[str] = None
    started_seconds_ago: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "port": self.port,
            "pid": self.pid,
            "process_name": self.process_name,
            "started_seconds_ago": self.started_seconds_ago,
        }
