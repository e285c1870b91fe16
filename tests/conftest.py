from __future__ import annotations
from collections import namedtuple

import pytest

from port_o_potty.models import ProcessRecord, SocketRecord, SocketState

Addr = namedtuple("addr", ["ip", "port"])
Conn = namedtuple("sconn", ["fd", "family", "type", "laddr", "raddr", "status", "pid"])


class FakeSocketReader:
    def __init__(self, records=(), error=None):
        self.records = list(records)
        self.error = error
        self.calls = 0

    def read(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.records)


class FakeProcessReader:
    def __init__(self, procs=()):
        self.procs = {p.pid: p for p in procs}
        self.calls = 0

    def read(self):
        self.calls += 1
        return dict(self.procs)


class FakeRunner:
    """Records every command; returns scripted exit codes in order."""

    def __init__(self, *codes):
        self.codes = list(codes)
        self.calls = []

    def run(self, args):
        self.calls.append(list(args))
        return self.codes.pop(0)


def listen(port, *pids):
    return SocketRecord(local_port=port, state=SocketState.LISTEN, owning_pids=frozenset(pids))


def other(port, *pids):
    return SocketRecord(local_port=port, state=SocketState.OTHER, owning_pids=frozenset(pids))


def proc(pid, name, run_time):
    return ProcessRecord(pid=pid, name=name, run_time_seconds=run_time)


@pytest.fixture
def socket_table():
    return FakeSocketReader([
        listen(8005, 4242),
        listen(3000, 100),
        other(8006, 4242),
        listen(9500, 7),
    ])


@pytest.fixture
def process_table():
    return FakeProcessReader([
        proc(4242, "myserver", 120),
        proc(100, "node", 3600),
        proc(7, "redis-server", 10),
    ])
