from __future__ import annotations

import pytest

from port_o_potty.collectors import PortScanner, in_any_range
from port_o_potty.errors import SystemQueryError
from port_o_potty.models import ListenerInfo, PortRange

from .conftest import FakeProcessReader, FakeSocketReader, listen, other, proc


def test_end_to_end_single_listener():
    sockets = FakeSocketReader([listen(8005, 4242)])
    procs = FakeProcessReader([proc(4242, "myserver", 120)])
    result = PortScanner(sockets, procs).scan([PortRange(8000, 8010)])
    assert result == [ListenerInfo(port=8005, pid=4242, process_name="myserver", started_seconds_ago=120)]


def test_empty_ranges_does_not_query(socket_table, process_table):
    scanner = PortScanner(socket_table, process_table)
    assert scanner.scan([]) == []
    assert socket_table.calls == 0
    assert process_table.calls == 0


def test_results_lie_in_some_range(socket_table, process_table):
    ranges = [PortRange(2990, 3010), PortRange(8000, 8010)]
    result = PortScanner(socket_table, process_table).scan(ranges)
    assert {l.port for l in result} == {3000, 8005}
    for l in result:
        assert any(r.lower <= l.port <= r.upper for r in ranges)


def test_reversed_range_is_normalized(socket_table, process_table):
    scanner = PortScanner(socket_table, process_table)
    forward = scanner.scan([PortRange(8000, 9000)])
    backward = scanner.scan([PortRange(9000, 8000)])
    assert set(forward) == set(backward)
    assert [l.port for l in forward] == [8005]


def test_non_listening_sockets_are_skipped(process_table):
    sockets = FakeSocketReader([other(8001, 4242), other(8002, 100)])
    assert PortScanner(sockets, process_table).scan([PortRange(8000, 8010)]) == []


def test_missing_process_yields_null_fields():
    sockets = FakeSocketReader([listen(8080, 999)])
    result = PortScanner(sockets, FakeProcessReader()).scan([PortRange(8080, 8080)])
    assert result == [ListenerInfo(port=8080, pid=999, process_name=None, started_seconds_ago=None)]


def test_two_owners_yield_two_records():
    sockets = FakeSocketReader([listen(3001, 10, 11)])
    procs = FakeProcessReader([proc(10, "gunicorn", 50), proc(11, "gunicorn", 49)])
    result = PortScanner(sockets, procs).scan([PortRange(3000, 3999)])
    assert len(result) == 2
    assert {l.pid for l in result} == {10, 11}
    assert {l.port for l in result} == {3001}


def test_zero_owners_yield_nothing(process_table):
    sockets = FakeSocketReader([listen(3001)])
    assert PortScanner(sockets, process_table).scan([PortRange(3000, 3999)]) == []


def test_overlapping_ranges_do_not_duplicate(socket_table, process_table):
    result = PortScanner(socket_table, process_table).scan([PortRange(8000, 8010), PortRange(8005, 8005)])
    assert [l.port for l in result] == [8005]


def test_socket_error_skips_process_read(process_table):
    sockets = FakeSocketReader(error=SystemQueryError("denied"))
    with pytest.raises(SystemQueryError):
        PortScanner(sockets, process_table).scan([PortRange(1, 65535)])
    assert process_table.calls == 0


def test_repeated_scan_is_stable(socket_table, process_table):
    scanner = PortScanner(socket_table, process_table)
    ranges = [PortRange(0, 65535)]
    assert set(scanner.scan(ranges)) == set(scanner.scan(ranges))
    assert socket_table.calls == 2
    assert process_table.calls == 2


def test_in_any_range_bounds():
    ranges = [PortRange(10, 20)]
    assert in_any_range(10, ranges)
    assert in_any_range(20, ranges)
    assert not in_any_range(21, ranges)
    assert not in_any_range(5, [])
