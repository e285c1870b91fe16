from __future__ import annotations

import pytest

from port_o_potty.collectors import PortScanner
from port_o_potty.config import CFG, RANGES_STORAGE_KEY
from port_o_potty.errors import SystemQueryError
from port_o_potty.models import PortRange
from port_o_potty.terminate import GracefulTerminator
from port_o_potty.web import create_app

from .conftest import FakeProcessReader, FakeRunner, FakeSocketReader, listen, proc


@pytest.fixture
def runner():
    return FakeRunner(0)


@pytest.fixture
def client(socket_table, process_table, runner):
    cfg = CFG(ranges=[PortRange(8000, 8010)], refresh_seconds=5)
    app = create_app(cfg, PortScanner(socket_table, process_table), GracefulTerminator(runner))
    return app.test_client()


def test_index_embeds_defaults(client):
    r = client.get("/")
    assert r.status_code == 200
    body = r.get_data(as_text=True)
    assert RANGES_STORAGE_KEY in body
    assert '[{"start": 8000, "end": 8010}]' in body
    assert "const REFRESH_MS = 5000;" in body


def test_ranges_endpoint(client):
    assert client.get("/api/ranges").get_json() == [{"start": 8000, "end": 8010}]


def test_scan_uses_configured_ranges(client):
    r = client.post("/api/scan")
    assert r.status_code == 200
    assert r.get_json() == [{"port": 8005, "pid": 4242, "process_name": "myserver", "started_seconds_ago": 120}]


def test_scan_with_explicit_ranges(client):
    r = client.post("/api/scan", json={"ranges": [{"start": 3999, "end": 2000}]})
    assert r.get_json() == [{"port": 3000, "pid": 100, "process_name": "node", "started_seconds_ago": 3600}]


def test_scan_empty_ranges(client, socket_table):
    assert client.post("/api/scan", json={"ranges": []}).get_json() == []
    assert socket_table.calls == 0


def test_scan_dedupes_port_pid_pairs():
    sockets = FakeSocketReader([listen(3000, 1), listen(3000, 1)])
    cfg = CFG(ranges=[PortRange(3000, 3000)])
    app = create_app(cfg, PortScanner(sockets, FakeProcessReader([proc(1, "x", 1)])), GracefulTerminator(FakeRunner()))
    assert len(app.test_client().post("/api/scan").get_json()) == 1


def test_scan_bad_range_is_400(client):
    r = client.post("/api/scan", json={"ranges": [{"start": 1, "end": 70000}]})
    assert r.status_code == 400
    assert "out of range" in r.get_json()["error"]


def test_scan_malformed_json_is_400(client):
    r = client.post("/api/scan", data="{nope", content_type="application/json")
    assert r.status_code == 400


def test_scan_system_error_is_500(process_table):
    sockets = FakeSocketReader(error=SystemQueryError("cannot enumerate sockets: denied"))
    app = create_app(CFG(), PortScanner(sockets, process_table), GracefulTerminator(FakeRunner()))
    r = app.test_client().post("/api/scan")
    assert r.status_code == 500
    assert r.get_json() == {"error": "cannot enumerate sockets: denied"}


def test_kill_ok(client, runner):
    r = client.post("/api/kill", json={"pid": 4242})
    assert r.get_json() == {"ok": True}
    assert runner.calls == [["kill", "-TERM", "4242"]]


@pytest.mark.parametrize("pid", [0, -1, 2 ** 32, "12", None, True])
def test_kill_invalid_pid(client, runner, pid):
    r = client.post("/api/kill", json={"pid": pid})
    assert r.status_code == 400
    assert runner.calls == []


def test_kill_failure_is_500(socket_table, process_table):
    app = create_app(CFG(), PortScanner(socket_table, process_table), GracefulTerminator(FakeRunner(1, 1)))
    r = app.test_client().post("/api/kill", json={"pid": 77})
    assert r.status_code == 500
    assert r.get_json() == {"error": "kill failed (exit 1)"}


@pytest.mark.parametrize("ranges", [5, "8000-8010", {"start": 1, "end": 2}])
def test_scan_non_list_ranges_is_400(client, socket_table, ranges):
    r = client.post("/api/scan", json={"ranges": ranges})
    assert r.status_code == 400
    assert "ranges must be a list" in r.get_json()["error"]
    assert socket_table.calls == 0


def test_kill_accepts_max_uint32(client, runner):
    assert client.post("/api/kill", json={"pid": 2 ** 32 - 1}).get_json() == {"ok": True}
    assert runner.calls == [["kill", "-TERM", str(2 ** 32 - 1)]]
