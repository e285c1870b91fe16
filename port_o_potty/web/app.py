from __future__ import annotations
from typing import Optional

import orjson
from flask import Flask, Response, current_app, request

from ..api import check_pid
from ..collectors import PortScanner
from ..config import CFG
from ..errors import InvalidArgument, PlatformCommandError, PortOPottyError, SystemQueryError
from ..format import dedupe_listeners
from ..ranges import ranges_from_objects
from ..terminate import Terminator, select_terminator
from .ui import render_html

def dumps(obj) -> str:
    return orjson.dumps(obj).decode()

def _json(obj, status: int = 200) -> Response:
    return Response(dumps(obj), status=status, mimetype="application/json")

def _error(e: PortOPottyError) -> Response:
    status = 400 if isinstance(e, InvalidArgument) else 500
    return _json({"error": str(e)}, status)

def _body() -> dict:
    if not request.data:
        return {}
    try:
        data = orjson.loads(request.data)
    except orjson.JSONDecodeError as e:
        raise InvalidArgument(f"malformed JSON body: {e}") from None
    if not isinstance(data, dict):
        raise InvalidArgument("JSON body must be an object")
    return data

def create_app(cfg: CFG, scanner: Optional[PortScanner] = None,
               terminator: Optional[Terminator] = None) -> Flask:
    app = Flask(__name__)
    scanner = scanner or PortScanner()
    terminator = terminator or select_terminator(cfg.kill_strategy)

    app.register_error_handler(InvalidArgument, _error)
    app.register_error_handler(SystemQueryError, _error)
    app.register_error_handler(PlatformCommandError, _error)

    @app.get("/")
    def index():
        return Response(render_html(cfg.ranges, cfg.refresh_seconds), mimetype="text/html")

    @app.get("/api/ranges")
    def api_ranges():
        return _json([{"start": r.start, "end": r.end} for r in cfg.ranges])

    @app.post("/api/scan")
    def api_scan():
        body = _body()
        ranges = ranges_from_objects(body["ranges"]) if "ranges" in body else cfg.ranges
        try:
            listeners = scanner.scan(ranges)
        except SystemQueryError as e:
            current_app.logger.error("scan failed: %s", e)
            raise
        return _json([l.to_dict() for l in dedupe_listeners(listeners)])

    @app.post("/api/kill")
    def api_kill():
        pid = check_pid(_body().get("pid"))
        try:
            terminator.terminate(pid)
        except PlatformCommandError as e:
            current_app.logger.warning("kill %d failed: %s", pid, e)
            raise
        current_app.logger.info("killed pid %d", pid)
        return _json({"ok": True})

    return app
