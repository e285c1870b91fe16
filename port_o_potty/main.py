from __future__ import annotations
import argparse, logging, sys

import orjson

from .collectors import PortScanner
from .config import DEFAULT_HOST, DEFAULT_PORT, DEFAULT_REFRESH_SECONDS, init_cfg_from_args
from .errors import InvalidArgument, SystemQueryError
from .format import dedupe_listeners, sort_listeners
from .terminate import STRATEGIES, select_terminator
from .web import create_app

def parse_args(argv=None):
    ap = argparse.ArgumentParser(description='Show TCP listeners in port ranges and kill their processes')
    ap.add_argument('--host', type=str, default=DEFAULT_HOST)
    ap.add_argument('--port', type=int, default=DEFAULT_PORT)
    ap.add_argument('--ranges', type=str, default='', help='comma-separated port ranges (e.g. 3000-3999,8080)')
    ap.add_argument('--ranges-file', type=str, default=None, help='YAML or JSON list of {start, end} objects')
    ap.add_argument('--kill-strategy', choices=STRATEGIES, default='auto',
                    help='graceful: SIGTERM then SIGKILL; forceful: taskkill /T /F; auto: by platform')
    ap.add_argument('--refresh', type=float, default=DEFAULT_REFRESH_SECONDS, help='UI auto-refresh interval in seconds')
    ap.add_argument('--once', action='store_true', help='scan once, print JSON and exit')
    ap.add_argument('--log-level', type=str, default='INFO')
    return ap.parse_args(argv)

def run_once(cfg, scanner=None, out=None) -> int:
    out = out or sys.stdout
    scanner = scanner or PortScanner()
    try:
        listeners = scanner.scan(cfg.ranges)
    except SystemQueryError as e:
        print(f"[error] {e}", file=sys.stderr)
        return 1
    rows = [l.to_dict() for l in sort_listeners(dedupe_listeners(listeners))]
    out.write(orjson.dumps(rows, option=orjson.OPT_INDENT_2).decode() + "\n")
    return 0

def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO),
                        format='%(asctime)s %(levelname)s %(name)s: %(message)s')
    try:
        cfg = init_cfg_from_args(args)
    except InvalidArgument as e:
        print(f"[error] {e}", file=sys.stderr)
        return 2

    if args.once:
        return run_once(cfg)

    app = create_app(cfg, terminator=select_terminator(cfg.kill_strategy))
    print(f"[*] watching: {', '.join(r.label() for r in cfg.ranges) or '-'}")
    print(f"[*] Serving on http://{args.host}:{args.port}")
    app.run(host=args.host, port=args.port, debug=False, use_reloader=False)
    return 0

if __name__ == '__main__':
    sys.exit(main())
