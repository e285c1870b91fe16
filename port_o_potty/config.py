from __future__ import annotations
from dataclasses import dataclass, field
from typing import List

from .errors import InvalidArgument
from .models import PortRange
from .ranges import load_ranges, parse_ranges

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8765
DEFAULT_REFRESH_SECONDS = 15.0
DEFAULT_RANGES = (PortRange(3000, 3999), PortRange(8000, 8999))
RANGES_STORAGE_KEY = "port_o_potty_ranges_v1"

@dataclass
class CFG:
    ranges: List[PortRange] = field(default_factory=lambda: list(DEFAULT_RANGES))
    kill_strategy: str = "auto"
    refresh_seconds: float = DEFAULT_REFRESH_SECONDS

def init_cfg_from_args(args) -> CFG:
    cfg = CFG()
    cfg.kill_strategy = getattr(args, "kill_strategy", None) or "auto"
    refresh = getattr(args, "refresh", None)
    if refresh is not None:
        if refresh <= 0:
            raise InvalidArgument(f"refresh interval must be positive, got {refresh}")
        cfg.refresh_seconds = float(refresh)

    if getattr(args, "ranges_file", None):
        loaded = load_ranges(args.ranges_file)
        if loaded is not None:
            cfg.ranges = loaded
    if getattr(args, "ranges", ""):
        cfg.ranges = parse_ranges(args.ranges)
    return cfg
