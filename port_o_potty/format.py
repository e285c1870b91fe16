from __future__ import annotations
from typing import Dict, Iterable, List, Optional, Tuple

from .models import ListenerInfo

SORT_KEYS = ("port", "process", "pid", "started")

def format_uptime(seconds_ago: Optional[int]) -> str:
    if seconds_ago is None:
        return "—"
    if seconds_ago < 60:
        return f"{seconds_ago}s ago"
    minutes = seconds_ago // 60
    if minutes < 60:
        return f"{minutes}m ago"
    hours = minutes // 60
    if hours < 48:
        return f"{hours}h ago"
    return f"{hours // 24}d ago"

def dedupe_listeners(listeners: Iterable[ListenerInfo]) -> List[ListenerInfo]:
    """One entry per (port, pid); the last one wins, first-seen order is kept."""
    uniq: Dict[Tuple[int, int], ListenerInfo] = {}
    for l in listeners:
        uniq[(l.port, l.pid)] = l
    return list(uniq.values())

def sort_listeners(listeners: Iterable[ListenerInfo], key: str = "port",
                   descending: bool = False) -> List[ListenerInfo]:
    if key not in SORT_KEYS:
        raise ValueError(f"unknown sort key: {key!r}")
    items = list(listeners)
    # stable sorts: tie-breakers first, primary key last
    items.sort(key=lambda l: (l.port, l.pid))
    if key == "port":
        items.sort(key=lambda l: l.port, reverse=descending)
    elif key == "pid":
        items.sort(key=lambda l: l.pid, reverse=descending)
    else:
        if key == "process":
            value = lambda l: l.process_name.casefold() if l.process_name is not None else None
        else:
            value = lambda l: l.started_seconds_ago
        known = [l for l in items if value(l) is not None]
        unknown = [l for l in items if value(l) is None]
        known.sort(key=value, reverse=descending)
        items = known + unknown
    return items
