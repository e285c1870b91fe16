"""Port range parsing for the command line and range files.

Range files are YAML (``.yaml``/``.yml``) or JSON lists of ``{start, end}``
objects::

    - {start: 3000, end: 3999}
    - {start: 8000, end: 8999}
"""
from __future__ import annotations
import json
import logging
import os
from pathlib import Path
from typing import Iterable, List, Optional, Union

import yaml

from .errors import InvalidArgument
from .models import MAX_PORT, MIN_PORT, PortRange

log = logging.getLogger(__name__)

BASE_DIR = Path(__file__).parent.resolve()

def _port(value) -> int:
    if isinstance(value, bool):
        raise InvalidArgument(f"invalid port: {value!r}")
    try:
        port = int(value)
    except (TypeError, ValueError):
        raise InvalidArgument(f"invalid port: {value!r}") from None
    if isinstance(value, float) and value != port:
        raise InvalidArgument(f"invalid port: {value!r}")
    if not MIN_PORT <= port <= MAX_PORT:
        raise InvalidArgument(f"port out of range: {port}")
    return port

def make_range(start, end) -> PortRange:
    return PortRange(_port(start), _port(end))

def ranges_from_objects(items: Optional[Iterable]) -> List[PortRange]:
    if items is None:
        return []
    if not isinstance(items, (list, tuple)):
        raise InvalidArgument(f"ranges must be a list, got {type(items).__name__}")
    out: List[PortRange] = []
    for item in items:
        if not isinstance(item, dict) or "start" not in item or "end" not in item:
            raise InvalidArgument(f"range must have 'start' and 'end': {item!r}")
        out.append(make_range(item["start"], item["end"]))
    return out

def parse_ranges(text: str) -> List[PortRange]:
    """Parse ``"3000-3999,8080"``; a bare number is a one-port range."""
    out: List[PortRange] = []
    for part in text.split(","):
        part = part.strip()
        if not part:
            continue
        if "-" in part:
            a, b = part.split("-", 1)
            out.append(make_range(a.strip(), b.strip()))
        else:
            out.append(make_range(part, part))
    return out

def resolve_path(p: Union[str, os.PathLike]) -> Path:
    """Absolute paths as given; relative ones against CWD, then the package dir."""
    pp = Path(p).expanduser()
    if pp.is_absolute():
        return pp.resolve()
    cwd = Path.cwd() / pp
    if cwd.exists():
        return cwd.resolve()
    return (BASE_DIR / pp).resolve()

def load_ranges(path: Optional[Union[str, os.PathLike]]) -> Optional[List[PortRange]]:
    """Load ranges from a file. Returns None when there is no file to read."""
    if not path:
        return None
    p = resolve_path(path)
    if not p.exists():
        log.warning("ranges file not found: %s", p)
        return None
    txt = p.read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(txt) if p.suffix in (".yaml", ".yml") else json.loads(txt)
    except (ValueError, yaml.YAMLError) as e:
        raise InvalidArgument(f"cannot parse ranges file {p}: {e}") from e
    if data is not None and not isinstance(data, list):
        raise InvalidArgument(f"ranges file must contain a list: {p}")
    return ranges_from_objects(data)
