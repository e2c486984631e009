"""I/O utilities for almanac text input and orjson report output."""
from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import orjson


def read_text(path: Path) -> str:
    """Read a UTF-8 text file."""
    return path.read_text(encoding="utf-8")


def dump_json(obj: Any) -> None:
    """Write an object to stdout as indented JSON."""
    sys.stdout.flush()
    sys.stdout.buffer.write(orjson.dumps(obj, option=orjson.OPT_INDENT_2))
    sys.stdout.buffer.write(b"\n")
    sys.stdout.buffer.flush()


def save_json(obj: Any, path: Path, *, pretty: bool = True) -> None:
    """Save an object as JSON with sorted keys."""
    path.parent.mkdir(parents=True, exist_ok=True)
    opts = (
        orjson.OPT_INDENT_2 | orjson.OPT_SORT_KEYS
        if pretty
        else orjson.OPT_SORT_KEYS
    )
    path.write_bytes(orjson.dumps(obj, option=opts))


def load_json(path: Path) -> Any:
    return orjson.loads(path.read_bytes())
