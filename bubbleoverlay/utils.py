#!/usr/bin/env python3
"""
Utility functions for point registration input and dataset loading.
"""

from __future__ import annotations

import json
import re
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import Any
from typing import BinaryIO

import msgpack

_WHITESPACE = re.compile(r"\s")
_STRIPPED = re.compile(r"[.']")


def name_to_id(name: Any) -> str:
    """
    Derive a stable identifier token from a point name.

    Lowercases, turns whitespace into underscores and drops dots and
    apostrophes. Distinct names can collapse onto the same token.
    """
    token = str(name).lower()
    token = _WHITESPACE.sub("_", token)
    return _STRIPPED.sub("", token)


def row_to_datum(row: Any) -> None | dict[str, Any]:
    """
    Convert one decoded input row to a {"key": ..., "value": ...} datum.

    Accepts (key, value) sequences, {"key": k, "value": v} mappings and
    single k:v dict rows. Comment rows (first element a string starting
    with '#') return None.
    """
    if isinstance(row, dict):
        if "key" in row and "value" in row:
            return {"key": row["key"], "value": row["value"]}
        if len(row) == 1:
            ((key, value),) = row.items()
            return {"key": key, "value": value}
        raise ValueError(f"Cannot interpret row {row!r} as key/value")

    if isinstance(row, (list, tuple)):
        if not row:
            return None
        if isinstance(row[0], str) and row[0].startswith("#"):
            return None
        if len(row) < 2:
            raise ValueError(f"Row {row!r} needs a key and a value")
        return {"key": row[0], "value": row[1]}

    raise ValueError(f"Cannot interpret row {row!r} as key/value")


def rows_to_data(rows: Iterable[Any]) -> list[dict[str, Any]]:
    data = []
    for row in rows:
        datum = row_to_datum(row)
        if datum is not None:
            data.append(datum)
    return data


def load_data_from_stream(stream: BinaryIO) -> list[dict[str, Any]]:
    """
    Read (key, value) rows from a messagepack stream.

    Args:
        stream: Binary stream of concatenated messagepack objects

    Returns:
        List of datum dicts
    """
    unpacker = msgpack.Unpacker(stream, raw=False)
    return rows_to_data(unpacker)


def load_data_from_stdin() -> list[dict[str, Any]]:
    """Read (key, value) rows from stdin via messagepack."""
    return load_data_from_stream(sys.stdin.buffer)


def load_points_file(path: str | Path) -> list[dict[str, Any]]:
    """
    Load point definitions from a JSON file.

    The file holds either a list of {"name", "x", "y"} objects or a
    mapping of name -> [x, y].
    """
    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    if isinstance(payload, dict):
        return [
            {"name": name, "x": xy[0], "y": xy[1]} for name, xy in payload.items()
        ]
    if isinstance(payload, list):
        return payload
    raise ValueError(f"{path}: expected a list of points or a name -> [x, y] mapping")
