#!/usr/bin/env python3
# tab-width:4

from __future__ import annotations

from collections.abc import Callable
from collections.abc import Iterable
from typing import Any


def map_data(
    data: Iterable[Any],
    key_accessor: Callable[[Any], Any],
) -> dict[Any, Any]:
    """
    Build the key -> datum map for one render cycle.

    Later records with a duplicate key replace earlier ones.
    """
    mapped = {}
    for datum in data:
        mapped[key_accessor(datum)] = datum
    return mapped
