"""Cache component.

A cache is a grid-cell-anchored container of coins. The coin sequence is
ordered and used as a stack: collecting pops from the tail, depositing pushes
onto the tail.

``Cache`` values held in :attr:`cache_universe.state.State.visible` are
projections of the snapshots in the cache store; the store is the
authoritative copy (see :mod:`cache_universe.memento`).
"""

import re
from dataclasses import dataclass
from typing import Optional

from pyrsistent.typing import PVector

from cache_universe.types import CacheID
from .cell import Cell
from .coin import Coin
from .coordinates import LatLng

_CACHE_ID_RE = re.compile(r"^cache_(-?\d+)_(-?\d+)$")


def cache_id(cell: Cell) -> CacheID:
    """Return the cache identity for ``cell`` (``"cache_{i}_{j}"``)."""
    return f"cache_{cell.i}_{cell.j}"


def parse_cache_id(value: str) -> Optional[Cell]:
    """Return the cell encoded in a cache id, or ``None`` if malformed."""
    match = _CACHE_ID_RE.match(value)
    if match is None:
        return None
    return Cell(int(match.group(1)), int(match.group(2)))


@dataclass(frozen=True)
class Cache:
    """Coin container anchored to a grid cell.

    Attributes:
        id: Identity derived from ``cell`` via :func:`cache_id`.
        cell: Anchor cell.
        location: South-west corner of ``cell`` in degrees.
        coins: Ordered coin stack (tail = top).
    """

    id: CacheID
    cell: Cell
    location: LatLng
    coins: PVector[Coin]

    @property
    def coin_count(self) -> int:
        return len(self.coins)
