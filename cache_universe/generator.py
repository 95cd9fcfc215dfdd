"""Deterministic cache generator.

Whether a cell holds a cache, and how many coins it starts with, is a pure
function of the cell coordinates. ``pseudo_random`` is a hash-like sine
generator, not a source of randomness; its arithmetic must stay exactly
``abs(sin(seed) * 10000) % 1`` or previously explored worlds change shape.

Two seeds are drawn per cell:

* existence: ``i * neighborhood + j`` compared against ``cache_probability``
* coin count: ``i + j + 1`` scaled by ``max_coins`` and floored

:func:`discover_cache` is the store-aware entry point used by the world view:
a stored snapshot always wins over regeneration, and a freshly generated
cache is written to the store before it is returned. Cells that test absent
are not recorded; re-testing them is cheap and gives the same answer.
"""

import logging
import math
from typing import Optional, Tuple

from pyrsistent import pvector

from cache_universe.components import Cache, Cell, Coin, cache_id
from cache_universe.config import WorldConfig
from cache_universe.grid import cell_location
from cache_universe.memento import CacheStore, restore_cache, save_cache

logger = logging.getLogger(__name__)


def pseudo_random(seed: int) -> float:
    """Map an integer seed to a reproducible value in ``[0, 1)``."""
    return abs(math.sin(seed) * 10000) % 1


def _check_cell(cell: Cell) -> None:
    if not isinstance(cell.i, int) or not isinstance(cell.j, int):
        raise TypeError(f"Cell indices must be integers, got {cell!r}")


def cache_exists(cell: Cell, config: WorldConfig) -> bool:
    """Existence test for ``cell``."""
    _check_cell(cell)
    return pseudo_random(cell.i * config.neighborhood + cell.j) < config.cache_probability


def coin_count(cell: Cell, config: WorldConfig) -> int:
    """Initial number of coins minted in ``cell`` (``0 .. max_coins - 1``)."""
    _check_cell(cell)
    return math.floor(pseudo_random(cell.i + cell.j + 1) * config.max_coins)


def generate_cache(cell: Cell, config: WorldConfig) -> Optional[Cache]:
    """Return the initial cache for ``cell``, or ``None`` if the cell is empty.

    Pure: never consults or updates any store.

    Raises:
        TypeError: If ``cell`` does not hold integer indices.
    """
    if not cache_exists(cell, config):
        return None
    coins = pvector(Coin(cell, serial) for serial in range(coin_count(cell, config)))
    return Cache(
        id=cache_id(cell),
        cell=cell,
        location=cell_location(cell, config.grid_size),
        coins=coins,
    )


def discover_cache(
    store: CacheStore, cell: Cell, config: WorldConfig
) -> Tuple[CacheStore, Optional[Cache]]:
    """Resolve the cache at ``cell``: restore if stored, otherwise generate.

    Returns:
        Tuple of the (possibly extended) store and the cache, or ``None`` if
        the cell holds no cache.
    """
    cid = cache_id(cell)
    snapshot = store.get(cid)
    if snapshot is not None:
        return store, restore_cache(snapshot)

    cache = generate_cache(cell, config)
    if cache is None:
        return store, None
    logger.debug("Discovered %s with %d coins", cache.id, cache.coin_count)
    return store.put(cache.id, save_cache(cache)), cache
