"""World view system.

Materializes the caches inside the player's visibility window. For each cell
of the ``(2 * neighborhood + 1) ** 2`` square centered on the player's cell,
a stored snapshot is restored if present; otherwise the generator decides,
and a newly generated cache is recorded in the store on the way.

The result replaces ``State.visible`` wholesale. Caches that fall out of the
window are simply dropped from the view; their snapshots stay in the store.
For a fixed position and store the visible set is exactly reproducible.
"""

from dataclasses import replace
from typing import Dict, Optional, Tuple

from pyrsistent import pmap
from pyrsistent.typing import PMap

from cache_universe.components import Cache, Cell
from cache_universe.config import WorldConfig
from cache_universe.generator import discover_cache
from cache_universe.grid import CellIndex, cell_of, neighborhood
from cache_universe.memento import CacheStore
from cache_universe.state import State
from cache_universe.types import CacheID


def visible_caches(
    store: CacheStore, center: Cell, config: WorldConfig
) -> Tuple[CacheStore, PMap[CacheID, Cache]]:
    """Resolve every cache within ``config.neighborhood`` cells of ``center``.

    Returns:
        The store extended with any first-time discoveries, and the visible
        caches keyed by id.
    """
    visible: Dict[CacheID, Cache] = {}
    for cell in neighborhood(center, config.neighborhood):
        store, cache = discover_cache(store, cell, config)
        if cache is not None:
            visible[cache.id] = cache
    return store, pmap(visible)


def view_system(state: State, cells: Optional[CellIndex] = None) -> State:
    """Recompute ``state.visible`` around the player's current cell.

    Args:
        state (State): Current world state.
        cells (CellIndex | None): Optional interning index; when given the
            center cell is resolved through it.

    Returns:
        State: New state with the refreshed view and (possibly grown) store.
    """
    if cells is not None:
        center = cells.cell_of(state.position)
    else:
        center = cell_of(state.position, state.config.grid_size)
    store, visible = visible_caches(state.store, center, state.config)
    return replace(state, store=store, visible=visible)
