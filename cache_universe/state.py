"""Core immutable world ``State`` dataclass.

This module defines the frozen :class:`State` object that represents the
whole session at one point in time: the player, the cache store and the live
view. All systems are pure functions that take a previous ``State`` plus
inputs and return a *new* ``State``; nothing is mutated in place.

Design notes:

* ``store`` is the authoritative copy of every cache ever discovered.
  ``visible`` only holds projections of the caches within the player's
  visibility window and is rebuilt wholesale by the view system.
* ``inventory`` and each cache's ``coins`` are persistent vectors used as
  stacks (tail = top).
* ``message`` carries the outcome of the latest soft failure (empty cache,
  empty inventory, unknown cache) for the presentation layer. Successful
  commands clear it.

See :mod:`cache_universe.step` for how the reducer orchestrates systems.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from pyrsistent import PMap, PSet, pmap, pset, pvector
from pyrsistent.typing import PVector

from cache_universe.components import Cache, Coin, LatLng
from cache_universe.config import DEFAULT_CONFIG, WorldConfig
from cache_universe.memento import CacheStore
from cache_universe.types import CacheID


@dataclass(frozen=True)
class State:
    """Immutable world state.

    Attributes:
        config (WorldConfig): Generation / movement parameters.
        position (LatLng): Current player position.
        inventory (PVector[Coin]): Coins held by the player, in collection order.
        visited (PSet[CacheID]): Caches the player has collected from.
        history (PVector[LatLng]): Positions reached by every move, oldest first.
        store (CacheStore): Snapshot of every discovered cache.
        visible (PMap[CacheID, Cache]): Caches materialized around the player.
        turn (int): Number of state-changing commands applied.
        message (str | None): Outcome of the last rejected command.
    """

    config: WorldConfig = DEFAULT_CONFIG
    position: LatLng = field(default_factory=lambda: DEFAULT_CONFIG.start)

    # Player
    inventory: PVector[Coin] = pvector()
    visited: PSet[CacheID] = pset()
    history: PVector[LatLng] = pvector()

    # World
    store: CacheStore = CacheStore()
    visible: PMap[CacheID, Cache] = pmap()

    # Status
    turn: int = 0
    message: Optional[str] = None

    @property
    def description(self) -> PMap[str, Any]:
        """Sparse serialization of non-empty fields, for diagnostics."""
        description: PMap[str, Any] = pmap()
        for name in self.__dataclass_fields__:
            value = getattr(self, name)
            if isinstance(value, (type(pmap()), type(pvector()), type(pset()))):
                if len(value) == 0:
                    continue
            elif isinstance(value, CacheStore) and len(value) == 0:
                continue
            description = description.set(name, value)
        return description


def new_game(config: WorldConfig = DEFAULT_CONFIG) -> State:
    """Return the new-game state with the view already populated.

    The player starts at ``config.start`` with an empty inventory, an empty
    store and an empty movement trail.
    """
    from cache_universe.systems.view import view_system

    return view_system(State(config=config, position=config.start))
