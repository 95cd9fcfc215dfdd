"""Coin transfer systems.

``collect_system`` and ``deposit_system`` move exactly one coin per call
between the player's inventory and a visible cache:

1. Validate the target. An unknown / out-of-range cache, an empty source
   stack or (with ``single_visit_collect``) an already visited cache rejects
   the command: the returned state differs from the input only in
   ``message``.
2. Pop the top coin from the source stack and push it onto the target stack.
3. Write the mutated cache's snapshot into the store and its projection into
   the visible view before returning.

Because every transfer is a single pure call returning the next state, no
reader can observe a cache whose view and store disagree.
"""

import logging
from dataclasses import replace
from typing import Optional

from cache_universe.components import Cache
from cache_universe.memento import save_cache
from cache_universe.state import State
from cache_universe.types import CacheID
from cache_universe.utils.inventory import pop_coin, push_coin

logger = logging.getLogger(__name__)


def _reject(state: State, message: str) -> State:
    logger.info("Rejected: %s", message)
    return replace(state, message=message)


def _commit(state: State, cache: Cache) -> State:
    """Persist ``cache`` into both the store and the live view."""
    return replace(
        state,
        store=state.store.put(cache.id, save_cache(cache)),
        visible=state.visible.set(cache.id, cache),
    )


def _target(state: State, cache_id: CacheID) -> Optional[Cache]:
    return state.visible.get(cache_id)


def collect_system(state: State, cache_id: CacheID) -> State:
    """Move the top coin of ``cache_id`` into the player's inventory.

    Arguments:
        state:
            Current immutable state.
        cache_id:
            Identity of a currently visible cache.

    Returns:
        State
            On success, the state with one coin transferred, the cache marked
            visited and its snapshot stored. On failure, ``state`` with
            ``message`` set.
    """
    cache = _target(state, cache_id)
    if cache is None:
        return _reject(state, f"Unknown cache: {cache_id}")
    if state.config.single_visit_collect and cache_id in state.visited:
        return _reject(state, "You have already visited this cache!")

    coins, coin = pop_coin(cache.coins)
    if coin is None:
        return _reject(state, f"Cache {cache_id} has no coins")

    state = _commit(state, replace(cache, coins=coins))
    logger.debug("Collected %s from %s", coin.id, cache_id)
    return replace(
        state,
        inventory=push_coin(state.inventory, coin),
        visited=state.visited.add(cache_id),
        message=None,
    )


def deposit_system(state: State, cache_id: CacheID) -> State:
    """Move the top coin of the player's inventory into ``cache_id``."""
    cache = _target(state, cache_id)
    if cache is None:
        return _reject(state, f"Unknown cache: {cache_id}")

    inventory, coin = pop_coin(state.inventory)
    if coin is None:
        return _reject(state, "Inventory is empty")

    state = _commit(state, replace(cache, coins=push_coin(cache.coins, coin)))
    logger.debug("Deposited %s into %s", coin.id, cache_id)
    return replace(state, inventory=inventory, message=None)
