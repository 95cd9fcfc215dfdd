"""Coin stack helpers.

Both the player inventory and a cache's coin sequence are persistent vectors
used as stacks: push appends to the tail, pop removes from the tail.
"""

from typing import Optional, Tuple

from pyrsistent.typing import PVector

from cache_universe.components import Coin
from cache_universe.state import State


def push_coin(coins: PVector[Coin], coin: Coin) -> PVector[Coin]:
    """Return ``coins`` with ``coin`` on top."""
    return coins.append(coin)


def pop_coin(coins: PVector[Coin]) -> Tuple[PVector[Coin], Optional[Coin]]:
    """Return ``coins`` without its top coin, plus that coin (``None`` if empty)."""
    if not coins:
        return coins, None
    return coins.delete(len(coins) - 1), coins[-1]


def stored_coins(state: State) -> int:
    """Number of coins held in every cache the store knows about."""
    return sum(len(snapshot.coin_ids) for snapshot in state.store.snapshots.values())


def total_coins(state: State) -> int:
    """Player coins plus stored cache coins; invariant under transfers."""
    return len(state.inventory) + stored_coins(state)
