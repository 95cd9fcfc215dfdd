"""Presentation data for UI collaborators.

Nothing here draws anything. These helpers turn the state into the labels a
map front end shows per cache and for the inventory panel.
"""

from typing import Any, Dict, Iterable, List

from cache_universe.components import Cache, Coin
from cache_universe.state import State


def coin_list(coins: Iterable[Coin]) -> str:
    return ", ".join(coin.id for coin in coins)


def cache_popup_text(cache: Cache) -> str:
    """Two-line popup label: anchor coordinate and coin ids."""
    return (
        f"Cache at ({cache.location.lat:.5f}, {cache.location.lng:.5f})\n"
        f"Coins: {coin_list(cache.coins)}"
    )


def inventory_text(inventory: Iterable[Coin]) -> str:
    coins = coin_list(inventory)
    return f"Inventory: {coins}" if coins else "Inventory: (empty)"


def cache_markers(state: State) -> List[Dict[str, Any]]:
    """One marker payload per visible cache, sorted by cache id."""
    return [
        {
            "id": cache.id,
            "lat": cache.location.lat,
            "lng": cache.location.lng,
            "coins": cache.coin_count,
            "label": cache_popup_text(cache),
        }
        for _, cache in sorted(state.visible.items())
    ]
