from cache_universe.components import Cell, Coin
from cache_universe.state import new_game
from cache_universe.utils.render import cache_markers, cache_popup_text, inventory_text
from tests.test_utils import make_cache


def test_cache_popup_text() -> None:
    cache = make_cache(Cell(369890, -1220630), 2)
    assert cache_popup_text(cache) == (
        "Cache at (36.98900, -122.06300)\n"
        "Coins: 369890:-1220630#0, 369890:-1220630#1"
    )


def test_inventory_text() -> None:
    assert inventory_text([]) == "Inventory: (empty)"
    coins = [Coin(Cell(1, 2), 0), Coin(Cell(3, 4), 1)]
    assert inventory_text(coins) == "Inventory: 1:2#0, 3:4#1"


def test_cache_markers_cover_visible_caches() -> None:
    state = new_game()
    markers = cache_markers(state)
    assert [m["id"] for m in markers] == sorted(state.visible)
    for marker in markers:
        cache = state.visible[marker["id"]]
        assert marker["coins"] == cache.coin_count
        assert marker["lat"] == cache.location.lat
