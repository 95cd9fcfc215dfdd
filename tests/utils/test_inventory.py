# tests/utils/test_inventory.py

from pyrsistent import pvector

from cache_universe.components import Cell, Coin
from cache_universe.utils.inventory import pop_coin, push_coin, stored_coins, total_coins
from tests.test_utils import make_cache, make_cache_state


def test_push_and_pop_coin() -> None:
    a = Coin(Cell(0, 0), 0)
    b = Coin(Cell(0, 0), 1)
    coins = push_coin(push_coin(pvector(), a), b)
    assert list(coins) == [a, b]

    rest, top = pop_coin(coins)
    assert top == b
    assert list(rest) == [a]
    # persistent: original untouched
    assert list(coins) == [a, b]


def test_pop_empty() -> None:
    coins, top = pop_coin(pvector())
    assert top is None
    assert len(coins) == 0


def test_total_coins_counts_player_and_store() -> None:
    state = make_cache_state(
        [make_cache(Cell(1, 1), 3), make_cache(Cell(2, 2), 1)],
        inventory=[Coin(Cell(9, 9), 0), Coin(Cell(9, 9), 1)],
    )
    assert stored_coins(state) == 4
    assert total_coins(state) == 6
