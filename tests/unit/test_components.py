import pytest

from cache_universe.components import Cell, Coin, cache_id, parse_cache_id


def test_cells_are_structural_values() -> None:
    assert Cell(1, -2) == Cell(1, -2)
    assert hash(Cell(1, -2)) == hash(Cell(1, -2))
    assert len({Cell(1, -2), Cell(1, -2), Cell(-2, 1)}) == 2


def test_coin_id_format() -> None:
    assert Coin(Cell(369895, -1220627), 3).id == "369895:-1220627#3"


@pytest.mark.parametrize("coin_id", ["0:0#0", "-1:5#12", "369895:-1220627#4"])
def test_coin_parse_inverts_id(coin_id: str) -> None:
    assert Coin.parse(coin_id).id == coin_id


@pytest.mark.parametrize("coin_id", ["", "1:2", "1:2#", "a:b#1", "1:2#-1", "1;2#3"])
def test_coin_parse_rejects_malformed(coin_id: str) -> None:
    with pytest.raises(ValueError):
        Coin.parse(coin_id)


def test_cache_id_is_unique_per_cell() -> None:
    assert cache_id(Cell(1, 23)) == "cache_1_23"
    assert cache_id(Cell(12, 3)) == "cache_12_3"
    assert cache_id(Cell(1, 23)) != cache_id(Cell(12, 3))
    assert cache_id(Cell(-1, 2)) != cache_id(Cell(1, -2))


def test_parse_cache_id() -> None:
    assert parse_cache_id("cache_-4_17") == Cell(-4, 17)
    assert parse_cache_id("cache_4") is None
    assert parse_cache_id("box_1_2") is None
