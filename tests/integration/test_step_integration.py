import pytest

from cache_universe.actions import (
    CollectCommand,
    DepositCommand,
    Direction,
    MoveCommand,
    RefreshCommand,
    RelocateCommand,
)
from cache_universe.components import LatLng
from cache_universe.config import DEFAULT_CONFIG
from cache_universe.grid import CellIndex, cell_of
from cache_universe.state import new_game
from cache_universe.step import step
from cache_universe.utils.inventory import total_coins
from tests.test_utils import richest_visible


def test_new_game_initial_condition() -> None:
    state = new_game()
    assert state.position == DEFAULT_CONFIG.start
    assert len(state.inventory) == 0
    assert len(state.history) == 0
    assert state.turn == 0
    assert len(state.visible) > 0
    assert set(state.store.ids()) == set(state.visible)


def test_move_refreshes_view_and_trail() -> None:
    state = new_game()
    moved = step(state, MoveCommand(Direction.EAST))
    center = cell_of(moved.position, DEFAULT_CONFIG.grid_size)
    assert list(moved.history) == [moved.position]
    assert moved.turn == 1
    for cache in moved.visible.values():
        assert abs(cache.cell.j - center.j) <= DEFAULT_CONFIG.neighborhood


def test_north_then_south_restores_visible_set() -> None:
    state = new_game()
    there = step(state, MoveCommand(Direction.NORTH))
    back = step(there, MoveCommand(Direction.SOUTH))
    assert back.visible == state.visible
    assert set(back.visible) == set(state.visible)


def test_collect_via_step_updates_store_and_view() -> None:
    state = new_game()
    cache = richest_visible(state)
    assert cache.coin_count > 0

    after = step(state, CollectCommand(cache.id))
    assert len(after.inventory) == 1
    assert after.inventory[-1] == cache.coins[-1]
    assert after.visible[cache.id].coin_count == cache.coin_count - 1
    assert len(after.store.get(cache.id).coin_ids) == cache.coin_count - 1
    assert after.turn == state.turn + 1


def test_zero_coin_cache_rejects_collect() -> None:
    state = new_game()
    empty = [c for c in state.visible.values() if c.coin_count == 0]
    assert empty, "reference neighborhood should contain an empty cache"

    after = step(state, CollectCommand(empty[0].id))
    assert after.message is not None
    assert after.inventory == state.inventory
    assert after.store == state.store
    assert after.turn == state.turn


def test_deposit_via_step() -> None:
    state = new_game()
    cache = richest_visible(state)
    other = next(cid for cid in sorted(state.visible) if cid != cache.id)
    state = step(state, CollectCommand(cache.id))
    coin = state.inventory[-1]

    after = step(state, DepositCommand(other))
    assert len(after.inventory) == 0
    assert after.visible[other].coins[-1] == coin


def test_mutation_survives_leaving_and_returning() -> None:
    state = new_game()
    cache = richest_visible(state)
    state = step(state, CollectCommand(cache.id))
    expected = state.visible[cache.id]

    far = step(state, RelocateCommand(LatLng(DEFAULT_CONFIG.start.lat + 1.0, DEFAULT_CONFIG.start.lng)))
    assert cache.id not in far.visible
    back = step(far, RelocateCommand(DEFAULT_CONFIG.start))
    assert back.visible[cache.id] == expected


def test_transfers_conserve_coins_through_step() -> None:
    state = new_game()
    total = total_coins(state)
    ids = sorted(state.visible)
    for index in range(40):
        cid = ids[index % len(ids)]
        command = CollectCommand(cid) if index % 3 else DepositCommand(cid)
        before = len(state.inventory)
        state = step(state, command)
        assert len(state.inventory) - before in (-1, 0, 1)
        assert total_coins(state) == total


def test_refresh_does_not_advance_turn() -> None:
    state = new_game()
    assert step(state, RefreshCommand()).turn == state.turn


def test_step_with_cell_index() -> None:
    cells = CellIndex(DEFAULT_CONFIG.grid_size)
    state = step(new_game(), MoveCommand(Direction.WEST), cells)
    assert len(cells) == 1
    assert state.visible == step(new_game(), MoveCommand(Direction.WEST)).visible


def test_unknown_command_raises() -> None:
    with pytest.raises(ValueError):
        step(new_game(), "north")  # type: ignore[arg-type]


def test_unusable_relocation_is_rejected_without_a_turn() -> None:
    state = new_game()
    rejected = step(state, RelocateCommand(LatLng(float("nan"), 0.0)))
    assert rejected.message is not None
    assert rejected.turn == state.turn
    assert rejected.position == state.position
    assert rejected.visible == state.visible
