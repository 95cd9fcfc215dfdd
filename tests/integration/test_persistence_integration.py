import json

import pytest

from cache_universe.actions import CollectCommand, Direction, MoveCommand
from cache_universe.errors import CorruptSessionError
from cache_universe.persistence import (
    SCHEMA_VERSION,
    FileStorage,
    MemoryStorage,
    decode_session,
    encode_session,
    session_to_dict,
)
from cache_universe.state import new_game
from cache_universe.step import step
from tests.test_utils import richest_visible


def played_state():
    state = new_game()
    cache = richest_visible(state)
    state = step(state, CollectCommand(cache.id))
    state = step(state, MoveCommand(Direction.SOUTH))
    state = step(state, MoveCommand(Direction.SOUTH))
    return state


def test_layout() -> None:
    state = played_state()
    data = session_to_dict(state)
    assert data["version"] == SCHEMA_VERSION
    assert data["player"] == {"lat": state.position.lat, "lng": state.position.lng}
    assert data["inventory"] == [coin.id for coin in state.inventory]
    assert len(data["history"]) == 2
    # whole store, not just the visible subset
    assert len(data["caches"]) == len(state.store)
    assert len(state.store) > len(state.visible)


def test_encode_decode_round_trip() -> None:
    state = played_state()
    restored = decode_session(encode_session(state))
    assert restored.position == state.position
    assert restored.inventory == state.inventory
    assert restored.visited == state.visited
    assert restored.history == state.history
    assert restored.store == state.store
    assert restored.visible == state.visible


def test_decoded_state_has_refreshed_view() -> None:
    state = played_state()
    data = session_to_dict(state)
    restored = decode_session(json.dumps(data))
    assert len(restored.visible) > 0


@pytest.mark.parametrize(
    "blob",
    [
        "",
        "not json",
        "[]",
        "null",
        json.dumps({"version": 99}),
        json.dumps(
            {
                "version": 1,
                "player": {"lat": 0.0, "lng": 0.0},
                "inventory": ["nope"],
                "caches": [],
                "history": [],
            }
        ),
        json.dumps(
            {
                "version": 1,
                "player": {"lat": 0.0},
                "inventory": [],
                "caches": [],
                "history": [],
            }
        ),
        json.dumps(
            {
                "version": 1,
                "player": {"lat": 0.0, "lng": 0.0},
                "inventory": [],
                "caches": [["cache_1_1", {"id": "cache_2_2", "cell": [2, 2],
                                          "location": {"lat": 0, "lng": 0}, "coins": []}]],
                "history": [],
            }
        ),
        json.dumps(
            {
                "version": 1,
                "player": {"lat": 0.0, "lng": 0.0},
                "inventory": [],
                "caches": [["cache_1_1", {"id": "cache_1_1", "cell": [5, 5],
                                          "location": {"lat": 0, "lng": 0}, "coins": []}]],
                "history": [],
            }
        ),
        json.dumps(
            {
                "version": 1,
                "player": {"lat": float("nan"), "lng": 0.0},
                "inventory": [],
                "caches": [],
                "history": [],
            }
        ),
        json.dumps(
            {
                "version": 1,
                "player": {"lat": 1e308, "lng": 0.0},
                "inventory": [],
                "caches": [],
                "history": [],
            }
        ),
        json.dumps(
            {
                "version": 1,
                "player": {"lat": 0.0, "lng": 0.0},
                "inventory": [],
                "caches": [],
                "history": [{"lat": 0.0, "lng": float("inf")}],
            }
        ),
    ],
)
def test_malformed_blobs_raise_corrupt_session(blob: str) -> None:
    with pytest.raises(CorruptSessionError):
        decode_session(blob)


def test_memory_storage() -> None:
    storage = MemoryStorage()
    assert storage.read("k") is None
    storage.write("k", "v")
    assert storage.read("k") == "v"
    storage.delete("k")
    storage.delete("k")
    assert storage.read("k") is None


def test_file_storage(tmp_path) -> None:
    storage = FileStorage(str(tmp_path))
    assert storage.read("a/b") is None
    storage.write("a/b", "one")
    storage.write("a/b", "two")
    assert storage.read("a/b") == "two"
    assert [p.suffix for p in tmp_path.iterdir()] == [".json"]
    storage.delete("a/b")
    assert storage.read("a/b") is None


def test_file_storage_rejects_undecodable_file(tmp_path) -> None:
    storage = FileStorage(str(tmp_path))
    storage.write("k", "v")
    (path,) = list(tmp_path.iterdir())
    path.write_bytes(b"\xff\xfe{garbage")
    with pytest.raises(CorruptSessionError):
        storage.read("k")
