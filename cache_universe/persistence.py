"""Session persistence.

A session blob is JSON text holding everything needed to resume play:

``{"version": 1, "player": {"lat", "lng"}, "inventory": [CoinId, ...],
"visited": [CacheId, ...], "caches": [[CacheId, snapshot], ...],
"history": [{"lat", "lng"}, ...], "turn": int}``

``caches`` is the *entire* store, not just the visible subset, so caches the
player walked away from come back exactly as they were left. Decoding is
strict: anything that does not match the layout raises
:class:`CorruptSessionError`, and callers treat that like a missing blob.

Storage collaborators implement :class:`KeyValueStorage`; the session blob is
addressed by the single key :data:`SESSION_KEY`.
"""

import json
import os
import tempfile
from typing import Any, Dict, Optional, Protocol

from pyrsistent import pmap, pset, pvector

from cache_universe.components import Coin, LatLng
from cache_universe.config import DEFAULT_CONFIG, WorldConfig
from cache_universe.errors import CorruptSessionError
from cache_universe.grid import is_valid_position
from cache_universe.memento import CacheStore, snapshot_from_dict, snapshot_to_dict
from cache_universe.state import State
from cache_universe.systems.view import view_system

SESSION_KEY = "cache_universe.session"
SCHEMA_VERSION = 1


class KeyValueStorage(Protocol):
    """Durable text store addressed by string keys."""

    def read(self, key: str) -> Optional[str]:
        """Return the blob stored under ``key`` or ``None``.

        Raises:
            CorruptSessionError: If the stored value cannot be read as text.
        """

    def write(self, key: str, blob: str) -> None:
        """Store ``blob`` under ``key``, replacing any previous value."""

    def delete(self, key: str) -> None:
        """Remove ``key`` if present."""


class MemoryStorage:
    """In-process :class:`KeyValueStorage`."""

    def __init__(self) -> None:
        self._blobs: Dict[str, str] = {}

    def read(self, key: str) -> Optional[str]:
        return self._blobs.get(key)

    def write(self, key: str, blob: str) -> None:
        self._blobs[key] = blob

    def delete(self, key: str) -> None:
        self._blobs.pop(key, None)


class FileStorage:
    """One file per key inside ``directory``; writes replace files atomically."""

    def __init__(self, directory: str) -> None:
        self.directory = directory
        os.makedirs(directory, exist_ok=True)

    def _path(self, key: str) -> str:
        safe = "".join(c if c.isalnum() or c in "-_." else "_" for c in key)
        return os.path.join(self.directory, f"{safe}.json")

    def read(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not os.path.exists(path):
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                return f.read()
        except UnicodeDecodeError as e:
            raise CorruptSessionError(f"Session file {path!r} is not UTF-8 text: {e}") from e

    def write(self, key: str, blob: str) -> None:
        path = self._path(key)
        fd, tmp_path = tempfile.mkstemp(dir=self.directory, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(blob)
            os.replace(tmp_path, path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    def delete(self, key: str) -> None:
        path = self._path(key)
        if os.path.exists(path):
            os.remove(path)


def _latlng_to_dict(coords: LatLng) -> Dict[str, float]:
    return {"lat": coords.lat, "lng": coords.lng}


def _latlng_from_dict(data: Any) -> LatLng:
    lat, lng = data["lat"], data["lng"]
    if isinstance(lat, bool) or isinstance(lng, bool):
        raise TypeError("Coordinates must be numbers")
    coords = LatLng(float(lat), float(lng))
    if not is_valid_position(coords):
        raise ValueError(f"Coordinates out of range: {coords!r}")
    return coords


def session_to_dict(state: State) -> Dict[str, Any]:
    """Plain-data form of ``state`` (see module docstring for the layout)."""
    return {
        "version": SCHEMA_VERSION,
        "player": _latlng_to_dict(state.position),
        "inventory": [coin.id for coin in state.inventory],
        "visited": sorted(state.visited),
        "caches": [
            [cid, snapshot_to_dict(snapshot)]
            for cid, snapshot in sorted(state.store.snapshots.items())
        ],
        "history": [_latlng_to_dict(coords) for coords in state.history],
        "turn": state.turn,
    }


def session_from_dict(data: Any, config: WorldConfig = DEFAULT_CONFIG) -> State:
    """Rebuild a state from :func:`session_to_dict` output and refresh its view.

    Raises:
        CorruptSessionError: If ``data`` does not match the layout.
    """
    try:
        if data.get("version") != SCHEMA_VERSION:
            raise ValueError(f"Unsupported session version: {data.get('version')!r}")
        store = CacheStore()
        for cid, snapshot_data in data["caches"]:
            store = store.put(cid, snapshot_from_dict(snapshot_data))
        visited = data.get("visited", [])
        if not all(isinstance(cid, str) for cid in visited):
            raise TypeError("Visited cache ids must be strings")
        turn = data.get("turn", 0)
        if not isinstance(turn, int):
            raise TypeError("Turn must be an integer")
        state = State(
            config=config,
            position=_latlng_from_dict(data["player"]),
            inventory=pvector(Coin.parse(coin_id) for coin_id in data["inventory"]),
            visited=pset(visited),
            history=pvector(_latlng_from_dict(coords) for coords in data["history"]),
            store=store,
            visible=pmap(),
            turn=turn,
        )
        return view_system(state)
    except (AttributeError, KeyError, TypeError, ValueError, ArithmeticError) as e:
        raise CorruptSessionError(f"Malformed session data: {e}") from e


def encode_session(state: State) -> str:
    """Serialize ``state`` to an opaque text blob."""
    return json.dumps(session_to_dict(state), separators=(",", ":"))


def decode_session(blob: str, config: WorldConfig = DEFAULT_CONFIG) -> State:
    """Inverse of :func:`encode_session`.

    Raises:
        CorruptSessionError: If ``blob`` is not a valid session.
    """
    try:
        data = json.loads(blob)
    except (TypeError, ValueError) as e:
        raise CorruptSessionError(f"Session blob is not valid JSON: {e}") from e
    return session_from_dict(data, config)
