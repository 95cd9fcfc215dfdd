"""Cache snapshots (memento) and the cache state store.

The store is the durable source of truth for every cache the player has ever
seen. ``Cache`` values in the live view are disposable projections rebuilt
from it with :func:`restore_cache`; any coin transfer writes the post-transfer
snapshot back with :meth:`CacheStore.put` in the same reducer call, so a cache
that scrolls out of view never loses a mutation.

Round-trip law: ``restore_cache(save_cache(c)) == c`` for every cache ``c``
(identity, location, and coin order preserved).

Snapshots are structured values rather than text. :func:`snapshot_to_dict` /
:func:`snapshot_from_dict` provide the plain-data form used when a whole
session is persisted.
"""

from dataclasses import dataclass
from typing import Any, Iterator, Mapping, Optional, Tuple

from pyrsistent import pmap, pvector
from pyrsistent.typing import PMap

from cache_universe.components import Cache, Cell, Coin, LatLng, cache_id
from cache_universe.grid import is_valid_position
from cache_universe.types import CacheID, CoinID


@dataclass(frozen=True)
class CacheSnapshot:
    """Restorable state of one cache.

    Attributes:
        id: Cache identity.
        cell: Anchor cell.
        location: Anchor coordinate.
        coin_ids: Coin ids in stack order (tail = top).
    """

    id: CacheID
    cell: Cell
    location: LatLng
    coin_ids: Tuple[CoinID, ...]


def save_cache(cache: Cache) -> CacheSnapshot:
    """Capture the full state of ``cache``."""
    return CacheSnapshot(
        id=cache.id,
        cell=cache.cell,
        location=cache.location,
        coin_ids=tuple(coin.id for coin in cache.coins),
    )


def restore_cache(snapshot: CacheSnapshot) -> Cache:
    """Rebuild a ``Cache`` equal to the one ``snapshot`` was taken from."""
    return Cache(
        id=snapshot.id,
        cell=snapshot.cell,
        location=snapshot.location,
        coins=pvector(Coin.parse(coin_id) for coin_id in snapshot.coin_ids),
    )


def snapshot_to_dict(snapshot: CacheSnapshot) -> dict[str, Any]:
    """Plain-data form: ``{"id", "cell": [i, j], "location": {...}, "coins": [...]}``."""
    return {
        "id": snapshot.id,
        "cell": [snapshot.cell.i, snapshot.cell.j],
        "location": {"lat": snapshot.location.lat, "lng": snapshot.location.lng},
        "coins": list(snapshot.coin_ids),
    }


def snapshot_from_dict(data: Mapping[str, Any]) -> CacheSnapshot:
    """Inverse of :func:`snapshot_to_dict`.

    Raises:
        KeyError, TypeError, ValueError: On malformed input.
    """
    i, j = data["cell"]
    if not isinstance(i, int) or not isinstance(j, int):
        raise TypeError(f"Cell indices must be integers, got {data['cell']!r}")
    coin_ids = tuple(data["coins"])
    for coin_id in coin_ids:
        if not isinstance(coin_id, str):
            raise TypeError(f"Coin id must be a string, got {coin_id!r}")
        Coin.parse(coin_id)
    cell = Cell(i, j)
    if data["id"] != cache_id(cell):
        raise ValueError(f"Snapshot id {data['id']!r} does not match cell {cell.key}")
    location = LatLng(float(data["location"]["lat"]), float(data["location"]["lng"]))
    if not is_valid_position(location):
        raise ValueError(f"Snapshot location out of range: {location!r}")
    return CacheSnapshot(
        id=cache_id(cell),
        cell=cell,
        location=location,
        coin_ids=coin_ids,
    )


@dataclass(frozen=True)
class CacheStore:
    """Persistent mapping from cache id to its latest snapshot.

    ``put`` returns a new store; the receiver is left untouched, which makes
    every intermediate store a valid point-in-time copy.
    """

    snapshots: PMap[CacheID, CacheSnapshot] = pmap()

    def has(self, cid: CacheID) -> bool:
        return cid in self.snapshots

    def get(self, cid: CacheID) -> Optional[CacheSnapshot]:
        return self.snapshots.get(cid)

    def put(self, cid: CacheID, snapshot: CacheSnapshot) -> "CacheStore":
        if snapshot.id != cid:
            raise ValueError(f"Snapshot {snapshot.id!r} stored under key {cid!r}")
        return CacheStore(snapshots=self.snapshots.set(cid, snapshot))

    def ids(self) -> Iterator[CacheID]:
        return iter(self.snapshots)

    def __len__(self) -> int:
        return len(self.snapshots)

    def __contains__(self, cid: object) -> bool:
        return cid in self.snapshots
