"""Mutable session shell around the pure reducer.

A :class:`Session` owns everything that is not a value: the current
``State``, the cell interning index, the storage collaborator and the active
geolocation feed. Every command is serialized through :meth:`Session.dispatch`
(move -> refresh -> persist) in arrival order, so manual moves and
geolocation samples share one pipeline.

Startup reads the stored blob once. A missing blob starts a new game; a
corrupt one is logged and also starts a new game so the world stays playable.
"""

import logging
from dataclasses import replace
from typing import Optional

from cache_universe.actions import (
    STATE_CHANGING_COMMANDS,
    CollectCommand,
    Command,
    DepositCommand,
    Direction,
    MoveCommand,
    RefreshCommand,
    RelocateCommand,
)
from cache_universe.components import LatLng
from cache_universe.config import DEFAULT_CONFIG, WorldConfig
from cache_universe.errors import CorruptSessionError, GeolocationUnavailable
from cache_universe.geolocation import GeolocationFeed
from cache_universe.grid import CellIndex
from cache_universe.persistence import (
    SESSION_KEY,
    KeyValueStorage,
    decode_session,
    encode_session,
)
from cache_universe.state import State, new_game
from cache_universe.step import step
from cache_universe.types import CacheID

logger = logging.getLogger(__name__)


class Session:
    """Single-player game session bound to a storage collaborator."""

    def __init__(
        self,
        storage: KeyValueStorage,
        config: WorldConfig = DEFAULT_CONFIG,
        key: str = SESSION_KEY,
    ):
        self.storage = storage
        self.config = config
        self.key = key
        self.cells = CellIndex(config.grid_size)
        self.feed: Optional[GeolocationFeed] = None
        self.state: State = self._load()

    def _load(self) -> State:
        try:
            blob = self.storage.read(self.key)
            if blob is None:
                logger.info("No saved session under %r; starting a new game", self.key)
                return new_game(self.config)
            state = decode_session(blob, self.config)
        except CorruptSessionError as e:
            logger.warning("Discarding corrupt session %r: %s", self.key, e)
            return new_game(self.config)
        logger.info(
            "Restored session: %d coins held, %d caches known",
            len(state.inventory),
            len(state.store),
        )
        return state

    def save(self) -> str:
        """Write the current state to storage and return the blob."""
        blob = encode_session(self.state)
        self.storage.write(self.key, blob)
        return blob

    def dispatch(self, command: Command) -> State:
        """Apply ``command`` and persist the result if it changed state."""
        previous = self.state
        self.state = step(self.state, command, self.cells)
        if isinstance(command, STATE_CHANGING_COMMANDS) and self.state.turn != previous.turn:
            self.save()
        return self.state

    def move(self, direction: Direction) -> State:
        return self.dispatch(MoveCommand(direction))

    def relocate(self, position: LatLng) -> State:
        return self.dispatch(RelocateCommand(position))

    def collect(self, cache_id: CacheID) -> State:
        return self.dispatch(CollectCommand(cache_id))

    def deposit(self, cache_id: CacheID) -> State:
        return self.dispatch(DepositCommand(cache_id))

    def refresh(self) -> State:
        return self.dispatch(RefreshCommand())

    def reset(self) -> State:
        """Forget the stored session and start over."""
        self.stop_tracking()
        self.storage.delete(self.key)
        self.cells.clear()
        self.state = new_game(self.config)
        logger.info("Session reset")
        return self.state

    def track(self, feed: GeolocationFeed) -> State:
        """Apply every sample of ``feed`` in order until it ends or is cancelled.

        An unavailable source is reported through ``state.message``.
        """
        self.stop_tracking()
        self.feed = feed
        try:
            for sample in feed:
                self.relocate(sample)
        except GeolocationUnavailable as e:
            logger.info("Geolocation unavailable: %s", e)
            self.state = replace(self.state, message=str(e))
        finally:
            if self.feed is feed:
                self.feed = None
        return self.state

    def stop_tracking(self) -> None:
        """Cancel the active geolocation feed, if any."""
        if self.feed is not None:
            self.feed.cancel()
            self.feed = None
