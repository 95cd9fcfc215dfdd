"""Cache Universe.

A deterministic, unbounded grid of coin caches laid over geographic
coordinates. The world is a frozen :class:`State`; :func:`step` applies one
command and returns the next state; :class:`Session` adds persistence and
geolocation on top.
"""

from cache_universe.actions import (
    CollectCommand,
    DepositCommand,
    Direction,
    MoveCommand,
    RefreshCommand,
    RelocateCommand,
)
from cache_universe.config import DEFAULT_CONFIG, WorldConfig
from cache_universe.session import Session
from cache_universe.state import State, new_game
from cache_universe.step import step

__all__ = [
    "CollectCommand",
    "DEFAULT_CONFIG",
    "DepositCommand",
    "Direction",
    "MoveCommand",
    "RefreshCommand",
    "RelocateCommand",
    "Session",
    "State",
    "WorldConfig",
    "new_game",
    "step",
]
