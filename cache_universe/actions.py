"""Commands and action enumerations.

Every external event (button press, geolocation sample, agent decision) is
turned into one command value and handed to :func:`cache_universe.step.step`.
Commands are plain frozen dataclasses; the reducer dispatches on their type.

:class:`Action` / :class:`GymAction` are the flat enumerations used by the
Gymnasium wrapper, where collect/deposit implicitly target the player's own
cell.
"""

from dataclasses import dataclass
from enum import IntEnum, StrEnum, auto
from typing import Tuple, Union

from cache_universe.components import LatLng
from cache_universe.types import CacheID


class Direction(StrEnum):
    """Cardinal move directions."""

    NORTH = auto()
    SOUTH = auto()
    EAST = auto()
    WEST = auto()

    @property
    def offset(self) -> Tuple[int, int]:
        """``(dlat, dlng)`` in grid steps."""
        return _DIRECTION_OFFSETS[self]


_DIRECTION_OFFSETS = {
    Direction.NORTH: (1, 0),
    Direction.SOUTH: (-1, 0),
    Direction.EAST: (0, 1),
    Direction.WEST: (0, -1),
}


@dataclass(frozen=True)
class MoveCommand:
    """Step one cell in ``direction``."""

    direction: Direction


@dataclass(frozen=True)
class RelocateCommand:
    """Jump to an absolute position (geolocation sample)."""

    position: LatLng


@dataclass(frozen=True)
class CollectCommand:
    """Move one coin from cache ``cache_id`` into the inventory."""

    cache_id: CacheID


@dataclass(frozen=True)
class DepositCommand:
    """Move one coin from the inventory into cache ``cache_id``."""

    cache_id: CacheID


@dataclass(frozen=True)
class RefreshCommand:
    """Recompute the visible caches without changing anything else."""


Command = Union[
    MoveCommand, RelocateCommand, CollectCommand, DepositCommand, RefreshCommand
]

STATE_CHANGING_COMMANDS = (MoveCommand, RelocateCommand, CollectCommand, DepositCommand)


class Action(StrEnum):
    """Flat action set for agents.

    Members:
        NORTH, SOUTH, EAST, WEST: Movement directions.
        COLLECT: Collect from the cache in the player's cell.
        DEPOSIT: Deposit into the cache in the player's cell.
    """

    NORTH = auto()
    SOUTH = auto()
    EAST = auto()
    WEST = auto()
    COLLECT = auto()
    DEPOSIT = auto()


MOVE_ACTIONS = [Action.NORTH, Action.SOUTH, Action.EAST, Action.WEST]


class GymAction(IntEnum):
    """Stable integer mapping for Gymnasium ``Discrete`` spaces."""

    NORTH = 0
    SOUTH = auto()
    EAST = auto()
    WEST = auto()
    COLLECT = auto()
    DEPOSIT = auto()
