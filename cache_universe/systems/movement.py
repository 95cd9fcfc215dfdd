"""Movement systems.

Manual moves shift the player by exactly one ``grid_size`` along one axis;
geolocation samples set the position outright. Both append the new position
to ``history``. Neither refreshes the view: the reducer runs the view system
after every position change.

A position that is not a finite point on the globe is rejected: the state is
returned unchanged apart from ``message``.
"""

import logging
from dataclasses import replace

from cache_universe.actions import Direction
from cache_universe.components import LatLng
from cache_universe.grid import is_valid_position
from cache_universe.state import State

logger = logging.getLogger(__name__)


def movement_system(state: State, direction: Direction) -> State:
    """Move the player one grid step in ``direction``."""
    dlat, dlng = direction.offset
    step = state.config.grid_size
    position = LatLng(
        state.position.lat + dlat * step,
        state.position.lng + dlng * step,
    )
    return relocate_system(state, position)


def relocate_system(state: State, position: LatLng) -> State:
    """Place the player at ``position`` and record it in the trail."""
    if not is_valid_position(position):
        logger.info("Rejected position %r", position)
        return replace(state, message=f"Invalid position: ({position.lat}, {position.lng})")
    return replace(
        state,
        position=position,
        history=state.history.append(position),
        message=None,
    )
