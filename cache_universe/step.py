"""State reducer.

:func:`step` is the single synchronous handler every command goes through,
whatever produced it (button, keyboard, geolocation sample, agent). It is
pure and returns a *new* :class:`cache_universe.state.State`.

Per command:

1. ``MoveCommand`` / ``RelocateCommand``: update position and trail, then
   refresh the view around the new cell.
2. ``CollectCommand`` / ``DepositCommand``: transfer one coin and write the
   cache snapshot back, then refresh the view.
3. ``RefreshCommand``: refresh the view only.

``turn`` advances on every applied move or successful transfer. A rejected
position or transfer returns the previous state with only ``message`` changed.
"""

from dataclasses import replace
from typing import Optional

from cache_universe.actions import (
    CollectCommand,
    Command,
    DepositCommand,
    MoveCommand,
    RefreshCommand,
    RelocateCommand,
)
from cache_universe.grid import CellIndex
from cache_universe.state import State
from cache_universe.systems.movement import movement_system, relocate_system
from cache_universe.systems.transfer import collect_system, deposit_system
from cache_universe.systems.view import view_system


def step(state: State, command: Command, cells: Optional[CellIndex] = None) -> State:
    """Apply one command.

    Args:
        state (State): Previous immutable world state.
        command (Command): Command value to apply.
        cells (CellIndex | None): Interning index used by the view refresh.

    Returns:
        State: Next state.

    Raises:
        ValueError: If ``command`` is not a recognized command.
    """
    if isinstance(command, MoveCommand):
        return _step_position(movement_system(state, command.direction), cells)
    if isinstance(command, RelocateCommand):
        return _step_position(relocate_system(state, command.position), cells)
    if isinstance(command, (CollectCommand, DepositCommand)):
        return _step_transfer(state, command, cells)
    if isinstance(command, RefreshCommand):
        return view_system(state, cells)
    raise ValueError(f"Unknown command: {command!r}")


def _step_position(next_state: State, cells: Optional[CellIndex]) -> State:
    if next_state.message is not None:
        return next_state
    return _finish(view_system(next_state, cells))


def _step_transfer(
    state: State, command: CollectCommand | DepositCommand, cells: Optional[CellIndex]
) -> State:
    if isinstance(command, CollectCommand):
        next_state = collect_system(state, command.cache_id)
    else:
        next_state = deposit_system(state, command.cache_id)
    if next_state.message is not None:
        return next_state
    return _finish(view_system(next_state, cells))


def _finish(state: State) -> State:
    return replace(state, turn=state.turn + 1, message=None)
