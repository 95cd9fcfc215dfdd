"""Gymnasium environment wrapper for the cache world.

Agents act through the same reducer as human players. The observation is the
coin map of the visibility window plus the number of coins held:

``{"coins": np.ndarray(2R+1, 2R+1), "inventory": np.int64}``

``coins[R + di, R + dj]`` is the coin count of the cache ``di`` rows north and
``dj`` columns east of the player's cell, or ``-1`` where there is no cache.

Actions are :class:`cache_universe.actions.GymAction`. ``COLLECT`` and
``DEPOSIT`` target the cache in the player's own cell. Reward is the change in
inventory size (``+1`` per collected coin, ``-1`` per deposited coin). The
world is unbounded, so episodes never terminate; wrap with a time limit.

Usage:

``env = CacheUniverseEnv(config=WorldConfig(neighborhood=4))``
"""

from typing import Any, Dict, Optional, Tuple

import gymnasium as gym
import numpy as np

from cache_universe.actions import (
    Action,
    CollectCommand,
    Command,
    DepositCommand,
    Direction,
    MoveCommand,
)
from cache_universe.components import cache_id
from cache_universe.config import DEFAULT_CONFIG, WorldConfig
from cache_universe.grid import CellIndex, cell_of
from cache_universe.state import State, new_game
from cache_universe.step import step

ObsType = Dict[str, Any]

MAX_OBSERVED_COINS = 1_000_000


def coin_grid(state: State, cells: Optional[CellIndex] = None) -> np.ndarray:
    """Return the coin map of the visibility window around the player."""
    radius = state.config.neighborhood
    if cells is not None:
        center = cells.cell_of(state.position)
    else:
        center = cell_of(state.position, state.config.grid_size)
    grid = np.full((2 * radius + 1, 2 * radius + 1), -1, dtype=np.int64)
    for cache in state.visible.values():
        di = cache.cell.i - center.i
        dj = cache.cell.j - center.j
        if abs(di) <= radius and abs(dj) <= radius:
            grid[radius + di, radius + dj] = cache.coin_count
    return grid


class CacheUniverseEnv(gym.Env[ObsType, np.integer]):
    """Gymnasium ``Env`` over an unbounded cache world.

    The action space is ``Discrete(len(Action))``; see :mod:`cache_universe.actions`.
    """

    metadata = {"render_modes": ["ansi"]}

    def __init__(self, config: WorldConfig = DEFAULT_CONFIG, render_mode: str = "ansi"):
        from gymnasium import spaces

        self.config = config
        self.render_mode = render_mode
        self.state: Optional[State] = None
        self.cells = CellIndex(config.grid_size)

        size = 2 * config.neighborhood + 1
        self.observation_space = spaces.Dict(
            {
                "coins": spaces.Box(
                    low=-1, high=MAX_OBSERVED_COINS, shape=(size, size), dtype=np.int64
                ),
                "inventory": spaces.Box(
                    low=np.array(0, dtype=np.int64),
                    high=np.array(MAX_OBSERVED_COINS, dtype=np.int64),
                    shape=(),
                    dtype=np.int64,
                ),
            }
        )
        self.action_space = spaces.Discrete(len(Action))

        self.reset()

    def reset(
        self, *, seed: Optional[int] = None, options: Optional[Dict[str, object]] = None
    ) -> Tuple[ObsType, Dict[str, object]]:
        """Start over from the configured start position.

        The world is a pure function of the configuration, so ``seed`` only
        seeds Gymnasium's own RNG.
        """
        super().reset(seed=seed)
        self.cells.clear()
        self.state = new_game(self.config)
        return self._get_obs(), self._get_info()

    def step(
        self, action: np.integer
    ) -> Tuple[ObsType, float, bool, bool, Dict[str, object]]:
        """Apply one action.

        Returns:
            (observation, reward, terminated, truncated, info)
        """
        assert self.state is not None

        if not 0 <= int(action) < len(Action):
            raise ValueError(f"Invalid action: {action}")
        command = self._to_command([a for a in Action][int(action)])

        held = len(self.state.inventory)
        self.state = step(self.state, command, self.cells)
        reward = float(len(self.state.inventory) - held)
        return self._get_obs(), reward, False, False, self._get_info()

    def render(self) -> Optional[str]:  # type: ignore[override]
        """Text map of the window: ``@`` player, digit = coins, ``.`` empty."""
        assert self.state is not None
        grid = coin_grid(self.state, self.cells)
        radius = self.config.neighborhood
        rows = []
        for r in range(grid.shape[0] - 1, -1, -1):
            row = []
            for c in range(grid.shape[1]):
                if r == radius and c == radius:
                    row.append("@")
                elif grid[r, c] < 0:
                    row.append(".")
                else:
                    row.append(str(min(int(grid[r, c]), 9)))
            rows.append("".join(row))
        return "\n".join(rows)

    def _to_command(self, action: Action) -> Command:
        assert self.state is not None
        if action in (Action.COLLECT, Action.DEPOSIT):
            target = cache_id(self.cells.cell_of(self.state.position))
            if action == Action.COLLECT:
                return CollectCommand(target)
            return DepositCommand(target)
        return MoveCommand(Direction(action.value))

    def _get_obs(self) -> ObsType:
        assert self.state is not None
        return {
            "coins": coin_grid(self.state, self.cells),
            "inventory": np.int64(len(self.state.inventory)),
        }

    def _get_info(self) -> Dict[str, object]:
        assert self.state is not None
        return {
            "turn": self.state.turn,
            "message": self.state.message,
            "position": (self.state.position.lat, self.state.position.lng),
            "inventory": [coin.id for coin in self.state.inventory],
        }
