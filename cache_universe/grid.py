"""Grid mapping between continuous coordinates and integer cells.

``cell_of`` is the one conversion every other module goes through. It floors
``coordinate / grid_size`` per axis. The quotient is first snapped to
``_SNAP_DIGITS`` decimals: a position produced by adding ``grid_size`` to a
grid-aligned coordinate may otherwise land a hair below the boundary
(``(36.9895 - 0.0001) / 0.0001 == 369893.99999999994``) and be assigned the
wrong cell.

:class:`CellIndex` is the flyweight memo: it interns ``Cell`` objects so that
repeated conversions of coordinates in the same bucket return the identical
object. It is an optimization only; the plain function gives equal results.
"""

import math
from typing import Dict, Iterator

from cache_universe.components import Cell, LatLng

_SNAP_DIGITS = 6

MAX_LAT = 90.0
MAX_LNG = 180.0


def _bucket(value: float, grid_size: float) -> int:
    return math.floor(round(value / grid_size, _SNAP_DIGITS))


def is_valid_position(coords: LatLng) -> bool:
    """Whether ``coords`` is a finite point on the globe."""
    return (
        math.isfinite(coords.lat)
        and math.isfinite(coords.lng)
        and abs(coords.lat) <= MAX_LAT
        and abs(coords.lng) <= MAX_LNG
    )


def cell_of(coords: LatLng, grid_size: float) -> Cell:
    """Return the cell containing ``coords``."""
    return Cell(_bucket(coords.lat, grid_size), _bucket(coords.lng, grid_size))


def cell_location(cell: Cell, grid_size: float) -> LatLng:
    """Return the south-west corner of ``cell`` in degrees."""
    if not isinstance(cell.i, int) or not isinstance(cell.j, int):
        raise TypeError(f"Cell indices must be integers, got {cell!r}")
    return LatLng(cell.i * grid_size, cell.j * grid_size)


def neighborhood(center: Cell, radius: int) -> Iterator[Cell]:
    """Yield the ``(2 * radius + 1) ** 2`` cells around ``center``, row-major."""
    for di in range(-radius, radius + 1):
        for dj in range(-radius, radius + 1):
            yield Cell(center.i + di, center.j + dj)


def in_neighborhood(cell: Cell, center: Cell, radius: int) -> bool:
    """Return True if ``cell`` lies in the square window around ``center``."""
    return abs(cell.i - center.i) <= radius and abs(cell.j - center.j) <= radius


class CellIndex:
    """Interning cache for coordinate -> cell conversions.

    Keyed by the ``"i:j"`` form of the cell. Owned by whoever drives the world
    (usually a :class:`cache_universe.session.Session`) so tests and sessions
    never share one.
    """

    def __init__(self, grid_size: float):
        self.grid_size = grid_size
        self._cells: Dict[str, Cell] = {}

    def cell_of(self, coords: LatLng) -> Cell:
        cell = cell_of(coords, self.grid_size)
        return self._cells.setdefault(cell.key, cell)

    def intern(self, cell: Cell) -> Cell:
        """Return the canonical instance for ``cell``."""
        return self._cells.setdefault(cell.key, cell)

    def clear(self) -> None:
        self._cells.clear()

    def __len__(self) -> int:
        return len(self._cells)

    def __contains__(self, cell: object) -> bool:
        return isinstance(cell, Cell) and cell.key in self._cells
