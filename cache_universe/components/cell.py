"""Cell component.

Discrete integer grid address. Identity is purely structural: two ``Cell``
values with equal ``(i, j)`` compare and hash equal, so they can key maps
directly. :class:`cache_universe.grid.CellIndex` additionally interns cells
so repeated lookups hand back the same object.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Cell:
    """Grid cell address.

    Attributes:
        i: Row index (``floor(lat / grid_size)``).
        j: Column index (``floor(lng / grid_size)``).
    """

    i: int
    j: int

    @property
    def key(self) -> str:
        """Compact ``"i:j"`` string form, also the coin id prefix."""
        return f"{self.i}:{self.j}"
