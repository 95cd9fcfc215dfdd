"""cache_universe.components
=================================

Aggregate import surface for the value objects the world is built from.

All components are frozen ``@dataclass`` values; they carry no behavior beyond
their fields and small derived properties. Systems in
:mod:`cache_universe.systems` build new values instead of mutating these::

    from cache_universe.components import Cache, Cell, Coin, LatLng

"""

from .cache import Cache, cache_id, parse_cache_id
from .cell import Cell
from .coin import Coin
from .coordinates import LatLng

__all__ = [
    "Cache",
    "Cell",
    "Coin",
    "LatLng",
    "cache_id",
    "parse_cache_id",
]
