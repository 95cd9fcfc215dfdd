"""World configuration.

All tunable constants of world generation and movement live on a single
frozen :class:`WorldConfig`. The default instance reproduces the reference
world: same grid, same cache density, same start coordinate. Configuration is
passed explicitly into ``State`` / ``Session``; nothing here is mutated at
runtime.
"""

from dataclasses import dataclass, field, fields
from typing import Any, Mapping

from cache_universe.components import LatLng

GRID_SIZE = 0.0001
CACHE_PROBABILITY = 0.1
NEIGHBORHOOD = 8
MAX_COINS = 5
START = LatLng(36.9895, -122.0627)

_TRUE_STRINGS = frozenset({"1", "true", "yes", "on"})
_FALSE_STRINGS = frozenset({"0", "false", "no", "off", ""})


@dataclass(frozen=True)
class WorldConfig:
    """World generation / movement parameters.

    Attributes:
        grid_size: Cell edge length in degrees (both axes).
        cache_probability: A cell holds a cache iff its existence draw is below this.
        neighborhood: Visibility radius in cells. Also the row multiplier in the
            existence seed ``i * neighborhood + j``, so changing it reshuffles the
            world.
        max_coins: Exclusive upper bound on generated coins per cache.
        start: New-game player position.
        single_visit_collect: Reject collects from caches the player already
            collected from.
    """

    grid_size: float = GRID_SIZE
    cache_probability: float = CACHE_PROBABILITY
    neighborhood: int = NEIGHBORHOOD
    max_coins: int = MAX_COINS
    start: LatLng = field(default_factory=lambda: START)
    single_visit_collect: bool = False

    def __post_init__(self) -> None:
        if self.grid_size <= 0:
            raise ValueError(f"grid_size must be positive, got {self.grid_size}")
        if not 0.0 <= self.cache_probability <= 1.0:
            raise ValueError(
                f"cache_probability must be within [0, 1], got {self.cache_probability}"
            )
        if self.neighborhood < 0:
            raise ValueError(f"neighborhood must be >= 0, got {self.neighborhood}")
        if self.max_coins <= 0:
            raise ValueError(f"max_coins must be positive, got {self.max_coins}")

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "WorldConfig":
        """Build a config from plain data, ignoring unknown keys.

        ``start`` may be given as a ``LatLng``, a ``{"lat", "lng"}`` mapping or a
        ``(lat, lng)`` pair.

        ``single_visit_collect`` accepts booleans, 0/1 and the usual
        ``"true"``/``"false"`` style strings.

        Raises:
            ValueError: If a value is out of range or cannot be coerced.
        """
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for name, value in values.items():
            if name not in known:
                continue
            if name == "start":
                kwargs[name] = _coerce_start(value)
            elif name in ("neighborhood", "max_coins"):
                kwargs[name] = int(value)
            elif name == "single_visit_collect":
                kwargs[name] = _coerce_flag(value)
            else:
                kwargs[name] = float(value)
        return cls(**kwargs)


def _coerce_flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
    raise ValueError(f"Expected a boolean flag, got {value!r}")


def _coerce_start(value: Any) -> LatLng:
    if isinstance(value, LatLng):
        return value
    if isinstance(value, Mapping):
        return LatLng(float(value["lat"]), float(value["lng"]))
    lat, lng = value
    return LatLng(float(lat), float(lng))


DEFAULT_CONFIG = WorldConfig()
