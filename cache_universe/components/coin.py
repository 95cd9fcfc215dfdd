"""Coin component.

A coin is an immutable value minted in a cell. Its identity is the mint cell
plus a serial number unique within that cell, rendered as ``"i:j#serial"``.
Moving a coin between containers moves the value; the coin itself never
changes.
"""

import re
from dataclasses import dataclass

from cache_universe.types import CoinID
from .cell import Cell

_COIN_ID_RE = re.compile(r"^(-?\d+):(-?\d+)#(\d+)$")


@dataclass(frozen=True)
class Coin:
    """Minted coin.

    Attributes:
        cell: Cell the coin was generated in.
        serial: Serial number within ``cell`` (0-based, monotonically increasing).
    """

    cell: Cell
    serial: int

    @property
    def id(self) -> CoinID:
        return f"{self.cell.key}#{self.serial}"

    @classmethod
    def parse(cls, coin_id: CoinID) -> "Coin":
        """Inverse of :attr:`id`.

        Raises:
            ValueError: If ``coin_id`` is not of the form ``"i:j#serial"``.
        """
        match = _COIN_ID_RE.match(coin_id)
        if match is None:
            raise ValueError(f"Malformed coin id: {coin_id!r}")
        i, j, serial = (int(group) for group in match.groups())
        return cls(cell=Cell(i, j), serial=serial)
