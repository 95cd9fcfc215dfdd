"""Common type aliases.

Caches and coins are addressed by stable strings derived from the grid cell
they belong to, so the aliases below are plain ``str``. They exist to make
signatures read like the domain (``CacheID`` vs ``CoinID``) rather than to
enforce anything at runtime.
"""

CacheID = str
CoinID = str
