"""World systems.

Each system is a pure ``State -> State`` transformation; :mod:`cache_universe.step`
chains them per command.
"""
