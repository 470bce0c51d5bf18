"""Move direction values accepted by the step sequence.

Provides a simple constants container instead of an Enum so request
payloads can be compared against plain strings.
"""

from __future__ import annotations


class MoveDirection:
    UP = "up"
    DOWN = "down"

    ALL = frozenset({UP, DOWN})


__all__ = ["MoveDirection"]
