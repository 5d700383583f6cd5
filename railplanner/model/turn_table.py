"""Turn geometry table - where the circle of every legal turn sits.

Each of the 16 legal turns (8 directions × 2 neighbors 45° away) is keyed by
(start direction, end direction) and maps to:

- anchor: which end of the piece the circle center is measured from
- center_direction: cardinal pointing from the anchor to the center
- rotation_sign: +1 counter-clockwise, -1 clockwise (y grows up)
- base_turns: angle of the anchor seen from the center, in full turns

Turns leaving a cardinal direction are anchored at their START; turns leaving
a diagonal are anchored at their END (the diagonal start is off the grid
lines, the cardinal end is on them). For END-anchored entries the start
angle is base_turns·2π - rotation_sign·turn_angle.
"""

from dataclasses import dataclass
from enum import Enum

from railplanner.core.grid import Direction


class TurnAnchor(Enum):
    """End of a turn piece the circle center is measured from."""

    START = "start"
    END = "end"


@dataclass(frozen=True)
class TurnGeometry:
    """One row of the turn table."""

    anchor: TurnAnchor
    center_direction: Direction
    rotation_sign: int
    base_turns: float


_S, _E = TurnAnchor.START, TurnAnchor.END
_D = Direction

TURN_GEOMETRY: dict[tuple[Direction, Direction], TurnGeometry] = {
    (_D.UP, _D.UP_LEFT): TurnGeometry(_S, _D.LEFT, 1, 0.0),
    (_D.UP, _D.UP_RIGHT): TurnGeometry(_S, _D.RIGHT, -1, 0.5),
    (_D.UP_RIGHT, _D.UP): TurnGeometry(_E, _D.LEFT, 1, 0.0),
    (_D.UP_RIGHT, _D.RIGHT): TurnGeometry(_E, _D.DOWN, -1, 0.25),
    (_D.RIGHT, _D.UP_RIGHT): TurnGeometry(_S, _D.UP, 1, 0.75),
    (_D.RIGHT, _D.DOWN_RIGHT): TurnGeometry(_S, _D.DOWN, -1, 0.25),
    (_D.DOWN_RIGHT, _D.RIGHT): TurnGeometry(_E, _D.UP, 1, 0.75),
    (_D.DOWN_RIGHT, _D.DOWN): TurnGeometry(_E, _D.LEFT, -1, 0.0),
    (_D.DOWN, _D.DOWN_RIGHT): TurnGeometry(_S, _D.RIGHT, 1, 0.5),
    (_D.DOWN, _D.DOWN_LEFT): TurnGeometry(_S, _D.LEFT, -1, 0.0),
    (_D.DOWN_LEFT, _D.DOWN): TurnGeometry(_E, _D.RIGHT, 1, 0.5),
    (_D.DOWN_LEFT, _D.LEFT): TurnGeometry(_E, _D.UP, -1, 0.75),
    (_D.LEFT, _D.DOWN_LEFT): TurnGeometry(_S, _D.DOWN, 1, 0.25),
    (_D.LEFT, _D.UP_LEFT): TurnGeometry(_S, _D.UP, -1, 0.75),
    (_D.UP_LEFT, _D.LEFT): TurnGeometry(_E, _D.DOWN, 1, 0.25),
    (_D.UP_LEFT, _D.UP): TurnGeometry(_E, _D.RIGHT, -1, 0.5),
}
assert len(TURN_GEOMETRY) == 16
assert all(a.is_adjacent(b) for a, b in TURN_GEOMETRY)
