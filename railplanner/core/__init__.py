"""Grid value types shared by every other module.

- Position: integer anchor coordinate in pixels
- Point: float coordinate for interpolated positions
- Direction: 8-way direction of travel
- Connection: oriented anchor (graph node identity)
"""

from railplanner.core.grid import Connection, Direction, Point, Position, initial_direction

__all__ = [
    "Position",
    "Point",
    "Direction",
    "Connection",
    "initial_direction",
]
