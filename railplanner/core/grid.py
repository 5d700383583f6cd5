"""Grid value types: positions, directions and oriented anchors.

Provides the geometry atoms every other module builds on:
- Position: integer pixel coordinate of a grid anchor
- Point: float coordinate for interpolated positions
- Direction: one of 8 compass directions (y grows "up")
- Connection: (Position, Direction) oriented anchor, the graph node identity

All types are immutable and hashable.
"""

from dataclasses import dataclass
from enum import Enum
from math import hypot


@dataclass(frozen=True, order=True)
class Position:
    """Integer 2D coordinate in pixel space.

    Example:
        Position(32, 0) + Position(16, 16)  # Position(x=48, y=16)
    """

    x: int
    y: int

    def __add__(self, other: "Position") -> "Position":
        return Position(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Position") -> "Position":
        return Position(self.x - other.x, self.y - other.y)

    def scale(self, factor: float) -> "Position":
        """Scale both coordinates, truncating toward zero."""
        return Position(int(self.x * factor), int(self.y * factor))

    def to_point(self) -> "Point":
        return Point(float(self.x), float(self.y))

    def __repr__(self) -> str:
        return f"Position({self.x}, {self.y})"


@dataclass(frozen=True)
class Point:
    """Float 2D coordinate (interpolated positions, turn centers)."""

    x: float
    y: float

    def distance_to(self, other: "Point") -> float:
        """Euclidean distance to another point."""
        return hypot(other.x - self.x, other.y - self.y)

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


class Direction(Enum):
    """8-way direction of travel. Values are (dx, dy) unit steps."""

    UP = (0, 1)
    UP_RIGHT = (1, 1)
    RIGHT = (1, 0)
    DOWN_RIGHT = (1, -1)
    DOWN = (0, -1)
    DOWN_LEFT = (-1, -1)
    LEFT = (-1, 0)
    UP_LEFT = (-1, 1)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def is_cardinal(self) -> bool:
        return self.dx == 0 or self.dy == 0

    @property
    def is_diagonal(self) -> bool:
        return not self.is_cardinal

    @property
    def opposite(self) -> "Direction":
        return Direction((-self.dx, -self.dy))

    @property
    def index(self) -> int:
        """Clockwise position starting at UP (0..7), used for adjacency."""
        return _CLOCKWISE.index(self)

    def unit_vector(self) -> tuple[float, float]:
        """Offset for one unit of travel (diagonals are not normalized)."""
        return (float(self.dx), float(self.dy))

    def is_adjacent(self, other: "Direction") -> bool:
        """True when the two directions are exactly one 45° step apart."""
        return (self.index - other.index) % 8 in (1, 7)

    def __lt__(self, other: "Direction") -> bool:
        """Clockwise ordering so Connection stays sortable."""
        return self.index < other.index


_CLOCKWISE = [
    Direction.UP,
    Direction.UP_RIGHT,
    Direction.RIGHT,
    Direction.DOWN_RIGHT,
    Direction.DOWN,
    Direction.DOWN_LEFT,
    Direction.LEFT,
    Direction.UP_LEFT,
]


@dataclass(frozen=True, order=True)
class Connection:
    """An oriented anchor on the grid: where track ends and which way it points.

    Two connections are equal only if position and direction both match.
    The same position reached with a different direction is a distinct node
    because the reachable neighbors depend on the direction.

    Attributes:
        position: Anchor position in pixels
        direction: Direction of travel leaving the anchor
    """

    position: Position
    direction: Direction

    @classmethod
    def at(cls, x: int, y: int, direction: Direction) -> "Connection":
        """Shorthand constructor from raw coordinates."""
        return cls(position=Position(x, y), direction=direction)

    def to_dict(self) -> dict:
        return {"x": self.position.x, "y": self.position.y, "direction": self.direction.name}

    @classmethod
    def from_dict(cls, data: dict) -> "Connection":
        return cls.at(int(data["x"]), int(data["y"]), Direction[data["direction"]])

    def __repr__(self) -> str:
        return f"Connection({self.position.x}, {self.position.y}, {self.direction.name})"


def initial_direction(anchor: Position, toward: Position, cell_size: int) -> Direction:
    """Pick the starting direction for a new line of track.

    An anchor on a vertical grid line only admits horizontal track, so the
    start faces Right or Left depending on which side the cursor is.
    Otherwise it faces Up or Down.

    Args:
        anchor: Snapped anchor where track starts
        toward: Raw cursor position used to choose the side
        cell_size: Grid cell size in pixels

    Returns:
        Direction the first piece leaves the anchor in.
    """
    if anchor.x % cell_size == 0:
        return Direction.RIGHT if toward.x > anchor.x else Direction.LEFT
    return Direction.UP if toward.y > anchor.y else Direction.DOWN
