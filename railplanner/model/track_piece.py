"""Track pieces - the three geometric families of rail.

- Straight: one cell along a cardinal direction
- Diagonal: one half-step along a diagonal direction
- Turn: a fixed-radius arc bending 45° in direction

All pieces share the same capability interface (start, end, length,
position_at, sample_points). TrackPiece is the union of the three classes.

Construction validates the direction pairing. Only pairings produced by the
connection graph are legal; anything else is a programming error and raises
ValueError instead of producing wrong geometry.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from math import cos, pi, sin

import numpy as np

from railplanner.constants import GridConfig, RenderConfig
from railplanner.core.grid import Connection, Point
from railplanner.model.turn_table import TURN_GEOMETRY, TurnAnchor


def _clamp_fraction(fraction: float) -> float:
    return max(0.0, min(1.0, fraction))


@dataclass(frozen=True)
class BaseTrackPiece(ABC):
    """Shared interface of all track pieces.

    Attributes:
        start: Connection where the piece begins (direction of travel in)
        end: Connection where the piece ends (direction of travel out)
        grid: Grid geometry providing lengths and turn radius
    """

    start: Connection
    end: Connection
    grid: GridConfig = field(default_factory=GridConfig, repr=False, compare=False)

    kind = "base"

    @property
    @abstractmethod
    def length(self) -> float:
        """Fixed length of this piece family in pixels."""

    @abstractmethod
    def position_at(self, fraction: float) -> Point:
        """Point at the given fraction (clamped to [0, 1]) along the piece."""

    def sample_points(self, divisions: int = RenderConfig.STRAIGHT_DIVISIONS) -> np.ndarray:
        """Sample divisions+1 evenly spaced points, as an (n, 2) array."""
        fractions = np.linspace(0.0, 1.0, divisions + 1)
        return np.array([self.position_at(float(f)).as_tuple() for f in fractions])

    def to_dict(self) -> dict:
        return {"type": self.kind, "start": self.start.to_dict(), "end": self.end.to_dict()}


@dataclass(frozen=True)
class _LinearPiece(BaseTrackPiece):
    """Piece interpolated linearly between its end points."""

    def position_at(self, fraction: float) -> Point:
        f = _clamp_fraction(fraction)
        a = self.start.position
        b = self.end.position
        return Point(a.x + (b.x - a.x) * f, a.y + (b.y - a.y) * f)


@dataclass(frozen=True)
class Straight(_LinearPiece):
    """One cell of track along a cardinal direction."""

    kind = "straight"

    def __post_init__(self) -> None:
        if self.start.direction != self.end.direction or not self.start.direction.is_cardinal:
            raise ValueError(
                f"Straight needs equal cardinal directions, got {self.start.direction.name} "
                f"to {self.end.direction.name}"
            )

    @property
    def length(self) -> float:
        return self.grid.straight_length


@dataclass(frozen=True)
class Diagonal(_LinearPiece):
    """Half a cell diagonal of track along a 45° direction."""

    kind = "diagonal"

    def __post_init__(self) -> None:
        if self.start.direction != self.end.direction or not self.start.direction.is_diagonal:
            raise ValueError(
                f"Diagonal needs equal diagonal directions, got {self.start.direction.name} "
                f"to {self.end.direction.name}"
            )

    @property
    def length(self) -> float:
        return self.grid.diagonal_length


@dataclass(frozen=True)
class Turn(BaseTrackPiece):
    """Fixed-radius arc between two directions 45° apart.

    Geometry comes from TURN_GEOMETRY: the circle center sits one turn radius
    from the anchor end, towards the table's center direction.

    Attributes (derived in __post_init__):
        center: Circle center in pixels
        base_angle: Angle (radians) of the start point seen from the center
        turn_sign: +1 sweeps counter-clockwise, -1 clockwise
    """

    center: Point = field(init=False, compare=False)
    base_angle: float = field(init=False, compare=False)
    turn_sign: int = field(init=False, compare=False)

    kind = "turn"

    def __post_init__(self) -> None:
        key = (self.start.direction, self.end.direction)
        geometry = TURN_GEOMETRY.get(key)
        if geometry is None:
            raise ValueError(f"Invalid turn {self.start.direction.name} to {self.end.direction.name}")

        anchor = self.start.position if geometry.anchor is TurnAnchor.START else self.end.position
        radius = self.grid.turn_radius
        ux, uy = geometry.center_direction.unit_vector()
        center = Point(anchor.x + ux * radius, anchor.y + uy * radius)

        base_angle = geometry.base_turns * 2 * pi
        if geometry.anchor is TurnAnchor.END:
            base_angle -= geometry.rotation_sign * self.grid.turn_angle

        object.__setattr__(self, "center", center)
        object.__setattr__(self, "base_angle", base_angle)
        object.__setattr__(self, "turn_sign", geometry.rotation_sign)

    @property
    def length(self) -> float:
        return self.grid.turn_length

    def angle_at(self, fraction: float) -> float:
        """Angle (radians) of the point at fraction, seen from the center."""
        return self.base_angle + _clamp_fraction(fraction) * self.grid.turn_angle * self.turn_sign

    def position_at(self, fraction: float) -> Point:
        theta = self.angle_at(fraction)
        radius = self.grid.turn_radius
        return Point(self.center.x + radius * cos(theta), self.center.y + radius * sin(theta))

    def sample_points(self, divisions: int = RenderConfig.TURN_DIVISIONS) -> np.ndarray:
        thetas = self.base_angle + np.linspace(0.0, 1.0, divisions + 1) * self.grid.turn_angle * self.turn_sign
        radius = self.grid.turn_radius
        return np.column_stack((self.center.x + radius * np.cos(thetas), self.center.y + radius * np.sin(thetas)))


TrackPiece = Straight | Diagonal | Turn
