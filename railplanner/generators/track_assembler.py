"""Track assembler - turns an accepted connection path into track pieces.

Consecutive connections are paired and classified by their directions:
- equal cardinal -> Straight
- equal diagonal -> Diagonal
- 45° apart -> Turn

Pathfinder output only contains graph-legal edges, so any other pairing is a
programming error and raises ValueError.
"""

from typing import Sequence

from railplanner.constants import GridConfig
from railplanner.core.grid import Connection
from railplanner.model.track_piece import Diagonal, Straight, TrackPiece, Turn


def piece_between(start: Connection, end: Connection, grid: GridConfig) -> TrackPiece:
    """Classify one pair of connections into a track piece.

    Raises:
        ValueError: If the directions are neither equal nor adjacent.
    """
    a, b = start.direction, end.direction
    if a == b:
        if a.is_cardinal:
            return Straight(start=start, end=end, grid=grid)
        return Diagonal(start=start, end=end, grid=grid)
    if a.is_adjacent(b):
        return Turn(start=start, end=end, grid=grid)
    raise ValueError(f"No track piece joins {a.name} to {b.name} ({start} -> {end})")


def assemble(connections: Sequence[Connection], grid: GridConfig) -> list[TrackPiece]:
    """Build the track pieces for a connection path.

    Args:
        connections: Ordered connections as returned by the pathfinder
        grid: Grid geometry for the pieces

    Returns:
        One piece per consecutive pair (empty for fewer than two connections).
    """
    return [piece_between(start=a, end=b, grid=grid) for a, b in zip(connections, connections[1:])]
