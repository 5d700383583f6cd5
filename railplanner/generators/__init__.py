"""Path generation for track laying.

- ConnectionGraph: implicit graph of buildable track
- AStarPathfinder: best-first search from an oriented start to a goal
- assemble: connection path -> track pieces
"""

from railplanner.generators.connection_graph import ConnectionGraph, neighbors
from railplanner.generators.pathfinder import AStarPathfinder, find_path
from railplanner.generators.track_assembler import assemble, piece_between

__all__ = [
    "ConnectionGraph",
    "neighbors",
    "AStarPathfinder",
    "find_path",
    "assemble",
    "piece_between",
]
