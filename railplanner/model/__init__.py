"""Data model for track and trains.

- Straight, Diagonal, Turn: track piece geometry (TrackPiece union)
- TURN_GEOMETRY: the 16-entry turn table
- Segment, Train: moving points on the committed track list
- RailNetwork: committed list + laying head
"""

from railplanner.model.track_piece import BaseTrackPiece, Diagonal, Straight, TrackPiece, Turn
from railplanner.model.train import Segment, Train
from railplanner.model.turn_table import TURN_GEOMETRY, TurnAnchor, TurnGeometry

# RailNetwork has a circular import with generators (pathfinder, assembler)
# Import directly: from railplanner.model.rail_network import RailNetwork

__all__ = [
    "BaseTrackPiece",
    "Straight",
    "Diagonal",
    "Turn",
    "TrackPiece",
    "TURN_GEOMETRY",
    "TurnAnchor",
    "TurnGeometry",
    "Segment",
    "Train",
]
