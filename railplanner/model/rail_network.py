"""RailNetwork - the committed track list and the track-laying head.

Owns:
- the committed pieces (append-only, indices stable for the whole run)
- the head: the connection new track continues from
- the preview: an assembled but uncommitted path to the last requested goal

Trains address pieces by index only, so appending never invalidates them.

Provides operations for:
- Placing the start of the line
- Proposing a path to a goal (pathfinder + assembler)
- Committing the preview
- Serialization (JSON)
"""

import json
import logging
from pathlib import Path
from typing import Iterator, Optional, Sequence

from railplanner.constants import OUTPUT_DIR, GridConfig, StorageConfig
from railplanner.core.grid import Connection, Position
from railplanner.generators.pathfinder import AStarPathfinder
from railplanner.generators.track_assembler import assemble, piece_between
from railplanner.model.track_piece import TrackPiece

logger = logging.getLogger(__name__)


class RailNetwork:
    """Committed track plus the in-progress preview.

    Example:
        network = RailNetwork(grid=GridConfig())
        network.place_start(Connection.at(32, 16, Direction.RIGHT))
        if network.propose(goal=Position(320, 16)):
            network.commit_preview()
    """

    def __init__(self, grid: GridConfig, pathfinder: Optional[AStarPathfinder] = None) -> None:
        self.grid = grid
        self.pathfinder = pathfinder or AStarPathfinder(grid=grid)
        self._pieces: list[TrackPiece] = []
        self.head: Optional[Connection] = None
        self.preview: Optional[list[TrackPiece]] = None

    # =========================================================================
    # Read access
    # =========================================================================

    @property
    def pieces(self) -> tuple[TrackPiece, ...]:
        """Committed pieces (read-only view)."""
        return tuple(self._pieces)

    def __len__(self) -> int:
        return len(self._pieces)

    def __getitem__(self, index: int) -> TrackPiece:
        return self._pieces[index]

    def __iter__(self) -> Iterator[TrackPiece]:
        return iter(self._pieces)

    @property
    def is_empty(self) -> bool:
        return not self._pieces

    @property
    def total_length(self) -> float:
        """Sum of committed piece lengths in pixels."""
        return sum(piece.length for piece in self._pieces)

    # =========================================================================
    # Laying track
    # =========================================================================

    def place_start(self, connection: Connection) -> None:
        """Set where the line begins.

        Raises:
            ValueError: If track was already committed (the line only grows
                from its head).
        """
        if self._pieces:
            raise ValueError("Cannot move the start after track has been committed")
        self.head = connection
        self.preview = None
        logger.info(f"Line start placed at {connection}")

    def clear_start(self) -> None:
        """Forget the start (only meaningful before anything is committed)."""
        if self._pieces:
            raise ValueError("Cannot clear the start after track has been committed")
        self.head = None
        self.preview = None

    def propose(self, goal: Position) -> Optional[list[TrackPiece]]:
        """Compute the preview from the head to goal.

        Returns:
            The assembled preview, or None when no path exists (the preview
            is then left unset).
        """
        if self.head is None:
            raise ValueError("Place a start before proposing a path")

        path = self.pathfinder.find_path(start=self.head, goal=goal)
        self.preview = assemble(path, grid=self.grid) if path is not None else None
        if self.preview is not None:
            logger.debug(f"Preview to {goal}: {len(self.preview)} piece(s)")
        return self.preview

    def discard_preview(self) -> None:
        self.preview = None

    def commit_preview(self) -> list[int]:
        """Append the preview to the committed list and advance the head.

        Returns:
            Indices of the newly committed pieces.

        Raises:
            ValueError: If there is no preview to commit.
        """
        if self.preview is None:
            raise ValueError("No preview to commit")
        preview, self.preview = self.preview, None
        indices = self.append(preview)
        if preview:
            self.head = preview[-1].end
        return indices

    def append(self, pieces: Sequence[TrackPiece]) -> list[int]:
        """Append pieces to the committed list (never reorders or replaces)."""
        first = len(self._pieces)
        self._pieces.extend(pieces)
        if pieces:
            logger.info(f"Committed {len(pieces)} piece(s), network now {len(self._pieces)}")
        return list(range(first, len(self._pieces)))

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_dict(self) -> dict:
        """Serialize committed track and head to a JSON-compatible dict."""
        return {
            "version": StorageConfig.FORMAT_VERSION,
            "grid": {
                "cell_size": self.grid.cell_size,
                "canvas": list(self.grid.canvas),
                "turn_radius_cells": self.grid.turn_radius_cells,
                "turn_angle": self.grid.turn_angle,
                "inclusive_bounds": self.grid.inclusive_bounds,
            },
            "head": self.head.to_dict() if self.head is not None else None,
            "pieces": [piece.to_dict() for piece in self._pieces],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "RailNetwork":
        """Rebuild a network, re-deriving piece geometry from connection pairs."""
        grid_data = data["grid"]
        grid = GridConfig(
            cell_size=int(grid_data["cell_size"]),
            canvas=tuple(grid_data["canvas"]),
            turn_radius_cells=float(grid_data["turn_radius_cells"]),
            turn_angle=float(grid_data["turn_angle"]),
            inclusive_bounds=bool(grid_data.get("inclusive_bounds", False)),
        )
        network = cls(grid=grid)
        network.append(
            [
                piece_between(
                    start=Connection.from_dict(item["start"]),
                    end=Connection.from_dict(item["end"]),
                    grid=grid,
                )
                for item in data["pieces"]
            ]
        )
        if data["head"] is not None:
            network.head = Connection.from_dict(data["head"])
        return network

    def save(self, path: Optional[Path] = None) -> Path:
        """Write the network as JSON.

        Args:
            path: Target file. Defaults to output/network.json

        Returns:
            The path written.
        """
        path = Path(path) if path is not None else OUTPUT_DIR / StorageConfig.DEFAULT_FILENAME
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info(f"Saved network ({len(self._pieces)} pieces) to {path.name}")
        return path

    @classmethod
    def load(cls, path: Path) -> "RailNetwork":
        with open(path, "r", encoding="utf-8") as f:
            network = cls.from_dict(json.load(f))
        logger.info(f"Loaded network ({len(network)} pieces) from {Path(path).name}")
        return network

    def __repr__(self) -> str:
        return f"RailNetwork(pieces={len(self._pieces)}, head={self.head}, preview={self.preview is not None})"
