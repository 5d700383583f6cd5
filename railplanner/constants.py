"""Configuration constants for Rail Planner.

All tunable parameters are centralized here. Algorithms never read module
globals for grid geometry: they receive a GridConfig value, so several
independent grids (and tests) can coexist.

Classes:
    GridDefaults: Default grid dimensions (cells and pixels)
    GridConfig: Grid geometry value threaded through graph, search and pieces
    SearchConfig: A* cost scaling and safety cap
    TrainConfig: Default train layout and speed
    RenderConfig: Sampling density handed to the renderer
    StorageConfig: Serialization format version
"""

from dataclasses import dataclass
from fractions import Fraction
from math import atan, sqrt
from pathlib import Path

# Package root directory (where railplanner/ lives)
PACKAGE_DIR = Path(__file__).parent

# Project root directory (parent of railplanner/)
PROJECT_ROOT = PACKAGE_DIR.parent

# Output directory for saved networks
OUTPUT_DIR = PROJECT_ROOT / "output"


class GridDefaults:
    """Default grid dimensions."""

    COLUMNS = 30
    ROWS = 20
    CELL_SIZE = 32  # Pixels per grid cell

    # Turn geometry: every curve is a 2.5-cell radius arc sweeping atan(3/4)
    TURN_RADIUS_CELLS = 2.5
    TURN_ANGLE_RAD = atan(0.75)  # ≈ 0.6435 rad ≈ 36.87°


@dataclass(frozen=True)
class GridConfig:
    """Grid geometry shared by the connection graph, pathfinder and track pieces.

    The canvas is a pixel rectangle (min_x, min_y, max_x, max_y). Graph nodes
    must lie strictly inside it unless inclusive_bounds is set, so track never
    runs along the border lines.
    y grows "up": Direction.UP moves towards larger y.

    Attributes:
        cell_size: Grid cell size in pixels
        canvas: Bounds every graph node must lie within
        turn_radius_cells: Radius of turn pieces in cells
        turn_angle: Sweep angle of turn pieces in radians
        inclusive_bounds: Also accept nodes lying on the border lines

    Example:
        grid = GridConfig.from_cells(columns=30, rows=20, cell_size=32)
        grid.turn_cost  # 51
    """

    cell_size: int = GridDefaults.CELL_SIZE
    canvas: tuple[int, int, int, int] = (
        0,
        0,
        GridDefaults.COLUMNS * GridDefaults.CELL_SIZE,
        GridDefaults.ROWS * GridDefaults.CELL_SIZE,
    )
    turn_radius_cells: float = GridDefaults.TURN_RADIUS_CELLS
    turn_angle: float = GridDefaults.TURN_ANGLE_RAD
    inclusive_bounds: bool = False

    def __post_init__(self) -> None:
        """Validate geometry after initialization."""
        if self.cell_size <= 0:
            raise ValueError(f"cell_size must be positive, got {self.cell_size}")
        min_x, min_y, max_x, max_y = self.canvas
        if min_x >= max_x or min_y >= max_y:
            raise ValueError(f"Canvas {self.canvas} is empty (min must be below max)")
        if self.turn_radius_cells <= 0:
            raise ValueError(f"turn_radius_cells must be positive, got {self.turn_radius_cells}")
        if self.turn_angle <= 0:
            raise ValueError(f"turn_angle must be positive, got {self.turn_angle}")

    @classmethod
    def from_cells(
        cls,
        columns: int,
        rows: int,
        cell_size: int = GridDefaults.CELL_SIZE,
    ) -> "GridConfig":
        """Build a config whose canvas spans columns × rows cells from the origin."""
        return cls(cell_size=cell_size, canvas=(0, 0, columns * cell_size, rows * cell_size))

    @property
    def turn_radius(self) -> float:
        """Turn radius in pixels."""
        return self.turn_radius_cells * self.cell_size

    # Geometric lengths (pixels, float) used by pieces and simulation

    @property
    def straight_length(self) -> float:
        return float(self.cell_size)

    @property
    def diagonal_length(self) -> float:
        """Length of one diagonal half-step, i.e. cell_size·√2/2."""
        return self.cell_size * sqrt(2) / 2

    @property
    def turn_length(self) -> float:
        """Arc length of a turn piece."""
        return self.turn_angle * self.turn_radius

    # Integer edge costs used by the connection graph

    @property
    def straight_cost(self) -> int:
        return int(self.straight_length)

    @property
    def diagonal_cost(self) -> int:
        return int(self.diagonal_length)

    @property
    def turn_cost(self) -> int:
        return int(self.turn_length)

    @property
    def cheapest_cost_per_pixel(self) -> Fraction:
        """Lowest edge cost per pixel of Manhattan displacement over all edge kinds.

        Half-cell offsets are rounded up, since truncating a negative
        coordinate can move a node one pixel further than the nominal step.
        A Manhattan distance multiplied by this never overestimates the cost
        of reaching it.
        """
        gs = self.cell_size
        half = (gs + 1) // 2
        one_and_half = (3 * gs + 1) // 2
        return min(
            Fraction(self.straight_cost, gs),
            Fraction(self.diagonal_cost, 2 * half),
            Fraction(self.turn_cost, one_and_half + half),
        )

    def contains(self, x: int, y: int) -> bool:
        """Check whether a pixel coordinate lies inside the canvas."""
        min_x, min_y, max_x, max_y = self.canvas
        if self.inclusive_bounds:
            return min_x <= x <= max_x and min_y <= y <= max_y
        return min_x < x < max_x and min_y < y < max_y


class SearchConfig:
    """A* search parameters."""

    # Edge costs and the heuristic are multiplied by this before accumulation
    COST_SCALE = 10

    # None = unbounded; the canvas already bounds the search
    MAX_EXPANSIONS: int | None = None


class TrainConfig:
    """Default train layout (pixels and pixels per second)."""

    DEFAULT_SPEED = 40.0
    DEFAULT_CARS = 3
    CAR_LENGTH = 20.0  # Distance between the two segments of one car
    CAR_GAP = 6.0  # Distance between consecutive cars


class RenderConfig:
    """Sampling density for pieces handed to the renderer."""

    # Turns are drawn as a polyline of this many chords
    TURN_DIVISIONS = 4
    STRAIGHT_DIVISIONS = 1


class StorageConfig:
    """Network serialization settings."""

    FORMAT_VERSION = "1.0"
    DEFAULT_FILENAME = "network.json"
