"""Shared pytest fixtures for railplanner tests.

COORDINATE SYSTEM:
    Pixels, y grows "up". Cell size 32 throughout, so every anchor the graph
    reaches from a 16-aligned start stays on 16-pixel multiples and all edge
    offsets are exact integers (no truncation effects in assertions).

    open_grid: canvas around the origin, so (0, 0) has neighbors on all sides
    small_grid: tiny canvas from the origin, cheap to search exhaustively
"""

import pytest

from railplanner.constants import GridConfig
from railplanner.core.grid import Connection, Direction, Position
from railplanner.model.rail_network import RailNetwork
from railplanner.model.track_piece import Straight


@pytest.fixture
def grid() -> GridConfig:
    """Default 30×20 cell grid of 32 px cells."""
    return GridConfig()


@pytest.fixture
def open_grid() -> GridConfig:
    """Canvas spanning negative and positive coordinates around the origin."""
    return GridConfig(cell_size=32, canvas=(-320, -320, 640, 320))


@pytest.fixture
def small_grid() -> GridConfig:
    """8×8 cell canvas from the origin."""
    return GridConfig.from_cells(columns=8, rows=8, cell_size=32)


@pytest.fixture
def straight_run(grid: GridConfig) -> list[Straight]:
    """Three Right-facing straights from (0, 320) to (96, 320)."""
    return [
        Straight(
            start=Connection.at(32 * i, 320, Direction.RIGHT),
            end=Connection.at(32 * (i + 1), 320, Direction.RIGHT),
            grid=grid,
        )
        for i in range(3)
    ]


@pytest.fixture
def laid_network(grid: GridConfig) -> RailNetwork:
    """Network with a committed ten-cell straight from (0, 320) to (320, 320)."""
    network = RailNetwork(grid=grid)
    network.place_start(Connection.at(0, 320, Direction.RIGHT))
    network.propose(goal=Position(320, 320))
    network.commit_preview()
    return network
