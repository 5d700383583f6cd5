"""Connection graph - implicit graph of buildable track from an oriented anchor.

The graph is never materialized: neighbors are generated on demand from a
Connection, so the pathfinder only touches the part of the grid it explores.

Branching:
    Cardinal direction: 3 neighbors (turn, straight, turn)
    Diagonal direction: 2 neighbors (continue diagonal, one bend to a cardinal)

Which cardinal a diagonal may bend into depends on whether the anchor sits on
a vertical grid line. Only that side has a matching turn in the turn table.
"""

from railplanner.constants import GridConfig
from railplanner.core.grid import Connection, Direction, Position

Edge = tuple[Connection, int]

# Cardinal neighbors as (offset in cells, resulting direction, is_turn),
# ordered first turn, straight, second turn.
_CARDINAL_MOVES: dict[Direction, list[tuple[tuple[float, float], Direction, bool]]] = {
    Direction.RIGHT: [
        ((1.5, -0.5), Direction.DOWN_RIGHT, True),
        ((1.0, 0.0), Direction.RIGHT, False),
        ((1.5, 0.5), Direction.UP_RIGHT, True),
    ],
    Direction.UP: [
        ((0.5, 1.5), Direction.UP_RIGHT, True),
        ((0.0, 1.0), Direction.UP, False),
        ((-0.5, 1.5), Direction.UP_LEFT, True),
    ],
    Direction.DOWN: [
        ((-0.5, -1.5), Direction.DOWN_LEFT, True),
        ((0.0, -1.0), Direction.DOWN, False),
        ((0.5, -1.5), Direction.DOWN_RIGHT, True),
    ],
    Direction.LEFT: [
        ((-1.5, 0.5), Direction.UP_LEFT, True),
        ((-1.0, 0.0), Direction.LEFT, False),
        ((-1.5, -0.5), Direction.DOWN_LEFT, True),
    ],
}


class ConnectionGraph:
    """Generates the reachable neighbor connections of any connection.

    Pure and deterministic: the same connection always yields the same edges
    in the same order. Edge costs are integer pixel lengths taken from the
    grid config (straight = one cell, diagonal half-step, turn arc).

    Example:
        graph = ConnectionGraph(grid=GridConfig())
        for neighbor, cost in graph.neighbors(Connection.at(32, 16, Direction.RIGHT)):
            ...
    """

    def __init__(self, grid: GridConfig) -> None:
        self.grid = grid

    def neighbors(self, connection: Connection) -> list[Edge]:
        """List neighbor connections with their edge costs.

        Args:
            connection: Oriented anchor to expand

        Returns:
            (neighbor, cost) pairs lying inside the canvas.
        """
        if connection.direction.is_cardinal:
            edges = self._cardinal_edges(connection)
        else:
            edges = self._diagonal_edges(connection)

        return [(conn, cost) for conn, cost in edges if self.grid.contains(conn.position.x, conn.position.y)]

    def _cardinal_edges(self, connection: Connection) -> list[Edge]:
        grid = self.grid
        edges = []
        for offset, direction, is_turn in _CARDINAL_MOVES[connection.direction]:
            cost = grid.turn_cost if is_turn else grid.straight_cost
            edges.append((self._step(connection.position, offset, direction), cost))
        return edges

    def _diagonal_edges(self, connection: Connection) -> list[Edge]:
        grid = self.grid
        direction = connection.direction
        sx, sy = direction.dx, direction.dy

        edges = [(self._step(connection.position, (0.5 * sx, 0.5 * sy), direction), grid.diagonal_cost)]

        on_vertical_line = connection.position.x % grid.cell_size == 0
        if on_vertical_line:
            bend = (self._step(connection.position, (0.5 * sx, 1.5 * sy), Direction((0, sy))), grid.turn_cost)
        else:
            bend = (self._step(connection.position, (1.5 * sx, 0.5 * sy), Direction((sx, 0))), grid.turn_cost)
        edges.append(bend)
        return edges

    def _step(self, origin: Position, offset_cells: tuple[float, float], direction: Direction) -> Connection:
        """Move origin by an offset given in cells, truncating to whole pixels."""
        gs = self.grid.cell_size
        x = int(origin.x + offset_cells[0] * gs)
        y = int(origin.y + offset_cells[1] * gs)
        return Connection(position=Position(x, y), direction=direction)


def neighbors(connection: Connection, grid: GridConfig) -> list[Edge]:
    """Convenience wrapper around ConnectionGraph.neighbors."""
    return ConnectionGraph(grid=grid).neighbors(connection)
