"""A* pathfinder over the implicit connection graph.

Finds a buildable sequence of connections from an oriented start to a goal
position. The goal is matched by position only: any arrival direction is
accepted. Search nodes are keyed by the full Connection because the
direction decides what can be built next.

Algorithm:
    1. Push the start with g=0, f=h(start)
    2. Pop the open node with minimal f (ties: insertion order)
    3. Goal position reached -> walk parents back to the start
    4. Otherwise close it and relax every neighbor edge:
       unseen -> insert, closed -> skip, open and not better -> skip,
       else update g, f and parent
    5. Frontier empty -> no path

The open set is a heapq priority queue with lazy deletion: improving an open
node pushes a fresh entry and stale entries are skipped when popped.

Costs: edge costs from ConnectionGraph are scaled by SearchConfig.COST_SCALE.
The heuristic is the Manhattan distance priced at the cheapest cost per pixel
any edge achieves (GridConfig.cheapest_cost_per_pixel), rounded down. Every
edge costs at least that much per pixel it moves, so the estimate is
consistent and the first path popped at the goal is a cheapest one.
"""

import heapq
import logging
from dataclasses import dataclass
from itertools import count
from typing import Optional

from railplanner.constants import GridConfig, SearchConfig
from railplanner.core.grid import Connection, Position
from railplanner.generators.connection_graph import ConnectionGraph

logger = logging.getLogger(__name__)


@dataclass
class SearchNode:
    """Bookkeeping for one connection during a single search."""

    connection: Connection
    g_score: int
    f_score: int
    parent: Optional["SearchNode"] = None
    closed: bool = False


class AStarPathfinder:
    """Best-first search from an oriented start to an unoriented goal.

    Example:
        finder = AStarPathfinder(grid=GridConfig())
        path = finder.find_path(start=Connection.at(32, 16, Direction.RIGHT), goal=Position(320, 16))
        if path is None:
            ...  # unreachable, leave the preview unset
    """

    def __init__(
        self,
        grid: GridConfig,
        graph: Optional[ConnectionGraph] = None,
        max_expansions: Optional[int] = SearchConfig.MAX_EXPANSIONS,
    ) -> None:
        """Initialize pathfinder.

        Args:
            grid: Grid geometry bounding the search
            graph: Neighbor generator (built from grid if omitted)
            max_expansions: Optional cap on closed nodes, None for unbounded
        """
        self.grid = grid
        self.graph = graph or ConnectionGraph(grid=grid)
        self.max_expansions = max_expansions
        self.last_expansions = 0
        self._rate = grid.cheapest_cost_per_pixel

    def estimate(self, connection: Connection, goal: Position) -> int:
        """Lower bound on the scaled cost from connection to goal."""
        pos = connection.position
        manhattan = abs(pos.x - goal.x) + abs(pos.y - goal.y)
        return int(manhattan * SearchConfig.COST_SCALE * self._rate)

    def find_path(self, start: Connection, goal: Position) -> Optional[list[Connection]]:
        """Search for a buildable path.

        Args:
            start: Oriented anchor the path must begin with
            goal: Target position (any arrival direction)

        Returns:
            Connections from start to a connection at goal, or None when the
            goal cannot be reached inside the canvas.
        """
        tie_breaker = count()
        start_node = SearchNode(connection=start, g_score=0, f_score=self.estimate(start, goal))
        nodes: dict[Connection, SearchNode] = {start: start_node}
        open_heap: list[tuple[int, int, SearchNode]] = [(start_node.f_score, next(tie_breaker), start_node)]
        expansions = 0

        while open_heap:
            f_score, _, node = heapq.heappop(open_heap)
            if node.closed or f_score != node.f_score:
                continue  # Stale entry superseded by a better one

            if node.connection.position == goal:
                self.last_expansions = expansions
                path = self._reconstruct(node)
                logger.debug(f"Path found: {len(path) - 1} hops, {expansions} expansions")
                return path

            if self.max_expansions is not None and expansions >= self.max_expansions:
                logger.warning(f"Search from {start} to {goal} stopped after {expansions} expansions")
                break
            node.closed = True
            expansions += 1

            for neighbor, cost in self.graph.neighbors(node.connection):
                total_g = node.g_score + cost * SearchConfig.COST_SCALE
                existing = nodes.get(neighbor)

                if existing is None:
                    new_node = SearchNode(
                        connection=neighbor,
                        g_score=total_g,
                        f_score=total_g + self.estimate(neighbor, goal),
                        parent=node,
                    )
                    nodes[neighbor] = new_node
                    heapq.heappush(open_heap, (new_node.f_score, next(tie_breaker), new_node))
                    continue

                if existing.closed or existing.g_score <= total_g:
                    continue

                existing.g_score = total_g
                existing.f_score = total_g + self.estimate(neighbor, goal)
                existing.parent = node
                heapq.heappush(open_heap, (existing.f_score, next(tie_breaker), existing))

        self.last_expansions = expansions
        logger.debug(f"No path from {start} to {goal} ({expansions} expansions)")
        return None

    @staticmethod
    def _reconstruct(node: SearchNode) -> list[Connection]:
        """Walk parent links back to the start and return the path in order."""
        path = []
        current: Optional[SearchNode] = node
        while current is not None:
            path.append(current.connection)
            current = current.parent
        path.reverse()
        return path


def find_path(start: Connection, goal: Position, grid: GridConfig) -> Optional[list[Connection]]:
    """Convenience wrapper around AStarPathfinder.find_path."""
    return AStarPathfinder(grid=grid).find_path(start=start, goal=goal)
