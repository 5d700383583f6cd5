"""Tests for the A* pathfinder.

Scenarios:
- Straight run along one grid line
- Single-turn path
- Start already at the goal
- Unreachable goals (off-lattice and outside the canvas)
- Expansion cap
- Costs match an uninformed search (the estimate never overestimates)
- Every returned hop is a legal graph edge
"""

import pytest
from hypothesis import given, settings, strategies as st

from railplanner.constants import GridConfig, SearchConfig
from railplanner.core.grid import Connection, Direction, Position
from railplanner.generators.connection_graph import neighbors
from railplanner.generators.pathfinder import AStarPathfinder, find_path


def assert_legal_path(path: list[Connection], grid: GridConfig) -> None:
    for a, b in zip(path, path[1:]):
        assert b in [n for n, _ in neighbors(a, grid=grid)], f"{a} -> {b} is not a graph edge"


class UninformedSearch(AStarPathfinder):
    """The same search with a zero estimate, i.e. plain Dijkstra."""

    def estimate(self, connection: Connection, goal: Position) -> int:
        return 0


def path_cost(path: list[Connection], grid: GridConfig) -> int:
    """Sum of graph edge costs along a path."""
    return sum(dict(neighbors(a, grid=grid))[b] for a, b in zip(path, path[1:]))


class TestEstimate:
    """Heuristic - Manhattan distance priced at the cheapest cost per pixel."""

    def test_uses_both_axes(self, grid: GridConfig) -> None:
        finder = AStarPathfinder(grid=grid)
        conn = Connection.at(0, 0, Direction.RIGHT)

        assert finder.estimate(conn, Position(32, 0)) == 220
        assert finder.estimate(conn, Position(0, 32)) == 220
        assert finder.estimate(conn, Position(32, 32)) == 440

    def test_rounds_down(self, grid: GridConfig) -> None:
        finder = AStarPathfinder(grid=grid)
        assert finder.estimate(Connection.at(0, 0, Direction.RIGHT), Position(3, 4)) == 48

    def test_zero_at_goal_for_any_direction(self, grid: GridConfig) -> None:
        finder = AStarPathfinder(grid=grid)
        for direction in Direction:
            assert finder.estimate(Connection.at(64, 32, direction), Position(64, 32)) == 0

    @given(
        x=st.integers(-20, 40),
        y=st.integers(-20, 20),
        direction=st.sampled_from(list(Direction)),
        goal_x=st.integers(-320, 640),
        goal_y=st.integers(-320, 320),
    )
    @settings(max_examples=200)
    def test_never_drops_more_than_an_edge_costs(
        self, x: int, y: int, direction: Direction, goal_x: int, goal_y: int
    ) -> None:
        """Along any edge the estimate falls by at most the edge's scaled cost."""
        grid = GridConfig(cell_size=32, canvas=(-320, -320, 640, 320))
        finder = AStarPathfinder(grid=grid)
        goal = Position(goal_x, goal_y)
        start = Connection.at(16 * x, 16 * y, direction)
        for neighbor, cost in neighbors(start, grid=grid):
            assert finder.estimate(start, goal) <= cost * SearchConfig.COST_SCALE + finder.estimate(neighbor, goal)


class TestFindPath:
    """find_path - searching the implicit graph."""

    def test_straight_run(self, open_grid: GridConfig) -> None:
        """Ten cells straight ahead resolves to eleven aligned connections."""
        start = Connection.at(0, 0, Direction.RIGHT)
        path = find_path(start=start, goal=Position(320, 0), grid=open_grid)

        assert path == [Connection.at(32 * i, 0, Direction.RIGHT) for i in range(11)]

    def test_single_turn(self, open_grid: GridConfig) -> None:
        path = find_path(start=Connection.at(0, 0, Direction.RIGHT), goal=Position(48, 16), grid=open_grid)
        assert path == [Connection.at(0, 0, Direction.RIGHT), Connection.at(48, 16, Direction.UP_RIGHT)]

    def test_start_at_goal(self, grid: GridConfig) -> None:
        start = Connection.at(64, 64, Direction.UP)
        assert find_path(start=start, goal=Position(64, 64), grid=grid) == [start]

    def test_path_starts_at_start_and_ends_at_goal(self, open_grid: GridConfig) -> None:
        start = Connection.at(0, 0, Direction.RIGHT)
        goal = Position(-160, 192)
        path = find_path(start=start, goal=goal, grid=open_grid)

        assert path is not None
        assert path[0] == start
        assert path[-1].position == goal
        assert_legal_path(path, open_grid)

    def test_off_lattice_goal_is_unreachable(self, small_grid: GridConfig) -> None:
        finder = AStarPathfinder(grid=small_grid)
        assert finder.find_path(start=Connection.at(0, 128, Direction.RIGHT), goal=Position(5, 5)) is None
        assert finder.last_expansions > 0

    def test_goal_outside_canvas_is_unreachable(self, small_grid: GridConfig) -> None:
        path = find_path(start=Connection.at(0, 128, Direction.RIGHT), goal=Position(1024, 128), grid=small_grid)
        assert path is None

    def test_deterministic(self, open_grid: GridConfig) -> None:
        start = Connection.at(0, 0, Direction.UP)
        goal = Position(208, -112)
        assert find_path(start, goal, open_grid) == find_path(start, goal, open_grid)

    def test_expansion_cap_gives_up(self, open_grid: GridConfig) -> None:
        finder = AStarPathfinder(grid=open_grid, max_expansions=1)
        assert finder.find_path(start=Connection.at(0, 0, Direction.RIGHT), goal=Position(320, 0)) is None
        assert finder.last_expansions == 1

    @pytest.mark.parametrize("cap", [1, 2, 5])
    def test_cap_allows_exactly_that_many_expansions(self, open_grid: GridConfig, cap: int) -> None:
        finder = AStarPathfinder(grid=open_grid, max_expansions=cap)
        finder.find_path(start=Connection.at(0, 0, Direction.RIGHT), goal=Position(320, 0))
        assert finder.last_expansions == cap

    def test_cap_of_one_reaches_adjacent_goal(self, open_grid: GridConfig) -> None:
        """Expanding only the start is enough to find a goal one edge away."""
        finder = AStarPathfinder(grid=open_grid, max_expansions=1)
        path = finder.find_path(start=Connection.at(0, 0, Direction.RIGHT), goal=Position(32, 0))

        assert path == [Connection.at(0, 0, Direction.RIGHT), Connection.at(32, 0, Direction.RIGHT)]
        assert finder.last_expansions == 1

    @pytest.mark.parametrize(
        "start, goal",
        [
            (Connection.at(0, 0, Direction.UP), Position(0, -96)),
            (Connection.at(0, 0, Direction.LEFT), Position(160, 160)),
            (Connection.at(16, 16, Direction.UP_RIGHT), Position(128, 0)),
        ],
    )
    def test_reverse_and_diagonal_starts(self, open_grid: GridConfig, start: Connection, goal: Position) -> None:
        """Goals behind or beside the start direction still resolve to legal paths."""
        path = find_path(start=start, goal=goal, grid=open_grid)

        assert path is not None
        assert path[-1].position == goal
        assert_legal_path(path, open_grid)


class TestOptimality:
    """A* costs agree with an uninformed search over many goals."""

    def test_matches_uninformed_search_over_goal_grid(self) -> None:
        grid = GridConfig.from_cells(columns=10, rows=10, cell_size=32)
        start = Connection.at(160, 160, Direction.RIGHT)
        informed = AStarPathfinder(grid=grid)
        uninformed = UninformedSearch(grid=grid)

        reached = 0
        for gx in range(16, 320, 48):
            for gy in range(16, 320, 48):
                goal = Position(gx, gy)
                path = informed.find_path(start=start, goal=goal)
                best = uninformed.find_path(start=start, goal=goal)

                assert (path is None) == (best is None), f"reachability differs for {goal}"
                if path is not None:
                    reached += 1
                    assert path_cost(path, grid) == path_cost(best, grid), f"suboptimal path to {goal}"
        assert reached > 0

    @pytest.mark.parametrize("goal", [Position(96, 576), Position(864, 96), Position(96, 96)])
    def test_matches_uninformed_search_on_default_grid(self, grid: GridConfig, goal: Position) -> None:
        start = Connection.at(320, 320, Direction.RIGHT)
        path = AStarPathfinder(grid=grid).find_path(start=start, goal=goal)
        best = UninformedSearch(grid=grid).find_path(start=start, goal=goal)

        assert (path is None) == (best is None)
        if path is not None:
            assert path_cost(path, grid) == path_cost(best, grid)
