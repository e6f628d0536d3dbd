"""Tests for maze pathfinding and rendering helpers."""

from mazechase.environment import (
    Direction,
    MazeGridState,
    bfs_distances,
    grid_shortest_path,
    nearest_passable,
    next_step,
    render_ascii,
)
from mazechase.scenario import CLASSIC_LAYOUT, parse_layout


def _split_layout():
    # Two regions separated by a wall column
    return parse_layout(
        [
            "#######",
            "#G.#.P#",
            "#..#..#",
            "#######",
        ],
        name="split",
    )


def _portal_layout(portals_enabled=True):
    layout = parse_layout(
        [
            "#######",
            "#G....#",
            "#.###.#",
            " ..... ",
            "#######",
        ],
        name="portal",
        portal_row=3,
        player_start=(3, 5),
    )
    return layout.build_grid(portals_enabled=portals_enabled)


def test_next_step_moves_strictly_closer_on_classic_maze():
    grid = CLASSIC_LAYOUT.build_grid()
    goals = [(1, 1), (23, 13), (14, 0), (28, 26), (11, 13)]

    for goal in goals:
        to_goal = bfs_distances(grid, goal)
        for start, hops in to_goal.items():
            step = next_step(grid, start, goal)
            if start == goal:
                assert step is None
                continue
            assert step in grid.neighbors(start)
            assert to_goal[step] == hops - 1


def test_next_step_is_deterministic():
    grid = CLASSIC_LAYOUT.build_grid()
    first = next_step(grid, (1, 1), (28, 26))
    for _ in range(5):
        assert next_step(grid, (1, 1), (28, 26)) == first


def test_unreachable_and_degenerate_targets_return_none():
    grid = _split_layout().build_grid()

    # Across the wall column
    assert next_step(grid, (1, 1), (1, 4)) is None
    assert grid_shortest_path(grid, (1, 1), (1, 4)) is None
    # Wall target
    assert next_step(grid, (1, 1), (0, 0)) is None
    # Already there
    assert next_step(grid, (2, 2), (2, 2)) is None
    assert grid_shortest_path(grid, (2, 2), (2, 2)) == [(2, 2)]


def test_grid_shortest_path_includes_endpoints_and_avoids_walls():
    grid = CLASSIC_LAYOUT.build_grid()
    path = grid_shortest_path(grid, (1, 1), (5, 6))

    assert path is not None
    assert path[0] == (1, 1)
    assert path[-1] == (5, 6)
    assert all(grid.is_passable(tile) for tile in path)
    # Consecutive tiles are adjacent
    for a, b in zip(path, path[1:]):
        assert abs(a[0] - b[0]) + abs(a[1] - b[1]) == 1


def test_portal_adjacency_only_when_enabled():
    with_portals = _portal_layout(portals_enabled=True)
    without_portals = _portal_layout(portals_enabled=False)

    assert (3, 6) in with_portals.neighbors((3, 0))
    assert (3, 6) not in without_portals.neighbors((3, 0))

    # Wrapping is one hop; walking across is six
    assert next_step(with_portals, (3, 0), (3, 6)) == (3, 6)
    assert next_step(without_portals, (3, 0), (3, 6)) == (3, 1)
    assert with_portals.step_target((3, 6), Direction.RIGHT) == (3, 0)


def test_nearest_passable_resolves_wall_corners():
    grid = CLASSIC_LAYOUT.build_grid()

    assert nearest_passable(grid, (0, 0)) == (1, 1)
    assert nearest_passable(grid, (29, 27)) == (28, 26)
    # Open tiles resolve to themselves
    assert nearest_passable(grid, (5, 5)) == (5, 5)


def test_render_ascii_overlays_agents():
    grid_state = MazeGridState(
        width=4,
        height=3,
        rows=["####", "#.o#", "####"],
    )

    text = render_ascii(grid_state, player=[1, 1], ghosts=[([1, 2], True)])
    lines = text.splitlines()

    assert len(lines) == 3
    assert lines[0] == "██" * 4
    assert "C" in lines[1]
    assert "w" in lines[1]
    assert "●" not in text
