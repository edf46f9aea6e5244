# tests/test_types.py
"""
Value types and the Grid query surface.
"""

from __future__ import annotations

import pytest

from mazepath.core.errors import InvalidGrid
from mazepath.core.types import DIRECTIONS, WALL, Grid, Location, SearchNode, SearchStatus


def test_location_equality_and_hash_follow_coordinates() -> None:
    assert Location(2, 3) == Location(2, 3)
    assert Location(2, 3) != Location(3, 2)
    assert len({Location(2, 3), Location(2, 3), Location(3, 2)}) == 2
    # hashing must spread instances out, not collapse them to one bucket
    assert len({hash(Location(x, z)) for x in range(10) for z in range(10)}) > 1


def test_location_plus_direction() -> None:
    assert Location(1, 1) + Location(0, -1) == Location(1, 0)
    assert Location(1, 1).distance(Location(4, 5)) == 5.0


def test_direction_order_is_fixed() -> None:
    assert [d.as_tuple() for d in DIRECTIONS] == [(1, 0), (0, 1), (-1, 0), (0, -1)]


def test_search_node_equality_ignores_costs() -> None:
    a = SearchNode(Location(1, 1), g=1.0, h=2.0, f=3.0)
    b = SearchNode(Location(1, 1), g=9.0, h=9.0, f=18.0, parent=Location(0, 1))
    c = SearchNode(Location(2, 1), g=1.0, h=2.0, f=3.0)

    assert a == b
    assert a != c
    assert hash(a) == hash(b)
    assert len({a, b, c}) == 2


def test_grid_from_rows_rejects_ragged_rows() -> None:
    with pytest.raises(InvalidGrid):
        Grid.from_rows([[0, 0], [0]])
    with pytest.raises(InvalidGrid):
        Grid.from_rows([])


def test_open_room_has_wall_ring() -> None:
    grid = Grid.open_room(5, 4)

    assert (grid.width, grid.depth) == (5, 4)
    assert grid.is_blocked(Location(0, 2))
    assert grid.is_blocked(Location(4, 1))
    assert grid.is_blocked(Location(2, 3))
    assert not grid.is_blocked(Location(2, 2))
    assert grid.cells[0][0] == WALL


def test_cells_are_indexed_by_row_then_column() -> None:
    grid = Grid.from_rows([
        [0, 0, 1],
        [0, 0, 0],
    ])
    assert grid.is_blocked(Location(2, 0))
    assert not grid.is_blocked(Location(0, 1))


def test_neighbors_are_not_filtered() -> None:
    grid = Grid.open_room(3, 3)

    # (0, 0) is a corner: two neighbors are out of bounds, the rest are walls
    assert grid.neighbors(Location(0, 0)) == [
        Location(1, 0),
        Location(0, 1),
        Location(-1, 0),
        Location(0, -1),
    ]
    assert not grid.in_bounds(Location(-1, 0))
    assert not grid.in_bounds(Location(3, 0))
    assert grid.in_bounds(Location(2, 2))


def test_interior_skips_border() -> None:
    grid = Grid.open_room(4, 4)
    assert list(grid.interior()) == [Location(1, 1), Location(2, 1), Location(1, 2), Location(2, 2)]


def test_terminal_statuses() -> None:
    assert SearchStatus.FOUND.terminal
    assert SearchStatus.EXHAUSTED.terminal
    assert not SearchStatus.RUNNING.terminal
    assert not SearchStatus.IDLE.terminal


@pytest.mark.parametrize("rows", [
    5,
    [[0, None], [0, 0]],
    [[0, "x"], [0, 0]],
    [[0, 0], None],
])
def test_grid_from_rows_rejects_non_integer_cells(rows) -> None:
    with pytest.raises(InvalidGrid):
        Grid.from_rows(rows)
