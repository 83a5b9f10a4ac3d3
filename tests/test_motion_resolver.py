import pytest

from maze_grid import MazeGrid
from motion_resolver import Direction, MotionResolver
from templates import CORRIDOR, OPEN_ROOM, TUNNEL


def test_direction_order_and_reverse():
    assert list(Direction) == [Direction.RIGHT, Direction.DOWN, Direction.LEFT, Direction.UP]
    for direction in Direction:
        assert direction.reverse.reverse is direction
        dx, dy = direction.vector
        assert direction.reverse.vector == (-dx, -dy)
    assert Direction.LEFT.is_horizontal
    assert not Direction.UP.is_horizontal


def test_open_move_is_accepted():
    resolver = MotionResolver(MazeGrid(CORRIDOR))
    result = resolver.try_move((30, 30), Direction.RIGHT, 5, 1.0)
    assert result.accepted
    assert not result.wrapped
    assert result.position == (35, 30)


def test_move_into_wall_is_rejected_with_unchanged_position():
    resolver = MotionResolver(MazeGrid(CORRIDOR))
    result = resolver.try_move((30, 30), Direction.UP, 15, 1.0)
    assert not result.accepted
    assert result.position == (30, 30)


def test_margin_blocks_bounding_box_against_wall():
    resolver = MotionResolver(MazeGrid(CORRIDOR))
    assert resolver.try_move((30, 30), Direction.LEFT, 5, 1.0).accepted
    assert not resolver.try_move((30, 30), Direction.LEFT, 5, 1.0, margin=8).accepted


def test_leaving_canvas_on_non_tunnel_row_is_rejected():
    maze = MazeGrid((
        "#####",
        "    #",
        "#####",
    ))
    resolver = MotionResolver(maze)
    assert maze.tunnel_rows == frozenset()
    result = resolver.try_move((2, 30), Direction.LEFT, 5, 1.0)
    assert not result.accepted
    assert result.position == (2, 30)


def test_tunnel_wrap_keeps_overshoot():
    resolver = MotionResolver(MazeGrid(TUNNEL))
    result = resolver.try_move((2, 30), Direction.LEFT, 5, 1.0)
    assert result.accepted
    assert result.wrapped
    assert result.position == (97, 30)


def test_tunnel_wrap_is_reversible():
    resolver = MotionResolver(MazeGrid(TUNNEL))
    there = resolver.try_move((2, 30), Direction.LEFT, 5, 1.0)
    back = resolver.try_move(there.position, Direction.RIGHT, 5, 1.0)
    assert back.wrapped
    assert back.position == pytest.approx((2, 30))


def test_lane_snap_aligns_perpendicular_coordinate():
    resolver = MotionResolver(MazeGrid(OPEN_ROOM))
    result = resolver.try_move((50, 54), Direction.RIGHT, 5, 1.0, snap_tolerance=6)
    assert result.position == (55, 50)
    far = resolver.try_move((50, 58), Direction.RIGHT, 5, 1.0, snap_tolerance=6)
    assert far.position == (55, 58)


def test_can_occupy_checks_corners():
    resolver = MotionResolver(MazeGrid(OPEN_ROOM))
    assert resolver.can_occupy(50, 50, margin=8)
    assert resolver.can_occupy(25, 50)
    assert not resolver.can_occupy(25, 50, margin=8)
    assert not resolver.can_occupy(10, 10)
    assert not resolver.can_occupy(-5, 50)
