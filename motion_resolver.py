"""
Motion resolution against the wall grid, including tunnel wraparound.
"""

from collections import namedtuple
from enum import Enum

MoveResult = namedtuple('MoveResult', ['position', 'accepted', 'wrapped'])


class Direction(Enum):
    RIGHT = (1, 0)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    UP = (0, -1)

    @property
    def vector(self):
        return self.value

    @property
    def reverse(self):
        return _REVERSE[self]

    @property
    def is_horizontal(self):
        return self.value[1] == 0


_REVERSE = {
    Direction.RIGHT: Direction.LEFT,
    Direction.LEFT: Direction.RIGHT,
    Direction.DOWN: Direction.UP,
    Direction.UP: Direction.DOWN,
}


class MotionResolver:
    """Decides whether a step is legal on the maze and performs tunnel wrap"""

    def __init__(self, maze):
        self.maze = maze

    def can_occupy(self, x, y, margin=0.0):
        """Centre inside the canvas and no wall under the centre or bounding-box corners"""
        if not self.maze.in_bounds(x, y):
            return False
        if self.maze.is_wall_at(x, y):
            return False
        if margin > 0:
            # Corners beyond the grid classify as OUTSIDE, which is not a wall
            for cx, cy in ((x - margin, y - margin), (x + margin, y - margin),
                           (x - margin, y + margin), (x + margin, y + margin)):
                if self.maze.is_wall_at(cx, cy):
                    return False
        return True

    def align_to_lane(self, position, direction, snap_tolerance):
        """Pull the coordinate across the travel axis onto the lane centre when close enough"""
        x, y = position
        if snap_tolerance <= 0:
            return x, y
        cx, cy = self.maze.cell_center(*self.maze.cell_at(x, y))
        if direction.is_horizontal:
            if abs(y - cy) <= snap_tolerance:
                y = cy
        elif abs(x - cx) <= snap_tolerance:
            x = cx
        return x, y

    def try_move(self, position, direction, speed, dt, margin=0.0, snap_tolerance=0.0):
        """
        Step `position` along `direction` by speed * dt.

        Returns:
            MoveResult; a rejected move carries the unchanged position
        """
        x, y = self.align_to_lane(position, direction, snap_tolerance)
        dx, dy = direction.vector
        step = speed * dt
        nx, ny = x + dx * step, y + dy * step

        # Tunnel wrap takes priority over wall checks
        _, row = self.maze.cell_at(nx, ny)
        width = self.maze.pixel_width
        if direction.is_horizontal and self.maze.is_tunnel_row(row) and (nx < 0 or nx >= width):
            nx = nx + width if nx < 0 else nx - width
            ny = self.maze.cell_center(0, row)[1]
            return MoveResult((nx, ny), True, True)

        if self.can_occupy(nx, ny, margin):
            return MoveResult((nx, ny), True, False)
        return MoveResult(tuple(position), False, False)
