"""
Pacman character: position, facing, and mouth animation
"""

import config
from motion_resolver import Direction


class Pacman:
    def __init__(self, maze, speed=None):
        self.speed = speed if speed is not None else config.PACMAN_SPEED
        self.reset(maze)

    def reset(self, maze):
        """Back to the spawn cell, standing still"""
        self.radius = maze.cell_size * config.AGENT_RADIUS_FACTOR
        self.margin = maze.cell_size * config.AGENT_MARGIN_FACTOR
        self.snap_tolerance = maze.cell_size * config.LANE_SNAP_FACTOR
        self.x, self.y = maze.cell_center(*maze.pacman_spawn_cell)
        self.direction = Direction.LEFT
        self.moving = False
        self.mouth_open = 0.0
        self.mouth_direction = 1

    @property
    def position(self):
        return (self.x, self.y)

    def cell(self, maze):
        return maze.cell_at(self.x, self.y)

    def update(self, dt, intent, resolver):
        """
        Move one tick: try the requested direction first, then keep going the
        current way. Returns the direction actually taken, or None when blocked.
        """
        options = []
        if intent is not None:
            options.append(intent)
        if self.moving and self.direction not in options:
            options.append(self.direction)

        for direction in options:
            result = resolver.try_move(self.position, direction, self.speed, dt,
                                       self.margin, self.snap_tolerance)
            if result.accepted:
                self.x, self.y = result.position
                self.direction = direction
                self.moving = True
                self._animate_mouth(dt)
                return direction

        self.moving = False
        return None

    def _animate_mouth(self, dt):
        self.mouth_open += self.mouth_direction * config.MOUTH_ANIMATION_SPEED * dt
        if self.mouth_open >= 1:
            self.mouth_open = 1.0
            self.mouth_direction = -1
        elif self.mouth_open <= 0:
            self.mouth_open = 0.0
            self.mouth_direction = 1
