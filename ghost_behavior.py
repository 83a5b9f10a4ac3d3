"""
Ghost target selection and direction choice.

Every personality is a pure function of (ghost, pacman, mode, maze, rng) that
returns a target point; `select_target` is the single dispatch over them.
`choose_direction` turns a target into a heading using the motion resolver.
"""

import math
from collections import namedtuple
from enum import Enum

import config
from motion_resolver import Direction

Point = namedtuple('Point', ['x', 'y'])


class Personality(Enum):
    DIRECT = 'direct'    # Red - straight at Pacman
    AMBUSH = 'ambush'    # Pink - aims ahead of Pacman
    PATROL = 'patrol'    # Cyan - chases from afar, retreats when close
    ERRATIC = 'erratic'  # Orange - mostly chases, sometimes wanders


class GhostMode(Enum):
    WAITING = 'waiting'
    SCATTER = 'scatter'
    CHASE = 'chase'
    FRIGHTENED = 'frightened'
    DEAD = 'dead'


def home_corner(personality, maze, inset_cells=None):
    """Scatter corner for a personality; the four corners are distinct"""
    inset = (inset_cells if inset_cells is not None else config.HOME_CORNER_INSET_CELLS) * maze.cell_size
    left, top = inset, inset
    right, bottom = maze.pixel_width - inset, maze.pixel_height - inset
    corners = {
        Personality.DIRECT: Point(right, top),
        Personality.AMBUSH: Point(left, top),
        Personality.PATROL: Point(right, bottom),
        Personality.ERRATIC: Point(left, bottom),
    }
    return corners[personality]


def random_canvas_point(maze, rng):
    return Point(rng.uniform(0, maze.pixel_width), rng.uniform(0, maze.pixel_height))


def distance(a, b):
    return math.hypot(a[0] - b[0], a[1] - b[1])


# ----------------------------------------------------------------------
# Chase strategies
# ----------------------------------------------------------------------

def direct_target(ghost, pacman, maze, rng):
    return Point(pacman.x, pacman.y)


def ambush_target(ghost, pacman, maze, rng):
    if not pacman.moving:
        return Point(pacman.x, pacman.y)
    dx, dy = pacman.direction.vector
    lookahead = config.AMBUSH_LOOKAHEAD_CELLS * maze.cell_size
    return Point(pacman.x + dx * lookahead, pacman.y + dy * lookahead)


def patrol_target(ghost, pacman, maze, rng):
    if distance(ghost.position, pacman.position) > config.PATROL_RETREAT_CELLS * maze.cell_size:
        return Point(pacman.x, pacman.y)
    return ghost.home_corner


def erratic_target(ghost, pacman, maze, rng):
    if rng.random() < config.ERRATIC_CHASE_PROBABILITY:
        return Point(pacman.x, pacman.y)
    return random_canvas_point(maze, rng)


CHASE_STRATEGIES = {
    Personality.DIRECT: direct_target,
    Personality.AMBUSH: ambush_target,
    Personality.PATROL: patrol_target,
    Personality.ERRATIC: erratic_target,
}


def select_target(ghost, pacman, mode, maze, rng):
    """Target point for `ghost` in `mode`"""
    if mode is GhostMode.WAITING:
        return Point(*ghost.position)
    if mode is GhostMode.DEAD:
        return ghost.spawn_point
    if ghost.leaving_pen:
        return ghost.pen_exit
    if mode is GhostMode.FRIGHTENED:
        return random_canvas_point(maze, rng)
    if mode is GhostMode.SCATTER:
        return ghost.home_corner
    return CHASE_STRATEGIES[ghost.personality](ghost, pacman, maze, rng)


# ----------------------------------------------------------------------
# Direction re-selection
# ----------------------------------------------------------------------

def _neighbor_cell(maze, cell, direction):
    col, row = cell
    dx, dy = direction.vector
    col, row = col + dx, row + dy
    if dy == 0 and maze.is_tunnel_row(row):
        col %= maze.width
    return col, row


def _path_steps(ghost, maze, direction):
    """BFS steps to the spawn cell from the cell `direction` leads to"""
    field = maze.distance_field_to(ghost.spawn_cell)
    col, row = _neighbor_cell(maze, maze.cell_at(*ghost.position), direction)
    steps = int(field[row, col]) if maze.in_grid(col, row) else -1
    return steps if steps >= 0 else maze.width * maze.height


def choose_direction(ghost, maze, resolver, target, dt, rng):
    """
    Pick the heading whose next step lands closest to `target`.

    The reverse of the current heading is excluded unless it is the only
    legal move or the ghost's reverse-override probability fires. Ties go
    to the first direction in enumeration order (right, down, left, up).
    """
    trial_dt = max(dt, 1.0 / config.TARGET_FPS)
    candidates = []
    for direction in Direction:
        result = resolver.try_move(ghost.position, direction, ghost.speed, trial_dt,
                                   ghost.margin, ghost.snap_tolerance)
        if result.accepted:
            candidates.append((direction, result.position))

    if not candidates:
        return ghost.direction

    reverse = ghost.direction.reverse
    override = ghost.reverse_override_probability
    allow_reverse = override > 0 and rng.random() < override
    forward = [c for c in candidates if c[0] is not reverse]
    if forward and not allow_reverse:
        candidates = forward

    use_paths = ghost.mode is GhostMode.DEAD and config.DEAD_GHOST_PATHFINDING

    def score(candidate):
        direction, position = candidate
        steps = _path_steps(ghost, maze, direction) if use_paths else 0
        return (steps, distance(position, target))

    # min() keeps the first of equal scores, so enumeration order breaks ties
    return min(candidates, key=score)[0]
