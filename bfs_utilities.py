"""
BFS Utilities - flood fills over the maze grid
==============================================

BFS is used for:
1. DISTANCE FIELDS - step distance from every open cell to one goal cell
   (ghost eyes follow it back to the pen)
2. FLOOD FILL - which cells are reachable from a start cell
   (generated mazes are validated with it)
3. NEAREST OPEN CELL - spawn fallback when a template has no marker

Cells are (col, row) tuples. Tunnel rows wrap horizontally.
"""

from collections import deque

import numpy as np

NEIGHBOR_OFFSETS = ((1, 0), (0, 1), (-1, 0), (0, -1))


def get_valid_neighbors(maze, cell):
    """Open 4-connected neighbors of a cell, wrapping across tunnel rows"""
    col, row = cell
    neighbors = []
    for dc, dr in NEIGHBOR_OFFSETS:
        ncol, nrow = col + dc, row + dr
        if dr == 0 and not 0 <= ncol < maze.width and maze.is_tunnel_row(row):
            ncol %= maze.width
        if maze.in_grid(ncol, nrow) and not maze.is_wall(ncol, nrow):
            neighbors.append((ncol, nrow))
    return neighbors


def distance_field(maze, goal):
    """
    Step distance from every cell to `goal`.

    Returns:
        numpy int array indexed [row, col]; -1 marks walls and unreachable cells
    """
    distances = np.full((maze.height, maze.width), -1, dtype=int)
    if not maze.in_grid(*goal) or maze.is_wall(*goal):
        return distances

    distances[goal[1], goal[0]] = 0
    queue = deque([goal])
    while queue:
        current = queue.popleft()
        step = distances[current[1], current[0]] + 1
        for ncol, nrow in get_valid_neighbors(maze, current):
            if distances[nrow, ncol] == -1:
                distances[nrow, ncol] = step
                queue.append((ncol, nrow))
    return distances


def flood_fill_reachable_area(maze, start):
    """All cells reachable from `start`"""
    if not maze.in_grid(*start) or maze.is_wall(*start):
        return set()
    visited = {start}
    queue = deque([start])
    while queue:
        for neighbor in get_valid_neighbors(maze, queue.popleft()):
            if neighbor not in visited:
                visited.add(neighbor)
                queue.append(neighbor)
    return visited


def find_nearest_open_cell(maze, center):
    """Search in expanding squares around `center` for a non-wall cell"""
    col, row = center
    if maze.in_grid(col, row) and not maze.is_wall(col, row):
        return (col, row)

    for radius in range(1, max(maze.width, maze.height)):
        for dr in range(-radius, radius + 1):
            for dc in range(-radius, radius + 1):
                # Only check positions on the edge of current radius
                if abs(dr) != radius and abs(dc) != radius:
                    continue
                test_col, test_row = col + dc, row + dr
                if maze.in_grid(test_col, test_row) and not maze.is_wall(test_col, test_row):
                    return (test_col, test_row)
    return None
