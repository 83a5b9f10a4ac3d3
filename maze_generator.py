import math
import random

import numpy as np

from bfs_utilities import find_nearest_open_cell, flood_fill_reachable_area
from maze_grid import MazeGrid

STEPS = ((-1, 0), (1, 0), (0, -1), (0, 1))  # (row, col) offsets: up, down, left, right


class MazeGenerator:
    """Random level templates for the maze grid, carved with a randomized DFS"""

    def __init__(self, width=27, height=31, complexity=1.0, power_pellets=4, rng=None):
        self.width = width if width % 2 == 1 else width + 1
        self.height = height if height % 2 == 1 else height + 1
        if self.width < 7 or self.height < 7:
            raise ValueError("Generated mazes need at least 7x7 cells")
        self.complexity = complexity  # Fraction of dead ends opened up (0.0-1.0)
        self.power_pellets = power_pellets
        self.rng = rng or random.Random()
        self.maze = np.ones((self.height, self.width), dtype=int)
        self.tunnel_row = None

    def generate_template(self):
        """Carve a maze and return it as template rows ('#', '.', 'o', ' ', 'P', 'G')"""
        self.generate_maze()
        self.open_tunnel()

        grid = MazeGrid(self._rows())
        ghost_cell = find_nearest_open_cell(grid, (self.width // 2, self.height // 2))
        pacman_cell = find_nearest_open_cell(grid, (self.width // 2, self.height - 2))
        if pacman_cell == ghost_cell:
            pacman_cell = (1, self.height - 2)

        reachable = flood_fill_reachable_area(grid, pacman_cell)
        if len(reachable) != len(grid.open_cells()):
            raise ValueError("Generated maze is not fully connected")

        excluded = {ghost_cell, pacman_cell, (0, self.tunnel_row), (self.width - 1, self.tunnel_row)}
        power_cells = self.place_power_pellets([c for c in reachable if c not in excluded])

        rows = [['#' if cell == 1 else '.' for cell in line] for line in self.maze]
        for col, row in excluded:
            rows[row][col] = ' '
        for col, row in power_cells:
            rows[row][col] = 'o'
        rows[ghost_cell[1]][ghost_cell[0]] = 'G'
        rows[pacman_cell[1]][pacman_cell[0]] = 'P'
        return tuple(''.join(line) for line in rows)

    def generate_maze(self):
        """Carve passages with a randomized DFS over the odd cells, then open some dead ends"""
        self.maze = np.ones((self.height, self.width), dtype=int)
        self.maze[1, 1] = 0
        stack = [(1, 1)]

        while stack:
            row, col = stack[-1]
            unvisited = self.get_unvisited_neighbors(row, col)
            if not unvisited:
                stack.pop()
                continue
            next_row, next_col = self.rng.choice(unvisited)
            # Knock down the wall between the two cells
            self.maze[(row + next_row) // 2, (col + next_col) // 2] = 0
            self.maze[next_row, next_col] = 0
            stack.append((next_row, next_col))

        self.add_additional_paths()
        return self.maze

    def add_additional_paths(self):
        """Open up dead ends so ghosts and Pacman can loop around"""
        dead_ends = [(row, col)
                     for row in range(1, self.height - 1)
                     for col in range(1, self.width - 1)
                     if self.maze[row, col] == 0 and self.count_open_neighbors(row, col) == 1]

        for dead_end in dead_ends[:int(len(dead_ends) * self.complexity)]:
            self.connect_dead_end(dead_end)

    def connect_dead_end(self, cell):
        """Remove one wall between a dead end and the passage behind it"""
        row, col = cell
        steps = list(STEPS)
        self.rng.shuffle(steps)

        for dr, dc in steps:
            wall_row, wall_col = row + dr, col + dc
            if not (0 < wall_row < self.height - 1 and 0 < wall_col < self.width - 1):
                continue
            if self.maze[wall_row, wall_col] == 1 and self.maze[wall_row + dr, wall_col + dc] == 0:
                self.maze[wall_row, wall_col] = 0
                return

    def open_tunnel(self):
        """Open both edge cells of a middle carved row for wraparound"""
        row = self.height // 2
        if row % 2 == 0:
            row -= 1
        self.maze[row, 0] = 0
        self.maze[row, self.width - 1] = 0
        self.tunnel_row = row

    def place_power_pellets(self, valid_positions):
        """Random power pellet cells kept at least a few cells apart"""
        chosen = []
        min_distance = max(3, min(self.width, self.height) // 3)
        attempts = 0
        while len(chosen) < self.power_pellets and valid_positions and attempts < 1000:
            attempts += 1
            x, y = self.rng.choice(valid_positions)
            if all(math.hypot(x - px, y - py) >= min_distance for px, py in chosen):
                chosen.append((x, y))
                # Drop positions that are now too close
                valid_positions = [pos for pos in valid_positions
                                   if math.hypot(pos[0] - x, pos[1] - y) >= min_distance]
        return chosen

    def get_unvisited_neighbors(self, row, col):
        """Uncarved cells two steps away, still inside the outer wall"""
        return [(row + 2 * dr, col + 2 * dc) for dr, dc in STEPS
                if 0 < row + 2 * dr < self.height - 1 and 0 < col + 2 * dc < self.width - 1
                and self.maze[row + 2 * dr, col + 2 * dc] == 1]

    def count_open_neighbors(self, row, col):
        return sum(1 for dr, dc in STEPS if self.maze[row + dr, col + dc] == 0)

    def _rows(self):
        return tuple(''.join('#' if cell == 1 else ' ' for cell in line) for line in self.maze)
