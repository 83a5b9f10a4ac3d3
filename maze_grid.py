"""
Maze grid: static cell classification, spawn markers and tunnel rows.
"""

import math
from enum import IntEnum

import numpy as np

import config
from bfs_utilities import distance_field, find_nearest_open_cell


class CellKind(IntEnum):
    EMPTY = 0
    WALL = 1
    PELLET = 2
    POWER_PELLET = 3
    OUTSIDE = -1  # Out-of-grid lookup: non-wall, non-pellet


TEMPLATE_SYMBOLS = {
    '#': CellKind.WALL,
    '.': CellKind.PELLET,
    'o': CellKind.POWER_PELLET,
    ' ': CellKind.EMPTY,
    'P': CellKind.EMPTY,  # Pacman spawn
    'G': CellKind.EMPTY,  # Ghost spawn (pen centre)
    'E': CellKind.EMPTY,  # Pen exit
}

DEFAULT_TEMPLATE = (
    "############################",
    "#............##............#",
    "#.####.#####.##.#####.####.#",
    "#o####.#####.##.#####.####o#",
    "#.####.#####.##.#####.####.#",
    "#..........................#",
    "#.####.##.########.##.####.#",
    "#.####.##.########.##.####.#",
    "#......##....##....##......#",
    "######.##### ## #####.######",
    "######.##### ## #####.######",
    "######.##    E     ##.######",
    "######.## ###  ### ##.######",
    "######.## #      # ##.######",
    "      .   #  G   #   .      ",
    "######.## #      # ##.######",
    "######.## ######## ##.######",
    "######.##          ##.######",
    "######.## ######## ##.######",
    "######.## ######## ##.######",
    "#............##............#",
    "#.####.#####.##.#####.####.#",
    "#.####.#####.##.#####.####.#",
    "#o..##.......P .......##..o#",
    "###.##.##.########.##.##.###",
    "###.##.##.########.##.##.###",
    "#......##....##....##......#",
    "#.##########.##.##########.#",
    "#.##########.##.##########.#",
    "#..........................#",
    "############################",
)


class MazeGrid:
    def __init__(self, template=DEFAULT_TEMPLATE, cell_size=None):
        self.cell_size = cell_size if cell_size is not None else config.GRID_SIZE
        self.load(template)

    def load(self, template):
        """Replace the whole grid from a template and drop cached metadata"""
        rows = list(template)
        if not rows:
            raise ValueError("Maze template is empty")
        width = len(rows[0])
        if width == 0 or any(len(row) != width for row in rows):
            raise ValueError("Maze template rows must all have the same non-zero length")

        self.height = len(rows)
        self.width = width
        self.cells = np.zeros((self.height, self.width), dtype=int)
        markers = {}
        for row, line in enumerate(rows):
            for col, symbol in enumerate(line):
                if symbol not in TEMPLATE_SYMBOLS:
                    raise ValueError(f"Unknown maze symbol {symbol!r} at ({col}, {row})")
                self.cells[row, col] = TEMPLATE_SYMBOLS[symbol]
                if symbol in 'PGE':
                    markers[symbol] = (col, row)

        self.template = tuple(rows)
        self._tunnel_rows = None
        self._distance_fields = {}

        self.ghost_spawn_cell = markers.get('G') or self._find_open_cell(self.width // 2, self.height // 2)
        self.pacman_spawn_cell = markers.get('P') or self._find_open_cell(self.width // 2, self.height - 2)
        self.pen_exit_cell = markers.get('E') or self.ghost_spawn_cell

    def _find_open_cell(self, col, row):
        cell = find_nearest_open_cell(self, (col, row))
        if cell is None:
            raise ValueError("Maze template has no open cells")
        return cell

    # ------------------------------------------------------------------
    # Classification
    # ------------------------------------------------------------------

    @property
    def pixel_width(self):
        return self.width * self.cell_size

    @property
    def pixel_height(self):
        return self.height * self.cell_size

    def in_grid(self, col, row):
        return 0 <= col < self.width and 0 <= row < self.height

    def classify(self, col, row):
        """Cell kind at (col, row); OUTSIDE for lookups beyond the grid"""
        if not self.in_grid(col, row):
            return CellKind.OUTSIDE
        return CellKind(int(self.cells[row, col]))

    def is_wall(self, col, row):
        return self.classify(col, row) == CellKind.WALL

    def is_wall_at(self, x, y):
        col, row = self.cell_at(x, y)
        return self.is_wall(col, row)

    def in_bounds(self, x, y):
        """Whether a pixel point lies on the canvas"""
        return 0 <= x < self.pixel_width and 0 <= y < self.pixel_height

    def cell_at(self, x, y):
        return int(math.floor(x / self.cell_size)), int(math.floor(y / self.cell_size))

    def cell_center(self, col, row):
        return ((col + 0.5) * self.cell_size, (row + 0.5) * self.cell_size)

    def open_cells(self):
        rows, cols = np.nonzero(self.cells != CellKind.WALL)
        return [(int(c), int(r)) for r, c in zip(rows, cols)]

    # ------------------------------------------------------------------
    # Pellets
    # ------------------------------------------------------------------

    def count_pellets(self):
        return int(np.count_nonzero((self.cells == CellKind.PELLET) |
                                    (self.cells == CellKind.POWER_PELLET)))

    def consume(self, col, row):
        """Eat the pellet at (col, row), returning what was there"""
        kind = self.classify(col, row)
        if kind in (CellKind.PELLET, CellKind.POWER_PELLET):
            self.cells[row, col] = CellKind.EMPTY
        return kind

    # ------------------------------------------------------------------
    # Tunnels and cached metadata
    # ------------------------------------------------------------------

    @property
    def tunnel_rows(self):
        if self._tunnel_rows is None:
            self._tunnel_rows = frozenset(
                row for row in range(self.height)
                if self.cells[row, 0] != CellKind.WALL and self.cells[row, self.width - 1] != CellKind.WALL
            )
        return self._tunnel_rows

    def is_tunnel_row(self, row):
        return row in self.tunnel_rows

    def distance_field_to(self, cell):
        """BFS step distances from every open cell to `cell`, cached until the grid is reloaded"""
        if cell not in self._distance_fields:
            self._distance_fields[cell] = distance_field(self, cell)
        return self._distance_fields[cell]
