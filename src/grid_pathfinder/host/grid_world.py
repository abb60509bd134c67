"""Occupancy-grid host for headless searches.

Provides the movement-validity oracle the search engine consumes, backed by a
boolean numpy array instead of a physics query. Rows map to the z axis and
columns to the x axis; one cell is one search step wide.
"""

import logging
from pathlib import Path
from typing import Iterable, Optional, Tuple, Union

import numpy as np

from grid_pathfinder.core.data_models import Direction, PathNode, Position, is_diagonal

logger = logging.getLogger(__name__)

Cell = Tuple[int, int]  # (row, col)

BLOCKED_CHAR = '#'
FREE_CHAR = '.'
START_CHAR = 'S'
GOAL_CHAR = 'G'
PATH_CHAR = '*'


class GridWorld:
    """Boolean occupancy grid exposing ``is_valid_move(position, direction)``."""

    def __init__(self,
                 blocked: np.ndarray,
                 cell_size: float = 1.0,
                 origin: Position = (0.0, 0.0, 0.0),
                 allow_diagonal: bool = True,
                 cut_corners: bool = True,
                 start_cell: Optional[Cell] = None,
                 goal_cell: Optional[Cell] = None):
        """Initialize grid world.

        Args:
            blocked: 2D array, True where a cell is an obstacle
            cell_size: World distance between adjacent cell centers
            origin: World position of cell (0, 0)
            allow_diagonal: Permit diagonal moves
            cut_corners: Permit a diagonal move past a blocked cardinal neighbor
            start_cell: Optional (row, col) start marker
            goal_cell: Optional (row, col) goal marker
        """
        blocked = np.asarray(blocked, dtype=bool)
        if blocked.ndim != 2:
            raise ValueError(f"Occupancy grid must be 2D, got shape {blocked.shape}")
        if cell_size <= 0:
            raise ValueError(f"cell_size must be positive number, got {cell_size}")

        self.blocked = blocked
        self.cell_size = float(cell_size)
        self.origin = tuple(float(c) for c in origin)
        self.allow_diagonal = allow_diagonal
        self.cut_corners = cut_corners
        self.start_cell = start_cell
        self.goal_cell = goal_cell

    @property
    def height(self) -> int:
        return self.blocked.shape[0]

    @property
    def width(self) -> int:
        return self.blocked.shape[1]

    @classmethod
    def empty(cls, width: int, height: int, **kwargs) -> 'GridWorld':
        """Grid with no obstacles."""
        return cls(np.zeros((height, width), dtype=bool), **kwargs)

    @classmethod
    def from_text(cls, text: str, **kwargs) -> 'GridWorld':
        """Parse an ASCII map.

        ``#`` is blocked, ``.`` free, ``S`` the start and ``G`` the goal.
        The first line is row 0. Trailing whitespace and blank lines are
        ignored; a space inside a row is an unknown character.

        Raises:
            ValueError: On ragged rows, unknown characters or duplicate markers
        """
        lines = [line.rstrip() for line in text.splitlines() if line.strip()]
        if not lines:
            raise ValueError("Map is empty")

        width = max(len(line) for line in lines)
        if any(len(line) != width for line in lines):
            raise ValueError("All map rows must have the same width")

        blocked = np.zeros((len(lines), width), dtype=bool)
        start_cell = goal_cell = None
        for row, line in enumerate(lines):
            for col, char in enumerate(line):
                if char == BLOCKED_CHAR:
                    blocked[row, col] = True
                elif char == START_CHAR:
                    if start_cell is not None:
                        raise ValueError("Map has more than one start marker")
                    start_cell = (row, col)
                elif char == GOAL_CHAR:
                    if goal_cell is not None:
                        raise ValueError("Map has more than one goal marker")
                    goal_cell = (row, col)
                elif char != FREE_CHAR:
                    raise ValueError(f"Unknown map character {char!r} at row {row}, col {col}")

        return cls(blocked, start_cell=start_cell, goal_cell=goal_cell, **kwargs)

    @classmethod
    def from_file(cls, file_path: Union[str, Path], **kwargs) -> 'GridWorld':
        """Load an ASCII map file."""
        file_path = Path(file_path)
        if not file_path.exists():
            raise FileNotFoundError(f"Map file not found: {file_path}")
        world = cls.from_text(file_path.read_text(), **kwargs)
        logger.info(f"Loaded {world.width}x{world.height} map from {file_path}")
        return world

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def is_free(self, row: int, col: int) -> bool:
        return self.in_bounds(row, col) and not self.blocked[row, col]

    def cell_to_position(self, row: int, col: int) -> Position:
        return (self.origin[0] + col * self.cell_size,
                self.origin[1],
                self.origin[2] + row * self.cell_size)

    def position_to_cell(self, position: Position) -> Optional[Cell]:
        """Cell containing ``position``, or None if it is off the lattice."""
        col_f = (position[0] - self.origin[0]) / self.cell_size
        row_f = (position[2] - self.origin[2]) / self.cell_size
        col, row = int(round(col_f)), int(round(row_f))
        if abs(col_f - col) > 1e-6 or abs(row_f - row) > 1e-6:
            return None
        return row, col

    @property
    def start_position(self) -> Optional[Position]:
        if self.start_cell is None:
            return None
        return self.cell_to_position(*self.start_cell)

    @property
    def goal_position(self) -> Optional[Position]:
        if self.goal_cell is None:
            return None
        return self.cell_to_position(*self.goal_cell)

    def is_valid_move(self, position: Position, direction: Direction) -> bool:
        """Movement-validity oracle for a one-cell step."""
        cell = self.position_to_cell(position)
        if cell is None:
            return False

        diagonal = is_diagonal(direction)
        if diagonal and not self.allow_diagonal:
            return False

        row, col = cell
        next_row, next_col = row + direction[2], col + direction[0]
        if not self.is_free(next_row, next_col):
            return False

        if diagonal and not self.cut_corners:
            if not self.is_free(row, next_col) or not self.is_free(next_row, col):
                return False

        return True

    def render(self, path: Optional[Iterable[PathNode]] = None) -> str:
        """Draw the map, marking path cells with ``*``."""
        canvas = np.where(self.blocked, BLOCKED_CHAR, FREE_CHAR).astype('<U1')

        if path is not None:
            for node in path:
                cell = self.position_to_cell(node.position)
                if cell is not None and self.in_bounds(*cell):
                    canvas[cell] = PATH_CHAR

        if self.start_cell is not None:
            canvas[self.start_cell] = START_CHAR
        if self.goal_cell is not None:
            canvas[self.goal_cell] = GOAL_CHAR

        return "\n".join("".join(row) for row in canvas)
