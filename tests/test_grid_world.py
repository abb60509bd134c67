"""Tests for the occupancy-grid host."""

import tempfile
from pathlib import Path

import numpy as np
import pytest

from grid_pathfinder.host import GridWorld

SAMPLE_MAP = """
S.#
.#.
..G
"""


class TestGridWorldParsing:
    """Test map construction."""

    def test_from_text(self):
        """Test ASCII parsing of obstacles and markers."""
        world = GridWorld.from_text(SAMPLE_MAP)

        assert (world.height, world.width) == (3, 3)
        assert world.start_cell == (0, 0)
        assert world.goal_cell == (2, 2)
        np.testing.assert_array_equal(world.blocked, [
            [False, False, True],
            [False, True, False],
            [False, False, False],
        ])

    def test_ragged_rows_rejected(self):
        """Test rows of different width are rejected."""
        with pytest.raises(ValueError, match="same width"):
            GridWorld.from_text("S..\n..\n")

    def test_unknown_character_rejected(self):
        """Test unknown characters are rejected with their location."""
        with pytest.raises(ValueError, match="Unknown map character"):
            GridWorld.from_text("S.x\n..G\n")

    def test_trailing_whitespace_ignored(self):
        """Test trailing spaces and blank lines do not change the grid."""
        world = GridWorld.from_text("S..  \n\n...\n..G \n   \n")

        assert (world.height, world.width) == (3, 3)
        assert world.goal_cell == (2, 2)

    def test_space_inside_row_rejected(self):
        """Test a space is not a free cell."""
        with pytest.raises(ValueError, match="Unknown map character"):
            GridWorld.from_text("S .\n..G\n")

    def test_duplicate_marker_rejected(self):
        """Test two start markers are rejected."""
        with pytest.raises(ValueError, match="more than one start"):
            GridWorld.from_text("S.S\n..G\n")

    def test_empty_map_rejected(self):
        """Test an empty map is rejected."""
        with pytest.raises(ValueError, match="empty"):
            GridWorld.from_text("\n\n")

    def test_invalid_construction(self):
        """Test non-2D arrays and bad cell sizes are rejected."""
        with pytest.raises(ValueError):
            GridWorld(np.zeros(4, dtype=bool))
        with pytest.raises(ValueError):
            GridWorld(np.zeros((2, 2), dtype=bool), cell_size=0)

    def test_from_file(self):
        """Test loading a map file."""
        with tempfile.TemporaryDirectory() as temp_dir:
            map_file = Path(temp_dir) / "map.txt"
            map_file.write_text(SAMPLE_MAP)

            world = GridWorld.from_file(map_file, cut_corners=False)

        assert world.goal_cell == (2, 2)
        assert world.cut_corners is False

    def test_from_missing_file(self):
        """Test a missing map file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            GridWorld.from_file("/nonexistent/map.txt")


class TestGridWorldGeometry:
    """Test cell and position conversion."""

    def test_cell_position_round_trip(self):
        """Test rows map to z, columns to x, with origin and cell size."""
        world = GridWorld.empty(4, 3, cell_size=0.5, origin=(10.0, 2.0, -1.0))

        assert world.cell_to_position(2, 3) == (11.5, 2.0, 0.0)
        assert world.position_to_cell((11.5, 2.0, 0.0)) == (2, 3)

    def test_off_lattice_position(self):
        """Test positions between cell centers have no cell."""
        world = GridWorld.empty(3, 3)
        assert world.position_to_cell((0.5, 0.0, 0.0)) is None

    def test_start_and_goal_positions(self):
        """Test marker cells convert to world positions."""
        world = GridWorld.from_text(SAMPLE_MAP)

        assert world.start_position == (0.0, 0.0, 0.0)
        assert world.goal_position == (2.0, 0.0, 2.0)
        assert GridWorld.empty(2, 2).start_position is None


class TestValidityOracle:
    """Test is_valid_move rules."""

    @pytest.fixture
    def world(self):
        """3x3 map with a single obstacle in the center."""
        return GridWorld.from_text("...\n.#.\n...\n")

    def test_bounds(self, world):
        """Test moves off the grid are invalid."""
        assert not world.is_valid_move((0.0, 0.0, 0.0), (-1, 0, 0))
        assert not world.is_valid_move((0.0, 0.0, 0.0), (0, 0, -1))
        assert world.is_valid_move((0.0, 0.0, 0.0), (1, 0, 0))

    def test_blocked_target(self, world):
        """Test moves into an obstacle are invalid."""
        assert not world.is_valid_move((1.0, 0.0, 0.0), (0, 0, 1))
        assert not world.is_valid_move((0.0, 0.0, 0.0), (1, 0, 1))

    def test_corner_cutting(self, world):
        """Test diagonal past an obstacle depends on cut_corners."""
        # cell (0, 1) to cell (1, 0) squeezes past the blocked center
        assert world.is_valid_move((1.0, 0.0, 0.0), (-1, 0, 1))

        strict = GridWorld.from_text("...\n.#.\n...\n", cut_corners=False)
        assert not strict.is_valid_move((1.0, 0.0, 0.0), (-1, 0, 1))
        assert strict.is_valid_move((0.0, 0.0, 0.0), (1, 0, 0))

    def test_no_diagonal(self):
        """Test allow_diagonal=False rejects every diagonal."""
        world = GridWorld.empty(3, 3, allow_diagonal=False)

        assert not world.is_valid_move((1.0, 0.0, 1.0), (1, 0, 1))
        assert world.is_valid_move((1.0, 0.0, 1.0), (1, 0, 0))

    def test_off_lattice_origin(self, world):
        """Test moves from a position between cells are invalid."""
        assert not world.is_valid_move((0.3, 0.0, 0.0), (1, 0, 0))


class TestRender:
    """Test map rendering."""

    def test_render_path(self):
        """Test path cells are drawn while markers stay visible."""
        from grid_pathfinder.search import create_searcher

        world = GridWorld.from_text(SAMPLE_MAP)
        searcher = create_searcher(
            'bfs',
            destination=world.goal_position,
            start=world.start_position,
            is_valid_move=world.is_valid_move,
        )
        result = searcher.search(1.0)

        rendered = world.render(result.path)

        assert rendered.splitlines()[0][0] == 'S'
        assert rendered.splitlines()[2][2] == 'G'
        assert rendered.count('*') == result.steps - 1
        assert rendered.count('#') == 2

    def test_render_without_path(self):
        """Test rendering the bare map."""
        assert GridWorld.from_text(SAMPLE_MAP).render() == "S.#\n.#.\n..G"
