"""Tests for the dense neighbour recount."""

import pytest

from avatarlife.core.board import Board, Cell, Color, NeighbourCounts, State, evolve
from avatarlife.core.neighbours import (
    BoardConsistencyError,
    check_consistency,
    count_neighbours,
    find_inconsistencies,
    is_consistent,
)
from avatarlife.core.patterns import avatar, random_soup


class TestCountNeighbours:
    """Test cases for count_neighbours."""

    def test_empty_board(self):
        """Test an empty board has no counts."""
        assert count_neighbours(Board()) == {}

    def test_single_cell(self):
        """Test a lone white cell gives its eight neighbours one white count."""
        counts = count_neighbours(Board().spawn_white((10, -3)))

        assert len(counts) == 8
        assert (10, -3) not in counts
        assert counts[(9, -4)] == NeighbourCounts(1, 0)
        assert counts[(11, -2)] == NeighbourCounts(1, 0)

    def test_two_colors(self):
        """Test white and black are counted separately."""
        counts = count_neighbours(Board().spawn_white((0, 0)).spawn_black((1, 0)))

        assert counts[(0, 1)] == NeighbourCounts(1, 1)
        assert counts[(1, 0)] == NeighbourCounts(1, 0)
        assert counts[(0, 0)] == NeighbourCounts(0, 1)
        assert counts[(2, 0)] == NeighbourCounts(0, 1)

    def test_ignores_dying_cells(self):
        """Test Dying cells do not count."""
        board = Board().spawn_white((0, 0)).die((0, 0))
        assert count_neighbours(board) == {}

    def test_matches_stored_counts(self):
        """Test the recount agrees with the incremental counts."""
        board = avatar(Board(), (-4, 7))
        for _ in range(6):
            board = evolve(board)

        counts = count_neighbours(board)
        for index, expected in counts.items():
            assert board.get(index).neighbours == expected


class TestConsistency:
    """Test cases for consistency checking."""

    def test_engine_boards_are_consistent(self):
        """Test boards built by the engine pass the check."""
        board = random_soup(15, 10, 0.35, seed=11).apply_to_board(Board())
        for _ in range(10):
            assert is_consistent(board)
            check_consistency(board)
            board = evolve(board)

    def test_missing_neighbour_counts(self):
        """Test a live cell whose neighbours were never updated is reported."""
        board = Board({(0, 0): Cell(State.ALIVE, Color.WHITE)})

        mismatches = find_inconsistencies(board)
        assert len(mismatches) == 8
        assert (0, 0) not in mismatches
        assert not is_consistent(board)

    def test_stale_count(self):
        """Test a tracked cell with a wrong count is reported."""
        board = Board({(5, 5): Cell(State.DEAD, Color.WHITE, NeighbourCounts(1, 0))})
        assert find_inconsistencies(board) == [(5, 5)]

    def test_check_consistency_raises(self):
        """Test the strict check raises with the offending indices."""
        board = Board({(5, 5): Cell(State.DEAD, Color.WHITE, NeighbourCounts(0, 2))})

        with pytest.raises(BoardConsistencyError) as excinfo:
            check_consistency(board)

        assert excinfo.value.mismatches == [(5, 5)]
        assert isinstance(excinfo.value, RuntimeError)
