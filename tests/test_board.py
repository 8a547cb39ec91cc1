"""Unit tests for the board, its elimination step and validation."""

import pytest
import numpy as np
from sudoku_collapse.core.board import SudokuBoard
from sudoku_collapse.core.cell import Cell, DIGITS
from sudoku_collapse.core.exceptions import EliminationContradiction
from sudoku_collapse.core.position import Position
from sudoku_collapse.core.validator import is_valid_grid, is_complete_solution, validate_solution
from sudoku_collapse.puzzles import EASY_PUZZLE, EASY_SOLUTION

# Row 0 holds 1-8, so index 8 can only be 9
ROW_NEEDS_NINE = "123456780" + "0" * 72

# Same, but a 9 sits in the box of index 8, leaving it nothing
NO_OPTIONS_LEFT = "123456780" + "000000009" + "0" * 63

# Row 0 holds 1-6 at indexes 3-8 and box 0 holds 7. Index 1 can only be 8
# and index 2 only 9, which leaves index 0 nothing.
LAST_OPTION_TAKEN = "000123456" + "007000000" + "0" * 9 + "098" + "0" * 51

# Two given 5s in the first row
DUPLICATE_GIVENS = (
    "550070000"
    "600195000"
    "098000060"
    "800060003"
    "400803001"
    "700020006"
    "060000280"
    "000419005"
    "000080079"
)


def snapshot(board):
    return [cell.state() for cell in board]


class TestCell:
    """Tests for Cell construction."""

    def test_blank_cell(self):
        """Test that a blank cell starts with every candidate."""
        cell = Cell(Position(0))
        assert cell.value is None
        assert cell.candidates == DIGITS
        assert not cell.is_given
        assert not cell.is_solved

    def test_given_cell(self):
        """Test that a given cell has a value and no candidates."""
        cell = Cell(Position(0), 4)
        assert cell.value == 4
        assert cell.candidates == frozenset()
        assert cell.is_given

    def test_explicit_given_flag(self):
        """Test overriding the given flag."""
        assert not Cell(Position(0), 4, is_given=False).is_given

    @pytest.mark.parametrize("digit", [-1, 10])
    def test_invalid_digit(self, digit):
        """Test that digits outside 0-9 are rejected."""
        with pytest.raises(ValueError):
            Cell(Position(0), digit)

    def test_candidates_are_read_only(self):
        """Test that candidates cannot be changed from outside."""
        cell = Cell(Position(0))
        with pytest.raises(AttributeError):
            cell.candidates.add(3)


class TestConstruction:
    """Tests for building boards."""

    def test_from_string(self):
        """Test creating a board from a string."""
        board = SudokuBoard.from_string(EASY_PUZZLE)
        assert board[1].value == 4
        assert board[1].is_given
        assert board[0].value is None
        assert board.to_string() == EASY_PUZZLE

    def test_from_string_accepts_dots(self):
        """Test that dots mark blank cells."""
        board = SudokuBoard.from_string("." * 80 + "9")
        assert board[80].value == 9
        assert board.count_unsolved() == 80

    @pytest.mark.parametrize("s", ["0" * 80, "0" * 82, "x" + "0" * 80, "\u0663" + "0" * 80])
    def test_from_string_rejects_bad_input(self, s):
        """Test that bad lengths and characters are rejected."""
        with pytest.raises(ValueError):
            SudokuBoard.from_string(s)

    def test_from_digits_with_given_flags(self):
        """Test creating a board with explicit given flags."""
        digits = [0] * 81
        digits[10] = 3
        givens = [False] * 81
        board = SudokuBoard.from_digits(digits, givens)
        assert board[10].value == 3
        assert not board[10].is_given

    def test_from_digits_wrong_length(self):
        """Test that digit and flag counts must be 81."""
        with pytest.raises(ValueError):
            SudokuBoard.from_digits([0] * 80)
        with pytest.raises(ValueError):
            SudokuBoard.from_digits([0] * 81, [False] * 3)

    def test_cells_must_be_in_position_order(self):
        """Test that cells must sit at their own index."""
        cells = [Cell(Position(i)) for i in range(81)]
        cells[0], cells[1] = cells[1], cells[0]
        with pytest.raises(ValueError):
            SudokuBoard(cells)

    def test_lookup_by_int_or_position(self):
        """Test cell lookup by int or Position."""
        board = SudokuBoard.from_string(EASY_PUZZLE)
        assert board[Position(3)] is board[3]
        assert board.cell(3).value == 6

    def test_to_array(self):
        """Test exporting committed values as a numpy grid."""
        board = SudokuBoard.from_string(EASY_PUZZLE)
        grid = board.to_array()
        assert grid.shape == (9, 9)
        assert grid[0, 1] == 4
        assert grid[8, 6] == 2
        assert grid[0, 0] == 0

    def test_copy_is_independent(self):
        """Test that a copy does not share cell state."""
        board = SudokuBoard.from_string(ROW_NEEDS_NINE)
        clone = board.copy()
        clone.collapse(8)
        assert clone[8].value == 9
        assert board[8].value is None
        assert board != clone


class TestQueries:
    """Tests for neighbour lookups."""

    def test_neighbors(self):
        """Test that neighbors follow the entangled positions."""
        board = SudokuBoard.from_string(EASY_PUZZLE)
        neighbors = board.neighbors(0)
        assert len(neighbors) == 20
        assert [c.position.index for c in neighbors] == [p.index for p in Position(0).entangled()]

    def test_committed_values(self):
        """Test gathering committed values around a cell."""
        board = SudokuBoard.from_string(EASY_PUZZLE)
        # Row 0: 4 6 2 3 1, column 0: 6 5 1 8 7, box 0: 4 6
        assert board.committed_values(0) == frozenset({1, 2, 3, 4, 5, 6, 7, 8})

    def test_unsolved_positions_in_order(self):
        """Test that unsolved positions are listed in ascending order."""
        board = SudokuBoard.from_string(ROW_NEEDS_NINE)
        unsolved = board.unsolved_positions()
        assert unsolved[0] == Position(8)
        assert unsolved == sorted(unsolved)
        assert len(unsolved) == 73


class TestCollapse:
    """Tests for the elimination/commit step."""

    def test_commit_single_candidate(self):
        """Test committing a cell with one candidate left."""
        board = SudokuBoard.from_string(ROW_NEEDS_NINE)
        step = board.collapse(8)
        assert step is not None
        assert step.committed == 9
        assert board[8].value == 9
        assert board[8].candidates == frozenset()

    def test_commit_propagates_to_entangled_cells(self):
        """Test that a commit removes the value from entangled cells only."""
        board = SudokuBoard.from_string(ROW_NEEDS_NINE)
        board.collapse(8)
        for p in Position(8).entangled():
            assert 9 not in board[p].candidates
        # Not entangled with index 8
        assert 9 in board[9].candidates
        assert 9 in board[40].candidates

    def test_propagation_recorded_in_step(self):
        """Test that propagated removals are recorded in the step."""
        board = SudokuBoard.from_string(ROW_NEEDS_NINE)
        step = board.collapse(8)
        changed = [p.index for p, _ in step.changes]
        assert changed[0] == 8
        # Row-mates are all given; column and box mates lose the 9
        assert sorted(changed[1:]) == [15, 16, 17, 24, 25, 26, 35, 44, 53, 62, 71, 80]

    def test_narrow_without_commit(self):
        """Test narrowing candidates without committing."""
        digits = [0] * 81
        digits[1] = 5
        digits[9] = 7
        board = SudokuBoard.from_digits(digits)
        step = board.collapse(0)
        assert step is not None
        assert step.committed is None
        assert board[0].value is None
        assert board[0].candidates == DIGITS - {5, 7}

    def test_no_change_returns_none(self):
        """Test that a collapse with nothing to remove records nothing."""
        board = SudokuBoard.from_string("0" * 81)
        assert board.collapse(40) is None
        assert board.history == ()

    def test_collapse_on_solved_cell_is_noop(self):
        """Test that collapsing a given cell changes nothing."""
        board = SudokuBoard.from_string(EASY_PUZZLE)
        before = snapshot(board)
        assert board.collapse(1) is None
        assert snapshot(board) == before
        assert board.history == ()

    def test_collapse_after_commit_is_noop(self):
        """Test that collapsing a committed cell again changes nothing."""
        board = SudokuBoard.from_string(ROW_NEEDS_NINE)
        board.collapse(8)
        before = snapshot(board)
        assert board.collapse(8) is None
        assert snapshot(board) == before

    def test_candidates_never_grow(self):
        """Test that repeated passes only shrink candidate sets."""
        board = SudokuBoard.from_string(EASY_PUZZLE)
        previous = {p: board[p].candidates for p in board.unsolved_positions()}
        for _ in range(3):
            for p in board.unsolved_positions():
                board.collapse(p)
            for p, candidates in previous.items():
                assert board[p].candidates <= candidates
            previous = {p: board[p].candidates for p in previous}

    def test_contradiction_raised(self):
        """Test that a cell with no options raises."""
        board = SudokuBoard.from_string(NO_OPTIONS_LEFT)
        with pytest.raises(EliminationContradiction) as excinfo:
            board.collapse(8)
        err = excinfo.value
        assert err.position == Position(8)
        assert err.candidates == DIGITS
        assert err.committed == DIGITS
        assert "index 8" in str(err)

    def test_contradiction_leaves_board_unchanged(self):
        """Test that a failed collapse does not touch the board."""
        board = SudokuBoard.from_string(NO_OPTIONS_LEFT)
        before = snapshot(board)
        with pytest.raises(EliminationContradiction):
            board.collapse(8)
        assert snapshot(board) == before

    def test_commit_that_empties_a_neighbour_raises(self):
        """Test that a commit taking a neighbour's last candidate raises."""
        board = SudokuBoard.from_string(LAST_OPTION_TAKEN)
        board.collapse(0)
        assert board[0].candidates == frozenset({8, 9})
        board.collapse(1)
        assert board[1].value == 8
        assert board[0].candidates == frozenset({9})

        before = snapshot(board)
        history = board.history
        with pytest.raises(EliminationContradiction) as excinfo:
            board.collapse(2)
        err = excinfo.value
        assert err.position == Position(0)
        assert err.candidates == frozenset({9})
        assert err.committed == DIGITS
        assert snapshot(board) == before
        assert board.history == history
        assert board[2].value is None


class TestCheckGivens:
    """Tests for clue clashes."""

    def test_duplicate_givens(self):
        """Test that two equal clues in a row raise."""
        board = SudokuBoard.from_string(DUPLICATE_GIVENS)
        with pytest.raises(EliminationContradiction) as excinfo:
            board.check_givens()
        assert excinfo.value.position == Position(0)
        assert 5 in excinfo.value.committed

    def test_consistent_givens(self):
        """Test that consistent clues pass the check."""
        SudokuBoard.from_string(EASY_PUZZLE).check_givens()


class TestHistory:
    """Tests for undo and redo of collapse steps."""

    def test_undo_restores_exact_state(self):
        """Test that undo restores the board exactly."""
        board = SudokuBoard.from_string(ROW_NEEDS_NINE)
        original = board.copy()
        board.collapse(8)
        assert board != original

        step = board.undo()
        assert step.position == Position(8)
        assert board == original
        assert board.history == ()

    def test_redo_reapplies(self):
        """Test that redo re-applies an undone step."""
        board = SudokuBoard.from_string(ROW_NEEDS_NINE)
        board.collapse(8)
        after = board.copy()
        board.undo()
        board.redo()
        assert board == after
        assert len(board.history) == 1

    def test_undo_many_steps(self):
        """Test unwinding a whole pass back to the puzzle."""
        board = SudokuBoard.from_string(EASY_PUZZLE)
        original = board.copy()
        for p in board.unsolved_positions():
            board.collapse(p)
        assert len(board.history) > 0
        while board.undo() is not None:
            pass
        assert board == original

    def test_new_step_clears_redo(self):
        """Test that a new step discards undone steps."""
        board = SudokuBoard.from_string(ROW_NEEDS_NINE)
        board.collapse(8)
        board.undo()
        board.collapse(8)
        assert board.redo() is None

    def test_nothing_to_undo(self):
        """Test undo and redo on a fresh board."""
        board = SudokuBoard.from_string(EASY_PUZZLE)
        assert board.undo() is None
        assert board.redo() is None


class TestValidator:
    """Tests for validation utilities."""

    def test_solution_is_complete(self):
        """Test validating a complete solution."""
        board = SudokuBoard.from_string(EASY_SOLUTION)
        assert is_complete_solution(board)
        assert board.is_solved()

    def test_puzzle_is_valid_but_incomplete(self):
        """Test that a puzzle is valid but not complete."""
        board = SudokuBoard.from_string(EASY_PUZZLE)
        assert is_valid_grid(board.to_array())
        assert not is_complete_solution(board.to_array())
        assert not board.is_solved()

    def test_duplicate_is_invalid(self):
        """Test that repeated digits make a grid invalid."""
        assert not is_valid_grid(SudokuBoard.from_string(DUPLICATE_GIVENS))

    def test_validate_solution(self):
        """Test that a solution must keep the puzzle's clues."""
        puzzle = SudokuBoard.from_string(EASY_PUZZLE)
        solution = SudokuBoard.from_string(EASY_SOLUTION)
        assert validate_solution(puzzle, solution)

        tampered = solution.to_array()
        tampered[0, 1], tampered[0, 0] = tampered[0, 0], tampered[0, 1]
        assert not validate_solution(puzzle, tampered)

    def test_wrong_shape(self):
        """Test that non 9x9 grids are rejected."""
        with pytest.raises(ValueError):
            is_valid_grid(np.zeros((4, 4), dtype=np.int32))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
