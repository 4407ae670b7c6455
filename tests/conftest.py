"""Shared fixtures for the test suite."""

import pytest
from sudoku_engine.core.board import SudokuBoard

from puzzles import TEST_PUZZLE, TEST_SOLUTION


@pytest.fixture
def puzzle():
    return SudokuBoard.from_string(TEST_PUZZLE)


@pytest.fixture
def solution():
    return SudokuBoard.from_string(TEST_SOLUTION)
