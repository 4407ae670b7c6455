"""Candidate tracking for the empty cells of a board."""

from __future__ import annotations
from typing import TYPE_CHECKING, Dict, Set

from .board import Cell

if TYPE_CHECKING:
    from .board import SudokuBoard

CandidateMap = Dict[Cell, Set[int]]


def compute_candidates(board: SudokuBoard) -> CandidateMap:
    """
    Compute the legal values of every empty cell.

    Filled cells have no entry in the returned map.
    """
    candidates: CandidateMap = {}
    for row, col in board.get_empty_cells():
        # Same answer as is_legal_placement for every value, in one pass per unit
        candidates[(row, col)] = board.get_candidates(row, col)
    return candidates


def update_candidates(
    candidates: CandidateMap,
    board: SudokuBoard,
    row: int,
    col: int,
    value: int,
) -> CandidateMap:
    """
    Bring candidates up to date after a single placement or clear.

    A placement only removes value from the peers of (row, col) and drops
    the entry for the cell itself. A clear can add candidates back to many
    cells, so it falls back to a full recompute.

    Returns:
        The updated map. Placements update in place; a clear returns a new map.
    """
    if value == 0:
        return compute_candidates(board)

    candidates.pop((row, col), None)
    for peer in board.get_peers(row, col):
        peer_candidates = candidates.get(peer)
        if peer_candidates is not None:
            peer_candidates.discard(value)
    return candidates
