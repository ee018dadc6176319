"""
Core functionality of the 2048 engine: board transforms, tile spawning and terminal checks.

Every transform is derived from the left move. The other directions reverse and/or transpose the board,
apply the left move, then undo the reversal and transposition.
"""

import logging
from typing import NamedTuple

from numpy import argwhere, array, fliplr, ndarray, zeros_like
from numpy import any as np_any
from numpy.random import PCG64DXSM, Generator, default_rng

from game2048.config import TILE_PROBS, TILE_VALUES
from game2048.core.gamemove import Direction, has_legal_move
from game2048.errors import NoEmptyCellError

logger = logging.getLogger(__name__)

# ##>: Module-level generator, used when the caller does not supply one.
_GENERATOR = default_rng(PCG64DXSM())


class MoveResult(NamedTuple):
    """Outcome of a directional transform."""

    board: ndarray
    score: int
    moved: bool


def merge_row(row: ndarray) -> tuple[int, ndarray]:
    """
    Merge adjacent equal values in a row and compute the total score.

    Parameters
    ----------
    row : ndarray
        A 1D array representing one row of the game board.

    Returns
    -------
    score : int
        The sum of the tiles created by merging.
    merged_row : ndarray
        The non-empty tiles after merging, compacted towards the start.

    Notes
    -----
    - Zeros (empty cells) are removed before merging.
    - Merging occurs from the start of the row towards the end.
    - A merged tile does not merge again in the same pass: [2, 2, 2, 2] gives [4, 4].
    """
    non_zero = row[row != 0]
    if len(non_zero) <= 1:
        return 0, non_zero

    result = []
    score = 0

    # ##: Single left-to-right pass.
    i = 0
    while i < len(non_zero) - 1:
        if non_zero[i] == non_zero[i + 1]:
            merged = non_zero[i] * 2
            result.append(merged)
            score += int(merged)
            i += 2
        else:
            result.append(non_zero[i])
            i += 1

    if i == len(non_zero) - 1:
        result.append(non_zero[-1])

    return score, array(result, dtype=row.dtype)


def slide_and_merge(board: ndarray) -> tuple[int, ndarray]:
    """
    Slide the game board to the left, merge adjacent cells, and compute the score.

    Parameters
    ----------
    board : ndarray
        The game board represented as a 2D NumPy array. It is not modified.

    Returns
    -------
    score : int
        The total score obtained from all merges.
    updated_board : ndarray
        A new board after sliding and merging, empty cells padded on the right.
    """
    result = zeros_like(board)
    score = 0

    for i, row in enumerate(board):
        score_row, merged_row = merge_row(row)
        score += score_row
        result[i, : len(merged_row)] = merged_row

    return score, result


def move_left(board: ndarray) -> MoveResult:
    """
    Apply the left move: compact every row, merge pairs once, and compact again.

    Parameters
    ----------
    board : ndarray
        The game board. It is not modified.

    Returns
    -------
    MoveResult
        The new board, the score delta and whether any tile changed position or merged.
    """
    score, updated = slide_and_merge(board)
    moved = bool((updated != board).any())
    return MoveResult(updated, score, moved)


def move_right(board: ndarray) -> MoveResult:
    """Reverse rows, move left, reverse rows back."""
    updated, score, moved = move_left(fliplr(board))
    return MoveResult(fliplr(updated).copy(), score, moved)


def move_up(board: ndarray) -> MoveResult:
    """Transpose, move left, transpose back."""
    updated, score, moved = move_left(board.T)
    return MoveResult(updated.T.copy(), score, moved)


def move_down(board: ndarray) -> MoveResult:
    """Transpose, reverse rows, move left, reverse rows back, transpose back."""
    updated, score, moved = move_left(fliplr(board.T))
    return MoveResult(fliplr(updated).T.copy(), score, moved)


# ##: Dispatch table from direction to transform.
MOVES = {
    Direction.LEFT: move_left,
    Direction.UP: move_up,
    Direction.RIGHT: move_right,
    Direction.DOWN: move_down,
}


def move(board: ndarray, direction: Direction | int) -> MoveResult:
    """
    Apply a directional transform to the board.

    Parameters
    ----------
    board : ndarray
        The game board. It is not modified.
    direction : Direction or int
        The direction to apply (0: left, 1: up, 2: right, 3: down).

    Returns
    -------
    MoveResult
        The new board, the score delta and the moved flag.
    """
    return MOVES[Direction(direction)](board)


def spawn_tile(
    board: ndarray,
    rng: Generator | None = None,
    values: tuple[int, ...] | list[int] = TILE_VALUES,
    probs: tuple[float, ...] | list[float] = TILE_PROBS,
) -> ndarray:
    """
    Place one new tile in a uniformly chosen empty cell.

    Parameters
    ----------
    board : ndarray
        The game board. It is not modified.
    rng : Generator, optional
        Random generator to draw from; the module-level generator by default.
    values, probs : sequence, optional
        Tile values and their probabilities (2 with 0.9, 4 with 0.1 by default).

    Returns
    -------
    ndarray
        A new board with the tile added.

    Raises
    ------
    NoEmptyCellError
        If the board has no empty cell.
    """
    rng = rng if rng is not None else _GENERATOR

    empty_cells = argwhere(board == 0)
    if len(empty_cells) == 0:
        raise NoEmptyCellError('No empty cell available for a new tile')

    row, col = (int(index) for index in empty_cells[rng.integers(len(empty_cells))])
    value = int(rng.choice(values, p=probs))

    new_board = board.copy()
    new_board[row, col] = value
    logger.debug('Spawned %d at (%d, %d)', value, row, col)
    return new_board


def fill_cells(
    board: ndarray,
    number_tile: int,
    rng: Generator | None = None,
    values: tuple[int, ...] | list[int] = TILE_VALUES,
    probs: tuple[float, ...] | list[float] = TILE_PROBS,
) -> ndarray:
    """
    Fill empty cells with new tiles, one :func:`spawn_tile` draw at a time.

    Parameters
    ----------
    board : ndarray
        The game board. It is not modified.
    number_tile : int
        Number of new tiles to add.
    rng : Generator, optional
        Random generator to draw from; the module-level generator by default.
    values, probs : sequence, optional
        Tile values and their probabilities.

    Returns
    -------
    ndarray
        A new board with the tiles added.

    Notes
    -----
    If there are fewer empty cells than requested, it fills all available cells.
    """
    # ##: Only as many tiles as there are available places.
    number_tile = min(number_tile, int((board == 0).sum()))

    for _ in range(number_tile):
        board = spawn_tile(board, rng=rng, values=values, probs=probs)
    return board if number_tile else board.copy()


def is_done(state: ndarray) -> bool:
    """
    Check if the game has ended.

    Parameters
    ----------
    state : ndarray
        The current state of the game board.

    Returns
    -------
    bool
        True if the board is full and no move is possible, False otherwise.

    Notes
    -----
    On a full board a move is possible exactly when two adjacent cells hold the same value.
    """
    return bool(state.all()) and not has_legal_move(state)


def has_won(state: ndarray, win_tile: int = 2048) -> bool:
    """
    Check whether the goal tile is on the board.

    Parameters
    ----------
    state : ndarray
        The current state of the game board.
    win_tile : int, optional
        The goal tile (default is 2048).

    Returns
    -------
    bool
        True if some cell holds the goal tile.
    """
    return bool(np_any(state == win_tile))
