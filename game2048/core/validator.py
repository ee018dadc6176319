"""
Structural checks of a game state, run after every mutation and before adopting a loaded game.
"""

from numpy import floating, ndarray, ndenumerate

from game2048.core.state import GameState
from game2048.errors import InvalidStateError


def is_valid_tile(value: int) -> bool:
    """
    Check a single cell value.

    Parameters
    ----------
    value : int
        The cell value.

    Returns
    -------
    bool
        True for 0 (empty) or a power of two >= 2. Fractional values are never valid.
    """
    if isinstance(value, (float, floating)) and not float(value).is_integer():
        return False
    value = int(value)
    if value == 0:
        return True
    return value >= 2 and value & (value - 1) == 0


def _board_problem(board: ndarray) -> str | None:
    if board.ndim != 2 or board.shape[0] != board.shape[1]:
        return f'board must be a square grid, got shape {board.shape}'
    if board.dtype.kind not in 'iu':
        return f'board must hold integers, got dtype {board.dtype}'
    for (row, col), value in ndenumerate(board):
        if not is_valid_tile(value):
            return f'invalid tile {int(value)} at ({row}, {col})'
    return None


def _state_problem(state: GameState) -> str | None:
    if state.score < 0:
        return f'negative score {state.score}'
    return _board_problem(state.board)


def validate(state: GameState) -> bool:
    """
    Check the structural invariants of a state.

    Parameters
    ----------
    state : GameState
        The state to check.

    Returns
    -------
    bool
        True if the score is non-negative and every cell is empty or a power of two.
    """
    return _state_problem(state) is None


def ensure_valid(state: GameState) -> GameState:
    """
    Same checks as :func:`validate`, raising instead of returning False.

    Raises
    ------
    InvalidStateError
        With the first problem found.
    """
    problem = _state_problem(state)
    if problem is not None:
        raise InvalidStateError(problem)
    return state
