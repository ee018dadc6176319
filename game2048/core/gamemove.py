"""
Game move utilities for the 2048 engine: move directions and the legal move predicates.
"""

from enum import IntEnum

from numpy import ndarray


class Direction(IntEnum):
    """Move directions, numbered like the actions of the reference environment."""

    LEFT = 0
    UP = 1
    RIGHT = 2
    DOWN = 3


def legal_actions_mask(state: ndarray) -> tuple[bool, bool, bool, bool]:
    """
    Get a boolean mask for all four directions in a single pass.

    Parameters
    ----------
    state : ndarray
        The current state of the game board.

    Returns
    -------
    tuple[bool, bool, bool, bool]
        Mask for (left, up, right, down) where True means the move changes the board.

    Notes
    -----
    A direction is legal when an empty cell lies in front of a tile along that direction, or when two
    adjacent equal tiles lie along that axis.
    """
    # ##>: Compute horizontal adjacency once for left/right.
    left_cols, right_cols = state[:, :-1], state[:, 1:]
    h_can_merge = (left_cols != 0) & (left_cols == right_cols)

    # ##>: Compute vertical adjacency once for up/down.
    top_rows, bottom_rows = state[:-1, :], state[1:, :]
    v_can_merge = (top_rows != 0) & (top_rows == bottom_rows)

    # ##>: Check slide conditions per direction.
    left = (left_cols == 0) & (right_cols != 0)
    right = (right_cols == 0) & (left_cols != 0)
    up = (top_rows == 0) & (bottom_rows != 0)
    down = (bottom_rows == 0) & (top_rows != 0)

    return (
        bool(left.any() or h_can_merge.any()),
        bool(up.any() or v_can_merge.any()),
        bool(right.any() or h_can_merge.any()),
        bool(down.any() or v_can_merge.any()),
    )


def legal_actions(state: ndarray) -> list[Direction]:
    """
    Determine the directions that would change the board.

    Parameters
    ----------
    state : ndarray
        The current state of the game board.

    Returns
    -------
    list[Direction]
        Legal directions, in action order.
    """
    mask = legal_actions_mask(state)
    return [direction for direction in Direction if mask[direction]]


def illegal_actions(state: ndarray) -> list[Direction]:
    """
    Determine the directions that would leave the board unchanged.

    Parameters
    ----------
    state : ndarray
        The current state of the game board.

    Returns
    -------
    list[Direction]
        Illegal directions, in action order.
    """
    mask = legal_actions_mask(state)
    return [direction for direction in Direction if not mask[direction]]


def has_legal_move(state: ndarray) -> bool:
    """
    Check whether at least one direction changes the board.

    This is the only definition of "the game can continue": the terminal check and the move
    validity check both go through it.

    Parameters
    ----------
    state : ndarray
        The current state of the game board.

    Returns
    -------
    bool
        True if some move is possible.
    """
    return any(legal_actions_mask(state))
