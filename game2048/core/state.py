"""
Game state containers: the engine-owned mutable state and the read-only view handed to renderers.
"""

from dataclasses import dataclass, field
from typing import NamedTuple

from numpy import array_equal, int64, ndarray, zeros


@dataclass(eq=False)
class GameState:
    """
    Complete state of a game session.

    Attributes
    ----------
    board : ndarray
        Square grid of tile values, 0 for an empty cell.
    score : int
        Sum of every tile created by a merge.
    game_over : bool
        True once no legal move remains.
    won : bool
        True once the goal tile has appeared; never cleared.
    """

    board: ndarray = field(default_factory=lambda: zeros((4, 4), dtype=int64))
    score: int = 0
    game_over: bool = False
    won: bool = False

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GameState):
            return NotImplemented
        return (
            array_equal(self.board, other.board)
            and self.score == other.score
            and self.game_over == other.game_over
            and self.won == other.won
        )

    def copy(self) -> 'GameState':
        """Deep copy, the board included."""
        return GameState(board=self.board.copy(), score=self.score, game_over=self.game_over, won=self.won)

    def view(self) -> 'GameStateView':
        """Read-only snapshot of this state."""
        board = self.board.copy()
        board.flags.writeable = False
        return GameStateView(board=board, score=self.score, game_over=self.game_over, won=self.won)


class GameStateView(NamedTuple):
    """
    Snapshot of a game state for rendering.

    The board is a frozen copy: writing to it raises ``ValueError`` and never reaches the engine.
    """

    board: ndarray
    score: int
    game_over: bool
    won: bool
