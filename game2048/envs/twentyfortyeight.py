"""2048 game session: owns the live state and applies moves atomically."""

import logging

from numpy import int64, zeros
from numpy.random import Generator, default_rng

from game2048.config import GameConfig
from game2048.core.gameboard import fill_cells, has_won, is_done, move, spawn_tile
from game2048.core.gamemove import Direction, has_legal_move
from game2048.core.state import GameState, GameStateView
from game2048.core.validator import ensure_valid
from game2048.errors import InvalidStateError, NoEmptyCellError

logger = logging.getLogger(__name__)


class TwentyFortyEight:
    """
    2048 game state machine.

    This class owns the board, the score and the terminal flags. A move either commits entirely (new board,
    score, spawned tile and flags) or leaves the state untouched.
    """

    # ##: All Actions.
    ACTIONS = {'left': Direction.LEFT, 'up': Direction.UP, 'right': Direction.RIGHT, 'down': Direction.DOWN}

    def __init__(self, config: GameConfig | None = None):
        """
        Initialize the game and start a first game.

        Parameters
        ----------
        config : GameConfig, optional
            Board size, goal tile, spawn distribution and seed (defaults to the classic game).
        """
        self.config = config if config is not None else GameConfig()
        self.size = self.config.size
        self._rng: Generator = default_rng(self.config.seed)
        self._state = GameState(board=zeros((self.size, self.size), dtype=int64))

        self.new_game()

    @property
    def state(self) -> GameState:
        """
        Copy of the current state.

        Returns
        -------
        GameState
            A deep copy; mutating it does not affect the game.
        """
        return self._state.copy()

    @property
    def view(self) -> GameStateView:
        """Read-only snapshot for rendering."""
        return self._state.view()

    @property
    def is_finished(self) -> bool:
        """True once no legal move remains."""
        return self._state.game_over

    @property
    def score(self) -> int:
        return self._state.score

    def has_legal_move(self) -> bool:
        """Check whether any direction would change the current board."""
        return has_legal_move(self._state.board)

    def _spawn(self, board):
        return spawn_tile(board, rng=self._rng, values=self.config.tile_values, probs=self.config.tile_probs)

    def new_game(self, seed: int | None = None) -> GameStateView:
        """
        Reset to an empty board with two random tiles.

        Parameters
        ----------
        seed : int, optional
            Reseed the spawn generator for a reproducible game.

        Returns
        -------
        GameStateView
            Snapshot of the new game.
        """
        if seed is not None:
            self._rng = default_rng(seed)

        board = zeros((self.size, self.size), dtype=int64)
        board = fill_cells(board, 2, rng=self._rng, values=self.config.tile_values, probs=self.config.tile_probs)

        self._state = GameState(board=board, score=0, game_over=False, won=False)
        logger.info('New game started')
        return self.view

    def apply_move(self, direction: Direction | int) -> bool:
        """
        Apply a directional move.

        Parameters
        ----------
        direction : Direction or int
            The move to apply (0: left, 1: up, 2: right, 3: down).

        Returns
        -------
        bool
            True if the board changed; a tile was then spawned and the flags recomputed.

        Raises
        ------
        NoEmptyCellError, InvalidStateError
            Only on an internal invariant violation; the state is left unchanged.

        Notes
        -----
        - Nothing happens once the game is over, or when the move shifts and merges nothing.
        - The win flag is sticky: later moves never clear it.
        """
        direction = Direction(direction)
        if self._state.game_over:
            logger.debug('Ignored %s: game is over', direction.name)
            return False

        board, delta, moved = move(self._state.board, direction)
        if not moved:
            logger.debug('Ignored %s: nothing to move', direction.name)
            return False

        # ##: Only a merge can reach the goal tile, never the spawn that follows.
        won = self._state.won or has_won(board, self.config.win_tile)

        try:
            board = self._spawn(board)
            candidate = GameState(
                board=board,
                score=self._state.score + delta,
                game_over=is_done(board),
                won=won,
            )
            ensure_valid(candidate)
        except (NoEmptyCellError, InvalidStateError):
            logger.critical('Invariant violated while applying %s', direction.name, exc_info=True)
            raise

        self._state = candidate
        logger.debug('Applied %s: +%d, score %d', direction.name, delta, candidate.score)
        if candidate.game_over:
            logger.info('Game over with score %d', candidate.score)
        return True

    def load_state(self, state: GameState) -> GameStateView:
        """
        Replace the live state wholesale.

        Parameters
        ----------
        state : GameState
            A state produced by the persistence codec (or any other valid state).

        Returns
        -------
        GameStateView
            Snapshot of the adopted state.

        Raises
        ------
        InvalidStateError
            If the state fails validation or does not match the board size; the live state is kept.

        Notes
        -----
        The game-over flag is recomputed from the board; the stored one is only compared against it.
        """
        ensure_valid(state)
        if state.board.shape != (self.size, self.size):
            raise InvalidStateError(f'expected a {self.size}x{self.size} board, got shape {state.board.shape}')

        board = state.board.astype(int64)
        game_over = is_done(board)
        if game_over != bool(state.game_over):
            logger.warning(
                'Loaded game-over flag %s does not match the board, using %s', bool(state.game_over), game_over
            )

        self._state = GameState(
            board=board,
            score=int(state.score),
            game_over=game_over,
            won=bool(state.won),
        )
        return self.view

    def render(self) -> None:
        """
        Render the game board. This method prints the current state of the game board to the console.
        """
        print(f'Score: {self._state.score}')
        for row in self._state.board.tolist():
            print(' \t'.join(map(str, row)))
        if self._state.game_over:
            print('Game over!')
        elif self._state.won:
            print('You win!')
