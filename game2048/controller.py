"""
Bridge between an input/render layer and the engine.

The UI never holds the engine state: it forwards events to a :class:`GameController` and draws the
:class:`GameStateView` it gets back. Failures come back as values, never as exceptions.
"""

import logging
from pathlib import Path
from typing import NamedTuple

from game2048.core.gamemove import Direction
from game2048.core.state import GameStateView
from game2048.envs.twentyfortyeight import TwentyFortyEight
from game2048.errors import DecodeError, GameError, InvalidStateError, LoadError, SaveError
from game2048.persistence.storage import load_game, save_game

logger = logging.getLogger(__name__)

# ##: Arrow keys and WASD, named as GUI toolkits report them.
KEY_BINDINGS: dict[str, Direction] = {
    'left': Direction.LEFT,
    'a': Direction.LEFT,
    'up': Direction.UP,
    'w': Direction.UP,
    'right': Direction.RIGHT,
    'd': Direction.RIGHT,
    'down': Direction.DOWN,
    's': Direction.DOWN,
}


class LoadOutcome(NamedTuple):
    """Result of a load request: the adopted view, or the reason nothing was adopted."""

    view: GameStateView | None
    error: GameError | None

    @property
    def ok(self) -> bool:
        return self.error is None


class KeyPressFilter:
    """
    Coalesce auto-repeated key presses.

    A key is accepted on its first press and ignored until it has been released.
    """

    def __init__(self):
        self._held: set[str] = set()

    def press(self, key: str) -> bool:
        """Return True if this press is a new physical press."""
        if key in self._held:
            return False
        self._held.add(key)
        return True

    def release(self, key: str) -> None:
        self._held.discard(key)

    def reset(self) -> None:
        """Forget every held key, e.g. after the window lost focus."""
        self._held.clear()


class GameController:
    """
    Operations the UI layer needs from the engine.

    Parameters
    ----------
    game : TwentyFortyEight, optional
        The engine to drive; a new classic game by default.
    """

    def __init__(self, game: TwentyFortyEight | None = None):
        self.game = game if game is not None else TwentyFortyEight()

    @property
    def view(self) -> GameStateView:
        return self.game.view

    def on_directional_input(self, direction: Direction | int) -> tuple[bool, GameStateView]:
        """
        Forward a move.

        Returns
        -------
        tuple[bool, GameStateView]
            Whether the board changed, and the state to draw.
        """
        moved = self.game.apply_move(direction)
        return moved, self.game.view

    def on_key(self, key: str) -> tuple[bool, GameStateView]:
        """Forward a key name; keys without a binding change nothing."""
        direction = KEY_BINDINGS.get(key.lower())
        if direction is None:
            return False, self.game.view
        return self.on_directional_input(direction)

    def on_new_game_requested(self) -> GameStateView:
        return self.game.new_game()

    def on_save_requested(self, path: str | Path) -> InvalidStateError | SaveError | None:
        """
        Save the current game.

        Parameters
        ----------
        path : str or Path
            Destination file.

        Returns
        -------
        InvalidStateError, SaveError or None
            None on success, otherwise the reason the game was not saved.
        """
        try:
            save_game(self.game.state, path)
        except (InvalidStateError, SaveError) as error:
            logger.warning('Save to %s refused: %s', path, error)
            return error
        return None

    def on_load_requested(self, path: str | Path) -> LoadOutcome:
        """
        Load a saved game, replacing the current one only if the file is fully valid.

        Parameters
        ----------
        path : str or Path
            The save file.

        Returns
        -------
        LoadOutcome
            The new view, or the error; the live game is unchanged on error.
        """
        try:
            view = self.game.load_state(load_game(path))
        except (LoadError, DecodeError, InvalidStateError) as error:
            logger.warning('Load from %s refused: %s', path, error)
            return LoadOutcome(None, error)
        return LoadOutcome(view, None)
