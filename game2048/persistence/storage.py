"""
Save files on disk: write and read encoded game records.
"""

import logging
from datetime import datetime
from pathlib import Path

from game2048.core.state import GameState
from game2048.errors import LoadError, SaveError
from game2048.persistence.codec import decode, encode

logger = logging.getLogger(__name__)

# ##: Used when the clock cannot be formatted.
FALLBACK_SAVE_FILENAME = '2048-backup.bin'


def default_save_filename(now: datetime | None = None) -> str:
    """
    Suggested name for a new save file, based on local time.

    Parameters
    ----------
    now : datetime, optional
        Timestamp to use instead of the current local time.

    Returns
    -------
    str
        A name such as ``2048-20250314092653.bin``.
    """
    now = now if now is not None else datetime.now()
    try:
        return f'2048-{now:%Y%m%d%H%M%S}.bin'
    except ValueError:
        return FALLBACK_SAVE_FILENAME


def save_game(state: GameState, path: str | Path) -> Path:
    """
    Write a game state to a save file.

    Parameters
    ----------
    state : GameState
        The state to save.
    path : str or Path
        Destination file, overwritten if it exists.

    Returns
    -------
    Path
        The written file.

    Raises
    ------
    InvalidStateError
        The state is invalid; nothing is written.
    SaveError
        The file could not be written; any partially written file is removed.
    """
    path = Path(path)
    data = encode(state)

    file = None
    try:
        with open(path, 'wb') as file:
            file.write(data)
    except OSError as error:
        # ##>: Only remove a file this call created or truncated.
        if file is not None:
            path.unlink(missing_ok=True)
        raise SaveError(f'Cannot write save file {path}: {error}') from error

    logger.info('Saved game to %s', path)
    return path


def load_game(path: str | Path) -> GameState:
    """
    Read a game state from a save file.

    Parameters
    ----------
    path : str or Path
        The save file.

    Returns
    -------
    GameState
        The decoded state.

    Raises
    ------
    LoadError
        The file could not be read.
    DecodeError
        The content is not a valid save record.
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as error:
        raise LoadError(f'Cannot read save file {path}: {error}') from error

    state = decode(data)
    logger.info('Loaded game from %s', path)
    return state
