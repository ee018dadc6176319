"""
Exception taxonomy for the 2048 engine.

Components raise these exceptions; the controller turns them into result values for the UI layer.
"""

from enum import Enum


class GameError(Exception):
    """Base class for every error raised by the engine."""


class NoEmptyCellError(GameError, RuntimeError):
    """A tile was requested on a board that has no empty cell."""


class InvalidStateError(GameError, ValueError):
    """The validator rejected a game state (negative score or a bad tile value)."""


class DecodeErrorKind(str, Enum):
    """Category of a rejected save record."""

    BAD_LENGTH = 'bad_length'
    BAD_MAGIC = 'bad_magic'
    UNSUPPORTED_VERSION = 'unsupported_version'
    CHECKSUM_MISMATCH = 'checksum_mismatch'
    INVALID_STATE = 'invalid_state'


# ##: Human readable description of each category.
DECODE_ERROR_MESSAGES: dict[DecodeErrorKind, str] = {
    DecodeErrorKind.BAD_LENGTH: 'File size does not match a saved game',
    DecodeErrorKind.BAD_MAGIC: 'Not a 2048 save file',
    DecodeErrorKind.UNSUPPORTED_VERSION: 'Unsupported save file version',
    DecodeErrorKind.CHECKSUM_MISMATCH: 'Save file is corrupted (checksum mismatch)',
    DecodeErrorKind.INVALID_STATE: 'Saved game state is invalid',
}


class DecodeError(GameError, ValueError):
    """
    A save record could not be decoded.

    Parameters
    ----------
    detail : str, optional
        Extra context appended to the category message.
    """

    kind: DecodeErrorKind

    def __init__(self, detail: str | None = None):
        self.message = DECODE_ERROR_MESSAGES[self.kind]
        self.detail = detail
        super().__init__(f'{self.message}: {detail}' if detail else self.message)


class BadLengthError(DecodeError):
    kind = DecodeErrorKind.BAD_LENGTH


class BadMagicError(DecodeError):
    kind = DecodeErrorKind.BAD_MAGIC


class UnsupportedVersionError(DecodeError):
    kind = DecodeErrorKind.UNSUPPORTED_VERSION


class ChecksumMismatchError(DecodeError):
    kind = DecodeErrorKind.CHECKSUM_MISMATCH


class InvalidSavedStateError(DecodeError, InvalidStateError):
    kind = DecodeErrorKind.INVALID_STATE


class PersistenceError(GameError):
    """Reading or writing a save file failed at the operating system level."""


class SaveError(PersistenceError):
    """The save file could not be written."""


class LoadError(PersistenceError):
    """The save file could not be read."""
