"""
Binary save format of a 2048 game.

A record is laid out as follows, tightly packed, integers little-endian:

======== ========= ==============================================
Field    Size      Content
======== ========= ==============================================
magic    8 bytes   ``b'2048SAVE'``
version  4 bytes   unsigned, currently 1
board    64 bytes  16 signed 32-bit tiles, row-major
score    4 bytes   signed 32-bit
over     1 byte    0 or 1
won      1 byte    0 or 1
checksum 4 bytes   unsigned, DJB2-style hash of the 70 bytes above it
======== ========= ==============================================

The checksum only covers the game state (board to won). It detects accidental corruption; it is not a
cryptographic guarantee and offers no protection against deliberate tampering.
"""

import logging

from numpy import dtype, frombuffer, int64, zeros

from game2048.core.state import GameState
from game2048.core.validator import ensure_valid
from game2048.errors import (
    BadLengthError,
    BadMagicError,
    ChecksumMismatchError,
    InvalidSavedStateError,
    InvalidStateError,
    UnsupportedVersionError,
)

logger = logging.getLogger(__name__)

MAGIC = b'2048SAVE'
FORMAT_VERSION = 1
BOARD_SIZE = 4

# ##: Largest values the fixed-width fields can hold.
_MAX_SCORE = 2**31 - 1
_MAX_TILE = 2**30

PAYLOAD_DTYPE = dtype(
    [
        ('board', '<i4', (BOARD_SIZE, BOARD_SIZE)),
        ('score', '<i4'),
        ('game_over', 'u1'),
        ('won', 'u1'),
        ('checksum', '<u4'),
    ]
)
RECORD_DTYPE = dtype([('magic', 'S8'), ('version', '<u4'), ('payload', PAYLOAD_DTYPE)])

HEADER_SIZE = len(MAGIC) + 4
PAYLOAD_SIZE = PAYLOAD_DTYPE.itemsize
RECORD_SIZE = RECORD_DTYPE.itemsize

# ##>: Bytes of the payload covered by the checksum.
_HASHED_SIZE = PAYLOAD_SIZE - PAYLOAD_DTYPE['checksum'].itemsize


def checksum(data: bytes) -> int:
    """
    DJB2-style rolling hash, ``h = h * 33 + byte`` from 0, wrapped to 32 bits.

    Parameters
    ----------
    data : bytes
        Bytes to hash.

    Returns
    -------
    int
        Unsigned 32-bit hash.
    """
    value = 0
    for byte in data:
        value = (value * 33 + byte) & 0xFFFFFFFF
    return value


def encode(state: GameState) -> bytes:
    """
    Serialize a game state into a save record.

    Parameters
    ----------
    state : GameState
        The state to serialize. It is not modified.

    Returns
    -------
    bytes
        The record, exactly ``RECORD_SIZE`` bytes long.

    Raises
    ------
    InvalidStateError
        If the state fails validation or does not fit the fixed-width fields.
    """
    ensure_valid(state)
    if state.board.shape != (BOARD_SIZE, BOARD_SIZE):
        raise InvalidStateError(f'only {BOARD_SIZE}x{BOARD_SIZE} boards can be saved, got {state.board.shape}')
    if state.score > _MAX_SCORE:
        raise InvalidStateError(f'score {state.score} does not fit the save format')
    if int(state.board.max()) > _MAX_TILE:
        raise InvalidStateError(f'tile {int(state.board.max())} does not fit the save format')

    record = zeros(1, dtype=RECORD_DTYPE)
    record['magic'] = MAGIC
    record['version'] = FORMAT_VERSION

    payload = record['payload']
    payload['board'] = state.board
    payload['score'] = state.score
    payload['game_over'] = int(bool(state.game_over))
    payload['won'] = int(bool(state.won))
    payload['checksum'] = checksum(payload.tobytes()[:_HASHED_SIZE])

    return record.tobytes()


def decode(data: bytes) -> GameState:
    """
    Rebuild a game state from a save record.

    Parameters
    ----------
    data : bytes
        The full content of a save file.

    Returns
    -------
    GameState
        A brand-new state, returned only if every check passes.

    Raises
    ------
    BadLengthError
        The record is not exactly ``RECORD_SIZE`` bytes.
    BadMagicError
        The record does not start with ``MAGIC``.
    UnsupportedVersionError
        The version field is not ``FORMAT_VERSION``.
    ChecksumMismatchError
        The stored checksum does not match the payload.
    InvalidSavedStateError
        The payload holds a negative score, a bad tile or a flag byte other than 0 and 1.
    """
    data = bytes(data)
    if len(data) != RECORD_SIZE:
        raise BadLengthError(f'expected {RECORD_SIZE} bytes, got {len(data)}')
    if data[: len(MAGIC)] != MAGIC:
        raise BadMagicError(f'header {data[:len(MAGIC)]!r}')

    record = frombuffer(data, dtype=RECORD_DTYPE, count=1)[0]
    version = int(record['version'])
    if version != FORMAT_VERSION:
        raise UnsupportedVersionError(f'version {version}, expected {FORMAT_VERSION}')

    payload = record['payload']
    stored = int(payload['checksum'])
    computed = checksum(data[HEADER_SIZE : HEADER_SIZE + _HASHED_SIZE])
    if stored != computed:
        raise ChecksumMismatchError(f'stored {stored:#010x}, computed {computed:#010x}')

    game_over, won = int(payload['game_over']), int(payload['won'])
    if game_over not in (0, 1) or won not in (0, 1):
        raise InvalidSavedStateError(f'flag bytes must be 0 or 1, got {game_over} and {won}')

    state = GameState(
        board=payload['board'].astype(int64),
        score=int(payload['score']),
        game_over=bool(game_over),
        won=bool(won),
    )
    try:
        ensure_valid(state)
    except InvalidStateError as error:
        raise InvalidSavedStateError(str(error)) from error

    logger.debug('Decoded save record: score %d', state.score)
    return state
