# -*- coding: utf-8 -*-
"""
Persistence of 2048 games: a versioned, checksummed binary record and the files that hold it.
"""

from .codec import FORMAT_VERSION, MAGIC, RECORD_SIZE, checksum, decode, encode
from .storage import default_save_filename, load_game, save_game

__all__ = [
    "MAGIC",
    "FORMAT_VERSION",
    "RECORD_SIZE",
    "checksum",
    "encode",
    "decode",
    "save_game",
    "load_game",
    "default_save_filename",
]
