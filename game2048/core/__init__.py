# -*- coding: utf-8 -*-
"""
This module provides the game-state engine of the 2048 game.

It includes the directional board transforms, random tile spawning, legal move and terminal checks,
the game state containers and the state validator.
"""

from .gameboard import (
    MoveResult,
    fill_cells,
    has_won,
    is_done,
    merge_row,
    move,
    move_down,
    move_left,
    move_right,
    move_up,
    slide_and_merge,
    spawn_tile,
)
from .gamemove import Direction, has_legal_move, illegal_actions, legal_actions, legal_actions_mask
from .state import GameState, GameStateView
from .validator import ensure_valid, is_valid_tile, validate

__all__ = [
    "Direction",
    "MoveResult",
    "GameState",
    "GameStateView",
    "merge_row",
    "slide_and_merge",
    "move",
    "move_left",
    "move_right",
    "move_up",
    "move_down",
    "spawn_tile",
    "fill_cells",
    "is_done",
    "has_won",
    "has_legal_move",
    "legal_actions",
    "illegal_actions",
    "legal_actions_mask",
    "validate",
    "ensure_valid",
    "is_valid_tile",
]
