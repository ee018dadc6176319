# -*- coding: utf-8 -*-
"""
Python implementation of the 2048 game.

This module provides the `TwentyFortyEight` class, which owns a game session and applies moves to it.
"""

from .twentyfortyeight import TwentyFortyEight

__all__ = ["TwentyFortyEight"]
