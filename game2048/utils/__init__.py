# -*- coding: utf-8 -*-
"""
This module provides the Matplotlib window used to play the game by hand.
"""

from .windows import WindowBoard

__all__ = ["WindowBoard"]
