# -*- coding: utf-8 -*-
"""
Play 2048 Game

Arrow keys or WASD move the tiles, N starts a new game, F5 saves, F9 loads the newest save, Escape quits.
"""
import argparse
import logging
from pathlib import Path
from typing import Any

from game2048 import GameConfig, GameController, KeyPressFilter, TwentyFortyEight
from game2048.persistence import default_save_filename
from game2048.utils import WindowBoard


def newest_save(directory: Path) -> Path | None:
    """
    Find the most recently written save file.

    Parameters
    ----------
    directory: Path
        Directory holding the save files
    """
    saves = sorted(directory.glob("*.bin"), key=lambda path: path.stat().st_mtime)
    return saves[-1] if saves else None


def save(controller: GameController, window: WindowBoard, directory: Path):
    """
    Save the game under a timestamped name.

    Parameters
    ----------
    controller: GameController
        The game to save

    window: WindowBoard
        Class to draw the game board

    directory: Path
        Directory holding the save files
    """
    path = directory / default_save_filename()
    error = controller.on_save_requested(path)
    window.show_message(f"Saved to {path.name}" if error is None else f"Save failed: {error}")


def load(controller: GameController, window: WindowBoard, path: Path | None):
    """
    Load a saved game and redraw it.

    Parameters
    ----------
    controller: GameController
        The game to replace

    window: WindowBoard
        Class to draw the game board

    path: Path, optional
        The save file
    """
    if path is None:
        window.show_message("No save file found")
        return

    outcome = controller.on_load_requested(path)
    if not outcome.ok:
        window.show_message(f"Load failed: {outcome.error}")
        return

    window.show_view(outcome.view)
    window.show_message(f"Loaded {path.name}")


def key_handler(controller: GameController, window: WindowBoard, keys: KeyPressFilter, directory: Path, event: Any):
    """
    Handle the keyboard.

    Parameters
    ----------
    controller: GameController
        The game

    window: WindowBoard
        Class to draw the game board

    keys: KeyPressFilter
        Drops auto-repeated presses

    directory: Path
        Directory holding the save files

    event: Any
        event to handle
    """
    if event.key is None or not keys.press(event.key):
        return None

    if event.key == "escape":
        window.close()
        return None

    if event.key == "n":
        window.show_view(controller.on_new_game_requested())
        window.show_message("")
        return None

    if event.key == "f5":
        save(controller, window, directory)
        return None

    if event.key == "f9":
        load(controller, window, newest_save(directory))
        return None

    moved, view = controller.on_key(event.key)
    if moved:
        window.show_view(view)
    return None


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play 2048 with the keyboard.")
    parser.add_argument("--load", type=Path, default=None, help="Save file to start from.")
    parser.add_argument("--save-dir", type=Path, default=Path.cwd(), help="Where F5 writes save files.")
    parser.add_argument("--seed", type=int, default=None, help="Seed of the tile generator.")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, ...).")
    return parser.parse_args()


if __name__ == "__main__":
    args = parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    controller = GameController(TwentyFortyEight(GameConfig(seed=args.seed)))
    keys = KeyPressFilter()

    window_board = WindowBoard(title="2048 Game", size=controller.game.size)
    window_board.register_key_handler(
        lambda event: key_handler(controller, window_board, keys, args.save_dir, event),
        lambda event: keys.release(event.key),
        lambda event: keys.reset(),
    )

    window_board.show_view(controller.view)
    if args.load is not None:
        load(controller, window_board, args.load)

    # Blocking event loop
    window_board.show(block=True)
