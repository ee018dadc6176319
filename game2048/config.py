"""
Configuration for the 2048 game engine.
"""

from dataclasses import dataclass

# ##>: Tile spawn distribution of the classic game (90% for 2, 10% for 4).
TILE_VALUES: tuple[int, ...] = (2, 4)
TILE_PROBS: tuple[float, ...] = (0.9, 0.1)


@dataclass
class GameConfig:
    """
    Parameters of a game session.

    Attributes follow the classic game: a 4x4 board, 2048 as goal tile and new tiles drawn as 2 (90%) or 4 (10%).
    """

    # ##>: Board geometry. The save format only stores 4x4 boards.
    size: int = 4

    # ##>: Reaching this tile wins the game.
    win_tile: int = 2048

    # ##>: Spawned tile values and their probabilities.
    tile_values: tuple[int, ...] = TILE_VALUES
    tile_probs: tuple[float, ...] = TILE_PROBS

    # ##>: Seed of the spawn generator, None for fresh entropy.
    seed: int | None = None

    def __post_init__(self):
        if self.size < 2:
            raise ValueError(f'size must be >= 2, got {self.size}')
        if self.win_tile < 2 or self.win_tile & (self.win_tile - 1):
            raise ValueError(f'win_tile must be a power of two >= 2, got {self.win_tile}')
        if len(self.tile_values) != len(self.tile_probs):
            raise ValueError('tile_values and tile_probs must have the same length')
        if abs(sum(self.tile_probs) - 1.0) > 1e-9:
            raise ValueError(f'tile_probs must sum to 1, got {sum(self.tile_probs)}')
