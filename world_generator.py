# world_generator.py
# Generates cavern levels with an iterative cellular automaton.

import logging

import numpy as np

from area import Area
from components import WALL_TILE, FLOOR_TILE

logger = logging.getLogger(__name__)

# Weight of a cell's own previous state in its wall score.
SELF_WEIGHT = 2


class AreaGenerator:
    """
    Builds an Area by seeding random walls and then smoothing them over a
    few passes, which opens up contiguous caverns walled in at the border.
    """
    def __init__(self, config, rng):
        self.config = config
        self.rng = rng

    def generate_area(self, height, width):
        """
        Generates a new area of the given size.

        Returns a (area, spawn_row, spawn_col) tuple, or None if the
        dimensions are not positive.
        """
        if height < 1 or width < 1:
            logger.warning("generate_area() --> invalid dimensions %sx%s", height, width)
            return None

        passes = max(1, self.config.generation_passes)

        # Pass 0 seeds the grid, every later pass smooths the previous one.
        walls = self._seed_walls(height, width)
        for _ in range(1, passes):
            walls = self._smooth(walls)

        tiles = [WALL_TILE if is_wall else FLOOR_TILE for is_wall in walls.ravel().tolist()]
        area = Area(tiles, height, width)

        spawn_row, spawn_col = self._spawn_point(walls)
        logger.debug("Generated %dx%d area, spawn at (%d, %d)", height, width, spawn_row, spawn_col)
        return area, spawn_row, spawn_col

    def _seed_walls(self, height, width):
        """Each cell independently becomes a wall with the configured probability."""
        probability = self.config.wall_probability
        seeded = [[self.rng.random() < probability for _ in range(width)] for _ in range(height)]
        return np.array(seeded, dtype=bool)

    def _smooth(self, walls):
        """
        One smoothing pass. A cell becomes a wall if it lies on the border or
        its wall score over the previous pass reaches the threshold.
        """
        scores = wall_scores(walls)
        smoothed = scores >= self.config.wall_threshold

        # Borders are always walls.
        smoothed[0, :] = True
        smoothed[-1, :] = True
        smoothed[:, 0] = True
        smoothed[:, -1] = True
        return smoothed

    def _spawn_point(self, walls):
        """The last floor cell in row-major order, or (0, 0) if there is no floor at all."""
        floor_indices = np.flatnonzero(~walls)
        if floor_indices.size == 0:
            logger.warning("Generated area has no floor, spawning at (0, 0)")
            return 0, 0
        row, col = divmod(int(floor_indices[-1]), walls.shape[1])
        return row, col


def wall_scores(walls):
    """
    Weighted wall count for every cell: the cell itself counts SELF_WEIGHT and
    each of its 8 neighbours counts 1 (so 10 at most). Cells past the edge of
    the grid count as floor.
    """
    height, width = walls.shape
    padded = np.pad(walls.astype(np.int8), 1, mode='constant', constant_values=0)

    scores = SELF_WEIGHT * walls.astype(np.int8)
    for d_row in (-1, 0, 1):
        for d_col in (-1, 0, 1):
            if d_row == 0 and d_col == 0:
                continue
            scores = scores + padded[1 + d_row:1 + d_row + height, 1 + d_col:1 + d_col + width]
    return scores
