# area.py
# One dungeon level: the tile grid plus the creatures and items living in it.

import logging
from collections import namedtuple

import numpy as np

from components import WALL_GLYPH

logger = logging.getLogger(__name__)

# Everything the simulation needs to know about a single cell.
TileInfo = namedtuple("TileInfo", ["glyph", "blocks", "creature", "items"])

# Offsets of the 8-connected neighbours of a cell.
NEIGHBOUR_OFFSETS = [(-1, -1), (-1, 0), (-1, 1),
                     (0, -1),           (0, 1),
                     (1, -1),  (1, 0),  (1, 1)]


class Area:
    """
    Holds the full simulation state of a level.

    The area owns its tile grid outright. The creature and item lists only
    reference objects whose lifetime is handled by placement and death logic.
    """
    def __init__(self, tiles, height, width):
        self.tiles = tiles
        self.height = height
        self.width = width
        self.creatures = []
        self.items = []
        self.populated = False

    def in_bounds(self, row, col):
        return 0 <= row < self.height and 0 <= col < self.width

    def tile_at(self, row, col):
        """Returns the Tile at (row, col), or None when out of bounds."""
        if not self.in_bounds(row, col):
            return None
        return self.tiles[col + row * self.width]

    def creature_at(self, row, col):
        """Returns the first live creature standing at (row, col)."""
        for creature in self.creatures:
            if creature.is_alive and creature.row == row and creature.col == col:
                return creature
        return None

    def items_at(self, row, col):
        return [item for item in self.items if item.row == row and item.col == col]

    def get_tile_info(self, row, col):
        """
        Looks up a cell: its glyph, whether it blocks movement, the live
        creature on it (if any) and the items lying on the ground there.

        Returns None for coordinates outside the area.
        """
        tile = self.tile_at(row, col)
        if tile is None:
            logger.debug("get_tile_info() --> (%d, %d) is out of bounds", row, col)
            return None
        return TileInfo(tile.glyph, tile.blocks_movement,
                        self.creature_at(row, col), self.items_at(row, col))

    def is_wall(self, row, col):
        tile = self.tile_at(row, col)
        return tile is not None and tile.glyph == WALL_GLYPH

    def adjacent_walls(self, row, col):
        """
        Weighted count of blocking tiles around a cell: the cell itself counts
        double and each of its 8 neighbours counts once. Cells beyond the edge
        of the area are not counted.
        """
        if not self.in_bounds(row, col):
            logger.warning("adjacent_walls() --> (%d, %d) is out of bounds", row, col)
            return 0

        counter = 0
        if self.tile_at(row, col).blocks_movement:
            counter += 2
        for d_row, d_col in NEIGHBOUR_OFFSETS:
            tile = self.tile_at(row + d_row, col + d_col)
            if tile is not None and tile.blocks_movement:
                counter += 1
        return counter

    def blocking_mask(self):
        """A (height, width) boolean array of the tiles that block movement."""
        flags = [tile.blocks_movement for tile in self.tiles]
        return np.array(flags, dtype=bool).reshape(self.height, self.width)

    def add_creature(self, creature):
        if creature is None or not self.in_bounds(creature.row, creature.col):
            logger.warning("add_creature() --> invalid creature or coordinates: %r", creature)
            return False
        creature.area = self
        self.creatures.append(creature)
        return True

    def remove_creature(self, creature):
        """Removes a creature from the area by identity."""
        for index, listed in enumerate(self.creatures):
            if listed is creature:
                del self.creatures[index]
                return True
        logger.warning("remove_creature() --> %r is not in this area", creature)
        return False

    def add_item(self, item):
        """Puts an item on the ground at its own coordinates."""
        if item is None or not self.in_bounds(item.row, item.col):
            logger.warning("add_item() --> invalid item or coordinates: %r", item)
            return False
        item.area = self
        self.items.append(item)
        return True

    def remove_item(self, item):
        """Takes an item off the ground by identity."""
        for index, listed in enumerate(self.items):
            if listed is item:
                del self.items[index]
                item.area = None
                return True
        logger.warning("remove_item() --> %r is not on the ground here", item)
        return False
