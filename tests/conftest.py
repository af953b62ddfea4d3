import random
import sys
from pathlib import Path

import pytest

# Ensure the project root is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from area import Area  # noqa: E402
from components import Creature, Species, WALL_TILE, FLOOR_TILE  # noqa: E402
from config import GameConfig  # noqa: E402
from game_state import GameState  # noqa: E402


def build_area(rows):
    """Builds an Area from ASCII rows: '#' is a wall, anything else is floor."""
    height = len(rows)
    width = len(rows[0])
    tiles = []
    for row in rows:
        assert len(row) == width
        tiles.extend(WALL_TILE if ch == '#' else FLOOR_TILE for ch in row)
    return Area(tiles, height, width)


@pytest.fixture
def area_from_rows():
    return build_area


@pytest.fixture
def config():
    return GameConfig(seed=1234)


@pytest.fixture
def game_state(config):
    """A context with the stock data tables and a seeded RNG."""
    return GameState.from_config(config)


class ScriptedRng:
    """Stands in for random.Random where a test needs to pick the outcome of each draw."""
    def __init__(self, randoms=(), choices=()):
        self.randoms = list(randoms)
        self.choices = list(choices)

    def random(self):
        return self.randoms.pop(0)

    def choice(self, seq):
        wanted = self.choices.pop(0)
        assert wanted in seq
        return wanted


@pytest.fixture
def scripted_rng():
    return ScriptedRng


@pytest.fixture
def bare_state(config):
    """A context with no type tables at all."""
    return GameState(config, rng=random.Random(99))


@pytest.fixture
def open_area():
    """A 7x7 room: walls around the edge, floor inside."""
    return build_area([
        "#######",
        "#.....#",
        "#.....#",
        "#.....#",
        "#.....#",
        "#.....#",
        "#######",
    ])


@pytest.fixture
def make_creature():
    def _make(area, row, col, name="dog", species=Species.MONSTER, **stats):
        stats.setdefault('hp', 20)
        stats.setdefault('attack', 5)
        stats.setdefault('defense', 0)
        glyph = '@' if species is Species.PLAYER else name[:1]
        creature = Creature(name, species, row, col, glyph, **stats)
        area.add_creature(creature)
        return creature
    return _make
