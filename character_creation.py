# character_creation.py
# Character classes and construction of the player character

import logging

from components import Creature, Species
from type_tables import load_json_file

logger = logging.getLogger(__name__)

ATTRIBUTES = ('strength', 'intelligence', 'agility', 'wisdom')

# Every class starts from the same base line; the class' essential
# attribute is raised to the class requirement.
BASE_ATTRIBUTE = 10
ESSENTIAL_ATTRIBUTE_SCORE = 14

PLAYER_GLYPH = '@'
PLAYER_HP = 30
PLAYER_ATTACK = 10
PLAYER_DEFENSE = 5
PLAYER_HEAL_RATE = 10


class CharacterClass:
    """Represents a character class with all its properties."""
    def __init__(self, key, class_data):
        self.key = key
        self.name = class_data.get('name', key.title())
        self.abilities = class_data.get('abilities', 'unknown')
        self.essential_attribute = class_data.get('essential_attribute', 'unknown')
        self.description = class_data.get('description', '')

    def starting_attributes(self):
        """Attribute scores a fresh character of this class begins with."""
        scores = {attribute: BASE_ATTRIBUTE for attribute in ATTRIBUTES}
        if self.essential_attribute in scores:
            scores[self.essential_attribute] = ESSENTIAL_ATTRIBUTE_SCORE
        return scores

    def meets_requirements(self, attributes):
        """Check if the given attribute scores qualify for this class."""
        if self.essential_attribute not in ATTRIBUTES:
            return True
        return attributes.get(self.essential_attribute, 0) >= ESSENTIAL_ATTRIBUTE_SCORE


def load_classes(file_path):
    """Load character class definitions from JSON."""
    data = load_json_file(file_path)
    if not isinstance(data, dict):
        logger.warning("No character classes loaded from %s", file_path)
        return {}
    return {key: CharacterClass(key, class_data)
            for key, class_data in data.items() if isinstance(class_data, dict)}


def create_player(name, class_key, row, col, area, game_state):
    """
    Creates the player character, attaches it to the area and returns it.

    A blank name falls back to the configured default name, an unknown class
    falls back to the configured default class (or no class at all).
    """
    if area is None or not area.in_bounds(row, col):
        logger.warning("create_player() --> invalid area or coordinates (%s, %s)", row, col)
        return None

    if not name:
        name = game_state.config.player_name

    classes = game_state.class_types
    char_class = classes.get(class_key) or classes.get(game_state.config.player_class)
    if char_class is None:
        logger.warning("create_player() --> class '%s' not found, creating a classless player", class_key)
        attributes = {attribute: BASE_ATTRIBUTE for attribute in ATTRIBUTES}
    else:
        attributes = char_class.starting_attributes()

    player = Creature(name, Species.PLAYER, row, col, PLAYER_GLYPH,
                      hp=PLAYER_HP, max_hp=PLAYER_HP,
                      attack=PLAYER_ATTACK, defense=PLAYER_DEFENSE,
                      kind="human", heal_rate=PLAYER_HEAL_RATE,
                      char_class=char_class, **attributes)
    area.add_creature(player)

    class_name = char_class.name if char_class else "Adventurer"
    logger.info("Created %s the %s at (%d, %d)", name, class_name, row, col)
    return player
