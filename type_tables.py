# type_tables.py
# Static catalogs of spawnable creature and item templates, loaded once at startup.

import json
import logging

from components import Item, CORPSE_GLYPH

logger = logging.getLogger(__name__)


class CreatureType:
    """A creature template. Stats are copied into every creature spawned from it."""
    def __init__(self, key, data):
        self.key = key
        self.name = data.get('name', key)
        self.kind = data.get('kind', self.name)
        self.glyph = data.get('glyph', key[:1] or '?')
        self.hp = data.get('hp', 1)
        self.max_hp = data.get('max_hp', self.hp)
        self.attack = data.get('attack', 0)
        self.defense = data.get('defense', 0)
        self.strength = data.get('strength', 10)
        self.intelligence = data.get('intelligence', 10)
        self.agility = data.get('agility', 10)
        self.wisdom = data.get('wisdom', 10)
        self.heal_rate = data.get('heal_rate', 0)
        # Item type keys the creature starts out carrying.
        self.inventory = list(data.get('inventory', []))


class ItemType:
    """An item template."""
    def __init__(self, key, data):
        self.key = key
        self.name = data.get('name', key)
        self.category = data.get('category', 'misc')
        self.glyph = data.get('glyph', CORPSE_GLYPH)
        self.equippable = data.get('equippable', False)
        self.broken = data.get('broken', False)
        self.durability_current = data.get('durability_current', 1)
        self.durability_maximum = data.get('durability_maximum', self.durability_current)
        self.purchase_price = data.get('purchase_price', 0)
        self.sell_price = data.get('sell_price', 0)
        self.weight = data.get('weight', 0)
        self.attack_bonus = data.get('attack_bonus', 0)
        self.defense_bonus = data.get('defense_bonus', 0)

    def create(self, row=0, col=0, area=None):
        """Instantiates a fresh Item from this template."""
        return Item(self.name, self.category, row, col, self.glyph, area,
                    equippable=self.equippable,
                    broken=self.broken,
                    durability_current=self.durability_current,
                    durability_maximum=self.durability_maximum,
                    purchase_price=self.purchase_price,
                    sell_price=self.sell_price,
                    weight=self.weight,
                    attack_bonus=self.attack_bonus,
                    defense_bonus=self.defense_bonus)


def load_json_file(file_path):
    try:
        with open(file_path, 'r') as f:
            return json.load(f)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        logger.error("Error loading or parsing %s: %s", file_path, e)
        return None


def build_table(data, template_class):
    """Turns a {key: {...}} mapping into a {key: template} table, skipping bad entries."""
    table = {}
    if not isinstance(data, dict):
        return table
    for key, entry in data.items():
        if not isinstance(entry, dict):
            logger.warning("Skipping malformed %s entry '%s'", template_class.__name__, key)
            continue
        table[key] = template_class(key, entry)
    return table


def load_creature_types(file_path):
    """Loads the Creature Type Table. A missing or broken file gives an empty table."""
    table = build_table(load_json_file(file_path), CreatureType)
    logger.info("Loaded %d creature types from %s", len(table), file_path)
    return table


def load_item_types(file_path):
    """Loads the Item Type Table. A missing or broken file gives an empty table."""
    table = build_table(load_json_file(file_path), ItemType)
    logger.info("Loaded %d item types from %s", len(table), file_path)
    return table
