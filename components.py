# components.py
# Defines the data model shared by every system: tiles, items and creatures.

import enum
import logging
import weakref

logger = logging.getLogger(__name__)

WALL_GLYPH = '#'
FLOOR_GLYPH = '.'
CORPSE_GLYPH = '%'

EQUIPMENT_SLOTS = ("head", "neck", "torso", "main_hand", "off_hand", "legs")

# Item categories and the equipment slot they occupy.
CATEGORY_SLOTS = {
    "helmet": "head",
    "necklace": "neck",
    "armour": "torso",
    "blade": "main_hand",
    "blunt": "main_hand",
    "shield": "off_hand",
    "pants": "legs",
}


class Tile:
    """A single terrain cell. Tiles are immutable once created."""
    __slots__ = ("glyph", "blocks_movement", "blocks_sight")

    def __init__(self, glyph, blocks_movement, blocks_sight):
        object.__setattr__(self, "glyph", glyph)
        object.__setattr__(self, "blocks_movement", blocks_movement)
        object.__setattr__(self, "blocks_sight", blocks_sight)

    def __setattr__(self, name, value):
        raise AttributeError(f"Tile is immutable, cannot set '{name}'")

    def __reduce__(self):
        return (Tile, (self.glyph, self.blocks_movement, self.blocks_sight))

    def __eq__(self, other):
        if not isinstance(other, Tile):
            return NotImplemented
        return (self.glyph, self.blocks_movement, self.blocks_sight) == \
            (other.glyph, other.blocks_movement, other.blocks_sight)

    def __hash__(self):
        return hash((self.glyph, self.blocks_movement, self.blocks_sight))

    def __repr__(self):
        return f"Tile({self.glyph!r}, {self.blocks_movement}, {self.blocks_sight})"


WALL_TILE = Tile(WALL_GLYPH, True, True)
FLOOR_TILE = Tile(FLOOR_GLYPH, False, False)


class Species(enum.Enum):
    """Who a creature is, as far as movement and messaging rules care."""
    PLAYER = "player"
    MONSTER = "monster"


class Item:
    """Something that lies on the ground or is carried by a creature."""
    def __init__(self, name, category, row=0, col=0, glyph=CORPSE_GLYPH, area=None,
                 equippable=False, broken=False, durability_current=1, durability_maximum=1,
                 purchase_price=0, sell_price=0, weight=0, attack_bonus=0, defense_bonus=0):
        self.name = name
        self.category = category
        self.row = row
        self.col = col
        self.glyph = glyph
        # The Area whose ground list holds this item, None while carried.
        self.area = area
        self.equippable = equippable
        self.broken = broken
        self.durability_current = durability_current
        self.durability_maximum = durability_maximum
        self.purchase_price = purchase_price
        self.sell_price = sell_price
        self.weight = weight
        self.attack_bonus = attack_bonus
        self.defense_bonus = defense_bonus

    @property
    def slot(self):
        """The equipment slot this item fits in, or None."""
        return CATEGORY_SLOTS.get(self.category)

    def adjust_durability(self, amount):
        """
        Wears the item down (negative amount) or repairs it (positive amount).

        Repairs are capped at the maximum durability. Once the current
        durability drops below 1 the item breaks.
        """
        if amount == 0:
            logger.debug("adjust_durability() called with 0 for [%s], nothing to do", self.name)
            return

        logger.debug("Item [%s] durability before adjustment: %d / %d",
                     self.name, self.durability_current, self.durability_maximum)
        self.durability_current += amount

        if self.durability_current > self.durability_maximum:
            self.durability_current = self.durability_maximum
            logger.debug("Item [%s] exceeded max durability and was capped", self.name)

        if self.durability_current < 1:
            self.break_item()

    def break_item(self):
        """Marks the item as broken, which also makes it unequippable."""
        self.equippable = False
        self.broken = True
        logger.debug("Item [%s] is now broken", self.name)

    def __repr__(self):
        return f"Item({self.name!r}, {self.category!r}, ({self.row}, {self.col}))"


class EquipmentComponent:
    """The six equipment slots of a creature. A slot is either empty or holds one item."""
    def __init__(self):
        self.slots = {slot: None for slot in EQUIPMENT_SLOTS}

    def is_empty(self, slot):
        return self.slots[slot] is None

    def item_in(self, slot):
        return self.slots[slot]

    def put(self, slot, item):
        """Places an item in a slot and returns whatever was there before."""
        previous = self.slots[slot]
        self.slots[slot] = item
        return previous

    def take(self, slot):
        """Empties a slot and returns the item that was in it."""
        item = self.slots[slot]
        self.slots[slot] = None
        return item

    def slot_of(self, item):
        for slot, equipped in self.slots.items():
            if equipped is item:
                return slot
        return None

    def equipped_items(self):
        return [item for item in self.slots.values() if item is not None]


class Creature:
    """The player character or a monster living in an Area."""
    def __init__(self, name, species, row, col, glyph, area=None, hp=1, max_hp=None,
                 attack=0, defense=0, kind=None, strength=10, intelligence=10, agility=10,
                 wisdom=10, heal_rate=0, inventory=None, char_class=None):
        self.name = name
        self.species = species
        self.kind = kind if kind is not None else name
        self.row = row
        self.col = col
        self.glyph = glyph
        self.hp = hp
        self.max_hp = max_hp if max_hp is not None else hp
        self.attack = attack
        self.defense = defense
        self.strength = strength
        self.intelligence = intelligence
        self.agility = agility
        self.wisdom = wisdom
        self.heal_rate = heal_rate
        self.heal_counter = 0
        self.inventory = inventory if inventory is not None else []
        self.equipment = EquipmentComponent()
        self.char_class = char_class
        self._area_ref = None
        self.area = area

    @property
    def area(self):
        """The Area this creature lives in. The creature never owns it."""
        if self._area_ref is None:
            return None
        return self._area_ref()

    @area.setter
    def area(self, value):
        self._area_ref = weakref.ref(value) if value is not None else None

    @property
    def position(self):
        return self.row, self.col

    @property
    def is_player(self):
        return self.species is Species.PLAYER

    @property
    def is_alive(self):
        return self.hp > 0

    def carried_items(self):
        """Everything the creature holds, equipped or not."""
        return self.inventory + self.equipment.equipped_items()

    def __getstate__(self):
        # The Area back-reference is never serialised with the creature.
        state = self.__dict__.copy()
        state["_area_ref"] = None
        return state

    def __repr__(self):
        return f"Creature({self.name!r}, {self.species.value}, ({self.row}, {self.col}), hp={self.hp}/{self.max_hp})"
