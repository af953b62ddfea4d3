# factory.py
# Contains functions for procedurally placing creatures and items in an area.

import logging

from components import Creature, Item, Species, CORPSE_GLYPH

logger = logging.getLogger(__name__)

# A spawn spot is rejected once this many blocking tiles (the spot itself
# counting double) surround it.
CROWDED_SPAWN_SCORE = 2

CORPSE_PURCHASE_PRICE = 10
CORPSE_SELL_PRICE = 5
CORPSE_WEIGHT = 20000


def creature_target_count(area):
    """One creature for every 10x10 block of the area."""
    return max(0, (area.height // 10) * (area.width // 10))


def populate_area(area, game_state):
    """
    Populates an area with creatures. This only works once per area.

    Random coordinates are drawn until the target number of creatures has
    been placed. A coordinate is redrawn if it was already used, is a wall,
    or sits next to too many walls, so creatures start out in open spaces.

    Returns True if the area was populated, False if it already had been.
    """
    if area is None:
        logger.warning("populate_area() --> invalid input")
        return False

    if area.populated:
        logger.debug("populate_area() --> area already previously populated...")
        return False

    config = game_state.config
    rng = game_state.rng
    target = creature_target_count(area)

    if config.spawn_mode == "table":
        type_keys = list(game_state.creature_types.keys())
    else:
        type_keys = [config.default_species]

    if not game_state.creature_types:
        # Nothing to spawn from; the area stays empty.
        logger.info("populate_area() --> creature type table is empty, no creatures placed")
        area.populated = True
        return True

    used_coords = set()
    placed = 0
    attempts = 0
    max_attempts = target * config.placement_attempts_per_creature

    while placed < target:
        if attempts >= max_attempts:
            logger.warning("populate_area() --> gave up after %d attempts, placed %d of %d creatures",
                           attempts, placed, target)
            break
        attempts += 1

        row = rng.randrange(area.height)
        col = rng.randrange(area.width)

        # Never spawn two creatures on the same spot.
        if (row, col) in used_coords:
            continue

        # Never spawn inside a wall or another blocking tile.
        info = area.get_tile_info(row, col)
        if info.blocks or area.is_wall(row, col):
            continue

        # Keep spawns in wide open areas.
        if area.adjacent_walls(row, col) >= CROWDED_SPAWN_SCORE:
            continue

        type_key = rng.choice(type_keys) if len(type_keys) > 1 else type_keys[0]
        if spawn_creature(type_key, row, col, area, game_state) is None:
            # An unknown species can never succeed, stop instead of spinning.
            break

        used_coords.add((row, col))
        placed += 1

    area.populated = True
    logger.debug("populate_area() --> %d creatures populated into area successfully", placed)
    return True


def spawn_creature(type_key, row, col, area, game_state):
    """
    Spawns a creature of the given type at (row, col) in the area.

    Returns the new creature, or None if the input is invalid or the type
    is not in the Creature Type Table.
    """
    if not type_key or row < 0 or col < 0 or area is None or not area.in_bounds(row, col):
        logger.warning("spawn_creature() --> invalid input (%r, %r, %r)", type_key, row, col)
        return None

    template = game_state.creature_types.get(type_key)
    if template is None:
        logger.warning("spawn_creature() --> improper creature type given: %s", type_key)
        return None

    creature = Creature(template.name, Species.MONSTER, row, col, template.glyph,
                        hp=template.hp, max_hp=template.max_hp,
                        attack=template.attack, defense=template.defense,
                        kind=template.kind,
                        strength=template.strength, intelligence=template.intelligence,
                        agility=template.agility, wisdom=template.wisdom,
                        heal_rate=template.heal_rate)

    for item_key in template.inventory:
        item_type = game_state.item_types.get(item_key)
        if item_type is None:
            logger.warning("spawn_creature() --> %s carries unknown item '%s'", type_key, item_key)
            continue
        creature.inventory.append(item_type.create(row, col))

    area.add_creature(creature)
    return creature


def spawn_item(type_key, row, col, area, game_state):
    """Places a fresh item of the given type on the ground. Returns the item or None."""
    if not type_key or area is None or not area.in_bounds(row, col):
        logger.warning("spawn_item() --> invalid input (%r, %r, %r)", type_key, row, col)
        return None

    item_type = game_state.item_types.get(type_key)
    if item_type is None:
        logger.warning("spawn_item() --> improper item type given: %s", type_key)
        return None

    item = item_type.create(row, col)
    area.add_item(item)
    return item


def create_corpse(creature):
    """Builds the corpse item a creature leaves behind when it dies empty handed."""
    return Item(f"{creature.name} corpse", "corpse", creature.row, creature.col, CORPSE_GLYPH,
                equippable=False, broken=False,
                durability_current=1, durability_maximum=1,
                purchase_price=CORPSE_PURCHASE_PRICE, sell_price=CORPSE_SELL_PRICE,
                weight=CORPSE_WEIGHT, attack_bonus=0, defense_bonus=0)
