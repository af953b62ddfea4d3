# core_systems.py
# Core game systems: Movement and Action

import logging

from components import WALL_GLYPH, EQUIPMENT_SLOTS

logger = logging.getLogger(__name__)

# Largest displacement a single move request may carry.
MAX_MOVE_DELTA = 32767


class System:
    """A base class for systems. Systems contain logic that operates on the creatures and items of an area."""
    def __init__(self, game_state):
        self.game_state = game_state

    def update(self, *args, **kwargs):
        pass


class MovementSystem(System):
    """Processes movement requests, handling collisions, bump attacks and healing."""
    def __init__(self, game_state, combat_system):
        super().__init__(game_state)
        self.combat_system = combat_system

    def move(self, creature, d_row, d_col, game_state=None):
        """
        Attempts to move a creature by (d_row, d_col).

        Walking into a blocking tile aborts the move, walking into another
        live creature attacks it instead. Returns True if the creature spent
        its turn (moved or attacked), False if the move was rejected.
        """
        game_state = game_state or self.game_state

        if creature is None:
            logger.warning("move() --> null or invalid creature")
            return False

        area = creature.area
        if area is None:
            logger.warning("move() --> %s is not in any area", creature.name)
            return False

        if abs(d_row) > MAX_MOVE_DELTA or abs(d_col) > MAX_MOVE_DELTA:
            logger.warning("move() --> invalid displacement (%s, %s) for %s", d_row, d_col, creature.name)
            return False

        target_row = creature.row + d_row
        target_col = creature.col + d_col

        info = area.get_tile_info(target_row, target_col)
        if info is None:
            logger.warning("move() --> %s tried to leave the area at (%d, %d)",
                           creature.name, target_row, target_col)
            return False

        if info.blocks:
            if creature.is_player:
                if info.glyph == WALL_GLYPH:
                    game_state.add_message("The wall is solid and damp, and you cannot move past.")
                else:
                    game_state.add_message("Something here is blocking, and you cannot move past.")
            else:
                logger.debug("The %s attempted to move to location (%d, %d), but it was blocked.",
                             creature.name, target_row, target_col)
            return False

        # Bump to attack
        if info.creature is not None and info.creature is not creature:
            logger.debug("The %s is attacking %s at location (%d, %d).",
                         creature.name, info.creature.name, target_row, target_col)
            self.combat_system.attack(creature, info.creature, game_state)
            self.heal_tick(creature)
            return True

        creature.row = target_row
        creature.col = target_col
        logger.debug("The %s moved to location (%d, %d).", creature.name, target_row, target_col)

        if creature.is_player and info.items:
            if len(info.items) == 1:
                game_state.add_message("There is an item here.")
            else:
                game_state.add_message(f"There are {len(info.items)} items here.")

        self.heal_tick(creature)
        return True

    def heal_tick(self, creature):
        """Every heal_rate executed moves, a wounded creature regains 1 HP."""
        if creature.heal_rate <= 0:
            return
        creature.heal_counter += 1
        if creature.heal_counter < creature.heal_rate:
            return
        creature.heal_counter = 0
        if creature.is_alive and creature.hp < creature.max_hp:
            creature.hp += 1
            logger.debug("%s regenerates to %d/%d HP", creature.name, creature.hp, creature.max_hp)


class ActionSystem(System):
    """Processes item actions: picking up, equipping, unequipping and dropping."""

    def pickup(self, creature, index=0, game_state=None):
        """Picks up the index-th item lying under the creature."""
        game_state = game_state or self.game_state
        if creature is None or creature.area is None:
            logger.warning("pickup() --> invalid creature")
            return False

        area = creature.area
        items_here = area.items_at(creature.row, creature.col)
        if not items_here:
            if creature.is_player:
                game_state.add_message("There is nothing here to pick up.")
            return False
        if index < 0 or index >= len(items_here):
            logger.warning("pickup() --> no item %s at (%d, %d)", index, creature.row, creature.col)
            return False

        item = items_here[index]
        area.remove_item(item)
        creature.inventory.append(item)

        if creature.is_player:
            game_state.add_message(f"You pick up the {item.name}.")
        return True

    def equip(self, creature, item, game_state=None):
        """
        Moves an inventory item into its equipment slot and applies its
        bonuses. Whatever held the slot before goes back to the inventory.
        """
        game_state = game_state or self.game_state
        if creature is None or item is None:
            logger.warning("equip() --> invalid creature or item")
            return False

        if not any(carried is item for carried in creature.inventory):
            logger.warning("equip() --> %s does not carry %r", creature.name, item)
            return False

        slot = item.slot
        if not item.equippable or item.broken or slot is None:
            if creature.is_player:
                game_state.add_message(f"You cannot equip the {item.name}.")
            return False

        if not creature.equipment.is_empty(slot):
            self.unequip(creature, slot, game_state, quiet=True)

        remove_by_identity(creature.inventory, item)
        creature.equipment.put(slot, item)
        creature.attack += item.attack_bonus
        creature.defense += item.defense_bonus

        if creature.is_player:
            game_state.add_message(f"You equip the {item.name}.")
        return True

    def unequip(self, creature, slot, game_state=None, quiet=False):
        """Takes the item out of a slot, back into the inventory, removing its bonuses."""
        game_state = game_state or self.game_state
        if creature is None or slot not in EQUIPMENT_SLOTS:
            logger.warning("unequip() --> invalid creature or slot %r", slot)
            return False

        item = creature.equipment.take(slot)
        if item is None:
            return False

        creature.attack -= item.attack_bonus
        creature.defense -= item.defense_bonus
        creature.inventory.append(item)

        if creature.is_player and not quiet:
            game_state.add_message(f"You take off the {item.name}.")
        return True

    def drop(self, creature, item, game_state=None):
        """Drops a carried item, unequipping it first if need be, at the creature's feet."""
        game_state = game_state or self.game_state
        if creature is None or item is None or creature.area is None:
            logger.warning("drop() --> invalid creature or item")
            return False

        slot = creature.equipment.slot_of(item)
        if slot is not None:
            self.unequip(creature, slot, game_state, quiet=True)

        if not remove_by_identity(creature.inventory, item):
            logger.warning("drop() --> %s does not carry %r", creature.name, item)
            return False

        item.row = creature.row
        item.col = creature.col
        creature.area.add_item(item)

        if creature.is_player:
            game_state.add_message(f"You drop the {item.name}.")
        return True

    def unequip_all(self, creature):
        """Moves every equipped item back into the inventory."""
        for slot in EQUIPMENT_SLOTS:
            if not creature.equipment.is_empty(slot):
                self.unequip(creature, slot, quiet=True)


def remove_by_identity(items, item):
    for index, listed in enumerate(items):
        if listed is item:
            del items[index]
            return True
    return False
