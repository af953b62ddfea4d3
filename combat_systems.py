# combat_systems.py
# Melee combat and the death and loot handling that follows a kill

import logging

from components import CORPSE_GLYPH
from core_systems import System, ActionSystem
from factory import create_corpse

logger = logging.getLogger(__name__)


def describe_condition(hp, max_hp):
    """Condition word for a creature's health fraction."""
    if max_hp <= 0:
        return "severely injured"
    ratio = hp / max_hp
    if ratio >= 1.0:
        return "unscathed"
    if ratio > 0.5:
        return "slightly injured"
    if ratio > 0.25:
        return "injured"
    return "severely injured"


class CombatSystem(System):
    """Resolves bump attacks between creatures and what happens when one of them dies."""
    def __init__(self, game_state, action_system=None):
        super().__init__(game_state)
        self.action_system = action_system or ActionSystem(game_state)

    describe_condition = staticmethod(describe_condition)

    def attack(self, attacker, defender, game_state=None):
        """
        The attacker strikes the defender for attack minus defense damage
        (never negative). Returns the damage dealt.
        """
        game_state = game_state or self.game_state
        if attacker is None or defender is None:
            logger.warning("attack() --> invalid attacker or defender")
            return 0

        damage = max(0, attacker.attack - defender.defense)
        defender.hp -= damage
        logger.debug("The %s hits %s for %d damage (%d/%d HP left).",
                     attacker.name, defender.name, damage, defender.hp, defender.max_hp)

        if attacker.is_player:
            game_state.add_message(f"You hit the {defender.name} for {damage} damage.")
        elif defender.is_player:
            game_state.add_message(f"The {attacker.name} hits you for {damage} damage.")

        if defender.hp <= 0:
            if attacker.is_player:
                game_state.add_message(f"You have slain the {defender.name}.")
            self.handle_death(defender, game_state)
            return damage

        condition = describe_condition(defender.hp, defender.max_hp)
        if defender.is_player:
            game_state.add_message(f"You are {condition}.")
        elif attacker.is_player:
            game_state.add_message(f"The {defender.name} looks {condition}.")
        return damage

    def handle_death(self, creature, game_state=None):
        """
        Handles a creature's death.

        The player's death ends the game. A monster leaves the area and
        either drops everything it carried or, carrying nothing, leaves a
        corpse behind.
        """
        game_state = game_state or self.game_state
        if creature is None:
            logger.warning("handle_death() --> null or invalid creature")
            return False

        area = creature.area
        if area is None:
            logger.warning("handle_death() --> %s is not in any area", creature.name)
            return False

        if creature.is_player:
            logger.info("%s has died at (%d, %d)", creature.name, creature.row, creature.col)
            game_state.game_over()
            return True

        area.remove_creature(creature)

        if not creature.carried_items():
            corpse = create_corpse(creature)
            area.add_item(corpse)
            logger.debug("The %s left a corpse at (%d, %d)", creature.name, creature.row, creature.col)
        else:
            self.action_system.unequip_all(creature)
            for item in creature.inventory:
                item.row = creature.row
                item.col = creature.col
                item.glyph = CORPSE_GLYPH
                area.add_item(item)
            logger.debug("The %s dropped %d items at (%d, %d)",
                         creature.name, len(creature.inventory), creature.row, creature.col)
            creature.inventory = []

        creature.area = None
        return True
