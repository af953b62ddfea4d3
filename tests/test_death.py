import pickle

import pytest

from combat_systems import CombatSystem
from components import Item, Species, CORPSE_GLYPH
from core_systems import ActionSystem
from game_state import GAME_OVER


@pytest.fixture
def combat(game_state):
    return CombatSystem(game_state)


def test_empty_handed_monster_leaves_corpse(open_area, make_creature, combat):
    dog = make_creature(open_area, 3, 4)
    dog.hp = 0

    assert combat.handle_death(dog) is True
    assert dog not in open_area.creatures
    assert dog.area is None

    [corpse] = open_area.items
    assert corpse.name == "dog corpse"
    assert corpse.category == "corpse"
    assert corpse.glyph == CORPSE_GLYPH
    assert (corpse.row, corpse.col) == (3, 4)
    assert corpse.area is open_area


def test_carrying_monster_drops_inventory_instead(open_area, make_creature, combat):
    goblin = make_creature(open_area, 2, 2, name="goblin")
    dagger = Item("Dagger", "blade", glyph='|', equippable=True)
    coin = Item("Coin", "misc", glyph='$')
    goblin.inventory.extend([dagger, coin])

    combat.handle_death(goblin)

    assert goblin not in open_area.creatures
    assert goblin.inventory == []
    ground = open_area.items_at(2, 2)
    assert ground == [dagger, coin]
    assert all(item.glyph == CORPSE_GLYPH for item in ground)
    assert not any(item.category == "corpse" for item in open_area.items)


def test_equipped_items_are_dropped_too(open_area, make_creature, combat, game_state):
    skeleton = make_creature(open_area, 4, 1, name="skeleton", attack=9, defense=4)
    helm = Item("Helm", "helmet", equippable=True, defense_bonus=1)
    skeleton.inventory.append(helm)
    ActionSystem(game_state).equip(skeleton, helm)
    assert skeleton.inventory == []

    combat.handle_death(skeleton)

    assert open_area.items_at(4, 1) == [helm]
    assert skeleton.equipment.is_empty("head")
    assert skeleton.defense == 4


def test_only_the_dying_creature_is_removed(open_area, make_creature, combat):
    first = make_creature(open_area, 1, 1)
    second = make_creature(open_area, 1, 2)
    third = make_creature(open_area, 1, 3)

    combat.handle_death(second)
    assert open_area.creatures == [first, third]


def test_player_death_ends_the_game(open_area, make_creature, combat, game_state):
    player = make_creature(open_area, 1, 1, name="hero", species=Species.PLAYER)
    player.hp = -3

    assert combat.handle_death(player) is True
    assert game_state.game_state == GAME_OVER
    assert game_state.is_over
    assert player in open_area.creatures
    assert open_area.items == []
    assert game_state.message_log[-2:] == [
        "Death overcomes you...",
        "Banished from the realm of the living for all time.",
    ]


def test_monster_kills_player(open_area, make_creature, combat, game_state):
    player = make_creature(open_area, 1, 1, name="hero", species=Species.PLAYER, hp=3)
    dog = make_creature(open_area, 1, 2, attack=5)

    combat.attack(dog, player)
    assert game_state.is_over


def test_invalid_death_requests(open_area, make_creature, combat):
    assert combat.handle_death(None) is False

    dog = make_creature(open_area, 1, 1)
    combat.handle_death(dog)
    # Already gone from the area.
    assert combat.handle_death(dog) is False
    assert len(open_area.items) == 1


def test_dead_creature_can_be_pickled(open_area, make_creature, combat):
    dog = make_creature(open_area, 1, 1)
    combat.handle_death(dog)

    restored = pickle.loads(pickle.dumps(dog))
    assert restored.name == "dog"
    assert restored.area is None
