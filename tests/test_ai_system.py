import random

import pytest

from ai_system import AISystem, round_half_away, toss_coin
from combat_systems import CombatSystem
from components import Species
from core_systems import MovementSystem


@pytest.fixture
def ai(game_state):
    movement = MovementSystem(game_state, CombatSystem(game_state))
    return AISystem(game_state, movement)


def big_room(area_from_rows, size=20):
    rows = ["#" * size]
    rows += ["#" + "." * (size - 2) + "#" for _ in range(size - 2)]
    rows += ["#" * size]
    return area_from_rows(rows)


@pytest.mark.parametrize("value,expected", [
    (0.0, 0), (0.49, 0), (0.5, 1), (1.5, 2), (2.5, 3),
    (-0.49, 0), (-0.5, -1), (-1.5, -2), (-2.5, -3), (0.667, 1), (-0.333, 0),
])
def test_round_half_away(value, expected):
    assert round_half_away(value) == expected


def test_toss_coin_is_fair_ish():
    rng = random.Random(3)
    heads = sum(toss_coin(rng) for _ in range(2000))
    assert 850 < heads < 1150


def test_chaser_at_distance_three_steps_straight(area_from_rows, make_creature, ai, game_state):
    area = big_room(area_from_rows)
    player = make_creature(area, 4, 5, name="hero", species=Species.PLAYER)
    dog = make_creature(area, 1, 5)

    ai.update(player, game_state)
    assert dog.position == (2, 5)


@pytest.mark.parametrize("start,expected", [
    ((8, 8), (9, 9)),      # (2, 2) away, distance 2.83 rounds to 3
    ((7, 10), (8, 10)),    # (3, 0) away
    ((7, 9), (8, 9)),      # (3, 1) away, column step rounds to 0
    ((13, 12), (12, 11)),  # (-3, -2) away, distance 3.61 rounds to 4
    ((10, 4), (10, 5)),    # (0, 6) away, right on the perception radius
])
def test_chaser_steps_along_rounded_direction(area_from_rows, make_creature, ai, game_state, start, expected):
    area = big_room(area_from_rows)
    player = make_creature(area, 10, 10, name="hero", species=Species.PLAYER)
    dog = make_creature(area, *start)

    ai.update(player, game_state)
    assert dog.position == expected


def test_adjacent_chaser_attacks_player(area_from_rows, make_creature, ai, game_state):
    area = big_room(area_from_rows)
    player = make_creature(area, 5, 5, name="hero", species=Species.PLAYER, hp=30, defense=0)
    dog = make_creature(area, 5, 6, attack=5)

    ai.update(player, game_state)
    assert dog.position == (5, 6)
    assert player.hp == 25
    assert game_state.message_log[0] == "The dog hits you for 5 damage."


def test_far_creature_idles_on_heads(area_from_rows, make_creature, ai, game_state, scripted_rng):
    area = big_room(area_from_rows)
    player = make_creature(area, 1, 1, name="hero", species=Species.PLAYER)
    dog = make_creature(area, 15, 15)
    game_state.rng = scripted_rng(randoms=[0.2])

    ai.update(player, game_state)
    assert dog.position == (15, 15)


def test_far_creature_wanders_on_tails(area_from_rows, make_creature, ai, game_state, scripted_rng):
    area = big_room(area_from_rows)
    player = make_creature(area, 1, 1, name="hero", species=Species.PLAYER)
    dog = make_creature(area, 15, 15)
    game_state.rng = scripted_rng(randoms=[0.7], choices=[(1, -1)])

    ai.update(player, game_state)
    assert dog.position == (16, 14)


def test_wandering_stays_in_open_cells(area_from_rows, make_creature, ai, game_state):
    area = big_room(area_from_rows)
    player = make_creature(area, 1, 1, name="hero", species=Species.PLAYER)
    dog = make_creature(area, 15, 15)

    for _ in range(200):
        ai.update(player, game_state)
        assert not area.is_wall(dog.row, dog.col)


def test_player_and_dead_creatures_do_not_act(area_from_rows, make_creature, ai, game_state):
    area = big_room(area_from_rows)
    player = make_creature(area, 5, 5, name="hero", species=Species.PLAYER)
    corpse_to_be = make_creature(area, 5, 8)
    corpse_to_be.hp = 0

    ai.update(player, game_state)
    assert player.position == (5, 5)
    assert corpse_to_be.position == (5, 8)


def test_later_creatures_see_earlier_moves(area_from_rows, make_creature, ai, game_state):
    area = area_from_rows([
        "########",
        "#......#",
        "########",
    ])
    player = make_creature(area, 1, 1, name="hero", species=Species.PLAYER)
    first = make_creature(area, 1, 3)
    second = make_creature(area, 1, 4, name="rat", hp=8)

    ai.update(player, game_state)
    assert first.position == (1, 2)
    assert second.position == (1, 3)
    assert second.hp == 8


def test_list_order_decides_who_moves_first(area_from_rows, make_creature, ai, game_state):
    area = area_from_rows([
        "########",
        "#......#",
        "########",
    ])
    player = make_creature(area, 1, 1, name="hero", species=Species.PLAYER)
    back = make_creature(area, 1, 4, name="rat", hp=8)
    front = make_creature(area, 1, 3)

    ai.update(player, game_state)
    # The rat moved first and bit the dog in front of it.
    assert back.position == (1, 4)
    assert front.hp == 20 - 5
    assert front.position == (1, 2)


def test_creature_killed_mid_pass_is_skipped(area_from_rows, make_creature, ai, game_state):
    area = area_from_rows([
        "########",
        "#......#",
        "########",
    ])
    player = make_creature(area, 1, 1, name="hero", species=Species.PLAYER)
    killer = make_creature(area, 1, 4, name="goblin", attack=50)
    victim = make_creature(area, 1, 3, name="rat", hp=8, attack=99)

    ai.update(player, game_state)
    assert victim not in area.creatures
    assert player.hp == 20
    assert killer.position == (1, 4)
