import pygame
import pytest

from components import Item
from input_system import InputSystem, MOVE_KEYS, QUIT
from render_system import camera_origin, item_color, COLORS


class RecordingEngine:
    def __init__(self, running=True):
        self.is_running = running
        self.calls = []

    def player_move(self, d_row, d_col):
        self.calls.append(("move", d_row, d_col))

    def player_pickup(self, index):
        self.calls.append(("pickup", index))

    def player_equip(self, index):
        self.calls.append(("equip", index))

    def player_unequip(self, slot):
        self.calls.append(("unequip", slot))

    def player_drop(self, index):
        self.calls.append(("drop", index))


@pytest.mark.parametrize("key,expected", [
    (pygame.K_UP, (-1, 0)),
    (pygame.K_KP3, (1, 1)),
    (pygame.K_y, (-1, -1)),
    (pygame.K_l, (0, 1)),
])
def test_movement_keys(key, expected):
    engine = RecordingEngine()
    InputSystem(engine).handle_key(key)
    assert engine.calls == [("move",) + expected]


def test_all_eight_directions_are_bound():
    assert set(MOVE_KEYS.values()) == {(-1, -1), (-1, 0), (-1, 1), (0, -1),
                                       (0, 1), (1, -1), (1, 0), (1, 1)}


def test_pickup_key():
    engine = RecordingEngine()
    InputSystem(engine).handle_key(pygame.K_g)
    assert engine.calls == [("pickup", 0)]


def test_inventory_panel_keys():
    engine = RecordingEngine()
    inputs = InputSystem(engine)

    inputs.handle_key(pygame.K_i)
    assert inputs.show_inventory

    inputs.handle_key(pygame.K_2)
    inputs.handle_key(pygame.K_1, pygame.KMOD_LSHIFT)
    inputs.handle_key(pygame.K_d)
    assert inputs.drop_mode
    inputs.handle_key(pygame.K_3)
    inputs.handle_key(pygame.K_UP)

    assert engine.calls == [("equip", 1), ("unequip", "head"), ("drop", 2)]
    assert not inputs.drop_mode


def test_escape_closes_panels_then_quits():
    inputs = InputSystem(RecordingEngine())
    inputs.handle_key(pygame.K_i)
    inputs.handle_key(pygame.K_d)

    assert inputs.handle_key(pygame.K_ESCAPE) is None
    assert inputs.show_inventory and not inputs.drop_mode
    assert inputs.handle_key(pygame.K_ESCAPE) is None
    assert not inputs.show_inventory
    assert inputs.handle_key(pygame.K_ESCAPE) == QUIT


def test_keys_ignored_after_game_over():
    engine = RecordingEngine(running=False)
    InputSystem(engine).handle_key(pygame.K_DOWN)
    assert engine.calls == []


def test_camera_centres_on_player():
    assert camera_origin(100, 100, 21, 41, 240, 250) == (90, 80)


def test_camera_clamps_to_area_edges():
    assert camera_origin(2, 3, 21, 41, 240, 250) == (0, 0)
    assert camera_origin(239, 249, 21, 41, 240, 250) == (219, 209)
    # A view larger than the area sticks to the top-left corner.
    assert camera_origin(5, 5, 40, 60, 10, 10) == (0, 0)


def test_corpses_are_red():
    assert item_color(Item("dog corpse", "corpse")) == COLORS["RED"]
    assert item_color(Item("Dagger", "blade")) != COLORS["RED"]
