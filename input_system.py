# input_system.py
# Translates pygame key presses into engine actions

import logging

import pygame

from components import EQUIPMENT_SLOTS

logger = logging.getLogger(__name__)

# (d_row, d_col) for every movement key: arrows, numpad and vi-keys.
MOVE_KEYS = {
    pygame.K_UP: (-1, 0),
    pygame.K_DOWN: (1, 0),
    pygame.K_LEFT: (0, -1),
    pygame.K_RIGHT: (0, 1),
    pygame.K_KP8: (-1, 0),
    pygame.K_KP2: (1, 0),
    pygame.K_KP4: (0, -1),
    pygame.K_KP6: (0, 1),
    pygame.K_KP7: (-1, -1),
    pygame.K_KP9: (-1, 1),
    pygame.K_KP1: (1, -1),
    pygame.K_KP3: (1, 1),
    pygame.K_k: (-1, 0),
    pygame.K_j: (1, 0),
    pygame.K_h: (0, -1),
    pygame.K_l: (0, 1),
    pygame.K_y: (-1, -1),
    pygame.K_u: (-1, 1),
    pygame.K_b: (1, -1),
    pygame.K_n: (1, 1),
}

DIGIT_KEYS = {getattr(pygame, f"K_{digit}"): digit for digit in range(1, 10)}

QUIT = 'quit'


class InputSystem:
    """
    Handles player input and turns it into engine calls.

    Holds the small amount of UI state the keys toggle: whether the
    inventory panel is open and whether a drop is pending.
    """
    def __init__(self, engine):
        self.engine = engine
        self.show_inventory = False
        self.drop_mode = False

    def handle_events(self, events):
        """Processes a batch of pygame events. Returns QUIT when the game should close."""
        for event in events:
            if event.type == pygame.QUIT:
                return QUIT
            if event.type == pygame.KEYDOWN:
                if self.handle_key(event.key, event.mod) == QUIT:
                    return QUIT
        return None

    def handle_key(self, key, mod=0):
        if key == pygame.K_ESCAPE:
            if self.drop_mode:
                self.drop_mode = False
            elif self.show_inventory:
                self.show_inventory = False
            else:
                return QUIT
            return None

        if key == pygame.K_i:
            self.show_inventory = not self.show_inventory
            self.drop_mode = False
            return None

        if not self.engine.is_running:
            return None

        if self.show_inventory:
            self.handle_inventory_key(key, mod)
            return None

        if key in MOVE_KEYS:
            d_row, d_col = MOVE_KEYS[key]
            self.engine.player_move(d_row, d_col)
        elif key == pygame.K_g:
            self.engine.player_pickup(0)
        return None

    def handle_inventory_key(self, key, mod=0):
        if key == pygame.K_d:
            self.drop_mode = True
            return

        digit = DIGIT_KEYS.get(key)
        if digit is None:
            return

        if self.drop_mode:
            self.engine.player_drop(digit - 1)
            self.drop_mode = False
        elif mod & pygame.KMOD_SHIFT:
            if digit <= len(EQUIPMENT_SLOTS):
                self.engine.player_unequip(EQUIPMENT_SLOTS[digit - 1])
        else:
            self.engine.player_equip(digit - 1)
