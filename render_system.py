# render_system.py
# Rendering system for the game

import pygame

from components import EQUIPMENT_SLOTS
from combat_systems import describe_condition
from core_systems import System

COLORS = {
    "BLACK": (0, 0, 0),
    "WHITE": (255, 255, 255),
    "GREY": (150, 150, 150),
    "DARK_GREY": (70, 70, 70),
    "WALL": (120, 110, 100),
    "RED": (200, 30, 30),
    "YELLOW": (255, 255, 0),
    "GREEN": (0, 255, 0),
    "PANEL": (20, 20, 20),
    "BORDER": (100, 100, 100),
}

# Glyph colours of the stock creatures, anything else is drawn white.
CREATURE_COLORS = {
    '@': COLORS["YELLOW"],
    'd': (190, 140, 80),
    'r': (160, 160, 160),
    'g': COLORS["GREEN"],
    's': (230, 230, 210),
}

MESSAGE_LINES = 5


def camera_origin(center_row, center_col, view_rows, view_cols, height, width):
    """
    Top-left (row, col) of a view_rows x view_cols window centred on the
    given cell, clamped so the window stays inside the area where possible.
    """
    top = center_row - view_rows // 2
    left = center_col - view_cols // 2
    top = max(0, min(top, height - view_rows))
    left = max(0, min(left, width - view_cols))
    return top, left


def item_color(item):
    if item.category == "corpse":
        return COLORS["RED"]
    return COLORS["YELLOW"]


class RenderSystem(System):
    """Handles all rendering logic."""
    def __init__(self, game_state, screen, font, tile_size):
        super().__init__(game_state)
        self.screen = screen
        self.font = font
        self.tile_size = tile_size
        self.inventory_width = 320
        self.status_width = 240
        self.line_height = tile_size + 4

    def update(self, *args, **kwargs):
        engine = kwargs.get('engine')
        show_inventory = kwargs.get('show_inventory', False)
        drop_mode = kwargs.get('drop_mode', False)
        self.screen.fill(COLORS["BLACK"])

        if engine is None or engine.area is None or engine.player is None:
            return

        self.draw_area(engine.area, engine.player)
        self.draw_messages()
        self.draw_status_info(engine.player)
        if show_inventory:
            self.draw_inventory(engine.player, drop_mode)

    def map_viewport(self):
        """Number of map rows and columns that fit beside the status panel and above the messages."""
        map_width = self.screen.get_width() - self.status_width
        map_height = self.screen.get_height() - MESSAGE_LINES * self.line_height
        return max(1, map_height // self.tile_size), max(1, map_width // self.tile_size)

    def draw_area(self, area, player):
        view_rows, view_cols = self.map_viewport()
        top, left = camera_origin(player.row, player.col, view_rows, view_cols, area.height, area.width)
        x_origin = self.status_width

        for row in range(top, min(top + view_rows, area.height)):
            for col in range(left, min(left + view_cols, area.width)):
                tile = area.tile_at(row, col)
                color = COLORS["WALL"] if tile.blocks_movement else COLORS["DARK_GREY"]
                self.draw_glyph(tile.glyph, color, x_origin, row - top, col - left)

        for item in area.items:
            if top <= item.row < top + view_rows and left <= item.col < left + view_cols:
                self.draw_glyph(item.glyph, item_color(item), x_origin, item.row - top, item.col - left)

        # Creatures are drawn last so they stand on top of items.
        for creature in area.creatures:
            if not creature.is_alive and not creature.is_player:
                continue
            if top <= creature.row < top + view_rows and left <= creature.col < left + view_cols:
                color = CREATURE_COLORS.get(creature.glyph, COLORS["WHITE"])
                if creature.is_player and not creature.is_alive:
                    color = COLORS["RED"]
                self.draw_glyph(creature.glyph, color, x_origin, creature.row - top, creature.col - left)

    def draw_glyph(self, glyph, color, x_origin, screen_row, screen_col):
        # Blank out whatever was drawn in this cell first.
        cell = pygame.Rect(x_origin + screen_col * self.tile_size, screen_row * self.tile_size,
                           self.tile_size, self.tile_size)
        pygame.draw.rect(self.screen, COLORS["BLACK"], cell)
        surface = self.font.render(glyph, True, color)
        self.screen.blit(surface, cell.topleft)

    def draw_messages(self):
        y_offset = self.screen.get_height() - 10
        for message in reversed(self.game_state.message_log[-MESSAGE_LINES:]):
            msg_surface = self.font.render(message, True, COLORS["WHITE"])
            msg_rect = msg_surface.get_rect(x=self.status_width + 10, bottom=y_offset)
            self.screen.blit(msg_surface, msg_rect)
            y_offset -= self.line_height

    def draw_status_info(self, player):
        """Draw player status information down the left side of the screen."""
        panel = pygame.Rect(0, 0, self.status_width, self.screen.get_height())
        pygame.draw.rect(self.screen, COLORS["PANEL"], panel)
        pygame.draw.rect(self.screen, COLORS["BORDER"], panel, 2)

        class_name = player.char_class.name if player.char_class else "Adventurer"
        lines = [
            (player.name, COLORS["WHITE"]),
            (class_name, COLORS["GREY"]),
            ("", None),
            (f"HP: {player.hp}/{player.max_hp}", COLORS["WHITE"]),
            (describe_condition(player.hp, player.max_hp).capitalize(), self.condition_color(player)),
            ("", None),
            (f"Str: {player.strength}", COLORS["WHITE"]),
            (f"Int: {player.intelligence}", COLORS["WHITE"]),
            (f"Agi: {player.agility}", COLORS["WHITE"]),
            (f"Wis: {player.wisdom}", COLORS["WHITE"]),
            ("", None),
            (f"Attack: {player.attack}", COLORS["WHITE"]),
            (f"Defence: {player.defense}", COLORS["WHITE"]),
        ]
        if self.game_state.is_over:
            lines.append(("", None))
            lines.append(("DEAD - press Esc", COLORS["RED"]))

        y_offset = 10
        for text, color in lines:
            if text:
                self.screen.blit(self.font.render(text, True, color), (10, y_offset))
            y_offset += self.line_height

    def condition_color(self, creature):
        ratio = creature.hp / creature.max_hp if creature.max_hp > 0 else 0
        if ratio > 0.5:
            return COLORS["GREEN"]
        if ratio > 0.25:
            return COLORS["YELLOW"]
        return COLORS["RED"]

    def draw_inventory(self, player, drop_mode=False):
        inventory_x = self.screen.get_width() - self.inventory_width
        inventory_rect = pygame.Rect(inventory_x, 0, self.inventory_width, self.screen.get_height())

        # Draw semi-transparent background
        bg_surface = pygame.Surface((self.inventory_width, self.screen.get_height()))
        bg_surface.set_alpha(230)
        bg_surface.fill(COLORS["PANEL"])
        self.screen.blit(bg_surface, (inventory_x, 0))
        pygame.draw.rect(self.screen, COLORS["BORDER"], inventory_rect, 2)

        title = "DROP WHICH?" if drop_mode else "INVENTORY"
        title_surface = self.font.render(title, True, COLORS["WHITE"])
        title_rect = title_surface.get_rect(centerx=inventory_x + self.inventory_width // 2, y=20)
        self.screen.blit(title_surface, title_rect)
        pygame.draw.line(self.screen, COLORS["BORDER"],
                         (inventory_x + 10, 50),
                         (inventory_x + self.inventory_width - 10, 50), 2)

        y_offset = 70
        if not player.inventory:
            empty_surface = self.font.render("(empty)", True, COLORS["GREY"])
            empty_rect = empty_surface.get_rect(centerx=inventory_x + self.inventory_width // 2, y=y_offset)
            self.screen.blit(empty_surface, empty_rect)
            y_offset += self.line_height
        else:
            for index, item in enumerate(player.inventory[:9]):
                text = f"{index + 1}. {item.name}"
                if item.broken:
                    text += " (broken)"
                if len(text) > 28:
                    text = text[:25] + "..."
                self.screen.blit(self.font.render(text, True, COLORS["WHITE"]), (inventory_x + 20, y_offset))
                y_offset += self.line_height

        y_offset += self.line_height
        self.screen.blit(self.font.render("EQUIPMENT", True, COLORS["WHITE"]), (inventory_x + 20, y_offset))
        y_offset += self.line_height
        for slot in EQUIPMENT_SLOTS:
            item = player.equipment.item_in(slot)
            label = slot.replace('_', ' ').title()
            text = f"{label}: {item.name if item is not None else '-'}"
            color = COLORS["WHITE"] if item is not None else COLORS["GREY"]
            self.screen.blit(self.font.render(text, True, color), (inventory_x + 20, y_offset))
            y_offset += self.line_height

        instructions = ["1-9 equip, Shift+1-6 unequip", "'d' then 1-9 drop", "Press 'I' to close"]
        y_offset = self.screen.get_height() - 20 - len(instructions) * self.line_height
        for instruction in instructions:
            inst_surface = self.font.render(instruction, True, (200, 200, 200))
            inst_rect = inst_surface.get_rect(centerx=inventory_x + self.inventory_width // 2, y=y_offset)
            self.screen.blit(inst_surface, inst_rect)
            y_offset += self.line_height
