"""
LCD Pen - pygame emulator of the 16x2 keypad shield.

Arrow keys stand in for the four direction buttons and Enter for select.
Buttons act on release, like the real keypad loop.
"""
from __future__ import annotations

import sys

import pygame

from monster_pen import Button, Engine, MonotonicClock, PenConfig, Species
from monster_pen.config import LCD_HEIGHT, LCD_WIDTH

TITLE = "Monster Pen - 16x2 LCD"
FPS = 30

CELL_W = 28
CELL_H = 44
MARGIN = 24
WIDTH = LCD_WIDTH * CELL_W + MARGIN * 2
HEIGHT = LCD_HEIGHT * CELL_H + MARGIN * 2 + 24

BG_COLOR = (18, 22, 30)
PANEL_COLOR = (40, 90, 200)
CELL_COLOR = (55, 110, 225)
TEXT_COLOR = (235, 240, 255)
HUD_COLOR = (200, 200, 220)

KEYMAP = {
    pygame.K_RIGHT: Button.RIGHT,
    pygame.K_UP: Button.UP,
    pygame.K_DOWN: Button.DOWN,
    pygame.K_LEFT: Button.LEFT,
    pygame.K_RETURN: Button.SELECT,
}


def read_keypad() -> Button:
    """First held key in keypad order, like the resistor ladder reports."""
    pressed = pygame.key.get_pressed()
    for key, button in KEYMAP.items():
        if pressed[key]:
            return button
    return Button.NONE


def draw_lcd(screen: pygame.Surface, font: pygame.font.Font, rows: tuple[str, str]) -> None:
    panel = pygame.Rect(MARGIN // 2, MARGIN // 2, WIDTH - MARGIN, LCD_HEIGHT * CELL_H + MARGIN)
    pygame.draw.rect(screen, PANEL_COLOR, panel, border_radius=6)
    for row, line in enumerate(rows):
        for col, ch in enumerate(line):
            x = MARGIN + col * CELL_W
            y = MARGIN + row * CELL_H
            pygame.draw.rect(screen, CELL_COLOR, (x + 1, y + 1, CELL_W - 2, CELL_H - 2))
            if ch != " ":
                surf = font.render(ch, True, TEXT_COLOR)
                screen.blit(surf, surf.get_rect(center=(x + CELL_W // 2, y + CELL_H // 2)))


def build_engine(seed: int = 42) -> Engine:
    engine = Engine(config=PenConfig(), clock=MonotonicClock(), seed=seed)
    engine.spawn(Species.FUZZBALL, 2)
    engine.spawn(Species.DRAGON, 6)
    engine.spawn(Species.SLIME, 10)
    return engine


def main() -> None:
    pygame.init()
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    pygame.display.set_caption(TITLE)
    pg_clock = pygame.time.Clock()
    font = pygame.font.SysFont("monospace", 30, bold=True)
    hud_font = pygame.font.SysFont("monospace", 13)

    engine = build_engine()
    running = True

    while running:
        pg_clock.tick(FPS)
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_r:
                    engine = build_engine()

        engine.poll(read_keypad())

        screen.fill(BG_COLOR)
        draw_lcd(screen, font, engine.frame())
        hud = (
            f"Monsters: {len(engine.state.registry)}   "
            "Arrows=Move/Mode  Enter=Treat  R=Reset  Esc=Quit"
        )
        screen.blit(hud_font.render(hud, True, HUD_COLOR), (MARGIN // 2, HEIGHT - 22))
        pygame.display.flip()

    pygame.quit()
    sys.exit()


if __name__ == "__main__":
    main()
