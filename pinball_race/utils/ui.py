import pygame
from pinball_race.settings import *

_fonts = {}


def get_font(size):
    if not pygame.font.get_init():
        pygame.font.init()
    font = _fonts.get(size)
    if font is None:
        font = pygame.font.Font(None, size)
        _fonts[size] = font
    return font


class OverlayRenderer:
    """Static finish-line labels and the fireworks layer.

    draw_static runs inside the physics renderer's after-render hook, so it
    always lands on top of the shapes of the same frame. draw_particles owns
    the transparent overlay surface and repaints it from scratch every call.
    """

    def __init__(self, surface, width=ARENA_WIDTH, finish_y=FINISH_Y):
        self.surface = surface
        self.width = width
        self.finish_y = finish_y
        self.band = pygame.Surface((width - 2 * FINISH_MARGIN, 16), pygame.SRCALPHA)
        self.band.fill(COLOR_FINISH_BAND + (FINISH_BAND_ALPHA,))

    def draw_static(self, target):
        target.blit(self.band, (FINISH_MARGIN, self.finish_y - 8))
        font = get_font(20)
        target.blit(font.render("START", True, COLOR_LABEL), (20, 12))
        label = font.render("FINISH", True, COLOR_LABEL)
        target.blit(label, (20, self.finish_y - 12 - label.get_height()))

    def draw_particles(self, particles):
        self.clear()
        for p in particles:
            color = p.color
            if color.a == 0:
                continue
            pygame.draw.circle(self.surface, color, (int(p.x), int(p.y)), PARTICLE_RADIUS)

    def clear(self):
        self.surface.fill((0, 0, 0, 0))


class Button:
    def __init__(self, rect, label, color, key=None):
        self.rect = pygame.Rect(rect)
        self.label = label
        self.color = color
        self.key = key

    def hit(self, pos):
        return self.rect.collidepoint(pos)

    def draw(self, surface):
        pygame.draw.rect(surface, self.color, self.rect, border_radius=10)
        text = get_font(26).render(self.label, True, (255, 255, 255))
        surface.blit(text, text.get_rect(center=self.rect.center))


def draw_swatch(surface, color, center, radius=6):
    pygame.draw.circle(surface, color, center, radius)


def draw_panel(surface, rect, title):
    pygame.draw.rect(surface, COLOR_SIDEBAR_BG, rect, border_radius=12)
    surface.blit(get_font(24).render(title, True, COLOR_TEXT), (rect[0] + 14, rect[1] + 12))


def draw_sidebar(surface, snapshot, buttons):
    """Draw Right Sidebar: controls, live ranking, tip."""
    x_offset = ARENA_WIDTH + 20
    width = SIDEBAR_WIDTH - 40
    y_offset = 20

    surface.fill(COLOR_BG, (ARENA_WIDTH, 0, SIDEBAR_WIDTH, SCREEN_HEIGHT))
    surface.blit(get_font(34).render("Pinball Race", True, COLOR_TEXT), (x_offset, y_offset))
    y_offset += 40

    # Controls
    draw_panel(surface, (x_offset, y_offset, width, 100), "Controls")
    for button in buttons:
        button.draw(surface)
    y_offset += 120

    # Live ranking
    draw_panel(surface, (x_offset, y_offset, width, 200), "Live ranking")
    row_y = y_offset + 44
    font_row = get_font(24)
    if not snapshot.ranking:
        surface.blit(get_font(20).render("No ball has crossed the finish yet.", True, COLOR_TEXT_DIM),
                     (x_offset + 14, row_y))
    for idx, entry in enumerate(snapshot.ranking):
        surface.blit(font_row.render(f"{idx + 1}.", True, COLOR_TEXT), (x_offset + 14, row_y))
        draw_swatch(surface, entry.color, (x_offset + 50, row_y + 8))
        surface.blit(font_row.render(entry.name, True, COLOR_TEXT), (x_offset + 64, row_y))
        row_y += 28
    y_offset += 220

    # Tip
    draw_panel(surface, (x_offset, y_offset, width, 110), "Tip")
    font_tip = get_font(18)
    tip = [
        "Obstacles live in models/arena.py.",
        "Tune restitution, friction and",
        "gravity in settings.py.",
    ]
    for i, line in enumerate(tip):
        surface.blit(font_tip.render(line, True, COLOR_TEXT_DIM), (x_offset + 14, y_offset + 42 + i * 20))
