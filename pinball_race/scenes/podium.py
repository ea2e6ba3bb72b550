import pygame
from pinball_race.settings import *
from pinball_race.utils.ui import Button, get_font, draw_swatch


def ease_out(t):
    t = max(0.0, min(1.0, t))
    return 1 - (1 - t) ** 3


class PodiumView:
    """Podium overlay: fades in over the arena, steps grow in one after another."""

    def __init__(self):
        self.opened_at = None
        self.button = Button((ARENA_WIDTH // 2 - 80, ARENA_HEIGHT - 70, 160, 44),
                             "Play again", COLOR_PODIUM_BUTTON, key=pygame.K_r)

    @property
    def visible(self):
        return self.opened_at is not None

    def open(self, now_ms):
        if self.opened_at is None:
            self.opened_at = now_ms

    def close(self):
        self.opened_at = None

    def fade(self, now_ms):
        if self.opened_at is None:
            return 0.0
        return min(1.0, (now_ms - self.opened_at) / PODIUM_FADE_MS)

    def step_scale(self, index, now_ms):
        if self.opened_at is None:
            return 0.0
        elapsed = now_ms - self.opened_at - index * PODIUM_STEP_DELAY_MS
        return ease_out(elapsed / PODIUM_STEP_GROW_MS)

    def draw(self, surface, ranking, now_ms):
        if self.opened_at is None:
            return

        layer = pygame.Surface((ARENA_WIDTH, ARENA_HEIGHT), pygame.SRCALPHA)
        layer.fill(COLOR_BG + (PODIUM_BACKDROP_ALPHA,))

        title = get_font(48).render("Podium", True, COLOR_TEXT)
        layer.blit(title, title.get_rect(center=(ARENA_WIDTH // 2, 50)))

        # 1st, 2nd, 3rd left to right
        col_width = 180
        gap = 30
        left = (ARENA_WIDTH - (3 * col_width + 2 * gap)) // 2
        base_y = 340
        winners = ranking[:3]
        for i, (place, height) in enumerate(PODIUM_STEPS):
            winner = winners[place - 1] if place <= len(winners) else None
            color = winner.color if winner else COLOR_PODIUM_EMPTY
            label = winner.name if winner else "-"

            h = max(1, int(height * self.step_scale(i, now_ms)))
            x = left + i * (col_width + gap)
            rect = pygame.Rect(x, base_y - h, col_width, h)
            pygame.draw.rect(layer, COLOR_SIDEBAR_BG, rect, border_radius=16)

            stripe_w = int(col_width * (0.1 + 0.9 * self.step_scale(i, now_ms)))
            pygame.draw.rect(layer, color, (x, base_y - h, stripe_w, 10), border_radius=5)

            if h > 60:
                place_text = get_font(22).render(self._ordinal(place), True, COLOR_TEXT_DIM)
                layer.blit(place_text, place_text.get_rect(center=(rect.centerx, base_y - 44)))
                name_text = get_font(28).render(label, True, COLOR_TEXT)
                layer.blit(name_text, name_text.get_rect(center=(rect.centerx, base_y - 20)))

        # Everyone else
        others_y = base_y + 20
        pygame.draw.rect(layer, COLOR_SIDEBAR_BG, (left, others_y, 3 * col_width + 2 * gap, 120), border_radius=12)
        layer.blit(get_font(22).render("Other places", True, COLOR_TEXT_DIM), (left + 14, others_y + 10))
        row_y = others_y + 36
        for place, entry in enumerate(ranking[3:], start=4):
            layer.blit(get_font(22).render(f"{place}.", True, COLOR_TEXT), (left + 14, row_y))
            draw_swatch(layer, entry.color, (left + 46, row_y + 7))
            layer.blit(get_font(22).render(entry.name, True, COLOR_TEXT), (left + 60, row_y))
            row_y += 24

        self.button.draw(layer)

        layer.set_alpha(int(255 * self.fade(now_ms)))
        surface.blit(layer, (0, 0))

    @staticmethod
    def _ordinal(place):
        return {1: "1st", 2: "2nd", 3: "3rd"}.get(place, f"{place}th")
