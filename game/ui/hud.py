"""
Heads-up display: the status line on row 0 and an optional perf overlay.
"""
import pygame

from config import COLOR_COIN, COLOR_STATUS_BG, COLOR_WHITE
from game.graphics.font_cache import cache_size, get_font
from game.systems import perf_stats


class HUD:
    """Displays game information to the player."""

    def __init__(self, screen_width: int, cell_size: int):
        self.screen_width = screen_width
        self.status_height = cell_size
        self.font_status = get_font(max(12, int(cell_size * 1.0)))
        self.font_small = get_font(16)

        # Perf overlay (F2). Pathfinding counters are sampled ~1x/sec.
        self.show_perf = False
        self._perf_last_ms = 0
        self._perf_lines: list[str] = []

    def toggle_perf(self):
        self.show_perf = not self.show_perf
        if self.show_perf:
            # Start a fresh one-second window; counters keep running while the overlay is hidden.
            perf_stats.reset_pathfinding()
            self._perf_last_ms = 0
            self._perf_lines = ["PF: sampling..."]

    @staticmethod
    def status_text(game_state: dict) -> str:
        """Status line text: coins left, score, level k/n."""
        return "Coins: {coins} Score: {score} Level: {level}/{num_levels}".format(
            coins=game_state.get("coins", 0),
            score=game_state.get("score", 0),
            level=game_state.get("level", 1),
            num_levels=game_state.get("num_levels", 1),
        )

    def render(self, surface: pygame.Surface, game_state: dict, *, fps: float = 0.0, now_ms: int = 0):
        """Render the HUD."""
        pygame.draw.rect(surface, COLOR_STATUS_BG, (0, 0, self.screen_width, self.status_height))
        text = self.font_status.render(self.status_text(game_state), True, COLOR_WHITE)
        surface.blit(text, (4, (self.status_height - text.get_height()) // 2))

        if not game_state.get("door_locked", True):
            hint = self.font_small.render("Door open!", True, COLOR_COIN)
            surface.blit(hint, (self.screen_width - hint.get_width() - 6, (self.status_height - hint.get_height()) // 2))

        if self.show_perf:
            self.render_perf_overlay(surface, fps=fps, now_ms=now_ms)

    def render_perf_overlay(self, surface: pygame.Surface, *, fps: float, now_ms: int):
        if self._perf_last_ms == 0:
            self._perf_last_ms = now_ms

        if not self._perf_lines or now_ms - self._perf_last_ms >= 1000:
            self._perf_last_ms = now_ms
            pf = perf_stats.pathfinding
            self._perf_lines = [
                f"FPS: {fps:0.1f}",
                f"PF calls/s: {pf.calls}  fails/s: {pf.failures}",
                f"PF ms/s: {pf.total_ms:0.1f}  avg: {pf.avg_ms:0.2f}  worst: {pf.worst_ms:0.2f}",
                f"PF nodes expanded/s: {pf.expansions}  glyphs cached: {cache_size()}",
            ]
            perf_stats.reset_pathfinding()

        pad = 6
        rendered = [self.font_small.render(line, True, COLOR_WHITE) for line in self._perf_lines]
        w = max(s.get_width() for s in rendered)
        h = sum(s.get_height() for s in rendered)
        panel = pygame.Surface((w + pad * 2, h + pad * 2), pygame.SRCALPHA)
        panel.fill((0, 0, 0, 160))
        yy = pad
        for s in rendered:
            panel.blit(s, (pad, yy))
            yy += s.get_height()
        surface.blit(panel, (6, self.status_height + 6))
