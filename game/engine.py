"""
Main game engine - owns the window and runs the fixed-delay tick loop.

One tick = one frame, strictly in order:
    poll input -> Simulation.step -> render -> wait tick_delay_ms
"""
from typing import Optional

import pygame

from config import CELL_SIZE, COLOR_BLACK, FPS, GAME_TITLE, STATUS_ROW, TICK_DELAY_MS
from game.controls import InputSampler, poll_keyboard
from game.graphics.font_cache import clear_caches
from game.graphics.grid_renderer import GlyphTable, GridRenderer
from game.sim.contracts import GameSummary, TickReport
from game.simulation import LEVEL_UNAVAILABLE, Simulation
from game.ui.hud import HUD


class GameEngine:
    """Main game engine class."""

    def __init__(
        self,
        simulation: Simulation,
        *,
        input_sampler: Optional[InputSampler] = None,
        tick_delay_ms: int = TICK_DELAY_MS,
        glyphs: Optional[GlyphTable] = None,
        cell_size: int = CELL_SIZE,
    ):
        pygame.init()
        pygame.font.init()

        self.sim = simulation
        self.input_sampler = input_sampler if input_sampler is not None else poll_keyboard
        self.tick_delay_ms = max(0, int(tick_delay_ms))

        self.renderer = GridRenderer(glyphs, cell_size=cell_size)
        width, height = self.renderer.surface_size(simulation.grid)
        self.screen = pygame.display.set_mode((width, height))
        pygame.display.set_caption(GAME_TITLE)
        self.clock = pygame.time.Clock()
        self.hud = HUD(width, self.renderer.cell_size)

        self.running = True
        self.quit_requested = False
        self.last_report: Optional[TickReport] = None

    def handle_events(self):
        """Window events only; movement keys are polled, not queued."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.quit_requested = True
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.quit_requested = True
                elif event.key == pygame.K_F2:
                    self.hud.toggle_perf()

    def get_game_state(self) -> dict:
        sim = self.sim
        return {
            "coins": sim.remaining_coins,
            "score": sim.score,
            "level": sim.level_index + 1,
            "num_levels": sim.num_levels,
            "door_locked": sim.door_locked or sim.door_index is None,
            "tick": sim.tick,
        }

    def update(self):
        report = self.sim.step(self.input_sampler())
        self.last_report = report

        if report.level_changed:
            print(f"[engine] entering level {report.level_index + 1}/{self.sim.num_levels}")
            self._resize_for(self.sim.grid)
        if report.game_over and report.game_over_reason == LEVEL_UNAVAILABLE:
            print(f"[levels] {self.sim.load_error}")
        return report

    def _resize_for(self, grid):
        size = self.renderer.surface_size(grid)
        if size != self.screen.get_size():
            self.screen = pygame.display.set_mode(size)
            self.hud = HUD(size[0], self.renderer.cell_size)

    def render(self):
        self.screen.fill(COLOR_BLACK)
        self.renderer.render(self.screen, self.sim.grid, self.sim.player.facing, skip_rows=STATUS_ROW + 1)
        self.hud.render(
            self.screen,
            self.get_game_state(),
            fps=float(self.clock.get_fps()),
            now_ms=pygame.time.get_ticks(),
        )
        pygame.display.flip()

    def run(self) -> GameSummary:
        """Main game loop. Returns the final summary for the score report."""
        self.render()
        while self.running:
            self.handle_events()
            if self.quit_requested:
                break

            self.update()
            self.render()
            if self.sim.is_over:
                self.running = False
                break

            # Fixed pacing (FPS is only a cap); no delta time reaches the simulation.
            self.clock.tick(FPS)
            if self.tick_delay_ms:
                pygame.time.wait(self.tick_delay_ms)

        summary = self.sim.summary()
        if summary.reason is None:
            summary.reason = "quit"
        clear_caches()
        pygame.quit()
        return summary
