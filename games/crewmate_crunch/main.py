from __future__ import annotations
import pygame
from typing import Optional

from engine.api import Game, FrameData
from engine.app.context import Context
from engine.render.shapes import draw_text, draw_text_centered, draw_wrapped_text, draw_figure
from engine.services.report import DEFAULT_MODEL, PENDING_REPORT, ReportService

from games.crewmate_crunch.const import *
from games.crewmate_crunch.pool import Feedback
from games.crewmate_crunch.round import Round, Status
from games.crewmate_crunch.tuning import RoundConfig

_NUMBER_KEYS = {getattr(pygame, f"K_{i}"): i - 1 for i in range(1, 10)}


def format_time(seconds: int) -> str:
    return f"{seconds // 60}:{seconds % 60:02d}"


class CrewmateCrunch(Game):
    def on_load(self, ctx: Context, manifest):
        self.ctx = ctx
        self.manifest = manifest
        options = manifest.get("options", {})

        # from_options rejects unknown themes
        config = RoundConfig.from_options(options)
        self.theme = THEMES[options.get("theme", DEFAULT_THEME)]
        reporter = ReportService(model=options.get("report_model", DEFAULT_MODEL))
        self.round = Round(config, ctx.scheduler, ctx.store, reporter, ctx.cues)

        self.w, self.h = ctx.screen_size
        self._layout_holes(config.hole_count)
        self.primary_button = pygame.Rect(
            (self.w - BUTTON_W) // 2, self.h - FOOTER_HEIGHT - BUTTON_H, BUTTON_W, BUTTON_H)
        self.abort_button = pygame.Rect(
            (self.w - BUTTON_W // 2) // 2, self.h - FOOTER_HEIGHT // 2 - 22, BUTTON_W // 2, 44)

    # ------------- helpers -------------
    def _layout_holes(self, count: int):
        cols = min(GRID_COLUMNS, count)
        rows = (count + cols - 1) // cols
        avail_w = self.w - 2 * EDGE_MARGIN
        avail_h = self.h - HUD_HEIGHT - FOOTER_HEIGHT - 2 * EDGE_MARGIN
        cell = min(avail_w // cols, avail_h // rows)
        top = HUD_HEIGHT + EDGE_MARGIN + (avail_h - cell * rows) // 2
        left = (self.w - cell * cols) // 2
        self.hole_radius = int(cell * 0.42)
        self.hole_centers = [
            (left + (i % cols) * cell + cell // 2, top + (i // cols) * cell + cell // 2)
            for i in range(count)
        ]

    def _hole_at(self, x: float, y: float) -> Optional[int]:
        r2 = self.hole_radius * self.hole_radius
        for i, (cx, cy) in enumerate(self.hole_centers):
            dx = x - cx
            dy = y - cy
            if dx * dx + dy * dy <= r2:
                return i
        return None

    def _primary_action(self):
        if self.round.status == Status.ENDED:
            self.round.restart()
        else:
            self.round.start()

    # ------------- loop hooks -------------
    def on_update(self, dt_ms: float, frame: FrameData) -> None:
        self.round.poll_report()
        status = self.round.status

        for p in frame.taps:
            if status in (Status.IDLE, Status.ENDED):
                if self.primary_button.collidepoint(p.x, p.y):
                    self._primary_action()
                    return
            else:
                if self.abort_button.collidepoint(p.x, p.y):
                    self.round.abort()
                    return
                hole_id = self._hole_at(p.x, p.y)
                if hole_id is not None:
                    self.round.tap(hole_id)

    def on_event(self, event: pygame.event.Event) -> None:
        if event.type != pygame.KEYDOWN:
            return
        if event.key in (pygame.K_SPACE, pygame.K_RETURN):
            if self.round.status in (Status.IDLE, Status.ENDED):
                self._primary_action()
        elif event.key == pygame.K_BACKSPACE:
            self.round.abort()
        elif event.key in _NUMBER_KEYS:
            self.round.tap(_NUMBER_KEYS[event.key])

    def on_draw(self, surface: pygame.Surface) -> None:
        self._draw_hud(surface)
        status = self.round.status

        if status == Status.IDLE:
            self._draw_title(surface)
            return

        self._draw_grid(surface, dimmed=status == Status.COUNTING)

        if status == Status.COUNTING:
            draw_text_centered(surface, str(self.round.countdown),
                               (self.w // 2, self.h // 2), self.theme["accent"], size=220)
        if status in (Status.COUNTING, Status.PLAYING):
            msg = "Initializing secure link..." if status == Status.COUNTING else "Target found: Eject immediately!"
            draw_text_centered(surface, msg, (self.w // 2, self.h - FOOTER_HEIGHT + 14), MUTED_TEXT, size=22)
            pygame.draw.rect(surface, HOLE_BORDER, self.abort_button, width=2, border_radius=10)
            draw_text_centered(surface, "ABORT", self.abort_button.center, HUD_COLOR, size=26)
        elif status == Status.ENDED:
            self._draw_game_over(surface)

    def _draw_hud(self, surface: pygame.Surface) -> None:
        r = self.round
        draw_text(surface, "SCORE", (EDGE_MARGIN, 20), MUTED_TEXT, size=20)
        draw_text(surface, str(r.score), (EDGE_MARGIN, 42), self.theme["accent"], size=56)

        time_color = URGENT_COLOR if r.time_left < URGENT_DISPLAY_SEC else HUD_COLOR
        draw_text_centered(surface, "TIME", (self.w // 2, 28), MUTED_TEXT, size=20)
        draw_text_centered(surface, format_time(r.time_left), (self.w // 2, 66), time_color, size=56)

        draw_text(surface, "HIGH", (self.w - EDGE_MARGIN - 60, 20), MUTED_TEXT, size=20)
        draw_text(surface, str(r.high_score), (self.w - EDGE_MARGIN - 60, 42), HIGH_COLOR, size=56)

    def _draw_title(self, surface: pygame.Surface) -> None:
        cx, cy = self.w // 2, self.h // 2
        draw_figure(surface, self.theme["variants"][0], (cx, cy - 170), 70)
        top, bottom = self.theme["title"]
        draw_text_centered(surface, top, (cx, cy - 50), HUD_COLOR, size=72)
        draw_text_centered(surface, bottom, (cx, cy + 5), self.theme["accent"], size=72)
        draw_wrapped_text(surface, self.theme["tagline"],
                          pygame.Rect(cx - 150, cy + 50, 300, 80), MUTED_TEXT, size=24)
        self._draw_button(surface, "START MISSION")

    def _draw_button(self, surface: pygame.Surface, label: str) -> None:
        pygame.draw.rect(surface, self.theme["accent"], self.primary_button, border_radius=16)
        draw_text_centered(surface, label, self.primary_button.center, (255, 255, 255), size=36)

    def _draw_grid(self, surface: pygame.Surface, dimmed: bool) -> None:
        for hole, center in zip(self.round.pool.holes, self.hole_centers):
            border = HOLE_BORDER
            if hole.feedback == Feedback.HIT:
                border = HIT_BORDER
            elif hole.feedback == Feedback.MISS:
                border = MISS_BORDER
            fill = tuple(c // 2 for c in HOLE_COLOR) if dimmed else HOLE_COLOR
            pygame.draw.circle(surface, fill, center, self.hole_radius)
            pygame.draw.circle(surface, border, center, self.hole_radius, width=4)
            if hole.active and hole.variant is not None:
                draw_figure(surface, hole.variant, center, int(self.hole_radius * 0.8))

    def _draw_game_over(self, surface: pygame.Surface) -> None:
        r = self.round
        panel = pygame.Rect(EDGE_MARGIN, HUD_HEIGHT + EDGE_MARGIN,
                            self.w - 2 * EDGE_MARGIN, self.h - HUD_HEIGHT - FOOTER_HEIGHT - BUTTON_H - 2 * EDGE_MARGIN)
        pygame.draw.rect(surface, PANEL_COLOR, panel, border_radius=24)
        pygame.draw.rect(surface, self.theme["accent"], panel, width=4, border_radius=24)

        cx = panel.centerx
        draw_text_centered(surface, "GAME OVER", (cx, panel.top + 50), HUD_COLOR, size=56)
        draw_text_centered(surface, "CREWMATES EJECTED", (cx, panel.top + 105), MUTED_TEXT, size=22)
        draw_text_centered(surface, str(r.score), (cx, panel.top + 160), HUD_COLOR, size=90)

        best = f"Personal best: {r.high_score}" + ("  NEW!" if r.is_new_high_score else "")
        draw_text_centered(surface, best, (cx, panel.top + 225),
                           HIGH_COLOR if r.is_new_high_score else HUD_COLOR, size=30)

        report = PENDING_REPORT if r.report_pending or r.report is None else f'"{r.report}"'
        box = pygame.Rect(panel.left + 24, panel.top + 260, panel.width - 48, panel.bottom - panel.top - 280)
        draw_wrapped_text(surface, report, box, REPORT_COLOR, size=26)
        self._draw_button(surface, "RESTART MISSION")

    def on_unload(self) -> None:
        self.round.shutdown()


def get_game():
    return CrewmateCrunch()
