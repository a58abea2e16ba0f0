from __future__ import annotations
import pygame
from typing import List, Tuple

from engine.api.config import EngineConfig
from engine.api.frame_data import Point


class PointerInput:
    """
    Collects taps for the current frame:
    - A left mouse press or a touch finger-down becomes one tap.
    - Touch coordinates arrive normalized and are scaled to the window.
    - Respects --mirror by converting window coords -> logical coords.
    """

    def __init__(self, cfg: EngineConfig):
        self.mirror = cfg.mirror
        self._taps: List[Point] = []

    def _to_logical(self, x: float, y: float, w: int, h: int) -> Tuple[float, float]:
        if self.mirror:
            x = (w - 1) - x
        return float(x), float(y)

    def handle_pygame_event(self, event: pygame.event.Event, screen_size: Tuple[int, int]) -> None:
        w, h = screen_size

        if event.type == pygame.MOUSEBUTTONDOWN:
            # SDL also synthesizes mouse events for touches; those carry touch=True
            if event.button == 1 and not getattr(event, "touch", False):
                self._taps.append(Point(*self._to_logical(*event.pos, w, h)))

        elif event.type == pygame.FINGERDOWN:
            self._taps.append(Point(*self._to_logical(event.x * w, event.y * h, w, h)))

    def drain(self) -> List[Point]:
        """Return and forget the taps gathered since the last call."""
        taps, self._taps = self._taps, []
        return taps
