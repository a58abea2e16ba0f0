import pygame
from typing import Tuple


def draw_text(surface: pygame.Surface, text: str, pos: Tuple[int, int], color=(230, 230, 230), size=24):
    font = pygame.font.SysFont(None, size)
    surface.blit(font.render(text, True, color), pos)


def draw_text_centered(surface: pygame.Surface, text: str, center: Tuple[int, int], color=(230, 230, 230), size=24):
    font = pygame.font.SysFont(None, size)
    img = font.render(text, True, color)
    surface.blit(img, img.get_rect(center=center))


def draw_wrapped_text(surface: pygame.Surface, text: str, rect: pygame.Rect, color=(230, 230, 230), size=22):
    """Greedy word wrap inside rect; lines past the bottom are dropped."""
    font = pygame.font.SysFont(None, size)
    y = rect.top
    line = ""
    for word in text.split():
        trial = f"{line} {word}".strip()
        if font.size(trial)[0] <= rect.width or not line:
            line = trial
            continue
        surface.blit(font.render(line, True, color), (rect.left, y))
        y += font.get_linesize()
        line = word
        if y + font.get_linesize() > rect.bottom:
            return
    if line:
        surface.blit(font.render(line, True, color), (rect.left, y))


def draw_figure(surface: pygame.Surface, color, center: Tuple[int, int], r: int):
    """Bean-shaped body with a visor, sized to fit a hole of radius r."""
    cx, cy = center
    body = pygame.Rect(cx - int(r * 0.55), cy - int(r * 0.7), int(r * 1.1), int(r * 1.4))
    pack = pygame.Rect(body.left - int(r * 0.25), cy - int(r * 0.3), int(r * 0.35), int(r * 0.7))
    pygame.draw.rect(surface, color, pack, border_radius=int(r * 0.12))
    pygame.draw.rect(surface, color, body, border_radius=int(r * 0.5))
    visor = pygame.Rect(cx - int(r * 0.1), cy - int(r * 0.45), int(r * 0.6), int(r * 0.35))
    pygame.draw.ellipse(surface, (150, 200, 230), visor)
