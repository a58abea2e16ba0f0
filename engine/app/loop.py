from __future__ import annotations
import logging
import time
from pathlib import Path
import pygame

from engine.api.config import EngineConfig
from engine.api.frame_data import FrameData
from engine.app.context import Context
from engine.app.loader import load_game_manifest, load_game_module
from engine.app.timers import Scheduler
from engine.audio.cues import CuePlayer, SilentCues
from engine.input.pointer_input import PointerInput
from engine.storage.score_store import ScoreStore

logger = logging.getLogger(__name__)

GAMES_DIR = Path(__file__).resolve().parents[2] / "games"

# cap a single frame's advance so a stalled window doesn't fast-forward a round
MAX_FRAME_MS = 250


def _init_audio(mute: bool):
    if mute:
        return SilentCues()
    try:
        pygame.mixer.init(frequency=44100, size=-16, channels=1)
    except pygame.error as e:
        logger.warning("audio unavailable, continuing muted: %s", e)
        return SilentCues()
    return CuePlayer()


def step_frame(game, scheduler: Scheduler, dt_ms: float, frame: FrameData) -> None:
    """
    Taps gathered during the frame reach the game before the clock moves,
    the same as keyboard events, so they see the state the player saw.
    """
    game.on_update(dt_ms, frame)
    scheduler.advance(dt_ms)


def run_game(
    game_id: str,
    screen_size: tuple[int, int],
    fps: int = 60,
    mirror: bool = False,
    mute: bool = False,
    debug: bool = False,
):
    cfg = EngineConfig(
        screen_size=screen_size,
        fps=fps,
        mirror=mirror,
        mute=mute,
        debug=debug,
    )

    # load game before opening a window so bad folders fail fast
    game_root = GAMES_DIR / game_id
    manifest = load_game_manifest(game_root)
    module = load_game_module(game_root)
    game = module.get_game()

    pygame.init()
    pygame.display.set_caption(manifest.get("name", game_id))
    screen = pygame.display.set_mode(screen_size)
    clock = pygame.time.Clock()

    cues = _init_audio(mute)
    input_layer = PointerInput(cfg)
    scheduler = Scheduler()

    # Render target: draw to off-screen if mirroring, otherwise draw directly to screen
    render_surface = screen if not mirror else pygame.Surface(
        screen_size).convert()

    ctx = Context(
        screen=render_surface,
        clock=clock,
        cfg=cfg,
        scheduler=scheduler,
        cues=cues,
        store=ScoreStore(),
        screen_size=screen_size,
    )

    game.on_load(ctx, manifest)
    logger.info("running %s at %dx%d", game_id, *screen_size)

    running = True
    try:
        while running:
            dt = min(clock.tick(fps), MAX_FRAME_MS)
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False
                input_layer.handle_pygame_event(event, screen_size)
                game.on_event(event)

            frame_data = FrameData(timestamp=time.time(),
                                   taps=input_layer.drain())
            step_frame(game, scheduler, dt, frame_data)

            # ---- draw to render_surface ----
            render_surface.fill((11, 14, 20))
            game.on_draw(render_surface)
            if debug:
                pygame.draw.rect(render_surface, (220, 220, 220),
                                 (8, 8, screen_size[0] - 16, screen_size[1] - 16), 1)

            # ---- present to window ----
            if mirror:
                flipped = pygame.transform.flip(render_surface, True, False)
                screen.blit(flipped, (0, 0))

            pygame.display.flip()

    finally:
        game.on_unload()
        pygame.quit()
