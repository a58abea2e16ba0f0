import pygame
import pytest

from engine.api import EngineConfig, FrameData, Point
from engine.app.context import Context
from engine.app.loader import load_game_manifest
from engine.app.loop import step_frame
from engine.services.report import DEFAULT_MODEL
from games.crewmate_crunch.main import CrewmateCrunch, format_time
from games.crewmate_crunch.pool import Feedback
from games.crewmate_crunch.round import Status

from conftest import FakeReporter
from test_loader import GAMES_DIR

SIZE = (540, 900)


@pytest.fixture()
def game(scheduler, cues, store):
    ctx = Context(
        screen=None,
        clock=None,
        cfg=EngineConfig(screen_size=SIZE),
        scheduler=scheduler,
        cues=cues,
        store=store,
        screen_size=SIZE,
    )
    g = CrewmateCrunch()
    g.on_load(ctx, load_game_manifest(GAMES_DIR / "crewmate_crunch"))
    g.round.reporter.close()
    g.round.reporter = FakeReporter(auto_text="Red vented.")
    yield g
    g.on_unload()


def tap_at(game, x, y):
    game.on_update(16, FrameData(timestamp=0.0, taps=[Point(x, y)]))


def key(k):
    return pygame.event.Event(pygame.KEYDOWN, key=k)


def test_format_time():
    assert format_time(60) == "1:00"
    assert format_time(9) == "0:09"
    assert format_time(0) == "0:00"


def test_holes_are_laid_out_in_a_grid(game):
    assert len(game.hole_centers) == 9
    xs = sorted({x for x, _ in game.hole_centers})
    ys = sorted({y for _, y in game.hole_centers})
    assert len(xs) == 3 and len(ys) == 3
    for i, center in enumerate(game.hole_centers):
        assert game._hole_at(*center) == i
    assert game._hole_at(0, 0) is None


def test_start_button_and_abort_button(game, scheduler):
    tap_at(game, *game.primary_button.center)
    assert game.round.status == Status.COUNTING

    tap_at(game, *game.abort_button.center)
    assert game.round.status == Status.IDLE


def test_tapping_a_hole_routes_to_the_round(game, scheduler):
    game.on_event(key(pygame.K_SPACE))
    scheduler.advance(3000)
    assert game.round.status == Status.PLAYING

    tap_at(game, *game.hole_centers[4])
    assert game.round.pool[4].feedback == Feedback.MISS


def test_keyboard_controls(game, scheduler):
    game.on_event(key(pygame.K_RETURN))
    scheduler.advance(3000)
    game.on_event(key(pygame.K_3))
    assert game.round.pool[2].feedback == Feedback.MISS

    game.on_event(key(pygame.K_BACKSPACE))
    assert game.round.status == Status.IDLE


def test_report_is_picked_up_and_restart_works(game, scheduler):
    game.round.start()
    scheduler.advance(64_000)
    assert game.round.status == Status.ENDED

    game.on_update(16, FrameData(timestamp=0.0))
    assert game.round.report == "Red vented."

    tap_at(game, *game.primary_button.center)
    assert game.round.status == Status.COUNTING


@pytest.mark.parametrize("steps", [0, 1500, 5000, 64_000])
def test_every_screen_draws(game, scheduler, steps):
    pygame.font.init()
    surface = pygame.Surface(SIZE)
    if steps:
        game.round.start()
        scheduler.advance(steps)
    game.on_draw(surface)


def test_tap_lands_before_auto_hide_due_in_same_frame(game, scheduler):
    game.round.start()
    scheduler.advance(3000)
    game.round.spawner.visible_ms = lambda: 500
    hole = game.round.spawner.spawn()
    scheduler.advance(480)
    assert hole.active

    step_frame(game, scheduler, 33, FrameData(timestamp=0.0, taps=[Point(*game.hole_centers[hole.id])]))

    assert game.round.score == 1
    assert hole.feedback == Feedback.HIT
    assert scheduler.now_ms == 3513


def test_unknown_theme_is_rejected_on_load(scheduler, cues, store):
    ctx = Context(screen=None, clock=None, cfg=EngineConfig(screen_size=SIZE), scheduler=scheduler,
                  cues=cues, store=store, screen_size=SIZE)
    with pytest.raises(ValueError):
        CrewmateCrunch().on_load(ctx, {"options": {"theme": "pirates"}})


def test_manifest_report_model_matches_default():
    manifest = load_game_manifest(GAMES_DIR / "crewmate_crunch")
    assert manifest["options"]["report_model"] == DEFAULT_MODEL
