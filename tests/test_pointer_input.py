import pygame

from engine.api import EngineConfig, Point
from engine.input.pointer_input import PointerInput

SIZE = (400, 300)


def press(button=1, pos=(10, 20), **extra):
    return pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=button, pos=pos, **extra)


def test_left_click_becomes_tap():
    layer = PointerInput(EngineConfig(screen_size=SIZE))
    layer.handle_pygame_event(press(), SIZE)
    layer.handle_pygame_event(press(button=3), SIZE)
    assert layer.drain() == [Point(10.0, 20.0)]
    assert layer.drain() == []


def test_mirror_flips_x():
    layer = PointerInput(EngineConfig(screen_size=SIZE, mirror=True))
    layer.handle_pygame_event(press(pos=(0, 5)), SIZE)
    assert layer.drain() == [Point(399.0, 5.0)]


def test_finger_down_scales_normalized_coords():
    layer = PointerInput(EngineConfig(screen_size=SIZE))
    layer.handle_pygame_event(
        pygame.event.Event(pygame.FINGERDOWN, x=0.5, y=0.25, touch_id=0, finger_id=0), SIZE)
    assert layer.drain() == [Point(200.0, 75.0)]


def test_touch_emulated_mouse_press_is_not_double_counted():
    layer = PointerInput(EngineConfig(screen_size=SIZE))
    layer.handle_pygame_event(press(touch=True), SIZE)
    assert layer.drain() == []


def test_other_events_ignored():
    layer = PointerInput(EngineConfig(screen_size=SIZE))
    layer.handle_pygame_event(pygame.event.Event(pygame.MOUSEMOTION, pos=(1, 1), rel=(0, 0), buttons=(0, 0, 0)), SIZE)
    layer.handle_pygame_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_a), SIZE)
    assert layer.drain() == []
