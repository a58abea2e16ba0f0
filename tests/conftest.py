"""Shared fixtures: a fresh scheduler and in-memory stand-ins for the round's collaborators."""

import os
import random
from concurrent.futures import Future

import pytest

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "hide")
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
# keep tests from ever reaching the real API
os.environ.setdefault("ANTHROPIC_API_KEY", "sk-ant-test-fake-key")

from engine.app.timers import Scheduler
from games.crewmate_crunch.round import Round
from games.crewmate_crunch.tuning import RoundConfig


class RecordingCues:
    def __init__(self):
        self.played = []

    def play(self, cue):
        self.played.append(cue)

    def count(self, cue):
        return self.played.count(cue)


class MemoryStore:
    def __init__(self, initial=None):
        self.data = dict(initial or {})
        self.writes = []

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.data[key] = value
        self.writes.append((key, value))


class FakeReporter:
    """Hands out futures the test resolves by hand (or immediately, with auto_text)."""

    def __init__(self, auto_text=None):
        self.auto_text = auto_text
        self.requests = []
        self.futures = []
        self.closed = False

    def request(self, score, is_new_high_score):
        self.requests.append((score, is_new_high_score))
        future = Future()
        if self.auto_text is not None:
            future.set_result(self.auto_text)
        self.futures.append(future)
        return future

    def close(self):
        self.closed = True


@pytest.fixture()
def scheduler():
    return Scheduler()


@pytest.fixture()
def cues():
    return RecordingCues()


@pytest.fixture()
def store():
    return MemoryStore()


@pytest.fixture()
def reporter():
    return FakeReporter()


@pytest.fixture()
def make_round(scheduler, cues, store, reporter):
    def _make(seed=7, **overrides):
        config = RoundConfig(**overrides)
        return Round(config, scheduler, store, reporter, cues, rng=random.Random(seed))
    return _make
