from __future__ import annotations
import logging
from enum import Enum
from typing import Dict, Optional

import numpy as np
import pygame

logger = logging.getLogger(__name__)

SAMPLE_RATE = 44100
_FLOOR_GAIN = 0.01  # exponential ramps can't reach zero


class Cue(Enum):
    START = "start"
    TICK = "tick"
    TARGET_APPEAR = "target-appear"
    TARGET_ESCAPE = "target-escape"
    HIT = "hit"
    MISS = "miss"


def _sweep(wave: str, f0: float, f1: float, dur: float, gain: float,
           sample_rate: int, exponential: bool = True) -> np.ndarray:
    n = max(1, int(round(sample_rate * dur)))
    t = np.arange(n) / sample_rate
    if exponential:
        freq = f0 * (f1 / f0) ** (t / dur)
        env = gain * (_FLOOR_GAIN / gain) ** (t / dur)
    else:
        freq = f0 + (f1 - f0) * (t / dur)
        env = gain + (_FLOOR_GAIN - gain) * (t / dur)
    phase = 2 * np.pi * np.cumsum(freq) / sample_rate
    osc = np.sin(phase)
    if wave == "square":
        osc = np.sign(osc)
    return osc * env


def _noise(dur: float, gain: float, sample_rate: int, rng: np.random.Generator) -> np.ndarray:
    n = max(1, int(round(sample_rate * dur)))
    t = np.arange(n) / sample_rate
    env = gain * (_FLOOR_GAIN / gain) ** (t / dur)
    return rng.uniform(-1.0, 1.0, n) * env


def render_cue(cue: Cue, sample_rate: int = SAMPLE_RATE, seed: int = 0) -> np.ndarray:
    """Synthesize a mono float buffer in [-1, 1] for the given cue."""
    if cue is Cue.HIT:
        # square "thud" with a short noise crunch on top
        out = _sweep("square", 150, 40, 0.1, 0.3, sample_rate)
        crunch = _noise(0.05, 0.1, sample_rate, np.random.default_rng(seed))
        out[:len(crunch)] += crunch
    elif cue is Cue.MISS:
        out = _sweep("sine", 100, 50, 0.2, 0.2, sample_rate, exponential=False)
    elif cue is Cue.TARGET_APPEAR:
        out = _sweep("sine", 200, 600, 0.1, 0.1, sample_rate)
    elif cue is Cue.TARGET_ESCAPE:
        out = _sweep("sine", 400, 100, 0.15, 0.05, sample_rate)
    elif cue is Cue.START:
        out = _sweep("square", 300, 900, 0.25, 0.15, sample_rate)
    else:
        out = _sweep("sine", 880, 880, 0.05, 0.15, sample_rate)
    return np.clip(out, -1.0, 1.0)


class SilentCues:
    """Cue sink used when audio is muted or unavailable."""

    def play(self, cue: Cue) -> None:
        pass


class CuePlayer:
    """
    Fire-and-forget cue playback through pygame.mixer.
    Sounds are built on first use; any mixer failure is swallowed.
    """

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self._sounds: Dict[Cue, Optional[pygame.mixer.Sound]] = {}

    def _build(self, cue: Cue) -> Optional[pygame.mixer.Sound]:
        init = pygame.mixer.get_init()
        if not init:
            return None
        freq, _size, channels = init
        samples = (render_cue(cue, freq) * 32767).astype(np.int16)
        if channels > 1:
            samples = np.repeat(samples[:, None], channels, axis=1)
        return pygame.sndarray.make_sound(np.ascontiguousarray(samples))

    def play(self, cue: Cue) -> None:
        if not self.enabled:
            return
        try:
            if cue not in self._sounds:
                self._sounds[cue] = self._build(cue)
            sound = self._sounds[cue]
            if sound is not None:
                sound.play()
        except Exception as e:
            logger.debug("audio cue %s failed: %s", cue.value, e)
