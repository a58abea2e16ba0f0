from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple

import pygame

from engine.api.config import EngineConfig
from engine.app.timers import Scheduler
from engine.audio.cues import CuePlayer, SilentCues
from engine.storage.score_store import ScoreStore


@dataclass
class Context:
    screen: pygame.Surface
    clock: pygame.time.Clock
    cfg: EngineConfig
    # engine services shared with the game
    scheduler: Scheduler
    cues: CuePlayer | SilentCues
    store: ScoreStore
    screen_size: Tuple[int, int]
