from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple


@dataclass
class EngineConfig:
    screen_size: Tuple[int, int]
    fps: int = 60
    mirror: bool = False
    mute: bool = False
    debug: bool = False
