from __future__ import annotations
from dataclasses import dataclass, field
from typing import List


@dataclass
class Point:
    x: float
    y: float


@dataclass
class FrameData:
    timestamp: float
    # pointer/touch presses since the previous frame, in logical screen coords
    taps: List[Point] = field(default_factory=list)
