from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

from engine.app.timers import Scheduler, TimerHandle

logger = logging.getLogger(__name__)


class Feedback(Enum):
    HIT = "hit"
    MISS = "miss"


@dataclass
class Hole:
    id: int
    active: bool = False
    variant: Optional[Tuple[int, int, int]] = None
    feedback: Optional[Feedback] = None
    # bumped on every activation; deferred hides compare against it
    serial: int = 0


class TargetPool:
    """
    Fixed set of holes addressed by index. Feedback tags clear themselves
    clear_delay_ms after being set; setting a new tag restarts that hole's timer.
    """

    def __init__(self, size: int, scheduler: Scheduler, clear_delay_ms: float):
        self.holes: List[Hole] = [Hole(id=i) for i in range(size)]
        self.scheduler = scheduler
        self.clear_delay_ms = clear_delay_ms
        self._clear_timers: Dict[int, TimerHandle] = {}

    def __len__(self) -> int:
        return len(self.holes)

    def __getitem__(self, hole_id: int) -> Hole:
        return self.holes[hole_id]

    def inactive(self) -> List[Hole]:
        return [h for h in self.holes if not h.active]

    def activate(self, hole_id: int, variant) -> Hole:
        hole = self.holes[hole_id]
        hole.active = True
        hole.variant = variant
        hole.feedback = None
        hole.serial += 1
        return hole

    def deactivate(self, hole_id: int) -> None:
        self.holes[hole_id].active = False

    def flag(self, hole_id: int, feedback: Feedback) -> None:
        self.holes[hole_id].feedback = feedback
        previous = self._clear_timers.pop(hole_id, None)
        if previous is not None:
            previous.cancel()
        self._clear_timers[hole_id] = self.scheduler.call_later(
            self.clear_delay_ms, lambda: self._clear(hole_id))

    def _clear(self, hole_id: int) -> None:
        self._clear_timers.pop(hole_id, None)
        self.holes[hole_id].feedback = None

    def retract(self) -> None:
        """Hide every target; feedback tags run out on their own."""
        for hole in self.holes:
            hole.active = False

    def reset(self) -> None:
        for handle in self._clear_timers.values():
            handle.cancel()
        self._clear_timers.clear()
        for hole in self.holes:
            hole.active = False
            hole.feedback = None
