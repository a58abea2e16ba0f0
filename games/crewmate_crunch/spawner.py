from __future__ import annotations
import logging
import random
from typing import Callable, Optional

from engine.app.timers import TimerScope
from engine.audio.cues import Cue

from games.crewmate_crunch.pool import Hole, TargetPool
from games.crewmate_crunch.tuning import RoundConfig

logger = logging.getLogger(__name__)


class SpawnEngine:
    """
    Pops targets into free holes on a self-rearming timer.

    Both the gap between attempts and each target's visible time come from
    the difficulty curves, evaluated against progress_fn() at the moment of
    use so the pace ramps up as the round runs.
    """

    def __init__(self, pool: TargetPool, config: RoundConfig, cues, rng: random.Random):
        self.pool = pool
        self.config = config
        self.cues = cues
        self.rng = rng
        self._scope: Optional[TimerScope] = None
        self._progress_fn: Callable[[], float] = lambda: 0.0

    def start(self, scope: TimerScope, progress_fn: Callable[[], float]) -> None:
        self._scope = scope
        self._progress_fn = progress_fn
        self._arm()

    def interval_ms(self) -> float:
        return self.config.spawn_interval.value(self._progress_fn())

    def visible_ms(self) -> float:
        return self.config.visible_duration.value(self._progress_fn(), self.rng.random())

    def _arm(self) -> None:
        if self._scope is None or self._scope.closed:
            return
        self._scope.call_later(self.interval_ms(), self._tick)

    def _tick(self) -> None:
        self.spawn()
        self._arm()

    def spawn(self) -> Optional[Hole]:
        if self._scope is None or self._scope.closed:
            return None
        free = self.pool.inactive()
        if not free:
            logger.debug("spawn skipped: every hole is occupied")
            return None

        hole = self.rng.choice(free)
        self.pool.activate(hole.id, self.rng.choice(self.config.variants))
        self.cues.play(Cue.TARGET_APPEAR)

        serial = hole.serial
        duration = self.visible_ms()
        self._scope.call_later(duration, lambda: self._auto_hide(hole.id, serial))
        logger.debug("spawned hole=%d for %.0fms", hole.id, duration)
        return hole

    def _auto_hide(self, hole_id: int, serial: int) -> None:
        hole = self.pool[hole_id]
        # already whacked, or this is a later appearance in the same hole
        if not hole.active or hole.serial != serial:
            return
        self.pool.deactivate(hole_id)
        self.cues.play(Cue.TARGET_ESCAPE)
