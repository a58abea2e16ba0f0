from __future__ import annotations
import logging
import random
from concurrent.futures import Future
from enum import Enum
from typing import Optional, Tuple

from engine.app.timers import Scheduler, TimerScope
from engine.audio.cues import Cue

from games.crewmate_crunch import const
from games.crewmate_crunch.pool import Feedback, TargetPool
from games.crewmate_crunch.spawner import SpawnEngine
from games.crewmate_crunch.tuning import RoundConfig

logger = logging.getLogger(__name__)


class Status(Enum):
    IDLE = "idle"
    COUNTING = "counting"
    PLAYING = "playing"
    ENDED = "ended"


class Round:
    """
    Round lifecycle: idle -> counting -> playing -> ended, plus abort back to
    idle and restart from ended.

    Each of counting and playing runs its timers inside its own TimerScope.
    Every transition closes the current scope before the next state starts,
    so a tick or auto-hide from an earlier phase can never fire into a later one.
    """

    def __init__(self, config: RoundConfig, scheduler: Scheduler, store, reporter, cues,
                 rng: Optional[random.Random] = None):
        self.config = config
        self.scheduler = scheduler
        self.store = store
        self.reporter = reporter
        self.cues = cues
        self.rng = rng or random.Random()

        self.status = Status.IDLE
        self.score = 0
        self.high_score = max(0, store.get(config.high_score_key) or 0)
        self.time_left = config.round_duration
        self.countdown = config.prestart_count
        self.is_new_high_score = False
        self.report: Optional[str] = None
        self.generation = 0

        self.pool = TargetPool(config.hole_count, scheduler, config.feedback_clear_delay_ms)
        self.spawner = SpawnEngine(self.pool, config, cues, self.rng)
        self._scope: Optional[TimerScope] = None
        self._pending_report: Optional[Tuple[int, "Future[str]"]] = None

    # ------------- helpers -------------
    @property
    def report_pending(self) -> bool:
        return self._pending_report is not None

    def progress(self) -> float:
        """Elapsed fraction of the round clock, 0 at the first playing tick, 1 at the end."""
        return 1.0 - self.time_left / self.config.round_duration

    def _close_scope(self) -> None:
        if self._scope is not None:
            self._scope.close()
            self._scope = None

    def _open_scope(self, name: str) -> TimerScope:
        self._close_scope()
        self._scope = TimerScope(self.scheduler, f"{name}#{self.generation}")
        return self._scope

    def _reset_round_fields(self) -> None:
        self.score = 0
        self.time_left = self.config.round_duration
        self.countdown = self.config.prestart_count

    # ------------- controls -------------
    def start(self) -> bool:
        if self.status not in (Status.IDLE, Status.ENDED):
            logger.debug("start ignored while %s", self.status.value)
            return False

        self.generation += 1
        self._reset_round_fields()
        self.is_new_high_score = False
        self.report = None
        self._pending_report = None
        self.pool.reset()
        self.cues.play(Cue.START)

        self.status = Status.COUNTING
        logger.info("round %d counting down from %d", self.generation, self.countdown)
        if self.countdown <= 0:
            self._begin_play()
        else:
            self._open_scope("counting").call_every(const.TICK_MS, self._countdown_tick)
        return True

    def restart(self) -> bool:
        if self.status != Status.ENDED:
            return False
        return self.start()

    def abort(self) -> bool:
        if self.status not in (Status.COUNTING, Status.PLAYING):
            return False
        self._close_scope()
        self._reset_round_fields()
        self.pool.reset()
        self.status = Status.IDLE
        logger.info("round %d aborted", self.generation)
        return True

    def tap(self, hole_id: int) -> Optional[Feedback]:
        if self.status != Status.PLAYING:
            return None
        if not 0 <= hole_id < len(self.pool):
            logger.debug("tap on unknown hole %d ignored", hole_id)
            return None

        hole = self.pool[hole_id]
        if hole.active:
            self.pool.deactivate(hole_id)
            self.score += 1
            self.pool.flag(hole_id, Feedback.HIT)
            self.cues.play(Cue.HIT)
            return Feedback.HIT
        if hole.feedback is None:
            self.pool.flag(hole_id, Feedback.MISS)
            self.cues.play(Cue.MISS)
            return Feedback.MISS
        return None

    # ------------- timers -------------
    def _countdown_tick(self) -> None:
        if self.status != Status.COUNTING:
            return
        if self.countdown - 1 <= 0:
            self.countdown = 0
            self._begin_play()
            return
        self.countdown -= 1
        self.cues.play(Cue.TICK)

    def _begin_play(self) -> None:
        scope = self._open_scope("playing")
        self.status = Status.PLAYING
        logger.info("round %d playing for %ds", self.generation, self.time_left)
        scope.call_every(const.TICK_MS, self._clock_tick)
        self.spawner.start(scope, self.progress)

    def _clock_tick(self) -> None:
        if self.status != Status.PLAYING:
            return
        if self.time_left - 1 <= 0:
            self.time_left = 0
            self._end()
            return
        self.time_left -= 1
        if self.time_left < self.config.urgency_threshold:
            self.cues.play(Cue.TICK)

    def _end(self) -> None:
        self._close_scope()
        self.pool.retract()

        self.is_new_high_score = self.score > self.high_score
        if self.is_new_high_score:
            self.high_score = self.score
            self.store.set(self.config.high_score_key, self.high_score)

        self.status = Status.ENDED
        logger.info("round %d ended: score=%d best=%d new_best=%s",
                    self.generation, self.score, self.high_score, self.is_new_high_score)

        self.report = None
        self._pending_report = (
            self.generation, self.reporter.request(self.score, self.is_new_high_score))

    # ------------- report -------------
    def poll_report(self) -> bool:
        """Pick up a finished report. Returns True when one was written this call."""
        if self._pending_report is None:
            return False
        generation, future = self._pending_report
        if not future.done():
            return False
        self._pending_report = None
        if generation != self.generation or self.status != Status.ENDED:
            logger.debug("discarding stale report from round %d", generation)
            return False
        self.report = future.result()
        return True

    def shutdown(self) -> None:
        self._close_scope()
        self._pending_report = None
        self.pool.reset()
        self.reporter.close()
