from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from games.crewmate_crunch import const

Color = Tuple[int, int, int]


@dataclass(frozen=True)
class DifficultyCurve:
    """
    A duration (ms) that shrinks as the round progresses.

    value = max(min_ms, (start_ms + jitter * jitter_ms) * max(min_scale, 1 - progress))

    progress is the elapsed fraction of the round in [0, 1]; jitter is a
    caller-supplied sample in [0, 1). With jitter held fixed the value is
    non-increasing in progress and never drops below min_ms.
    """
    start_ms: float
    min_ms: float
    jitter_ms: float = 0.0
    min_scale: float = 0.0

    def __post_init__(self):
        if self.min_ms <= 0:
            raise ValueError(f"min_ms must be positive, got {self.min_ms}")
        if self.start_ms < self.min_ms:
            raise ValueError(f"start_ms ({self.start_ms}) must be >= min_ms ({self.min_ms})")
        if self.jitter_ms < 0 or not 0 <= self.min_scale <= 1:
            raise ValueError("jitter_ms must be >= 0 and min_scale within [0, 1]")

    def value(self, progress: float, jitter: float = 0.0) -> float:
        progress = min(1.0, max(0.0, progress))
        scale = max(self.min_scale, 1.0 - progress)
        return max(self.min_ms, (self.start_ms + jitter * self.jitter_ms) * scale)


def default_spawn_interval() -> DifficultyCurve:
    return DifficultyCurve(start_ms=const.SPAWN_START_MS, min_ms=const.SPAWN_MIN_MS)


def default_visible_duration() -> DifficultyCurve:
    return DifficultyCurve(
        start_ms=const.VISIBLE_START_MS,
        min_ms=const.VISIBLE_MIN_MS,
        jitter_ms=const.VISIBLE_JITTER_MS,
        min_scale=const.VISIBLE_MIN_SCALE,
    )


@dataclass
class RoundConfig:
    round_duration: int = const.ROUND_DURATION_SEC
    prestart_count: int = const.PRESTART_COUNT
    hole_count: int = const.HOLE_COUNT
    spawn_interval: DifficultyCurve = field(default_factory=default_spawn_interval)
    visible_duration: DifficultyCurve = field(default_factory=default_visible_duration)
    feedback_clear_delay_ms: int = const.FEEDBACK_CLEAR_MS
    urgency_threshold: int = const.URGENCY_SEC
    variants: List[Color] = field(
        default_factory=lambda: list(const.THEMES[const.DEFAULT_THEME]["variants"]))
    high_score_key: str = const.HIGH_SCORE_KEY

    def __post_init__(self):
        if self.round_duration <= 0:
            raise ValueError("round_duration must be positive")
        if self.prestart_count < 0:
            raise ValueError("prestart_count must be >= 0")
        if self.hole_count <= 0:
            raise ValueError("hole_count must be positive")
        if not self.variants:
            raise ValueError("at least one variant is required")

    @classmethod
    def from_options(cls, options: Dict[str, Any]) -> "RoundConfig":
        """Build from a manifest's options mapping; unknown keys are ignored."""
        theme = const.THEMES.get(options.get("theme", const.DEFAULT_THEME))
        if theme is None:
            raise ValueError(f"unknown theme {options.get('theme')!r}")

        spawn = default_spawn_interval()
        visible = default_visible_duration()
        return cls(
            round_duration=int(options.get("round_duration", const.ROUND_DURATION_SEC)),
            prestart_count=int(options.get("prestart_count", const.PRESTART_COUNT)),
            hole_count=int(options.get("hole_count", const.HOLE_COUNT)),
            spawn_interval=DifficultyCurve(
                start_ms=float(options.get("spawn_start_ms", spawn.start_ms)),
                min_ms=float(options.get("spawn_min_ms", spawn.min_ms)),
            ),
            visible_duration=DifficultyCurve(
                start_ms=float(options.get("visible_start_ms", visible.start_ms)),
                min_ms=float(options.get("visible_min_ms", visible.min_ms)),
                jitter_ms=float(options.get("visible_jitter_ms", visible.jitter_ms)),
                min_scale=float(options.get("visible_min_scale", visible.min_scale)),
            ),
            feedback_clear_delay_ms=int(options.get("feedback_clear_ms", const.FEEDBACK_CLEAR_MS)),
            urgency_threshold=int(options.get("urgency_sec", const.URGENCY_SEC)),
            variants=[tuple(c) for c in theme["variants"]],
        )
