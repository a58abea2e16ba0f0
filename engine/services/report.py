"""Post-round flavor text from the Anthropic Messages API.

Requests run on a single background worker so the frame loop never waits.
Every returned future resolves to a string: service errors (no API key,
network trouble, rate limits) are logged and replaced with a canned line.
"""

from __future__ import annotations
import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Optional

import anthropic

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-haiku-4-5-20251001"

PENDING_REPORT = "Scanning ship for survivors..."
EMPTY_REPORT = "Report corrupted by communication interference in Electrical."
FALLBACK_REPORT = "The crewmates are suspicious of your skill. Keep hunting."

PROMPT_TEMPLATE = (
    'The user just finished a whack-a-mole game where they were "ejecting" '
    "Among Us crewmates.\n"
    "Score: {score}.\n"
    "New High Score: {new_high}.\n"
    'Write a short, funny, 2-sentence "Security Report" from the perspective '
    "of an Imposter or a Ship AI.\n"
    "Keep it snarky and use Among Us terminology (sus, eject, vent, task, electrical)."
)


def build_prompt(score: int, is_new_high_score: bool) -> str:
    return PROMPT_TEMPLATE.format(score=score, new_high="Yes" if is_new_high_score else "No")


class ReportService:
    def __init__(
        self,
        client: Optional[Any] = None,
        model: str = DEFAULT_MODEL,
        max_tokens: int = 100,
        temperature: float = 0.8,
        timeout_seconds: float = 20.0,
    ):
        self._client = client
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.timeout_seconds = timeout_seconds
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="report")

    @property
    def client(self):
        if self._client is None:
            # raises if ANTHROPIC_API_KEY is unset; handled in _generate
            self._client = anthropic.Anthropic(timeout=self.timeout_seconds, max_retries=1)
        return self._client

    def request(self, score: int, is_new_high_score: bool) -> "Future[str]":
        return self._executor.submit(self._generate, score, is_new_high_score)

    def _generate(self, score: int, is_new_high_score: bool) -> str:
        try:
            response = self.client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
                messages=[{"role": "user", "content": build_prompt(score, is_new_high_score)}],
            )
        except Exception as e:
            logger.warning("report request failed, using fallback: %s", e)
            return FALLBACK_REPORT

        text = "".join(
            getattr(block, "text", "") for block in (response.content or [])
            if getattr(block, "type", None) == "text"
        ).strip()
        if not text:
            return EMPTY_REPORT
        logger.info("report received", extra={"output_tokens": getattr(response.usage, "output_tokens", None)})
        return text

    def close(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)
