"""Bounded polling of submitted clips until they are playable."""

import asyncio
import logging
import random
import time
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass

from suno_gateway.domain.clips import Clip, PollOutcome, PollState

ClipFetcher = Callable[[Sequence[str]], Awaitable[list[Clip]]]

_logger = logging.getLogger(__name__)


def batch_state(clips: Sequence[Clip]) -> PollState:
    """Classify a batch: resolved when all are ready or all failed."""
    if all(clip.is_ready for clip in clips) or all(clip.is_error for clip in clips):
        return PollState.RESOLVED
    return PollState.WAITING


@dataclass
class PollingController:
    """Polls a batch until it resolves or the deadline passes.

    A timeout is not an error: the last observed clips are returned with
    ``PollState.TIMED_OUT``.
    """

    renew_token: Callable[..., Awaitable[str]]
    clock: Callable[[], float] = time.monotonic
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep
    uniform: Callable[[float, float], float] = random.uniform
    warm_up_seconds: tuple[float, float] = (5.0, 5.5)
    interval_seconds: tuple[float, float] = (3.0, 6.0)
    deadline_seconds: float = 100.0

    async def wait(self, clip_ids: Sequence[str], fetch: ClipFetcher) -> PollOutcome:
        """Poll ``clip_ids`` through ``fetch`` until they reach a terminal state."""
        started_at = self.clock()
        await self.sleep(self.uniform(*self.warm_up_seconds))
        latest: list[Clip] = []
        polls = 0
        while self.clock() - started_at < self.deadline_seconds:
            clips = await fetch(clip_ids)
            polls += 1
            if batch_state(clips) is PollState.RESOLVED:
                _logger.info("Clips resolved after %s polls: %s", polls, clip_ids)
                return PollOutcome(clips=clips, state=PollState.RESOLVED, polls=polls)
            latest = clips
            await self.sleep(self.uniform(*self.interval_seconds))
            await self.renew_token(delay=True)
        _logger.warning(
            "Clips not ready after %.0f seconds: %s", self.deadline_seconds, clip_ids
        )
        return PollOutcome(clips=latest, state=PollState.TIMED_OUT, polls=polls)
