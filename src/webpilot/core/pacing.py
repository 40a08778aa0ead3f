"""Pacing pauses used to keep browser actions humanly visible."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Pacing:
    """Fixed-duration pauses, in milliseconds.

    These are not synchronization points: condition waits (visibility,
    action timeouts) are configured separately and always apply.
    """

    typing_delay_ms: int = 50
    step_delay_ms: int = 500
    settle_ms: int = 2000

    @classmethod
    def disabled(cls) -> "Pacing":
        return cls(typing_delay_ms=0, step_delay_ms=0, settle_ms=0)

    @property
    def enabled(self) -> bool:
        return any((self.typing_delay_ms, self.step_delay_ms, self.settle_ms))


async def pause(milliseconds: int) -> None:
    if milliseconds > 0:
        await asyncio.sleep(milliseconds / 1000)
