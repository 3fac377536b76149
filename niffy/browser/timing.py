"""Stabilization waits that let a navigated page settle before capture."""

from __future__ import annotations

import asyncio

# Empirical defaults; overridable through TimingConfig.
SETTLE_MS = 1000
CAPTURE_DELAY_MS = 1000
POST_CAPTURE_MS = 250


async def stabilize(ms: int) -> None:
    """Suspend the current task for ``ms`` milliseconds."""
    if ms > 0:
        await asyncio.sleep(ms / 1000)
