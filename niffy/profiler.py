"""Cumulative per-phase timing for a niffy session."""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from enum import Enum
from typing import Callable, Iterator

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    NAVIGATE = "goto"
    CAPTURE = "capture"
    DIFF = "diff"


class Profiler:
    """Accumulates wall-clock milliseconds per phase.

    Totals are additive across every start/stop pair for the lifetime of the
    profiler. A stop without a pending start is ignored.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._starts: dict[Phase, float] = {}
        self._totals: dict[Phase, int] = {phase: 0 for phase in Phase}

    def start(self, phase: Phase | str) -> None:
        self._starts[Phase(phase)] = self._clock()

    def stop(self, phase: Phase | str) -> None:
        phase = Phase(phase)
        started = self._starts.pop(phase, None)
        if started is None:
            return
        elapsed = round((self._clock() - started) * 1000)
        self._totals[phase] += max(elapsed, 0)

    @contextmanager
    def phase(self, phase: Phase | str) -> Iterator[None]:
        self.start(phase)
        try:
            yield
        finally:
            self.stop(phase)

    def total(self, phase: Phase | str) -> int:
        return self._totals[Phase(phase)]

    def totals(self) -> dict[str, int]:
        return {phase.value: ms for phase, ms in self._totals.items()}

    def report(self) -> str:
        lines = ["profile"]
        lines.extend(f"\t{phase.value} {ms}" for phase, ms in self._totals.items())
        return "\n".join(lines)
