"""Niffy — compares a page path rendered on a base host and a test host."""

from __future__ import annotations

import logging
import time
import uuid
from typing import Any, Callable, Optional

from niffy import verdict
from niffy.browser.session import BrowserSession
from niffy.capture.coordinator import CaptureCoordinator
from niffy.capture.interactions import Interaction, Interactions, run_interaction
from niffy.errors import ThresholdExceededError
from niffy.models.config import NiffyConfig
from niffy.models.result import ComparisonResult, DiffResult, RunResult
from niffy.profiler import Profiler

logger = logging.getLogger(__name__)


class Niffy:
    """Visual regression session over one shared browser page.

    Usage::

        async with Niffy("https://prod.example.com", "http://localhost:3000") as niffy:
            await niffy.test("/pricing")

    Calls on one instance must be serialized; overlapping calls raise
    SessionBusyError. Run independent comparisons in parallel by giving each
    its own instance and ``imgfiledir``.
    """

    def __init__(
        self,
        base_host: str | None = None,
        test_host: str | None = None,
        config: NiffyConfig | None = None,
        session: BrowserSession | None = None,
        **options: Any,
    ):
        if config is None:
            config = NiffyConfig.from_options(base_host, test_host, **options)
        elif options or base_host is not None or test_host is not None:
            raise TypeError("Pass either config or hosts and options, not both")
        self.config = config
        self.profiler = Profiler()
        self.session = session or BrowserSession(config.viewport, show=config.show)
        self.coordinator = CaptureCoordinator(config, self.profiler)

    @property
    def basehost(self) -> str:
        return self.config.base_host

    @property
    def testhost(self) -> str:
        return self.config.test_host

    async def __aenter__(self) -> "Niffy":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.end()

    async def start(self) -> None:
        await self.session.start()

    async def goto(self, path: str, fn: Optional[Interaction] = None, fn2: Optional[Interaction] = None) -> None:
        """Visit ``path`` on both hosts, optionally running interactions."""
        async with self.session.guard():
            await self.coordinator.goto(self.session, path, Interactions.of(fn, fn2))

    async def continue_(self, fn: Callable[..., Any]) -> None:
        """Run ``fn(page)`` against the current page state."""
        async with self.session.guard() as page:
            await run_interaction(fn, page)

    async def capture(
        self, path: str, fn: Optional[Interaction] = None, fn2: Optional[Interaction] = None
    ) -> DiffResult:
        """Screenshot ``path`` on both hosts and diff the screenshots."""
        async with self.session.guard():
            return await self.coordinator.capture(self.session, path, Interactions.of(fn, fn2))

    async def test(self, path: str, fn: Optional[Interaction] = None, fn2: Optional[Interaction] = None) -> None:
        """Capture ``path`` and raise ThresholdExceededError if it diverges too much."""
        result = await self.capture(path, fn, fn2)
        verdict.check(result, self.config.threshold)

    async def run_paths(self, paths: list[str]) -> RunResult:
        """Test each path in turn, recording failures without stopping the batch."""
        start = time.time()
        run = RunResult(
            run_id=f"run_{uuid.uuid4().hex[:8]}",
            base_host=self.config.base_host,
            test_host=self.config.test_host,
            threshold=self.config.threshold,
            started_at=time.strftime("%Y-%m-%dT%H:%M:%SZ"),
        )
        for index, path in enumerate(paths):
            logger.info("Comparing [%d/%d]: %s", index + 1, len(paths), path)
            run.comparisons.append(await self._compare(path))

        run.completed_at = time.strftime("%Y-%m-%dT%H:%M:%SZ")
        run.duration_seconds = round(time.time() - start, 2)
        run.profile = self.profiler.totals()
        logger.info("Run %s complete: %d passed, %d failed, %d errors",
                    run.run_id, run.passed, run.failed, run.errors)
        return run

    async def _compare(self, path: str) -> ComparisonResult:
        start = time.time()
        try:
            result = await self.capture(path)
            verdict.check(result, self.config.threshold)
        except ThresholdExceededError as e:
            return ComparisonResult(
                path=path, result="fail", percentage=e.percentage,
                diff_filepath=e.diff_filepath, message=str(e),
                duration_seconds=round(time.time() - start, 2),
            )
        except Exception as e:
            logger.error("Comparison of %s errored: %s", path, e)
            return ComparisonResult(
                path=path, result="error", message=f"{type(e).__name__}: {e}",
                duration_seconds=round(time.time() - start, 2),
            )
        return ComparisonResult(
            path=path, result="pass", percentage=result.percentage,
            diff_filepath=result.diff_filepath,
            duration_seconds=round(time.time() - start, 2),
        )

    async def end(self) -> None:
        """Close the browser and log the accumulated profile."""
        await self.session.close()
        logger.debug("%s", self.profiler.report())
