"""Dual capture coordinator — screenshots a path on both hosts and diffs them."""

from __future__ import annotations

import logging
from typing import Optional

from niffy.browser.session import BrowserSession
from niffy.browser.timing import stabilize
from niffy.diff.evaluator import DiffFn, evaluate
from niffy.diff.pixel_diff import diff_images
from niffy.models.config import NiffyConfig
from niffy.models.result import DiffResult, ImageArtifact, Role
from niffy.paths import imgfilepath
from niffy.profiler import Phase, Profiler

from .interactions import Interaction, Interactions
from .navigator import HostNavigator

logger = logging.getLogger(__name__)


class CaptureCoordinator:
    """Runs base then test capture on one session, then the diff.

    Both hosts are visited sequentially through the same session; a fault at
    any step aborts the capture without a partial result.
    """

    def __init__(
        self,
        config: NiffyConfig,
        profiler: Profiler,
        navigator: HostNavigator | None = None,
        diff_fn: DiffFn = diff_images,
    ):
        self.config = config
        self.profiler = profiler
        self.navigator = navigator or HostNavigator(config)
        self.diff_fn = diff_fn

    def _host(self, role: Role) -> str:
        return self.config.base_host if role == Role.BASE else self.config.test_host

    async def goto(self, session: BrowserSession, path: str, interactions: Interactions) -> None:
        """Navigate both hosts to ``path`` without capturing."""
        with self.profiler.phase(Phase.NAVIGATE):
            for role in (Role.BASE, Role.TEST):
                await self.navigator.goto_host(
                    session, self._host(role), path, interactions.for_role(role)
                )

    async def capture_host(
        self,
        session: BrowserSession,
        role: Role,
        path: str,
        interaction: Optional[Interaction] = None,
    ) -> ImageArtifact:
        timing = self.config.timing
        with self.profiler.phase(Phase.NAVIGATE):
            await self.navigator.goto_host(session, self._host(role), path, interaction)

        target = imgfilepath(role, path, self.config.imgfiledir)
        with self.profiler.phase(Phase.CAPTURE):
            await session.wait(timing.capture_delay_ms)
            await session.screenshot(target)
        await stabilize(timing.post_capture_ms)
        return ImageArtifact(role=role, logical_path=path, path=str(target))

    async def capture(self, session: BrowserSession, path: str, interactions: Interactions) -> DiffResult:
        base = await self.capture_host(session, Role.BASE, path, interactions.base)
        test = await self.capture_host(session, Role.TEST, path, interactions.test)

        diff_path = imgfilepath(Role.DIFF, path, self.config.imgfiledir)
        with self.profiler.phase(Phase.DIFF):
            result = await evaluate(
                base.path, test.path, diff_path,
                tolerance=self.config.pixel_tolerance,
                diff_fn=self.diff_fn,
            )
        logger.info("Captured %s: %.4f%% different", path, result.percentage)
        return result
