"""Browser session — the single Playwright page shared by every navigation of a run."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from playwright.async_api import Browser, BrowserContext, Page, Playwright, async_playwright

from niffy.errors import SessionBusyError, SessionNotStartedError
from niffy.models.config import ViewportConfig

logger = logging.getLogger(__name__)


async def launch_browser(playwright: Playwright, headless: bool = True) -> Browser:
    """Launch Chromium for capturing."""
    return await playwright.chromium.launch(
        headless=headless,
        args=["--hide-scrollbars"],
    )


async def create_context(browser: Browser, viewport: ViewportConfig) -> BrowserContext:
    """Create a browser context with a fixed viewport."""
    return await browser.new_context(
        viewport={"width": viewport.width, "height": viewport.height},
        locale="en-US",
        timezone_id="UTC",
    )


class BrowserSession:
    """Owns one browser page and serializes access to it.

    Every navigation and screenshot for both hosts goes through the same
    page. Entering ``guard()`` while another operation holds it raises
    SessionBusyError instead of waiting.
    """

    def __init__(self, viewport: ViewportConfig | None = None, show: bool = False):
        self.viewport = viewport or ViewportConfig()
        self.show = show
        self._playwright = None
        self._browser: Browser | None = None
        self._context: BrowserContext | None = None
        self._page: Page | None = None
        self._busy = False

    @property
    def started(self) -> bool:
        return self._page is not None

    @property
    def busy(self) -> bool:
        return self._busy

    @property
    def page(self) -> Page:
        if self._page is None:
            raise SessionNotStartedError("Browser session has not been started")
        return self._page

    async def start(self) -> None:
        if self.started:
            return
        logger.debug("Launching Chromium (headless=%s, viewport=%dx%d)",
                     not self.show, self.viewport.width, self.viewport.height)
        try:
            self._playwright = await async_playwright().start()
            self._browser = await launch_browser(self._playwright, headless=not self.show)
            self._context = await create_context(self._browser, self.viewport)
            self._page = await self._context.new_page()
        except BaseException:
            await self.close()
            raise

    async def close(self) -> None:
        """Release the page, browser and driver; every handle is released even if one fails."""
        context, browser, playwright = self._context, self._browser, self._playwright
        self._page = None
        self._context = None
        self._browser = None
        self._playwright = None
        try:
            if context is not None:
                await context.close()
        finally:
            try:
                if browser is not None:
                    await browser.close()
            finally:
                if playwright is not None:
                    await playwright.stop()
        logger.debug("Browser session closed")

    @asynccontextmanager
    async def guard(self) -> AsyncIterator[Page]:
        """Hold the session for one operation, failing fast on contention."""
        if self._busy:
            raise SessionBusyError("Browser session is already in use; serialize calls")
        page = self.page
        self._busy = True
        try:
            yield page
        finally:
            self._busy = False

    async def goto(self, url: str) -> None:
        logger.debug("Navigating to %s", url)
        await self.page.goto(url)

    async def screenshot(self, path: Path) -> None:
        await self.page.screenshot(path=str(path), full_page=False)
        logger.debug("Screenshot saved to %s", path)

    async def wait(self, ms: int) -> None:
        """Wait inside the page's own event loop before acting."""
        if ms > 0:
            await self.page.wait_for_timeout(ms)
