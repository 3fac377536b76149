"""Host navigator — drives the shared session to a host + logical path."""

from __future__ import annotations

import logging
from typing import Optional

from niffy.browser.session import BrowserSession
from niffy.browser.timing import stabilize
from niffy.models.config import NiffyConfig
from niffy.url_utils import host_url, role_for_host

from .interactions import Interaction, run_interaction

logger = logging.getLogger(__name__)


class HostNavigator:
    """Navigates a session to a host and runs an optional interaction."""

    def __init__(self, config: NiffyConfig):
        self.config = config

    async def goto_host(
        self,
        session: BrowserSession,
        host: str,
        path: str,
        interaction: Optional[Interaction] = None,
    ) -> None:
        role = role_for_host(host, self.config.base_host)
        url = host_url(host, path)
        logger.debug("goto [%s] %s", role.value, url)
        await session.goto(url)
        if interaction is not None:
            settle = self.config.timing.settle_ms
            await stabilize(settle)
            await run_interaction(interaction, session.page, role.value)
            await stabilize(settle)
