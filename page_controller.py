import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict

from playwright.async_api import Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from browser_session import BrowserSessionManager
from errors import NavigationTimeoutError

logger = logging.getLogger(__name__)

# Large enough for every control to render whatever QR size is requested.
VIEWPORT: Dict[str, int] = {"width": 1280, "height": 900}
NAVIGATION_TIMEOUT_MS = 30_000
READY_TIMEOUT_MS = 10_000


class PageController:
    """Opens one isolated browsing context per request on the shared browser."""

    def __init__(self, session: BrowserSessionManager, target_url: str) -> None:
        self._session = session
        self._target_url = target_url
        self.open_contexts = 0

    @asynccontextmanager
    async def open_page(self, ready_selector: str) -> AsyncIterator[Page]:
        """
        Yield a page loaded with the target application and ready for input.
        The context is closed on every exit path, including failures while
        loading.
        """
        browser = await self._session.acquire()
        context = await browser.new_context(viewport=VIEWPORT, accept_downloads=True)
        self.open_contexts += 1
        try:
            page = await context.new_page()
            try:
                await page.goto(
                    self._target_url,
                    wait_until="networkidle",
                    timeout=NAVIGATION_TIMEOUT_MS,
                )
            except PlaywrightTimeoutError as exc:
                raise NavigationTimeoutError(str(exc)) from exc

            try:
                await page.wait_for_selector(ready_selector, timeout=READY_TIMEOUT_MS)
            except PlaywrightTimeoutError as exc:
                raise NavigationTimeoutError(str(exc)) from exc

            logger.debug("Target application ready at %s", self._target_url)
            yield page
        finally:
            self.open_contexts -= 1
            await context.close()
