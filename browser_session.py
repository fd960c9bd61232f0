import asyncio
import logging
from typing import List, Optional

from playwright.async_api import Browser, Playwright, async_playwright
from playwright.async_api import Error as PlaywrightError

from errors import SessionLaunchError

logger = logging.getLogger(__name__)

# Runs inside an already sandboxed container; no GPU when headless.
LAUNCH_ARGS: List[str] = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
    "--ignore-certificate-errors",
    "--disable-web-security",
    "--allow-running-insecure-content",
]


class BrowserSessionManager:
    """Owns the single Chromium instance shared by every request."""

    def __init__(self, headless: bool = True) -> None:
        self._headless = headless
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._launch_lock = asyncio.Lock()
        self.launch_count = 0

    @property
    def is_live(self) -> bool:
        return self._browser is not None and self._browser.is_connected()

    async def acquire(self) -> Browser:
        """Return the live browser, launching it on first use.

        Launch failures are raised as ``SessionLaunchError`` and nothing is
        cached, so the next call tries again from scratch.
        """
        if self.is_live:
            return self._browser

        async with self._launch_lock:
            # Another request may have launched while we waited.
            if self.is_live:
                return self._browser
            if self._browser is not None:
                logger.warning("Browser disconnected, relaunching")
                await self._teardown()

            try:
                self._playwright = await async_playwright().start()
                self._browser = await self._playwright.chromium.launch(
                    headless=self._headless,
                    args=LAUNCH_ARGS,
                )
            except PlaywrightError as exc:
                await self._teardown()
                raise SessionLaunchError(str(exc)) from exc

            self.launch_count += 1
            logger.info("Browser launched (headless=%s)", self._headless)
            return self._browser

    async def shutdown(self) -> None:
        if self._browser is None and self._playwright is None:
            return
        await self._teardown()
        logger.info("Browser session closed")

    async def _teardown(self) -> None:
        browser, playwright = self._browser, self._playwright
        self._browser = None
        self._playwright = None
        try:
            if browser is not None:
                await browser.close()
        except PlaywrightError:
            logger.exception("Error while closing browser")
        finally:
            if playwright is not None:
                await playwright.stop()
