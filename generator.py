import asyncio
import logging
import threading
from typing import Optional

from playwright.async_api import Page

from bindings import UIBinding, get_binding
from browser_session import BrowserSessionManager
from config import ServiceConfig
from extractors import ExtractionResult, OutputExtractor, make_extractor
from form_binder import FormBinder
from options import GenerationRequest
from page_controller import PageController

logger = logging.getLogger(__name__)


async def wait_for_render(page: Page, settle_ms: int) -> None:
    # Fixed pause: the target UI exposes no signal for "re-render finished".
    await page.wait_for_timeout(settle_ms)


class QRGenerator:
    """Drives the target application to render one QR code per call.

    Browser work runs on a private event loop in a background thread, so the
    Flask worker threads share one Playwright connection and one browser.
    """

    def __init__(
        self,
        config: ServiceConfig,
        session: Optional[BrowserSessionManager] = None,
        binding: Optional[UIBinding] = None,
        extractor: Optional[OutputExtractor] = None,
    ) -> None:
        self.config = config
        self.binding = binding or get_binding(config.ui_generation)
        self.session = session or BrowserSessionManager(headless=config.headless)
        self.pages = PageController(self.session, config.target_url)
        self.binder = FormBinder(self.binding)
        self.extractor = extractor or make_extractor(self.binding)
        self._semaphore = (
            asyncio.Semaphore(config.max_concurrency) if config.max_concurrency > 0 else None
        )
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._thread: Optional[threading.Thread] = None
        self._thread_lock = threading.Lock()

    async def generate_async(self, request: GenerationRequest) -> ExtractionResult:
        request.validate()
        if self._semaphore is None:
            return await self._render(request)
        async with self._semaphore:
            return await self._render(request)

    async def _render(self, request: GenerationRequest) -> ExtractionResult:
        async with self.pages.open_page(self.binding.ready_selector) as page:
            await self.binder.apply(page, request)
            await wait_for_render(page, self.binding.settle_ms)
            result = await self.extractor.extract(page, request.format)
        logger.info(
            "Generated %s QR code (%d bytes, %dx%d)",
            request.format.value,
            len(result.content),
            request.width,
            request.height,
        )
        return result

    def generate(self, request: GenerationRequest) -> ExtractionResult:
        """Blocking entry point for request handler threads."""
        request.validate()
        future = asyncio.run_coroutine_threadsafe(self.generate_async(request), self._ensure_loop())
        return future.result()

    def shutdown(self, timeout: float = 10.0) -> None:
        with self._thread_lock:
            loop, thread = self._loop, self._thread
            self._loop = None
            self._thread = None
        if loop is None:
            return
        try:
            asyncio.run_coroutine_threadsafe(self.session.shutdown(), loop).result(timeout)
        finally:
            loop.call_soon_threadsafe(loop.stop)
            thread.join(timeout)

    def _ensure_loop(self) -> asyncio.AbstractEventLoop:
        with self._thread_lock:
            if self._loop is None:
                loop = asyncio.new_event_loop()
                thread = threading.Thread(
                    target=self._run_loop, args=(loop,), name="qr-browser-loop", daemon=True
                )
                thread.start()
                self._loop, self._thread = loop, thread
            return self._loop

    @staticmethod
    def _run_loop(loop: asyncio.AbstractEventLoop) -> None:
        asyncio.set_event_loop(loop)
        try:
            loop.run_forever()
        finally:
            loop.close()
