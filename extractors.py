"""Strategies for pulling the rendered QR code out of the page."""
import logging
import tempfile
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Dict

from playwright.async_api import Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from bindings import EXTRACT_CAPTURE, EXTRACT_DOWNLOAD, UIBinding
from errors import MissingArtifactError
from options import OutputFormat

logger = logging.getLogger(__name__)

DOWNLOAD_TIMEOUT_MS = 15_000


@dataclass(frozen=True)
class ExtractionResult:
    content: bytes
    format: OutputFormat

    @property
    def content_type(self) -> str:
        return self.format.mime_type


class OutputExtractor(ABC):
    @abstractmethod
    async def extract(self, page: Page, fmt: OutputFormat) -> ExtractionResult:
        raise NotImplementedError


class CaptureExtractor(OutputExtractor):
    """Reads the export container directly: SVG markup or an element screenshot."""

    def __init__(self, export_selector: str) -> None:
        self._export_selector = export_selector

    async def extract(self, page: Page, fmt: OutputFormat) -> ExtractionResult:
        container = await page.query_selector(self._export_selector)
        if container is None:
            raise MissingArtifactError("QR code element not found")

        if fmt is OutputFormat.SVG:
            svg = await container.query_selector("svg")
            if svg is None:
                raise MissingArtifactError("SVG element not found")
            markup = await svg.evaluate("el => el.outerHTML")
            return ExtractionResult(markup.encode("utf-8"), fmt)

        image = await container.screenshot(type=fmt.value)
        return ExtractionResult(image, fmt)


class DownloadExtractor(OutputExtractor):
    """Clicks the application's own export button and reads the file it saves."""

    def __init__(self, download_buttons: Dict[str, str], timeout_ms: int = DOWNLOAD_TIMEOUT_MS) -> None:
        self._download_buttons = download_buttons
        self._timeout_ms = timeout_ms

    async def extract(self, page: Page, fmt: OutputFormat) -> ExtractionResult:
        extension = fmt.extension
        selector = self._download_buttons.get(extension)
        button = await page.query_selector(selector) if selector else None
        if button is None:
            raise MissingArtifactError(f"Export control for {extension} not found")

        with tempfile.TemporaryDirectory(prefix="qr-api-") as tmp_dir:
            directory = Path(tmp_dir)
            try:
                async with page.expect_download(timeout=self._timeout_ms) as download_info:
                    await button.click()
                download = await download_info.value
            except PlaywrightTimeoutError as exc:
                raise MissingArtifactError(
                    f"Downloaded {extension} file not found: {exc}"
                ) from exc

            name = Path(download.suggested_filename or f"qrcode.{extension}").name
            await download.save_as(str(directory / name))
            await download.delete()
            return ExtractionResult(read_artifact(directory, extension), fmt)


def read_artifact(directory: Path, extension: str) -> bytes:
    """Read and remove the first file in ``directory`` with the given extension."""
    suffix = f".{extension}"
    for path in sorted(directory.iterdir()):
        if path.is_file() and path.suffix.lower() == suffix:
            content = path.read_bytes()
            path.unlink()
            logger.debug("Read %d bytes from %s", len(content), path.name)
            return content
    raise MissingArtifactError(f"Downloaded {extension} file not found")


def make_extractor(binding: UIBinding) -> OutputExtractor:
    if binding.extraction == EXTRACT_CAPTURE:
        return CaptureExtractor(binding.export_selector)
    if binding.extraction == EXTRACT_DOWNLOAD:
        return DownloadExtractor(binding.download_buttons)
    raise ValueError(f"Unknown extraction strategy {binding.extraction!r}")
