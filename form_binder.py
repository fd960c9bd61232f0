import logging
from typing import Optional

from playwright.async_api import ElementHandle, Page

from bindings import LOOKUP_LABEL, UIBinding
from options import GenerationRequest

logger = logging.getLogger(__name__)

# Assign a value and fire the events the UI framework listens to.
SET_VALUE_JS = """(el, value) => {
    el.value = value;
    el.dispatchEvent(new Event('input', { bubbles: true }));
    el.dispatchEvent(new Event('change', { bubbles: true }));
}"""

PANEL_TOGGLE_SELECTOR = "button[data-state]"
TEXT_INPUT_SELECTOR = "input.text-input"
COLOR_INPUT_SELECTOR = "input.color-input"


async def set_value(handle: ElementHandle, value: str) -> None:
    await handle.evaluate(SET_VALUE_JS, value)


class LabelControls:
    """Finds controls through the text of their ``<label>`` (generation 1)."""

    async def _group_input(self, page: Page, caption: str, selector: str) -> Optional[ElementHandle]:
        for label in await page.query_selector_all("label"):
            text = await label.text_content() or ""
            if caption not in text:
                continue
            group = (await label.evaluate_handle("el => el.closest('.flex')")).as_element()
            if group is None:
                return None
            return await group.query_selector(selector)
        return None

    async def text_input(self, page: Page, target: str) -> Optional[ElementHandle]:
        return await self._group_input(page, target, TEXT_INPUT_SELECTOR)

    async def color_input(self, page: Page, target: str) -> Optional[ElementHandle]:
        return await self._group_input(page, target, COLOR_INPUT_SELECTOR)

    async def choice(self, page: Page, target: str) -> Optional[ElementHandle]:
        # First label with exactly this caption wins.
        for label in await page.query_selector_all("label"):
            text = await label.text_content() or ""
            if text.strip() == target:
                return label
        return None

    async def write(self, page: Page, handle: ElementHandle, value: str) -> None:
        # No native clear: select everything, then type over it.
        await handle.click(click_count=3)
        await page.keyboard.type(value)


class IdControls:
    """Addresses controls by their id selector (generation 2)."""

    async def text_input(self, page: Page, target: str) -> Optional[ElementHandle]:
        return await page.query_selector(target)

    async def color_input(self, page: Page, target: str) -> Optional[ElementHandle]:
        return await page.query_selector(target)

    async def choice(self, page: Page, target: str) -> Optional[ElementHandle]:
        return await page.query_selector(target)

    async def write(self, page: Page, handle: ElementHandle, value: str) -> None:
        await set_value(handle, value)


class FormBinder:
    """Applies a GenerationRequest onto the live target application page.

    Controls that cannot be found are skipped rather than treated as errors,
    since not every field exists in every build of the target application.
    Style values the interface does not offer are skipped the same way and
    the control keeps whatever the page already shows.
    """

    def __init__(self, binding: UIBinding) -> None:
        self._binding = binding
        self._controls = LabelControls() if binding.lookup == LOOKUP_LABEL else IdControls()

    async def apply(self, page: Page, request: GenerationRequest) -> None:
        if self._binding.expand_panels:
            await self.expand_panels(page)

        await self._set_data(page, request.data)

        for attr, target in self._binding.text_fields.items():
            value = getattr(request, attr)
            if value is None:
                continue
            handle = await self._controls.text_input(page, target)
            if handle is None:
                logger.debug("No input found for %s (%s)", attr, target)
                continue
            await self._controls.write(page, handle, str(value))

        for attr, target in self._binding.color_fields.items():
            value = getattr(request, attr)
            if not value:
                continue
            handle = await self._controls.color_input(page, target)
            if handle is None:
                logger.debug("No color input found for %s (%s)", attr, target)
                continue
            await set_value(handle, value)

        for attr, targets in self._binding.choices.items():
            value = getattr(request, attr)
            target = targets.get(value)
            if target is None:
                logger.debug("Ignoring unsupported %s value %r", attr, value)
                continue
            handle = await self._controls.choice(page, target)
            if handle is None:
                logger.debug("No control found for %s=%r (%s)", attr, value, target)
                continue
            await handle.click()

    async def expand_panels(self, page: Page) -> int:
        """Open every collapsed options panel; hidden controls are not addressable."""
        opened = 0
        for button in await page.query_selector_all(PANEL_TOGGLE_SELECTOR):
            if await button.get_attribute("data-state") != "closed":
                continue
            await button.click()
            await page.wait_for_timeout(self._binding.panel_settle_ms)
            opened += 1
        logger.debug("Expanded %d option panels", opened)
        return opened

    async def _set_data(self, page: Page, data: str) -> None:
        handle = await page.query_selector(self._binding.data_selector)
        if handle is None:
            logger.debug("No data input found (%s)", self._binding.data_selector)
            return
        await self._controls.write(page, handle, data)
