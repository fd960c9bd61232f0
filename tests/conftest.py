"""Shared fakes for Playwright pages and elements."""

from typing import Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest


def make_element(text: Optional[str] = None, data_state: Optional[str] = None) -> MagicMock:
    element = MagicMock()
    element.text_content = AsyncMock(return_value=text)
    element.get_attribute = AsyncMock(return_value=data_state)
    element.click = AsyncMock()
    element.evaluate = AsyncMock()
    element.screenshot = AsyncMock()
    element.query_selector = AsyncMock(return_value=None)
    return element


def make_label(text: str, group_inputs: Optional[Dict[str, MagicMock]] = None) -> MagicMock:
    """A label whose closest ``.flex`` ancestor holds ``group_inputs``."""
    label = make_element(text)
    group = make_element()
    inputs = group_inputs or {}
    group.query_selector = AsyncMock(side_effect=lambda selector: inputs.get(selector))
    js_handle = MagicMock()
    js_handle.as_element.return_value = group
    label.evaluate_handle = AsyncMock(return_value=js_handle)
    return label


def make_page(
    elements: Optional[Dict[str, MagicMock]] = None,
    labels: Optional[List[MagicMock]] = None,
    panel_buttons: Optional[List[MagicMock]] = None,
) -> MagicMock:
    elements = elements or {}
    collections = {
        "label": labels or [],
        "button[data-state]": panel_buttons or [],
    }
    page = MagicMock()
    page.query_selector = AsyncMock(side_effect=lambda selector: elements.get(selector))
    page.query_selector_all = AsyncMock(side_effect=lambda selector: collections.get(selector, []))
    page.wait_for_timeout = AsyncMock()
    page.keyboard.type = AsyncMock()
    return page


@pytest.fixture
def fake_playwright():
    """A started Playwright stub whose Chromium launch returns a connected browser."""
    browser = MagicMock()
    browser.is_connected = MagicMock(return_value=True)
    browser.close = AsyncMock()

    playwright = MagicMock()
    playwright.chromium.launch = AsyncMock(return_value=browser)
    playwright.stop = AsyncMock()

    factory = MagicMock()
    factory.return_value.start = AsyncMock(return_value=playwright)
    return factory, playwright, browser
