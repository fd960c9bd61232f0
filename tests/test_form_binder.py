"""
Tests for applying request options onto the target application's form.
"""

import pytest

from bindings import GENERATION_1, GENERATION_2
from conftest import make_element, make_label, make_page
from form_binder import SET_VALUE_JS, FormBinder
from options import GenerationRequest


def generation_1_form():
    """A minimal generation 1 page: labelled groups plus style labels."""
    inputs = {
        "data": make_element(),
        "logo": make_element(),
        "width": make_element(),
        "height": make_element(),
        "margin": make_element(),
        "background": make_element(),
        "dots": make_element(),
    }
    labels = {
        "logo": make_label("Logo image URL", {"input.text-input": inputs["logo"]}),
        "width": make_label("Width", {"input.text-input": inputs["width"]}),
        "height": make_label("Height", {"input.text-input": inputs["height"]}),
        "margin": make_label("Margin", {"input.text-input": inputs["margin"]}),
        "background": make_label("Background color", {"input.color-input": inputs["background"]}),
        "dots": make_label("Dots color", {"input.color-input": inputs["dots"]}),
        "square": make_label(" square "),
        "rounded": make_label("rounded"),
        "highest": make_label("Highest (30%)"),
        "medium": make_label("Medium (15%)"),
    }
    panels = [make_element(data_state="closed"), make_element(data_state="open"), make_element(data_state="closed")]
    page = make_page(
        elements={"input.text-input": inputs["data"]},
        labels=list(labels.values()),
        panel_buttons=panels,
    )
    return page, inputs, labels, panels


class TestGeneration1Binding:
    """Tests for label-addressed controls."""

    @pytest.mark.asyncio
    async def test_expands_closed_panels_only(self):
        page, _, _, panels = generation_1_form()

        opened = await FormBinder(GENERATION_1).expand_panels(page)

        assert opened == 2
        panels[0].click.assert_awaited_once()
        panels[1].click.assert_not_awaited()
        panels[2].click.assert_awaited_once()
        assert page.wait_for_timeout.await_count == 2
        page.wait_for_timeout.assert_awaited_with(200)

    @pytest.mark.asyncio
    async def test_types_data_and_dimensions(self):
        page, inputs, _, _ = generation_1_form()
        request = GenerationRequest(data="https://example.com", width=400, height=420)

        await FormBinder(GENERATION_1).apply(page, request)

        inputs["data"].click.assert_awaited_once_with(click_count=3)
        inputs["width"].click.assert_awaited_once_with(click_count=3)
        typed = [call.args[0] for call in page.keyboard.type.await_args_list]
        assert typed[0] == "https://example.com"
        assert "400" in typed
        assert "420" in typed
        assert "10" in typed

    @pytest.mark.asyncio
    async def test_logo_left_alone_when_not_requested(self):
        page, inputs, _, _ = generation_1_form()

        await FormBinder(GENERATION_1).apply(page, GenerationRequest(data="x"))

        inputs["logo"].click.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_sets_colors_with_synthetic_events(self):
        page, inputs, _, _ = generation_1_form()
        request = GenerationRequest(data="x", background_color="#eeeeee", dots_color="#112233")

        await FormBinder(GENERATION_1).apply(page, request)

        inputs["background"].evaluate.assert_awaited_once_with(SET_VALUE_JS, "#eeeeee")
        inputs["dots"].evaluate.assert_awaited_once_with(SET_VALUE_JS, "#112233")

    @pytest.mark.asyncio
    async def test_clicks_style_and_error_correction_labels(self):
        page, _, labels, _ = generation_1_form()
        request = GenerationRequest(data="x", dots_type="rounded", error_correction_level="H")

        await FormBinder(GENERATION_1).apply(page, request)

        labels["rounded"].click.assert_awaited_once()
        labels["highest"].click.assert_awaited_once()
        labels["medium"].click.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_style_value_is_ignored(self):
        page, _, labels, _ = generation_1_form()
        request = GenerationRequest(data="x", dots_type="hexagon", error_correction_level="Z")

        await FormBinder(GENERATION_1).apply(page, request)

        labels["rounded"].click.assert_not_awaited()
        labels["highest"].click.assert_not_awaited()
        labels["medium"].click.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_controls_are_skipped(self):
        page = make_page()

        await FormBinder(GENERATION_1).apply(page, GenerationRequest(data="x", logo_url="http://logo"))

        page.keyboard.type.assert_not_awaited()


class TestGeneration2Binding:
    """Tests for id-addressed controls."""

    @pytest.mark.asyncio
    async def test_sets_values_by_id(self):
        elements = {
            "#data": make_element(),
            "#width": make_element(),
            "#dots-color": make_element(),
            "#corners-dot-color": make_element(),
        }
        page = make_page(elements=elements)
        request = GenerationRequest(data="Hello", width=512, dots_color="#ff0000")

        await FormBinder(GENERATION_2).apply(page, request)

        elements["#data"].evaluate.assert_awaited_once_with(SET_VALUE_JS, "Hello")
        elements["#width"].evaluate.assert_awaited_once_with(SET_VALUE_JS, "512")
        elements["#dots-color"].evaluate.assert_awaited_once_with(SET_VALUE_JS, "#ff0000")
        elements["#corners-dot-color"].evaluate.assert_not_awaited()
        page.keyboard.type.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_clicks_radio_controls(self):
        elements = {
            "#dotsOptions-type-classy": make_element(),
            "#cornersDotOptions-type-dot": make_element(),
            "#errorCorrectionLevel-Q": make_element(),
        }
        page = make_page(elements=elements)
        request = GenerationRequest(
            data="x", dots_type="classy", corners_dot_type="dot", error_correction_level="Q"
        )

        await FormBinder(GENERATION_2).apply(page, request)

        for element in elements.values():
            element.click.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_corner_dot_ignores_dots_only_variants(self):
        elements = {"#cornersDotOptions-type-classy": make_element()}
        page = make_page(elements=elements)

        await FormBinder(GENERATION_2).apply(page, GenerationRequest(data="x", corners_dot_type="classy"))

        elements["#cornersDotOptions-type-classy"].click.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_does_not_expand_panels(self):
        page = make_page()

        await FormBinder(GENERATION_2).apply(page, GenerationRequest(data="x"))

        selectors = [call.args[0] for call in page.query_selector_all.await_args_list]
        assert "button[data-state]" not in selectors
        page.wait_for_timeout.assert_not_awaited()
