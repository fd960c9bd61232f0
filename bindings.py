"""Binding tables between request options and the Mini QR user interface.

Mini QR shipped two incompatible interfaces. Generation 1 exposes its controls
behind collapsible panels and only labels them by visible text, so controls
are found through their ``<label>``. Generation 2 gives every control a
stable id and offers its own export buttons, so controls are addressed
directly and the image is read back from a download.

Exactly one table is active per deployment (``QR_UI_GENERATION``).
"""
from dataclasses import dataclass, field
from typing import Dict, Optional

from options import CORNER_DOT_TYPES, CORNER_SQUARE_TYPES, DOT_TYPES, ERROR_CORRECTION_LEVELS

LOOKUP_LABEL = "label"
LOOKUP_ID = "id"

EXTRACT_CAPTURE = "capture"
EXTRACT_DOWNLOAD = "download"


@dataclass(frozen=True)
class UIBinding:
    generation: int
    lookup: str
    ready_selector: str
    data_selector: str
    settle_ms: int
    extraction: str
    # Option attribute -> label caption (label lookup) or CSS selector (id lookup).
    text_fields: Dict[str, str] = field(default_factory=dict)
    color_fields: Dict[str, str] = field(default_factory=dict)
    # Option attribute -> {accepted value -> label caption or selector}.
    choices: Dict[str, Dict[str, str]] = field(default_factory=dict)
    expand_panels: bool = False
    panel_settle_ms: int = 200
    export_selector: Optional[str] = None
    # File extension -> export button selector.
    download_buttons: Dict[str, str] = field(default_factory=dict)


GENERATION_1 = UIBinding(
    generation=1,
    lookup=LOOKUP_LABEL,
    ready_selector="input.text-input",
    data_selector="input.text-input",
    settle_ms=500,
    extraction=EXTRACT_CAPTURE,
    text_fields={
        "logo_url": "Logo image URL",
        "width": "Width",
        "height": "Height",
        "border_radius": "Border radius",
        "margin": "Margin",
        "image_margin": "Image margin",
    },
    color_fields={
        "background_color": "Background color",
        "dots_color": "Dots color",
        "corners_square_color": "Corners Square color",
        "corners_dot_color": "Corners Dot color",
    },
    choices={
        "dots_type": {value: value for value in DOT_TYPES},
        "corners_square_type": {value: value for value in CORNER_SQUARE_TYPES},
        "corners_dot_type": {value: value for value in CORNER_DOT_TYPES},
        "error_correction_level": dict(ERROR_CORRECTION_LEVELS),
    },
    expand_panels=True,
    export_selector="#element-to-export",
)

GENERATION_2 = UIBinding(
    generation=2,
    lookup=LOOKUP_ID,
    ready_selector="#data",
    data_selector="#data",
    settle_ms=1000,
    extraction=EXTRACT_DOWNLOAD,
    text_fields={
        "logo_url": "#image-url",
        "width": "#width",
        "height": "#height",
        "border_radius": "#border-radius",
        "margin": "#margin",
        "image_margin": "#image-margin",
    },
    color_fields={
        "background_color": "#background-color",
        "dots_color": "#dots-color",
        "corners_square_color": "#corners-square-color",
        "corners_dot_color": "#corners-dot-color",
    },
    choices={
        "dots_type": {value: f"#dotsOptions-type-{value}" for value in DOT_TYPES},
        "corners_square_type": {
            value: f"#cornersSquareOptions-type-{value}" for value in CORNER_SQUARE_TYPES
        },
        "corners_dot_type": {value: f"#cornersDotOptions-type-{value}" for value in CORNER_DOT_TYPES},
        "error_correction_level": {
            level: f"#errorCorrectionLevel-{level}" for level in ERROR_CORRECTION_LEVELS
        },
    },
    download_buttons={
        "png": "#download-qr-image-button-png",
        "jpg": "#download-qr-image-button-jpg",
        "svg": "#download-qr-image-button-svg",
    },
)

BINDINGS: Dict[int, UIBinding] = {
    GENERATION_1.generation: GENERATION_1,
    GENERATION_2.generation: GENERATION_2,
}


def get_binding(generation: int) -> UIBinding:
    try:
        return BINDINGS[generation]
    except KeyError:
        raise ValueError(
            f"Unknown UI generation {generation!r}; expected one of {sorted(BINDINGS)}"
        ) from None
