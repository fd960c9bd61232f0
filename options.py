from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from errors import ValidationError

DOT_TYPES: List[str] = ["square", "rounded", "dots", "classy", "classy-rounded", "extra-rounded"]
CORNER_SQUARE_TYPES: List[str] = list(DOT_TYPES)
CORNER_DOT_TYPES: List[str] = ["square", "rounded", "dot"]
ERROR_CORRECTION_LEVELS: Dict[str, str] = {
    "L": "Low (7%)",
    "M": "Medium (15%)",
    "Q": "High (25%)",
    "H": "Highest (30%)",
}


class OutputFormat(str, Enum):
    PNG = "png"
    JPEG = "jpeg"
    SVG = "svg"

    @property
    def mime_type(self) -> str:
        if self is OutputFormat.SVG:
            return "image/svg+xml"
        return f"image/{self.value}"

    @property
    def extension(self) -> str:
        # Exported lossy files use the three-letter alias.
        return "jpg" if self is OutputFormat.JPEG else self.value

    @classmethod
    def parse(cls, raw: Optional[str]) -> "OutputFormat":
        if raw is None or raw == "":
            return cls.PNG
        value = str(raw).strip().lower()
        if value == "jpg":
            value = "jpeg"
        try:
            return cls(value)
        except ValueError:
            raise ValidationError(f"Unsupported format: {raw}") from None


# camelCase wire name -> attribute name, for the integer options.
_INT_FIELDS: Dict[str, str] = {
    "width": "width",
    "height": "height",
    "borderRadius": "border_radius",
    "margin": "margin",
    "imageMargin": "image_margin",
}

_STR_FIELDS: Dict[str, str] = {
    "data": "data",
    "logoUrl": "logo_url",
    "backgroundColor": "background_color",
    "dotsColor": "dots_color",
    "cornersSquareColor": "corners_square_color",
    "cornersDotColor": "corners_dot_color",
    "dotsType": "dots_type",
    "cornersSquareType": "corners_square_type",
    "cornersDotType": "corners_dot_type",
    "errorCorrectionLevel": "error_correction_level",
}


@dataclass(frozen=True)
class GenerationRequest:
    """Normalized options for a single QR code render.

    Enum-like style fields are kept as given. Values the target UI does not
    offer are ignored when the form is filled, not rejected here.
    """

    data: str
    logo_url: Optional[str] = None
    background_color: str = "#ffffff"
    dots_color: str = "#000000"
    corners_square_color: Optional[str] = None
    corners_dot_color: Optional[str] = None
    width: int = 300
    height: int = 300
    border_radius: int = 0
    margin: int = 10
    image_margin: int = 0
    dots_type: str = "square"
    corners_square_type: str = "square"
    corners_dot_type: str = "square"
    error_correction_level: str = "M"
    format: OutputFormat = OutputFormat.PNG

    def validate(self) -> None:
        if not self.data:
            raise ValidationError("Data to encode is required")

    @classmethod
    def from_payload(cls, payload: Optional[Mapping[str, Any]]) -> "GenerationRequest":
        """Build a request from a JSON body. Missing or null keys take defaults."""
        payload = payload or {}
        kwargs: Dict[str, Any] = {}
        for key, attr in _STR_FIELDS.items():
            value = payload.get(key)
            if value is not None:
                kwargs[attr] = str(value)
        _require_data(kwargs)
        for key, attr in _INT_FIELDS.items():
            value = payload.get(key)
            if value is not None:
                kwargs[attr] = _parse_int(key, value)
        kwargs["format"] = OutputFormat.parse(payload.get("format"))
        return cls._build(kwargs)

    @classmethod
    def from_query(cls, args: Mapping[str, str]) -> "GenerationRequest":
        """Build a request from flat query parameters; empty values count as absent."""
        kwargs: Dict[str, Any] = {}
        for key, attr in _STR_FIELDS.items():
            value = args.get(key)
            if value:
                kwargs[attr] = value
        _require_data(kwargs)
        for key, attr in _INT_FIELDS.items():
            value = args.get(key)
            if value:
                kwargs[attr] = _parse_int(key, value)
        kwargs["format"] = OutputFormat.parse(args.get("format"))
        return cls._build(kwargs)

    @classmethod
    def _build(cls, kwargs: Dict[str, Any]) -> "GenerationRequest":
        request = cls(**kwargs)
        request.validate()
        return request


def _require_data(kwargs: Dict[str, Any]) -> None:
    if not kwargs.get("data"):
        raise ValidationError("Data to encode is required")


def _parse_int(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{name} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be an integer") from None
