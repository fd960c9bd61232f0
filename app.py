import logging
import signal
import sys
import threading
from io import BytesIO
from typing import Any, Dict, Optional

from flask import Flask, jsonify, request, send_file
from flask_cors import CORS

from config import ServiceConfig
from errors import QRApiError
from extractors import ExtractionResult
from generator import QRGenerator
from options import (
    CORNER_DOT_TYPES,
    CORNER_SQUARE_TYPES,
    DOT_TYPES,
    ERROR_CORRECTION_LEVELS,
    GenerationRequest,
    OutputFormat,
)

SERVICE_NAME = "qr-api"
API_VERSION = "1.0.0"

config = ServiceConfig.from_env()

logging.basicConfig(
    level=config.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("qr_api")

app = Flask(__name__)
CORS(app)

# Created on first use so importing the app never starts a browser.
_generator: Optional[QRGenerator] = None
_generator_lock = threading.Lock()


def get_generator() -> QRGenerator:
    global _generator
    with _generator_lock:
        if _generator is None:
            _generator = QRGenerator(config)
        return _generator


def shutdown_generator() -> None:
    global _generator
    with _generator_lock:
        generator, _generator = _generator, None
    if generator is not None:
        generator.shutdown()


def _image_response(result: ExtractionResult, as_attachment: bool):
    response = send_file(BytesIO(result.content), mimetype=result.content_type)
    if as_attachment:
        response.headers["Content-Disposition"] = (
            f'attachment; filename="qrcode.{result.format.value}"'
        )
    return response


def _error_response(exc: Exception):
    # Validation failures included: every error is reported as a 500.
    logger.error("Error generating QR code: %s", exc, exc_info=not isinstance(exc, QRApiError))
    return jsonify({"error": str(exc)}), 500


@app.route("/health", methods=["GET"])
def health_check():
    return jsonify({"status": "ok", "service": SERVICE_NAME}), 200


@app.route("/generate", methods=["POST"])
def generate_from_body():
    payload = request.get_json(silent=True) or {}
    try:
        options = GenerationRequest.from_payload(payload)
        result = get_generator().generate(options)
    except Exception as exc:
        return _error_response(exc)
    return _image_response(result, as_attachment=True)


@app.route("/generate", methods=["GET"])
def generate_from_query():
    try:
        options = GenerationRequest.from_query(request.args)
        result = get_generator().generate(options)
    except Exception as exc:
        return _error_response(exc)
    return _image_response(result, as_attachment=False)


def _capabilities() -> Dict[str, Any]:
    formats = ", ".join(fmt.value for fmt in OutputFormat)
    levels = ", ".join(
        f"{level} ({caption.split('(')[-1].rstrip(')')})"
        for level, caption in ERROR_CORRECTION_LEVELS.items()
    )
    return {
        "name": "QR Code API",
        "version": API_VERSION,
        "uiGeneration": config.ui_generation,
        "endpoints": {
            "GET /health": "Health check",
            "POST /generate": "Generate QR code with full options",
            "GET /generate": "Generate QR code with query parameters",
        },
        "options": {
            "data": "Required. The data to encode in the QR code",
            "logoUrl": "Optional. URL of logo image to embed",
            "backgroundColor": "Optional. Background color (hex). Default: #ffffff",
            "dotsColor": "Optional. Dots color (hex). Default: #000000",
            "cornersSquareColor": "Optional. Corners square color (hex)",
            "cornersDotColor": "Optional. Corners dot color (hex)",
            "width": "Optional. QR code width in pixels. Default: 300",
            "height": "Optional. QR code height in pixels. Default: 300",
            "borderRadius": "Optional. Border radius in pixels. Default: 0",
            "margin": "Optional. Margin in pixels. Default: 10",
            "imageMargin": "Optional. Image margin in pixels. Default: 0",
            "dotsType": f"Optional. Dot style: {', '.join(DOT_TYPES)}",
            "cornersSquareType": f"Optional. Corner square style: {', '.join(CORNER_SQUARE_TYPES)}",
            "cornersDotType": f"Optional. Corner dot style: {', '.join(CORNER_DOT_TYPES)}",
            "errorCorrectionLevel": f"Optional. Error correction: {levels}. Default: M",
            "format": f"Optional. Output format: {formats}. Default: png",
        },
        "enums": {
            "dotsType": DOT_TYPES,
            "cornersSquareType": CORNER_SQUARE_TYPES,
            "cornersDotType": CORNER_DOT_TYPES,
            "errorCorrectionLevel": list(ERROR_CORRECTION_LEVELS),
            "format": [fmt.value for fmt in OutputFormat],
        },
        "example": {
            "POST": {
                "url": "/generate",
                "body": {
                    "data": "https://example.com",
                    "backgroundColor": "#ffffff",
                    "dotsColor": "#000000",
                    "dotsType": "rounded",
                    "width": 400,
                    "height": 400,
                    "errorCorrectionLevel": "H",
                },
            },
            "GET": "/generate?data=https://example.com&dotsType=rounded&width=400",
        },
    }


@app.route("/", methods=["GET"])
def api_documentation():
    return jsonify(_capabilities()), 200


def _handle_termination(signum, frame) -> None:
    logger.info("Received signal %s, shutting down", signum)
    try:
        shutdown_generator()
    finally:
        sys.exit(0)


if __name__ == "__main__":
    signal.signal(signal.SIGINT, _handle_termination)
    signal.signal(signal.SIGTERM, _handle_termination)
    logger.info("QR API service running on port %s", config.port)
    app.run(host="0.0.0.0", port=config.port)
