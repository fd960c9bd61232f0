import argparse
import json
from pathlib import Path
from typing import Any, Dict

import requests


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Ask a running QR API service to render a styled QR code."
    )
    parser.add_argument("data", help="Data to encode in the QR code.")
    parser.add_argument(
        "--host",
        default="http://127.0.0.1:3000",
        help="Server host (default: http://127.0.0.1:3000).",
    )
    parser.add_argument(
        "--format",
        choices=["png", "jpeg", "svg"],
        default="png",
        help="Output format (default: png).",
    )
    parser.add_argument("--dots-type", default="rounded", help="Dot style (default: rounded).")
    parser.add_argument("--size", type=int, default=400, help="Width and height in pixels.")
    parser.add_argument(
        "--error-correction",
        choices=["L", "M", "Q", "H"],
        default="H",
        help="Error correction level (default: H).",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Where to save the image (default: qrcode.<format>).",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the payload instead of sending the request.",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    payload: Dict[str, Any] = {
        "data": args.data,
        "dotsType": args.dots_type,
        "width": args.size,
        "height": args.size,
        "errorCorrectionLevel": args.error_correction,
        "format": args.format,
    }

    if args.dry_run:
        print(json.dumps(payload, indent=2))
        return

    response = requests.post(
        f"{args.host.rstrip('/')}/generate",
        json=payload,
        # Rendering waits on page load plus settle delays.
        timeout=60,
    )

    print(f"Status: {response.status_code}")
    if not response.ok:
        print(json.dumps(response.json(), indent=2))
    response.raise_for_status()

    output = args.output or Path(f"qrcode.{args.format}")
    output.write_bytes(response.content)
    print(f"Content-Type: {response.headers.get('Content-Type')}")
    print(f"Saved {len(response.content)} bytes to {output.resolve()}")


if __name__ == "__main__":
    main()
