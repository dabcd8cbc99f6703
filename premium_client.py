"""
Simple client script to exercise a running Innotiva backend.

Usage examples:

Catalog:
    python premium_client.py --mode products

Premium experience:
    python premium_client.py \
        --mode premium \
        --room samples/living_room.jpg \
        --product-id lampara-nordica \
        --product-name "Lámpara Nórdica" \
        --idea "junto al sofá, luz cálida"
"""

from __future__ import annotations

import argparse
import json
import mimetypes
import sys
from pathlib import Path

import requests

BASE_URL = "http://localhost:3000"


def _validate_path(path: Path) -> Path:
    resolved = path.expanduser().resolve()
    if not resolved.exists():
        raise FileNotFoundError(f"File does not exist: {resolved}")
    return resolved


def _print_response(response: requests.Response) -> None:
    if response.status_code != 200:
        print("Request failed:", response.status_code, response.text)
        response.raise_for_status()
    print(json.dumps(response.json(), indent=2, ensure_ascii=False))


def call_products(base_url: str) -> None:
    response = requests.get(f"{base_url}/productos-shopify", timeout=60)
    _print_response(response)


def call_premium(
    base_url: str,
    room_path: Path,
    product_id: str,
    product_name: str,
    idea: str | None,
    product_url: str | None,
) -> None:
    data: dict[str, str] = {"productId": product_id, "productName": product_name}
    if idea:
        data["idea"] = idea
    if product_url:
        data["productUrl"] = product_url

    content_type = mimetypes.guess_type(room_path.name)[0] or "application/octet-stream"
    with room_path.open("rb") as room_file:
        files = {"roomImage": (room_path.name, room_file, content_type)}
        # Generation may hold the request for about a minute
        response = requests.post(
            f"{base_url}/experiencia-premium",
            files=files,
            data=data,
            timeout=180,
        )

    _print_response(response)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Exercise the Innotiva backend.")
    parser.add_argument(
        "--mode",
        choices=["products", "premium"],
        default="products",
        help="Query the catalog or run a premium experience.",
    )
    parser.add_argument("--base-url", default=BASE_URL, help="Backend base URL.")
    parser.add_argument("--room", type=Path, help="Path to the room photo (premium mode).")
    parser.add_argument("--product-id", help="Product handle or id (premium mode).")
    parser.add_argument("--product-name", help="Product display name (premium mode).")
    parser.add_argument("--idea", default=None, help="Optional customization idea.")
    parser.add_argument("--product-url", default=None, help="Optional explicit product URL.")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    base_url = args.base_url.rstrip("/")

    try:
        if args.mode == "products":
            call_products(base_url)
            return

        if not args.room or not args.product_id or not args.product_name:
            print("Premium mode needs --room, --product-id and --product-name.", file=sys.stderr)
            sys.exit(1)

        call_premium(
            base_url=base_url,
            room_path=_validate_path(args.room),
            product_id=args.product_id,
            product_name=args.product_name,
            idea=args.idea,
            product_url=args.product_url,
        )
    except requests.HTTPError:
        sys.exit(1)


if __name__ == "__main__":
    main()
