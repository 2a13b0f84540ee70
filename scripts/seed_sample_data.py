#!/usr/bin/env python3
"""Seed sample products into a running catalog instance.

The catalog keeps products in memory, so seeding goes through the HTTP API.

Usage:
    python scripts/seed_sample_data.py [--image path/to/photo.jpg]

Reads APP_URL from the environment (default http://localhost:5000).
"""
import argparse
import mimetypes
import os
import sys
import httpx
from dotenv import load_dotenv

load_dotenv()

SAMPLE_PRODUCTS = [
    {
        "name": "Widget",
        "description": "A useful widget",
        "price": 29.99,
    },
    {
        "name": "Gadget Pro",
        "description": "Brushed aluminium gadget with a two-year warranty",
        "price": 149.50,
    },
    {
        "name": "Sprocket Set",
        "description": "Twelve assorted sprockets",
        "price": 12.00,
    },
    {
        "name": "Gizmo Mini",
        "description": "Pocket-sized gizmo",
        "price": 7.25,
    },
]


def main():
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--image", help="image file to upload for every product")
    args = parser.parse_args()

    app_url = os.environ.get("APP_URL", "http://localhost:5000").rstrip("/")
    api = f"{app_url}/api/products"

    image = None
    if args.image:
        content_type = mimetypes.guess_type(args.image)[0] or "image/jpeg"
        with open(args.image, "rb") as fh:
            image = (os.path.basename(args.image), fh.read(), content_type)

    with httpx.Client(timeout=10.0) as client:
        for data in SAMPLE_PRODUCTS:
            resp = client.post(api, json=data)
            if resp.status_code != 201:
                print(f"Error creating {data['name']}: {resp.status_code} {resp.text}")
                sys.exit(1)
            product = resp.json()
            print(f"Created: {product['id']} — {product['name']} — {product['price']}")

            if image:
                resp = client.post(f"{api}/{product['id']}/image", files={"file": image})
                if resp.status_code != 200:
                    print(f"  Image upload failed: {resp.status_code}")
                    continue
                print(f"  Image: {resp.json()['imageUrl']}")

    print(f"Seeded {len(SAMPLE_PRODUCTS)} products into {api}")


if __name__ == "__main__":
    main()
