#!/usr/bin/env python3
"""Push a memory item snapshot to a running viewer.

Every open graph view rebuilds and keeps the positions of nodes that survive.
"""

import argparse
import json
import sys
from pathlib import Path

import httpx

API_BASE = "http://localhost:8000"


def main() -> None:
    parser = argparse.ArgumentParser(description="Replace the viewer's memory items")
    parser.add_argument("items", type=Path, help="JSON file with a list of items or {'items': [...]}")
    parser.add_argument("--api", default=API_BASE, help=f"Viewer base URL (default: {API_BASE})")
    args = parser.parse_args()

    data = json.loads(args.items.read_text(encoding="utf-8"))
    if isinstance(data, list):
        data = {"items": data}

    try:
        response = httpx.put(f"{args.api}/v1/items", json=data, timeout=30.0)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        print(f"Rejected: {e.response.status_code} {e.response.text}")
        sys.exit(1)
    except httpx.HTTPError as e:
        print(f"Error: {e}")
        sys.exit(1)

    result = response.json()
    print(
        f"Pushed {result['items']} items "
        f"({result['tags']} tags, {result['connections']} connections) "
        f"to {result['viewers']} viewers"
    )


if __name__ == "__main__":
    main()
