#!/usr/bin/env python3
"""Serve the knowledge graph viewer, optionally seeded from a JSON file.

The file holds either a list of memory items or {"items": [...]}:

    [{"id": "m1", "type": "fact", "content": "Loves coffee", "tags": ["coffee"]}]

Usage:
    uv run python scripts/run_viewer.py --items memories.json
    open http://localhost:8000/graph
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

# Load .env file from project root
project_root = Path(__file__).parent.parent
load_dotenv(project_root / ".env")

# Add src to path
sys.path.insert(0, str(project_root / "src"))

import uvicorn

from kgview.api.main import create_app
from kgview.config import settings
from kgview.models import MemoryItem

logger = logging.getLogger(__name__)


def load_items(path: Path) -> list[MemoryItem]:
    """Read memory items from a JSON file."""
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("items", [])
    return [MemoryItem.from_dict(entry) for entry in data]


def main() -> None:
    parser = argparse.ArgumentParser(description="Serve the interactive knowledge graph")
    parser.add_argument(
        "-i", "--items",
        type=Path,
        help="JSON file with memory items to start with",
    )
    parser.add_argument(
        "--host",
        default=settings.api_host,
        help=f"Bind address (default: {settings.api_host})",
    )
    parser.add_argument(
        "-p", "--port",
        type=int,
        default=settings.api_port,
        help=f"Port (default: {settings.api_port})",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Debug logging",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.items:
        if not args.items.exists():
            logger.error(f"Items file not found: {args.items}")
            sys.exit(1)
        try:
            items = load_items(args.items)
            app = create_app(items)
        except (ValueError, KeyError) as e:
            logger.error(f"Invalid items file {args.items}: {e}")
            sys.exit(1)
        logger.info(f"Loaded {len(items)} items from {args.items}")
    else:
        app = create_app()

    logger.info(f"Graph viewer at http://{args.host}:{args.port}/graph")
    uvicorn.run(app, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
