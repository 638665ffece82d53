"""FastAPI application for kgview.

Serves the interactive knowledge graph page, its WebSocket, and the endpoints
used to hand it new memory item snapshots.
"""

import logging
from collections.abc import Iterable
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import kgview
from kgview.api.graph import router as graph_router
from kgview.api.routes import router
from kgview.config import settings
from kgview.graph.builder import validate_items
from kgview.graph.store import ItemFeed
from kgview.models import MemoryItem

logger = logging.getLogger(__name__)


def create_app(initial_items: Iterable[MemoryItem] = ()) -> FastAPI:
    """Create and configure the FastAPI application.

    Raises ValueError when initial_items cannot form a graph, so a bad seed
    file fails at startup instead of on the first viewer.
    """
    initial_items = tuple(initial_items)
    validate_items(initial_items)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Own the item feed for the lifetime of the app."""
        logger.info("Starting kgview API...")
        app.state.feed = ItemFeed(initial_items)
        logger.info(f"Item feed ready with {len(initial_items)} items")

        yield

        logger.info("Shutting down kgview API...")
        app.state.feed.close()

    app = FastAPI(
        title="kgview",
        description="Interactive force-directed knowledge graph of memories and tags",
        version=kgview.__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)
    app.include_router(graph_router)

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    uvicorn.run(
        "kgview.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_debug,
    )
