"""API routes for kgview.

Provides:
- /health
- /v1/items: read or replace the memory item snapshot the graph is built from
"""

import logging
from typing import Literal

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field

import kgview
from kgview.graph.builder import tag_key
from kgview.graph.store import ItemFeed
from kgview.models import MemoryItem, MemorySource, MemoryType

logger = logging.getLogger(__name__)

router = APIRouter()


# ============================================================================
# Item Models
# ============================================================================


class MemoryItemPayload(BaseModel):
    """Wire shape of one memory item."""

    id: str = Field(min_length=1)
    type: MemoryType = "fact"
    content: str = ""
    tags: list[str] | None = None
    timestamp: float | None = None
    source: MemorySource | None = None
    workspace: str | None = None

    def to_item(self) -> MemoryItem:
        return MemoryItem(
            id=self.id,
            type=self.type,
            content=self.content,
            tags=list(self.tags or []),
            timestamp=self.timestamp,
            source=self.source,
            workspace=self.workspace,
        )


class ItemsSnapshot(BaseModel):
    """Full replacement of the item list."""

    items: list[MemoryItemPayload]


class ItemsResponse(BaseModel):
    """Result of a snapshot replacement."""

    items: int
    tags: int
    connections: int
    viewers: int


# ============================================================================
# Admin Models
# ============================================================================


class HealthResponse(BaseModel):
    """Health check response."""

    status: Literal["healthy"] = "healthy"
    items: int
    viewers: int
    version: str = kgview.__version__


# ============================================================================
# Helper Functions
# ============================================================================


def get_feed(request: Request) -> ItemFeed:
    """Get item feed from app state."""
    return request.app.state.feed


def snapshot_stats(items: tuple[MemoryItem, ...]) -> dict[str, int]:
    """Counts the graph built from items will have."""
    tags = {tag_key(t) for item in items for t in item.tags if t.strip()}
    connections = sum(1 for item in items for t in item.tags if t.strip())
    return {"items": len(items), "tags": len(tags), "connections": connections}


# ============================================================================
# Endpoints
# ============================================================================


@router.get("/health", response_model=HealthResponse)
async def health(request: Request) -> HealthResponse:
    """Health check."""
    feed = get_feed(request)
    return HealthResponse(items=len(feed.items), viewers=feed.subscriber_count)


@router.get("/v1/items")
async def list_items(request: Request) -> dict:
    """Current item snapshot."""
    feed = get_feed(request)
    return {"items": [item.to_dict() for item in feed.items]}


@router.put("/v1/items", response_model=ItemsResponse)
async def replace_items(request: Request, body: ItemsSnapshot) -> ItemsResponse:
    """
    Replace the item snapshot.

    Every mounted view rebuilds its graph (keeping positions of surviving
    nodes) before its next frame.
    """
    feed = get_feed(request)
    try:
        items = [payload.to_item() for payload in body.items]
        feed.publish(items)
    except ValueError as e:
        logger.warning(f"Rejected item snapshot: {e}")
        raise HTTPException(status_code=422, detail=str(e))

    return ItemsResponse(**snapshot_stats(feed.items), viewers=feed.subscriber_count)


@router.get("/v1/graph/stats")
async def graph_stats(request: Request) -> dict:
    """Structural stats of the graph the current snapshot produces."""
    return snapshot_stats(get_feed(request).items)
