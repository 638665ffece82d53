"""Explicit stores for the item snapshot and the per-view graph.

ItemFeed is the one shared object: it holds the latest item snapshot and fans
it out to subscribers. Each view owns a GraphStore, because simulation state
(positions, pins) belongs to the view that is animating it.
"""

import logging
from collections.abc import Callable, Iterable

from kgview.graph.builder import GraphBuilder, validate_items
from kgview.graph.models import Graph
from kgview.models import MemoryItem

logger = logging.getLogger(__name__)

ItemsListener = Callable[[tuple[MemoryItem, ...]], None]
GraphListener = Callable[[Graph], None]
Unsubscribe = Callable[[], None]


class ItemFeed:
    """Latest snapshot of memory items with change notification."""

    def __init__(self, items: Iterable[MemoryItem] = ()) -> None:
        items = tuple(items)
        validate_items(items)
        self._items: tuple[MemoryItem, ...] = items
        self._listeners: list[ItemsListener] = []
        self._closed = False

    @property
    def items(self) -> tuple[MemoryItem, ...]:
        return self._items

    @property
    def subscriber_count(self) -> int:
        return len(self._listeners)

    def publish(self, items: Iterable[MemoryItem]) -> None:
        """Replace the snapshot and notify every subscriber.

        Raises ValueError, leaving the current snapshot in place, when the
        items cannot form a graph (see validate_items).
        """
        if self._closed:
            raise RuntimeError("ItemFeed is closed")
        items = tuple(items)
        validate_items(items)
        self._items = items
        logger.info(f"Published {len(self._items)} items to {len(self._listeners)} subscribers")
        for listener in list(self._listeners):
            listener(self._items)

    def subscribe(self, listener: ItemsListener) -> Unsubscribe:
        if self._closed:
            raise RuntimeError("ItemFeed is closed")
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def close(self) -> None:
        self._listeners.clear()
        self._closed = True


class GraphStore:
    """Holds one view's current graph and rebuilds it when the items change.

    A rebuild happens only when the item list changes by count or identity
    (ordered ids); content edits under the same ids keep the current graph.
    """

    def __init__(self, builder: GraphBuilder | None = None) -> None:
        self.builder = builder or GraphBuilder()
        self._graph = Graph()
        self._signature: tuple[str, ...] | None = None
        self._listeners: list[GraphListener] = []

    @property
    def graph(self) -> Graph:
        return self._graph

    def update(self, items: Iterable[MemoryItem]) -> bool:
        """Rebuild from items if they changed. Returns True when rebuilt."""
        items = list(items)
        signature = tuple(item.id for item in items)
        if signature == self._signature:
            return False

        self._graph = self.builder.build(items, previous=self._graph)
        self._signature = signature
        for listener in list(self._listeners):
            listener(self._graph)
        return True

    def subscribe(self, listener: GraphListener) -> Unsubscribe:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def close(self) -> None:
        self._listeners.clear()
