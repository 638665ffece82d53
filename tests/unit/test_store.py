"""Unit tests for the item feed and graph store."""

import pytest

from kgview.graph.builder import GraphBuilder
from kgview.graph.models import Graph
from kgview.graph.store import GraphStore, ItemFeed
from kgview.models import MemoryItem


class TestItemFeed:
    """Tests for ItemFeed."""

    def test_initial_snapshot(self, coffee_items: list[MemoryItem]) -> None:
        feed = ItemFeed(coffee_items)
        assert feed.items == tuple(coffee_items)

    def test_publish_notifies_subscribers(self, coffee_items: list[MemoryItem]) -> None:
        feed = ItemFeed()
        received = []
        feed.subscribe(received.append)

        feed.publish(coffee_items)

        assert received == [tuple(coffee_items)]
        assert feed.items == tuple(coffee_items)

    def test_unsubscribe(self, coffee_items: list[MemoryItem]) -> None:
        feed = ItemFeed()
        received = []
        unsubscribe = feed.subscribe(received.append)
        assert feed.subscriber_count == 1

        unsubscribe()
        unsubscribe()  # second call is harmless
        feed.publish(coffee_items)

        assert received == []
        assert feed.subscriber_count == 0

    @pytest.mark.parametrize("items", [
        [MemoryItem(id="d", content="x"), MemoryItem(id="d", content="y")],
        [MemoryItem(id="tag:coffee", content="x", tags=["Coffee"])],
    ])
    def test_invalid_initial_snapshot_rejected(self, items: list[MemoryItem]) -> None:
        with pytest.raises(ValueError):
            ItemFeed(items)

    def test_failed_publish_keeps_snapshot(self, builder: GraphBuilder, coffee_items: list[MemoryItem]) -> None:
        feed = ItemFeed(coffee_items)
        store = GraphStore(builder)
        feed.subscribe(store.update)
        store.update(feed.items)
        received = []
        feed.subscribe(received.append)

        duplicate = MemoryItem(id="d", content="x")
        with pytest.raises(ValueError, match="unique"):
            feed.publish([duplicate, duplicate])

        assert feed.items == tuple(coffee_items)
        assert received == []
        assert [n.id for n in store.graph.nodes] == ["m1", "tag:coffee", "tag:morning", "m2"]

        # The feed still builds for later subscribers
        late = GraphStore(builder)
        late.update(feed.items)
        assert len(late.graph) == 4

    def test_closed_feed_rejects_use(self) -> None:
        feed = ItemFeed()
        feed.subscribe(lambda items: None)
        feed.close()

        assert feed.subscriber_count == 0
        with pytest.raises(RuntimeError):
            feed.publish([])
        with pytest.raises(RuntimeError):
            feed.subscribe(lambda items: None)


class TestGraphStore:
    """Tests for GraphStore."""

    def test_starts_empty(self, builder: GraphBuilder) -> None:
        assert GraphStore(builder).graph.is_empty

    def test_update_builds_and_notifies(self, builder: GraphBuilder, coffee_items: list[MemoryItem]) -> None:
        store = GraphStore(builder)
        seen: list[Graph] = []
        store.subscribe(seen.append)

        assert store.update(coffee_items) is True
        assert len(store.graph) == 4
        assert seen == [store.graph]

    def test_same_ids_do_not_rebuild(self, builder: GraphBuilder, coffee_items: list[MemoryItem]) -> None:
        store = GraphStore(builder)
        store.update(coffee_items)
        graph = store.graph

        edited = [
            MemoryItem(id=i.id, content=i.content + " (edited)", type=i.type, tags=i.tags)
            for i in coffee_items
        ]
        assert store.update(edited) is False
        assert store.graph is graph

    def test_reordered_ids_rebuild(self, builder: GraphBuilder, coffee_items: list[MemoryItem]) -> None:
        store = GraphStore(builder)
        store.update(coffee_items)
        assert store.update(list(reversed(coffee_items))) is True

    def test_rebuild_keeps_positions(self, builder: GraphBuilder, coffee_items: list[MemoryItem]) -> None:
        store = GraphStore(builder)
        store.update(coffee_items)
        store.graph.get("tag:coffee").x = 77.0

        store.update(coffee_items + [MemoryItem(id="m3", content="Tea", tags=["tea"])])

        assert store.graph.get("tag:coffee").x == 77.0
        assert store.graph.get("tag:tea") is not None

    def test_first_empty_update_notifies(self, builder: GraphBuilder) -> None:
        store = GraphStore(builder)
        seen: list[Graph] = []
        store.subscribe(seen.append)
        assert store.update([]) is True
        assert len(seen) == 1
        assert store.update([]) is False

    def test_close_drops_listeners(self, builder: GraphBuilder, coffee_items: list[MemoryItem]) -> None:
        store = GraphStore(builder)
        seen: list[Graph] = []
        store.subscribe(seen.append)
        store.close()
        store.update(coffee_items)
        assert seen == []

    def test_follows_feed(self, builder: GraphBuilder, coffee_items: list[MemoryItem]) -> None:
        feed = ItemFeed()
        store = GraphStore(builder)
        unsubscribe = feed.subscribe(store.update)

        feed.publish(coffee_items)
        assert store.graph.stats() == {"memories": 2, "tags": 2, "connections": 3}

        unsubscribe()
        feed.publish([])
        assert len(store.graph) == 4
