"""Unit tests for graph construction."""

import random

import pytest

from kgview.graph.builder import GraphBuilder, tag_key, truncate, validate_items
from kgview.graph.models import Graph, GraphEdge, GraphNode, NodeKind
from kgview.models import MemoryItem


def item(item_id: str, content: str = "", tags: list[str] | None = None, **kwargs) -> MemoryItem:
    return MemoryItem(id=item_id, content=content or item_id, tags=tags or [], **kwargs)


class TestTruncate:
    """Tests for label truncation."""

    def test_short_text_unchanged(self) -> None:
        assert truncate("Dark mode", 48) == "Dark mode"

    def test_exact_length_unchanged(self) -> None:
        assert truncate("abcde", 5) == "abcde"

    def test_long_text_ends_with_ellipsis(self) -> None:
        result = truncate("a" * 60, 48)
        assert len(result) == 48
        assert result.endswith("…")
        assert result[:-1] == "a" * 47


class TestGraphBuilder:
    """Tests for GraphBuilder.build."""

    def test_coffee_scenario(self, coffee_graph: Graph) -> None:
        """Two items, three tag uses, two unique tags."""
        ids = [n.id for n in coffee_graph.nodes]
        assert sorted(ids) == ["m1", "m2", "tag:coffee", "tag:morning"]
        assert len(coffee_graph.edges) == 3
        assert set(coffee_graph.edges) == {
            GraphEdge("m1", "tag:coffee"),
            GraphEdge("m1", "tag:morning"),
            GraphEdge("m2", "tag:coffee"),
        }
        assert coffee_graph.degree("tag:coffee") == 2

    def test_node_order_is_items_then_first_seen_tags(self, coffee_graph: Graph) -> None:
        assert [n.id for n in coffee_graph.nodes] == ["m1", "tag:coffee", "tag:morning", "m2"]

    def test_memory_node_fields(self, coffee_graph: Graph, coffee_items: list[MemoryItem]) -> None:
        node = coffee_graph.get("m1")
        assert node.kind is NodeKind.MEMORY
        assert node.label == "Loves coffee"
        assert node.category == "preference"
        assert node.data is coffee_items[0]
        assert node.radius == 8.0
        assert not node.pinned

    def test_tag_node_fields(self, coffee_graph: Graph) -> None:
        node = coffee_graph.get("tag:coffee")
        assert node.kind is NodeKind.TAG
        assert node.label == "#coffee"
        assert node.data is None
        assert node.category is None
        assert node.radius == 12.0

    def test_tags_deduplicated_case_insensitively(self, builder: GraphBuilder) -> None:
        graph = builder.build([
            item("m1", tags=["Coffee"]),
            item("m2", tags=["COFFEE", "coffee"]),
        ])
        tag_nodes = [n for n in graph.nodes if n.is_tag]
        assert len(tag_nodes) == 1
        assert tag_nodes[0].id == "tag:coffee"
        # Label keeps the casing of the first occurrence
        assert tag_nodes[0].label == "#Coffee"
        # No edge-level dedup
        assert len(graph.edges) == 3

    def test_item_without_tags(self, builder: GraphBuilder) -> None:
        graph = builder.build([item("m1"), item("m2", tags=["", "  "])])
        assert len(graph.nodes) == 2
        assert graph.edges == []

    def test_empty_items(self, builder: GraphBuilder) -> None:
        graph = builder.build([])
        assert graph.is_empty
        assert graph.edges == []

    def test_long_content_truncated(self, builder: GraphBuilder) -> None:
        graph = builder.build([item("m1", content="x" * 100)])
        assert len(graph.get("m1").label) == 48
        assert graph.get("m1").label.endswith("…")

    @pytest.mark.parametrize("tag_lists", [
        [],
        [["a"]],
        [["a", "b"], ["B", "c"], []],
        [["x", "x", "X"], ["y"], ["Y", "z", "x"]],
    ])
    def test_node_and_edge_counts(self, builder: GraphBuilder, tag_lists: list[list[str]]) -> None:
        items = [item(f"m{i}", tags=tags) for i, tags in enumerate(tag_lists)]
        graph = builder.build(items)

        unique_tags = {t.lower() for tags in tag_lists for t in tags}
        assert len(graph.nodes) == len(items) + len(unique_tags)
        assert len(graph.edges) == sum(len(tags) for tags in tag_lists)

    def test_structure_is_deterministic(self, coffee_items: list[MemoryItem]) -> None:
        a = GraphBuilder(rng=random.Random(1)).build(coffee_items)
        b = GraphBuilder(rng=random.Random(2)).build(coffee_items)
        assert [(n.id, n.label, n.kind) for n in a.nodes] == [(n.id, n.label, n.kind) for n in b.nodes]
        assert a.edges == b.edges

    def test_new_positions_inside_spawn_box(self, builder: GraphBuilder) -> None:
        graph = builder.build([item(f"m{i}", tags=[f"t{i}"]) for i in range(50)])
        for node in graph.nodes:
            assert -400 <= node.x <= 400
            assert -300 <= node.y <= 300

    def test_duplicate_ids_rejected(self, builder: GraphBuilder) -> None:
        with pytest.raises(ValueError, match="Duplicate node id"):
            builder.build([item("m1"), item("m1")])


class TestMergePositions:
    """Tests for layout continuity across rebuilds."""

    def test_rebuild_with_same_items_keeps_positions(
        self, builder: GraphBuilder, coffee_items: list[MemoryItem]
    ) -> None:
        first = builder.build(coffee_items)
        first.get("m1").x, first.get("m1").y = 123.5, -42.25
        before = first.positions()

        second = builder.build(coffee_items, previous=first)

        assert second.positions() == before
        assert second.get("m1") is not first.get("m1")

    def test_new_nodes_get_fresh_positions(self, builder: GraphBuilder, coffee_items: list[MemoryItem]) -> None:
        first = builder.build(coffee_items)
        items = coffee_items + [item("m3", tags=["tea"])]

        second = builder.build(items, previous=first)

        for node_id, pos in first.positions().items():
            assert second.positions()[node_id] == pos
        assert second.get("m3") is not None
        assert second.get("tag:tea") is not None

    def test_dropped_nodes_disappear(self, builder: GraphBuilder, coffee_items: list[MemoryItem]) -> None:
        first = builder.build(coffee_items)
        second = builder.build(coffee_items[1:], previous=first)
        assert second.get("m1") is None
        assert second.get("tag:morning") is None
        assert second.positions()["tag:coffee"] == first.positions()["tag:coffee"]

    def test_merge_returns_carried_count(self, builder: GraphBuilder) -> None:
        previous = Graph(nodes=[GraphNode(id="m1", kind=NodeKind.MEMORY, label="m1", x=5.0, y=6.0)])
        graph = Graph(nodes=[
            GraphNode(id="m1", kind=NodeKind.MEMORY, label="m1"),
            GraphNode(id="m2", kind=NodeKind.MEMORY, label="m2"),
        ])
        assert builder.merge_positions(graph, previous) == 1
        assert (graph.get("m1").x, graph.get("m1").y) == (5.0, 6.0)


def test_tag_key_normalizes() -> None:
    assert tag_key("  Coffee ") == "tag:coffee"


class TestValidateItems:
    """Tests for snapshot validation."""

    def test_valid_snapshot(self, coffee_items: list[MemoryItem]) -> None:
        validate_items(coffee_items)

    def test_duplicate_ids(self) -> None:
        with pytest.raises(ValueError, match="unique"):
            validate_items([item("m1"), item("m2"), item("m1")])

    def test_id_equal_to_tag_node_id(self) -> None:
        with pytest.raises(ValueError, match="tag:coffee"):
            validate_items([item("tag:coffee"), item("m2", tags=[" Coffee "])])

    def test_blank_tags_do_not_collide(self) -> None:
        validate_items([item("tag:"), item("m2", tags=["", "  "])])
