"""Unit tests for API endpoints."""

import pytest
from fastapi.testclient import TestClient

from kgview import __version__
from kgview.api.main import create_app
from kgview.api.routes import MemoryItemPayload, snapshot_stats
from kgview.models import MemoryItem

COFFEE_PAYLOAD = {
    "items": [
        {"id": "m1", "type": "preference", "content": "Loves coffee", "tags": ["coffee", "morning"]},
        {"id": "m2", "type": "fact", "content": "Dark mode", "tags": ["coffee"]},
    ]
}


def receive_until(ws, predicate, limit: int = 500) -> dict:
    """Read messages until one matches; frames keep streaming meanwhile."""
    for _ in range(limit):
        message = ws.receive_json()
        if predicate(message):
            return message
    raise AssertionError("Expected message never arrived")


@pytest.fixture
def client():
    with TestClient(create_app()) as client:
        yield client


@pytest.fixture
def coffee_client(coffee_items: list[MemoryItem]):
    with TestClient(create_app(coffee_items)) as client:
        yield client


class TestItemModels:
    """Tests for item request models."""

    def test_payload_defaults(self) -> None:
        """Test payload with defaults."""
        payload = MemoryItemPayload(id="m1")
        item = payload.to_item()
        assert item.type == "fact"
        assert item.content == ""
        assert item.tags == []

    def test_snapshot_stats_matches_graph(self, coffee_items: list[MemoryItem]) -> None:
        """Test stats computed without building a graph."""
        assert snapshot_stats(tuple(coffee_items)) == {"items": 2, "tags": 2, "connections": 3}


class TestEndpoints:
    """Tests for HTTP endpoints."""

    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "items": 0, "viewers": 0, "version": __version__}

    def test_replace_items(self, client: TestClient) -> None:
        response = client.put("/v1/items", json=COFFEE_PAYLOAD)
        assert response.status_code == 200
        assert response.json() == {"items": 2, "tags": 2, "connections": 3, "viewers": 0}

        items = client.get("/v1/items").json()["items"]
        assert [i["id"] for i in items] == ["m1", "m2"]
        assert items[0]["tags"] == ["coffee", "morning"]

        assert client.get("/v1/graph/stats").json() == {"items": 2, "tags": 2, "connections": 3}

    def test_initial_items(self, coffee_client: TestClient) -> None:
        assert coffee_client.get("/health").json()["items"] == 2

    def test_duplicate_ids_rejected(self, client: TestClient) -> None:
        body = {"items": [{"id": "m1"}, {"id": "m1"}]}
        response = client.put("/v1/items", json=body)
        assert response.status_code == 422
        assert client.get("/health").json()["items"] == 0

    def test_unknown_type_rejected(self, client: TestClient) -> None:
        response = client.put("/v1/items", json={"items": [{"id": "m1", "type": "opinion"}]})
        assert response.status_code == 422

    def test_tag_id_collision_rejected(self, client: TestClient) -> None:
        body = {"items": [
            {"id": "tag:coffee", "content": "x"},
            {"id": "m2", "content": "y", "tags": ["Coffee"]},
        ]}
        response = client.put("/v1/items", json=body)
        assert response.status_code == 422
        assert "tag:coffee" in response.json()["detail"]

    def test_invalid_initial_items_fail_at_startup(self) -> None:
        with pytest.raises(ValueError, match="tag:coffee"):
            create_app([MemoryItem(id="tag:coffee", content="x", tags=["coffee"])])

    def test_graph_page(self, client: TestClient) -> None:
        response = client.get("/graph")
        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert "/graph/ws" in response.text

    def test_favicon(self, client: TestClient) -> None:
        response = client.get("/favicon.ico")
        assert response.headers["content-type"].startswith("image/svg+xml")


class TestGraphSocket:
    """Tests for the live graph WebSocket."""

    def test_empty_snapshot_sends_placeholder(self, client: TestClient) -> None:
        with client.websocket_connect("/graph/ws") as ws:
            message = ws.receive_json()
            assert message == {"type": "empty", "stats": {"memories": 0, "tags": 0, "connections": 0}}

    def test_frames_stream(self, coffee_client: TestClient) -> None:
        with coffee_client.websocket_connect("/graph/ws") as ws:
            first = ws.receive_json()
            assert first["type"] == "frame"
            assert first["stats"] == {"memories": 2, "tags": 2, "connections": 3}
            assert ws.receive_json()["type"] == "frame"

    def test_bad_events_reported(self, coffee_client: TestClient) -> None:
        with coffee_client.websocket_connect("/graph/ws") as ws:
            ws.send_text("not json")
            error = receive_until(ws, lambda m: m["type"] == "error")
            assert error["detail"]

            ws.send_json({"type": "teleport"})
            error = receive_until(ws, lambda m: m["type"] == "error")
            assert "teleport" in error["detail"]

            ws.send_json({"type": "select", "id": ["m1"]})
            error = receive_until(ws, lambda m: m["type"] == "error")
            assert "select" in error["detail"]

            # Connection survives rejected events
            assert receive_until(ws, lambda m: m["type"] == "frame")

    def test_select_event_reported(self, coffee_client: TestClient) -> None:
        with coffee_client.websocket_connect("/graph/ws") as ws:
            ws.send_json({"type": "select", "id": "tag:coffee"})
            message = receive_until(ws, lambda m: bool(m.get("selection")))
            assert message["selection"]["connections"] == 2

    def test_viewer_follows_item_updates(self, client: TestClient) -> None:
        with client.websocket_connect("/graph/ws") as ws:
            assert ws.receive_json()["type"] == "empty"
            assert client.get("/health").json()["viewers"] == 1

            client.put("/v1/items", json=COFFEE_PAYLOAD)

            message = receive_until(ws, lambda m: m["type"] == "frame")
            assert message["stats"]["memories"] == 2
