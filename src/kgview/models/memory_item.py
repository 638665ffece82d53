"""Memory item model - the source records the graph is built from."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Literal, get_args

MemoryType = Literal["summary", "fact", "preference", "decision", "tag"]
MemorySource = Literal["manual", "auto-extracted", "agent-created", "auto-summary"]

MEMORY_TYPES: tuple[str, ...] = get_args(MemoryType)
MEMORY_SOURCES: tuple[str, ...] = get_args(MemorySource)


def parse_timestamp(value: Any) -> float | None:
    """Parse a timestamp (epoch millis, ISO string or datetime) into epoch millis."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"Invalid timestamp: {value!r}")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, datetime):
        return value.timestamp() * 1000
    if isinstance(value, str):
        return datetime.fromisoformat(value).timestamp() * 1000
    raise ValueError(f"Invalid timestamp: {value!r}")


@dataclass
class MemoryItem:
    """
    A single remembered item as supplied by the memory store.

    Items are read-only snapshots: the graph never writes back to them.
    """

    id: str
    content: str
    type: MemoryType = "fact"
    tags: list[str] = field(default_factory=list)
    timestamp: float | None = None  # epoch millis

    # Provenance
    source: MemorySource | None = None
    workspace: str | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("MemoryItem requires a non-empty id")
        if self.type not in MEMORY_TYPES:
            raise ValueError(f"Unknown memory type: {self.type!r}")
        if self.source is not None and self.source not in MEMORY_SOURCES:
            raise ValueError(f"Unknown memory source: {self.source!r}")

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "type": self.type,
            "content": self.content,
            "tags": list(self.tags),
            "timestamp": self.timestamp,
            "source": self.source,
            "workspace": self.workspace,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MemoryItem":
        """Create from the wire shape. Accepts `category` as an alias of `type`."""
        tags = data.get("tags") or []
        return cls(
            id=str(data["id"]),
            content=str(data.get("content") or ""),
            type=data.get("type") or data.get("category") or "fact",
            tags=[str(t) for t in tags],
            timestamp=parse_timestamp(data.get("timestamp")),
            source=data.get("source"),
            workspace=data.get("workspace"),
        )
