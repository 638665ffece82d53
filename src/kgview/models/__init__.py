"""kgview data models."""

from kgview.models.memory_item import (
    MEMORY_SOURCES,
    MEMORY_TYPES,
    MemoryItem,
    MemorySource,
    MemoryType,
    parse_timestamp,
)

__all__ = [
    "MemoryItem",
    "MemoryType",
    "MemorySource",
    "MEMORY_TYPES",
    "MEMORY_SOURCES",
    "parse_timestamp",
]
