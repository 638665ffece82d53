"""Color palettes for the light and dark themes.

The renderer is handed a resolved Palette; it never probes the environment
for colors. Resolve once per theme change.
"""

from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from types import MappingProxyType
from typing import Mapping

MEMORY_COLORS: Mapping[str, str] = MappingProxyType({
    "fact": "#4a9eff",
    "preference": "#e88a3a",
    "decision": "#9b6ee8",
    "summary": "#4ac78e",
    "tag": "#888888",
})

TAG_COLOR = "#e05577"


class Theme(str, Enum):
    """Active UI theme."""

    LIGHT = "light"
    DARK = "dark"


@dataclass(frozen=True)
class Palette:
    """Every color the renderer needs for one theme."""

    theme: Theme
    edge: str
    edge_highlight: str
    label: str
    selection_border: str
    tag: str = TAG_COLOR
    memory: Mapping[str, str] = field(default_factory=lambda: MEMORY_COLORS)

    def node_color(self, category: str | None, is_tag: bool) -> str:
        if is_tag:
            return self.tag
        return self.memory.get(category or "fact", self.memory["fact"])

    def legend(self) -> list[dict[str, str]]:
        entries = [{"label": name, "color": color} for name, color in self.memory.items()]
        entries.append({"label": "#tag", "color": self.tag})
        return entries


def resolve_palette(theme: Theme | str) -> Palette:
    """Palette for a theme; accepts the enum or its string value."""
    return _build_palette(Theme(theme))


@lru_cache(maxsize=None)
def _build_palette(theme: Theme) -> Palette:
    if theme is Theme.DARK:
        return Palette(
            theme=theme,
            edge="rgba(255,255,255,0.08)",
            edge_highlight="rgba(255,255,255,0.35)",
            label="rgba(255,255,255,0.85)",
            selection_border="#ffffff",
        )
    return Palette(
        theme=theme,
        edge="rgba(0,0,0,0.1)",
        edge_highlight="rgba(0,0,0,0.3)",
        label="rgba(0,0,0,0.75)",
        selection_border="#000000",
    )
