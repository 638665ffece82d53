"""Per-frame drawing of edges, nodes and labels."""

import logging
from dataclasses import dataclass

from kgview.config import settings
from kgview.graph.builder import truncate
from kgview.graph.models import Graph
from kgview.view.camera import Camera
from kgview.view.surface import Surface
from kgview.view.theme import Palette, Theme, resolve_palette

logger = logging.getLogger(__name__)

DIMMED_ALPHA = 0.25
GLOW_BLUR = 16
LABEL_GAP = 4
FONT_FAMILY = "-apple-system, BlinkMacSystemFont, sans-serif"


@dataclass
class Viewport:
    """Container size in CSS pixels and the display's pixel density."""

    width: float = settings.default_viewport_width
    height: float = settings.default_viewport_height
    device_pixel_ratio: float = 1.0

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Viewport size must be non-negative, got {self.width}x{self.height}")
        if self.device_pixel_ratio <= 0:
            self.device_pixel_ratio = 1.0

    @property
    def is_drawable(self) -> bool:
        return self.width > 0 and self.height > 0


class Renderer:
    """Draws a graph through a camera onto a Surface.

    When a node is selected, it and its direct neighbors stay opaque and
    everything else is dimmed.
    """

    def __init__(self, palette: Palette | None = None, label_length: int | None = None) -> None:
        self.palette = palette or resolve_palette(Theme(settings.default_theme))
        self.label_length = label_length or settings.draw_label_length

    def set_palette(self, palette: Palette) -> None:
        if palette is not self.palette:
            logger.debug(f"Switching palette to {palette.theme.value}")
        self.palette = palette

    def draw(
        self,
        surface: Surface | None,
        graph: Graph,
        camera: Camera,
        viewport: Viewport,
        selected_id: str | None = None,
        hovered_id: str | None = None,
    ) -> None:
        if surface is None:
            return

        dpr = viewport.device_pixel_ratio
        surface.resize(viewport.width * dpr, viewport.height * dpr, dpr)
        surface.clear()
        if not viewport.is_drawable:
            return
        surface.set_transform(camera.offset_x, camera.offset_y, camera.zoom)

        palette = self.palette
        has_selection = graph.get(selected_id) is not None
        neighborhood: set[str] = set()
        if has_selection:
            neighborhood = graph.neighbors(selected_id)
            neighborhood.add(selected_id)

        for edge in graph.edges:
            a = graph.get(edge.source)
            b = graph.get(edge.target)
            if a is None or b is None:
                continue
            if has_selection and edge.touches(selected_id):
                surface.line(a.x, a.y, b.x, b.y, palette.edge_highlight, 1.5)
            else:
                alpha = DIMMED_ALPHA if has_selection else 1.0
                surface.line(a.x, a.y, b.x, b.y, palette.edge, 0.8, alpha)

        for node in graph.nodes:
            color = palette.node_color(node.category, node.is_tag)
            alpha = 1.0 if not has_selection or node.id in neighborhood else DIMMED_ALPHA
            is_selected = node.id == selected_id
            glow = color if is_selected or node.id == hovered_id else None

            surface.circle(
                node.x, node.y, node.radius, color,
                alpha=alpha,
                glow=glow,
                stroke=palette.selection_border if is_selected else None,
                stroke_width=2.0 if is_selected else 0.0,
            )

            font = f"600 11px {FONT_FAMILY}" if node.is_tag else f"400 10px {FONT_FAMILY}"
            surface.text(
                node.x, node.y + node.radius + LABEL_GAP,
                truncate(node.label, self.label_length),
                palette.label, font, alpha,
            )
