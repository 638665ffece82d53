"""Pan/zoom camera mapping graph space to screen space.

screen = graph * zoom + offset, so graph = (screen - offset) / zoom.
"""

from dataclasses import dataclass

from kgview.config import settings


@dataclass
class Camera:
    """Pan offset in screen pixels plus a clamped zoom scalar."""

    offset_x: float = 0.0
    offset_y: float = 0.0
    zoom: float = 1.0
    min_zoom: float = settings.zoom_min
    max_zoom: float = settings.zoom_max

    def __post_init__(self) -> None:
        if not 0 < self.min_zoom <= self.max_zoom:
            raise ValueError(f"Invalid zoom range [{self.min_zoom}, {self.max_zoom}]")
        self.zoom = self.clamp_zoom(self.zoom)

    def clamp_zoom(self, zoom: float) -> float:
        return max(self.min_zoom, min(self.max_zoom, zoom))

    def screen_to_graph(self, sx: float, sy: float) -> tuple[float, float]:
        return (sx - self.offset_x) / self.zoom, (sy - self.offset_y) / self.zoom

    def graph_to_screen(self, gx: float, gy: float) -> tuple[float, float]:
        return gx * self.zoom + self.offset_x, gy * self.zoom + self.offset_y

    def pan_by(self, dx: float, dy: float) -> None:
        """Shift by a screen-space delta (1:1 pixels, independent of zoom)."""
        self.offset_x += dx
        self.offset_y += dy

    def pan_to(self, offset_x: float, offset_y: float) -> None:
        self.offset_x = offset_x
        self.offset_y = offset_y

    def zoom_at(self, factor: float, mx: float, my: float) -> None:
        """
        Multiply zoom by factor while keeping the graph point under the
        screen anchor (mx, my) fixed.

        Args:
            factor: Zoom multiplier (>1 zooms in)
            mx: Anchor x in screen pixels
            my: Anchor y in screen pixels
        """
        if factor <= 0:
            raise ValueError(f"Zoom factor must be positive, got {factor}")
        new_zoom = self.clamp_zoom(self.zoom * factor)
        ratio = new_zoom / self.zoom
        self.offset_x = mx - (mx - self.offset_x) * ratio
        self.offset_y = my - (my - self.offset_y) * ratio
        self.zoom = new_zoom

    def stage_size(self, width: float, height: float) -> tuple[float, float]:
        """Viewport extent expressed in graph units."""
        return width / self.zoom, height / self.zoom

    def reset(self) -> None:
        self.offset_x = 0.0
        self.offset_y = 0.0
        self.zoom = self.clamp_zoom(1.0)

    def to_dict(self) -> dict:
        return {"x": self.offset_x, "y": self.offset_y, "zoom": self.zoom}
