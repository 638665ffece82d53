"""Drawing surfaces.

Surface is the slice of a 2D canvas API the renderer uses. DisplayListSurface
records each call as a JSON-ready op that the browser client replays onto a
real <canvas>.
"""

from typing import Any, Protocol


class Surface(Protocol):
    def resize(self, width: float, height: float, device_pixel_ratio: float) -> None: ...

    def clear(self) -> None: ...

    def set_transform(self, offset_x: float, offset_y: float, zoom: float) -> None: ...

    def line(
        self, x1: float, y1: float, x2: float, y2: float,
        color: str, width: float, alpha: float = 1.0,
    ) -> None: ...

    def circle(
        self, x: float, y: float, radius: float, fill: str,
        alpha: float = 1.0, glow: str | None = None,
        stroke: str | None = None, stroke_width: float = 0.0,
    ) -> None: ...

    def text(
        self, x: float, y: float, text: str, color: str, font: str,
        alpha: float = 1.0,
    ) -> None: ...


def _r(value: float) -> float:
    # Sub-hundredth precision is invisible and bloats the wire format
    return round(value, 2)


class DisplayListSurface:
    """Records draw calls as a list of dicts."""

    def __init__(self) -> None:
        self.ops: list[dict[str, Any]] = []

    def reset(self) -> None:
        self.ops = []

    def resize(self, width: float, height: float, device_pixel_ratio: float) -> None:
        self.ops.append({
            "op": "resize",
            "w": round(width),
            "h": round(height),
            "dpr": device_pixel_ratio,
        })

    def clear(self) -> None:
        self.ops.append({"op": "clear"})

    def set_transform(self, offset_x: float, offset_y: float, zoom: float) -> None:
        self.ops.append({"op": "transform", "x": _r(offset_x), "y": _r(offset_y), "k": zoom})

    def line(self, x1, y1, x2, y2, color, width, alpha=1.0) -> None:
        self.ops.append({
            "op": "line",
            "x1": _r(x1), "y1": _r(y1), "x2": _r(x2), "y2": _r(y2),
            "color": color, "width": width, "alpha": alpha,
        })

    def circle(self, x, y, radius, fill, alpha=1.0, glow=None, stroke=None, stroke_width=0.0) -> None:
        op = {"op": "circle", "x": _r(x), "y": _r(y), "r": radius, "fill": fill, "alpha": alpha}
        if glow:
            op["glow"] = glow
        if stroke:
            op["stroke"] = stroke
            op["strokeWidth"] = stroke_width
        self.ops.append(op)

    def text(self, x, y, text, color, font, alpha=1.0) -> None:
        self.ops.append({
            "op": "text",
            "x": _r(x), "y": _r(y), "text": text,
            "color": color, "font": font, "alpha": alpha,
        })

    def count(self, op: str) -> int:
        return sum(1 for o in self.ops if o["op"] == op)
