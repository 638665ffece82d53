"""Pointer/wheel input state machine: drag nodes, pan, hover, select, zoom.

States:
    IDLE           - hover tracking; click selects
    PANNING        - pointer pressed on empty canvas
    DRAGGING_NODE  - pointer pressed on a node; the node is pinned

A press that travels at least click_threshold screen pixels before release is a
drag, and the click the browser fires after it is swallowed. Shorter presses
are taps and their click selects.
"""

import logging
import math
from enum import Enum

from kgview.config import settings
from kgview.graph.models import Graph, GraphNode
from kgview.layout.spatial import HitIndex, LinearHitIndex
from kgview.view.camera import Camera

logger = logging.getLogger(__name__)


class InteractionState(str, Enum):
    """Gesture currently in progress."""

    IDLE = "idle"
    PANNING = "panning"
    DRAGGING_NODE = "dragging_node"


class InteractionController:
    """Translates screen-space input into pin/drag/pan/select/zoom operations."""

    def __init__(
        self,
        camera: Camera,
        graph: Graph | None = None,
        hit_index: HitIndex | None = None,
        hit_padding: float | None = None,
        click_threshold: float | None = None,
        zoom_step: float | None = None,
    ) -> None:
        self.camera = camera
        self.graph = graph if graph is not None else Graph()
        self.hit_index = hit_index or LinearHitIndex()
        self.hit_padding = settings.hit_padding if hit_padding is None else hit_padding
        self.click_threshold = settings.click_threshold if click_threshold is None else click_threshold
        self.zoom_step = zoom_step or settings.zoom_step

        self.state = InteractionState.IDLE
        self.selected: GraphNode | None = None
        self.hovered: GraphNode | None = None
        self.dragged: GraphNode | None = None

        self._press_x = 0.0
        self._press_y = 0.0
        self._pan_origin = (0.0, 0.0)
        self._travel = 0.0
        self._swallow_click = False

        self.hit_index.rebuild(self.graph.nodes)

    # -- graph lifecycle -------------------------------------------------

    def set_graph(self, graph: Graph) -> None:
        """Adopt a rebuilt graph. Node objects are new, so gesture state resets."""
        self.graph = graph
        self.clear()
        self.reindex()

    def reindex(self) -> None:
        self.hit_index.rebuild(self.graph.nodes)

    def clear(self) -> None:
        if self.dragged is not None:
            self.dragged.pinned = False
        self.state = InteractionState.IDLE
        self.selected = None
        self.hovered = None
        self.dragged = None
        self._swallow_click = False

    # -- queries ---------------------------------------------------------

    def hit_test(self, sx: float, sy: float) -> GraphNode | None:
        """Topmost node within radius + padding of the screen point, if any."""
        gx, gy = self.camera.screen_to_graph(sx, sy)
        return self.hit_index.find(gx, gy, self.hit_padding)

    @property
    def selected_id(self) -> str | None:
        return self.selected.id if self.selected is not None else None

    @property
    def hovered_id(self) -> str | None:
        return self.hovered.id if self.hovered is not None else None

    @property
    def cursor(self) -> str:
        if self.state is not InteractionState.IDLE:
            return "grabbing"
        return "pointer" if self.hovered is not None else "grab"

    # -- events ----------------------------------------------------------

    def pointer_down(self, sx: float, sy: float) -> None:
        if self.state is not InteractionState.IDLE:
            # Release was never delivered (e.g. focus lost); finish that gesture
            self._end_gesture()

        self._press_x, self._press_y = sx, sy
        self._travel = 0.0
        self._swallow_click = False

        node = self.hit_test(sx, sy)
        if node is not None:
            node.pinned = True
            self.dragged = node
            self.state = InteractionState.DRAGGING_NODE
            logger.debug(f"Dragging node {node.id}")
        else:
            self._pan_origin = (self.camera.offset_x, self.camera.offset_y)
            self.state = InteractionState.PANNING

    def pointer_move(self, sx: float, sy: float) -> None:
        if self.state is InteractionState.IDLE:
            self.hovered = self.hit_test(sx, sy)
            return

        self._travel = max(self._travel, math.hypot(sx - self._press_x, sy - self._press_y))

        if self.state is InteractionState.DRAGGING_NODE and self.dragged is not None:
            self.dragged.x, self.dragged.y = self.camera.screen_to_graph(sx, sy)
        elif self.state is InteractionState.PANNING:
            ox, oy = self._pan_origin
            self.camera.pan_to(ox + (sx - self._press_x), oy + (sy - self._press_y))

    def pointer_up(self) -> None:
        if self.state is InteractionState.IDLE:
            return
        self._swallow_click = self._travel >= self.click_threshold
        self._end_gesture()
        self.reindex()

    def pointer_leave(self) -> None:
        self.pointer_up()
        self.hovered = None

    def click(self, sx: float, sy: float) -> None:
        """Select the node under the pointer, or clear the selection."""
        if self._swallow_click:
            self._swallow_click = False
            return
        self.selected = self.hit_test(sx, sy)

    def wheel(self, sx: float, sy: float, delta_y: float) -> bool:
        """Zoom toward the cursor. Returns True: the page must not scroll."""
        if delta_y == 0:
            # Horizontal-only scroll
            return True
        factor = self.zoom_step if delta_y < 0 else 2 - self.zoom_step
        self.camera.zoom_at(factor, sx, sy)
        return True

    def select(self, node_id: str | None) -> GraphNode | None:
        self.selected = self.graph.get(node_id)
        return self.selected

    def _end_gesture(self) -> None:
        if self.dragged is not None:
            self.dragged.pinned = False
            self.dragged = None
        self.state = InteractionState.IDLE
