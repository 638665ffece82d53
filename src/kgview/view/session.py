"""One mounted graph view: store, simulation, camera, input and the frame loop.

Everything runs on the event loop that owns the view. Input handlers, item
updates and frames are interleaved by loop turn order, so a mutation made by a
handler is always seen by the next frame. No locks, no threads.
"""

import asyncio
import logging
import math
from collections.abc import Awaitable, Callable
from typing import Any

from kgview.config import settings
from kgview.graph.builder import GraphBuilder
from kgview.graph.models import Graph
from kgview.graph.store import GraphStore, ItemFeed, Unsubscribe
from kgview.layout.physics import PhysicsSimulator
from kgview.layout.spatial import HitIndex, make_hit_index
from kgview.view.camera import Camera
from kgview.view.interaction import InteractionController
from kgview.view.renderer import Renderer, Viewport
from kgview.view.surface import DisplayListSurface
from kgview.view.theme import Theme, resolve_palette

logger = logging.getLogger(__name__)

Send = Callable[[dict[str, Any]], Awaitable[None]]

_UNSET = object()


def _number(event: dict[str, Any], key: str, default: float | None = None) -> float:
    value = event.get(key, default)
    if value is None or isinstance(value, bool):
        raise ValueError(f"Event {event.get('type')!r} needs numeric {key!r}")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"Event {event.get('type')!r} has non-numeric {key!r}: {value!r}") from None
    if not math.isfinite(number):
        raise ValueError(f"Event {event.get('type')!r} has non-finite {key!r}")
    return number


class GraphView:
    """
    Lifecycle:
        view = GraphView()
        view.mount(feed)           # subscribe to item snapshots
        view.start(send)           # begin the frame loop
        view.handle_event({...})   # between frames
        await view.unmount()       # cancel loop, drop every subscription
    """

    def __init__(
        self,
        builder: GraphBuilder | None = None,
        simulator: PhysicsSimulator | None = None,
        camera: Camera | None = None,
        renderer: Renderer | None = None,
        viewport: Viewport | None = None,
        hit_index: HitIndex | None = None,
        frame_interval: float | None = None,
        physics_tick: float | None = None,
        max_steps_per_frame: int | None = None,
    ) -> None:
        self.store = GraphStore(builder)
        self.simulator = simulator or PhysicsSimulator()
        self.camera = camera or Camera()
        self.renderer = renderer or Renderer()
        self.viewport = viewport or Viewport()
        self.controller = InteractionController(
            self.camera,
            hit_index=hit_index or make_hit_index(settings.hit_grid_cell_size, settings.hit_padding),
        )
        self.frame_interval = frame_interval or settings.frame_interval
        self.physics_tick = physics_tick or settings.physics_tick
        self.max_steps_per_frame = max_steps_per_frame or settings.max_steps_per_frame

        self._accumulator = 0.0
        self._task: asyncio.Task | None = None
        self._unsubscribers: list[Unsubscribe] = [self.store.subscribe(self._on_graph)]
        self._graph_changed = True
        self._sent_empty = False
        self._sent_selection: Any = _UNSET
        self.mounted = False

    @property
    def graph(self) -> Graph:
        return self.store.graph

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    # -- lifecycle -------------------------------------------------------

    def mount(self, feed: ItemFeed) -> None:
        """Follow feed and build from its current snapshot."""
        if self.mounted:
            return
        self._unsubscribers.append(feed.subscribe(self.store.update))
        self.store.update(feed.items)
        self.mounted = True

    def start(self, send: Send) -> asyncio.Task:
        """Start the frame loop on the running event loop."""
        if self.running:
            raise RuntimeError("Frame loop already running")
        self._task = asyncio.create_task(self.run(send))
        return self._task

    async def unmount(self) -> None:
        """Stop the frame loop and detach every listener. Safe to call twice."""
        task, self._task = self._task, None
        if task is not None:
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
            except Exception as e:
                logger.warning(f"Frame loop ended with error: {e}")
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()
        self.store.close()
        self.mounted = False

    async def run(self, send: Send) -> None:
        loop = asyncio.get_running_loop()
        last = loop.time()
        logger.info("Frame loop started")
        try:
            while True:
                now = loop.time()
                message = self.next_message(now - last)
                last = now
                if message is not None:
                    await send(message)
                await asyncio.sleep(self.frame_interval)
        finally:
            logger.info(f"Frame loop stopped after {self.simulator.steps} physics steps")

    # -- frames ----------------------------------------------------------

    def frame(self, elapsed: float | None = None) -> list[dict[str, Any]] | None:
        """
        Simulate then draw one frame.

        Physics runs on a fixed tick: elapsed wall time is banked and spent in
        whole ticks (at least one, at most max_steps_per_frame; backlog beyond
        that is dropped).

        Returns:
            Display list ops, or None when the graph is empty
        """
        graph = self.store.graph
        if graph.is_empty:
            self._accumulator = 0.0
            return None

        if self.viewport.is_drawable:
            self._accumulator += self.physics_tick if elapsed is None else max(0.0, elapsed)
            steps = min(self.max_steps_per_frame, max(1, int(self._accumulator / self.physics_tick)))
            self._accumulator -= steps * self.physics_tick
            if self._accumulator < 0 or steps == self.max_steps_per_frame:
                self._accumulator = 0.0

            width, height = self.camera.stage_size(self.viewport.width, self.viewport.height)
            for _ in range(steps):
                self.simulator.step(graph, width, height)
            self.controller.reindex()

        surface = DisplayListSurface()
        self.renderer.draw(
            surface,
            graph,
            self.camera,
            self.viewport,
            selected_id=self.controller.selected_id,
            hovered_id=self.controller.hovered_id,
        )
        return surface.ops

    def next_message(self, elapsed: float | None = None) -> dict[str, Any] | None:
        """Frame message for the client, or None when there is nothing to send."""
        ops = self.frame(elapsed)
        if ops is None:
            if self._sent_empty:
                return None
            self._sent_empty = True
            self._sent_selection = _UNSET
            return {"type": "empty", "stats": self.stats()}

        self._sent_empty = False
        message: dict[str, Any] = {
            "type": "frame",
            "ops": ops,
            "cursor": self.controller.cursor,
        }
        if self._graph_changed:
            message["stats"] = self.stats()
            message["legend"] = self.legend()
            self._graph_changed = False
        selection = self.selection_details()
        if selection != self._sent_selection:
            message["selection"] = selection
            self._sent_selection = selection
        return message

    # -- input -----------------------------------------------------------

    def handle_event(self, event: dict[str, Any]) -> None:
        """Apply one client event. Raises ValueError for malformed events."""
        kind = event.get("type")
        controller = self.controller

        if kind == "pointerdown":
            controller.pointer_down(_number(event, "x"), _number(event, "y"))
        elif kind == "pointermove":
            controller.pointer_move(_number(event, "x"), _number(event, "y"))
        elif kind == "pointerup":
            controller.pointer_up()
        elif kind == "pointerleave":
            controller.pointer_leave()
        elif kind == "click":
            controller.click(_number(event, "x"), _number(event, "y"))
        elif kind == "wheel":
            controller.wheel(_number(event, "x"), _number(event, "y"), _number(event, "deltaY"))
        elif kind == "resize":
            self.resize(
                _number(event, "width"),
                _number(event, "height"),
                _number(event, "dpr", 1.0),
            )
        elif kind == "theme":
            self.set_theme(event.get("theme", ""))
        elif kind == "select":
            node_id = event.get("id")
            if node_id is not None and not isinstance(node_id, str):
                raise ValueError(f"Event 'select' needs a string or null 'id', got {node_id!r}")
            controller.select(node_id)
        elif kind == "reset_camera":
            self.camera.reset()
        else:
            raise ValueError(f"Unknown event type: {kind!r}")

    def resize(self, width: float, height: float, device_pixel_ratio: float = 1.0) -> None:
        """Resize the backing store only; camera and positions are untouched."""
        self.viewport = Viewport(width, height, device_pixel_ratio)

    def set_theme(self, theme: Theme | str) -> None:
        try:
            palette = resolve_palette(theme)
        except ValueError:
            raise ValueError(f"Unknown theme: {theme!r}") from None
        self.renderer.set_palette(palette)

    # -- read models -----------------------------------------------------

    def stats(self) -> dict[str, int]:
        return self.store.graph.stats()

    def legend(self) -> list[dict[str, str]]:
        return self.renderer.palette.legend()

    def selection_details(self) -> dict[str, Any] | None:
        node = self.controller.selected
        if node is None:
            return None

        details: dict[str, Any] = {
            "id": node.id,
            "kind": node.kind.value,
            "label": node.label,
            "color": self.renderer.palette.node_color(node.category, node.is_tag),
        }
        if node.is_tag:
            details["connections"] = self.store.graph.degree(node.id)
        elif node.data is not None:
            item = node.data
            details.update(
                category=item.type,
                content=item.content,
                tags=list(item.tags),
                timestamp=item.timestamp,
                source=item.source,
            )
        return details

    def _on_graph(self, graph: Graph) -> None:
        self.controller.set_graph(graph)
        self._graph_changed = True
        logger.debug(f"View adopted graph with {len(graph)} nodes")
