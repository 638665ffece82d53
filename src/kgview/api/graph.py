"""Graph visualization page and its live WebSocket.

Each WebSocket connection gets its own GraphView. The browser sends input
events; the server runs physics and sends back display lists to paint.
"""

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from fastapi.responses import HTMLResponse, Response

from kgview.api.graph_template import GRAPH_HTML
from kgview.view.session import GraphView

logger = logging.getLogger(__name__)

router = APIRouter()

# SVG favicon matching the graph theme
FAVICON_SVG = """<svg xmlns='http://www.w3.org/2000/svg' viewBox='0 0 100 100'>
<circle cx='50' cy='50' r='12' fill='#e05577'/>
<circle cx='22' cy='30' r='8' fill='#4a9eff'/>
<circle cx='78' cy='30' r='8' fill='#e88a3a'/>
<circle cx='50' cy='85' r='8' fill='#9b6ee8'/>
<line x1='50' y1='50' x2='22' y2='30' stroke='#888888' stroke-width='3'/>
<line x1='50' y1='50' x2='78' y2='30' stroke='#888888' stroke-width='3'/>
<line x1='50' y1='50' x2='50' y2='85' stroke='#888888' stroke-width='3'/>
</svg>"""


@router.get("/favicon.ico")
async def favicon() -> Response:
    """Return SVG favicon."""
    return Response(content=FAVICON_SVG, media_type="image/svg+xml")


@router.get("/graph", response_class=HTMLResponse)
async def graph_view() -> str:
    """Serve the knowledge graph page."""
    return GRAPH_HTML


@router.websocket("/graph/ws")
async def graph_socket(websocket: WebSocket) -> None:
    """Drive one GraphView: input in, frames out, teardown on disconnect."""
    await websocket.accept()
    feed = websocket.app.state.feed

    view = GraphView()
    view.mount(feed)
    view.start(websocket.send_json)
    logger.info(f"Graph viewer connected ({feed.subscriber_count} active)")

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                event = json.loads(raw)
                if not isinstance(event, dict):
                    raise ValueError("Event must be a JSON object")
                view.handle_event(event)
            except ValueError as e:
                logger.warning(f"Rejected graph event: {e}")
                await websocket.send_json({"type": "error", "detail": str(e)})
    except WebSocketDisconnect:
        logger.info("Graph viewer disconnected")
    finally:
        await view.unmount()
