"""Camera, input handling, rendering and the per-view frame loop."""

from kgview.view.camera import Camera
from kgview.view.interaction import InteractionController, InteractionState
from kgview.view.renderer import Renderer, Viewport
from kgview.view.session import GraphView
from kgview.view.surface import DisplayListSurface, Surface
from kgview.view.theme import Palette, Theme, resolve_palette

__all__ = [
    "Camera",
    "InteractionController",
    "InteractionState",
    "Renderer",
    "Viewport",
    "GraphView",
    "Surface",
    "DisplayListSurface",
    "Palette",
    "Theme",
    "resolve_palette",
]
