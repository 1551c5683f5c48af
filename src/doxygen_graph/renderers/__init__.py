"""Renderer dispatch registry and plain-text rendering."""

from doxygen_graph.renderers.registry import RenderFunction, Renderer, RendererRegistry
from doxygen_graph.renderers.text import (
    PLAIN_TEXT,
    LinkedTextRenderer,
    render_linked_text,
    render_plain_text,
)

__all__ = [
    "LinkedTextRenderer",
    "PLAIN_TEXT",
    "RenderFunction",
    "Renderer",
    "RendererRegistry",
    "render_linked_text",
    "render_plain_text",
]
