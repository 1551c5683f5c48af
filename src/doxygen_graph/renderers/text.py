"""Plain-text rendering of description trees.

Used for brief descriptions in the serialized graph and the CLI listing.
``LinkedTextRenderer`` additionally turns resolved refs into
``[label](permalink)`` through the workspace permalink service.
"""

from typing import TYPE_CHECKING, Optional, cast

from doxygen_graph.data_model.description import (
    FORMAT_ONLY_ELEMENTS,
    SUBSTITUTIONS,
    Emoji,
    Image,
    Ref,
    Sp,
    Substitution,
)
from doxygen_graph.data_model.node import Node
from doxygen_graph.renderers.registry import Renderer, RendererRegistry

if TYPE_CHECKING:
    from doxygen_graph.workspace import Workspace

PLAIN_TEXT = RendererRegistry()


@PLAIN_TEXT.register("para")
def _render_para(renderer: Renderer, node: Node) -> str:
    return renderer.render_children(node).strip() + "\n"


@PLAIN_TEXT.register("linebreak", "hruler")
def _render_newline(renderer: Renderer, node: Node) -> str:
    return "\n"


@PLAIN_TEXT.register("sp")
def _render_sp(renderer: Renderer, node: Node) -> str:
    return " " * (cast(Sp, node).value or 1)


@PLAIN_TEXT.register(*SUBSTITUTIONS)
def _render_substitution(renderer: Renderer, node: Node) -> str:
    return cast(Substitution, node).value


@PLAIN_TEXT.register("anchor", "indexentry", *FORMAT_ONLY_ELEMENTS)
def _render_nothing(renderer: Renderer, node: Node) -> str:
    return ""


@PLAIN_TEXT.register("image")
def _render_image(renderer: Renderer, node: Node) -> str:
    return cast(Image, node).alt or renderer.render_children(node)


@PLAIN_TEXT.register("emoji")
def _render_emoji(renderer: Renderer, node: Node) -> str:
    return f":{cast(Emoji, node).name}:"


@PLAIN_TEXT.register("listitem")
def _render_list_item(renderer: Renderer, node: Node) -> str:
    return "- " + renderer.render_children(node).strip() + "\n"


@PLAIN_TEXT.register("codeline")
def _render_codeline(renderer: Renderer, node: Node) -> str:
    return renderer.render_children(node) + "\n"


class LinkedTextRenderer(Renderer):
    """Plain text, with resolved refs rendered as markdown links."""

    def __init__(self, workspace: "Workspace", registry: Optional[RendererRegistry] = None,
                 source_id: Optional[str] = None) -> None:
        registry = (registry or PLAIN_TEXT).copy()
        registry.add("ref", _render_ref_link)
        super().__init__(registry)
        self.workspace = workspace
        self.source_id = source_id


def _render_ref_link(renderer: Renderer, node: Node) -> str:
    ref = cast(Ref, node)
    linked = cast(LinkedTextRenderer, renderer)
    label = linked.render_children(ref)
    if ref.external:
        return label
    permalink = linked.workspace.get_permalink(
        ref.refid, ref.kindref, source_id=linked.source_id
    )
    if permalink is None:
        return label
    return f"[{label}]({permalink})"


def render_plain_text(node: Optional[Node]) -> str:
    return Renderer(PLAIN_TEXT).render(node)


def render_linked_text(node: Optional[Node], workspace: "Workspace",
                       source_id: Optional[str] = None) -> str:
    return LinkedTextRenderer(workspace, source_id=source_id).render(node)
