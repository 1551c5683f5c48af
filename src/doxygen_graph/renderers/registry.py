"""Element name to render function dispatch.

Renderers never inspect concrete node classes; they look up the node's
``element_name`` in a registry and fall back to rendering the children.
"""

from typing import Callable, Dict, Iterator, Optional

from doxygen_graph.data_model.node import Node, NodeChild

RenderFunction = Callable[["Renderer", Node], str]


class RendererRegistry:
    """Mapping from element name to render function."""

    def __init__(self, renderers: Optional[Dict[str, RenderFunction]] = None) -> None:
        self._renderers: Dict[str, RenderFunction] = dict(renderers or {})

    def add(self, element_name: str, function: RenderFunction) -> None:
        self._renderers[element_name] = function

    def register(self, *element_names: str) -> Callable[[RenderFunction], RenderFunction]:
        """Decorator registering ``function`` for each of ``element_names``."""
        def decorator(function: RenderFunction) -> RenderFunction:
            for element_name in element_names:
                self.add(element_name, function)
            return function
        return decorator

    def get(self, element_name: str) -> Optional[RenderFunction]:
        return self._renderers.get(element_name)

    def copy(self) -> "RendererRegistry":
        return RendererRegistry(self._renderers)

    def __contains__(self, element_name: object) -> bool:
        return element_name in self._renderers

    def __iter__(self) -> Iterator[str]:
        return iter(self._renderers)

    def __len__(self) -> int:
        return len(self._renderers)


class Renderer:
    """Walks a node tree, dispatching every node through ``registry``."""

    def __init__(self, registry: RendererRegistry) -> None:
        self.registry = registry

    def render(self, node: Optional[NodeChild]) -> str:
        if node is None:
            return ""
        if isinstance(node, str):
            return self.render_text(node)
        function = self.registry.get(node.element_name)
        if function is None:
            return self.render_children(node)
        return function(self, node)

    def render_children(self, node: Node) -> str:
        return "".join(self.render(child) for child in node.children)

    def render_text(self, text: str) -> str:
        return text
