"""Common node type for every data-model variant.

Each concrete variant is a dataclass deriving directly from ``Node``; the
``element_name`` field is the variant tag that consumers dispatch on.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Optional, Type, TypeVar, Union

NodeChild = Union["Node", str]
N = TypeVar("N", bound="Node")


@dataclass(eq=False)
class Node:
    """Parsed entity with ordered mixed children (text and nodes)."""

    element_name: str = ""
    children: List[NodeChild] = field(default_factory=list)
    skip_paragraph: bool = False

    def child_nodes(self) -> List["Node"]:
        return [child for child in self.children if isinstance(child, Node)]

    def find_all(self, node_type: Type[N]) -> List[N]:
        """Return direct children of ``node_type``, in document order."""
        return [child for child in self.children if isinstance(child, node_type)]

    def find(self, node_type: Type[N]) -> Optional[N]:
        for child in self.children:
            if isinstance(child, node_type):
                return child
        return None

    def text(self) -> str:
        """Concatenate all descendant text segments."""
        parts: List[str] = []
        for child in self.children:
            parts.append(child if isinstance(child, str) else child.text())
        return "".join(parts)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(<{self.element_name}>, {len(self.children)} children)"


def walk(node: Node) -> Iterator[Node]:
    """Yield ``node`` and all descendant nodes, depth first, in document order."""
    stack: List[Node] = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.child_nodes()))


class NodeVisitor:
    """Dispatch on ``element_name`` to ``visit_<element_name>`` methods.

    Unhandled variants fall through to ``generic_visit``, which visits the
    children. Subclasses may also register handlers in ``handlers``.
    """

    def __init__(self) -> None:
        self.handlers: Dict[str, Callable[[Node], Any]] = {}

    def visit(self, node: Node) -> Any:
        handler = self.handlers.get(node.element_name)
        if handler is None:
            handler = getattr(self, f"visit_{node.element_name}", self.generic_visit)
        return handler(node)

    def generic_visit(self, node: Node) -> None:
        for child in node.child_nodes():
            self.visit(child)
