"""Typed read access to lxml elements.

The accessor never mutates the tree. Structural expectations that fail raise
``SchemaViolation`` naming the element and the missing key.
"""

from typing import Any, List, Optional, Union

from lxml import etree

from doxygen_graph.shared.config import ParserConfig
from doxygen_graph.shared.errors import SchemaViolation

InnerElement = Union[str, Any]

_TRUE_VALUES = ("yes", "true")
_FALSE_VALUES = ("no", "false")


def local_name(name: str) -> str:
    """Drop an lxml ``{namespace}`` prefix from a tag or attribute name."""
    if name.startswith("{"):
        return name.split("}", 1)[1]
    return name


def is_element(node: Any) -> bool:
    """True for real elements; comments and processing instructions are not."""
    return isinstance(node, etree._Element) and isinstance(node.tag, str)


class ElementAccessor:
    """Pure queries over a parsed lxml element tree."""

    def __init__(self, config: Optional[ParserConfig] = None) -> None:
        self.config = config or ParserConfig()

    def tag(self, element: Any) -> str:
        return local_name(element.tag)

    def _keeps_text(self, text: Optional[str]) -> bool:
        if not text:
            return False
        return self.config.preserve_whitespace_text or bool(text.strip())

    # Attributes

    def _attributes(self, element: Any) -> dict:
        return {local_name(key): value for key, value in element.attrib.items()}

    def has_attributes(self, element: Any) -> bool:
        return len(element.attrib) > 0

    def attribute_names(self, element: Any) -> List[str]:
        """Local attribute names in document order."""
        return [local_name(key) for key in element.attrib.keys()]

    def has_attribute(self, element: Any, name: str) -> bool:
        return name in self._attributes(element)

    def string_attribute(self, element: Any, name: str) -> str:
        attributes = self._attributes(element)
        if name not in attributes:
            raise SchemaViolation("Missing mandatory attribute", self.tag(element), name)
        return attributes[name]

    def number_attribute(self, element: Any, name: str) -> int:
        value = self.string_attribute(element, name)
        try:
            return int(value)
        except ValueError:
            raise SchemaViolation(
                f"Attribute value '{value}' is not a number", self.tag(element), name
            ) from None

    def bool_attribute(self, element: Any, name: str) -> bool:
        value = self.string_attribute(element, name).lower()
        if value in _TRUE_VALUES:
            return True
        if value in _FALSE_VALUES:
            return False
        raise SchemaViolation(
            f"Attribute value '{value}' is not a boolean", self.tag(element), name
        )

    # Content

    def inner_elements(self, element: Any, tag_name: str) -> List[InnerElement]:
        """Text segments and child elements in document order.

        Whitespace-only text segments are dropped unless the parser
        configuration preserves them.
        """
        if self.tag(element) != tag_name:
            raise SchemaViolation(
                f"Expected <{tag_name}>", self.tag(element), "tag"
            )
        items: List[InnerElement] = []
        if self._keeps_text(element.text):
            items.append(element.text)
        for child in element:
            if is_element(child):
                items.append(child)
            if self._keeps_text(child.tail):
                items.append(child.tail)
        return items

    def has_inner_text(self, element: Any) -> bool:
        """True when the element holds non-whitespace character data of its own."""
        if element.text and element.text.strip():
            return True
        return any(child.tail and child.tail.strip() for child in element)

    def _child(self, element: Any, child_tag: str) -> Optional[Any]:
        for child in element:
            if is_element(child) and local_name(child.tag) == child_tag:
                return child
        return None

    def has_inner_element(self, element: Any, child_tag: str) -> bool:
        return self._child(element, child_tag) is not None

    def is_inner_element_text(self, element: Any, child_tag: str) -> bool:
        """True when the named child exists and holds only text."""
        child = self._child(element, child_tag)
        if child is None:
            return False
        return not any(is_element(grandchild) for grandchild in child)

    def inner_element_text(self, element: Any, child_tag: str) -> str:
        child = self._child(element, child_tag)
        if child is None:
            raise SchemaViolation("Missing mandatory child", self.tag(element), child_tag)
        return self.text_of(child)

    def text_of(self, element: Any) -> str:
        """Text content of an element that may only hold text."""
        for grandchild in element:
            if is_element(grandchild):
                raise SchemaViolation(
                    "Unexpected element in text-only content",
                    self.tag(element),
                    local_name(grandchild.tag),
                )
        return element.text or ""
