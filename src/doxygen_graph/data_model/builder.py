"""Traversal skeleton shared by all schema-driven node builders.

A builder is a plain function ``(accessor, element) -> Node``. Content models
are dictionaries from child tag to builder, so the same tag can map to
different builders in different contexts (``ref`` inside prose versus
``ref`` inside a linked type).
"""

from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from doxygen_graph.data_model.accessor import ElementAccessor
from doxygen_graph.data_model.node import Node
from doxygen_graph.shared.errors import SchemaViolation

BuilderFunction = Callable[[ElementAccessor, Any], Node]
ContentModel = Mapping[str, BuilderFunction]

# Attribute name -> (field name, coercion); coercion is "str", "int" or "bool"
AttributeSpec = Mapping[str, Tuple[str, str]]


def _builder_name(node: Node, builder: Optional[str]) -> str:
    return builder or f"{type(node).__name__} builder"


def build_children(
    xml: ElementAccessor,
    element: Any,
    node: Node,
    content: ContentModel,
    *,
    mixed: bool = True,
    allow_empty: bool = False,
    on_child: Optional[Callable[[str, Node], None]] = None,
    builder: Optional[str] = None,
) -> None:
    """Append typed children of ``element`` to ``node.children`` in order.

    Args:
        xml: Element accessor
        element: lxml element being built
        node: Node receiving the children
        content: Accepted child tags and their builders
        mixed: Whether character data is part of the content model
        allow_empty: Whether the element may have no content at all
        on_child: Called with (tag, child node) to hoist special children
        builder: Builder name for error reports, derived from the node type
            when omitted
    """
    inner = xml.inner_elements(element, node.element_name)
    if not inner and not allow_empty:
        raise SchemaViolation(
            "Element has no content", node.element_name, "children",
            _builder_name(node, builder),
        )
    for item in inner:
        if isinstance(item, str):
            if mixed:
                node.children.append(item)
            elif item.strip():
                raise SchemaViolation(
                    "Unexpected text in element-only content",
                    node.element_name, "#text", _builder_name(node, builder),
                )
            continue
        tag = xml.tag(item)
        if tag in xml.config.ignored_elements:
            continue
        child_builder = content.get(tag)
        if child_builder is None:
            raise SchemaViolation(
                "Unexpected child element", node.element_name, tag,
                _builder_name(node, builder),
            )
        child = child_builder(xml, item)
        node.children.append(child)
        if on_child is not None:
            on_child(tag, child)


def assign_attributes(
    xml: ElementAccessor,
    element: Any,
    node: Node,
    spec: AttributeSpec,
    *,
    builder: Optional[str] = None,
) -> None:
    """Copy known attributes into typed fields; unknown attributes are fatal."""
    for name in xml.attribute_names(element):
        if name not in spec:
            raise SchemaViolation(
                "Unexpected attribute", node.element_name, name,
                _builder_name(node, builder),
            )
        field_name, coercion = spec[name]
        if coercion == "int":
            value: Any = xml.number_attribute(element, name)
        elif coercion == "bool":
            value = xml.bool_attribute(element, name)
        else:
            value = xml.string_attribute(element, name)
        setattr(node, field_name, value)


def require(node: Node, *field_names: str, builder: Optional[str] = None) -> None:
    """Assert mandatory fields ended up non-empty."""
    for field_name in field_names:
        value = getattr(node, field_name)
        if value is None or value == "" or value == []:
            raise SchemaViolation(
                "Missing mandatory field", node.element_name, field_name,
                _builder_name(node, builder),
            )


def text_only(xml: ElementAccessor, element: Any, node: Node) -> str:
    """Record the text of a text-only element as its single child."""
    value = xml.text_of(element)
    if value:
        node.children.append(value)
    return value


def merged(*models: ContentModel) -> Dict[str, BuilderFunction]:
    result: Dict[str, BuilderFunction] = {}
    for model in models:
        result.update(model)
    return result
