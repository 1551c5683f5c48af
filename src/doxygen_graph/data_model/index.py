"""Node variants for ``index.xml`` and ``Doxyfile.xml``.

The index lists every compound Doxygen wrote, in the order the loader reads
the per-compound files.
"""

from dataclasses import dataclass
from typing import Any, List, Optional

from doxygen_graph.data_model.accessor import ElementAccessor
from doxygen_graph.data_model.builder import assign_attributes, build_children, require
from doxygen_graph.data_model.compounds import build_text_element
from doxygen_graph.data_model.node import Node

_DOCUMENT_ATTRIBUTES = {
    "version": ("version", "str"),
    "lang": ("lang", "str"),
    "noNamespaceSchemaLocation": ("schema_location", "str"),
}


@dataclass(eq=False)
class IndexMember(Node):
    refid: str = ""
    kind: str = ""
    name: str = ""


@dataclass(eq=False)
class IndexCompound(Node):
    refid: str = ""
    kind: str = ""
    name: str = ""

    @property
    def members(self) -> List[IndexMember]:
        return self.find_all(IndexMember)


@dataclass(eq=False)
class DoxygenIndex(Node):
    version: str = ""
    lang: str = ""
    schema_location: Optional[str] = None

    @property
    def compounds(self) -> List[IndexCompound]:
        return self.find_all(IndexCompound)


@dataclass(eq=False)
class DoxyfileOption(Node):
    id: str = ""
    default: bool = False
    type: str = ""

    @property
    def values(self) -> List[str]:
        return [child.text() for child in self.child_nodes()]


@dataclass(eq=False)
class Doxyfile(Node):
    version: str = ""
    lang: str = ""
    schema_location: Optional[str] = None

    @property
    def options(self) -> List[DoxyfileOption]:
        return self.find_all(DoxyfileOption)

    def option(self, option_id: str) -> Optional[DoxyfileOption]:
        for option in self.options:
            if option.id == option_id:
                return option
        return None


def build_index_member(xml: ElementAccessor, element: Any) -> IndexMember:
    node = IndexMember(element_name="member")

    def hoist(tag: str, child: Node) -> None:
        node.name = child.text()

    build_children(xml, element, node, {"name": build_text_element}, mixed=False, on_child=hoist)
    assign_attributes(xml, element, node, {"refid": ("refid", "str"), "kind": ("kind", "str")})
    require(node, "refid", "kind", "name")
    return node


def build_index_compound(xml: ElementAccessor, element: Any) -> IndexCompound:
    node = IndexCompound(element_name="compound")

    def hoist(tag: str, child: Node) -> None:
        if tag == "name":
            node.name = child.text()

    content = {"name": build_text_element, "member": build_index_member}
    build_children(xml, element, node, content, mixed=False, on_child=hoist)
    assign_attributes(xml, element, node, {"refid": ("refid", "str"), "kind": ("kind", "str")})
    require(node, "refid", "kind", "name")
    return node


def build_doxygen_index(xml: ElementAccessor, element: Any) -> DoxygenIndex:
    node = DoxygenIndex(element_name="doxygenindex")
    build_children(xml, element, node, {"compound": build_index_compound},
                   mixed=False, allow_empty=True)
    assign_attributes(xml, element, node, _DOCUMENT_ATTRIBUTES)
    require(node, "version")
    return node


def build_doxyfile_option(xml: ElementAccessor, element: Any) -> DoxyfileOption:
    node = DoxyfileOption(element_name="option")
    build_children(xml, element, node, {"value": build_text_element},
                   mixed=False, allow_empty=True)
    assign_attributes(xml, element, node, {
        "id": ("id", "str"),
        "default": ("default", "bool"),
        "type": ("type", "str"),
    })
    require(node, "id", "type")
    return node


def build_doxyfile(xml: ElementAccessor, element: Any) -> Doxyfile:
    node = Doxyfile(element_name="doxyfile")
    build_children(xml, element, node, {"option": build_doxyfile_option},
                   mixed=False, allow_empty=True)
    assign_attributes(xml, element, node, _DOCUMENT_ATTRIBUTES)
    require(node, "version")
    return node
