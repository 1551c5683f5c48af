"""Ids declared inside descriptions: TOC items, section ids and anchors.

They let a ``ref`` point into the middle of another compound's prose.
"""

from typing import TYPE_CHECKING, Dict, List, cast

from doxygen_graph.data_model.description import Anchor, Section, TocList
from doxygen_graph.data_model.node import Node, NodeVisitor

if TYPE_CHECKING:
    from doxygen_graph.view_model.compound_base import CompoundBase


class DescriptionTocList:
    def __init__(self, compound: "CompoundBase") -> None:
        self.compound = compound
        self.toc_items: List["DescriptionTocItem"] = []


class DescriptionTocItem:
    def __init__(self, item_id: str, toc_list: DescriptionTocList) -> None:
        self.id = item_id
        self.toc_list = toc_list

    @property
    def compound(self) -> "CompoundBase":
        return self.toc_list.compound


class DescriptionAnchor:
    def __init__(self, compound: "CompoundBase", anchor_id: str) -> None:
        self.compound = compound
        self.id = anchor_id


class DescriptionIndexer(NodeVisitor):
    """Collect TOC lists and anchors of one compound's description tree."""

    def __init__(self, compound: "CompoundBase") -> None:
        super().__init__()
        self.compound = compound
        self.toc_lists: List[DescriptionTocList] = []
        self.toc_items_by_id: Dict[str, DescriptionTocItem] = {}
        self.anchors_by_id: Dict[str, DescriptionAnchor] = {}
        for level in range(1, 7):
            self.handlers[f"sect{level}"] = self.visit_section

    def visit_toclist(self, node: Node) -> None:
        toc_list = DescriptionTocList(self.compound)
        for item in cast(TocList, node).items:
            toc_item = DescriptionTocItem(item.id, toc_list)
            toc_list.toc_items.append(toc_item)
            self.toc_items_by_id[toc_item.id] = toc_item
        self.toc_lists.append(toc_list)

    def visit_section(self, node: Node) -> None:
        section_id = cast(Section, node).id
        if section_id:
            self.anchors_by_id[section_id] = DescriptionAnchor(self.compound, section_id)
        self.generic_visit(node)

    def visit_anchor(self, node: Node) -> None:
        anchor_id = cast(Anchor, node).id
        if anchor_id:
            self.anchors_by_id[anchor_id] = DescriptionAnchor(self.compound, anchor_id)
