"""Root document assembly and the aggregated data model.

``assemble_document`` is a single pass over one parsed compound file with no
cross-referencing. ``DataModel`` gathers the documents of a whole Doxygen run
and builds the member definition map.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from doxygen_graph.data_model.accessor import ElementAccessor
from doxygen_graph.data_model.builder import assign_attributes, build_children, require
from doxygen_graph.data_model.compounds import CompoundDef, MemberDef, build_compound_def
from doxygen_graph.data_model.index import Doxyfile, DoxygenIndex
from doxygen_graph.data_model.node import Node
from doxygen_graph.shared.errors import SchemaViolation
from doxygen_graph.shared.logging import get_logger

logger = get_logger(__name__, component="data_model")


@dataclass(eq=False)
class DoxygenDocument(Node):
    """Root ``doxygen`` element of a compound file."""

    version: str = ""
    lang: str = ""
    schema_location: Optional[str] = None

    @property
    def compound_defs(self) -> List[CompoundDef]:
        return self.find_all(CompoundDef)


def _root_element(root: Any) -> Any:
    # lxml ElementTree objects wrap the root element
    return root.getroot() if hasattr(root, "getroot") else root


def assemble_document(xml: ElementAccessor, root: Any) -> DoxygenDocument:
    """Build the document node holding every ``compounddef`` in order.

    Args:
        xml: Element accessor
        root: Parsed ``doxygen`` root element or its lxml element tree

    Returns:
        Document with compound definitions and generator metadata

    Raises:
        SchemaViolation: If the input does not match the compound schema
    """
    element = _root_element(root)
    node = DoxygenDocument(element_name="doxygen")
    build_children(xml, element, node, {"compounddef": build_compound_def},
                   mixed=False, allow_empty=True, builder="assemble_document")
    assign_attributes(xml, element, node, {
        "version": ("version", "str"),
        "lang": ("lang", "str"),
        "noNamespaceSchemaLocation": ("schema_location", "str"),
    }, builder="assemble_document")
    require(node, "version", builder="assemble_document")
    return node


@dataclass
class DataModel:
    """Everything parsed from one Doxygen XML output folder."""

    index: Optional[DoxygenIndex] = None
    doxyfile: Optional[Doxyfile] = None
    documents: List[DoxygenDocument] = field(default_factory=list)
    member_defs_by_id: Dict[str, MemberDef] = field(default_factory=dict)

    @property
    def compound_defs(self) -> List[CompoundDef]:
        """All compound definitions in load order."""
        return [compound for document in self.documents for compound in document.compound_defs]

    @property
    def doxygen_version(self) -> Optional[str]:
        if self.index is not None:
            return self.index.version
        if self.documents:
            return self.documents[0].version
        return None

    def add_document(self, document: DoxygenDocument) -> None:
        self.documents.append(document)

    def doxyfile_option(self, option_id: str) -> List[str]:
        """Values of a Doxyfile option, empty when unknown."""
        if self.doxyfile is None:
            return []
        option = self.doxyfile.option(option_id)
        return option.values if option is not None else []

    @property
    def project_name(self) -> Optional[str]:
        values = self.doxyfile_option("PROJECT_NAME")
        return values[0] if values else None

    def process_member_defs(self) -> None:
        """Index member definitions and fill section member kinds from them."""
        self.member_defs_by_id.clear()
        for compound in self.compound_defs:
            for section in compound.section_defs:
                for member_def in section.member_defs:
                    if member_def.id in self.member_defs_by_id:
                        logger.debug(
                            "Member definition repeated",
                            extra={"member_id": member_def.id, "compound_id": compound.id},
                        )
                        continue
                    self.member_defs_by_id[member_def.id] = member_def

        for compound in self.compound_defs:
            for section in compound.section_defs:
                for member in section.members:
                    if member.kind:
                        continue
                    member_def = self.member_defs_by_id.get(member.refid)
                    if member_def is None:
                        raise SchemaViolation(
                            f"Section member '{member.refid}' has no kind and no definition",
                            "member", "kind", "DataModel.process_member_defs",
                        )
                    member.kind = member_def.kind
