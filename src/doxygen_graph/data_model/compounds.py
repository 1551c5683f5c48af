"""Node variants and builders for ``compounddef`` and everything it owns.

Text-only children such as ``compoundname`` or ``argsstring`` are kept as
``TextElement`` nodes in ``children`` and hoisted into plain string fields.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from doxygen_graph.data_model.accessor import ElementAccessor
from doxygen_graph.data_model.builder import (
    BuilderFunction,
    assign_attributes,
    build_children,
    require,
    text_only,
)
from doxygen_graph.data_model.description import (
    Description,
    ProgramListing,
    build_description,
    build_program_listing,
    build_ref_text,
)
from doxygen_graph.data_model.node import Node
from doxygen_graph.shared.errors import SchemaViolation

INNER_REFERENCE_ELEMENTS = (
    "innerdir", "innerfile", "innerclass", "innerconcept", "innermodule",
    "innernamespace", "innerpage", "innergroup",
)

LINKED_TEXT_ELEMENTS = (
    "type", "initializer", "defval", "typeconstraint", "requiresclause", "exceptions",
)

# Attribute name -> MemberDef field
MEMBER_STRING_ATTRIBUTES = {
    "kind": "kind",
    "id": "id",
    "prot": "prot",
    "virt": "virt",
    "refqual": "refqual",
    "accessor": "accessor",
    "noexceptexpression": "noexcept_expression",
}

MEMBER_FLAG_ATTRIBUTES = (
    "static", "extern", "strong", "const", "explicit", "inline", "volatile",
    "mutable", "noexcept", "nodiscard", "constexpr", "consteval", "constinit",
    "final", "sealed", "new", "add", "remove", "raise", "optional", "required",
    "attribute", "property", "readonly", "bound", "removable", "constrained",
    "transient", "maybevoid", "maybedefault", "maybeambiguous", "settable",
    "privatesettable", "protectedsettable", "gettable", "privategettable",
    "protectedgettable", "initonly", "writable",
)


@dataclass(eq=False)
class TextElement(Node):
    """Element holding only character data (``name``, ``scope``, ...)."""

    @property
    def value(self) -> str:
        return self.text()


@dataclass(eq=False)
class LinkedText(Node):
    """Text interleaved with ``ref`` nodes (types, initializers, defaults)."""


@dataclass(eq=False)
class CompoundRef(Node):
    """``basecompoundref`` / ``derivedcompoundref``; external bases have no refid."""

    refid: Optional[str] = None
    prot: str = ""
    virt: str = ""


@dataclass(eq=False)
class InnerRef(Node):
    refid: str = ""
    prot: Optional[str] = None
    inline: Optional[bool] = None


@dataclass(eq=False)
class Include(Node):
    refid: Optional[str] = None
    local: bool = False


@dataclass(eq=False)
class Reimplement(Node):
    refid: str = ""


@dataclass(eq=False)
class MemberReference(Node):
    """``references`` / ``referencedby`` entries of a member definition."""

    refid: str = ""
    compoundref: Optional[str] = None
    startline: Optional[int] = None
    endline: Optional[int] = None


@dataclass(eq=False)
class Location(Node):
    file: str = ""
    line: Optional[int] = None
    column: Optional[int] = None
    declfile: Optional[str] = None
    declline: Optional[int] = None
    declcolumn: Optional[int] = None
    bodyfile: Optional[str] = None
    bodystart: Optional[int] = None
    bodyend: Optional[int] = None


@dataclass(eq=False)
class Param(Node):
    attributes: Optional[str] = None
    type: Optional[LinkedText] = None
    declname: Optional[str] = None
    defname: Optional[str] = None
    array: Optional[str] = None
    defval: Optional[LinkedText] = None
    typeconstraint: Optional[LinkedText] = None
    brief_description: Optional[Description] = None


@dataclass(eq=False)
class TemplateParamList(Node):
    @property
    def params(self) -> List[Param]:
        return self.find_all(Param)


@dataclass(eq=False)
class EnumValue(Node):
    id: str = ""
    prot: str = ""
    name: str = ""
    initializer: Optional[LinkedText] = None
    brief_description: Optional[Description] = None
    detailed_description: Optional[Description] = None


@dataclass(eq=False)
class MemberDef(Node):
    id: str = ""
    kind: str = ""
    prot: str = ""
    virt: Optional[str] = None
    refqual: Optional[str] = None
    accessor: Optional[str] = None
    noexcept_expression: Optional[str] = None
    flags: Dict[str, bool] = field(default_factory=dict)
    name: str = ""
    type: Optional[LinkedText] = None
    definition: Optional[str] = None
    argsstring: Optional[str] = None
    qualified_name: Optional[str] = None
    read: Optional[str] = None
    write: Optional[str] = None
    bitfield: Optional[str] = None
    qualifiers: List[str] = field(default_factory=list)
    template_param_list: Optional[TemplateParamList] = None
    requires_clause: Optional[LinkedText] = None
    initializer: Optional[LinkedText] = None
    exceptions: Optional[LinkedText] = None
    brief_description: Optional[Description] = None
    detailed_description: Optional[Description] = None
    inbody_description: Optional[Description] = None
    location: Optional[Location] = None

    @property
    def params(self) -> List[Param]:
        return self.find_all(Param)

    @property
    def enum_values(self) -> List[EnumValue]:
        return self.find_all(EnumValue)

    @property
    def reimplements(self) -> List[Reimplement]:
        return [node for node in self.find_all(Reimplement) if node.element_name == "reimplements"]

    @property
    def reimplemented_by(self) -> List[Reimplement]:
        return [node for node in self.find_all(Reimplement) if node.element_name == "reimplementedby"]

    @property
    def references(self) -> List[MemberReference]:
        return [node for node in self.find_all(MemberReference) if node.element_name == "references"]

    @property
    def referenced_by(self) -> List[MemberReference]:
        return [node for node in self.find_all(MemberReference) if node.element_name == "referencedby"]


@dataclass(eq=False)
class SectionMember(Node):
    """``member`` reference inside a ``sectiondef`` (newer Doxygen output)."""

    refid: str = ""
    kind: Optional[str] = None
    name: str = ""


@dataclass(eq=False)
class SectionDef(Node):
    kind: str = ""
    header: Optional[str] = None
    description: Optional[Description] = None

    @property
    def member_defs(self) -> List[MemberDef]:
        return self.find_all(MemberDef)

    @property
    def members(self) -> List[SectionMember]:
        return self.find_all(SectionMember)


@dataclass(eq=False)
class MemberRef(Node):
    """Entry of ``listofallmembers``."""

    refid: str = ""
    prot: str = ""
    virt: str = ""
    ambiguityscope: Optional[str] = None
    scope: str = ""
    name: str = ""


@dataclass(eq=False)
class ListOfAllMembers(Node):
    @property
    def members(self) -> List[MemberRef]:
        return self.find_all(MemberRef)


@dataclass(eq=False)
class TocSect(Node):
    name: str = ""
    reference: str = ""
    table_of_contents: Optional["TableOfContents"] = None


@dataclass(eq=False)
class TableOfContents(Node):
    @property
    def sections(self) -> List[TocSect]:
        return self.find_all(TocSect)


@dataclass(eq=False)
class CompoundDef(Node):
    id: str = ""
    kind: str = ""
    language: Optional[str] = None
    prot: Optional[str] = None
    final: Optional[bool] = None
    inline: Optional[bool] = None
    sealed: Optional[bool] = None
    abstract: Optional[bool] = None
    compound_name: str = ""
    title: Optional[str] = None
    template_param_list: Optional[TemplateParamList] = None
    table_of_contents: Optional[TableOfContents] = None
    requires_clause: Optional[LinkedText] = None
    initializer: Optional[LinkedText] = None
    brief_description: Optional[Description] = None
    detailed_description: Optional[Description] = None
    program_listing: Optional[ProgramListing] = None
    location: Optional[Location] = None
    list_of_all_members: Optional[ListOfAllMembers] = None

    def inner_refs(self, element_name: str) -> List[InnerRef]:
        """Inner references of one kind, e.g. ``innernamespace``."""
        return [node for node in self.find_all(InnerRef) if node.element_name == element_name]

    @property
    def base_compound_refs(self) -> List[CompoundRef]:
        return [node for node in self.find_all(CompoundRef) if node.element_name == "basecompoundref"]

    @property
    def derived_compound_refs(self) -> List[CompoundRef]:
        return [node for node in self.find_all(CompoundRef) if node.element_name == "derivedcompoundref"]

    @property
    def includes(self) -> List[Include]:
        return [node for node in self.find_all(Include) if node.element_name == "includes"]

    @property
    def included_by(self) -> List[Include]:
        return [node for node in self.find_all(Include) if node.element_name == "includedby"]

    @property
    def section_defs(self) -> List[SectionDef]:
        return self.find_all(SectionDef)


# Builders

def build_text_element(xml: ElementAccessor, element: Any) -> TextElement:
    node = TextElement(element_name=xml.tag(element))
    text_only(xml, element, node)
    assign_attributes(xml, element, node, {})
    return node


def build_linked_text(xml: ElementAccessor, element: Any) -> LinkedText:
    node = LinkedText(element_name=xml.tag(element))
    build_children(xml, element, node, {"ref": build_ref_text}, allow_empty=True)
    assign_attributes(xml, element, node, {})
    return node


def build_compound_ref(xml: ElementAccessor, element: Any) -> CompoundRef:
    node = CompoundRef(element_name=xml.tag(element))
    text_only(xml, element, node)
    assign_attributes(xml, element, node, {
        "refid": ("refid", "str"),
        "prot": ("prot", "str"),
        "virt": ("virt", "str"),
    })
    require(node, "prot", "virt", "children")
    return node


def build_inner_ref(xml: ElementAccessor, element: Any) -> InnerRef:
    node = InnerRef(element_name=xml.tag(element))
    text_only(xml, element, node)
    assign_attributes(xml, element, node, {
        "refid": ("refid", "str"),
        "prot": ("prot", "str"),
        "inline": ("inline", "bool"),
    })
    require(node, "refid", "children")
    return node


def build_include(xml: ElementAccessor, element: Any) -> Include:
    node = Include(element_name=xml.tag(element))
    text_only(xml, element, node)
    assign_attributes(xml, element, node, {
        "refid": ("refid", "str"),
        "local": ("local", "bool"),
    })
    require(node, "children")
    return node


def build_reimplement(xml: ElementAccessor, element: Any) -> Reimplement:
    node = Reimplement(element_name=xml.tag(element))
    text_only(xml, element, node)
    assign_attributes(xml, element, node, {"refid": ("refid", "str")})
    require(node, "refid", "children")
    return node


def build_member_reference(xml: ElementAccessor, element: Any) -> MemberReference:
    node = MemberReference(element_name=xml.tag(element))
    text_only(xml, element, node)
    assign_attributes(xml, element, node, {
        "refid": ("refid", "str"),
        "compoundref": ("compoundref", "str"),
        "startline": ("startline", "int"),
        "endline": ("endline", "int"),
    })
    require(node, "refid", "children")
    return node


def build_location(xml: ElementAccessor, element: Any) -> Location:
    node = Location(element_name="location")
    build_children(xml, element, node, {}, mixed=False, allow_empty=True)
    assign_attributes(xml, element, node, {
        "file": ("file", "str"),
        "line": ("line", "int"),
        "column": ("column", "int"),
        "declfile": ("declfile", "str"),
        "declline": ("declline", "int"),
        "declcolumn": ("declcolumn", "int"),
        "bodyfile": ("bodyfile", "str"),
        "bodystart": ("bodystart", "int"),
        "bodyend": ("bodyend", "int"),
    })
    require(node, "file")
    return node


def build_param(xml: ElementAccessor, element: Any) -> Param:
    node = Param(element_name="param")

    def hoist(tag: str, child: Node) -> None:
        if tag in ("attributes", "declname", "defname", "array"):
            setattr(node, tag, child.text())
        elif tag == "briefdescription":
            node.brief_description = child
        else:
            setattr(node, tag, child)

    content: Dict[str, BuilderFunction] = {
        "attributes": build_text_element,
        "type": build_linked_text,
        "declname": build_text_element,
        "defname": build_text_element,
        "array": build_text_element,
        "defval": build_linked_text,
        "typeconstraint": build_linked_text,
        "briefdescription": build_description,
    }
    build_children(xml, element, node, content, mixed=False, allow_empty=True, on_child=hoist)
    assign_attributes(xml, element, node, {})
    return node


def build_template_param_list(xml: ElementAccessor, element: Any) -> TemplateParamList:
    node = TemplateParamList(element_name="templateparamlist")
    build_children(xml, element, node, {"param": build_param}, mixed=False, allow_empty=True)
    assign_attributes(xml, element, node, {})
    return node


def build_enum_value(xml: ElementAccessor, element: Any) -> EnumValue:
    node = EnumValue(element_name="enumvalue")

    def hoist(tag: str, child: Node) -> None:
        if tag == "name":
            node.name = child.text()
        elif tag == "initializer":
            node.initializer = child
        elif tag == "briefdescription":
            node.brief_description = child
        elif tag == "detaileddescription":
            node.detailed_description = child

    content: Dict[str, BuilderFunction] = {
        "name": build_text_element,
        "initializer": build_linked_text,
        "briefdescription": build_description,
        "detaileddescription": build_description,
    }
    build_children(xml, element, node, content, mixed=False, on_child=hoist)
    assign_attributes(xml, element, node, {"id": ("id", "str"), "prot": ("prot", "str")})
    require(node, "id", "prot", "name")
    return node


_MEMBER_HOISTED_TEXT = {
    "definition": "definition",
    "argsstring": "argsstring",
    "name": "name",
    "qualifiedname": "qualified_name",
    "read": "read",
    "write": "write",
    "bitfield": "bitfield",
}

_MEMBER_HOISTED_NODES = {
    "type": "type",
    "templateparamlist": "template_param_list",
    "requiresclause": "requires_clause",
    "initializer": "initializer",
    "exceptions": "exceptions",
    "briefdescription": "brief_description",
    "detaileddescription": "detailed_description",
    "inbodydescription": "inbody_description",
    "location": "location",
}


def build_member_def(xml: ElementAccessor, element: Any) -> MemberDef:
    node = MemberDef(element_name="memberdef")

    def hoist(tag: str, child: Node) -> None:
        if tag in _MEMBER_HOISTED_TEXT:
            setattr(node, _MEMBER_HOISTED_TEXT[tag], child.text())
        elif tag in _MEMBER_HOISTED_NODES:
            setattr(node, _MEMBER_HOISTED_NODES[tag], child)
        elif tag == "qualifier":
            node.qualifiers.append(child.text())

    content: Dict[str, BuilderFunction] = {
        "templateparamlist": build_template_param_list,
        "type": build_linked_text,
        "definition": build_text_element,
        "argsstring": build_text_element,
        "name": build_text_element,
        "qualifiedname": build_text_element,
        "read": build_text_element,
        "write": build_text_element,
        "bitfield": build_text_element,
        "reimplements": build_reimplement,
        "reimplementedby": build_reimplement,
        "qualifier": build_text_element,
        "param": build_param,
        "enumvalue": build_enum_value,
        "requiresclause": build_linked_text,
        "initializer": build_linked_text,
        "exceptions": build_linked_text,
        "briefdescription": build_description,
        "detaileddescription": build_description,
        "inbodydescription": build_description,
        "location": build_location,
        "references": build_member_reference,
        "referencedby": build_member_reference,
    }
    build_children(xml, element, node, content, mixed=False, on_child=hoist)

    for name in xml.attribute_names(element):
        if name in MEMBER_STRING_ATTRIBUTES:
            setattr(node, MEMBER_STRING_ATTRIBUTES[name], xml.string_attribute(element, name))
        elif name in MEMBER_FLAG_ATTRIBUTES:
            node.flags[name] = xml.bool_attribute(element, name)
        else:
            raise SchemaViolation("Unexpected attribute", "memberdef", name, "build_member_def")
    require(node, "id", "kind", "prot", "name", builder="build_member_def")
    return node


def build_section_member(xml: ElementAccessor, element: Any) -> SectionMember:
    node = SectionMember(element_name="member")

    def hoist(tag: str, child: Node) -> None:
        node.name = child.text()

    build_children(xml, element, node, {"name": build_text_element}, mixed=False, on_child=hoist)
    assign_attributes(xml, element, node, {"refid": ("refid", "str"), "kind": ("kind", "str")})
    require(node, "refid", "name")
    return node


def build_section_def(xml: ElementAccessor, element: Any) -> SectionDef:
    node = SectionDef(element_name="sectiondef")

    def hoist(tag: str, child: Node) -> None:
        if tag == "header":
            node.header = child.text()
        elif tag == "description":
            node.description = child

    content: Dict[str, BuilderFunction] = {
        "header": build_text_element,
        "description": build_description,
        "memberdef": build_member_def,
        "member": build_section_member,
    }
    build_children(xml, element, node, content, mixed=False, on_child=hoist)
    assign_attributes(xml, element, node, {"kind": ("kind", "str")})
    require(node, "kind")
    return node


def build_member_ref(xml: ElementAccessor, element: Any) -> MemberRef:
    node = MemberRef(element_name="member")

    def hoist(tag: str, child: Node) -> None:
        setattr(node, tag, child.text())

    content = {"scope": build_text_element, "name": build_text_element}
    build_children(xml, element, node, content, mixed=False, on_child=hoist)
    assign_attributes(xml, element, node, {
        "refid": ("refid", "str"),
        "prot": ("prot", "str"),
        "virt": ("virt", "str"),
        "ambiguityscope": ("ambiguityscope", "str"),
    })
    require(node, "refid", "prot", "virt", "name")
    return node


def build_list_of_all_members(xml: ElementAccessor, element: Any) -> ListOfAllMembers:
    node = ListOfAllMembers(element_name="listofallmembers")
    build_children(xml, element, node, {"member": build_member_ref}, mixed=False, allow_empty=True)
    assign_attributes(xml, element, node, {})
    return node


def build_toc_sect(xml: ElementAccessor, element: Any) -> TocSect:
    node = TocSect(element_name="tocsect")

    def hoist(tag: str, child: Node) -> None:
        if tag == "tableofcontents":
            node.table_of_contents = child
        else:
            setattr(node, tag, child.text())

    content: Dict[str, BuilderFunction] = {
        "name": build_text_element,
        "reference": build_text_element,
        "tableofcontents": build_table_of_contents,
    }
    build_children(xml, element, node, content, mixed=False, on_child=hoist)
    assign_attributes(xml, element, node, {})
    require(node, "reference")
    return node


def build_table_of_contents(xml: ElementAccessor, element: Any) -> TableOfContents:
    node = TableOfContents(element_name="tableofcontents")
    content = {"tocsect": build_toc_sect, "tableofcontents": build_table_of_contents}
    build_children(xml, element, node, content, mixed=False, allow_empty=True)
    assign_attributes(xml, element, node, {})
    return node


_COMPOUND_HOISTED_NODES = {
    "templateparamlist": "template_param_list",
    "tableofcontents": "table_of_contents",
    "requiresclause": "requires_clause",
    "initializer": "initializer",
    "briefdescription": "brief_description",
    "detaileddescription": "detailed_description",
    "programlisting": "program_listing",
    "location": "location",
    "listofallmembers": "list_of_all_members",
}


def build_compound_def(xml: ElementAccessor, element: Any) -> CompoundDef:
    """Build one ``compounddef``; namespaces may have an empty name."""
    node = CompoundDef(element_name="compounddef")

    def hoist(tag: str, child: Node) -> None:
        if tag == "compoundname":
            node.compound_name = child.text()
        elif tag == "title":
            node.title = child.text()
        elif tag in _COMPOUND_HOISTED_NODES:
            setattr(node, _COMPOUND_HOISTED_NODES[tag], child)

    content: Dict[str, BuilderFunction] = {
        "compoundname": build_text_element,
        "title": build_text_element,
        "basecompoundref": build_compound_ref,
        "derivedcompoundref": build_compound_ref,
        "includes": build_include,
        "includedby": build_include,
        "templateparamlist": build_template_param_list,
        "sectiondef": build_section_def,
        "tableofcontents": build_table_of_contents,
        "requiresclause": build_linked_text,
        "initializer": build_linked_text,
        "briefdescription": build_description,
        "detaileddescription": build_description,
        "programlisting": build_program_listing,
        "location": build_location,
        "listofallmembers": build_list_of_all_members,
    }
    content.update({name: build_inner_ref for name in INNER_REFERENCE_ELEMENTS})
    build_children(xml, element, node, content, mixed=False, on_child=hoist)
    assign_attributes(xml, element, node, {
        "id": ("id", "str"),
        "kind": ("kind", "str"),
        "language": ("language", "str"),
        "prot": ("prot", "str"),
        "final": ("final", "bool"),
        "inline": ("inline", "bool"),
        "sealed": ("sealed", "bool"),
        "abstract": ("abstract", "bool"),
    })
    require(node, "id", "kind")
    if node.kind != "namespace":
        require(node, "compound_name")
    return node
