"""Node variants and builders for Doxygen documentation prose.

Covers the ``descriptionType`` family: paragraphs with mixed content, inline
markup, references, lists, tables, program listings, simple and nested
sections, and the table-of-contents lists Doxygen emits inside pages.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from doxygen_graph.data_model.accessor import ElementAccessor
from doxygen_graph.data_model.builder import (
    BuilderFunction,
    assign_attributes,
    build_children,
    merged,
    require,
    text_only,
)
from doxygen_graph.data_model.node import Node
from doxygen_graph.shared.errors import SchemaViolation

MARKUP_ELEMENTS = (
    "bold", "emphasis", "underline", "computeroutput", "strike", "s", "del",
    "ins", "subscript", "superscript", "center", "small", "cite", "kbd",
    "preformatted",
)

FORMAT_ONLY_ELEMENTS = (
    "htmlonly", "manonly", "xmlonly", "rtfonly", "latexonly", "docbookonly",
)

SUBSTITUTIONS: Dict[str, str] = {
    "nzwj": "\u200c",
    "zwj": "\u200d",
    "ndash": "–",
    "mdash": "—",
    "lsquo": "‘",
    "rsquo": "’",
    "ldquo": "“",
    "rdquo": "”",
    "sbquo": "‚",
    "bdquo": "„",
    "nonbreakablespace": "\u00a0",
    "copy": "©",
    "trademark": "™",
    "registered": "®",
    "deg": "°",
    "plusmn": "±",
    "times": "×",
    "divide": "÷",
    "hellip": "…",
    "laquo": "«",
    "raquo": "»",
    "bull": "•",
    "middot": "·",
    "larr": "←",
    "rarr": "→",
    "uarr": "↑",
    "darr": "↓",
    "harr": "↔",
    "le": "≤",
    "ge": "≥",
    "ne": "≠",
    "infin": "∞",
    "micro": "µ",
}

DESCRIPTION_ELEMENTS = (
    "briefdescription", "detaileddescription", "inbodydescription",
    "description", "parameterdescription", "xrefdescription",
)

# Content models, filled at the bottom of the module once every builder exists.
TITLE_CONTENT: Dict[str, BuilderFunction] = {}
PARA_CONTENT: Dict[str, BuilderFunction] = {}


# Variants

@dataclass(eq=False)
class Title(Node):
    """Inline title content (``title``, ``term``, ``caption`` bodies)."""


@dataclass(eq=False)
class Description(Node):
    title: Optional[str] = None

    @property
    def paragraphs(self) -> List["Para"]:
        return self.find_all(Para)


@dataclass(eq=False)
class Para(Node):
    pass


@dataclass(eq=False)
class Markup(Node):
    pass


@dataclass(eq=False)
class Substitution(Node):
    value: str = ""


@dataclass(eq=False)
class LineBreak(Node):
    pass


@dataclass(eq=False)
class HorizontalRuler(Node):
    pass


@dataclass(eq=False)
class Ulink(Node):
    url: str = ""


@dataclass(eq=False)
class Anchor(Node):
    id: str = ""


@dataclass(eq=False)
class Ref(Node):
    """Cross-reference; ``kindref`` is ``compound`` or ``member``."""

    refid: str = ""
    kindref: str = ""
    external: Optional[str] = None
    tooltip: Optional[str] = None


@dataclass(eq=False)
class Image(Node):
    type: str = ""
    name: Optional[str] = None
    width: Optional[str] = None
    height: Optional[str] = None
    alt: Optional[str] = None
    inline: Optional[bool] = None
    caption: Optional[str] = None


@dataclass(eq=False)
class Formula(Node):
    id: str = ""


@dataclass(eq=False)
class Emoji(Node):
    name: str = ""
    unicode: str = ""


@dataclass(eq=False)
class IndexEntry(Node):
    primary: str = ""
    secondary: str = ""


@dataclass(eq=False)
class Sp(Node):
    value: Optional[int] = None


@dataclass(eq=False)
class Highlight(Node):
    class_name: str = ""


@dataclass(eq=False)
class CodeLine(Node):
    lineno: Optional[int] = None
    refid: Optional[str] = None
    refkind: Optional[str] = None
    external: Optional[bool] = None


@dataclass(eq=False)
class ProgramListing(Node):
    filename: Optional[str] = None

    @property
    def codelines(self) -> List[CodeLine]:
        return self.find_all(CodeLine)


@dataclass(eq=False)
class FilteredProgramListing(ProgramListing):
    """Line-range view of a program listing; may be empty."""

    start_line: int = 0
    end_line: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.codelines


@dataclass(eq=False)
class ListItem(Node):
    override: Optional[str] = None
    value: Optional[int] = None


@dataclass(eq=False)
class ItemizedList(Node):
    @property
    def items(self) -> List[ListItem]:
        return self.find_all(ListItem)


@dataclass(eq=False)
class OrderedList(ItemizedList):
    type: Optional[str] = None
    start: Optional[int] = None


@dataclass(eq=False)
class SimpleSect(Node):
    kind: str = ""
    title: Optional[Title] = None


@dataclass(eq=False)
class VarListEntry(Node):
    term: Optional[Title] = None


@dataclass(eq=False)
class VariableListPair(Node):
    """Synthetic term/definition pair; not an element of the input."""

    term: Optional[VarListEntry] = None
    definition: Optional[ListItem] = None


@dataclass(eq=False)
class VariableList(Node):
    @property
    def pairs(self) -> List[VariableListPair]:
        return self.find_all(VariableListPair)


@dataclass(eq=False)
class TableEntry(Node):
    thead: bool = False
    colspan: Optional[int] = None
    rowspan: Optional[int] = None
    align: Optional[str] = None
    valign: Optional[str] = None
    width: Optional[str] = None
    class_name: Optional[str] = None


@dataclass(eq=False)
class TableRow(Node):
    @property
    def entries(self) -> List[TableEntry]:
        return self.find_all(TableEntry)


@dataclass(eq=False)
class TableCaption(Node):
    id: Optional[str] = None


@dataclass(eq=False)
class Table(Node):
    rows: int = 0
    cols: int = 0
    width: Optional[str] = None
    caption: Optional[TableCaption] = None

    @property
    def table_rows(self) -> List[TableRow]:
        return self.find_all(TableRow)


@dataclass(eq=False)
class ParameterName(Node):
    direction: Optional[str] = None


@dataclass(eq=False)
class ParameterType(Node):
    pass


@dataclass(eq=False)
class ParameterNameList(Node):
    @property
    def names(self) -> List[ParameterName]:
        return self.find_all(ParameterName)


@dataclass(eq=False)
class ParameterItem(Node):
    description: Optional[Description] = None

    @property
    def name_lists(self) -> List[ParameterNameList]:
        return self.find_all(ParameterNameList)


@dataclass(eq=False)
class ParameterList(Node):
    kind: str = ""


@dataclass(eq=False)
class XrefSect(Node):
    id: str = ""
    title: str = ""
    description: Optional[Description] = None


@dataclass(eq=False)
class Blockquote(Node):
    pass


@dataclass(eq=False)
class Parblock(Node):
    pass


@dataclass(eq=False)
class Verbatim(Node):
    pass


@dataclass(eq=False)
class FormatOnly(Node):
    """Output-format specific block (``htmlonly``, ``latexonly``, ...)."""

    block: Optional[str] = None


@dataclass(eq=False)
class Heading(Node):
    level: int = 0


@dataclass(eq=False)
class TocItem(Node):
    id: str = ""


@dataclass(eq=False)
class TocList(Node):
    @property
    def items(self) -> List[TocItem]:
        return self.find_all(TocItem)


@dataclass(eq=False)
class Section(Node):
    """``sect1`` .. ``sect6`` and their ``internal`` counterparts."""

    id: Optional[str] = None
    level: int = 1
    title: Optional[Title] = None


@dataclass(eq=False)
class Internal(Node):
    level: int = 0


# Builders

def build_title(xml: ElementAccessor, element: Any) -> Title:
    node = Title(element_name=xml.tag(element))
    build_children(xml, element, node, TITLE_CONTENT, allow_empty=True)
    assign_attributes(xml, element, node, {})
    return node


def build_description(xml: ElementAccessor, element: Any) -> Description:
    node = Description(element_name=xml.tag(element))
    if node.element_name not in DESCRIPTION_ELEMENTS:
        raise SchemaViolation("Not a description element", node.element_name, "tag")

    def hoist(tag: str, child: Node) -> None:
        if tag == "title":
            node.title = child.text()

    content = {"para": build_para, "internal": _internal_builder(1),
               "sect1": _section_builder(1), "title": build_title}
    build_children(xml, element, node, content, allow_empty=True, on_child=hoist)
    assign_attributes(xml, element, node, {})
    return node


def build_para(xml: ElementAccessor, element: Any) -> Para:
    node = Para(element_name="para")
    build_children(xml, element, node, PARA_CONTENT, allow_empty=True)
    assign_attributes(xml, element, node, {})
    return node


def build_markup(xml: ElementAccessor, element: Any) -> Markup:
    node = Markup(element_name=xml.tag(element))
    build_children(xml, element, node, PARA_CONTENT)
    assign_attributes(xml, element, node, {})
    return node


def build_substitution(xml: ElementAccessor, element: Any) -> Substitution:
    name = xml.tag(element)
    node = Substitution(element_name=name, value=SUBSTITUTIONS[name])
    build_children(xml, element, node, {}, mixed=False, allow_empty=True)
    assign_attributes(xml, element, node, {})
    return node


def build_line_break(xml: ElementAccessor, element: Any) -> LineBreak:
    node = LineBreak(element_name="linebreak")
    build_children(xml, element, node, {}, mixed=False, allow_empty=True)
    assign_attributes(xml, element, node, {})
    return node


def build_horizontal_ruler(xml: ElementAccessor, element: Any) -> HorizontalRuler:
    node = HorizontalRuler(element_name="hruler")
    build_children(xml, element, node, {}, mixed=False, allow_empty=True)
    assign_attributes(xml, element, node, {})
    return node


def build_ulink(xml: ElementAccessor, element: Any) -> Ulink:
    node = Ulink(element_name="ulink")
    build_children(xml, element, node, TITLE_CONTENT)
    assign_attributes(xml, element, node, {"url": ("url", "str")})
    require(node, "url")
    return node


def build_anchor(xml: ElementAccessor, element: Any) -> Anchor:
    node = Anchor(element_name="anchor")
    build_children(xml, element, node, {}, mixed=False, allow_empty=True)
    assign_attributes(xml, element, node, {"id": ("id", "str")})
    require(node, "id")
    return node


_REF_ATTRIBUTES = {
    "refid": ("refid", "str"),
    "kindref": ("kindref", "str"),
    "external": ("external", "str"),
    "tooltip": ("tooltip", "str"),
}


def build_doc_ref(xml: ElementAccessor, element: Any) -> Ref:
    """``ref`` inside prose: title content as label."""
    node = Ref(element_name="ref")
    build_children(xml, element, node, TITLE_CONTENT)
    assign_attributes(xml, element, node, _REF_ATTRIBUTES)
    require(node, "refid", "kindref")
    return node


def build_ref_text(xml: ElementAccessor, element: Any) -> Ref:
    """``ref`` inside linked text and code highlights: plain text label."""
    node = Ref(element_name="ref")
    text_only(xml, element, node)
    assign_attributes(xml, element, node, _REF_ATTRIBUTES)
    require(node, "refid", "kindref")
    if not node.children:
        raise SchemaViolation("Reference without text", "ref", "#text")
    return node


def build_image(xml: ElementAccessor, element: Any) -> Image:
    node = Image(element_name="image")
    build_children(xml, element, node, TITLE_CONTENT, allow_empty=True)
    assign_attributes(xml, element, node, {
        "type": ("type", "str"),
        "name": ("name", "str"),
        "width": ("width", "str"),
        "height": ("height", "str"),
        "alt": ("alt", "str"),
        "inline": ("inline", "bool"),
        "caption": ("caption", "str"),
    })
    require(node, "type")
    return node


def build_formula(xml: ElementAccessor, element: Any) -> Formula:
    node = Formula(element_name="formula")
    text_only(xml, element, node)
    assign_attributes(xml, element, node, {"id": ("id", "str")})
    require(node, "id", "children")
    return node


def build_emoji(xml: ElementAccessor, element: Any) -> Emoji:
    node = Emoji(element_name="emoji")
    build_children(xml, element, node, {}, mixed=False, allow_empty=True)
    assign_attributes(xml, element, node, {
        "name": ("name", "str"),
        "unicode": ("unicode", "str"),
    })
    require(node, "name")
    return node


def build_index_entry(xml: ElementAccessor, element: Any) -> IndexEntry:
    node = IndexEntry(element_name="indexentry")
    node.primary = xml.inner_element_text(element, "primaryie")
    node.secondary = xml.inner_element_text(element, "secondaryie")
    for child in xml.inner_elements(element, "indexentry"):
        if isinstance(child, str) or xml.tag(child) not in ("primaryie", "secondaryie"):
            raise SchemaViolation("Unexpected index entry content", "indexentry",
                                  child if isinstance(child, str) else xml.tag(child))
    assign_attributes(xml, element, node, {})
    return node


def build_sp(xml: ElementAccessor, element: Any) -> Sp:
    node = Sp(element_name="sp")
    build_children(xml, element, node, {}, mixed=False, allow_empty=True)
    assign_attributes(xml, element, node, {"value": ("value", "int")})
    return node


def build_highlight(xml: ElementAccessor, element: Any) -> Highlight:
    node = Highlight(element_name="highlight")
    content = {"sp": build_sp, "ref": build_ref_text}
    build_children(xml, element, node, content, allow_empty=True)
    assign_attributes(xml, element, node, {"class": ("class_name", "str")})
    require(node, "class_name")
    return node


def build_codeline(xml: ElementAccessor, element: Any) -> CodeLine:
    node = CodeLine(element_name="codeline")
    build_children(xml, element, node, {"highlight": build_highlight},
                   mixed=False, allow_empty=True)
    assign_attributes(xml, element, node, {
        "lineno": ("lineno", "int"),
        "refid": ("refid", "str"),
        "refkind": ("refkind", "str"),
        "external": ("external", "bool"),
    })
    return node


def build_program_listing(xml: ElementAccessor, element: Any) -> ProgramListing:
    node = ProgramListing(element_name="programlisting")
    build_children(xml, element, node, {"codeline": build_codeline},
                   mixed=False, allow_empty=True)
    assign_attributes(xml, element, node, {"filename": ("filename", "str")})
    return node


def filter_program_listing(
    listing: ProgramListing, start: int, end: int
) -> FilteredProgramListing:
    """Keep the code lines numbered within ``[start, end]``.

    Never fails: an inverted or non-overlapping range yields an empty view.
    Filtering a filtered view to the same range returns the same lines.
    """
    codelines = [
        line for line in listing.codelines
        if line.lineno is not None and start <= line.lineno <= end
    ]
    return FilteredProgramListing(
        element_name=listing.element_name,
        children=list(codelines),
        filename=listing.filename,
        start_line=start,
        end_line=end,
    )


def build_list_item(xml: ElementAccessor, element: Any) -> ListItem:
    node = ListItem(element_name="listitem")
    build_children(xml, element, node, {"para": build_para}, mixed=False)
    assign_attributes(xml, element, node, {
        "override": ("override", "str"),
        "value": ("value", "int"),
    })
    return node


def build_itemized_list(xml: ElementAccessor, element: Any) -> ItemizedList:
    node = ItemizedList(element_name="itemizedlist")
    build_children(xml, element, node, {"listitem": build_list_item}, mixed=False)
    assign_attributes(xml, element, node, {})
    return node


def build_ordered_list(xml: ElementAccessor, element: Any) -> OrderedList:
    node = OrderedList(element_name="orderedlist")
    build_children(xml, element, node, {"listitem": build_list_item}, mixed=False)
    assign_attributes(xml, element, node, {
        "type": ("type", "str"),
        "start": ("start", "int"),
    })
    return node


def build_simple_sect(xml: ElementAccessor, element: Any) -> SimpleSect:
    node = SimpleSect(element_name="simplesect")

    def hoist(tag: str, child: Node) -> None:
        if tag == "title":
            node.title = child

    content = {"title": build_title, "para": build_para}
    build_children(xml, element, node, content, mixed=False, on_child=hoist)
    assign_attributes(xml, element, node, {"kind": ("kind", "str")})
    require(node, "kind")
    return node


def build_varlist_entry(xml: ElementAccessor, element: Any) -> VarListEntry:
    node = VarListEntry(element_name="varlistentry")

    def hoist(tag: str, child: Node) -> None:
        node.term = child

    build_children(xml, element, node, {"term": build_title}, mixed=False, on_child=hoist)
    assign_attributes(xml, element, node, {})
    require(node, "term")
    return node


def build_variable_list(xml: ElementAccessor, element: Any) -> VariableList:
    """Pair alternating ``varlistentry``/``listitem`` children.

    The schema has no wrapping pair element, so a pending term is carried
    across the iteration until its definition arrives.
    """
    node = VariableList(element_name="variablelist")
    pending_term: Optional[VarListEntry] = None
    for item in xml.inner_elements(element, "variablelist"):
        if isinstance(item, str):
            if item.strip():
                raise SchemaViolation("Unexpected text in variable list", "variablelist", "#text")
            continue
        tag = xml.tag(item)
        if tag == "varlistentry":
            if pending_term is not None:
                raise SchemaViolation(
                    "Consecutive <varlistentry> without <listitem>", "variablelist", tag
                )
            pending_term = build_varlist_entry(xml, item)
        elif tag == "listitem":
            if pending_term is None:
                raise SchemaViolation(
                    "<listitem> without preceding <varlistentry>", "variablelist", tag
                )
            pair = VariableListPair(
                element_name="varlistpair",
                children=[pending_term],
                term=pending_term,
                definition=build_list_item(xml, item),
            )
            pair.children.append(pair.definition)
            node.children.append(pair)
            pending_term = None
        else:
            raise SchemaViolation("Unexpected child element", "variablelist", tag)
    if pending_term is not None:
        raise SchemaViolation("Trailing <varlistentry> without <listitem>",
                              "variablelist", "varlistentry")
    assign_attributes(xml, element, node, {})
    return node


def build_table_entry(xml: ElementAccessor, element: Any) -> TableEntry:
    node = TableEntry(element_name="entry")
    build_children(xml, element, node, {"para": build_para}, mixed=False, allow_empty=True)
    assign_attributes(xml, element, node, {
        "thead": ("thead", "bool"),
        "colspan": ("colspan", "int"),
        "rowspan": ("rowspan", "int"),
        "align": ("align", "str"),
        "valign": ("valign", "str"),
        "width": ("width", "str"),
        "class": ("class_name", "str"),
    })
    if not xml.has_attribute(element, "thead"):
        raise SchemaViolation("Missing mandatory attribute", "entry", "thead")
    return node


def build_table_row(xml: ElementAccessor, element: Any) -> TableRow:
    node = TableRow(element_name="row")
    build_children(xml, element, node, {"entry": build_table_entry}, mixed=False)
    assign_attributes(xml, element, node, {})
    return node


def build_table_caption(xml: ElementAccessor, element: Any) -> TableCaption:
    node = TableCaption(element_name="caption")
    build_children(xml, element, node, TITLE_CONTENT)
    assign_attributes(xml, element, node, {"id": ("id", "str")})
    return node


def build_table(xml: ElementAccessor, element: Any) -> Table:
    node = Table(element_name="table")

    def hoist(tag: str, child: Node) -> None:
        if tag == "caption":
            node.caption = child

    content = {"caption": build_table_caption, "row": build_table_row}
    build_children(xml, element, node, content, mixed=False, on_child=hoist)
    assign_attributes(xml, element, node, {
        "rows": ("rows", "int"),
        "cols": ("cols", "int"),
        "width": ("width", "str"),
    })
    for name in ("rows", "cols"):
        if not xml.has_attribute(element, name):
            raise SchemaViolation("Missing mandatory attribute", "table", name)
    return node


def build_parameter_name(xml: ElementAccessor, element: Any) -> ParameterName:
    node = ParameterName(element_name="parametername")
    build_children(xml, element, node, {"ref": build_ref_text})
    assign_attributes(xml, element, node, {"direction": ("direction", "str")})
    return node


def build_parameter_type(xml: ElementAccessor, element: Any) -> ParameterType:
    node = ParameterType(element_name="parametertype")
    build_children(xml, element, node, {"ref": build_ref_text})
    assign_attributes(xml, element, node, {})
    return node


def build_parameter_name_list(xml: ElementAccessor, element: Any) -> ParameterNameList:
    node = ParameterNameList(element_name="parameternamelist")
    content = {"parametertype": build_parameter_type, "parametername": build_parameter_name}
    build_children(xml, element, node, content, mixed=False)
    assign_attributes(xml, element, node, {})
    return node


def build_parameter_item(xml: ElementAccessor, element: Any) -> ParameterItem:
    node = ParameterItem(element_name="parameteritem")

    def hoist(tag: str, child: Node) -> None:
        if tag == "parameterdescription":
            node.description = child

    content = {
        "parameternamelist": build_parameter_name_list,
        "parameterdescription": build_description,
    }
    build_children(xml, element, node, content, mixed=False, on_child=hoist)
    assign_attributes(xml, element, node, {})
    require(node, "description")
    return node


def build_parameter_list(xml: ElementAccessor, element: Any) -> ParameterList:
    node = ParameterList(element_name="parameterlist")
    build_children(xml, element, node, {"parameteritem": build_parameter_item}, mixed=False)
    assign_attributes(xml, element, node, {"kind": ("kind", "str")})
    require(node, "kind")
    return node


def build_xref_sect(xml: ElementAccessor, element: Any) -> XrefSect:
    node = XrefSect(element_name="xrefsect")
    for item in xml.inner_elements(element, "xrefsect"):
        if isinstance(item, str):
            if item.strip():
                raise SchemaViolation("Unexpected text in xrefsect", "xrefsect", "#text")
            continue
        tag = xml.tag(item)
        if tag == "xreftitle":
            node.title = xml.text_of(item)
        elif tag == "xrefdescription":
            node.description = build_description(xml, item)
            node.children.append(node.description)
        else:
            raise SchemaViolation("Unexpected child element", "xrefsect", tag)
    assign_attributes(xml, element, node, {"id": ("id", "str")})
    require(node, "id", "title", "description")
    return node


def build_blockquote(xml: ElementAccessor, element: Any) -> Blockquote:
    node = Blockquote(element_name="blockquote")
    build_children(xml, element, node, {"para": build_para}, mixed=False)
    assign_attributes(xml, element, node, {})
    return node


def build_parblock(xml: ElementAccessor, element: Any) -> Parblock:
    node = Parblock(element_name="parblock")
    build_children(xml, element, node, {"para": build_para}, mixed=False)
    assign_attributes(xml, element, node, {})
    return node


def build_verbatim(xml: ElementAccessor, element: Any) -> Verbatim:
    node = Verbatim(element_name="verbatim")
    text_only(xml, element, node)
    assign_attributes(xml, element, node, {})
    return node


def build_format_only(xml: ElementAccessor, element: Any) -> FormatOnly:
    node = FormatOnly(element_name=xml.tag(element))
    text_only(xml, element, node)
    assign_attributes(xml, element, node, {"block": ("block", "str")})
    return node


def build_heading(xml: ElementAccessor, element: Any) -> Heading:
    node = Heading(element_name="heading")
    build_children(xml, element, node, TITLE_CONTENT)
    assign_attributes(xml, element, node, {"level": ("level", "int")})
    require(node, "level")
    return node


def build_toc_item(xml: ElementAccessor, element: Any) -> TocItem:
    node = TocItem(element_name="tocitem")
    build_children(xml, element, node, TITLE_CONTENT, allow_empty=True)
    assign_attributes(xml, element, node, {"id": ("id", "str")})
    require(node, "id")
    return node


def build_toc_list(xml: ElementAccessor, element: Any) -> TocList:
    node = TocList(element_name="toclist")
    build_children(xml, element, node, {"tocitem": build_toc_item}, mixed=False, allow_empty=True)
    assign_attributes(xml, element, node, {})
    return node


def _section_builder(level: int) -> BuilderFunction:
    tag = f"sect{level}"

    def build_section(xml: ElementAccessor, element: Any) -> Section:
        node = Section(element_name=tag, level=level)

        def hoist(child_tag: str, child: Node) -> None:
            if child_tag == "title":
                node.title = child

        content: Dict[str, BuilderFunction] = {"title": build_title, "para": build_para}
        if level < 6:
            content[f"sect{level + 1}"] = _section_builder(level + 1)
            content["internal"] = _internal_builder(level + 1)
        build_children(xml, element, node, content, allow_empty=True, on_child=hoist)
        assign_attributes(xml, element, node, {"id": ("id", "str")})
        return node

    build_section.__name__ = f"build_{tag}"
    return build_section


def _internal_builder(level: int) -> BuilderFunction:
    def build_internal(xml: ElementAccessor, element: Any) -> Internal:
        node = Internal(element_name="internal", level=level)
        content: Dict[str, BuilderFunction] = {"para": build_para}
        if level <= 6:
            content[f"sect{level}"] = _section_builder(level)
        build_children(xml, element, node, content, mixed=False, allow_empty=True)
        assign_attributes(xml, element, node, {})
        return node

    return build_internal


TITLE_CONTENT.update(merged(
    {name: build_markup for name in MARKUP_ELEMENTS if name != "preformatted"},
    {name: build_substitution for name in SUBSTITUTIONS},
    {
        "ulink": build_ulink,
        "anchor": build_anchor,
        "ref": build_doc_ref,
        "linebreak": build_line_break,
        "image": build_image,
        "formula": build_formula,
        "emoji": build_emoji,
        "indexentry": build_index_entry,
    },
))

PARA_CONTENT.update(merged(
    TITLE_CONTENT,
    {name: build_markup for name in MARKUP_ELEMENTS},
    {name: build_format_only for name in FORMAT_ONLY_ELEMENTS},
    {
        "hruler": build_horizontal_ruler,
        "programlisting": build_program_listing,
        "itemizedlist": build_itemized_list,
        "orderedlist": build_ordered_list,
        "simplesect": build_simple_sect,
        "variablelist": build_variable_list,
        "table": build_table,
        "parameterlist": build_parameter_list,
        "xrefsect": build_xref_sect,
        "blockquote": build_blockquote,
        "parblock": build_parblock,
        "verbatim": build_verbatim,
        "heading": build_heading,
        "toclist": build_toc_list,
    },
))
