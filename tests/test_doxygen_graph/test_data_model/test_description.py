"""Tests for description node variants and builders."""

import pytest

from doxygen_graph.data_model.description import (
    CodeLine,
    Description,
    FilteredProgramListing,
    ItemizedList,
    Markup,
    Para,
    ProgramListing,
    Ref,
    Section,
    SimpleSect,
    Substitution,
    Table,
    TocList,
    VariableList,
    VariableListPair,
    XrefSect,
    build_description,
    build_para,
    build_program_listing,
    build_variable_list,
    filter_program_listing,
)
from doxygen_graph.data_model.node import NodeVisitor, walk
from doxygen_graph.shared import SchemaViolation


def para(xml, element, text):
    return build_para(xml, element(f"<para>{text}</para>"))


class TestMixedContent:
    """Test that text and elements keep their order."""

    def test_round_trip_children_order(self, xml, element):
        """Test children equal the non-whitespace text and elements, in order."""
        node = para(xml, element,
                    "Use <bold>this</bold> with <ref refid='classA' kindref='compound'>A</ref>.")
        assert node.children[0] == "Use "
        assert isinstance(node.children[1], Markup)
        assert node.children[1].element_name == "bold"
        assert node.children[2] == " with "
        assert isinstance(node.children[3], Ref)
        assert node.children[4] == "."
        assert node.text() == "Use this with A."

    def test_ref_fields(self, xml, element):
        """Test cross-reference attributes."""
        node = para(xml, element, "<ref refid='classA_1a1' kindref='member'>run</ref>")
        ref = node.find(Ref)
        assert ref.refid == "classA_1a1"
        assert ref.kindref == "member"
        assert ref.external is None

    def test_ref_requires_kindref(self, xml, element):
        """Test mandatory reference attributes."""
        with pytest.raises(SchemaViolation, match="kindref"):
            para(xml, element, "<ref refid='classA'>A</ref>")

    def test_substitutions(self, xml, element):
        """Test character substitution elements."""
        node = para(xml, element, "a<ndash/>b<nonbreakablespace/>c")
        values = [child.value for child in node.find_all(Substitution)]
        assert values == ["\u2013", "\u00a0"]
        assert [child for child in node.children if isinstance(child, str)] == ["a", "b", "c"]

    def test_unknown_element(self, xml, element):
        """Test that unrecognized elements are fatal."""
        with pytest.raises(SchemaViolation, match="Unexpected child element"):
            para(xml, element, "<blink>x</blink>")

    def test_unknown_attribute(self, xml, element):
        """Test that unrecognized attributes are fatal."""
        with pytest.raises(SchemaViolation, match="Unexpected attribute"):
            para(xml, element, "<bold color='red'>x</bold>")


class TestBlocks:
    """Test block-level description content."""

    def test_description_with_sections_and_title(self, xml, element):
        """Test nested sections and hoisted titles."""
        node = build_description(xml, element(
            "<detaileddescription>"
            "<sect1 id='md_intro_1overview'><title>Overview</title>"
            "<para>Text</para>"
            "<sect2 id='md_intro_1details'><title>Details</title></sect2>"
            "</sect1>"
            "</detaileddescription>"
        ))
        assert isinstance(node, Description)
        sect1 = node.find(Section)
        assert sect1.level == 1
        assert sect1.id == "md_intro_1overview"
        assert sect1.title.text() == "Overview"
        assert sect1.find(Section).element_name == "sect2"

    def test_not_a_description(self, xml, element):
        """Test the description tag check."""
        with pytest.raises(SchemaViolation, match="Not a description element"):
            build_description(xml, element("<para/>"))

    def test_lists_and_simple_sections(self, xml, element):
        """Test itemized lists and simple sections."""
        node = para(xml, element,
                    "<itemizedlist><listitem><para>one</para></listitem>"
                    "<listitem><para>two</para></listitem></itemizedlist>"
                    "<simplesect kind='return'><para>value</para></simplesect>")
        items = node.find(ItemizedList).items
        assert [item.text() for item in items] == ["one", "two"]
        assert node.find(SimpleSect).kind == "return"

    def test_table_with_caption(self, xml, element):
        """Test table rows, entries and hoisted caption."""
        node = para(xml, element,
                    "<table rows='1' cols='2'><caption>Sizes</caption>"
                    "<row><entry thead='yes'><para>a</para></entry>"
                    "<entry thead='no'><para>b</para></entry></row></table>")
        table = node.find(Table)
        assert (table.rows, table.cols) == (1, 2)
        assert table.caption.text() == "Sizes"
        entries = table.table_rows[0].entries
        assert [entry.thead for entry in entries] == [True, False]

    def test_table_requires_dimensions(self, xml, element):
        """Test mandatory table attributes."""
        with pytest.raises(SchemaViolation, match="rows"):
            para(xml, element, "<table cols='1'><row><entry thead='no'/></row></table>")

    def test_xrefsect(self, xml, element):
        """Test xref sections."""
        node = para(xml, element,
                    "<xrefsect id='todo_1_todo000001'><xreftitle>Todo</xreftitle>"
                    "<xrefdescription><para>Finish</para></xrefdescription></xrefsect>")
        xref = node.find(XrefSect)
        assert xref.id == "todo_1_todo000001"
        assert xref.title == "Todo"
        assert xref.description.text() == "Finish"

    def test_toc_list(self, xml, element):
        """Test table-of-contents lists."""
        node = para(xml, element,
                    "<toclist><tocitem id='md_intro_1overview'>Overview</tocitem></toclist>")
        assert [item.id for item in node.find(TocList).items] == ["md_intro_1overview"]


class TestVariableList:
    """Test the varlistentry/listitem pairing."""

    ENTRY = "<varlistentry><term>{}</term></varlistentry>"
    ITEM = "<listitem><para>{}</para></listitem>"

    def build(self, xml, element, body):
        return build_variable_list(xml, element(f"<variablelist>{body}</variablelist>"))

    def test_pairs(self, xml, element):
        """Test well-formed alternation."""
        body = (self.ENTRY.format("width") + self.ITEM.format("Pixels")
                + self.ENTRY.format("height") + self.ITEM.format("Rows"))
        node = self.build(xml, element, body)
        assert isinstance(node, VariableList)
        pairs = node.pairs
        assert len(pairs) == 2
        assert all(isinstance(pair, VariableListPair) for pair in pairs)
        assert pairs[0].term.term.text() == "width"
        assert pairs[1].definition.text() == "Rows"
        assert pairs[0].element_name == "varlistpair"

    def test_listitem_first(self, xml, element):
        """Test a definition without a term."""
        with pytest.raises(SchemaViolation, match="without preceding <varlistentry>"):
            self.build(xml, element, self.ITEM.format("orphan"))

    def test_consecutive_entries(self, xml, element):
        """Test two terms in a row."""
        body = self.ENTRY.format("a") + self.ENTRY.format("b") + self.ITEM.format("x")
        with pytest.raises(SchemaViolation, match="Consecutive <varlistentry>"):
            self.build(xml, element, body)

    def test_trailing_entry(self, xml, element):
        """Test a term left without a definition."""
        body = self.ENTRY.format("a") + self.ITEM.format("x") + self.ENTRY.format("b")
        with pytest.raises(SchemaViolation, match="Trailing <varlistentry>"):
            self.build(xml, element, body)


class TestProgramListing:
    """Test program listings and line-range filtering."""

    @pytest.fixture
    def listing(self, xml, element):
        lines = "".join(
            f"<codeline lineno='{n}'><highlight class='normal'>line<sp/>{n}</highlight></codeline>"
            for n in range(1, 6)
        )
        return build_program_listing(xml, element(f"<programlisting>{lines}</programlisting>"))

    def test_codelines(self, listing):
        """Test parsed code lines."""
        assert isinstance(listing, ProgramListing)
        assert [line.lineno for line in listing.codelines] == [1, 2, 3, 4, 5]
        assert listing.codelines[0].text() == "line1"

    def test_filter_range(self, listing):
        """Test an inclusive range."""
        filtered = filter_program_listing(listing, 2, 4)
        assert isinstance(filtered, FilteredProgramListing)
        assert [line.lineno for line in filtered.codelines] == [2, 3, 4]
        assert not filtered.is_empty

    def test_filter_is_idempotent(self, listing):
        """Test that refiltering to the same range changes nothing."""
        once = filter_program_listing(listing, 2, 4)
        twice = filter_program_listing(once, 2, 4)
        assert [line.lineno for line in twice.codelines] == [2, 3, 4]

    def test_filter_empty_ranges(self, listing):
        """Test that impossible ranges yield empty listings."""
        assert filter_program_listing(listing, 4, 2).is_empty
        assert filter_program_listing(listing, 10, 20).is_empty

    def test_source_listing_untouched(self, listing):
        """Test that filtering does not modify the source."""
        filter_program_listing(listing, 1, 1)
        assert len(listing.find_all(CodeLine)) == 5


class TestTraversal:
    """Test generic traversal over node variants."""

    def test_walk_in_document_order(self, xml, element):
        """Test depth-first document order."""
        node = para(xml, element, "<bold>a<emphasis>b</emphasis></bold><underline>c</underline>")
        names = [child.element_name for child in walk(node)]
        assert names == ["para", "bold", "emphasis", "underline"]

    def test_visitor_dispatch(self, xml, element):
        """Test dispatch on the variant tag with a generic fallback."""
        node = para(xml, element, "<bold>a</bold><ref refid='x' kindref='compound'>x</ref>")

        class RefCollector(NodeVisitor):
            def __init__(self):
                super().__init__()
                self.refids = []

            def visit_ref(self, ref):
                self.refids.append(ref.refid)

        collector = RefCollector()
        collector.visit(node)
        assert collector.refids == ["x"]
        assert isinstance(node, Para)
