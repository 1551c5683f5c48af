"""Tests for document assembly, the index and the data model."""

import pytest
from lxml import etree

from doxygen_graph.api import parse_compound_string, parse_doxyfile_string, parse_index_string
from doxygen_graph.data_model.document import DataModel, assemble_document
from doxygen_graph.shared import SchemaViolation


class TestAssembleDocument:
    """Test the root document."""

    def test_generator_metadata(self, xml, document_xml, compound_xml):
        """Test doxygen root attributes and compound order."""
        text = document_xml(compound_xml("classA", "class", "A"), compound_xml("classB", "class", "B"))
        root = etree.fromstring(text.encode("utf-8"))
        document = assemble_document(xml, etree.ElementTree(root))
        assert document.version == "1.9.8"
        assert document.lang == "en-US"
        assert document.schema_location == "compound.xsd"
        assert [compound.id for compound in document.compound_defs] == ["classA", "classB"]

    def test_missing_version(self, xml, element):
        """Test the mandatory generator version."""
        with pytest.raises(SchemaViolation, match="version"):
            assemble_document(xml, element("<doxygen/>"))


class TestIndex:
    """Test index.xml and Doxyfile.xml documents."""

    def test_index_compounds_and_members(self):
        """Test index entries."""
        index = parse_index_string(
            '<doxygenindex version="1.9.8" xml:lang="en-US">'
            '<compound refid="classA" kind="class"><name>A</name>'
            '<member refid="classA_1a1" kind="function"><name>run</name></member></compound>'
            "</doxygenindex>"
        )
        compound = index.compounds[0]
        assert (compound.refid, compound.kind, compound.name) == ("classA", "class", "A")
        assert compound.members[0].name == "run"

    def test_index_compound_requires_name(self):
        """Test mandatory index fields."""
        with pytest.raises(SchemaViolation, match="key 'name'"):
            parse_index_string(
                '<doxygenindex version="1.9.8"><compound refid="classA" kind="class">'
                '<member refid="classA_1a1" kind="function"><name>run</name></member>'
                "</compound></doxygenindex>"
            )

    def test_doxyfile_options(self):
        """Test option lookup by id."""
        doxyfile = parse_doxyfile_string(
            '<doxyfile version="1.9.8" xml:lang="en-US">'
            '<option id="PROJECT_NAME" default="no" type="string"><value>Demo</value></option>'
            '<option id="INPUT" default="no" type="string"><value>src</value><value>include</value></option>'
            "</doxyfile>"
        )
        assert doxyfile.option("INPUT").values == ["src", "include"]
        assert doxyfile.option("MISSING") is None


class TestDataModel:
    """Test aggregation across documents."""

    SECTION = (
        '<sectiondef kind="func">'
        '<memberdef kind="function" id="group__io_1a1" prot="public" static="no">'
        "<name>read</name></memberdef>"
        "</sectiondef>"
    )

    def test_member_kinds_filled_from_definitions(self, document_xml, compound_xml):
        """Test that section member references get their kind."""
        model = DataModel()
        model.add_document(parse_compound_string(document_xml(
            compound_xml("group__io", "group", "io", self.SECTION, title="IO"),
            compound_xml("classA", "class", "A",
                         '<sectiondef kind="related">'
                         '<member refid="group__io_1a1"><name>read</name></member>'
                         "</sectiondef>"),
        )))
        model.process_member_defs()
        assert model.member_defs_by_id["group__io_1a1"].name == "read"
        member = model.compound_defs[1].section_defs[0].members[0]
        assert member.kind == "function"

    def test_member_without_kind_or_definition(self, document_xml, compound_xml):
        """Test the fatal case of an unknown member reference."""
        model = DataModel()
        model.add_document(parse_compound_string(document_xml(compound_xml(
            "classA", "class", "A",
            '<sectiondef kind="related"><member refid="nowhere_1a1"><name>x</name></member></sectiondef>',
        ))))
        with pytest.raises(SchemaViolation, match="no kind and no definition"):
            model.process_member_defs()

    def test_project_metadata_without_doxyfile(self):
        """Test defaults when no Doxyfile was loaded."""
        model = DataModel()
        assert model.project_name is None
        assert model.doxygen_version is None
        assert model.doxyfile_option("PROJECT_NAME") == []
