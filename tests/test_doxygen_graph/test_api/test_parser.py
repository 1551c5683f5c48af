"""Tests for the parsing entry points."""

import pytest

from doxygen_graph.api import (
    load_data_model,
    parse_compound_file,
    parse_compound_string,
    parse_doxyfile_file,
    parse_index_file,
    parse_index_string,
    process_folder,
)
from doxygen_graph.shared import InputError, SchemaViolation


class TestParseStrings:
    """Test single-document parsing."""

    def test_compound_string(self, document_xml, compound_xml):
        """Test a minimal compound document."""
        document = parse_compound_string(document_xml(compound_xml("classA", "class", "A")))
        assert document.version == "1.9.8"
        assert document.lang == "en-US"
        assert document.schema_location == "compound.xsd"
        assert [compound.id for compound in document.compound_defs] == ["classA"]

    def test_bytes_input(self, document_xml, compound_xml):
        """Test that encoded input with a declaration is accepted."""
        data = document_xml(compound_xml("classA", "class", "A")).encode("utf-8")
        assert parse_compound_string(data).compound_defs[0].compound_name == "A"

    def test_malformed_xml(self):
        """Test that syntax errors become input errors."""
        with pytest.raises(InputError, match="Malformed XML"):
            parse_compound_string("<doxygen version='1.9.8'><compounddef>")

    def test_wrong_root(self):
        """Test that an index is not accepted as a compound file."""
        with pytest.raises(SchemaViolation, match="Expected root element <doxygen>"):
            parse_compound_string('<doxygenindex version="1.9.8"/>')

    def test_empty_index(self):
        """Test an index without compounds."""
        assert parse_index_string('<doxygenindex version="1.9.8"/>').compounds == []


class TestParseFiles:
    """Test parsing from disk."""

    def test_index_file(self, xml_folder):
        """Test index order and members."""
        index = parse_index_file(xml_folder / "index.xml")
        assert [compound.refid for compound in index.compounds] == [
            "classmy_1_1Widget", "namespacemy", "widget_8h", "indexpage",
        ]
        assert [member.name for member in index.compounds[0].members] == ["draw"]

    def test_compound_file(self, xml_folder):
        """Test a compound file."""
        document = parse_compound_file(xml_folder / "widget_8h.xml")
        assert document.compound_defs[0].program_listing is not None

    def test_doxyfile(self, xml_folder):
        """Test option lookup."""
        doxyfile = parse_doxyfile_file(xml_folder / "Doxyfile.xml")
        assert doxyfile.option("PROJECT_NAME").values == ["Widgets"]
        assert doxyfile.option("MISSING") is None

    def test_missing_file(self, tmp_path):
        """Test that a missing file names its path."""
        with pytest.raises(InputError, match="File not found"):
            parse_compound_file(tmp_path / "nothing.xml")


class TestLoadDataModel:
    """Test folder loading."""

    def test_load(self, xml_folder):
        """Test that every listed compound is loaded in index order."""
        model = load_data_model(xml_folder)
        assert [compound.id for compound in model.compound_defs] == [
            "classmy_1_1Widget", "namespacemy", "widget_8h", "indexpage",
        ]
        assert model.project_name == "Widgets"
        assert model.doxygen_version == "1.9.8"
        assert list(model.member_defs_by_id) == ["classmy_1_1Widget_1a1"]

    def test_without_doxyfile(self, xml_folder):
        """Test that Doxyfile.xml is optional."""
        (xml_folder / "Doxyfile.xml").unlink()
        model = load_data_model(xml_folder)
        assert model.doxyfile is None
        assert model.project_name is None

    def test_repeated_index_entry(self, xml_folder):
        """Test that a compound listed twice is read once."""
        index_path = xml_folder / "index.xml"
        text = index_path.read_text(encoding="utf-8")
        repeated = '<compound refid="namespacemy" kind="namespace"><name>my</name></compound>\n'
        index_path.write_text(text.replace("</doxygenindex>", repeated + "</doxygenindex>"),
                              encoding="utf-8")
        assert len(load_data_model(xml_folder).documents) == 4

    def test_missing_compound_file(self, xml_folder):
        """Test that a listed but absent compound file is an input error."""
        (xml_folder / "namespacemy.xml").unlink()
        with pytest.raises(InputError, match="namespacemy.xml"):
            load_data_model(xml_folder)

    def test_not_a_folder(self, tmp_path):
        """Test a path that is not a folder."""
        with pytest.raises(InputError, match="Not a folder"):
            load_data_model(tmp_path / "missing")


def test_process_folder(xml_folder):
    """Test the whole pipeline on a folder."""
    workspace = process_folder(xml_folder)
    assert workspace.permalinks_by_id == {
        "classmy_1_1Widget": "classes/my/widget",
        "namespacemy": "namespaces/my",
        "widget_8h": "files/widget-h",
        "indexpage": "pages/index",
    }
    assert workspace.main_page.page_title == "Widget Library"
    assert workspace.metrics.documents_loaded == 4
    assert "load" in workspace.metrics.phase_times_ms
    assert workspace.diagnostics == []
