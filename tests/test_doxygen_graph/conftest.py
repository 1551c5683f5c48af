"""Shared fixtures: inline Doxygen XML and graphs built from it."""

from pathlib import Path
from typing import Callable, Optional

import pytest
from lxml import etree

from doxygen_graph.api import parse_compound_string
from doxygen_graph.data_model import DataModel, ElementAccessor
from doxygen_graph.shared import GraphConfig
from doxygen_graph.workspace import Workspace, build_workspace

DOCUMENT_TEMPLATE = (
    '<?xml version="1.0" encoding="UTF-8" standalone="no"?>\n'
    '<doxygen xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance" '
    'xsi:noNamespaceSchemaLocation="compound.xsd" version="1.9.8" xml:lang="en-US">\n'
    "{body}\n"
    "</doxygen>\n"
)


def make_compound(compound_id: str, kind: str, name: str, body: str = "",
                  title: Optional[str] = None) -> str:
    title_xml = f"<title>{title}</title>" if title is not None else ""
    return (
        f'<compounddef id="{compound_id}" kind="{kind}" language="C++">'
        f"<compoundname>{name}</compoundname>{title_xml}{body}"
        "<briefdescription>\n</briefdescription>"
        "<detaileddescription>\n</detaileddescription>"
        "</compounddef>"
    )


def make_document(*compounds: str) -> str:
    return DOCUMENT_TEMPLATE.format(body="\n".join(compounds))


@pytest.fixture
def compound_xml() -> Callable[..., str]:
    return make_compound


@pytest.fixture
def document_xml() -> Callable[..., str]:
    return make_document


@pytest.fixture
def xml() -> ElementAccessor:
    return ElementAccessor()


@pytest.fixture
def element() -> Callable[[str], etree._Element]:
    """Parse an XML fragment into an lxml element."""
    def _element(text: str) -> etree._Element:
        return etree.fromstring(text)
    return _element


@pytest.fixture
def build_graph() -> Callable[..., Workspace]:
    """Resolve a workspace from compound definitions given as XML strings."""
    def _build(*compounds: str, config: Optional[GraphConfig] = None) -> Workspace:
        model = DataModel()
        model.add_document(parse_compound_string(make_document(*compounds), config))
        model.process_member_defs()
        return build_workspace(model, config)
    return _build


@pytest.fixture
def xml_folder(tmp_path: Path) -> Path:
    """Minimal Doxygen XML output folder with a class, a file and the main page."""
    index = (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<doxygenindex version="1.9.8" xml:lang="en-US">\n'
        '<compound refid="classmy_1_1Widget" kind="class"><name>my::Widget</name>'
        '<member refid="classmy_1_1Widget_1a1" kind="function"><name>draw</name></member>'
        "</compound>\n"
        '<compound refid="namespacemy" kind="namespace"><name>my</name></compound>\n'
        '<compound refid="widget_8h" kind="file"><name>widget.h</name></compound>\n'
        '<compound refid="indexpage" kind="page"><name>index</name></compound>\n'
        "</doxygenindex>\n"
    )
    widget = make_compound(
        "classmy_1_1Widget", "class", "my::Widget",
        '<sectiondef kind="public-func">'
        '<memberdef kind="function" id="classmy_1_1Widget_1a1" prot="public" static="no">'
        "<type>void</type><definition>void my::Widget::draw</definition>"
        "<argsstring>()</argsstring><name>draw</name>"
        '<location file="include/widget.h" line="12" bodyfile="include/widget.h" '
        'bodystart="12" bodyend="13"/>'
        "</memberdef></sectiondef>"
        '<location file="include/widget.h" line="8"/>',
    )
    namespace = make_compound(
        "namespacemy", "namespace", "my",
        '<innerclass refid="classmy_1_1Widget" prot="public">my::Widget</innerclass>'
        '<location file="include/widget.h" line="4"/>',
    )
    header = make_compound(
        "widget_8h", "file", "widget.h",
        '<innerclass refid="classmy_1_1Widget" prot="public">my::Widget</innerclass>'
        '<programlisting>'
        '<codeline lineno="12"><highlight class="normal">void<sp/>draw()</highlight></codeline>'
        '<codeline lineno="13"><highlight class="normal">{}</highlight></codeline>'
        "</programlisting>"
        '<location file="include/widget.h"/>',
    )
    main_page = make_compound("indexpage", "page", "index", title="Widget Library")
    doxyfile = (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<doxyfile version="1.9.8" xml:lang="en-US">'
        '<option id="PROJECT_NAME" default="no" type="string"><value>Widgets</value></option>'
        "</doxyfile>\n"
    )
    (tmp_path / "index.xml").write_text(index, encoding="utf-8")
    (tmp_path / "classmy_1_1Widget.xml").write_text(make_document(widget), encoding="utf-8")
    (tmp_path / "namespacemy.xml").write_text(make_document(namespace), encoding="utf-8")
    (tmp_path / "widget_8h.xml").write_text(make_document(header), encoding="utf-8")
    (tmp_path / "indexpage.xml").write_text(make_document(main_page), encoding="utf-8")
    (tmp_path / "Doxyfile.xml").write_text(doxyfile, encoding="utf-8")
    return tmp_path
