"""Tests for workspace phases and the permalink service."""

import json
import logging

import pytest

from doxygen_graph.data_model import DataModel
from doxygen_graph.shared import (
    DiagnosticSeverity,
    GraphConfig,
    PermalinkCollision,
    PipelinePhaseError,
)
from doxygen_graph.workspace import PipelinePhase, Workspace


def described(compound_id, kind, name, detailed, title=None):
    """Compound whose detailed description is ``detailed``."""
    title_xml = f"<title>{title}</title>" if title is not None else ""
    return (
        f'<compounddef id="{compound_id}" kind="{kind}">'
        f"<compoundname>{name}</compoundname>{title_xml}"
        "<briefdescription><para>Brief text.</para></briefdescription>"
        f"<detaileddescription>{detailed}</detaileddescription>"
        "</compounddef>"
    )


SETUP_PAGE = described(
    "setup", "page", "setup",
    '<para><toclist><tocitem id="setup_1autotoc_md1">Requirements</tocitem>'
    '<tocitem id="classA_1abc">Shadowed</tocitem></toclist></para>'
    '<para>See <anchor id="setup_1prereq"/>below.</para>'
    '<sect1 id="setup_1install"><title>Install</title><para>Run it.</para></sect1>',
    title="Setup",
)


class TestPermalinkDeduplication:
    """Test collision suffixes."""

    @pytest.fixture
    def workspace(self, build_graph, compound_xml):
        return build_graph(
            compound_xml("classa__b", "class", "a_b"),
            compound_xml("classA__B", "class", "A_B"),
            compound_xml("classA-B", "class", "A-B"),
            compound_xml("classA__B__1", "class", "A_B_1"),
        )

    def test_suffixes_in_document_order(self, workspace):
        """Test that the first keeps its permalink and taken suffixes are skipped."""
        assert workspace.permalinks_by_id == {
            "classa__b": "classes/a-b",
            "classA__B": "classes/a-b-2",
            "classA-B": "classes/a-b-3",
            "classA__B__1": "classes/a-b-1",
        }

    def test_permalinks_unique(self, workspace):
        """Test that every page has its own permalink."""
        permalinks = list(workspace.permalinks_by_id.values())
        assert len(permalinks) == len(set(permalinks))

    def test_sidebar_ids_follow(self, workspace):
        """Test that sidebar ids get the same suffix."""
        assert workspace.compounds_by_id["classA-B"].sidebar_id == "classes/a-b-3"

    def test_collision_reported(self, workspace):
        """Test the collision diagnostic."""
        collisions = [d for d in workspace.diagnostics if isinstance(d, PermalinkCollision)]
        assert len(collisions) == 1
        assert collisions[0].permalink == "classes/a-b"
        assert collisions[0].compound_ids == ["classa__b", "classA__B", "classA-B"]
        assert workspace.metrics.permalink_collisions == 1


class TestGetPermalink:
    """Test reference resolution."""

    @pytest.fixture
    def workspace(self, build_graph, compound_xml):
        return build_graph(
            compound_xml("classA", "class", "A"),
            SETUP_PAGE,
            compound_xml("todo", "page", "todo", title="Todo List"),
        )

    def test_compound(self, workspace):
        """Test compound refs."""
        assert workspace.get_permalink("classA", "compound") == "/docs/api/classes/a"

    def test_member_of_compound(self, workspace):
        """Test that the anchor follows the compound page."""
        assert workspace.get_permalink("classA_1a42", "member") == "/docs/api/classes/a/#a42"

    def test_compound_beats_toc_item(self, workspace):
        """Test that a compound id wins over a TOC item with the same id."""
        assert "classA_1abc" in workspace.description_toc_items_by_id
        assert workspace.get_permalink("classA_1abc", "member") == "/docs/api/classes/a/#abc"

    def test_toc_item(self, workspace):
        """Test refs to markdown headings."""
        assert (workspace.get_permalink("setup_1autotoc_md1", "member")
                == "/docs/api/pages/setup/#autotoc_md1")

    def test_inline_anchor(self, workspace):
        """Test refs to anchors and section ids."""
        assert workspace.get_permalink("setup_1prereq", "member") == "/docs/api/pages/setup/#prereq"
        assert (workspace.get_permalink("setup_1install", "member")
                == "/docs/api/pages/setup/#install")

    def test_xrefsect(self, workspace):
        """Test refs into the todo list page."""
        assert (workspace.get_permalink("todo_1_todo000001", "xrefsect")
                == "/docs/api/pages/todo/#_todo000001")

    def test_unresolved_member(self, workspace, caplog):
        """Test that a dangling ref yields None and a diagnostic."""
        with caplog.at_level(logging.WARNING):
            assert workspace.get_permalink("classGhost_1a1", "member", source_id="setup") is None
        unresolved = workspace.unresolved_references[-1]
        assert unresolved.target_id == "classGhost_1a1"
        assert unresolved.source_id == "setup"
        assert unresolved.severity is DiagnosticSeverity.WARNING
        assert "classGhost_1a1" in caplog.text

    def test_unresolved_compound(self, workspace):
        """Test a ref to a compound without a page."""
        assert workspace.get_permalink("classGhost", "compound") is None
        assert workspace.unresolved_references[-1].reason == "no compound page"

    def test_unsupported_kindref(self, workspace):
        """Test an unknown kindref."""
        assert workspace.get_permalink("classA", "file") is None
        assert workspace.unresolved_references[-1].kindref == "file"

    def test_quiet_config_still_records(self, build_graph, compound_xml, caplog):
        """Test that silencing warnings keeps diagnostics."""
        workspace = build_graph(compound_xml("classA", "class", "A"), config=GraphConfig.quiet())
        with caplog.at_level(logging.WARNING):
            assert workspace.get_permalink("classGhost", "compound") is None
        assert len(workspace.unresolved_references) == 1
        assert "classGhost" not in caplog.text


def test_description_indexing_disabled(build_graph):
    """Test that TOC items and anchors can be left unindexed."""
    config = GraphConfig().override(resolver__index_descriptions=False)
    workspace = build_graph(SETUP_PAGE, config=config)
    assert workspace.description_toc_items_by_id == {}
    assert workspace.get_permalink("setup_1autotoc_md1", "member") is None


class TestPhases:
    """Test phase ordering."""

    @pytest.fixture
    def workspace(self, document_xml, compound_xml):
        from doxygen_graph.api import parse_compound_string

        model = DataModel()
        model.add_document(parse_compound_string(document_xml(compound_xml("classA", "class", "A"))))
        return Workspace(model)

    def test_services_need_resolved_workspace(self, workspace):
        """Test that lookups before resolution fail loudly."""
        workspace.create_view_model_objects()
        with pytest.raises(PipelinePhaseError, match="requires RESOLVED, at WRAPPED"):
            workspace.get_permalink("classA", "compound")

    def test_link_before_wrap(self, workspace):
        """Test that phases cannot be skipped."""
        with pytest.raises(PipelinePhaseError):
            workspace.create_hierarchies()

    def test_wrap_twice(self, workspace):
        """Test that phases cannot be repeated."""
        workspace.create_view_model_objects()
        with pytest.raises(PipelinePhaseError):
            workspace.create_view_model_objects()

    def test_build(self, workspace):
        """Test the full run."""
        assert workspace.build() is workspace
        assert workspace.phase is PipelinePhase.RESOLVED
        assert set(workspace.metrics.phase_times_ms) == {"wrap", "link", "permalinks"}


class TestCompoundFiltering:
    """Test compounds the graph does not wrap."""

    def test_unsupported_kind(self, build_graph, compound_xml, caplog):
        """Test that an unknown kind is skipped with an error diagnostic."""
        workspace = build_graph(
            compound_xml("conceptC", "concept", "C"),
            compound_xml("classA", "class", "A"),
        )
        assert list(workspace.compounds_by_id) == ["classA"]
        errors = [d for d in workspace.diagnostics if d.severity is DiagnosticSeverity.ERROR]
        assert len(errors) == 1
        assert errors[0].details == {"compound_id": "conceptC", "kind": "concept"}
        assert workspace.metrics.compounds_skipped == 1
        assert "not supported" in caplog.text

    def test_duplicate_id_keeps_first(self, build_graph, compound_xml):
        """Test repeated compound definitions."""
        workspace = build_graph(
            compound_xml("classA", "class", "A"),
            compound_xml("classA", "class", "Again"),
        )
        assert workspace.compounds_by_id["classA"].compound_name == "A"
        assert len(workspace.classes) == 1


def test_to_dict(build_graph, compound_xml):
    """Test the serializable snapshot."""
    workspace = build_graph(
        compound_xml("classA", "class", "A", '<derivedcompoundref refid="classB" prot="public" '
                     'virt="non-virtual">B</derivedcompoundref>'),
        described("classB", "class", "B", ""),
    )
    snapshot = workspace.to_dict()
    json.dumps(snapshot)
    classes = snapshot["collections"]["classes"]
    assert classes["top_level"] == ["classA"]
    assert classes["compounds"]["classB"] == {
        "kind": "class",
        "name": "B",
        "label": "B",
        "parent": "classA",
        "children": [],
        "permalink": "classes/b",
        "brief": "Brief text.",
    }
    assert snapshot["permalinks"] == {"classA": "classes/a", "classB": "classes/b"}
    assert snapshot["doxygen_version"] == "1.9.8"
    assert snapshot["main_page"] is None
    assert snapshot["metrics"]["compounds_wrapped"] == 2
