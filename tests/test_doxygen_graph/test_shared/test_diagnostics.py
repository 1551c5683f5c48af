"""Tests for errors, diagnostics and metrics."""

import time

import pytest

from doxygen_graph.shared.errors import (
    DoxygenGraphError,
    InputError,
    PipelinePhaseError,
    SchemaViolation,
)
from doxygen_graph.shared.result import (
    Diagnostic,
    DiagnosticSeverity,
    PermalinkCollision,
    PipelineMetrics,
    UnresolvedReference,
)


class TestErrors:
    """Test exception types."""

    def test_schema_violation_context(self):
        """Test that the message names element, key and builder."""
        error = SchemaViolation("Missing mandatory field", "compounddef", "id", "build_compound_def")
        assert isinstance(error, DoxygenGraphError)
        assert error.element_name == "compounddef"
        assert error.key == "id"
        assert str(error) == (
            "Missing mandatory field (element <compounddef>, key 'id', builder build_compound_def)"
        )

    def test_schema_violation_without_context(self):
        """Test a bare message."""
        assert str(SchemaViolation("Broken")) == "Broken"

    def test_pipeline_phase_error(self):
        """Test phase names in the message."""
        error = PipelinePhaseError("get_permalink is not available yet", "RESOLVED", "WRAPPED")
        assert "requires RESOLVED, at WRAPPED" in str(error)

    def test_input_error_path(self):
        """Test that the path is appended."""
        error = InputError("File not found", "xml/index.xml")
        assert str(error) == "File not found: xml/index.xml"
        assert error.path == "xml/index.xml"


class TestDiagnostics:
    """Test diagnostic records."""

    def test_diagnostic_validation(self):
        """Test that message and component are mandatory."""
        with pytest.raises(ValueError, match="message cannot be empty"):
            Diagnostic(DiagnosticSeverity.INFO, "", "resolver")
        with pytest.raises(ValueError, match="component cannot be empty"):
            Diagnostic(DiagnosticSeverity.INFO, "message", "")

    def test_unresolved_reference_details(self):
        """Test that reference context lands in details."""
        diagnostic = UnresolvedReference(
            severity=DiagnosticSeverity.WARNING,
            message="Unresolved reference to 'classB'",
            component="resolver",
            source_id="classA",
            target_id="classB",
            kindref="compound",
            reason="base class not documented",
        )
        data = diagnostic.to_dict()
        assert data["severity"] == "WARNING"
        assert data["details"]["source_id"] == "classA"
        assert data["details"]["target_id"] == "classB"
        assert data["details"]["kindref"] == "compound"

    def test_unresolved_reference_requires_target(self):
        """Test that the target id is mandatory."""
        with pytest.raises(ValueError, match="must name its target id"):
            UnresolvedReference(DiagnosticSeverity.WARNING, "Unresolved", "resolver")

    def test_permalink_collision_requires_two_compounds(self):
        """Test collision validation."""
        with pytest.raises(ValueError, match="at least two compounds"):
            PermalinkCollision(
                DiagnosticSeverity.WARNING, "Collision", "workspace",
                permalink="classes/a", compound_ids=["classA"],
            )


class TestPipelineMetrics:
    """Test metric counters."""

    def test_record_phase(self):
        """Test phase timing accumulation."""
        metrics = PipelineMetrics()
        metrics.record_phase("wrap", time.perf_counter())
        metrics.phase_times_ms["link"] = 2.0
        assert metrics.phase_times_ms["wrap"] >= 0.0
        assert metrics.total_time_ms == pytest.approx(metrics.phase_times_ms["wrap"] + 2.0)

    def test_to_dict(self):
        """Test the serialized form."""
        metrics = PipelineMetrics(compounds_wrapped=3, collection_sizes={"classes": 3})
        data = metrics.to_dict()
        assert data["compounds_wrapped"] == 3
        assert data["collection_sizes"] == {"classes": 3}
        assert data["total_time_ms"] == 0
