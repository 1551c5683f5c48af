"""Diagnostic records and metrics produced by the Doxygen graph pipeline.

Recoverable problems never raise; they are collected here so that callers can
report them after a build completes with degraded (unlinked) output.
"""

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List, Optional


class DiagnosticSeverity(Enum):
    """Severity levels for diagnostic entries."""

    DEBUG = auto()
    INFO = auto()
    WARNING = auto()    # Degraded output, build continues
    ERROR = auto()      # Content dropped, build continues


@dataclass
class Diagnostic:
    """Single diagnostic entry with context information."""

    severity: DiagnosticSeverity
    message: str
    component: str
    details: Dict[str, Any] = field(default_factory=dict)
    timestamp: float = field(default_factory=time.time)

    def __post_init__(self) -> None:
        """Validate diagnostic entry."""
        if not self.message:
            raise ValueError("Diagnostic message cannot be empty")
        if not self.component:
            raise ValueError("Diagnostic component cannot be empty")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "severity": self.severity.name,
            "message": self.message,
            "component": self.component,
            "details": dict(self.details),
        }


@dataclass
class UnresolvedReference(Diagnostic):
    """A cross-reference whose target is not in any lookup map.

    The reference degrades to its plain-text label.
    """

    source_id: Optional[str] = None
    target_id: str = ""
    kindref: Optional[str] = None
    reason: str = ""

    def __post_init__(self) -> None:
        super().__post_init__()
        if not self.target_id:
            raise ValueError("Unresolved reference must name its target id")
        self.details.setdefault("source_id", self.source_id)
        self.details.setdefault("target_id", self.target_id)
        self.details.setdefault("kindref", self.kindref)
        self.details.setdefault("reason", self.reason)


@dataclass
class PermalinkCollision(Diagnostic):
    """Several wrappers sanitized to the same permalink and were suffixed."""

    permalink: str = ""
    compound_ids: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        super().__post_init__()
        if len(self.compound_ids) < 2:
            raise ValueError("A collision involves at least two compounds")
        self.details.setdefault("permalink", self.permalink)
        self.details.setdefault("compound_ids", list(self.compound_ids))


@dataclass
class PipelineMetrics:
    """Counters and timings for one pipeline run."""

    documents_loaded: int = 0
    compounds_parsed: int = 0
    compounds_wrapped: int = 0
    compounds_skipped: int = 0
    members_indexed: int = 0
    toc_items_indexed: int = 0
    anchors_indexed: int = 0
    unresolved_references: int = 0
    permalink_collisions: int = 0
    collection_sizes: Dict[str, int] = field(default_factory=dict)
    phase_times_ms: Dict[str, float] = field(default_factory=dict)

    @property
    def total_time_ms(self) -> float:
        return sum(self.phase_times_ms.values())

    def record_phase(self, phase: str, started_at: float) -> None:
        """Record the elapsed time of ``phase`` since ``started_at``."""
        self.phase_times_ms[phase] = (time.perf_counter() - started_at) * 1000.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "documents_loaded": self.documents_loaded,
            "compounds_parsed": self.compounds_parsed,
            "compounds_wrapped": self.compounds_wrapped,
            "compounds_skipped": self.compounds_skipped,
            "members_indexed": self.members_indexed,
            "toc_items_indexed": self.toc_items_indexed,
            "anchors_indexed": self.anchors_indexed,
            "unresolved_references": self.unresolved_references,
            "permalink_collisions": self.permalink_collisions,
            "collection_sizes": dict(self.collection_sizes),
            "phase_times_ms": dict(self.phase_times_ms),
            "total_time_ms": self.total_time_ms,
        }
