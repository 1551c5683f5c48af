"""Shared utilities for the Doxygen graph pipeline.

This module provides the error types, configuration objects, diagnostic
records and logging helpers used across all processing layers.
"""

from .config import (
    ConfigError,
    ConfigValidationError,
    GlobalConfig,
    GraphConfig,
    ParserConfig,
    PermalinkConfig,
    ResolverConfig,
)
from .errors import (
    DoxygenGraphError,
    InputError,
    PipelinePhaseError,
    SchemaViolation,
)
from .logging import (
    ComponentLogger,
    configure_logging,
    get_logger,
)
from .result import (
    Diagnostic,
    DiagnosticSeverity,
    PermalinkCollision,
    PipelineMetrics,
    UnresolvedReference,
)

__all__ = [
    "ConfigError",
    "ConfigValidationError",
    "GlobalConfig",
    "GraphConfig",
    "ParserConfig",
    "PermalinkConfig",
    "ResolverConfig",
    "DoxygenGraphError",
    "InputError",
    "PipelinePhaseError",
    "SchemaViolation",
    "ComponentLogger",
    "configure_logging",
    "get_logger",
    "Diagnostic",
    "DiagnosticSeverity",
    "PermalinkCollision",
    "PipelineMetrics",
    "UnresolvedReference",
]
