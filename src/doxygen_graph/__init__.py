"""Doxygen Graph.

Turns Doxygen XML output into a typed node tree and a linked, permalinked
object graph that documentation renderers consume.

Progressive API Disclosure:
- Level 1: Single documents - parse_compound_string(), parse_compound_file()
- Level 2: Whole output folders - load_data_model()
- Level 3: Resolved graph - build_workspace(), process_folder()
"""

__version__ = "0.1.0"
__author__ = "Doxygen Graph Team"

from .api import (
    build_workspace,
    load_data_model,
    parse_compound_file,
    parse_compound_string,
    parse_index_string,
    process_folder,
)
from .data_model import DataModel, DoxygenDocument, Node
from .shared import (
    DoxygenGraphError,
    GraphConfig,
    InputError,
    PipelinePhaseError,
    SchemaViolation,
    UnresolvedReference,
)
from .workspace import PipelinePhase, Workspace

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: single documents
    "parse_compound_string",
    "parse_compound_file",
    "parse_index_string",

    # Level 2 and 3: folders and the resolved graph
    "load_data_model",
    "build_workspace",
    "process_folder",

    # Result objects
    "DataModel",
    "DoxygenDocument",
    "Node",
    "PipelinePhase",
    "Workspace",

    # Configuration and errors
    "GraphConfig",
    "DoxygenGraphError",
    "InputError",
    "PipelinePhaseError",
    "SchemaViolation",
    "UnresolvedReference",
]
