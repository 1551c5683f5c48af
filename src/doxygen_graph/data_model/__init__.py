"""Typed node tree built from Doxygen XML.

Phase 1 of the pipeline: every element becomes a node variant (a dataclass
deriving from ``Node``) through a builder function. Nothing is
cross-referenced here; ids stay plain strings.
"""

from .accessor import ElementAccessor
from .compounds import CompoundDef, MemberDef, SectionDef, build_compound_def
from .description import Description, FilteredProgramListing, filter_program_listing
from .document import DataModel, DoxygenDocument, assemble_document
from .index import Doxyfile, DoxygenIndex
from .node import Node, NodeVisitor, walk

__all__ = [
    "CompoundDef",
    "DataModel",
    "Description",
    "Doxyfile",
    "DoxygenDocument",
    "DoxygenIndex",
    "ElementAccessor",
    "FilteredProgramListing",
    "MemberDef",
    "Node",
    "NodeVisitor",
    "SectionDef",
    "assemble_document",
    "build_compound_def",
    "filter_program_listing",
    "walk",
]
