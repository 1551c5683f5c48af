"""Resolution context: wrapping, linking and permalink assignment.

The workspace owns every lookup map (id -> wrapper, id -> member, id -> TOC
item, id -> anchor, id -> permalink). Maps are written by exactly one phase
and only read afterwards, so the phases must run in order:

    CREATED -> WRAPPED -> LINKED -> RESOLVED

``build_workspace`` runs all of them; renderers only ever see a RESOLVED
workspace.
"""

import time
from enum import IntEnum
from typing import Any, Dict, List, Optional

from doxygen_graph.data_model.document import DataModel
from doxygen_graph.renderers.text import render_plain_text
from doxygen_graph.shared.config import GraphConfig
from doxygen_graph.shared.errors import PipelinePhaseError
from doxygen_graph.shared.logging import get_logger
from doxygen_graph.shared.result import (
    Diagnostic,
    DiagnosticSeverity,
    PermalinkCollision,
    PipelineMetrics,
    UnresolvedReference,
)
from doxygen_graph.view_model.classes import CLASS_KINDS, Classes
from doxygen_graph.view_model.compound_base import CollectionBase, CompoundBase
from doxygen_graph.view_model.description_anchors import (
    DescriptionAnchor,
    DescriptionIndexer,
    DescriptionTocItem,
    DescriptionTocList,
)
from doxygen_graph.view_model.files_and_folders import File, FilesAndFolders
from doxygen_graph.view_model.groups import Groups
from doxygen_graph.view_model.members import Member, Section
from doxygen_graph.view_model.namespaces import Namespaces
from doxygen_graph.view_model.pages import Page, Pages
from doxygen_graph.view_model.paths import (
    get_permalink_anchor,
    strip_permalink_hex_anchor,
    strip_permalink_text_anchor,
)

KINDREFS = ("compound", "member", "xrefsect")


class PipelinePhase(IntEnum):
    CREATED = 0
    WRAPPED = 1
    LINKED = 2
    RESOLVED = 3


class Workspace:
    """Object graph handed to renderers, with the permalink service."""

    def __init__(self, data_model: DataModel, config: Optional[GraphConfig] = None) -> None:
        self.data_model = data_model
        self.config = config or GraphConfig()
        self.logger = get_logger(__name__, self.config.global_.run_id, "workspace")
        self.phase = PipelinePhase.CREATED

        self.groups = Groups(self)
        self.namespaces = Namespaces(self)
        self.classes = Classes(self)
        self.files_and_folders = FilesAndFolders(self)
        self.pages = Pages(self)
        self.collections: Dict[str, CollectionBase] = {
            collection.name: collection
            for collection in (
                self.groups, self.namespaces, self.classes, self.files_and_folders, self.pages
            )
        }
        self._collections_by_kind: Dict[str, CollectionBase] = {
            "namespace": self.namespaces,
            "file": self.files_and_folders,
            "dir": self.files_and_folders,
            "group": self.groups,
            "page": self.pages,
        }
        for kind in CLASS_KINDS:
            self._collections_by_kind[kind] = self.classes

        # Arena of wrappers, in document order
        self.compounds_by_id: Dict[str, CompoundBase] = {}
        self.members_by_id: Dict[str, Member] = {}
        self.description_toc_lists: List[DescriptionTocList] = []
        self.description_toc_items_by_id: Dict[str, DescriptionTocItem] = {}
        self.description_anchors_by_id: Dict[str, DescriptionAnchor] = {}
        self.permalinks_by_id: Dict[str, str] = {}

        self.diagnostics: List[Diagnostic] = []
        self.metrics = PipelineMetrics(
            documents_loaded=len(data_model.documents),
            compounds_parsed=len(data_model.compound_defs),
        )

    # Phase guards

    def _require_phase(self, required: PipelinePhase, operation: str) -> None:
        if self.phase < required:
            raise PipelinePhaseError(
                f"{operation} is not available yet", required.name, self.phase.name
            )

    def _advance(self, expected: PipelinePhase, following: PipelinePhase) -> None:
        if self.phase != expected:
            raise PipelinePhaseError(
                f"Cannot enter {following.name}", expected.name, self.phase.name
            )
        self.phase = following

    # Phase 1: wrap

    def create_view_model_objects(self) -> None:
        """Wrap every compound definition in document order."""
        started_at = time.perf_counter()
        for compound_def in self.data_model.compound_defs:
            collection = self._collections_by_kind.get(compound_def.kind)
            if collection is None:
                self._report_skipped(compound_def.id, compound_def.kind)
                continue
            if compound_def.id in self.compounds_by_id:
                self.logger.warning(
                    "Compound defined twice, keeping the first definition",
                    extra={"compound_id": compound_def.id},
                )
                continue
            compound = collection.add_child(compound_def)
            if compound is None:
                self.metrics.compounds_skipped += 1
                continue
            self.compounds_by_id[compound.id] = compound

        for compound in self.compounds_by_id.values():
            self._create_sections(compound)
            if self.config.resolver.index_descriptions:
                self._index_description(compound)

        self.metrics.compounds_wrapped = len(self.compounds_by_id)
        self.metrics.members_indexed = len(self.members_by_id)
        self.metrics.toc_items_indexed = len(self.description_toc_items_by_id)
        self.metrics.anchors_indexed = len(self.description_anchors_by_id)
        self.metrics.collection_sizes = {
            name: len(collection) for name, collection in self.collections.items()
        }
        self.metrics.record_phase("wrap", started_at)
        self._advance(PipelinePhase.CREATED, PipelinePhase.WRAPPED)

    def _report_skipped(self, compound_id: str, kind: str) -> None:
        self.metrics.compounds_skipped += 1
        self.diagnostics.append(Diagnostic(
            severity=DiagnosticSeverity.ERROR,
            message=f"Compound kind '{kind}' is not supported, compound skipped",
            component="workspace",
            details={"compound_id": compound_id, "kind": kind},
        ))
        self.logger.error(
            "Compound kind not supported, compound skipped",
            extra={"compound_id": compound_id, "kind": kind},
        )

    def _create_sections(self, compound: CompoundBase) -> None:
        for section_def in compound.compound_def.section_defs:
            section = Section(compound, section_def)
            compound.sections.append(section)
            for member in section.members:
                # Namespace members are repeated in their file's compound;
                # the compound named by the member id owns it
                if strip_permalink_hex_anchor(member.id) == compound.id:
                    self.members_by_id[member.id] = member
                else:
                    self.members_by_id.setdefault(member.id, member)

    def _index_description(self, compound: CompoundBase) -> None:
        description = compound.detailed_description
        if description is None:
            return
        indexer = DescriptionIndexer(compound)
        indexer.visit(description)
        self.description_toc_lists.extend(indexer.toc_lists)
        self.description_toc_items_by_id.update(indexer.toc_items_by_id)
        self.description_anchors_by_id.update(indexer.anchors_by_id)

    # Phase 2: link

    def create_hierarchies(self) -> None:
        """Parent/child linking, then top-level extraction, per collection."""
        self._require_phase(PipelinePhase.WRAPPED, "create_hierarchies")
        started_at = time.perf_counter()
        for collection in self.collections.values():
            collection.create_hierarchy()
        for collection in self.collections.values():
            collection.extract_top_level()
        self.metrics.record_phase("link", started_at)
        self._advance(PipelinePhase.WRAPPED, PipelinePhase.LINKED)

    # Phase 3: permalinks

    def assign_permalinks(self) -> None:
        """Finalize permalinks and suffix collisions in document order."""
        self._require_phase(PipelinePhase.LINKED, "assign_permalinks")
        started_at = time.perf_counter()
        for collection in self.collections.values():
            collection.finalize_permalinks()

        by_permalink: Dict[str, List[CompoundBase]] = {}
        for compound in self.compounds_by_id.values():
            if compound.relative_permalink is not None:
                by_permalink.setdefault(compound.relative_permalink, []).append(compound)

        taken = set(by_permalink)
        for permalink, compounds in by_permalink.items():
            if len(compounds) < 2:
                continue
            suffix = 0
            for compound in compounds[1:]:
                suffix += 1
                while f"{permalink}-{suffix}" in taken:
                    suffix += 1
                compound.apply_permalink_suffix(suffix)
                taken.add(compound.relative_permalink)
            self._report_collision(permalink, compounds)

        self.permalinks_by_id = {
            compound.id: compound.relative_permalink
            for compound in self.compounds_by_id.values()
            if compound.relative_permalink is not None
        }
        self.metrics.record_phase("permalinks", started_at)
        self._advance(PipelinePhase.LINKED, PipelinePhase.RESOLVED)

    def _report_collision(self, permalink: str, compounds: List[CompoundBase]) -> None:
        self.metrics.permalink_collisions += 1
        self.diagnostics.append(PermalinkCollision(
            severity=DiagnosticSeverity.WARNING,
            message=f"Permalink '{permalink}' shared by {len(compounds)} compounds",
            component="workspace",
            permalink=permalink,
            compound_ids=[compound.id for compound in compounds],
        ))
        if self.config.resolver.warn_on_duplicate_permalinks:
            self.logger.warning(
                "Duplicate permalink, suffixes appended",
                extra={"permalink": permalink, "compound_ids": [c.id for c in compounds]},
            )

    def build(self) -> "Workspace":
        self.create_view_model_objects()
        self.create_hierarchies()
        self.assign_permalinks()
        self.logger.info(
            "Workspace resolved",
            extra={
                "compounds": len(self.compounds_by_id),
                "unresolved": self.metrics.unresolved_references,
                "collisions": self.metrics.permalink_collisions,
            },
        )
        return self

    # Diagnostics

    def report_unresolved(
        self,
        target_id: str,
        kindref: Optional[str],
        reason: str,
        source_id: Optional[str] = None,
    ) -> None:
        """Record a dangling reference; it renders as plain text."""
        self.metrics.unresolved_references += 1
        self.diagnostics.append(UnresolvedReference(
            severity=DiagnosticSeverity.WARNING,
            message=f"Unresolved reference to '{target_id}'",
            component="resolver",
            source_id=source_id,
            target_id=target_id,
            kindref=kindref,
            reason=reason,
        ))
        if self.config.resolver.warn_on_unresolved:
            self.logger.warning(
                f"Unresolved reference to '{target_id}': {reason}",
                extra={"source_id": source_id, "target_id": target_id, "kindref": kindref},
            )

    @property
    def unresolved_references(self) -> List[UnresolvedReference]:
        return [d for d in self.diagnostics if isinstance(d, UnresolvedReference)]

    # Permalink service

    def get_page_permalink(self, compound_id: str) -> Optional[str]:
        """Absolute permalink of a compound page, or None for no page."""
        self._require_phase(PipelinePhase.RESOLVED, "get_page_permalink")
        relative = self.permalinks_by_id.get(compound_id)
        if relative is None:
            return None
        return f"{self.config.permalinks.page_base_url}{relative}"

    def get_permalink(
        self, refid: str, kindref: str, source_id: Optional[str] = None
    ) -> Optional[str]:
        """Resolve a ``ref``; None means render the label as plain text.

        Member and xrefsect ids resolve through, in order: the compound id
        encoded in the ref id, a TOC item with that id, an inline anchor
        with that id. The first hit wins.
        """
        self._require_phase(PipelinePhase.RESOLVED, "get_permalink")
        if kindref == "compound":
            permalink = self.get_page_permalink(refid)
            if permalink is None:
                self.report_unresolved(refid, kindref, "no compound page", source_id)
            return permalink

        if kindref not in KINDREFS:
            self.report_unresolved(refid, kindref, f"unsupported kindref '{kindref}'", source_id)
            return None

        if kindref == "member":
            compound_id = strip_permalink_hex_anchor(refid)
        else:
            compound_id = strip_permalink_text_anchor(refid)
        owner = self.find_anchor_owner(refid, compound_id)
        if owner is not None:
            page = self.get_page_permalink(owner.id)
            if page is not None:
                return f"{page}/#{get_permalink_anchor(refid)}"
        self.report_unresolved(refid, kindref, "no compound, TOC item or anchor", source_id)
        return None

    def find_anchor_owner(self, refid: str, compound_id: str) -> Optional[CompoundBase]:
        """Compound owning an in-page id, by resolution priority."""
        compound = self.compounds_by_id.get(compound_id)
        if compound is not None:
            return compound
        toc_item = self.description_toc_items_by_id.get(refid)
        if toc_item is not None:
            return toc_item.compound
        anchor = self.description_anchors_by_id.get(refid)
        if anchor is not None:
            return anchor.compound
        return None

    # Convenience views

    @property
    def files_by_path(self) -> Dict[str, File]:
        return self.files_and_folders.files_by_path

    @property
    def main_page(self) -> Optional[Page]:
        return self.pages.main_page

    def top_level(self, collection_name: str) -> List[CompoundBase]:
        self._require_phase(PipelinePhase.LINKED, "top_level")
        return list(self.collections[collection_name].top_level)

    def to_dict(self) -> Dict[str, Any]:
        """Serializable snapshot of the linked graph."""
        self._require_phase(PipelinePhase.RESOLVED, "to_dict")
        collections: Dict[str, Any] = {}
        for name, collection in self.collections.items():
            collections[name] = {
                "top_level": [compound.id for compound in collection.top_level],
                "compounds": {
                    compound.id: {
                        "kind": compound.kind,
                        "name": compound.compound_name,
                        "label": compound.sidebar_label,
                        "parent": compound.parent_id,
                        "children": list(compound.linked_children_ids),
                        "permalink": compound.relative_permalink,
                        "brief": render_plain_text(compound.brief_description).strip(),
                    }
                    for compound in collection
                },
            }
        return {
            "doxygen_version": self.data_model.doxygen_version,
            "project_name": self.data_model.project_name,
            "main_page": self.main_page.id if self.main_page is not None else None,
            "collections": collections,
            "permalinks": dict(self.permalinks_by_id),
            "diagnostics": [diagnostic.to_dict() for diagnostic in self.diagnostics],
            "metrics": self.metrics.to_dict(),
        }


def build_workspace(data_model: DataModel, config: Optional[GraphConfig] = None) -> Workspace:
    """Run wrapping, linking and permalink assignment over ``data_model``."""
    return Workspace(data_model, config).build()
