"""Wrapper and collection base classes for compounds.

Wrappers never hold direct references to each other. Links are ids into the
workspace arena (``Workspace.compounds_by_id``) and are created only by
``CollectionBase.create_hierarchy``.
"""

from typing import TYPE_CHECKING, Dict, Iterator, List, Optional

from doxygen_graph.data_model.compounds import CompoundDef
from doxygen_graph.data_model.description import Description
from doxygen_graph.shared.config import PermalinkConfig
from doxygen_graph.shared.errors import SchemaViolation
from doxygen_graph.view_model.paths import flatten_path, sanitize_anonymous_namespace

if TYPE_CHECKING:
    from doxygen_graph.view_model.members import Section
    from doxygen_graph.workspace import Workspace


class CompoundBase:
    """Derived identity and naming for one compound definition."""

    def __init__(self, collection: "CollectionBase", compound_def: CompoundDef) -> None:
        self.collection = collection
        self.compound_def = compound_def
        self.id = compound_def.id
        self.kind = compound_def.kind
        self.compound_name = sanitize_anonymous_namespace(
            compound_def.compound_name,
            self.config.anonymous_namespace_label,
        )
        self.title = compound_def.title
        self.location_file_path: Optional[str] = (
            compound_def.location.file if compound_def.location is not None else None
        )

        # Recorded during wrapping, resolved during linking
        self.children_ids: List[str] = []

        # Set by CollectionBase.create_hierarchy only
        self.parent_id: Optional[str] = None
        self.linked_children_ids: List[str] = []

        self.index_name = self.compound_name
        self.tree_entry_name = self.compound_name
        self.sidebar_label: Optional[str] = self.compound_name
        self.page_title = self.compound_name

        # Skeleton from the wrapper, final value after permalink assignment
        self.relative_permalink: Optional[str] = None
        self.sidebar_id: Optional[str] = None

        self.sections: List["Section"] = []

    @property
    def workspace(self) -> "Workspace":
        return self.collection.workspace

    @property
    def config(self) -> PermalinkConfig:
        return self.collection.workspace.config.permalinks

    @property
    def parent(self) -> Optional["CompoundBase"]:
        if self.parent_id is None:
            return None
        return self.workspace.compounds_by_id[self.parent_id]

    @property
    def children(self) -> List["CompoundBase"]:
        arena = self.workspace.compounds_by_id
        return [arena[child_id] for child_id in self.linked_children_ids]

    @property
    def brief_description(self) -> Optional[Description]:
        return self.compound_def.brief_description

    @property
    def detailed_description(self) -> Optional[Description]:
        return self.compound_def.detailed_description

    @property
    def permalink(self) -> Optional[str]:
        """Absolute page permalink, or None when the compound has no page."""
        return self.workspace.get_page_permalink(self.id)

    def folder(self) -> str:
        return self.config.collection_folders[self.kind]

    def set_permalink_skeleton(self, sanitized_path: str) -> None:
        folder = self.folder()
        self.relative_permalink = f"{folder}/{sanitized_path}"
        self.sidebar_id = f"{folder}/{flatten_path(sanitized_path)}"

    def finalize_permalink(self) -> None:
        """Compute the final relative permalink; runs after linking."""

    def apply_permalink_suffix(self, suffix: int) -> None:
        if self.relative_permalink is None:
            return
        self.relative_permalink = f"{self.relative_permalink}-{suffix}"
        if self.sidebar_id is not None:
            self.sidebar_id = f"{self.sidebar_id}-{suffix}"

    def has_children(self) -> bool:
        return bool(self.linked_children_ids)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.id!r}, {self.compound_name!r})"


class CollectionBase:
    """Ordered set of wrappers of related kinds with their hierarchy roots."""

    name = ""

    def __init__(self, workspace: "Workspace") -> None:
        self.workspace = workspace
        self.compounds_by_id: Dict[str, CompoundBase] = {}
        self.top_level: List[CompoundBase] = []

    def __iter__(self) -> Iterator[CompoundBase]:
        return iter(self.compounds_by_id.values())

    def __len__(self) -> int:
        return len(self.compounds_by_id)

    def get(self, compound_id: str) -> Optional[CompoundBase]:
        return self.compounds_by_id.get(compound_id)

    def add_child(self, compound_def: CompoundDef) -> Optional[CompoundBase]:
        """Wrap ``compound_def``; return None when it is deliberately skipped."""
        raise NotImplementedError

    def _register(self, compound: CompoundBase) -> CompoundBase:
        self.compounds_by_id[compound.id] = compound
        return compound

    def link(self, parent: CompoundBase, child: CompoundBase) -> None:
        """Attach ``child`` under ``parent``; a second distinct parent is fatal."""
        if child.parent_id is not None and child.parent_id != parent.id:
            raise SchemaViolation(
                f"Compound '{child.id}' listed under both '{child.parent_id}' and '{parent.id}'",
                child.compound_def.element_name, "parent", f"{type(self).__name__}.link",
            )
        child.parent_id = parent.id
        if child.id not in parent.linked_children_ids:
            parent.linked_children_ids.append(child.id)

    def create_hierarchy(self) -> None:
        """Resolve recorded child ids into parent/child links."""
        for compound in self:
            for child_id in compound.children_ids:
                child = self.compounds_by_id.get(child_id)
                if child is None:
                    self.workspace.report_unresolved(
                        source_id=compound.id,
                        target_id=child_id,
                        kindref="compound",
                        reason=f"child of {compound.kind} not in {self.name}",
                    )
                    continue
                self.link(compound, child)
        self.check_acyclic()

    def check_acyclic(self) -> None:
        """Fail when a parent chain loops back on itself."""
        arena = self.workspace.compounds_by_id
        for compound in self:
            seen = {compound.id}
            parent_id = compound.parent_id
            while parent_id is not None:
                if parent_id in seen:
                    raise SchemaViolation(
                        f"Compound '{compound.id}' is its own ancestor",
                        compound.compound_def.element_name, "parent",
                        f"{type(self).__name__}.create_hierarchy",
                    )
                seen.add(parent_id)
                parent_id = arena[parent_id].parent_id

    def extract_top_level(self) -> None:
        self.top_level = [compound for compound in self if compound.parent_id is None]

    def finalize_permalinks(self) -> None:
        for compound in self:
            compound.finalize_permalink()
