"""Class, struct and union wrappers and their inheritance graph.

Inheritance is a directed graph, not a tree: a class with several bases is a
child of each of them, and its ``parent`` is the first resolved base.
"""

import hashlib
import re
from typing import TYPE_CHECKING, Dict, Iterator, List, Optional, Set, Tuple

from doxygen_graph.data_model.compounds import CompoundDef, TemplateParamList
from doxygen_graph.view_model.compound_base import CollectionBase, CompoundBase
from doxygen_graph.view_model.paths import sanitize_anonymous_namespace, sanitize_hierarchical_path

if TYPE_CHECKING:
    from doxygen_graph.workspace import Workspace

CLASS_KINDS = ("class", "struct", "union")

_TEMPLATE_ARGUMENTS = re.compile(r"<.*>")
_QUALIFIER = re.compile(r".*::")
_LONG_TREE_ENTRY = 42


class InheritanceGraph:
    """Base/derived adjacency with insertion-ordered id sets in both directions."""

    def __init__(self) -> None:
        self._bases: Dict[str, Dict[str, None]] = {}
        self._derived: Dict[str, Dict[str, None]] = {}

    def add_edge(self, base_id: str, derived_id: str) -> None:
        self._bases.setdefault(derived_id, {})[base_id] = None
        self._derived.setdefault(base_id, {})[derived_id] = None

    def bases_of(self, class_id: str) -> List[str]:
        return list(self._bases.get(class_id, {}))

    def derived_of(self, class_id: str) -> List[str]:
        return list(self._derived.get(class_id, {}))

    def edges(self) -> Iterator[Tuple[str, str]]:
        """Yield (base id, derived id) pairs."""
        for base_id, derived in self._derived.items():
            for derived_id in derived:
                yield base_id, derived_id

    def ancestors(self, class_id: str) -> Set[str]:
        """All transitive base ids; each shared ancestor appears once."""
        seen: Set[str] = set()
        pending = self.bases_of(class_id)
        while pending:
            base_id = pending.pop()
            if base_id in seen:
                continue
            seen.add(base_id)
            pending.extend(self.bases_of(base_id))
        return seen


class Class(CompoundBase):
    def __init__(self, collection: "Classes", compound_def: CompoundDef) -> None:
        super().__init__(collection, compound_def)
        label = self.config.anonymous_namespace_label

        self.base_class_ids: List[str] = [
            ref.refid for ref in compound_def.base_compound_refs if ref.refid
        ]
        self.derived_class_ids: List[str] = [
            ref.refid for ref in compound_def.derived_compound_refs if ref.refid
        ]
        # Set by Classes.create_hierarchy
        self.linked_base_ids: List[str] = []

        self.fully_qualified_name = sanitize_anonymous_namespace(
            _TEMPLATE_ARGUMENTS.sub("", compound_def.compound_name, count=1), label
        )
        self.unqualified_name = _QUALIFIER.sub("", self.fully_qualified_name, count=1)

        self.template_parameters = ""
        index = compound_def.compound_name.find("<")
        if index >= 0:
            index_template_parameters = compound_def.compound_name[index:]
            if index_template_parameters.startswith("< "):
                index_template_parameters = "<" + index_template_parameters[2:]
            if index_template_parameters.endswith(" >"):
                index_template_parameters = index_template_parameters[:-2] + ">"
            self.template_parameters = index_template_parameters
        elif compound_def.template_param_list is not None:
            index_template_parameters = template_parameter_names(compound_def.template_param_list)
        else:
            index_template_parameters = ""

        self.index_name = f"{self.unqualified_name}{index_template_parameters}"
        self.sidebar_label = self.index_name
        if len(self.index_name) < _LONG_TREE_ENTRY:
            self.tree_entry_name = self.index_name
        else:
            self.tree_entry_name = f"{self.unqualified_name}<...>"

        self.page_title = f"`{self.unqualified_name}` {self.kind.capitalize()}"
        if compound_def.template_param_list is not None:
            self.page_title += " Template"

        sanitized_path = sanitize_hierarchical_path(
            self.fully_qualified_name.replace("::", "/"), self.config.lowercase
        )
        if self.template_parameters:
            digest = hashlib.new(self.config.template_hash, self.template_parameters.encode("utf-8"))
            sanitized_path += f"-{digest.hexdigest()}"
        self.set_permalink_skeleton(sanitized_path)

    @property
    def base_classes(self) -> List["Class"]:
        arena = self.workspace.compounds_by_id
        return [arena[base_id] for base_id in self.linked_base_ids]

    @property
    def is_template(self) -> bool:
        return self.compound_def.template_param_list is not None


def template_parameter_names(template_param_list: TemplateParamList) -> str:
    """``<T, N>`` built from declared names, falling back to the type text."""
    names = []
    for param in template_param_list.params:
        if param.declname:
            names.append(param.declname)
        elif param.type is not None:
            names.append(param.type.text().strip())
    return f"<{', '.join(names)}>" if names else ""


class Classes(CollectionBase):
    name = "classes"

    def __init__(self, workspace: "Workspace") -> None:
        super().__init__(workspace)
        self.inheritance = InheritanceGraph()

    def add_child(self, compound_def: CompoundDef) -> Optional[CompoundBase]:
        return self._register(Class(self, compound_def))

    def create_hierarchy(self) -> None:
        """Link each class under every resolved base class."""
        for compound in self:
            for base_id in compound.base_class_ids:
                self.inheritance.add_edge(base_id, compound.id)
            for derived_id in compound.derived_class_ids:
                self.inheritance.add_edge(compound.id, derived_id)

        for compound in self:
            for base_id in self.inheritance.bases_of(compound.id):
                base = self.compounds_by_id.get(base_id)
                if base is None:
                    self.workspace.report_unresolved(
                        source_id=compound.id,
                        target_id=base_id,
                        kindref="compound",
                        reason="base class not documented",
                    )
                    continue
                if compound.id not in base.linked_children_ids:
                    base.linked_children_ids.append(compound.id)
                compound.linked_base_ids.append(base_id)
                if compound.parent_id is None:
                    compound.parent_id = base_id
            for derived_id in self.inheritance.derived_of(compound.id):
                if derived_id not in self.compounds_by_id:
                    self.workspace.report_unresolved(
                        source_id=compound.id,
                        target_id=derived_id,
                        kindref="compound",
                        reason="derived class not documented",
                    )
