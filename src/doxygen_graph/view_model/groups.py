"""Group (topic) wrappers, nested through ``innergroup``."""

from typing import Optional

from doxygen_graph.data_model.compounds import CompoundDef
from doxygen_graph.view_model.compound_base import CollectionBase, CompoundBase
from doxygen_graph.view_model.paths import sanitize_hierarchical_path


def label_from_title(title: Optional[str]) -> Optional[str]:
    """Trimmed title without a trailing period, None when empty."""
    if not title or not title.strip():
        return None
    label = title.strip()
    return label[:-1] if label.endswith(".") else label


class Group(CompoundBase):
    def __init__(self, collection: "Groups", compound_def: CompoundDef) -> None:
        super().__init__(collection, compound_def)
        self.children_ids = [ref.refid for ref in compound_def.inner_refs("innergroup")]
        self.sidebar_label = label_from_title(compound_def.title) or "???"
        self.index_name = self.sidebar_label
        self.tree_entry_name = self.sidebar_label
        self.page_title = f"The {self.sidebar_label} Reference"
        self.set_permalink_skeleton(
            sanitize_hierarchical_path(self.compound_name, self.config.lowercase)
        )


class Groups(CollectionBase):
    name = "groups"

    def add_child(self, compound_def: CompoundDef) -> Optional[CompoundBase]:
        return self._register(Group(self, compound_def))
