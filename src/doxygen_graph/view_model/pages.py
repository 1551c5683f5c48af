"""Page wrappers; ``indexpage`` is the project's main page."""

from typing import TYPE_CHECKING, Optional

from doxygen_graph.data_model.compounds import CompoundDef
from doxygen_graph.shared.errors import SchemaViolation
from doxygen_graph.view_model.compound_base import CollectionBase, CompoundBase
from doxygen_graph.view_model.groups import label_from_title
from doxygen_graph.view_model.paths import sanitize_hierarchical_path

if TYPE_CHECKING:
    from doxygen_graph.workspace import Workspace

MAIN_PAGE_ID = "indexpage"


class Page(CompoundBase):
    def __init__(self, collection: "Pages", compound_def: CompoundDef) -> None:
        super().__init__(collection, compound_def)
        label = label_from_title(compound_def.title)
        if label is None:
            raise SchemaViolation(
                f"Page '{compound_def.id}' has no title", "compounddef", "title", "Page"
            )
        self.children_ids = [ref.refid for ref in compound_def.inner_refs("innerpage")]
        self.sidebar_label = label
        self.index_name = label
        self.tree_entry_name = label
        self.page_title = label
        self.set_permalink_skeleton(
            sanitize_hierarchical_path(self.compound_name, self.config.lowercase)
        )

    @property
    def is_main_page(self) -> bool:
        return self.id == MAIN_PAGE_ID


class Pages(CollectionBase):
    name = "pages"

    def __init__(self, workspace: "Workspace") -> None:
        super().__init__(workspace)
        self.main_page: Optional[Page] = None

    def add_child(self, compound_def: CompoundDef) -> Optional[CompoundBase]:
        page = Page(self, compound_def)
        if page.is_main_page:
            self.main_page = page
        return self._register(page)
