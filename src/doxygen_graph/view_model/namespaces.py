"""Namespace wrappers.

Doxygen gives anonymous namespaces generated ids (``namespace..._0d`` followed
by 48 digits); they are named after the file that declares them.
"""

import os
import re
from typing import Optional

from doxygen_graph.data_model.compounds import CompoundDef
from doxygen_graph.view_model.compound_base import CollectionBase, CompoundBase
from doxygen_graph.view_model.paths import sanitize_anonymous_namespace, sanitize_hierarchical_path

_ANONYMOUS_ID = re.compile(r"^namespace.*_0d\d{48}")
_QUALIFIER = re.compile(r".*::")


def is_anonymous_namespace_id(compound_id: str) -> bool:
    return _ANONYMOUS_ID.match(compound_id) is not None


class Namespace(CompoundBase):
    def __init__(self, collection: "Namespaces", compound_def: CompoundDef) -> None:
        super().__init__(collection, compound_def)
        label = self.config.anonymous_namespace_label
        self.children_ids = [ref.refid for ref in compound_def.inner_refs("innernamespace")]
        self.is_anonymous = False
        self.is_unnamed = False

        if is_anonymous_namespace_id(self.id):
            file_name = os.path.basename(self.location_file_path or "")
            anonymous_name = f"{label}{{{file_name}}}"
            if self.compound_name.startswith("::"):
                self.unqualified_name = _QUALIFIER.sub("", compound_def.compound_name, count=1)
                self.index_name = f"{anonymous_name}{self.compound_name}"
            else:
                self.unqualified_name = anonymous_name
                self.is_anonymous = True
                if self.compound_name:
                    self.index_name = f"{self.compound_name}::{anonymous_name}"
                else:
                    self.index_name = anonymous_name
            self.sidebar_label = self.unqualified_name
            self.page_title = f"The `{self.index_name}` Namespace Reference"
            self.set_permalink_skeleton(sanitize_hierarchical_path(
                self.index_name.replace("::", "/"), self.config.lowercase
            ))
        else:
            self.unqualified_name = sanitize_anonymous_namespace(
                _QUALIFIER.sub("", compound_def.compound_name, count=1), label
            )
            self.index_name = self.unqualified_name
            self.page_title = f"The `{self.unqualified_name}` Namespace Reference"
            if compound_def.compound_name:
                self.sidebar_label = self.unqualified_name
                self.set_permalink_skeleton(sanitize_hierarchical_path(
                    sanitize_anonymous_namespace(
                        compound_def.compound_name.replace("::", "/"), label
                    ),
                    self.config.lowercase,
                ))
            else:
                self.is_unnamed = True
                self.sidebar_label = None

        self.tree_entry_name = self.index_name


class Namespaces(CollectionBase):
    name = "namespaces"

    def add_child(self, compound_def: CompoundDef) -> Optional[CompoundBase]:
        namespace = Namespace(self, compound_def)
        if namespace.is_unnamed:
            self.workspace.logger.warning(
                "Skipping unnamed namespace",
                extra={"compound_id": compound_def.id, "file": namespace.location_file_path},
            )
            return None
        return self._register(namespace)
