"""File and folder wrappers, sharing one collection.

Paths are only known once the folder hierarchy is linked, so both kinds
compute their permalinks in ``finalize_permalink``.
"""

import posixpath
from typing import TYPE_CHECKING, Dict, List, Optional, Set

from doxygen_graph.data_model.compounds import CompoundDef
from doxygen_graph.shared.errors import SchemaViolation
from doxygen_graph.view_model.compound_base import CollectionBase, CompoundBase
from doxygen_graph.view_model.paths import sanitize_hierarchical_path

if TYPE_CHECKING:
    from doxygen_graph.workspace import Workspace


class Folder(CompoundBase):
    def __init__(self, collection: "FilesAndFolders", compound_def: CompoundDef) -> None:
        super().__init__(collection, compound_def)
        self.children_folder_ids = [ref.refid for ref in compound_def.inner_refs("innerdir")]
        self.children_file_ids = [ref.refid for ref in compound_def.inner_refs("innerfile")]
        self.children_ids = self.children_folder_ids + self.children_file_ids
        self.relative_path = ""
        self.page_title = f"`{self.sidebar_label}` Folder"

    @property
    def base_name(self) -> str:
        return posixpath.basename(self.compound_name.rstrip("/")) or self.compound_name

    def path_from_root(self) -> str:
        names: List[str] = []
        seen: Set[str] = set()
        folder = self
        while True:
            if folder.id in seen:
                raise SchemaViolation(
                    f"Folder '{folder.id}' is its own ancestor",
                    "compounddef", "innerdir", "Folder.path_from_root",
                )
            seen.add(folder.id)
            parent = folder.parent
            if not isinstance(parent, Folder):
                names.append(folder.compound_name)
                break
            names.append(folder.base_name)
            folder = parent
        return "/".join(reversed(names))

    def has_files(self) -> bool:
        """True when a file is reachable through this folder."""
        for child in self.children:
            if isinstance(child, File):
                return True
            if isinstance(child, Folder) and child.has_files():
                return True
        return False

    def finalize_permalink(self) -> None:
        self.relative_path = self.path_from_root()
        self.set_permalink_skeleton(
            sanitize_hierarchical_path(self.relative_path, self.config.lowercase)
        )


class File(CompoundBase):
    def __init__(self, collection: "FilesAndFolders", compound_def: CompoundDef) -> None:
        super().__init__(collection, compound_def)
        self.relative_path = ""
        self.page_title = f"`{self.sidebar_label}` File"

    @property
    def program_listing(self):
        return self.compound_def.program_listing

    def finalize_permalink(self) -> None:
        parent = self.parent
        if isinstance(parent, Folder):
            self.relative_path = f"{parent.path_from_root()}/{self.compound_name}"
        else:
            self.relative_path = self.compound_name
        self.set_permalink_skeleton(
            sanitize_hierarchical_path(self.relative_path, self.config.lowercase)
        )


class FilesAndFolders(CollectionBase):
    name = "files"

    def __init__(self, workspace: "Workspace") -> None:
        super().__init__(workspace)
        self.files_by_path: Dict[str, File] = {}

    def add_child(self, compound_def: CompoundDef) -> Optional[CompoundBase]:
        if compound_def.kind == "file":
            return self._register(File(self, compound_def))
        if compound_def.kind == "dir":
            return self._register(Folder(self, compound_def))
        raise SchemaViolation(
            f"Kind '{compound_def.kind}' does not belong to {self.name}",
            "compounddef", "kind", "FilesAndFolders.add_child",
        )

    @property
    def folders(self) -> List[Folder]:
        return [compound for compound in self if isinstance(compound, Folder)]

    @property
    def files(self) -> List[File]:
        return [compound for compound in self if isinstance(compound, File)]

    @property
    def top_level_folders(self) -> List[Folder]:
        return [compound for compound in self.top_level if isinstance(compound, Folder)]

    @property
    def top_level_files(self) -> List[File]:
        return [compound for compound in self.top_level if isinstance(compound, File)]

    def extract_top_level(self) -> None:
        super().extract_top_level()
        self.files_by_path = {}
        for file in self.files:
            if file.location_file_path is not None:
                self.files_by_path[file.location_file_path] = file
