"""Compound wrappers grouped into collections.

Wrappers derive names and permalink skeletons from their compound
definitions and record child ids; the workspace links them.
"""

from .classes import Class, Classes, InheritanceGraph
from .compound_base import CollectionBase, CompoundBase
from .description_anchors import DescriptionAnchor, DescriptionTocItem, DescriptionTocList
from .files_and_folders import File, FilesAndFolders, Folder
from .groups import Group, Groups
from .members import Member, Section
from .namespaces import Namespace, Namespaces
from .pages import Page, Pages

__all__ = [
    "Class",
    "Classes",
    "CollectionBase",
    "CompoundBase",
    "DescriptionAnchor",
    "DescriptionTocItem",
    "DescriptionTocList",
    "File",
    "FilesAndFolders",
    "Folder",
    "Group",
    "Groups",
    "InheritanceGraph",
    "Member",
    "Namespace",
    "Namespaces",
    "Page",
    "Pages",
    "Section",
]
