"""Section and member wrappers owned by compounds."""

from typing import TYPE_CHECKING, List, Optional

from doxygen_graph.data_model.compounds import MemberDef, SectionDef, SectionMember
from doxygen_graph.data_model.description import FilteredProgramListing, filter_program_listing
from doxygen_graph.view_model.paths import get_permalink_anchor

if TYPE_CHECKING:
    from doxygen_graph.view_model.compound_base import CompoundBase


class Member:
    """One documented symbol; belongs to exactly one compound."""

    def __init__(self, section: "Section", member_def: MemberDef) -> None:
        self.section = section
        self.member_def = member_def
        self.id = member_def.id
        self.kind = member_def.kind
        self.name = member_def.name
        self.anchor = get_permalink_anchor(member_def.id)

    @property
    def compound(self) -> "CompoundBase":
        return self.section.compound

    @property
    def permalink(self) -> Optional[str]:
        return self.compound.workspace.get_permalink(refid=self.id, kindref="member")

    def definition_listing(self) -> Optional[FilteredProgramListing]:
        """Lines of the member's body from its file's program listing."""
        location = self.member_def.location
        if location is None or location.bodyfile is None or location.bodystart is None:
            return None
        file = self.compound.workspace.files_by_path.get(location.bodyfile)
        if file is None or file.compound_def.program_listing is None:
            return None
        end = location.bodyend
        if end is None or end < 0:
            end = location.bodystart
        return filter_program_listing(file.compound_def.program_listing, location.bodystart, end)

    def __repr__(self) -> str:
        return f"Member({self.id!r}, {self.kind!r}, {self.name!r})"


class Section:
    """Members of one ``sectiondef`` kind, e.g. ``public-func``."""

    def __init__(self, compound: "CompoundBase", section_def: SectionDef) -> None:
        self.compound = compound
        self.section_def = section_def
        self.kind = section_def.kind
        self.header = section_def.header
        self.members: List[Member] = [
            Member(self, member_def) for member_def in section_def.member_defs
        ]

    @property
    def member_refs(self) -> List[SectionMember]:
        """References to members defined in another compound."""
        return self.section_def.members
