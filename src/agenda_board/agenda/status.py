"""Aggregate status of agenda sections.

A section counts as active while at least one of its children is in
progress. Active sections are expanded by default when the agenda is
first shown.
"""

from typing import FrozenSet, List

from agenda_board.agenda.models import AgendaGroup, Hierarchy, ItemId, ItemStatus


def is_section_active(group: AgendaGroup) -> bool:
    """Check whether any child of the section is in progress."""
    return any(child.status == ItemStatus.IN_PROGRESS for child in group.children)


def active_sections(hierarchy: Hierarchy) -> FrozenSet[int]:
    """Positions of the sections that have an in-progress child.

    Args:
        hierarchy: Hierarchy to inspect

    Returns:
        Frozen set of section indices
    """
    return frozenset(
        index
        for index, group in enumerate(hierarchy.groups)
        if is_section_active(group)
    )


def active_section_ids(hierarchy: Hierarchy) -> List[ItemId]:
    """Ids of the active sections, in display order."""
    return [group.id for group in hierarchy.groups if is_section_active(group)]
