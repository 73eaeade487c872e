"""Grouping of flat agenda items into sections.

A meeting delivers its agenda as a flat list in which every item either
is a section (no parent) or points at the section it belongs to. This
module builds the ordered two-level hierarchy from that list and
flattens a hierarchy back into the list a persistence layer expects.
"""

from collections import Counter
from typing import Any, Dict, Iterable, List, Union

from agenda_board.agenda.models import (
    AgendaGroup,
    AgendaItem,
    DiagnosticKind,
    GroupingDiagnostic,
    GroupingResult,
    Hierarchy,
    ItemId,
    ItemStatus,
    coerce_items,
)
from agenda_board.utils.exceptions import DuplicateItemError
from agenda_board.utils.logging import get_logger

logger = get_logger(__name__)


def group_items(
    items: Iterable[Union[AgendaItem, Dict[str, Any]]]
) -> GroupingResult:
    """Group a flat item collection into an ordered hierarchy.

    Sections keep their input order, and so do the children within each
    section. Children whose parent is unknown, or whose parent is itself
    a child, are left out and reported as diagnostics. The input is never
    modified.

    Args:
        items: Agenda items (or raw item records) of one meeting

    Returns:
        GroupingResult with the hierarchy and any diagnostics

    Raises:
        DuplicateItemError: If an id occurs more than once
    """
    items = coerce_items(list(items))
    _check_unique_ids(items)

    for item in items:
        if not isinstance(item.status, ItemStatus):
            logger.warning(
                f"Item {item.id!r} has unrecognised status {item.status!r}, "
                f"treating it as not completed"
            )

    sections = [item for item in items if item.is_section]
    section_ids = {section.id for section in sections}
    all_ids = {item.id for item in items}

    children_by_section: Dict[ItemId, List[AgendaItem]] = {
        section.id: [] for section in sections
    }
    diagnostics: List[GroupingDiagnostic] = []

    for item in items:
        if item.is_section:
            continue
        if item.parent_id in section_ids:
            children_by_section[item.parent_id].append(item)
        elif item.parent_id in all_ids:
            diagnostics.append(
                GroupingDiagnostic(
                    kind=DiagnosticKind.NESTED_CHILD,
                    item=item,
                    message=(
                        f"Item {item.id!r} references {item.parent_id!r}, "
                        f"which is not a top-level section"
                    ),
                )
            )
        else:
            diagnostics.append(
                GroupingDiagnostic(
                    kind=DiagnosticKind.UNKNOWN_PARENT,
                    item=item,
                    message=(
                        f"Item {item.id!r} references unknown parent "
                        f"{item.parent_id!r}"
                    ),
                )
            )

    hierarchy = Hierarchy(
        groups=tuple(
            AgendaGroup.from_item(section, tuple(children_by_section[section.id]))
            for section in sections
        )
    )

    for diagnostic in diagnostics:
        logger.warning(f"Orphan agenda item left out: {diagnostic.message}")

    logger.debug(
        f"Grouped {len(items)} items into {len(hierarchy.groups)} sections "
        f"({len(diagnostics)} orphans)"
    )

    return GroupingResult(hierarchy=hierarchy, diagnostics=tuple(diagnostics))


def flatten_hierarchy(hierarchy: Hierarchy) -> List[AgendaItem]:
    """Flatten a hierarchy back into a flat item list.

    Each section is followed by its children, in display order. Sections
    are returned as plain AgendaItem instances without their children.

    Args:
        hierarchy: Hierarchy to flatten

    Returns:
        Ordered list of agenda items
    """
    flat: List[AgendaItem] = []
    for group in hierarchy.groups:
        flat.append(AgendaItem(**group.model_dump(exclude={"children"})))
        flat.extend(group.children)
    return flat


def _check_unique_ids(items: List[AgendaItem]) -> None:
    counts = Counter(item.id for item in items)
    duplicates = [item_id for item_id, count in counts.items() if count > 1]
    if duplicates:
        logger.error(f"Refusing to group agenda with duplicate ids: {duplicates}")
        raise DuplicateItemError(
            "Agenda items must have unique ids",
            item_ids=duplicates,
            details={"duplicates": duplicates},
        )
