"""Display filtering of the agenda hierarchy."""

from agenda_board.agenda.models import Hierarchy, ItemStatus


def filter_hierarchy(hierarchy: Hierarchy, show_completed: bool) -> Hierarchy:
    """Derive the hierarchy to display.

    When completed items are hidden, completed sections are dropped and
    the remaining sections get new children sequences without completed
    items. Order of sections and children is preserved. The given
    hierarchy is never modified and the result never shares its
    sequences, so it stays safe to drag against afterwards.

    Args:
        hierarchy: Authoritative hierarchy
        show_completed: Whether completed sections and items stay visible

    Returns:
        New Hierarchy for display
    """
    if show_completed:
        return hierarchy.model_copy(deep=True)

    return Hierarchy(
        groups=tuple(
            group.with_children(
                tuple(
                    child
                    for child in group.children
                    if child.status != ItemStatus.COMPLETED
                )
            )
            for group in hierarchy.groups
            if group.status != ItemStatus.COMPLETED
        )
    )
