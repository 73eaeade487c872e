"""Drag and drop state machine for the agenda hierarchy.

The engine owns the authoritative hierarchy. A drag gesture moves it
from IDLE to DRAGGING and back:

- drag-start records the dragged id and keeps the hierarchy as it was,
  so that a cancelled gesture can be rolled back.
- drag-over moves a dragged child into another section right away
  (live preview). Moves inside one section and section reordering wait
  for the drop.
- drag-end applies the final move and reports the result to the commit
  callback.
- drag-cancel restores the hierarchy taken at drag-start.

Gesture handlers never raise. Targets that cannot be resolved, for
instance stale ids after the agenda was refreshed, leave the hierarchy
unchanged.
"""

from enum import Enum
from typing import Callable, Optional, Sequence, Tuple, TypeVar

from pydantic import BaseModel, ConfigDict

from agenda_board.agenda.index import HierarchyIndex
from agenda_board.agenda.models import (
    DragCancel,
    DragEnd,
    DragEvent,
    DragOver,
    DragStart,
    DropTargetId,
    Hierarchy,
    ItemId,
    OverId,
)
from agenda_board.utils.exceptions import DragStateError
from agenda_board.utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

CommitCallback = Callable[[Hierarchy], None]


class DragPhase(str, Enum):
    """Phases of the drag state machine."""

    IDLE = "idle"
    DRAGGING = "dragging"


class DragContext(BaseModel):
    """State of the gesture in progress."""

    model_config = ConfigDict(frozen=True)

    active_id: ItemId
    is_section: bool
    snapshot: Hierarchy
    last_over: Optional[OverId] = None


def array_move(items: Sequence[T], old_index: int, new_index: int) -> Tuple[T, ...]:
    """Move one element to a new position.

    Args:
        items: Sequence to reorder
        old_index: Current position of the element
        new_index: Position the element ends up at

    Returns:
        New tuple with the element moved
    """
    moved = list(items)
    moved.insert(new_index, moved.pop(old_index))
    return tuple(moved)


class DragEngine:
    """Owner of the agenda hierarchy during drag and drop."""

    def __init__(
        self, hierarchy: Hierarchy, on_commit: Optional[CommitCallback] = None
    ):
        """Initialize the drag engine.

        Args:
            hierarchy: Initial authoritative hierarchy
            on_commit: Called with the new hierarchy after a drop changed it
        """
        self.on_commit = on_commit
        self._context: Optional[DragContext] = None
        self._set_hierarchy(hierarchy)

    @property
    def hierarchy(self) -> Hierarchy:
        return self._hierarchy

    @property
    def phase(self) -> DragPhase:
        return DragPhase.IDLE if self._context is None else DragPhase.DRAGGING

    @property
    def is_dragging(self) -> bool:
        return self._context is not None

    @property
    def context(self) -> Optional[DragContext]:
        return self._context

    @property
    def active_id(self) -> Optional[ItemId]:
        return self._context.active_id if self._context else None

    def replace(self, hierarchy: Hierarchy) -> Hierarchy:
        """Swap in a refreshed hierarchy, e.g. after reloading the meeting.

        Raises:
            DragStateError: If a drag is in progress
        """
        if self._context is not None:
            raise DragStateError(
                "Cannot replace the hierarchy while a drag is in progress",
                phase=self.phase.value,
                active_id=self._context.active_id,
            )
        self._set_hierarchy(hierarchy)
        logger.debug(f"Hierarchy replaced ({len(hierarchy.groups)} sections)")
        return self._hierarchy

    def dispatch(self, event: DragEvent) -> Hierarchy:
        """Route a drag lifecycle event to its handler.

        Args:
            event: DragStart, DragOver, DragEnd or DragCancel

        Returns:
            Hierarchy after handling the event
        """
        if isinstance(event, DragStart):
            return self.drag_start(event.active_id)
        if isinstance(event, DragOver):
            return self.drag_over(event.active_id, event.over_id)
        if isinstance(event, DragEnd):
            return self.drag_end(event.active_id, event.over_id)
        if isinstance(event, DragCancel):
            return self.drag_cancel()
        logger.warning(f"Ignoring unknown drag event: {event!r}")
        return self._hierarchy

    def drag_start(self, active_id: ItemId) -> Hierarchy:
        """Begin dragging an item or a section."""
        if self._context is not None:
            logger.warning(
                f"Drag-start for {active_id!r} ignored, "
                f"{self._context.active_id!r} is still being dragged"
            )
            return self._hierarchy

        if active_id not in self._index:
            logger.warning(f"Drag-start for unknown id {active_id!r} ignored")
            return self._hierarchy

        self._context = DragContext(
            active_id=active_id,
            is_section=self._index.is_group(active_id),
            snapshot=self._hierarchy,
        )
        logger.debug(
            f"Drag started: {'section' if self._context.is_section else 'item'} "
            f"{active_id!r}"
        )
        return self._hierarchy

    def drag_over(self, active_id: ItemId, over_id: Optional[OverId]) -> Hierarchy:
        """Preview a dragged child in the section under the pointer."""
        context = self._current_context(active_id, "drag-over")
        if context is None or context.is_section:
            return self._hierarchy

        over_id = self._index.resolve_key(over_id)
        self._context = context.model_copy(update={"last_over": over_id})
        self._move_across_groups(active_id, over_id)
        return self._hierarchy

    def drag_end(self, active_id: ItemId, over_id: Optional[OverId]) -> Hierarchy:
        """Drop the dragged element and commit the final order."""
        context = self._current_context(active_id, "drag-end")
        if context is None:
            return self._hierarchy

        self._context = None
        over_id = self._index.resolve_key(over_id)

        if over_id is None or over_id == active_id:
            logger.debug(f"Drop of {active_id!r} without a new target")
        elif context.is_section:
            self._move_group(active_id, over_id)
        else:
            self._move_across_groups(active_id, over_id)
            self._move_within_group(active_id, over_id)

        self._commit(context.snapshot)
        return self._hierarchy

    def drag_cancel(self) -> Hierarchy:
        """Abandon the drag and restore the hierarchy from drag-start."""
        if self._context is None:
            logger.debug("Drag-cancel ignored, no drag in progress")
            return self._hierarchy

        snapshot = self._context.snapshot
        logger.debug(f"Drag of {self._context.active_id!r} cancelled")
        self._context = None
        self._set_hierarchy(snapshot)
        return self._hierarchy

    def _set_hierarchy(self, hierarchy: Hierarchy) -> None:
        self._hierarchy = hierarchy
        self._index = HierarchyIndex(hierarchy)

    def _current_context(
        self, active_id: ItemId, event_name: str
    ) -> Optional[DragContext]:
        if self._context is None:
            logger.debug(f"{event_name} for {active_id!r} ignored, no drag in progress")
            return None
        if self._context.active_id != active_id:
            logger.warning(
                f"Stale {event_name} for {active_id!r} ignored, "
                f"dragging {self._context.active_id!r}"
            )
            return None
        return self._context

    def _move_across_groups(self, active_id: ItemId, over_id: Optional[OverId]) -> bool:
        """Move a child into the section under the pointer.

        Returns:
            True if the hierarchy changed
        """
        if over_id is None or over_id == active_id:
            return False

        source = self._index.locate_item(active_id)
        target = self._index.resolve_container(over_id)
        if source is None or target is None:
            logger.debug(f"Unresolved drag target {over_id!r} for {active_id!r}")
            return False

        if target.group_index == source.group_index:
            return False

        groups = list(self._hierarchy.groups)
        source_group = groups[source.group_index]
        target_group = groups[target.group_index]

        item = source_group.children[source.item_index]
        source_children = list(source_group.children)
        del source_children[source.item_index]

        target_children = list(target_group.children)
        insert_at = (
            len(target_children) if target.item_index is None else target.item_index
        )
        target_children.insert(
            insert_at, item.model_copy(update={"parent_id": target_group.id})
        )

        groups[source.group_index] = source_group.with_children(tuple(source_children))
        groups[target.group_index] = target_group.with_children(tuple(target_children))
        self._set_hierarchy(Hierarchy(groups=tuple(groups)))

        logger.debug(
            f"Moved {active_id!r} from section {source_group.id!r} "
            f"to section {target_group.id!r} at position {insert_at}"
        )
        return True

    def _move_within_group(self, active_id: ItemId, over_id: OverId) -> bool:
        location = self._index.locate_item(active_id)
        if location is None:
            return False

        group = self._hierarchy.groups[location.group_index]

        if isinstance(over_id, DropTargetId):
            if over_id.group_id != group.id:
                logger.debug(f"Drop target {over_id.key} is outside {group.id!r}")
                return False
            new_index = len(group.children) - 1
        else:
            over_location = self._index.locate_item(over_id)
            if over_location is None or over_location.group_index != location.group_index:
                logger.debug(f"Unresolved drop target {over_id!r} for {active_id!r}")
                return False
            new_index = over_location.item_index

        if new_index == location.item_index:
            return False

        groups = list(self._hierarchy.groups)
        groups[location.group_index] = group.with_children(
            array_move(group.children, location.item_index, new_index)
        )
        self._set_hierarchy(Hierarchy(groups=tuple(groups)))
        logger.debug(
            f"Moved {active_id!r} within section {group.id!r} "
            f"from {location.item_index} to {new_index}"
        )
        return True

    def _move_group(self, active_id: ItemId, over_id: OverId) -> bool:
        old_index = self._index.group_index(active_id)
        new_index = self._index.resolve_group(over_id)
        if old_index is None or new_index is None:
            logger.debug(f"Unresolved section drop target {over_id!r}")
            return False
        if old_index == new_index:
            return False

        self._set_hierarchy(
            Hierarchy(groups=array_move(self._hierarchy.groups, old_index, new_index))
        )
        logger.debug(f"Moved section {active_id!r} from {old_index} to {new_index}")
        return True

    def _commit(self, snapshot: Hierarchy) -> None:
        if self._hierarchy == snapshot:
            return

        sections, items = self._index.stats()
        logger.info(f"Committing agenda order ({sections} sections, {items} items)")
        if self.on_commit is None:
            return
        try:
            self.on_commit(self._hierarchy)
        except Exception as e:
            logger.error(f"Commit callback failed: {e}", exc_info=True)
