"""Agenda view coordinator.

AgendaView wires the pieces together for one meeting: it groups the
meeting's items, hands the hierarchy to a DragEngine, keeps the
selection and the completed-items toggle, and produces immutable
snapshots for the renderer.
"""

from typing import Any, Dict, FrozenSet, List, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict

from agenda_board.agenda.drag import CommitCallback, DragEngine, DragPhase
from agenda_board.agenda.filtering import filter_hierarchy
from agenda_board.agenda.grouping import group_items
from agenda_board.agenda.models import (
    AgendaItem,
    DragEvent,
    GroupingDiagnostic,
    Hierarchy,
    ItemId,
    Meeting,
)
from agenda_board.agenda.selection import SelectionSet, SelectionStore
from agenda_board.agenda.status import active_sections
from agenda_board.config.models import AgendaViewConfig
from agenda_board.utils.logging import get_logger

logger = get_logger(__name__)


class AgendaViewSnapshot(BaseModel):
    """Everything a renderer needs to draw the agenda."""

    model_config = ConfigDict(frozen=True)

    meeting_id: ItemId
    hierarchy: Hierarchy
    visible: Hierarchy
    selection: SelectionSet
    active_sections: FrozenSet[int]
    expanded_section_ids: Tuple[ItemId, ...]
    show_completed: bool
    drag_phase: DragPhase
    diagnostics: Tuple[GroupingDiagnostic, ...] = ()

    @property
    def has_selection(self) -> bool:
        return not self.selection.is_empty


class AgendaView:
    """State behind a meeting's agenda list."""

    def __init__(
        self,
        meeting_id: ItemId,
        items: Sequence[Union[AgendaItem, Dict[str, Any]]],
        config: Optional[AgendaViewConfig] = None,
        on_commit: Optional[CommitCallback] = None,
    ):
        """Initialize the agenda view.

        Args:
            meeting_id: Meeting the agenda belongs to, used as selection scope
            items: Flat agenda items of the meeting
            config: View configuration; defaults apply when omitted
            on_commit: Receives the hierarchy after every drop that changed it

        Raises:
            DuplicateItemError: If the items contain duplicate ids
        """
        self.meeting_id = meeting_id
        self.config = config or AgendaViewConfig()

        grouping = group_items(items)
        self.diagnostics = grouping.diagnostics
        self.engine = DragEngine(grouping.hierarchy, on_commit=on_commit)
        self.selection_store = SelectionStore()
        self.show_completed = self.config.show_completed

        self._seed_expansion(grouping.hierarchy)

        logger.info(
            f"Agenda view for meeting {meeting_id!r}: "
            f"{len(grouping.hierarchy.groups)} sections, "
            f"{len(self.diagnostics)} orphaned items"
        )

    @classmethod
    def from_meeting(
        cls,
        meeting: Meeting,
        config: Optional[AgendaViewConfig] = None,
        on_commit: Optional[CommitCallback] = None,
    ) -> "AgendaView":
        return cls(meeting.id, meeting.items, config=config, on_commit=on_commit)

    @property
    def hierarchy(self) -> Hierarchy:
        return self.engine.hierarchy

    @property
    def visible_hierarchy(self) -> Hierarchy:
        return filter_hierarchy(self.engine.hierarchy, self.show_completed)

    @property
    def selection(self) -> SelectionSet:
        return self.selection_store.selection

    @property
    def has_selection(self) -> bool:
        """Whether the bulk action box should be shown."""
        return self.selection_store.has_selection

    @property
    def expanded_section_ids(self) -> Tuple[ItemId, ...]:
        return self._expanded_ids

    def toggle_show_completed(self) -> bool:
        """Flip the completed-items toggle and return the new value."""
        return self.set_show_completed(not self.show_completed)

    def set_show_completed(self, show_completed: bool) -> bool:
        self.show_completed = show_completed
        logger.debug(f"Show completed set to {show_completed}")
        return self.show_completed

    def select_item(
        self, item_id: ItemId, selected: bool, scope: Optional[ItemId] = None
    ) -> SelectionSet:
        """Check or uncheck an item for bulk actions.

        Args:
            item_id: Item whose checkbox changed
            selected: New checkbox state
            scope: Selection scope; the meeting id when omitted

        Returns:
            New selection
        """
        scope = self.meeting_id if scope is None else scope
        return self.selection_store.toggle(scope, item_id, selected)

    def cancel_selection(self) -> SelectionSet:
        return self.selection_store.clear()

    def handle(self, event: DragEvent) -> Hierarchy:
        """Feed a drag lifecycle event to the engine.

        Events are ignored when dragging is disabled for this view.
        """
        if not self.config.drag_enabled:
            logger.debug(f"Drag disabled, ignoring {type(event).__name__}")
            return self.engine.hierarchy
        return self.engine.dispatch(event)

    def reload(self, items: Sequence[Union[AgendaItem, Dict[str, Any]]]) -> Hierarchy:
        """Replace the agenda with freshly loaded items.

        The expanded sections are seeded again from the new items.

        Raises:
            DuplicateItemError: If the items contain duplicate ids
            DragStateError: If a drag is in progress
        """
        grouping = group_items(items)
        self.engine.replace(grouping.hierarchy)
        self.diagnostics = grouping.diagnostics
        self._seed_expansion(grouping.hierarchy)
        return self.engine.hierarchy

    def _seed_expansion(self, hierarchy: Hierarchy) -> None:
        # Seeded per load; drag reorders do not change which sections start open
        self.active_sections = active_sections(hierarchy)
        self._expanded_ids = tuple(
            hierarchy.groups[index].id for index in sorted(self.active_sections)
        )

    def orphan_ids(self) -> List[ItemId]:
        return [diagnostic.item.id for diagnostic in self.diagnostics]

    def snapshot(self) -> AgendaViewSnapshot:
        """Immutable view of the current state for rendering."""
        return AgendaViewSnapshot(
            meeting_id=self.meeting_id,
            hierarchy=self.engine.hierarchy,
            visible=self.visible_hierarchy,
            selection=self.selection,
            active_sections=self.active_sections,
            expanded_section_ids=self._expanded_ids,
            show_completed=self.show_completed,
            drag_phase=self.engine.phase,
            diagnostics=self.diagnostics,
        )
