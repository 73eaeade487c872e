"""Agenda hierarchy, filtering, selection and drag and drop.

The system implements the following key components:
- Grouping of a meeting's flat items into sections with children
- Display filtering of completed sections and items
- Per-scope multi-selection for bulk actions
- Aggregate section status used to pick initially expanded sections
- A drag and drop state machine with live previews and rollback
"""

from agenda_board.agenda.models import (
    AgendaGroup,
    AgendaItem,
    DiagnosticKind,
    DragCancel,
    DragEnd,
    DragOver,
    DragStart,
    DropTargetId,
    GroupingDiagnostic,
    GroupingResult,
    Hierarchy,
    ItemStatus,
    Meeting,
)
from agenda_board.agenda.grouping import group_items, flatten_hierarchy
from agenda_board.agenda.filtering import filter_hierarchy
from agenda_board.agenda.selection import (
    SelectionSet,
    SelectionStore,
    clear_selection,
    toggle_selection,
)
from agenda_board.agenda.status import (
    active_section_ids,
    active_sections,
    is_section_active,
)
from agenda_board.agenda.index import HierarchyIndex
from agenda_board.agenda.drag import DragContext, DragEngine, DragPhase
from agenda_board.agenda.view import AgendaView, AgendaViewSnapshot

__all__ = [
    "AgendaGroup",
    "AgendaItem",
    "DiagnosticKind",
    "DragCancel",
    "DragEnd",
    "DragOver",
    "DragStart",
    "DropTargetId",
    "GroupingDiagnostic",
    "GroupingResult",
    "Hierarchy",
    "ItemStatus",
    "Meeting",
    "group_items",
    "flatten_hierarchy",
    "filter_hierarchy",
    "SelectionSet",
    "SelectionStore",
    "clear_selection",
    "toggle_selection",
    "active_section_ids",
    "active_sections",
    "is_section_active",
    "HierarchyIndex",
    "DragContext",
    "DragEngine",
    "DragPhase",
    "AgendaView",
    "AgendaViewSnapshot",
]
