"""Tests for the agenda view coordinator."""

from unittest.mock import Mock

import pytest

from agenda_board.agenda.drag import DragPhase
from agenda_board.agenda.models import (
    DragCancel,
    DragEnd,
    DragOver,
    DragStart,
    DropTargetId,
    ItemStatus,
    Meeting,
)
from agenda_board.agenda.view import AgendaView
from agenda_board.config.models import AgendaViewConfig
from agenda_board.utils.exceptions import DragStateError, DuplicateItemError


class TestAgendaView:
    """Test AgendaView."""

    def test_meeting_scenario(self, raw_meeting_items):
        """Test grouping, status and filtering for a small meeting."""
        view = AgendaView("meeting-1", raw_meeting_items)

        assert view.hierarchy.to_outline() == {1: [2, 3]}
        assert view.active_sections == frozenset({0})
        assert view.expanded_section_ids == (1,)

        view.set_show_completed(False)
        assert view.visible_hierarchy.to_outline() == {1: [2]}
        assert view.hierarchy.to_outline() == {1: [2, 3]}

    def test_from_meeting(self, raw_meeting_items):
        """Test building a view from a Meeting model."""
        meeting = Meeting(id="m-7", title="Board", items=raw_meeting_items)

        view = AgendaView.from_meeting(meeting)

        assert view.meeting_id == "m-7"
        assert view.hierarchy.group_ids == [1]

    def test_show_completed_default_from_config(self, agenda_items):
        """Test that the initial filter comes from configuration."""
        view = AgendaView(
            "m1", agenda_items, config=AgendaViewConfig(show_completed=False)
        )

        assert not view.show_completed
        assert view.visible_hierarchy.group_ids == [1, 2, 4]

    def test_toggle_show_completed(self, agenda_items):
        """Test flipping the completed filter."""
        view = AgendaView("m1", agenda_items)

        assert view.toggle_show_completed() is False
        assert 3 not in view.visible_hierarchy.group_ids
        assert view.toggle_show_completed() is True
        assert view.visible_hierarchy == view.hierarchy

    def test_selection_defaults_to_meeting_scope(self, agenda_items):
        """Test selecting items for bulk actions."""
        view = AgendaView("m1", agenda_items)

        view.select_item(11, True)
        view.select_item(21, True, scope="other")

        assert view.has_selection
        assert view.selection.selected("m1") == frozenset({11})
        assert view.selection.selected("other") == frozenset({21})

        view.cancel_selection()
        assert not view.has_selection

    def test_drag_commits(self, agenda_items):
        """Test that a drop reaches the commit callback."""
        on_commit = Mock()
        view = AgendaView("m1", agenda_items, on_commit=on_commit)

        view.handle(DragStart(active_id=12))
        view.handle(DragOver(active_id=12, over_id=DropTargetId(group_id=4)))
        view.handle(DragEnd(active_id=12, over_id=DropTargetId(group_id=4)))

        on_commit.assert_called_once_with(view.hierarchy)
        assert view.hierarchy.find_group(4).child_ids == [12]

    def test_drag_preview_visible_in_filtered_view(self, agenda_items):
        """Test that the filtered view follows the live preview."""
        view = AgendaView("m1", agenda_items, config=AgendaViewConfig(show_completed=False))

        view.handle(DragStart(active_id=11))
        view.handle(DragOver(active_id=11, over_id=DropTargetId(group_id=2)))

        assert view.visible_hierarchy.find_group(2).child_ids == [11]
        assert view.snapshot().drag_phase == DragPhase.DRAGGING

        view.handle(DragCancel())
        assert view.visible_hierarchy.find_group(1).child_ids == [11, 12]

    def test_drag_disabled(self, agenda_items):
        """Test that read-only views ignore drag events."""
        view = AgendaView("m1", agenda_items, config=AgendaViewConfig(drag_enabled=False))
        before = view.hierarchy

        view.handle(DragStart(active_id=1))
        view.handle(DragEnd(active_id=1, over_id=2))

        assert view.hierarchy is before
        assert view.engine.phase == DragPhase.IDLE

    def test_expanded_sections_follow_ids(self, agenda_items):
        """Test that seeded expansion survives section reordering."""
        view = AgendaView("m1", agenda_items)

        view.handle(DragStart(active_id=4))
        view.handle(DragEnd(active_id=4, over_id=1))

        assert view.hierarchy.group_ids == [4, 1, 2, 3]
        assert view.expanded_section_ids == (1,)
        assert view.active_sections == frozenset({0})

    def test_orphans_reported(self, agenda_items, item_factory):
        """Test that orphaned items are surfaced."""
        view = AgendaView("m1", agenda_items + [item_factory(50, 500)])

        assert view.orphan_ids() == [50]
        assert view.snapshot().diagnostics[0].item.id == 50

    def test_duplicates_rejected(self, agenda_items, item_factory):
        """Test that duplicate ids fail construction."""
        with pytest.raises(DuplicateItemError):
            AgendaView("m1", agenda_items + [item_factory(11, 2)])

    def test_reload(self, agenda_items, raw_meeting_items):
        """Test replacing the agenda with fresh data."""
        view = AgendaView("m1", agenda_items)

        view.reload(raw_meeting_items)

        assert view.hierarchy.to_outline() == {1: [2, 3]}
        assert view.orphan_ids() == []

    def test_reload_reseeds_expansion(self, agenda_items, item_factory):
        """Test that a reload expands the active sections of the new agenda."""
        view = AgendaView("m1", agenda_items)
        items = [
            item_factory(10),
            item_factory(20),
            item_factory(21, 20, ItemStatus.IN_PROGRESS),
        ]

        view.reload(items)

        assert view.active_sections == frozenset({1})
        assert view.expanded_section_ids == (20,)
        snapshot = view.snapshot()
        assert snapshot.active_sections == frozenset({1})
        assert snapshot.expanded_section_ids == (20,)

    def test_reload_while_dragging(self, agenda_items, raw_meeting_items):
        """Test that a reload cannot interrupt a drag."""
        view = AgendaView("m1", agenda_items)
        view.handle(DragStart(active_id=11))

        with pytest.raises(DragStateError):
            view.reload(raw_meeting_items)

    def test_snapshot(self, agenda_items):
        """Test the renderer snapshot."""
        view = AgendaView("m1", agenda_items, config=AgendaViewConfig(show_completed=False))
        view.select_item(11, True)

        snapshot = view.snapshot()

        assert snapshot.meeting_id == "m1"
        assert snapshot.hierarchy == view.hierarchy
        assert snapshot.visible.group_ids == [1, 2, 4]
        assert snapshot.has_selection
        assert snapshot.active_sections == frozenset({0})
        assert snapshot.expanded_section_ids == (1,)
        assert snapshot.drag_phase == DragPhase.IDLE
        assert not snapshot.show_completed

    def test_snapshot_is_detached(self, agenda_items):
        """Test that later changes do not alter an earlier snapshot."""
        view = AgendaView("m1", agenda_items)
        snapshot = view.snapshot()

        view.select_item(11, True)
        view.handle(DragStart(active_id=11))
        view.handle(DragEnd(active_id=11, over_id=13))

        assert snapshot.hierarchy.find_group(1).child_ids == [11, 12, 13]
        assert not snapshot.has_selection

    def test_snapshot_selection_read_only(self, agenda_items):
        """Test that a snapshot's selection cannot write back into the view."""
        view = AgendaView("m1", agenda_items)
        view.select_item(11, True)
        snapshot = view.snapshot()

        with pytest.raises(TypeError):
            snapshot.selection.entries["m1"] = frozenset()

        assert view.selection.selected("m1") == frozenset({11})
