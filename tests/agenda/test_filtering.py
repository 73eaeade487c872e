"""Tests for completed-item filtering."""

from agenda_board.agenda.filtering import filter_hierarchy
from agenda_board.agenda.grouping import group_items
from agenda_board.agenda.models import ItemStatus


class TestFilterHierarchy:
    """Test filter_hierarchy."""

    def test_show_completed_returns_equal_copy(self, hierarchy):
        """Test that showing everything yields an equal, separate hierarchy."""
        visible = filter_hierarchy(hierarchy, True)

        assert visible == hierarchy
        assert visible is not hierarchy

    def test_hides_completed_sections_and_items(self, hierarchy):
        """Test that completed sections and children are dropped."""
        visible = filter_hierarchy(hierarchy, False)

        assert visible.to_outline() == {1: [11, 12], 2: [], 4: []}
        for group in visible.groups:
            assert group.status != ItemStatus.COMPLETED
            assert all(child.status != ItemStatus.COMPLETED for child in group.children)

    def test_source_not_modified(self, hierarchy):
        """Test that hiding completed items leaves the source intact."""
        before = hierarchy.to_outline()

        filter_hierarchy(hierarchy, False)

        assert filter_hierarchy(hierarchy, True) == hierarchy
        assert hierarchy.to_outline() == before
        assert hierarchy.find_group(1).child_ids == [11, 12, 13]

    def test_order_preserved(self, item_factory):
        """Test that retained sections and children keep their order."""
        items = [
            item_factory("b"),
            item_factory("b3", "b"),
            item_factory("b1", "b", ItemStatus.COMPLETED),
            item_factory("b2", "b"),
            item_factory("a"),
            item_factory("c", status=ItemStatus.COMPLETED),
        ]

        visible = filter_hierarchy(group_items(items).hierarchy, False)

        assert visible.group_ids == ["b", "a"]
        assert visible.find_group("b").child_ids == ["b3", "b2"]

    def test_meeting_scenario(self, raw_meeting_items):
        """Test hiding the completed child of the only section."""
        hierarchy = group_items(raw_meeting_items).hierarchy

        assert filter_hierarchy(hierarchy, False).to_outline() == {1: [2]}

    def test_empty_hierarchy(self):
        """Test filtering an empty hierarchy."""
        empty = group_items([]).hierarchy

        assert filter_hierarchy(empty, False).groups == ()
        assert filter_hierarchy(empty, True) == empty

    def test_unknown_status_stays_visible(self, item_factory):
        """Test that an unrecognised status is not treated as completed."""
        items = [
            item_factory(1, status="archived"),
            item_factory(11, 1, "on hold"),
            item_factory(12, 1, ItemStatus.COMPLETED),
        ]

        visible = filter_hierarchy(group_items(items).hierarchy, False)

        assert visible.to_outline() == {1: [11]}
