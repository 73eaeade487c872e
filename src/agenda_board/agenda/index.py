"""Id lookup over a hierarchy.

Drag events only carry ids. The index maps every id to its position so
that each event is resolved with dictionary lookups instead of scanning
all sections and their children.
"""

from typing import Dict, NamedTuple, Optional, Tuple

from agenda_board.agenda.models import DropTargetId, Hierarchy, ItemId, OverId


class ItemLocation(NamedTuple):
    """Position of a child item: section index and index among its siblings."""

    group_index: int
    item_index: int


class ContainerTarget(NamedTuple):
    """Where a dragged child would land.

    ``item_index`` is None when the pointer is over the section's own
    container rather than over one of its items.
    """

    group_index: int
    item_index: Optional[int]


class HierarchyIndex:
    """Id to position lookup for one hierarchy snapshot.

    An index is only valid for the hierarchy it was built from; the drag
    engine rebuilds it whenever it replaces its hierarchy.
    """

    def __init__(self, hierarchy: Hierarchy):
        self._groups: Dict[ItemId, int] = {}
        self._items: Dict[ItemId, ItemLocation] = {}
        self._container_keys: Dict[str, DropTargetId] = {}

        for group_index, group in enumerate(hierarchy.groups):
            self._groups[group.id] = group_index
            target = group.drop_target_id
            self._container_keys[target.key] = target
            for item_index, child in enumerate(group.children):
                self._items[child.id] = ItemLocation(group_index, item_index)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._groups or item_id in self._items

    def is_group(self, item_id: ItemId) -> bool:
        return item_id in self._groups

    def group_index(self, group_id: ItemId) -> Optional[int]:
        return self._groups.get(group_id)

    def locate_item(self, item_id: ItemId) -> Optional[ItemLocation]:
        return self._items.get(item_id)

    def resolve_key(self, over_id: Optional[OverId]) -> Optional[OverId]:
        """Map a container key string reported by the host to its DropTargetId.

        Item and section ids win over keys, so an item whose id happens to
        look like a key still resolves to the item. Anything else is
        returned unchanged.
        """
        if isinstance(over_id, str) and over_id not in self:
            return self._container_keys.get(over_id, over_id)
        return over_id

    def resolve_group(self, over_id: OverId) -> Optional[int]:
        """Section index named by a section header id or a container id."""
        over_id = self.resolve_key(over_id)
        if isinstance(over_id, DropTargetId):
            return self._groups.get(over_id.group_id)
        return self._groups.get(over_id)

    def resolve_container(self, over_id: OverId) -> Optional[ContainerTarget]:
        """Resolve a drag-over target for a dragged child item.

        A child item id resolves to its own position and a container id
        to its section. Section header ids do not resolve: hovering a
        header reorders sections, it never moves a child.

        Args:
            over_id: Id currently under the pointer

        Returns:
            ContainerTarget, or None when the id cannot hold a child
        """
        over_id = self.resolve_key(over_id)
        if isinstance(over_id, DropTargetId):
            group_index = self._groups.get(over_id.group_id)
            if group_index is None:
                return None
            return ContainerTarget(group_index, None)

        location = self._items.get(over_id)
        if location is None:
            return None
        return ContainerTarget(location.group_index, location.item_index)

    def stats(self) -> Tuple[int, int]:
        """Number of sections and child items indexed."""
        return len(self._groups), len(self._items)
