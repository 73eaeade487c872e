"""Multi-selection of agenda items for bulk actions.

Selected item ids are kept per scope (normally the meeting id). A scope
is present in the selection exactly when at least one item in it is
selected: the entry appears on the first selection and disappears as
soon as its last item is deselected.
"""

from types import MappingProxyType
from typing import Any, Dict, FrozenSet, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from agenda_board.agenda.models import ItemId
from agenda_board.utils.logging import get_logger

logger = get_logger(__name__)


class SelectionSet(BaseModel):
    """Immutable mapping from scope to the ids selected in it.

    ``entries`` is a read-only view, so a selection handed to a reader
    cannot alter the store it came from.
    """

    model_config = ConfigDict(frozen=True)

    entries: Mapping[ItemId, FrozenSet[ItemId]] = Field(
        default_factory=dict, validate_default=True
    )

    @field_validator("entries")
    @classmethod
    def no_empty_scopes(
        cls, v: Mapping[ItemId, FrozenSet[ItemId]]
    ) -> Mapping[ItemId, FrozenSet[ItemId]]:
        empty = [scope for scope, ids in v.items() if not ids]
        if empty:
            raise ValueError(f"Selection scopes without selected items: {empty}")
        return MappingProxyType(dict(v))

    @field_serializer("entries")
    def serialize_entries(
        self, entries: Mapping[ItemId, FrozenSet[ItemId]]
    ) -> Dict[ItemId, Any]:
        return dict(entries)

    @property
    def scopes(self) -> List[ItemId]:
        return list(self.entries)

    @property
    def is_empty(self) -> bool:
        return not self.entries

    @property
    def count(self) -> int:
        """Total number of selected items across all scopes."""
        return sum(len(ids) for ids in self.entries.values())

    def selected(self, scope: ItemId) -> FrozenSet[ItemId]:
        """Ids selected in a scope (empty when the scope has none)."""
        return self.entries.get(scope, frozenset())

    def is_selected(self, scope: ItemId, item_id: ItemId) -> bool:
        return item_id in self.selected(scope)


def toggle_selection(
    selection: SelectionSet, scope: ItemId, item_id: ItemId, selected: bool
) -> SelectionSet:
    """Select or deselect an item.

    Args:
        selection: Current selection
        scope: Scope the item belongs to
        item_id: Item to (de)select
        selected: True to select, False to deselect

    Returns:
        New SelectionSet; the given one is left untouched
    """
    entries = dict(selection.entries)
    current = entries.get(scope, frozenset())

    if selected:
        entries[scope] = current | {item_id}
    else:
        remaining = current - {item_id}
        if remaining:
            entries[scope] = remaining
        else:
            entries.pop(scope, None)

    return SelectionSet(entries=entries)


def clear_selection() -> SelectionSet:
    """Return the empty selection."""
    return SelectionSet()


class SelectionStore:
    """Owner of the current selection.

    The store is the only writer of the selection; readers get immutable
    SelectionSet snapshots.
    """

    def __init__(self, selection: Optional[SelectionSet] = None):
        self._selection = selection if selection is not None else SelectionSet()

    @property
    def selection(self) -> SelectionSet:
        return self._selection

    @property
    def has_selection(self) -> bool:
        return not self._selection.is_empty

    def toggle(self, scope: ItemId, item_id: ItemId, selected: bool) -> SelectionSet:
        """Apply a checkbox change and return the new selection."""
        self._selection = toggle_selection(self._selection, scope, item_id, selected)
        logger.debug(
            f"Item {item_id!r} in scope {scope!r} "
            f"{'selected' if selected else 'deselected'}; "
            f"{self._selection.count} selected in total"
        )
        return self._selection

    def clear(self) -> SelectionSet:
        """Drop the whole selection (bulk action cancelled)."""
        self._selection = clear_selection()
        logger.debug("Selection cleared")
        return self._selection
