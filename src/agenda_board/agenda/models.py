"""Data models for the agenda board.

This module defines the Pydantic models used throughout the package:
agenda items as they arrive from the meeting, the two-level hierarchy
built from them, grouping diagnostics and the drag lifecycle events
delivered by the host.

All models are frozen. Every change to the hierarchy produces new
objects, so a snapshot handed to a renderer or kept for rollback can
never be altered behind its holder's back.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator


ItemId = Union[int, str]

DROP_TARGET_PREFIX = "drop-"


class ItemStatus(str, Enum):
    """Lifecycle status of an agenda item."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    POSTPONED = "postponed"

    @classmethod
    def _missing_(cls, value: object) -> Optional["ItemStatus"]:
        """Accept member names and differently spelled values."""
        if isinstance(value, str):
            normalized = value.strip().lower().replace("-", "_").replace(" ", "_")
            for member in cls:
                if member.value == normalized:
                    return member
        return None


class AgendaItem(BaseModel):
    """A single agenda item of a meeting.

    Items without a parent are sections; the rest belong to the section
    named by ``parent_id``. The meeting API payload names these
    fields ``parent_meeting_item_id`` and ``title_loc_key``, and both
    spellings are accepted. A status outside ItemStatus is kept as the
    raw string and counts as not completed.
    """

    model_config = ConfigDict(frozen=True)

    id: ItemId
    parent_id: Optional[ItemId] = Field(
        default=None,
        validation_alias=AliasChoices("parent_id", "parent_meeting_item_id"),
    )
    status: Union[ItemStatus, str] = Field(
        default=ItemStatus.NOT_STARTED, union_mode="left_to_right"
    )
    title: str = Field(
        default="", validation_alias=AliasChoices("title", "title_loc_key")
    )
    description: Optional[str] = None

    @property
    def is_section(self) -> bool:
        """Whether this item is a top-level section."""
        return self.parent_id is None

    @property
    def is_completed(self) -> bool:
        return self.status == ItemStatus.COMPLETED


class DropTargetId(BaseModel):
    """Identifier of a section's item container.

    Dropping onto a section's container (for instance when it is empty)
    must be told apart from dropping onto the section's header, which
    reorders sections. This type lives in its own namespace: it never
    compares equal to an item id, even one with the same value.
    """

    model_config = ConfigDict(frozen=True)

    group_id: ItemId

    @property
    def key(self) -> str:
        """String key a renderer registers its droppable area under."""
        return f"{DROP_TARGET_PREFIX}{self.group_id}"

    @classmethod
    def from_key(cls, key: str) -> Optional["DropTargetId"]:
        """Parse a key produced by ``key``.

        Decimal group ids come back as integers. Strings without the
        prefix are not container keys and give None.
        """
        if not key.startswith(DROP_TARGET_PREFIX):
            return None
        raw = key[len(DROP_TARGET_PREFIX):]
        if not raw:
            return None
        return cls(group_id=int(raw) if raw.isdecimal() else raw)


class AgendaGroup(AgendaItem):
    """A section together with its ordered child items."""

    children: Tuple[AgendaItem, ...] = ()

    @model_validator(mode="after")
    def check_section(self) -> "AgendaGroup":
        if self.parent_id is not None:
            raise ValueError(f"Section {self.id!r} cannot have a parent")
        return self

    @property
    def drop_target_id(self) -> DropTargetId:
        return DropTargetId(group_id=self.id)

    @property
    def child_ids(self) -> List[ItemId]:
        return [child.id for child in self.children]

    @classmethod
    def from_item(
        cls, item: AgendaItem, children: Tuple[AgendaItem, ...] = ()
    ) -> "AgendaGroup":
        """Build a group from a top-level item.

        Args:
            item: Section item (its ``parent_id`` must be None)
            children: Ordered child items

        Returns:
            New AgendaGroup carrying the item's fields
        """
        return cls(**item.model_dump(), children=tuple(children))

    def with_children(self, children: Tuple[AgendaItem, ...]) -> "AgendaGroup":
        """Return a copy of this group with a different children sequence."""
        return self.model_copy(update={"children": tuple(children)})


class Hierarchy(BaseModel):
    """Ordered top-level sequence of agenda groups.

    Construction checks that no id repeats anywhere in the hierarchy and
    that every child points at the group that contains it.
    """

    model_config = ConfigDict(frozen=True)

    groups: Tuple[AgendaGroup, ...] = ()

    @model_validator(mode="after")
    def check_structure(self) -> "Hierarchy":
        seen = set()
        duplicates = []
        for group in self.groups:
            for item_id in [group.id] + group.child_ids:
                if item_id in seen:
                    duplicates.append(item_id)
                seen.add(item_id)
            for child in group.children:
                if child.parent_id != group.id:
                    raise ValueError(
                        f"Item {child.id!r} is listed under section {group.id!r} "
                        f"but references parent {child.parent_id!r}"
                    )
        if duplicates:
            raise ValueError(f"Duplicate item ids in hierarchy: {duplicates}")
        return self

    def __len__(self) -> int:
        return len(self.groups)

    @property
    def group_ids(self) -> List[ItemId]:
        return [group.id for group in self.groups]

    def item_ids(self) -> List[ItemId]:
        """All ids in display order, each section followed by its children."""
        ids = []
        for group in self.groups:
            ids.append(group.id)
            ids.extend(group.child_ids)
        return ids

    def find_group(self, group_id: ItemId) -> Optional[AgendaGroup]:
        for group in self.groups:
            if group.id == group_id:
                return group
        return None

    def to_outline(self) -> Dict[ItemId, List[ItemId]]:
        """Map each section id to its ordered child ids."""
        return {group.id: group.child_ids for group in self.groups}


class Meeting(BaseModel):
    """A meeting and its flat list of agenda items."""

    id: ItemId
    title: str = ""
    items: List[AgendaItem] = Field(default_factory=list)


class DiagnosticKind(str, Enum):
    """Kinds of recoverable inconsistencies found while grouping."""

    UNKNOWN_PARENT = "unknown_parent"
    NESTED_CHILD = "nested_child"


class GroupingDiagnostic(BaseModel):
    """An item left out of the hierarchy, and why."""

    model_config = ConfigDict(frozen=True)

    kind: DiagnosticKind
    item: AgendaItem
    message: str


class GroupingResult(BaseModel):
    """Hierarchy built from a flat item list plus what had to be left out."""

    model_config = ConfigDict(frozen=True)

    hierarchy: Hierarchy
    diagnostics: Tuple[GroupingDiagnostic, ...] = ()

    @property
    def orphans(self) -> List[AgendaItem]:
        return [diagnostic.item for diagnostic in self.diagnostics]

    @property
    def is_consistent(self) -> bool:
        return not self.diagnostics


OverId = Union[DropTargetId, ItemId]


class DragStart(BaseModel):
    """The host started dragging an item or a section."""

    model_config = ConfigDict(frozen=True)

    active_id: ItemId


class DragOver(BaseModel):
    """The pointer of an ongoing drag moved over a new target."""

    model_config = ConfigDict(frozen=True)

    active_id: ItemId
    over_id: Optional[OverId] = None


class DragEnd(BaseModel):
    """The dragged element was dropped."""

    model_config = ConfigDict(frozen=True)

    active_id: ItemId
    over_id: Optional[OverId] = None


class DragCancel(BaseModel):
    """The drag was abandoned (escape key, lost pointer)."""

    model_config = ConfigDict(frozen=True)

    reason: Optional[str] = None


DragEvent = Union[DragStart, DragOver, DragEnd, DragCancel]


def coerce_items(items: List[Union[AgendaItem, Dict[str, Any]]]) -> List[AgendaItem]:
    """Validate raw item records into AgendaItem instances.

    Args:
        items: AgendaItem instances or plain dictionaries

    Returns:
        List of AgendaItem in the same order
    """
    return [
        item if isinstance(item, AgendaItem) else AgendaItem.model_validate(item)
        for item in items
    ]
