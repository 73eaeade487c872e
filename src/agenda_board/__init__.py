"""Agenda Board - reorderable, two-level meeting agenda state.

This package turns a meeting's flat list of agenda items into sections
with child items and keeps that structure consistent while a user drags
items and sections around, selects items for bulk actions and hides
completed work.
"""

__version__ = "0.1.0"
__author__ = "Agenda Board Team"

__all__ = ["__version__", "__author__"]
