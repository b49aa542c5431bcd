"""Data models for the SeekPage API."""

from .entries import (
    Entry,
    EntryBase,
    EntryCreate,
    EntryListResponse,
    EntrySort,
    ENTRY_COLUMNS,
    ENTRY_SORT_KEYS
)

__all__ = [
    "Entry",
    "EntryBase",
    "EntryCreate",
    "EntryListResponse",
    "EntrySort",
    "ENTRY_COLUMNS",
    "ENTRY_SORT_KEYS"
]
