"""Pydantic models and listing orders for entries."""

from datetime import datetime
from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, Field, ConfigDict

from ..pagination import SortField, SortKey, SortOrder


class EntryBase(BaseModel):
    """Base entry model with common fields."""

    category: str = Field(min_length=1, max_length=64, description="Category the entry belongs to")
    title: str = Field(min_length=1, max_length=200, description="Entry title")
    score: int = Field(default=0, description="Ranking score")


class EntryCreate(EntryBase):
    """Model for creating a new entry."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "category": "articles",
                "title": "Keyset pagination in practice",
                "score": 95
            }
        }
    )


class Entry(EntryBase):
    """Complete entry model with server-assigned fields."""

    id: int = Field(description="Entry ID")
    created_at: datetime = Field(description="Creation timestamp")

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": 7,
                "category": "articles",
                "title": "Keyset pagination in practice",
                "score": 95,
                "created_at": "2024-01-01T12:00:00Z"
            }
        }
    )


class EntryListResponse(BaseModel):
    """Response model for listing entries."""

    entries: list[Entry] = Field(description="Entries of this page")
    next_cursor: Optional[str] = Field(default=None, description="Cursor for the next page")
    prev_cursor: Optional[str] = Field(default=None, description="Cursor for the previous page")
    has_next: bool = Field(description="Whether a next page exists")
    has_prev: bool = Field(description="Whether a previous page exists")
    limit: int = Field(description="Requested page size")


class EntrySort(str, Enum):
    """Named listing orders."""

    RECENT = "recent"
    SCORE = "score"
    TITLE = "title"


ENTRY_COLUMNS = ["id", "category", "title", "score", "created_at"]

ENTRY_ID = SortField(name="id", order=SortOrder.ASC, value_type=int, unique=True)

ENTRY_SORT_KEYS: Dict[EntrySort, SortKey] = {
    EntrySort.RECENT: SortKey([
        SortField(name="created_at", order=SortOrder.DESC, value_type=datetime),
        SortField(name="id", order=SortOrder.DESC, value_type=int, unique=True),
    ]),
    EntrySort.SCORE: SortKey([
        SortField(name="score", order=SortOrder.DESC, value_type=int),
        ENTRY_ID,
    ]),
    EntrySort.TITLE: SortKey([
        SortField(name="title", order=SortOrder.ASC, value_type=str),
        ENTRY_ID,
    ]),
}
