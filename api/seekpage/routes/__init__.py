"""API routes for SeekPage."""

from .entries import entries_router

__all__ = ["entries_router"]
