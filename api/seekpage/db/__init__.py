"""Database access for SeekPage."""
