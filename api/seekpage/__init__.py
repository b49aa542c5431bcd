"""SeekPage: keyset pagination library and API."""

__version__ = "1.0.0"
