"""Exceptions raised by the Plex library client."""

from typing import Any, Optional


class PlexError(Exception):
    """Base exception for Plex API errors."""
    pass


class DecodeError(PlexError):
    """A Plex response payload did not match the expected shape."""

    def __init__(self, message: str, errors: Optional[list[dict[str, Any]]] = None):
        self.errors = errors or []
        super().__init__(message)
