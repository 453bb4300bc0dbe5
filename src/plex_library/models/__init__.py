"""Pydantic models for the Plex API."""

from .library_items import (
    Comparison,
    KeysFilter,
    PropertyFilter,
    DatePropertyFilter,
    CollectionFilter,
    Filter,
    LibraryItemsRequest,
    MediaContainer,
    LibraryItemsResponse,
    decode_library_items,
)
from .paging import PageRange, page_query_items
from .plex import (
    PlexMediaType,
    PlexLibrarySection,
    PlexMediaItem,
    PlexMediaItemSummary,
)

__all__ = [
    "Comparison",
    "KeysFilter",
    "PropertyFilter",
    "DatePropertyFilter",
    "CollectionFilter",
    "Filter",
    "LibraryItemsRequest",
    "MediaContainer",
    "LibraryItemsResponse",
    "decode_library_items",
    "PageRange",
    "page_query_items",
    "PlexMediaType",
    "PlexLibrarySection",
    "PlexMediaItem",
    "PlexMediaItemSummary",
]
