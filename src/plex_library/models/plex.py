"""Pydantic models for Plex API responses."""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, StrictFloat, StrictInt, StrictStr, field_validator


class PlexMediaType(str, Enum):
    """Media type enumeration, as reported by Plex in `type`/`viewGroup`."""
    MOVIE = "movie"
    SHOW = "show"
    SEASON = "season"
    EPISODE = "episode"
    TRAILER = "trailer"
    PERSON = "person"
    ARTIST = "artist"
    ALBUM = "album"
    TRACK = "track"
    PHOTO_ALBUM = "photoalbum"
    PHOTO = "photo"
    CLIP = "clip"
    PLAYLIST = "playlist"
    COLLECTION = "collection"
    UNKNOWN = "unknown"

    @classmethod
    def _missing_(cls, value):
        # Newer servers add types; keep decoding instead of failing.
        if isinstance(value, str):
            return cls.UNKNOWN
        return None

    @property
    def key(self) -> str:
        """Numeric type id used by the `type` query parameter."""
        return _TYPE_KEYS[self]


_TYPE_KEYS = {
    PlexMediaType.MOVIE: "1",
    PlexMediaType.SHOW: "2",
    PlexMediaType.SEASON: "3",
    PlexMediaType.EPISODE: "4",
    PlexMediaType.TRAILER: "5",
    PlexMediaType.PERSON: "7",
    PlexMediaType.ARTIST: "8",
    PlexMediaType.ALBUM: "9",
    PlexMediaType.TRACK: "10",
    PlexMediaType.PHOTO_ALBUM: "11",
    PlexMediaType.CLIP: "12",
    PlexMediaType.PHOTO: "13",
    PlexMediaType.PLAYLIST: "15",
    PlexMediaType.COLLECTION: "18",
    PlexMediaType.UNKNOWN: "",
}


class PlexLibrarySection(BaseModel):
    """A Plex library section (e.g., Movies, TV Shows)."""
    key: str
    title: str
    type: str  # "movie", "show", "artist", "photo"


class PlexMediaItem(BaseModel):
    """A media item as returned in a MediaContainer's `Metadata` list."""
    model_config = ConfigDict(extra="allow", frozen=True)

    ratingKey: StrictStr
    title: StrictStr
    type: PlexMediaType
    key: Optional[StrictStr] = None
    guid: Optional[StrictStr] = None
    titleSort: Optional[StrictStr] = None
    summary: Optional[StrictStr] = None
    year: Optional[StrictInt] = None
    rating: Optional[StrictFloat] = None
    audienceRating: Optional[StrictFloat] = None
    contentRating: Optional[StrictStr] = None
    studio: Optional[StrictStr] = None
    thumb: Optional[StrictStr] = None
    art: Optional[StrictStr] = None
    thumbBlurHash: Optional[StrictStr] = None
    duration: Optional[StrictInt] = None  # milliseconds
    originallyAvailableAt: Optional[StrictStr] = None
    leafCount: Optional[StrictInt] = None
    viewedLeafCount: Optional[StrictInt] = None
    childCount: Optional[StrictInt] = None
    viewCount: Optional[StrictInt] = None
    addedAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None
    lastViewedAt: Optional[datetime] = None

    @field_validator("addedAt", "updatedAt", "lastViewedAt", mode="before")
    @classmethod
    def _from_epoch(cls, value):
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return datetime.fromtimestamp(value, tz=timezone.utc)
        return value


class PlexMediaItemSummary(BaseModel):
    """A simplified media item for tool output."""
    title: str
    year: Optional[int] = None
    rating: Optional[float] = None
    summary: Optional[str] = None
    content_rating: Optional[str] = None
    media_type: str  # "movie" or "tv" (normalized from Plex's "show")

    @classmethod
    def from_item(cls, item: PlexMediaItem) -> "PlexMediaItemSummary":
        """Build a summary, normalizing Plex's "show" to "tv"."""
        media_type = "tv" if item.type == PlexMediaType.SHOW else item.type.value
        return cls(
            title=item.title,
            year=item.year,
            rating=item.rating,
            summary=item.summary,
            content_rating=item.contentRating,
            media_type=media_type,
        )
