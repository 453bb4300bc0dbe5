"""Library section listing: query compilation and response decoding.

A `LibraryItemsRequest` describes a listing of `library/sections/{key}/all`
and compiles itself into an ordered list of query parameters. The JSON
payload Plex returns is decoded into a `LibraryItemsResponse`, generic over
the item model used for the `Metadata` list.
"""

import math
from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Any, Callable, Generic, Iterable, Literal, Optional, TypeVar, Union
from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr, ValidationError

from ..exceptions import DecodeError
from .paging import PageRange, page_query_items
from .plex import PlexMediaItem, PlexMediaType

QueryItem = tuple[str, str]

# Can contain invalid unicode, which breaks JSON decoding. Always excluded.
ALWAYS_EXCLUDED_FIELDS = ("file",)


class Comparison(str, Enum):
    """Comparison operator, appended directly to the filtered field name."""
    GREATER_THAN = ">"
    LESS_THAN = "<"
    EQUAL = ""


class KeysFilter(BaseModel):
    """Requests items in a specific set of rating keys."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["keys"] = "keys"
    keys: frozenset[str]

    def to_query_item(self) -> Optional[QueryItem]:
        if not self.keys:
            return None
        return ("id", ",".join(sorted(self.keys)))


class PropertyFilter(BaseModel):
    """Filters by a field in the result type."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["property"] = "property"
    name: str
    comparison: Comparison = Comparison.EQUAL
    value: str

    def to_query_item(self) -> Optional[QueryItem]:
        return (self.name + self.comparison.value, self.value)


class DatePropertyFilter(BaseModel):
    """Filters by a date field in the result type, sent as epoch seconds."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["date_property"] = "date_property"
    name: str
    comparison: Comparison = Comparison.EQUAL
    value: datetime

    def to_query_item(self) -> Optional[QueryItem]:
        value = self.value
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return (self.name + self.comparison.value, str(math.floor(value.timestamp())))


class CollectionFilter(BaseModel):
    """Filters by items in a given collection."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["collection"] = "collection"
    id: str

    def to_query_item(self) -> Optional[QueryItem]:
        return ("collection", self.id)


Filter = Annotated[
    Union[KeysFilter, PropertyFilter, DatePropertyFilter, CollectionFilter],
    Field(discriminator="kind"),
]


class LibraryItemsRequest(BaseModel):
    """Fetches a library section's contents."""
    model_config = ConfigDict(frozen=True)

    key: str
    media_type: PlexMediaType
    range: Optional[PageRange] = None
    exclude_fields: tuple[str, ...] = ()
    filters: tuple[Filter, ...] = ()

    @property
    def path(self) -> str:
        return f"library/sections/{self.key}/all"

    def query_items(
        self,
        paginate: Callable[[PageRange], Iterable[QueryItem]] = page_query_items,
    ) -> list[QueryItem]:
        """Compile the request into ordered query parameters.

        Args:
            paginate: Translates `range` into paging parameters. Its output
                is appended as-is after the fixed parameters.

        Returns:
            `type`, `includeFields`, paging, one entry per rendered filter,
            and `excludeFields` last.
        """
        items: list[QueryItem] = [
            ("type", self.media_type.key),
            ("includeFields", "thumbBlurHash"),
        ]

        if self.range is not None:
            items.extend(paginate(self.range))

        for query_filter in self.filters:
            item = query_filter.to_query_item()
            if item is None:
                continue
            items.append(item)

        exclude_fields = [*ALWAYS_EXCLUDED_FIELDS, *self.exclude_fields]
        items.append(("excludeFields", ",".join(exclude_fields)))

        return items


MediaItemT = TypeVar("MediaItemT", bound=BaseModel)


class MediaContainer(BaseModel, Generic[MediaItemT]):
    """The `MediaContainer` envelope of a library listing."""
    model_config = ConfigDict(frozen=True)

    size: StrictInt
    totalSize: Optional[StrictInt] = None
    allowSync: Optional[StrictBool] = None
    art: Optional[StrictStr] = None
    identifier: Optional[StrictStr] = None
    librarySectionID: Optional[StrictInt] = None
    librarySectionTitle: Optional[StrictStr] = None
    librarySectionUUID: Optional[StrictStr] = None
    mediaTagPrefix: Optional[StrictStr] = None
    mediaTagVersion: Optional[StrictInt] = None
    nocache: Optional[StrictBool] = None
    offset: Optional[StrictInt] = None
    thumb: Optional[StrictStr] = None
    title1: Optional[StrictStr] = None
    title2: Optional[StrictStr] = None
    viewGroup: Optional[PlexMediaType] = None
    viewMode: Optional[StrictInt] = None

    # Plex omits `Metadata` for empty listings.
    metadata_: Optional[tuple[MediaItemT, ...]] = Field(default=None, alias="Metadata", repr=False)

    @property
    def metadata(self) -> tuple[MediaItemT, ...]:
        """The listed items; empty when the server sent none."""
        if self.metadata_ is None:
            return ()
        return self.metadata_


class LibraryItemsResponse(BaseModel, Generic[MediaItemT]):
    """Response from a library section listing."""
    model_config = ConfigDict(frozen=True)

    media_container: MediaContainer[MediaItemT] = Field(alias="MediaContainer")


def decode_library_items(
    payload: Union[str, bytes, dict[str, Any]],
    item_type: type[BaseModel] = PlexMediaItem,
) -> LibraryItemsResponse:
    """Decode a library listing payload.

    Args:
        payload: Parsed JSON object, or the raw JSON text
        item_type: Model used to decode each entry of `Metadata`

    Returns:
        The decoded response

    Raises:
        DecodeError: If the payload does not match the listing shape
    """
    model = LibraryItemsResponse[item_type]
    try:
        if isinstance(payload, (str, bytes, bytearray)):
            return model.model_validate_json(payload)
        return model.model_validate(payload)
    except ValidationError as e:
        errors = e.errors(include_url=False)
        first = errors[0]
        loc = ".".join(str(part) for part in first["loc"]) or "payload"
        raise DecodeError(
            f"Invalid library items payload at {loc}: {first['msg']} ({e.error_count()} error(s))",
            errors=errors,
        ) from e
