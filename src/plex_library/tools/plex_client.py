"""Plex Media Server API client for MCP server."""

import logging
import os
from typing import Optional, Union
import aiohttp
from pydantic import BaseModel

from ..exceptions import PlexError
from ..models.library_items import (
    Comparison,
    LibraryItemsRequest,
    LibraryItemsResponse,
    PropertyFilter,
    decode_library_items,
)
from ..models.paging import PageRange
from ..models.plex import (
    PlexLibrarySection,
    PlexMediaItem,
    PlexMediaItemSummary,
    PlexMediaType,
)

logger = logging.getLogger(__name__)


class PlexClient:
    """Async client for Plex Media Server API."""

    def __init__(self, base_url: Optional[str] = None, token: Optional[str] = None):
        self.base_url = (base_url or os.getenv("PLEX_URL", "")).rstrip("/")
        self.token = token or os.getenv("PLEX_TOKEN", "")
        self._session: Optional[aiohttp.ClientSession] = None

        if not self.base_url:
            raise PlexError("PLEX_URL not configured")
        if not self.token:
            raise PlexError("PLEX_TOKEN not configured")

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers={
                    "X-Plex-Token": self.token,
                    "Accept": "application/json",
                }
            )
        return self._session

    async def close(self):
        """Close the session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def _request(
        self,
        endpoint: str,
        params: Optional[list[tuple[str, str]]] = None,
        raw: bool = False,
    ) -> Union[dict, bytes]:
        """Make a GET request to the Plex API.

        With `raw`, the undecoded body is returned.
        """
        session = await self._get_session()
        url = f"{self.base_url}{endpoint}"
        logger.debug("GET %s params=%s", endpoint, params)

        try:
            async with session.get(url, params=params) as response:
                if response.status == 401:
                    raise PlexError("Invalid Plex token")
                if response.status >= 400:
                    text = await response.text()
                    logger.warning("Plex returned %s for %s", response.status, endpoint)
                    raise PlexError(f"Plex API error {response.status}: {text}")
                if raw:
                    return await response.read()
                try:
                    return await response.json()
                except (aiohttp.ContentTypeError, ValueError) as e:
                    raise PlexError(f"Invalid JSON response from {endpoint}: {str(e)}") from e
        except aiohttp.ClientError as e:
            raise PlexError(f"Connection error: {str(e)}")

    async def get_status(self) -> dict:
        """Get Plex server identity/status."""
        data = await self._request("/identity")
        mc = data.get("MediaContainer", {})
        return {
            "version": mc.get("version"),
            "machine_id": mc.get("machineIdentifier"),
        }

    async def get_library_sections(self, all_types: bool = False) -> list[PlexLibrarySection]:
        """Get library sections.

        Args:
            all_types: Include music and photo sections, not just movies and shows
        """
        data = await self._request("/library/sections")
        directories = data.get("MediaContainer", {}).get("Directory", [])

        sections = []
        for d in directories:
            section_type = d.get("type", "")
            if all_types or section_type in ("movie", "show"):
                sections.append(PlexLibrarySection(
                    key=str(d["key"]),
                    title=d["title"],
                    type=section_type,
                ))

        return sections

    async def get_library_items(
        self,
        request: LibraryItemsRequest,
        item_type: type[BaseModel] = PlexMediaItem,
    ) -> LibraryItemsResponse:
        """List a library section's contents.

        Args:
            request: Section, type, paging and filters to list
            item_type: Model used to decode each listed item

        Returns:
            Decoded response; `media_container.metadata` is never None

        Raises:
            PlexError: On HTTP or connection failure
            DecodeError: If the payload does not match the listing shape
        """
        data = await self._request(f"/{request.path}", params=request.query_items(), raw=True)
        return decode_library_items(data, item_type=item_type)

    async def search_library(
        self,
        query: str,
        media_type: Optional[str] = None,
        limit: int = 50,
    ) -> list[PlexMediaItemSummary]:
        """Search Plex library by title substring.

        Args:
            query: Title substring to search for
            media_type: Optional filter - "movie" or "tv"
            limit: Maximum number of items to return

        Returns:
            List of matching media items, capped at `limit`
        """
        if limit < 1:
            return []

        sections = await self.get_library_sections()

        # Filter sections by media type if specified
        if media_type:
            # Map "tv" to Plex's "show" type
            plex_type = "show" if media_type == "tv" else media_type
            sections = [s for s in sections if s.type == plex_type]

        results = []
        for section in sections:
            request = LibraryItemsRequest(
                key=section.key,
                media_type=PlexMediaType(section.type),
                range=PageRange.from_offset(0, limit - len(results)),
                filters=(PropertyFilter(name="title", comparison=Comparison.EQUAL, value=query),),
            )
            response = await self.get_library_items(request)

            for item in response.media_container.metadata:
                results.append(PlexMediaItemSummary.from_item(item))

                if len(results) >= limit:
                    return results

        return results
