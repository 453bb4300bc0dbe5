"""Plex Library MCP Server - Library browsing via MCP protocol."""

import argparse
import logging
import os
from typing import Optional

from dotenv import load_dotenv
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import TypeAdapter, ValidationError

from .exceptions import PlexError
from .models.library_items import Filter, LibraryItemsRequest
from .models.paging import PageRange
from .models.plex import PlexMediaItemSummary, PlexMediaType
from .tools.plex_client import PlexClient

load_dotenv()

# Configure logging
logging.basicConfig(
    level=getattr(logging, os.getenv("LOG_LEVEL", "INFO")),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize MCP server
mcp = FastMCP("plex-library-mcp")

# Global client instance
_client: Optional[PlexClient] = None

_filters_adapter = TypeAdapter(list[Filter])


def get_client() -> PlexClient:
    """Get or create the Plex client."""
    global _client
    if _client is None:
        try:
            _client = PlexClient()
        except PlexError as e:
            raise ToolError(f"Configuration error: {str(e)}")
    return _client


def build_library_request(
    section_key: str,
    media_type: str,
    start: Optional[int] = None,
    size: Optional[int] = None,
    filters: Optional[list[dict]] = None,
    exclude_fields: Optional[list[str]] = None,
) -> LibraryItemsRequest:
    """Build a listing request from tool arguments.

    Raises:
        ValueError: On an unknown media type or a bad page
        ValidationError: On malformed filters
    """
    page = None
    if size is not None:
        page = PageRange.from_offset(start or 0, size)

    mt = PlexMediaType(media_type.lower())
    if mt == PlexMediaType.UNKNOWN:
        raise ValueError(f"Unknown media type: {media_type}")

    return LibraryItemsRequest(
        key=section_key,
        media_type=mt,
        range=page,
        exclude_fields=tuple(exclude_fields or ()),
        filters=tuple(_filters_adapter.validate_python(filters or [])),
    )


@mcp.tool()
async def list_library_items(
    section_key: str,
    media_type: str,
    start: Optional[int] = None,
    size: Optional[int] = None,
    filters: Optional[list[dict]] = None,
    exclude_fields: Optional[list[str]] = None,
) -> dict:
    """List the contents of a Plex library section.

    Get the section_key from the get_library_sections tool.

    Args:
        section_key: Library section key
        media_type: Plex type to list - "movie", "show", "season", "episode", "artist", "album", "track"
        start: Offset of the first item (default 0, only used with size)
        size: Page size; omit to list everything
        filters: Filter objects, each with a "kind":
            - {"kind": "keys", "keys": ["123", "456"]}
            - {"kind": "property", "name": "year", "comparison": ">", "value": "2000"}
            - {"kind": "date_property", "name": "addedAt", "comparison": "<", "value": "2021-01-01T00:00:00Z"}
            - {"kind": "collection", "id": "789"}
            comparison is ">", "<" or "" (equal)
        exclude_fields: Extra fields Plex should leave out of the response

    Returns:
        Listing metadata and the items in the page
    """
    try:
        client = get_client()
        request = build_library_request(
            section_key,
            media_type,
            start=start,
            size=size,
            filters=filters,
            exclude_fields=exclude_fields,
        )

        response = await client.get_library_items(request)
        container = response.media_container

        return {
            "section": container.librarySectionTitle,
            "size": container.size,
            "total_size": container.totalSize,
            "offset": container.offset,
            "view_group": container.viewGroup.value if container.viewGroup else None,
            "items": [
                PlexMediaItemSummary.from_item(item).model_dump()
                for item in container.metadata
            ],
        }
    except PlexError as e:
        raise ToolError(f"Listing failed: {str(e)}")
    except (ValueError, ValidationError) as e:
        raise ToolError(f"Invalid input: {str(e)}")
    except Exception as e:
        raise ToolError(f"Unexpected error: {str(e)}")


@mcp.tool()
async def get_library_sections(all_types: bool = False) -> dict:
    """Get the Plex library sections.

    Use the returned keys with list_library_items.

    Args:
        all_types: Include music and photo sections (default: movies and TV only)

    Returns:
        List of sections with keys, titles and types
    """
    try:
        client = get_client()
        sections = await client.get_library_sections(all_types=all_types)

        return {
            "count": len(sections),
            "sections": [s.model_dump() for s in sections],
        }
    except PlexError as e:
        raise ToolError(f"Failed to get sections: {str(e)}")
    except Exception as e:
        raise ToolError(f"Unexpected error: {str(e)}")


@mcp.tool()
async def search_library(
    query: str,
    media_type: Optional[str] = None,
) -> dict:
    """Search the Plex library by title.

    Args:
        query: Title substring to search for
        media_type: Optional filter - "movie" or "tv"

    Returns:
        Matching items with titles, years, ratings and content ratings
    """
    try:
        client = get_client()
        results = await client.search_library(query, media_type=media_type)

        return {
            "query": query,
            "count": len(results),
            "results": [
                {
                    "title": r.title,
                    "year": r.year,
                    "type": r.media_type,
                    "rating": round(r.rating, 1) if r.rating else None,
                    "content_rating": r.content_rating,
                    "summary": (r.summary[:200] + "...") if r.summary and len(r.summary) > 200 else r.summary,
                }
                for r in results
            ],
        }
    except PlexError as e:
        raise ToolError(f"Search failed: {str(e)}")
    except Exception as e:
        raise ToolError(f"Unexpected error: {str(e)}")


@mcp.tool()
async def health_check() -> dict:
    """Check Plex server status and connectivity.

    Returns:
        Server status and version information
    """
    try:
        client = get_client()
        status = await client.get_status()

        return {
            "status": "healthy",
            "plex": status,
        }
    except PlexError as e:
        return {
            "status": "unhealthy",
            "error": str(e),
        }
    except Exception as e:
        return {
            "status": "error",
            "error": str(e),
        }


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Plex Library MCP Server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "sse", "streamable-http"],
        default="stdio",
        help="Transport mode (default: stdio)",
    )
    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host for HTTP transport (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.getenv("PORT", "8080")),
        help="Port for HTTP transport (default: 8080)",
    )

    args = parser.parse_args()

    logger.info(f"Starting Plex Library MCP server with {args.transport} transport")

    if args.transport == "stdio":
        mcp.run()
    elif args.transport == "sse":
        mcp.run(transport="sse", host=args.host, port=args.port, stateless_http=True)
    elif args.transport == "streamable-http":
        mcp.run(transport="streamable-http", host=args.host, port=args.port, stateless_http=True)


if __name__ == "__main__":
    main()
