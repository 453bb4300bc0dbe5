"""Shared fixtures for library listing tests."""

from __future__ import annotations

import pytest


@pytest.fixture
def movie_listing() -> dict:
    """A two-item movie section listing, as Plex returns it."""
    return {
        "MediaContainer": {
            "size": 2,
            "totalSize": 120,
            "allowSync": True,
            "art": "/:/resources/movie-fanart.jpg",
            "identifier": "com.plexapp.plugins.library",
            "librarySectionID": 1,
            "librarySectionTitle": "Movies",
            "librarySectionUUID": "0a1b2c3d",
            "mediaTagPrefix": "/system/bundle/media/flags/",
            "mediaTagVersion": 1700000000,
            "offset": 0,
            "thumb": "/:/resources/movie.png",
            "title1": "Movies",
            "title2": "All Movies",
            "viewGroup": "movie",
            "viewMode": 65592,
            "Metadata": [
                {
                    "ratingKey": "101",
                    "key": "/library/metadata/101",
                    "type": "movie",
                    "title": "Heat",
                    "year": 1995,
                    "rating": 8.3,
                    "contentRating": "R",
                    "summary": "A group of professional bank robbers...",
                    "addedAt": 1609459200,
                    "thumbBlurHash": "LEHV6nWB2yk8pyo0adR*.7kCMdnj",
                },
                {
                    "ratingKey": "102",
                    "key": "/library/metadata/102",
                    "type": "movie",
                    "title": "Ronin",
                    "year": 1998,
                    "Genre": [{"tag": "Action"}],
                },
            ],
        }
    }
