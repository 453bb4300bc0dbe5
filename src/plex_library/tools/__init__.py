"""HTTP clients for the Plex API."""
