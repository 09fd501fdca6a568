from __future__ import annotations


class DownloaderError(Exception):
    """Base class for failures that stop a download run."""


class ConfigurationError(DownloaderError):
    """Required configuration is missing or invalid."""


class ListingPageError(DownloaderError):
    """A forum listing page could not be fetched after all retries."""

    def __init__(self, url: str):
        super().__init__(f"Could not get thread list for uri: {url}")
        self.url = url
