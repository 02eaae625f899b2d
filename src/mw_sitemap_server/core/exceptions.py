"""
Sitemap Exceptions

Exception hierarchy shared by the store, the title resolver and the
sitemap generator. Framework-free so it can be raised from any layer.
"""

from __future__ import annotations


class SitemapError(Exception):
    """Base class for all sitemap generation errors."""


class StoreUnavailableError(SitemapError):
    """
    Raised when the page store cannot be queried.

    Always fatal for the document being built: callers get either a
    complete sitemap or this error, never a partial document.
    """


class TitleResolutionError(SitemapError, ValueError):
    """Raised when a page record cannot be turned into a canonical URL."""


class SitemapNotFoundError(SitemapError, LookupError):
    """Raised when a requested sitemap file name does not map to a namespace part."""
