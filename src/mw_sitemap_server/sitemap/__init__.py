"""
Sitemap Package

Chunk planning, title resolution and XML rendering for sitemaps.org 0.9
sitemap indexes and urlsets.
"""

from .generator import SitemapGenerator
from .models import SitemapConfig, SitemapFileRef, PageLink, PageRecord, MAX_URLS_PER_FILE
from .resolver import MediaWikiTitleResolver, TitleResolver
from .filenames import parse_sitemap_filename, sitemap_filename

__all__ = [
    "SitemapGenerator",
    "SitemapConfig",
    "SitemapFileRef",
    "PageLink",
    "PageRecord",
    "MAX_URLS_PER_FILE",
    "MediaWikiTitleResolver",
    "TitleResolver",
    "parse_sitemap_filename",
    "sitemap_filename",
]
