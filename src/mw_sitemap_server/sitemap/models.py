"""
Sitemap Data Models

Value objects flowing through sitemap generation:

- `SitemapConfig`  immutable generation settings injected into the generator
- `PageRecord`     projection of one `page` row returned by the store
- `SitemapFileRef` one `<sitemap>` entry of the sitemap index
- `PageLink`       one `<url>` entry of a sitemap page

All of them are frozen; none outlives the request that produced it.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Tuple, Union

from pydantic import BaseModel, Field, ConfigDict

from ..config import Settings


# Hard limit of the sitemaps.org protocol for a single file.
MAX_URLS_PER_FILE = 50000

PAGE_PRIORITY = "1.0"


class SitemapConfig(BaseModel):
    """
    Process-wide sitemap configuration.

    Built once from `Settings` and handed to `SitemapGenerator`; nothing in
    the sitemap package reads ambient settings directly.
    """

    base_url: str = Field(
        ...,
        min_length=1,
        description="Wiki server URL ($wgServer). A trailing slash is stripped.",
    )

    script_path: str = Field(
        default="",
        description="Wiki script path ($wgScriptPath) prefixed to every sitemap file name.",
    )

    namespaces: Tuple[int, ...] = Field(
        default=(0,),
        description="Namespace ids to include, in output order.",
    )

    max_per_file: int = Field(
        default=MAX_URLS_PER_FILE,
        ge=1,
        le=MAX_URLS_PER_FILE,
        description="Maximum number of URLs per sitemap file.",
    )

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
    )

    @property
    def sitemap_base(self) -> str:
        return self.base_url.rstrip("/") + self.script_path

    @classmethod
    def from_settings(cls, settings: Settings) -> "SitemapConfig":
        return cls(
            base_url=str(settings.mw_server),
            script_path=settings.mw_script_path,
            namespaces=tuple(settings.sitemap_namespace_ids),
        )


class PageRecord(BaseModel):
    """
    A non-redirect page as returned by the page store.
    """

    page_id: int = Field(..., description="Stable ordering key.")
    namespace: int
    title: str = Field(..., description="Title in DB key form (underscores).")
    touched: Optional[Union[datetime, str]] = Field(
        default=None,
        description="Last-modified timestamp, datetime or 14-digit MediaWiki string.",
    )

    model_config = ConfigDict(frozen=True)


class SitemapFileRef(BaseModel):
    """
    Reference to one sitemap file, listed in the sitemap index.
    """

    namespace_id: int
    part: Optional[int] = Field(
        default=None,
        ge=1,
        description="1-based part number; None when the namespace is not split.",
    )
    loc: str
    lastmod: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class PageLink(BaseModel):
    """
    One page URL inside a sitemap file.
    """

    loc: str
    lastmod: Optional[str] = None
    priority: str = PAGE_PRIORITY

    model_config = ConfigDict(frozen=True)
