"""
Sitemap Generator

Builds the sitemap index and the individual sitemap pages for the
configured namespaces.

Chunking
--------
A namespace with at most `max_per_file` non-redirect pages is published as
one file, `sitemap-NS-{ns}.xml`. Larger namespaces are split into
`ceil(count / max_per_file)` parts, `sitemap-NS-{ns}-part-{k}.xml`, where
part `k` holds the `page_id`-ordered pages
`[(k-1)*max_per_file, k*max_per_file)`.

The `<lastmod>` of a part is the newest `page_touched` of exactly the pages
in that part, computed by aggregating over the same ordered slice the part
is rendered from.

Nothing is cached: every call queries the store afresh.
"""

from __future__ import annotations

import logging
import math
import time
from typing import TYPE_CHECKING, List

from ..core.exceptions import TitleResolutionError
from .filenames import sitemap_location
from .models import PageLink, SitemapConfig, SitemapFileRef
from .resolver import TitleResolver
from .timestamps import to_iso8601, utc_now_iso8601
from .xml_writer import render_index, render_urlset

if TYPE_CHECKING:
    from ..db.page_store import PageSource

logger = logging.getLogger("sitemap.generator")


class SitemapGenerator:
    """
    Stateless sitemap builder bound to one store session.
    """

    def __init__(
        self,
        config: SitemapConfig,
        store: "PageSource",
        resolver: TitleResolver,
    ) -> None:
        self._config = config
        self._store = store
        self._resolver = resolver

    @property
    def config(self) -> SitemapConfig:
        return self._config

    # -----------------------------------------------------------------
    # Index
    # -----------------------------------------------------------------

    def part_count(self, page_count: int) -> int:
        """
        Number of sitemap files needed for `page_count` pages.

        0 for an empty namespace, 1 up to and including `max_per_file`.
        """
        if page_count <= 0:
            return 0
        return math.ceil(page_count / self._config.max_per_file)

    async def namespace_refs(self, namespace_id: int) -> List[SitemapFileRef]:
        """
        Sitemap file references for one namespace.
        """
        page_count = await self._store.count_pages(namespace_id)

        if page_count == 0:
            logger.debug("Namespace %d has no pages, skipping", namespace_id)
            return []

        base = self._config.sitemap_base

        if page_count <= self._config.max_per_file:
            touched = await self._store.max_touched(namespace_id)
            return [
                SitemapFileRef(
                    namespace_id=namespace_id,
                    loc=sitemap_location(base, namespace_id),
                    lastmod=to_iso8601(touched),
                )
            ]

        refs = []
        for part in range(1, self.part_count(page_count) + 1):
            offset = (part - 1) * self._config.max_per_file
            touched = await self._store.max_touched_in_slice(
                namespace_id, offset, self._config.max_per_file
            )
            refs.append(
                SitemapFileRef(
                    namespace_id=namespace_id,
                    part=part,
                    loc=sitemap_location(base, namespace_id, part),
                    lastmod=to_iso8601(touched),
                )
            )

        logger.debug("Namespace %d: %d pages in %d parts", namespace_id, page_count, len(refs))
        return refs

    async def build_index_refs(self) -> List[SitemapFileRef]:
        """
        File references for all configured namespaces, in configuration order.
        """
        refs: List[SitemapFileRef] = []
        for namespace_id in self._config.namespaces:
            refs.extend(await self.namespace_refs(namespace_id))
        return refs

    async def generate_index(self) -> str:
        """
        Generate the sitemap index XML.

        Raises
        ------
        StoreUnavailableError
            If any store query fails. No partial index is produced.
        """
        start = time.perf_counter()

        refs = await self.build_index_refs()

        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "Built sitemap index: %d files across %d namespaces in %.2f ms",
            len(refs),
            len(self._config.namespaces),
            elapsed_ms,
        )

        return render_index(refs, elapsed_ms, utc_now_iso8601())

    # -----------------------------------------------------------------
    # Pages
    # -----------------------------------------------------------------

    async def page_links(self, namespace_id: int, part_number: int = 1) -> List[PageLink]:
        """
        Links for one sitemap part. Titles that cannot be resolved are dropped.
        """
        if part_number < 1:
            raise ValueError(f"part_number must be >= 1, got {part_number}")

        offset = (part_number - 1) * self._config.max_per_file
        records = await self._store.select_slice(namespace_id, offset, self._config.max_per_file)

        links: List[PageLink] = []
        for record in records:
            try:
                loc = self._resolver.resolve(record)
            except TitleResolutionError as exc:
                logger.debug("Dropping page %d from sitemap: %s", record.page_id, exc)
                continue

            links.append(PageLink(loc=loc, lastmod=to_iso8601(record.touched)))

        return links

    async def generate_sitemap_page(self, namespace_id: int, part_number: int = 1) -> str:
        """
        Generate the urlset XML for one namespace part.

        A part beyond the last one yields an empty, valid urlset.

        Raises
        ------
        ValueError
            If `part_number` is less than 1.
        StoreUnavailableError
            If the store query fails.
        """
        links = await self.page_links(namespace_id, part_number)
        return render_urlset(links)

