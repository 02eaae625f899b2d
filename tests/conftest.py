"""
Shared fixtures: an in-memory page store standing in for the `page` table.
"""

from datetime import datetime, timedelta, timezone
from typing import List, NamedTuple, Optional

import pytest

from mw_sitemap_server.core.exceptions import StoreUnavailableError
from mw_sitemap_server.sitemap import (
    MediaWikiTitleResolver,
    PageRecord,
    SitemapConfig,
    SitemapGenerator,
)

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


class FakePage(NamedTuple):
    page_id: int
    namespace: int
    title: str
    touched: Optional[datetime]
    is_redirect: bool = False


class InMemoryPageStore:
    """
    Implements the PageStore query interface over a list of pages.

    Records every query so tests can assert which slices were aggregated.
    """

    def __init__(self, pages: Optional[List[FakePage]] = None) -> None:
        self.pages: List[FakePage] = list(pages or [])
        self.calls: List[tuple] = []
        self.fail = False

    def add_namespace(self, namespace: int, count: int, start_id: int = 1, redirects: int = 0):
        """Append `count` content pages (and optional redirects) to a namespace."""
        for i in range(count):
            page_id = start_id + i
            self.pages.append(
                FakePage(
                    page_id=page_id,
                    namespace=namespace,
                    title=f"Page_{page_id}",
                    touched=BASE_TIME + timedelta(minutes=page_id),
                )
            )
        for i in range(redirects):
            page_id = start_id + count + i
            self.pages.append(
                FakePage(
                    page_id=page_id,
                    namespace=namespace,
                    title=f"Redirect_{page_id}",
                    touched=BASE_TIME + timedelta(days=3650),
                    is_redirect=True,
                )
            )

    def _content(self, namespace: int) -> List[FakePage]:
        if self.fail:
            raise StoreUnavailableError("database is down")
        return sorted(
            (p for p in self.pages if p.namespace == namespace and not p.is_redirect),
            key=lambda p: p.page_id,
        )

    @staticmethod
    def _max(pages: List[FakePage]) -> Optional[datetime]:
        stamps = [p.touched for p in pages if p.touched is not None]
        return max(stamps) if stamps else None

    async def count_pages(self, namespace: int) -> int:
        self.calls.append(("count_pages", namespace))
        return len(self._content(namespace))

    async def max_touched(self, namespace: int) -> Optional[datetime]:
        self.calls.append(("max_touched", namespace))
        return self._max(self._content(namespace))

    async def max_touched_in_slice(self, namespace: int, offset: int, limit: int):
        self.calls.append(("max_touched_in_slice", namespace, offset, limit))
        return self._max(self._content(namespace)[offset:offset + limit])

    async def select_slice(self, namespace: int, offset: int, limit: int) -> List[PageRecord]:
        self.calls.append(("select_slice", namespace, offset, limit))
        return [
            PageRecord(page_id=p.page_id, namespace=p.namespace, title=p.title, touched=p.touched)
            for p in self._content(namespace)[offset:offset + limit]
        ]


@pytest.fixture
def page_store():
    return InMemoryPageStore()


@pytest.fixture
def resolver():
    return MediaWikiTitleResolver(server="https://wiki.example.org", article_path="/wiki/$1")


@pytest.fixture
def sitemap_config():
    return SitemapConfig(
        base_url="https://wiki.example.org/",
        script_path="/w",
        namespaces=(0, 1, 5),
    )


@pytest.fixture
def generator(sitemap_config, page_store, resolver):
    return SitemapGenerator(config=sitemap_config, store=page_store, resolver=resolver)
