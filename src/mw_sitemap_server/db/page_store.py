"""
Page Store

Read-only queries against the MediaWiki `page` table used to plan and
render sitemaps. Every query excludes redirects; slices are ordered by
`page_id` so pagination is deterministic and gap-free.

Any database failure is re-raised as `StoreUnavailableError`. Retries
are left to the engine (`pool_pre_ping`) and the caller.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional, Protocol

from sqlalchemy import Select, select, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Page
from ..core.exceptions import StoreUnavailableError
from ..sitemap.models import PageRecord

logger = logging.getLogger("sitemap.store")


class PageSource(Protocol):
    """Store interface the sitemap generator depends on."""

    async def count_pages(self, namespace: int) -> int: ...

    async def max_touched(self, namespace: int) -> Optional[datetime]: ...

    async def max_touched_in_slice(
        self, namespace: int, offset: int, limit: int
    ) -> Optional[datetime]: ...

    async def select_slice(
        self, namespace: int, offset: int, limit: int
    ) -> List[PageRecord]: ...


def _content_pages(namespace: int):
    return (
        Page.page_namespace == namespace,
        Page.page_is_redirect == 0,
    )


def slice_query(namespace: int, offset: int, limit: int, *columns) -> Select:
    """
    Select `columns` for the `page_id`-ordered slice [offset, offset+limit).
    """
    return (
        select(*columns)
        .where(*_content_pages(namespace))
        .order_by(Page.page_id)
        .limit(limit)
        .offset(offset)
    )


class PageStore:
    """
    SQLAlchemy-backed page store.
    """

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize with an async database session.

        Parameters
        ----------
        session : AsyncSession
            SQLAlchemy async session, ideally bound to a replica.
        """
        self._session = session

    async def _scalar(self, stmt):
        try:
            result = await self._session.execute(stmt)
        except (SQLAlchemyError, OSError) as exc:
            raise StoreUnavailableError(f"Page query failed: {exc}") from exc
        return result.scalar()

    async def count_pages(self, namespace: int) -> int:
        """
        Number of non-redirect pages in a namespace.
        """
        stmt = select(func.count()).select_from(Page).where(*_content_pages(namespace))
        return await self._scalar(stmt) or 0

    async def max_touched(self, namespace: int) -> Optional[datetime]:
        """
        Latest `page_touched` over all non-redirect pages in a namespace.
        """
        stmt = select(func.max(Page.page_touched)).where(*_content_pages(namespace))
        return await self._scalar(stmt)

    async def max_touched_in_slice(
        self,
        namespace: int,
        offset: int,
        limit: int,
    ) -> Optional[datetime]:
        """
        Latest `page_touched` within one ordered slice.

        The slice is built as a subquery with ORDER BY/LIMIT/OFFSET and the
        aggregate is taken over it, so only pages of that sitemap part count.
        """
        chunk = slice_query(namespace, offset, limit, Page.page_touched).subquery("t")
        stmt = select(func.max(chunk.c.page_touched))
        return await self._scalar(stmt)

    async def select_slice(
        self,
        namespace: int,
        offset: int,
        limit: int,
    ) -> List[PageRecord]:
        """
        Fetch the ordered slice [offset, offset+limit) of non-redirect pages.
        """
        stmt = slice_query(
            namespace,
            offset,
            limit,
            Page.page_id,
            Page.page_namespace,
            Page.page_title,
            Page.page_touched,
        )

        try:
            result = await self._session.execute(stmt)
            rows = result.all()
        except (SQLAlchemyError, OSError) as exc:
            raise StoreUnavailableError(f"Page query failed: {exc}") from exc

        logger.debug(
            "Fetched %d pages from namespace %d at offset %d", len(rows), namespace, offset
        )

        return [
            PageRecord(
                page_id=row.page_id,
                namespace=row.page_namespace,
                title=row.page_title,
                touched=row.page_touched,
            )
            for row in rows
        ]
