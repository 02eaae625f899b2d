"""
Database Package

Provides SQLAlchemy async session management, the read-only mapping of
the MediaWiki `page` table and the page store used by sitemap generation.
"""

from .session import get_async_session, async_engine, AsyncSessionLocal
from .models import Base, Page
from .page_store import PageStore

__all__ = [
    "get_async_session",
    "async_engine",
    "AsyncSessionLocal",
    "Base",
    "Page",
    "PageStore",
]
