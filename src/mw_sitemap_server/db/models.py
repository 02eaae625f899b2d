"""
SQLAlchemy Models

Read-only mapping of the MediaWiki `page` table. Only the columns needed
to plan and render sitemaps are mapped; the schema itself is owned and
migrated by MediaWiki.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import (
    Integer,
    SmallInteger,
    String,
    DateTime,
    Index,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


# ---------------------------------------------------------------------
# Page Model
# ---------------------------------------------------------------------

class Page(Base):
    """
    A wiki page row.

    `page_id` is assigned monotonically by MediaWiki and is used as the
    stable ordering key for sitemap pagination.
    """
    __tablename__ = "page"

    page_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    page_namespace: Mapped[int] = mapped_column(Integer, nullable=False)
    page_title: Mapped[str] = mapped_column(String(255), nullable=False)
    page_is_redirect: Mapped[int] = mapped_column(SmallInteger, nullable=False, default=0)
    page_touched: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    __table_args__ = (
        Index("page_redirect_namespace_len", "page_is_redirect", "page_namespace"),
        Index("page_name_title", "page_namespace", "page_title", unique=True),
    )
