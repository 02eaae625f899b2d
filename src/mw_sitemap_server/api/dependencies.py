from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import settings
from ..db import get_async_session, PageStore
from ..sitemap import SitemapConfig, SitemapGenerator, MediaWikiTitleResolver


@lru_cache
def get_sitemap_config() -> SitemapConfig:
    return SitemapConfig.from_settings(settings)


@lru_cache
def get_title_resolver() -> MediaWikiTitleResolver:
    return MediaWikiTitleResolver(
        server=str(settings.mw_server),
        article_path=settings.mw_article_path,
        namespace_names=settings.mw_namespace_names,
    )


def get_page_store(
    session: Annotated[AsyncSession, Depends(get_async_session)],
) -> PageStore:
    return PageStore(session)


# One generator per request; config and resolver are immutable and shared.
def get_sitemap_generator(
    config: Annotated[SitemapConfig, Depends(get_sitemap_config)],
    store: Annotated[PageStore, Depends(get_page_store)],
    resolver: Annotated[MediaWikiTitleResolver, Depends(get_title_resolver)],
) -> SitemapGenerator:
    return SitemapGenerator(config=config, store=store, resolver=resolver)
