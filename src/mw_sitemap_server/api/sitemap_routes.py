"""
Sitemap Routes

Serves the sitemap index and the per-namespace sitemap files:

- GET /sitemap.xml                    sitemap index
- GET /sitemap-NS-{ns}.xml            unsplit namespace
- GET /sitemap-NS-{ns}-part-{k}.xml   one part of a split namespace

Documents are generated on every request. Store failures propagate to the
global handlers and become 503 responses, so a crawler never receives a
truncated document.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response

from .dependencies import get_sitemap_generator
from ..core.exceptions import SitemapNotFoundError
from ..sitemap import SitemapGenerator, parse_sitemap_filename
from ..sitemap.filenames import INDEX_FILENAME

router = APIRouter(tags=["sitemap"])

XML_MEDIA_TYPE = "application/xml; charset=utf-8"


@router.get(
    f"/{INDEX_FILENAME}",
    summary="Sitemap index",
    response_class=Response,
)
async def get_sitemap_index(
    generator: Annotated[SitemapGenerator, Depends(get_sitemap_generator)],
) -> Response:
    xml = await generator.generate_index()
    return Response(content=xml, media_type=XML_MEDIA_TYPE)


@router.get(
    "/{filename}",
    summary="Sitemap file for one namespace part",
    response_class=Response,
)
async def get_sitemap_file(
    filename: str,
    generator: Annotated[SitemapGenerator, Depends(get_sitemap_generator)],
) -> Response:
    """
    Render one sitemap file.

    Only namespaces listed in the configuration are served; anything else,
    including malformed names, is a 404.
    """
    namespace_id, part = parse_sitemap_filename(filename)

    if namespace_id not in generator.config.namespaces:
        raise SitemapNotFoundError(f"Namespace {namespace_id} is not included in the sitemap")

    xml = await generator.generate_sitemap_page(namespace_id, part or 1)
    return Response(content=xml, media_type=XML_MEDIA_TYPE)
