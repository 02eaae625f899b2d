"""
Sitemap file naming.

Index entries point at `sitemap-NS-{ns}.xml` for namespaces that fit in one
file and at `sitemap-NS-{ns}-part-{k}.xml` for split namespaces. The same
names are parsed back by the HTTP layer to route requests.
"""

from __future__ import annotations

import re
from typing import Optional, Tuple

from ..core.exceptions import SitemapNotFoundError

INDEX_FILENAME = "sitemap.xml"

_FILENAME_RE = re.compile(r"^sitemap-NS-(?P<ns>-?\d+)(?:-part-(?P<part>\d+))?\.xml$")


def sitemap_filename(namespace_id: int, part: Optional[int] = None) -> str:
    if part is None:
        return f"sitemap-NS-{namespace_id}.xml"
    return f"sitemap-NS-{namespace_id}-part-{part}.xml"


def sitemap_location(sitemap_base: str, namespace_id: int, part: Optional[int] = None) -> str:
    """
    Absolute URL of a sitemap file.

    `sitemap_base` is the server URL without trailing slash followed by the
    script path, see `SitemapConfig.sitemap_base`.
    """
    return f"{sitemap_base}/{sitemap_filename(namespace_id, part)}"


def parse_sitemap_filename(filename: str) -> Tuple[int, Optional[int]]:
    """
    Parse a sitemap file name (or URL ending in one) into (namespace, part).

    Part is None for unsplit files.

    Raises
    ------
    SitemapNotFoundError
        If the name does not follow the sitemap naming scheme or the part
        number is 0.
    """
    name = filename.rsplit("/", 1)[-1]
    match = _FILENAME_RE.match(name)
    if not match:
        raise SitemapNotFoundError(f"Not a sitemap file name: {name!r}")

    part = match.group("part")
    if part is None:
        return int(match.group("ns")), None

    part_number = int(part)
    if part_number < 1:
        raise SitemapNotFoundError(f"Invalid part number in {name!r}")
    return int(match.group("ns")), part_number
