"""
Sitemap XML Rendering

Serialises sitemap index and urlset documents. Output is assembled as
text rather than through an XML tree so the layout is byte-for-byte
stable for crawlers that parse strictly.
"""

from __future__ import annotations

import html
from typing import Iterable, List

from .models import PageLink, SitemapFileRef

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'
SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"


def escape_loc(url: str) -> str:
    """Entity-escape a URL for use as element text, as htmlspecialchars() does."""
    return html.escape(url, quote=True).replace("&#x27;", "&#039;")


def _comment(text: str) -> str:
    # "--" is not allowed inside an XML comment
    return "<!-- " + text.replace("--", "- -") + " -->"


def render_index(refs: Iterable[SitemapFileRef], generation_ms: float, generated_at: str) -> str:
    """
    Render a `sitemapindex` document.

    The generation time and date are appended as comments after the root
    element closes; they are diagnostic only.
    """
    lines: List[str] = [
        XML_DECLARATION,
        f'<sitemapindex xmlns="{SITEMAP_NS}">',
    ]

    for ref in refs:
        lines.append("  <sitemap>")
        lines.append(f"    <loc>{escape_loc(ref.loc)}</loc>")
        if ref.lastmod:
            lines.append(f"    <lastmod>{ref.lastmod}</lastmod>")
        lines.append("  </sitemap>")

    lines.append("</sitemapindex>")

    xml = "\n".join(lines)
    xml += _comment(f"Generation Time: {round(generation_ms, 2)} ms")
    xml += _comment(f"Generation Date: {generated_at}")
    return xml


def render_urlset(links: Iterable[PageLink]) -> str:
    """
    Render a `urlset` document. An empty iterable yields a valid empty set.
    """
    lines: List[str] = [
        XML_DECLARATION,
        f'<urlset xmlns="{SITEMAP_NS}">',
    ]

    for link in links:
        lines.append("  <url>")
        lines.append(f"    <loc>{escape_loc(link.loc)}</loc>")
        if link.lastmod:
            lines.append(f"    <lastmod>{link.lastmod}</lastmod>")
        lines.append(f"    <priority>{link.priority}</priority>")
        lines.append("  </url>")

    lines.append("</urlset>")
    return "\n".join(lines)
