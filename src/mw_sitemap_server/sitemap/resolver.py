"""
Title Resolution

Turns a `PageRecord` into the canonical absolute URL a crawler should
index. Resolution is behind the `TitleResolver` interface so the generator
never needs to know how titles map to URLs on a particular wiki.

`MediaWikiTitleResolver` reproduces what MediaWiki does for a plain
`Title::getFullURL()`:

- the namespace prefix is prepended (`Category:Foo`)
- the prefixed DB key is URL-encoded like `wfUrlencode`
- the result is substituted for `$1` in `$wgArticlePath`
"""

from __future__ import annotations

import re
from typing import Dict, Mapping, Optional, Protocol
from urllib.parse import quote

from ..core.exceptions import TitleResolutionError
from .models import PageRecord


# ---------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------

CANONICAL_NAMESPACES: Dict[int, str] = {
    -2: "Media",
    -1: "Special",
    0: "",
    1: "Talk",
    2: "User",
    3: "User_talk",
    4: "Project",
    5: "Project_talk",
    6: "File",
    7: "File_talk",
    8: "MediaWiki",
    9: "MediaWiki_talk",
    10: "Template",
    11: "Template_talk",
    12: "Help",
    13: "Help_talk",
    14: "Category",
    15: "Category_talk",
}

# Characters wfUrlencode() leaves unescaped
_URL_SAFE = ";@$!*(),/~:"

# Anything outside $wgLegalTitleChars, plus percent-escapes
_ILLEGAL_TITLE = re.compile(r"[#<>\[\]|{}\x00-\x1f\x7f]|%[0-9A-Fa-f]{2}")

_MAX_TITLE_BYTES = 255


class TitleResolver(Protocol):
    """Capability to map a page record to its canonical absolute URL."""

    def resolve(self, record: PageRecord) -> str:
        """Return the URL, or raise TitleResolutionError."""
        ...


class MediaWikiTitleResolver:
    """
    Resolve titles using the wiki's server, article path and namespace names.
    """

    def __init__(
        self,
        server: str,
        article_path: str = "/wiki/$1",
        namespace_names: Optional[Mapping[int, str]] = None,
    ) -> None:
        if "$1" not in article_path:
            raise ValueError(f"article_path must contain $1: {article_path!r}")

        self._server = server.rstrip("/")
        self._article_path = article_path
        self._namespaces: Dict[int, str] = dict(CANONICAL_NAMESPACES)
        if namespace_names:
            self._namespaces.update(
                {ns: name.replace(" ", "_") for ns, name in namespace_names.items()}
            )

    def knows_namespace(self, namespace: int) -> bool:
        return namespace in self._namespaces

    def prefixed_db_key(self, record: PageRecord) -> str:
        """
        Validate the title and return it with its namespace prefix.
        """
        db_key = record.title.strip().replace(" ", "_")

        if not db_key:
            raise TitleResolutionError("Empty title")

        if len(db_key.encode("utf-8")) > _MAX_TITLE_BYTES:
            raise TitleResolutionError(f"Title too long: {db_key[:32]!r}...")

        if _ILLEGAL_TITLE.search(db_key):
            raise TitleResolutionError(f"Illegal characters in title {db_key!r}")

        try:
            prefix = self._namespaces[record.namespace]
        except KeyError:
            raise TitleResolutionError(f"Unknown namespace {record.namespace}") from None

        return f"{prefix}:{db_key}" if prefix else db_key

    def resolve(self, record: PageRecord) -> str:
        encoded = quote(self.prefixed_db_key(record), safe=_URL_SAFE)
        return self._server + self._article_path.replace("$1", encoded)
