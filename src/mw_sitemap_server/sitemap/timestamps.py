"""
Timestamp conversion for `<lastmod>` values.

MediaWiki stores `page_touched` either as a native timestamp column or as a
14-digit `TS_MW` string (YYYYMMDDHHMMSS, always UTC) depending on the
database backend. Both are rendered as ISO 8601 in UTC with a `Z` suffix.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Optional, Union

_TS_MW = re.compile(r"^\d{14}$")


def to_iso8601(value: Optional[Union[datetime, str, bytes]]) -> Optional[str]:
    """
    Convert a stored page timestamp to ISO 8601.

    Returns None for None so that an aggregate over an empty slice simply
    produces no `<lastmod>`.

    Raises
    ------
    ValueError
        If the value is neither a datetime nor a TS_MW string.
    """
    if value is None:
        return None

    if isinstance(value, bytes):
        value = value.decode("ascii")

    if isinstance(value, str):
        if not _TS_MW.match(value):
            raise ValueError(f"Unrecognised MediaWiki timestamp: {value!r}")
        value = datetime.strptime(value, "%Y%m%d%H%M%S").replace(tzinfo=timezone.utc)

    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)

    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def utc_now_iso8601() -> str:
    return to_iso8601(datetime.now(timezone.utc))
