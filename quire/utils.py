"""Utility functions for Quire.

Small, pure helpers shared by the content, index and template modules.

Key functions:
    parse_post_date: Parse an MM-DD-YYYY date, falling back to the epoch.
    reading_time: Estimate reading time in minutes.
    strip_heading_marker: Drop leading markdown heading markers from a line.
    host_label: Turn a URL into a short human label.
"""

from __future__ import annotations

import math
from datetime import date, datetime
from urllib.parse import urlparse

EPOCH = date(1970, 1, 1)
DATE_FORMAT = "%m-%d-%Y"
WORDS_PER_MINUTE = 200


def parse_post_date(value: str) -> date:
    """Parse a post date written as MM-DD-YYYY.

    Args:
        value: Raw date line from a post.

    Returns:
        The parsed date, or EPOCH when the value does not parse.

    Examples:
        >>> parse_post_date("12-31-2024")
        datetime.date(2024, 12, 31)

        >>> parse_post_date("someday")
        datetime.date(1970, 1, 1)
    """
    try:
        return datetime.strptime(value.strip(), DATE_FORMAT).date()
    except ValueError:
        return EPOCH


def reading_time(text: str) -> int:
    """Estimate minutes needed to read text, never less than one."""
    words = len(text.split())
    return max(1, math.ceil(words / WORDS_PER_MINUTE))


def strip_heading_marker(line: str) -> str:
    """Remove leading ``#`` heading markers and surrounding whitespace.

    Examples:
        >>> strip_heading_marker("## Hello world")
        'Hello world'
    """
    return line.lstrip().lstrip("#").strip()


def host_label(url: str) -> str:
    """Return the host part of a URL without a leading ``www.``.

    Falls back to the URL itself when it has no host.
    """
    host = urlparse(url).netloc
    if host.startswith("www."):
        host = host[4:]
    return host or url
