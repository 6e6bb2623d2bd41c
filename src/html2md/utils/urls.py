#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2md/utils/urls.py
"""URL helpers used by the link and image rules."""

from __future__ import annotations

from typing import Any
from urllib.parse import urlsplit, urlunsplit

_ABSOLUTIZABLE_SCHEMES = ("", "http", "https")


def default_get_absolute_url(node: Any, raw_url: str, domain: str) -> str:
    """Turn a relative URL into an absolute one on ``domain``.

    This is the default ``Options.get_absolute_url``. Replace it to rewrite
    URLs differently, for example to proxy images.

    Parameters
    ----------
    node : bs4.Tag
        The element carrying the URL (unused by the default implementation)
    raw_url : str
        URL as written in the ``href``/``src`` attribute
    domain : str
        Host used for relative URLs; an empty domain disables rewriting

    Returns
    -------
    str
        The absolute URL, or ``raw_url`` unchanged when it cannot or should
        not be rewritten (no domain, unparsable, ``data:`` and other
        non-http schemes)

    Examples
    --------
        >>> default_get_absolute_url(None, "/page.html", "example.com")
        'http://example.com/page.html'
        >>> default_get_absolute_url(None, "/page.html", "")
        '/page.html'

    """
    if not domain:
        return raw_url

    try:
        parts = urlsplit(raw_url)
    except ValueError:
        return raw_url

    if parts.scheme not in _ABSOLUTIZABLE_SCHEMES:
        return raw_url

    return urlunsplit(
        (
            parts.scheme or "http",
            parts.netloc or domain,
            parts.path,
            parts.query,
            parts.fragment,
        )
    )
