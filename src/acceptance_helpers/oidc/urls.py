"""Base-server identity used to partition the token cache."""

from __future__ import annotations

from urllib.parse import urlsplit

_SCHEMES = ("http", "https")


def extract_base_url(url: str) -> str:
    """Return ``scheme://host[:port]`` of *url*.

    Path, query and fragment are dropped so that any URL on the same server
    maps to the same value.  Input that is not an absolute http(s) URL is
    returned unchanged.

    >>> extract_base_url("https://localhost:9200/remote.php/dav/files/alice?x=1")
    'https://localhost:9200'
    >>> extract_base_url("not a url")
    'not a url'
    """
    try:
        parts = urlsplit(url)
    except ValueError:
        return url
    if parts.scheme not in _SCHEMES or not parts.hostname:
        return url
    # userinfo is not part of the server identity
    host = parts.netloc.rpartition("@")[2]
    return f"{parts.scheme}://{host}"
