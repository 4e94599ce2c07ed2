"""
URL Sanitizer for Hyperlinks

Checks URLs bound to navigational attributes (``<a href>``, ``<img src>``)
against an allow-list of schemes. Anything with an unknown scheme, notably
``javascript:``, ``vbscript:`` and ``data:text/html``, is neutralized with an
``unsafe:`` prefix so the payload can never be dereferenced as a live scheme.

Values without a scheme (relative paths, ``//host`` scheme-relative URLs,
``#fragment`` and ``?query``) are always accepted, as are base64 ``data:``
URLs for a fixed set of image, video and audio types.
"""

import re

from safedom.core.diagnostics import report_unsafe_value

# Schemes accepted as-is. "unsafe" is the neutralizing prefix itself, so that
# sanitizing an already sanitized URL changes nothing.
SAFE_URL_SCHEMES = ("http", "https", "ftp", "mailto", "tel", "file", "unsafe")

# Media types accepted inside base64 data URLs
SAFE_DATA_URL_TYPES = {
    "image": ("bmp", "gif", "jpeg", "jpg", "png", "tiff", "webp"),
    "video": ("mpeg", "mp4", "ogg", "webm"),
    "audio": ("mp3", "oga", "ogg", "opus"),
}

UNSAFE_URL_PREFIX = "unsafe:"

# Either an allow-listed scheme, or no scheme at all: a scheme would need a
# ":" before the first "/", "?" or "#".
_SAFE_URL_PATTERN = re.compile(
    r"^(?:(?:{schemes}):|[^&:/?#]*(?:[/?#]|\Z))".format(schemes="|".join(SAFE_URL_SCHEMES)),
    re.IGNORECASE,
)

_DATA_URL_PATTERN = re.compile(
    r"^data:(?:{types});base64,[a-z0-9+/]+=*\Z".format(
        types="|".join(f"{kind}/(?:{'|'.join(subtypes)})" for kind, subtypes in SAFE_DATA_URL_TYPES.items())
    ),
    re.IGNORECASE,
)

# Browsers ignore leading/trailing whitespace and C0 control characters when
# resolving a URL, so they must not hide the scheme from the checks above.
_SURROUNDING_JUNK = re.compile(r"^[\x00-\x20\s]+|[\x00-\x20\s]+\Z")


def normalize_url(url: str) -> str:
    """Strip surrounding whitespace and control characters."""
    return _SURROUNDING_JUNK.sub("", url)


def is_safe_url(url: str) -> bool:
    """
    Check whether a URL may be bound without modification.

    Args:
        url: URL to check (normalized before matching)

    Returns:
        True if the URL has no scheme, an allow-listed scheme, or is an
        allow-listed base64 data URL
    """
    url = normalize_url(url)
    if not url:
        return True
    return bool(_SAFE_URL_PATTERN.match(url) or _DATA_URL_PATTERN.match(url))


def sanitize_url(url: str) -> str:
    """
    Sanitize a URL for use in a hyperlink context.

    Args:
        url: Untrusted URL

    Returns:
        The normalized URL if safe, otherwise ``"unsafe:" + url``

    Example:
        >>> sanitize_url("https://example.com/x")
        'https://example.com/x'
        >>> sanitize_url("javascript:alert(1)")
        'unsafe:javascript:alert(1)'
    """
    url = normalize_url(url)
    if is_safe_url(url):
        return url

    report_unsafe_value("url", url, f"Sanitizing unsafe URL value {url}")
    return f"{UNSAFE_URL_PREFIX}{url}"


def is_safe_srcset(srcset: str) -> bool:
    """Check that every candidate of a ``srcset`` value is a safe URL."""
    return all(is_safe_url(candidate) for candidate in srcset.split(","))


def sanitize_srcset(srcset: str) -> str:
    """
    Sanitize every candidate of a ``srcset`` attribute value.

    Each comma-separated candidate (URL plus optional width or density
    descriptor) goes through sanitize_url() on its own.

    Args:
        srcset: Untrusted srcset value, e.g. ``"a.png 1x, b.png 2x"``

    Returns:
        Candidates re-joined with ``", "``
    """
    return ", ".join(sanitize_url(candidate.strip()) for candidate in srcset.split(","))
