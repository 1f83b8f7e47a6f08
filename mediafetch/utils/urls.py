"""
URL helpers: redirect resolution, signature substitution and mapping a
Content-Type to a file extension.
"""

import re
from urllib.parse import quote, urljoin

_SIGNATURE_REGEX = re.compile(r"([?&])signature=[^&]*")

_CONTENT_TYPE_EXTENSIONS = [
    (re.compile(r"/(x-)?flv$", re.I), "flv"),
    (re.compile(r"/(x-)?webm$", re.I), "webm"),
    (re.compile(r"/(x-)?3gpp?$", re.I), "3gpp"),
    (re.compile(r"/quicktime$", re.I), "mov"),
    (re.compile(r"^audio/(x-)?(mp4|m4a)$", re.I), "m4a"),
]


def resolve_location(base_url: str, location: str) -> str:
    """Resolves a Location header, absolute or relative, against the request URL."""
    return urljoin(base_url, location.strip())


def apply_signature(url: str, signature: str) -> str:
    """
    Puts `signature` into the URL's `signature=` parameter, replacing an
    existing value or appending one.
    """
    value = quote(signature, safe=".")
    if _SIGNATURE_REGEX.search(url):
        return _SIGNATURE_REGEX.sub(lambda m: f"{m.group(1)}signature={value}", url, count=1)
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}signature={value}"


def content_type_ext(content_type: str | None) -> str:
    """Picks a file extension for a media Content-Type, defaulting to mp4."""
    if content_type:
        mime = content_type.split(";")[0].strip()
        for pattern, ext in _CONTENT_TYPE_EXTENSIONS:
            if pattern.search(mime):
                return ext
    return "mp4"
