"""
Shared validators for input sanitization.
"""

import re
from urllib.parse import urlparse
from typing import Optional

from shared.config.constants import Limits

# Recipe image links are rendered by the browser; only web URLs are accepted
ALLOWED_URL_SCHEMES = {"http", "https"}


def validate_image_url(url: Optional[str]) -> Optional[str]:
    """
    Validate and normalize a recipe image URL.

    Empty strings are accepted and normalized to None, mirroring the form
    which sends '' for "no image".

    Raises:
        ValueError: If the URL is not an absolute http(s) URL
    """
    if url is None:
        return None

    url = url.strip()
    if not url:
        return None

    parsed = urlparse(url)

    scheme = parsed.scheme.lower()
    if scheme not in ALLOWED_URL_SCHEMES:
        raise ValueError("Geçerli bir URL girin (http veya https)")

    if not parsed.netloc:
        raise ValueError("Geçerli bir URL girin")

    if len(url) > Limits.MAX_URL_LENGTH:
        raise ValueError(f"URL çok uzun (en fazla {Limits.MAX_URL_LENGTH} karakter)")

    return url


def escape_like_pattern(value: str) -> str:
    """
    Escape special characters in LIKE patterns.

    SQL LIKE uses % and _ as wildcards; a search for "10%" must match the
    literal text. Use together with ``escape="\\\\"`` on the ilike() call.
    """
    if not value:
        return value

    # Escape the escape character first, then the wildcards
    value = value.replace("\\", "\\\\")
    value = value.replace("%", "\\%")
    value = value.replace("_", "\\_")
    return value


def sanitize_search_term(term: str | None, max_length: int = Limits.MAX_SEARCH_TERM_LENGTH) -> str:
    """
    Sanitize search term for safe use in queries.

    Returns an empty string for None/blank input.
    """
    if not term:
        return ""

    term = term.strip()

    if len(term) > max_length:
        term = term[:max_length]

    # Remove null bytes and other control characters
    term = re.sub(r"[\x00-\x1f\x7f-\x9f]", "", term)

    return term
