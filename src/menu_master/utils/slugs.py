"""URL slug generation for restaurant and branch names.

Slugs are derived from display names both when a public menu link is published
and when an incoming link is resolved, so the two sides must always agree.
Unicode letters and numbers from any script are kept (Arabic branch names
produce Arabic slugs), only punctuation, symbols and combining marks are dropped.
"""

import re
import unicodedata

_WHITESPACE_RUN = re.compile(r"\s+")
_HYPHEN_RUN = re.compile(r"-+")


def _is_slug_character(char: str) -> bool:
    """Return True for Unicode letters, Unicode numbers, whitespace and hyphens."""
    if char == "-" or char.isspace():
        return True
    return unicodedata.category(char)[0] in ("L", "N")


def slugify(name: str) -> str:
    """Convert a display name into a URL-safe slug.

    Args:
        name: Human-readable name, may contain any Unicode script

    Returns:
        Lowercase slug, or an empty string if nothing sluggable remains

    Example:
        >>> slugify("Burger House")
        'burger-house'
    """
    if not name:
        return ""

    # Lowercase before filtering so case mapping cannot reintroduce combining marks
    decomposed = unicodedata.normalize("NFKD", str(name).lower())
    kept = "".join(char for char in decomposed if _is_slug_character(char)).strip()

    hyphenated = _WHITESPACE_RUN.sub("-", kept)
    return _HYPHEN_RUN.sub("-", hyphenated)


def slug_matches(name: str, slug: str) -> bool:
    """Check whether a stored name resolves to the given URL slug.

    An empty slug (or a name that slugifies to nothing) never matches.

    Args:
        name: Stored display name
        slug: Slug segment taken from a URL

    Returns:
        True if the slugified name equals the lowercased slug
    """
    if not slug:
        return False

    name_slug = slugify(name)
    return bool(name_slug) and name_slug == slug.lower()
