"""
Slug helpers
"""

import re

_NON_WORD = re.compile(r"[^\w\s-]")
_SEPARATORS = re.compile(r"[\s_-]+")

def normalize_slug(slug: str) -> str:
    """Lookup form of a slug: trimmed and lowercased"""
    return slug.strip().lower()

def slugify(title: str) -> str:
    """Build a URL-friendly slug from an event title"""
    slug = _NON_WORD.sub("", title.lower().strip())
    slug = _SEPARATORS.sub("-", slug)
    return slug.strip("-")

_SLUG = re.compile(r"^[^\W_]+(?:-[^\W_]+)*$")

def is_valid_slug(slug: str) -> bool:
    """Hyphen-separated runs of letters and digits, nothing that needs escaping in a URL path"""
    return bool(_SLUG.match(slug))
