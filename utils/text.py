"""
Text Module - Slugs and tag/technology listings
"""

import re

_NON_ALNUM = re.compile(r'[^a-z0-9]+')
_SLUG = re.compile(r'^[a-z0-9]+(?:-[a-z0-9]+)*$')


def slugify(title):
    """
    Derive a URL-safe slug from a title

    Lowercases, collapses every run of non-alphanumeric characters into one
    hyphen and trims hyphens from both ends.

    Args:
        title (str): Source title

    Returns:
        str: Slug, 'untitled' for an empty title
    """
    slug = _NON_ALNUM.sub('-', (title or 'untitled').lower()).strip('-')
    return slug or 'untitled'


def is_slug(value):
    return isinstance(value, str) and bool(_SLUG.match(value))


def unique_sorted(lists):
    """Sorted unique strings across an iterable of string lists"""
    seen = set()
    for values in lists:
        seen.update(values or [])
    return sorted(seen)


__all__ = ['slugify', 'is_slug', 'unique_sorted']
