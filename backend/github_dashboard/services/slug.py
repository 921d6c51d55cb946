"""
Slug derivation for dashboard names.
"""

import re

_DISALLOWED = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")


def generate_slug(name: str) -> str:
    """
    Turn a display name into a lowercase, hyphenated, URL-safe identifier.

    "My Team's Dashboard!" -> "my-teams-dashboard". Uniqueness is not
    checked here. Applying the function to its own output is a no-op.
    """
    slug = name.lower()
    slug = _DISALLOWED.sub("", slug)
    slug = _WHITESPACE.sub("-", slug.strip())
    slug = _HYPHENS.sub("-", slug)
    return slug.strip("-")
