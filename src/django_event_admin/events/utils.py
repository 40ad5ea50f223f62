"""Slug helpers for the events app."""

from django.utils.text import slugify

# Path segments under ``/users/`` that are routed to fixed views.
RESERVED_SLUGS: frozenset[str] = frozenset({"login", "logout", "register", "allusers"})


def slugify_name(name: str) -> str:
    """Convert an event name to a URL-safe slug.

    The name is NFKC-normalized and lowercased, letters in any script are
    kept, punctuation is dropped, and runs of whitespace or hyphens collapse
    to a single hyphen.  ``"Fall Fest!"`` becomes ``"fall-fest"`` and
    ``"Þjóðhátíð"`` becomes ``"þjóðhátíð"``.

    Args:
        name: The display name to convert.

    Returns:
        The slug for *name*.

    Raises:
        ValueError: If *name* contains no letters or digits, so no slug can
            be formed.
    """
    slug = slugify(name, allow_unicode=True)
    if not slug:
        msg = f"Cannot build a slug from {name!r}"
        raise ValueError(msg)
    return slug


def is_reserved_slug(slug: str) -> bool:
    """Return ``True`` when *slug* would shadow one of the fixed routes."""
    return slug in RESERVED_SLUGS
