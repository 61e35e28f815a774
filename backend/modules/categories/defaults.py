"""
The reserved default category.

"Uncategorized" always exists for every user without a stored record and
can never be deleted. Matching against the reserved name is
case-insensitive; every other category name is matched exactly.
"""

from typing import Iterable, Optional

DEFAULT_CATEGORY = "Uncategorized"


def is_default_category(name: Optional[str]) -> bool:
    """True if ``name`` is any casing of the reserved default."""
    if name is None:
        return False
    return name.strip().casefold() == DEFAULT_CATEGORY.casefold()


def normalize_category(name: Optional[str]) -> str:
    """
    Canonical category name for a product.

    Blank or missing names, and any casing of the default, map to
    ``DEFAULT_CATEGORY``. Everything else is trimmed.
    """
    if name is None or not name.strip() or is_default_category(name):
        return DEFAULT_CATEGORY
    return name.strip()


def with_default(names: Iterable[str]) -> list[str]:
    """
    Merge the reserved default into a list of stored category names.

    Returns a new list with ``DEFAULT_CATEGORY`` first, exactly once,
    followed by ``names`` in their original order minus any casing of the
    default. The input is not modified.
    """
    return [DEFAULT_CATEGORY] + [n for n in names if not is_default_category(n)]
