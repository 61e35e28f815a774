"""Analytics screen data."""

from typing import Any, NamedTuple

from .helpers import category_color, category_percentage


class CategoryShare(NamedTuple):
    category: str
    count: int
    percentage: float
    color: str


def build_category_breakdown(stats: dict[str, Any]) -> list[CategoryShare]:
    """
    One row per entry of ``categoryCounts``, in the order the server sent them.

    ``stats`` is the ``data`` of the analytics endpoint.
    """
    total = int(stats.get("totalProducts") or 0)
    counts = stats.get("categoryCounts") or {}
    return [
        CategoryShare(
            category=name,
            count=count,
            percentage=category_percentage(count, total),
            color=category_color(name),
        )
        for name, count in counts.items()
    ]
