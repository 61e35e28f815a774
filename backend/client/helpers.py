"""
Display helpers for the board and dashboard.

Colours are derived from the category name so a column keeps its colour
across sessions and devices.
"""

import re
from datetime import datetime
from typing import Optional, Union

DEFAULT_CATEGORY = "Uncategorized"
DEFAULT_CATEGORY_COLOR = "#94A3B8"
CATEGORY_COLORS = [
    "#6366F1",  # indigo
    "#10B981",  # green
    "#F59E0B",  # amber
    "#EF4444",  # red
    "#3B82F6",  # blue
    "#8B5CF6",  # purple
    "#EC4899",  # pink
    "#14B8A6",  # teal
]

BARCODE_PATTERN = re.compile(r"[0-9]{8,13}")


def is_default_category(name: Optional[str]) -> bool:
    return (name or "").strip().casefold() == DEFAULT_CATEGORY.casefold()


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def _utf16_units(text: str) -> list[int]:
    raw = text.encode("utf-16-le")
    return [int.from_bytes(raw[i:i + 2], "little") for i in range(0, len(raw), 2)]


def name_hash(text: str) -> int:
    """
    The ``hash * 31 + char`` string hash used by the mobile app.

    Only the shift is 32-bit; the running value itself is not truncated,
    so this reproduces the app's results exactly, including for long names.
    """
    acc = 0
    for unit in _utf16_units(text):
        acc = unit + (_to_int32(_to_int32(acc) << 5) - acc)
    return acc


def category_color(name: Optional[str]) -> str:
    """Stable palette colour for a category; the default is always grey."""
    if not name or is_default_category(name):
        return DEFAULT_CATEGORY_COLOR
    return CATEGORY_COLORS[abs(name_hash(str(name))) % len(CATEGORY_COLORS)]


def category_percentage(count: int, total: int) -> float:
    """Share of ``total`` as a percentage with one decimal, 0 when empty."""
    if total <= 0:
        return 0.0
    return round(count / total * 100, 1)


def truncate_text(text: Optional[str], max_length: int = 50) -> str:
    if not text:
        return ""
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


def is_valid_barcode(barcode: Optional[str]) -> bool:
    """8 to 13 digits (EAN-8 through EAN-13 / UPC)."""
    if not barcode:
        return False
    return BARCODE_PATTERN.fullmatch(barcode) is not None


def format_date(value: Union[datetime, str, None]) -> str:
    """Format as "Jan 5, 2024". Accepts datetimes or ISO 8601 strings."""
    if not value:
        return ""
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    return f"{value:%b} {value.day}, {value.year}"
