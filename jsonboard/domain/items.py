"""Domain helpers for item ids, creation defaults and soft-delete display."""
from __future__ import annotations

import re
from typing import Any, Iterable, Mapping

STRIKE_MARKER = "~~"
STRUCK_FIELDS = ("title", "text")
LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")


def _numeric_id(item: Mapping[str, Any]) -> int:
    """Leading base-10 integer of the item id ("12abc" -> 12), 0 when there is none."""
    value = item.get("id") if isinstance(item, Mapping) else None
    if value is None or isinstance(value, bool):
        return 0
    match = LEADING_INT.match(str(value))
    return int(match.group(1)) if match else 0


def next_id(items: Iterable[Mapping[str, Any]]) -> str:
    """Return max(numeric ids) + 1 as a decimal string ("1" for an empty collection)."""
    highest = max((_numeric_id(item) for item in items), default=0)
    return str(highest + 1)


def prepare_new_item(items: Iterable[Mapping[str, Any]], fields: Mapping[str, Any]) -> dict:
    """
    Build the item to append from the request fields.

    A falsy id is replaced by the next allocated one; ``isDeleted`` keeps a
    truthy client value and collapses anything falsy to ``False``.
    """
    item = dict(fields)
    if not item.get("id"):
        item["id"] = next_id(items)
    item["isDeleted"] = item.get("isDeleted") or False
    return item


def strike(value: Any) -> str:
    return f"{STRIKE_MARKER}{value}{STRIKE_MARKER}"


def format_item(item: Any) -> Any:
    """
    Return the display variant of an item: deleted items get struck-through title/text.

    Empty ``title``/``text`` values are dropped from a deleted item's display copy;
    non-object entries are returned as stored.
    """
    if not isinstance(item, dict) or not item.get("isDeleted"):
        return item
    formatted = dict(item)
    for field in STRUCK_FIELDS:
        if field not in formatted:
            continue
        if formatted[field]:
            formatted[field] = strike(formatted[field])
        else:
            del formatted[field]
    return formatted
