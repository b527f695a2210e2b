"""Generic filtering, sorting, and substring search over in-memory records.

Records may be pydantic models or plain dicts; fields are looked up by
attribute first, then by key.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional, Sequence, TypeVar

T = TypeVar("T")

# Filter values meaning "no filter" (select boxes default to "all").
_WILDCARDS = (None, "", "all")


# ── Sorting ─────────────────────────────────────────────────────────

def apply_sorting(records: Iterable[T], sort: Optional[str]) -> list[T]:
    """
    Parse a sort string like ``"-start_date"`` and order the records.

    * Leading ``-`` → descending; otherwise ascending.
    * Records missing the field sort last regardless of direction.
    """
    items = list(records)
    if not sort:
        return items

    descending = sort.startswith("-")
    field = sort.lstrip("-")

    present = [r for r in items if get_field(r, field) is not None]
    missing = [r for r in items if get_field(r, field) is None]
    present.sort(key=lambda r: _sort_key(get_field(r, field)), reverse=descending)
    return present + missing


# ── Generic filtering ──────────────────────────────────────────────

def apply_filters(records: Iterable[T], filters: dict[str, Any]) -> list[T]:
    """
    Keep records matching every entry of *filters*.

    Key suffixes determine the operator:

    ============  ==================
    Suffix        Operator
    ============  ==================
    (none)        ``==``
    ``__ilike``   case-insensitive substring
    ``__from``    ``>=``
    ``__to``      ``<=``
    ``__in``      membership
    ============  ==================

    ``None``, ``""`` and ``"all"`` values are skipped.
    """
    conditions = [(k, v) for k, v in filters.items() if not _is_wildcard(v)]
    return [r for r in records if all(_matches(r, k, v) for k, v in conditions)]


def _matches(record: Any, key: str, value: Any) -> bool:
    if key.endswith("__ilike"):
        actual = get_field(record, key.removesuffix("__ilike"))
        return actual is not None and str(value).lower() in str(actual).lower()

    if key.endswith("__from"):
        actual = get_field(record, key.removesuffix("__from"))
        return actual is not None and actual >= value

    if key.endswith("__to"):
        actual = get_field(record, key.removesuffix("__to"))
        return actual is not None and actual <= value

    if key.endswith("__in"):
        actual = get_field(record, key.removesuffix("__in"))
        return _plain(actual) in {_plain(v) for v in value}

    return _plain(get_field(record, key)) == _plain(value)


# ── Substring search ────────────────────────────────────────────────

def apply_search(
    records: Iterable[T],
    search: Optional[str],
    fields: Sequence[str],
) -> list[T]:
    """Case-insensitive substring match across *fields* (any field may match)."""
    items = list(records)
    if not search or not search.strip():
        return items

    needle = search.strip().lower()
    return [
        r for r in items
        if any(
            (value := get_field(r, name)) is not None and needle in str(_plain(value)).lower()
            for name in fields
        )
    ]


# ── Internal helpers ────────────────────────────────────────────────

def get_field(record: Any, name: str) -> Any:
    """Read *name* from a model attribute or a mapping key; dotted paths allowed."""
    current = record
    for part in name.split("."):
        if current is None:
            return None
        if isinstance(current, dict):
            current = current.get(part)
        else:
            current = getattr(current, part, None)
    return current


def _plain(value: Any) -> Any:
    # str-enums compare by value
    return getattr(value, "value", value)


def _is_wildcard(value: Any) -> bool:
    return any(value is w or value == w for w in _WILDCARDS)


def _sort_key(value: Any) -> Any:
    value = _plain(value)
    return value.lower() if isinstance(value, str) else value
