"""Filter-sort pipeline over the in-memory task list.

Stages run in a fixed order, each narrowing the previous output:
search, priority filter, status filter, then sort. The function is pure:
it never touches the network and never mutates its input.
"""

from __future__ import annotations

import locale
import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from todo_app.models import Priority, Task, parse_priority

logger = logging.getLogger(__name__)

ALL = "all"
STATUS_FILTERS = (ALL, "completed", "active")
SORT_FIELDS = ("priority", "title", "completed")
SORT_ORDERS = ("asc", "desc")


def use_locale_collation(name: str = "") -> Optional[str]:
    """Point LC_COLLATE at ``name``, or at the environment's locale when empty.

    Title sorting goes through ``locale.strxfrm``, which falls back to plain
    code point order until a collation locale is set. Returns the active
    locale name, or None when ``name`` is not installed.
    """
    try:
        active = locale.setlocale(locale.LC_COLLATE, name)
    except locale.Error as exc:
        logger.warning("Collation locale %r unavailable, titles sort by code point: %s", name, exc)
        return None
    logger.info("Sorting titles with collation locale %s", active)
    return active


def _title_key(task: Task) -> Any:
    # strxfrm rejects embedded NULs.
    title = task.title.replace("\x00", "")
    # Case folded first so "apple" and "Banana" order like a dictionary would.
    return (locale.strxfrm(title.casefold()), locale.strxfrm(title))


_SORT_KEYS: Dict[str, Callable[[Task], Any]] = {
    "priority": lambda t: int(t.priority),
    "title": _title_key,
    # False < True, so incomplete tasks come first.
    "completed": lambda t: bool(t.completed),
}


def matches_search(task: Task, search: str) -> bool:
    needle = search.lower()
    if needle in task.title.lower():
        return True
    return task.description is not None and needle in task.description.lower()


def filter_and_sort(
    tasks: Iterable[Task],
    *,
    search: str = "",
    priority_filter: Union[str, int, Priority] = ALL,
    status_filter: str = ALL,
    sort_field: str = "priority",
    sort_order: str = "desc",
) -> List[Task]:
    if status_filter not in STATUS_FILTERS:
        raise ValueError(f"Unknown status filter: {status_filter!r}")
    if sort_field not in SORT_FIELDS:
        raise ValueError(f"Unknown sort field: {sort_field!r}")
    if sort_order not in SORT_ORDERS:
        raise ValueError(f"Unknown sort order: {sort_order!r}")

    result = list(tasks)

    if search:
        result = [t for t in result if matches_search(t, search)]

    if priority_filter != ALL:
        wanted = parse_priority(priority_filter)
        result = [t for t in result if t.priority == wanted]

    if status_filter == "completed":
        result = [t for t in result if t.completed]
    elif status_filter == "active":
        result = [t for t in result if not t.completed]

    # sorted() is stable and keeps equal keys in input order even with reverse=True.
    return sorted(result, key=_SORT_KEYS[sort_field], reverse=(sort_order == "desc"))
