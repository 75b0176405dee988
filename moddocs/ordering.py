"""Compare ordering keys attached to navigation index entries.

An ordering key is a short sequence of primitive values (strings, numbers, or
``None``) produced by a caller-supplied extraction function. Keys are compared
position by position: an absent value ranks before any present value at the
same position, present values compare naturally, and when every shared
position is equal the shorter key ranks first.

Absence follows the historical rule of the documentation index: ``None``,
``False``, ``0`` and ``""`` all count as absent. An entry explicitly ranked
``0`` is therefore indistinguishable from an unranked one.

Examples
--------
>>> compare_order_keys((None, "9000", "Root"), ("module1", "0", "Index"))
-1
>>> compare_order_keys(("a", "1"), ("a",))
1
>>> sorted([("b",), (None, "x"), ("a", "1")], key=order_sort_key)
[(None, 'x'), ('a', '1'), ('b',)]
"""

from __future__ import annotations

import functools
import numbers
import typing as typ

OrderKey = typ.Sequence[typ.Any]


def _is_absent(value: object) -> bool:
    """Return ``True`` when ``value`` stands for a missing rank."""
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, numbers.Number):
        return value == 0
    return False


def _type_rank(value: object) -> tuple[int, str]:
    """Return the rank of ``value``'s type among mixed-type values."""
    if isinstance(value, numbers.Real):
        return 0, ""
    if isinstance(value, str):
        return 1, ""
    return 2, type(value).__qualname__


def _compare_present(left: object, right: object) -> int:
    """Compare two present values, ranking by type first for mixed types."""
    left_rank, right_rank = _type_rank(left), _type_rank(right)
    if left_rank != right_rank:
        return -1 if left_rank < right_rank else 1
    if left_rank[0] == 2:
        left, right = str(left), str(right)
    if left < right:  # type: ignore[operator]
        return -1
    if right < left:  # type: ignore[operator]
        return 1
    return 0


def compare_order_keys(left: OrderKey, right: OrderKey) -> int:
    """Return ``-1``, ``0`` or ``1`` comparing two ordering keys.

    Parameters
    ----------
    left : Sequence
        Ordering key of the first entry.
    right : Sequence
        Ordering key of the second entry.

    Returns
    -------
    int
        ``-1`` when ``left`` sorts first, ``1`` when ``right`` sorts first and
        ``0`` when both keys are equal in every position and length.

    Notes
    -----
    Values of different types at the same position are ordered by type
    first: numbers, then strings, then anything else by type name. Two
    numbers compare numerically and other values of one type compare
    through their string form, which keeps the order transitive.
    """
    for left_value, right_value in zip(left, right):
        left_absent = _is_absent(left_value)
        right_absent = _is_absent(right_value)
        if left_absent and not right_absent:
            return -1
        if right_absent and not left_absent:
            return 1
        if left_absent and right_absent:
            continue
        result = _compare_present(left_value, right_value)
        if result:
            return result
    if len(left) < len(right):
        return -1
    if len(left) > len(right):
        return 1
    return 0


order_sort_key = functools.cmp_to_key(compare_order_keys)
"""Adapter for :func:`sorted` and ``list.sort`` built on :func:`compare_order_keys`."""


def sort_by_order_key(
    entries: typ.Iterable[typ.Any], order_key: typ.Callable[[typ.Any], OrderKey]
) -> list[typ.Any]:
    """Return ``entries`` sorted by the keys ``order_key`` extracts.

    The sort is stable, so entries with equal keys keep their input order.
    """
    return sorted(entries, key=lambda entry: order_sort_key(order_key(entry)))


__all__ = ["OrderKey", "compare_order_keys", "order_sort_key", "sort_by_order_key"]
