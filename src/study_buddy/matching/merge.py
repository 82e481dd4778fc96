"""
Interval merge for availability windows.

Pairwise intersections of two availability lists can overlap or touch each
other (e.g. MON 14:00-15:00 and MON 14:30-16:00 both come out of one peer).
merge_adjacent() collapses them into the minimal sorted set of maximal
windows, so callers always see a canonical answer.
"""

from __future__ import annotations

from typing import Iterable, List

from ..models import TimeSlot


def _sort_key(slot: TimeSlot):
    return (slot.day, slot.start, slot.end)


def merge_adjacent(slots: Iterable[TimeSlot]) -> List[TimeSlot]:
    """Return slots merged per day, sorted by (day, start, end).

    Two windows on the same day merge when the first does not end strictly
    before the second begins, so touching windows (12:00 end, 12:00 start)
    are joined as well. The input is never modified.
    """
    ordered = sorted(slots, key=_sort_key)
    if not ordered:
        return []

    merged: List[TimeSlot] = []
    cur = ordered[0]
    for nxt in ordered[1:]:
        if cur.day == nxt.day and cur.end >= nxt.start:
            cur = TimeSlot(cur.day, cur.start, max(cur.end, nxt.end))
        else:
            merged.append(cur)
            cur = nxt
    merged.append(cur)
    return merged
