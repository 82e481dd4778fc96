"""
Match suggestions: overlapping free time between a student and classmates.

The engine only needs two read-only queries from its collaborator, described
by the ClassmateLookup protocol. Repository satisfies it; tests can pass any
object with the same two methods.

Complexity is O(C * A * B) for C classmates and availability lists of size
A and B, which is fine for the handful of slots a student enters.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Protocol, Sequence

from ..models import Student, TimeSlot
from .merge import merge_adjacent

logger = logging.getLogger(__name__)


class ClassmateLookup(Protocol):
    def get_student(self, student_id: int) -> Optional[Student]: ...

    def classmates_in_course(self, student_id: int, course: str) -> Sequence[Student]: ...


def shared_windows(a: Sequence[TimeSlot], b: Sequence[TimeSlot]) -> List[TimeSlot]:
    """Merged intersection of two availability lists ([] when disjoint)."""
    overlaps = []
    for mine in a:
        for theirs in b:
            inter = mine.intersection(theirs)
            if inter is not None:
                overlaps.append(inter)
    return merge_adjacent(overlaps)


def suggest_matches(
    lookup: ClassmateLookup, student_id: int, course: str
) -> Dict[Student, List[TimeSlot]]:
    """Map each classmate in `course` to the windows they share with student_id.

    Classmates with no shared minutes are left out. Iteration order follows
    the order lookup.classmates_in_course() returns them in. An unknown
    student_id yields an empty dict rather than an error.
    """
    me = lookup.get_student(student_id)
    result: Dict[Student, List[TimeSlot]] = {}
    if me is None:
        logger.debug("suggest_matches: unknown student id %s", student_id)
        return result

    # snapshot so a list mutated mid-computation cannot affect this pass
    my_slots = list(me.availability)
    for peer in lookup.classmates_in_course(student_id, course):
        windows = shared_windows(my_slots, list(peer.availability))
        if windows:
            result[peer] = windows

    logger.debug(
        "suggest_matches: student %s course %r -> %d match(es)",
        student_id, course, len(result),
    )
    return result
