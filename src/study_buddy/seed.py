"""Built-in demo roster so matches and sessions can be tried right away."""

from __future__ import annotations

from .models import Day, TimeSlot, parse_time
from .repository import Repository

CPSC_3720 = "CPSC 3720"
MATH_3110 = "MATH 3110"

# fixed course catalog offered at profile creation
COURSE_CATALOG = (CPSC_3720, MATH_3110)


def _slot(day: Day, start: str, end: str) -> TimeSlot:
    return TimeSlot(day, parse_time(start), parse_time(end))


def seed_demo(repo: Repository) -> None:
    """Add Alice, Bob, Jon and Mary plus one planned session per course."""
    alice = repo.create_student("Alice")
    alice.add_course(CPSC_3720)
    alice.add_availability(_slot(Day.MONDAY,    "14:00", "16:00"))
    alice.add_availability(_slot(Day.WEDNESDAY, "10:00", "11:30"))

    bob = repo.create_student("Bob")
    bob.add_course(CPSC_3720)
    bob.add_availability(_slot(Day.MONDAY, "15:00", "17:00"))

    jon = repo.create_student("Jon")
    jon.add_course(MATH_3110)
    jon.add_availability(_slot(Day.TUESDAY, "09:00", "11:00"))

    mary = repo.create_student("Mary")
    mary.add_course(MATH_3110)
    mary.add_availability(_slot(Day.TUESDAY, "10:00", "12:00"))

    repo.create_session(CPSC_3720, _slot(Day.MONDAY,  "15:00", "16:00"), [alice.id, bob.id])
    repo.create_session(MATH_3110, _slot(Day.TUESDAY, "10:30", "11:30"), [jon.id, mary.id])
