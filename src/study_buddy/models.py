"""
Data model layer for the Study Buddy scheduler.

TimeSlot is a frozen dataclass so it can be shared freely between students,
sessions and match results. Student and StudySession are mutable records owned
by the Repository; they compare and hash by identity so a Student can key the
mapping returned by the match engine.

Reference: Python Software Foundation. "dataclasses — Data Classes."
https://docs.python.org/3/library/dataclasses.html

Boundary policy:
  overlaps() treats touching endpoints as overlapping (10:00-12:00 and
  12:00-13:00 overlap) while intersection() only returns a window of
  positive length, so touching slots overlap but share no time.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, time
from enum import IntEnum
from typing import List, Optional

TIME_FORMAT = "%H:%M"


class InvalidRangeError(ValueError):
    """Raised when a TimeSlot's end is not strictly after its start."""


class Day(IntEnum):
    """Weekday; the integer value is the ordinal used for sorting."""
    MONDAY    = 0
    TUESDAY   = 1
    WEDNESDAY = 2
    THURSDAY  = 3
    FRIDAY    = 4
    SATURDAY  = 5
    SUNDAY    = 6

    def __str__(self) -> str:
        return self.name


_DAY_ABBREVIATIONS = {
    "mon":   Day.MONDAY,
    "tue":   Day.TUESDAY,
    "tues":  Day.TUESDAY,
    "wed":   Day.WEDNESDAY,
    "thu":   Day.THURSDAY,
    "thur":  Day.THURSDAY,
    "thurs": Day.THURSDAY,
    "fri":   Day.FRIDAY,
    "sat":   Day.SATURDAY,
    "sun":   Day.SUNDAY,
}


def normalize_course(code: str) -> str:
    """Canonical course code: "  cpsc 3720 " -> "CPSC 3720"."""
    return code.strip().upper()


def parse_day(text: str) -> Day:
    """Accept "Monday", "MON", "tues", ... in any case."""
    key = text.strip()
    try:
        return Day[key.upper()]
    except KeyError:
        pass
    day = _DAY_ABBREVIATIONS.get(key.lower())
    if day is None:
        raise ValueError(f"Unrecognized day: {key!r}")
    return day


def parse_time(text: str) -> time:
    """Parse a 24-hour HH:MM time of day."""
    try:
        return datetime.strptime(text.strip(), TIME_FORMAT).time()
    except ValueError:
        raise ValueError(f"Expected a time as HH:MM, got {text!r}") from None


@dataclass(frozen=True)
class TimeSlot:
    """One availability window on a weekday, e.g. MONDAY 14:00-16:00."""
    day:   Day
    start: time
    end:   time

    def __post_init__(self) -> None:
        if self.day is None or self.start is None or self.end is None:
            raise TypeError("TimeSlot day, start and end are required")
        if not isinstance(self.day, Day):
            raise TypeError(f"day must be a Day, got {type(self.day).__name__}")
        for name in ("start", "end"):
            value = getattr(self, name)
            if not isinstance(value, time):
                raise TypeError(f"{name} must be a datetime.time, got {type(value).__name__}")
            if value.second or value.microsecond:
                raise ValueError(f"{name} must be a whole minute, got {value}")
        if self.end <= self.start:
            raise InvalidRangeError("End time must be after start time")

    @classmethod
    def parse(cls, text: str) -> "TimeSlot":
        """Inverse of str(): "MONDAY 14:00-16:00" -> TimeSlot."""
        try:
            day_part, times = text.split()
            start_part, end_part = times.split("-")
        except ValueError:
            raise ValueError(f"Expected '<DAY> HH:MM-HH:MM', got {text!r}") from None
        return cls(parse_day(day_part), parse_time(start_part), parse_time(end_part))

    def overlaps(self, other: "TimeSlot") -> bool:
        if self.day != other.day:
            return False
        # inclusive: end == other.start still counts
        return not (self.end < other.start or self.start > other.end)

    def intersection(self, other: "TimeSlot") -> Optional["TimeSlot"]:
        if not self.overlaps(other):
            return None
        s = max(self.start, other.start)
        e = min(self.end, other.end)
        if e > s:
            return TimeSlot(self.day, s, e)
        return None

    def __str__(self) -> str:
        return (f"{self.day.name} {self.start.strftime(TIME_FORMAT)}-"
                f"{self.end.strftime(TIME_FORMAT)}")


@dataclass(eq=False)
class Student:
    id:   int
    name: str
    courses:      List[str]      = field(default_factory=list)
    availability: List[TimeSlot] = field(default_factory=list)

    def __post_init__(self) -> None:
        raw = list(self.courses)
        self.courses = []
        for c in raw:
            self.add_course(c)

    def add_course(self, course: str) -> None:
        code = normalize_course(course)
        if code not in self.courses:
            self.courses.append(code)

    def is_enrolled(self, course: str) -> bool:
        return normalize_course(course) in self.courses

    def add_availability(self, slot: TimeSlot) -> None:
        self.availability.append(slot)

    def remove_availability(self, index: int) -> bool:
        if index < 0 or index >= len(self.availability):
            return False
        del self.availability[index]
        return True

    def __str__(self) -> str:
        return (f"[{self.id}] {self.name} | Courses=[{', '.join(self.courses)}] "
                f"| Avail={len(self.availability)} slots")


@dataclass(eq=False)
class StudySession:
    """A proposed meeting; participants and confirmations are student ids."""
    id:     int
    course: str
    time:   TimeSlot
    participant_ids: List[int] = field(default_factory=list)
    confirmed_ids:   List[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.course = normalize_course(self.course)
        participants = list(self.participant_ids)
        confirmed = list(self.confirmed_ids)
        self.participant_ids = []
        self.confirmed_ids = []
        for sid in participants:
            self.add_participant(sid)
        for sid in confirmed:
            if sid not in self.participant_ids:
                raise ValueError(
                    f"Session {self.id}: confirmed student {sid} is not a participant"
                )
            self.confirm(sid)

    def is_participant(self, student_id: int) -> bool:
        return student_id in self.participant_ids

    def add_participant(self, student_id: int) -> None:
        if student_id not in self.participant_ids:
            self.participant_ids.append(student_id)

    def confirm(self, student_id: int) -> None:
        if self.is_participant(student_id) and student_id not in self.confirmed_ids:
            self.confirmed_ids.append(student_id)

    def is_fully_confirmed(self) -> bool:
        return bool(self.participant_ids) and all(
            sid in self.confirmed_ids for sid in self.participant_ids
        )

    def __str__(self) -> str:
        return f"Session[{self.id}] {self.course} | {self.time}"
