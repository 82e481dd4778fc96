"""
In-memory storage for students and study sessions.

One Repository instance owns every record and both id counters; controllers
receive it explicitly instead of reaching for module-level state. Query
methods return new lists so callers cannot reorder or truncate the storage.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from .models import Student, StudySession, TimeSlot, normalize_course

logger = logging.getLogger(__name__)


class Repository:
    def __init__(self) -> None:
        self._students: Dict[int, Student]      = {}
        self._sessions: Dict[int, StudySession] = {}
        self._student_seq = 1
        self._session_seq = 1

    # ---- students ------------------------------------------------------------

    def create_student(self, name: str) -> Student:
        student = Student(id=self._student_seq, name=name)
        self._student_seq += 1
        self._students[student.id] = student
        logger.debug("created student %s", student.id)
        return student

    def add_student(self, student: Student) -> Student:
        """Store a pre-built student (roster loading); keeps ids monotonic."""
        if student.id in self._students:
            raise ValueError(f"Duplicate student id {student.id}")
        self._students[student.id] = student
        self._student_seq = max(self._student_seq, student.id + 1)
        return student

    def get_student(self, student_id: int) -> Optional[Student]:
        return self._students.get(student_id)

    def all_students(self) -> List[Student]:
        return list(self._students.values())

    def classmates_in_course(self, student_id: int, course: str) -> List[Student]:
        """Other students enrolled in `course`, in storage order."""
        code = normalize_course(course)
        return [
            s for s in self._students.values()
            if s.id != student_id and code in s.courses
        ]

    # ---- sessions ------------------------------------------------------------

    def create_session(
        self, course: str, time: TimeSlot, participant_ids: Iterable[int] = ()
    ) -> StudySession:
        session = StudySession(
            id              = self._session_seq,
            course          = course,
            time            = time,
            participant_ids = list(participant_ids),
        )
        self._session_seq += 1
        self._sessions[session.id] = session
        logger.debug("created session %s (%s)", session.id, session)
        return session

    def add_session(self, session: StudySession) -> StudySession:
        if session.id in self._sessions:
            raise ValueError(f"Duplicate session id {session.id}")
        self._sessions[session.id] = session
        self._session_seq = max(self._session_seq, session.id + 1)
        return session

    def get_session(self, session_id: int) -> Optional[StudySession]:
        return self._sessions.get(session_id)

    def all_sessions(self) -> List[StudySession]:
        return list(self._sessions.values())

    def search_sessions_by_course(self, course: str) -> List[StudySession]:
        code = normalize_course(course)
        return [s for s in self._sessions.values() if s.course == code]

    def search_sessions_by_student_name(self, name_part: str) -> List[StudySession]:
        """Sessions with any participant whose name contains name_part (any case)."""
        needle = name_part.casefold()
        res = []
        for session in self._sessions.values():
            for sid in session.participant_ids:
                student = self._students.get(sid)
                if student is not None and needle in student.name.casefold():
                    res.append(session)
                    break
        return res
