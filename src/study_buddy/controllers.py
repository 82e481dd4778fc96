"""
Thin controllers between the CLI and the Repository.

The CLI only talks to these classes. Lookups of unknown ids raise the
LookupError subclasses below, except suggest_matches(), which returns an
empty mapping for an unknown student like the match engine does.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from .matching import suggest_matches
from .models import Student, StudySession, TimeSlot
from .repository import Repository


class UnknownStudentError(LookupError):
    """No student with the given id."""


class UnknownSessionError(LookupError):
    """No session with the given id."""


class EnrollmentError(ValueError):
    """Student is not enrolled in the session's course."""


class NotAParticipantError(ValueError):
    """Student tried to confirm a session they have not joined."""


class ProfileController:
    def __init__(self, repo: Repository) -> None:
        self.repo = repo

    def create_profile(self, name: str, courses: Iterable[str]) -> Student:
        name = name.strip()
        if not name:
            raise ValueError("Name must not be empty")
        student = self.repo.create_student(name)
        for c in courses:
            student.add_course(c)
        return student


class AvailabilityController:
    def __init__(self, repo: Repository) -> None:
        self.repo = repo

    def add_availability(self, student_id: int, slot: TimeSlot) -> None:
        student = self.repo.get_student(student_id)
        if student is not None:
            student.add_availability(slot)

    def remove_availability(self, student_id: int, index: int) -> bool:
        student = self.repo.get_student(student_id)
        return student is not None and student.remove_availability(index)


class SessionController:
    def __init__(self, repo: Repository) -> None:
        self.repo = repo

    def classmates(self, student_id: int, course: str) -> List[Student]:
        return self.repo.classmates_in_course(student_id, course)

    def all_sessions(self) -> List[StudySession]:
        return self.repo.all_sessions()

    def search_by_course(self, course: str) -> List[StudySession]:
        return self.repo.search_sessions_by_course(course)

    def search_by_student_name(self, name_part: str) -> List[StudySession]:
        return self.repo.search_sessions_by_student_name(name_part)

    def get_session(self, session_id: int) -> Optional[StudySession]:
        return self.repo.get_session(session_id)

    def sessions_for(self, student_id: int) -> List[StudySession]:
        return [s for s in self.repo.all_sessions() if s.is_participant(student_id)]

    def create(
        self, course: str, time: TimeSlot, participant_ids: Iterable[int] = ()
    ) -> StudySession:
        return self.repo.create_session(course, time, participant_ids)

    def join(self, session_id: int, student_id: int) -> StudySession:
        session = self._require_session(session_id)
        student = self.repo.get_student(student_id)
        if student is None:
            raise UnknownStudentError(f"No student with id {student_id}")
        if not student.is_enrolled(session.course):
            raise EnrollmentError(f"You must be enrolled in {session.course} to join.")
        session.add_participant(student_id)
        return session

    def confirm(self, session_id: int, student_id: int) -> StudySession:
        session = self._require_session(session_id)
        if not session.is_participant(student_id):
            raise NotAParticipantError(
                f"Student {student_id} is not a participant of session {session_id}"
            )
        session.confirm(student_id)
        return session

    def suggest_matches(self, student_id: int, course: str) -> Dict[Student, List[TimeSlot]]:
        return suggest_matches(self.repo, student_id, course)

    def _require_session(self, session_id: int) -> StudySession:
        session = self.repo.get_session(session_id)
        if session is None:
            raise UnknownSessionError(f"No session with id {session_id}")
        return session
