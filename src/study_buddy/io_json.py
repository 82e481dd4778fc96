"""
JSON roster loading and match export.

A roster file replaces the built-in demo seed at startup; nothing is ever
written back, so changes made in a run are not kept. Uses only the Python
standard-library json module; basic structural validation is applied before
domain objects are built.

Reference: Python docs — json
https://docs.python.org/3/library/json.html

Roster shape:
    {"students": [{"id": 1, "name": "Alice", "courses": ["CPSC 3720"],
                   "availability": ["MONDAY 14:00-16:00"]}],
     "sessions": [{"id": 1, "course": "CPSC 3720", "time": "MONDAY 15:00-16:00",
                   "participant_ids": [1], "confirmed_ids": []}]}
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Sequence

from .models import Student, StudySession, TimeSlot
from .repository import Repository

logger = logging.getLogger(__name__)


class RosterError(ValueError):
    """Raised when the roster JSON is structurally invalid."""


def _require(obj: Dict[str, Any], key: str, ctx: str) -> Any:
    if key not in obj:
        raise RosterError(f"Missing required key '{key}' in {ctx}")
    return obj[key]


def _as_list(obj: Any, ctx: str) -> List[Any]:
    if not isinstance(obj, list):
        raise RosterError(f"Expected a JSON array in {ctx}, got {type(obj).__name__}")
    return obj


def _as_dict(obj: Any, ctx: str) -> Dict[str, Any]:
    if not isinstance(obj, dict):
        raise RosterError(
            f"Expected a JSON object in {ctx}, got {type(obj).__name__}"
        )
    return obj


def _as_id(obj: Any, ctx: str) -> int:
    # bool is an int subclass; reject it explicitly
    if isinstance(obj, bool) or not isinstance(obj, int) or obj < 1:
        raise RosterError(f"Expected a positive integer id in {ctx}, got {obj!r}")
    return obj


def _slot(text: Any, ctx: str) -> TimeSlot:
    if not isinstance(text, str):
        raise RosterError(f"Expected a slot string in {ctx}, got {type(text).__name__}")
    try:
        return TimeSlot.parse(text)
    except ValueError as e:
        raise RosterError(f"Bad slot in {ctx}: {e}") from e


def _check_unique_ids(items: Sequence[Any], ctx: str) -> None:
    seen: set = set()
    dupes: set = set()
    for item in items:
        if item.id in seen:
            dupes.add(item.id)
        seen.add(item.id)
    if dupes:
        raise RosterError(f"Duplicate ids in {ctx}: {sorted(dupes)}")


def _build_student(raw: Any, ctx: str) -> Student:
    raw = _as_dict(raw, ctx)
    student = Student(
        id   = _as_id(_require(raw, "id", ctx), f"{ctx}.id"),
        name = str(_require(raw, "name", ctx)),
    )
    for c in _as_list(raw.get("courses", []), f"{ctx}.courses"):
        student.add_course(str(c))
    for j, s in enumerate(_as_list(raw.get("availability", []), f"{ctx}.availability")):
        student.add_availability(_slot(s, f"{ctx}.availability[{j}]"))
    return student


def _build_session(raw: Any, ctx: str, known_students: set) -> StudySession:
    raw = _as_dict(raw, ctx)
    participants = [
        _as_id(x, f"{ctx}.participant_ids")
        for x in _as_list(raw.get("participant_ids", []), f"{ctx}.participant_ids")
    ]
    confirmed = [
        _as_id(x, f"{ctx}.confirmed_ids")
        for x in _as_list(raw.get("confirmed_ids", []), f"{ctx}.confirmed_ids")
    ]
    unknown = [sid for sid in participants if sid not in known_students]
    if unknown:
        raise RosterError(f"{ctx} references unknown student id(s): {unknown}")
    try:
        return StudySession(
            id              = _as_id(_require(raw, "id", ctx), f"{ctx}.id"),
            course          = str(_require(raw, "course", ctx)),
            time            = _slot(_require(raw, "time", ctx), f"{ctx}.time"),
            participant_ids = participants,
            confirmed_ids   = confirmed,
        )
    except RosterError:
        raise
    except ValueError as e:
        raise RosterError(f"{ctx}: {e}") from e


def load_roster(path: str | Path, repo: Repository | None = None) -> Repository:
    """Load students and sessions from a JSON file into a (new) Repository."""
    with Path(path).open("r", encoding="utf-8") as f:
        raw = json.load(f)

    raw          = _as_dict(raw, "root")
    students_raw = _as_list(_require(raw, "students", "root"), "students")
    sessions_raw = _as_list(raw.get("sessions") or [], "sessions")

    students = [_build_student(s, f"students[{i}]") for i, s in enumerate(students_raw)]
    _check_unique_ids(students, "students")

    known = {s.id for s in students}
    sessions = [
        _build_session(s, f"sessions[{i}]", known) for i, s in enumerate(sessions_raw)
    ]
    _check_unique_ids(sessions, "sessions")

    repo = repo if repo is not None else Repository()
    for student in students:
        repo.add_student(student)
    for session in sessions:
        repo.add_session(session)
    logger.info("loaded %d student(s), %d session(s) from %s",
                len(students), len(sessions), path)
    return repo


def suggestions_to_list(suggestions: Mapping[Student, Sequence[TimeSlot]]) -> List[Dict[str, Any]]:
    """JSON-friendly view of a suggest_matches() result, one entry per peer."""
    return [
        {"id": peer.id, "name": peer.name, "windows": [str(w) for w in windows]}
        for peer, windows in suggestions.items()
    ]


def save_suggestions(suggestions: Mapping[Student, Sequence[TimeSlot]], path: str | Path) -> None:
    """Write suggestions to JSON, creating parent directories if needed."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8") as f:
        # ensure_ascii=False preserves accented names.
        json.dump(suggestions_to_list(suggestions), f, ensure_ascii=False, indent=2)
