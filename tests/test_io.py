"""Tests for roster loading, structural validation and suggestion export."""
import json
from pathlib import Path

import pytest

from study_buddy.io_json import RosterError, load_roster, save_suggestions, suggestions_to_list
from study_buddy.matching import suggest_matches


def _roster() -> dict:
    return {
        "students": [
            {"id": 1, "name": "Alice", "courses": ["cpsc 3720"],
             "availability": ["MONDAY 14:00-16:00", "WEDNESDAY 10:00-11:30"]},
            {"id": 2, "name": "Bob", "courses": ["CPSC 3720"],
             "availability": ["MONDAY 15:00-17:00"]},
            {"id": 5, "name": "Élodie", "courses": ["MATH 3110"]},
        ],
        "sessions": [
            {"id": 1, "course": "CPSC 3720", "time": "MONDAY 15:00-16:00",
             "participant_ids": [1, 2], "confirmed_ids": [2]},
        ],
    }


def _write(tmp_path: Path, data) -> Path:
    path = tmp_path / "roster.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_load_roster(tmp_path: Path) -> None:
    repo = load_roster(_write(tmp_path, _roster()))
    alice = repo.get_student(1)
    assert alice.courses == ["CPSC 3720"]
    assert [str(s) for s in alice.availability] == ["MONDAY 14:00-16:00", "WEDNESDAY 10:00-11:30"]
    session = repo.get_session(1)
    assert session.confirmed_ids == [2]
    # counters continue after the highest loaded id
    assert repo.create_student("New").id == 6


def test_loaded_roster_drives_matching(tmp_path: Path) -> None:
    repo = load_roster(_write(tmp_path, _roster()))
    result = suggest_matches(repo, 1, "CPSC 3720")
    assert suggestions_to_list(result) == [
        {"id": 2, "name": "Bob", "windows": ["MONDAY 15:00-16:00"]}
    ]


def test_sessions_optional(tmp_path: Path) -> None:
    data = _roster()
    data["sessions"] = None
    repo = load_roster(_write(tmp_path, data))
    assert repo.all_sessions() == []


def test_missing_students_key(tmp_path: Path) -> None:
    with pytest.raises(RosterError, match="students"):
        load_roster(_write(tmp_path, {"sessions": []}))


def test_duplicate_ids_raise(tmp_path: Path) -> None:
    data = _roster()
    data["students"].append({"id": 2, "name": "Bob again"})
    with pytest.raises(RosterError, match="Duplicate"):
        load_roster(_write(tmp_path, data))


@pytest.mark.parametrize("bad_id", [0, -1, "3", True, None])
def test_bad_student_id(tmp_path: Path, bad_id) -> None:
    data = _roster()
    data["students"][0]["id"] = bad_id
    with pytest.raises(RosterError, match="id"):
        load_roster(_write(tmp_path, data))


def test_inverted_slot_is_reported(tmp_path: Path) -> None:
    data = _roster()
    data["students"][1]["availability"] = ["MONDAY 17:00-15:00"]
    with pytest.raises(RosterError, match=r"students\[1\]\.availability\[0\]"):
        load_roster(_write(tmp_path, data))


def test_unknown_participant(tmp_path: Path) -> None:
    data = _roster()
    data["sessions"][0]["participant_ids"] = [1, 9]
    with pytest.raises(RosterError, match="unknown student"):
        load_roster(_write(tmp_path, data))


def test_confirmed_must_be_participant(tmp_path: Path) -> None:
    data = _roster()
    data["sessions"][0]["confirmed_ids"] = [5]
    with pytest.raises(RosterError, match="not a participant"):
        load_roster(_write(tmp_path, data))


def test_root_must_be_object(tmp_path: Path) -> None:
    with pytest.raises(RosterError):
        load_roster(_write(tmp_path, []))


def test_save_suggestions(tmp_path: Path) -> None:
    repo = load_roster(_write(tmp_path, _roster()))
    out = tmp_path / "nested" / "matches.json"
    save_suggestions(suggest_matches(repo, 2, "cpsc 3720"), out)
    assert json.loads(out.read_text(encoding="utf-8")) == [
        {"id": 1, "name": "Alice", "windows": ["MONDAY 15:00-16:00"]}
    ]
