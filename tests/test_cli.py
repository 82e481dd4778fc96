"""Scripted runs of the interactive CLI and the --match batch mode."""
import json
from pathlib import Path
from typing import Iterable

import pytest

from study_buddy.cli import StudyBuddyCLI, main
from study_buddy.repository import Repository
from study_buddy.seed import seed_demo


def _scripted(lines: Iterable[str]):
    it = iter(lines)

    def _input(_msg: str) -> str:
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    return _input


def _run(lines, repo: Repository = None) -> Repository:
    if repo is None:
        repo = Repository()
        seed_demo(repo)
    StudyBuddyCLI(repo, input_fn=_scripted(lines)).run()
    return repo


def test_profile_then_suggest_matches(capsys) -> None:
    repo = _run([
        "Tim", "0",                                   # profile: CPSC 3720
        "1", "a", "mon", "15:30", "18:00",            # add availability
        "3", "0",                                     # suggest matches
        "0",
    ])
    out = capsys.readouterr().out
    tim = repo.get_student(5)
    assert tim.courses == ["CPSC 3720"]
    assert "Welcome, Tim! Profile created." in out
    assert "* [1] Alice" in out
    assert "    - MONDAY 15:30-16:00" in out
    assert "    - MONDAY 15:30-17:00" in out
    assert out.rstrip().endswith("Goodbye!")


def test_invalid_range_is_reported_and_loop_continues(capsys) -> None:
    repo = _run([
        "Tim", "0,1",
        "1", "a", "Tue", "12:00", "11:00",
        "1", "r", "7",
        "0",
    ])
    out = capsys.readouterr().out
    assert "Error: End time must be after start time" in out
    assert "Invalid index." in out
    assert repo.get_student(5).availability == []


def test_bad_course_choice_reprompts(capsys) -> None:
    repo = _run(["Tim", "5", "Tim", "", "Tim", "1", "0"])
    out = capsys.readouterr().out
    assert "Error: Invalid index: 5" in out
    assert "Error: Select at least one course." in out
    assert repo.get_student(5).courses == ["MATH 3110"]


def test_join_and_confirm_session(capsys) -> None:
    repo = _run([
        "Tim", "1",
        "6", "1",              # CPSC session: not enrolled
        "6", "2",              # MATH session
        "7", "2", "confirm",
        "0",
    ])
    out = capsys.readouterr().out
    assert "Error: You must be enrolled in CPSC 3720 to join." in out
    assert "Joined session 2." in out
    session = repo.get_session(2)
    assert session.participant_ids == [3, 4, 5]
    assert session.confirmed_ids == [5]
    assert "Confirmed." in out


def test_create_and_search_sessions(capsys) -> None:
    repo = _run([
        "Tim", "0",
        "5", "0", "thursday", "12:00", "13:00",
        "4", "n", "tim",
        "4", "c", "math 3110",
        "8",
        "0",
    ])
    out = capsys.readouterr().out
    assert "[3] CPSC 3720 | THURSDAY 12:00-13:00 | participants=['Tim']" in out
    assert "[2] MATH 3110 | TUESDAY 10:30-11:30" in out
    assert "  Alice ([CPSC 3720]):" in out
    assert "    (no availability added)" in out
    assert len(repo.all_sessions()) == 3


def test_view_classmates_and_unknown_option(capsys) -> None:
    _run(["Tim", "1", "2", "0", "9", "0"])
    out = capsys.readouterr().out
    assert "Classmates in MATH 3110:" in out
    assert "  - [3] Jon" in out
    assert "Unknown option" in out


def test_eof_exits_cleanly(capsys) -> None:
    _run([])
    assert "Goodbye!" in capsys.readouterr().out


def test_batch_match(capsys) -> None:
    with pytest.raises(SystemExit) as exc:
        main(["--match", "1", "--course", "cpsc 3720", "--json"])
    assert exc.value.code == 0
    out = capsys.readouterr().out
    assert "Matches for student 1 in CPSC 3720:" in out
    assert "  Bob [2]: MONDAY 15:00-16:00" in out
    assert '"windows": [' in out


def test_batch_match_unknown_student(capsys) -> None:
    with pytest.raises(SystemExit) as exc:
        main(["--match", "99", "--course", "CPSC 3720"])
    assert exc.value.code == 0
    captured = capsys.readouterr()
    assert "(none)" in captured.out
    assert "[WARNING] Unknown student id 99" in captured.err


def test_batch_match_writes_json(tmp_path: Path) -> None:
    out = tmp_path / "matches.json"
    with pytest.raises(SystemExit):
        main(["--match", "3", "--course", "MATH 3110", "--out", str(out)])
    assert json.loads(out.read_text(encoding="utf-8")) == [
        {"id": 4, "name": "Mary", "windows": ["TUESDAY 10:00-11:00"]}
    ]


def test_missing_roster_file(tmp_path: Path, capsys) -> None:
    with pytest.raises(SystemExit) as exc:
        main(["--roster", str(tmp_path / "nope.json"), "--match", "1", "--course", "X"])
    assert exc.value.code == 1
    assert "[ERROR] File not found" in capsys.readouterr().err


def test_invalid_roster_file(tmp_path: Path, capsys) -> None:
    path = tmp_path / "bad.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(SystemExit) as exc:
        main(["--roster", str(path), "--match", "1", "--course", "X"])
    assert exc.value.code == 1
    assert "[ERROR] Could not load roster" in capsys.readouterr().err


def test_match_requires_course() -> None:
    with pytest.raises(SystemExit) as exc:
        main(["--match", "1"])
    assert exc.value.code == 2
