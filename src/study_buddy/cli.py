"""
Command-line interface for Study Buddy.

Usage examples:
    python -m study_buddy.cli
    python -m study_buddy.cli --roster data/roster.json
    python -m study_buddy.cli --roster data/roster.json --match 1 --course "CPSC 3720"
    python -m study_buddy.cli --match 1 --course "cpsc 3720" --out matches.json

Without --match the program is interactive: it creates your profile, then
loops over a menu (availability, classmates, matches, sessions).

Exit codes:
    0  normal exit
    1  bad arguments or unreadable roster
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Callable, Collection, List, Optional

from .controllers import (AvailabilityController, ProfileController,
    SessionController)
from .io_json import RosterError, load_roster, save_suggestions, suggestions_to_list
from .models import Student, StudySession, TimeSlot, normalize_course, parse_day, parse_time
from .repository import Repository
from .seed import COURSE_CATALOG, seed_demo

logger = logging.getLogger(__name__)

MENU = (
    "\n1) Manage availability (add/remove)\n"
    "2) View classmates in my course\n"
    "3) Suggest matches (overlaps)\n"
    "4) Search sessions (all / by course / by name)\n"
    "5) Create a new session\n"
    "6) Join an existing session\n"
    "7) Confirm my meetings\n"
    "8) View students' availability\n"
    "0) Exit"
)


class StudyBuddyCLI:
    """Interactive menu loop over a single Repository.

    input_fn is injectable so tests can script a whole session.
    """

    def __init__(self, repo: Repository, input_fn: Callable[[str], str] = input) -> None:
        self.repo        = repo
        self.profile_ctl = ProfileController(repo)
        self.avail_ctl   = AvailabilityController(repo)
        self.session_ctl = SessionController(repo)
        self._input      = input_fn
        self.active_student_id: Optional[int] = None

    # ---- main loop -----------------------------------------------------------

    def run(self) -> None:
        print("\n=== Study Buddy (CLI) ===")
        try:
            self.prompt_create_profile()
            while True:
                print(f"\nActive: {self.me}")
                print(MENU)
                choice = self.prompt("Select> ")
                if choice == "0":
                    print("Goodbye!")
                    return
                action = self._actions().get(choice)
                if action is None:
                    print("Unknown option")
                    continue
                try:
                    action()
                except (ValueError, LookupError) as e:
                    # InvalidRangeError and the controller errors land here
                    print(f"Error: {e}")
        except EOFError:
            print("\nGoodbye!")

    def _actions(self):
        return {
            "1": self.manage_availability,
            "2": self.view_classmates,
            "3": self.suggest_matches,
            "4": self.search_sessions,
            "5": self.create_new_session,
            "6": self.join_session,
            "7": self.confirm_my_meetings,
            "8": self.view_all_availability,
        }

    @property
    def me(self) -> Student:
        student = self.repo.get_student(self.active_student_id)
        if student is None:
            raise LookupError("No active profile")
        return student

    # ---- startup -------------------------------------------------------------

    def prompt_create_profile(self) -> Student:
        print("\n-- Create Your Profile --")
        while True:
            try:
                name = self.prompt("Your name: ")
                student = self.profile_ctl.create_profile(name, self.choose_courses())
                break
            except ValueError as e:
                print(f"Error: {e}")
        self.active_student_id = student.id
        print(f"Welcome, {student.name}! Profile created.")
        return student

    def choose_courses(self) -> List[str]:
        print("Enroll in one or more courses (comma-separated indices):")
        for i, c in enumerate(COURSE_CATALOG):
            print(f"  [{i}] {c}")
        picked: List[int] = []
        for part in self.prompt("Choose (e.g., 0 or 0,1): ").split(","):
            part = part.strip()
            if not part:
                continue
            i = _parse_int(part)
            if not 0 <= i < len(COURSE_CATALOG):
                raise ValueError(f"Invalid index: {i}")
            if i not in picked:
                picked.append(i)
        if not picked:
            raise ValueError("Select at least one course.")
        return [COURSE_CATALOG[i] for i in sorted(picked)]

    # ---- actions -------------------------------------------------------------

    def manage_availability(self) -> None:
        me = self.me
        print("\nYour availability:")
        for i, slot in enumerate(me.availability):
            print(f"  [{i}] {slot}")
        print("a) add, r) remove, x) back")
        ch = self.prompt("> ").lower()
        if ch == "a":
            slot = self.prompt_slot()
            self.avail_ctl.add_availability(me.id, slot)
            print("Added.")
        elif ch == "r":
            idx = _parse_int(self.prompt("Index to remove: "))
            ok = self.avail_ctl.remove_availability(me.id, idx)
            print("Removed." if ok else "Invalid index.")

    def view_classmates(self) -> None:
        course = self.pick_course_from_mine()
        peers = self.session_ctl.classmates(self.me.id, course)
        if not peers:
            print("No classmates found for that course.")
            return
        print(f"Classmates in {course}:")
        for s in peers:
            print(f"  - {s}")

    def suggest_matches(self) -> None:
        course = self.pick_course_from_mine()
        suggestions = self.session_ctl.suggest_matches(self.me.id, course)
        if not suggestions:
            print("No overlapping availability found.")
            return
        print("\nSuggested matches (overlaps):")
        for peer, windows in suggestions.items():
            print(f"* {peer}")
            for w in windows:
                print(f"    - {w}")

    def search_sessions(self) -> None:
        print("\nSearch sessions: a) all, c) by course, n) by name, x) back")
        ch = self.prompt("> ").lower()
        if ch == "a":
            for s in self.session_ctl.all_sessions():
                self.print_session_line(s)
        elif ch == "c":
            found = self.session_ctl.search_by_course(self.prompt("Course (e.g., CPSC 3720): "))
            if not found:
                print("No sessions for that course.")
            for s in found:
                self.print_session_line(s)
        elif ch == "n":
            found = self.session_ctl.search_by_student_name(self.prompt("Student name contains: "))
            if not found:
                print("No sessions involving that name.")
            for s in found:
                self.print_session_line(s)

    def create_new_session(self) -> None:
        course = self.pick_course_from_mine()
        slot = self.prompt_slot()
        session = self.session_ctl.create(course, slot, [self.me.id])
        print("Created session:")
        self.print_session_line(session)

    def join_session(self) -> None:
        sessions = self.session_ctl.all_sessions()
        if not sessions:
            print("No sessions available.")
            return
        print("\nSessions:")
        for s in sessions:
            self.print_session_line(s)
        session_id = _parse_int(self.prompt("Enter session ID to join: "))
        self.session_ctl.join(session_id, self.me.id)
        print(f"Joined session {session_id}.")

    def confirm_my_meetings(self) -> None:
        me = self.me
        mine = self.session_ctl.sessions_for(me.id)
        if not mine:
            print("You are not in any sessions yet. Join or create one first.")
            return
        print("\nYour sessions:")
        for s in mine:
            self.print_session_line(s)

        pick = self.prompt("Enter session ID to confirm (or blank to cancel): ")
        if not pick:
            return
        target = self.session_ctl.get_session(_parse_int(pick))
        if target is None or not target.is_participant(me.id):
            print("Invalid choice.")
            return
        print(f"Are you sure you want to meet for {target.course} at {target.time} "
              f"with participants {self.names(target.participant_ids)}? "
              "Type 'confirm' to proceed: ")
        if self.prompt("").lower() == "confirm":
            self.session_ctl.confirm(target.id, me.id)
            tail = "(All participants confirmed!)" if target.is_fully_confirmed() else ""
            print(f"Confirmed. {tail}".rstrip())
        else:
            print("Not confirmed.")

    def view_all_availability(self) -> None:
        print("\n-- Students' Availability --")
        for s in self.repo.all_students():
            print(f"  {s.name} ([{', '.join(s.courses)}]):")
            if not s.availability:
                print("    (no availability added)")
            for slot in s.availability:
                print(f"    - {slot}")

    # ---- helpers -------------------------------------------------------------

    def prompt(self, msg: str) -> str:
        return self._input(msg).strip()

    def prompt_slot(self) -> TimeSlot:
        day   = parse_day(self.prompt("Day (Mon..Sun): "))
        start = parse_time(self.prompt("Start (HH:MM): "))
        end   = parse_time(self.prompt("End   (HH:MM): "))
        return TimeSlot(day, start, end)

    def pick_course_from_mine(self) -> str:
        mine = list(self.me.courses)
        if not mine:
            raise ValueError("You must be enrolled in at least one course.")
        for i, c in enumerate(mine):
            print(f"  [{i}] {c}")
        idx = _parse_int(self.prompt("Choose your course index: "))
        if not 0 <= idx < len(mine):
            raise ValueError("Invalid index")
        return mine[idx]

    def names(self, ids: Collection[int]) -> List[str]:
        return [s.name for s in (self.repo.get_student(i) for i in ids) if s is not None]

    def print_session_line(self, s: StudySession) -> None:
        tail = " (ALL CONFIRMED)" if s.is_fully_confirmed() else ""
        print(f"  [{s.id}] {s.course} | {s.time} | participants={self.names(s.participant_ids)}"
              f" | confirmed={self.names(s.confirmed_ids)}{tail}")


def _parse_int(text: str) -> int:
    try:
        return int(text)
    except ValueError:
        raise ValueError(f"Expected a number, got {text!r}") from None


def _build_repo(args: argparse.Namespace) -> Repository:
    if args.roster:
        return load_roster(args.roster)
    repo = Repository()
    if not args.no_seed:
        seed_demo(repo)
        logger.debug("seeded demo roster (%d students)", len(repo.all_students()))
    return repo


def _run_match(repo: Repository, args: argparse.Namespace) -> int:
    student = repo.get_student(args.match)
    if student is None:
        print(f"[WARNING] Unknown student id {args.match}", file=sys.stderr)
    suggestions = SessionController(repo).suggest_matches(args.match, args.course)
    print(f"Matches for student {args.match} in {normalize_course(args.course)}:")
    if not suggestions:
        print("  (none)")
    for peer, windows in suggestions.items():
        print(f"  {peer.name} [{peer.id}]: {', '.join(str(w) for w in windows)}")
    if args.out:
        save_suggestions(suggestions, args.out)
        print(f"\nMatches written to: {args.out}")
    elif args.json:
        print(json.dumps(suggestions_to_list(suggestions), ensure_ascii=False, indent=2))
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(
        description="Study Buddy — find classmates with overlapping free time",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "examples:\n"
            "  study-buddy\n"
            "  study-buddy --roster roster.json --match 1 --course 'CPSC 3720'\n"
        ),
    )
    parser.add_argument("--roster", default=None, metavar="FILE",
                        help="load students/sessions from this JSON file instead of the demo seed")
    parser.add_argument("--no-seed", action="store_true",
                        help="start with an empty roster (ignored with --roster)")
    parser.add_argument("--match", type=int, default=None, metavar="STUDENT_ID",
                        help="print match suggestions for this student and exit")
    parser.add_argument("--course", default=None, metavar="CODE",
                        help="course code for --match")
    parser.add_argument("--out", default=None, metavar="FILE",
                        help="with --match, write suggestions JSON to this path")
    parser.add_argument("--json", action="store_true",
                        help="with --match, also print suggestions as JSON")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.match is not None and not args.course:
        parser.error("--match requires --course")

    # ── 1. load roster ────────────────────────────────────────────────────────
    try:
        repo = _build_repo(args)
    except FileNotFoundError:
        print(f"[ERROR] File not found: {args.roster}", file=sys.stderr)
        sys.exit(1)
    except (RosterError, ValueError) as e:
        print(f"[ERROR] Could not load roster: {e}", file=sys.stderr)
        sys.exit(1)

    # ── 2. batch match or interactive loop ───────────────────────────────────
    if args.match is not None:
        sys.exit(_run_match(repo, args))

    StudyBuddyCLI(repo).run()
    sys.exit(0)


if __name__ == "__main__":
    main()
