"""Command-line interface for Matchday.

Every subcommand loads the state file, applies one action through the
``TournamentStore`` and saves it again. ``interactive`` opens a shell that
keeps one store alive between commands.
"""

# Matchday
# Copyright (C) 2025  Matchday developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import argparse
import json
import logging
import os
import shlex
import sys
from typing import List, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import NestedCompleter
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.styles import Style

from matchday import __version__
from matchday.constants import DEFAULT_RATING, DEFAULT_STATE_FILE, STATE_FILE_ENV_VAR
from matchday.controllers.app_state import NewTournamentInput, TournamentStore
from matchday.exceptions import (
    MatchdayException,
    ParticipantNotFoundException,
    TournamentNotFoundException,
)
from matchday.models.enums import MatchStage, TournamentFormat
from matchday.models.tournament import Match, Participant, Tournament, TournamentSettings
from matchday.storage.json_store import JsonStateStore
from matchday.tournament import (
    build_standings,
    get_champion_name,
    get_runner_up_name,
    rank_for_display,
)
from matchday.utils import setup_logger
from matchday.utils.validation import validate_positive_integer, validate_rating

logger = setup_logger(__name__)


# ANSI color codes for terminal output
class Colors:
    HEADER = "\033[95m"
    OKBLUE = "\033[94m"
    OKGREEN = "\033[92m"
    WARNING = "\033[93m"
    FAIL = "\033[91m"
    ENDC = "\033[0m"
    BOLD = "\033[1m"


# Command definitions for help output and shell completion
COMMANDS = {
    "create": "Create a tournament (NAME --format F --participant NAME[:RATING] ...)",
    "list": "List tournaments",
    "select": "Select the current tournament",
    "show": "Show matches, standings and placement of a tournament",
    "fixtures": "Generate the opening fixtures",
    "simulate-match": "Simulate one match",
    "simulate-round": "Simulate every unplayed match of a round",
    "simulate-all": "Simulate until the tournament is complete",
    "result": "Record a manual result (WINNER or 'draw')",
    "rating": "Change a participant's rating",
    "reset": "Clear matches and return to NOT_STARTED",
    "delete": "Delete a tournament",
    "history": "Show career statistics",
    "export": "Write a transfer file",
    "import": "Replace all data with a transfer file",
    "clear": "Delete every tournament and all history",
}


# ========== Argument Parsing ==========


def parse_participant(value: str) -> Participant:
    """Parse ``NAME`` or ``NAME:RATING`` into a participant without id.

    Raises:
        argparse.ArgumentTypeError: If the rating part is not a number
    """
    name, sep, rating_text = value.rpartition(":")
    if not sep:
        return Participant(id="", name=value.strip(), rating=DEFAULT_RATING)
    result = validate_rating(rating_text.strip())
    if not result:
        raise argparse.ArgumentTypeError(result.error_message)
    return Participant(id="", name=name.strip(), rating=result.sanitized_value)


def positive_int(value: str) -> int:
    result = validate_positive_integer(value)
    if not result:
        raise argparse.ArgumentTypeError(result.error_message)
    return result.sanitized_value


def default_state_file() -> str:
    return os.environ.get(STATE_FILE_ENV_VAR, DEFAULT_STATE_FILE)


def _add_tournament_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-t",
        "--tournament",
        help="Tournament id or name (default: current tournament)",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="matchday",
        description="Run knockout, group, swiss and league tournaments",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--state-file",
        default=default_state_file(),
        help=f"State file (default: ${STATE_FILE_ENV_VAR} or {DEFAULT_STATE_FILE})",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command")

    create = subparsers.add_parser("create", help=COMMANDS["create"])
    create.add_argument("name", help="Tournament name")
    create.add_argument(
        "--format",
        required=True,
        choices=[f.value for f in TournamentFormat],
        type=str.upper,
        help="Tournament format",
    )
    create.add_argument(
        "-p",
        "--participant",
        dest="participants",
        action="append",
        type=parse_participant,
        default=[],
        help="Participant as NAME or NAME:RATING (repeatable)",
    )
    create.add_argument("--seed", type=int, help="Random seed for reproducibility")
    create.add_argument("--groups", type=positive_int, default=2, help="Group count")
    create.add_argument(
        "--advance", type=positive_int, default=2, help="Qualifiers per group"
    )
    create.add_argument("--rounds", type=positive_int, default=5, help="Swiss rounds")
    create.add_argument("--allow-draws", action="store_true", help="Allow draws")
    create.add_argument(
        "--face-twice", action="store_true", help="Meet every opponent twice"
    )

    subparsers.add_parser("list", help=COMMANDS["list"])

    select = subparsers.add_parser("select", help=COMMANDS["select"])
    select.add_argument("tournament", help="Tournament id or name")

    for name in ("show", "fixtures", "simulate-all", "reset"):
        sub = subparsers.add_parser(name, help=COMMANDS[name])
        _add_tournament_option(sub)

    simulate_match = subparsers.add_parser("simulate-match", help=COMMANDS["simulate-match"])
    simulate_match.add_argument("match", help="Match id")
    _add_tournament_option(simulate_match)

    simulate_round = subparsers.add_parser("simulate-round", help=COMMANDS["simulate-round"])
    simulate_round.add_argument("round", type=positive_int, help="Round number")
    _add_tournament_option(simulate_round)

    result = subparsers.add_parser("result", help=COMMANDS["result"])
    result.add_argument("match", help="Match id")
    result.add_argument("winner", help="Winner id or name, or 'draw'")
    _add_tournament_option(result)

    rating = subparsers.add_parser("rating", help=COMMANDS["rating"])
    rating.add_argument("participant", help="Participant id or name")
    rating.add_argument("value", type=float, help="New rating (0-100)")
    _add_tournament_option(rating)

    delete = subparsers.add_parser("delete", help=COMMANDS["delete"])
    delete.add_argument("tournament", help="Tournament id or name")

    subparsers.add_parser("history", help=COMMANDS["history"])

    export = subparsers.add_parser("export", help=COMMANDS["export"])
    export.add_argument("file", help="Output JSON file")

    import_parser = subparsers.add_parser("import", help=COMMANDS["import"])
    import_parser.add_argument("file", help="Transfer JSON file")

    subparsers.add_parser("clear", help=COMMANDS["clear"])
    subparsers.add_parser("interactive", help="Start the interactive shell")

    return parser


# ========== Lookups ==========


def resolve_tournament(store: TournamentStore, ref: Optional[str]) -> Tournament:
    """Find a tournament by id or case-insensitive name.

    Raises:
        TournamentNotFoundException: If nothing matches
    """
    state = store.state
    if ref is None:
        if state.current_tournament is None:
            raise TournamentNotFoundException("No tournament selected")
        return state.current_tournament
    found = state.get_tournament(ref)
    if found is not None:
        return found
    by_name = [t for t in state.tournaments if t.name.lower() == ref.strip().lower()]
    if not by_name:
        raise TournamentNotFoundException(f"Unknown tournament: {ref}")
    return by_name[0]


def resolve_participant(tournament: Tournament, ref: str) -> Participant:
    found = tournament.get_participant(ref)
    if found is not None:
        return found
    key = ref.strip().lower()
    for participant in tournament.participants:
        if participant.name_key == key:
            return participant
    raise ParticipantNotFoundException(
        f"Unknown participant in {tournament.name}: {ref}"
    )


# ========== Output ==========


def side_label(tournament: Tournament, participant_id: Optional[str]) -> str:
    if participant_id is None:
        return "BYE"
    participant = tournament.get_participant(participant_id)
    return participant.name if participant else participant_id


def format_match(tournament: Tournament, match: Match) -> str:
    a = side_label(tournament, match.player_a.participant_id)
    b = side_label(tournament, match.player_b.participant_id)
    if not match.played:
        outcome = "pending"
    elif match.winner is None:
        outcome = "draw"
    else:
        outcome = f"{side_label(tournament, match.winner)} wins"
    group = f" [{match.group_id}]" if match.group_id else ""
    return f"  {match.id}  {a} vs {b}{group}: {outcome}"


def print_tournament(tournament: Tournament) -> None:
    print(f"{Colors.BOLD}{tournament.name}{Colors.ENDC} ({tournament.id})")
    print(f"Format: {tournament.format.value}  Status: {tournament.status.value}")

    current_key = None
    for match in tournament.matches:
        key = (match.stage, match.round)
        if key != current_key:
            print(f"\n{match.stage.value} round {match.round}")
            current_key = key
        print(format_match(tournament, match))

    standings = tournament.standings or build_standings(
        tournament.participants,
        [m for m in tournament.matches if m.stage != MatchStage.KNOCKOUT or m.played],
    )
    print(f"\n{'#':>3} {'Name':<24}{'P':>4}{'W':>4}{'D':>4}{'L':>4}{'Pts':>5}{'Bh':>5}")
    for rank, participant in enumerate(
        rank_for_display(tournament.participants, standings), 1
    ):
        s = standings[participant.id]
        print(
            f"{rank:>3} {participant.name:<24}{s.played:>4}{s.wins:>4}{s.draws:>4}"
            f"{s.losses:>4}{s.points:>5}{s.buchholz:>5}"
        )

    champion = get_champion_name(tournament)
    if champion:
        print(f"\n{Colors.OKGREEN}Champion: {champion}{Colors.ENDC}")
        runner_up = get_runner_up_name(tournament)
        if runner_up:
            print(f"Runner-up: {runner_up}")


def print_history(store: TournamentStore) -> None:
    entries = sorted(
        store.state.participant_history.values(),
        key=lambda h: (-h.wins, -h.played, h.name),
    )
    if not entries:
        print("No history yet")
        return
    print(f"{'Name':<24}{'T':>4}{'P':>5}{'W':>5}{'D':>5}{'L':>5}{'Titles':>8}{'Finals':>8}")
    for h in entries:
        print(
            f"{h.name:<24}{h.tournaments:>4}{h.played:>5}{h.wins:>5}{h.draws:>5}"
            f"{h.losses:>5}{h.championships:>8}{h.finals:>8}"
        )


def print_commands_list() -> None:
    print(f"\n{Colors.BOLD}Available commands:{Colors.ENDC}")
    for name, description in COMMANDS.items():
        print(f"  {Colors.OKBLUE}{name:<16}{Colors.ENDC}{description}")
    print(f"  {Colors.OKBLUE}{'exit':<16}{Colors.ENDC}Leave the shell\n")


# ========== Dispatch ==========


def run_command(store: TournamentStore, args: argparse.Namespace) -> int:
    """Apply one parsed command to ``store``.

    Returns:
        Exit code
    """
    command = args.command

    if command == "create":
        settings = TournamentSettings(
            group_count=args.groups,
            advance_per_group=args.advance,
            rounds=args.rounds,
            random_seed=args.seed,
            allow_draws=args.allow_draws,
            face_opponents_twice=args.face_twice,
        )
        state = store.create_tournament(
            NewTournamentInput(args.name, args.format, args.participants, settings)
        )
        created = state.current_tournament
        print(
            f"Created {created.name} ({created.id}) with "
            f"{len(created.participants)} participants"
        )
        return 0

    if command == "list":
        for t in store.state.tournaments:
            marker = "*" if t.id == store.state.current_tournament_id else " "
            print(f"{marker} {t.id}  {t.name}  {t.format.value}  {t.status.value}")
        return 0

    if command == "select":
        store.select_tournament(resolve_tournament(store, args.tournament).id)
        return 0

    if command == "history":
        print_history(store)
        return 0

    if command == "export":
        with open(args.file, "w", encoding="utf-8") as f:
            json.dump(store.export_state(), f, indent=2)
        print(f"Exported to {args.file}")
        return 0

    if command == "import":
        with open(args.file, "r", encoding="utf-8") as f:
            payload = json.load(f)
        result = store.import_state(payload)
        if not result.ok:
            print(f"{Colors.FAIL}Import failed: {result.error}{Colors.ENDC}")
            return 1
        print(f"Imported {len(store.state.tournaments)} tournaments")
        return 0

    if command == "clear":
        store.clear_all()
        return 0

    if command == "delete":
        store.delete_tournament(resolve_tournament(store, args.tournament).id)
        return 0

    tournament = resolve_tournament(store, args.tournament)

    if command == "show":
        print_tournament(tournament)
        return 0
    if command == "fixtures":
        store.generate_fixtures(tournament.id)
    elif command == "simulate-match":
        store.simulate_match(tournament.id, args.match)
    elif command == "simulate-round":
        store.simulate_round(tournament.id, args.round)
    elif command == "simulate-all":
        store.simulate_all(tournament.id)
    elif command == "reset":
        store.reset_tournament(tournament.id)
    elif command == "result":
        winner_id = None
        if args.winner.lower() != "draw":
            winner_id = resolve_participant(tournament, args.winner).id
        before = tournament
        store.set_match_result(tournament.id, args.match, winner_id)
        if store.state.get_tournament(tournament.id) is before:
            print(
                f"{Colors.WARNING}Result not recorded: match unknown, "
                f"unchanged or locked{Colors.ENDC}"
            )
            return 1
    elif command == "rating":
        participant = resolve_participant(tournament, args.participant)
        store.update_participant_rating(tournament.id, participant.id, args.value)

    print_tournament(store.state.get_tournament(tournament.id))
    return 0


def create_completer() -> NestedCompleter:
    """Create completer for the interactive shell."""
    formats = {f.value: None for f in TournamentFormat}
    commands = {name: None for name in COMMANDS}
    commands["create"] = {"--format": formats}
    commands["help"] = {name: None for name in COMMANDS}
    commands["exit"] = None
    commands["quit"] = None
    return NestedCompleter.from_nested_dict(commands)


def run_interactive_mode(store: TournamentStore) -> int:
    """Run the interactive shell with autocomplete."""
    parser = create_parser()
    session = PromptSession(
        completer=create_completer(),
        history=InMemoryHistory(),
        style=Style.from_dict({"prompt": "#00aa00 bold"}),
    )
    print(f"{Colors.HEADER}Matchday {__version__}{Colors.ENDC}  (type 'help')")

    while True:
        try:
            user_input = session.prompt("matchday> ").strip()
        except KeyboardInterrupt:
            print(f"{Colors.WARNING}Use 'exit' or 'quit' to leave{Colors.ENDC}")
            continue
        except EOFError:
            break

        if not user_input:
            continue
        if user_input in ("exit", "quit", "q"):
            break
        if user_input in ("help", "?"):
            print_commands_list()
            continue

        try:
            parts = shlex.split(user_input)
        except ValueError as e:
            print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}")
            continue
        if parts[0] == "interactive":
            continue

        try:
            args = parser.parse_args(parts)
            if args.command is None:
                print_commands_list()
                continue
            run_command(store, args)
        except SystemExit:
            # argparse exits on bad input
            continue
        except (MatchdayException, OSError, json.JSONDecodeError) as e:
            print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}")

    print(f"{Colors.OKGREEN}Goodbye!{Colors.ENDC}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI.

    Returns:
        Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger("matchday").setLevel(logging.DEBUG)

    if args.command is None:
        parser.print_help()
        return 0

    store = TournamentStore(JsonStateStore(args.state_file))
    store.hydrate()

    if args.command == "interactive":
        return run_interactive_mode(store)

    try:
        return run_command(store, args)
    except (MatchdayException, OSError, json.JSONDecodeError) as e:
        logger.error(f"{args.command} failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
