"""Command-line testing tool for Padel Pairing.

Usage:
    python -m padelpairing.testing generate --type americano --players 8 --courts 2
    python -m padelpairing.testing simulate --type mexicano --players 12 --seed 7
    python -m padelpairing.testing validate --file tournament.json
"""

# Padel Pairing
# Copyright (C) 2025  Padel Pairing developers
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
import logging
import sys
from typing import List, Optional

from padelpairing.constants import DEFAULT_POINTS_PER_MATCH
from padelpairing.controllers.tournament import (
    load_tournament_file,
    save_tournament_file,
)
from padelpairing.exceptions import PadelPairingException
from padelpairing.models.enums import TournamentType
from padelpairing.pairing.base import last_round_number
from padelpairing.testing.rtg import RandomTournamentGenerator, ResultPattern, RTGConfig
from padelpairing.tournament import Tournament
from padelpairing.utils import set_log_level, setup_logger
from padelpairing.validation import CriterionStatus, ScheduleValidator, ValidationReport

logger = setup_logger(__name__)


# ANSI color codes for terminal output
class Colors:
    HEADER = "\033[95m"
    OKGREEN = "\033[92m"
    WARNING = "\033[93m"
    FAIL = "\033[91m"
    ENDC = "\033[0m"
    BOLD = "\033[1m"


def print_schedule(tournament: Tournament) -> None:
    for round_number in range(1, last_round_number(tournament.matches) + 1):
        print(f"\n{Colors.BOLD}Round {round_number}{Colors.ENDC}")
        for match in tournament.get_round(round_number):
            team1 = " & ".join(p.name for p in match.team1)
            team2 = " & ".join(p.name for p in match.team2)
            score = (
                f"  {match.score_team1}-{match.score_team2}" if match.is_played else ""
            )
            print(f"  Court {match.court_number}: {team1} vs {team2}{score}")


def print_standings(tournament: Tournament) -> None:
    print(f"\n{Colors.BOLD}Standings{Colors.ENDC}")
    for rank, standing in enumerate(tournament.get_standings(), start=1):
        player = standing.player
        bonus = f" (+{standing.bonus_points})" if standing.bonus_points else ""
        print(
            f"  {rank:2d}. {player.name:<16} {standing.display_total:4d}{bonus}"
            f"  W{player.wins} D{player.draws} L{player.losses}"
            f"  ({player.games_played} played)"
        )


def print_report(report: ValidationReport) -> None:
    print(f"\n{Colors.BOLD}Schedule validation:{Colors.ENDC}")
    for result in report.criteria_results:
        if result.status == CriterionStatus.COMPLIANT:
            colour = Colors.OKGREEN
        elif result.status == CriterionStatus.VIOLATION:
            colour = Colors.FAIL if result in report.violations else Colors.WARNING
        else:
            colour = ""
        print(f"  {colour}{result.criterion}: {result.description}{Colors.ENDC}")
    print(f"  Compliance: {report.compliance_percentage:.1f}%")
    print(f"  {report.summary}")


def _config_from_args(args: argparse.Namespace) -> RTGConfig:
    return RTGConfig(
        num_players=args.players,
        tournament_type=TournamentType(args.type),
        number_of_courts=args.courts,
        points_per_match=args.points,
        result_pattern=ResultPattern(args.pattern),
        seed=args.seed,
    )


def run_generate_command(args: argparse.Namespace) -> int:
    """Create a tournament and print its schedule."""
    rtg = RandomTournamentGenerator(_config_from_args(args))
    tournament = rtg.create_tournament()

    print(f"\n{Colors.BOLD}{tournament}{Colors.ENDC}")
    print(f"  Courts in use: {tournament.effective_courts}")
    print_schedule(tournament)

    if args.output:
        path = save_tournament_file(tournament, args.output)
        print(f"\n{Colors.OKGREEN}Tournament saved to: {path}{Colors.ENDC}")
    return 0


def run_simulate_command(args: argparse.Namespace) -> int:
    """Play a tournament with random scores and report on it."""
    config = _config_from_args(args)
    config.max_rounds = args.max_rounds
    config.continuations = args.continuations
    rtg = RandomTournamentGenerator(config)
    result = rtg.generate_complete_tournament()
    tournament = result.tournament

    print(f"\n{Colors.BOLD}{tournament}{Colors.ENDC}")
    print(f"  Matches recorded: {result.matches_recorded}")
    print(f"  Rounds: {last_round_number(tournament.matches)}")
    print(f"  Continuations: {result.continuations_used}")
    print(f"  Completed: {result.completed}")
    if args.show_schedule:
        print_schedule(tournament)
    print_standings(tournament)
    if result.validation_report is not None:
        print_report(result.validation_report)

    if args.output:
        path = save_tournament_file(tournament, args.output)
        print(f"\n{Colors.OKGREEN}Tournament saved to: {path}{Colors.ENDC}")
    return 0


def run_validate_command(args: argparse.Namespace) -> int:
    """Validate the schedule of a saved tournament."""
    tournament = load_tournament_file(args.file)
    print(f"\n{Colors.BOLD}Validating tournament: {tournament}{Colors.ENDC}")
    report = ScheduleValidator().validate_tournament(tournament)
    print_report(report)
    return 0 if report.is_valid else 2


def _add_tournament_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--type",
        choices=[t.value.lower() for t in TournamentType],
        default=TournamentType.AMERICANO.value.lower(),
    )
    parser.add_argument("--players", type=int, default=8, help="Number of players")
    parser.add_argument("--courts", type=int, default=2, help="Number of courts")
    parser.add_argument(
        "--points", type=int, default=DEFAULT_POINTS_PER_MATCH, help="Points per match"
    )
    parser.add_argument(
        "--pattern",
        choices=[p.value for p in ResultPattern],
        default=ResultPattern.REALISTIC.value,
    )
    parser.add_argument("--seed", type=int, help="Random seed")
    parser.add_argument("--output", help="Save the tournament as JSON")


def create_main_parser() -> argparse.ArgumentParser:
    """Create main argument parser."""
    parser = argparse.ArgumentParser(
        prog="padel-test",
        description="Testing CLI for Padel Pairing",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  padel-test generate --type americano --players 8 --courts 2
  padel-test simulate --type mexicano --players 12 --courts 3 --seed 7
  padel-test validate --file tournament.json
        """,
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    gen_parser = subparsers.add_parser("generate", help="Generate a schedule")
    _add_tournament_arguments(gen_parser)
    gen_parser.add_argument(
        "--verbose", "-v", action="store_true", default=argparse.SUPPRESS
    )
    gen_parser.set_defaults(func=run_generate_command)

    sim_parser = subparsers.add_parser("simulate", help="Simulate a full tournament")
    _add_tournament_arguments(sim_parser)
    sim_parser.add_argument("--max-rounds", type=int, default=50)
    sim_parser.add_argument("--continuations", type=int, default=0)
    sim_parser.add_argument("--show-schedule", action="store_true")
    sim_parser.add_argument(
        "--verbose", "-v", action="store_true", default=argparse.SUPPRESS
    )
    sim_parser.set_defaults(func=run_simulate_command)

    val_parser = subparsers.add_parser("validate", help="Validate a saved tournament")
    val_parser.add_argument("--file", required=True, help="Tournament file (JSON)")
    val_parser.add_argument(
        "--verbose", "-v", action="store_true", default=argparse.SUPPRESS
    )
    val_parser.set_defaults(func=run_validate_command)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for padel-test CLI."""
    parser = create_main_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        set_log_level(logging.DEBUG)

    if not hasattr(args, "func"):
        parser.print_help()
        return 0

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted")
        return 130
    except PadelPairingException as e:
        logger.error(f"{type(e).__name__}: {e}")
        print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
