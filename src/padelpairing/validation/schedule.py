"""Schedule checker - compliance report for generated padel schedules.

Structural criteria (S1-S4) must always hold for a generated schedule;
fairness criteria (Q1-Q3) describe how well the heuristics did and are
reported as quality warnings.
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

from collections import defaultdict
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence

from padelpairing.constants import MAX_MATCHES_PER_PLAYER
from padelpairing.models.player import Player
from padelpairing.models.tournament.match import Match
from padelpairing.pairing.tracking import all_pairs, build_tracking
from padelpairing.tournament import Tournament
from padelpairing.utils import setup_logger

logger = setup_logger(__name__)


class CriterionStatus(Enum):
    """Status of a schedule criterion."""

    COMPLIANT = "COMPLIANT"
    VIOLATION = "VIOLATION"
    NOT_APPLICABLE = "NOT_APPLICABLE"


class ViolationType(Enum):
    STRUCTURAL = "STRUCTURAL"  # S1-S4: must not violate
    QUALITY = "QUALITY"  # Q1-Q3: should minimize


@dataclass
class CriterionResult:
    """Result of checking a single criterion."""

    criterion: str
    status: CriterionStatus
    violation_type: Optional[ViolationType] = None
    description: str = ""
    details: Dict[str, object] = field(default_factory=dict)

    @property
    def criterion_id(self) -> str:
        return self.criterion.split(":")[0].strip()

    @property
    def is_violation(self) -> bool:
        return self.status == CriterionStatus.VIOLATION


@dataclass
class ValidationReport:
    """Complete validation report for a schedule."""

    total_criteria: int
    compliant_count: int
    violations: List[CriterionResult]
    overall_status: CriterionStatus
    summary: str
    quality_warnings: List[CriterionResult] = field(default_factory=list)
    criteria_results: List[CriterionResult] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.overall_status == CriterionStatus.COMPLIANT

    @property
    def compliance_percentage(self) -> float:
        if self.total_criteria == 0:
            return 100.0
        return (self.compliant_count / self.total_criteria) * 100.0

    def get(self, criterion_id: str) -> Optional[CriterionResult]:
        for result in self.criteria_results:
            if result.criterion_id == criterion_id:
                return result
        return None


def _compliant(criterion: str, description: str) -> CriterionResult:
    return CriterionResult(
        criterion=criterion,
        status=CriterionStatus.COMPLIANT,
        description=description,
    )


def _rounds(matches: Sequence[Match]) -> Dict[int, List[Match]]:
    by_round: Dict[int, List[Match]] = defaultdict(list)
    for match in matches:
        by_round[match.round_number].append(match)
    return by_round


class StructuralCriteriaChecker:
    """Checks that hold for every valid schedule (S1-S4)."""

    def check_s1_match_players(
        self, players: Sequence[Player], matches: Sequence[Match]
    ) -> CriterionResult:
        """S1: Four distinct registered players per match."""
        roster = {p.id for p in players}
        for match in matches:
            ids = match.player_ids
            unknown = [pid for pid in ids if pid not in roster]
            if len(set(ids)) != len(ids) or unknown:
                return CriterionResult(
                    criterion="S1: Match players",
                    status=CriterionStatus.VIOLATION,
                    violation_type=ViolationType.STRUCTURAL,
                    description=f"Invalid players in {match}",
                    details={"match_id": match.id, "unknown_ids": unknown},
                )
        return _compliant("S1: Match players", "Every match has four distinct players")

    def check_s2_no_double_booking(self, matches: Sequence[Match]) -> CriterionResult:
        """S2: No player appears twice in the same round."""
        for round_number, round_matches in sorted(_rounds(matches).items()):
            seen = set()
            for match in round_matches:
                clash = seen.intersection(match.player_ids)
                if clash:
                    return CriterionResult(
                        criterion="S2: No double booking",
                        status=CriterionStatus.VIOLATION,
                        violation_type=ViolationType.STRUCTURAL,
                        description=f"Player booked twice in round {round_number}",
                        details={"round": round_number, "player_ids": sorted(clash)},
                    )
                seen.update(match.player_ids)
        return _compliant(
            "S2: No double booking", "No player is booked twice per round"
        )

    def check_s3_sequential_courts(self, matches: Sequence[Match]) -> CriterionResult:
        """S3: Courts of each round are numbered 1..k."""
        for round_number, round_matches in sorted(_rounds(matches).items()):
            courts = sorted(m.court_number for m in round_matches)
            if courts != list(range(1, len(courts) + 1)):
                return CriterionResult(
                    criterion="S3: Sequential courts",
                    status=CriterionStatus.VIOLATION,
                    violation_type=ViolationType.STRUCTURAL,
                    description=f"Round {round_number} uses courts {courts}",
                    details={"round": round_number, "courts": courts},
                )
        return _compliant(
            "S3: Sequential courts", "Courts are numbered 1..k in every round"
        )

    def check_s4_sequential_rounds(self, matches: Sequence[Match]) -> CriterionResult:
        """S4: Rounds are numbered 1..n without gaps."""
        rounds = sorted(_rounds(matches))
        if rounds != list(range(1, len(rounds) + 1)):
            return CriterionResult(
                criterion="S4: Sequential rounds",
                status=CriterionStatus.VIOLATION,
                violation_type=ViolationType.STRUCTURAL,
                description=f"Round numbers are not contiguous from 1: {rounds}",
                details={"rounds": rounds},
            )
        return _compliant("S4: Sequential rounds", "Rounds are numbered 1..n")


class QualityCriteriaChecker:
    """Fairness of the schedule (Q1-Q3)."""

    def check_q1_equal_match_counts(
        self, players: Sequence[Player], matches: Sequence[Match]
    ) -> CriterionResult:
        """Q1: Every player has the same number of matches."""
        tracking = build_tracking(players, matches)
        if tracking.all_counts_equal():
            return _compliant(
                "Q1: Equal match counts",
                f"Every player has {tracking.max_match_count()} matches",
            )
        return CriterionResult(
            criterion="Q1: Equal match counts",
            status=CriterionStatus.VIOLATION,
            violation_type=ViolationType.QUALITY,
            description=(
                f"Match counts range from {tracking.min_match_count()} "
                f"to {tracking.max_match_count()}"
            ),
            details={"match_count": dict(tracking.match_count)},
        )

    def check_q2_partner_coverage(
        self, players: Sequence[Player], matches: Sequence[Match]
    ) -> CriterionResult:
        """Q2: Every pair of players has partnered at least once.

        Only applicable when players can partner everybody, i.e. when there
        are at most ``MAX_MATCHES_PER_PLAYER + 1`` players.
        """
        if len(players) - 1 > MAX_MATCHES_PER_PLAYER:
            return CriterionResult(
                criterion="Q2: Partner coverage",
                status=CriterionStatus.NOT_APPLICABLE,
                description=f"{len(players)} players cannot all partner each other",
            )

        tracking = build_tracking(players, matches)
        missing = all_pairs(players) - tracking.used_partner_pairs
        if not missing:
            return _compliant("Q2: Partner coverage", "Every pair has partnered")
        return CriterionResult(
            criterion="Q2: Partner coverage",
            status=CriterionStatus.VIOLATION,
            violation_type=ViolationType.QUALITY,
            description=f"{len(missing)} pairs never partnered",
            details={"missing_pairs": sorted(sorted(pair) for pair in missing)},
        )

    def check_q3_repeated_partners(
        self, players: Sequence[Player], matches: Sequence[Match]
    ) -> CriterionResult:
        """Q3: No pair partners more often than needed."""
        tracking = build_tracking(players, matches)
        repeats = {
            tuple(sorted(pair)): count
            for pair, count in tracking.partner_count.items()
            if count > 1
        }
        if not repeats:
            return _compliant("Q3: Repeated partners", "No pair partnered twice")
        return CriterionResult(
            criterion="Q3: Repeated partners",
            status=CriterionStatus.VIOLATION,
            violation_type=ViolationType.QUALITY,
            description=f"{len(repeats)} pairs partnered more than once",
            details={"repeated_pairs": repeats},
        )


class ScheduleValidator:
    """Runs every criterion over a list of matches."""

    def __init__(self):
        self.structural_checker = StructuralCriteriaChecker()
        self.quality_checker = QualityCriteriaChecker()

    def validate_schedule(
        self, players: Sequence[Player], matches: Sequence[Match]
    ) -> ValidationReport:
        """Validate a schedule for the given roster."""
        logger.info(
            "Validating schedule of %s matches for %s players",
            len(matches),
            len(players),
        )
        structural = self.structural_checker
        quality = self.quality_checker
        all_results = [
            structural.check_s1_match_players(players, matches),
            structural.check_s2_no_double_booking(matches),
            structural.check_s3_sequential_courts(matches),
            structural.check_s4_sequential_rounds(matches),
            quality.check_q1_equal_match_counts(players, matches),
            quality.check_q2_partner_coverage(players, matches),
            quality.check_q3_repeated_partners(players, matches),
        ]

        compliant_count = sum(
            1 for r in all_results if r.status == CriterionStatus.COMPLIANT
        )
        structural_violations = [
            r
            for r in all_results
            if r.is_violation and r.violation_type == ViolationType.STRUCTURAL
        ]
        quality_warnings = [
            r
            for r in all_results
            if r.is_violation and r.violation_type == ViolationType.QUALITY
        ]

        if structural_violations:
            overall_status = CriterionStatus.VIOLATION
            summary = (
                f"Structural violations detected - {len(structural_violations)} "
                f"criteria failed; {len(quality_warnings)} quality warnings"
            )
        else:
            overall_status = CriterionStatus.COMPLIANT
            summary = (
                f"Structural criteria satisfied; {len(quality_warnings)} "
                "quality criteria flagged"
            )

        logger.info("Schedule validation complete: %s", summary)
        return ValidationReport(
            total_criteria=len(all_results),
            compliant_count=compliant_count,
            violations=structural_violations,
            overall_status=overall_status,
            summary=summary,
            quality_warnings=quality_warnings,
            criteria_results=all_results,
        )

    def validate_tournament(self, tournament: Tournament) -> ValidationReport:
        return self.validate_schedule(tournament.player_list, tournament.matches)
