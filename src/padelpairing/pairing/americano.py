"""Americano match generation.

The whole Americano schedule is generated up front in two phases:

1. Coverage: round by round, pick the groups and team splits that create
   new partnerships, until every pair of players has partnered, everyone
   reached the target number of matches, or the round cap is hit.
2. Balancing: extra rounds for the players below the highest match count
   so that everybody ends with the same number of matches.

Extensions add single-match rounds for the least-played players until at
least two rounds were added and match counts are level again.
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

import random
from typing import List, Optional

from padelpairing.constants import (
    BALANCING_ITERATION_CAP,
    COVERAGE_ROUND_MARGIN,
    EXTENSION_ITERATION_CAP,
    MAX_MATCHES_PER_PLAYER,
    MIN_EXTENSION_ROUNDS,
    PLAYERS_PER_MATCH,
)
from padelpairing.models.enums import TournamentType
from padelpairing.models.player import Player
from padelpairing.models.tournament.match import Match
from padelpairing.pairing.base import TournamentScheduler, last_round_number
from padelpairing.pairing.round_builder import build_round
from padelpairing.pairing.tracking import (
    BALANCING_WEIGHTS,
    COVERAGE_WEIGHTS,
    TrackingState,
    all_pairs,
    build_tracking,
    pair_key,
    score_split,
)
from padelpairing.utils import setup_logger

logger = setup_logger(__name__)


def target_matches_per_player(player_count: int) -> int:
    """Matches each player should reach: one per possible partner, at most 8."""
    return min(player_count - 1, MAX_MATCHES_PER_PLAYER)


class AmericanoScheduler(TournamentScheduler):
    """Generates complete Americano schedules and their extensions.

    Americano generation is deterministic for a given player order; the
    random source is accepted for interface compatibility only.
    """

    tournament_type = TournamentType.AMERICANO

    def _generate_initial(
        self, players: List[Player], courts: int, rng: random.Random
    ) -> List[Match]:
        tracking = TrackingState.for_players(players)
        target = target_matches_per_player(len(players))

        matches = self._coverage_phase(players, courts, tracking, target)
        matches.extend(
            self._balancing_phase(
                players, courts, tracking, target, last_round_number(matches)
            )
        )
        return matches

    def _coverage_phase(
        self,
        players: List[Player],
        courts: int,
        tracking: TrackingState,
        target: int,
    ) -> List[Match]:
        """Generate rounds that maximise new partnerships."""
        remaining_pairs = all_pairs(players)
        matches: List[Match] = []
        max_rounds = target + COVERAGE_ROUND_MARGIN

        for round_number in range(1, max_rounds + 1):
            if not remaining_pairs:
                break
            if tracking.min_match_count() >= target:
                break

            eligible = [p for p in players if tracking.matches_played(p.id) < target]
            if len(eligible) < PLAYERS_PER_MATCH:
                break

            round_matches = build_round(
                tracking.sort_by_match_count(eligible),
                tracking,
                COVERAGE_WEIGHTS,
                max_matches=courts,
                round_number=round_number,
            )
            if not round_matches:
                break

            for match in round_matches:
                tracking.record_match(match)
                remaining_pairs.discard(pair_key(*match.team1_ids))
                remaining_pairs.discard(pair_key(*match.team2_ids))
            matches.extend(round_matches)

        logger.debug(
            "Coverage phase: %s matches, %s partner pairs never partnered",
            len(matches),
            len(remaining_pairs),
        )
        return matches

    def _balancing_phase(
        self,
        players: List[Player],
        courts: int,
        tracking: TrackingState,
        target: int,
        start_round: int,
    ) -> List[Match]:
        """Add rounds until every player has the same number of matches."""
        matches: List[Match] = []
        round_number = start_round
        iterations = 0

        while not tracking.all_counts_equal() and iterations < BALANCING_ITERATION_CAP:
            iterations += 1

            ceiling = min(tracking.max_match_count(), target)
            needing = [p for p in players if tracking.matches_played(p.id) < ceiling]
            if len(needing) < PLAYERS_PER_MATCH:
                break

            round_number += 1
            matches_to_create = max(1, min(len(needing) // PLAYERS_PER_MATCH, courts))
            # Window of four: groups are formed least-played first, only the
            # team split is optimised.
            round_matches = build_round(
                tracking.sort_by_match_count(needing),
                tracking,
                BALANCING_WEIGHTS,
                max_matches=matches_to_create,
                round_number=round_number,
                window=PLAYERS_PER_MATCH,
            )
            for match in round_matches:
                tracking.record_match(match)
            matches.extend(round_matches)

        if not tracking.all_counts_equal():
            logger.warning(
                "Balancing stopped with unequal match counts (min %s, max %s)",
                tracking.min_match_count(),
                tracking.max_match_count(),
            )
        return matches

    def _generate_extension(
        self,
        players: List[Player],
        existing_matches: List[Match],
        courts: int,
        rng: random.Random,
    ) -> List[Match]:
        tracking = build_tracking(players, existing_matches, played_only=True)
        start_round = last_round_number(existing_matches)
        round_number = start_round
        new_matches: List[Match] = []
        iterations = 0

        while iterations < EXTENSION_ITERATION_CAP:
            iterations += 1

            rounds_added = round_number - start_round
            if rounds_added >= MIN_EXTENSION_ROUNDS and tracking.all_counts_equal():
                break

            group = self._least_played_group(players, tracking)
            if group is None:
                break

            round_number += 1
            split = score_split(*group, tracking, BALANCING_WEIGHTS)
            match = Match(
                round_number=round_number,
                court_number=1,
                team1=split.team1,
                team2=split.team2,
            )
            new_matches.append(match)
            tracking.record_match(match)
        else:
            logger.warning(
                "Extension stopped after %s iterations (min %s, max %s matches)",
                EXTENSION_ITERATION_CAP,
                tracking.min_match_count(),
                tracking.max_match_count(),
            )

        return new_matches

    @staticmethod
    def _least_played_group(
        players: List[Player], tracking: TrackingState
    ) -> Optional[List[Player]]:
        """Players with the fewest matches, padded with the next-lowest."""
        ordered = tracking.sort_by_match_count(players)
        fewest = tracking.matches_played(ordered[0].id)
        group = [p for p in ordered if tracking.matches_played(p.id) == fewest]
        if len(group) < PLAYERS_PER_MATCH:
            fillers = [p for p in ordered if tracking.matches_played(p.id) > fewest]
            group.extend(fillers[: PLAYERS_PER_MATCH - len(group)])
        if len(group) < PLAYERS_PER_MATCH:
            return None
        return group[:PLAYERS_PER_MATCH]
