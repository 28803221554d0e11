"""Fairness tracking and team-split scoring for 2v2 match generation."""

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

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, NamedTuple, Sequence, Set, Tuple

from padelpairing.constants import (
    BALANCING_MATCH_COUNT_WEIGHT,
    BALANCING_REPEAT_OPPONENT_WEIGHT,
    BALANCING_REPEAT_PARTNER_WEIGHT,
    COVERAGE_MATCH_COUNT_WEIGHT,
    COVERAGE_REPEAT_OPPONENT_WEIGHT,
    COVERAGE_REPEAT_PARTNER_PENALTY,
)
from padelpairing.models.player import Player
from padelpairing.models.tournament.match import Match
from padelpairing.type_hints import PairKey, SplitOrder, Team

# The three ways to split a group of four into two teams, by position.
SPLIT_ORDERS: Tuple[SplitOrder, ...] = (
    (0, 1, 2, 3),  # (p1, p2) vs (p3, p4)
    (0, 2, 1, 3),  # (p1, p3) vs (p2, p4)
    (0, 3, 1, 2),  # (p1, p4) vs (p2, p3)
)


def pair_key(player1_id: str, player2_id: str) -> PairKey:
    """Canonical unordered pair of player ids: ``pair_key(a, b) == pair_key(b, a)``."""
    return frozenset((player1_id, player2_id))


def all_pairs(players: Sequence[Player]) -> Set[PairKey]:
    """Every unordered pair of distinct players."""
    return {
        pair_key(players[i].id, players[j].id)
        for i in range(len(players))
        for j in range(i + 1, len(players))
    }


@dataclass
class TrackingState:
    """
    Per-call accumulator of who has played, with whom, and against whom.

    A tracking state is built at the start of one generation call and
    discarded at its end; schedulers never keep one between calls.

    Attributes
    ----------
    match_count : dict of str to int
        Matches per player id.
    partner_count : dict of PairKey to int
        Times each pair of players has been on the same team.
    opponent_count : dict of PairKey to int
        Times each pair of players has been on opposite teams.
    used_partner_pairs : set of PairKey
        Pairs that have partnered at least once.
    last_played_round : dict of str to int
        Most recent round each player appeared in (0 if never).
    """

    match_count: Dict[str, int] = field(default_factory=dict)
    partner_count: Dict[PairKey, int] = field(default_factory=dict)
    opponent_count: Dict[PairKey, int] = field(default_factory=dict)
    used_partner_pairs: Set[PairKey] = field(default_factory=set)
    last_played_round: Dict[str, int] = field(default_factory=dict)

    @classmethod
    def for_players(cls, players: Iterable[Player]) -> "TrackingState":
        """Fresh state with zero counts for every player."""
        ids = [p.id for p in players]
        return cls(
            match_count={pid: 0 for pid in ids},
            last_played_round={pid: 0 for pid in ids},
        )

    def record_match(self, match: Match) -> None:
        """Add one match to every counter."""
        for player_id in match.player_ids:
            self.match_count[player_id] = self.match_count.get(player_id, 0) + 1
            self.last_played_round[player_id] = max(
                self.last_played_round.get(player_id, 0), match.round_number
            )

        for a, b in (match.team1_ids, match.team2_ids):
            key = pair_key(a, b)
            self.partner_count[key] = self.partner_count.get(key, 0) + 1
            self.used_partner_pairs.add(key)

        for a in match.team1_ids:
            for b in match.team2_ids:
                key = pair_key(a, b)
                self.opponent_count[key] = self.opponent_count.get(key, 0) + 1

    def matches_played(self, player_id: str) -> int:
        return self.match_count.get(player_id, 0)

    def times_partnered(self, player1_id: str, player2_id: str) -> int:
        return self.partner_count.get(pair_key(player1_id, player2_id), 0)

    def times_opposed(self, player1_id: str, player2_id: str) -> int:
        return self.opponent_count.get(pair_key(player1_id, player2_id), 0)

    def has_partnered(self, player1_id: str, player2_id: str) -> bool:
        return pair_key(player1_id, player2_id) in self.used_partner_pairs

    def min_match_count(self) -> int:
        return min(self.match_count.values(), default=0)

    def max_match_count(self) -> int:
        return max(self.match_count.values(), default=0)

    def all_counts_equal(self) -> bool:
        """True when every tracked player has played the same number of matches."""
        return len(set(self.match_count.values())) <= 1

    def sort_by_match_count(self, players: Iterable[Player]) -> List[Player]:
        """Players ordered by ascending match count (stable for ties)."""
        return sorted(players, key=lambda p: self.matches_played(p.id))


def build_tracking(
    players: Iterable[Player], matches: Iterable[Match], played_only: bool = False
) -> TrackingState:
    """Rebuild tracking from a list of matches.

    Parameters
    ----------
        players: Every player of the tournament (all start at zero)
        matches: Matches to count
        played_only: Only count matches with ``is_played`` set
    """
    state = TrackingState.for_players(players)
    for match in matches:
        if played_only and not match.is_played:
            continue
        state.record_match(match)
    return state


# ========== Team-split scoring ==========


@dataclass(frozen=True)
class ScoringWeights:
    """Penalty weights for choosing how four players are split into teams.

    Attributes
    ----------
    partner_penalty : int
        Penalty per team whose pair has partnered before. Applied once per
        used pair when ``proportional_partners`` is False, otherwise
        multiplied by the number of previous partnerships.
    opponent_penalty : int
        Penalty per previous meeting of each cross-team pair.
    match_count_weight : int
        Weight of the summed match counts of the four players, which favours
        groups of players who have played less.
    proportional_partners : bool
        See ``partner_penalty``.
    """

    partner_penalty: int
    opponent_penalty: int
    match_count_weight: int
    proportional_partners: bool


COVERAGE_WEIGHTS = ScoringWeights(
    partner_penalty=COVERAGE_REPEAT_PARTNER_PENALTY,
    opponent_penalty=COVERAGE_REPEAT_OPPONENT_WEIGHT,
    match_count_weight=COVERAGE_MATCH_COUNT_WEIGHT,
    proportional_partners=False,
)

BALANCING_WEIGHTS = ScoringWeights(
    partner_penalty=BALANCING_REPEAT_PARTNER_WEIGHT,
    opponent_penalty=BALANCING_REPEAT_OPPONENT_WEIGHT,
    match_count_weight=BALANCING_MATCH_COUNT_WEIGHT,
    proportional_partners=True,
)


class TeamSplit(NamedTuple):
    """Best split of a group of four and its penalty."""

    team1: Team
    team2: Team
    penalty: int


def split_penalty(
    team1: Team, team2: Team, tracking: TrackingState, weights: ScoringWeights
) -> int:
    """Penalty of playing ``team1`` against ``team2`` given the history so far."""
    penalty = 0

    for a, b in (team1, team2):
        if weights.proportional_partners:
            penalty += weights.partner_penalty * tracking.times_partnered(a.id, b.id)
        elif tracking.has_partnered(a.id, b.id):
            penalty += weights.partner_penalty

    for a in team1:
        for b in team2:
            penalty += weights.opponent_penalty * tracking.times_opposed(a.id, b.id)

    if weights.match_count_weight:
        penalty += weights.match_count_weight * sum(
            tracking.matches_played(p.id) for p in (*team1, *team2)
        )
    return penalty


def score_split(
    p1: Player,
    p2: Player,
    p3: Player,
    p4: Player,
    tracking: TrackingState,
    weights: ScoringWeights,
) -> TeamSplit:
    """
    Find the lowest-penalty way to split four players into two teams.

    The three splits are tried in the order of :data:`SPLIT_ORDERS`; on
    equal penalties the earlier split wins.
    """
    group = (p1, p2, p3, p4)
    best = None
    for a, b, c, d in SPLIT_ORDERS:
        team1 = (group[a], group[b])
        team2 = (group[c], group[d])
        penalty = split_penalty(team1, team2, tracking, weights)
        if best is None or penalty < best.penalty:
            best = TeamSplit(team1, team2, penalty)
    return best
