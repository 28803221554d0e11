"""Greedy construction of one round of matches."""

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

from itertools import combinations
from typing import List, Optional, Sequence

from padelpairing.constants import CANDIDATE_WINDOW, PLAYERS_PER_MATCH
from padelpairing.models.player import Player
from padelpairing.models.tournament.match import Match
from padelpairing.pairing.tracking import (
    ScoringWeights,
    TeamSplit,
    TrackingState,
    score_split,
)
from padelpairing.utils import setup_logger

logger = setup_logger(__name__)


def find_best_configuration(
    available: Sequence[Player],
    tracking: TrackingState,
    weights: ScoringWeights,
    window: int = CANDIDATE_WINDOW,
) -> Optional[TeamSplit]:
    """
    Best 4-player group and team split among the first ``window`` players.

    Every 4-subset of the window is scored with :func:`score_split`; the
    first configuration with the lowest penalty wins. Returns None when
    fewer than four players are available.
    """
    candidates = list(available[: min(window, len(available))])
    if len(candidates) < PLAYERS_PER_MATCH:
        return None

    best: Optional[TeamSplit] = None
    for group in combinations(candidates, PLAYERS_PER_MATCH):
        split = score_split(*group, tracking, weights)
        if best is None or split.penalty < best.penalty:
            best = split
    return best


def build_round(
    pool: Sequence[Player],
    tracking: TrackingState,
    weights: ScoringWeights,
    max_matches: int,
    round_number: int,
    window: int = CANDIDATE_WINDOW,
) -> List[Match]:
    """Build up to ``max_matches`` matches for one round.

    Parameters
    ----------
        pool: Eligible players, already sorted by ascending match count
        tracking: History used for scoring (not modified)
        weights: Penalty weights for team splits
        max_matches: Court limit for the round
        round_number: Round number given to every match
        window: Size of the candidate window searched per court

    Returns
    -------
        Matches on courts 1..k, k <= max_matches. No player appears twice.
    """
    matches: List[Match] = []
    used_in_round = set()

    while len(matches) < max_matches:
        available = [p for p in pool if p.id not in used_in_round]
        best = find_best_configuration(available, tracking, weights, window)
        if best is None:
            break

        match = Match(
            round_number=round_number,
            court_number=len(matches) + 1,
            team1=best.team1,
            team2=best.team2,
        )
        matches.append(match)
        used_in_round.update(match.player_ids)

    logger.debug(
        "Round %s: built %s of %s matches (penalty weights %s)",
        round_number,
        len(matches),
        max_matches,
        weights,
    )
    return matches
