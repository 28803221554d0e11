"""Mexicano match generation.

Mexicano tournaments are played one round at a time. The first round is
drawn at random; every later round groups the active players by current
ranking so that similarly placed players meet, with the 1st and 3rd
ranked of each group playing against the 2nd and 4th.
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
from typing import List

from padelpairing.constants import PLAYERS_PER_MATCH
from padelpairing.models.enums import TournamentType
from padelpairing.models.player import Player
from padelpairing.models.tournament.match import Match
from padelpairing.pairing.base import TournamentScheduler, last_round_number
from padelpairing.pairing.tracking import TrackingState, build_tracking
from padelpairing.utils import setup_logger

logger = setup_logger(__name__)


def select_active_players(
    players: List[Player], tracking: TrackingState, courts: int, rng: random.Random
) -> List[Player]:
    """Pick who plays this round.

    Players with fewer matches go first, then those who sat out longest;
    remaining ties are broken at random. At most ``courts * 4`` players
    are selected.
    """
    ranked = sorted(
        players,
        key=lambda p: (
            tracking.matches_played(p.id),
            tracking.last_played_round.get(p.id, 0),
            rng.random(),
        ),
    )
    return ranked[: min(courts * PLAYERS_PER_MATCH, len(players))]


def matches_from_ordering(ordered: List[Player], round_number: int) -> List[Match]:
    """Cut an ordered list into groups of four: 1st+3rd vs 2nd+4th per court."""
    matches = []
    for court_index in range(len(ordered) // PLAYERS_PER_MATCH):
        start = court_index * PLAYERS_PER_MATCH
        q = ordered[start : start + PLAYERS_PER_MATCH]
        matches.append(
            Match(
                round_number=round_number,
                court_number=court_index + 1,
                team1=(q[0], q[2]),
                team2=(q[1], q[3]),
            )
        )
    return matches


class MexicanoScheduler(TournamentScheduler):
    """Generates Mexicano rounds, one per call."""

    tournament_type = TournamentType.MEXICANO

    def _generate_initial(
        self, players: List[Player], courts: int, rng: random.Random
    ) -> List[Match]:
        tracking = TrackingState.for_players(players)
        active = select_active_players(players, tracking, courts, rng)
        rng.shuffle(active)
        return matches_from_ordering(active, round_number=1)

    def _generate_extension(
        self,
        players: List[Player],
        existing_matches: List[Match],
        courts: int,
        rng: random.Random,
    ) -> List[Match]:
        tracking = build_tracking(players, existing_matches, played_only=True)
        round_number = last_round_number(existing_matches) + 1

        active = select_active_players(players, tracking, courts, rng)
        ranked = sorted(active, key=lambda p: (-p.total_points, rng.random()))
        logger.debug(
            "Round %s ranking: %s",
            round_number,
            ", ".join(f"{p.name} ({p.total_points})" for p in ranked),
        )
        return matches_from_ordering(ranked, round_number)
