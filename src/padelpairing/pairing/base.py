"""Common interface of the tournament match generators."""

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
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Sequence

from padelpairing.exceptions import InvalidPlayerDataException
from padelpairing.models.enums import TournamentType
from padelpairing.models.player import Player
from padelpairing.models.tournament.match import Match
from padelpairing.utils import setup_logger
from padelpairing.utils.validation import effective_courts, validate_player_count_strict

logger = setup_logger(__name__)


def last_round_number(matches: Iterable[Match]) -> int:
    """Highest round number in ``matches``, 0 when empty."""
    return max((m.round_number for m in matches), default=0)


class TournamentScheduler(ABC):
    """Match generator for one tournament format.

    Schedulers hold no state between calls: every call rebuilds its
    tracking from the players and matches it is given, and draws all
    randomness from the ``rng`` argument (a fresh unseeded
    :class:`random.Random` when omitted). Pass a seeded ``random.Random``
    for reproducible schedules.
    """

    tournament_type: TournamentType

    def generate_initial_matches(
        self,
        players: Sequence[Player],
        number_of_courts: int,
        rng: Optional[random.Random] = None,
    ) -> List[Match]:
        """Generate the matches of a new tournament.

        Args:
            players: Tournament players (4..32)
            number_of_courts: Requested courts, clamped to the player pool
            rng: Random source for shuffles and tie-breaks

        Returns:
            Generated matches, rounds numbered from 1

        Raises:
            InvalidPlayerCountException: If there are not 4..32 players
        """
        players = self._checked_players(players)
        courts = effective_courts(len(players), number_of_courts)
        rng = rng if rng is not None else random.Random()

        matches = self._generate_initial(players, courts, rng)
        logger.info(
            "%s: generated %s initial matches over %s rounds "
            "(%s players, %s courts)",
            self.tournament_type.value,
            len(matches),
            last_round_number(matches),
            len(players),
            courts,
        )
        return matches

    def generate_extension_matches(
        self,
        players: Sequence[Player],
        existing_matches: Sequence[Match],
        number_of_courts: int,
        rng: Optional[random.Random] = None,
    ) -> List[Match]:
        """Generate further matches for an existing tournament.

        With no existing matches this is the same as
        :meth:`generate_initial_matches`.

        Returns:
            Only the new matches (possibly empty), numbered after the last
            existing round

        Raises:
            InvalidPlayerCountException: If there are not 4..32 players
        """
        players = self._checked_players(players)
        if not existing_matches:
            logger.info(
                "%s: no existing matches, generating initial schedule instead",
                self.tournament_type.value,
            )
            return self.generate_initial_matches(players, number_of_courts, rng)

        courts = effective_courts(len(players), number_of_courts)
        rng = rng if rng is not None else random.Random()

        matches = self._generate_extension(players, list(existing_matches), courts, rng)
        logger.info(
            "%s: generated %s extension matches after round %s",
            self.tournament_type.value,
            len(matches),
            last_round_number(existing_matches),
        )
        return matches

    @staticmethod
    def _checked_players(players: Sequence[Player]) -> List[Player]:
        players = list(players)
        validate_player_count_strict(len(players))
        ids = [p.id for p in players]
        if len(set(ids)) != len(ids):
            raise InvalidPlayerDataException("Player ids must be unique")
        return players

    @abstractmethod
    def _generate_initial(
        self, players: List[Player], courts: int, rng: random.Random
    ) -> List[Match]:
        """Format-specific initial generation (inputs already validated)."""

    @abstractmethod
    def _generate_extension(
        self,
        players: List[Player],
        existing_matches: List[Match],
        courts: int,
        rng: random.Random,
    ) -> List[Match]:
        """Format-specific extension (inputs validated, history non-empty)."""
