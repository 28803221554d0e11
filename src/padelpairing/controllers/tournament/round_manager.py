"""Round management for tournaments.

This module decides what happens once a result has been recorded: keep
waiting for the remaining matches, generate the next Mexicano round, or
complete the tournament. It also re-opens completed tournaments when the
players want to keep playing.
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
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from padelpairing.constants import (
    MIN_MATCHES_FOR_COMPLETION,
    ROUNDS_REQUIRED_AFTER_CONTINUE,
)
from padelpairing.exceptions import (
    NoPairingAvailableException,
    TournamentStateException,
)
from padelpairing.models.enums import TournamentType
from padelpairing.models.tournament import Match, TournamentConfig
from padelpairing.pairing.tracking import build_tracking
from padelpairing.tournament import Tournament
from padelpairing.utils import setup_logger

logger = setup_logger(__name__)


class RoundOutcomeKind(Enum):
    MATCH_SAVED = "match_saved"
    NEW_ROUND_GENERATED = "new_round_generated"
    TOURNAMENT_COMPLETED = "tournament_completed"


@dataclass
class RoundOutcome:
    """What happened after a result was recorded.

    Attributes:
        kind: Outcome category
        new_matches: Matches generated as a consequence (next Mexicano round)
    """

    kind: RoundOutcomeKind
    new_matches: List[Match] = field(default_factory=list)


def consume_extension_round(config: TournamentConfig) -> bool:
    """Count down the rounds owed after a continuation.

    Returns True when the tournament may complete: either no continuation
    is pending, or this was the last owed round.
    """
    if config.extension_rounds_remaining > 0:
        config.extension_rounds_remaining -= 1
        return config.extension_rounds_remaining <= 0
    return True


class RoundManager:
    """Manages round progression and completion for tournaments.

    This class is responsible for:
    - Completing Americano tournaments once every match is played
    - Generating the next Mexicano round or completing the tournament
    - Continuing completed tournaments with extension matches
    """

    def __init__(self, rng: Optional[random.Random] = None):
        """Initialize the round manager.

        Args:
            rng: Random source passed to the schedulers (unseeded when omitted)
        """
        self.rng = rng if rng is not None else random.Random()

    def on_result_recorded(self, tournament: Tournament) -> RoundOutcome:
        """Advance the tournament after a result has been recorded.

        Args:
            tournament: Tournament whose match was just recorded

        Returns:
            The resulting :class:`RoundOutcome`
        """
        if tournament.unplayed_matches:
            return RoundOutcome(RoundOutcomeKind.MATCH_SAVED)

        if tournament.is_completed:
            # Score correction in a finished tournament.
            return RoundOutcome(RoundOutcomeKind.MATCH_SAVED)

        if tournament.tournament_type is TournamentType.AMERICANO:
            tournament.is_completed = True
            logger.info(f"Americano tournament {tournament.name} completed")
            return RoundOutcome(RoundOutcomeKind.TOURNAMENT_COMPLETED)

        return self._on_mexicano_round_complete(tournament)

    def _on_mexicano_round_complete(self, tournament: Tournament) -> RoundOutcome:
        tracking = build_tracking(
            tournament.player_list, tournament.matches, played_only=True
        )
        fewest = tracking.min_match_count()
        most = tracking.max_match_count()
        may_complete = consume_extension_round(tournament.config)

        if fewest >= MIN_MATCHES_FOR_COMPLETION and fewest == most and may_complete:
            tournament.config.extension_rounds_remaining = 0
            tournament.is_completed = True
            logger.info(
                f"Mexicano tournament {tournament.name} completed "
                f"after {fewest} matches per player"
            )
            return RoundOutcome(RoundOutcomeKind.TOURNAMENT_COMPLETED)

        new_matches = tournament.generate_extension_matches(self.rng)
        if not new_matches:
            logger.warning(f"No new round could be generated for {tournament.name}")
            return RoundOutcome(RoundOutcomeKind.MATCH_SAVED)

        logger.info(
            f"Round {new_matches[0].round_number} generated for {tournament.name} "
            f"(match counts {fewest}-{most}, "
            f"{tournament.config.extension_rounds_remaining} owed rounds left)"
        )
        return RoundOutcome(RoundOutcomeKind.NEW_ROUND_GENERATED, new_matches)

    def continue_tournament(self, tournament: Tournament) -> List[Match]:
        """Re-open a completed tournament with extra matches.

        A continued Mexicano tournament must play at least two more rounds
        before it can complete again.

        Returns:
            The new matches

        Raises:
            TournamentStateException: If the tournament is not completed
            NoPairingAvailableException: If no extension could be generated
        """
        if not tournament.is_completed:
            raise TournamentStateException(
                f"Tournament {tournament.name} is not completed and cannot be continued"
            )

        new_matches = tournament.generate_extension_matches(self.rng)
        if not new_matches:
            raise NoPairingAvailableException(
                f"No extension matches could be generated for {tournament.name}"
            )

        if tournament.tournament_type is TournamentType.MEXICANO:
            tournament.config.extension_rounds_remaining = ROUNDS_REQUIRED_AFTER_CONTINUE
        tournament.is_completed = False

        logger.info(
            f"Continued {tournament.name} with {len(new_matches)} new matches"
        )
        return new_matches
