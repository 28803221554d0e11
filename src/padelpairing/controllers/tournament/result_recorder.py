"""Result recording for tournaments.

This module handles recording match scores and keeping the player
statistics in step with them, including corrections of scores that were
already entered.
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

from padelpairing.models.enums import MatchOutcome
from padelpairing.models.player import Player
from padelpairing.models.tournament import Match, MatchResult
from padelpairing.tournament import Tournament
from padelpairing.utils import setup_logger

logger = setup_logger(__name__)


class ResultRecorder:
    """Records match results and updates player statistics.

    This class is responsible for:
    - Applying points, wins, losses, draws and games played to the four players
    - Reverting the previous statistics when a played match is re-scored
    - Marking matches as played
    """

    def record_match_result(
        self, tournament: Tournament, match_id: str, result: MatchResult
    ) -> Match:
        """Record the score of one match.

        Args:
            tournament: Tournament the match belongs to
            match_id: Id of the match
            result: Final score

        Returns:
            The updated match

        Raises:
            MatchNotFoundException: If the match is not part of the tournament
        """
        match = tournament.get_match(match_id)

        if match.is_played:
            previous = MatchResult(match.score_team1, match.score_team2)
            logger.info(
                f"Correcting round {match.round_number} court {match.court_number}: "
                f"{previous.score_team1}-{previous.score_team2} -> "
                f"{result.score_team1}-{result.score_team2}"
            )
            self._apply(match, previous, sign=-1)

        self._apply(match, result, sign=1)
        match.score_team1 = result.score_team1
        match.score_team2 = result.score_team2
        match.is_played = True

        logger.debug(f"Recorded {match}")
        return match

    def _apply(self, match: Match, result: MatchResult, sign: int) -> None:
        """Add (sign=1) or remove (sign=-1) a result from the players' statistics."""
        outcome = result.outcome
        for player in match.team1:
            self._update_player(
                player, result.score_team1, outcome, MatchOutcome.TEAM1_WIN, sign
            )
        for player in match.team2:
            self._update_player(
                player, result.score_team2, outcome, MatchOutcome.TEAM2_WIN, sign
            )

    @staticmethod
    def _update_player(
        player: Player,
        points: int,
        outcome: MatchOutcome,
        winning_outcome: MatchOutcome,
        sign: int,
    ) -> None:
        player.total_points += sign * points
        player.games_played += sign
        if outcome is MatchOutcome.DRAW:
            player.draws += sign
        elif outcome is winning_outcome:
            player.wins += sign
        else:
            player.losses += sign
