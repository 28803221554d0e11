"""Main Tournament class - holds players, matches and configuration.

Match generation is delegated to the scheduler of the tournament's format;
recording results and deciding what happens after a round is complete is
handled by the controllers in :mod:`padelpairing.controllers.tournament`.
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
from typing import Any, Dict, List, NamedTuple, Optional

from padelpairing.exceptions import MatchNotFoundException, PlayerNotFoundException
from padelpairing.models.enums import TournamentStatus, TournamentType
from padelpairing.models.player import Player
from padelpairing.models.tournament import Match, TournamentConfig, TournamentSummary
from padelpairing.pairing import get_scheduler
from padelpairing.pairing.base import last_round_number
from padelpairing.utils import generate_id, setup_logger
from padelpairing.utils.validation import (
    effective_courts,
    max_courts,
    validate_player_count_strict,
)

logger = setup_logger(__name__)


class Standing(NamedTuple):
    """One line of the standings table."""

    player: Player
    bonus_points: int
    display_total: int


class Tournament:
    """A padel tournament in one of the two formats.

    The Tournament keeps the state (configuration, players by id and the
    flat list of matches across all rounds) and offers the queries the
    controllers need. It never records results or decides on completion
    itself.
    """

    def __init__(
        self,
        config: TournamentConfig,
        players: List[Player],
        matches: Optional[List[Match]] = None,
        tournament_id: Optional[str] = None,
    ) -> None:
        """Initialize a tournament.

        Args
        ----
        config: Tournament settings
        players: Participating players (4..32)
        matches: Existing matches, e.g. when loading a saved tournament
        tournament_id: Identifier, generated when omitted

        Raises
        ------
        InvalidPlayerCountException: If the number of players is out of range
        """
        validate_player_count_strict(len(players))
        self.id = tournament_id or generate_id("Tournament")
        self.config = config
        self.players: Dict[str, Player] = {p.id: p for p in players}
        self.matches: List[Match] = list(matches or [])

    # ========== Properties ==========

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def tournament_type(self) -> TournamentType:
        return self.config.tournament_type

    @property
    def number_of_courts(self) -> int:
        return self.config.number_of_courts

    @property
    def is_completed(self) -> bool:
        return self.config.is_completed

    @is_completed.setter
    def is_completed(self, value: bool) -> None:
        self.config.is_completed = value

    @property
    def max_courts(self) -> int:
        """Most courts the player pool can fill."""
        return max_courts(len(self.players))

    @property
    def effective_courts(self) -> int:
        """Requested courts clamped to what the player pool supports."""
        return effective_courts(len(self.players), self.config.number_of_courts)

    @property
    def player_list(self) -> List[Player]:
        """Players in registration order."""
        return list(self.players.values())

    # ========== Matches ==========

    @property
    def has_played_matches(self) -> bool:
        return any(m.is_played for m in self.matches)

    @property
    def unplayed_matches(self) -> List[Match]:
        return [m for m in self.matches if not m.is_played]

    @property
    def played_matches(self) -> List[Match]:
        return [m for m in self.matches if m.is_played]

    @property
    def current_round(self) -> int:
        """Lowest round with an unplayed match, else the last round (0 if none)."""
        unplayed = self.unplayed_matches
        if unplayed:
            return min(m.round_number for m in unplayed)
        return last_round_number(self.matches)

    @property
    def status(self) -> TournamentStatus:
        if self.config.is_completed:
            return TournamentStatus.COMPLETED
        if self.matches and not self.unplayed_matches:
            return TournamentStatus.ROUND_PENDING_COMPLETION
        return TournamentStatus.IN_PROGRESS

    def get_match(self, match_id: str) -> Match:
        """Look up a match by id.

        Raises:
            MatchNotFoundException: If no match has this id
        """
        for match in self.matches:
            if match.id == match_id:
                return match
        raise MatchNotFoundException(
            f"Match {match_id} not found in tournament {self.name}"
        )

    def get_player(self, player_id: str) -> Player:
        """Look up a player by id.

        Raises:
            PlayerNotFoundException: If no player has this id
        """
        try:
            return self.players[player_id]
        except KeyError:
            raise PlayerNotFoundException(
                f"Player {player_id} not found in tournament {self.name}"
            ) from None

    def get_round(self, round_number: int) -> List[Match]:
        """Matches of one round ordered by court."""
        return sorted(
            (m for m in self.matches if m.round_number == round_number),
            key=lambda m: m.court_number,
        )

    def generate_initial_matches(
        self, rng: Optional[random.Random] = None
    ) -> List[Match]:
        """Generate and store the first batch of matches."""
        scheduler = get_scheduler(self.tournament_type)
        new_matches = scheduler.generate_initial_matches(
            self.player_list, self.config.number_of_courts, rng
        )
        self.matches.extend(new_matches)
        return new_matches

    def generate_extension_matches(
        self, rng: Optional[random.Random] = None
    ) -> List[Match]:
        """Generate and store further matches, returning only the new ones.

        Falls back to initial generation when the tournament has no matches.
        """
        scheduler = get_scheduler(self.tournament_type)
        new_matches = scheduler.generate_extension_matches(
            self.player_list, self.matches, self.config.number_of_courts, rng
        )
        self.matches.extend(new_matches)
        return new_matches

    # ========== Standings ==========

    def get_standings(self) -> List[Standing]:
        """Current standings, best first.

        Players who have played fewer games than the most active player get
        half a match's points for every game they are behind, as if those
        games had been draws. Ordered by that total, then wins, then name.
        """
        players = self.player_list
        most_games = max((p.games_played for p in players), default=0)
        draw_points = self.config.points_per_match // 2

        standings = []
        for player in players:
            bonus = (most_games - player.games_played) * draw_points
            standings.append(Standing(player, bonus, player.total_points + bonus))

        standings.sort(key=lambda s: (-s.display_total, -s.player.wins, s.player.name))
        return standings

    def winner_names(self) -> List[str]:
        """Names of the players sharing first place of a completed tournament."""
        if not self.config.is_completed:
            return []
        standings = self.get_standings()
        if not standings:
            return []
        best = standings[0].display_total
        return [s.player.name for s in standings if s.display_total == best]

    def summary(self) -> TournamentSummary:
        return TournamentSummary(
            id=self.id,
            name=self.name,
            tournament_type=self.tournament_type,
            date_created=self.config.date_created,
            number_of_courts=self.config.number_of_courts,
            points_per_match=self.config.points_per_match,
            is_completed=self.config.is_completed,
            player_count=len(self.players),
            match_count=len(self.matches),
            played_match_count=len(self.played_matches),
            round_count=last_round_number(self.matches),
            winner_names=self.winner_names(),
        )

    # ========== Serialization ==========

    def to_dict(self) -> Dict[str, Any]:
        """Serialize tournament to dictionary.

        Returns:
            Dictionary containing all tournament data
        """
        return {
            "id": self.id,
            "config": self.config.to_dict(),
            "players": [p.to_dict() for p in self.players.values()],
            "matches": [m.to_dict() for m in self.matches],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Tournament":
        """Deserialize tournament from dictionary.

        Match player references are resolved against the loaded players.

        Raises:
            InvalidConfigurationException: If the configuration is invalid
            PlayerNotFoundException: If a match references an unknown player
        """
        config = TournamentConfig.from_dict(data["config"])
        players = [Player.from_dict(p_data) for p_data in data.get("players", [])]
        by_id = {p.id: p for p in players}
        matches = [Match.from_dict(m_data, by_id) for m_data in data.get("matches", [])]

        tournament = cls(
            config=config,
            players=players,
            matches=matches,
            tournament_id=data.get("id"),
        )
        logger.debug(
            f"Loaded tournament {tournament.name} with {len(players)} players "
            f"and {len(matches)} matches"
        )
        return tournament

    def __str__(self) -> str:
        return f"{self.name} ({self.tournament_type.value}, {len(self.players)} players)"
