"""Tournament service - the entry point used by front ends.

Every operation loads the tournament from the repository, applies the
change through the controllers and saves it again. Operations on the same
tournament are serialized so that two results completing the same round
cannot both generate a new round.
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
import threading
from contextlib import contextmanager
from typing import Dict, Iterable, Iterator, List, Optional, Union

from padelpairing.constants import DEFAULT_NUMBER_OF_COURTS, DEFAULT_POINTS_PER_MATCH
from padelpairing.controllers.tournament.repository import TournamentRepository
from padelpairing.controllers.tournament.result_recorder import ResultRecorder
from padelpairing.controllers.tournament.round_manager import (
    RoundManager,
    RoundOutcome,
)
from padelpairing.exceptions import (
    InvalidConfigurationException,
    TournamentNotFoundException,
    TournamentStateException,
)
from padelpairing.models.enums import TournamentType
from padelpairing.models.player import Player
from padelpairing.models.tournament import (
    Match,
    MatchResult,
    TournamentConfig,
    TournamentSummary,
)
from padelpairing.tournament import Tournament
from padelpairing.utils import setup_logger
from padelpairing.utils.validation import (
    validate_court_count_strict,
    validate_player_count_strict,
    validate_player_names_strict,
)

logger = setup_logger(__name__)


class TournamentService:
    """Create tournaments, record results, change settings and continue
    finished tournaments."""

    def __init__(
        self,
        repository: TournamentRepository,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.repository = repository
        self.rng = rng if rng is not None else random.Random()
        self.result_recorder = ResultRecorder()
        self.round_manager = RoundManager(self.rng)
        self._locks: Dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def _lock_for(self, tournament_id: str) -> threading.Lock:
        with self._locks_guard:
            return self._locks.setdefault(tournament_id, threading.Lock())

    def _forget_lock(self, tournament_id: str) -> None:
        with self._locks_guard:
            self._locks.pop(tournament_id, None)

    @contextmanager
    def _locked(self, tournament_id: str) -> Iterator[None]:
        """Hold the tournament's lock; unknown ids do not keep their lock."""
        with self._lock_for(tournament_id):
            try:
                yield
            except TournamentNotFoundException:
                self._forget_lock(tournament_id)
                raise

    @staticmethod
    def _validate_points(points_per_match: int) -> None:
        if points_per_match < 1:
            raise InvalidConfigurationException(
                f"Points per match must be positive, got {points_per_match}"
            )

    def create_tournament(
        self,
        name: str,
        tournament_type: Union[TournamentType, str],
        player_names: Iterable[str],
        number_of_courts: int = DEFAULT_NUMBER_OF_COURTS,
        points_per_match: int = DEFAULT_POINTS_PER_MATCH,
    ) -> Tournament:
        """Create, schedule and store a new tournament.

        Args:
            name: Tournament name
            tournament_type: Format, as enum or its value ("americano"/"mexicano")
            player_names: Unique, non-blank player names (4..32)
            number_of_courts: Requested courts (1..8)
            points_per_match: Points played per match

        Returns:
            The stored tournament with its first matches

        Raises:
            InvalidPlayerCountException: If the number of players is out of range
            InvalidPlayerDataException: If a name is blank or duplicated
            InvalidConfigurationException: If a setting is out of range
        """
        try:
            tournament_type = TournamentType(tournament_type)
        except ValueError as e:
            raise InvalidConfigurationException(
                f"Unknown tournament type: {tournament_type!r}"
            ) from e
        names = validate_player_names_strict(player_names)
        validate_player_count_strict(len(names))
        validate_court_count_strict(number_of_courts)
        self._validate_points(points_per_match)

        config = TournamentConfig(
            name=name.strip() or "Untitled Tournament",
            tournament_type=tournament_type,
            number_of_courts=number_of_courts,
            points_per_match=points_per_match,
        )
        tournament = Tournament(config, [Player(name=n) for n in names])
        tournament.generate_initial_matches(self.rng)

        self.repository.save(tournament)
        logger.info(
            f"Created {tournament_type.value} tournament {tournament.name} "
            f"with {len(names)} players and {len(tournament.matches)} matches"
        )
        return tournament

    def record_result(
        self,
        tournament_id: str,
        match_id: str,
        score_team1: int,
        score_team2: int,
    ) -> RoundOutcome:
        """Record a score and advance the tournament.

        Raises:
            TournamentNotFoundException: If the tournament does not exist
            MatchNotFoundException: If the match is not part of the tournament
            InvalidResultException: If a score is negative or not an integer
        """
        result = MatchResult(score_team1, score_team2)
        with self._locked(tournament_id):
            tournament = self.repository.get(tournament_id)
            self.result_recorder.record_match_result(tournament, match_id, result)
            outcome = self.round_manager.on_result_recorded(tournament)
            self.repository.save(tournament)
        logger.debug(f"Result for match {match_id}: {outcome.kind.value}")
        return outcome

    def continue_tournament(self, tournament_id: str) -> List[Match]:
        """Add matches to a completed tournament and re-open it.

        Raises:
            TournamentNotFoundException: If the tournament does not exist
            TournamentStateException: If the tournament is not completed
            NoPairingAvailableException: If no extension could be generated
        """
        with self._locked(tournament_id):
            tournament = self.repository.get(tournament_id)
            new_matches = self.round_manager.continue_tournament(tournament)
            self.repository.save(tournament)
        return new_matches

    # ========== Settings ==========

    def rename_tournament(self, tournament_id: str, name: str) -> Tournament:
        """Change the tournament name.

        Raises:
            TournamentNotFoundException: If the tournament does not exist
            InvalidConfigurationException: If the name is blank
        """
        if name is None or not name.strip():
            raise InvalidConfigurationException("Tournament name cannot be empty")
        with self._locked(tournament_id):
            tournament = self.repository.get(tournament_id)
            old_name = tournament.name
            tournament.config.name = name.strip()
            self.repository.save(tournament)
        logger.info(f"Renamed tournament {old_name} to {tournament.name}")
        return tournament

    def update_points_per_match(
        self, tournament_id: str, points_per_match: int
    ) -> Tournament:
        """Change the points played per match.

        Recorded scores are kept; only new scores and the standings bonus
        use the new value.

        Raises:
            TournamentNotFoundException: If the tournament does not exist
            InvalidConfigurationException: If the value is not positive
        """
        self._validate_points(points_per_match)
        with self._locked(tournament_id):
            tournament = self.repository.get(tournament_id)
            if tournament.has_played_matches:
                logger.warning(
                    f"Points per match of {tournament.name} changed after "
                    f"{len(tournament.played_matches)} matches were played"
                )
            tournament.config.points_per_match = points_per_match
            self.repository.save(tournament)
        return tournament

    def update_number_of_courts(
        self, tournament_id: str, number_of_courts: int
    ) -> Tournament:
        """Change the court count and regenerate the schedule.

        All existing matches are discarded and the first matches are
        generated again, so this is only allowed before any result has
        been recorded.

        Raises:
            TournamentNotFoundException: If the tournament does not exist
            InvalidConfigurationException: If the court count is not in 1..8
            TournamentStateException: If a match has already been played
        """
        validate_court_count_strict(number_of_courts)
        with self._locked(tournament_id):
            tournament = self.repository.get(tournament_id)
            if tournament.has_played_matches:
                raise TournamentStateException(
                    f"Cannot change courts of {tournament.name}: "
                    f"{len(tournament.played_matches)} matches already played"
                )
            tournament.config.number_of_courts = number_of_courts
            tournament.matches = []
            tournament.generate_initial_matches(self.rng)
            self.repository.save(tournament)
        logger.info(
            f"Tournament {tournament.name} now uses {number_of_courts} courts "
            f"({len(tournament.matches)} matches regenerated)"
        )
        return tournament

    # ========== Queries ==========

    def get_tournament(self, tournament_id: str) -> Tournament:
        return self.repository.get(tournament_id)

    def list_tournaments(self) -> List[TournamentSummary]:
        return self.repository.list_summaries()

    def delete_tournament(self, tournament_id: str) -> bool:
        with self._lock_for(tournament_id):
            deleted = self.repository.delete(tournament_id)
        self._forget_lock(tournament_id)
        return deleted
