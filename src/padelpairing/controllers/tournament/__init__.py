"""Result recording, round progression, persistence and the service facade."""

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

from padelpairing.controllers.tournament.repository import (
    InMemoryTournamentRepository,
    JsonTournamentRepository,
    TournamentRepository,
    load_tournament_file,
    save_tournament_file,
)
from padelpairing.controllers.tournament.result_recorder import ResultRecorder
from padelpairing.controllers.tournament.round_manager import (
    RoundManager,
    RoundOutcome,
    RoundOutcomeKind,
)
from padelpairing.controllers.tournament.tournament_service import TournamentService

__all__ = [
    "InMemoryTournamentRepository",
    "JsonTournamentRepository",
    "ResultRecorder",
    "RoundManager",
    "RoundOutcome",
    "RoundOutcomeKind",
    "TournamentRepository",
    "TournamentService",
    "load_tournament_file",
    "save_tournament_file",
]
