"""Padel Pairing - Americano and Mexicano match scheduling for padel tournaments."""

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

__version__ = "0.1.0"

from padelpairing.controllers.tournament import (
    InMemoryTournamentRepository,
    JsonTournamentRepository,
    ResultRecorder,
    RoundManager,
    RoundOutcome,
    RoundOutcomeKind,
    TournamentService,
)
from padelpairing.models import (
    Match,
    MatchOutcome,
    MatchResult,
    Player,
    TournamentConfig,
    TournamentStatus,
    TournamentSummary,
    TournamentType,
)
from padelpairing.pairing import (
    AmericanoScheduler,
    MexicanoScheduler,
    TournamentScheduler,
    get_scheduler,
)
from padelpairing.tournament import Standing, Tournament
from padelpairing.utils.validation import effective_courts

__all__ = [
    "AmericanoScheduler",
    "InMemoryTournamentRepository",
    "JsonTournamentRepository",
    "Match",
    "MatchOutcome",
    "MatchResult",
    "MexicanoScheduler",
    "Player",
    "ResultRecorder",
    "RoundManager",
    "RoundOutcome",
    "RoundOutcomeKind",
    "Standing",
    "Tournament",
    "TournamentConfig",
    "TournamentScheduler",
    "TournamentService",
    "TournamentStatus",
    "TournamentSummary",
    "TournamentType",
    "effective_courts",
    "get_scheduler",
]
