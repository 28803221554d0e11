"""Enumerations shared by the tournament models."""

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

from enum import Enum


class TournamentType(Enum):
    """Tournament format."""

    AMERICANO = "AMERICANO"  # Whole schedule generated up front
    MEXICANO = "MEXICANO"  # One ranked round at a time

    @classmethod
    def _missing_(cls, value):
        # Accept "americano" / "Mexicano" from user input and old save files.
        if isinstance(value, str):
            return cls.__members__.get(value.strip().upper())
        return None


class TournamentStatus(Enum):
    """Progress of a tournament as seen by the completion policy."""

    IN_PROGRESS = "IN_PROGRESS"
    ROUND_PENDING_COMPLETION = "ROUND_PENDING_COMPLETION"
    COMPLETED = "COMPLETED"


class MatchOutcome(Enum):
    """Outcome of a recorded match."""

    TEAM1_WIN = "TEAM1_WIN"
    TEAM2_WIN = "TEAM2_WIN"
    DRAW = "DRAW"
