"""Lightweight tournament description for listings."""

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

from dataclasses import dataclass, field
from datetime import datetime
from typing import List

from padelpairing.models.enums import TournamentType


@dataclass
class TournamentSummary:
    """Counts and winners of a tournament without its players and matches.

    Attributes
    ----------
    winner_names : list of str
        Names of the players sharing the highest points total. Only filled
        for completed tournaments.
    """

    id: str
    name: str
    tournament_type: TournamentType
    date_created: datetime
    number_of_courts: int
    points_per_match: int
    is_completed: bool
    player_count: int
    match_count: int
    played_match_count: int
    round_count: int = 0
    winner_names: List[str] = field(default_factory=list)
