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
from typing import Any, Dict

from padelpairing.utils import generate_id


@dataclass(eq=False)
class Player:
    """
    A participant in a padel tournament.

    Players are owned by a tournament and created at setup. The match
    generators only read them; their statistics are changed exclusively by
    :class:`~padelpairing.controllers.tournament.ResultRecorder`.

    Attributes
    ----------
    name : str
        Display name.
    id : str
        Opaque unique identifier, generated when not given.
    total_points : int
        Points scored over all played matches (each player receives the
        score of their team).
    games_played : int
        Number of played matches.
    wins, losses, draws : int
        Match outcomes from the player's perspective.

    Notes
    -----
    Equality is identity based; compare ``id`` values when two instances
    may describe the same player.
    """

    name: str
    id: str = field(default_factory=lambda: generate_id("Player"))
    total_points: int = 0
    games_played: int = 0
    wins: int = 0
    losses: int = 0
    draws: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Serialize player to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "total_points": self.total_points,
            "games_played": self.games_played,
            "wins": self.wins,
            "losses": self.losses,
            "draws": self.draws,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Player":
        """Deserialize player from dictionary."""
        return cls(
            id=str(data["id"]),
            name=data["name"],
            total_points=int(data.get("total_points", 0)),
            games_played=int(data.get("games_played", 0)),
            wins=int(data.get("wins", 0)),
            losses=int(data.get("losses", 0)),
            draws=int(data.get("draws", 0)),
        )

    def __str__(self) -> str:
        return self.name
