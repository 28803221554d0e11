"""Match data class."""

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
from typing import Any, Dict, Mapping, Tuple

from padelpairing.exceptions import InvalidPairingException, PlayerNotFoundException
from padelpairing.models.player import Player
from padelpairing.type_hints import Team
from padelpairing.utils import generate_id


@dataclass(eq=False)
class Match:
    """A 2v2 match on one court in one round.

    Attributes
    ----------
    round_number : int
        Round the match belongs to (1-indexed).
    court_number : int
        Court within the round (1-indexed, unique within a round).
    team1, team2 : tuple of Player
        The two sides. All four players are distinct.
    score_team1, score_team2 : int
        Recorded scores, 0 until a result is recorded.
    is_played : bool
        Whether a result has been recorded.
    id : str
        Unique identifier.
    """

    round_number: int
    court_number: int
    team1: Team
    team2: Team
    score_team1: int = 0
    score_team2: int = 0
    is_played: bool = False
    id: str = field(default_factory=lambda: generate_id("Match"))

    def __post_init__(self) -> None:
        self.team1 = tuple(self.team1)
        self.team2 = tuple(self.team2)
        if len(self.team1) != 2 or len(self.team2) != 2:
            raise InvalidPairingException("Each team must have exactly two players")
        if len(set(self.player_ids)) != 4:
            raise InvalidPairingException(
                f"Match in round {self.round_number}, court {self.court_number} "
                f"must have four distinct players: {self.player_ids}"
            )
        if self.round_number < 1 or self.court_number < 1:
            raise InvalidPairingException(
                f"Round and court numbers start at 1 "
                f"(got round {self.round_number}, court {self.court_number})"
            )

    @property
    def players(self) -> Tuple[Player, Player, Player, Player]:
        """All four players, team1 first."""
        return (*self.team1, *self.team2)

    @property
    def player_ids(self) -> Tuple[str, str, str, str]:
        return tuple(p.id for p in self.players)

    @property
    def team1_ids(self) -> Tuple[str, str]:
        return (self.team1[0].id, self.team1[1].id)

    @property
    def team2_ids(self) -> Tuple[str, str]:
        return (self.team2[0].id, self.team2[1].id)

    def involves(self, player_id: str) -> bool:
        """Check whether a player takes part in this match."""
        return player_id in self.player_ids

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match to dictionary (players by id)."""
        return {
            "id": self.id,
            "round_number": self.round_number,
            "court_number": self.court_number,
            "team1": list(self.team1_ids),
            "team2": list(self.team2_ids),
            "score_team1": self.score_team1,
            "score_team2": self.score_team2,
            "is_played": self.is_played,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], players: Mapping[str, Player]) -> "Match":
        """Deserialize a match, resolving player ids against ``players``.

        Raises:
            PlayerNotFoundException: If a referenced player id is unknown
        """

        def resolve(player_id: str) -> Player:
            try:
                return players[player_id]
            except KeyError:
                raise PlayerNotFoundException(
                    f"Match {data.get('id')} references unknown player {player_id}"
                ) from None

        return cls(
            id=data["id"],
            round_number=int(data["round_number"]),
            court_number=int(data["court_number"]),
            team1=tuple(resolve(pid) for pid in data["team1"]),
            team2=tuple(resolve(pid) for pid in data["team2"]),
            score_team1=int(data.get("score_team1", 0)),
            score_team2=int(data.get("score_team2", 0)),
            is_played=bool(data.get("is_played", False)),
        )

    def __str__(self) -> str:
        team1 = " & ".join(p.name for p in self.team1)
        team2 = " & ".join(p.name for p in self.team2)
        return f"R{self.round_number} C{self.court_number}: {team1} vs {team2}"
