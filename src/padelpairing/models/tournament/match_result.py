"""Match result data class."""

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

from dataclasses import dataclass
from typing import Any, Dict

from padelpairing.exceptions import InvalidResultException
from padelpairing.models.enums import MatchOutcome


@dataclass(frozen=True)
class MatchResult:
    """Represents the result of a single match.

    Attributes
    ----------
    score_team1 : int
        Points won by team 1
    score_team2 : int
        Points won by team 2
    """

    score_team1: int
    score_team2: int

    def __post_init__(self) -> None:
        for score in (self.score_team1, self.score_team2):
            if not isinstance(score, int) or isinstance(score, bool) or score < 0:
                raise InvalidResultException(
                    f"Scores must be non-negative integers: "
                    f"{self.score_team1!r}-{self.score_team2!r}"
                )

    @property
    def outcome(self) -> MatchOutcome:
        """Which team won, or a draw."""
        if self.score_team1 > self.score_team2:
            return MatchOutcome.TEAM1_WIN
        if self.score_team2 > self.score_team1:
            return MatchOutcome.TEAM2_WIN
        return MatchOutcome.DRAW

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match result to dictionary."""
        return {"score_team1": self.score_team1, "score_team2": self.score_team2}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchResult":
        """Deserialize match result from dictionary."""
        return cls(score_team1=data["score_team1"], score_team2=data["score_team2"])
