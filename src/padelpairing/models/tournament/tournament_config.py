"""TournamentConfig data class."""

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
from datetime import datetime, timezone
from typing import Any, Dict

from dateutil import parser as date_parser

from padelpairing.constants import DEFAULT_NUMBER_OF_COURTS, DEFAULT_POINTS_PER_MATCH
from padelpairing.exceptions import InvalidConfigurationException
from padelpairing.models.enums import TournamentType


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class TournamentConfig:
    """Tournament configuration settings.

    Attributes
    ----------
    name : str
        Tournament name.
    tournament_type : TournamentType
        Americano (full schedule up front) or Mexicano (one round at a time).
    number_of_courts : int
        Requested number of courts; clamped to what the player pool supports
        when matches are generated.
    points_per_match : int
        Points played per match (informational, used by score entry).
    is_completed : bool
        Indicates whether the tournament is complete.
    extension_rounds_remaining : int
        Rounds that must still be played before a continued Mexicano
        tournament may complete again.
    date_created : datetime
        Creation timestamp (timezone aware).
    """

    name: str
    tournament_type: TournamentType
    number_of_courts: int = DEFAULT_NUMBER_OF_COURTS
    points_per_match: int = DEFAULT_POINTS_PER_MATCH
    is_completed: bool = False
    extension_rounds_remaining: int = 0
    date_created: datetime = field(default_factory=_utc_now)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "name": self.name,
            "tournament_type": self.tournament_type.value,
            "number_of_courts": self.number_of_courts,
            "points_per_match": self.points_per_match,
            "is_completed": self.is_completed,
            "extension_rounds_remaining": self.extension_rounds_remaining,
            "date_created": self.date_created.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentConfig":
        """Deserialize configuration from dictionary.

        Raises:
            InvalidConfigurationException: If the type or timestamp is invalid
        """
        try:
            tournament_type = TournamentType(data["tournament_type"])
        except (KeyError, ValueError) as e:
            raise InvalidConfigurationException(
                f"Unknown tournament type: {data.get('tournament_type')!r}"
            ) from e

        raw_date = data.get("date_created")
        if raw_date:
            try:
                date_created = date_parser.isoparse(raw_date)
            except ValueError as e:
                raise InvalidConfigurationException(
                    f"Invalid creation date: {raw_date!r}"
                ) from e
            if date_created.tzinfo is None:
                date_created = date_created.replace(tzinfo=timezone.utc)
        else:
            date_created = _utc_now()

        return cls(
            name=data.get("name", "Untitled Tournament"),
            tournament_type=tournament_type,
            number_of_courts=int(
                data.get("number_of_courts", DEFAULT_NUMBER_OF_COURTS)
            ),
            points_per_match=int(
                data.get("points_per_match", DEFAULT_POINTS_PER_MATCH)
            ),
            is_completed=bool(data.get("is_completed", False)),
            extension_rounds_remaining=int(data.get("extension_rounds_remaining", 0)),
            date_created=date_created,
        )
