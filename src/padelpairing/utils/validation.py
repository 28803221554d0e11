"""Validation helpers for tournament setup.

Soft validators return a :class:`ValidationResult`; the ``*_strict`` variants
raise the matching exception instead. Court counts are never rejected during
generation, only clamped to what the player pool supports.
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

from typing import Any, Iterable, List, Optional

from padelpairing.constants import (
    MAX_COURTS,
    MAX_PLAYERS,
    MIN_PLAYERS,
    PLAYERS_PER_MATCH,
)
from padelpairing.exceptions import (
    InvalidConfigurationException,
    InvalidPlayerCountException,
    InvalidPlayerDataException,
)


class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        error_message: Human-readable error message if invalid
        sanitized_value: Cleaned/normalized value if valid
    """

    def __init__(
        self,
        is_valid: bool,
        error_message: Optional[str] = None,
        sanitized_value: Any = None,
    ):
        self.is_valid = is_valid
        self.error_message = error_message
        self.sanitized_value = sanitized_value

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid

    def __repr__(self) -> str:
        if self.is_valid:
            return f"ValidationResult(VALID, {self.sanitized_value!r})"
        return f"ValidationResult(INVALID, {self.error_message!r})"


# ========== Player Count Validation ==========


def validate_player_count(player_count: int) -> ValidationResult:
    """Check that a tournament has between 4 and 32 players.

    Args:
        player_count: Number of players in the tournament

    Returns:
        ValidationResult with the count as sanitized value when valid
    """
    if player_count < MIN_PLAYERS:
        return ValidationResult(
            is_valid=False,
            error_message=f"At least {MIN_PLAYERS} players are required "
            f"(got {player_count})",
        )
    if player_count > MAX_PLAYERS:
        return ValidationResult(
            is_valid=False,
            error_message=f"At most {MAX_PLAYERS} players are supported "
            f"(got {player_count})",
        )
    return ValidationResult(is_valid=True, sanitized_value=player_count)


def validate_player_count_strict(player_count: int) -> None:
    """Validate the player count and raise if it is out of range.

    Raises:
        InvalidPlayerCountException: If the count is below 4 or above 32
    """
    result = validate_player_count(player_count)
    if not result.is_valid:
        raise InvalidPlayerCountException(player_count, result.error_message)


# ========== Court Validation ==========


def max_courts(player_count: int) -> int:
    """Largest number of simultaneous matches the player pool supports."""
    return max(1, min(player_count // PLAYERS_PER_MATCH, MAX_COURTS))


def effective_courts(player_count: int, number_of_courts: int) -> int:
    """Clamp a requested court count to ``[1, max_courts(player_count)]``."""
    return max(1, min(number_of_courts, max_courts(player_count)))


def validate_court_count(number_of_courts: int) -> ValidationResult:
    """Validate a configured court count (1..8)."""
    if not isinstance(number_of_courts, int) or isinstance(number_of_courts, bool):
        return ValidationResult(
            is_valid=False,
            error_message=f"Court count must be an integer: {number_of_courts!r}",
        )
    if not 1 <= number_of_courts <= MAX_COURTS:
        return ValidationResult(
            is_valid=False,
            error_message=f"Court count must be between 1 and {MAX_COURTS} "
            f"(got {number_of_courts})",
        )
    return ValidationResult(is_valid=True, sanitized_value=number_of_courts)


def validate_court_count_strict(number_of_courts: int) -> None:
    """Validate a configured court count and raise if it is invalid.

    Raises:
        InvalidConfigurationException: If the court count is not in 1..8
    """
    result = validate_court_count(number_of_courts)
    if not result.is_valid:
        raise InvalidConfigurationException(result.error_message)


# ========== Player Name Validation ==========


def validate_player_name(name: Optional[str]) -> ValidationResult:
    """Validate a player display name (non-blank, surrounding spaces removed)."""
    if name is None or not name.strip():
        return ValidationResult(
            is_valid=False, error_message="Player name cannot be empty"
        )
    return ValidationResult(is_valid=True, sanitized_value=name.strip())


def validate_player_names_strict(names: Iterable[str]) -> List[str]:
    """Validate a roster of names and return them sanitized.

    Raises:
        InvalidPlayerDataException: If a name is blank or appears twice
    """
    sanitized: List[str] = []
    seen = set()
    for name in names:
        result = validate_player_name(name)
        if not result.is_valid:
            raise InvalidPlayerDataException(result.error_message)
        key = result.sanitized_value.casefold()
        if key in seen:
            raise InvalidPlayerDataException(
                f"Duplicate player name: {result.sanitized_value}"
            )
        seen.add(key)
        sanitized.append(result.sanitized_value)
    return sanitized
