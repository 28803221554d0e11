"""Exceptions for use in Padel Pairing"""

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


# ========== Base Application Exception ==========


class PadelPairingException(Exception):
    """Base exception for all Padel Pairing errors.

    All custom exceptions in the application should inherit from this class.
    This enables catching all application-specific errors with a single except clause.
    """

    pass


# ========== Pairing Exceptions ==========


class PairingException(PadelPairingException):
    """Base exception for match generation errors."""

    pass


class InvalidPlayerCountException(PairingException):
    """Raised when the number of players is outside the supported range."""

    def __init__(self, player_count: int, message: str):
        super().__init__(message)
        self.player_count = player_count


class InvalidPairingException(PairingException):
    """Raised when a match configuration is invalid (e.g. a repeated player)."""

    pass


class NoPairingAvailableException(PairingException):
    """Raised when no new matches can be generated."""

    pass


# ========== Tournament Exceptions ==========


class TournamentException(PadelPairingException):
    """Base exception for tournament-related errors."""

    pass


class TournamentStateException(TournamentException):
    """Raised when tournament is in an invalid state for the requested operation."""

    pass


class TournamentNotFoundException(TournamentException):
    """Raised when a requested tournament does not exist."""

    pass


class MatchNotFoundException(TournamentException):
    """Raised when a requested match does not exist."""

    pass


# ========== Player Exceptions ==========


class PlayerException(PadelPairingException):
    """Base exception for player-related errors."""

    pass


class PlayerNotFoundException(PlayerException):
    """Raised when a requested player cannot be found."""

    pass


class InvalidPlayerDataException(PlayerException):
    """Raised when player data is invalid or incomplete."""

    pass


# ========== Result Exceptions ==========


class ResultException(PadelPairingException):
    """Base exception for result recording errors."""

    pass


class InvalidResultException(ResultException):
    """Raised when a result is invalid (e.g., negative score)."""

    pass


# ========== File/Resource Exceptions ==========


class ResourceException(PadelPairingException):
    """Base exception for resource-related errors."""

    pass


class FileLoadException(ResourceException):
    """Raised when a file cannot be loaded."""

    pass


class FileSaveException(ResourceException):
    """Raised when a file cannot be saved."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(PadelPairingException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration data is invalid."""

    pass
