"""Tournament persistence.

Tournaments are stored as the dictionaries produced by
:meth:`Tournament.to_dict`, either in memory or as one JSON file per
tournament in a directory.
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

import copy
import json
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Union

from padelpairing.constants import SAVE_FILE_EXTENSION
from padelpairing.exceptions import (
    FileLoadException,
    FileSaveException,
    PadelPairingException,
    TournamentNotFoundException,
)
from padelpairing.models.tournament import TournamentSummary
from padelpairing.tournament import Tournament
from padelpairing.utils import setup_logger

logger = setup_logger(__name__)


def save_tournament_file(tournament: Tournament, path: Union[str, Path]) -> Path:
    """Write a tournament to a JSON file.

    The file is written next to its destination first and then moved into
    place, so a failed save never leaves a truncated file behind.

    Raises:
        FileSaveException: If the file cannot be written
    """
    path = Path(path)
    tmp_path = path.with_name(path.name + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(tournament.to_dict(), f, indent=4)
        os.replace(tmp_path, path)
    except (OSError, TypeError, ValueError) as e:
        logger.error(f"Could not save tournament {tournament.name} to {path}: {e}")
        raise FileSaveException(f"Could not save tournament to {path}: {e}") from e
    logger.debug(f"Saved tournament {tournament.name} to {path}")
    return path


def load_tournament_file(path: Union[str, Path]) -> Tournament:
    """Read a tournament from a JSON file.

    Raises:
        FileLoadException: If the file cannot be read or does not describe a
            valid tournament
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Could not read tournament file {path}: {e}")
        raise FileLoadException(f"Could not read tournament file {path}: {e}") from e
    return _tournament_from_data(data, str(path))


def _tournament_from_data(data: Any, source: str) -> Tournament:
    try:
        return Tournament.from_dict(data)
    except (KeyError, TypeError, ValueError, PadelPairingException) as e:
        logger.error(f"Invalid tournament data in {source}: {e}")
        raise FileLoadException(f"Invalid tournament data in {source}: {e}") from e


class TournamentRepository(ABC):
    """Storage of tournaments by id."""

    @abstractmethod
    def get(self, tournament_id: str) -> Tournament:
        """Load a tournament.

        Raises:
            TournamentNotFoundException: If no tournament has this id
        """

    @abstractmethod
    def save(self, tournament: Tournament) -> None:
        """Insert or replace a tournament."""

    @abstractmethod
    def delete(self, tournament_id: str) -> bool:
        """Remove a tournament; returns False if it did not exist."""

    @abstractmethod
    def list_ids(self) -> List[str]:
        """Ids of all stored tournaments."""

    def exists(self, tournament_id: str) -> bool:
        return tournament_id in self.list_ids()

    def list_summaries(self) -> List[TournamentSummary]:
        """Summaries of all stored tournaments, newest first."""
        summaries = [self.get(tid).summary() for tid in self.list_ids()]
        summaries.sort(key=lambda s: s.date_created, reverse=True)
        return summaries


class InMemoryTournamentRepository(TournamentRepository):
    """Keeps serialized tournaments in a dictionary.

    Every :meth:`get` returns a fresh copy, like a real store would.
    """

    def __init__(self) -> None:
        self._data: Dict[str, Dict[str, Any]] = {}

    def get(self, tournament_id: str) -> Tournament:
        try:
            data = self._data[tournament_id]
        except KeyError:
            raise TournamentNotFoundException(
                f"Tournament {tournament_id} not found"
            ) from None
        return Tournament.from_dict(copy.deepcopy(data))

    def save(self, tournament: Tournament) -> None:
        self._data[tournament.id] = tournament.to_dict()

    def delete(self, tournament_id: str) -> bool:
        return self._data.pop(tournament_id, None) is not None

    def list_ids(self) -> List[str]:
        return list(self._data)


class JsonTournamentRepository(TournamentRepository):
    """One JSON file per tournament in a directory."""

    def __init__(self, directory: Union[str, Path]) -> None:
        self.directory = Path(directory)

    def _path(self, tournament_id: str) -> Path:
        return self.directory / f"{tournament_id}{SAVE_FILE_EXTENSION}"

    def get(self, tournament_id: str) -> Tournament:
        path = self._path(tournament_id)
        if not path.exists():
            raise TournamentNotFoundException(f"Tournament {tournament_id} not found")
        return load_tournament_file(path)

    def save(self, tournament: Tournament) -> None:
        save_tournament_file(tournament, self._path(tournament.id))

    def delete(self, tournament_id: str) -> bool:
        path = self._path(tournament_id)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise FileSaveException(f"Could not delete {path}: {e}") from e
        logger.info(f"Deleted tournament file {path}")
        return True

    def list_ids(self) -> List[str]:
        if not self.directory.is_dir():
            return []
        return sorted(p.stem for p in self.directory.glob(f"*{SAVE_FILE_EXTENSION}"))
