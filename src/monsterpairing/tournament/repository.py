"""Tournament storage."""

# Monster Pairing
# Copyright (C) 2025  Monster Pairing developers
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

import threading
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from monsterpairing.models.identifiers import TournamentIdentifier
from monsterpairing.tournament.tournament import Tournament
from monsterpairing.utils import setup_logger

logger = setup_logger(__name__)


class TournamentRepository(ABC):
    """Storage contract used by the tournament manager."""

    @abstractmethod
    def save(self, tournament: Tournament) -> None:
        """Insert or replace a tournament."""

    @abstractmethod
    def find_by_id(self, identifier: TournamentIdentifier) -> Optional[Tournament]:
        """Return the tournament, or None if unknown."""

    @abstractmethod
    def find_by_user_email(self, user_email: str) -> List[Tournament]:
        """All tournaments created by a user."""

    @abstractmethod
    def delete(self, identifier: TournamentIdentifier) -> None:
        """Remove a tournament; unknown identifiers are ignored."""

    def exists(self, identifier: TournamentIdentifier) -> bool:
        return self.find_by_id(identifier) is not None

    @abstractmethod
    def find_all(self) -> List[Tournament]:
        """All stored tournaments."""


class InMemoryTournamentRepository(TournamentRepository):
    """Dictionary-backed repository, safe to share between threads."""

    def __init__(self) -> None:
        self._tournaments: Dict[str, Tournament] = {}
        self._lock = threading.Lock()

    def save(self, tournament: Tournament) -> None:
        with self._lock:
            self._tournaments[tournament.id] = tournament
        logger.debug(f"Saved tournament {tournament.id}")

    def find_by_id(self, identifier: TournamentIdentifier) -> Optional[Tournament]:
        with self._lock:
            return self._tournaments.get(str(identifier))

    def find_by_user_email(self, user_email: str) -> List[Tournament]:
        with self._lock:
            return [
                t for t in self._tournaments.values() if t.user_email == user_email
            ]

    def delete(self, identifier: TournamentIdentifier) -> None:
        with self._lock:
            removed = self._tournaments.pop(str(identifier), None)
        if removed is not None:
            logger.debug(f"Deleted tournament {identifier}")

    def find_all(self) -> List[Tournament]:
        with self._lock:
            return list(self._tournaments.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._tournaments)
