"""Tournament entity.

A tournament owns its participants and round counter. Pairing generation and
result recording are coordinated by the round manager it carries and by
:class:`monsterpairing.tournament.manager.TournamentManager`.
"""

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

from typing import Any, Dict, List, Optional, Sequence, Union

from monsterpairing.controllers.tournament.round_manager import RoundManager
from monsterpairing.exceptions import (
    InvalidParticipantCountException,
    TournamentStateException,
)
from monsterpairing.models.identifiers import (
    MonsterIdentifier,
    TournamentIdentifier,
    as_tournament_id,
)
from monsterpairing.models.tournament.participant import Participant
from monsterpairing.models.tournament.tournament_config import TournamentConfig
from monsterpairing.pairing.swiss import SwissPairingEngine
from monsterpairing.type_hints import ScoreTable
from monsterpairing.utils import setup_logger

logger = setup_logger(__name__)


class Tournament:
    """A Swiss tournament.

    Rounds are counted from 0. The tournament is complete once
    ``current_round`` reaches ``total_rounds``; a single participant
    tournament has no rounds and is complete on creation.
    """

    def __init__(
        self,
        identifier: Union[str, TournamentIdentifier],
        user_email: str,
        participants: Sequence[Participant],
        total_rounds: int,
        current_round: int = 0,
        config: Optional[TournamentConfig] = None,
        engine: Optional[SwissPairingEngine] = None,
    ) -> None:
        """Initialize a tournament.

        Args
        ----
        identifier: Tournament identifier
        user_email: Contact of the user who created the tournament
        participants: Participants in registration order
        total_rounds: Number of Swiss rounds, fixed at creation
        current_round: Round currently being played (0-indexed)
        config: Format settings, a plain Swiss tournament if omitted
        engine: Pairing engine used for the Swiss rounds
        """
        if not participants:
            raise InvalidParticipantCountException(
                "Tournament must have at least one participant"
            )
        if total_rounds < 0:
            raise InvalidParticipantCountException(
                f"Total rounds cannot be negative: {total_rounds}"
            )
        if not 0 <= current_round <= total_rounds:
            raise TournamentStateException(
                f"Current round {current_round} outside 0..{total_rounds}"
            )

        self.identifier = as_tournament_id(identifier)
        self.user_email = user_email
        self.participants: List[Participant] = list(participants)
        self.total_rounds = total_rounds
        self.current_round = current_round
        self.config = config or TournamentConfig()
        self.round_manager = RoundManager(num_rounds=total_rounds, engine=engine)

    # ========== Properties ==========

    @property
    def id(self) -> str:
        """Get tournament identifier string."""
        return self.identifier.value

    @property
    def participants_by_id(self) -> Dict[str, Participant]:
        return {p.id: p for p in self.participants}

    # ========== Round State ==========

    def is_complete(self) -> bool:
        """Have all Swiss rounds been played?"""
        return self.current_round >= self.total_rounds

    def advance_round(self) -> None:
        """Move on to the next round.

        Raises:
            TournamentStateException: If the tournament is already complete
        """
        if self.is_complete():
            raise TournamentStateException(
                "Cannot advance round: tournament is already complete"
            )
        self.current_round += 1
        logger.info(
            f"Tournament {self.id} advanced to round "
            f"{self.current_round}/{self.total_rounds}"
        )

    # ========== Participants & Standings ==========

    def get_participant(
        self, identifier: Union[str, MonsterIdentifier]
    ) -> Optional[Participant]:
        """Get a participant by identifier, or None if not found."""
        return self.participants_by_id.get(str(identifier).strip())

    def scores(self) -> ScoreTable:
        """Current score of each participant, by id."""
        return {p.id: p.score for p in self.participants}

    def get_standings(self) -> List[Participant]:
        """Participants sorted by score desc, wins desc, then losses asc.

        The sort is stable, so fully tied participants keep registration order.
        """
        return sorted(
            self.participants, key=lambda p: (-p.score, -p.wins, p.losses)
        )

    # ========== Serialization ==========

    def to_dict(self) -> Dict[str, Any]:
        """Serialize tournament to dictionary."""
        return {
            "tournament_id": self.id,
            "user_email": self.user_email,
            "current_round": self.current_round,
            "total_rounds": self.total_rounds,
            "is_complete": self.is_complete(),
            "config": self.config.to_dict(),
            "standings": [p.to_dict() for p in self.get_standings()],
            "rounds": [r.to_dict() for r in self.round_manager.rounds],
        }

    def __repr__(self) -> str:
        return (
            f"<Tournament {self.id} round {self.current_round}/{self.total_rounds} "
            f"({len(self.participants)} participants)>"
        )
