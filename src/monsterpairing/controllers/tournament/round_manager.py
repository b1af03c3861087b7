"""Round management for tournaments.

This module handles all round-related operations including pairing generation,
round progression, and round history management.
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

from typing import Dict, List, Mapping, Optional, Sequence

from monsterpairing.exceptions import TournamentStateException
from monsterpairing.models.tournament.pairing_history import PairingHistory
from monsterpairing.models.tournament.participant import Participant
from monsterpairing.models.tournament.round_data import RoundData
from monsterpairing.pairing.swiss import SwissPairingEngine
from monsterpairing.type_hints import Pairings
from monsterpairing.utils import setup_logger

logger = setup_logger(__name__)


class RoundManager:
    """Manages round progression and pairing generation for one tournament.

    This class is responsible for:
    - Generating pairings with the Swiss engine
    - Fixing a round's pairings once they have been handed out
    - Tracking round history and the pairing history
    """

    def __init__(
        self,
        num_rounds: int,
        pairing_history: Optional[PairingHistory] = None,
        engine: Optional[SwissPairingEngine] = None,
    ):
        """Initialize the round manager.

        Args:
            num_rounds: Total number of rounds in the tournament
            pairing_history: History of pairings to prevent repeats
            engine: Pairing engine, a default SwissPairingEngine if omitted
        """
        self.num_rounds = num_rounds
        self.pairing_history = (
            pairing_history if pairing_history is not None else PairingHistory()
        )
        self.engine = engine or SwissPairingEngine()
        self.rounds: List[RoundData] = []

    @property
    def completed_rounds_count(self) -> int:
        """Get the number of completed rounds."""
        return sum(1 for round_data in self.rounds if round_data.is_completed)

    def get_round(self, round_number: int) -> Optional[RoundData]:
        """Get data for a specific round.

        Args:
            round_number: The round number (0-indexed)

        Returns:
            RoundData for the specified round, or None if it was not created yet
        """
        if 0 <= round_number < len(self.rounds):
            return self.rounds[round_number]
        return None

    def get_or_create_round(
        self,
        round_number: int,
        participants: Sequence[Participant],
        standings: Mapping[str, int],
    ) -> RoundData:
        """Return the round, generating its pairings on first access.

        Args:
            round_number: The round being played (0-indexed)
            participants: All tournament participants
            standings: Current scores by participant id

        Returns:
            The round data with fixed pairings

        Raises:
            TournamentStateException: If the round is out of range or an
                earlier round was skipped
        """
        existing = self.get_round(round_number)
        if existing is not None:
            return existing

        if round_number >= self.num_rounds:
            raise TournamentStateException(
                f"Cannot create round {round_number + 1}: tournament has "
                f"{self.num_rounds} rounds"
            )
        if round_number != len(self.rounds):
            raise TournamentStateException(
                f"Cannot create round {round_number + 1} before round "
                f"{len(self.rounds) + 1}"
            )

        pairings = self.engine.generate_pairings(
            participants, self.pairing_history, standings
        )

        round_data = RoundData(round_number=round_number)
        for pairing in pairings:
            if len(pairing) == 1:
                round_data.bye_participant_id = pairing[0].id
            else:
                first, second = pairing
                round_data.pairings.append((first.id, second.id))
                self.pairing_history.add_pairing(first.id, second.id)

        self.rounds.append(round_data)
        logger.info(
            f"Created round {round_number + 1}/{self.num_rounds} with "
            f"{len(round_data.pairings)} pairings"
            + (
                f", bye: {round_data.bye_participant_id}"
                if round_data.bye_participant_id
                else ""
            )
        )
        return round_data

    def get_pairings(
        self, round_number: int, participants: Dict[str, Participant]
    ) -> Pairings:
        """Get a round's pairings as Participant tuples.

        The bye, if any, is returned last as a singleton tuple.
        """
        round_data = self.get_round(round_number)
        if round_data is None:
            return []

        pairings: Pairings = [
            (participants[first], participants[second])
            for first, second in round_data.pairings
        ]
        if round_data.bye_participant_id:
            pairings.append((participants[round_data.bye_participant_id],))
        return pairings

    def mark_round_completed(self, round_number: int) -> None:
        """Mark a round as completed.

        Raises:
            TournamentStateException: If the round does not exist
        """
        round_data = self.get_round(round_number)
        if round_data is None:
            logger.error(f"Cannot mark non-existent round {round_number + 1} as completed")
            raise TournamentStateException(
                f"Round {round_number + 1} has not been created"
            )

        round_data.is_completed = True
        logger.info(f"Round {round_number + 1} marked as completed")
