"""Result recording and validation for tournaments.

This module handles recording match results with proper validation and error checking.
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

from typing import Dict, Optional, Tuple, Union

from monsterpairing.exceptions import (
    DuplicateResultException,
    InvalidMatchException,
    InvalidResultException,
    ParticipantNotFoundException,
)
from monsterpairing.models.identifiers import MonsterIdentifier
from monsterpairing.models.tournament.match import Match
from monsterpairing.models.tournament.match_result import MatchResult, Outcome
from monsterpairing.models.tournament.pairing_history import PairingHistory
from monsterpairing.models.tournament.participant import Participant
from monsterpairing.models.tournament.round_data import RoundData
from monsterpairing.utils import setup_logger

logger = setup_logger(__name__)

ParticipantRef = Union[str, MonsterIdentifier, Participant]


def _ref_id(ref: Optional[ParticipantRef]) -> Optional[str]:
    if ref is None:
        return None
    if isinstance(ref, Participant):
        return ref.id
    return str(ref).strip()


class ResultRecorder:
    """Handles recording and validating match results.

    This class is responsible for:
    - Validating result submissions against the tournament's participants
    - Recording results on matches, which updates participant statistics
    - Crediting byes
    - Preventing duplicate result recording within a round
    """

    def record_match_result(
        self,
        round_data: RoundData,
        participants: Dict[str, Participant],
        participant1: ParticipantRef,
        participant2: ParticipantRef,
        outcome: Union[str, Outcome],
        winner: Optional[ParticipantRef] = None,
        pairing_history: Optional[PairingHistory] = None,
    ) -> Match:
        """Record the result of one match of a round.

        Args:
            round_data: The round the match belongs to
            participants: All tournament participants (id -> Participant)
            participant1: First participant
            participant2: Second participant
            outcome: "win", "loss" or "draw"
            winner: The winning participant, None for draws
            pairing_history: History that an unscheduled pair is added to, so
                later rounds do not pair it again

        Returns:
            The match holding the recorded result

        Raises:
            ParticipantNotFoundException: If a participant is not in the tournament
            InvalidMatchException: If both sides are the same participant
            InvalidResultException: If the outcome or winner is invalid
            DuplicateResultException: If the pair already has a result this round
        """
        first, second = self._resolve_pair(participants, participant1, participant2)
        result = self._build_result(first, second, outcome, winner)

        if round_data.find_match(first.id, second.id) is not None:
            logger.error(
                f"Round {round_data.round_number + 1}: result for {first.id} vs "
                f"{second.id} already recorded"
            )
            raise DuplicateResultException(
                f"Result for {first.id} vs {second.id} already recorded in round "
                f"{round_data.round_number + 1}"
            )

        if not round_data.is_scheduled(first.id, second.id):
            logger.warning(
                f"Round {round_data.round_number + 1}: {first.id} vs {second.id} "
                "was not in the round's pairings"
            )
            if pairing_history is not None:
                pairing_history.add_pairing(first.id, second.id)

        match = Match(first, second, round_data.round_number)
        match.record_result(result)
        round_data.matches.append(match)
        return match

    def record_bye(
        self,
        round_data: RoundData,
        participants: Dict[str, Participant],
        participant: ParticipantRef,
    ) -> Participant:
        """Credit a bye to a participant. A bye counts as a win.

        Raises:
            ParticipantNotFoundException: If the participant is not in the tournament
            DuplicateResultException: If the bye was already credited this round
        """
        bye_participant = self._lookup(participants, participant)

        if bye_participant.id in round_data.bye_recorded:
            raise DuplicateResultException(
                f"Bye for {bye_participant.id} already recorded in round "
                f"{round_data.round_number + 1}"
            )
        if bye_participant.id != round_data.bye_participant_id:
            logger.warning(
                f"Round {round_data.round_number + 1}: {bye_participant.id} was not "
                "scheduled for a bye"
            )

        bye_participant.add_win()
        round_data.bye_recorded.add(bye_participant.id)
        logger.debug(
            f"Recorded bye for {bye_participant.id} in round "
            f"{round_data.round_number + 1}"
        )
        return bye_participant

    def _resolve_pair(
        self,
        participants: Dict[str, Participant],
        participant1: ParticipantRef,
        participant2: ParticipantRef,
    ) -> Tuple[Participant, Participant]:
        first = participants.get(_ref_id(participant1))
        second = participants.get(_ref_id(participant2))
        if first is None or second is None:
            logger.error(
                f"Cannot find participants: {_ref_id(participant1)} and/or "
                f"{_ref_id(participant2)}"
            )
            raise ParticipantNotFoundException(
                f"One or both participants not found in tournament: "
                f"{_ref_id(participant1)}, {_ref_id(participant2)}"
            )
        if first == second:
            raise InvalidMatchException(
                f"A participant cannot play against itself: {first.id}"
            )
        return first, second

    def _lookup(
        self, participants: Dict[str, Participant], ref: ParticipantRef
    ) -> Participant:
        participant = participants.get(_ref_id(ref))
        if participant is None:
            logger.error(f"Cannot find participant: {_ref_id(ref)}")
            raise ParticipantNotFoundException(
                f"Participant not found in tournament: {_ref_id(ref)}"
            )
        return participant

    @staticmethod
    def _build_result(
        first: Participant,
        second: Participant,
        outcome: Union[str, Outcome],
        winner: Optional[ParticipantRef],
    ) -> MatchResult:
        outcome = Outcome.parse(outcome)
        winner_id = _ref_id(winner)

        if outcome is Outcome.DRAW:
            if winner_id is not None:
                raise InvalidResultException("Winner must be None for draw outcomes")
            return MatchResult(outcome)

        if winner_id is None:
            raise InvalidResultException("Winner cannot be None for win/loss outcomes")
        if winner_id == first.id:
            return MatchResult(outcome, first)
        if winner_id == second.id:
            return MatchResult(outcome, second)
        raise InvalidResultException(
            f"Winner {winner_id} must be one of the match participants"
        )
