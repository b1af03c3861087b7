"""An abstract base class for elimination brackets."""

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

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence, Union

from monsterpairing.exceptions import (
    BracketStateException,
    DrawNotAllowedException,
    IncompleteRoundException,
    InvalidMatchException,
    InvalidParticipantCountException,
)
from monsterpairing.models.identifiers import MonsterIdentifier
from monsterpairing.models.tournament.match import Match
from monsterpairing.models.tournament.match_result import MatchResult
from monsterpairing.models.tournament.participant import Participant

ParticipantRef = Union[str, MonsterIdentifier, Participant]


class Bracket(ABC):
    """
    Abstract base class defining the interface of an elimination bracket.

    A bracket is built once from participants ordered by seed (best first).
    It exposes the matches of the active round; once each of them has a
    decisive result, :meth:`advance_round` moves the bracket forward until a
    single winner remains.

    Attributes
    ----------
    participants : list of Participant
        Seeded participants, rank 1 first.
    rounds : list of list of Match
        Every round played so far, including the active one.

    Notes
    -----
    - Brackets never accept draws; advancing past a drawn match fails.
    - Brackets are not persisted; the tournament manager keeps them in memory.
    """

    min_participants = 2

    def __init__(self, participants: Sequence[Participant]) -> None:
        if len(participants) < self.min_participants:
            raise InvalidParticipantCountException(
                f"{type(self).__name__} requires at least {self.min_participants} "
                f"participants, got {len(participants)}"
            )
        if len(set(participants)) != len(participants):
            raise InvalidParticipantCountException(
                "Bracket participants must be unique"
            )

        self.participants: List[Participant] = list(participants)
        self.rounds: List[List[Match]] = []
        self._winner: Optional[Participant] = None

    # ========== Interface ==========

    @abstractmethod
    def get_current_round_matches(self) -> List[Match]:
        """Matches of the active round, empty once the bracket is complete."""

    @abstractmethod
    def advance_round(self) -> None:
        """Consume the active round's results and set up the next round."""

    @property
    @abstractmethod
    def round_label(self) -> str:
        """Human readable name of the active round."""

    # ========== Shared Behaviour ==========

    def is_complete(self) -> bool:
        return self._winner is not None

    def get_winner(self) -> Optional[Participant]:
        """The bracket winner, or None while the bracket is still running."""
        return self._winner

    def find_match(self, participant1: ParticipantRef, participant2: ParticipantRef) -> Match:
        """Find an active match by its two participants, in either order.

        Raises:
            InvalidMatchException: If no active match has these participants
        """
        wanted = {_ref_id(participant1), _ref_id(participant2)}
        for match in self.get_current_round_matches():
            if {match.participant1.id, match.participant2.id} == wanted:
                return match
        raise InvalidMatchException(
            f"No active {self.round_label} match between "
            f"{_ref_id(participant1)} and {_ref_id(participant2)}"
        )

    def record_result(
        self,
        participant1: ParticipantRef,
        participant2: ParticipantRef,
        winner: ParticipantRef,
    ) -> Match:
        """Record a decisive result on an active match."""
        match = self.find_match(participant1, participant2)
        winner_id = _ref_id(winner)
        if winner_id == match.participant1.id:
            match.record_result(MatchResult.win(match.participant1))
        elif winner_id == match.participant2.id:
            match.record_result(MatchResult.win(match.participant2))
        else:
            raise InvalidMatchException(
                f"Winner {winner_id} is not part of match {match.participant1.id} "
                f"vs {match.participant2.id}"
            )
        return match

    def _require_active(self) -> None:
        if self.is_complete():
            raise BracketStateException("Bracket is already complete")

    def _collect_results(self, matches: Sequence[Match]) -> None:
        for match in matches:
            if not match.is_complete():
                raise IncompleteRoundException(
                    f"Cannot advance {self.round_label}: {match.participant1.id} vs "
                    f"{match.participant2.id} has no result"
                )
            if match.winner is None:
                raise DrawNotAllowedException(
                    f"{self.round_label}: {match.participant1.id} vs "
                    f"{match.participant2.id} ended in a draw; elimination "
                    "matches need a winner"
                )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the bracket state for display."""
        return {
            "type": type(self).__name__,
            "round": self.round_label,
            "participants": [p.id for p in self.participants],
            "current_matches": [m.to_dict() for m in self.get_current_round_matches()],
            "rounds": [[m.to_dict() for m in matches] for matches in self.rounds],
            "is_complete": self.is_complete(),
            "winner_id": self._winner.id if self._winner else None,
        }


def _ref_id(ref: ParticipantRef) -> str:
    if isinstance(ref, Participant):
        return ref.id
    return str(ref).strip()


def pair_adjacent(participants: Sequence[Participant], round_number: int) -> List[Match]:
    """Pair participants 0-1, 2-3, ... into matches."""
    if len(participants) % 2:
        raise BracketStateException(
            f"Cannot pair an odd number of participants ({len(participants)})"
        )
    return [
        Match(participants[i], participants[i + 1], round_number)
        for i in range(0, len(participants), 2)
    ]
