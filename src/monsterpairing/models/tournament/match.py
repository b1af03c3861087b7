"""A match between two participants."""

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

from typing import Any, Dict, Optional

from monsterpairing.exceptions import (
    DuplicateResultException,
    InvalidMatchException,
    InvalidResultException,
    MatchNotCompleteException,
)
from monsterpairing.models.tournament.match_result import MatchResult
from monsterpairing.models.tournament.participant import Participant
from monsterpairing.utils import setup_logger

logger = setup_logger(__name__)


class Match:
    """Two distinct participants meeting in a given round.

    A match holds at most one result. Recording it updates both
    participants' records.

    Attributes:
        participant1: First participant (the higher seed in brackets)
        participant2: Second participant
        round_number: Round number, 0 or greater
        result: The recorded result, or None while the match is pending
    """

    def __init__(
        self,
        participant1: Participant,
        participant2: Participant,
        round_number: int = 0,
    ) -> None:
        if participant1 == participant2:
            raise InvalidMatchException(
                f"A participant cannot play against itself: {participant1.id}"
            )
        if round_number < 0:
            raise InvalidMatchException(
                f"Round number cannot be negative: {round_number}"
            )

        self.participant1 = participant1
        self.participant2 = participant2
        self.round_number = round_number
        self.result: Optional[MatchResult] = None

    def involves(self, participant: Participant) -> bool:
        """Is ``participant`` one of the two sides?"""
        return participant == self.participant1 or participant == self.participant2

    def opponent_of(self, participant: Participant) -> Participant:
        """Return the other side of the match."""
        if participant == self.participant1:
            return self.participant2
        if participant == self.participant2:
            return self.participant1
        raise InvalidMatchException(f"{participant.id} is not part of this match")

    def record_result(self, result: MatchResult) -> None:
        """Record the result and update participant statistics.

        Args:
            result: The result of the match

        Raises:
            DuplicateResultException: If a result was already recorded
            InvalidResultException: If the winner is not one of the participants
        """
        if self.result is not None:
            raise DuplicateResultException(
                f"Match {self.participant1.id} vs {self.participant2.id} "
                "already has a result"
            )

        if result.is_draw:
            self.participant1.add_draw()
            self.participant2.add_draw()
        else:
            if not self.involves(result.winner):
                raise InvalidResultException(
                    f"Winner {result.winner.id} is not part of match "
                    f"{self.participant1.id} vs {self.participant2.id}"
                )
            loser = self.opponent_of(result.winner)
            self.opponent_of(loser).add_win()
            loser.add_loss()

        self.result = result
        logger.debug(
            f"Round {self.round_number}: {self.participant1.id} vs {self.participant2.id} "
            f"-> {result.outcome.value} "
            f"({result.winner.id if result.winner else 'no winner'})"
        )

    def is_complete(self) -> bool:
        return self.result is not None

    @property
    def winner(self) -> Optional[Participant]:
        """The winner, or None for a draw.

        Raises:
            MatchNotCompleteException: If no result has been recorded
        """
        if self.result is None:
            raise MatchNotCompleteException("Match has no result yet")
        return self.result.winner

    @property
    def loser(self) -> Optional[Participant]:
        """The loser, or None for a draw.

        Raises:
            MatchNotCompleteException: If no result has been recorded
        """
        winner = self.winner
        if winner is None:
            return None
        return self.opponent_of(winner)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Match):
            return NotImplemented
        return {self.participant1, self.participant2} == {
            other.participant1,
            other.participant2,
        }

    def __hash__(self) -> int:
        return hash(frozenset({self.participant1, self.participant2}))

    def __repr__(self) -> str:
        status = self.result.outcome.value if self.result else "pending"
        return (
            f"<Match R{self.round_number} {self.participant1.id} vs "
            f"{self.participant2.id} ({status})>"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize as ``{participant1_id, participant2_id, round, result}``."""
        return {
            "participant1_id": self.participant1.id,
            "participant2_id": self.participant2.id,
            "round": self.round_number,
            "result": self.result.to_dict() if self.result else None,
        }
