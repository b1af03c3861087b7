"""Single-elimination bracket."""

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

from typing import List, Sequence, Union

from monsterpairing.bracket.base import Bracket, pair_adjacent
from monsterpairing.bracket.seeding import first_round_pairs
from monsterpairing.models.tournament.match import Match
from monsterpairing.models.tournament.participant import Participant
from monsterpairing.utils import setup_logger

logger = setup_logger(__name__)

# A first-round slot is either a match or a seed advancing on a bye
Slot = Union[Match, Participant]


class SingleEliminationBracket(Bracket):
    """Knock-out bracket: one loss and a participant is out.

    Round one follows the standard seeding order, so for eight seeds the
    matches are 1v8, 4v5, 3v6 and 2v7. Fields that are not a power of two
    are padded and the top seeds skip round one. Later rounds pair the
    previous round's winners adjacently.

    Example::

        bracket = SingleEliminationBracket(standings[:8])
        while not bracket.is_complete():
            for match in bracket.get_current_round_matches():
                bracket.record_result(match.participant1, match.participant2,
                                      match.participant1)
            bracket.advance_round()
        champion = bracket.get_winner()
    """

    def __init__(self, participants: Sequence[Participant]) -> None:
        super().__init__(participants)
        self.round_number = 1
        self._slots: List[Slot] = self._seed_first_round()
        self.rounds.append(self.get_current_round_matches())

        logger.info(
            f"Single-elimination bracket seeded with {len(self.participants)} "
            f"participants ({len(self.get_byes())} bye(s))"
        )

    def _seed_first_round(self) -> List[Slot]:
        slots: List[Slot] = []
        count = len(self.participants)
        for high, low in first_round_pairs(count):
            if low > count:
                slots.append(self.participants[high - 1])
            else:
                slots.append(
                    Match(
                        self.participants[high - 1],
                        self.participants[low - 1],
                        self.round_number,
                    )
                )
        return slots

    @property
    def round_label(self) -> str:
        if self.is_complete():
            return "Complete"
        return f"R{self.round_number}"

    def get_current_round_matches(self) -> List[Match]:
        if self.is_complete():
            return []
        return [slot for slot in self._slots if isinstance(slot, Match)]

    def get_byes(self) -> List[Participant]:
        """Participants advancing without a match in the active round."""
        if self.is_complete():
            return []
        return [slot for slot in self._slots if isinstance(slot, Participant)]

    def advance_round(self) -> None:
        """Collect the winners and pair them for the next round.

        Raises:
            BracketStateException: If the bracket is already complete
            IncompleteRoundException: If an active match has no result
            DrawNotAllowedException: If an active match was drawn
        """
        self._require_active()
        self._collect_results(self.get_current_round_matches())

        winners = [
            slot.winner if isinstance(slot, Match) else slot for slot in self._slots
        ]

        if len(winners) == 1:
            self._winner = winners[0]
            self._slots = []
            logger.info(f"Single-elimination bracket won by {self._winner.id}")
            return

        self.round_number += 1
        self._slots = list(pair_adjacent(winners, self.round_number))
        self.rounds.append(self.get_current_round_matches())
        logger.info(
            f"Single-elimination advanced to round {self.round_number} "
            f"({len(self._slots)} matches)"
        )
