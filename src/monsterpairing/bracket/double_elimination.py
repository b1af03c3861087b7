"""Double-elimination bracket.

Participants drop into the losers bracket (LB) after their first loss in the
winners bracket (WB) and are out after their second. For eight seeds the
rounds run::

    WB-R1 -> LB-R1 -> WB-R2 -> LB-R2 -> LB-R3 -> WB-Final -> LB-Final -> GF-1
          -> [GF-Reset]

Bigger brackets repeat the WB round / LB drop round / LB round sequence before
the WB final. The grand final (GF) is reset when the LB champion wins GF-1 and
resets are enabled.
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

from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from monsterpairing.bracket.base import Bracket, pair_adjacent
from monsterpairing.bracket.seeding import first_round_pairs
from monsterpairing.constants import MIN_DOUBLE_ELIMINATION_SIZE
from monsterpairing.exceptions import InvalidParticipantCountException
from monsterpairing.models.tournament.match import Match
from monsterpairing.models.tournament.participant import Participant
from monsterpairing.utils import setup_logger
from monsterpairing.utils.validation import is_power_of_two

logger = setup_logger(__name__)


class BracketPhase(Enum):
    """Kinds of round a double-elimination bracket goes through."""

    WINNERS_ROUND = "winners-round"
    # LB survivors play each other
    LOSERS_ROUND = "losers-round"
    # LB survivors meet the players just dropped from the WB
    LOSERS_DROP = "losers-drop"
    WINNERS_FINAL = "winners-final"
    LOSERS_FINAL = "losers-final"
    GRAND_FINAL = "grand-final"
    GRAND_FINAL_RESET = "grand-final-reset"
    COMPLETE = "complete"


class DoubleEliminationBracket(Bracket):
    """Double-elimination bracket for a power-of-two field of 4 or more.

    Attributes
    ----------
    enable_reset : bool
        If True, an LB champion who wins GF-1 forces a deciding GF-Reset.
    phase : BracketPhase
        Kind of the active round.
    wb_champion, lb_champion : Participant or None
        Set once the WB final and LB final have been decided.
    """

    min_participants = MIN_DOUBLE_ELIMINATION_SIZE

    def __init__(
        self, participants: Sequence[Participant], enable_reset: bool = True
    ) -> None:
        super().__init__(participants)
        if not is_power_of_two(len(participants)):
            raise InvalidParticipantCountException(
                "Double elimination requires a power-of-two participant count, "
                f"got {len(participants)}"
            )

        self.enable_reset = enable_reset
        self.phase = BracketPhase.WINNERS_ROUND
        self.wb_round = 1
        self.lb_round = 0
        self.step = 1
        self._wb_rounds_total = len(participants).bit_length() - 1

        self._wb_alive: List[Participant] = []
        self._lb_alive: List[Participant] = []
        self._dropped: List[Participant] = []
        self.wb_champion: Optional[Participant] = None
        self.lb_champion: Optional[Participant] = None

        self._current: List[Match] = [
            Match(self.participants[high - 1], self.participants[low - 1], self.step)
            for high, low in first_round_pairs(len(self.participants))
        ]
        self.rounds.append(self._current)

        logger.info(
            f"Double-elimination bracket seeded with {len(self.participants)} "
            f"participants (reset {'enabled' if enable_reset else 'disabled'})"
        )

    # ========== State ==========

    @property
    def phase_label(self) -> str:
        """Round name such as ``"WB-R1"``, ``"LB-R3"`` or ``"GF-Reset"``."""
        labels = {
            BracketPhase.WINNERS_ROUND: f"WB-R{self.wb_round}",
            BracketPhase.LOSERS_ROUND: f"LB-R{self.lb_round}",
            BracketPhase.LOSERS_DROP: f"LB-R{self.lb_round}",
            BracketPhase.WINNERS_FINAL: "WB-Final",
            BracketPhase.LOSERS_FINAL: "LB-Final",
            BracketPhase.GRAND_FINAL: "GF-1",
            BracketPhase.GRAND_FINAL_RESET: "GF-Reset",
            BracketPhase.COMPLETE: "Complete",
        }
        return labels[self.phase]

    @property
    def round_label(self) -> str:
        return self.phase_label

    def get_current_round_matches(self) -> List[Match]:
        return list(self._current)

    # ========== Transitions ==========

    def advance_round(self) -> None:
        """Consume the active round's results and move to the next phase.

        Raises:
            BracketStateException: If the bracket is already complete
            IncompleteRoundException: If an active match has no result
            DrawNotAllowedException: If an active match was drawn
        """
        self._require_active()
        self._collect_results(self._current)

        winners = [match.winner for match in self._current]
        losers = [match.loser for match in self._current]
        previous = self.phase_label

        if self.phase is BracketPhase.WINNERS_ROUND:
            self._after_winners_round(winners, losers)
        elif self.phase is BracketPhase.LOSERS_ROUND:
            self._after_losers_round(winners)
        elif self.phase is BracketPhase.LOSERS_DROP:
            self._lb_alive = winners
            self.lb_round += 1
            self._start(BracketPhase.LOSERS_ROUND, pair_adjacent(winners, self.step + 1))
        elif self.phase is BracketPhase.WINNERS_FINAL:
            self.wb_champion = winners[0]
            self._start(
                BracketPhase.LOSERS_FINAL,
                [Match(self._lb_alive[0], losers[0], self.step + 1)],
            )
        elif self.phase is BracketPhase.LOSERS_FINAL:
            self.lb_champion = winners[0]
            self._start(
                BracketPhase.GRAND_FINAL,
                [Match(self.wb_champion, self.lb_champion, self.step + 1)],
            )
        elif self.phase is BracketPhase.GRAND_FINAL:
            self._after_grand_final(winners[0])
        elif self.phase is BracketPhase.GRAND_FINAL_RESET:
            self._finish(winners[0])

        logger.info(f"Double-elimination: {previous} -> {self.phase_label}")

    def _after_winners_round(
        self, winners: List[Participant], losers: List[Participant]
    ) -> None:
        self._wb_alive = winners
        self._dropped = losers
        self.lb_round += 1
        if self.wb_round == 1:
            self._start(BracketPhase.LOSERS_ROUND, pair_adjacent(losers, self.step + 1))
        else:
            self._start(
                BracketPhase.LOSERS_DROP,
                [
                    Match(survivor, dropped, self.step + 1)
                    for survivor, dropped in zip(self._lb_alive, losers)
                ],
            )

    def _after_losers_round(self, winners: List[Participant]) -> None:
        self._lb_alive = winners
        if self.wb_round + 1 == self._wb_rounds_total:
            self._start(
                BracketPhase.WINNERS_FINAL, pair_adjacent(self._wb_alive, self.step + 1)
            )
        else:
            self.wb_round += 1
            self._start(
                BracketPhase.WINNERS_ROUND, pair_adjacent(self._wb_alive, self.step + 1)
            )

    def _after_grand_final(self, winner: Participant) -> None:
        if winner == self.wb_champion or not self.enable_reset:
            self._finish(winner)
            return
        self._start(
            BracketPhase.GRAND_FINAL_RESET,
            [Match(self.wb_champion, self.lb_champion, self.step + 1)],
        )

    def _start(self, phase: BracketPhase, matches: List[Match]) -> None:
        self.phase = phase
        self.step += 1
        self._current = matches
        self.rounds.append(matches)

    def _finish(self, winner: Participant) -> None:
        self.phase = BracketPhase.COMPLETE
        self._winner = winner
        self._current = []
        logger.info(f"Double-elimination bracket won by {winner.id}")

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update(
            {
                "enable_reset": self.enable_reset,
                "wb_champion_id": self.wb_champion.id if self.wb_champion else None,
                "lb_champion_id": self.lb_champion.id if self.lb_champion else None,
            }
        )
        return data
