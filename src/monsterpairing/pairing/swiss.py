"""Swiss Pairing System Implementation."""

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

from typing import Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from monsterpairing.constants import DRAW_SCORE, LOSS_SCORE, WIN_SCORE
from monsterpairing.models.tournament.match_result import Outcome
from monsterpairing.models.tournament.pairing_history import PairingHistory
from monsterpairing.models.tournament.participant import Participant
from monsterpairing.type_hints import Matchups, Pairings, ScoreTable
from monsterpairing.utils import setup_logger

logger = setup_logger(__name__)


def calculate_total_rounds(participant_count: int) -> int:
    """Minimum number of rounds such that ``2 ** rounds >= participant_count``.

    Returns 0 for one participant or fewer.
    """
    if participant_count <= 1:
        return 0
    return (participant_count - 1).bit_length()


def score_for_outcome(outcome: Union[str, Outcome]) -> int:
    """Points for one side of a match, seen from that side."""
    outcome = Outcome.parse(outcome)
    if outcome is Outcome.WIN:
        return WIN_SCORE
    if outcome is Outcome.DRAW:
        return DRAW_SCORE
    return LOSS_SCORE


def calculate_standings(
    participants: Iterable[Union[str, Participant]],
    match_results: Iterable[Tuple[str, str, Union[str, Outcome]]],
) -> ScoreTable:
    """Compute a score table from raw match results.

    Args:
        participants: Participants (or their ids) to include, all starting at 0
        match_results: ``(participant1_id, participant2_id, outcome)`` triples,
            with the outcome seen from participant1's side

    Returns:
        Mapping of participant id to score
    """
    standings: ScoreTable = {_participant_id(p): 0 for p in participants}

    for first, second, outcome in match_results:
        outcome = Outcome.parse(outcome)
        if outcome is Outcome.WIN:
            opposite = Outcome.LOSS
        elif outcome is Outcome.LOSS:
            opposite = Outcome.WIN
        else:
            opposite = Outcome.DRAW
        first, second = str(first), str(second)
        standings[first] = standings.get(first, 0) + score_for_outcome(outcome)
        standings[second] = standings.get(second, 0) + score_for_outcome(opposite)

    return standings


def sort_standings_by_tie_breaker(
    standings: Mapping[str, int],
    participants: Optional[Iterable[Union[str, Participant]]] = None,
) -> List[Tuple[str, int]]:
    """Order a score table by score descending, then identifier ascending.

    When ``participants`` is given, only those ids are included (missing
    ones count as 0).
    """
    if participants is None:
        ids = list(standings)
    else:
        ids = [_participant_id(p) for p in participants]
    rows = [(pid, standings.get(pid, 0)) for pid in ids]
    return sorted(rows, key=lambda row: (-row[1], row[0]))


def _participant_id(participant: Union[str, Participant]) -> str:
    if isinstance(participant, Participant):
        return participant.id
    return str(participant)


class SwissPairingEngine:
    """Greedy Swiss pairing with repeat-matchup avoidance.

    Participants are ranked by current score and paired top-down. Each
    participant takes the nearest lower-ranked participant it has not played
    yet; when every remaining candidate is a repeat, the nearest one is
    accepted anyway. There is no backtracking, so avoidable repeats can
    happen in unusual score distributions.
    """

    def generate_pairings(
        self,
        participants: Sequence[Participant],
        previous_matchups: Union[Matchups, PairingHistory, None] = None,
        standings: Optional[Mapping[str, int]] = None,
    ) -> Pairings:
        """Generate the pairings of one round.

        Args:
            participants: Full participant list
            previous_matchups: Already-played pairs, in either order
            standings: Current score by participant id. When empty the input
                order is used as the ranking.

        Returns:
            List of 2-tuples. For an odd field the last tuple is a singleton
            holding the participant left without an opponent.
        """
        if not participants:
            return []
        if len(participants) == 1:
            return [(participants[0],)]

        history = PairingHistory.from_matchups(
            previous_matchups if previous_matchups is not None else []
        )
        ranked = self._rank(participants, standings or {})

        pairings: Pairings = []
        paired = [False] * len(ranked)
        repeats = 0

        for i, participant in enumerate(ranked):
            if paired[i]:
                continue

            candidates = [j for j in range(i + 1, len(ranked)) if not paired[j]]
            if not candidates:
                # odd field: last one left over
                pairings.append((participant,))
                paired[i] = True
                logger.debug(f"{participant.id} left unpaired (bye)")
                continue

            opponent_index = next(
                (
                    j
                    for j in candidates
                    if not history.have_played(participant.id, ranked[j].id)
                ),
                None,
            )
            if opponent_index is None:
                opponent_index = candidates[0]
                repeats += 1
                logger.info(
                    f"No fresh opponent left for {participant.id}; repeating "
                    f"against {ranked[opponent_index].id}"
                )

            paired[i] = True
            paired[opponent_index] = True
            pairings.append((participant, ranked[opponent_index]))

        logger.debug(
            f"Generated {len(pairings)} pairings for {len(ranked)} participants "
            f"({repeats} repeat(s))"
        )
        return pairings

    def calculate_total_rounds(self, participant_count: int) -> int:
        """See :func:`calculate_total_rounds`."""
        return calculate_total_rounds(participant_count)

    @staticmethod
    def _rank(
        participants: Sequence[Participant], standings: Mapping[str, int]
    ) -> List[Participant]:
        if not standings:
            return list(participants)
        return sorted(
            participants, key=lambda p: (-standings.get(p.id, 0), p.id)
        )
