"""Factory for playoff brackets seeded from Swiss standings."""

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

from typing import Dict, Iterable, List, Mapping, Sequence, Union

from monsterpairing.bracket.base import Bracket
from monsterpairing.bracket.double_elimination import DoubleEliminationBracket
from monsterpairing.bracket.single_elimination import SingleEliminationBracket
from monsterpairing.constants import (
    MIN_PLAYOFF_CUTOFF,
    PLAYOFF_DOUBLE_ELIMINATION,
    PLAYOFF_SINGLE_ELIMINATION,
)
from monsterpairing.exceptions import (
    InvalidConfigurationException,
    InvalidParticipantCountException,
)
from monsterpairing.models.identifiers import MonsterIdentifier
from monsterpairing.models.tournament.participant import Participant
from monsterpairing.pairing.swiss import sort_standings_by_tie_breaker
from monsterpairing.utils import setup_logger

logger = setup_logger(__name__)


class PlayoffBracketFactory:
    """Builds single- or double-elimination brackets from the top N."""

    def create_from_standings(
        self,
        participants: Iterable[Union[Participant, MonsterIdentifier, str]],
        standings: Mapping[str, int],
        top_n: int,
        playoff_type: str,
        reset: bool = True,
    ) -> Bracket:
        """Seed the top ``top_n`` of a score table into a bracket.

        Seeds are ordered by score descending, ties by identifier ascending.
        Identifiers that only appear in ``standings`` get a fresh Participant.

        Args:
            participants: Known participants (or their identifiers)
            standings: Score by participant id
            top_n: Number of participants to seed
            playoff_type: "single-elimination" or "double-elimination"
            reset: Whether a double-elimination grand final can be reset

        Returns:
            The new bracket
        """
        by_id: Dict[str, Participant] = {}
        for participant in participants:
            if isinstance(participant, Participant):
                by_id[participant.id] = participant
            else:
                created = Participant(participant)
                by_id[created.id] = created

        ranked: List[Participant] = []
        for participant_id, _score in sort_standings_by_tie_breaker(standings):
            if participant_id not in by_id:
                by_id[participant_id] = Participant(participant_id)
            ranked.append(by_id[participant_id])

        return self.create_from_ranking(ranked, top_n, playoff_type, reset)

    def create_from_ranking(
        self,
        ranked: Sequence[Participant],
        top_n: int,
        playoff_type: str,
        reset: bool = True,
    ) -> Bracket:
        """Seed the first ``top_n`` of an already ranked list into a bracket.

        Raises:
            InvalidConfigurationException: If the playoff type is unknown or
                ``top_n`` is below 2
            InvalidParticipantCountException: If fewer than ``top_n``
                participants are ranked
        """
        if top_n < MIN_PLAYOFF_CUTOFF:
            raise InvalidConfigurationException(
                f"top_n must be at least {MIN_PLAYOFF_CUTOFF}, got {top_n}"
            )
        if len(ranked) < top_n:
            raise InvalidParticipantCountException(
                f"Cannot seed top {top_n}: only {len(ranked)} participants ranked"
            )

        seeded = list(ranked[:top_n])
        logger.info(
            f"Seeding {playoff_type} playoff: "
            + ", ".join(f"{seed}. {p.id}" for seed, p in enumerate(seeded, start=1))
        )

        if playoff_type == PLAYOFF_SINGLE_ELIMINATION:
            return SingleEliminationBracket(seeded)
        if playoff_type == PLAYOFF_DOUBLE_ELIMINATION:
            return DoubleEliminationBracket(seeded, enable_reset=reset)
        raise InvalidConfigurationException(f"Unsupported playoff type: {playoff_type}")
