"""Strategies that decide matches in simulated tournaments."""

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

import random
from abc import ABC, abstractmethod
from typing import Callable, Mapping, Optional, TypeVar, Union

from monsterpairing.models.identifiers import MonsterIdentifier
from monsterpairing.models.tournament.participant import Participant

Side = TypeVar("Side", Participant, MonsterIdentifier, str)


def _name(side: Union[Participant, MonsterIdentifier, str]) -> str:
    if isinstance(side, Participant):
        return side.id
    return str(side)


def _lower_lexical(participant1: Side, participant2: Side) -> Side:
    if _name(participant1).lower() <= _name(participant2).lower():
        return participant1
    return participant2


class TournamentStrategy(ABC):
    """Picks the winner of a match between two sides."""

    @abstractmethod
    def choose_winner(self, participant1: Side, participant2: Side) -> Side:
        """Return ``participant1`` or ``participant2``."""

    @property
    def name(self) -> str:
        return type(self).__name__


class PrefersLowerLexicalStrategy(TournamentStrategy):
    """The alphabetically first identifier wins (case-insensitive)."""

    def choose_winner(self, participant1: Side, participant2: Side) -> Side:
        return _lower_lexical(participant1, participant2)


class PrefersHigherSeedStrategy(TournamentStrategy):
    """The first side always wins.

    Brackets put the higher seed first and Swiss pairings put the higher
    ranked participant first, so this favours the favourite.
    """

    def choose_winner(self, participant1: Side, participant2: Side) -> Side:
        return participant1


class PrefersHigherStatStrategy(TournamentStrategy):
    """The side with the higher stat (e.g. base HP) wins.

    Ties are broken alphabetically. Unknown identifiers count as 0.

    Args:
        stats: Mapping or callable from identifier string to stat value
    """

    def __init__(self, stats: Union[Mapping[str, int], Callable[[str], int]]):
        if callable(stats):
            self._lookup = stats
        else:
            self._lookup = lambda identifier: stats.get(identifier, 0)

    def choose_winner(self, participant1: Side, participant2: Side) -> Side:
        stat1 = self._lookup(_name(participant1))
        stat2 = self._lookup(_name(participant2))
        if stat1 > stat2:
            return participant1
        if stat2 > stat1:
            return participant2
        return _lower_lexical(participant1, participant2)


class RandomStrategy(TournamentStrategy):
    """Coin flip, reproducible with a seed."""

    def __init__(self, seed: Optional[int] = None):
        self.rng = random.Random(seed)

    def choose_winner(self, participant1: Side, participant2: Side) -> Side:
        return participant1 if self.rng.random() < 0.5 else participant2


STRATEGIES = {
    "lexical": PrefersLowerLexicalStrategy,
    "seed": PrefersHigherSeedStrategy,
    "random": RandomStrategy,
}
