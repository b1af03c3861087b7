"""Match result data class."""

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

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union

from monsterpairing.constants import (
    DRAW_SCORE,
    LOSS_SCORE,
    OUTCOME_DRAW,
    OUTCOME_LOSS,
    OUTCOME_WIN,
    WIN_SCORE,
)
from monsterpairing.exceptions import InvalidResultException
from monsterpairing.models.tournament.participant import Participant


class Outcome(Enum):
    """Outcome tag of a match result."""

    WIN = OUTCOME_WIN
    LOSS = OUTCOME_LOSS
    DRAW = OUTCOME_DRAW

    @classmethod
    def parse(cls, value: Union[str, "Outcome"]) -> "Outcome":
        """Convert a string such as ``"win"`` to an Outcome."""
        if isinstance(value, Outcome):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidResultException(
                f"Invalid outcome: {value!r} (expected win, loss or draw)"
            ) from None


# (winner side, loser side)
_SCORES: Dict[Outcome, Tuple[int, int]] = {
    Outcome.WIN: (WIN_SCORE, LOSS_SCORE),
    Outcome.LOSS: (LOSS_SCORE, LOSS_SCORE),
    Outcome.DRAW: (DRAW_SCORE, DRAW_SCORE),
}


@dataclass(frozen=True)
class MatchResult:
    """Represents the result of a single match.

    Attributes
    ----------
    outcome : Outcome
        win, loss or draw
    winner : Participant or None
        The winning participant. None if and only if the match was drawn.
    """

    outcome: Outcome
    winner: Optional[Participant] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "outcome", Outcome.parse(self.outcome))
        if self.outcome is Outcome.DRAW and self.winner is not None:
            raise InvalidResultException("A drawn result cannot have a winner")
        if self.outcome is not Outcome.DRAW and self.winner is None:
            raise InvalidResultException(
                f"A {self.outcome.value} result requires a winner"
            )

    @classmethod
    def win(cls, winner: Participant) -> "MatchResult":
        """Result in which ``winner`` won."""
        return cls(Outcome.WIN, winner)

    @classmethod
    def draw(cls) -> "MatchResult":
        """Drawn result."""
        return cls(Outcome.DRAW)

    @property
    def is_draw(self) -> bool:
        return self.outcome is Outcome.DRAW

    @property
    def winner_score(self) -> int:
        """Points awarded to the winning side."""
        return _SCORES[self.outcome][0]

    @property
    def loser_score(self) -> int:
        """Points awarded to the losing side."""
        return _SCORES[self.outcome][1]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match result to dictionary."""
        return {
            "outcome": self.outcome.value,
            "winner_id": self.winner.id if self.winner is not None else None,
        }
