"""A monster competing in a tournament."""

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

from typing import Any, Dict, Union

from monsterpairing.constants import DRAW_SCORE, LOSS_SCORE, WIN_SCORE
from monsterpairing.exceptions import ScoreInvariantException
from monsterpairing.models.identifiers import MonsterIdentifier, as_monster_id


class Participant:
    """Represents a monster taking part in a tournament.

    The participant owns its tournament record. Counters are only changed
    through :meth:`add_win`, :meth:`add_loss`, :meth:`add_draw` and
    :meth:`reset`, each of which re-checks the score invariant.

    Attributes:
        monster: Identifier of the competing monster
        score: Points earned (3 per win, 1 per draw)
        wins: Number of wins
        losses: Number of losses
        draws: Number of draws

    Two participants are equal when they wrap the same monster identifier.
    """

    def __init__(self, monster: Union[str, MonsterIdentifier]) -> None:
        self.monster: MonsterIdentifier = as_monster_id(monster)
        self.score: int = 0
        self.wins: int = 0
        self.losses: int = 0
        self.draws: int = 0

    @property
    def id(self) -> str:
        """Identifier string of the monster."""
        return self.monster.value

    # ========== Record Keeping ==========

    def add_win(self) -> None:
        """Add a win to this participant's record."""
        self.wins += 1
        self.score += WIN_SCORE
        self._assert_invariants()

    def add_loss(self) -> None:
        """Add a loss to this participant's record."""
        self.losses += 1
        self.score += LOSS_SCORE
        self._assert_invariants()

    def add_draw(self) -> None:
        """Add a draw to this participant's record."""
        self.draws += 1
        self.score += DRAW_SCORE
        self._assert_invariants()

    def reset(self) -> None:
        """Reset all statistics to zero."""
        self.score = 0
        self.wins = 0
        self.losses = 0
        self.draws = 0
        self._assert_invariants()

    def _assert_invariants(self) -> None:
        for name in ("score", "wins", "losses", "draws"):
            if getattr(self, name) < 0:
                raise ScoreInvariantException(
                    f"{self.id}: {name} cannot be negative"
                )

        expected = (
            self.wins * WIN_SCORE + self.draws * DRAW_SCORE + self.losses * LOSS_SCORE
        )
        if self.score != expected:
            raise ScoreInvariantException(
                f"{self.id}: score invariant violated: expected {expected}, "
                f"got {self.score}"
            )

    # ========== Comparison ==========

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Participant):
            return NotImplemented
        return self.monster == other.monster

    def __hash__(self) -> int:
        return hash(self.monster)

    def __repr__(self) -> str:
        return (
            f"<Participant {self.id} (Score: {self.score}, "
            f"W:{self.wins} L:{self.losses} D:{self.draws})>"
        )

    # ========== Serialization ==========

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the participant as a standings record."""
        return {
            "participant_id": self.id,
            "score": self.score,
            "wins": self.wins,
            "losses": self.losses,
            "draws": self.draws,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Participant":
        """Deserialize a participant from a standings record.

        The record is replayed through the public counters so that a
        record with an inconsistent score is rejected.
        """
        participant = cls(data["participant_id"])
        for _ in range(data.get("wins", 0)):
            participant.add_win()
        for _ in range(data.get("losses", 0)):
            participant.add_loss()
        for _ in range(data.get("draws", 0)):
            participant.add_draw()
        if "score" in data and data["score"] != participant.score:
            raise ScoreInvariantException(
                f"{participant.id}: stored score {data['score']} does not match "
                f"record ({participant.score})"
            )
        return participant
