"""Data model for tournament round."""

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

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set, Tuple

from monsterpairing.models.tournament.match import Match


@dataclass
class RoundData:
    """Container for all data related to a single tournament round.

    Attributes
    ----------
    round_number : int
        Round number (0-indexed, like ``Tournament.current_round``).
    pairings : list of tuple of str
        List of (participant1_id, participant2_id) pairs.
    bye_participant_id : str or None
        ID of the participant left unpaired, or None if the field was even.
    matches : list of Match
        Matches whose results have been recorded this round.
    bye_recorded : set of str
        IDs of participants whose bye has been credited.
    is_completed : bool
        Indicates whether the round has been closed by advancing.
    """

    round_number: int
    pairings: List[Tuple[str, str]] = field(default_factory=list)
    bye_participant_id: Optional[str] = None
    matches: List[Match] = field(default_factory=list)
    bye_recorded: Set[str] = field(default_factory=set)
    is_completed: bool = False

    def find_match(self, participant1_id: str, participant2_id: str) -> Optional[Match]:
        """Return the recorded match between two participants, in either order."""
        wanted = frozenset({participant1_id, participant2_id})
        for match in self.matches:
            if frozenset({match.participant1.id, match.participant2.id}) == wanted:
                return match
        return None

    def is_scheduled(self, participant1_id: str, participant2_id: str) -> bool:
        """Is this pair part of the round's pairings?"""
        wanted = frozenset({participant1_id, participant2_id})
        return any(frozenset(pair) == wanted for pair in self.pairings)

    def pending_pairings(self) -> List[Tuple[str, str]]:
        """Scheduled pairs that still lack a result."""
        return [pair for pair in self.pairings if self.find_match(*pair) is None]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize round data to dictionary."""
        return {
            "round_number": self.round_number,
            "pairings": [list(pair) for pair in self.pairings],
            "bye_participant_id": self.bye_participant_id,
            "matches": [match.to_dict() for match in self.matches],
            "is_completed": self.is_completed,
        }
