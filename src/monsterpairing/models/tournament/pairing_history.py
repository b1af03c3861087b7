"""History of pairs that have already met."""

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
from typing import Any, Dict, Iterator, Set

from monsterpairing.type_hints import Matchups


@dataclass
class PairingHistory:
    """
    Tracks historical pairings to prevent repeat matches.

    Attributes
    ----------
    previous_matches : set of frozenset of str
        Set containing frozensets of participant ID pairs representing
        matches that have already been played.
    """

    previous_matches: Set[frozenset] = field(default_factory=set)

    def add_pairing(self, participant1_id: str, participant2_id: str) -> None:
        """Record that two participants have been paired."""
        self.previous_matches.add(
            frozenset({str(participant1_id), str(participant2_id)})
        )

    def have_played(self, participant1_id: str, participant2_id: str) -> bool:
        """Check if two participants have previously played each other."""
        return (
            frozenset({str(participant1_id), str(participant2_id)})
            in self.previous_matches
        )

    def __len__(self) -> int:
        return len(self.previous_matches)

    def __iter__(self) -> Iterator[frozenset]:
        return iter(self.previous_matches)

    @classmethod
    def from_matchups(cls, matchups: Matchups) -> "PairingHistory":
        """Build a history from ``(id, id)`` pairs in either order."""
        if isinstance(matchups, PairingHistory):
            return matchups
        history = cls()
        for first, second in matchups:
            history.add_pairing(first, second)
        return history

    def to_dict(self) -> Dict[str, Any]:
        """Serialize pairing history to dictionary."""
        return {
            "previous_matches": sorted(sorted(pair) for pair in self.previous_matches),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PairingHistory":
        """Deserialize pairing history from dictionary."""
        return cls(
            previous_matches=set(
                frozenset(map(str, pair)) for pair in data.get("previous_matches", [])
            ),
        )
