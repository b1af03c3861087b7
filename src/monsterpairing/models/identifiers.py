"""Identifier value objects for monsters and tournaments."""

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
from typing import ClassVar, Optional, Union

from monsterpairing.constants import (
    MONSTER_ID_MAX_LENGTH,
    TOURNAMENT_ID_MAX_LENGTH,
    TOURNAMENT_ID_MIN_LENGTH,
    TOURNAMENT_ID_PREFIX,
)
from monsterpairing.exceptions import InvalidIdentifierException
from monsterpairing.utils import generate_id
from monsterpairing.utils.validation import validate_identifier_strict


@dataclass(frozen=True)
class Identifier:
    """Validated, immutable string identifier.

    Values are trimmed on construction. Two identifiers are equal when they
    have the same class and the same value.

    Attributes
    ----------
    value : str
        The identifier string.
    """

    value: str

    kind: ClassVar[str] = "Identifier"
    min_length: ClassVar[int] = 1
    max_length: ClassVar[Optional[int]] = None

    def __post_init__(self) -> None:
        sanitized = validate_identifier_strict(
            self.value, self.kind, self.max_length, self.min_length
        )
        object.__setattr__(self, "value", sanitized)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class MonsterIdentifier(Identifier):
    """Identifier of a competing monster, e.g. ``"pikachu"`` or ``"25"``."""

    kind: ClassVar[str] = "Monster identifier"
    max_length: ClassVar[Optional[int]] = MONSTER_ID_MAX_LENGTH

    @property
    def is_numeric(self) -> bool:
        """Is this a numeric dex id rather than a name?"""
        return self.value.isdigit()

    @classmethod
    def from_numeric_id(cls, number: int) -> "MonsterIdentifier":
        """Create from a positive numeric id."""
        if number <= 0:
            raise InvalidIdentifierException(
                f"Monster ID must be positive, got: {number}"
            )
        return cls(str(number))


@dataclass(frozen=True)
class TournamentIdentifier(Identifier):
    """Identifier of a tournament, e.g. ``"tournament-1718000000-a1b2c3d4"``."""

    kind: ClassVar[str] = "Tournament identifier"
    min_length: ClassVar[int] = TOURNAMENT_ID_MIN_LENGTH
    max_length: ClassVar[Optional[int]] = TOURNAMENT_ID_MAX_LENGTH

    @classmethod
    def generate(cls) -> "TournamentIdentifier":
        """Generate a new unique tournament identifier."""
        return cls(generate_id(TOURNAMENT_ID_PREFIX))


def as_monster_id(value: Union[str, MonsterIdentifier]) -> MonsterIdentifier:
    """Coerce a string or identifier into a MonsterIdentifier."""
    if isinstance(value, MonsterIdentifier):
        return value
    return MonsterIdentifier(value)


def as_tournament_id(value: Union[str, TournamentIdentifier]) -> TournamentIdentifier:
    """Coerce a string or identifier into a TournamentIdentifier."""
    if isinstance(value, TournamentIdentifier):
        return value
    return TournamentIdentifier(value)
