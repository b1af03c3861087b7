"""Standard bracket seeding.

Seeds are 1-based ranks. In the standard order seed 1 and seed 2 can only
meet in the final, seeds 1-4 only from the semi-finals on, and so on.
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

from typing import List, Tuple

from monsterpairing.exceptions import InvalidParticipantCountException
from monsterpairing.utils.validation import is_power_of_two


def next_power_of_two(value: int) -> int:
    """Smallest power of two that is >= ``value`` (1 for values <= 1)."""
    if value <= 1:
        return 1
    return 1 << (value - 1).bit_length()


def bracket_order(size: int) -> List[int]:
    """Seeds in bracket slot order for a power-of-two ``size``.

    >>> bracket_order(8)
    [1, 8, 5, 4, 3, 6, 7, 2]
    """
    if not is_power_of_two(size):
        raise InvalidParticipantCountException(
            f"Bracket size must be a power of two, got {size}"
        )

    order = [1]
    while len(order) < size:
        mirror = 2 * len(order) + 1
        expanded: List[int] = []
        for index, seed in enumerate(order):
            if index % 2 == 0:
                expanded.extend((seed, mirror - seed))
            else:
                expanded.extend((mirror - seed, seed))
        order = expanded
    return order


def first_round_pairs(size: int) -> List[Tuple[int, int]]:
    """First-round ``(higher seed, lower seed)`` pairs in bracket order.

    ``size`` may be any count >= 2. The bracket is padded to the next power
    of two; a lower seed greater than ``size`` means the higher seed has a
    bye.

    >>> first_round_pairs(8)
    [(1, 8), (4, 5), (3, 6), (2, 7)]
    """
    if size < 2:
        raise InvalidParticipantCountException(
            f"Bracket requires at least 2 participants, got {size}"
        )

    padded = next_power_of_two(size)
    return [(seed, padded + 1 - seed) for seed in bracket_order(padded // 2)]
