"""Pairing engines."""

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

from monsterpairing.pairing.swiss import (
    SwissPairingEngine,
    calculate_standings,
    calculate_total_rounds,
    score_for_outcome,
    sort_standings_by_tie_breaker,
)

__all__ = [
    "SwissPairingEngine",
    "calculate_total_rounds",
    "calculate_standings",
    "score_for_outcome",
    "sort_standings_by_tie_breaker",
]
