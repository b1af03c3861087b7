"""Data models for tournaments: participants, matches, results and rounds."""

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

from monsterpairing.models.tournament.participant import Participant
from monsterpairing.models.tournament.match_result import MatchResult, Outcome
from monsterpairing.models.tournament.match import Match
from monsterpairing.models.tournament.pairing_history import PairingHistory
from monsterpairing.models.tournament.round_data import RoundData
from monsterpairing.models.tournament.tournament_config import (
    TournamentConfig,
    load_tournament_config,
)

__all__ = [
    "Participant",
    "MatchResult",
    "Outcome",
    "Match",
    "PairingHistory",
    "RoundData",
    "TournamentConfig",
    "load_tournament_config",
]
